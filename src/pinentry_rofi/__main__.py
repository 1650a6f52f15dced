"""Allow ``python -m pinentry_rofi`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m pinentry_rofi`` behaves identically to the
``pinentry-rofi`` console script.
"""

from __future__ import annotations

from pinentry_rofi.cli.app import cli

if __name__ == "__main__":
    cli()
