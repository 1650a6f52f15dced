"""``pinentry-rofi --doctor`` — environment diagnostics command.

Gathers system information and renders a Rich table summarising
whether the runtime environment can host a pinentry session.

This module lives in the CLI layer — it may import from ``infra``
and ``core``, and it renders via Rich on stderr.  No business logic
resides here; it purely collects and displays diagnostic data.
"""

from __future__ import annotations

import os
import platform
import sys
from collections.abc import Mapping

from pinentry_rofi.cli import exit_codes
from pinentry_rofi.cli.console import console
from pinentry_rofi.infra.rofi_detector import DEFAULT_ROFI_BINARY, detect_rofi
from pinentry_rofi.version import __version__

_OK = "[green]OK[/green]"
_WARN = "[yellow]WARN[/yellow]"


# ---------------------------------------------------------------------------
# Diagnostic collectors
# ---------------------------------------------------------------------------

def _version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the pinentry-rofi version row."""
    return "pinentry-rofi", __version__, _OK


def _python_version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the Python version row."""
    version = platform.python_version()
    ok = sys.version_info[:2] >= (3, 10)
    status = _OK if ok else "[red]FAIL (>=3.10 required)[/red]"
    return "Python", version, status


def _rofi_check(binary: str = DEFAULT_ROFI_BINARY) -> tuple[str, str, str]:
    """Return (label, value, status) for the rofi row."""
    status_obj = detect_rofi(binary)
    if status_obj.found:
        return "rofi", str(status_obj.path), _OK
    return "rofi", f"{binary} not found", "[red]FAIL[/red]"


def _env_check(name: str, environ: Mapping[str, str]) -> tuple[str, str, str]:
    """Return (label, value, status) for an environment variable row."""
    value = environ.get(name)
    if value:
        return name, value, _OK
    return name, "unset", _WARN


def _os_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the OS row."""
    system_raw = platform.system()
    system_display = {"Darwin": "macOS"}.get(system_raw, system_raw)
    value = f"{system_display} {platform.release()} ({platform.machine()})"
    return "OS", value, _OK


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def run_doctor(
    binary: str = DEFAULT_ROFI_BINARY,
    environ: Mapping[str, str] | None = None,
) -> int:
    """Execute all diagnostic checks and render a Rich summary table.

    Returns
    -------
    int
        :data:`exit_codes.SUCCESS` when no check failed,
        :data:`exit_codes.GENERAL_ERROR` otherwise.
    """
    from rich.table import Table

    env = os.environ if environ is None else environ
    checks = [
        _version_check(),
        _python_version_check(),
        _rofi_check(binary),
        _env_check("DISPLAY", env),
        _env_check("GPG_TTY", env),
        _os_check(),
    ]
    has_failure = any("FAIL" in status for _, _, status in checks)

    table = Table(
        title="pinentry-rofi doctor",
        show_header=True,
        header_style="bold cyan",
        border_style="dim",
    )
    table.add_column("Component", style="bold", min_width=12)
    table.add_column("Value", min_width=20)
    table.add_column("Status", justify="center", min_width=8)
    for label, value, status in checks:
        table.add_row(label, value, status)

    console.print()
    console.print(table)
    console.print()

    rofi_status = detect_rofi(binary)
    if not rofi_status.found and rofi_status.install_commands:
        console.print("[yellow]rofi is not installed.[/yellow]")
        console.print("Install using one of the following commands:\n")
        for cmd in rofi_status.install_commands:
            console.print(f"  [bold]{cmd}[/bold]")
        console.print()

    if has_failure:
        console.print("[bold red]Some checks failed.[/bold red]")
        return exit_codes.GENERAL_ERROR

    console.print("[bold green]All checks passed.[/bold green]")
    return exit_codes.SUCCESS
