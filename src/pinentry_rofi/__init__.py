"""pinentry-rofi — a gpg-agent pinentry backed by the rofi picker.

Speaks the Assuan line protocol on stdin/stdout with a strict layered
architecture.
"""

from pinentry_rofi.version import __version__

__all__: list[str] = ["__version__"]
