"""Infrastructure: rofi detection and platform guidance.

This module is responsible for locating the rofi executable on the
system PATH and providing platform-specific installation guidance when
it is missing.

Rules
-----
* Detection via :func:`shutil.which` only — no subprocess.
* No automatic installation.
* No ``print()`` — callers handle user-facing output.
"""

from __future__ import annotations

import platform
import shutil
from dataclasses import dataclass
from pathlib import Path

from pinentry_rofi.exceptions import PickerNotFoundError

DEFAULT_ROFI_BINARY: str = "rofi"


# ---------------------------------------------------------------------------
# Detection result
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class RofiStatus:
    """Result of a rofi detection probe.

    Attributes
    ----------
    found : bool
        Whether the executable was located.
    path : Path | None
        Absolute path to the executable, or ``None``.
    version_hint : str
        Human-readable status string (e.g. ``"found at …"`` or ``"not found"``).
    install_commands : tuple[str, ...]
        Suggested shell commands for installing rofi on the current
        platform.  Empty when rofi is already present.
    """

    found: bool
    path: Path | None
    version_hint: str
    install_commands: tuple[str, ...]


# ---------------------------------------------------------------------------
# Detection logic
# ---------------------------------------------------------------------------

def detect_rofi(binary: str = DEFAULT_ROFI_BINARY) -> RofiStatus:
    """Probe the system for *binary*.

    Returns a :class:`RofiStatus` regardless of whether rofi is
    present — the caller decides whether to abort or merely warn.
    """
    result = shutil.which(binary)

    if result is not None:
        resolved = Path(result).resolve()
        return RofiStatus(
            found=True,
            path=resolved,
            version_hint=f"found at {resolved}",
            install_commands=(),
        )

    return RofiStatus(
        found=False,
        path=None,
        version_hint="not found",
        install_commands=platform_install_commands(),
    )


def require_rofi(binary: str = DEFAULT_ROFI_BINARY) -> Path:
    """Locate *binary* or raise :class:`PickerNotFoundError`."""
    status = detect_rofi(binary)
    if not status.found or status.path is None:
        raise PickerNotFoundError(
            f"{binary} is not installed or not on PATH.",
            hint=install_hint(status.install_commands),
        )
    return status.path


def install_hint(commands: tuple[str, ...]) -> str | None:
    """Render *commands* as a multi-line hint, or ``None`` when empty."""
    if not commands:
        return None
    lines = ["Install rofi using one of:"]
    lines.extend(f"  {cmd}" for cmd in commands)
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Platform-specific install guidance
# ---------------------------------------------------------------------------

def platform_install_commands() -> tuple[str, ...]:
    """Return install commands appropriate for the current OS."""
    system = platform.system().lower()
    if system == "linux":
        return (
            "sudo apt install rofi",
            "sudo dnf install rofi",
            "sudo pacman -S rofi",
        )
    if system == "freebsd":
        return ("sudo pkg install rofi",)
    if system == "darwin":
        return ("brew install rofi",)
    return ("Please install rofi from https://github.com/davatorium/rofi",)
