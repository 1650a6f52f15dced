"""Infrastructure layer — external system integration.

This layer wraps all interaction with rofi and the operating system.
Every raw OS exception must be caught here and re-raised as a
:class:`~pinentry_rofi.exceptions.PinentryError` subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the core layer.
"""

from pinentry_rofi.infra.rofi_detector import RofiStatus, detect_rofi, require_rofi
from pinentry_rofi.infra.rofi_picker import RofiPicker

__all__: list[str] = [
    "RofiPicker",
    "RofiStatus",
    "detect_rofi",
    "require_rofi",
]
