"""Core / service layer — Assuan semantics and presentation state.

Rules
-----
* No ``print()`` calls.
* No filesystem, subprocess, or stdio access.
* No imports from ``cli`` or ``infra``.
* All functions must be fully typed and deterministic.
"""

from pinentry_rofi.core.interpreter import CommandInterpreter
from pinentry_rofi.core.models import PickerOutcome, PickerStatus, Request, SessionContext
from pinentry_rofi.core.presentation import PresentationState
from pinentry_rofi.core.protocols import PinPicker, ReplyWriter

__all__: list[str] = [
    "CommandInterpreter",
    "PickerOutcome",
    "PickerStatus",
    "PinPicker",
    "PresentationState",
    "ReplyWriter",
    "Request",
    "SessionContext",
]
