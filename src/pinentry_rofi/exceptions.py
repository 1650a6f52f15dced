"""Custom exception hierarchy for pinentry-rofi.

All exceptions that cross layer boundaries must inherit from
:class:`PinentryError`.  Raw OS exceptions (e.g. from :mod:`subprocess`)
must NEVER propagate beyond the infrastructure layer — they must be
caught and re-raised as a typed subclass defined here.

Every exception in this module is *fatal* for the session: the Assuan
protocol has its own ``ERR`` reply for recoverable conditions (a
cancelled pick), and those never become exceptions.

Hierarchy
---------
PinentryError
├── ProtocolError
│   ├── UnknownCommandError
│   └── SessionEndedError
├── DescriptionDecodeError
├── MissingEnvironmentError
├── PickerError
│   ├── PickerNotFoundError
│   └── PickerOutputError
└── EnvironmentError
"""

from __future__ import annotations


class PinentryError(Exception):
    """Base exception for all pinentry-rofi errors.

    Every fatal condition must map to a subclass of this exception so
    that the CLI error boundary can render a clean message on stderr
    and exit non-zero without leaking a stack trace to gpg-agent.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Assuan protocol --------------------------------------------------------

class ProtocolError(PinentryError):
    """Raised when the agent violates the supported command set."""


class UnknownCommandError(ProtocolError):
    """Raised after ``BYE`` was sent for an unrecognized command."""

    def __init__(self, action: str, argument: str) -> None:
        super().__init__(
            f"Unknown assuan command. Action `{action}`. Argument `{argument}`",
        )
        self.action: str = action
        self.argument: str = argument


class SessionEndedError(ProtocolError):
    """Raised when a request arrives after the session has ended."""


class DescriptionDecodeError(PinentryError):
    """Raised when a percent-encoded description is not valid UTF-8."""


# --- Environment ------------------------------------------------------------

class MissingEnvironmentError(PinentryError):
    """Raised when a required session environment variable is unset."""

    def __init__(self, variable: str, *, hint: str | None = None) -> None:
        super().__init__(
            f"{variable} environment variable not set",
            hint=hint,
        )
        self.variable: str = variable


class EnvironmentError(PinentryError):
    """Raised when a required runtime library is not available."""


# --- Picker -----------------------------------------------------------------

class PickerError(PinentryError):
    """Raised when the external picker cannot be driven at all."""


class PickerNotFoundError(PickerError):
    """Raised when the picker executable is missing or not executable."""


class PickerOutputError(PickerError):
    """Raised when the picker writes output that is not valid UTF-8."""
