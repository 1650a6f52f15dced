"""Domain models for pinentry-rofi.

:class:`Request` and :class:`PickerOutcome` are **frozen** dataclasses —
immutable value objects with no behaviour beyond parsing and data
access.  :class:`SessionContext` is the one mutable object: it owns the
per-session copy of the environment that ``OPTION`` writes to.
"""

from __future__ import annotations

import enum
import os
from collections.abc import Mapping
from dataclasses import dataclass, field

from pinentry_rofi.version import __version__


# ---------------------------------------------------------------------------
# Request
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Request:
    """A single Assuan request line split into verb and argument."""

    action: str
    """Case-sensitive command verb (e.g. ``SETDESC``)."""

    argument: str
    """Remainder of the line after the first space, possibly empty."""

    @classmethod
    def parse(cls, line: str) -> Request:
        """Split *line* on its first space.

        A line without a space is the action alone with an empty
        argument.
        """
        action, _, argument = line.partition(" ")
        return cls(action=action, argument=argument)


# ---------------------------------------------------------------------------
# Picker outcome
# ---------------------------------------------------------------------------

class PickerStatus(enum.Enum):
    OBTAINED = "obtained"
    CANCELLED = "cancelled"


@dataclass(frozen=True, slots=True)
class PickerOutcome:
    """Classified result of one picker run."""

    status: PickerStatus

    payload: str | None = None
    """Trimmed secret text, or ``None`` when the picker printed nothing."""

    diagnostic: str | None = None
    """Human-readable cancellation reason; set only when cancelled."""

    @classmethod
    def obtained(cls, payload: str | None) -> PickerOutcome:
        return cls(status=PickerStatus.OBTAINED, payload=payload or None)

    @classmethod
    def cancelled(cls, diagnostic: str) -> PickerOutcome:
        return cls(status=PickerStatus.CANCELLED, diagnostic=diagnostic)

    @property
    def is_cancelled(self) -> bool:
        return self.status is PickerStatus.CANCELLED


# ---------------------------------------------------------------------------
# Session context
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class SessionContext:
    """Process-level facts a session reads and writes.

    ``environ`` is a private copy: ``OPTION`` never touches
    :data:`os.environ`.  The copy is handed to the picker as its child
    environment, so the picker still observes every propagated value.
    """

    environ: dict[str, str] = field(default_factory=dict)
    pid: int = field(default_factory=os.getpid)
    version: str = __version__

    @classmethod
    def from_environ(cls, environ: Mapping[str, str] | None = None) -> SessionContext:
        """Snapshot *environ* (defaults to :data:`os.environ`)."""
        source = os.environ if environ is None else environ
        return cls(environ=dict(source))

    def getenv(self, name: str) -> str | None:
        return self.environ.get(name)

    def setenv(self, name: str, value: str) -> None:
        self.environ[name] = value
