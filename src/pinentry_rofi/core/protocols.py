"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters and the CLI
driver must satisfy.  Core code depends ONLY on these protocols —
never on concrete implementations — so the interpreter can be tested
without spawning rofi or touching stdout.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Protocol

from pinentry_rofi.core.models import PickerOutcome


class PinPicker(Protocol):
    """Contract for the external secret picker.

    Any object that implements :meth:`pick` with the correct signature
    satisfies this protocol structurally (no explicit inheritance
    required).
    """

    def pick(
        self,
        arguments: Sequence[str],
        env: Mapping[str, str] | None = None,
    ) -> PickerOutcome:
        """Run the picker with *arguments* and classify the result.

        Parameters
        ----------
        arguments:
            Flattened presentation-state tokens.
        env:
            Environment for the picker process.  ``None`` inherits the
            current process environment.

        Returns
        -------
        PickerOutcome
            ``OBTAINED`` (with or without payload) or ``CANCELLED`` with
            a diagnostic.  User cancellation is never an exception.

        Raises
        ------
        PickerNotFoundError
            When the picker executable cannot be started.
        PickerOutputError
            When the picker output cannot be decoded.
        """
        ...  # pragma: no cover


class ReplyWriter(Protocol):
    """Contract for the Assuan reply sink."""

    def send(self, line: str) -> None:
        """Emit one reply *line* (without trailing newline) and flush."""
        ...  # pragma: no cover
