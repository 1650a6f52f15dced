"""Shared pytest fixtures and configuration for the pinentry-rofi test suite.

Guidelines
----------
* rofi is never spawned — the picker is faked at the protocol seam or
  ``subprocess.run`` is patched.
* Core tests must be pure — no side effects on ``os.environ``.
* Tests must not depend on OS state.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

import pytest

from pinentry_rofi.core.interpreter import CommandInterpreter
from pinentry_rofi.core.models import PickerOutcome, SessionContext
from pinentry_rofi.core.presentation import PresentationState


class RecordingWriter:
    """ReplyWriter that keeps every line it was asked to send."""

    def __init__(self) -> None:
        self.lines: list[str] = []

    def send(self, line: str) -> None:
        self.lines.append(line)


class FakePicker:
    """PinPicker returning a canned outcome and recording its calls."""

    def __init__(self, outcome: PickerOutcome | None = None) -> None:
        self.outcome: PickerOutcome = outcome or PickerOutcome.obtained(None)
        self.calls: list[tuple[list[str], dict[str, str] | None]] = []

    def pick(
        self,
        arguments: Sequence[str],
        env: Mapping[str, str] | None = None,
    ) -> PickerOutcome:
        self.calls.append((list(arguments), dict(env) if env is not None else None))
        return self.outcome


@pytest.fixture()
def writer() -> RecordingWriter:
    return RecordingWriter()


@pytest.fixture()
def picker() -> FakePicker:
    return FakePicker()


@pytest.fixture()
def context() -> SessionContext:
    return SessionContext(environ={"DISPLAY": ":1"}, pid=4242, version="9.9.9")


@pytest.fixture()
def state() -> PresentationState:
    return PresentationState.initial(":0")


@pytest.fixture()
def interpreter(
    state: PresentationState,
    context: SessionContext,
    writer: RecordingWriter,
    picker: FakePicker,
) -> CommandInterpreter:
    return CommandInterpreter(state, context, writer, picker)
