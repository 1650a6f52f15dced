"""Assuan stdio driver.

Bridges the line-oriented streams gpg-agent attaches to the pinentry
with the :class:`~pinentry_rofi.core.interpreter.CommandInterpreter`.
Reading lines, writing replies and flushing live here; the protocol
semantics do not.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TextIO

from pinentry_rofi.core.interpreter import CommandInterpreter
from pinentry_rofi.core.protocols import ReplyWriter

logger = logging.getLogger(__name__)

GREETING: str = "OK Please go ahead"


class StreamReplyWriter:
    """:class:`ReplyWriter` over a text stream, flushed after every line."""

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream

    def send(self, line: str) -> None:
        self._stream.write(f"{line}\n")
        self._stream.flush()


def strip_line_ending(line: str) -> str:
    """Drop one trailing ``\\n`` and a ``\\r`` before it."""
    return line.removesuffix("\n").removesuffix("\r")


def serve(
    interpreter: CommandInterpreter,
    lines: Iterable[str],
    writer: ReplyWriter,
) -> None:
    """Run one session: greet, then dispatch every line until EOF.

    Exceptions raised by the interpreter end the session and propagate
    to the caller unchanged.
    """
    writer.send(GREETING)
    for line in lines:
        interpreter.handle_line(strip_line_ending(line))
    logger.debug("Input exhausted; session finished")
