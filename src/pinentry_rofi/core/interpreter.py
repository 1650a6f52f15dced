"""Assuan command interpreter — the pinentry state machine.

Consumes one request line at a time, mutates the
:class:`~pinentry_rofi.core.presentation.PresentationState`, drives the
injected :class:`~pinentry_rofi.core.protocols.PinPicker` on ``GETPIN``,
and writes reply lines through the injected
:class:`~pinentry_rofi.core.protocols.ReplyWriter`.

States
------
* *active* — requests are accepted.
* *ended* — reached on the first unrecognized command.  ``BYE`` has
  been written, :class:`~pinentry_rofi.exceptions.UnknownCommandError`
  raised, and every later request is refused.

Guarantees
----------
* No I/O of its own — all output goes through the writer.
* The secret is never logged.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import NoReturn

from pinentry_rofi.core.models import Request, SessionContext
from pinentry_rofi.core.presentation import MESSAGE_KEY, PROMPT_KEY, PresentationState
from pinentry_rofi.core.protocols import PinPicker, ReplyWriter
from pinentry_rofi.core.text_filters import ERROR_SEPARATOR, decode_description, strip_prompt
from pinentry_rofi.exceptions import (
    MissingEnvironmentError,
    SessionEndedError,
    UnknownCommandError,
)

logger = logging.getLogger(__name__)

CANCELLED_ERROR_CODE: int = 83886179
"""gpg-error code for GPG_ERR_CANCELED from the pinentry source."""

FLAVOR: str = "keyring"

OPTION_ENVIRONMENT: dict[str, str] = {
    "ttyname": "GPG_TTY",
    "ttytype": "GPG_TERM",
    "lc-ctype": "LC_CTYPE",
    "lc-messages": "LC_MESSAGES",
}
"""``OPTION`` names that propagate into the session environment."""

Handler = Callable[[Request], bool]


class CommandInterpreter:
    """Dispatch Assuan requests for a single pinentry session.

    Parameters
    ----------
    state:
        Presentation state seeded for this session.
    context:
        Session environment, pid and version.
    writer:
        Sink for reply lines.
    picker:
        Any object satisfying the :class:`PinPicker` protocol.
    """

    def __init__(
        self,
        state: PresentationState,
        context: SessionContext,
        writer: ReplyWriter,
        picker: PinPicker,
    ) -> None:
        self._state = state
        self._context = context
        self._writer = writer
        self._picker = picker
        self._active = True
        self._handlers: dict[str, Handler] = {
            "OPTION": self._option,
            "GETINFO": self._getinfo,
            "SETPROMPT": self._setprompt,
            "SETDESC": self._setdesc,
            "GETPIN": self._getpin,
            "SETERROR": self._seterror,
            "SETKEYINFO": self._ignore,
            "BYE": self._ignore,
        }
        self._info: dict[str, Callable[[], str]] = {
            "pid": lambda: str(self._context.pid),
            "ttyinfo": self._ttyinfo,
            "flavor": lambda: FLAVOR,
            "version": lambda: self._context.version,
        }

    @property
    def active(self) -> bool:
        return self._active

    @property
    def state(self) -> PresentationState:
        return self._state

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def handle_line(self, line: str) -> None:
        """Parse and dispatch one request line."""
        self.handle(Request.parse(line))

    def handle(self, request: Request) -> None:
        """Dispatch *request* and write its replies.

        Raises
        ------
        UnknownCommandError
            After writing ``BYE`` for an unrecognized request.
        SessionEndedError
            When called after the session has ended.
        MissingEnvironmentError
            When ``GETINFO ttyinfo`` lacks ``GPG_TTY`` or ``DISPLAY``.
        """
        if not self._active:
            raise SessionEndedError(
                f"Session already ended; refusing `{request.action}`",
            )

        logger.debug("Assuan request %s", request.action)
        handler = self._handlers.get(request.action)
        if handler is None:
            self._reject(request)

        if handler(request):
            self._writer.send("OK")

    # ------------------------------------------------------------------
    # Verb handlers — return whether the generic OK follows
    # ------------------------------------------------------------------

    def _option(self, request: Request) -> bool:
        name, _, value = request.argument.partition("=")
        variable = OPTION_ENVIRONMENT.get(name)
        if variable is not None:
            self._context.setenv(variable, value)
        else:
            logger.debug("Ignoring OPTION %s", name)
        return True

    def _getinfo(self, request: Request) -> bool:
        provider = self._info.get(request.argument)
        if provider is None:
            self._reject(request)
        self._data(provider())
        return True

    def _setprompt(self, request: Request) -> bool:
        self._state.set_if_absent(PROMPT_KEY, strip_prompt(request.argument))
        return True

    def _setdesc(self, request: Request) -> bool:
        self._state.set(MESSAGE_KEY, decode_description(request.argument))
        return True

    def _seterror(self, request: Request) -> bool:
        self._state.update_with_stack_rule(MESSAGE_KEY, request.argument, ERROR_SEPARATOR)
        return True

    def _getpin(self, request: Request) -> bool:
        outcome = self._picker.pick(
            self._state.to_invocation_argument_list(),
            self._context.environ,
        )
        if outcome.is_cancelled:
            logger.info("Pick cancelled: %s", outcome.diagnostic)
            self._writer.send(
                f"ERR {CANCELLED_ERROR_CODE} Operation cancelled <{outcome.diagnostic}>",
            )
            return False
        if outcome.payload:
            self._data(outcome.payload)
        return True

    def _ignore(self, request: Request) -> bool:
        return True

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _ttyinfo(self) -> str:
        return " ".join(
            (
                self._require_env("GPG_TTY"),
                self._context.getenv("GPG_TERM") or "",
                self._require_env("DISPLAY"),
            )
        )

    def _require_env(self, name: str) -> str:
        value = self._context.getenv(name)
        if value is None:
            raise MissingEnvironmentError(
                name,
                hint="gpg-agent should send the matching OPTION first.",
            )
        return value

    def _data(self, payload: str) -> None:
        self._writer.send(f"D {payload}")

    def _reject(self, request: Request) -> NoReturn:
        """Write ``BYE``, end the session and raise."""
        self._active = False
        self._writer.send("BYE")
        logger.warning(
            "Unknown assuan command %r with argument %r",
            request.action,
            request.argument,
        )
        raise UnknownCommandError(request.action, request.argument)
