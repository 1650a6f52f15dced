"""rofi backed implementation of :class:`~pinentry_rofi.core.protocols.PinPicker`.

This module is the **only** place in the codebase that spawns a
process.  OS errors are caught here and re-raised as typed
:class:`~pinentry_rofi.exceptions.PinentryError` subclasses; a user
cancelling the dialog is a normal :class:`PickerOutcome`, not an error.
"""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Mapping, Sequence

from pinentry_rofi.core.models import PickerOutcome
from pinentry_rofi.exceptions import PickerNotFoundError, PickerOutputError
from pinentry_rofi.infra.rofi_detector import (
    DEFAULT_ROFI_BINARY,
    install_hint,
    platform_install_commands,
)

logger = logging.getLogger(__name__)


class RofiPicker:
    """Concrete :class:`PinPicker` that runs ``rofi -dmenu``.

    Usage::

        picker = RofiPicker()
        outcome = picker.pick(["-dmenu", "-password", "-p", "Passphrase"])

    This class satisfies the :class:`~pinentry_rofi.core.protocols.PinPicker`
    protocol structurally — no explicit inheritance required.

    Parameters
    ----------
    binary:
        Executable name or path.
    timeout:
        Seconds to wait for the user before cancelling.  ``None`` waits
        until rofi exits.
    """

    FALLBACK_DIAGNOSTIC: str = "rofi"
    """Reported when rofi fails without writing to stderr."""

    def __init__(
        self,
        binary: str = DEFAULT_ROFI_BINARY,
        *,
        timeout: float | None = None,
    ) -> None:
        self.binary: str = binary
        self.timeout: float | None = timeout

    # ------------------------------------------------------------------
    # Protocol method
    # ------------------------------------------------------------------

    def pick(
        self,
        arguments: Sequence[str],
        env: Mapping[str, str] | None = None,
    ) -> PickerOutcome:
        """Run rofi and classify its exit.

        Raises
        ------
        PickerNotFoundError
            When the executable is missing or not executable.
        PickerOutputError
            When stdout or stderr is not valid UTF-8.
        """
        command = [self.binary, *arguments]
        logger.debug("Running picker %s with %d argument(s)", self.binary, len(arguments))

        try:
            completed = subprocess.run(
                command,
                stdin=subprocess.DEVNULL,
                capture_output=True,
                env=dict(env) if env is not None else None,
                timeout=self.timeout,
                check=False,
            )
        except (FileNotFoundError, PermissionError) as exc:
            raise PickerNotFoundError(
                f"Could not start {self.binary}: {exc.strerror or exc}",
                hint=install_hint(platform_install_commands()),
            ) from exc
        except subprocess.TimeoutExpired:
            logger.info("Picker timed out after %ss", self.timeout)
            return PickerOutcome.cancelled(f"timed out after {self.timeout:g}s")

        if completed.returncode == 0:
            return PickerOutcome.obtained(self._decode(completed.stdout, "stdout").rstrip())

        stderr = self._decode(completed.stderr, "stderr").strip()
        logger.debug("Picker exited with status %d", completed.returncode)
        return PickerOutcome.cancelled(stderr or self.FALLBACK_DIAGNOSTIC)

    # ------------------------------------------------------------------
    # Decoding
    # ------------------------------------------------------------------

    def _decode(self, raw: bytes | None, stream: str) -> str:
        try:
            return (raw or b"").decode("utf-8")
        except UnicodeDecodeError as exc:
            raise PickerOutputError(
                f"Error reading {self.binary} {stream}: {exc}",
            ) from exc
