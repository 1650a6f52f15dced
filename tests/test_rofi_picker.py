"""Tests for the rofi picker adapter (infra/rofi_picker.py).

``subprocess.run`` is mocked — rofi is never spawned.
"""

from __future__ import annotations

import subprocess
from unittest.mock import MagicMock, patch

import pytest

from pinentry_rofi.core.models import PickerStatus
from pinentry_rofi.exceptions import PickerNotFoundError, PickerOutputError
from pinentry_rofi.infra.rofi_picker import RofiPicker


def _completed(returncode: int, stdout: bytes = b"", stderr: bytes = b"") -> MagicMock:
    result = MagicMock(spec=subprocess.CompletedProcess)
    result.returncode = returncode
    result.stdout = stdout
    result.stderr = stderr
    return result


# ---------------------------------------------------------------------------
# Invocation
# ---------------------------------------------------------------------------

class TestInvocation:
    @patch("pinentry_rofi.infra.rofi_picker.subprocess.run")
    def test_command_and_streams(self, mock_run: MagicMock) -> None:
        mock_run.return_value = _completed(0, b"pw\n")
        RofiPicker("rofi").pick(["-dmenu", "-p", "PIN"], {"LC_CTYPE": "C"})

        args, kwargs = mock_run.call_args
        assert args[0] == ["rofi", "-dmenu", "-p", "PIN"]
        assert kwargs["stdin"] is subprocess.DEVNULL
        assert kwargs["capture_output"] is True
        assert kwargs["env"] == {"LC_CTYPE": "C"}
        assert kwargs["timeout"] is None

    @patch("pinentry_rofi.infra.rofi_picker.subprocess.run")
    def test_env_none_inherits(self, mock_run: MagicMock) -> None:
        mock_run.return_value = _completed(0)
        RofiPicker().pick([])
        assert mock_run.call_args.kwargs["env"] is None


# ---------------------------------------------------------------------------
# Outcome classification
# ---------------------------------------------------------------------------

class TestClassification:
    @patch("pinentry_rofi.infra.rofi_picker.subprocess.run")
    def test_secret_trimmed(self, mock_run: MagicMock) -> None:
        mock_run.return_value = _completed(0, b"secret\n")
        outcome = RofiPicker().pick([])
        assert outcome.status is PickerStatus.OBTAINED
        assert outcome.payload == "secret"

    @patch("pinentry_rofi.infra.rofi_picker.subprocess.run")
    def test_leading_whitespace_kept(self, mock_run: MagicMock) -> None:
        mock_run.return_value = _completed(0, b"  pass word \n")
        assert RofiPicker().pick([]).payload == "  pass word"

    @patch("pinentry_rofi.infra.rofi_picker.subprocess.run")
    def test_empty_output_has_no_payload(self, mock_run: MagicMock) -> None:
        mock_run.return_value = _completed(0, b"\n")
        outcome = RofiPicker().pick([])
        assert outcome.status is PickerStatus.OBTAINED
        assert outcome.payload is None

    @patch("pinentry_rofi.infra.rofi_picker.subprocess.run")
    def test_failure_uses_stderr(self, mock_run: MagicMock) -> None:
        mock_run.return_value = _completed(1, b"ignored", b"cancelled\n")
        outcome = RofiPicker().pick([])
        assert outcome.is_cancelled
        assert outcome.diagnostic == "cancelled"

    @patch("pinentry_rofi.infra.rofi_picker.subprocess.run")
    def test_failure_without_stderr_falls_back(self, mock_run: MagicMock) -> None:
        mock_run.return_value = _completed(1)
        assert RofiPicker().pick([]).diagnostic == "rofi"


# ---------------------------------------------------------------------------
# Errors and timeout
# ---------------------------------------------------------------------------

class TestErrors:
    @patch("pinentry_rofi.infra.rofi_picker.subprocess.run")
    def test_missing_binary(self, mock_run: MagicMock) -> None:
        mock_run.side_effect = FileNotFoundError(2, "No such file or directory")
        with pytest.raises(PickerNotFoundError, match="Could not start nope") as exc_info:
            RofiPicker("nope").pick([])
        assert exc_info.value.hint is not None

    @patch("pinentry_rofi.infra.rofi_picker.subprocess.run")
    def test_not_executable(self, mock_run: MagicMock) -> None:
        mock_run.side_effect = PermissionError(13, "Permission denied")
        with pytest.raises(PickerNotFoundError):
            RofiPicker("/tmp/rofi").pick([])

    @patch("pinentry_rofi.infra.rofi_picker.subprocess.run")
    def test_undecodable_stdout(self, mock_run: MagicMock) -> None:
        mock_run.return_value = _completed(0, b"\xff\xfe")
        with pytest.raises(PickerOutputError, match="stdout"):
            RofiPicker().pick([])

    @patch("pinentry_rofi.infra.rofi_picker.subprocess.run")
    def test_timeout_is_cancellation(self, mock_run: MagicMock) -> None:
        mock_run.side_effect = subprocess.TimeoutExpired(["rofi"], 30)
        outcome = RofiPicker(timeout=30).pick([])
        assert mock_run.call_args.kwargs["timeout"] == 30
        assert outcome.is_cancelled
        assert outcome.diagnostic == "timed out after 30s"
