"""Tests for agent text transformations (core/text_filters.py)."""

from __future__ import annotations

import pytest

from pinentry_rofi.core.text_filters import (
    ERROR_SEPARATOR,
    decode_description,
    escape_markup,
    strip_prompt,
)
from pinentry_rofi.exceptions import DescriptionDecodeError


class TestStripPrompt:
    def test_removes_every_colon(self) -> None:
        assert strip_prompt("a:b:c") == "abc"

    def test_trailing_colon(self) -> None:
        assert strip_prompt("Passphrase:") == "Passphrase"


class TestEscapeMarkup:
    @pytest.mark.parametrize(
        ("raw", "escaped"),
        [
            ("&", "&amp;"),
            ("<", "&lt;"),
            (">", "&gt;"),
            ('"', "&quot;"),
            ("plain", "plain"),
        ],
    )
    def test_entities(self, raw: str, escaped: str) -> None:
        assert escape_markup(raw) == escaped


class TestDecodeDescription:
    def test_newline_becomes_carriage_return(self) -> None:
        assert decode_description("line1%0Aline2") == "line1\rline2"

    def test_quote_is_escaped(self) -> None:
        assert decode_description('say "hi"') == "say &quot;hi&quot;"

    def test_ssh_key_description(self) -> None:
        raw = (
            "Please enter the passphrase for the ssh key%0A  "
            "ke:yf:in:ge:rp:ri:nt %22<email@yhoo.com>%22"
        )
        assert decode_description(raw) == (
            "Please enter the passphrase for the ssh key\r  "
            "ke:yf:in:ge:rp:ri:nt &quot;&lt;email@yhoo.com&gt;&quot;"
        )

    def test_encoded_ampersand_escaped_once(self) -> None:
        assert decode_description("a%26b") == "a&amp;b"

    def test_plus_is_not_a_space(self) -> None:
        assert decode_description("a+b") == "a+b"

    def test_utf8_sequence(self) -> None:
        assert decode_description("caf%C3%A9") == "café"

    def test_invalid_utf8_raises(self) -> None:
        with pytest.raises(DescriptionDecodeError, match="not valid"):
            decode_description("bad%FFbyte")


def test_separator_shape() -> None:
    assert ERROR_SEPARATOR == "\r***************************\r"
