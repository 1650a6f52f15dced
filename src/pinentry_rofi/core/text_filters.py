"""Text transformations applied to agent-supplied strings.

Pure functions — no I/O, no state.  gpg-agent percent-encodes
descriptions and uses ``:`` as a prompt suffix; rofi renders ``-mesg``
as Pango markup and treats ``\\r`` as a line break.
"""

from __future__ import annotations

from urllib.parse import unquote
from xml.sax.saxutils import escape

from pinentry_rofi.exceptions import DescriptionDecodeError

ERROR_SEPARATOR: str = "\r" + "*" * 27 + "\r"
"""Visual rule placed between a stacked error and the description."""

_MARKUP_ENTITIES: dict[str, str] = {'"': "&quot;"}


def strip_prompt(text: str) -> str:
    """Remove every ``:`` from a prompt (``"Passphrase:"`` -> ``"Passphrase"``)."""
    return text.replace(":", "")


def escape_markup(text: str) -> str:
    """Entity-escape ``&``, ``<``, ``>`` and ``"`` for Pango markup."""
    return escape(text, _MARKUP_ENTITIES)


def decode_description(text: str) -> str:
    """Turn a raw ``SETDESC`` argument into rofi message markup.

    Steps, in order: percent-decode, newline to carriage return,
    markup-escape.

    Raises
    ------
    DescriptionDecodeError
        When the decoded bytes are not valid UTF-8.
    """
    try:
        unquoted = unquote(text, encoding="utf-8", errors="strict")
    except UnicodeDecodeError as exc:
        raise DescriptionDecodeError(
            f"Description is not valid percent-encoded UTF-8: {exc}",
            hint="gpg-agent is expected to percent-encode descriptions.",
        ) from exc
    return escape_markup(unquoted.replace("\n", "\r"))
