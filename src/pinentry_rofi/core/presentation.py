"""Presentation state — the accumulated rofi invocation options.

The store maps a rofi flag (``-p``, ``-mesg``, ...) to its value, or to
``None`` for flag-only options.  It is seeded once per session and then
mutated exclusively by the command interpreter.
"""

from __future__ import annotations

from collections.abc import Iterator

PROMPT_KEY: str = "-p"
"""rofi option carrying the prompt text."""

MESSAGE_KEY: str = "-mesg"
"""rofi option carrying the description (and stacked error) text."""

NULL_INPUT: str = "/dev/null"


class PresentationState:
    """Ordered mapping of rofi option -> optional value.

    All operations are total; nothing here raises.
    """

    def __init__(self, options: dict[str, str | None] | None = None) -> None:
        self._options: dict[str, str | None] = dict(options or {})

    @classmethod
    def initial(cls, display: str, prompt: str | None = None) -> PresentationState:
        """Return the base invocation flags for a new session.

        A non-empty *prompt* is seeded as well and therefore wins over
        every later ``SETPROMPT``.
        """
        state = cls(
            {
                "-dmenu": None,
                "-display": display,
                "-input": NULL_INPUT,
                "-password": None,
                "-disable-history": None,
                "-l": "0",
            }
        )
        if prompt:
            state.set(PROMPT_KEY, prompt)
        return state

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def set(self, key: str, value: str | None) -> None:
        self._options[key] = value

    def set_if_absent(self, key: str, value: str | None) -> bool:
        """Write *value* only when *key* is unset.  Return whether it was written."""
        if key in self._options:
            return False
        self._options[key] = value
        return True

    def update_with_stack_rule(self, key: str, new_text: str, separator: str) -> None:
        """Layer *new_text* on top of the original text under *key*.

        The current value is cut after the last *separator* so that an
        earlier stacked text is dropped and only the original remains
        underneath.  An unset key is left unset.
        """
        current = self._options.get(key)
        if current is None:
            return
        base = current.rpartition(separator)[2]
        self._options[key] = separator.join((new_text, base))

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------

    def get(self, key: str) -> str | None:
        return self._options.get(key)

    def as_dict(self) -> dict[str, str | None]:
        return dict(self._options)

    def to_invocation_argument_list(self) -> list[str]:
        """Flatten into command-line tokens (``key value`` or ``key``)."""
        tokens: list[str] = []
        for key, value in self._options.items():
            tokens.append(key)
            if value is not None:
                tokens.append(value)
        return tokens

    def __contains__(self, key: object) -> bool:
        return key in self._options

    def __iter__(self) -> Iterator[str]:
        return iter(self._options)

    def __len__(self) -> int:
        return len(self._options)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._options!r})"
