"""Rich console bound to stderr.

stdout carries the Assuan protocol, so every human-facing line —
errors, doctor tables, log records — is rendered on stderr.  Rich is
imported lazily so that ``--help`` and ``--version`` never pay for it.
"""

from __future__ import annotations

from typing import Any

from pinentry_rofi.exceptions import EnvironmentError

_console: Any = None


def _load_rich_console_class() -> type[Any]:
	"""Return ``rich.console.Console`` class or raise ``EnvironmentError``."""
	try:
		from rich.console import Console
	except ModuleNotFoundError as exc:
		raise EnvironmentError(
			"rich is not installed. Install with: pip install rich",
		) from exc
	return Console


def get_rich_console() -> Any:
	"""Return the shared Rich console targeting stderr."""
	global _console
	if _console is None:
		console_class = _load_rich_console_class()
		_console = console_class(stderr=True)
	return _console


class _ConsoleProxy:
	"""``print``-compatible proxy that defers the Rich import to first use."""

	def print(self, *objects: object) -> None:
		get_rich_console().print(*objects)


console = _ConsoleProxy()
