"""CLI application entry point for pinentry-rofi.

This module is the **sole error boundary** for the entire application.
It catches :class:`~pinentry_rofi.exceptions.PinentryError`,
``KeyboardInterrupt``, and any unexpected ``Exception``, rendering
messages via Rich on stderr and returning well-defined exit codes.

Architecture notes
------------------
* No protocol logic lives here — requests are handled by the core
  interpreter, the picker lives in ``infra``.
* stdout belongs to gpg-agent; nothing but Assuan replies is written
  there.
* This module is the only place that translates between the domain world
  and the OS process exit code.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from collections.abc import Mapping
from typing import TextIO

from pinentry_rofi.cli import exit_codes
from pinentry_rofi.cli.console import console
from pinentry_rofi.exceptions import PinentryError
from pinentry_rofi.version import __version__

logger = logging.getLogger(__name__)

_INSTALL_EPILOG = """\
install:
  1. Copy `pinentry-rofi` to `~/.local/bin` or `/usr/bin`.
  2. `chmod +x your/path/pinentry-rofi`.
  3. Set `pinentry-program` in `~/.gnupg/gpg-agent.conf`. For example:
     `pinentry-program <HOME>/.local/bin/pinentry-rofi`
  4. Restart gpg-agent `gpgconf --kill gpg-agent`
"""


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _build_parser(environ: Mapping[str, str]) -> argparse.ArgumentParser:
    """Construct the argument parser.

    Every option falls back to an environment variable so that the
    program can be configured from ``gpg-agent.conf`` wrappers alone.
    """
    parser = argparse.ArgumentParser(
        prog="pinentry-rofi",
        description="gpg-agent pinentry that asks for secrets with rofi.",
        epilog=_INSTALL_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        allow_abbrev=False,
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-d",
        "--display",
        default=environ.get("DISPLAY") or ":0",
        help="Set display [env: DISPLAY] (default: %(default)s)",
    )
    parser.add_argument(
        "-p",
        "--prompt",
        default=environ.get("PINENTRY_USER_DATA"),
        help="Set rofi prompt [env: PINENTRY_USER_DATA]",
    )
    parser.add_argument(
        "--rofi",
        default=environ.get("PINENTRY_ROFI_BIN") or "rofi",
        help="rofi executable [env: PINENTRY_ROFI_BIN] (default: %(default)s)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=environ.get("PINENTRY_ROFI_TIMEOUT") or None,
        help="Cancel a pending pick after this many seconds "
        "[env: PINENTRY_ROFI_TIMEOUT]",
    )
    parser.add_argument(
        "--log-level",
        default=environ.get("PINENTRY_ROFI_LOG_LEVEL") or "WARNING",
        help="stderr log level [env: PINENTRY_ROFI_LOG_LEVEL] (default: %(default)s)",
    )
    parser.add_argument(
        "--doctor",
        action="store_true",
        help="Check the environment and exit.",
    )
    return parser


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _handle_session(
    args: argparse.Namespace,
    environ: Mapping[str, str],
    stdin: TextIO,
    stdout: TextIO,
) -> int:
    """Wire the session objects together and serve stdin until EOF."""
    from pinentry_rofi.cli.assuan import StreamReplyWriter, serve
    from pinentry_rofi.core.interpreter import CommandInterpreter
    from pinentry_rofi.core.models import SessionContext
    from pinentry_rofi.core.presentation import PresentationState
    from pinentry_rofi.infra.rofi_picker import RofiPicker

    writer = StreamReplyWriter(stdout)
    interpreter = CommandInterpreter(
        PresentationState.initial(args.display, args.prompt),
        SessionContext.from_environ(environ),
        writer,
        RofiPicker(args.rofi, timeout=args.timeout),
    )
    logger.debug("Session started (display=%s, rofi=%s)", args.display, args.rofi)
    serve(interpreter, stdin, writer)
    return exit_codes.SUCCESS


def _handle_doctor(args: argparse.Namespace, environ: Mapping[str, str]) -> int:
    """Dispatch the ``--doctor`` diagnostics command."""
    from pinentry_rofi.cli.doctor import run_doctor

    return run_doctor(args.rofi, environ)


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(
    argv: list[str] | None = None,
    *,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
    environ: Mapping[str, str] | None = None,
) -> int:
    """Run pinentry-rofi.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.
    stdin, stdout:
        Assuan streams; default to the process streams.
    environ:
        Environment used for option defaults and the session context;
        defaults to :data:`os.environ`.

    Returns
    -------
    int
        OS process exit code.
    """
    env = os.environ if environ is None else environ
    parser = _build_parser(env)
    args, unknown = parser.parse_known_args(argv)

    from pinentry_rofi.cli.log import configure_logging

    configure_logging(args.log_level)
    if unknown:
        logger.debug("Ignoring pinentry arguments %s", unknown)

    if args.doctor:
        return _handle_doctor(args, env)

    return _handle_session(
        args,
        env,
        sys.stdin if stdin is None else stdin,
        sys.stdout if stdout is None else stdout,
    )


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    from rich.markup import escape

    try:
        code = main()
        sys.exit(code)
    except PinentryError as exc:
        console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}")
        if exc.hint:
            console.print(f"[yellow]Hint:[/yellow] {escape(exc.hint)}")
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {escape(str(exc))}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
