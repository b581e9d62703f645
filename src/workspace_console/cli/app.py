"""CLI application entry point and command routing for workspace-console.

This module is the **sole process-level error boundary**.  It catches
:class:`~workspace_console.exceptions.WorkspaceConsoleError`,
``KeyboardInterrupt`` and any unexpected ``Exception``, rendering
user-friendly messages via Rich and returning well-defined exit codes.

Errors raised while an operator command runs never reach this module:
the console loop reports those itself and keeps prompting.

Architecture notes
------------------
* No business logic lives here — work is delegated to the console loop,
  the core session and the infrastructure layer.
* This module is the only place that translates between the domain world
  and the OS process exit code.
"""

from __future__ import annotations

import argparse
import asyncio
import sys

from workspace_console.cli import exit_codes
from workspace_console.cli.console import console
from workspace_console.cli.options import ConsoleOptions, add_option_arguments
from workspace_console.exceptions import WorkspaceConsoleError
from workspace_console.version import __version__


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser.

    The CLI supports:
    * ``workspace-console [options]``         — interactive console
    * ``workspace-console doctor [options]``  — environment diagnostics
    * ``workspace-console --version``
    """
    parser = argparse.ArgumentParser(
        prog="workspace-console",
        description="Interactive console for a telephony workspace client.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "mode",
        nargs="?",
        default=None,
        help="Omit to start the console, or 'doctor' to run diagnostics.",
    )
    add_option_arguments(parser)
    return parser


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

async def _run_console(options: ConsoleOptions) -> int:
    """Build the client, session and reader, then run the console loop."""
    from workspace_console.cli.line_reader import QuestionaryLineReader
    from workspace_console.cli.repl import WorkspaceConsole
    from workspace_console.core.session import WorkspaceSession
    from workspace_console.infra.client_loader import create_workspace_client

    client = create_workspace_client(options.client_factory, options.client_settings())
    session = WorkspaceSession(client, token=options.token)
    reader = QuestionaryLineReader()

    workspace_console = WorkspaceConsole(session, options, reader, console)
    await workspace_console.run()
    return exit_codes.SUCCESS


def _handle_console(options: ConsoleOptions) -> int:
    """Dispatch the interactive console."""
    return asyncio.run(_run_console(options))


def _handle_doctor(options: ConsoleOptions) -> int:
    """Dispatch the ``doctor`` diagnostics command."""
    from workspace_console.cli.doctor import run_doctor

    return run_doctor(options)


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the workspace-console CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.

    Returns
    -------
    int
        OS process exit code.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)
    options = ConsoleOptions.from_namespace(args)

    if args.mode is None:
        return _handle_console(options)

    if args.mode.lower() == "doctor":
        return _handle_doctor(options)

    parser.print_usage(sys.stderr)
    console.print(f"Unknown mode: {args.mode}")
    return exit_codes.GENERAL_ERROR


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except WorkspaceConsoleError as exc:
        console.print(f"Error: {exc}", style="bold red")
        if exc.hint:
            console.print(f"Hint: {exc.hint}", style="yellow")
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\nAborted by user.", style="yellow")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "Unexpected error. Please report this issue.\n"
            f"  {type(exc).__name__}: {exc}",
            style="bold red",
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
