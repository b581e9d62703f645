"""``workspace-console doctor`` — environment diagnostics command.

Gathers system information and renders a Rich table summarising
whether the runtime environment can run the console: Python version,
UI dependencies, and whether the configured workspace client factory
can be imported.

This module lives in the CLI layer — it may import from ``infra``
and ``core``, and it renders via Rich.  It never constructs the client
or opens a session.
"""

from __future__ import annotations

import importlib.util
import platform
import sys

from workspace_console.cli import exit_codes
from workspace_console.cli.console import console
from workspace_console.cli.options import ConsoleOptions
from workspace_console.exceptions import WorkspaceConsoleError
from workspace_console.infra.client_loader import load_client_factory
from workspace_console.version import __version__

_OK = "[green]OK[/green]"
_WARN = "[yellow]WARN[/yellow]"
_FAIL = "[red]FAIL[/red]"


# ---------------------------------------------------------------------------
# Diagnostic collectors
# ---------------------------------------------------------------------------

def _python_version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the Python version row."""
    version = platform.python_version()
    ok = sys.version_info[:2] >= (3, 10)
    status = _OK if ok else "[red]FAIL (>=3.10 required)[/red]"
    return "Python", version, status


def _module_check(label: str, module_name: str) -> tuple[str, str, str]:
    """Return (label, value, status) for an importable dependency."""
    if importlib.util.find_spec(module_name) is None:
        return label, "NOT INSTALLED", _FAIL
    return label, "installed", _OK


def _client_factory_check(options: ConsoleOptions) -> tuple[str, str, str]:
    """Return (label, value, status) for the workspace client factory row."""
    if not options.client_factory:
        return "client", "not configured", _WARN
    try:
        load_client_factory(options.client_factory)
    except WorkspaceConsoleError as exc:
        return "client", str(exc), _FAIL
    return "client", options.client_factory, _OK


def _workspace_console_version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the workspace-console version row."""
    return "workspace-console", __version__, _OK


def _status_plain(status: str) -> str:
    """Convert rich-markup status to plain text."""
    if "FAIL" in status:
        return "FAIL"
    if "WARN" in status:
        return "WARN"
    if "OK" in status:
        return "OK"
    return status


def _print_plain_doctor_table(checks: list[tuple[str, str, str]]) -> None:
    """Render doctor output without Rich."""
    print("\nworkspace-console doctor")
    print("=" * 64)
    print(f"{'Component':<18} {'Value':<34} {'Status':<8}")
    print("-" * 64)
    for label, value, status in checks:
        print(f"{label:<18} {value:<34} {_status_plain(status):<8}")
    print()


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def run_doctor(options: ConsoleOptions | None = None) -> int:
    """Execute all diagnostic checks and render a summary table.

    Returns
    -------
    int
        :data:`exit_codes.SUCCESS` when no check fails,
        :data:`exit_codes.GENERAL_ERROR` otherwise.
    """
    options = options or ConsoleOptions()
    checks = [
        _workspace_console_version_check(),
        _python_version_check(),
        _module_check("rich", "rich"),
        _module_check("questionary", "questionary"),
        _client_factory_check(options),
    ]

    has_failure = any("FAIL" in status for _, _, status in checks)

    rich_available = True
    try:
        from rich.table import Table
        from rich.text import Text
    except ModuleNotFoundError:
        rich_available = False

    if rich_available:
        table = Table(
            title="workspace-console doctor",
            show_header=True,
            header_style="bold cyan",
            border_style="dim",
        )
        table.add_column("Component", style="bold", min_width=18)
        table.add_column("Value", min_width=20)
        table.add_column("Status", justify="center", min_width=8)

        for label, value, status in checks:
            table.add_row(label, Text(value), status)

        console.print()
        console.print(table)
        console.print()
    else:
        _print_plain_doctor_table(checks)

    if not options.client_factory:
        console.print("No workspace client factory configured.", style="yellow")
        console.print("Pass --client-factory package.module:ClassName or set WORKSPACE_CLIENT_FACTORY.")
        console.print()

    if has_failure:
        console.print("Some checks failed.", style="bold red")
        return exit_codes.GENERAL_ERROR

    console.print("All checks passed.", style="bold green")
    return exit_codes.SUCCESS
