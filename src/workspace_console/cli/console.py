"""CLI console helpers with optional Rich support.

This module intentionally avoids module-level imports of optional UI
dependencies so bootstrap paths (``--help``, ``--version``) remain
functional even when Rich is not installed.

Console output goes to **stdout**: it is the product of the program,
not diagnostics.  Push-event callbacks may print from outside the
prompt loop, so every write is a single append.
"""

from __future__ import annotations

from typing import Any, Protocol

from workspace_console.exceptions import EnvironmentError

_RESET_TERMINAL = "\x1bc"


class OutputSink(Protocol):
    """Anything the console loop can print to."""

    def print(self, *objects: object, style: str | None = None, markup: bool = False) -> None:
        ...  # pragma: no cover

    def clear(self) -> None:
        ...  # pragma: no cover


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
    """Create a Rich console instance targeting stdout.

    Highlighting and emoji codes are off: collaborator values such as
    ``:smile:`` or ``"C1"`` are printed exactly as received.
    """
    console_class = _load_rich_console_class()
    return console_class(highlight=False, emoji=False)


class _ConsoleProxy:
    """Minimal ``print``-compatible proxy with Rich fallback.

    Text is printed with markup disabled unless the caller opts in, so
    bracketed ids such as ``[abc]`` are never read as style tags.
    """

    def print(self, *objects: object, style: str | None = None, markup: bool = False) -> None:
        """Render with Rich when available, else plain stdout print."""
        try:
            rich_console = get_rich_console()
        except EnvironmentError:
            print(*objects)
            return
        rich_console.print(*objects, style=style, markup=markup, soft_wrap=True)

    def clear(self) -> None:
        """Clear the terminal."""
        try:
            rich_console = get_rich_console()
        except EnvironmentError:
            print(_RESET_TERMINAL, end="", flush=True)
            return
        rich_console.clear()


console = _ConsoleProxy()
