"""Interactive line input for the console loop.

Wraps a questionary text prompt so the loop can ``await`` the next
operator command.  ``patch_stdout`` keeps push-event output printed
while the prompt is open above the input line.
"""

from __future__ import annotations

from typing import Any

from workspace_console.exceptions import EnvironmentError


def _import_questionary() -> Any:
    """Import questionary lazily for interactive input."""
    try:
        import questionary
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "questionary is not installed. Install with: pip install questionary",
        ) from exc
    return questionary


class QuestionaryLineReader:
    """:class:`~workspace_console.core.protocols.LineReader` backed by questionary.

    ``unsafe_ask_async`` is used so Ctrl+C surfaces as
    ``KeyboardInterrupt`` and Ctrl+D as ``EOFError`` rather than being
    turned into a ``None`` answer.
    """

    def __init__(self) -> None:
        self._questionary: Any = _import_questionary()
        self._closed: bool = False

    @property
    def closed(self) -> bool:
        return self._closed

    async def read_line(self, prompt: str) -> str:
        if self._closed:
            raise EOFError("input closed")
        answer = await self._questionary.text(prompt, qmark="").unsafe_ask_async(
            patch_stdout=True,
        )
        return answer or ""

    def close(self) -> None:
        self._closed = True
