"""Shared pytest fixtures and configuration for the workspace-console test suite.

Guidelines
----------
* No network access and no real workspace client in any test.
* The client is faked with ``MagicMock`` / ``AsyncMock`` at the
  protocol boundary.
* Operator input comes from a scripted reader; output goes to a
  recorder instead of a terminal.
* Coroutines are driven with ``asyncio.run`` from synchronous tests.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from workspace_console.cli.options import ConsoleOptions
from workspace_console.cli.repl import WorkspaceConsole
from workspace_console.core.session import WorkspaceSession


class Recorder:
    """Output sink that keeps every printed line."""

    def __init__(self) -> None:
        self.lines: list[str] = []
        self.styles: list[str | None] = []
        self.clears: int = 0

    def print(self, *objects: object, style: str | None = None, markup: bool = False) -> None:
        self.lines.append(" ".join(str(obj) for obj in objects))
        self.styles.append(style)

    def clear(self) -> None:
        self.clears += 1

    @property
    def text(self) -> str:
        return "\n".join(self.lines)


class ScriptedReader:
    """Line reader that replays a fixed script, then reports end of input."""

    def __init__(self, lines: Iterable[str] = ()) -> None:
        self._lines: list[str] = list(lines)
        self.prompts: list[str] = []
        self.close_count: int = 0

    async def read_line(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self._lines:
            raise EOFError("script exhausted")
        return self._lines.pop(0)

    def close(self) -> None:
        self.close_count += 1


def _make_client(
    *,
    calls: Iterable[dict[str, Any]] = (),
    dn: dict[str, Any] | None = None,
    user: dict[str, Any] | None = None,
    initialized: bool = False,
) -> MagicMock:
    client = MagicMock()
    client.initialized = initialized
    client.user = user
    client.voice = AsyncMock()
    client.voice.calls = {f"{index}:{call.get('id', '')}": call for index, call in enumerate(calls)}
    client.voice.dn = dn
    client.targets = AsyncMock()
    client.authenticate = AsyncMock(return_value="token-123")
    client.initialize = AsyncMock()
    client.destroy = AsyncMock()
    client.activate_channels = AsyncMock()
    client.is_debug_enabled.return_value = False
    return client


@pytest.fixture
def make_client() -> Callable[..., MagicMock]:
    """Factory for a fake workspace client."""
    return _make_client


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()


@pytest.fixture
def build_console(
    recorder: Recorder,
) -> Callable[..., tuple[WorkspaceConsole, ScriptedReader]]:
    """Factory wiring a fake client, scripted reader and recorder together."""

    def _build(
        client: MagicMock,
        lines: Iterable[str] = (),
        options: ConsoleOptions | None = None,
    ) -> tuple[WorkspaceConsole, ScriptedReader]:
        options = options or ConsoleOptions()
        reader = ScriptedReader(lines)
        session = WorkspaceSession(client, token=options.token)
        return WorkspaceConsole(session, options, reader, recorder), reader

    return _build
