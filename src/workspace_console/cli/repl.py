"""The interactive console loop.

Flow
----
1. Print the banner and register the two push-event printers.
2. Auto-login when configured; failures are reported, never fatal.
3. Prompt → parse → dispatch → print, strictly one command at a time.

Any exception raised by a command is reported as ``Command failed!``
and the loop carries on.  Only ``exit``, end of input, or a failure to
read input ends it.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from workspace_console.cli.commands import CommandOutcome
from workspace_console.cli.console import OutputSink
from workspace_console.cli.handlers import WorkspaceCommands
from workspace_console.cli.options import ConsoleOptions
from workspace_console.cli.render import call_state_event_line, dn_state_event_line
from workspace_console.core.command_line import parse_input
from workspace_console.core.protocols import LineReader
from workspace_console.core.session import WorkspaceSession

PROMPT = "cmd>"
BANNER = "Workspace Api Console"


def _describe_error(exc: BaseException) -> str:
    return f"{type(exc).__name__}: {exc}"


class WorkspaceConsole:
    """Read-dispatch-print loop over one :class:`WorkspaceSession`.

    Parameters
    ----------
    session:
        The owned workspace session.
    options:
        Start-up options.
    reader:
        Source of operator input; closed on ``exit``.
    out:
        Output sink for command results and push events.
    """

    def __init__(
        self,
        session: WorkspaceSession,
        options: ConsoleOptions,
        reader: LineReader,
        out: OutputSink,
    ) -> None:
        self._session = session
        self._options = options
        self._reader = reader
        self._out = out
        self._commands = WorkspaceCommands(session, options, out, reader)

        session.subscribe(self._on_call_state_changed, self._on_dn_state_changed)
        if options.debug:
            session.client.set_debug_enabled(True)

    @property
    def commands(self) -> WorkspaceCommands:
        return self._commands

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def _write(self, message: str) -> None:
        self._out.print(message)

    def _write_failure(self, label: str, exc: BaseException) -> None:
        self._out.print(label, style="bold red")
        self._write(_describe_error(exc))

    # ------------------------------------------------------------------
    # Push events
    # ------------------------------------------------------------------

    def _on_call_state_changed(self, message: Mapping[str, Any]) -> None:
        self._write(call_state_event_line(message))

    def _on_dn_state_changed(self, message: Mapping[str, Any]) -> None:
        self._write(dn_state_event_line(message))

    # ------------------------------------------------------------------
    # Start-up
    # ------------------------------------------------------------------

    async def auto_login(self) -> None:
        """Initialize and activate channels when ``auto_login`` is set."""
        if not self._options.auto_login:
            return
        self._write("autoLogin is true...")
        try:
            await self._commands.initialize()
            await self._commands.activate_channels(())
        except Exception as exc:  # noqa: BLE001
            self._write_failure("autoLogin failed!", exc)

    # ------------------------------------------------------------------
    # Loop
    # ------------------------------------------------------------------

    async def dispatch(self, line: str) -> CommandOutcome:
        """Run one input line; errors are reported, never raised."""
        parsed = parse_input(line)
        if parsed is None:
            return CommandOutcome.CONTINUE

        command = self._commands.table.get(parsed.name)
        if command is None:
            return CommandOutcome.CONTINUE

        try:
            return await command.execute(parsed.args)
        except Exception as exc:  # noqa: BLE001
            self._write_failure("Command failed!", exc)
            return CommandOutcome.CONTINUE

    async def run(self) -> None:
        """Run until ``exit`` or end of input."""
        self._write(BANNER)
        self._write("")

        await self.auto_login()

        while True:
            try:
                line = await self._reader.read_line(PROMPT)
            except EOFError:
                await self._commands.exit()
                return

            if await self.dispatch(line) is CommandOutcome.EXIT:
                return
