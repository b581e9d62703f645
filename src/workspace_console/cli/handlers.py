"""Command handlers — translate parsed arguments into client calls.

Each handler validates its own argument count, prints a ``Usage:`` hint
when the arguments (or the implicit call reference) cannot be resolved,
and otherwise makes exactly one client request (two for ``iac``).

Client errors are not caught here: they propagate to the console loop,
which reports them and returns to the prompt.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Sequence
from typing import Any

from workspace_console.cli.commands import Command, CommandOutcome, CommandTable, Handler
from workspace_console.cli.console import OutputSink
from workspace_console.cli.options import ConsoleOptions
from workspace_console.cli.render import (
    NONE_MARKER,
    NOT_INITIALIZED,
    call_summary,
    help_lines,
    to_json,
    user_details,
)
from workspace_console.core.call_resolver import (
    resolve_call_id,
    resolve_call_id_and_parent,
    split_call_args,
)
from workspace_console.core.protocols import LineReader
from workspace_console.core.session import WorkspaceSession

AFTER_CALL_WORK = "AfterCallWork"


def _user_data(key: str, value: str) -> list[dict[str, str]]:
    """Key-value list in the client's wire shape; values are always strings."""
    return [{"key": key, "type": "str", "value": value}]


class WorkspaceCommands:
    """The console's command catalog, bound to one session.

    Parameters
    ----------
    session:
        The owned workspace session.
    options:
        Start-up options (supplies defaults for ``ac`` and ``mc``).
    out:
        Output sink shared with the push-event printers.
    reader:
        The line reader; closed by ``exit``.
    """

    def __init__(
        self,
        session: WorkspaceSession,
        options: ConsoleOptions,
        out: OutputSink,
        reader: LineReader,
    ) -> None:
        self._session = session
        self._options = options
        self._out = out
        self._reader = reader
        self._table = self._build_table()

    @property
    def table(self) -> CommandTable:
        return self._table

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _write(self, message: str) -> None:
        self._out.print(message)

    def _usage(self, name: str) -> None:
        command = self._table.get(name)
        self._write(command.usage_line if command else f"Usage: {name}")

    def _voice_method(self, method_name: str) -> Callable[..., Awaitable[Any]]:
        return getattr(self._session.voice, method_name)

    # ------------------------------------------------------------------
    # Session
    # ------------------------------------------------------------------

    async def initialize(self, _args: Sequence[str] = ()) -> None:
        await self._session.initialize(progress_callback=self._write)
        self._write("Initialization complete.")

    async def destroy(self, _args: Sequence[str] = ()) -> None:
        self._write("Logging out and cleaning up...")
        await self._session.destroy()

    async def activate_channels(self, args: Sequence[str]) -> None:
        has_args = len(args) == 2
        if not has_args and not (self._options.default_agent_id and self._options.default_dn):
            self._usage("activate-channels")
            return

        if has_args:
            agent_id, dn = args[0], args[1]
        else:
            agent_id, dn = str(self._options.default_agent_id), str(self._options.default_dn)

        self._write(f"Sending activate-channels with agentId [{agent_id}] and dn [{dn}]...")
        await self._session.activate_channels(agent_id, dn)

    async def _initialize_and_activate(self, args: Sequence[str]) -> None:
        await self.initialize()
        await self.activate_channels(args)

    async def _toggle_debug(self, _args: Sequence[str]) -> None:
        enabled = self._session.toggle_debug()
        self._write(f"Debug enabled: {enabled}")

    # ------------------------------------------------------------------
    # State queries
    # ------------------------------------------------------------------

    async def _show_dn(self, _args: Sequence[str]) -> None:
        raw_dn = self._session.raw_dn()
        if raw_dn:
            self._write("DN:\n" + to_json(raw_dn))
        else:
            self._write(NOT_INITIALIZED)

    async def _show_calls(self, args: Sequence[str]) -> None:
        self._write("Calls:")
        raw_calls = self._session.raw_calls()
        if not raw_calls:
            self._write(NONE_MARKER)
            return
        if args:
            for raw_call in raw_calls:
                self._write(to_json(raw_call))
            return
        for call in self._session.active_calls():
            self._write(call_summary(call))

    async def _show_user(self, _args: Sequence[str]) -> None:
        user = self._session.user()
        self._write(user_details(user) if user else NOT_INITIALIZED)

    async def _show_config(self, _args: Sequence[str]) -> None:
        self._write(to_json(self._options.as_config_dict()))

    # ------------------------------------------------------------------
    # Agent state
    # ------------------------------------------------------------------

    def _agent_action(self, label: str, method_name: str) -> Handler:
        async def handler(_args: Sequence[str]) -> None:
            self._write(f"Sending {label}...")
            await self._voice_method(method_name)()

        return handler

    async def _not_ready(self, args: Sequence[str]) -> None:
        if len(args) > 1:
            self._usage("not-ready")
            return
        reason_code = args[0] if args else None
        if reason_code:
            self._write(f"Sending not-ready with reasonCode [{reason_code}]...")
        else:
            self._write("Sending not-ready...")
        await self._session.voice.not_ready(reason_code=reason_code)

    async def _after_call_work(self, _args: Sequence[str]) -> None:
        self._write("Sending not-ready with workMode [AfterCallWork]...")
        await self._session.voice.not_ready(work_mode=AFTER_CALL_WORK)

    async def _set_forward(self, args: Sequence[str]) -> None:
        if len(args) != 1:
            self._usage("set-forward")
            return
        self._write(f"Sending set-forward with destination [{args[0]}]...")
        await self._session.voice.set_forward(args[0])

    # ------------------------------------------------------------------
    # Call control
    # ------------------------------------------------------------------

    async def _make_call(self, args: Sequence[str]) -> None:
        if not args and not self._options.default_destination:
            self._usage("make-call")
            return

        destination = args[0] if args else str(self._options.default_destination)
        self._write(f"Sending make-call with destination [{destination}]...")
        await self._session.voice.make_call(destination)

    def _call_action(self, name: str, method_name: str) -> Handler:
        """Handler for ``<name> [id]`` commands."""

        async def handler(args: Sequence[str]) -> None:
            call_id = resolve_call_id(args, self._session.active_calls())
            if not call_id:
                self._usage(name)
                return
            self._write(f"Sending {name} for call [{call_id}]...")
            await self._voice_method(method_name)(call_id)

        return handler

    def _target_action(self, name: str, method_name: str, operand_label: str) -> Handler:
        """Handler for ``<name> [id] <operand>`` commands.

        A lone argument is the operand; the call id is then resolved
        from the active calls.
        """

        async def handler(args: Sequence[str]) -> None:
            resolved = split_call_args(args, 1, self._session.active_calls())
            if resolved is None:
                self._usage(name)
                return
            call_id, (operand,) = resolved
            self._write(
                f"Sending {name} for call [{call_id}] and {operand_label} [{operand}]..."
            )
            await self._voice_method(method_name)(call_id, operand)

        return handler

    def _pair_action(self, name: str, method_name: str) -> Handler:
        """Handler for ``<name> [id parentConnId]`` commands."""

        async def handler(args: Sequence[str]) -> None:
            pair = resolve_call_id_and_parent(args, self._session.active_calls())
            if pair is None:
                self._usage(name)
                return
            self._write(
                f"Sending {name} for call [{pair.conn_id}]"
                f" and parentConnId [{pair.parent_conn_id}]..."
            )
            await self._voice_method(method_name)(pair.conn_id, pair.parent_conn_id)

        return handler

    # ------------------------------------------------------------------
    # Call metadata
    # ------------------------------------------------------------------

    def _user_data_action(self, name: str, method_name: str) -> Handler:
        async def handler(args: Sequence[str]) -> None:
            resolved = split_call_args(args, 2, self._session.active_calls())
            if resolved is None:
                self._usage(name)
                return
            call_id, (key, value) = resolved
            self._write(f"Sending {name} for call [{call_id}] with [{key}={value}]...")
            await self._voice_method(method_name)(call_id, _user_data(key, value))

        return handler

    async def _delete_user_data_pair(self, args: Sequence[str]) -> None:
        resolved = split_call_args(args, 1, self._session.active_calls())
        if resolved is None:
            self._usage("delete-user-data-pair")
            return
        call_id, (key,) = resolved
        self._write(f"Sending delete-user-data-pair for call [{call_id}] and key [{key}]...")
        await self._session.voice.delete_user_data_pair(call_id, key)

    async def _send_user_event(self, args: Sequence[str]) -> None:
        if len(args) not in (2, 3):
            self._usage("send-user-event")
            return
        key, value = args[0], args[1]
        call_uuid = args[2] if len(args) == 3 else None
        if call_uuid:
            self._write(f"Sending user event [{key}={value}] for callUuid [{call_uuid}]...")
        else:
            self._write(f"Sending user event [{key}={value}]...")
        await self._session.voice.send_user_event(_user_data(key, value), call_uuid=call_uuid)

    # ------------------------------------------------------------------
    # Directory
    # ------------------------------------------------------------------

    async def _target_search(self, args: Sequence[str]) -> None:
        if len(args) not in (1, 2):
            self._usage("target-search")
            return
        search_term = args[0]
        limit: int | None = None
        if len(args) == 2:
            try:
                limit = int(args[1])
            except ValueError:
                self._usage("target-search")
                return

        self._write(f"Searching targets with searchTerm [{search_term}] and limit [{limit}]...")
        targets = await self._session.targets.search(search_term, limit)
        self._write("Search results:\n" + to_json(targets))

    # ------------------------------------------------------------------
    # Utility
    # ------------------------------------------------------------------

    async def _clear(self, _args: Sequence[str]) -> None:
        self._out.clear()

    async def _help(self, _args: Sequence[str]) -> None:
        entries = [(command.names, command.usage) for command in self._table]
        for line in help_lines(entries):
            self._write(line)

    async def exit(self, _args: Sequence[str] = ()) -> CommandOutcome:
        """Tear the session down, close input and stop the loop.

        A teardown failure is reported but does not change the outcome.
        """
        try:
            await self.destroy()
        except Exception as exc:  # noqa: BLE001
            self._write(f"Cleanup failed: {type(exc).__name__}: {exc}")
        self._reader.close()
        return CommandOutcome.EXIT

    # ------------------------------------------------------------------
    # Table
    # ------------------------------------------------------------------

    def _build_table(self) -> CommandTable:
        table = CommandTable()

        def add(name: str, handler: Handler, *aliases: str, usage: str = "") -> None:
            table.register(Command(name=name, handler=handler, aliases=aliases, usage=usage))

        # Session
        add("initialize", self.initialize, "init", "i")
        add("destroy", self.destroy, "logout", "l")
        add("activate-channels", self.activate_channels, "ac", usage="<agentId> <dn>")
        add("iac", self._initialize_and_activate, usage="<agentId> <dn>")
        add("debug", self._toggle_debug, "d")

        # State queries
        add("user", self._show_user, "u")
        add("dn", self._show_dn)
        add("calls", self._show_calls, usage="[full]")
        add("config", self._show_config)

        # Agent state
        add("ready", self._agent_action("ready", "ready"), "r")
        add("not-ready", self._not_ready, "nr", usage="[reasonCode]")
        add("after-call-work", self._after_call_work, "acw")
        add("dnd-on", self._agent_action("dnd-on", "dnd_on"))
        add("dnd-off", self._agent_action("dnd-off", "dnd_off"))
        add("set-forward", self._set_forward, "fwd", usage="<destination>")
        add("cancel-forward", self._agent_action("cancel-forward", "cancel_forward"), "cfwd")
        add("voice-login", self._agent_action("voice-login", "login"), "vl")
        add("voice-logout", self._agent_action("voice-logout", "logout"), "vlo")

        # Call control
        add("make-call", self._make_call, "mc", usage="<destination>")
        add("answer", self._call_action("answer", "answer_call"), "a", usage="<id>")
        add("hold", self._call_action("hold", "hold_call"), "h", usage="<id>")
        add("retrieve", self._call_action("retrieve", "retrieve_call"), "ret", usage="<id>")
        add("release", self._call_action("release", "release_call"), "rel", usage="<id>")
        add("clear-call", self._call_action("clear-call", "clear_call"), "cl", usage="<id>")
        add(
            "redirect",
            self._target_action("redirect", "redirect_call", "destination"),
            "red",
            usage="<id> <destination>",
        )

        # Multi-party
        add(
            "initiate-conference",
            self._target_action("initiate-conference", "initiate_conference", "destination"),
            "ic",
            usage="<id> <destination>",
        )
        add(
            "complete-conference",
            self._pair_action("complete-conference", "complete_conference"),
            "cc",
            usage="<id> <parentConnId>",
        )
        add(
            "initiate-transfer",
            self._target_action("initiate-transfer", "initiate_transfer", "destination"),
            "it",
            usage="<id> <destination>",
        )
        add(
            "complete-transfer",
            self._pair_action("complete-transfer", "complete_transfer"),
            "ct",
            usage="<id> <parentConnId>",
        )
        add(
            "single-step-transfer",
            self._target_action("single-step-transfer", "single_step_transfer", "destination"),
            "sst",
            usage="<id> <destination>",
        )
        add(
            "single-step-conference",
            self._target_action(
                "single-step-conference", "single_step_conference", "destination",
            ),
            "ssc",
            usage="<id> <destination>",
        )
        add(
            "delete-from-conference",
            self._target_action("delete-from-conference", "delete_from_conference", "dnToDrop"),
            "dfc",
            usage="<id> <dnToDrop>",
        )
        add(
            "alternate",
            self._target_action("alternate", "alternate_calls", "heldConnId"),
            "alt",
            usage="<id> <heldConnId>",
        )
        add(
            "merge",
            self._target_action("merge", "merge_calls", "otherConnId"),
            usage="<id> <otherConnId>",
        )
        add(
            "reconnect",
            self._target_action("reconnect", "reconnect_call", "heldConnId"),
            usage="<id> <heldConnId>",
        )

        # Call metadata
        add(
            "attach-user-data",
            self._user_data_action("attach-user-data", "attach_user_data"),
            "aud",
            usage="<id> <key> <value>",
        )
        add(
            "update-user-data",
            self._user_data_action("update-user-data", "update_user_data"),
            "uud",
            usage="<id> <key> <value>",
        )
        add("delete-user-data-pair", self._delete_user_data_pair, "dud", usage="<id> <key>")
        add(
            "send-dtmf",
            self._target_action("send-dtmf", "send_dtmf", "digits"),
            "dtmf",
            usage="<id> <digits>",
        )
        add("start-recording", self._call_action("start-recording", "start_recording"), "sr", usage="<id>")
        add("pause-recording", self._call_action("pause-recording", "pause_recording"), "pr", usage="<id>")
        add("resume-recording", self._call_action("resume-recording", "resume_recording"), "rr", usage="<id>")
        add("stop-recording", self._call_action("stop-recording", "stop_recording"), "spr", usage="<id>")
        add("send-user-event", self._send_user_event, "ue", usage="<key> <value> [callUuid]")

        # Directory
        add("target-search", self._target_search, "ts", usage="<searchTerm> [limit]")

        # Utility
        add("clear", self._clear)
        add("help", self._help, "?")
        add("exit", self.exit, "x")

        return table
