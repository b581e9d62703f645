"""Tests for the console loop (cli/repl.py).

The loop runs against a scripted reader and a recorder.  These tests
pin the loop-level guarantees: blank input never dispatches, a failing
command never ends the session, ``exit`` closes input exactly once, and
push events print whenever the client fires them.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import Any
from unittest.mock import MagicMock

import pytest

from workspace_console.cli.commands import CommandOutcome
from workspace_console.cli.options import ConsoleOptions
from workspace_console.cli.repl import BANNER, PROMPT
from workspace_console.core.protocols import CALL_STATE_CHANGED, DN_STATE_CHANGED


MakeClient = Callable[..., MagicMock]
ONE_CALL = [{"id": "C1", "state": "Established"}]


def _registered_handler(client: MagicMock, event_name: str) -> Callable[..., None]:
    for registered in client.on.call_args_list:
        name, handler = registered.args
        if name == event_name:
            return handler
    raise AssertionError(f"{event_name} was not registered")


# ---------------------------------------------------------------------------
# Prompt loop
# ---------------------------------------------------------------------------

class TestLoop:
    def test_banner_and_prompt(
        self, build_console: Any, make_client: MakeClient, recorder: Any,
    ) -> None:
        workspace_console, reader = build_console(make_client(), ["exit"])
        asyncio.run(workspace_console.run())
        assert recorder.lines[:2] == [BANNER, ""]
        assert reader.prompts == [PROMPT]

    @pytest.mark.parametrize("blank", ["", " ", "   \t  "])
    def test_blank_lines_do_not_dispatch(
        self, build_console: Any, make_client: MakeClient, recorder: Any, blank: str,
    ) -> None:
        client = make_client(calls=ONE_CALL)
        workspace_console, reader = build_console(client, [blank, blank, "exit"])
        asyncio.run(workspace_console.run())
        assert reader.prompts == [PROMPT, PROMPT, PROMPT]
        assert client.voice.mock_calls == []
        assert recorder.lines == [BANNER, "", "Logging out and cleaning up..."]

    def test_failed_command_does_not_end_session(
        self, build_console: Any, make_client: MakeClient, recorder: Any,
    ) -> None:
        client = make_client(calls=ONE_CALL)
        client.voice.hold_call.side_effect = RuntimeError("Invalid call state")
        workspace_console, reader = build_console(client, ["hold", "release", "exit"])

        asyncio.run(workspace_console.run())

        assert "Command failed!" in recorder.lines
        assert "RuntimeError: Invalid call state" in recorder.lines
        client.voice.release_call.assert_awaited_once_with("C1")
        assert len(reader.prompts) == 3

    def test_failure_label_is_styled(
        self, build_console: Any, make_client: MakeClient, recorder: Any,
    ) -> None:
        client = make_client()
        client.voice.ready.side_effect = ValueError("not logged in")
        workspace_console, _ = build_console(client)

        outcome = asyncio.run(workspace_console.dispatch("ready"))

        assert outcome is CommandOutcome.CONTINUE
        index = recorder.lines.index("Command failed!")
        assert recorder.styles[index] == "bold red"

    def test_exit_closes_input_once_and_stops_prompting(
        self, build_console: Any, make_client: MakeClient,
    ) -> None:
        client = make_client(initialized=True)
        workspace_console, reader = build_console(client, ["x", "ready", "calls"])

        asyncio.run(workspace_console.run())

        assert reader.close_count == 1
        assert reader.prompts == [PROMPT]
        client.destroy.assert_awaited_once()
        client.voice.ready.assert_not_awaited()

    def test_exit_teardown_failure_still_exits(
        self, build_console: Any, make_client: MakeClient, recorder: Any,
    ) -> None:
        client = make_client(initialized=True)
        client.destroy.side_effect = ConnectionError("socket closed")
        workspace_console, reader = build_console(client, ["exit", "ready"])

        asyncio.run(workspace_console.run())

        assert reader.close_count == 1
        assert reader.prompts == [PROMPT]
        assert any("socket closed" in line for line in recorder.lines)

    def test_end_of_input_behaves_like_exit(
        self, build_console: Any, make_client: MakeClient,
    ) -> None:
        client = make_client(initialized=True)
        workspace_console, reader = build_console(client, ["calls"])

        asyncio.run(workspace_console.run())

        assert reader.close_count == 1
        client.destroy.assert_awaited_once()

    def test_read_failure_propagates(
        self, build_console: Any, make_client: MakeClient,
    ) -> None:
        workspace_console, reader = build_console(make_client())

        async def _broken(_prompt: str) -> str:
            raise OSError("stdin gone")

        reader.read_line = _broken
        with pytest.raises(OSError, match="stdin gone"):
            asyncio.run(workspace_console.run())


# ---------------------------------------------------------------------------
# Auto-login
# ---------------------------------------------------------------------------

class TestAutoLogin:
    def test_disabled_by_default(
        self, build_console: Any, make_client: MakeClient,
    ) -> None:
        client = make_client()
        workspace_console, _ = build_console(client, ["exit"])
        asyncio.run(workspace_console.run())
        client.initialize.assert_not_awaited()

    def test_initializes_and_activates(
        self, build_console: Any, make_client: MakeClient, recorder: Any,
    ) -> None:
        client = make_client()
        options = ConsoleOptions(auto_login=True, default_agent_id="agent1", default_dn="5001")
        workspace_console, _ = build_console(client, ["exit"], options)

        asyncio.run(workspace_console.run())

        assert "autoLogin is true..." in recorder.lines
        client.initialize.assert_awaited_once()
        client.activate_channels.assert_awaited_once_with("agent1", "5001")

    def test_failure_is_reported_and_loop_starts(
        self, build_console: Any, make_client: MakeClient, recorder: Any,
    ) -> None:
        client = make_client(calls=ONE_CALL)
        client.authenticate.side_effect = PermissionError("bad credentials")
        options = ConsoleOptions(auto_login=True, default_agent_id="a", default_dn="d")
        workspace_console, reader = build_console(client, ["answer", "exit"], options)

        asyncio.run(workspace_console.run())

        assert "autoLogin failed!" in recorder.lines
        assert "PermissionError: bad credentials" in recorder.lines
        client.activate_channels.assert_not_awaited()
        client.voice.answer_call.assert_awaited_once_with("C1")
        assert len(reader.prompts) == 2

    def test_uses_preissued_token(
        self, build_console: Any, make_client: MakeClient,
    ) -> None:
        client = make_client()
        options = ConsoleOptions(
            auto_login=True, token="tok", default_agent_id="a", default_dn="d",
        )
        workspace_console, _ = build_console(client, ["exit"], options)

        asyncio.run(workspace_console.run())

        client.authenticate.assert_not_awaited()
        client.initialize.assert_awaited_once_with(token="tok")


# ---------------------------------------------------------------------------
# Push events
# ---------------------------------------------------------------------------

class TestPushEvents:
    def test_handlers_registered_at_construction(
        self, build_console: Any, make_client: MakeClient,
    ) -> None:
        client = make_client()
        build_console(client)
        names = [registered.args[0] for registered in client.on.call_args_list]
        assert names == [CALL_STATE_CHANGED, DN_STATE_CHANGED]

    def test_call_state_changed(
        self, build_console: Any, make_client: MakeClient, recorder: Any,
    ) -> None:
        client = make_client()
        build_console(client)
        handler = _registered_handler(client, CALL_STATE_CHANGED)

        handler({"call": {"id": "C1", "state": "Ringing"}})
        handler({"call": {"id": "C2"}, "previousConnId": "C1"})

        assert recorder.lines == [
            "CallStateChanged: id [C1] state [Ringing].",
            "Call [C1] id changed to [C2].",
        ]

    def test_dn_state_changed(
        self, build_console: Any, make_client: MakeClient, recorder: Any,
    ) -> None:
        client = make_client()
        build_console(client)
        handler = _registered_handler(client, DN_STATE_CHANGED)

        handler({"dn": {"number": "5001", "agentState": "NotReady",
                        "agentWorkMode": "AfterCallWork", "dnd": False}})

        assert recorder.lines == [
            "DnStateChanged: number [5001] state [NotReady]"
            " workMode [AfterCallWork] dnd [off]."
        ]

    def test_events_print_between_commands(
        self, build_console: Any, make_client: MakeClient, recorder: Any,
    ) -> None:
        client = make_client(calls=ONE_CALL)
        workspace_console, _ = build_console(client, ["answer", "exit"])
        handler = _registered_handler(client, CALL_STATE_CHANGED)
        client.voice.answer_call.side_effect = lambda conn_id: handler(
            {"call": {"id": conn_id, "state": "Established"}},
        )

        asyncio.run(workspace_console.run())

        sending = recorder.lines.index("Sending answer for call [C1]...")
        assert recorder.lines[sending + 1] == "CallStateChanged: id [C1] state [Established]."

    def test_debug_option_enables_client_debug(
        self, build_console: Any, make_client: MakeClient,
    ) -> None:
        client = make_client()
        build_console(client, options=ConsoleOptions(debug=True))
        client.set_debug_enabled.assert_called_once_with(True)
