"""Text rendering for console output.

Pure transforms from models and raw mappings to printable strings.
Nothing here prints.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from typing import Any

from workspace_console.core.models import Call, Dn, User
from workspace_console.core.parsing import parse_call, parse_dn

NOT_INITIALIZED = "<not initialized>"
NONE_MARKER = "<none>"


def to_json(data: Any) -> str:
    """Pretty JSON, falling back to ``str()`` for non-serialisable values."""
    return json.dumps(data, indent=2, default=str)


# ---------------------------------------------------------------------------
# Calls
# ---------------------------------------------------------------------------

def call_summary(call: Call) -> str:
    """One-line summary: ``Id [..] state [..] type [..] participants [..]``."""
    participants = ", ".join(p.number for p in call.participants)
    summary = (
        f"Id [{call.id}] state [{call.state or ''}] type [{call.call_type or ''}]"
        f" participants [{participants}]"
    )
    if call.parent_conn_id:
        summary += f" parent [{call.parent_conn_id}]"
    return summary


# ---------------------------------------------------------------------------
# Agent / DN / user
# ---------------------------------------------------------------------------

def _on_off(flag: bool) -> str:
    return "on" if flag else "off"


def dn_state_line(dn: Dn) -> str:
    """Render a DN state change, including DND / forward flags when known."""
    line = (
        f"DnStateChanged: number [{dn.number or ''}] state [{dn.agent_state or ''}]"
        f" workMode [{dn.agent_work_mode or ''}]"
    )
    if dn.dnd is not None:
        line += f" dnd [{_on_off(dn.dnd)}]"
    if dn.forward_to:
        line += f" forwardTo [{dn.forward_to}]"
    return line + "."


def user_details(user: User) -> str:
    """Render the user profile; missing fields print as empty values."""
    return "\n".join(
        (
            "User details:",
            f"employeeId: {user.employee_id or ''}",
            f"agentId: {user.agent_id or ''}",
            f"defaultPlace: {user.default_place or ''}",
        )
    )


# ---------------------------------------------------------------------------
# Push events
# ---------------------------------------------------------------------------

def call_state_event_line(message: Mapping[str, Any]) -> str:
    """Render a ``CallStateChanged`` message.

    A message carrying ``previousConnId`` reports an id reassignment
    rather than a state change.
    """
    raw_call = message.get("call")
    call = parse_call(raw_call if isinstance(raw_call, Mapping) else {})
    previous = message.get("previousConnId")
    if previous:
        return f"Call [{previous}] id changed to [{call.id}]."
    return f"CallStateChanged: id [{call.id}] state [{call.state or ''}]."


def dn_state_event_line(message: Mapping[str, Any]) -> str:
    raw_dn = message.get("dn")
    return dn_state_line(parse_dn(raw_dn if isinstance(raw_dn, Mapping) else {}))


# ---------------------------------------------------------------------------
# Help
# ---------------------------------------------------------------------------

def help_lines(entries: Iterable[tuple[Iterable[str], str]]) -> list[str]:
    """Build help text from ``(names, usage_args)`` pairs."""
    lines = ["Workspace Api Console commands:"]
    for names, usage_args in entries:
        label = "|".join(names)
        lines.append(f"{label} {usage_args}".rstrip())
    lines.append("")
    lines.append(
        "Note: <id> parameter can be omitted for call operations "
        "if there is only one active call."
    )
    lines.append("")
    return lines
