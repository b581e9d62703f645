"""Core layer — call resolution, parsing and the owned client session.

Rules
-----
* No ``print()`` calls.
* No imports from ``cli`` or ``infra``.
* The workspace client is reached only through ``core.protocols``.
"""

from workspace_console.core.call_resolver import (
    resolve_call_id,
    resolve_call_id_and_parent,
    split_call_args,
)
from workspace_console.core.command_line import parse_input
from workspace_console.core.models import Call, CallPair, Dn, ParsedCommand, Participant, User
from workspace_console.core.protocols import LineReader, TargetsApi, VoiceApi, WorkspaceClient
from workspace_console.core.session import WorkspaceSession

__all__: list[str] = [
    "Call",
    "CallPair",
    "Dn",
    "LineReader",
    "ParsedCommand",
    "Participant",
    "TargetsApi",
    "User",
    "VoiceApi",
    "WorkspaceClient",
    "WorkspaceSession",
    "parse_input",
    "resolve_call_id",
    "resolve_call_id_and_parent",
    "split_call_args",
]
