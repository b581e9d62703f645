"""Raw-mapping → domain-model parsers.

The workspace client hands out JSON-like mappings using the wire field
names (``callType``, ``parentConnId`` ...).  These helpers convert them
into the frozen models of :mod:`workspace_console.core.models`.

Guarantees
----------
* Pure — no I/O, no ``print()``.
* Malformed entries are skipped, never raised on.
* Missing fields become ``None`` (or an empty tuple).
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from workspace_console.core.models import Call, Dn, Participant, User


def _opt_str(raw: Mapping[str, Any], key: str) -> str | None:
    """Return ``raw[key]`` as ``str``, or ``None`` when absent or empty."""
    value = raw.get(key)
    if value is None or value == "":
        return None
    return str(value)


_FALSE_STRINGS = frozenset({"", "0", "false", "no", "off"})


def _opt_bool(raw: Mapping[str, Any], key: str) -> bool | None:
    """Return ``raw[key]`` as ``bool``; wire strings like ``"false"`` are off."""
    value = raw.get(key)
    if value is None:
        return None
    if isinstance(value, str):
        return value.strip().lower() not in _FALSE_STRINGS
    return bool(value)


def parse_participants(raw: object) -> tuple[Participant, ...]:
    """Parse a participant list, skipping entries without a number."""
    if not isinstance(raw, list):
        return ()
    participants: list[Participant] = []
    for entry in raw:
        if not isinstance(entry, Mapping):
            continue
        number = _opt_str(entry, "number")
        if number is not None:
            participants.append(Participant(number=number))
    return tuple(participants)


def parse_call(raw: Mapping[str, Any]) -> Call:
    """Convert one raw call mapping into a :class:`Call`."""
    return Call(
        id=str(raw.get("id", "")),
        state=_opt_str(raw, "state"),
        call_type=_opt_str(raw, "callType"),
        parent_conn_id=_opt_str(raw, "parentConnId"),
        participants=parse_participants(raw.get("participants")),
    )


def parse_calls(raw_calls: Iterable[object]) -> list[Call]:
    """Parse every well-formed call mapping in *raw_calls*, keeping order.

    Entries without a connection id cannot be addressed and are skipped.
    """
    return [
        parse_call(entry)
        for entry in raw_calls
        if isinstance(entry, Mapping) and _opt_str(entry, "id") is not None
    ]


def parse_dn(raw: Mapping[str, Any]) -> Dn:
    """Convert a raw DN mapping into a :class:`Dn`."""
    return Dn(
        number=_opt_str(raw, "number"),
        agent_state=_opt_str(raw, "agentState"),
        agent_work_mode=_opt_str(raw, "agentWorkMode"),
        dnd=_opt_bool(raw, "dnd"),
        forward_to=_opt_str(raw, "forwardTo"),
    )


def parse_user(raw: Mapping[str, Any]) -> User:
    """Convert a raw user-profile mapping into a :class:`User`."""
    return User(
        employee_id=_opt_str(raw, "employeeId"),
        agent_id=_opt_str(raw, "agentId"),
        default_place=_opt_str(raw, "defaultPlace"),
    )
