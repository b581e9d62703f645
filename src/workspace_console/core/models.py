"""Domain models for workspace-console.

All models are **frozen** dataclasses — immutable snapshots of entities
owned by the workspace client.  The console reads them, never creates or
mutates the originals.
"""

from __future__ import annotations

from dataclasses import dataclass


# ---------------------------------------------------------------------------
# Calls
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Participant:
    """One party on a call."""

    number: str
    """Dialable number of the participant."""


@dataclass(frozen=True, slots=True)
class Call:
    """Snapshot of one active call leg."""

    id: str
    """Connection id of this leg."""

    state: str | None
    """Call state as reported by the client (e.g. ``Established``)."""

    call_type: str | None
    """Call type (e.g. ``Inbound``, ``Consult``)."""

    parent_conn_id: str | None
    """Connection id of the parent leg in a consult/transfer chain."""

    participants: tuple[Participant, ...] = ()


@dataclass(frozen=True, slots=True)
class CallPair:
    """A child connection and the parent it belongs to."""

    conn_id: str
    parent_conn_id: str


# ---------------------------------------------------------------------------
# Agent / DN
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Dn:
    """Snapshot of the agent's directory number and routing state."""

    number: str | None
    agent_state: str | None
    agent_work_mode: str | None
    dnd: bool | None = None
    """Do-not-disturb flag, or ``None`` when the client does not report it."""

    forward_to: str | None = None
    """Active call-forward target, if any."""


@dataclass(frozen=True, slots=True)
class User:
    """Profile of the authenticated user."""

    employee_id: str | None
    agent_id: str | None
    default_place: str | None


# ---------------------------------------------------------------------------
# Operator input
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ParsedCommand:
    """A tokenized operator command line."""

    name: str
    """Lower-cased command name (first token)."""

    args: tuple[str, ...] = ()
    """Remaining positional tokens, case preserved."""
