"""Implicit call-reference resolution.

Operators may omit connection ids when the active-call set makes the
target obvious.  Both resolvers return ``None`` when they cannot decide;
callers must then print a usage hint instead of guessing further.
"""

from __future__ import annotations

from collections.abc import Sequence

from workspace_console.core.models import Call, CallPair


def resolve_call_id(args: Sequence[str], calls: Sequence[Call]) -> str | None:
    """Return the call id named by *args*, or the only active call's id.

    * Exactly one argument: used verbatim, regardless of active calls.
    * Otherwise: the id of the single active call, if there is exactly one.
    """
    if len(args) == 1:
        return args[0]
    if len(calls) != 1:
        return None
    return calls[0].id


def resolve_call_id_and_parent(
    args: Sequence[str],
    calls: Sequence[Call],
) -> CallPair | None:
    """Return the (conn id, parent conn id) pair for consult completion.

    * Exactly two arguments: taken positionally.
    * Otherwise: with exactly two active calls of which exactly one has a
      parent, that call and its parent.
    """
    if len(args) == 2:
        return CallPair(conn_id=args[0], parent_conn_id=args[1])
    if len(calls) != 2:
        return None

    pairs = [
        CallPair(conn_id=call.id, parent_conn_id=call.parent_conn_id)
        for call in calls
        if call.parent_conn_id is not None
    ]
    if len(pairs) != 1:
        return None
    return pairs[0]


def split_call_args(
    args: Sequence[str],
    operand_count: int,
    calls: Sequence[Call],
) -> tuple[str, tuple[str, ...]] | None:
    """Split *args* into a call id and *operand_count* trailing operands.

    ``[id, op1, ...]`` names the call explicitly; ``[op1, ...]`` resolves
    it from the active calls.  Any other length is unresolved.
    """
    if len(args) == operand_count + 1:
        return args[0], tuple(args[1:])
    if len(args) != operand_count:
        return None
    call_id = resolve_call_id((), calls)
    if call_id is None:
        return None
    return call_id, tuple(args)
