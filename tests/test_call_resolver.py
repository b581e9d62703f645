"""Tests for implicit call-reference resolution (core/call_resolver.py).

Pure functions — no client, no I/O.
"""

from __future__ import annotations

from typing import Any

import pytest

from workspace_console.core.call_resolver import (
    resolve_call_id,
    resolve_call_id_and_parent,
    split_call_args,
)
from workspace_console.core.models import Call, CallPair


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------

def _call(call_id: str, **overrides: Any) -> Call:
    defaults: dict[str, Any] = {
        "id": call_id,
        "state": "Established",
        "call_type": "Inbound",
        "parent_conn_id": None,
    }
    defaults.update(overrides)
    return Call(**defaults)


# ---------------------------------------------------------------------------
# resolve_call_id
# ---------------------------------------------------------------------------

class TestResolveCallId:
    def test_no_calls_is_unresolved(self) -> None:
        assert resolve_call_id([], []) is None

    def test_single_call_is_inferred(self) -> None:
        assert resolve_call_id([], [_call("C1")]) == "C1"

    def test_two_calls_are_ambiguous(self) -> None:
        assert resolve_call_id([], [_call("C1"), _call("C2")]) is None

    def test_three_calls_are_ambiguous(self) -> None:
        calls = [_call("C1"), _call("C2"), _call("C3")]
        assert resolve_call_id([], calls) is None

    @pytest.mark.parametrize("count", [0, 1, 2, 3])
    def test_explicit_argument_always_wins(self, count: int) -> None:
        calls = [_call(f"C{i}") for i in range(count)]
        assert resolve_call_id(["C9"], calls) == "C9"

    def test_two_arguments_fall_back_to_inference(self) -> None:
        assert resolve_call_id(["x", "y"], [_call("C1")]) == "C1"


# ---------------------------------------------------------------------------
# resolve_call_id_and_parent
# ---------------------------------------------------------------------------

class TestResolveCallIdAndParent:
    def test_two_arguments_are_positional(self) -> None:
        assert resolve_call_id_and_parent(["C2", "C1"], []) == CallPair("C2", "C1")

    def test_consult_pair_is_inferred(self) -> None:
        calls = [_call("C1"), _call("C2", parent_conn_id="C1")]
        assert resolve_call_id_and_parent([], calls) == CallPair(
            conn_id="C2", parent_conn_id="C1",
        )

    def test_order_of_calls_does_not_matter(self) -> None:
        calls = [_call("C2", parent_conn_id="C1"), _call("C1")]
        assert resolve_call_id_and_parent([], calls) == CallPair("C2", "C1")

    def test_no_parent_is_unresolved(self) -> None:
        assert resolve_call_id_and_parent([], [_call("C1"), _call("C2")]) is None

    def test_both_with_parent_is_unresolved(self) -> None:
        calls = [_call("C1", parent_conn_id="C0"), _call("C2", parent_conn_id="C1")]
        assert resolve_call_id_and_parent([], calls) is None

    def test_single_call_is_unresolved(self) -> None:
        assert resolve_call_id_and_parent([], [_call("C2", parent_conn_id="C1")]) is None

    def test_three_calls_are_unresolved(self) -> None:
        calls = [_call("C1"), _call("C2", parent_conn_id="C1"), _call("C3")]
        assert resolve_call_id_and_parent([], calls) is None


# ---------------------------------------------------------------------------
# split_call_args
# ---------------------------------------------------------------------------

class TestSplitCallArgs:
    def test_explicit_id_and_operand(self) -> None:
        assert split_call_args(["C1", "5551234"], 1, []) == ("C1", ("5551234",))

    def test_lone_operand_resolves_single_call(self) -> None:
        assert split_call_args(["5551234"], 1, [_call("C1")]) == ("C1", ("5551234",))

    def test_lone_operand_without_unique_call(self) -> None:
        assert split_call_args(["5551234"], 1, []) is None
        assert split_call_args(["5551234"], 1, [_call("C1"), _call("C2")]) is None

    def test_missing_operand_is_unresolved(self) -> None:
        assert split_call_args([], 1, [_call("C1")]) is None

    def test_too_many_arguments_is_unresolved(self) -> None:
        assert split_call_args(["C1", "a", "b"], 1, [_call("C1")]) is None

    def test_two_operands(self) -> None:
        assert split_call_args(["k", "v"], 2, [_call("C1")]) == ("C1", ("k", "v"))
        assert split_call_args(["C7", "k", "v"], 2, []) == ("C7", ("k", "v"))
