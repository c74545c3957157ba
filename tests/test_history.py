"""Tests for history.py — completion, indexing, pair index, process ordering."""

from __future__ import annotations

import pytest

from linear_report.errors import ConfigurationError
from linear_report.history import (
    Operation,
    OpType,
    complete,
    fail,
    index,
    info,
    invoke,
    ok,
    pair_index,
    processes,
    sort_processes,
)

# ─── complete ─────────────────────────────────────────────────────────────────


class TestComplete:
    def test_ok_value_copied_to_invocation(self):
        """A read's result is filled in on its invocation."""
        h = complete([invoke(0, "read"), ok(0, "read", 3)])
        assert h[0] == invoke(0, "read", 3)
        assert h[1] == ok(0, "read", 3)

    def test_fail_leaves_invocation_alone(self):
        """Failed completions don't overwrite the invoked value."""
        h = complete([invoke(0, "cas", (1, 2)), fail(0, "cas", None)])
        assert h[0].value == (1, 2)

    def test_pending_invocation_gets_info_completion(self):
        """Unfinished calls are closed by a synthesized info op at the end."""
        h = complete([invoke(0, "write", 1), invoke(1, "write", 2), ok(1, "write", 2)])
        assert len(h) == 4
        assert h[-1] == info(0, "write", 1)

    def test_already_complete_history_unchanged(self):
        """Completing a completed history is a no-op."""
        h = [invoke(0, "write", 1), ok(0, "write", 1), invoke(1, "read", 1), info(1, "read", None)]
        assert complete(h) == h

    def test_orphan_completion_raises(self):
        """A completion with no invocation is malformed."""
        with pytest.raises(ConfigurationError):
            complete([ok(0, "read", 1)])

    def test_double_invocation_raises(self):
        """A process can't invoke twice without completing."""
        with pytest.raises(ConfigurationError):
            complete([invoke(0, "read"), invoke(0, "read")])


# ─── index / pair_index ───────────────────────────────────────────────────────


class TestPairIndex:
    def test_index_assigns_positions(self):
        """Indices are the ops' positions."""
        h = index([invoke(0, "write", 1), ok(0, "write", 1)])
        assert [op.index for op in h] == [0, 1]

    def test_invocation_and_completion(self):
        """Each side of a pair finds the other; ops find themselves."""
        h = index(complete([invoke(0, "write", 1), invoke(1, "read"), ok(0, "write", 1), ok(1, "read", 1)]))
        pairs = pair_index(h)
        assert pairs.completion(h[0]) == h[2]
        assert pairs.invocation(h[2]) == h[0]
        assert pairs.completion(h[1]) == h[3]
        assert pairs.invocation(h[1]) is h[1]
        assert pairs.completion(h[3]) is h[3]

    def test_none_passes_through(self):
        """Looking up None gives None."""
        pairs = pair_index([])
        assert pairs.invocation(None) is None
        assert pairs.completion(None) is None

    def test_uncompleted_invocation(self):
        """Without completion, an invocation has no partner."""
        h = index([invoke(0, "write", 1)])
        assert pair_index(h).completion(h[0]) is None

    def test_unindexed_history_raises(self):
        """Pairing needs indices."""
        with pytest.raises(ConfigurationError):
            pair_index([invoke(0, "write", 1), ok(0, "write", 1)])

    def test_unindexed_lookup_raises(self):
        """Looking up an unindexed op is rejected."""
        pairs = pair_index(index([invoke(0, "write", 1), ok(0, "write", 1)]))
        with pytest.raises(ConfigurationError):
            pairs.completion(invoke(0, "write", 1))


# ─── processes ────────────────────────────────────────────────────────────────


class TestProcesses:
    def test_distinct(self):
        """Each process is listed once."""
        ops = [invoke(1, "read"), invoke(0, "read"), invoke(1, "write", 2)]
        assert processes(ops) == {0, 1}

    def test_numeric_before_named(self):
        """Integers sort numerically; named processes like nemesis come last."""
        assert sort_processes({10, "nemesis", 2, 0}) == [0, 2, 10, "nemesis"]

    def test_unrecognized_process_raises(self):
        """Tuples are not processes."""
        with pytest.raises(ConfigurationError):
            sort_processes({0, (1, 2)})

    def test_bool_is_not_a_process(self):
        """Booleans are not numeric processes."""
        with pytest.raises(ConfigurationError):
            sort_processes({True})

    def test_operation_defaults(self):
        """New operations have no value and no index."""
        op = Operation(process=0, type=OpType.INVOKE, f="read")
        assert op.value is None
        assert op.index is None
        assert op.is_invoke
