"""Tests for witness trace reconstruction and rendering."""

from __future__ import annotations

import pytest

from cfsm_verifier.verification import (
    Comm,
    GlobalState,
    LocalState,
    Move,
    TraceLayout,
    explore,
    format_state,
    format_trace,
    reconstruct_trace,
)


def _state(*labels: str) -> GlobalState:
    return GlobalState(tuple(LocalState(label) for label in labels))


class TestReconstructTrace:
    """Tests for walking predecessor records backward."""

    def test_initial_state_has_empty_trace(self):
        initial = _state("a")
        assert reconstruct_trace({initial: None}, initial) == []

    def test_forward_order(self):
        first = Move(0, LocalState("a"), LocalState("b"))
        second = Comm(
            "c",
            Move(0, LocalState("b"), LocalState("c")),
            Move(1, LocalState("x"), LocalState("y")),
        )
        s0 = _state("a", "x")
        s1 = s0.advance(first)
        s2 = s1.advance(second)
        predecessors = {s0: None, s1: first, s2: second}
        assert reconstruct_trace(predecessors, s2) == [first, second]

    def test_inconsistent_records_abort(self):
        bogus = Move(0, LocalState("q"), LocalState("r"))
        with pytest.raises(AssertionError):
            reconstruct_trace({_state("a"): bogus}, _state("a"))

    def test_trace_replays_to_deadlock(self, three_senders_network):
        result = explore(three_senders_network)
        state = GlobalState.initial(three_senders_network)
        for transition in result.trace:
            state = state.advance(transition)
        assert state == result.deadlock


class TestRendering:
    """Tests for aligned trace output."""

    def test_format_state(self, one_shot_network):
        result = explore(one_shot_network)
        assert format_state(one_shot_network, result.deadlock) == "P.s1 Q.s1"

    def test_format_comm(self, one_shot_network):
        result = explore(one_shot_network)
        assert format_trace(one_shot_network, result.trace) == ["P.(s0 c! s1)   Q.(s0 c? s1)"]

    def test_format_with_priorities(self, priority_network):
        result = explore(priority_network)
        lines = format_trace(priority_network, result.trace)
        assert lines == [
            "P.(s0  b! s1')   Q.(s0  b? s1')",
            "P.(s1' -> s1 )",
            "Q.(s1' -> s1 )",
        ]

    def test_in_flight_state_rendering(self, priority_network):
        state = GlobalState((LocalState("s1", in_flight=True), LocalState("s0")))
        assert format_state(priority_network, state) == "P.s1' Q.s0"

    def test_columns_align(self, three_senders_network):
        layout = TraceLayout(three_senders_network)
        assert layout.name_width == 2
        assert layout.state_width == 2
        assert layout.channel_width == 1
        result = explore(three_senders_network)
        lines = format_trace(three_senders_network, result.trace)
        assert len({len(line) for line in lines}) == 1
        assert lines[0].startswith("S0.(s0 c! s1)   ")
        assert lines[0].endswith(" R.(r  c? r )")

    def test_unknown_transition(self, one_shot_network):
        with pytest.raises(TypeError):
            TraceLayout(one_shot_network).format("bogus")  # type: ignore[arg-type]
