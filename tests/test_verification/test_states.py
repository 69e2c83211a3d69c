"""Tests for global states and transitions."""

from __future__ import annotations

import pytest

from cfsm_verifier.verification import Comm, GlobalState, LocalState, Move, moves_of


def _state(*labels: str) -> GlobalState:
    return GlobalState(tuple(LocalState(label) for label in labels))


class TestLocalState:
    """Tests for the in-flight phase."""

    def test_begin_and_finish(self):
        local = LocalState("s1")
        pending = local.begin()
        assert pending.in_flight
        assert pending != local
        assert pending.finish() == local

    def test_finish_requires_in_flight(self):
        with pytest.raises(AssertionError):
            LocalState("s1").finish()

    def test_label_ending_in_quote_is_not_in_flight(self):
        assert LocalState("s1'") != LocalState("s1").begin()

    def test_str(self):
        assert str(LocalState("s1")) == "s1"
        assert str(LocalState("s1", in_flight=True)) == "s1'"


class TestGlobalState:
    """Tests for value semantics and transition application."""

    def test_structural_equality(self):
        assert _state("a", "b") == _state("a", "b")
        assert hash(_state("a", "b")) == hash(_state("a", "b"))
        assert _state("a", "b") != _state("b", "a")

    def test_advance_builds_new_state(self):
        start = _state("s0", "t0", "u0")
        comm = Comm(
            "c",
            Move(0, LocalState("s0"), LocalState("s1")),
            Move(2, LocalState("u0"), LocalState("u1")),
        )
        after = start.advance(comm)
        assert after == _state("s1", "t0", "u1")
        assert start == _state("s0", "t0", "u0")

    def test_rewind_inverts_advance(self):
        start = _state("s0", "t0")
        move = Move(1, LocalState("t0"), LocalState("t1"))
        assert start.advance(move).rewind(move) == start

    def test_advance_from_wrong_state(self):
        move = Move(0, LocalState("s5"), LocalState("s6"))
        with pytest.raises(AssertionError):
            _state("s0").advance(move)

    def test_moves_of(self):
        send = Move(0, LocalState("a"), LocalState("b"))
        receive = Move(1, LocalState("c"), LocalState("d"))
        assert moves_of(Comm("x", send, receive)) == (send, receive)
        assert moves_of(send) == (send,)

    def test_moves_of_unknown(self):
        with pytest.raises(TypeError):
            moves_of("not a transition")  # type: ignore[arg-type]
