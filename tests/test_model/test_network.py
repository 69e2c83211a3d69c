"""Tests for actions, processes and networks."""

from __future__ import annotations

import dataclasses

import pytest

from cfsm_verifier.errors import DuplicateDeclarationError, FormatError
from cfsm_verifier.model import Action, Network, Operation, build_process

SEND = Operation.SEND
RECEIVE = Operation.RECEIVE


class TestAction:
    """Tests for action identity and rendering."""

    def test_equality_uses_all_fields(self):
        assert Action("c", SEND) == Action("c", SEND, 0)
        assert Action("c", SEND) != Action("c", RECEIVE)
        assert Action("c", SEND) != Action("d", SEND)
        assert Action("c", SEND, 1) != Action("c", SEND, 2)

    def test_str(self):
        assert str(Action("c", SEND)) == "c!"
        assert str(Action("c", RECEIVE, 2)) == "c?@2"

    def test_operation_from_char(self):
        assert Operation.from_char("!") is SEND
        assert Operation.from_char("?") is RECEIVE

    def test_operation_from_unknown_char(self):
        with pytest.raises(FormatError, match="Unrecognized operation char"):
            Operation.from_char("$")


class TestProcess:
    """Tests for process construction."""

    def test_initial_state_is_first_declared(self):
        process = build_process(
            [
                ("b", Action("x", SEND), "a"),
                ("a", Action("x", RECEIVE), "b"),
            ]
        )
        assert process.initial_state == "b"
        assert process.states == ["b", "a"]
        assert process.num_states == 2

    def test_actions_from(self):
        process = build_process([("s0", Action("x", SEND), "s1")])
        assert dict(process.actions_from("s0")) == {Action("x", SEND): "s1"}
        assert dict(process.actions_from("s1")) == {}

    def test_duplicate_action_rejected(self):
        with pytest.raises(DuplicateDeclarationError, match="Duplicate action 'x!'"):
            build_process(
                [
                    ("s0", Action("x", SEND), "s1"),
                    ("s0", Action("x", SEND), "s2"),
                ]
            )

    def test_same_channel_different_priority_allowed(self):
        process = build_process(
            [
                ("s0", Action("x", SEND, 0), "s1"),
                ("s0", Action("x", SEND, 1), "s2"),
            ]
        )
        assert len(process.actions_from("s0")) == 2

    def test_empty_process_rejected(self):
        with pytest.raises(FormatError):
            build_process([])

    def test_process_is_immutable(self):
        process = build_process([("s0", Action("x", SEND), "s1")])
        with pytest.raises(dataclasses.FrozenInstanceError):
            process.is_buffer = True  # type: ignore[misc]
        with pytest.raises(TypeError):
            process.transitions["s2"] = {}  # type: ignore[index]
        with pytest.raises(TypeError):
            process.transitions["s0"][Action("y", SEND)] = "s0"  # type: ignore[index]


class TestNetwork:
    """Tests for networks of processes."""

    def _network(self) -> Network:
        network = Network()
        network.add_process("P", build_process([("s0", Action("b", SEND), "s0")]))
        network.add_process(
            "Q",
            build_process(
                [
                    ("s0", Action("a", RECEIVE), "s1"),
                    ("s1", Action("b", RECEIVE), "s0"),
                ]
            ),
        )
        return network

    def test_duplicate_name_rejected(self):
        network = self._network()
        with pytest.raises(DuplicateDeclarationError, match="Duplicate process name 'P'"):
            network.add_process("P", build_process([("s0", Action("c", SEND), "s0")]))

    def test_channels_in_first_use_order(self):
        assert self._network().channels == ["b", "a"]

    def test_summary(self):
        assert str(self._network()) == "P[1] Q[2]"

    def test_indexing(self):
        network = self._network()
        assert len(network) == 2
        assert network.index_of("Q") == 1
        assert [name for name, _ in network] == ["P", "Q"]

    def test_has_priorities(self):
        network = self._network()
        assert not network.has_priorities
        network.add_process("R", build_process([("s0", Action("a", SEND, 1), "s0")]))
        assert network.has_priorities
