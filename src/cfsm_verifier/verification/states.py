"""Vertices and edges of the global state graph.

A global state holds one local state per process. A local state is a
state label plus a phase: under priorities, a process that took part in
a synchronization sits *in flight* at its destination until a separate
finishing move completes it.

Edges are either a ``Comm`` (two processes synchronize on a channel) or
a ``Move`` (one process finishes an in-flight synchronization).
"""

from __future__ import annotations

from dataclasses import dataclass

from cfsm_verifier.model import Network

IN_FLIGHT_MARK = "'"


@dataclass(frozen=True)
class LocalState:
    """A process's current state label and phase."""

    label: str
    in_flight: bool = False

    def begin(self) -> LocalState:
        """The in-flight variant of this state."""
        return LocalState(self.label, in_flight=True)

    def finish(self) -> LocalState:
        """The completed variant of an in-flight state."""
        assert self.in_flight, f"State {self} is not in flight"
        return LocalState(self.label)

    def __str__(self) -> str:
        return self.label + IN_FLIGHT_MARK if self.in_flight else self.label


@dataclass(frozen=True)
class Move:
    """One process going from one local state to another."""

    process: int
    from_state: LocalState
    to_state: LocalState


@dataclass(frozen=True)
class Comm:
    """A send and a receive synchronizing on a channel."""

    channel: str
    send: Move
    receive: Move


Transition = Comm | Move


def moves_of(transition: Transition) -> tuple[Move, ...]:
    """The per-process moves a transition is made of."""
    match transition:
        case Comm(send=send, receive=receive):
            return (send, receive)
        case Move():
            return (transition,)
        case _:
            raise TypeError(f"Unknown transition type: {type(transition).__name__}")


@dataclass(frozen=True)
class GlobalState:
    """One local state per process, indexed like the network's processes."""

    slots: tuple[LocalState, ...]

    @classmethod
    def initial(cls, network: Network) -> GlobalState:
        """Every process at its first declared state."""
        return cls(tuple(LocalState(p.initial_state) for p in network.processes))

    def __len__(self) -> int:
        return len(self.slots)

    def __getitem__(self, index: int) -> LocalState:
        return self.slots[index]

    def advance(self, transition: Transition) -> GlobalState:
        """The state reached by taking a transition from this one."""
        slots = list(self.slots)
        for move in moves_of(transition):
            assert slots[move.process] == move.from_state, (
                f"Process {move.process} is at {slots[move.process]}, not {move.from_state}"
            )
            slots[move.process] = move.to_state
        return GlobalState(tuple(slots))

    def rewind(self, transition: Transition) -> GlobalState:
        """The state a transition was taken from, given that it led here."""
        slots = list(self.slots)
        for move in moves_of(transition):
            assert slots[move.process] == move.to_state, (
                f"Process {move.process} is at {slots[move.process]}, not {move.to_state}"
            )
            slots[move.process] = move.from_state
        return GlobalState(tuple(slots))


__all__ = [
    "IN_FLIGHT_MARK",
    "LocalState",
    "Move",
    "Comm",
    "Transition",
    "moves_of",
    "GlobalState",
]
