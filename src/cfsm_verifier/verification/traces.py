"""Witness trace reconstruction and rendering.

The explorer records, for every discovered global state, the transition
that first reached it. Walking those records backward from a deadlock
recovers a shortest path from the initial state.
"""

from __future__ import annotations

from collections.abc import Mapping

from cfsm_verifier.model import Network, Operation
from cfsm_verifier.verification.states import Comm, GlobalState, Move, Transition

MOVE_PLACEHOLDER = "-"


def reconstruct_trace(
    predecessors: Mapping[GlobalState, Transition | None],
    target: GlobalState,
) -> list[Transition]:
    """Recover the transitions leading from the initial state to ``target``.

    Args:
        predecessors: Discovering transition of every visited state,
            ``None`` for the initial state
        target: A visited state

    Returns:
        Transitions in forward order (empty if target is the initial state)
    """
    trace: list[Transition] = []
    state = target
    while True:
        transition = predecessors[state]
        if transition is None:
            break
        trace.append(transition)
        state = state.rewind(transition)
    trace.reverse()
    return trace


def format_state(network: Network, state: GlobalState) -> str:
    """Render a global state as ``name.state`` pairs."""
    return " ".join(f"{name}.{local}" for name, local in zip(network.names, state.slots))


class TraceLayout:
    """Column-aligned rendering of transitions for one network."""

    def __init__(self, network: Network):
        self.names = network.names
        self.name_width = max((len(name) for name in network.names), default=0)
        labels = {
            label
            for process in network.processes
            for state, act_map in process.transitions.items()
            for label in (state, *act_map.values())
        }
        self.state_width = max((len(label) for label in labels), default=0)
        if network.has_priorities:
            self.state_width += 1
        self.channel_width = max(
            (len(channel) for channel in network.channels), default=len(MOVE_PLACEHOLDER)
        )

    def _step(self, move: Move, channel: str, marker: str) -> str:
        return (
            f"{self.names[move.process]:>{self.name_width}}."
            f"({str(move.from_state):<{self.state_width}} "
            f"{channel:>{self.channel_width}}{marker} "
            f"{str(move.to_state):<{self.state_width}})"
        )

    def format(self, transition: Transition) -> str:
        """Render one transition as a single line."""
        match transition:
            case Comm(channel=channel, send=send, receive=receive):
                return (
                    f"{self._step(send, channel, Operation.SEND.value)}   "
                    f"{self._step(receive, channel, Operation.RECEIVE.value)}"
                )
            case Move():
                return self._step(transition, MOVE_PLACEHOLDER, ">")
            case _:
                raise TypeError(f"Unknown transition type: {type(transition).__name__}")


def format_trace(network: Network, trace: list[Transition]) -> list[str]:
    """Render a trace as aligned lines, one per transition."""
    layout = TraceLayout(network)
    return [layout.format(transition) for transition in trace]


__all__ = [
    "MOVE_PLACEHOLDER",
    "reconstruct_trace",
    "format_state",
    "TraceLayout",
    "format_trace",
]
