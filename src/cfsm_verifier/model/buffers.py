"""Bounded FIFO buffers for channels.

A buffered channel ``c`` with capacity ``n`` is modelled as an extra
process with occupancy states ``"0".."n"``. User actions on ``c`` are
routed through it:

- a send on ``c`` becomes a send on ``c+``, which the buffer receives
  while it has free cells
- a receive on ``c`` becomes a receive on ``c-``, which the buffer
  sends to while it holds at least one message
"""

from __future__ import annotations

from collections.abc import Collection

from cfsm_verifier.errors import InvalidCountError
from cfsm_verifier.model.network import Action, Operation, Process, build_process

INBOUND_SUFFIX = "+"
OUTBOUND_SUFFIX = "-"


def inbound_channel(channel: str) -> str:
    """Synthetic channel carrying messages into the buffer."""
    return channel + INBOUND_SUFFIX


def outbound_channel(channel: str) -> str:
    """Synthetic channel carrying messages out of the buffer."""
    return channel + OUTBOUND_SUFFIX


def buffer_process(channel: str, capacity: int) -> Process:
    """Synthesize the occupancy automaton for a buffered channel.

    Args:
        channel: Logical channel name
        capacity: Number of cells, at least 1

    Returns:
        A process marked as a buffer

    Raises:
        InvalidCountError: If capacity is below 1
    """
    if capacity < 1:
        raise InvalidCountError(f"Invalid buffer capacity {capacity}")

    def triples():
        for i in range(capacity + 1):
            if i > 0:
                yield str(i), Action(outbound_channel(channel), Operation.SEND), str(i - 1)
            if i < capacity:
                yield str(i), Action(inbound_channel(channel), Operation.RECEIVE), str(i + 1)

    return build_process(triples(), is_buffer=True)


def route_through_buffer(action: Action, buffered: Collection[str]) -> Action:
    """Rewrite a user action so that it talks to its channel's buffer.

    Actions on unbuffered channels are returned unchanged.
    """
    if action.channel not in buffered:
        return action
    if action.op is Operation.SEND:
        return Action(inbound_channel(action.channel), action.op, action.priority)
    return Action(outbound_channel(action.channel), action.op, action.priority)


__all__ = [
    "INBOUND_SUFFIX",
    "OUTBOUND_SUFFIX",
    "inbound_channel",
    "outbound_channel",
    "buffer_process",
    "route_through_buffer",
]
