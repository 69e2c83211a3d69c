"""Process model for networks of communicating finite state machines.

This module provides:
- Actions, processes and networks
- Bounded FIFO buffer synthesis for buffered channels
- A loader for the textual network description format
"""

from __future__ import annotations

from .buffers import (
    buffer_process,
    inbound_channel,
    outbound_channel,
    route_through_buffer,
)
from .loader import load_file, load_network, parse_action
from .network import (
    DEFAULT_PRIORITY,
    Action,
    Network,
    Operation,
    Process,
    TransitionTable,
    build_process,
)

__all__ = [
    # Core types
    "Operation",
    "Action",
    "DEFAULT_PRIORITY",
    "TransitionTable",
    "Process",
    "Network",
    "build_process",
    # Buffers
    "buffer_process",
    "inbound_channel",
    "outbound_channel",
    "route_through_buffer",
    # Loading
    "parse_action",
    "load_network",
    "load_file",
]
