"""
cfsm-verifier -- Deadlock checking for networks of Communicating Finite
State Machines.

Processes are labeled-state automata that synchronize on named channels,
optionally with action priorities and bounded FIFO buffers. The checker
explores every reachable global state breadth-first and either proves the
network deadlock-free or reports a shortest trace to a stuck state.
"""

from cfsm_verifier._version import __version__
from cfsm_verifier.errors import (
    DuplicateDeclarationError,
    FormatError,
    InvalidCountError,
    NetworkLoadError,
    OrderingError,
)
from cfsm_verifier.model import (
    Action,
    Network,
    Operation,
    Process,
    build_process,
    buffer_process,
    load_file,
    load_network,
    parse_action,
)
from cfsm_verifier.verification import (
    Comm,
    ExplorationResult,
    Explorer,
    GlobalState,
    LocalState,
    Move,
    Transition,
    explore,
    find_deadlock,
    format_state,
    format_trace,
    is_deadlock_free,
    reconstruct_trace,
)

# NOTE: Full subpackage APIs are accessible via direct imports:
#   from cfsm_verifier.model import route_through_buffer, inbound_channel, ...
#   from cfsm_verifier.verification import TraceLayout, moves_of, ...

__all__ = [
    "__version__",
    # Errors
    "NetworkLoadError",
    "FormatError",
    "DuplicateDeclarationError",
    "InvalidCountError",
    "OrderingError",
    # Process model
    "Operation",
    "Action",
    "Process",
    "Network",
    "build_process",
    "buffer_process",
    "parse_action",
    "load_network",
    "load_file",
    # Exploration
    "LocalState",
    "GlobalState",
    "Move",
    "Comm",
    "Transition",
    "Explorer",
    "ExplorationResult",
    "explore",
    "is_deadlock_free",
    "find_deadlock",
    # Traces
    "reconstruct_trace",
    "format_state",
    "format_trace",
]
