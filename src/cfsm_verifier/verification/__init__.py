"""State-space exploration of process networks.

This module provides:
- Global states with an explicit in-flight phase per process
- Breadth-first exploration with priority resolution and deadlock detection
- Witness trace reconstruction and aligned rendering
"""

from __future__ import annotations

from .explorer import (
    NO_PRIORITY,
    Candidate,
    ChannelCandidates,
    ExplorationResult,
    Explorer,
    explore,
    find_deadlock,
    is_deadlock_free,
)
from .states import (
    IN_FLIGHT_MARK,
    Comm,
    GlobalState,
    LocalState,
    Move,
    Transition,
    moves_of,
)
from .traces import (
    MOVE_PLACEHOLDER,
    TraceLayout,
    format_state,
    format_trace,
    reconstruct_trace,
)

__all__ = [
    # States and transitions
    "IN_FLIGHT_MARK",
    "LocalState",
    "GlobalState",
    "Move",
    "Comm",
    "Transition",
    "moves_of",
    # Exploration
    "NO_PRIORITY",
    "Candidate",
    "ChannelCandidates",
    "ExplorationResult",
    "Explorer",
    "explore",
    "is_deadlock_free",
    "find_deadlock",
    # Traces
    "MOVE_PLACEHOLDER",
    "reconstruct_trace",
    "format_state",
    "TraceLayout",
    "format_trace",
]
