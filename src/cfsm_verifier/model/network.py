"""Process model for networks of communicating finite state machines.

This module provides:
- Actions (send/receive on a named channel, with an optional priority)
- Processes (immutable local transition tables)
- Networks (ordered, uniquely named collections of processes)

A process is a labeled-state automaton whose transitions are labeled
with actions. Processes only interact by synchronizing a send with a
receive on the same channel.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType

from cfsm_verifier.errors import DuplicateDeclarationError, FormatError

# =============================================================================
# Actions
# =============================================================================


class Operation(Enum):
    """Direction of a channel action, valued by its marker character."""

    SEND = "!"
    RECEIVE = "?"

    @classmethod
    def from_char(cls, char: str) -> Operation:
        """Look up an operation by its marker character."""
        try:
            return cls(char)
        except ValueError:
            raise FormatError(f"Unrecognized operation char '{char}'") from None


DEFAULT_PRIORITY = 0


@dataclass(frozen=True)
class Action:
    """A send or receive on a channel.

    Lower priority values are more urgent. Two actions are equal only
    if channel, operation and priority all match.
    """

    channel: str
    op: Operation
    priority: int = DEFAULT_PRIORITY

    def __str__(self) -> str:
        text = f"{self.channel}{self.op.value}"
        if self.priority != DEFAULT_PRIORITY:
            text += f"@{self.priority}"
        return text


# =============================================================================
# Processes
# =============================================================================

TransitionTable = Mapping[str, Mapping[Action, str]]


@dataclass(frozen=True, eq=False)
class Process:
    """A single automaton: state label -> {action -> destination label}.

    Attributes:
        transitions: Read-only transition table in declaration order
        is_buffer: Whether this is a synthesized bounded-FIFO process
    """

    transitions: TransitionTable
    is_buffer: bool = False

    @property
    def initial_state(self) -> str:
        """The first declared state label."""
        return next(iter(self.transitions))

    @property
    def states(self) -> list[str]:
        """State labels that have outgoing transitions, in declaration order."""
        return list(self.transitions)

    @property
    def num_states(self) -> int:
        return len(self.transitions)

    def actions_from(self, state: str) -> Mapping[Action, str]:
        """Actions enabled from a state (empty if the state has none)."""
        return self.transitions.get(state, _NO_ACTIONS)

    def actions(self) -> Iterator[Action]:
        """Iterate over every action of every state."""
        for act_map in self.transitions.values():
            yield from act_map


_NO_ACTIONS: Mapping[Action, str] = MappingProxyType({})


def build_process(
    triples: Iterable[tuple[str, Action, str]],
    is_buffer: bool = False,
) -> Process:
    """Build a process from (from_state, action, to_state) triples.

    Args:
        triples: Transitions in declaration order
        is_buffer: Mark the result as a buffer process

    Returns:
        The immutable process

    Raises:
        DuplicateDeclarationError: If an action repeats at the same state
        FormatError: If there are no transitions at all
    """
    table: dict[str, dict[Action, str]] = {}
    for from_state, action, to_state in triples:
        add_transition(table, from_state, action, to_state)
    return freeze_process(table, is_buffer)


def add_transition(
    table: dict[str, dict[Action, str]],
    from_state: str,
    action: Action,
    to_state: str,
) -> None:
    """Add one transition to a table under construction."""
    act_map = table.setdefault(from_state, {})
    if action in act_map:
        raise DuplicateDeclarationError(f"Duplicate action '{action}' at state '{from_state}'")
    act_map[action] = to_state


def freeze_process(table: dict[str, dict[Action, str]], is_buffer: bool = False) -> Process:
    """Turn a table under construction into an immutable process."""
    if not table:
        raise FormatError("Process has no transitions")
    frozen = MappingProxyType(
        {state: MappingProxyType(dict(act_map)) for state, act_map in table.items()}
    )
    return Process(transitions=frozen, is_buffer=is_buffer)


# =============================================================================
# Networks
# =============================================================================


@dataclass
class Network:
    """An ordered collection of uniquely named processes.

    The process index in this collection is the slot index used by
    global states during exploration.
    """

    names: list[str] = field(default_factory=list)
    processes: list[Process] = field(default_factory=list)

    def add_process(self, name: str, process: Process) -> None:
        """Append a process.

        Raises:
            DuplicateDeclarationError: If the name is already taken
        """
        if name in self.names:
            raise DuplicateDeclarationError(f"Duplicate process name '{name}'")
        self.names.append(name)
        self.processes.append(process)

    def index_of(self, name: str) -> int:
        """Slot index of a named process."""
        return self.names.index(name)

    def __len__(self) -> int:
        return len(self.processes)

    def __iter__(self) -> Iterator[tuple[str, Process]]:
        return iter(zip(self.names, self.processes))

    @property
    def channels(self) -> list[str]:
        """Distinct channel names in order of first use."""
        seen = dict.fromkeys(
            action.channel for process in self.processes for action in process.actions()
        )
        return list(seen)

    @property
    def has_priorities(self) -> bool:
        """Whether any action carries a non-default priority."""
        return any(
            action.priority != DEFAULT_PRIORITY
            for process in self.processes
            for action in process.actions()
        )

    def __str__(self) -> str:
        return " ".join(f"{name}[{proc.num_states}]" for name, proc in self)


__all__ = [
    "Operation",
    "Action",
    "DEFAULT_PRIORITY",
    "TransitionTable",
    "Process",
    "build_process",
    "add_transition",
    "freeze_process",
    "Network",
]
