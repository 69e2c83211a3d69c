"""Breadth-first exploration of the global state space.

Each round dequeues one global state and computes its enabled
transitions:

1. Collect candidate actions of every process, grouped per channel into
   senders and receivers.
2. Under priorities, restrict every process to its most urgent action
   that has a partner in another process this round.
3. Pair eligible senders with eligible receivers of other processes.
   Under priorities, non-buffer participants land in flight.
4. Under priorities, let every in-flight process finish its move.

A state with no enabled transition is a deadlock. The search stops at
the first one, so the witness trace is a shortest one.
"""

from __future__ import annotations

import logging
import time
from collections import deque
from dataclasses import dataclass, field

import numpy as np

from cfsm_verifier.model import Network, Operation
from cfsm_verifier.verification.states import Comm, GlobalState, LocalState, Move, Transition
from cfsm_verifier.verification.traces import reconstruct_trace

logger = logging.getLogger(__name__)

NO_PRIORITY = np.iinfo(np.int64).max
PROGRESS_INTERVAL = 100_000

Successor = tuple[GlobalState, Transition]


@dataclass(frozen=True)
class Candidate:
    """An action a process could take this round."""

    process: int
    from_state: LocalState
    to_state: str
    priority: int


@dataclass
class ChannelCandidates:
    """Senders and receivers offering to use one channel this round."""

    senders: list[Candidate] = field(default_factory=list)
    receivers: list[Candidate] = field(default_factory=list)

    def has_partner(self, candidate: Candidate, op: Operation) -> bool:
        """Whether another process offers the opposite operation."""
        partners = self.receivers if op is Operation.SEND else self.senders
        return any(p.process != candidate.process for p in partners)


@dataclass
class ExplorationResult:
    """Outcome of exploring one network.

    Attributes:
        num_states: Distinct global states discovered
        deadlock: First deadlocked state found, if any
        trace: Shortest transitions from the initial state to the deadlock
        predecessors: Discovering transition of every visited state
        expanded: Number of states dequeued and expanded
        elapsed: Wall-clock seconds spent searching
    """

    num_states: int
    deadlock: GlobalState | None = None
    trace: list[Transition] = field(default_factory=list)
    predecessors: dict[GlobalState, Transition | None] = field(default_factory=dict)
    expanded: int = 0
    elapsed: float = 0.0

    @property
    def has_deadlock(self) -> bool:
        return self.deadlock is not None

    @property
    def is_deadlock_free(self) -> bool:
        return self.deadlock is None


class Explorer:
    """Explores the reachable global states of one network.

    All search state (queue, visited map, per-round scratch) belongs to
    the instance, so separate explorers never interfere.
    """

    def __init__(self, network: Network):
        """Initialize the explorer.

        Args:
            network: The network to explore

        Raises:
            ValueError: If the network has no processes
        """
        if not len(network):
            raise ValueError("Cannot explore an empty network")
        self.network = network
        self.has_priorities = network.has_priorities
        # Buffers always move atomically; other processes only without priorities
        self._atomic = [p.is_buffer or not self.has_priorities for p in network.processes]
        self._channels: dict[str, ChannelCandidates] = {}
        self._min_priority = np.full(len(network), NO_PRIORITY, dtype=np.int64)
        self.visited: dict[GlobalState, Transition | None] = {}
        self._queue: deque[GlobalState] = deque()
        self.expanded = 0

    # -------------------------------------------------------------------------
    # One round
    # -------------------------------------------------------------------------

    def _collect_candidates(self, state: GlobalState) -> None:
        self._channels.clear()
        for index, process in enumerate(self.network.processes):
            local = state[index]
            if local.in_flight:
                continue
            for action, to_state in process.actions_from(local.label).items():
                bucket = self._channels.setdefault(action.channel, ChannelCandidates())
                candidate = Candidate(index, local, to_state, action.priority)
                if action.op is Operation.SEND:
                    bucket.senders.append(candidate)
                else:
                    bucket.receivers.append(candidate)

    def _resolve_priorities(self) -> None:
        self._min_priority.fill(NO_PRIORITY)
        for bucket in self._channels.values():
            sides = ((Operation.SEND, bucket.senders), (Operation.RECEIVE, bucket.receivers))
            for op, candidates in sides:
                for candidate in candidates:
                    if bucket.has_partner(candidate, op):
                        current = self._min_priority[candidate.process]
                        self._min_priority[candidate.process] = min(current, candidate.priority)

    def _eligible(self, candidate: Candidate) -> bool:
        if not self.has_priorities:
            return True
        return candidate.priority == self._min_priority[candidate.process]

    def _move(self, candidate: Candidate) -> Move:
        to_state = LocalState(candidate.to_state)
        if not self._atomic[candidate.process]:
            to_state = to_state.begin()
        return Move(candidate.process, candidate.from_state, to_state)

    def successors(self, state: GlobalState) -> list[Successor]:
        """Enabled transitions of a state and the states they lead to.

        Args:
            state: A global state of this network

        Returns:
            (next_state, transition) pairs; empty for a deadlock
        """
        self._collect_candidates(state)
        if self.has_priorities:
            self._resolve_priorities()

        result: list[Successor] = []
        for channel, bucket in self._channels.items():
            for sender in bucket.senders:
                if not self._eligible(sender):
                    continue
                for receiver in bucket.receivers:
                    if receiver.process == sender.process or not self._eligible(receiver):
                        continue
                    comm = Comm(channel, self._move(sender), self._move(receiver))
                    result.append((state.advance(comm), comm))

        if self.has_priorities:
            for index, local in enumerate(state.slots):
                if local.in_flight:
                    move = Move(index, local, local.finish())
                    result.append((state.advance(move), move))
        return result

    # -------------------------------------------------------------------------
    # Search
    # -------------------------------------------------------------------------

    def _enqueue(self, state: GlobalState, transition: Transition | None) -> None:
        if state not in self.visited:
            self.visited[state] = transition
            self._queue.append(state)

    def run(self) -> ExplorationResult:
        """Explore until the state space is exhausted or a deadlock is found.

        Returns:
            ExplorationResult with the state count and any deadlock trace
        """
        start = time.perf_counter()
        self.visited = {}
        self._queue.clear()
        self.expanded = 0
        self._enqueue(GlobalState.initial(self.network), None)

        deadlock: GlobalState | None = None
        while self._queue:
            current = self._queue.popleft()
            self.expanded += 1
            if self.expanded % PROGRESS_INTERVAL == 0:
                logger.debug(
                    f"Expanded {self.expanded} states, {len(self._queue)} queued, "
                    f"{len(self.visited)} discovered"
                )
            successors = self.successors(current)
            if not successors:
                deadlock = current
                break
            for next_state, transition in successors:
                self._enqueue(next_state, transition)

        trace = reconstruct_trace(self.visited, deadlock) if deadlock is not None else []
        elapsed = time.perf_counter() - start
        if deadlock is not None:
            logger.info(f"Deadlock after {len(trace)} transitions, {len(self.visited)} states")
        else:
            logger.info(f"No deadlock in {len(self.visited)} states")
        return ExplorationResult(
            num_states=len(self.visited),
            deadlock=deadlock,
            trace=trace,
            predecessors=self.visited,
            expanded=self.expanded,
            elapsed=elapsed,
        )


# =============================================================================
# Convenience Functions
# =============================================================================


def explore(network: Network) -> ExplorationResult:
    """Explore a network's reachable global states.

    Args:
        network: The network to analyze

    Returns:
        The exploration result
    """
    return Explorer(network).run()


def is_deadlock_free(network: Network) -> bool:
    """Check that no reachable global state is a deadlock."""
    return explore(network).is_deadlock_free


def find_deadlock(network: Network) -> list[Transition] | None:
    """Shortest trace to a deadlock, or None if the network is deadlock-free."""
    result = explore(network)
    return result.trace if result.has_deadlock else None


__all__ = [
    "NO_PRIORITY",
    "Candidate",
    "ChannelCandidates",
    "ExplorationResult",
    "Explorer",
    "explore",
    "is_deadlock_free",
    "find_deadlock",
]
