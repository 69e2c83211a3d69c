"""Loader for the textual network description format.

Format::

    # comment to end of line
    Name [count]          # count defaults to 1; Name0..Name<count-1> if > 1
    from-state action to-state
    ...
    .
    Chan %capacity        # buffered channel, must precede any use of Chan

Actions are written ``<channel><op>[@<priority>]`` where ``op`` is ``!``
(send) or ``?`` (receive) and priority is an integer, default 0.
"""

from __future__ import annotations

import io
import logging
from collections.abc import Collection, Iterable, Iterator
from pathlib import Path

import numpy as np

from cfsm_verifier.errors import (
    FormatError,
    InvalidCountError,
    NetworkLoadError,
    OrderingError,
)
from cfsm_verifier.model.buffers import buffer_process, route_through_buffer
from cfsm_verifier.model.network import (
    Action,
    Network,
    Operation,
    Process,
    add_transition,
    freeze_process,
)

logger = logging.getLogger(__name__)

COMMENT = "#"
END_OF_PROCESS = "."
BUFFER_MARK = "%"
PRIORITY_MARK = "@"

# Priorities share an int64 array with a sentinel during exploration
PRIORITY_RANGE = np.iinfo(np.int64)


def parse_action(text: str, buffered: Collection[str] = ()) -> Action:
    """Parse ``<channel><op>[@<priority>]``.

    Args:
        text: Action text
        buffered: Buffered channel names; actions on them are rerouted

    Raises:
        FormatError: On a malformed action
    """
    if len(text) < 2:
        raise FormatError(f"Invalid action '{text}'")
    chan_op, mark, pri_text = text.partition(PRIORITY_MARK)
    priority = 0
    if mark:
        try:
            priority = int(pri_text)
        except ValueError:
            raise FormatError(f"Invalid priority '{pri_text}' in action '{text}'") from None
        if not PRIORITY_RANGE.min <= priority <= PRIORITY_RANGE.max:
            raise FormatError(f"Priority {priority} out of range in action '{text}'")
    if not chan_op[:-1]:
        raise FormatError(f"Invalid action '{text}'")
    action = Action(chan_op[:-1], Operation.from_char(chan_op[-1]), priority)
    return route_through_buffer(action, buffered)


class _LineReader:
    """Yields meaningful lines, stripped of comments, tracking line numbers."""

    def __init__(self, lines: Iterable[str]):
        self._lines: Iterator[str] = iter(lines)
        self.line_number = 0

    def next_line(self) -> str | None:
        for raw in self._lines:
            self.line_number += 1
            line = raw.split(COMMENT, 1)[0].strip()
            if line:
                return line
        return None


class _NetworkReader:
    """Reads process blocks one at a time into a network."""

    def __init__(self, lines: Iterable[str]):
        self.reader = _LineReader(lines)
        self.network = Network()
        self.buffered: set[str] = set()
        self.seen_channels: set[str] = set()

    def read(self) -> Network:
        while True:
            header = self.reader.next_line()
            if header is None:
                if not len(self.network):
                    raise FormatError("No processes declared")
                return self.network
            self._read_block(header, self.reader.line_number)

    def _read_block(self, header: str, header_line: int) -> None:
        if header == END_OF_PROCESS:
            raise FormatError("Unexpected end of process without a header")
        fields = header.split(maxsplit=1)
        name = fields[0]
        count_text = fields[1].strip() if len(fields) > 1 else "1"

        if count_text.startswith(BUFFER_MARK):
            capacity = _parse_int(count_text[1:], "buffer capacity")
            self._add_buffer(name, capacity)
            return

        count = _parse_int(count_text, "process count")
        if count < 1:
            raise InvalidCountError(f"Invalid process count {count}")
        process = self._read_process()
        try:
            if count == 1:
                self.network.add_process(name, process)
            else:
                for i in range(count):
                    self.network.add_process(f"{name}{i}", process)
        except NetworkLoadError as exc:
            exc.locate(header_line)
            raise
        self.seen_channels.update(action.channel for action in process.actions())
        logger.debug(f"Loaded process {name} x{count} with {process.num_states} states")

    def _add_buffer(self, name: str, capacity: int) -> None:
        if name in self.seen_channels:
            raise OrderingError(
                f"Channel buffer specification must precede channel usage '{name}'"
            )
        self.seen_channels.add(name)
        self.buffered.add(name)
        self.network.add_process(name, buffer_process(name, capacity))
        logger.debug(f"Declared buffer {name} with capacity {capacity}")

    def _read_process(self) -> Process:
        table: dict[str, dict[Action, str]] = {}
        while True:
            line = self.reader.next_line()
            if line is None or line == END_OF_PROCESS:
                break
            fields = line.split()
            if len(fields) != 3:
                raise FormatError(
                    "Transition line shall have format: <from-state> <action> <to-state>"
                )
            from_state, action_text, to_state = fields
            add_transition(table, from_state, parse_action(action_text, self.buffered), to_state)
        return freeze_process(table)


def _parse_int(text: str, what: str) -> int:
    try:
        return int(text)
    except ValueError:
        raise FormatError(f"Invalid {what} '{text}'") from None


def load_network(source: str | Iterable[str], name: str = "") -> Network:
    """Load a network from text or an iterable of lines.

    Args:
        source: The whole description, or its lines
        name: Input name used in error messages

    Returns:
        The loaded network

    Raises:
        NetworkLoadError: On any error, located at the offending line
    """
    lines = source.splitlines() if isinstance(source, str) else source
    reader = _NetworkReader(lines)
    try:
        return reader.read()
    except NetworkLoadError as exc:
        exc.locate(reader.reader.line_number, name)
        raise


def load_file(path: str | Path) -> Network:
    """Load a network description file.

    Raises:
        NetworkLoadError: On any error, including text that is not UTF-8
        OSError: If the file cannot be read
    """
    path = Path(path)
    data = path.read_bytes()
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError as exc:
        line = data.count(b"\n", 0, exc.start) + 1
        raise FormatError(
            f"Invalid UTF-8 byte 0x{data[exc.start]:02x}", line=line, source=str(path)
        ) from exc
    return load_network(io.StringIO(text, newline=None), name=str(path))


__all__ = [
    "parse_action",
    "load_network",
    "load_file",
]
