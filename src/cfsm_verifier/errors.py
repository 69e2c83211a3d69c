"""Errors raised while loading a process network description.

Every error is fatal to the analysis of the current input and carries
the 1-based line number where it was detected, once the loader knows it.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class NetworkLoadError(Exception):
    """Base class for errors in a network description.

    Attributes:
        message: Error message
        line: 1-based input line number, if known
        source: Name of the input (usually a file path)
    """

    message: str
    line: int | None = None
    source: str = ""

    def locate(self, line: int, source: str = "") -> None:
        """Attach location information unless already present."""
        if self.line is None:
            self.line = line
        if not self.source:
            self.source = source

    def __str__(self) -> str:
        parts = [self.source] if self.source else []
        if self.line is not None:
            parts.append(str(self.line))
        parts.append(self.message)
        return ": ".join(parts)


class FormatError(NetworkLoadError):
    """Malformed transition line, action or header."""


class DuplicateDeclarationError(NetworkLoadError):
    """Process name or action declared twice."""


class InvalidCountError(NetworkLoadError):
    """Process count or buffer capacity below 1."""


class OrderingError(NetworkLoadError):
    """Buffered channel declared after it was first used."""


__all__ = [
    "NetworkLoadError",
    "FormatError",
    "DuplicateDeclarationError",
    "InvalidCountError",
    "OrderingError",
]
