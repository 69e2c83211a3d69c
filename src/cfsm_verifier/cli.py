"""Command-line driver: analyze one or more network description files.

Usage::

    cfsm-verify [-v | -vv | -q] FILE [FILE ...]

A ``*`` in the file-name part of an argument matches any run of
characters within its directory; matches are analyzed in name order.
"""

from __future__ import annotations

import logging
import re
import sys
from argparse import ArgumentParser
from collections.abc import Sequence
from pathlib import Path
from typing import TextIO

from cfsm_verifier._version import __version__
from cfsm_verifier.errors import NetworkLoadError
from cfsm_verifier.model import load_file
from cfsm_verifier.verification import (
    ExplorationResult,
    explore,
    format_state,
    format_trace,
)

logger = logging.getLogger(__name__)

WILDCARD = "*"


def expand_path(arg: str) -> list[Path]:
    """Expand a wildcard in the file-name part of a path.

    Arguments without a wildcard are returned as is, even if missing.
    """
    path = Path(arg)
    if WILDCARD not in path.name:
        return [path]
    pattern = re.compile(".*".join(re.escape(part) for part in path.name.split(WILDCARD)))
    parent = path.parent
    if not parent.is_dir():
        logger.warning(f"No such directory: {parent}")
        return []
    matches = sorted(
        (p for p in parent.iterdir() if pattern.fullmatch(p.name)), key=lambda p: p.name
    )
    if not matches:
        logger.warning(f"No files match {arg}")
    return matches


def analyze_file(
    path: Path,
    out: TextIO | None = None,
    err: TextIO | None = None,
) -> ExplorationResult | None:
    """Load, explore and report on one file.

    Args:
        path: Network description file
        out: Stream for the report, default stdout
        err: Stream for load errors, default stderr

    Returns:
        The exploration result, or None if the file could not be loaded
    """
    out = sys.stdout if out is None else out
    err = sys.stderr if err is None else err
    print(f"====== Reading {path}", file=out)
    try:
        network = load_file(path)
    except NetworkLoadError as exc:
        print(f"ERROR: {path.resolve()}: {exc.line}: {exc.message}", file=err)
        return None
    except OSError as exc:
        print(f"ERROR: {path.resolve()}: {exc.strerror or exc}", file=err)
        return None

    print(f"-- Processes: {network}", file=out)
    print(f"--  Channels: {' '.join(network.channels)}", file=out)
    result = explore(network)
    if result.deadlock is not None:
        print(f"Found deadlock at {format_state(network, result.deadlock)}", file=out)
        for line in format_trace(network, result.trace):
            print(line, file=out)
    print(f"Analyzed {result.num_states} states", file=out)
    print(f"Done in {round(result.elapsed * 1000)} ms", file=out)
    return result


def log_level(verbose: int = 0, quiet: bool = False) -> int:
    """Logging level for the command-line verbosity flags.

    Warnings by default, outcomes with one -v, search progress with two.
    """
    if quiet:
        return logging.ERROR
    if verbose >= 2:
        return logging.DEBUG
    return logging.INFO if verbose else logging.WARNING


def build_parser() -> ArgumentParser:
    parser = ArgumentParser(
        prog="cfsm-verify",
        description="Check networks of communicating finite state machines for deadlocks.",
    )
    parser.add_argument("files", nargs="+", metavar="FILE", help="Network description files.")
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Log each outcome; repeat to also log search progress.",
    )
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Only log errors.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command line; returns the process exit status."""
    args = build_parser().parse_args(argv)
    level = log_level(args.verbose, args.quiet)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    failed = False
    for arg in args.files:
        for path in expand_path(arg):
            if analyze_file(path) is None:
                failed = True
    return 1 if failed else 0


__all__ = [
    "expand_path",
    "analyze_file",
    "log_level",
    "build_parser",
    "main",
]
