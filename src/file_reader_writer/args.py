"""Argument parsing: raw process arguments to an immutable RunConfig.

Tokens starting with ``-`` are flags, everything else is positional. Flags are
matched exactly against a fixed set; unknown flags are ignored. A help flag
short-circuits parsing and is reported to the caller as ``HelpRequested``
rather than printed here.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Sequence, Union

from file_reader_writer import __version__
from file_reader_writer.config import DISPLAY_NAME, PROGRAM_NAME
from file_reader_writer.errors import InvalidFilepathError, MissingFilepathError

logger = logging.getLogger(__name__)


class Flag(Enum):
    """Recognized flags. Values are the accepted spellings (long form first)."""

    APPEND = ("--append", "-a")
    TRUNCATE = ("--truncate", "-t")
    NO_PRINT = ("--no-print", "-np")
    VERBOSE = ("--verbose", "-v")
    HELP = ("--help", "-h")

    @classmethod
    def lookup(cls, token: str) -> Flag | None:
        """Return the flag spelled exactly as token, or None."""
        return _SPELLINGS.get(token)


_SPELLINGS: dict[str, Flag] = {spelling: flag for flag in Flag for spelling in flag.value}


@dataclass(frozen=True)
class RunConfig:
    """Parsed invocation state for a single run."""

    filepath: str
    contents: str = ""
    append: bool = False
    truncate: bool = False
    print_contents: bool = True
    verbose: bool = False

    @property
    def open_mode(self) -> str:
        """'truncate', 'append' or 'overwrite'. Truncate wins when both flags are set."""
        if self.truncate:
            return "truncate"
        if self.append:
            return "append"
        return "overwrite"


@dataclass(frozen=True)
class HelpRequested:
    """Returned by parse_args when --help/-h is present."""


ParseResult = Union[RunConfig, HelpRequested]


def help_text() -> str:
    """Usage block printed for --help."""
    return f"""
{DISPLAY_NAME} - {__version__}

Usage: {PROGRAM_NAME} [filepath] [contents] [OPTIONS]
Example: {PROGRAM_NAME} ./tmp/my_file.txt "Here is some content." -t

Options:
    -a,  --append       Appends new [contents] to the [filepath] file.
    -t,  --truncate     Truncates the [filepath] file before writing [contents] to it.
                        Takes precedence over --append.
    -np, --no-print     Doesn't print the contents of the file after writing.
    -v,  --verbose      Log debug output to stderr (diagnostics only; does not change
                        what is written or printed).
    -h,  --help         Shows this help screen.
"""


def partition_tokens(tokens: Sequence[str]) -> tuple[list[str], list[str]]:
    """Split tokens into (flags, positionals), keeping relative order in each."""
    flags: list[str] = []
    positionals: list[str] = []
    for token in tokens:
        (flags if token.startswith("-") else positionals).append(token)
    return flags, positionals


def parse_flags(tokens: Sequence[str]) -> set[Flag]:
    """Fold flag tokens into the set of recognized flags; unknown tokens are skipped."""
    found: set[Flag] = set()
    for token in tokens:
        flag = Flag.lookup(token)
        if flag is None:
            logger.debug("Ignoring unrecognized flag %r", token)
            continue
        found.add(flag)
    return found


def parse_args(raw_args: Sequence[str]) -> ParseResult:
    """
    Build a RunConfig from the process arguments (program name first).

    Returns HelpRequested if a help flag is present, before any positional is
    checked. Raises MissingFilepathError when no filepath is given and
    InvalidFilepathError when it is not an existing regular file.
    """
    flag_tokens, positionals = partition_tokens(list(raw_args)[1:])
    flags = parse_flags(flag_tokens)
    verbose = Flag.VERBOSE in flags

    if Flag.HELP in flags:
        return HelpRequested()

    if not positionals:
        raise MissingFilepathError()
    filepath = positionals[0]
    if not Path(filepath).is_file():
        raise InvalidFilepathError()

    contents = positionals[1] if len(positionals) > 1 else ""
    if len(positionals) > 2:
        logger.debug("Ignoring %d extra positional argument(s)", len(positionals) - 2)

    return RunConfig(
        filepath=filepath,
        contents=contents,
        append=Flag.APPEND in flags,
        truncate=Flag.TRUNCATE in flags,
        print_contents=Flag.NO_PRINT not in flags,
        verbose=verbose,
    )
