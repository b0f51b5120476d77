"""CLI entry point: argument parsing, logging setup, and exit codes."""

from __future__ import annotations

import logging
import sys
from typing import Sequence

from file_reader_writer.args import Flag, HelpRequested, help_text, parse_args
from file_reader_writer.config import LOGGER_NAME, default_config
from file_reader_writer.errors import FileWriterError
from file_reader_writer.writer import run

logger = logging.getLogger(__name__)


class _StderrHandler(logging.StreamHandler):
    """Console handler that writes to whatever sys.stderr is at emit time."""

    def __init__(self, level: int = logging.NOTSET) -> None:
        logging.Handler.__init__(self, level)

    @property
    def stream(self):
        return sys.stderr


def setup_logging(verbose: bool = False) -> None:
    """
    Configure the package logger: level from --verbose or config defaults,
    one console handler on stderr. Installed once per process.
    """
    log_cfg = default_config().get("logging") or {}
    level_name = "DEBUG" if verbose else (log_cfg.get("level") or "WARNING").upper()
    level = getattr(logging, level_name, logging.WARNING)
    root = logging.getLogger(LOGGER_NAME)
    root.setLevel(level)
    if not root.handlers:
        console = _StderrHandler()
        console.setFormatter(logging.Formatter(log_cfg.get("format")))
        root.addHandler(console)


def main(argv: Sequence[str] | None = None) -> None:
    """Run one invocation. Exits 0 on success or --help, 1 on any error."""
    if argv is None:
        argv = sys.argv
    # Logging is configured before parsing so parse errors can be traced with -v
    setup_logging(verbose=any(Flag.lookup(token) is Flag.VERBOSE for token in argv[1:]))

    try:
        parsed = parse_args(argv)
        if isinstance(parsed, HelpRequested):
            print(help_text())
            sys.exit(0)
        run(parsed)
    except (FileWriterError, OSError, UnicodeError) as exc:
        logger.debug("Run failed", exc_info=True)
        print(str(exc), file=sys.stderr)
        sys.exit(1)
