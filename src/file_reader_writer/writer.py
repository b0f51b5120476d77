"""Open the target file in the requested mode, write contents, and report the result."""

from __future__ import annotations

import logging
import os
import stat
import sys
from pathlib import Path
from typing import BinaryIO, TextIO

from file_reader_writer.args import RunConfig
from file_reader_writer.config import ENCODING, REPORT_TEMPLATE
from file_reader_writer.errors import OpenFailureError

logger = logging.getLogger(__name__)

_BASE_FLAGS = os.O_WRONLY | getattr(os, "O_BINARY", 0)

# No O_CREAT: a missing file goes through the creation fallback instead
_MODE_FLAGS = {
    "truncate": _BASE_FLAGS | os.O_TRUNC,
    "append": _BASE_FLAGS | os.O_APPEND,
    "overwrite": _BASE_FLAGS,
}


def open_or_create_file(config: RunConfig) -> BinaryIO:
    """
    Open config.filepath for writing in config.open_mode and return a binary handle.

    If the file has disappeared since parsing, create it empty and open that.
    Any other failure raises OpenFailureError; the OS error is chained, not shown.
    """
    mode = config.open_mode
    try:
        fd = os.open(config.filepath, _MODE_FLAGS[mode])
    except FileNotFoundError:
        logger.debug("%s not found at open; creating it", config.filepath)
        return open(config.filepath, "wb")
    except OSError as exc:
        logger.debug("Could not open %s: %s", config.filepath, exc)
        raise OpenFailureError() from exc
    logger.debug("Opened %s (mode=%s)", config.filepath, mode)
    return os.fdopen(fd, "ab" if mode == "append" else "wb")


def clear_readonly(path: Path | str) -> None:
    """Give the owner write permission if the file is marked read-only."""
    current = os.stat(path).st_mode
    if not current & stat.S_IWUSR:
        logger.debug("Clearing read-only attribute on %s", path)
        os.chmod(path, stat.S_IMODE(current) | stat.S_IWUSR)


def write_to_file(handle: BinaryIO, contents: str, path: Path | str) -> int:
    """
    Write contents to an open handle in a single call; return bytes written.

    In overwrite mode (handle at offset 0, not appending) anything past the new
    contents is cut off so the file holds exactly contents.
    """
    clear_readonly(path)
    data = contents.encode(ENCODING)
    written = handle.write(data)
    if "a" not in handle.mode:
        handle.truncate()
    handle.flush()
    logger.debug("Wrote %d bytes to %s", written, path)
    return written


def read_contents(path: Path | str) -> str:
    """Read the whole file back from disk. Line endings are kept as stored."""
    with Path(path).open(encoding=ENCODING, newline="") as f:
        return f.read()


def report_contents(path: Path | str, out: TextIO | None = None) -> None:
    """Print the on-disk contents of path using the report template."""
    text = read_contents(path)
    print(REPORT_TEMPLATE.format(filepath=path, contents=text), file=out or sys.stdout)


def run(config: RunConfig, out: TextIO | None = None) -> None:
    """Open, write, and (unless --no-print) report. The handle is closed on every path."""
    with open_or_create_file(config) as handle:
        write_to_file(handle, config.contents, config.filepath)
    if config.print_contents:
        report_contents(config.filepath, out)
