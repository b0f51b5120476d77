"""Configuration: program constants and logging defaults (no config files are read)."""

from __future__ import annotations

from typing import Any

PROGRAM_NAME = "file_reader_writer"
DISPLAY_NAME = "File Reader Writer"
LOGGER_NAME = "file_reader_writer"

# Contents are written and read back as UTF-8 text
ENCODING = "utf-8"

REPORT_TEMPLATE = "The contents of {filepath} is\n{contents}"


def default_config() -> dict[str, Any]:
    """Default runtime settings. Logging stays at WARNING so stderr only carries errors."""
    return {
        "encoding": ENCODING,
        "logging": {
            "level": "WARNING",
            "format": "%(asctime)s %(levelname)s [%(name)s] %(message)s",
        },
    }
