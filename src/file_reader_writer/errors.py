"""Error taxonomy. Every error is terminal for the run; none are retried.

I/O failures during the permission change, the write, or the read-back are not
wrapped: they surface as the ``OSError`` raised by the platform.
"""

from __future__ import annotations


class FileWriterError(Exception):
    """Base class for errors with a fixed, user-facing message."""

    message = "File writer error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)


class MissingFilepathError(FileWriterError):
    """No positional filepath argument was supplied."""

    message = "Filepath required"


class InvalidFilepathError(FileWriterError):
    """The filepath does not name an existing regular file."""

    message = "Filepath arg must be a file"


class OpenFailureError(FileWriterError):
    """The file could not be opened for writing for a reason other than not existing."""

    message = "Could not open file"
