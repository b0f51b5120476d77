"""Unit tests for the file writer (open modes, read-only clearing, reporting)."""

from __future__ import annotations

import io
import os
import stat
import sys
from pathlib import Path
from unittest.mock import patch

import pytest

from file_reader_writer.args import RunConfig
from file_reader_writer.errors import OpenFailureError
from file_reader_writer.writer import (
    clear_readonly,
    open_or_create_file,
    read_contents,
    report_contents,
    run,
    write_to_file,
)


def _write(config: RunConfig) -> None:
    with open_or_create_file(config) as handle:
        write_to_file(handle, config.contents, config.filepath)


@pytest.fixture
def prior(tmp_path: Path) -> Path:
    f = tmp_path / "prior.txt"
    f.write_text("Some existing data")
    return f


def test_overwrite_replaces_whole_file(prior: Path) -> None:
    _write(RunConfig(filepath=str(prior), contents="new"))
    assert prior.read_text() == "new"


def test_append_concatenates(prior: Path) -> None:
    _write(RunConfig(filepath=str(prior), contents=" more", append=True))
    assert prior.read_text() == "Some existing data more"


def test_truncate_replaces(prior: Path) -> None:
    _write(RunConfig(filepath=str(prior), contents="fresh", truncate=True))
    assert prior.read_text() == "fresh"


def test_truncate_wins_over_append(prior: Path) -> None:
    _write(RunConfig(filepath=str(prior), contents="fresh", append=True, truncate=True))
    assert prior.read_text() == "fresh"


def test_overwrite_is_idempotent(prior: Path) -> None:
    config = RunConfig(filepath=str(prior), contents="same")
    _write(config)
    first = prior.read_bytes()
    _write(config)
    assert prior.read_bytes() == first == b"same"


def test_write_returns_byte_count(tmp_path: Path) -> None:
    f = tmp_path / "u.txt"
    f.write_text("")
    config = RunConfig(filepath=str(f), contents="café")
    with open_or_create_file(config) as handle:
        assert write_to_file(handle, config.contents, config.filepath) == len("café".encode("utf-8"))
    assert read_contents(f) == "café"


def test_missing_file_is_created(tmp_path: Path) -> None:
    """A file removed after parsing is recreated instead of failing."""
    f = tmp_path / "gone.txt"
    _write(RunConfig(filepath=str(f), contents="back"))
    assert f.read_text() == "back"


def test_other_open_failure_is_generic(tmp_path: Path) -> None:
    config = RunConfig(filepath=str(tmp_path / "f.txt"))
    with patch("file_reader_writer.writer.os.open", side_effect=PermissionError("denied")):
        with pytest.raises(OpenFailureError) as excinfo:
            open_or_create_file(config)
    assert str(excinfo.value) == "Could not open file"
    assert isinstance(excinfo.value.__cause__, PermissionError)


@pytest.mark.skipif(sys.platform == "win32", reason="POSIX permission bits")
def test_clear_readonly_adds_owner_write(tmp_path: Path) -> None:
    f = tmp_path / "ro.txt"
    f.write_text("x")
    os.chmod(f, stat.S_IRUSR)
    clear_readonly(f)
    assert os.stat(f).st_mode & stat.S_IWUSR


def test_clear_readonly_leaves_writable_file_alone(tmp_path: Path) -> None:
    f = tmp_path / "rw.txt"
    f.write_text("x")
    with patch("file_reader_writer.writer.os.chmod") as chmod:
        clear_readonly(f)
    chmod.assert_not_called()


def test_report_contents_template(prior: Path) -> None:
    buf = io.StringIO()
    report_contents(str(prior), buf)
    assert buf.getvalue() == f"The contents of {prior} is\nSome existing data\n"


def test_run_reports_on_disk_state(prior: Path) -> None:
    buf = io.StringIO()
    run(RunConfig(filepath=str(prior), contents="!", append=True), buf)
    assert buf.getvalue() == f"The contents of {prior} is\nSome existing data!\n"


def test_run_no_print(prior: Path) -> None:
    buf = io.StringIO()
    run(RunConfig(filepath=str(prior), contents="quiet", print_contents=False), buf)
    assert buf.getvalue() == ""
    assert prior.read_text() == "quiet"


def test_run_closes_handle_on_write_error(prior: Path) -> None:
    handles = []
    real_open = open_or_create_file

    def tracking_open(config: RunConfig):
        handle = real_open(config)
        handles.append(handle)
        return handle

    with patch("file_reader_writer.writer.open_or_create_file", side_effect=tracking_open), patch(
        "file_reader_writer.writer.write_to_file", side_effect=OSError("disk full")
    ):
        with pytest.raises(OSError, match="disk full"):
            run(RunConfig(filepath=str(prior), contents="x"))
    assert handles and handles[0].closed


def test_read_contents_keeps_line_endings(tmp_path: Path) -> None:
    f = tmp_path / "mixed.txt"
    f.write_bytes(b"a\r\nb\rc\n")
    assert read_contents(f) == "a\r\nb\rc\n"


def test_read_contents_undecodable_raises(tmp_path: Path) -> None:
    f = tmp_path / "bad.txt"
    f.write_bytes(b"\xff\xfe")
    with pytest.raises(UnicodeDecodeError):
        read_contents(f)
