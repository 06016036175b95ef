# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for console helpers."""

from __future__ import annotations

import io

import pytest

from rocket_cli.console import detect_tty, report_failure


class _Terminal(io.StringIO):
    def isatty(self) -> bool:
        return True


def test_detect_tty_reads_the_given_stream() -> None:
    assert detect_tty(_Terminal()) is True
    assert detect_tty(io.StringIO()) is False


def test_detect_tty_handles_closed_and_bare_streams() -> None:
    closed = io.StringIO()
    closed.close()

    assert detect_tty(closed) is False
    assert detect_tty(object()) is False  # type: ignore[arg-type]


def test_report_failure_frames_message(capsys: pytest.CaptureFixture[str]) -> None:
    report_failure("boom")

    captured = capsys.readouterr()
    assert captured.err == "\nboom\n\n"
    assert captured.out == ""
