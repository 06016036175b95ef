# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner

from rocket_cli.config import RocketConfig


@pytest.fixture
def config(tmp_path: Path) -> RocketConfig:
    """Return a configuration rooted in a temporary directory."""
    return RocketConfig(root=tmp_path, transformer="custom-transformer", max_workers=3)


@pytest.fixture
def runner() -> CliRunner:
    """Return a Click test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("ROCKET_BUNDLER", "ROCKET_TRANSFORMER", "ROCKET_MAX_WORKERS", "ROCKET_OUTPUT_DIR", "ROCKET_CLI_VERBOSE"):
        monkeypatch.delenv(name, raising=False)
