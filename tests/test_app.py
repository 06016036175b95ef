# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for the top-level CLI run sequence."""

from __future__ import annotations

import subprocess
import sys
from pathlib import Path
from types import ModuleType

import pytest

from rocket_cli.cli.app import build_registry, run
from rocket_cli.cli.commands import register_commands
from rocket_cli.cli.descriptors import CommandDescriptor
from rocket_cli.cli.registry import CommandRegistry
from rocket_cli.config import RocketConfig

FAKE_MODULE = "rocket_cli_app_bundlers"


@pytest.fixture
def project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    module = ModuleType(FAKE_MODULE)
    module.requests = []  # type: ignore[attr-defined]
    module.bundle = lambda request, config: module.requests.append(request)  # type: ignore[attr-defined]
    monkeypatch.setitem(sys.modules, FAKE_MODULE, module)
    (tmp_path / "rocket.config.toml").write_text(f'bundler = "{FAKE_MODULE}:bundle"\n', encoding="utf-8")
    return tmp_path


def test_run_bootstraps_then_dispatches(project: Path) -> None:
    order: list[str] = []

    with pytest.raises(SystemExit) as excinfo:
        run(
            ["bundle", "--entry-file", "index.js"],
            cwd=project,
            bootstrap=lambda: order.append("bootstrap"),
            plugins=(),
        )

    assert excinfo.value.code == 0
    assert order == ["bootstrap"]
    assert len(sys.modules[FAKE_MODULE].requests) == 1


def test_run_honours_config_flag(project: Path, tmp_path_factory: pytest.TempPathFactory) -> None:
    elsewhere = tmp_path_factory.mktemp("elsewhere")

    with pytest.raises(SystemExit) as excinfo:
        run(
            ["bundle", "--entry-file", "index.js", "--config", str(project / "rocket.config.toml")],
            cwd=elsewhere,
            bootstrap=lambda: None,
            plugins=(),
        )

    assert excinfo.value.code == 0
    assert len(sys.modules[FAKE_MODULE].requests) == 1


def test_run_honours_config_flag_before_command(project: Path, tmp_path_factory: pytest.TempPathFactory) -> None:
    elsewhere = tmp_path_factory.mktemp("elsewhere")

    with pytest.raises(SystemExit) as excinfo:
        run(
            ["--config", str(project / "rocket.config.toml"), "bundle", "--entry-file", "index.js"],
            cwd=elsewhere,
            bootstrap=lambda: None,
            plugins=(),
        )

    assert excinfo.value.code == 0
    assert len(sys.modules[FAKE_MODULE].requests) == 1


def test_bootstrap_failure_propagates(project: Path) -> None:
    def failing_bootstrap() -> None:
        raise subprocess.CalledProcessError(1, ["setup_env.sh"])

    with pytest.raises(subprocess.CalledProcessError):
        run(["bundle", "--entry-file", "index.js"], cwd=project, bootstrap=failing_bootstrap, plugins=())

    assert sys.modules[FAKE_MODULE].requests == []


def test_configuration_error_exits_with_status_one(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        run(["bundle", "--config", "missing.toml"], cwd=tmp_path, bootstrap=lambda: None, plugins=())

    assert excinfo.value.code == 1
    assert "Configuration file not found" in capsys.readouterr().err


def test_register_commands_invokes_plugins(tmp_path: Path) -> None:
    registry = CommandRegistry(RocketConfig(root=tmp_path))
    seen: list[CommandRegistry] = []

    def plugin(target: CommandRegistry) -> None:
        seen.append(target)
        target.add(CommandDescriptor(name="doctor", description="Check setup", handler=lambda *args: None))

    register_commands(registry, plugins=(plugin,))

    assert seen == [registry]
    assert set(registry.commands) == {"bundle", "doctor"}


def test_build_registry_loads_entry_point_plugins(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    from rocket_cli.cli import commands

    def plugin(target: CommandRegistry) -> None:
        target.add(CommandDescriptor(name="serve", description="Serve", handler=lambda *args: None))

    monkeypatch.setattr(commands, "load_cli_plugins", lambda: (plugin,))

    registry = build_registry(RocketConfig(root=tmp_path))

    assert "serve" in registry.commands
