# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for the bundle command."""

from __future__ import annotations

import sys
from importlib.metadata import EntryPoint
from pathlib import Path
from types import ModuleType

import pytest
from click.testing import CliRunner

from rocket_cli.cli.commands.bundle import BUNDLE_COMMAND
from rocket_cli.cli.commands.bundle import command as bundle_module
from rocket_cli.cli.commands.bundle.command import build_request, resolve_bundler
from rocket_cli.cli.commands.bundle.models import BundleRequest
from rocket_cli.cli.commands.bundle.options import default_bundle_output, parse_bool, parse_positive_int
from rocket_cli.cli.registry import CommandRegistry
from rocket_cli.config import RocketConfig
from rocket_cli.errors import BundlerNotFoundError, CLIError

FAKE_MODULE = "rocket_cli_test_bundlers"


@pytest.fixture
def bundler_calls(monkeypatch: pytest.MonkeyPatch) -> list[tuple[BundleRequest, RocketConfig]]:
    calls: list[tuple[BundleRequest, RocketConfig]] = []
    module = ModuleType(FAKE_MODULE)

    def sync_bundler(request: BundleRequest, config: RocketConfig) -> None:
        calls.append((request, config))

    async def async_bundler(request: BundleRequest, config: RocketConfig) -> None:
        calls.append((request, config))

    def broken_bundler(request: BundleRequest, config: RocketConfig) -> None:
        raise OSError("disk full")

    module.sync_bundler = sync_bundler  # type: ignore[attr-defined]
    module.async_bundler = async_bundler  # type: ignore[attr-defined]
    module.broken_bundler = broken_bundler  # type: ignore[attr-defined]
    module.not_callable = 42  # type: ignore[attr-defined]
    monkeypatch.setitem(sys.modules, FAKE_MODULE, module)
    return calls


def _entry_points(monkeypatch: pytest.MonkeyPatch, *names: str) -> None:
    entries = tuple(
        EntryPoint(name=name, value=f"{FAKE_MODULE}:sync_bundler", group="rocket_cli.bundlers") for name in names
    )
    monkeypatch.setattr(bundle_module, "select_entry_points", lambda group: entries)


def _registry(config: RocketConfig) -> CommandRegistry:
    registry = CommandRegistry(config)
    registry.add(BUNDLE_COMMAND)
    return registry


def test_option_parsers() -> None:
    assert parse_bool("false") is False
    assert parse_bool("FALSE ") is False
    assert parse_bool("true") is True
    assert parse_bool("anything") is True
    assert parse_positive_int("4") == 4
    with pytest.raises(ValueError):
        parse_positive_int("0")


def test_default_bundle_output_uses_output_dir(tmp_path: Path) -> None:
    config = RocketConfig(root=tmp_path, output_dir=tmp_path / "dist")

    assert default_bundle_output(config) == str(tmp_path / "dist" / "main.jsbundle")


def test_build_request_drops_unset_values() -> None:
    request = build_request(
        ["extra"],
        {"entry_file": "index.js", "bundle_output": "out.js", "prepack": None, "config": "x.toml", "dev": False},
    )

    assert request.entry_file == Path("index.js")
    assert request.prepack is False
    assert request.dev is False
    assert request.extra_args == ("extra",)


def test_build_request_reports_invalid_values() -> None:
    with pytest.raises(CLIError, match="bundle_encoding"):
        build_request([], {"entry_file": "a.js", "bundle_output": "b.js", "bundle_encoding": "latin1"})


def test_build_request_rejects_boolean_worker_count() -> None:
    with pytest.raises(CLIError, match="max_workers"):
        build_request([], {"entry_file": "a.js", "bundle_output": "b.js", "max_workers": True})


def test_bare_max_workers_flag_is_rejected(bundler_calls, runner: CliRunner, tmp_path: Path) -> None:
    config = RocketConfig(root=tmp_path, bundler=f"{FAKE_MODULE}:sync_bundler")

    result = runner.invoke(_registry(config).group, ["bundle", "--entry-file", "a.js", "--max-workers"])

    assert result.exit_code == 1
    assert "Invalid bundle options: max_workers" in result.output
    assert bundler_calls == []


def test_resolve_bundler_from_module_reference(bundler_calls, tmp_path: Path) -> None:
    config = RocketConfig(root=tmp_path, bundler=f"{FAKE_MODULE}:sync_bundler")

    assert resolve_bundler(config) is sys.modules[FAKE_MODULE].sync_bundler


@pytest.mark.parametrize(
    ("reference", "message"),
    [
        ("rocket_cli_missing_module:bundle", "Unable to import"),
        (f"{FAKE_MODULE}:absent", "does not exist"),
        (f"{FAKE_MODULE}:not_callable", "not callable"),
    ],
)
def test_resolve_bundler_reference_errors(bundler_calls, tmp_path: Path, reference: str, message: str) -> None:
    with pytest.raises(BundlerNotFoundError, match=message):
        resolve_bundler(RocketConfig(root=tmp_path, bundler=reference))


def test_resolve_bundler_from_entry_points(bundler_calls, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    _entry_points(monkeypatch, "acme", "other")

    bundler = resolve_bundler(RocketConfig(root=tmp_path, bundler="acme"))

    assert bundler is sys.modules[FAKE_MODULE].sync_bundler
    with pytest.raises(BundlerNotFoundError, match="Multiple bundlers"):
        resolve_bundler(RocketConfig(root=tmp_path))
    with pytest.raises(BundlerNotFoundError, match="No bundler named"):
        resolve_bundler(RocketConfig(root=tmp_path, bundler="missing"))


def test_single_entry_point_is_used_by_default(bundler_calls, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    _entry_points(monkeypatch, "acme")

    assert resolve_bundler(RocketConfig(root=tmp_path)) is sys.modules[FAKE_MODULE].sync_bundler


def test_no_bundler_installed(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    _entry_points(monkeypatch)

    with pytest.raises(BundlerNotFoundError, match="No bundler configured"):
        resolve_bundler(RocketConfig(root=tmp_path))


def test_bundle_invokes_async_bundler_with_defaults(bundler_calls, runner: CliRunner, tmp_path: Path) -> None:
    config = RocketConfig(root=tmp_path, bundler=f"{FAKE_MODULE}:async_bundler", transformer="babel", max_workers=4)

    result = runner.invoke(_registry(config).group, ["bundle", "--entry-file", "index.js"])

    assert result.exit_code == 0, result.output
    assert "Bundle written to" in result.output
    ((request, received),) = bundler_calls
    assert received is config
    assert request.entry_file == Path("index.js")
    assert request.platform == "ios"
    assert request.dev is True
    assert request.transformer == "babel"
    assert request.max_workers == 4
    assert request.bundle_output == tmp_path / "build" / "main.jsbundle"
    assert request.bundle_encoding == "utf8"


def test_bundle_passes_supplied_flags(bundler_calls, runner: CliRunner, tmp_path: Path) -> None:
    config = RocketConfig(root=tmp_path, bundler=f"{FAKE_MODULE}:sync_bundler")

    result = runner.invoke(
        _registry(config).group,
        [
            "bundle",
            "--entry-file",
            "index.js",
            "--platform",
            "android",
            "--dev",
            "false",
            "--max-workers",
            "2",
            "--reset-cache",
            "--sourcemap-output",
            "out.map",
        ],
    )

    assert result.exit_code == 0, result.output
    ((request, _),) = bundler_calls
    assert request.platform == "android"
    assert request.dev is False
    assert request.max_workers == 2
    assert request.reset_cache is True
    assert request.sourcemap_output == Path("out.map")


def test_bundle_requires_entry_file(bundler_calls, runner: CliRunner, tmp_path: Path) -> None:
    config = RocketConfig(root=tmp_path, bundler=f"{FAKE_MODULE}:sync_bundler")

    result = runner.invoke(_registry(config).group, ["bundle"])

    assert result.exit_code == 1
    assert 'Option "--entry-file <path>" is missing' in result.output
    assert bundler_calls == []


def test_bundler_failure_exits_with_message(bundler_calls, runner: CliRunner, tmp_path: Path) -> None:
    config = RocketConfig(root=tmp_path, bundler=f"{FAKE_MODULE}:broken_bundler")

    result = runner.invoke(_registry(config).group, ["bundle", "--entry-file", "index.js"])

    assert result.exit_code == 1
    assert "disk full" in result.output
