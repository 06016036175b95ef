# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point wiring bootstrap, configuration, and commands."""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable, Sequence
from pathlib import Path

from rocket_cli.bootstrap import run_setup_env
from rocket_cli.config import RocketConfig, load_config
from rocket_cli.console import configure_logging, report_failure
from rocket_cli.errors import CLIError

from .commands import CommandPlugin, register_commands
from .registry import CommandRegistry

LOGGER = logging.getLogger(__name__)


def build_registry(
    config: RocketConfig,
    *,
    plugins: Sequence[CommandPlugin] | None = None,
) -> CommandRegistry:
    """Return a registry with the built-in and plugin commands registered.

    Args:
        config: Configuration threaded into every command.
        plugins: Optional plugin factories; entry points are used when ``None``.

    Returns:
        CommandRegistry: Registry ready to parse arguments.
    """

    registry = CommandRegistry(config)
    register_commands(registry, plugins=plugins)
    return registry


def run(
    argv: Sequence[str] | None = None,
    *,
    cwd: Path | None = None,
    bootstrap: Callable[[], None] = run_setup_env,
    plugins: Sequence[CommandPlugin] | None = None,
) -> None:
    """Bootstrap the environment, register commands, and dispatch ``argv``.

    Args:
        argv: Arguments excluding the program name; defaults to ``sys.argv[1:]``.
        cwd: Directory used for configuration discovery.
        bootstrap: Environment setup step; its failures propagate uncaught.
        plugins: Optional plugin factories; entry points are used when ``None``.

    Raises:
        SystemExit: With the exit status of the dispatched command.
    """

    args = list(sys.argv[1:] if argv is None else argv)
    configure_logging()

    LOGGER.debug("state: bootstrapping")
    bootstrap()

    try:
        config = load_config(args, cwd=cwd)
    except CLIError as exc:
        report_failure(exc.message)
        raise SystemExit(exc.exit_code) from exc

    LOGGER.debug("state: registering")
    registry = build_registry(config, plugins=plugins)

    LOGGER.debug("state: awaiting invocation")
    registry.main(args)


def main() -> None:
    """Console-script entry point."""

    run()


__all__ = ["build_registry", "main", "run"]
