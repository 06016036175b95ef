# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""CLI command registry."""

from __future__ import annotations

from collections.abc import Callable, Sequence

from rocket_cli.cli.registry import CommandRegistry
from rocket_cli.plugins import load_command_plugins

from . import bundle

__all__ = ["CommandPlugin", "load_cli_plugins", "register_commands"]

CommandPlugin = Callable[[CommandRegistry], None]


def load_cli_plugins() -> Sequence[CommandPlugin]:
    """Return CLI plugin factories discovered via entry points.

    Returns:
        Sequence[CommandPlugin]: Iterable of CLI plugin factories.
    """

    return load_command_plugins()


def register_commands(
    registry: CommandRegistry,
    *,
    plugins: Sequence[CommandPlugin] | None = None,
) -> None:
    """Register built-in and plugin CLI commands on ``registry``.

    Args:
        registry: Registry receiving command registrations.
        plugins: Optional sequence of plugin factories to invoke. When ``None``
            entry points from ``rocket_cli.commands`` are loaded automatically.
    """

    bundle.register(registry)

    plugin_factories = plugins if plugins is not None else load_cli_plugins()
    for register_plugin in plugin_factories:
        register_plugin(registry)
