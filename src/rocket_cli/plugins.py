# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Entry-point plugin loading helpers.

Third-party packages contribute extra CLI commands through the
``rocket_cli.commands`` group and bundler implementations through the
``rocket_cli.bundlers`` group.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from importlib import metadata
from importlib.metadata import EntryPoint
from typing import Any, Final, TypeVar

COMMAND_PLUGIN_GROUP: Final[str] = "rocket_cli.commands"
BUNDLER_PLUGIN_GROUP: Final[str] = "rocket_cli.bundlers"

_FactoryT = TypeVar("_FactoryT")

LOGGER = logging.getLogger(__name__)


def select_entry_points(group: str) -> tuple[EntryPoint, ...]:
    """Return the installed entry points belonging to ``group``.

    Args:
        group: Entry-point group name to inspect.

    Returns:
        tuple[EntryPoint, ...]: Entry points registered under ``group``.
    """

    return tuple(metadata.entry_points(group=group))


def _discover_entry_points(
    entries: Iterable[EntryPoint],
    loader: Callable[[EntryPoint], _FactoryT],
) -> tuple[_FactoryT, ...]:
    """Return loaded callables for ``entries``.

    Entries that fail to import are logged and skipped.

    Args:
        entries: Entry points to load.
        loader: Callable converting an :class:`EntryPoint` into the plugin type.

    Returns:
        tuple[_FactoryT, ...]: Loaded plugins.
    """

    callables: list[_FactoryT] = []
    for entry in entries:
        try:
            plugin = loader(entry)
        except (AttributeError, ImportError, ValueError, RuntimeError) as exc:
            LOGGER.debug("Skipping plugin %s: %s", entry.name, exc)
            continue
        callables.append(plugin)
    return tuple(callables)


def load_command_plugins() -> tuple[Callable[..., Any], ...]:
    """Return command plugin factories discovered via entry points.

    Returns:
        tuple[Callable[..., Any], ...]: Factories accepting a command registry.
    """

    return _discover_entry_points(select_entry_points(COMMAND_PLUGIN_GROUP), loader=lambda entry: entry.load())


__all__ = [
    "BUNDLER_PLUGIN_GROUP",
    "COMMAND_PLUGIN_GROUP",
    "load_command_plugins",
    "select_entry_points",
]
