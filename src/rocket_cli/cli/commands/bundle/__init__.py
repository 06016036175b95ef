# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Bundle CLI command package."""

from __future__ import annotations

from typing import Final

from rocket_cli import __version__
from rocket_cli.cli.descriptors import CommandDescriptor, Example, PackageInfo
from rocket_cli.cli.registry import CommandRegistry

from .command import bundle_command
from .options import BUNDLE_OPTIONS

BUNDLE_COMMAND: Final[CommandDescriptor] = CommandDescriptor(
    name="bundle",
    description="Builds the javascript bundle for offline use",
    handler=bundle_command,
    options=BUNDLE_OPTIONS,
    examples=(
        Example(
            "Bundle an iOS release build",
            "rocket-cli bundle --entry-file index.js --platform ios --dev false",
        ),
        Example(
            "Bundle for Android with a source map",
            "rocket-cli bundle --entry-file index.js --platform android "
            "--bundle-output build/index.android.bundle --sourcemap-output build/index.android.map",
        ),
    ),
    package=PackageInfo("rocket-cli", __version__),
)

__all__ = ["BUNDLE_COMMAND", "register"]


def register(registry: CommandRegistry) -> None:
    """Register the bundle command on ``registry``.

    Args:
        registry: Command registry receiving the bundle command.
    """

    registry.add(BUNDLE_COMMAND)
