# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Option descriptors accepted by the ``bundle`` command."""

from __future__ import annotations

from pathlib import Path
from typing import Final

from rocket_cli.cli.descriptors import OptionDescriptor, from_config, literal
from rocket_cli.config import RocketConfig

DEFAULT_BUNDLE_NAME: Final[str] = "main.jsbundle"


def parse_bool(value: str) -> bool:
    """Return ``False`` only for the literal string ``"false"``."""

    return value.strip().lower() != "false"


def parse_positive_int(value: str) -> int:
    """Return ``value`` as a positive integer.

    Raises:
        ValueError: If ``value`` is not an integer greater than zero.
    """

    number = int(value)
    if number < 1:
        raise ValueError("must be a positive integer")
    return number


def default_bundle_output(config: RocketConfig) -> str:
    """Return the bundle path under the configured output directory."""

    output_dir = config.output_dir if config.output_dir is not None else config.root / "build"
    return str(Path(output_dir) / DEFAULT_BUNDLE_NAME)


BUNDLE_OPTIONS: Final[tuple[OptionDescriptor, ...]] = (
    OptionDescriptor(
        "--entry-file <path>",
        "Path to the root JS file, either absolute or relative to JS root",
        required=True,
    ),
    OptionDescriptor(
        "--platform [string]",
        "Either 'ios' or 'android'",
        default=literal("ios"),
    ),
    OptionDescriptor(
        "--transformer [string]",
        "Specify a custom transformer to be used",
        default=from_config(lambda config: config.transformer),
    ),
    OptionDescriptor(
        "--dev [boolean]",
        "If false, warnings are disabled and the bundle is minified",
        parse=parse_bool,
        default=literal(True),
    ),
    OptionDescriptor(
        "--prepack",
        "When passed, the output bundle will use the Prepack format.",
    ),
    OptionDescriptor(
        "--bundle-output <string>",
        "File name where to store the resulting bundle, ex. /tmp/groups.bundle",
        default=from_config(default_bundle_output),
    ),
    OptionDescriptor(
        "--bundle-encoding [string]",
        "Encoding the bundle should be written in (utf8, utf16le, ascii).",
        default=literal("utf8"),
    ),
    OptionDescriptor(
        "--max-workers [number]",
        "Specifies the maximum number of workers the worker-pool will spawn for transforming files. "
        "This defaults to the number of the cores available on your machine.",
        parse=parse_positive_int,
        default=from_config(lambda config: config.max_workers),
    ),
    OptionDescriptor(
        "--sourcemap-output [string]",
        "File name where to store the resulting source map, ex. /tmp/groups.map",
    ),
    OptionDescriptor(
        "--assets-dest [string]",
        "Directory name where to store assets referenced in the bundle",
    ),
    OptionDescriptor(
        "--verbose",
        "Enables logging",
    ),
    OptionDescriptor(
        "--reset-cache",
        "Removes cached files",
        default=from_config(lambda config: config.reset_cache),
    ),
    OptionDescriptor(
        "--read-global-cache",
        "Try to fetch transformed JS code from the global cache, if configured.",
    ),
)

__all__ = ["BUNDLE_OPTIONS", "default_bundle_output", "parse_bool", "parse_positive_int"]
