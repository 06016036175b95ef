# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Required-option validation run before a command handler."""

from __future__ import annotations

from collections.abc import Iterable

from ..errors import MissingRequiredOption
from .descriptors import OptionDescriptor, OptionValues
from .flags import parse_flag_pattern


def assert_required_options(options: Iterable[OptionDescriptor], passed: OptionValues) -> None:
    """Raise when a required option has no value in ``passed``.

    Args:
        options: Option descriptors declared by the command.
        passed: Parsed option values keyed by destination name.

    Raises:
        MissingRequiredOption: For the first required option whose value is ``None``.
    """

    for option in options:
        if not option.required:
            continue
        dest = parse_flag_pattern(option.command).dest
        if passed.get(dest) is None:
            raise MissingRequiredOption(option.command)


__all__ = ["assert_required_options"]
