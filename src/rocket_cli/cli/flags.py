# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Parse option flag patterns such as ``"-e, --entry-file <path>"``."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import StrEnum
from typing import Final

_VALUE_RE: Final[re.Pattern[str]] = re.compile(r"(<[^>]*>|\[[^\]]*\])\s*$")
_SEPARATOR_RE: Final[re.Pattern[str]] = re.compile(r"[\s,|]+")
_NEGATION_PREFIX: Final[str] = "--no-"
_LONG_PREFIX: Final[str] = "--"


class ValueKind(StrEnum):
    """How a flag consumes a value."""

    NONE = "none"
    REQUIRED = "required"
    OPTIONAL = "optional"


@dataclass(frozen=True, slots=True)
class FlagSpec:
    """Structured form of a flag pattern.

    Attributes:
        pattern: The original pattern text.
        short: Short alias (``-e``) when present.
        long: Long name (``--entry-file``) when present.
        value_kind: Whether a value is forbidden, required, or optional.
        metavar: Value placeholder exactly as written (``<path>``).
        negated: ``True`` for ``--no-*`` flags, which default to ``True``.
        dest: Key under which the parsed value is stored (``entry_file``).
    """

    pattern: str
    short: str | None
    long: str | None
    value_kind: ValueKind
    metavar: str | None
    negated: bool
    dest: str

    @property
    def opts(self) -> list[str]:
        """Return the flag names in declaration order."""

        return [name for name in (self.short, self.long) if name is not None]


def _dest_for(short: str | None, long: str | None, *, negated: bool) -> str:
    if long is not None:
        prefix = _NEGATION_PREFIX if negated else _LONG_PREFIX
        return long[len(prefix) :].replace("-", "_")
    return (short or "").lstrip("-")


def parse_flag_pattern(pattern: str) -> FlagSpec:
    """Return the :class:`FlagSpec` described by ``pattern``.

    Args:
        pattern: Flag pattern using ``<value>`` for required values and
            ``[value]`` for optional ones.

    Returns:
        FlagSpec: Parsed flag structure.

    Raises:
        ValueError: If the pattern declares no flag name or malformed names.
    """

    head = pattern
    metavar: str | None = None
    value_kind = ValueKind.NONE
    match = _VALUE_RE.search(pattern)
    if match is not None:
        metavar = match.group(1)
        head = pattern[: match.start()]
        value_kind = ValueKind.REQUIRED if metavar.startswith("<") else ValueKind.OPTIONAL

    names = [token for token in _SEPARATOR_RE.split(head) if token]
    if not names or any(not name.startswith("-") or name.strip("-") == "" for name in names):
        raise ValueError(f"Invalid option flag pattern: {pattern!r}")

    short = next((name for name in names if not name.startswith(_LONG_PREFIX)), None)
    long = next((name for name in names if name.startswith(_LONG_PREFIX)), None)
    negated = long is not None and long.startswith(_NEGATION_PREFIX) and value_kind is ValueKind.NONE
    return FlagSpec(
        pattern=pattern,
        short=short,
        long=long,
        value_kind=value_kind,
        metavar=metavar,
        negated=negated,
        dest=_dest_for(short, long, negated=negated),
    )


__all__ = ["FlagSpec", "ValueKind", "parse_flag_pattern"]
