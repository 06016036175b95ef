# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""User-facing console helpers and opt-in debug logging."""

from __future__ import annotations

import logging
import os
import sys
from functools import lru_cache
from typing import Final, Literal, TextIO

import typer
from rich.console import Console
from rich.text import Text

VERBOSE_ENV: Final[str] = "ROCKET_CLI_VERBOSE"

LOGGER = logging.getLogger("rocket_cli")


def detect_tty(stream: TextIO | None = None) -> bool:
    """Return whether ``stream`` (stdout when omitted) is attached to a terminal."""

    target = sys.stdout if stream is None else stream
    isatty = getattr(target, "isatty", None)
    if isatty is None:
        return False
    try:
        return bool(isatty())
    except ValueError:
        return False


@lru_cache(maxsize=8)
def get_console(*, color: bool, emoji: bool) -> Console:
    """Return a Rich console configured for ``color`` and ``emoji`` preferences.

    Args:
        color: ``True`` when ANSI colour output should be enabled.
        emoji: ``True`` when Rich should render emoji glyphs.

    Returns:
        Console: Cached console matching the preferences.
    """

    tty = detect_tty()
    color_system: Literal["auto", "standard", "256", "truecolor", "windows"] | None = (
        "auto" if color and tty else None
    )
    return Console(
        color_system=color_system,
        force_terminal=tty,
        no_color=not (color and tty),
        emoji=emoji,
        soft_wrap=True,
    )


def _emoji(symbol: str, enable: bool) -> str:
    return symbol if enable else ""


def _print_line(msg: str, *, style: str, use_emoji: bool) -> None:
    color_enabled = detect_tty()
    console = get_console(color=color_enabled, emoji=use_emoji)
    text = Text(msg)
    if color_enabled:
        text.stylize(style)
    console.print(text)


def info(msg: str, *, use_emoji: bool = True) -> None:
    """Emit an informational message.

    Args:
        msg: Message text to display.
        use_emoji: Flag indicating whether emoji output is desired.
    """

    _print_line(f"{_emoji('ℹ️ ', use_emoji)}{msg}", style="cyan", use_emoji=use_emoji)


def ok(msg: str, *, use_emoji: bool = True) -> None:
    """Emit a success message.

    Args:
        msg: Message text to display.
        use_emoji: Flag indicating whether emoji output is desired.
    """

    _print_line(f"{_emoji('✅ ', use_emoji)}{msg}", style="green", use_emoji=use_emoji)


def report_failure(message: str) -> None:
    """Write ``message`` to stderr framed by blank lines.

    Args:
        message: Failure text shown to the user.
    """

    typer.echo("", err=True)
    typer.echo(message, err=True)
    typer.echo("", err=True)


def configure_logging() -> None:
    """Stream debug records to stderr when :data:`VERBOSE_ENV` is set."""

    if not os.environ.get(VERBOSE_ENV):
        return
    if getattr(LOGGER, "_rocket_verbose_configured", False):
        return
    handler = logging.StreamHandler(stream=sys.stderr)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    LOGGER.addHandler(handler)
    LOGGER.setLevel(logging.DEBUG)
    LOGGER.propagate = False
    setattr(LOGGER, "_rocket_verbose_configured", True)


__all__ = [
    "VERBOSE_ENV",
    "configure_logging",
    "detect_tty",
    "get_console",
    "info",
    "ok",
    "report_failure",
]
