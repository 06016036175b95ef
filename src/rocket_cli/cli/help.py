# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Help page rendering for descriptor-backed commands."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from io import StringIO

from click.core import Context, Parameter
from click.formatting import HelpFormatter
from rich.console import Console
from rich.text import Text

from .descriptors import Example, PackageInfo

OPTION_INDENT = "    "
ARGUMENT_PARAM_TYPE = "argument"


def _sort_name(param: Parameter) -> str:
    """Return the option name ``param`` is listed under, without dashes."""

    names = list(param.opts)
    name = next((item for item in names if item.startswith("--")), names[0] if names else param.name or "")
    return name.lstrip("-").lower()


def sorted_option_records(params: Iterable[Parameter], ctx: Context) -> list[tuple[str, str]]:
    """Return help records for the options in ``params`` sorted by name.

    Args:
        params: Parameters attached to a command, including ``--help``.
        ctx: Click context used to render each record.

    Returns:
        list[tuple[str, str]]: ``(flags, help)`` pairs; arguments are skipped.
    """

    entries: list[tuple[tuple[str, int], tuple[str, str]]] = []
    for index, param in enumerate(params):
        if getattr(param, "param_type_name", "") == ARGUMENT_PARAM_TYPE:
            continue
        record = param.get_help_record(ctx)
        if record is None:
            continue
        entries.append(((_sort_name(param), index), record))
    return [record for _, record in sorted(entries, key=lambda item: item[0])]


@dataclass(slots=True)
class HelpPage:
    """Content of a command help page."""

    usage: str
    description: str | None
    option_records: Sequence[tuple[str, str]]
    package: PackageInfo | None = None
    examples: Sequence[Example] = field(default_factory=tuple)


def _format_options(records: Sequence[tuple[str, str]]) -> str:
    formatter = HelpFormatter()
    formatter.write_dl(list(records))
    lines = formatter.getvalue().rstrip("\n").splitlines()
    return "\n".join(f"{OPTION_INDENT}{line}" if line else line for line in lines)


def render_help(page: HelpPage, *, color: bool = False) -> str:
    """Return the help text for ``page``.

    Args:
        page: Help content to render.
        color: Whether ANSI styling should be emitted.

    Returns:
        str: Rendered help page terminated by a blank line.
    """

    buffer = StringIO()
    console = Console(
        file=buffer,
        force_terminal=color,
        no_color=not color,
        color_system="standard" if color else None,
        emoji=False,
        highlight=False,
        soft_wrap=True,
    )

    console.print()
    console.print(Text(f"  {page.usage}", style="bold cyan"))
    console.print(Text(f"  {page.description or ''}"))
    console.print()
    if page.package is not None:
        line = Text("  ")
        line.append("Source:", style="bold")
        line.append(f" {page.package}")
        console.print(line)
        console.print()
    console.print(Text("  Options:", style="bold"))
    console.print()
    console.print(Text(_format_options(page.option_records)))
    console.print()

    if page.examples:
        console.print(Text("  Example usage:", style="bold"))
        console.print()
        for index, example in enumerate(page.examples):
            if index:
                console.print()
            console.print(Text(f"    {example.description}: "))
            console.print(Text(f"    {example.command}", style="cyan"))
    console.print()
    return buffer.getvalue()


__all__ = ["HelpPage", "render_help", "sorted_option_records"]
