# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Bind declarative command descriptors onto a Click group."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any, Final

import click
import typer
from click.core import Context, ParameterSource
from typer.core import TyperCommand, TyperGroup

from .. import __version__
from ..config import RocketConfig
from ..console import detect_tty
from .descriptors import CommandDescriptor, OptionDescriptor, OptionParser
from .dispatch import Dispatcher
from .flags import FlagSpec, ValueKind, parse_flag_pattern
from .help import HelpPage, render_help, sorted_option_records

PROG_NAME: Final[str] = "rocket-cli"
CONFIG_OPTION_DEST: Final[str] = "config"
ARGS_DEST: Final[str] = "args"

LOGGER = logging.getLogger(__name__)


class ParsedValue(click.ParamType):
    """Click type applying an option descriptor's parse function."""

    def __init__(self, parse: OptionParser, metavar: str | None) -> None:
        self._parse = parse
        self._metavar = metavar
        self.name = metavar or "value"

    def convert(self, value: Any, param: click.Parameter | None, ctx: Context | None) -> Any:
        """Return ``parse(value)`` for strings; other values pass through.

        Args:
            value: Raw value from the command line, or a flag sentinel.
            param: Parameter being converted.
            ctx: Active Click context.

        Returns:
            Any: Converted value.
        """

        if not isinstance(value, str):
            return value
        try:
            return self._parse(value)
        except (TypeError, ValueError) as exc:
            self.fail(f"{value!r}: {exc}", param, ctx)

    def get_metavar(self, param: click.Parameter, ctx: Context | None = None) -> str | None:
        return self._metavar


def build_option(option: OptionDescriptor) -> click.Option:
    """Return the Click option described by ``option``.

    Defaults are not attached to the Click option; :class:`DescriptorCommand`
    applies them after parsing so parse functions only see supplied values.

    Args:
        option: Declarative option descriptor.

    Returns:
        click.Option: Option whose values land under the flag's destination name.
    """

    spec: FlagSpec = parse_flag_pattern(option.command)
    decls = [*spec.opts, spec.dest]
    if spec.value_kind is ValueKind.NONE:
        return click.Option(decls, is_flag=True, flag_value=not spec.negated, help=option.description)

    param_type = ParsedValue(option.parser, spec.metavar)
    if spec.value_kind is ValueKind.OPTIONAL:
        return click.Option(decls, is_flag=False, flag_value=True, type=param_type, help=option.description)
    return click.Option(decls, type=param_type, help=option.description)


def resolve_defaults(options: Sequence[OptionDescriptor], config: RocketConfig) -> dict[str, Any]:
    """Return the effective default of every option keyed by destination name.

    Args:
        options: Option descriptors declared by a command.
        config: Configuration passed to config-derived defaults.

    Returns:
        dict[str, Any]: Defaults; negatable flags default to ``True`` and
        options without a default map to ``None``.
    """

    defaults: dict[str, Any] = {}
    for option in options:
        spec = parse_flag_pattern(option.command)
        default = option.resolve_default(config)
        if default is None and spec.negated:
            default = True
        defaults[spec.dest] = default
    return defaults


def config_placeholder_option(*, expose_value: bool = True) -> click.Option:
    """Return the ``--config`` option accepted by the group and every command.

    The value is read before registration; the option only keeps the parser
    from rejecting the flag.

    Args:
        expose_value: Whether the value is passed on to the callback.
    """

    return click.Option(
        ["--config", CONFIG_OPTION_DEST],
        is_flag=False,
        flag_value="",
        type=click.STRING,
        default=None,
        expose_value=expose_value,
        metavar="[string]",
        help="Path to the CLI configuration file",
    )


class DescriptorCommand(TyperCommand):
    """Click command generated from a :class:`CommandDescriptor`."""

    def __init__(self, descriptor: CommandDescriptor, config: RocketConfig) -> None:
        """Build the command's parameters from ``descriptor``.

        Args:
            descriptor: Declarative command definition.
            config: Configuration used for defaults and passed to the handler.
        """

        self.descriptor = descriptor
        self.dispatcher = Dispatcher(descriptor, config)
        self.defaults = resolve_defaults(descriptor.options, config)
        params: list[click.Parameter] = [build_option(option) for option in descriptor.options]
        params.append(config_placeholder_option())
        params.append(click.Argument([ARGS_DEST], nargs=-1))
        super().__init__(
            descriptor.name,
            callback=self._invoke,
            params=params,
            help=descriptor.description,
            hidden=not descriptor.description,
        )

    def _invoke(self, **values: Any) -> None:
        ctx = click.get_current_context()
        argv = [str(item) for item in values.pop(ARGS_DEST, ())]
        for dest, default in self.defaults.items():
            if ctx.get_parameter_source(dest) in (None, ParameterSource.DEFAULT):
                values[dest] = default
        self.dispatcher.dispatch(argv, values)

    def get_help(self, ctx: Context) -> str:
        """Return the descriptor help page for this command.

        Args:
            ctx: Click context of the help invocation.

        Returns:
            str: Rendered help text.
        """

        root = ctx.find_root()
        prog = root.info_name or PROG_NAME
        usage = " ".join([prog, self.name or "", *self.collect_usage_pieces(ctx)])
        page = HelpPage(
            usage=usage,
            description=self.descriptor.description,
            option_records=sorted_option_records(self.get_params(ctx), ctx),
            package=self.descriptor.package,
            examples=self.descriptor.examples,
        )
        return render_help(page, color=bool(ctx.color) or detect_tty()).rstrip("\n")


def _print_version(ctx: Context, _param: click.Parameter, value: bool) -> None:
    if not value or ctx.resilient_parsing:
        return
    typer.echo(__version__)
    ctx.exit()


class CommandRegistry:
    """Own the CLI group and the commands registered on it."""

    def __init__(self, config: RocketConfig, *, name: str = PROG_NAME) -> None:
        """Create an empty registry.

        Args:
            config: Configuration threaded into defaults and handlers.
            name: Program name shown in usage lines.
        """

        self.config = config
        self.group = TyperGroup(
            name=name,
            help="Command-line tools for the Rocket bundler.",
            params=[
                click.Option(
                    ["--version", "-V"],
                    is_flag=True,
                    expose_value=False,
                    is_eager=True,
                    callback=_print_version,
                    help="Show the version and exit.",
                ),
                config_placeholder_option(expose_value=False),
            ],
        )
        self._commands: dict[str, DescriptorCommand] = {}

    @property
    def commands(self) -> Mapping[str, DescriptorCommand]:
        """Return the registered commands keyed by name."""

        return dict(self._commands)

    def add(self, descriptor: CommandDescriptor) -> DescriptorCommand:
        """Register ``descriptor`` and return the generated command.

        Args:
            descriptor: Declarative command definition.

        Returns:
            DescriptorCommand: The Click command added to :attr:`group`.

        Raises:
            ValueError: If a command with the same name is already registered.
        """

        if descriptor.name in self._commands:
            raise ValueError(f"Command '{descriptor.name}' is already registered")
        command = DescriptorCommand(descriptor, self.config)
        self._commands[descriptor.name] = command
        self.group.add_command(command, descriptor.name)
        LOGGER.debug("Registered command %s", descriptor.name)
        return command

    def main(self, argv: Sequence[str], *, prog_name: str | None = None) -> None:
        """Parse ``argv`` and run the matched command.

        Args:
            argv: Command-line arguments excluding the program name.
            prog_name: Program name override for usage output.
        """

        self.group.main(args=list(argv), prog_name=prog_name or self.group.name)


__all__ = [
    "CommandRegistry",
    "DescriptorCommand",
    "PROG_NAME",
    "ParsedValue",
    "build_option",
    "config_placeholder_option",
    "resolve_defaults",
]
