# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Declarative descriptors for commands and their options."""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Final, TypeAlias

from ..config import RocketConfig

OptionValues: TypeAlias = Mapping[str, Any]
HandlerResult: TypeAlias = Awaitable[object] | object
CommandHandler: TypeAlias = Callable[[list[str], RocketConfig, OptionValues], HandlerResult]
OptionParser: TypeAlias = Callable[[str], Any]
DefaultResolver: TypeAlias = Callable[[RocketConfig], Any]


@dataclass(frozen=True, slots=True)
class LiteralDefault:
    """Default used verbatim, even when the value is itself callable."""

    value: Any

    def resolve(self, config: RocketConfig) -> Any:
        """Return the literal value.

        Args:
            config: Ignored; present so all defaults share one signature.

        Returns:
            Any: The stored value.
        """

        del config
        return self.value


@dataclass(frozen=True, slots=True)
class ConfigDefault:
    """Default computed from the configuration object at registration time."""

    resolver: DefaultResolver

    def resolve(self, config: RocketConfig) -> Any:
        """Return ``resolver(config)``.

        Args:
            config: Configuration passed to the resolver.

        Returns:
            Any: Value produced by the resolver.
        """

        return self.resolver(config)


OptionDefault: TypeAlias = LiteralDefault | ConfigDefault


def literal(value: Any) -> LiteralDefault:
    """Return a :class:`LiteralDefault` wrapping ``value``."""

    return LiteralDefault(value)


def from_config(resolver: DefaultResolver) -> ConfigDefault:
    """Return a :class:`ConfigDefault` wrapping ``resolver``."""

    return ConfigDefault(resolver)


def identity(value: str) -> Any:
    """Return ``value`` unchanged."""

    return value


@dataclass(frozen=True, slots=True)
class OptionDescriptor:
    """Describe one command-line flag.

    Attributes:
        command: Flag pattern such as ``"-e, --entry-file <path>"``.
        description: Help text for the flag.
        parse: Conversion applied to supplied string values.
        default: Tagged default, or ``None`` for no default.
        required: Whether the dispatcher rejects invocations lacking a value.
    """

    command: str
    description: str = ""
    parse: OptionParser | None = None
    default: OptionDefault | None = None
    required: bool = False

    @property
    def parser(self) -> OptionParser:
        """Return the configured parse function or :func:`identity`."""

        return self.parse if self.parse is not None else identity

    def resolve_default(self, config: RocketConfig) -> Any:
        """Return the effective default for ``config``.

        Args:
            config: Configuration passed to config-derived defaults.

        Returns:
            Any: Resolved default, or ``None`` when no default is declared.
        """

        if self.default is None:
            return None
        return self.default.resolve(config)


@dataclass(frozen=True, slots=True)
class Example:
    """One usage example rendered in command help."""

    description: str
    command: str


@dataclass(frozen=True, slots=True)
class PackageInfo:
    """Source package metadata rendered in command help."""

    name: str
    version: str

    def __str__(self) -> str:
        return f"{self.name}@{self.version}"


@dataclass(frozen=True, slots=True)
class CommandDescriptor:
    """Describe a CLI subcommand and the handler that implements it.

    A command without ``description`` stays callable but is hidden from help.
    """

    name: str
    handler: CommandHandler
    description: str | None = None
    options: Sequence[OptionDescriptor] = field(default_factory=tuple)
    examples: Sequence[Example] = field(default_factory=tuple)
    package: PackageInfo | None = None


__all__: Final = [
    "CommandDescriptor",
    "CommandHandler",
    "ConfigDefault",
    "Example",
    "LiteralDefault",
    "OptionDefault",
    "OptionDescriptor",
    "OptionValues",
    "PackageInfo",
    "from_config",
    "identity",
    "literal",
]
