# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Handler for the ``bundle`` command and bundler resolution."""

from __future__ import annotations

import inspect
import logging
from collections.abc import Sequence
from importlib import import_module
from typing import Any, cast

from pydantic import ValidationError as PydanticValidationError

from rocket_cli.cli.descriptors import OptionValues
from rocket_cli.config import RocketConfig
from rocket_cli.console import info, ok
from rocket_cli.errors import BundlerNotFoundError, CLIError
from rocket_cli.plugins import BUNDLER_PLUGIN_GROUP, select_entry_points

from .models import Bundler, BundleRequest

LOGGER = logging.getLogger(__name__)


def _import_reference(reference: str) -> Bundler:
    module_name, _, attribute = reference.partition(":")
    try:
        module = import_module(module_name)
    except ImportError as exc:
        raise BundlerNotFoundError(f"Unable to import bundler module '{module_name}': {exc}") from exc
    target: Any = module
    for part in attribute.split("."):
        try:
            target = getattr(target, part)
        except AttributeError as exc:
            raise BundlerNotFoundError(f"Bundler '{reference}' does not exist") from exc
    if not callable(target):
        raise BundlerNotFoundError(f"Bundler '{reference}' is not callable")
    return cast(Bundler, target)


def resolve_bundler(config: RocketConfig) -> Bundler:
    """Return the bundler implementation selected by ``config``.

    ``config.bundler`` may be a ``module:attribute`` reference or the name of
    an entry point in the ``rocket_cli.bundlers`` group. Without a setting, the
    single installed entry point is used.

    Args:
        config: Active CLI configuration.

    Returns:
        Bundler: Callable accepting ``(request, config)``.

    Raises:
        BundlerNotFoundError: If no unambiguous bundler can be resolved.
    """

    reference = config.bundler
    if reference and ":" in reference:
        return _import_reference(reference)

    entries = select_entry_points(BUNDLER_PLUGIN_GROUP)
    if reference:
        matches = [entry for entry in entries if entry.name == reference]
        if not matches:
            raise BundlerNotFoundError(f"No bundler named '{reference}' is installed")
        return cast(Bundler, matches[0].load())
    if not entries:
        raise BundlerNotFoundError(
            "No bundler configured. Set 'bundler' in rocket.config.toml or install a bundler plugin."
        )
    if len(entries) > 1:
        names = ", ".join(sorted(entry.name for entry in entries))
        raise BundlerNotFoundError(f"Multiple bundlers installed ({names}); set 'bundler' to choose one")
    return cast(Bundler, entries[0].load())


def build_request(argv: Sequence[str], options: OptionValues) -> BundleRequest:
    """Return the validated :class:`BundleRequest` for parsed options.

    Args:
        argv: Positional arguments passed to ``bundle``.
        options: Parsed option values keyed by destination name.

    Returns:
        BundleRequest: Validated request.

    Raises:
        CLIError: If an option value is invalid.
    """

    payload = {key: value for key, value in options.items() if value is not None and key != "config"}
    payload["extra_args"] = tuple(argv)
    try:
        return BundleRequest.model_validate(payload)
    except PydanticValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in exc.errors()
        )
        raise CLIError(f"Invalid bundle options: {problems}") from exc


async def bundle_command(argv: list[str], config: RocketConfig, options: OptionValues) -> None:
    """Build a bundle by delegating to the configured bundler.

    Args:
        argv: Positional arguments passed to ``bundle``.
        config: Active CLI configuration.
        options: Parsed option values keyed by destination name.
    """

    request = build_request(argv, options)
    bundler = resolve_bundler(config)
    if request.verbose:
        info(f"Bundling {request.entry_file} for {request.platform}")
    LOGGER.debug("Invoking bundler %r with %s", bundler, request)
    result = bundler(request, config)
    if inspect.isawaitable(result):
        await result
    ok(f"Bundle written to {request.bundle_output}")


__all__ = ["build_request", "bundle_command", "resolve_bundler"]
