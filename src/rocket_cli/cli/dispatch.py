# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Validate parsed input and run a command handler with uniform error reporting."""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Sequence
from enum import StrEnum

import click
import typer

from ..config import RocketConfig
from ..console import report_failure
from ..errors import CLIError, HandlerError
from .descriptors import CommandDescriptor, OptionValues
from .validation import assert_required_options

LOGGER = logging.getLogger(__name__)


class DispatchState(StrEnum):
    """Lifecycle of a single command dispatch."""

    IDLE = "idle"
    VALIDATING = "validating"
    EXECUTING = "executing"
    DONE = "done"
    FAILED = "failed"


class Dispatcher:
    """Run one command descriptor against parsed arguments and options."""

    def __init__(self, descriptor: CommandDescriptor, config: RocketConfig) -> None:
        """Bind the dispatcher to ``descriptor`` and ``config``.

        Args:
            descriptor: Command whose handler is invoked.
            config: Configuration passed unchanged to the handler.
        """

        self.descriptor = descriptor
        self.config = config
        self.state = DispatchState.IDLE

    def _transition(self, state: DispatchState) -> None:
        LOGGER.debug("%s: %s -> %s", self.descriptor.name, self.state, state)
        self.state = state

    async def run(self, argv: Sequence[str], options: OptionValues) -> None:
        """Validate ``options`` and invoke the handler, awaiting its result.

        Args:
            argv: Positional arguments supplied to the command.
            options: Parsed option values keyed by destination name.

        Raises:
            CLIError: Normalised failure from validation or the handler.
            click.exceptions.Exit: Raised by the handler to end with its own status.
            click.ClickException: Raised by the handler; Click reports it.
        """

        try:
            self._transition(DispatchState.VALIDATING)
            assert_required_options(self.descriptor.options, options)
            self._transition(DispatchState.EXECUTING)
            result = self.descriptor.handler(list(argv), self.config, options)
            if inspect.isawaitable(result):
                await result
        except click.exceptions.Exit as exc:
            self._transition(DispatchState.FAILED if exc.exit_code else DispatchState.DONE)
            raise
        except (CLIError, click.ClickException):
            self._transition(DispatchState.FAILED)
            raise
        except Exception as exc:
            self._transition(DispatchState.FAILED)
            raise HandlerError.from_exception(exc) from exc
        self._transition(DispatchState.DONE)

    def dispatch(self, argv: Sequence[str], options: OptionValues) -> None:
        """Run the command to completion, exiting with status 1 on failure.

        Args:
            argv: Positional arguments supplied to the command.
            options: Parsed option values keyed by destination name.

        Raises:
            typer.Exit: With the failure's exit code after the message is reported.
        """

        try:
            asyncio.run(self.run(argv, options))
        except CLIError as exc:
            LOGGER.debug("Command %s failed", self.descriptor.name, exc_info=exc)
            report_failure(exc.message)
            raise typer.Exit(code=exc.exit_code) from exc


__all__ = ["DispatchState", "Dispatcher"]
