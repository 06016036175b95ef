# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Failure hierarchy shared by the configuration, registry, and dispatch layers."""

from __future__ import annotations

from typing import Final


class CLIError(RuntimeError):
    """Error raised when a CLI command fails and should exit with a status code."""

    def __init__(self, message: str, *, exit_code: int = 1) -> None:
        """Initialise the error with a message and exit code.

        Args:
            message: Human-readable error message shown to the user.
            exit_code: Exit status associated with the failure.
        """

        super().__init__(message)
        self.message = message
        self.exit_code = exit_code


class ValidationError(CLIError):
    """Raised when command input is rejected before the handler runs."""


class MissingRequiredOption(ValidationError):
    """Raised when an option declared as required was not supplied."""

    def __init__(self, flag: str) -> None:
        """Record the flag pattern of the missing option.

        Args:
            flag: Flag pattern exactly as declared on the option descriptor.
        """

        super().__init__(f'Option "{flag}" is missing')
        self.flag = flag


class HandlerError(CLIError):
    """Wrap an arbitrary exception raised by a command handler."""

    @classmethod
    def from_exception(cls, exc: BaseException) -> HandlerError:
        """Return a handler error carrying the text of ``exc``.

        Args:
            exc: Exception raised while the handler executed.

        Returns:
            HandlerError: Error whose message is ``str(exc)``, or the exception
            class name when the exception carries no text.
        """

        message = str(exc) or type(exc).__name__
        error = cls(message)
        error.__cause__ = exc
        return error


class ConfigError(CLIError):
    """Raised when the CLI configuration cannot be located or parsed."""


class BundlerNotFoundError(CLIError):
    """Raised when no bundler implementation can be resolved for ``bundle``."""


__all__: Final = [
    "BundlerNotFoundError",
    "CLIError",
    "ConfigError",
    "HandlerError",
    "MissingRequiredOption",
    "ValidationError",
]
