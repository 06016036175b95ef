# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""CLI configuration model and the loader that locates it."""

from __future__ import annotations

import logging
import os
import tomllib
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic import ValidationError as PydanticValidationError

from .errors import ConfigError

CONFIG_FILENAME: Final[str] = "rocket.config.toml"
PYPROJECT_FILENAME: Final[str] = "pyproject.toml"
PYPROJECT_TOOL_KEY: Final[str] = "tool"
PYPROJECT_SECTION_KEY: Final[str] = "rocket"
CONFIG_FLAG: Final[str] = "--config"
ENV_PREFIX: Final[str] = "ROCKET_"
ENV_OVERRIDES: Final[tuple[str, ...]] = ("bundler", "transformer", "max_workers", "output_dir")
PATH_FIELDS: Final[tuple[str, ...]] = ("root", "output_dir")
PATH_LIST_FIELDS: Final[tuple[str, ...]] = ("project_roots", "asset_roots")

LOGGER = logging.getLogger(__name__)


class RocketConfig(BaseModel):
    """Configuration threaded unchanged into every command handler."""

    model_config = ConfigDict(frozen=True, extra="allow")

    root: Path = Field(default_factory=Path.cwd)
    source: Path | None = None
    project_roots: tuple[Path, ...] = ()
    asset_roots: tuple[Path, ...] = ()
    output_dir: Path | None = None
    bundler: str | None = None
    transformer: str | None = None
    max_workers: int | None = Field(default=None, ge=1)
    reset_cache: bool = False

    @model_validator(mode="before")
    @classmethod
    def _fill_root_defaults(cls, data: Any) -> Any:
        if not isinstance(data, Mapping):
            return data
        document = dict(data)
        root = Path(document.get("root") or Path.cwd())
        document["root"] = root
        if not document.get("project_roots"):
            document["project_roots"] = (root,)
        if document.get("output_dir") is None:
            document["output_dir"] = root / "build"
        return document


def find_config_argument(argv: Sequence[str]) -> str | None:
    """Return the ``--config`` value present in ``argv``.

    The configuration has to exist before commands are registered, so the flag
    is read ahead of the Click parser, which only sees it as a placeholder.

    Args:
        argv: Command-line arguments excluding the program name.

    Returns:
        str | None: Last value supplied for ``--config``; ``None`` when absent.
    """

    found: str | None = None
    iterator = iter(argv)
    for token in iterator:
        if token == "--":
            break
        if token == CONFIG_FLAG:
            value = next(iterator, None)
            if value is not None and not value.startswith("-"):
                found = value
            continue
        if token.startswith(f"{CONFIG_FLAG}="):
            found = token.split("=", 1)[1] or None
    return found


class ConfigLoader:
    """Locate and parse the CLI configuration for a working directory."""

    def __init__(self, cwd: Path, *, env: Mapping[str, str] | None = None) -> None:
        """Initialise the loader.

        Args:
            cwd: Directory from which configuration discovery starts.
            env: Environment used for ``ROCKET_*`` overrides; defaults to
                :data:`os.environ`.
        """

        self._cwd = cwd
        self._env = os.environ if env is None else env

    def load(self, explicit: str | Path | None = None) -> RocketConfig:
        """Return the effective configuration.

        Args:
            explicit: Path given via ``--config``. When ``None`` the loader
                searches ``cwd`` and its parents.

        Returns:
            RocketConfig: Validated configuration.

        Raises:
            ConfigError: If the configuration is missing, unreadable, or invalid.
        """

        if explicit is not None:
            path = Path(explicit).expanduser()
            if not path.is_absolute():
                path = self._cwd / path
            if not path.is_file():
                raise ConfigError(f"Configuration file not found: {path}")
            payload = self._read_section(path)
            return self._build(payload, path)

        discovered = self._discover()
        if discovered is None:
            LOGGER.debug("No configuration file found from %s; using defaults", self._cwd)
            return self._build({}, None)
        path, payload = discovered
        return self._build(payload, path)

    def _discover(self) -> tuple[Path, dict[str, Any]] | None:
        for directory in (self._cwd, *self._cwd.parents):
            candidate = directory / CONFIG_FILENAME
            if candidate.is_file():
                return candidate, self._read_section(candidate)
            pyproject = directory / PYPROJECT_FILENAME
            if pyproject.is_file():
                section = self._read_section(pyproject)
                if section:
                    return pyproject, section
        return None

    def _read_section(self, path: Path) -> dict[str, Any]:
        try:
            with path.open("rb") as handle:
                data = tomllib.load(handle)
        except (OSError, tomllib.TOMLDecodeError) as exc:
            raise ConfigError(f"Unable to read configuration at {path}: {exc}") from exc
        if path.name != PYPROJECT_FILENAME:
            return dict(data)
        tool_section = data.get(PYPROJECT_TOOL_KEY)
        if not isinstance(tool_section, Mapping):
            return {}
        section = tool_section.get(PYPROJECT_SECTION_KEY)
        if section is None:
            return {}
        if not isinstance(section, Mapping):
            raise ConfigError(f"[tool.rocket] in {path} must be a table")
        return dict(section)

    def _build(self, payload: Mapping[str, Any], path: Path | None) -> RocketConfig:
        base_dir = path.parent if path is not None else self._cwd
        document: dict[str, Any] = {"root": base_dir, **payload, "source": path}
        for key in ENV_OVERRIDES:
            override = self._env.get(f"{ENV_PREFIX}{key.upper()}")
            if override:
                document[key] = override
        for key in PATH_FIELDS:
            if document.get(key) is not None:
                document[key] = _resolve(base_dir, document[key])
        for key in PATH_LIST_FIELDS:
            if document.get(key) is not None:
                document[key] = _resolve_many(base_dir, key, document[key])
        try:
            config = RocketConfig.model_validate(document)
        except PydanticValidationError as exc:
            origin = path if path is not None else "defaults"
            raise ConfigError(f"Invalid configuration ({origin}): {exc}") from exc
        LOGGER.debug("Loaded configuration from %s", origin_label(config))
        return config


def origin_label(config: RocketConfig) -> str:
    """Return a human-readable description of where ``config`` came from.

    Args:
        config: Loaded configuration.

    Returns:
        str: Source path, or ``"built-in defaults"``.
    """

    return str(config.source) if config.source is not None else "built-in defaults"


def _resolve(base_dir: Path, value: Any) -> Path:
    path = Path(value).expanduser()
    return path if path.is_absolute() else base_dir / path


def _resolve_many(base_dir: Path, key: str, values: Any) -> tuple[Path, ...]:
    if isinstance(values, (str, Path)) or not isinstance(values, Sequence):
        raise ConfigError(f"Configuration key '{key}' must be a list of paths")
    return tuple(_resolve(base_dir, value) for value in values)


def load_config(argv: Sequence[str], *, cwd: Path | None = None) -> RocketConfig:
    """Load configuration honouring a ``--config`` flag found in ``argv``.

    Args:
        argv: Command-line arguments excluding the program name.
        cwd: Directory from which discovery starts; defaults to the process cwd.

    Returns:
        RocketConfig: Validated configuration.
    """

    loader = ConfigLoader(cwd if cwd is not None else Path.cwd())
    return loader.load(find_config_argument(argv))


__all__: Final = [
    "CONFIG_FILENAME",
    "ConfigLoader",
    "RocketConfig",
    "find_config_argument",
    "load_config",
    "origin_label",
]
