# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Request model handed to bundler implementations."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import Literal, TypeAlias

from pydantic import BaseModel, ConfigDict, Field

from rocket_cli.config import RocketConfig

BundleEncoding: TypeAlias = Literal["utf8", "utf16le", "ascii"]


class BundleRequest(BaseModel):
    """Validated options of a ``bundle`` invocation."""

    model_config = ConfigDict(frozen=True)

    entry_file: Path
    platform: str = "ios"
    transformer: str | None = None
    dev: bool = True
    prepack: bool = False
    bundle_output: Path
    bundle_encoding: BundleEncoding = "utf8"
    max_workers: int | None = Field(default=None, ge=1, strict=True)
    sourcemap_output: Path | None = None
    assets_dest: Path | None = None
    verbose: bool = False
    reset_cache: bool = False
    read_global_cache: bool = False
    extra_args: tuple[str, ...] = ()


Bundler: TypeAlias = Callable[[BundleRequest, RocketConfig], Awaitable[object] | object]

__all__ = ["BundleEncoding", "BundleRequest", "Bundler"]
