# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Command-line front-end for the Rocket bundler."""

from __future__ import annotations

from typing import Final

__version__: Final[str] = "1.0.0"

__all__ = ["__version__"]
