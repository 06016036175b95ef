# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Module entry point for ``python -m rocket_cli``."""

from __future__ import annotations

from .cli.app import run

if __name__ == "__main__":
    run()
