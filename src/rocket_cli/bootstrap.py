# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Environment setup executed once before any command runs."""

from __future__ import annotations

import logging
import subprocess
import sys
from pathlib import Path
from typing import Final

SCRIPTS_DIR: Final[Path] = Path(__file__).resolve().parent / "scripts"
WINDOWS_SCRIPT: Final[str] = "setup_env.bat"
POSIX_SCRIPT: Final[str] = "setup_env.sh"

LOGGER = logging.getLogger(__name__)


def is_windows(platform: str | None = None) -> bool:
    """Return ``True`` when ``platform`` names a Windows-like platform.

    Args:
        platform: Platform identifier; defaults to :data:`sys.platform`.

    Returns:
        bool: ``True`` for identifiers starting with ``win``.
    """

    return (platform if platform is not None else sys.platform).startswith("win")


def setup_env_script(platform: str | None = None, *, scripts_dir: Path = SCRIPTS_DIR) -> Path:
    """Return the setup script matching ``platform``.

    Args:
        platform: Platform identifier; defaults to :data:`sys.platform`.
        scripts_dir: Directory holding the shipped setup scripts.

    Returns:
        Path: Location of the platform's setup script.
    """

    name = WINDOWS_SCRIPT if is_windows(platform) else POSIX_SCRIPT
    return scripts_dir / name


def _script_command(script: Path, platform: str | None) -> list[str]:
    if is_windows(platform):
        return ["cmd", "/c", str(script)]
    return ["/bin/sh", str(script)]


def run_setup_env(platform: str | None = None, *, scripts_dir: Path = SCRIPTS_DIR) -> None:
    """Run the platform setup script, blocking until it exits.

    Failures are deliberately left unhandled: a broken environment invalidates
    every command that would follow.

    Args:
        platform: Platform identifier; defaults to :data:`sys.platform`.
        scripts_dir: Directory holding the shipped setup scripts.

    Raises:
        FileNotFoundError: If the setup script does not exist.
        subprocess.CalledProcessError: If the script exits with a non-zero status.
    """

    script = setup_env_script(platform, scripts_dir=scripts_dir)
    if not script.is_file():
        raise FileNotFoundError(f"Environment setup script not found: {script}")
    command = _script_command(script, platform)
    LOGGER.debug("Running environment setup: %s", command)
    subprocess.run(command, check=True)


__all__ = ["SCRIPTS_DIR", "is_windows", "run_setup_env", "setup_env_script"]
