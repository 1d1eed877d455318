"""
platform layout tables for libvenvshell.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Final

WINDOWS: Final = "win32"

# interpreter names to probe on the search path, in priority order
PYTHON_CANDIDATES: Final[dict[str, tuple[str, ...]]] = {
    WINDOWS: ("python3.exe", "python.exe"),
}
DEFAULT_PYTHON_CANDIDATES: Final[tuple[str, ...]] = ("python3", "python")


def current_platform(platform: str | None = None) -> str:
    """return `platform` if given, else `sys.platform`."""
    return platform if platform is not None else sys.platform


def candidate_names(platform: str | None = None) -> tuple[str, ...]:
    """
    get the interpreter candidate names for a platform.

    arguments:
        `platform: str | None`
            a `sys.platform` style identifier. if None, uses the running platform.

    returns: `tuple[str, ...]`
        executable names in the order they should be probed
    """
    return PYTHON_CANDIDATES.get(current_platform(platform), DEFAULT_PYTHON_CANDIDATES)


def scripts_dir(venv_path: Path, platform: str | None = None) -> Path:
    """get the directory holding the interpreter and console scripts of a venv."""
    if current_platform(platform) == WINDOWS:
        # windows: Scripts/
        return venv_path.joinpath("Scripts")
    # unix: bin/
    return venv_path.joinpath("bin")


def interpreter_path(venv_path: Path, platform: str | None = None) -> Path:
    """
    get the python executable path for a virtual environment.

    handles cross-platform differences between windows and unix. the path is
    returned whether or not it exists.

    arguments:
        `venv_path: Path`
            path to the virtual environment
        `platform: str | None`
            a `sys.platform` style identifier. if None, uses the running platform.

    returns: `Path`
        path to the environment's python executable
    """
    if current_platform(platform) == WINDOWS:
        return scripts_dir(venv_path, platform).joinpath("python.exe")
    return scripts_dir(venv_path, platform).joinpath("python")


def is_provisioned(venv_path: Path, platform: str | None = None) -> bool:
    """check whether a venv directory already holds its interpreter."""
    return interpreter_path(venv_path, platform).exists()


__all__ = [
    "WINDOWS",
    "PYTHON_CANDIDATES",
    "DEFAULT_PYTHON_CANDIDATES",
    "current_platform",
    "candidate_names",
    "scripts_dir",
    "interpreter_path",
    "is_provisioned",
]
