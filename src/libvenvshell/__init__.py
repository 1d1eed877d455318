"""
python virtual environments, managed in code.

libvenvshell locates a system python, creates or reuses a virtual environment,
and runs code, scripts, modules and pip inside it.

functions:
    `def find_python3(shell: Shell | None = None, platform: str | None = None) -> Path`
        find a python 3 interpreter on the search path
    `def ensure(name_or_path: str | Path, shell: Shell | None = None, python: str | Path | None = None) -> VirtualEnvironment`
        create or reuse a virtual environment at a path
"""

from __future__ import annotations

from .config import Config
from .errors import (
    CreationFailed,
    ExecutionFailed,
    InterpreterNotFound,
    SpawnFailed,
    VenvShellError,
)
from .locator import find_python3
from .models import candidate_names, interpreter_path, is_provisioned
from .shell import Shell
from .venv import VirtualEnvironment, ensure

__version__ = "0.1.0"
__all__ = [
    "Config",
    "CreationFailed",
    "ExecutionFailed",
    "InterpreterNotFound",
    "Shell",
    "SpawnFailed",
    "VenvShellError",
    "VirtualEnvironment",
    "candidate_names",
    "ensure",
    "find_python3",
    "interpreter_path",
    "is_provisioned",
]
