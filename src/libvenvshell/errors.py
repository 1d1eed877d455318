"""
exceptions raised by libvenvshell.

every fallible operation raises a subclass of `VenvShellError`, so callers
can catch the whole family at once or react to a single kind.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path


class VenvShellError(Exception):
    """base class for all libvenvshell errors."""


class InterpreterNotFound(VenvShellError):
    """
    no candidate python executable could be resolved on the search path.

    attributes:
        `candidates: tuple[str, ...]`
            executable names that were tried, in order
    """

    def __init__(self, candidates: Sequence[str]) -> None:
        self.candidates: tuple[str, ...] = tuple(candidates)
        super().__init__(
            f"no python 3 interpreter found on PATH (tried: {', '.join(self.candidates)})"
        )


class SpawnFailed(VenvShellError):
    """
    the operating system could not start the requested program.

    attributes:
        `program: str`
            program that was being started
        `reason: str`
            message from the underlying os error
    """

    def __init__(self, program: str | Path, reason: str) -> None:
        self.program: str = str(program)
        self.reason: str = reason
        super().__init__(f"failed to spawn '{self.program}': {reason}")


class ExecutionFailed(VenvShellError):
    """
    a program ran but exited with a non-zero status.

    attributes:
        `argv: tuple[str, ...]`
            full command line that was run
        `returncode: int`
            exit status of the process
        `stdout: str`
            captured standard output
        `stderr: str`
            captured standard error
    """

    def __init__(
        self,
        argv: Sequence[str | Path],
        returncode: int,
        stdout: str = "",
        stderr: str = "",
    ) -> None:
        self.argv: tuple[str, ...] = tuple(str(a) for a in argv)
        self.returncode: int = returncode
        self.stdout: str = stdout
        self.stderr: str = stderr

        message = f"command exited with status {returncode}: {' '.join(self.argv)}"
        if stderr.strip():
            message += f"\n{stderr.rstrip()}"
        super().__init__(message)


class CreationFailed(VenvShellError):
    """
    a virtual environment could not be created.

    attributes:
        `venv_path: Path`
            directory the environment was being created in
        `returncode: int | None`
            exit status of the creation command, none if it never ran
        `stderr: str`
            captured standard error of the creation command
    """

    def __init__(
        self,
        venv_path: Path,
        returncode: int | None = None,
        stderr: str = "",
        reason: str | None = None,
    ) -> None:
        self.venv_path: Path = venv_path
        self.returncode: int | None = returncode
        self.stderr: str = stderr

        if reason is None:
            reason = (
                f"venv creation exited with status {returncode}"
                if returncode is not None
                else "venv creation could not be started"
            )
        message = f"failed to create virtual environment at {venv_path}: {reason}"
        if stderr.strip():
            message += f"\n{stderr.rstrip()}"
        super().__init__(message)


__all__ = [
    "VenvShellError",
    "InterpreterNotFound",
    "SpawnFailed",
    "ExecutionFailed",
    "CreationFailed",
]
