"""
process execution context for libvenvshell.

a `Shell` carries a working directory and a set of environment-variable
overrides, and is the single place where libvenvshell starts processes.
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
from collections.abc import Iterator, Mapping
from contextlib import AbstractContextManager, contextmanager
from pathlib import Path

from .errors import ExecutionFailed, SpawnFailed

logger = logging.getLogger(__name__)

EnvOverrides = Mapping[str, str | None]


def strip_trailing_newline(text: str) -> str:
    """remove a single trailing `\\n` or `\\r\\n` from `text`."""
    if text.endswith("\n"):
        text = text[:-1]
        if text.endswith("\r"):
            text = text[:-1]
    return text


def _has_directory(program: str) -> bool:
    return os.sep in program or (os.altsep is not None and os.altsep in program)


class Shell:
    """
    a small scripting context for running programs.

    attributes:
        `current_dir: Path`
            working directory for spawned processes and for resolving
            relative paths
        `env: dict[str, str | None]`
            environment overrides applied on top of `os.environ`. a value of
            None removes the variable from the child environment.
    """

    def __init__(
        self,
        current_dir: str | Path | None = None,
        env: EnvOverrides | None = None,
    ) -> None:
        self.current_dir: Path = (
            Path(current_dir).expanduser().resolve() if current_dir is not None else Path.cwd()
        )
        self.env: dict[str, str | None] = dict(env or {})

    def __repr__(self) -> str:
        return f"Shell(current_dir={str(self.current_dir)!r})"

    def resolve(self, path: str | Path) -> Path:
        """resolve `path` against the current directory."""
        resolved = Path(path).expanduser()
        if not resolved.is_absolute():
            resolved = self.current_dir.joinpath(resolved)
        return resolved

    @contextmanager
    def change_dir(self, path: str | Path) -> Iterator[Path]:
        """temporarily change the working directory, restoring it on exit."""
        previous = self.current_dir
        self.current_dir = self.resolve(path)
        try:
            yield self.current_dir
        finally:
            self.current_dir = previous

    @contextmanager
    def push_envs(self, overrides: EnvOverrides) -> Iterator[None]:
        """
        temporarily apply several environment overrides.

        arguments:
            `overrides: Mapping[str, str | None]`
                variables to set. None removes a variable for the duration.
        """
        saved = {key: (key in self.env, self.env.get(key)) for key in overrides}
        self.env.update(overrides)
        try:
            yield
        finally:
            for key, (present, value) in saved.items():
                if present:
                    self.env[key] = value
                else:
                    _ = self.env.pop(key, None)

    def push_env(self, key: str, value: str | None) -> AbstractContextManager[None]:
        """temporarily set (or with None, unset) one environment variable."""
        return self.push_envs({key: value})

    def environ(self, overrides: EnvOverrides | None = None) -> dict[str, str]:
        """
        build the environment a child process would receive.

        arguments:
            `overrides: Mapping[str, str | None] | None`
                per-call overrides, applied after the shell's own

        returns: `dict[str, str]`
            merged environment
        """
        merged = dict(os.environ)
        for layer in (self.env, overrides or {}):
            for key, value in layer.items():
                if value is None:
                    _ = merged.pop(key, None)
                else:
                    merged[key] = value
        return merged

    def which(self, name: str, overrides: EnvOverrides | None = None) -> Path | None:
        """
        look up an executable on the shell's search path.

        arguments:
            `name: str`
                executable name
            `overrides: Mapping[str, str | None] | None`
                per-call environment overrides, e.g. a different PATH

        returns: `Path | None`
            resolved executable path, or None if not found
        """
        search_path = self.environ(overrides).get("PATH", os.defpath)
        found = shutil.which(name, path=search_path)
        logger.debug("which %s -> %s", name, found)
        return Path(found) if found is not None else None

    def run(
        self,
        program: str | Path,
        *args: str | Path,
        stdin: str | None = None,
        env: EnvOverrides | None = None,
    ) -> subprocess.CompletedProcess[str]:
        """
        run a program to completion, capturing its output.

        the exit status is not checked; see `read` for that.

        arguments:
            `program: str | Path`
                program name or path. bare names are looked up on the
                shell's PATH.
            `*args: str | Path`
                program arguments
            `stdin: str | None`
                text fed to the program's standard input
            `env: Mapping[str, str | None] | None`
                per-call environment overrides

        returns: `subprocess.CompletedProcess[str]`
            the finished process with text stdout and stderr

        raises:
            `SpawnFailed`
                if the operating system could not start the program, or
                an argument or environment value cannot be passed to it
        """
        executable = str(program)
        if not _has_directory(executable):
            if (resolved := self.which(executable, env)) is not None:
                executable = str(resolved)

        argv = [executable, *(str(a) for a in args)]
        logger.debug("running: %s (cwd: %s)", " ".join(argv), self.current_dir)

        try:
            result = subprocess.run(
                argv,
                input=stdin,
                capture_output=True,
                text=True,
                cwd=str(self.current_dir),
                env=self.environ(env),
                check=False,
            )
        except OSError as exc:
            raise SpawnFailed(program, exc.strerror or str(exc)) from exc
        except ValueError as exc:
            # e.g. an embedded null byte in an argument or variable
            raise SpawnFailed(program, str(exc)) from exc

        logger.debug("exit status %d: %s", result.returncode, executable)
        return result

    def read(
        self,
        program: str | Path,
        *args: str | Path,
        stdin: str | None = None,
        env: EnvOverrides | None = None,
    ) -> str:
        """
        run a program and return its standard output.

        arguments are the same as for `run`.

        returns: `str`
            standard output with one trailing newline removed

        raises:
            `SpawnFailed`
                if the operating system could not start the program
            `ExecutionFailed`
                if the program exited with a non-zero status
        """
        result = self.run(program, *args, stdin=stdin, env=env)
        if result.returncode != 0:
            raise ExecutionFailed(
                [str(a) for a in result.args],
                result.returncode,
                stdout=result.stdout or "",
                stderr=result.stderr or "",
            )
        return strip_trailing_newline(result.stdout or "")


__all__ = [
    "Shell",
    "strip_trailing_newline",
]
