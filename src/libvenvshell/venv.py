"""
virtual environment lifecycle and execution helpers.
"""

from __future__ import annotations

import logging
import os
import re
from contextlib import AbstractContextManager
from pathlib import Path

from packaging.version import InvalidVersion, Version

from .config import Config
from .errors import CreationFailed, SpawnFailed
from .locator import find_python3
from .models import current_platform, interpreter_path, is_provisioned, scripts_dir
from .shell import Shell

logger = logging.getLogger(__name__)

_LEADING_VERSION = re.compile(r"\d+(?:\.\d+)*")


class VirtualEnvironment:
    """
    a python virtual environment on disk.

    constructing one creates the environment, or reuses it if its interpreter
    is already present. all python invocations go through the environment's
    own interpreter and see its installed packages. the directory is left on
    disk when the object goes away.

    attributes:
        `shell: Shell`
            shell used to run every process
        `root: Path`
            absolute path of the environment directory
        `python: Path`
            path of the environment's interpreter
        `platform: str`
            `sys.platform` style identifier the layout was resolved for

    example:
        ```python
        from libvenvshell import Shell, VirtualEnvironment

        venv = VirtualEnvironment.new(Shell(), "py3")
        venv.run("print('Hello World!')")  # 'Hello World!'
        ```
    """

    def __init__(
        self,
        shell: Shell,
        path: str | Path,
        python: str | Path | None = None,
        platform: str | None = None,
    ) -> None:
        """
        create or reuse the virtual environment at `path`.

        arguments:
            `shell: Shell`
                shell to run processes with. relative paths resolve against
                its current directory.
            `path: str | Path`
                environment directory
            `python: str | Path | None`
                interpreter used if the environment must be created. if None,
                one is located on the search path.
            `platform: str | None`
                a `sys.platform` style identifier. if None, uses the running
                platform.

        raises:
            `InterpreterNotFound`
                if creation is needed and no interpreter was given or found
            `CreationFailed`
                if the venv creation command failed or could not be started
        """
        self.shell: Shell = shell
        self.platform: str = current_platform(platform)
        self.root: Path = shell.resolve(path)
        self.python: Path = interpreter_path(self.root, self.platform)

        if is_provisioned(self.root, self.platform):
            logger.debug("reusing virtual environment: %s", self.root)
        else:
            self._create(python)

    def __repr__(self) -> str:
        return f"VirtualEnvironment(root={str(self.root)!r})"

    @classmethod
    def new(cls, shell: Shell, name: str, config: Config | None = None) -> VirtualEnvironment:
        """
        create or reuse a named virtual environment.

        the environment lives at `<venv_dir>/<prefix><name>`, see `Config`.

        arguments:
            `shell: Shell`
                shell to run processes with
            `name: str`
                environment name
            `config: Config | None`
                configuration to use. if None, it is loaded from the shell's
                current directory.

        returns: `VirtualEnvironment`
            the ready environment
        """
        config = config if config is not None else Config.load(shell.current_dir)
        venv_path = config.resolve_venv_dir().joinpath(f"{config.prefix}{name}")
        return cls(shell, venv_path, python=config.resolve_python())

    @classmethod
    def with_path(
        cls,
        shell: Shell,
        path: str | Path,
        python: str | Path | None = None,
    ) -> VirtualEnvironment:
        """create or reuse the virtual environment at `path`."""
        return cls(shell, path, python=python)

    def _create(self, python: str | Path | None) -> None:
        if python is None:
            python = find_python3(self.shell, self.platform)

        logger.debug("creating virtual environment at %s with %s", self.root, python)
        try:
            result = self.shell.run(python, "-m", "venv", self.root)
        except SpawnFailed as exc:
            raise CreationFailed(self.root, reason=str(exc)) from exc

        if result.returncode != 0:
            raise CreationFailed(self.root, result.returncode, result.stderr or "")

        if not is_provisioned(self.root, self.platform):
            raise CreationFailed(
                self.root,
                result.returncode,
                result.stderr or "",
                reason=f"interpreter missing at {self.python}",
            )

    @property
    def environ(self) -> dict[str, str | None]:
        """
        environment overrides of an activated environment.

        sets `VIRTUAL_ENV`, puts the environment's scripts directory first on
        `PATH`, and unsets `PYTHONHOME`.
        """
        bin_dir = str(scripts_dir(self.root, self.platform))
        search_path = self.shell.environ().get("PATH", "")
        entries = search_path.split(os.pathsep) if search_path else []
        if not entries or entries[0] != bin_dir:
            entries.insert(0, bin_dir)

        return {
            "VIRTUAL_ENV": str(self.root),
            "PATH": os.pathsep.join(entries),
            "PYTHONHOME": None,
        }

    def activate(self) -> AbstractContextManager[None]:
        """
        activate this environment on its shell for the duration of a block.

        every program run through the shell inside the block, not only this
        environment's python, sees the environment's overrides.

        ```python
        with venv.activate():
            venv.shell.read("pip", "--version")
        ```
        """
        return self.shell.push_envs(self.environ)

    @property
    def python_version(self) -> Version | None:
        """
        interpreter version recorded in the environment's pyvenv.cfg.

        returns None when the file is missing or has no usable version.
        """
        try:
            text = self.root.joinpath("pyvenv.cfg").read_text(encoding="utf-8")
        except OSError:
            return None

        values: dict[str, str] = {}
        for line in text.splitlines():
            key, sep, value = line.partition("=")
            if sep:
                values[key.strip().lower()] = value.strip()

        raw = values.get("version_info") or values.get("version")
        if not raw or (match := _LEADING_VERSION.match(raw)) is None:
            return None

        try:
            return Version(match.group(0))
        except InvalidVersion:
            logger.debug("unparseable version in pyvenv.cfg: %s", raw)
            return None

    def _read(self, *args: str | Path) -> str:
        return self.shell.read(self.python, *args, env=self.environ)

    def run(self, code: str) -> str:
        """
        run python code in this environment.

        arguments:
            `code: str`
                program text, passed with `-c`

        returns: `str`
            the code's standard output, minus one trailing newline

        raises:
            `ExecutionFailed`
                if the interpreter exited with a non-zero status
            `SpawnFailed`
                if the interpreter could not be started
        """
        return self._read("-c", code)

    def run_file(self, path: str | Path, *args: str) -> str:
        """
        run a python script in this environment.

        arguments:
            `path: str | Path`
                script path, relative paths resolve against the shell's
                current directory
            `*args: str`
                arguments passed to the script

        returns: `str`
            the script's standard output, minus one trailing newline
        """
        return self._read(self.shell.resolve(path), *args)

    def run_module(self, module: str, *args: str) -> str:
        """run `python -m <module>` in this environment and return its output."""
        return self._read("-m", module, *args)

    def pip_install(self, *packages: str) -> None:
        """
        install packages into this environment with pip.

        arguments:
            `*packages: str`
                requirement specifiers, at least one

        raises:
            `ExecutionFailed`
                if pip exited with a non-zero status
        """
        if not packages:
            raise ValueError("pip_install() requires at least one package")

        logger.debug("installing into %s: %s", self.root, ", ".join(packages))
        _ = self._read("-m", "pip", "install", *packages)


def ensure(
    name_or_path: str | Path,
    shell: Shell | None = None,
    python: str | Path | None = None,
) -> VirtualEnvironment:
    """
    ensure a virtual environment exists at `name_or_path` and return it.

    arguments:
        `name_or_path: str | Path`
            environment directory, relative paths resolve against the shell's
            current directory
        `shell: Shell | None`
            shell to run processes with. if None, a fresh shell is used.
        `python: str | Path | None`
            interpreter used if the environment must be created

    returns: `VirtualEnvironment`
        the ready environment
    """
    return VirtualEnvironment.with_path(
        shell if shell is not None else Shell(), name_or_path, python=python
    )


__all__ = [
    "VirtualEnvironment",
    "ensure",
]
