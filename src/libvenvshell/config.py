"""
configuration loading for libvenvshell.

this module handles loading of configuration from pyproject.toml,
.libvenvshell.toml, and environment variables.
"""

from __future__ import annotations

import os
import tempfile
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


@dataclass
class Config:
    """
    main configuration class for libvenvshell.

    attributes:
        `project_root: Path`
            root directory of the project, relative paths resolve against it
        `venv_dir: str`
            base directory for named environments (or 'auto' for the system
            temporary directory)
        `prefix: str`
            directory-name prefix for named environments
        `python_path: str`
            python used to create environments (or 'auto' for auto-detection)
    """

    project_root: Path = field(default_factory=lambda: Path(".").resolve())
    venv_dir: str = "auto"
    prefix: str = "venv-"
    python_path: str = "auto"

    def __post_init__(self) -> None:
        """Ensure project_root is a path object."""
        if isinstance(self.project_root, str):
            self.project_root = Path(self.project_root)

    @classmethod
    def from_pyproject_toml(cls, project_root: str | Path) -> Config | None:
        """
        Load configuration from the [tool.libvenvshell] table of pyproject.toml.

        arguments:
            `project_root: str | Path`
                project root directory containing pyproject.toml

        returns: `Config | None`
            configuration object if found, none otherwise
        """
        project_path = Path(project_root)
        pyproject = project_path.joinpath("pyproject.toml")

        if not pyproject.exists():
            return None

        try:
            with open(pyproject, "rb") as f:
                data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError):
            return None

        tool_config = data.get("tool", {}).get("libvenvshell")
        if not isinstance(tool_config, dict):
            return None
        return cls._from_dict(tool_config, project_path)

    @classmethod
    def from_libvenvshell_toml(cls, project_root: str | Path) -> Config | None:
        """
        Load configuration from .libvenvshell.toml.

        arguments:
            `project_root: str | Path`
                project root directory containing .libvenvshell.toml

        returns: `Config | None`
            configuration object if found, none otherwise
        """
        project_path = Path(project_root)
        config_file = project_path.joinpath(".libvenvshell.toml")

        if not config_file.exists():
            return None

        try:
            with open(config_file, "rb") as f:
                data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError):
            return None

        return cls._from_dict(data, project_path)

    @classmethod
    def from_environment(cls) -> Config:
        """
        Load configuration from environment variables.

        returns: `Config`
            configuration with values from environment
        """
        config = cls()

        if venv_dir := os.environ.get("LIBVENVSHELL_VENV_DIR"):
            config.venv_dir = venv_dir

        if prefix := os.environ.get("LIBVENVSHELL_PREFIX"):
            config.prefix = prefix

        if python_path := os.environ.get("LIBVENVSHELL_PYTHON_PATH"):
            config.python_path = python_path

        return config

    @classmethod
    def load(cls, project_root: str | Path = ".") -> Config:
        """
        Load configuration from all available sources.

        sources are loaded in order of priority (later overrides earlier):
        1. default values
        2. pyproject.toml
        3. .libvenvshell.toml
        4. environment variables

        arguments:
            `project_root: str | Path`
                project root directory

        returns: `Config`
            merged configuration from all sources
        """
        project_path = Path(project_root).resolve()

        config = cls(project_root=project_path)

        if pyproject_config := cls.from_pyproject_toml(project_path):
            config = config.merge(pyproject_config)

        # .libvenvshell.toml overrides pyproject.toml
        if dotfile_config := cls.from_libvenvshell_toml(project_path):
            config = config.merge(dotfile_config)

        # environment has the highest priority
        config = config.merge(cls.from_environment())

        return config

    def merge(self, other: Config) -> Config:
        """
        merge another configuration into this one.

        values from 'other' take precedence over this config unless they are
        still at their defaults.

        arguments:
            `other: Config`
                configuration to merge

        returns: `Config`
            new merged configuration
        """
        return Config(
            project_root=other.project_root
            if other.project_root != Path(".").resolve()
            else self.project_root,
            venv_dir=other.venv_dir if other.venv_dir != "auto" else self.venv_dir,
            prefix=other.prefix if other.prefix != "venv-" else self.prefix,
            python_path=other.python_path if other.python_path != "auto" else self.python_path,
        )

    def resolve_venv_dir(self) -> Path:
        """
        get the base directory for named environments.

        returns: `Path`
            the system temporary directory for 'auto', otherwise `venv_dir`
            resolved against `project_root`
        """
        if self.venv_dir == "auto":
            return Path(tempfile.gettempdir())
        return self._resolve(self.venv_dir)

    def resolve_python(self) -> str | Path | None:
        """
        get the configured creation interpreter.

        returns: `str | Path | None`
            None for 'auto', a bare executable name (looked up on PATH when
            run) as is, otherwise a path resolved against `project_root`
        """
        if self.python_path == "auto":
            return None
        if os.sep not in self.python_path and (
            os.altsep is None or os.altsep not in self.python_path
        ):
            return self.python_path
        return self._resolve(self.python_path)

    def _resolve(self, value: str) -> Path:
        path = Path(value).expanduser()
        if not path.is_absolute():
            path = self.project_root.joinpath(path)
        return path

    @classmethod
    def _from_dict(cls, data: dict[str, Any], project_root: Path) -> Config:
        """
        Create configuration from a dictionary.

        arguments:
            `data: dict[str, Any]`
                configuration dictionary
            `project_root: Path`
                project root path

        returns: `Config`
            configuration object
        """
        config = cls(project_root=project_root)

        if "venv_dir" in data:
            config.venv_dir = str(data["venv_dir"])
        if "prefix" in data:
            config.prefix = str(data["prefix"])
        if "python_path" in data:
            config.python_path = str(data["python_path"])

        return config
