"""
tests for interpreter lookup and the platform layout tables.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

from libvenvshell import InterpreterNotFound, Shell, find_python3
from libvenvshell.models import candidate_names, interpreter_path, is_provisioned, scripts_dir

from tests.fixtures import SYSTEM_PYTHON, RecordingShell

posix_only = pytest.mark.skipif(sys.platform == "win32", reason="posix executables only")


class TestCandidateNames:
    """tests for candidate_names."""

    def test_windows(self) -> None:
        """test windows candidates carry the .exe suffix."""
        assert candidate_names("win32") == ("python3.exe", "python.exe")

    @pytest.mark.parametrize("platform", ["linux", "darwin", "freebsd14", "cygwin"])
    def test_other_platforms(self, platform: str) -> None:
        """test that every non-windows platform uses the plain names."""
        assert candidate_names(platform) == ("python3", "python")

    def test_defaults_to_running_platform(self) -> None:
        """test that omitting the platform uses sys.platform."""
        assert candidate_names() == candidate_names(sys.platform)


class TestLayout:
    """tests for the venv interpreter sub-path helpers."""

    def test_posix_layout(self, tmp_path: Path) -> None:
        """test bin/python on posix."""
        assert scripts_dir(tmp_path, "linux") == tmp_path / "bin"
        assert interpreter_path(tmp_path, "linux") == tmp_path / "bin" / "python"

    def test_windows_layout(self, tmp_path: Path) -> None:
        """test Scripts/python.exe on windows."""
        assert scripts_dir(tmp_path, "win32") == tmp_path / "Scripts"
        assert interpreter_path(tmp_path, "win32") == tmp_path / "Scripts" / "python.exe"

    def test_is_provisioned(self, tmp_path: Path) -> None:
        """test the existence predicate."""
        assert not is_provisioned(tmp_path, "linux")

        python = interpreter_path(tmp_path, "linux")
        python.parent.mkdir(parents=True)
        _ = python.write_text("")

        assert is_provisioned(tmp_path, "linux")
        assert not is_provisioned(tmp_path, "win32")


class TestFindPython3:
    """tests for find_python3."""

    def test_first_candidate_wins(self, recording_shell: RecordingShell) -> None:
        """test that python3 is preferred over python."""
        recording_shell.executables = {
            "python3": SYSTEM_PYTHON,
            "python": Path("/usr/bin/python"),
        }
        assert find_python3(recording_shell, platform="linux") == SYSTEM_PYTHON

    def test_falls_back_to_second_candidate(self, recording_shell: RecordingShell) -> None:
        """test fallback when only python is available."""
        recording_shell.executables = {"python": Path("/usr/bin/python")}
        assert find_python3(recording_shell, platform="linux") == Path("/usr/bin/python")

    def test_windows_candidates(self, recording_shell: RecordingShell) -> None:
        """test that windows probes the .exe names."""
        python = Path("C:/Python312/python.exe")
        recording_shell.executables = {"python3": SYSTEM_PYTHON, "python.exe": python}
        assert find_python3(recording_shell, platform="win32") == python

    def test_not_found(self, recording_shell: RecordingShell) -> None:
        """test that a missing interpreter raises with the tried names."""
        recording_shell.executables = {}

        with pytest.raises(InterpreterNotFound) as exc_info:
            _ = find_python3(recording_shell, platform="linux")

        assert exc_info.value.candidates == ("python3", "python")
        assert recording_shell.calls == []

    @posix_only
    def test_searches_shell_path(self, tmp_path: Path) -> None:
        """test lookup against a PATH set on the shell."""
        python = tmp_path / "python"
        _ = python.write_text("#!/bin/sh\n")
        python.chmod(0o755)

        shell = Shell(tmp_path, env={"PATH": str(tmp_path)})
        assert find_python3(shell, platform="linux") == python

    @posix_only
    def test_empty_path(self, tmp_path: Path) -> None:
        """test that an empty search path finds nothing."""
        shell = Shell(tmp_path, env={"PATH": str(tmp_path)})

        with pytest.raises(InterpreterNotFound):
            _ = find_python3(shell, platform="linux")

    def test_host_result_is_a_candidate(self) -> None:
        """test that the host's interpreter, if any, has a candidate name."""
        try:
            found = find_python3()
        except InterpreterNotFound:
            pytest.skip("no python on PATH")

        assert found.name.lower() in candidate_names()
