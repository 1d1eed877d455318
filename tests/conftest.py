"""
conftest for libvenvshell tests.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from tests.fixtures import RecordingShell, make_fake_venv


@pytest.fixture(autouse=True)
def clear_libvenvshell_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """clear libvenvshell variables so the test runner's settings don't leak in."""
    for name in ("LIBVENVSHELL_VENV_DIR", "LIBVENVSHELL_PREFIX", "LIBVENVSHELL_PYTHON_PATH"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def recording_shell(tmp_path: Path) -> RecordingShell:
    """create a recording shell rooted at a temporary directory."""
    return RecordingShell(tmp_path)


@pytest.fixture
def fake_venv(tmp_path: Path) -> Path:
    """create an already-provisioned fake venv."""
    return make_fake_venv(
        tmp_path / "env",
        cfg="home = /usr/bin\ninclude-system-site-packages = false\nversion = 3.12.1\n",
    )
