"""test doubles and helpers for libvenvshell.

this package contains a recording shell and helpers that lay out fake
virtual environments on disk.
"""

from __future__ import annotations

from .shells import SYSTEM_PYTHON, RecordingShell, make_fake_venv

__all__ = [
    "SYSTEM_PYTHON",
    "RecordingShell",
    "make_fake_venv",
]
