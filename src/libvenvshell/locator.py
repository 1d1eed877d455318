"""
system python interpreter lookup.
"""

from __future__ import annotations

import logging
from pathlib import Path

from .errors import InterpreterNotFound
from .models import candidate_names
from .shell import Shell

logger = logging.getLogger(__name__)


def find_python3(shell: Shell | None = None, platform: str | None = None) -> Path:
    """
    find a python 3 interpreter on the search path.

    candidates are probed in priority order and the first one found wins.
    presence on the search path is enough; the interpreter is not run.

    arguments:
        `shell: Shell | None`
            shell whose PATH is searched. if None, a fresh shell is used.
        `platform: str | None`
            a `sys.platform` style identifier selecting the candidate names.
            if None, uses the running platform.

    returns: `Path`
        resolved path to the interpreter

    raises:
        `InterpreterNotFound`
            if none of the candidates are on the search path
    """
    shell = shell if shell is not None else Shell()
    candidates = candidate_names(platform)

    for name in candidates:
        if (found := shell.which(name)) is not None:
            logger.debug("found system python: %s", found)
            return found

    raise InterpreterNotFound(candidates)


__all__ = ["find_python3"]
