"""generate a file from python code run inside a managed virtual environment.

usage: python examples/generate_message.py [OUT_DIR]
"""

from __future__ import annotations

import sys
from pathlib import Path

from libvenvshell import Shell, VirtualEnvironment

CODE = """
import os
from pathlib import Path

out_dir = Path(os.environ["OUT_DIR"])
fp = out_dir / "message.txt"

with open(fp, "w") as f:
    f.write("hello from python")
"""


def main() -> int:
    out_dir = Path(sys.argv[1] if len(sys.argv) > 1 else ".").resolve()
    out_dir.mkdir(parents=True, exist_ok=True)

    shell = Shell()
    venv = VirtualEnvironment.new(shell, "py3")

    # pip always ships with a fresh environment
    pip_version = venv.run_module("pip", "--version")
    assert pip_version.startswith("pip ")

    with shell.push_env("OUT_DIR", str(out_dir)):
        _ = venv.run(CODE)

    print(out_dir.joinpath("message.txt").read_text())
    return 0


if __name__ == "__main__":
    sys.exit(main())
