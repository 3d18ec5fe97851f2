"""
runner.py

Responsibility: The single seam through which external commands are run.

`CommandRunner` is what the finalizer and the CLI depend on; tests substitute a
fake. `SubprocessRunner` is the real thing. Calls block until the command exits
and there is no timeout.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Protocol, Sequence

LOGGER = logging.getLogger(__name__)


class CommandError(RuntimeError):
    def __init__(self, cmd: Sequence[str], returncode: int, output: str = "") -> None:
        self.cmd = list(cmd)
        self.returncode = returncode
        self.output = output
        detail = f"\n\n{output.strip()}" if output.strip() else ""
        super().__init__(f"Command failed ({returncode}): {' '.join(self.cmd)}{detail}")


class CommandRunner(Protocol):
    def run(self, args: Sequence[str]) -> str:
        """Run `args`, return captured stdout, raise CommandError on failure."""
        ...


class SubprocessRunner:
    def __init__(self, cwd: str | Path) -> None:
        self.cwd = Path(cwd)

    def run(self, args: Sequence[str]) -> str:
        cmd = list(args)
        LOGGER.debug("$ %s", " ".join(cmd))
        try:
            proc = subprocess.run(cmd, cwd=str(self.cwd), check=True, capture_output=True, text=True)
        except subprocess.CalledProcessError as e:
            raise CommandError(cmd, e.returncode, e.stderr or e.stdout or "") from e
        except FileNotFoundError as e:
            raise CommandError(cmd, 127, f"{cmd[0]}: command not found") from e
        return proc.stdout
