"""
Command Runner — Run an external command, report exit code and stderr.

The engine and the tool probe only ever talk to a CommandRunner, so
tests can swap in a fake without spawning processes.
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from typing import Optional, Protocol, Sequence

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandResult:
    """Exit code and captured stderr of a finished command."""

    returncode: int
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class CommandRunner(Protocol):
    def run(self, argv: Sequence[str], timeout: Optional[float] = None) -> CommandResult:
        """
        Run argv to completion.

        May raise OSError (e.g. executable missing) or
        subprocess.TimeoutExpired; callers treat both as failure.
        """
        ...


class SubprocessRunner:
    """CommandRunner backed by subprocess.run."""

    def run(self, argv: Sequence[str], timeout: Optional[float] = None) -> CommandResult:
        cmd = list(argv)
        logger.debug(f"[runner] {' '.join(cmd)}")
        result = subprocess.run(
            cmd,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.PIPE,
            text=True,
            timeout=timeout,
        )
        return CommandResult(returncode=result.returncode, stderr=result.stderr or "")
