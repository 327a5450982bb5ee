"""
Copy Strategies — Ways of mirroring one directory onto another.

Each strategy leaves `target` holding exactly the entries of `source`
(mirror, not merge). The engine tries them in order until one succeeds.

- ExternalToolStrategy: rsync -a --delete source/ target/
- FallbackCopyStrategy: remove target, then shutil.copytree
"""

from __future__ import annotations

import logging
import os
import shutil
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional

from ..models.outcome import Strategy, StrategyResult
from ..validation import ExternalToolFailure
from .runner import CommandRunner, SubprocessRunner
from .tool import ToolAvailability

logger = logging.getLogger(__name__)


def remove_path(path: Path) -> bool:
    """
    Remove whatever is at `path`.

    Files and symlinks (including links to directories) are unlinked,
    directories are removed recursively. Returns False if nothing was there.
    """
    if not os.path.lexists(path):
        return False
    if path.is_symlink() or not path.is_dir():
        path.unlink()
    else:
        shutil.rmtree(path)
    return True


class CopyStrategy(ABC):
    """
    Abstract base class for copy strategies.

    attempt() should never raise; failures are captured in the result.
    """

    @property
    @abstractmethod
    def strategy(self) -> Strategy:
        """The strategy identifier reported in SyncOutcome."""
        pass

    @property
    def label(self) -> str:
        """Short name used in log messages."""
        return self.strategy.value

    def is_available(self) -> bool:
        """Whether this strategy can run on this host at all."""
        return True

    @abstractmethod
    def attempt(self, source: Path, target: Path) -> StrategyResult:
        """Mirror source into target."""
        pass


class ExternalToolStrategy(CopyStrategy):
    """Mirror via rsync, when ToolAvailability says it exists."""

    def __init__(
        self,
        tool: ToolAvailability,
        runner: Optional[CommandRunner] = None,
        timeout: Optional[float] = None,
    ):
        self.tool = tool
        self.runner = runner or SubprocessRunner()
        self.timeout = timeout

    @property
    def strategy(self) -> Strategy:
        return Strategy.EXTERNAL_TOOL

    @property
    def label(self) -> str:
        return Path(self.tool.executable).name

    def is_available(self) -> bool:
        return self.tool.detect()

    def build_argv(self, source: Path, target: Path) -> List[str]:
        # Trailing separator on source copies its contents, not the directory itself
        return [
            self.tool.executable,
            "-a",
            "--delete",
            os.path.join(str(source), ""),
            os.path.join(str(target), ""),
        ]

    def attempt(self, source: Path, target: Path) -> StrategyResult:
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            result = self.runner.run(self.build_argv(source, target), timeout=self.timeout)
            if not result.ok:
                raise ExternalToolFailure(
                    f"{self.label} failed: {result.stderr.strip()}",
                    returncode=result.returncode,
                    source=source,
                    target=target,
                )
        except Exception as e:
            return StrategyResult.failed(self.strategy, e)

        return StrategyResult.succeeded(self.strategy)


class FallbackCopyStrategy(CopyStrategy):
    """
    Portable full copy: delete the target, then copy the tree.

    Deleting first gives the same result as rsync --delete; this
    strategy never merges into an existing target.
    """

    @property
    def strategy(self) -> Strategy:
        return Strategy.FALLBACK

    @property
    def label(self) -> str:
        return "fs"

    def attempt(self, source: Path, target: Path) -> StrategyResult:
        try:
            if remove_path(target):
                logger.debug(f"[fallback] Removed existing target {target}")
            target.parent.mkdir(parents=True, exist_ok=True)
            shutil.copytree(source, target, symlinks=True)
        except Exception as e:
            return StrategyResult.failed(self.strategy, e)

        return StrategyResult.succeeded(self.strategy)
