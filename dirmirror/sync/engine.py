"""
Sync Engine — Mirror one directory tree onto another.

This is the main entry point for directory sync. It validates the paths,
then walks an ordered list of copy strategies until one succeeds:

    rsync (if available)  →  remove + copytree

A failed rsync run is logged and the next strategy runs. If the last
strategy fails, the partly written target is removed (best effort) and
FallbackFailure is raised.

## Usage

    from dirmirror.sync.engine import SyncEngine, sync_directory

    outcome = sync_directory("build/site", "/srv/www/site")
    print(outcome.strategy)  # Strategy.EXTERNAL_TOOL or Strategy.FALLBACK

    engine = SyncEngine.from_env()
    engine.sync_directory(source, target)
"""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from ..models.outcome import SyncOutcome, SyncRequest
from ..validation import FallbackFailure, PathLike, validate_sync_paths
from .config import SyncSettings
from .runner import CommandRunner, SubprocessRunner
from .strategies import (
    CopyStrategy,
    ExternalToolStrategy,
    FallbackCopyStrategy,
    remove_path,
)
from .tool import ToolAvailability, get_tool_availability

logger = logging.getLogger(__name__)

LogSink = Callable[[str], None]


class SyncEngine:
    """
    Validates sync requests and runs copy strategies in order.

    Attributes:
        tool: ToolAvailability consulted by the rsync strategy
        strategies: Ordered strategies; the last one's failure is fatal
        resolve_symlinks: Compare real paths when checking for overlap
        tool_override: Availability forced by DIRMIRROR_RSYNC (None = probe)
    """

    def __init__(
        self,
        tool: Optional[ToolAvailability] = None,
        runner: Optional[CommandRunner] = None,
        strategies: Optional[Sequence[CopyStrategy]] = None,
        log_debug: Optional[LogSink] = None,
        log_error: Optional[LogSink] = None,
        resolve_symlinks: bool = True,
        rsync_timeout: Optional[float] = None,
        tool_override: Optional[bool] = None,
    ):
        self.tool = tool or get_tool_availability()
        self.runner = runner or SubprocessRunner()
        if strategies is None:
            strategies = [
                ExternalToolStrategy(self.tool, self.runner, timeout=rsync_timeout),
                FallbackCopyStrategy(),
            ]
        if not strategies:
            raise ValueError("SyncEngine needs at least one copy strategy")
        self.strategies: List[CopyStrategy] = list(strategies)
        self.log_debug = log_debug or logger.debug
        self.log_error = log_error or logger.error
        self.resolve_symlinks = resolve_symlinks
        self.tool_override = tool_override

    @classmethod
    def from_env(cls, tool: Optional[ToolAvailability] = None) -> "SyncEngine":
        """Create an engine from DIRMIRROR_* environment variables."""
        settings = SyncSettings.from_env()
        override = settings.rsync_override
        if tool is None:
            if override is None:
                tool = get_tool_availability(settings.rsync_path)
            else:
                # Pinned by config: never touch the shared detection cache
                tool = ToolAvailability(executable=settings.rsync_path)
        if override is not None:
            tool.override(override)
        return cls(
            tool=tool,
            resolve_symlinks=settings.resolve_symlinks,
            rsync_timeout=settings.rsync_timeout,
            tool_override=override,
        )

    def validate(self, source: PathLike, target: PathLike) -> SyncRequest:
        """Run the pre-flight checks without touching the filesystem."""
        validate_sync_paths(source, target, resolve_symlinks=self.resolve_symlinks)
        return SyncRequest(source=Path(source), target=Path(target))

    def sync_directory(self, source: PathLike, target: PathLike) -> SyncOutcome:
        """
        Mirror the contents of source into target.

        Returns:
            SyncOutcome naming the strategy that completed the copy

        Raises:
            PathValidationError: bad or overlapping paths (nothing touched)
            FallbackFailure: every strategy failed
        """
        request = self.validate(source, target)
        started = time.monotonic()

        # Unavailable strategies are skipped silently; the last always runs
        candidates = [s for s in self.strategies[:-1] if s.is_available()]
        candidates.append(self.strategies[-1])

        for strategy, next_strategy in zip(candidates, candidates[1:]):
            result = strategy.attempt(request.source, request.target)
            if result.ok:
                return self._succeeded(request, strategy, started)
            self.log_error(
                f"{strategy.label} failed, falling back to {next_strategy.label}: "
                f"{result.error_message}"
            )

        last = candidates[-1]
        result = last.attempt(request.source, request.target)
        if result.ok:
            return self._succeeded(request, last, started)

        self._cleanup_partial(request.target)
        raise FallbackFailure(
            f"Copy {request.source} → {request.target} failed using "
            f"{last.label}: {result.error_message}",
            source=request.source,
            target=request.target,
            details={"strategy": result.strategy.value},
        ) from result.error

    def _succeeded(
        self,
        request: SyncRequest,
        strategy: CopyStrategy,
        started: float,
    ) -> SyncOutcome:
        self.log_debug(
            f"Copied {request.source} → {request.target} using {strategy.label}"
        )
        return SyncOutcome(
            strategy=strategy.strategy,
            source=str(request.source),
            target=str(request.target),
            duration_ms=(time.monotonic() - started) * 1000,
        )

    @staticmethod
    def _cleanup_partial(target: Path) -> None:
        """Remove a partly written target, ignoring any error."""
        try:
            remove_path(target)
        except Exception as e:
            logger.debug(f"Ignoring cleanup error for {target}: {e}")


def sync_directory(source: PathLike, target: PathLike) -> SyncOutcome:
    """Sync source to target with a default engine (shared tool cache)."""
    return SyncEngine().sync_directory(source, target)
