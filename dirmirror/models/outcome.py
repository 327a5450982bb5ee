"""
Outcome Models — What a sync was asked to do and how it finished.

Nothing here is persisted; a SyncRequest lives for one call and the
SyncOutcome is handed back to the caller.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from ..validation import resolve_path


class Strategy(str, Enum):
    """Copy strategies, in the order the engine prefers them."""
    EXTERNAL_TOOL = "external-tool"  # rsync -a --delete
    FALLBACK = "fallback"            # remove + shutil.copytree


class SyncRequest(BaseModel):
    """An immutable (source, target) pair."""

    model_config = ConfigDict(frozen=True)

    source: Path
    target: Path

    def resolved(self, resolve_symlinks: bool = True) -> Tuple[Path, Path]:
        """Absolute, normalized (source, target)."""
        return (
            resolve_path(self.source, resolve_symlinks),
            resolve_path(self.target, resolve_symlinks),
        )


class SyncOutcome(BaseModel):
    """Result of a successful sync_directory call."""

    strategy: Strategy
    source: str
    target: str
    duration_ms: float = 0.0
    ts_iso: str = Field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json")


class StrategyResult(BaseModel):
    """
    Result of a single CopyStrategy.attempt().

    Strategies never raise; a failure is carried in `error`.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    strategy: Strategy
    ok: bool
    error: Optional[BaseException] = None

    @classmethod
    def succeeded(cls, strategy: Strategy) -> "StrategyResult":
        return cls(strategy=strategy, ok=True)

    @classmethod
    def failed(cls, strategy: Strategy, error: BaseException) -> "StrategyResult":
        return cls(strategy=strategy, ok=False, error=error)

    @property
    def error_message(self) -> str:
        if self.error is None:
            return ""
        return str(self.error) or type(self.error).__name__
