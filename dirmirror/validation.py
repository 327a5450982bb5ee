"""
Validation — Sync errors and pre-flight path checks.

Every check here runs before the filesystem is touched. A failed
validation leaves both trees exactly as they were.

## Usage

    from dirmirror.validation import validate_sync_paths, PathValidationError

    try:
        src, dst = validate_sync_paths(source, target)
    except PathValidationError as e:
        print(f"Refusing to sync: {e}")
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

PathLike = Union[str, os.PathLike]


class SyncError(Exception):
    """Base class for everything sync_directory raises."""

    def __init__(
        self,
        message: str,
        source: Optional[PathLike] = None,
        target: Optional[PathLike] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.source = str(source) if source is not None else None
        self.target = str(target) if target is not None else None
        self.details = details or {}
        super().__init__(message)


class PathValidationError(SyncError):
    """Raised when source/target fail the pre-flight checks."""
    pass


class SourceNotFound(PathValidationError):
    pass


class SourceNotDirectory(PathValidationError):
    pass


class TargetInsideSource(PathValidationError):
    pass


class SourceInsideTarget(PathValidationError):
    pass


class TargetIsSource(PathValidationError):
    pass


class ExternalToolFailure(SyncError):
    """The external mirroring tool failed. Recovered by the engine."""

    def __init__(self, message: str, returncode: Optional[int] = None, **kwargs: Any):
        self.returncode = returncode
        super().__init__(message, **kwargs)


class FallbackFailure(SyncError):
    """The last copy strategy failed. Nothing is left to fall back to."""
    pass


def resolve_path(path: PathLike, resolve_symlinks: bool = True) -> Path:
    """
    Absolute, normalized form of a path.

    With resolve_symlinks=False only lexical normalization is applied
    (no filesystem access), so "a/../b" collapses but links are kept.
    """
    if resolve_symlinks:
        return Path(os.path.realpath(os.fspath(path)))
    return Path(os.path.normpath(os.path.abspath(os.fspath(path))))


def is_strict_descendant(child: Path, parent: Path) -> bool:
    """True if child lies strictly below parent. Both must be resolved."""
    return child != parent and parent in child.parents


def validate_sync_paths(
    source: PathLike,
    target: PathLike,
    resolve_symlinks: bool = True,
) -> Tuple[Path, Path]:
    """
    Validate a sync request and return the resolved (source, target).

    Raises:
        SourceNotFound: source does not exist
        SourceNotDirectory: source exists but is not a directory
        TargetIsSource: both resolve to the same directory
        TargetInsideSource: target is below source
        SourceInsideTarget: source is below target
    """
    if not os.path.exists(source):
        raise SourceNotFound(
            f"Source does not exist: {source}", source=source, target=target
        )
    if not os.path.isdir(source):
        raise SourceNotDirectory(
            f"Source is not a directory: {source}", source=source, target=target
        )

    resolved_source = resolve_path(source, resolve_symlinks)
    resolved_target = resolve_path(target, resolve_symlinks)
    details = {
        "resolved_source": str(resolved_source),
        "resolved_target": str(resolved_target),
    }

    if resolved_source == resolved_target:
        raise TargetIsSource(
            f"Source and target are the same directory: {resolved_source}",
            source=source,
            target=target,
            details=details,
        )
    if is_strict_descendant(resolved_target, resolved_source):
        raise TargetInsideSource(
            f"Target cannot be inside source: {target} is inside {source}",
            source=source,
            target=target,
            details=details,
        )
    if is_strict_descendant(resolved_source, resolved_target):
        raise SourceInsideTarget(
            f"Source cannot be inside target: {source} is inside {target}",
            source=source,
            target=target,
            details=details,
        )

    return resolved_source, resolved_target
