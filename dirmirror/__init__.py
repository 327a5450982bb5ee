"""
dirmirror — Mirror one directory tree onto another.

Uses rsync when the host has it and falls back to an in-process
recursive copy otherwise. Either way the target ends up an exact
mirror of the source.

    from dirmirror import sync_directory

    outcome = sync_directory("build/site", "/srv/www/site")
"""

__version__ = "0.1.0"

from .models.outcome import Strategy, SyncOutcome, SyncRequest
from .sync.engine import SyncEngine, sync_directory
from .sync.tool import override_tool_available, reset_tool_cache
from .validation import (
    ExternalToolFailure,
    FallbackFailure,
    PathValidationError,
    SourceInsideTarget,
    SourceNotDirectory,
    SourceNotFound,
    SyncError,
    TargetInsideSource,
    TargetIsSource,
)

__all__ = [
    "__version__",
    "sync_directory",
    "SyncEngine",
    "Strategy",
    "SyncOutcome",
    "SyncRequest",
    "reset_tool_cache",
    "override_tool_available",
    "SyncError",
    "PathValidationError",
    "SourceNotFound",
    "SourceNotDirectory",
    "TargetInsideSource",
    "SourceInsideTarget",
    "TargetIsSource",
    "ExternalToolFailure",
    "FallbackFailure",
]
