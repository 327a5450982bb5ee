"""
Directory Sync — Mirror a directory tree, preferring rsync.

This module provides:
- SyncEngine: path validation plus ordered copy strategies
- ToolAvailability: cached detection of the external mirroring tool
- Copy strategies: rsync, and a portable remove + copytree fallback
"""

from .engine import SyncEngine, sync_directory
from .strategies import CopyStrategy, ExternalToolStrategy, FallbackCopyStrategy
from .tool import (
    ToolAvailability,
    ToolState,
    get_tool_availability,
    override_tool_available,
    reset_tool_cache,
)

__all__ = [
    "SyncEngine",
    "sync_directory",
    "CopyStrategy",
    "ExternalToolStrategy",
    "FallbackCopyStrategy",
    "ToolAvailability",
    "ToolState",
    "get_tool_availability",
    "override_tool_available",
    "reset_tool_cache",
]
