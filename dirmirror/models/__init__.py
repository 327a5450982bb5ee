"""
Models — Request/outcome types for directory sync.
"""

from .outcome import Strategy, StrategyResult, SyncOutcome, SyncRequest

__all__ = [
    "Strategy",
    "StrategyResult",
    "SyncOutcome",
    "SyncRequest",
]
