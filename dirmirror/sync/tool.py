"""
Tool Availability — Is the external mirroring tool (rsync) usable here?

The answer is probed once and cached on the ToolAvailability instance.
It is only probed again after reset(), or after override(None).

## States

- UNKNOWN: not probed yet
- AVAILABLE: probe exited 0
- UNAVAILABLE: probe exited nonzero or could not run at all

## Usage

    from dirmirror.sync.tool import ToolAvailability

    tool = ToolAvailability()
    if tool.detect():
        ...

    # Tests
    tool.override(False)
    tool.reset()
"""

from __future__ import annotations

import logging
import threading
from enum import Enum
from typing import Dict, Optional

from .runner import CommandRunner, SubprocessRunner

logger = logging.getLogger(__name__)

DEFAULT_TOOL = "rsync"
PROBE_TIMEOUT_SECONDS = 5


class ToolState(str, Enum):
    """Cached detection state."""
    UNKNOWN = "unknown"
    AVAILABLE = "available"
    UNAVAILABLE = "unavailable"


class ToolAvailability:
    """
    Cached detection of the external mirroring tool.

    One instance is shared by every SyncEngine built with the defaults
    (see get_tool_availability()). Tests should build their own.
    """

    def __init__(
        self,
        executable: str = DEFAULT_TOOL,
        runner: Optional[CommandRunner] = None,
    ):
        self.executable = executable
        self.runner = runner or SubprocessRunner()
        self._state = ToolState.UNKNOWN
        self._lock = threading.Lock()

    @property
    def state(self) -> ToolState:
        return self._state

    def detect(self) -> bool:
        """Return whether the tool is usable, probing only if not cached."""
        state = self._state
        if state != ToolState.UNKNOWN:
            return state == ToolState.AVAILABLE

        available = self._probe()
        with self._lock:
            self._state = ToolState.AVAILABLE if available else ToolState.UNAVAILABLE
        return available

    def reset(self) -> None:
        """Forget the cached answer; the next detect() probes again."""
        with self._lock:
            self._state = ToolState.UNKNOWN

    def override(self, value: Optional[bool]) -> None:
        """
        Force the cached answer.

        True/False pin the state without probing. None clears the
        override, same as reset().
        """
        with self._lock:
            if value is None:
                self._state = ToolState.UNKNOWN
            elif value:
                self._state = ToolState.AVAILABLE
            else:
                self._state = ToolState.UNAVAILABLE

    def _probe(self) -> bool:
        try:
            result = self.runner.run(
                [self.executable, "--version"], timeout=PROBE_TIMEOUT_SECONDS
            )
        except Exception as e:
            logger.debug(f"[tool] {self.executable} probe failed: {e}")
            return False

        logger.debug(
            f"[tool] {self.executable} probe exited {result.returncode}"
        )
        return result.ok


_instances: Dict[str, ToolAvailability] = {}
_default_lock = threading.Lock()


def get_tool_availability(executable: str = DEFAULT_TOOL) -> ToolAvailability:
    """Get the process-wide ToolAvailability for an executable."""
    with _default_lock:
        tool = _instances.get(executable)
        if tool is None:
            tool = _instances[executable] = ToolAvailability(executable=executable)
        return tool


def reset_tool_cache() -> None:
    """Reset the default instance's cache. Useful for testing."""
    get_tool_availability().reset()


def override_tool_available(value: Optional[bool]) -> None:
    """
    Override the default instance's availability for testing.

    Pass None to clear the override and allow re-detection.
    """
    get_tool_availability().override(value)
