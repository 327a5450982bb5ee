"""
Sync Configuration — Parse DIRMIRROR_* environment variables.

All settings are optional:
    DIRMIRROR_RSYNC=auto|true|false     (auto = probe for rsync)
    DIRMIRROR_RSYNC_PATH=rsync          (executable name or path)
    DIRMIRROR_RSYNC_TIMEOUT=600         (seconds, unset = no timeout)
    DIRMIRROR_RESOLVE_SYMLINKS=true     (compare real paths when validating)

The CLI loads a .env file before reading these.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

logger = logging.getLogger(__name__)

_TRUE = ("true", "1", "yes", "on")
_FALSE = ("false", "0", "no", "off")


def _parse_bool(name: str, raw: Optional[str], default: bool) -> bool:
    if raw is None or raw.strip() == "":
        return default
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    logger.warning(f"{name}: expected a boolean, got {raw!r}; using {default}")
    return default


@dataclass
class SyncSettings:
    """Settings for SyncEngine.from_env()."""

    rsync_mode: str = "auto"  # auto, true, false
    rsync_path: str = "rsync"
    rsync_timeout: Optional[float] = None
    resolve_symlinks: bool = True

    @property
    def rsync_override(self) -> Optional[bool]:
        """ToolAvailability override implied by rsync_mode (None = probe)."""
        if self.rsync_mode == "true":
            return True
        if self.rsync_mode == "false":
            return False
        return None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "SyncSettings":
        """Parse settings from environment variables."""
        env = os.environ if environ is None else environ

        mode = env.get("DIRMIRROR_RSYNC", "auto").strip().lower() or "auto"
        if mode in _TRUE:
            mode = "true"
        elif mode in _FALSE:
            mode = "false"
        elif mode != "auto":
            logger.warning(f"DIRMIRROR_RSYNC: unknown value {mode!r}, using auto")
            mode = "auto"

        timeout: Optional[float] = None
        raw_timeout = env.get("DIRMIRROR_RSYNC_TIMEOUT", "").strip()
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
            except ValueError:
                logger.warning(
                    f"DIRMIRROR_RSYNC_TIMEOUT: not a number ({raw_timeout!r}), ignoring"
                )
            else:
                if timeout <= 0:
                    logger.warning("DIRMIRROR_RSYNC_TIMEOUT must be positive, ignoring")
                    timeout = None

        return cls(
            rsync_mode=mode,
            rsync_path=env.get("DIRMIRROR_RSYNC_PATH", "").strip() or "rsync",
            rsync_timeout=timeout,
            resolve_symlinks=_parse_bool(
                "DIRMIRROR_RESOLVE_SYMLINKS",
                env.get("DIRMIRROR_RESOLVE_SYMLINKS"),
                True,
            ),
        )
