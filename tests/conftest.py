"""
Shared fixtures for dirmirror tests.

Provides source/target trees under tmp_path, a fake CommandRunner that
records argv instead of spawning processes, and engines wired to
recording log sinks.
"""

from __future__ import annotations

import shutil
import subprocess
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence

import pytest

from dirmirror.sync.engine import SyncEngine
from dirmirror.sync.runner import CommandResult
from dirmirror.sync import tool as tool_module
from dirmirror.sync.tool import ToolAvailability


class FakeRunner:
    """
    CommandRunner double.

    `responses` maps argv[1] ("--version" for the probe, "-a" for a copy)
    to a CommandResult, an exception to raise, or a callable(argv) that
    returns a CommandResult.
    """

    def __init__(self, responses: Optional[Dict[str, object]] = None):
        self.responses = responses or {}
        self.calls: List[List[str]] = []

    def run(self, argv: Sequence[str], timeout: Optional[float] = None) -> CommandResult:
        argv = list(argv)
        self.calls.append(argv)
        response = self.responses.get(argv[1], CommandResult(0))
        if isinstance(response, BaseException):
            raise response
        if callable(response):
            return response(argv)
        return response

    def copy_calls(self) -> List[List[str]]:
        return [c for c in self.calls if c[1] == "-a"]


def emulate_rsync(argv: Sequence[str]) -> CommandResult:
    """Do what `rsync -a --delete src/ dst/` would, in-process."""
    source, target = Path(argv[-2]), Path(argv[-1])
    if target.exists():
        shutil.rmtree(target)
    shutil.copytree(source, target, symlinks=True)
    return CommandResult(0)


class RecordingSinks:
    """Collects messages passed to log_debug / log_error."""

    def __init__(self):
        self.debug: List[str] = []
        self.error: List[str] = []


def snapshot(root: Path) -> Dict[str, str]:
    """Relative path → content (files) or "<dir>" for every entry under root."""
    result: Dict[str, str] = {}
    for path in sorted(root.rglob("*")):
        rel = path.relative_to(root).as_posix()
        if path.is_symlink():
            result[rel] = f"<link:{path.readlink()}>"
        elif path.is_dir():
            result[rel] = "<dir>"
        else:
            result[rel] = path.read_text()
    return result


@pytest.fixture(autouse=True)
def _reset_default_tool():
    """Keep the process-wide tool caches from leaking between tests."""
    tool_module._instances.clear()
    yield
    tool_module._instances.clear()


@pytest.fixture
def source_tree(tmp_path: Path) -> Path:
    """A small source directory with nested content."""
    src = tmp_path / "a"
    src.mkdir()
    (src / "f.txt").write_text("x")
    (src / "sub").mkdir()
    (src / "sub" / "nested.txt").write_text("nested content")
    (src / "empty").mkdir()
    return src


@pytest.fixture
def stale_target(tmp_path: Path) -> Path:
    """A target that already holds an entry the source does not have."""
    dst = tmp_path / "b"
    dst.mkdir()
    (dst / "g.txt").write_text("y")
    return dst


@pytest.fixture
def sinks() -> RecordingSinks:
    return RecordingSinks()


@pytest.fixture
def make_engine(sinks: RecordingSinks) -> Callable[..., SyncEngine]:
    """
    Build an engine around a FakeRunner.

    make_engine(available=False) pins the tool as unavailable;
    make_engine(copy=CommandResult(23, "boom")) makes rsync fail.
    """

    def _make(
        available: Optional[bool] = True,
        copy: object = emulate_rsync,
        probe: object = None,
        **kwargs,
    ) -> SyncEngine:
        responses: Dict[str, object] = {"-a": copy}
        if probe is not None:
            responses["--version"] = probe
        runner = FakeRunner(responses)
        tool = ToolAvailability(runner=runner)
        if available is not None:
            tool.override(available)
        engine = SyncEngine(
            tool=tool,
            runner=runner,
            log_debug=sinks.debug.append,
            log_error=sinks.error.append,
            **kwargs,
        )
        engine.fake_runner = runner  # for assertions
        return engine

    return _make


def completed(returncode: int = 0, stderr: str = "") -> subprocess.CompletedProcess:
    """A subprocess.CompletedProcess as SubprocessRunner would see it."""
    return subprocess.CompletedProcess(
        args=["rsync"], returncode=returncode, stdout=None, stderr=stderr,
    )
