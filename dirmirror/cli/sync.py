"""
CLI sync commands — mirror a directory, inspect rsync detection, dry-check paths.

Usage:
    dirmirror sync SOURCE TARGET [--json] [--no-rsync]
    dirmirror tool-status [--json] [--refresh]
    dirmirror check-paths SOURCE TARGET
"""

from __future__ import annotations

import json
import logging
import shutil

import click

from ..sync.engine import SyncEngine
from ..validation import PathValidationError, SyncError

logger = logging.getLogger(__name__)


@click.command("sync")
@click.argument("source", type=click.Path(file_okay=True, dir_okay=True))
@click.argument("target", type=click.Path(file_okay=True, dir_okay=True))
@click.option("--json", "as_json", is_flag=True, help="Output the outcome as JSON")
@click.option("--no-rsync", is_flag=True, help="Skip rsync and use the portable copy")
@click.pass_context
def sync_cmd(ctx: click.Context, source: str, target: str, as_json: bool, no_rsync: bool) -> None:
    """Mirror the contents of SOURCE into TARGET."""
    engine: SyncEngine = ctx.obj["engine_factory"]()
    if no_rsync:
        # Keep only the last (portable) strategy; the shared tool cache is left alone
        engine.strategies = engine.strategies[-1:]

    try:
        outcome = engine.sync_directory(source, target)
    except SyncError as e:
        logger.debug("Sync failed", exc_info=True)
        if as_json:
            click.echo(json.dumps({
                "ok": False,
                "error": type(e).__name__,
                "message": e.message,
            }, indent=2))
        else:
            click.secho(f"❌ {e.message}", fg="red", err=True)
        raise SystemExit(1)

    logger.info(
        f"Synced {source} → {target}",
        extra={"source": source, "target": target, "strategy": outcome.strategy.value},
    )

    if as_json:
        click.echo(json.dumps({"ok": True, **outcome.to_dict()}, indent=2))
        return

    click.secho(f"✓ Synced {source} → {target}", fg="green")
    click.echo(f"  Strategy: {outcome.strategy.value}")
    click.echo(f"  Took:     {outcome.duration_ms:.1f}ms")


@click.command("tool-status")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.option("--refresh", is_flag=True, help="Drop the cached answer and probe again")
@click.pass_context
def tool_status(ctx: click.Context, as_json: bool, refresh: bool) -> None:
    """Show whether the external mirroring tool was detected."""
    engine: SyncEngine = ctx.obj["engine_factory"]()
    tool = engine.tool
    if refresh:
        tool.reset()
        # A DIRMIRROR_RSYNC pin outlives the refresh
        if engine.tool_override is not None:
            tool.override(engine.tool_override)

    available = tool.detect()
    result = {
        "executable": tool.executable,
        "path": shutil.which(tool.executable),
        "state": tool.state.value,
        "available": available,
        "forced": engine.tool_override is not None,
    }

    if as_json:
        click.echo(json.dumps(result, indent=2))
        return

    icon = "✅" if available else "⚠️"
    click.echo(f"{icon} {tool.executable}: {tool.state.value}")
    if result["forced"]:
        click.echo("   Forced by DIRMIRROR_RSYNC")
    if result["path"]:
        click.echo(f"   Path: {result['path']}")
    if not available:
        click.echo("   Syncs will use the portable copy.")


@click.command("check-paths")
@click.argument("source", type=click.Path())
@click.argument("target", type=click.Path())
@click.pass_context
def check_paths(ctx: click.Context, source: str, target: str) -> None:
    """Validate SOURCE/TARGET without copying anything."""
    engine: SyncEngine = ctx.obj["engine_factory"]()
    try:
        request = engine.validate(source, target)
    except PathValidationError as e:
        click.secho(f"❌ {type(e).__name__}: {e.message}", fg="red", err=True)
        raise SystemExit(1)

    resolved_source, resolved_target = request.resolved(engine.resolve_symlinks)
    click.secho("✓ Paths OK", fg="green")
    click.echo(f"  Source: {resolved_source}")
    click.echo(f"  Target: {resolved_target}")
