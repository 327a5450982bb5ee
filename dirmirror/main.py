"""
dirmirror — CLI Entry Point

Usage:
    python -m dirmirror.main sync SOURCE TARGET
    python -m dirmirror.main tool-status
    python -m dirmirror.main check-paths SOURCE TARGET
"""

from __future__ import annotations

# Load .env file FIRST, before any other imports that might read env vars
from pathlib import Path
from dotenv import load_dotenv

_env_file = Path.cwd() / ".env"
if _env_file.exists():
    load_dotenv(_env_file)

import click

from . import __version__
from .cli.sync import check_paths, sync_cmd, tool_status
from .logging_config import setup_logging
from .sync.engine import SyncEngine

# Initialize logging
setup_logging()


@click.group()
@click.version_option(__version__, prog_name="dirmirror")
@click.option("-v", "--verbose", is_flag=True, help="Log at DEBUG level")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """dirmirror — Mirror a directory tree, rsync first, portable copy second."""
    if verbose:
        setup_logging(level="DEBUG")
    ctx.ensure_object(dict)
    ctx.obj.setdefault("engine_factory", SyncEngine.from_env)


cli.add_command(sync_cmd)
cli.add_command(tool_status)
cli.add_command(check_paths)


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
