"""wst list command - print one workspace snapshot."""

from __future__ import annotations

import asyncio
from pathlib import Path

import click

from workspacetrack.cli.channels import JsonLinesChannel
from workspacetrack.cli.utils import load_cli_config
from workspacetrack.config.models import TrackerConfig
from workspacetrack.tracker.workspace import WorkspaceTracker


async def emit_snapshot(root: Path, config: TrackerConfig, channel: JsonLinesChannel) -> None:
    """Seed a tracker on ``root``, emit its single update, and dispose it."""
    tracker = WorkspaceTracker(root.resolve(), channel, config=config)
    try:
        await tracker.initialize()
    finally:
        tracker.dispose()


@click.command("list")
@click.argument(
    "root",
    default=".",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
)
@click.option("--limit", type=click.IntRange(min=1), default=None, help="Max entries to list")
@click.pass_context
def list_command(ctx: click.Context, root: Path, limit: int | None) -> None:
    """Print the workspaceUpdated message for ROOT as JSON."""
    config = load_cli_config(ctx, root, limit=limit)
    channel = JsonLinesChannel()
    asyncio.run(emit_snapshot(root, config.tracker, channel))
