"""wst watch command - stream workspace updates until interrupted."""

from __future__ import annotations

import asyncio
import contextlib
import signal
from pathlib import Path

import click
import structlog
from rich.console import Console

from workspacetrack.cli.channels import JsonLinesChannel
from workspacetrack.cli.utils import load_cli_config
from workspacetrack.config.models import WorkspaceTrackConfig
from workspacetrack.core.logging import get_log_file_path
from workspacetrack.tracker.events import EventHub
from workspacetrack.tracker.watcher import FileWatcher
from workspacetrack.tracker.workspace import WorkspaceTracker

logger = structlog.get_logger()


def print_stop_summary(console: Console, channel: JsonLinesChannel) -> None:
    """Report how many updates went out and where the log file is, if any."""
    console.print(f"Stopped after {channel.sent} update(s)")
    log_file = get_log_file_path()
    if log_file is not None:
        console.print(f"  Log file: {log_file}", style="dim", highlight=False)


async def run_watch(
    root: Path,
    config: WorkspaceTrackConfig,
    channel: JsonLinesChannel,
    stop: asyncio.Event | None = None,
) -> None:
    """Track ``root`` until ``stop`` is set, or until SIGINT/SIGTERM without one.

    The tracker and the watcher share one symlink-free root, so seeded keys
    and live event paths agree.
    """
    resolved = root.resolve()
    hub = EventHub()
    tracker = WorkspaceTracker(resolved, channel, hub=hub, config=config.tracker)
    watcher = FileWatcher(resolved, hub, config=config.watcher)

    if stop is None:
        stop = asyncio.Event()
        loop = asyncio.get_running_loop()
        for sig in (signal.SIGINT, signal.SIGTERM):
            # Not available on Windows event loops
            with contextlib.suppress(NotImplementedError):
                loop.add_signal_handler(sig, stop.set)

    try:
        if config.watcher.enabled:
            await watcher.start()
        await tracker.initialize()
        await stop.wait()
        logger.info("watch_stopping", root=str(resolved))
    finally:
        await watcher.stop()
        tracker.dispose()


@click.command("watch")
@click.argument(
    "root",
    default=".",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
)
@click.pass_context
def watch_command(ctx: click.Context, root: Path) -> None:
    """Print a workspaceUpdated JSON line each time ROOT changes."""
    config = load_cli_config(ctx, root)
    console = Console(stderr=True)
    console.print(f"[cyan]Watching[/cyan] {root.resolve()}")
    channel = JsonLinesChannel(console=console)
    try:
        asyncio.run(run_watch(root, config, channel))
    except KeyboardInterrupt:
        pass
    print_stop_summary(console, channel)
