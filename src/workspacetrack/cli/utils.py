"""Shared CLI helpers."""

from __future__ import annotations

from pathlib import Path

import click

from workspacetrack.config.loader import load_config
from workspacetrack.config.models import WorkspaceTrackConfig
from workspacetrack.core.errors import ConfigError
from workspacetrack.core.logging import configure_logging


def load_cli_config(
    ctx: click.Context,
    root: Path,
    *,
    limit: int | None = None,
) -> WorkspaceTrackConfig:
    """Load config for ``root`` and configure logging from it.

    ``-v`` on the group forces DEBUG. Config errors become click errors.
    """
    try:
        config = load_config(root)
    except ConfigError as e:
        raise click.ClickException(str(e)) from e

    if limit is not None:
        tracker = config.tracker.model_copy(update={"initial_scan_limit": limit})
        config = config.model_copy(update={"tracker": tracker})

    verbose = bool((ctx.obj or {}).get("verbose"))
    logging_config = config.logging
    if verbose:
        logging_config = logging_config.model_copy(update={"level": "DEBUG"})
    configure_logging(config=logging_config)
    return config
