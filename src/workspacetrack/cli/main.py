"""workspacetrack CLI - wst command."""

import click

from workspacetrack.cli.snapshot import list_command
from workspacetrack.cli.watch import watch_command


@click.group()
@click.version_option(version="0.1.0", prog_name="wst")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """workspacetrack - debounced workspace file list tracking."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose


cli.add_command(list_command, name="list")
cli.add_command(watch_command, name="watch")


if __name__ == "__main__":
    cli()
