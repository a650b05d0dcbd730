"""Message channels used by the CLI."""

from __future__ import annotations

import json
from typing import Any, TextIO

import click
from rich.console import Console


class JsonLinesChannel:
    """Writes each message as one JSON line; optionally summarizes on a console.

    ``stream`` defaults to stdout, resolved at write time.
    """

    def __init__(self, stream: TextIO | None = None, console: Console | None = None) -> None:
        self._stream = stream
        self._console = console
        self.sent = 0

    async def post_message(self, message: dict[str, Any]) -> None:
        click.echo(json.dumps(message), file=self._stream)
        self.sent += 1
        if self._console is not None:
            count = len(message.get("filePaths", []))
            word = "path" if count == 1 else "paths"
            self._console.print(f"  [green]✓[/green] workspace updated: {count} {word}")
