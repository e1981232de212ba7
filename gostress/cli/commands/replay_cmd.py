"""``gostress replay [FILE]`` — tally a captured ``go test -json`` log.

Reads the log from FILE, or from stdin when FILE is ``-`` or omitted,
and renders it exactly as a live run would.
"""

from __future__ import annotations

import sys
from pathlib import Path

import typer
from rich.console import Console

from gostress.config import config
from gostress.core.session import StressSession

console = Console()
err_console = Console(stderr=True)


def replay_cmd(
    log_file: str = typer.Argument(
        "-",
        help="Path to a go test -json log, or '-' for stdin.",
    ),
    summary: bool = typer.Option(
        config.show_summary,
        "--summary",
        "-s",
        help="Print a summary table of every test after the replay.",
    ),
) -> None:
    """Aggregate a previously captured go test -json event log."""
    session = StressSession(console=console, show_summary=summary)

    if log_file == "-":
        session.consume(sys.stdin)
        return

    path = Path(log_file)
    if not path.is_file():
        err_console.print(f"[bold red]Log file not found:[/bold red] {log_file}")
        raise typer.Exit(code=1)

    with path.open(encoding="utf-8", errors="replace") as stream:
        session.consume(stream)
