"""Main Typer application — imports and registers all CLI commands.

Entry point: ``gostress`` (configured via pyproject.toml scripts).
"""

from __future__ import annotations

import logging

import typer

from gostress import __version__
from gostress.cli.commands.replay_cmd import replay_cmd
from gostress.cli.commands.run_cmd import run_cmd
from gostress.config import config

app = typer.Typer(
    name="gostress",
    help="gostress: run go tests many times and tally pass/fail per test.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)


@app.callback()
def main_callback(
    log_level: str = typer.Option(
        None,
        "--log-level",
        help="Logging level for diagnostics on stderr (default: GOSTRESS_LOG_LEVEL).",
    ),
) -> None:
    """Configure logging before any command runs."""
    logging.basicConfig(
        level=(log_level or config.log_level).upper(),
        format="%(levelname)s %(name)s: %(message)s",
    )


# Register subcommands
app.command(
    name="run",
    help="Run go test repeatedly and show a live per-test tally.",
    context_settings={"allow_extra_args": True, "ignore_unknown_options": True},
)(run_cmd)
app.command(name="replay", help="Tally a captured go test -json log.")(replay_cmd)


@app.command(name="version", help="Show the gostress version.")
def version_cmd() -> None:
    """Print the installed gostress version."""
    typer.echo(f"gostress {__version__}")


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
