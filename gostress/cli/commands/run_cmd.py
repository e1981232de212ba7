"""``gostress run [GO_TEST_ARGS...]`` — run go tests repeatedly with a live tally.

Every argument gostress does not recognise is passed through to
``go test``, so ``gostress run --count 50 ./pkg -run TestFlaky`` stresses
``TestFlaky`` fifty times.  Use ``--`` to pass arguments that collide
with gostress options.
"""

from __future__ import annotations

import typer
from rich.console import Console

from gostress.config import config
from gostress.core.runner import GoTestNotFoundError, GoTestRunner
from gostress.core.session import StressSession

console = Console()
err_console = Console(stderr=True)


def run_cmd(
    ctx: typer.Context,
    count: int = typer.Option(
        config.default_count,
        "--count",
        min=1,
        help="Times to run each test.",
    ),
    failfast: bool = typer.Option(
        config.failfast,
        "--failfast/--no-failfast",
        help="Stop go test after the first failing attempt.",
    ),
    go_binary: str = typer.Option(
        config.go_binary,
        "--go",
        help="Path to the go binary.",
    ),
    summary: bool = typer.Option(
        config.show_summary,
        "--summary",
        help="Print a summary table of every test after the run.",
    ),
) -> None:
    """Run ``go test`` COUNT times per test and show a running tally."""
    runner = GoTestRunner(config.model_copy(update={"go_binary": go_binary}))
    session = StressSession(console=console, show_summary=summary)

    try:
        exit_code = runner.run(
            list(ctx.args),
            count=count,
            session=session,
            failfast=failfast,
        )
    except GoTestNotFoundError as exc:
        err_console.print(f"[bold red]go test could not be started:[/bold red] {exc}")
        raise typer.Exit(code=127)

    if exit_code:
        raise typer.Exit(code=exit_code)
