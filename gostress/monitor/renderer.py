"""Live status-line renderer for stress runs.

One line per test key is kept on the terminal and overwritten in place
with a carriage return each time an attempt of that key terminates.
When a different key terminates, the current line is committed with a
newline first and the new key starts on a fresh line.

The status line and the captured test output are written straight to the
console's file so carriage returns and tabs survive; Rich handles the
summary table.
"""

from __future__ import annotations

from collections.abc import Mapping

from rich.cells import cell_len
from rich.console import Console
from rich.table import Table

from gostress.models.stats import AttemptResult, RenderState, TestRunStats


class StatusLineRenderer:
    """Overwrites a single terminal line per test key.

    Parameters
    ----------
    console:
        Rich Console instance.  A new one is created if not provided.
    state:
        The session's ``RenderState``; ``current_key`` and
        ``current_line_length`` are owned by this renderer.
    """

    def __init__(
        self, console: Console | None = None, state: RenderState | None = None
    ) -> None:
        self.console = console or Console()
        self.state = state or RenderState()

    def _write(self, text: str) -> None:
        self.console.file.write(text)
        self.console.file.flush()

    # ------------------------------------------------------------------
    # Status line
    # ------------------------------------------------------------------

    def render(self, result: AttemptResult) -> None:
        """Show *result* on the status line, committing the previous key's line."""
        if result.key != self.state.current_key:
            if self.state.current_key is not None:
                self._write("\n")
            self.state.current_line_length = 0
            self.state.current_key = result.key

        line = result.status_line
        width = cell_len(line)
        self._write("\r" + line)
        if width < self.state.current_line_length:
            self._write(" " * (self.state.current_line_length - width))
        self.state.current_line_length = width

    def finalize(self, output_buffer: str | None = None) -> None:
        """Commit the last status line and print any unflushed test output."""
        self._write("\n")
        output = self.state.output_buffer if output_buffer is None else output_buffer
        if output:
            self._write(output if output.endswith("\n") else output + "\n")

    # ------------------------------------------------------------------
    # Summary
    # ------------------------------------------------------------------

    def build_summary(self, stats: Mapping[str, TestRunStats]) -> Table:
        table = Table(
            title="Stress summary",
            show_header=True,
            header_style="bold cyan",
        )
        table.add_column("Test", min_width=20)
        table.add_column("Passed", justify="right")
        table.add_column("Attempts", justify="right")
        table.add_column("Failed", justify="right")
        table.add_column("Rate", justify="right")

        for key, entry in stats.items():
            style = "bold red" if entry.failures else "green"
            table.add_row(
                key,
                str(entry.successes),
                str(entry.attempts),
                str(entry.failures),
                f"{entry.success_rate:.0%}",
                style=style,
            )
        return table

    def print_summary(self, stats: Mapping[str, TestRunStats]) -> None:
        """Print a table of every key's counters."""
        if not stats:
            self.console.print("[dim]No test attempts recorded.[/dim]")
            return
        self.console.print(self.build_summary(stats))
