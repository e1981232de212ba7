"""StressSession — wires decoder, aggregator and renderer around one RenderState."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from rich.console import Console

from gostress.core.aggregator import StressAggregator
from gostress.core.decoder import iter_events
from gostress.models.stats import RenderState, TestRunStats
from gostress.monitor.renderer import StatusLineRenderer


class StressSession:
    """Consumes one event stream and renders its running tally.

    Processing is strictly sequential: each event is decoded, folded into
    the counters and, for pass/fail, rendered before the next line is read.
    """

    def __init__(
        self, console: Console | None = None, *, show_summary: bool = False
    ) -> None:
        self.state = RenderState()
        self.aggregator = StressAggregator(self.state)
        self.renderer = StatusLineRenderer(console, self.state)
        self.show_summary = show_summary

    @property
    def stats(self) -> Mapping[str, TestRunStats]:
        return self.aggregator.stats

    def consume(self, stream: Iterable[str | bytes]) -> Mapping[str, TestRunStats]:
        """Fold every event of *stream* into the tally, then finalize the output."""
        try:
            for event in iter_events(stream):
                result = self.aggregator.handle(event)
                if result is not None:
                    self.renderer.render(result)
        finally:
            self.renderer.finalize(self.state.output_buffer)
        if self.show_summary:
            self.renderer.print_summary(self.stats)
        return self.stats
