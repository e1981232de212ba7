"""Aggregation state: per-test counters, the render state and attempt results."""

from __future__ import annotations

from datetime import datetime, timedelta

from pydantic import BaseModel, ConfigDict


_UNITS_BELOW_SECOND = (
    (1_000_000, 6, "ms"),
    (1_000, 3, "µs"),
)


def _trim_fraction(value: int, digits: int) -> str:
    whole, frac = divmod(value, 10**digits)
    if not frac:
        return str(whole)
    return f"{whole}.{frac:0{digits}d}".rstrip("0")


def format_duration(delta: timedelta) -> str:
    """Format a timedelta the way Go's ``time.Duration.String`` does.

    ``timedelta(seconds=1)`` -> ``"1s"``, ``timedelta(milliseconds=150)``
    -> ``"150ms"``, ``timedelta(minutes=2, seconds=3.5)`` -> ``"2m3.5s"``.
    """
    ns = ((delta.days * 86_400 + delta.seconds) * 1_000_000 + delta.microseconds) * 1_000
    sign = "-" if ns < 0 else ""
    ns = abs(ns)
    if ns == 0:
        return "0s"

    if ns < 1_000_000_000:
        if ns < 1_000:
            return f"{sign}{ns}ns"
        for scale, digits, unit in _UNITS_BELOW_SECOND:
            if ns >= scale:
                return f"{sign}{_trim_fraction(ns, digits)}{unit}"

    seconds, frac_ns = divmod(ns, 1_000_000_000)
    hours, rest = divmod(seconds, 3600)
    minutes, secs = divmod(rest, 60)
    text = _trim_fraction(secs * 1_000_000_000 + frac_ns, 9) + "s"
    if hours:
        text = f"{hours}h{minutes}m{text}"
    elif minutes:
        text = f"{minutes}m{text}"
    return sign + text


class TestRunStats(BaseModel):
    """Running counters for one (package, test) key.

    ``successes`` never exceeds ``attempts``; the aggregator enforces it.
    """

    __test__ = False

    attempts: int = 0
    successes: int = 0

    @property
    def failures(self) -> int:
        return self.attempts - self.successes

    @property
    def success_rate(self) -> float:
        """Fraction of attempts that passed, 0.0 when nothing ran yet."""
        if not self.attempts:
            return 0.0
        return self.successes / self.attempts


class RenderState(BaseModel):
    """Process-wide state shared by the aggregator and the status-line renderer.

    The aggregator owns ``start_time`` and ``output_buffer``; the renderer
    owns ``current_key`` and ``current_line_length``.
    """

    current_key: str | None = None
    current_line_length: int = 0
    start_time: datetime | None = None
    output_buffer: str = ""


class AttemptResult(BaseModel):
    """Outcome of one terminating (pass/fail) event, ready to be rendered."""

    model_config = ConfigDict(frozen=True)

    key: str
    passed: bool
    successes: int
    attempts: int
    duration: timedelta = timedelta(0)

    @property
    def status_line(self) -> str:
        return f"{self.key}: {self.successes}/{self.attempts} {format_duration(self.duration)}"
