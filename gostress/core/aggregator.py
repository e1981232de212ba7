"""StressAggregator — folds test events into per-test counters.

Counters are keyed by ``"<package>.<test>"``.  Only terminating events
(pass/fail) produce an ``AttemptResult``; run and output events update
state silently.

A single output buffer is shared by all keys: output is attributed to
whichever attempt is in flight.  Output interleaved from two tests with
no terminating event in between ends up in the same buffer.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import datetime, timedelta
from types import MappingProxyType

from gostress.models.events import TestAction, TestEvent
from gostress.models.stats import AttemptResult, RenderState, TestRunStats

logger = logging.getLogger(__name__)


class StressAggregator:
    """Running pass/fail tally across repeated executions.

    Parameters
    ----------
    state:
        The session's ``RenderState``.  A fresh one is created if not
        provided.
    """

    def __init__(self, state: RenderState | None = None) -> None:
        self.state = state or RenderState()
        self._stats: dict[str, TestRunStats] = {}
        self._open: set[str] = set()

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def stats(self) -> Mapping[str, TestRunStats]:
        """Read-only view of the counters, in first-seen order."""
        return MappingProxyType(self._stats)

    def get(self, key: str) -> TestRunStats | None:
        return self._stats.get(key)

    def _entry(self, key: str) -> TestRunStats:
        stats = self._stats.get(key)
        if stats is None:
            stats = TestRunStats()
            self._stats[key] = stats
        return stats

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------

    def on_run(self, key: str, at: datetime) -> None:
        self._entry(key).attempts += 1
        self._open.add(key)
        self.state.start_time = at

    def on_pass(self, key: str, at: datetime) -> AttemptResult:
        """Count a success and discard the captured output of the attempt."""
        stats = self._close_attempt(key)
        stats.successes += 1
        self.state.output_buffer = ""
        return self._result(key, stats, passed=True, at=at)

    def on_fail(self, key: str, at: datetime) -> AttemptResult:
        """Close a failed attempt.  Captured output is kept for the final report."""
        stats = self._close_attempt(key)
        return self._result(key, stats, passed=False, at=at)

    def on_output(self, text: str) -> None:
        self.state.output_buffer += text

    def handle(self, event: TestEvent) -> AttemptResult | None:
        """Dispatch *event* to its handler.

        Returns the ``AttemptResult`` for pass/fail events and None for
        everything else.  Package-level events and unknown actions leave
        all state untouched.
        """
        if not event.test:
            return None

        action = event.known_action
        if action is TestAction.RUN:
            self.on_run(event.key, event.time)
        elif action is TestAction.PASS:
            return self.on_pass(event.key, event.time)
        elif action is TestAction.FAIL:
            return self.on_fail(event.key, event.time)
        elif action is TestAction.OUTPUT:
            self.on_output(event.output)
        return None

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _close_attempt(self, key: str) -> TestRunStats:
        stats = self._entry(key)
        # Each run opens one attempt; a pass or fail with none open counts its own.
        if key in self._open:
            self._open.discard(key)
        else:
            logger.debug("Terminating event for %s without a run; counting an attempt", key)
            stats.attempts += 1
        return stats

    def _result(
        self, key: str, stats: TestRunStats, *, passed: bool, at: datetime
    ) -> AttemptResult:
        start = self.state.start_time
        if start is None:
            logger.debug("No start time recorded for %s", key)
            duration = timedelta(0)
        else:
            duration = at - start
        return AttemptResult(
            key=key,
            passed=passed,
            successes=stats.successes,
            attempts=stats.attempts,
            duration=duration,
        )
