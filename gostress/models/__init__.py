"""gostress data models — all Pydantic v2."""

from gostress.models.events import TestAction, TestEvent
from gostress.models.stats import (
    AttemptResult,
    RenderState,
    TestRunStats,
    format_duration,
)

__all__ = [
    # events
    "TestAction",
    "TestEvent",
    # aggregation
    "TestRunStats",
    "RenderState",
    "AttemptResult",
    "format_duration",
]
