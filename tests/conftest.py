"""Shared test fixtures for gostress."""

from __future__ import annotations

import io
import json
from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from typing import Any

import pytest
from rich.console import Console

from gostress.core.session import StressSession
from gostress.models.events import TestEvent

T0 = datetime(2026, 10, 18, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def t0() -> datetime:
    """A fixed base timestamp for event sequences."""
    return T0


@pytest.fixture
def output() -> io.StringIO:
    """Buffer that receives everything the console writes."""
    return io.StringIO()


@pytest.fixture
def console(output: io.StringIO) -> Console:
    """A plain (no colour, wide) Rich console writing into ``output``."""
    return Console(file=output, color_system=None, width=200)


@pytest.fixture
def session(console: Console) -> StressSession:
    """Provide a StressSession rendering into the test console."""
    return StressSession(console=console)


# ---------------------------------------------------------------------------
# Event factories — shared across test modules
# ---------------------------------------------------------------------------


@pytest.fixture
def make_event() -> Callable[..., TestEvent]:
    """Factory fixture: build a TestEvent with sensible defaults.

    ``offset`` is seconds after ``T0``.
    """

    def _factory(
        action: str,
        test: str = "TestA",
        package: str = "pkg",
        offset: float = 0.0,
        **overrides: Any,
    ) -> TestEvent:
        defaults: dict[str, Any] = {
            "time": T0 + timedelta(seconds=offset),
            "action": action,
            "package": package,
            "test": test,
        }
        defaults.update(overrides)
        return TestEvent(**defaults)

    return _factory


@pytest.fixture
def make_line() -> Callable[..., str]:
    """Factory fixture: build one ``go test -json`` line."""

    def _factory(
        action: str,
        test: str = "TestA",
        package: str = "pkg",
        offset: float = 0.0,
        output: str | None = None,
    ) -> str:
        record: dict[str, Any] = {
            "Time": (T0 + timedelta(seconds=offset)).isoformat(),
            "Action": action,
            "Package": package,
        }
        if test:
            record["Test"] = test
        if output is not None:
            record["Output"] = output
        return json.dumps(record) + "\n"

    return _factory
