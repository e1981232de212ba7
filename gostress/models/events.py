"""Structured test events as emitted by ``go test -json``.

One ``TestEvent`` is decoded per input line.  Field aliases follow the
JSON field names of the Go test2json format (``Time``, ``Action``, ...).
"""

from __future__ import annotations

import re
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Go timestamps carry nanoseconds; datetime stops at microseconds.
_SUBMICRO_FRACTION = re.compile(r"(\.\d{6})\d+")


class TestAction(str, Enum):
    """The actions the aggregator acts on.  Every other action is ignored."""

    __test__ = False

    RUN = "run"
    PASS = "pass"
    FAIL = "fail"
    OUTPUT = "output"


class TestEvent(BaseModel):
    """A single occurrence reported by the test runner.

    Package-level events carry an empty ``test`` and are skipped by the
    aggregator.
    """

    __test__ = False

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    time: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc), alias="Time"
    )
    action: str = Field("", alias="Action")
    package: str = Field("", alias="Package")
    test: str = Field("", alias="Test")
    output: str = Field("", alias="Output")
    elapsed: float | None = Field(None, alias="Elapsed")

    @field_validator("time", mode="before")
    @classmethod
    def _truncate_nanoseconds(cls, value: Any) -> Any:
        if isinstance(value, str):
            return _SUBMICRO_FRACTION.sub(r"\1", value, count=1)
        return value

    @field_validator("time", mode="after")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        # Offset-less timestamps are read as UTC so all times stay comparable.
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @property
    def key(self) -> str:
        """Composite ``<package>.<test>`` identifier."""
        return f"{self.package}.{self.test}"

    @property
    def known_action(self) -> TestAction | None:
        """The action as a ``TestAction``, or None for anything else."""
        try:
            return TestAction(self.action)
        except ValueError:
            return None
