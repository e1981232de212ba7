"""Line-delimited decoder for the ``go test -json`` event stream.

``decode_stream`` yields an explicit result per unit:

- ``DecodedEvent``  a line that parsed into a ``TestEvent``
- ``EndOfStream``   the input is exhausted
- ``DecodeError``   a line that could not be decoded

``iter_events`` collapses that sum type into a plain event iterator.  A
decode error ends the iteration exactly like end-of-stream does; the
ambiguity is kept visible here instead of inside the consumer loop.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from typing import Union

from pydantic import BaseModel, ConfigDict, ValidationError

from gostress.models.events import TestEvent

logger = logging.getLogger(__name__)


class DecodedEvent(BaseModel):
    model_config = ConfigDict(frozen=True)

    line_number: int
    event: TestEvent


class EndOfStream(BaseModel):
    model_config = ConfigDict(frozen=True)

    line_number: int


class DecodeError(BaseModel):
    """A line that is not a valid event record."""

    model_config = ConfigDict(frozen=True)

    line_number: int
    line: str
    reason: str


DecodeResult = Union[DecodedEvent, EndOfStream, DecodeError]


def _as_text(line: str | bytes) -> str:
    if isinstance(line, bytes):
        return line.decode("utf-8", errors="replace")
    return line


def decode_stream(stream: Iterable[str | bytes]) -> Iterator[DecodeResult]:
    """Decode *stream* one line at a time.

    Blank lines are whitespace between records and produce nothing.  The
    iterator stops after yielding the first ``DecodeError`` or the final
    ``EndOfStream``.
    """
    line_number = 0
    for raw in stream:
        line_number += 1
        text = _as_text(raw).strip()
        if not text:
            continue
        try:
            event = TestEvent.model_validate_json(text)
        except ValidationError as exc:
            yield DecodeError(
                line_number=line_number,
                line=text,
                reason=str(exc.errors()[0]["msg"]) if exc.errors() else str(exc),
            )
            return
        yield DecodedEvent(line_number=line_number, event=event)
    yield EndOfStream(line_number=line_number)


def iter_events(stream: Iterable[str | bytes]) -> Iterator[TestEvent]:
    """Yield events from *stream* until end-of-stream or the first bad line."""
    for result in decode_stream(stream):
        if isinstance(result, DecodedEvent):
            yield result.event
        elif isinstance(result, DecodeError):
            logger.warning(
                "Stopping at undecodable line %d (%s): %.80s",
                result.line_number,
                result.reason,
                result.line,
            )
            return
        else:
            logger.debug("End of event stream after %d lines", result.line_number)
            return
