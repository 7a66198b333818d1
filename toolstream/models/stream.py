"""Upstream stream units and per-request stream state."""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, AsyncIterator, Optional, Union

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TextDelta:
    """A chunk of generated text."""
    text: str


@dataclass(frozen=True)
class ErrorPart:
    """An error reported in-band by the upstream stream."""
    error: Any


StreamPart = Union[TextDelta, ErrorPart]


class ErrorSlot:
    """
    Single-assignment slot for the first upstream error observed.

    Upstream errors surface through two independent observers: the provider's
    error callback and error units read from the stream. Whichever fires first
    is kept; later offers are ignored.
    """

    def __init__(self):
        self._error: Any = None
        self._filled = False

    def offer(self, error: Any) -> bool:
        """Store error if the slot is empty. Returns True if this offer won."""
        if self._filled:
            return False
        self._error = error
        self._filled = True
        return True

    @property
    def filled(self) -> bool:
        return self._filled

    @property
    def error(self) -> Any:
        return self._error


class StreamSession:
    """Per-request state: the upstream reader, abort signal and error slot."""

    def __init__(self, abort: Optional[asyncio.Event] = None):
        self.abort = abort or asyncio.Event()
        self.errors = ErrorSlot()
        self._reader: Optional[AsyncIterator[StreamPart]] = None
        self._released = False

    def attach(self, reader: AsyncIterator[StreamPart]) -> None:
        self._reader = reader

    def on_error(self, error: Any) -> None:
        """Error callback handed to the upstream provider."""
        self.errors.offer(error)

    async def read(self) -> Optional[StreamPart]:
        """Read the next unit, or None when the upstream is exhausted."""
        if self._reader is None or self._released:
            return None
        try:
            return await self._reader.__anext__()
        except StopAsyncIteration:
            return None

    @property
    def released(self) -> bool:
        return self._released

    async def release(self) -> None:
        """Close the upstream reader. Safe to call more than once."""
        if self._released:
            return
        self._released = True
        reader = self._reader
        if reader is None:
            return
        aclose = getattr(reader, "aclose", None)
        if aclose is None:
            return
        try:
            await aclose()
        except RuntimeError:
            # Reader is mid-iteration in a task that is being torn down
            logger.debug("Upstream reader busy during release", exc_info=True)
