from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator, Callable

from app.schemas.tailoring import ProgressEvent, ProgressStep

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[ProgressEvent], None]


class ProgressStream:
    """Ordered, monotonic progress events for one pipeline run.

    Producers call :meth:`emit`; consumers iterate with ``async for``. The
    stream ends once :meth:`close` has been called and the queue drains.
    """

    def __init__(self, *, on_progress: ProgressCallback | None = None):
        self._queue: asyncio.Queue[ProgressEvent | None] = asyncio.Queue()
        self._on_progress = on_progress
        self._last = 0
        self._closed = False
        self.events: list[ProgressEvent] = []

    @property
    def closed(self) -> bool:
        return self._closed

    def emit(self, step: ProgressStep, progress: int, message: str) -> ProgressEvent:
        if self._closed:
            raise RuntimeError("progress stream is closed")
        value = max(self._last, min(100, int(progress)))
        self._last = value
        event = ProgressEvent(step=step, progress=value, message=message)
        self.events.append(event)
        self._queue.put_nowait(event)
        if self._on_progress is not None:
            try:
                self._on_progress(event)
            except Exception:  # noqa: BLE001 - a listener must not break the pipeline
                logger.warning("progress_callback_failed step=%s", step, exc_info=True)
        return event

    def close(self) -> None:
        if not self._closed:
            self._closed = True
            self._queue.put_nowait(None)

    def __aiter__(self) -> AsyncIterator[ProgressEvent]:
        return self._iterate()

    async def _iterate(self) -> AsyncIterator[ProgressEvent]:
        while True:
            event = await self._queue.get()
            if event is None:
                return
            yield event
