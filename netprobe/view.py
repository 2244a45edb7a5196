"""
Gesture-driven view switching.

:class:`ViewController` feeds pointer input to a
:class:`~netprobe.gesture.GestureClassifier` and turns its events into
display calls: a tap brings up the averages view, a hold brings up the
log view and keeps re-pushing the log once per second until release.

All input methods are synchronous and return immediately; they must be
called from the thread running the event loop, since a hold starts an
``asyncio`` task.
"""
from __future__ import annotations

import asyncio
import logging
import time
from typing import Callable, Optional

from .constants import LOG_REFRESH_INTERVAL
from .display import DisplayAdapter, MonitorSnapshot, View
from .gesture import GestureClassifier, GestureEvent

logger = logging.getLogger(__name__)


class ViewController:
    def __init__(
        self,
        display: DisplayAdapter,
        snapshot: Callable[[], MonitorSnapshot],
        classifier: Optional[GestureClassifier] = None,
        refresh_interval: float = LOG_REFRESH_INTERVAL,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.display = display
        self.classifier = classifier or GestureClassifier()
        self.refresh_interval = refresh_interval
        self._snapshot = snapshot
        self._clock = clock
        self._refresh_task: Optional[asyncio.Task] = None

    @property
    def refreshing(self) -> bool:
        return self._refresh_task is not None and not self._refresh_task.done()

    # -- Input --------------------------------------------------------------

    def pointer_down(self, now: Optional[float] = None) -> Optional[GestureEvent]:
        if self.refreshing:
            # The release of the previous hold never arrived
            logger.debug("Pointer down during log refresh; cancelling refresh")
            self._cancel_refresh()
        return self._dispatch(self.classifier.pointer_down(self._now(now)))

    def tick(self, now: Optional[float] = None) -> Optional[GestureEvent]:
        return self._dispatch(self.classifier.tick(self._now(now)))

    def pointer_up(self, now: Optional[float] = None) -> Optional[GestureEvent]:
        return self._dispatch(self.classifier.pointer_up(self._now(now)))

    def close(self) -> None:
        self._cancel_refresh()
        self.classifier.reset()

    # -- Internal helpers ---------------------------------------------------

    def _now(self, now: Optional[float]) -> float:
        return self._clock() if now is None else now

    def _dispatch(self, event: Optional[GestureEvent]) -> Optional[GestureEvent]:
        if event is GestureEvent.TAP:
            snap = self._snapshot()
            self.display.focus(View.AVERAGES)
            self.display.show_averages(snap.download_kbps, snap.upload_kbps)
        elif event is GestureEvent.HOLD_START:
            self.display.focus(View.LOG)
            if not self.refreshing:
                self._refresh_task = asyncio.get_running_loop().create_task(self._refresh_log())
        elif event is GestureEvent.HOLD_END:
            self._cancel_refresh()

        if event is not None:
            logger.debug("Gesture: %s", event.value)
        return event

    async def _refresh_log(self) -> None:
        while True:
            self.display.show_log(self._snapshot().entries)
            await asyncio.sleep(self.refresh_interval)

    def _cancel_refresh(self) -> None:
        if self._refresh_task is not None:
            self._refresh_task.cancel()
            self._refresh_task = None
