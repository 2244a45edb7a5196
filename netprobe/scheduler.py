"""
The repeating measurement loop.

Each cycle measures download, then upload (never overlapping), folds the
successful results into the accumulator and the activity log, pushes the
new state to the display, and sleeps :data:`CYCLE_PAUSE` seconds.  A
failed transfer is logged and skipped: it produces no sample and no log
entry.
"""
from __future__ import annotations

import asyncio
import logging
import threading
from typing import List, Optional

from .accumulator import SpeedAccumulator
from .activity_log import ActivityLog, LogEntry
from .display import DisplayAdapter, MonitorSnapshot
from .exceptions import TransferFailed
from .probe import Direction, TransferProbe, TransferResult

logger = logging.getLogger(__name__)

CYCLE_ORDER = (Direction.DOWNLOAD, Direction.UPLOAD)


class MeasurementScheduler:
    """
    Drives a :class:`TransferProbe` in a fixed cadence.

    The scheduler is the only writer of its accumulator and log.  Readers
    go through :meth:`snapshot`, which takes the same lock the writer
    holds while applying a cycle, so a reader on another thread never
    sees half a cycle.
    """

    def __init__(
        self,
        probe: TransferProbe,
        display: Optional[DisplayAdapter] = None,
        cycle_pause: Optional[float] = None,
    ) -> None:
        self.probe = probe
        self.display = display
        self.cycle_pause = probe.config.cycle_pause if cycle_pause is None else cycle_pause
        self.cycles = 0

        self._accumulator = SpeedAccumulator()
        self._log = ActivityLog()
        self._lock = threading.Lock()
        self._stop = asyncio.Event()

    # -- Control ------------------------------------------------------------

    def stop(self) -> None:
        """Ask the loop to finish; takes effect at the next cycle boundary."""
        self._stop.set()

    @property
    def stopped(self) -> bool:
        return self._stop.is_set()

    async def run(self, max_cycles: Optional[int] = None) -> None:
        """Measure until :meth:`stop` is called (or *max_cycles* have run)."""
        logger.info(
            "Measuring %s / %s every %.1f s",
            self.probe.config.download_url,
            self.probe.config.upload_url,
            self.cycle_pause,
        )
        while not self._stop.is_set():
            await self.run_cycle()

            if max_cycles is not None and self.cycles >= max_cycles:
                break

            try:
                await asyncio.wait_for(self._stop.wait(), timeout=self.cycle_pause)
            except asyncio.TimeoutError:
                pass

        logger.info("Measurement stopped after %d cycle(s)", self.cycles)

    async def run_cycle(self) -> MonitorSnapshot:
        """One download-then-upload pass.  Returns the state after applying it."""
        results: List[TransferResult] = []
        for direction in CYCLE_ORDER:
            result = await self._attempt(direction)
            if result is not None:
                results.append(result)

        snapshot = self._apply(results)
        self.cycles += 1
        self._notify(snapshot)
        return snapshot

    # -- Readers ------------------------------------------------------------

    def snapshot(self) -> MonitorSnapshot:
        with self._lock:
            return self._snapshot_locked()

    def average(self, direction: Direction) -> float:
        with self._lock:
            return self._accumulator.average(direction)

    # -- Internal helpers ---------------------------------------------------

    async def _attempt(self, direction: Direction) -> Optional[TransferResult]:
        try:
            return await self.probe.measure(direction)
        except TransferFailed as exc:
            logger.warning("Skipping sample: %s", exc)
            return None

    def _apply(self, results: List[TransferResult]) -> MonitorSnapshot:
        with self._lock:
            for result in results:
                self._accumulator.record(result.direction, result.kbps)
                self._log.append(LogEntry.from_result(result))
            return self._snapshot_locked()

    def _snapshot_locked(self) -> MonitorSnapshot:
        acc = self._accumulator
        return MonitorSnapshot(
            download_kbps=acc.average(Direction.DOWNLOAD),
            upload_kbps=acc.average(Direction.UPLOAD),
            download_count=acc.count(Direction.DOWNLOAD),
            upload_count=acc.count(Direction.UPLOAD),
            entries=self._log.snapshot(),
        )

    def _notify(self, snapshot: MonitorSnapshot) -> None:
        if self.display is None:
            return
        self.display.show_averages(snapshot.download_kbps, snapshot.upload_kbps)
        self.display.show_log(snapshot.entries)
