"""
Cumulative per-direction speed averages.

No windowing and no decay: the average is the plain mean of every sample
recorded since the accumulator was created.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

from .probe import Direction


@dataclass
class ChannelTotals:
    """Running sum and count for one direction."""

    total: float = 0.0
    count: int = 0

    @property
    def average(self) -> float:
        return self.total / self.count if self.count > 0 else 0.0

    def to_dict(self) -> dict:
        return {
            "total": round(self.total, 2),
            "count": self.count,
            "average": round(self.average, 2),
        }


class SpeedAccumulator:
    """Running mean of KB/s samples, one channel per :class:`Direction`."""

    def __init__(self) -> None:
        self._channels: Dict[Direction, ChannelTotals] = {d: ChannelTotals() for d in Direction}

    def record(self, direction: Direction, kbps: float) -> None:
        channel = self._channels[direction]
        channel.total += kbps
        channel.count += 1

    def average(self, direction: Direction) -> float:
        """Mean of all samples for *direction*, or 0.0 before the first one."""
        return self._channels[direction].average

    def count(self, direction: Direction) -> int:
        return self._channels[direction].count

    def to_dict(self) -> dict:
        return {d.value.lower(): c.to_dict() for d, c in self._channels.items()}
