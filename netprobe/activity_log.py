"""
Bounded, newest-first log of transfer events.

Each successful transfer becomes one immutable :class:`LogEntry`.  The
:class:`ActivityLog` keeps the ten most recent, newest at index 0.
"""
from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from typing import Deque, Iterator, Tuple

from .constants import LOG_CAPACITY, PREVIEW_BYTES, PREVIEW_ELLIPSIS, TIMESTAMP_FORMAT
from .probe import Direction, TransferResult


def format_preview(data: bytes, limit: int = PREVIEW_BYTES) -> str:
    """Upper-case, dash-separated hex of the first *limit* bytes.

    >>> format_preview(b"<!doc")
    '3C-21-64-6F-63'
    """
    shown = "-".join(f"{b:02X}" for b in data[:limit])
    return shown + (PREVIEW_ELLIPSIS if len(data) > limit else "")


@dataclass(frozen=True)
class LogEntry:
    """One rendered transfer record."""

    direction: Direction
    url: str
    status: int
    kbps: float
    preview: str = ""
    timestamp: datetime = field(default_factory=lambda: datetime.now().replace(microsecond=0))

    @classmethod
    def from_result(cls, result: TransferResult) -> LogEntry:
        return cls(
            direction=result.direction,
            url=result.url,
            status=result.status,
            kbps=result.kbps,
            preview=format_preview(result.payload),
            timestamp=result.sample.timestamp.replace(microsecond=0),
        )

    def format(self) -> str:
        return (
            f"[{self.timestamp.strftime(TIMESTAMP_FORMAT)}] {self.direction.value}\n"
            f"URL: {self.url}\n"
            f"Status: {self.status}\n"
            f"Speed: {self.kbps:.2f} KB/s\n"
            f"Raw Data: {self.preview}"
        )

    def to_dict(self) -> dict:
        return {
            "timestamp": self.timestamp.strftime(TIMESTAMP_FORMAT),
            "direction": self.direction.value,
            "url": self.url,
            "status": self.status,
            "kbps": round(self.kbps, 2),
            "preview": self.preview,
        }


class ActivityLog:
    """Fixed-capacity log; appending to a full log drops the oldest entry."""

    def __init__(self, capacity: int = LOG_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError(f"capacity must be at least 1, got {capacity}")
        # appendleft on a full bounded deque discards from the right (oldest)
        self._entries: Deque[LogEntry] = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._entries.maxlen or 0

    def append(self, entry: LogEntry) -> None:
        self._entries.appendleft(entry)

    def snapshot(self) -> Tuple[LogEntry, ...]:
        """Immutable copy, newest first."""
        return tuple(self._entries)

    def render(self) -> str:
        return "\n".join(entry.format() for entry in self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[LogEntry]:
        return iter(self.snapshot())
