"""
The boundary between the measurement core and whatever draws it.

The core never renders anything.  It pushes averages and log snapshots
to an object implementing :class:`DisplayAdapter` and tells it which
:class:`View` the user asked for.
"""
from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Protocol, Sequence, Tuple, runtime_checkable

from .activity_log import LogEntry


class View(enum.Enum):
    AVERAGES = "averages"
    LOG = "log"


@dataclass(frozen=True)
class MonitorSnapshot:
    """Point-in-time copy of the scheduler's averages and log."""

    download_kbps: float = 0.0
    upload_kbps: float = 0.0
    download_count: int = 0
    upload_count: int = 0
    entries: Tuple[LogEntry, ...] = ()

    def to_dict(self) -> dict:
        return {
            "download_kbps": round(self.download_kbps, 2),
            "upload_kbps": round(self.upload_kbps, 2),
            "download_count": self.download_count,
            "upload_count": self.upload_count,
            "entries": [e.to_dict() for e in self.entries],
        }


@runtime_checkable
class DisplayAdapter(Protocol):
    def show_averages(self, download_kbps: float, upload_kbps: float) -> None: ...

    def show_log(self, entries: Sequence[LogEntry]) -> None: ...

    def focus(self, view: View) -> None: ...
