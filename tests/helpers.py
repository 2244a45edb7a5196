"""Fakes shared by the test modules."""

import asyncio
from typing import List, Optional

from netprobe.activity_log import LogEntry
from netprobe.config import ProbeConfig
from netprobe.exceptions import TransferFailed
from netprobe.probe import Direction, SpeedSample, TransferResult


class FakeResponse:
    """Stands in for the context manager returned by ``session.get/post``."""

    def __init__(self, status=200, body=b"", reason="OK", exception=None):
        self.status = status
        self.body = body
        self.reason = reason
        self.exception = exception

    async def __aenter__(self):
        if self.exception is not None:
            raise self.exception
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return False

    async def read(self):
        return self.body


class FakeSession:
    def __init__(self, responses):
        self.responses = list(responses)
        self.calls = []
        self.closed = False

    def get(self, url, **kwargs):
        self.calls.append(("GET", url, None, kwargs))
        return self.responses.pop(0)

    def post(self, url, data=None, **kwargs):
        self.calls.append(("POST", url, data, kwargs))
        return self.responses.pop(0)

    async def close(self):
        self.closed = True


def make_result(direction: Direction, kbps: float, payload: bytes = b"hello") -> TransferResult:
    return TransferResult(
        sample=SpeedSample(direction=direction, kbps=kbps),
        url=f"https://example.com/{direction.value.lower()}",
        status=200,
        bytes_moved=len(payload),
        elapsed=1.0,
        payload=payload,
    )


def make_entry(n: int, direction: Direction = Direction.DOWNLOAD) -> LogEntry:
    return LogEntry(direction=direction, url=f"https://example.com/{n}", status=200, kbps=float(n))


class ScriptedProbe:
    """
    Probe double returning scripted speeds per direction.

    A script item is a speed in KB/s or an exception to raise.  An
    exhausted script raises ``TransferFailed``.
    """

    def __init__(self, download=(), upload=(), config: Optional[ProbeConfig] = None):
        self.config = config or ProbeConfig(cycle_pause=0)
        self.script = {
            Direction.DOWNLOAD: list(download),
            Direction.UPLOAD: list(upload),
        }
        self.calls: List[Direction] = []
        self.on_measure = None

    async def measure(self, direction):
        self.calls.append(direction)
        if self.on_measure is not None:
            self.on_measure(direction)
        await asyncio.sleep(0)

        script = self.script[direction]
        if not script:
            raise TransferFailed(direction.value, "https://example.com", reason="script exhausted")
        outcome = script.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return make_result(direction, outcome)


class RecordingDisplay:
    def __init__(self):
        self.calls = []

    def show_averages(self, download_kbps, upload_kbps):
        self.calls.append(("averages", download_kbps, upload_kbps))

    def show_log(self, entries):
        self.calls.append(("log", tuple(entries)))

    def focus(self, view):
        self.calls.append(("focus", view))

    def of_kind(self, kind):
        return [c for c in self.calls if c[0] == kind]
