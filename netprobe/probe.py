"""
Timed transfer probe.

One call to :meth:`TransferProbe.measure` performs a single HTTP transfer
against the configured endpoint and turns the wall-clock duration into a
KB/s sample.  Downloads GET the download URL and count the bytes of the
body; uploads POST a fixed-size zero-filled body and count the payload.
The probe never touches shared state -- the caller decides what to do
with the result, and a failure is raised as :class:`TransferFailed`.
"""
from __future__ import annotations

import asyncio
import enum
import logging
import time
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

import aiohttp

from .config import ProbeConfig
from .constants import BYTES_PER_KB, COMMON_HEADERS, MIN_ELAPSED, UPLOAD_CONTENT_TYPE
from .exceptions import TransferFailed

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Data models
# ---------------------------------------------------------------------------

class Direction(enum.Enum):
    """The two independent measurement channels."""

    DOWNLOAD = "Download"
    UPLOAD = "Upload"


@dataclass(frozen=True)
class SpeedSample:
    """A single throughput observation."""

    direction: Direction
    kbps: float
    timestamp: datetime = field(default_factory=datetime.now)


@dataclass(frozen=True)
class TransferResult:
    """Outcome of one successful timed transfer."""

    sample: SpeedSample
    url: str
    status: int
    bytes_moved: int
    elapsed: float
    payload: bytes = b""

    @property
    def direction(self) -> Direction:
        return self.sample.direction

    @property
    def kbps(self) -> float:
        return self.sample.kbps

    def to_dict(self) -> dict:
        return {
            "direction": self.direction.value,
            "url": self.url,
            "status": self.status,
            "bytes": self.bytes_moved,
            "elapsed_ms": round(self.elapsed * 1000, 2),
            "kbps": round(self.kbps, 2),
            "timestamp": self.sample.timestamp.isoformat(timespec="seconds"),
        }


def compute_kbps(n_bytes: int, elapsed: float) -> float:
    """KB/s for *n_bytes* moved in *elapsed* seconds (1 KB = 1024 bytes)."""
    return (n_bytes / BYTES_PER_KB) / max(elapsed, MIN_ELAPSED)


# ---------------------------------------------------------------------------
# Probe
# ---------------------------------------------------------------------------

class TransferProbe:
    """
    Performs timed downloads and uploads against fixed endpoints.

    Use as an async context manager to let the probe own its
    ``aiohttp.ClientSession``, or pass an existing *session* (the probe
    then leaves closing it to the caller)::

        async with TransferProbe(config) as probe:
            result = await probe.measure(Direction.DOWNLOAD)
    """

    def __init__(
        self,
        config: ProbeConfig,
        session: Optional[aiohttp.ClientSession] = None,
    ) -> None:
        self.config = config
        self._session = session
        self._owns_session = session is None
        self._payload = bytes(config.upload_size)
        # total=None disables aiohttp's 5 minute default
        self._timeout = aiohttp.ClientTimeout(total=config.transfer_timeout)

    # -- Context manager ----------------------------------------------------

    async def __aenter__(self) -> TransferProbe:
        if self._session is None:
            self._session = aiohttp.ClientSession(
                headers=COMMON_HEADERS,
                timeout=self._timeout,
            )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:  # noqa: ANN001
        if self._owns_session and self._session is not None:
            await self._session.close()
            self._session = None

    def _ensure_session(self) -> aiohttp.ClientSession:
        if self._session is None:
            raise RuntimeError(
                "TransferProbe needs a session: pass one in or use "
                "'async with TransferProbe(config) as probe: ...'"
            )
        return self._session

    # -- Public methods -----------------------------------------------------

    async def measure(self, direction: Direction) -> TransferResult:
        """Run one transfer in *direction*; raise ``TransferFailed`` on failure."""
        if direction is Direction.DOWNLOAD:
            return await self.measure_download()
        return await self.measure_upload()

    async def measure_download(self) -> TransferResult:
        session = self._ensure_session()
        url = self.config.download_url

        start = time.perf_counter()
        status, body = await self._send(
            Direction.DOWNLOAD, url, session.get(url, timeout=self._timeout)
        )
        elapsed = max(time.perf_counter() - start, MIN_ELAPSED)

        return self._result(Direction.DOWNLOAD, url, status, len(body), elapsed, body)

    async def measure_upload(self) -> TransferResult:
        session = self._ensure_session()
        url = self.config.upload_url
        payload = self._payload

        start = time.perf_counter()
        status, _ = await self._send(
            Direction.UPLOAD,
            url,
            session.post(
                url,
                data=payload,
                headers={"Content-Type": UPLOAD_CONTENT_TYPE},
                timeout=self._timeout,
            ),
        )
        elapsed = max(time.perf_counter() - start, MIN_ELAPSED)

        return self._result(Direction.UPLOAD, url, status, len(payload), elapsed, payload)

    # -- Internal helpers ---------------------------------------------------

    @staticmethod
    async def _send(direction: Direction, url: str, request) -> tuple:  # noqa: ANN001
        """Enter *request*, read the whole body, and check the status."""
        try:
            async with request as resp:
                body = await resp.read()
                status = resp.status
                reason = resp.reason
        except asyncio.TimeoutError as exc:
            raise TransferFailed(direction.value, url, reason="timed out") from exc
        except (aiohttp.ClientError, OSError) as exc:
            raise TransferFailed(direction.value, url, reason=str(exc) or type(exc).__name__) from exc

        if not 200 <= status < 300:
            raise TransferFailed(direction.value, url, status=status, reason=reason)
        return status, body

    @staticmethod
    def _result(
        direction: Direction,
        url: str,
        status: int,
        n_bytes: int,
        elapsed: float,
        payload: bytes,
    ) -> TransferResult:
        kbps = compute_kbps(n_bytes, elapsed)
        logger.debug("%s %s: %d bytes in %.3f s (%.2f KB/s)", direction.value, url, n_bytes, elapsed, kbps)
        return TransferResult(
            sample=SpeedSample(direction=direction, kbps=kbps),
            url=url,
            status=status,
            bytes_moved=n_bytes,
            elapsed=elapsed,
            payload=payload,
        )
