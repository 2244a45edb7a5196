"""Exception hierarchy for the netprobe package."""
from __future__ import annotations

from typing import Optional


class NetProbeError(Exception):
    """Base class for every error raised by netprobe."""


class ConfigError(NetProbeError, ValueError):
    """Raised when a :class:`~netprobe.config.ProbeConfig` is invalid."""


class TransferFailed(NetProbeError):
    """
    Raised when a timed transfer does not complete successfully.

    Attributes:
        direction: The direction label, ``"Download"`` or ``"Upload"``.
        url: Request URL.
        status: The HTTP status received, or ``None`` on a transport error.
        reason: Human-readable cause.
    """

    def __init__(
        self,
        direction: str,
        url: str,
        status: Optional[int] = None,
        reason: Optional[str] = None,
    ) -> None:
        self.direction = direction
        self.url = url
        self.status = status
        self.reason = reason

        status_str = f", status={status}" if status is not None else ""
        reason_str = f": {reason}" if reason else ""
        super().__init__(f"{direction} transfer failed (url={url}{status_str}){reason_str}")
