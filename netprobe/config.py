"""
Probe configuration.

:class:`ProbeConfig` is the validated form every other module consumes.
Users can keep their preferred values in ``~/.netvisualizer/config.json``;
:func:`load_config` overlays that file on the defaults and validates the
result, so a bad hand edit surfaces as :class:`ConfigError`.

Supported keys::

    download_url = "https://www.google.com"   # GET target
    upload_url = "https://httpbin.org/post"   # POST target
    upload_size = 512000                       # POST body size in bytes
    cycle_pause = 1.0                          # seconds between cycles
    transfer_timeout = null                    # seconds, null = no timeout
"""
from __future__ import annotations

import json
import logging
import math
import os
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, Optional
from urllib.parse import urlparse

from .constants import CYCLE_PAUSE, DOWNLOAD_URL, UPLOAD_PAYLOAD_SIZE, UPLOAD_URL
from .exceptions import ConfigError

logger = logging.getLogger(__name__)

CONFIG_DIR = os.path.join(Path.home(), ".netvisualizer")
CONFIG_FILE = "config.json"

DEFAULTS: Dict[str, Any] = {
    "download_url": DOWNLOAD_URL,
    "upload_url": UPLOAD_URL,
    "upload_size": UPLOAD_PAYLOAD_SIZE,
    "cycle_pause": CYCLE_PAUSE,
    "transfer_timeout": None,
}


# ---------------------------------------------------------------------------
# Field checks
# ---------------------------------------------------------------------------

def _check_url(name: str, url: Any) -> None:
    if not isinstance(url, str):
        raise ConfigError(f"{name} must be a string, got {url!r}")
    if not url:
        raise ConfigError(f"{name} must not be empty")
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ConfigError(f"{name} must be an http(s) URL, got {url!r}")


def _check_seconds(name: str, value: Any) -> float:
    """Reject anything that is not a finite real number of seconds."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigError(f"{name} must be a number of seconds, got {value!r}")
    if not math.isfinite(value):
        raise ConfigError(f"{name} must be finite, got {value!r}")
    return value


@dataclass(frozen=True)
class ProbeConfig:
    """Endpoints and timing for the measurement loop.

    Validated on construction so a bad value fails here rather than at
    cycle time.
    """

    download_url: str = DOWNLOAD_URL
    upload_url: str = UPLOAD_URL
    upload_size: int = UPLOAD_PAYLOAD_SIZE
    cycle_pause: float = CYCLE_PAUSE
    transfer_timeout: Optional[float] = None

    def __post_init__(self) -> None:
        _check_url("download_url", self.download_url)
        _check_url("upload_url", self.upload_url)

        if isinstance(self.upload_size, bool) or not isinstance(self.upload_size, int):
            raise ConfigError(f"upload_size must be an integer, got {self.upload_size!r}")
        if self.upload_size <= 0:
            raise ConfigError(f"upload_size must be positive, got {self.upload_size}")

        if _check_seconds("cycle_pause", self.cycle_pause) < 0:
            raise ConfigError(f"cycle_pause must not be negative, got {self.cycle_pause}")

        if self.transfer_timeout is not None:
            if _check_seconds("transfer_timeout", self.transfer_timeout) <= 0:
                raise ConfigError(
                    f"transfer_timeout must be positive or None, got {self.transfer_timeout}"
                )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> ProbeConfig:
        """Build a config from *data*, using defaults for missing keys."""
        merged = {**DEFAULTS, **{k: v for k, v in data.items() if k in DEFAULTS}}
        return cls(**merged)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# ---------------------------------------------------------------------------
# Config file
# ---------------------------------------------------------------------------

def config_path() -> str:
    return os.path.join(CONFIG_DIR, CONFIG_FILE)


def read_config_file(path: Optional[str] = None) -> Dict[str, Any]:
    """Defaults overlaid with the known keys of the user's file.

    A missing file yields the defaults; so does an unreadable one, with a
    warning.  Values are returned as found -- validation happens when
    they become a :class:`ProbeConfig`.
    """
    path = path or config_path()
    values = dict(DEFAULTS)

    try:
        with open(path, encoding="utf-8") as fh:
            user = json.load(fh)
    except FileNotFoundError:
        return values
    except (json.JSONDecodeError, OSError) as exc:
        logger.warning("Ignoring unreadable config file %s: %s", path, exc)
        return values

    if not isinstance(user, dict):
        logger.warning("Ignoring config file %s: top level is not an object", path)
        return values

    values.update({k: v for k, v in user.items() if k in DEFAULTS})
    return values


def load_config(path: Optional[str] = None) -> ProbeConfig:
    """Read the config file and validate it.  Raises ``ConfigError``."""
    return ProbeConfig.from_dict(read_config_file(path))


def save_config(config: ProbeConfig, path: Optional[str] = None) -> str:
    """Persist *config* as JSON.  Returns the file path."""
    path = path or config_path()
    os.makedirs(os.path.dirname(path), exist_ok=True)

    with open(path, "w", encoding="utf-8") as fh:
        json.dump(config.to_dict(), fh, indent=2)

    return path
