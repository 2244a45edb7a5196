"""Network probe core -- timed transfers, averages, activity log, and gestures."""

from .accumulator import ChannelTotals, SpeedAccumulator
from .activity_log import ActivityLog, LogEntry, format_preview
from .config import ProbeConfig, load_config, read_config_file, save_config
from .display import DisplayAdapter, MonitorSnapshot, View
from .exceptions import ConfigError, NetProbeError, TransferFailed
from .gesture import GestureClassifier, GestureEvent, GesturePhase
from .probe import Direction, SpeedSample, TransferProbe, TransferResult, compute_kbps
from .scheduler import MeasurementScheduler
from .view import ViewController

__all__ = [
    "ActivityLog",
    "ChannelTotals",
    "ConfigError",
    "Direction",
    "DisplayAdapter",
    "GestureClassifier",
    "GestureEvent",
    "GesturePhase",
    "LogEntry",
    "MeasurementScheduler",
    "MonitorSnapshot",
    "NetProbeError",
    "ProbeConfig",
    "SpeedAccumulator",
    "SpeedSample",
    "TransferFailed",
    "TransferProbe",
    "TransferResult",
    "View",
    "ViewController",
    "compute_kbps",
    "format_preview",
    "load_config",
    "read_config_file",
    "save_config",
]
