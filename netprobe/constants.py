"""
Shared constants used across the netprobe modules.

Endpoints, sizes, and timing live here so the probe, scheduler, and
gesture code agree on a single value.
"""

# ---------------------------------------------------------------------------
# HTTP headers
# ---------------------------------------------------------------------------

USER_AGENT = (
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/144.0.0.0 Safari/537.36"
)

COMMON_HEADERS = {
    "User-Agent": USER_AGENT,
    "Accept": "*/*",
    "Accept-Language": "en-US,en;q=0.9",
}

UPLOAD_CONTENT_TYPE = "application/octet-stream"

# ---------------------------------------------------------------------------
# Probe endpoints
# ---------------------------------------------------------------------------

DOWNLOAD_URL = "https://www.google.com"
UPLOAD_URL = "https://httpbin.org/post"

# ---------------------------------------------------------------------------
# Data transfer
# ---------------------------------------------------------------------------

UPLOAD_PAYLOAD_SIZE = 1024 * 500  # 500 KiB synthetic POST body
BYTES_PER_KB = 1024
MIN_ELAPSED = 1e-6               # floor for elapsed seconds

# ---------------------------------------------------------------------------
# Activity log
# ---------------------------------------------------------------------------

LOG_CAPACITY = 10
PREVIEW_BYTES = 50               # raw bytes shown per log entry
PREVIEW_ELLIPSIS = "..."
TIMESTAMP_FORMAT = "%H:%M:%S"

# ---------------------------------------------------------------------------
# Timing
# ---------------------------------------------------------------------------

CYCLE_PAUSE = 1.0                # seconds between measurement cycles
LOG_REFRESH_INTERVAL = 1.0       # seconds between log pushes while holding
HOLD_THRESHOLD = 3.0             # seconds separating a tap from a hold

# ---------------------------------------------------------------------------
# Display
# ---------------------------------------------------------------------------

SLOW_SPEED_KBPS = 10.0
MODERATE_SPEED_KBPS = 30.0
