"""UI layer -- Rich terminal display for the measurement core."""

from .display import ConsoleDisplay, console, format_kbps, speed_color

__all__ = [
    "ConsoleDisplay",
    "console",
    "format_kbps",
    "speed_color",
]
