"""
Tap / hold classification for a single pointer.

The classifier is driven by three observations, all carrying a timestamp
in seconds from a monotonic clock:

* ``pointer_down(t)`` -- the pointer went down,
* ``tick(t)`` -- the host's frame/poll loop reports the pointer is
  still down,
* ``pointer_up(t)`` -- the pointer was released.

A press released before :data:`HOLD_THRESHOLD` seconds is a ``TAP``.  A
press still down at the threshold emits ``HOLD_START`` once, and its
release emits ``HOLD_END``.
"""
from __future__ import annotations

import enum
from typing import Optional

from .constants import HOLD_THRESHOLD


class GesturePhase(enum.Enum):
    IDLE = "idle"
    PRESSED = "pressed"
    HOLDING = "holding"


class GestureEvent(enum.Enum):
    TAP = "tap"
    HOLD_START = "hold_start"
    HOLD_END = "hold_end"


class GestureClassifier:
    """Small state machine turning pointer observations into gesture events."""

    def __init__(self, threshold: float = HOLD_THRESHOLD) -> None:
        if threshold <= 0:
            raise ValueError(f"threshold must be positive, got {threshold}")
        self.threshold = threshold
        self.phase = GesturePhase.IDLE
        self.press_start: Optional[float] = None

    @property
    def is_pressed(self) -> bool:
        return self.phase is not GesturePhase.IDLE

    def pointer_down(self, now: float) -> Optional[GestureEvent]:
        # A second down while pressed does not re-arm the current press
        if self.phase is GesturePhase.IDLE:
            self.phase = GesturePhase.PRESSED
            self.press_start = now
        return None

    def tick(self, now: float) -> Optional[GestureEvent]:
        if self.phase is GesturePhase.PRESSED and self._elapsed(now) >= self.threshold:
            self.phase = GesturePhase.HOLDING
            return GestureEvent.HOLD_START
        return None

    def pointer_up(self, now: float) -> Optional[GestureEvent]:
        phase = self.phase
        elapsed = self._elapsed(now)
        self.reset()

        if phase is GesturePhase.HOLDING:
            return GestureEvent.HOLD_END
        if phase is GesturePhase.PRESSED and elapsed < self.threshold:
            return GestureEvent.TAP
        # Idle, or a long press that no tick() ever saw cross the threshold
        return None

    def reset(self) -> None:
        self.phase = GesturePhase.IDLE
        self.press_start = None

    def _elapsed(self, now: float) -> float:
        if self.press_start is None:
            return 0.0
        return now - self.press_start
