"""Gaze samples as delivered by the tracking collaborator.

Coordinates are screen pixels, timestamps milliseconds on a monotonic clock.
The core only ever sees this one normalized stream, whichever acquisition
backend produced it.
"""
from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class GazeSample:
    """Single raw gaze observation."""

    x: float
    y: float
    timestamp_ms: float
    confidence: float = 1.0

    def is_finite(self) -> bool:
        return all(math.isfinite(v) for v in (self.x, self.y, self.timestamp_ms))


@dataclass(frozen=True)
class SmoothedPoint:
    """Gaze position after stream smoothing."""

    x: float
    y: float
    timestamp_ms: float
    confidence: float = 1.0

    def distance_to(self, other: "SmoothedPoint") -> float:
        return math.hypot(other.x - self.x, other.y - self.y)
