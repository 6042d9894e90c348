"""Exponential moving-average smoother."""
from __future__ import annotations

from typing import Optional, Tuple

from .base import IStreamSmoother
from ..domain.samples import GazeSample, SmoothedPoint


class ExponentialSmoother(IStreamSmoother):
    """s_t = alpha * x_t + (1 - alpha) * s_(t-1); the first sample passes through."""

    def __init__(self, alpha: float = 0.5) -> None:
        self.alpha = min(1.0, max(alpha, 1e-6))
        self._state: Optional[Tuple[float, float]] = None

    def smooth(self, sample: GazeSample) -> SmoothedPoint:
        if self._state is None:
            x, y = sample.x, sample.y
        else:
            px, py = self._state
            x = self.alpha * sample.x + (1.0 - self.alpha) * px
            y = self.alpha * sample.y + (1.0 - self.alpha) * py
        self._state = (x, y)
        return SmoothedPoint(x, y, sample.timestamp_ms, sample.confidence)

    def reset(self) -> None:
        self._state = None
