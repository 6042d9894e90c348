"""Trailing moving-average smoother."""
from __future__ import annotations

from collections import deque
from statistics import mean
from typing import Deque

from .base import IStreamSmoother
from ..domain.samples import GazeSample, SmoothedPoint


class MovingAverageSmoother(IStreamSmoother):
    """Mean of x and y over a fixed-capacity FIFO of the latest samples.

    With a single buffered sample the output equals the input.
    """

    def __init__(self, window_size: int = 5) -> None:
        self.window_size = max(1, window_size)
        self._buffer: Deque[GazeSample] = deque(maxlen=self.window_size)

    def smooth(self, sample: GazeSample) -> SmoothedPoint:
        self._buffer.append(sample)
        return SmoothedPoint(
            x=mean(s.x for s in self._buffer),
            y=mean(s.y for s in self._buffer),
            timestamp_ms=sample.timestamp_ms,
            confidence=sample.confidence,
        )

    def reset(self) -> None:
        self._buffer.clear()

    def __len__(self) -> int:
        return len(self._buffer)
