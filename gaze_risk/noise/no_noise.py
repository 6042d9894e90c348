"""Smoother that leaves gaze untouched."""
from __future__ import annotations

from .base import IStreamSmoother
from ..domain.samples import GazeSample, SmoothedPoint


class NoSmoothing(IStreamSmoother):
    """Pass-through strategy useful for testing and pre-filtered streams."""

    def smooth(self, sample: GazeSample) -> SmoothedPoint:
        return SmoothedPoint(sample.x, sample.y, sample.timestamp_ms, sample.confidence)

    def reset(self) -> None:
        pass
