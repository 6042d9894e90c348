"""Stream smoothing strategies for the live gaze stream."""
from __future__ import annotations

from abc import ABC, abstractmethod

from ..domain.samples import GazeSample, SmoothedPoint


class IStreamSmoother(ABC):
    """Strategy interface for per-sample gaze smoothing.

    One instance belongs to exactly one session; its buffer is never shared.
    """

    @abstractmethod
    def smooth(self, sample: GazeSample) -> SmoothedPoint:
        """Feed one sample and return the smoothed position."""
        raise NotImplementedError

    @abstractmethod
    def reset(self) -> None:
        """Drop all buffered state."""
        raise NotImplementedError
