"""Gaze events produced by the fixation/saccade segmenter."""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List, Tuple, Union


class GazeEventType(Enum):
    """Enumeration of high-level gaze events produced by the segmenter."""

    FIXATION = auto()
    SACCADE = auto()


@dataclass(frozen=True)
class Fixation:
    """Stable gaze period anchored at the point where it started."""

    x: float
    y: float
    start_time_ms: float
    duration_ms: float
    sample_count: int = 1

    event_type = GazeEventType.FIXATION

    @property
    def end_time_ms(self) -> float:
        return self.start_time_ms + self.duration_ms


@dataclass(frozen=True)
class Saccade:
    """Rapid movement between two consecutive smoothed points."""

    start_x: float
    start_y: float
    end_x: float
    end_y: float
    start_time_ms: float
    duration_ms: float
    velocity: float  # px/s
    is_regression: bool
    has_pso: bool = False
    has_glissade: bool = False

    event_type = GazeEventType.SACCADE

    @property
    def end_time_ms(self) -> float:
        return self.start_time_ms + self.duration_ms

    @property
    def amplitude_px(self) -> float:
        return math.hypot(self.end_x - self.start_x, self.end_y - self.start_y)


GazeEvent = Union[Fixation, Saccade]


@dataclass
class SegmentedEvents:
    """Append-only fixation and saccade lists of one session.

    Owned by the session controller; extractors and classifiers only read it.
    """

    fixations: List[Fixation] = field(default_factory=list)
    saccades: List[Saccade] = field(default_factory=list)

    def append(self, event: GazeEvent) -> None:
        if isinstance(event, Fixation):
            self.fixations.append(event)
        else:
            self.saccades.append(event)

    def extend(self, events) -> None:
        for event in events:
            self.append(event)

    @property
    def total_events(self) -> int:
        return len(self.fixations) + len(self.saccades)

    def snapshot(self) -> Tuple[Tuple[Fixation, ...], Tuple[Saccade, ...]]:
        """Read-only copies for the persistence layer."""
        return tuple(self.fixations), tuple(self.saccades)

    def chronological(self) -> List[GazeEvent]:
        return sorted([*self.fixations, *self.saccades], key=lambda e: e.start_time_ms)
