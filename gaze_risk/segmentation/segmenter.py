"""Dispersion + velocity threshold fixation/saccade segmenter.

The segmenter is a two-state machine (Fixating / Idle) evaluated on every new
smoothed point against the previous one:

1. ``d`` = Euclidean distance, ``v = d / dt`` in px/s.
2. ``v`` below the saccade threshold: continued fixation. Without an anchor a
   new one starts here; if the point has drifted beyond the dispersion
   threshold from the anchor, the fixation is closed (emitted only when long
   enough) and a new anchor starts at the point.
3. ``v`` at or above the threshold: any open fixation is closed, a saccade from
   the previous point to this one is created and the anchor is cleared.

Saccades are held back until their post-saccadic window has been inspected
(see :mod:`post_saccade`); fixations completed in the meantime are queued
behind them, so emitted events are always in chronological order.

Samples with ``dt <= 0`` are skipped. The output depends only on the input
sequence and the configuration.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional

from ..config import SegmenterConfig
from ..domain.events import Fixation, GazeEvent, Saccade, SegmentedEvents
from ..domain.samples import SmoothedPoint
from .post_saccade import PendingSaccade


logger = logging.getLogger(__name__)


class SegmenterState(Enum):
    IDLE = "idle"
    FIXATING = "fixating"


@dataclass
class SegmentationStats:
    """Counters describing what the segmenter did with its input."""

    points_seen: int = 0
    points_skipped: int = 0
    fixations_emitted: int = 0
    fixations_discarded: int = 0
    saccades_emitted: int = 0


@dataclass
class _Anchor:
    x: float
    y: float
    start_time_ms: float
    sample_count: int = 1


class FixationSaccadeSegmenter:
    """Converts a smoothed point stream into Fixation and Saccade events.

    One instance per session; the anchor and last point are private to it.
    """

    def __init__(self, cfg: Optional[SegmenterConfig] = None) -> None:
        self.cfg = cfg or SegmenterConfig()
        self.stats = SegmentationStats()
        self._anchor: Optional[_Anchor] = None
        self._last: Optional[SmoothedPoint] = None
        self._pending: Optional[PendingSaccade] = None
        self._held: List[GazeEvent] = []

    @property
    def state(self) -> SegmenterState:
        return SegmenterState.FIXATING if self._anchor is not None else SegmenterState.IDLE

    def push(self, point: SmoothedPoint) -> List[GazeEvent]:
        """Feed one smoothed point; return the events finalized by it."""
        out: List[GazeEvent] = []
        self.stats.points_seen += 1

        last = self._last
        if last is None:
            self._last = point
            return out

        dt_ms = point.timestamp_ms - last.timestamp_ms
        if dt_ms <= 0:
            self.stats.points_skipped += 1
            logger.debug("Skipping point at %.1f ms: dt=%.3f ms", point.timestamp_ms, dt_ms)
            return out

        distance = last.distance_to(point)
        velocity = distance / (dt_ms / 1000.0)
        is_saccade = velocity >= self.cfg.saccade_velocity_threshold_px_per_sec

        if self._pending is not None:
            if is_saccade:
                self._release_pending(out)
            else:
                self._pending.observe(point.timestamp_ms, distance, velocity)
                if self._pending.window_closed(point.timestamp_ms):
                    self._release_pending(out)

        if not is_saccade:
            anchor = self._anchor
            if anchor is None:
                self._anchor = _Anchor(point.x, point.y, point.timestamp_ms)
            elif _distance(anchor, point) > self.cfg.fixation_dispersion_threshold_px:
                self._close_fixation(point.timestamp_ms, out)
                self._anchor = _Anchor(point.x, point.y, point.timestamp_ms)
            else:
                anchor.sample_count += 1
        else:
            self._close_fixation(point.timestamp_ms, out)
            saccade = Saccade(
                start_x=last.x,
                start_y=last.y,
                end_x=point.x,
                end_y=point.y,
                start_time_ms=last.timestamp_ms,
                duration_ms=dt_ms,
                velocity=velocity,
                is_regression=point.x < last.x,
            )
            self._pending = PendingSaccade(saccade, self.cfg)

        self._last = point
        return out

    def flush(self) -> List[GazeEvent]:
        """Close the stream: emit a qualifying open fixation and any pending saccade."""
        out: List[GazeEvent] = []
        if self._pending is not None:
            self._release_pending(out)
        if self._last is not None:
            self._close_fixation(self._last.timestamp_ms, out)
        return out

    def reset(self) -> None:
        self.stats = SegmentationStats()
        self._anchor = None
        self._last = None
        self._pending = None
        self._held = []

    def _close_fixation(self, end_time_ms: float, out: List[GazeEvent]) -> None:
        anchor = self._anchor
        self._anchor = None
        if anchor is None:
            return
        duration = end_time_ms - anchor.start_time_ms
        if duration < self.cfg.fixation_min_duration_ms:
            self.stats.fixations_discarded += 1
            return
        fixation = Fixation(
            x=anchor.x,
            y=anchor.y,
            start_time_ms=anchor.start_time_ms,
            duration_ms=duration,
            sample_count=anchor.sample_count,
        )
        self.stats.fixations_emitted += 1
        logger.debug("Fixation at (%.1f, %.1f) for %.1f ms", fixation.x, fixation.y, duration)
        if self._pending is not None:
            self._held.append(fixation)
        else:
            out.append(fixation)

    def _release_pending(self, out: List[GazeEvent]) -> None:
        pending = self._pending
        self._pending = None
        if pending is None:
            return
        saccade = pending.finalize()
        self.stats.saccades_emitted += 1
        logger.debug(
            "Saccade %.1f px at %.0f px/s (regression=%s, pso=%s, glissade=%s)",
            saccade.amplitude_px, saccade.velocity, saccade.is_regression,
            saccade.has_pso, saccade.has_glissade,
        )
        out.append(saccade)
        out.extend(self._held)
        self._held = []


def _distance(anchor: _Anchor, point: SmoothedPoint) -> float:
    return math.hypot(point.x - anchor.x, point.y - anchor.y)


def segment_points(
    points: Iterable[SmoothedPoint],
    cfg: Optional[SegmenterConfig] = None,
) -> SegmentedEvents:
    """Segment a complete, already smoothed point sequence."""
    segmenter = FixationSaccadeSegmenter(cfg)
    events = SegmentedEvents()
    for point in points:
        events.extend(segmenter.push(point))
    events.extend(segmenter.flush())
    return events
