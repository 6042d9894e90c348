"""Session-level eye-tracking metrics for the multimodal combiner."""
from __future__ import annotations

import math
from itertools import combinations
from typing import Optional, Sequence, Tuple

import numpy as np

from ..config import SegmenterConfig
from ..domain.events import Saccade, SegmentedEvents
from ..domain.metrics import EyeTrackingMetrics
from ..domain.samples import SmoothedPoint

Point = Tuple[float, float]


def chaos_index(path: Sequence[SmoothedPoint]) -> float:
    """Mean absolute heading change along the gaze path, scaled to [0, 1].

    Zero-length steps carry no heading and are ignored. A straight path gives 0,
    a path that reverses on every step gives 1.
    """
    if len(path) < 3:
        return 0.0
    xy = np.array([(p.x, p.y) for p in path], dtype=float)
    steps = np.diff(xy, axis=0)
    moving = np.hypot(steps[:, 0], steps[:, 1]) > 0
    steps = steps[moving]
    if len(steps) < 2:
        return 0.0
    headings = np.arctan2(steps[:, 1], steps[:, 0])
    turns = np.abs(np.diff(headings))
    turns = np.where(turns > math.pi, 2 * math.pi - turns, turns)
    return float(np.clip(turns.mean() / math.pi, 0.0, 1.0))


def _orientation(a: Point, b: Point, c: Point) -> float:
    return (b[0] - a[0]) * (c[1] - a[1]) - (b[1] - a[1]) * (c[0] - a[0])


def segments_cross(p1: Point, p2: Point, q1: Point, q2: Point) -> bool:
    """True when the open segments p1-p2 and q1-q2 properly intersect."""
    d1 = _orientation(q1, q2, p1)
    d2 = _orientation(q1, q2, p2)
    d3 = _orientation(p1, p2, q1)
    d4 = _orientation(p1, p2, q2)
    return d1 * d2 < 0 and d3 * d4 < 0


def fixation_intersection_coefficient(saccades: Sequence[Saccade]) -> float:
    """Fraction of saccade pairs whose paths cross each other."""
    n = len(saccades)
    if n < 2:
        return 0.0
    crossings = sum(
        1
        for a, b in combinations(saccades, 2)
        if segments_cross((a.start_x, a.start_y), (a.end_x, a.end_y), (b.start_x, b.start_y), (b.end_x, b.end_y))
    )
    return crossings / (n * (n - 1) / 2)


def compute_eye_tracking_metrics(
    events: SegmentedEvents,
    path: Sequence[SmoothedPoint] = (),
    cfg: Optional[SegmenterConfig] = None,
) -> EyeTrackingMetrics:
    cfg = cfg or SegmenterConfig()
    fixations, saccades = events.snapshot()
    durations = np.array([f.duration_ms for f in fixations], dtype=float)
    return EyeTrackingMetrics(
        total_fixations=len(fixations),
        average_fixation_duration=float(durations.mean()) if len(fixations) else 0.0,
        regression_count=sum(1 for s in saccades if s.is_regression),
        prolonged_fixations=int(np.count_nonzero(durations > cfg.prolonged_fixation_threshold_ms)),
        chaos_index=chaos_index(path),
        fixation_intersection_coefficient=fixation_intersection_coefficient(saccades),
    )
