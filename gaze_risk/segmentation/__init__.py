"""Fixation/saccade segmentation of the smoothed gaze stream."""

from .segmenter import FixationSaccadeSegmenter, SegmenterState, SegmentationStats, segment_points
from .post_saccade import PendingSaccade

__all__ = [
    "FixationSaccadeSegmenter",
    "SegmenterState",
    "SegmentationStats",
    "segment_points",
    "PendingSaccade",
]
