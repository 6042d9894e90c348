"""Biomarker extraction and session-level eye-tracking metrics."""

from .extractor import BiomarkerExtractor, amplitude_to_characters, extract_biomarkers
from .eye_metrics import (
    chaos_index,
    compute_eye_tracking_metrics,
    fixation_intersection_coefficient,
    segments_cross,
)

__all__ = [
    "BiomarkerExtractor",
    "amplitude_to_characters",
    "extract_biomarkers",
    "chaos_index",
    "compute_eye_tracking_metrics",
    "fixation_intersection_coefficient",
    "segments_cross",
]
