"""Domain models for gaze streams, derived events and screening results."""

from .samples import GazeSample, SmoothedPoint
from .events import GazeEvent, GazeEventType, Fixation, Saccade, SegmentedEvents
from .metrics import (
    RiskLevel,
    EyeTrackingMetrics,
    StallEvent,
    VoiceMetrics,
    HandwritingMetrics,
    CognitiveLoadMetrics,
    DiagnosticResult,
)
from .biomarkers import RawBiomarkers, DyslexiaBiomarkers

__all__ = [
    "GazeSample",
    "SmoothedPoint",
    "GazeEvent",
    "GazeEventType",
    "Fixation",
    "Saccade",
    "SegmentedEvents",
    "RiskLevel",
    "EyeTrackingMetrics",
    "StallEvent",
    "VoiceMetrics",
    "HandwritingMetrics",
    "CognitiveLoadMetrics",
    "DiagnosticResult",
    "RawBiomarkers",
    "DyslexiaBiomarkers",
]
