"""Session-level metric records and the diagnostic result.

Voice, handwriting and cognitive-load records are supplied by external
analyzers. They are checked once, here, where they enter the core: non-finite
values become 0 and out-of-range values are clamped into the documented range
(with a warning), so the scoring functions can rely on the ranges below.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional


logger = logging.getLogger(__name__)


class RiskLevel(str, Enum):
    """Ordered risk band: LOW < MODERATE < HIGH."""

    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"

    @property
    def severity(self) -> int:
        return _SEVERITY[self]

    def __str__(self) -> str:
        return self.value


_SEVERITY = {RiskLevel.LOW: 0, RiskLevel.MODERATE: 1, RiskLevel.HIGH: 2}


def _bounded(record: object, name: str, low: float = 0.0, high: float = math.inf) -> None:
    value = getattr(record, name)
    if value is None:
        return
    try:
        number = float(value)
    except (TypeError, ValueError):
        number = float("nan")
    if not math.isfinite(number):
        logger.warning("%s.%s is not a finite number (%r); using 0", type(record).__name__, name, value)
        number = 0.0
    clamped = min(high, max(low, number))
    if clamped != number:
        logger.warning(
            "%s.%s=%s outside [%s, %s]; clamped to %s",
            type(record).__name__, name, number, low, high, clamped,
        )
    if isinstance(value, int) and not isinstance(value, bool):
        if clamped != number:
            setattr(record, name, int(clamped))
        return
    setattr(record, name, clamped)


@dataclass
class EyeTrackingMetrics:
    """Aggregate eye-movement metrics of one session."""

    total_fixations: int = 0
    average_fixation_duration: float = 0.0  # ms
    regression_count: int = 0
    prolonged_fixations: int = 0
    chaos_index: float = 0.0  # 0-1
    fixation_intersection_coefficient: float = 0.0  # 0-1

    def __post_init__(self) -> None:
        for name in ("total_fixations", "average_fixation_duration", "regression_count", "prolonged_fixations"):
            _bounded(self, name)
        _bounded(self, "chaos_index", 0.0, 1.0)
        _bounded(self, "fixation_intersection_coefficient", 0.0, 1.0)


@dataclass
class StallEvent:
    """A reading stall reported by the voice analyzer."""

    start_time: float
    end_time: float
    duration: float
    word_before: str = ""
    word_after: str = ""


@dataclass
class VoiceMetrics:
    """Read-aloud metrics; fluency and prosody are 0-100 scores."""

    words_per_minute: float = 0.0
    pause_count: int = 0
    average_pause_duration: float = 0.0
    phonemic_errors: int = 0
    fluency_score: float = 100.0
    prosody_score: float = 100.0
    stall_count: Optional[int] = None
    average_stall_duration: Optional[float] = None
    stall_events: List[StallEvent] = field(default_factory=list)

    def __post_init__(self) -> None:
        for name in (
            "words_per_minute",
            "pause_count",
            "average_pause_duration",
            "phonemic_errors",
            "stall_count",
            "average_stall_duration",
        ):
            _bounded(self, name)
        _bounded(self, "fluency_score", 0.0, 100.0)
        _bounded(self, "prosody_score", 0.0, 100.0)


@dataclass
class HandwritingMetrics:
    """Handwriting sample metrics; ratios are 0-1."""

    reversal_count: int = 0
    letter_crowding: float = 0.0
    graphic_inconsistency: float = 0.0
    line_adherence: float = 1.0

    def __post_init__(self) -> None:
        _bounded(self, "reversal_count")
        _bounded(self, "letter_crowding", 0.0, 1.0)
        _bounded(self, "graphic_inconsistency", 0.0, 1.0)
        _bounded(self, "line_adherence", 0.0, 1.0)


@dataclass
class CognitiveLoadMetrics:
    """Pupillometry based load metrics."""

    average_pupil_dilation: float = 0.0
    overload_events: int = 0
    stress_indicators: int = 0

    def __post_init__(self) -> None:
        _bounded(self, "average_pupil_dilation", -math.inf, math.inf)
        _bounded(self, "overload_events")
        _bounded(self, "stress_indicators")


@dataclass(frozen=True)
class DiagnosticResult:
    """Session-level result handed to the session controller and persistence layer."""

    eye_tracking: EyeTrackingMetrics
    voice: VoiceMetrics
    handwriting: HandwritingMetrics
    cognitive_load: CognitiveLoadMetrics
    dyslexia_probability_index: float
    adhd_probability_index: float
    dysgraphia_probability_index: float
    overall_risk_level: RiskLevel
    timestamp: datetime
    session_id: str
