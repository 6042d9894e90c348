"""Multimodal probability indices for dyslexia, ADHD and dysgraphia.

Every function here is pure: the indices depend only on the four metric
records and the weights, never on call order.
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

import numpy as np

from ..config import DiagnosticWeights
from ..config.constants import ClinicalConstants
from ..domain.metrics import (
    CognitiveLoadMetrics,
    DiagnosticResult,
    EyeTrackingMetrics,
    HandwritingMetrics,
    RiskLevel,
    VoiceMetrics,
)
from .risk import classify_risk

SESSION_ID_PREFIX = "NRX-"


def _unit(value: float) -> float:
    return float(np.clip(value, 0.0, 1.0))


def _capped(count: float, cap: float) -> float:
    return min(count / cap, 1.0)


def eye_tracking_score(eye: EyeTrackingMetrics) -> float:
    return (
        eye.chaos_index * 0.3
        + _capped(eye.regression_count, 20) * 0.25
        + eye.fixation_intersection_coefficient * 0.25
        + _capped(eye.prolonged_fixations, 10) * 0.2
    )


def voice_score(voice: VoiceMetrics) -> float:
    score = (
        (1 - voice.fluency_score / 100) * 0.4
        + (1 - voice.prosody_score / 100) * 0.15
        + _capped(voice.phonemic_errors, 10) * 0.15
    )
    if voice.stall_count:
        score += _capped(voice.stall_count, 5) * 0.3
    return score


def handwriting_score(hw: HandwritingMetrics) -> float:
    return (
        _capped(hw.reversal_count, 5) * 0.4
        + hw.letter_crowding * 0.25
        + hw.graphic_inconsistency * 0.2
        + (1 - hw.line_adherence) * 0.15
    )


class MultimodalIndexCombiner:
    """Combines the four modality records into three probability indices."""

    def __init__(self, weights: Optional[DiagnosticWeights] = None) -> None:
        self.weights = weights or DiagnosticWeights()

    def dyslexia_index(self, eye: EyeTrackingMetrics, voice: VoiceMetrics, hw: HandwritingMetrics) -> float:
        w = self.weights
        total = eye_tracking_score(eye) * w.eye_tracking + voice_score(voice) * w.voice + handwriting_score(hw) * w.handwriting
        return _unit(total / (w.eye_tracking + w.voice + w.handwriting))

    @staticmethod
    def adhd_index(eye: EyeTrackingMetrics, cognitive: CognitiveLoadMetrics) -> float:
        return _unit(
            eye.chaos_index * 0.4
            + _capped(cognitive.overload_events, 5) * 0.3
            + _capped(cognitive.stress_indicators, 10) * 0.3
        )

    @staticmethod
    def dysgraphia_index(hw: HandwritingMetrics) -> float:
        return _unit(
            _capped(hw.reversal_count, 5) * 0.35
            + hw.letter_crowding * 0.25
            + hw.graphic_inconsistency * 0.25
            + (1 - hw.line_adherence) * 0.15
        )

    @staticmethod
    def overall_risk_level(dyslexia: float, adhd: float, dysgraphia: float) -> RiskLevel:
        return classify_risk(
            max(dyslexia, adhd, dysgraphia),
            ClinicalConstants.INDEX_HIGH,
            ClinicalConstants.INDEX_MODERATE,
        )

    def create_diagnostic_result(
        self,
        eye: EyeTrackingMetrics,
        voice: VoiceMetrics,
        hw: HandwritingMetrics,
        cognitive: CognitiveLoadMetrics,
        timestamp: Optional[datetime] = None,
    ) -> DiagnosticResult:
        timestamp = timestamp or datetime.now(timezone.utc)
        dyslexia = self.dyslexia_index(eye, voice, hw)
        adhd = self.adhd_index(eye, cognitive)
        dysgraphia = self.dysgraphia_index(hw)
        return DiagnosticResult(
            eye_tracking=eye,
            voice=voice,
            handwriting=hw,
            cognitive_load=cognitive,
            dyslexia_probability_index=dyslexia,
            adhd_probability_index=adhd,
            dysgraphia_probability_index=dysgraphia,
            overall_risk_level=self.overall_risk_level(dyslexia, adhd, dysgraphia),
            timestamp=timestamp,
            session_id=session_id_for(timestamp),
        )


def session_id_for(timestamp: datetime) -> str:
    """``NRX-`` followed by the millisecond epoch timestamp in upper-case base 36."""
    millis = int(round(timestamp.timestamp() * 1000))
    return SESSION_ID_PREFIX + np.base_repr(millis, base=36)
