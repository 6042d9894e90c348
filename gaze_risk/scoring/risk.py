"""Per-biomarker risk bands and the composite dyslexia risk score."""
from __future__ import annotations

import logging
import math
from typing import Optional

import numpy as np

from ..config import BiomarkerConfig
from ..domain.biomarkers import DyslexiaBiomarkers, RawBiomarkers
from ..domain.metrics import RiskLevel


logger = logging.getLogger(__name__)


def classify_risk(value: float, high: float, moderate: float, higher_is_bad: bool = True) -> RiskLevel:
    """Band a value against two thresholds.

    Boundaries are inclusive: a value exactly at a threshold takes the worse
    band. With ``higher_is_bad=False`` the comparisons are mirrored, i.e.
    ``value <= high`` is high risk.
    """
    if higher_is_bad:
        if value >= high:
            return RiskLevel.HIGH
        if value >= moderate:
            return RiskLevel.MODERATE
        return RiskLevel.LOW
    if value <= high:
        return RiskLevel.HIGH
    if value <= moderate:
        return RiskLevel.MODERATE
    return RiskLevel.LOW


def _finite(value: float) -> float:
    return value if math.isfinite(value) else 0.0


class RiskClassifier:
    """Turns raw biomarkers into banded, scored DyslexiaBiomarkers."""

    def __init__(self, cfg: Optional[BiomarkerConfig] = None) -> None:
        self.cfg = cfg or BiomarkerConfig()

    def classify(self, raw: RawBiomarkers) -> DyslexiaBiomarkers:
        if raw.total_events == 0:
            logger.info("No fixations or saccades; returning an insufficient-data result")
            return DyslexiaBiomarkers.insufficient()

        cfg = self.cfg
        regression_risk = classify_risk(raw.regression_rate, cfg.regression_rate_high, cfg.regression_rate_moderate)
        dwell_risk = classify_risk(raw.fixation_dwell, cfg.fixation_dwell_high, cfg.fixation_dwell_moderate)
        if raw.saccade_count:
            amplitude_risk = classify_risk(
                raw.saccadic_amplitude,
                cfg.step_by_step_amplitude_max,
                cfg.step_by_step_amplitude_max + cfg.saccadic_amplitude_moderate_margin,
                higher_is_bad=False,
            )
        else:
            amplitude_risk = RiskLevel.LOW

        score = self.composite_score(raw, regression_risk, dwell_risk)
        overall = classify_risk(score, cfg.composite_high, cfg.composite_moderate)

        return DyslexiaBiomarkers(
            regression_rate=raw.regression_rate,
            regression_rate_risk=regression_risk,
            fixation_dwell=raw.fixation_dwell,
            fixation_dwell_risk=dwell_risk,
            saccadic_amplitude=raw.saccadic_amplitude,
            saccadic_amplitude_risk=amplitude_risk,
            saccadic_amplitude_deg=raw.saccadic_amplitude_deg,
            step_by_step_decoding=raw.step_by_step_decoding,
            prolonged_fixation_rate=raw.prolonged_fixation_rate,
            pso_rate=raw.pso_rate,
            glissade_rate=raw.glissade_rate,
            motor_control_issue=raw.motor_control_issue,
            dyslexia_risk_score=score,
            overall_risk=overall,
            confidence=self.confidence(raw.total_events),
            estimated_reading_speed=raw.estimated_reading_speed,
            feature_vector=self.feature_vector(raw),
        )

    def composite_score(self, raw: RawBiomarkers, regression_risk: RiskLevel, dwell_risk: RiskLevel) -> float:
        """Weighted 0-100 risk score.

        In "additive" mode the band weight and the continuous feature weight of
        a biomarker are both added, so one strong signal counts twice. In
        "normalized" mode the raw sum is divided by the largest attainable sum.
        """
        w = self.cfg.weights
        raw_sum = 0.0

        if regression_risk is RiskLevel.HIGH:
            raw_sum += w.regression_high
        elif regression_risk is RiskLevel.MODERATE:
            raw_sum += w.regression_moderate
        raw_sum += w.regression_feature * min(_finite(raw.regression_rate) / w.regression_feature_scale, 1.0)

        if dwell_risk is RiskLevel.HIGH:
            raw_sum += w.dwell_high
        elif dwell_risk is RiskLevel.MODERATE:
            raw_sum += w.dwell_moderate
        raw_sum += w.dwell_feature * min(_finite(raw.fixation_dwell) / w.dwell_feature_scale, 1.0)

        if raw.step_by_step_decoding:
            raw_sum += w.step_by_step

        amplitude = _finite(raw.saccadic_amplitude)
        if raw.saccade_count and amplitude < w.amplitude_feature_scale:
            raw_sum += w.amplitude_feature * (w.amplitude_feature_scale - amplitude) / w.amplitude_feature_scale

        if raw.motor_control_issue:
            raw_sum += w.motor_control_pso
        if raw.glissade_rate > self.cfg.glissade_rate_threshold:
            raw_sum += w.motor_control_glissade

        raw_sum += w.prolonged_feature * min(_finite(raw.prolonged_fixation_rate) / w.prolonged_feature_scale, 1.0)

        if self.cfg.composite_mode == "normalized":
            raw_sum /= w.max_raw_score()
        return float(np.clip(raw_sum * 100.0, 0.0, 100.0))

    def confidence(self, total_events: int) -> float:
        return min(1.0, total_events / (self.cfg.min_samples_for_confidence * 5))

    @staticmethod
    def feature_vector(raw: RawBiomarkers):
        return (
            float(raw.regression_rate),
            float(raw.fixation_dwell),
            float(raw.saccadic_amplitude_deg),
            float(raw.saccadic_amplitude),
            float(raw.prolonged_fixation_rate),
            float(raw.pso_rate),
            float(raw.glissade_rate),
            1.0 if raw.step_by_step_decoding else 0.0,
            1.0 if raw.motor_control_issue else 0.0,
        )
