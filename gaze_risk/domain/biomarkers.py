"""Biomarker records derived from segmented gaze events."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple

from .metrics import RiskLevel


@dataclass(frozen=True)
class RawBiomarkers:
    """Scalar biomarkers before risk classification."""

    regression_rate: float = 0.0  # %
    fixation_dwell: float = 0.0  # ms
    saccadic_amplitude: float = 0.0  # character widths
    saccadic_amplitude_deg: float = 0.0
    step_by_step_decoding: bool = False
    prolonged_fixation_rate: float = 0.0  # %
    pso_rate: float = 0.0  # %
    glissade_rate: float = 0.0  # %
    motor_control_issue: bool = False
    estimated_reading_speed: float = 0.0  # WPM
    fixation_count: int = 0
    saccade_count: int = 0

    @property
    def total_events(self) -> int:
        return self.fixation_count + self.saccade_count


@dataclass(frozen=True)
class DyslexiaBiomarkers:
    """Classified biomarker snapshot of one completed reading segment.

    ``feature_vector`` order: regression rate, fixation dwell, amplitude in
    degrees, amplitude in characters, prolonged-fixation rate, PSO rate,
    glissade rate, step-by-step flag, motor-control flag.
    """

    regression_rate: float
    regression_rate_risk: RiskLevel
    fixation_dwell: float
    fixation_dwell_risk: RiskLevel
    saccadic_amplitude: float
    saccadic_amplitude_risk: RiskLevel
    saccadic_amplitude_deg: float
    step_by_step_decoding: bool
    prolonged_fixation_rate: float
    pso_rate: float
    glissade_rate: float
    motor_control_issue: bool
    dyslexia_risk_score: float
    overall_risk: RiskLevel
    confidence: float
    estimated_reading_speed: float
    feature_vector: Tuple[float, ...] = field(default_factory=tuple)
    insufficient_data: bool = False

    @classmethod
    def insufficient(cls) -> "DyslexiaBiomarkers":
        """Degraded-confidence result for sessions without enough data."""
        return cls(
            regression_rate=0.0,
            regression_rate_risk=RiskLevel.LOW,
            fixation_dwell=0.0,
            fixation_dwell_risk=RiskLevel.LOW,
            saccadic_amplitude=0.0,
            saccadic_amplitude_risk=RiskLevel.LOW,
            saccadic_amplitude_deg=0.0,
            step_by_step_decoding=False,
            prolonged_fixation_rate=0.0,
            pso_rate=0.0,
            glissade_rate=0.0,
            motor_control_issue=False,
            dyslexia_risk_score=0.0,
            overall_risk=RiskLevel.LOW,
            confidence=0.0,
            estimated_reading_speed=0.0,
            feature_vector=(),
            insufficient_data=True,
        )
