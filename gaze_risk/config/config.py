# gaze_risk/config/config.py
"""
Configuration classes for the gaze screening pipeline.

This module defines every tunable of the pipeline:
  - Stream smoothing (moving average / exponential)
  - Fixation/saccade segmentation (velocity + dispersion thresholds)
  - Biomarker thresholds and the composite weight table
  - Modality weights for the multimodal probability indices

All configurations are frozen and validate themselves on construction, so an
unusable threshold fails before the first sample is processed.

Example:
    >>> from gaze_risk.config import SegmenterConfig, BiomarkerConfig
    >>>
    >>> seg_cfg = SegmenterConfig(
    ...     saccade_velocity_threshold_px_per_sec=120.0,
    ...     fixation_dispersion_threshold_px=25.0,
    ... )
    >>> bio_cfg = BiomarkerConfig(pixels_per_character=12.0)
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field, fields
from typing import Literal

from ..errors import InvalidConfigurationError
from .constants import ClinicalConstants, SegmentationConstants, ValidationMessages


def _require_positive(name: str, value: float) -> None:
    if not math.isfinite(value) or value <= 0:
        raise InvalidConfigurationError(
            ValidationMessages.NON_POSITIVE_THRESHOLD.format(name=name, value=value)
        )


def _require_non_negative(name: str, value: float) -> None:
    if not math.isfinite(value) or value < 0:
        raise InvalidConfigurationError(
            ValidationMessages.NEGATIVE_VALUE.format(name=name, value=value)
        )


def _require_band(name: str, high: float, moderate: float) -> None:
    if moderate > high:
        raise InvalidConfigurationError(
            ValidationMessages.INVERTED_BAND.format(name=name, moderate=moderate, high=high)
        )


@dataclass(frozen=True)
class SmoothingConfig:
    """
    Configuration of the live stream smoother.
    """

    # - "moving_average": mean over the trailing window (default)
    # - "exponential":    exponential moving average with weight `alpha`
    # - "none":           identity
    mode: Literal["moving_average", "exponential", "none"] = "moving_average"
    window_samples: int = SegmentationConstants.DEFAULT_SMOOTHING_WINDOW
    alpha: float = SegmentationConstants.DEFAULT_EXPONENTIAL_ALPHA

    def __post_init__(self) -> None:
        if self.mode not in ("moving_average", "exponential", "none"):
            raise InvalidConfigurationError(f"Unknown smoothing mode: {self.mode}")
        if self.window_samples < 1:
            raise InvalidConfigurationError(ValidationMessages.INVALID_WINDOW_SIZE)
        if not (0.0 < self.alpha <= 1.0):
            raise InvalidConfigurationError(ValidationMessages.INVALID_ALPHA.format(value=self.alpha))


@dataclass(frozen=True)
class SegmenterConfig:
    """
    Configuration of the dispersion + velocity fixation/saccade segmenter.
    """

    saccade_velocity_threshold_px_per_sec: float = SegmentationConstants.SACCADE_VELOCITY_THRESHOLD
    fixation_dispersion_threshold_px: float = SegmentationConstants.FIXATION_DISPERSION_THRESHOLD
    fixation_min_duration_ms: float = SegmentationConstants.FIXATION_MIN_DURATION

    # Only used for the session-level prolonged fixation count
    prolonged_fixation_threshold_ms: float = SegmentationConstants.PROLONGED_FIXATION_THRESHOLD

    # Post-saccadic oscillation / glissade detection
    # A sub-threshold movement within pso_window_ms of the saccade end flags a PSO,
    # one between pso_window_ms and glissade_window_ms flags a glissade.
    pso_window_ms: float = SegmentationConstants.PSO_WINDOW_MS
    glissade_window_ms: float = SegmentationConstants.GLISSADE_WINDOW_MS
    pso_velocity_threshold_px_per_sec: float = SegmentationConstants.PSO_VELOCITY_THRESHOLD
    micro_movement_max_amplitude_px: float = SegmentationConstants.MICRO_MOVEMENT_MAX_AMPLITUDE

    # Samples below this tracker confidence are skipped
    min_confidence: float = 0.0

    # Accepted samples required before a session is scored
    min_samples: int = SegmentationConstants.MIN_SESSION_SAMPLES

    def __post_init__(self) -> None:
        _require_positive("saccade_velocity_threshold_px_per_sec", self.saccade_velocity_threshold_px_per_sec)
        _require_positive("fixation_dispersion_threshold_px", self.fixation_dispersion_threshold_px)
        _require_positive("fixation_min_duration_ms", self.fixation_min_duration_ms)
        _require_positive("prolonged_fixation_threshold_ms", self.prolonged_fixation_threshold_ms)
        _require_positive("pso_window_ms", self.pso_window_ms)
        _require_positive("glissade_window_ms", self.glissade_window_ms)
        _require_positive("pso_velocity_threshold_px_per_sec", self.pso_velocity_threshold_px_per_sec)
        _require_positive("micro_movement_max_amplitude_px", self.micro_movement_max_amplitude_px)
        _require_non_negative("min_confidence", self.min_confidence)
        _require_non_negative("min_samples", self.min_samples)
        if self.glissade_window_ms < self.pso_window_ms:
            raise InvalidConfigurationError(
                f"glissade_window_ms ({self.glissade_window_ms}) must not be shorter "
                f"than pso_window_ms ({self.pso_window_ms})"
            )
        if self.pso_velocity_threshold_px_per_sec >= self.saccade_velocity_threshold_px_per_sec:
            raise InvalidConfigurationError(
                "pso_velocity_threshold_px_per_sec must be below the saccade velocity threshold"
            )


@dataclass(frozen=True)
class RiskWeights:
    """
    Weight table of the composite dyslexia risk score.

    Each biomarker contributes a categorical band weight and/or a continuous
    feature weight; the raw sum is scaled by 100 and clamped to [0, 100].
    """

    regression_high: float = 0.35
    regression_moderate: float = 0.20
    regression_feature: float = 0.30
    # Regression rate (%) at which the feature term saturates
    regression_feature_scale: float = 30.0

    dwell_high: float = 0.30
    dwell_moderate: float = 0.15
    dwell_feature: float = 0.25
    dwell_feature_scale: float = 500.0  # ms

    step_by_step: float = 0.25
    amplitude_feature: float = 0.20
    # Average saccade length (characters) below which short jumps add risk
    amplitude_feature_scale: float = 5.0

    motor_control_pso: float = 0.10
    motor_control_glissade: float = 0.05

    prolonged_feature: float = 0.10
    prolonged_feature_scale: float = 50.0  # %

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            if f.name.endswith("_scale"):
                _require_positive(f.name, value)
            else:
                _require_non_negative(f.name, value)
        if self.max_raw_score() <= 0:
            raise InvalidConfigurationError(ValidationMessages.EMPTY_WEIGHT_TABLE.format(name="Risk"))
        _require_band("regression weights", self.regression_high, self.regression_moderate)
        _require_band("dwell weights", self.dwell_high, self.dwell_moderate)

    def max_raw_score(self) -> float:
        """Largest attainable raw sum (before the x100 scaling)."""
        return (
            self.regression_high
            + self.regression_feature
            + self.dwell_high
            + self.dwell_feature
            + self.step_by_step
            + self.amplitude_feature
            + self.motor_control_pso
            + self.motor_control_glissade
            + self.prolonged_feature
        )


@dataclass(frozen=True)
class BiomarkerConfig:
    """
    Thresholds for biomarker extraction and risk classification.
    """

    regression_rate_high: float = ClinicalConstants.REGRESSION_RATE_HIGH
    regression_rate_moderate: float = ClinicalConstants.REGRESSION_RATE_MODERATE
    fixation_dwell_high: float = ClinicalConstants.FIXATION_DWELL_HIGH
    fixation_dwell_moderate: float = ClinicalConstants.FIXATION_DWELL_MODERATE

    step_by_step_amplitude_min: float = ClinicalConstants.STEP_BY_STEP_AMPLITUDE_MIN
    step_by_step_amplitude_max: float = ClinicalConstants.STEP_BY_STEP_AMPLITUDE_MAX
    step_by_step_share: float = ClinicalConstants.STEP_BY_STEP_SHARE
    step_by_step_min_saccades: int = ClinicalConstants.STEP_BY_STEP_MIN_SACCADES
    saccadic_amplitude_moderate_margin: float = ClinicalConstants.SACCADIC_AMPLITUDE_MODERATE_MARGIN

    pso_rate_threshold: float = ClinicalConstants.PSO_RATE_THRESHOLD
    glissade_rate_threshold: float = ClinicalConstants.GLISSADE_RATE_THRESHOLD

    pixels_per_character: float = ClinicalConstants.PIXELS_PER_CHARACTER
    pixels_per_degree: float = ClinicalConstants.PIXELS_PER_DEGREE
    words_per_fixation: float = ClinicalConstants.WORDS_PER_FIXATION

    min_samples_for_confidence: int = ClinicalConstants.MIN_SAMPLES_FOR_CONFIDENCE
    history_capacity: int = ClinicalConstants.HISTORY_CAPACITY

    composite_high: float = ClinicalConstants.COMPOSITE_HIGH
    composite_moderate: float = ClinicalConstants.COMPOSITE_MODERATE

    # - "additive":   band and feature terms are summed (may double count one signal)
    # - "normalized": raw sum divided by RiskWeights.max_raw_score()
    composite_mode: Literal["additive", "normalized"] = "additive"

    weights: RiskWeights = field(default_factory=RiskWeights)

    def __post_init__(self) -> None:
        for name in (
            "regression_rate_high",
            "regression_rate_moderate",
            "fixation_dwell_high",
            "fixation_dwell_moderate",
            "step_by_step_amplitude_min",
            "step_by_step_amplitude_max",
            "step_by_step_share",
            "saccadic_amplitude_moderate_margin",
            "pso_rate_threshold",
            "glissade_rate_threshold",
            "pixels_per_character",
            "pixels_per_degree",
            "words_per_fixation",
            "min_samples_for_confidence",
            "history_capacity",
            "composite_high",
            "composite_moderate",
        ):
            _require_positive(name, getattr(self, name))
        _require_band("regression rate", self.regression_rate_high, self.regression_rate_moderate)
        _require_band("fixation dwell", self.fixation_dwell_high, self.fixation_dwell_moderate)
        _require_band("composite score", self.composite_high, self.composite_moderate)
        if self.step_by_step_amplitude_min > self.step_by_step_amplitude_max:
            raise InvalidConfigurationError("step_by_step_amplitude_min exceeds step_by_step_amplitude_max")
        if self.step_by_step_share > 1.0:
            raise InvalidConfigurationError("step_by_step_share must be <= 1")
        if self.composite_mode not in ("additive", "normalized"):
            raise InvalidConfigurationError(f"Unknown composite mode: {self.composite_mode}")


@dataclass(frozen=True)
class DiagnosticWeights:
    """
    Modality weights of the multimodal probability indices.
    """

    eye_tracking: float = 0.35
    voice: float = 0.30
    handwriting: float = 0.20
    cognitive_load: float = 0.15

    def __post_init__(self) -> None:
        for f in fields(self):
            _require_non_negative(f.name, getattr(self, f.name))
        # The dyslexia index normalizes over these three
        if self.eye_tracking + self.voice + self.handwriting <= 0:
            raise InvalidConfigurationError(ValidationMessages.EMPTY_WEIGHT_TABLE.format(name="Diagnostic"))
