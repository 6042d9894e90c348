# gaze_risk/config/constants.py
"""Clinical and computational constants for gaze based risk screening."""

from __future__ import annotations


class SegmentationConstants:
    """Defaults for smoothing and fixation/saccade segmentation (screen pixels)."""

    # Trailing window of the moving-average smoother (samples)
    DEFAULT_SMOOTHING_WINDOW: int = 5

    # Weight of the newest sample for exponential smoothing
    DEFAULT_EXPONENTIAL_ALPHA: float = 0.5

    # Velocity at or above which a transition counts as a saccade (px/s)
    SACCADE_VELOCITY_THRESHOLD: float = 100.0

    # Max distance from the fixation anchor (px)
    FIXATION_DISPERSION_THRESHOLD: float = 30.0

    # Shortest fixation that is emitted (ms)
    FIXATION_MIN_DURATION: float = 100.0

    # Fixations above this duration count as prolonged (ms)
    PROLONGED_FIXATION_THRESHOLD: float = 400.0

    # Post-saccadic windows measured from the saccade end (ms)
    PSO_WINDOW_MS: float = 80.0
    GLISSADE_WINDOW_MS: float = 120.0

    # Sub-threshold movement speed that still counts as a corrective movement (px/s)
    PSO_VELOCITY_THRESHOLD: float = 40.0

    # Largest step that is still a micro-movement (px, one degree)
    MICRO_MOVEMENT_MAX_AMPLITUDE: float = 35.0

    # Below this many accepted samples a session is insufficient
    MIN_SESSION_SAMPLES: int = 10


class ClinicalConstants:
    """Fixed clinical thresholds for dyslexia biomarkers."""

    REGRESSION_RATE_HIGH: float = 20.0  # %
    REGRESSION_RATE_MODERATE: float = 10.0  # %

    FIXATION_DWELL_HIGH: float = 330.0  # ms
    FIXATION_DWELL_MODERATE: float = 250.0  # ms

    # Step-by-step decoding band (character widths)
    STEP_BY_STEP_AMPLITUDE_MIN: float = 2.0
    STEP_BY_STEP_AMPLITUDE_MAX: float = 4.0
    STEP_BY_STEP_SHARE: float = 0.6
    STEP_BY_STEP_MIN_SACCADES: int = 3

    # Amplitude risk is high at or below the band maximum, moderate up to this far above it
    SACCADIC_AMPLITUDE_MODERATE_MARGIN: float = 2.0

    PSO_RATE_THRESHOLD: float = 30.0  # %
    GLISSADE_RATE_THRESHOLD: float = 20.0  # %

    PIXELS_PER_CHARACTER: float = 10.0
    PIXELS_PER_DEGREE: float = 35.0

    WORDS_PER_FIXATION: float = 1.2

    MIN_SAMPLES_FOR_CONFIDENCE: int = 10
    HISTORY_CAPACITY: int = 100

    # Composite score bands (0-100)
    COMPOSITE_HIGH: float = 60.0
    COMPOSITE_MODERATE: float = 35.0

    # Probability index bands (0-1)
    INDEX_HIGH: float = 0.6
    INDEX_MODERATE: float = 0.3

    # Index at which recommendations are issued
    RECOMMENDATION_THRESHOLD: float = 0.5


class ValidationMessages:
    """Standard validation and error messages."""

    NON_POSITIVE_THRESHOLD = "{name} must be > 0, got {value}"
    NEGATIVE_VALUE = "{name} must be >= 0, got {value}"
    INVALID_WINDOW_SIZE = "window_samples must be >= 1"
    INVALID_ALPHA = "alpha must be in (0, 1], got {value}"
    INVERTED_BAND = "{name}: moderate threshold {moderate} exceeds high threshold {high}"
    EMPTY_WEIGHT_TABLE = "{name} weights must not all be zero"
    NO_USABLE_SAMPLES = "Assessment could not be completed: no usable gaze samples were delivered"
    MISSING_COLUMN = "Input must contain '{column}' column"
