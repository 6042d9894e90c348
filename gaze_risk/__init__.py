# gaze_risk/__init__.py
"""
Gaze based reading-risk screening.

Contains:
- Stream smoothing and fixation/saccade segmentation
- Dyslexia biomarker extraction and risk scoring
- Multimodal probability indices (dyslexia, ADHD, dysgraphia)
- Normative comparison against age/grade baselines
- Session controller, observers and TSV adapters
"""

from .config import SmoothingConfig, SegmenterConfig, BiomarkerConfig, RiskWeights, DiagnosticWeights
from .errors import GazeRiskError, InvalidConfigurationError, AssessmentIncompleteError
from .domain import (
    GazeSample,
    Fixation,
    Saccade,
    SegmentedEvents,
    RiskLevel,
    EyeTrackingMetrics,
    VoiceMetrics,
    HandwritingMetrics,
    CognitiveLoadMetrics,
    DiagnosticResult,
    DyslexiaBiomarkers,
)
from .segmentation import FixationSaccadeSegmenter, segment_points
from .biomarkers import BiomarkerExtractor, compute_eye_tracking_metrics
from .scoring import (
    RiskClassifier,
    DyslexiaClassifier,
    MultimodalIndexCombiner,
    classify_risk,
    generate_recommendations,
)
from .normative import compare_metric_to_norm, comprehensive_comparison, grade_from_age
from .io import ScreeningSession, SessionOutcome, ConsoleReporter, MetricsLogger
from .report import generate_clinical_report

__version__ = "0.1.0"
