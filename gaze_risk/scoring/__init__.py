"""Risk classification, multimodal indices, history and recommendations."""

from .risk import RiskClassifier, classify_risk
from .history import BiomarkerHistory, TrendAnalysis
from .classifier import DyslexiaClassifier
from .combiner import (
    MultimodalIndexCombiner,
    eye_tracking_score,
    handwriting_score,
    session_id_for,
    voice_score,
)
from .recommendations import generate_recommendations

__all__ = [
    "RiskClassifier",
    "classify_risk",
    "BiomarkerHistory",
    "TrendAnalysis",
    "DyslexiaClassifier",
    "MultimodalIndexCombiner",
    "eye_tracking_score",
    "handwriting_score",
    "session_id_for",
    "voice_score",
    "generate_recommendations",
]
