"""Configuration and constants for the screening pipeline."""

from .config import (
    SmoothingConfig,
    SegmenterConfig,
    RiskWeights,
    BiomarkerConfig,
    DiagnosticWeights,
)
from .constants import ClinicalConstants, SegmentationConstants, ValidationMessages

__all__ = [
    "SmoothingConfig",
    "SegmenterConfig",
    "RiskWeights",
    "BiomarkerConfig",
    "DiagnosticWeights",
    "ClinicalConstants",
    "SegmentationConstants",
    "ValidationMessages",
]
