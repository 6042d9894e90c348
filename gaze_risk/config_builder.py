# gaze_risk/config_builder.py
"""Build configuration objects from CLI arguments.

Keeps configuration construction separate from argument parsing.
"""
from __future__ import annotations

import argparse
from typing import Optional

from .config import BiomarkerConfig, SegmenterConfig, SmoothingConfig
from .config.constants import SegmentationConstants


class ConfigBuilder:
    """Maps parsed CLI arguments onto the configuration dataclasses."""

    @staticmethod
    def build_smoothing_config(args: argparse.Namespace) -> SmoothingConfig:
        return SmoothingConfig(
            mode=args.smoothing,
            window_samples=args.smooth_window_samples,
            alpha=args.alpha,
        )

    @staticmethod
    def resolve_pso_threshold(saccade_threshold: float, pso_threshold: Optional[float] = None) -> float:
        """PSO velocity threshold; without an explicit value it stays below the saccade threshold."""
        if pso_threshold is not None:
            return pso_threshold
        return min(SegmentationConstants.PSO_VELOCITY_THRESHOLD, saccade_threshold / 2.0)

    @staticmethod
    def build_segmenter_config(args: argparse.Namespace) -> SegmenterConfig:
        return SegmenterConfig(
            saccade_velocity_threshold_px_per_sec=args.saccade_threshold,
            fixation_dispersion_threshold_px=args.dispersion_threshold,
            fixation_min_duration_ms=args.min_fixation_ms,
            min_confidence=args.min_confidence,
            min_samples=args.min_samples,
            pso_velocity_threshold_px_per_sec=ConfigBuilder.resolve_pso_threshold(
                args.saccade_threshold, getattr(args, "pso_velocity_threshold", None)
            ),
        )

    @staticmethod
    def build_biomarker_config(args: argparse.Namespace) -> BiomarkerConfig:
        return BiomarkerConfig(
            pixels_per_character=args.pixels_per_character,
            pixels_per_degree=args.pixels_per_degree,
            composite_mode=args.composite_mode,
        )
