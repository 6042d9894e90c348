"""Biomarker extraction from segmented fixation and saccade lists."""
from __future__ import annotations

import logging
import math
from typing import Optional, Sequence

import numpy as np

from ..config import BiomarkerConfig
from ..domain.biomarkers import RawBiomarkers
from ..domain.events import Fixation, Saccade, SegmentedEvents


logger = logging.getLogger(__name__)


def _percent(count: int, total: int) -> float:
    if total == 0:
        return 0.0
    return 100.0 * count / total


def amplitude_to_characters(
    amplitude: float,
    cfg: Optional[BiomarkerConfig] = None,
    in_degrees: bool = False,
) -> float:
    """Convert a saccade amplitude to character-width units.

    Pixel amplitudes are divided by ``pixels_per_character``; degree amplitudes
    are first converted to pixels with ``pixels_per_degree``.
    """
    cfg = cfg or BiomarkerConfig()
    px = amplitude * cfg.pixels_per_degree if in_degrees else amplitude
    return px / cfg.pixels_per_character


class BiomarkerExtractor:
    """Computes raw dyslexia biomarkers from one session's events.

    Pure: the same event lists always give the same result and are never
    modified.
    """

    def __init__(self, cfg: Optional[BiomarkerConfig] = None) -> None:
        self.cfg = cfg or BiomarkerConfig()

    def extract(self, events: SegmentedEvents, session_duration_ms: float) -> RawBiomarkers:
        fixations, saccades = events.snapshot()
        return self.extract_lists(fixations, saccades, session_duration_ms)

    def extract_lists(
        self,
        fixations: Sequence[Fixation],
        saccades: Sequence[Saccade],
        session_duration_ms: float,
    ) -> RawBiomarkers:
        cfg = self.cfg
        n_fix = len(fixations)
        n_sac = len(saccades)

        durations = np.array([f.duration_ms for f in fixations], dtype=float)
        amplitudes_px = np.array([s.amplitude_px for s in saccades], dtype=float)

        fixation_dwell = float(durations.mean()) if n_fix else 0.0
        prolonged = int(np.count_nonzero(durations > cfg.fixation_dwell_high)) if n_fix else 0

        regression_rate = _percent(sum(1 for s in saccades if s.is_regression), n_sac)
        pso_rate = _percent(sum(1 for s in saccades if s.has_pso), n_sac)
        glissade_rate = _percent(sum(1 for s in saccades if s.has_glissade), n_sac)

        if n_sac:
            amplitudes_chars = amplitudes_px / cfg.pixels_per_character
            mean_chars = float(amplitudes_chars.mean())
            mean_deg = float(amplitudes_px.mean()) / cfg.pixels_per_degree
            in_band = (amplitudes_chars >= cfg.step_by_step_amplitude_min) & (
                amplitudes_chars <= cfg.step_by_step_amplitude_max
            )
            step_share = float(np.count_nonzero(in_band)) / n_sac
        else:
            mean_chars = 0.0
            mean_deg = 0.0
            step_share = 0.0

        step_by_step = n_sac >= cfg.step_by_step_min_saccades and step_share > cfg.step_by_step_share
        motor_control_issue = pso_rate > cfg.pso_rate_threshold or glissade_rate > cfg.glissade_rate_threshold

        raw = RawBiomarkers(
            regression_rate=regression_rate,
            fixation_dwell=fixation_dwell,
            saccadic_amplitude=mean_chars,
            saccadic_amplitude_deg=mean_deg,
            step_by_step_decoding=step_by_step,
            prolonged_fixation_rate=_percent(prolonged, n_fix),
            pso_rate=pso_rate,
            glissade_rate=glissade_rate,
            motor_control_issue=motor_control_issue,
            estimated_reading_speed=self.reading_speed(n_fix, session_duration_ms),
            fixation_count=n_fix,
            saccade_count=n_sac,
        )
        logger.debug("Extracted biomarkers: %s", raw)
        return raw

    def reading_speed(self, fixation_count: int, session_duration_ms: float) -> float:
        """Estimated words per minute, rounded; 0 for an empty session."""
        if session_duration_ms <= 0:
            return 0.0
        seconds = session_duration_ms / 1000.0
        return float(math.floor(fixation_count * self.cfg.words_per_fixation / seconds * 60.0 + 0.5))


def extract_biomarkers(
    events: SegmentedEvents,
    session_duration_ms: float,
    cfg: Optional[BiomarkerConfig] = None,
) -> RawBiomarkers:
    return BiomarkerExtractor(cfg).extract(events, session_duration_ms)
