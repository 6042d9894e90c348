"""Post-saccadic oscillation (PSO) and glissade detection.

A saccade stays pending while the samples that follow it are inspected.
A sub-threshold micro-movement (fast enough to be corrective, small enough
not to be a new fixation shift) flags a PSO when it starts within the PSO
window of the saccade end and a glissade when it falls in the later glissade
window. Once the glissade window has passed the saccade is final.
"""
from __future__ import annotations

import dataclasses

from ..config import SegmenterConfig
from ..domain.events import Saccade


class PendingSaccade:
    """A saccade whose motor-control flags are still being decided."""

    def __init__(self, saccade: Saccade, cfg: SegmenterConfig) -> None:
        self.saccade = saccade
        self.cfg = cfg
        self.has_pso = False
        self.has_glissade = False

    @property
    def end_time_ms(self) -> float:
        return self.saccade.end_time_ms

    def observe(self, timestamp_ms: float, step_px: float, velocity: float) -> None:
        """Inspect one sub-threshold movement that follows the saccade."""
        since = timestamp_ms - self.end_time_ms
        if since < 0 or since >= self.cfg.glissade_window_ms:
            return
        if velocity < self.cfg.pso_velocity_threshold_px_per_sec:
            return
        if step_px > self.cfg.micro_movement_max_amplitude_px:
            return
        if since < self.cfg.pso_window_ms:
            self.has_pso = True
        else:
            self.has_glissade = True

    def window_closed(self, timestamp_ms: float) -> bool:
        return timestamp_ms - self.end_time_ms >= self.cfg.glissade_window_ms

    def finalize(self) -> Saccade:
        return dataclasses.replace(self.saccade, has_pso=self.has_pso, has_glissade=self.has_glissade)
