from typing import List, Sequence

import pandas as pd
import pytest

from gaze_risk.config import SmoothingConfig
from gaze_risk.domain import Fixation, GazeSample, Saccade, SegmentedEvents
from gaze_risk.domain.samples import SmoothedPoint

# Word positions of the synthetic reading line; 280 -> 200 is the one regression.
WORD_XS = [100, 160, 220, 280, 200, 260, 320, 380]
SAMPLE_INTERVAL_MS = 20
SAMPLES_PER_WORD = 13
WORD_PERIOD_MS = 260


def build_reading_samples(xs: Sequence[float] = WORD_XS, y: float = 200.0) -> List[GazeSample]:
    """One fixation per word (240 ms of samples) with a 20 ms jump to the next word."""
    samples = []
    for k, x in enumerate(xs):
        for i in range(SAMPLES_PER_WORD):
            samples.append(GazeSample(x=float(x), y=y, timestamp_ms=float(k * WORD_PERIOD_MS + i * SAMPLE_INTERVAL_MS)))
    return samples


def build_points(coords, start_ms: float = 0.0, step_ms: float = SAMPLE_INTERVAL_MS) -> List[SmoothedPoint]:
    return [SmoothedPoint(float(x), float(y), start_ms + i * step_ms) for i, (x, y) in enumerate(coords)]


def make_fixations(durations, x: float = 100.0, y: float = 100.0) -> List[Fixation]:
    fixations = []
    t = 0.0
    for d in durations:
        fixations.append(Fixation(x=x, y=y, start_time_ms=t, duration_ms=float(d)))
        t += d + 20
    return fixations


def make_saccades(n: int, regressions: int = 0, amplitude_px: float = 100.0, pso: int = 0, glissade: int = 0):
    saccades = []
    for i in range(n):
        backward = i < regressions
        start_x = 500.0
        end_x = start_x - amplitude_px if backward else start_x + amplitude_px
        saccades.append(
            Saccade(
                start_x=start_x,
                start_y=100.0,
                end_x=end_x,
                end_y=100.0,
                start_time_ms=i * 300.0,
                duration_ms=20.0,
                velocity=amplitude_px / 0.02,
                is_regression=backward,
                has_pso=i < pso,
                has_glissade=i < glissade,
            )
        )
    return saccades


def make_events(fixations=(), saccades=()) -> SegmentedEvents:
    events = SegmentedEvents()
    events.extend(fixations)
    events.extend(saccades)
    return events


@pytest.fixture
def reading_samples() -> List[GazeSample]:
    return build_reading_samples()


@pytest.fixture
def unsmoothed() -> SmoothingConfig:
    return SmoothingConfig(mode="none")


@pytest.fixture
def reading_tsv(tmp_path, reading_samples):
    path = tmp_path / "reader.tsv"
    df = pd.DataFrame(
        {
            "time_ms": [s.timestamp_ms for s in reading_samples],
            "x": [s.x for s in reading_samples],
            "y": [s.y for s in reading_samples],
            "confidence": [0.9] * len(reading_samples),
        }
    )
    df.to_csv(path, sep="\t", index=False)
    return path
