"""Age/grade stratified population baselines for reading metrics."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional


logger = logging.getLogger(__name__)

ADULT = "adult"


@dataclass(frozen=True)
class Percentiles:
    p10: float
    p25: float
    p50: float
    p75: float
    p90: float


@dataclass(frozen=True)
class Baseline:
    mean: float
    std_dev: float
    percentiles: Optional[Percentiles] = None


def _b(mean: float, std_dev: float, *pcts: float) -> Baseline:
    return Baseline(mean, std_dev, Percentiles(*pcts))


# Reference values per grade band; fixation_duration in ms, chaos_index 0-1.
CLINICAL_BASELINES: Dict[str, Dict[str, Baseline]] = {
    "K-1": {
        "wpm": _b(30, 10, 15, 22, 30, 38, 45),
        "fixation_duration": _b(300, 80, 200, 240, 300, 360, 400),
        "regression_count": _b(8, 3, 4, 6, 8, 10, 12),
        "chaos_index": _b(0.3, 0.1, 0.15, 0.22, 0.3, 0.38, 0.45),
    },
    "2-3": {
        "wpm": _b(60, 15, 40, 50, 60, 72, 85),
        "fixation_duration": _b(270, 60, 180, 220, 270, 320, 350),
        "regression_count": _b(6, 2, 3, 4, 6, 8, 10),
        "chaos_index": _b(0.25, 0.08, 0.12, 0.18, 0.25, 0.32, 0.38),
    },
    "4-5": {
        "wpm": _b(100, 20, 70, 85, 100, 118, 135),
        "fixation_duration": _b(240, 50, 160, 200, 240, 280, 310),
        "regression_count": _b(4, 2, 2, 3, 4, 6, 8),
        "chaos_index": _b(0.2, 0.06, 0.1, 0.15, 0.2, 0.26, 0.32),
    },
    "6-8": {
        "wpm": _b(140, 25, 100, 120, 140, 165, 190),
        "fixation_duration": _b(220, 40, 150, 185, 220, 255, 280),
        "regression_count": _b(3, 1.5, 1, 2, 3, 4, 6),
        "chaos_index": _b(0.15, 0.05, 0.08, 0.11, 0.15, 0.19, 0.24),
    },
    ADULT: {
        "wpm": _b(200, 40, 140, 170, 200, 235, 270),
        "fixation_duration": _b(200, 35, 140, 170, 200, 230, 260),
        "regression_count": _b(2, 1, 0, 1, 2, 3, 4),
        "chaos_index": _b(0.1, 0.04, 0.05, 0.07, 0.1, 0.13, 0.16),
    },
}

# (inclusive upper age, grade band)
_AGE_BANDS = ((6, "K-1"), (8, "2-3"), (10, "4-5"), (13, "6-8"))


def grade_from_age(age: float) -> str:
    for max_age, grade in _AGE_BANDS:
        if age <= max_age:
            return grade
    return ADULT


def available_grade_levels() -> List[str]:
    return list(CLINICAL_BASELINES)


def baseline_for_grade(grade: str) -> Dict[str, Baseline]:
    """Baseline table of a grade band, the adult table for unknown grades."""
    table = CLINICAL_BASELINES.get(grade)
    if table is None:
        logger.warning("No baseline table for grade %r; using adult baselines", grade)
        return CLINICAL_BASELINES[ADULT]
    return table


def lookup_baseline(metric: str, grade: str) -> Optional[Baseline]:
    """Baseline for one metric, falling back to the adult value, else None."""
    baseline = baseline_for_grade(grade).get(metric)
    if baseline is None and grade != ADULT:
        baseline = CLINICAL_BASELINES[ADULT].get(metric)
        if baseline is not None:
            logger.warning("No %r baseline for grade %r; using adult baseline", metric, grade)
    return baseline
