"""Percentile ranking of reading metrics against grade baselines."""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Dict, Optional

from .baselines import grade_from_age, lookup_baseline


logger = logging.getLogger(__name__)

# Classification -> display color
COLOR_CODES: Dict[str, str] = {
    "critical": "#dc2626",
    "below_average": "#f59e0b",
    "average": "#6366f1",
    "above_average": "#10b981",
    "excellent": "#059669",
}

DESCRIPTIONS: Dict[str, Dict[str, str]] = {
    "wpm": {
        "critical": "Reading speed is significantly below age expectations",
        "below_average": "Reading speed is below age expectations",
        "average": "Reading speed is within normal range for age",
        "above_average": "Reading speed is above age expectations",
        "excellent": "Exceptional reading speed for age group",
    },
    "fixation_duration": {
        "critical": "Prolonged fixations indicate processing difficulties",
        "below_average": "Fixation duration slightly elevated",
        "average": "Fixation patterns within normal range",
        "above_average": "Efficient visual processing",
        "excellent": "Highly efficient eye movement patterns",
    },
    "regression_count": {
        "critical": "Excessive regressions suggest comprehension issues",
        "below_average": "Elevated regression rate",
        "average": "Normal regression patterns",
        "above_average": "Minimal regressions",
        "excellent": "Excellent forward reading flow",
    },
    "chaos_index": {
        "critical": "Highly disorganized reading patterns",
        "below_average": "Somewhat irregular reading patterns",
        "average": "Normal reading pattern consistency",
        "above_average": "Organized reading patterns",
        "excellent": "Highly organized, efficient reading",
    },
}

DEFAULT_DESCRIPTION = "Metric within expected range"
NO_BASELINE_DESCRIPTION = "No baseline data available"

# Constant of the closed-form erf approximation
_ERF_A = 0.147


@dataclass(frozen=True)
class NormativeComparison:
    value: float
    percentile: float
    z_score: float
    classification: str
    color_code: str
    description: str


def z_score(value: float, mean: float, std_dev: float) -> float:
    if std_dev == 0:
        return 0.0
    return (value - mean) / std_dev


def z_to_percentile(z: float) -> int:
    """Standard normal CDF as a percentile, rounded and clamped to [1, 99].

    Uses the closed-form erf approximation with a = 0.147 (error below 1e-3).
    """
    sign = 1.0 if z >= 0 else -1.0
    # Scaled by 1/sqrt(2) so the result is the normal CDF, not erf(z) itself.
    x = abs(z) / math.sqrt(2)
    x2 = x * x
    erf = sign * math.sqrt(1 - math.exp(-x2 * (4 / math.pi + _ERF_A * x2) / (1 + _ERF_A * x2)))
    percentile = math.floor((1 + erf) / 2 * 100 + 0.5)
    return max(1, min(99, percentile))


def classify_percentile(percentile: float) -> str:
    if percentile <= 10:
        return "critical"
    if percentile <= 25:
        return "below_average"
    if percentile <= 75:
        return "average"
    if percentile <= 90:
        return "above_average"
    return "excellent"


def describe(metric: str, classification: str) -> str:
    return DESCRIPTIONS.get(metric, {}).get(classification, DEFAULT_DESCRIPTION)


def compare_metric_to_norm(
    value: float,
    metric: str,
    grade: str,
    inverted: bool = False,
) -> NormativeComparison:
    """Rank ``value`` against the grade baseline of ``metric``.

    ``inverted`` is for metrics where lower raw values are better; the
    percentile is then reported as ``100 - p``. Without any baseline the
    result is a neutral "average" rather than an error.
    """
    baseline = lookup_baseline(metric, grade)
    if baseline is None:
        logger.warning("No baseline for metric %r; reporting a neutral comparison", metric)
        return NormativeComparison(
            value=value,
            percentile=50,
            z_score=0.0,
            classification="average",
            color_code=COLOR_CODES["average"],
            description=NO_BASELINE_DESCRIPTION,
        )

    z = z_score(value, baseline.mean, baseline.std_dev)
    percentile = z_to_percentile(z)
    if inverted:
        percentile = 100 - percentile
    classification = classify_percentile(percentile)
    return NormativeComparison(
        value=value,
        percentile=percentile,
        z_score=z,
        classification=classification,
        color_code=COLOR_CODES[classification],
        description=describe(metric, classification),
    )


def comprehensive_comparison(
    age: float,
    wpm: Optional[float] = None,
    fixation_duration: Optional[float] = None,
    regression_count: Optional[float] = None,
    chaos_index: Optional[float] = None,
    fluency_score: Optional[float] = None,
) -> Dict[str, NormativeComparison]:
    """Compare every supplied metric against the baselines for ``age``.

    Fixation duration, regression count and chaos index are lower-is-better.
    The fluency score is already a 0-100 scale and serves as its own percentile.
    """
    grade = grade_from_age(age)
    results: Dict[str, NormativeComparison] = {}
    if wpm is not None:
        results["wpm"] = compare_metric_to_norm(wpm, "wpm", grade)
    if fixation_duration is not None:
        results["fixation_duration"] = compare_metric_to_norm(fixation_duration, "fixation_duration", grade, True)
    if regression_count is not None:
        results["regression_count"] = compare_metric_to_norm(regression_count, "regression_count", grade, True)
    if chaos_index is not None:
        results["chaos_index"] = compare_metric_to_norm(chaos_index, "chaos_index", grade, True)
    if fluency_score is not None:
        classification = classify_percentile(fluency_score)
        results["fluency_score"] = NormativeComparison(
            value=fluency_score,
            percentile=fluency_score,
            z_score=(fluency_score - 50) / 15,
            classification=classification,
            color_code=COLOR_CODES[classification],
            description=describe("fluency_score", classification),
        )
    return results
