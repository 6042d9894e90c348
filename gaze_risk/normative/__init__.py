"""Normative comparison of reading metrics against age/grade baselines."""

from .baselines import (
    CLINICAL_BASELINES,
    Baseline,
    Percentiles,
    available_grade_levels,
    baseline_for_grade,
    grade_from_age,
    lookup_baseline,
)
from .comparator import (
    NormativeComparison,
    classify_percentile,
    compare_metric_to_norm,
    comprehensive_comparison,
    z_score,
    z_to_percentile,
)

__all__ = [
    "CLINICAL_BASELINES",
    "Baseline",
    "Percentiles",
    "available_grade_levels",
    "baseline_for_grade",
    "grade_from_age",
    "lookup_baseline",
    "NormativeComparison",
    "classify_percentile",
    "compare_metric_to_norm",
    "comprehensive_comparison",
    "z_score",
    "z_to_percentile",
]
