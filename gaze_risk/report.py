"""Plain-text screening report for clinician-facing display."""
from __future__ import annotations

from typing import Dict, Optional

from .domain.biomarkers import DyslexiaBiomarkers
from .domain.metrics import DiagnosticResult
from .normative import NormativeComparison
from .scoring.history import TrendAnalysis
from .scoring.recommendations import generate_recommendations

DISCLAIMER = (
    "This report is intended for screening purposes only.",
    "It does not constitute a clinical diagnosis.",
    "Please consult a qualified healthcare professional for evaluation.",
)

_RULE = "=" * 60


def _section(title: str) -> str:
    return f"--- {title} ---"


def generate_clinical_report(
    result: DiagnosticResult,
    biomarkers: Optional[DyslexiaBiomarkers] = None,
    comparisons: Optional[Dict[str, NormativeComparison]] = None,
    trend: Optional[TrendAnalysis] = None,
) -> str:
    lines = [
        _RULE,
        "SCREENING REPORT",
        f"Session: {result.session_id}",
        f"Date: {result.timestamp.date().isoformat()}",
        _RULE,
        "",
        f"Dyslexia probability index:   {result.dyslexia_probability_index * 100:5.1f}%",
        f"ADHD probability index:       {result.adhd_probability_index * 100:5.1f}%",
        f"Dysgraphia probability index: {result.dysgraphia_probability_index * 100:5.1f}%",
        f"Overall risk level: {str(result.overall_risk_level).upper()}",
    ]

    if biomarkers is not None:
        lines += ["", _section("EYE-MOVEMENT BIOMARKERS")]
        if biomarkers.insufficient_data:
            lines.append("Insufficient gaze data; biomarkers not reported.")
        else:
            lines += [
                f"Regression rate: {biomarkers.regression_rate:.1f}% ({biomarkers.regression_rate_risk})",
                f"Fixation dwell: {biomarkers.fixation_dwell:.0f} ms ({biomarkers.fixation_dwell_risk})",
                f"Saccadic amplitude: {biomarkers.saccadic_amplitude:.2f} characters "
                f"({biomarkers.saccadic_amplitude_risk})",
                f"Step-by-step decoding: {'yes' if biomarkers.step_by_step_decoding else 'no'}",
                f"Prolonged fixations: {biomarkers.prolonged_fixation_rate:.1f}%",
                f"Motor control issue: {'yes' if biomarkers.motor_control_issue else 'no'} "
                f"(PSO {biomarkers.pso_rate:.1f}%, glissade {biomarkers.glissade_rate:.1f}%)",
                f"Estimated reading speed: {biomarkers.estimated_reading_speed:.0f} WPM",
                f"Risk score: {biomarkers.dyslexia_risk_score:.1f}/100 ({biomarkers.overall_risk}), "
                f"confidence {biomarkers.confidence:.0%}",
            ]

    if comparisons:
        lines += ["", _section("NORMATIVE COMPARISON")]
        for metric, comparison in comparisons.items():
            lines.append(
                f"{metric}: {comparison.value:.2f} -> percentile {comparison.percentile:.0f} "
                f"({comparison.classification}) {comparison.description}"
            )

    if trend is not None:
        lines += [
            "",
            _section("TREND"),
            f"{trend.trend}: recent {trend.recent_average:.1f}, previous {trend.historical_average:.1f}",
        ]

    lines += ["", _section("RECOMMENDATIONS")]
    lines += [f"* {r}" for r in generate_recommendations(result)]
    lines += ["", _section("DISCLAIMER"), *DISCLAIMER]
    return "\n".join(lines)
