"""Fixed follow-up suggestions derived from a diagnostic result."""
from __future__ import annotations

from typing import List

from ..config.constants import ClinicalConstants
from ..domain.metrics import DiagnosticResult

DYSLEXIA_RECOMMENDATIONS = (
    "Consider structured literacy intervention",
    "Use multi-sensory reading instruction",
    "Implement phonics-based reading program",
)
ADHD_RECOMMENDATIONS = (
    "Break reading tasks into shorter sessions",
    "Use visual timers and frequent breaks",
    "Minimize environmental distractions",
)
DYSGRAPHIA_RECOMMENDATIONS = (
    "Practice letter formation exercises",
    "Consider occupational therapy assessment",
    "Allow use of assistive technology for writing",
)
DEFAULT_RECOMMENDATIONS = (
    "Continue current reading program",
    "Monitor progress with regular assessments",
)


def generate_recommendations(
    result: DiagnosticResult,
    threshold: float = ClinicalConstants.RECOMMENDATION_THRESHOLD,
) -> List[str]:
    recommendations: List[str] = []
    if result.dyslexia_probability_index >= threshold:
        recommendations.extend(DYSLEXIA_RECOMMENDATIONS)
    if result.adhd_probability_index >= threshold:
        recommendations.extend(ADHD_RECOMMENDATIONS)
    if result.dysgraphia_probability_index >= threshold:
        recommendations.extend(DYSGRAPHIA_RECOMMENDATIONS)
    return recommendations or list(DEFAULT_RECOMMENDATIONS)
