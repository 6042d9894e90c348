from datetime import datetime, timezone

import pytest

from gaze_risk.config import DiagnosticWeights
from gaze_risk.domain import (
    CognitiveLoadMetrics,
    EyeTrackingMetrics,
    HandwritingMetrics,
    RiskLevel,
    VoiceMetrics,
)
from gaze_risk.scoring import (
    MultimodalIndexCombiner,
    eye_tracking_score,
    generate_recommendations,
    handwriting_score,
    session_id_for,
    voice_score,
)
from gaze_risk.scoring.recommendations import DEFAULT_RECOMMENDATIONS, DYSLEXIA_RECOMMENDATIONS


def zero_handwriting():
    return HandwritingMetrics(reversal_count=0, letter_crowding=0, graphic_inconsistency=0, line_adherence=0)


def test_chaotic_gaze_with_fluent_voice():
    combiner = MultimodalIndexCombiner()
    eye = EyeTrackingMetrics(chaos_index=0.8)
    voice = VoiceMetrics(fluency_score=90)
    hw = zero_handwriting()
    cognitive = CognitiveLoadMetrics(overload_events=0)

    result = combiner.create_diagnostic_result(eye, voice, hw, cognitive)

    eye_term = eye_tracking_score(eye) * 0.35
    assert eye_term > voice_score(voice) * 0.30
    assert eye_term > handwriting_score(hw) * 0.20
    assert 0 <= result.dyslexia_probability_index <= 1
    assert result.dyslexia_probability_index == pytest.approx((0.084 + 0.012 + 0.03) / 0.85)
    assert result.adhd_probability_index == pytest.approx(0.32)
    assert result.dysgraphia_probability_index == pytest.approx(0.15)
    assert result.overall_risk_level is RiskLevel.MODERATE


def test_stall_penalty_only_when_stalls_reported():
    assert voice_score(VoiceMetrics(stall_count=None)) == 0
    assert voice_score(VoiceMetrics(stall_count=0)) == 0
    assert voice_score(VoiceMetrics(stall_count=10)) == pytest.approx(0.3)


def test_indices_are_clamped():
    combiner = MultimodalIndexCombiner()
    eye = EyeTrackingMetrics(chaos_index=1, regression_count=100, prolonged_fixations=50, fixation_intersection_coefficient=1)
    voice = VoiceMetrics(fluency_score=0, prosody_score=0, phonemic_errors=50, stall_count=20)
    hw = HandwritingMetrics(reversal_count=20, letter_crowding=1, graphic_inconsistency=1, line_adherence=0)
    cognitive = CognitiveLoadMetrics(overload_events=50, stress_indicators=50)

    result = combiner.create_diagnostic_result(eye, voice, hw, cognitive)
    for index in (
        result.dyslexia_probability_index,
        result.adhd_probability_index,
        result.dysgraphia_probability_index,
    ):
        assert 0 <= index <= 1
    assert result.overall_risk_level is RiskLevel.HIGH


def test_out_of_range_collaborator_metrics_are_clamped():
    hw = HandwritingMetrics(reversal_count=-3, letter_crowding=1.5, line_adherence=float("nan"))
    assert hw.reversal_count == 0
    assert hw.letter_crowding == 1.0
    assert hw.line_adherence == 0.0
    voice = VoiceMetrics(fluency_score=250)
    assert voice.fluency_score == 100
    assert EyeTrackingMetrics(chaos_index=-0.5).chaos_index == 0


def test_neutral_inputs_are_low_risk():
    combiner = MultimodalIndexCombiner()
    result = combiner.create_diagnostic_result(
        EyeTrackingMetrics(), VoiceMetrics(), HandwritingMetrics(), CognitiveLoadMetrics()
    )
    assert result.dyslexia_probability_index == 0
    assert result.overall_risk_level is RiskLevel.LOW


def test_custom_modality_weights_renormalize():
    combiner = MultimodalIndexCombiner(DiagnosticWeights(eye_tracking=1, voice=0, handwriting=0))
    eye = EyeTrackingMetrics(chaos_index=1.0)
    assert combiner.dyslexia_index(eye, VoiceMetrics(fluency_score=0), zero_handwriting()) == pytest.approx(0.3)


def test_indices_do_not_depend_on_call_order():
    combiner = MultimodalIndexCombiner()
    eye = EyeTrackingMetrics(chaos_index=0.4, regression_count=6)
    cognitive = CognitiveLoadMetrics(overload_events=2, stress_indicators=3)
    first = combiner.adhd_index(eye, cognitive)
    combiner.dysgraphia_index(zero_handwriting())
    assert combiner.adhd_index(eye, cognitive) == first


def test_session_id_encodes_timestamp():
    ts = datetime(2024, 1, 1, tzinfo=timezone.utc)
    session_id = session_id_for(ts)
    assert session_id.startswith("NRX-")
    suffix = session_id[4:]
    assert suffix == suffix.upper()
    assert int(suffix, 36) == 1704067200000


def test_recommendations():
    combiner = MultimodalIndexCombiner()
    low = combiner.create_diagnostic_result(
        EyeTrackingMetrics(), VoiceMetrics(), HandwritingMetrics(), CognitiveLoadMetrics()
    )
    assert generate_recommendations(low) == list(DEFAULT_RECOMMENDATIONS)

    hw = HandwritingMetrics(reversal_count=10, letter_crowding=1, graphic_inconsistency=1, line_adherence=0)
    high = combiner.create_diagnostic_result(EyeTrackingMetrics(), VoiceMetrics(), hw, CognitiveLoadMetrics())
    recommendations = generate_recommendations(high)
    assert "Practice letter formation exercises" in recommendations
    assert not set(DYSLEXIA_RECOMMENDATIONS) & set(recommendations)
    assert len(recommendations) == 3
