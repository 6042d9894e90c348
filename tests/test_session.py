import dataclasses
from datetime import datetime, timezone

import pytest

from gaze_risk.config import SegmenterConfig
from gaze_risk.domain import DiagnosticResult, GazeSample, RiskLevel, VoiceMetrics
from gaze_risk.errors import AssessmentIncompleteError
from gaze_risk.io import ScreeningSession, SessionObserver, analyze_samples


class RecordingObserver(SessionObserver):
    def __init__(self):
        self.calls = []

    def on_session_start(self, label):
        self.calls.append(("start", label))

    def on_session_complete(self, label, outcome):
        self.calls.append(("complete", label))

    def on_session_error(self, label, error):
        self.calls.append(("error", type(error).__name__))


class BrokenObserver(SessionObserver):
    def on_session_start(self, label):
        raise RuntimeError("boom")

    def on_session_complete(self, label, outcome):
        raise RuntimeError("boom")

    def on_session_error(self, label, error):
        raise RuntimeError("boom")


def test_reading_line(reading_samples, unsmoothed):
    outcome = analyze_samples(reading_samples, smoothing_config=unsmoothed)

    assert len(outcome.events.fixations) == 8
    assert len(outcome.events.saccades) == 7
    assert outcome.samples_accepted == len(reading_samples)
    assert outcome.duration_ms == 2060

    bio = outcome.biomarkers
    assert not bio.insufficient_data
    assert bio.regression_rate == pytest.approx(100 / 7)
    assert bio.regression_rate_risk is RiskLevel.MODERATE
    assert bio.fixation_dwell == pytest.approx(237.5)
    assert bio.fixation_dwell_risk is RiskLevel.LOW
    assert bio.saccadic_amplitude == pytest.approx(44 / 7)
    assert bio.saccadic_amplitude_risk is RiskLevel.LOW
    assert bio.estimated_reading_speed == 280
    assert bio.confidence == pytest.approx(0.3)

    eye = outcome.eye_tracking
    assert eye.total_fixations == 8
    assert eye.regression_count == 1
    assert 0 <= eye.chaos_index <= 1


def test_default_smoothing_still_segments(reading_samples):
    outcome = analyze_samples(reading_samples)
    assert outcome.events.fixations
    assert outcome.events.saccades
    assert 0 <= outcome.biomarkers.dyslexia_risk_score <= 100


def test_few_samples_are_insufficient(reading_samples, unsmoothed):
    outcome = analyze_samples(reading_samples[:5], smoothing_config=unsmoothed)
    assert outcome.biomarkers.insufficient_data
    assert outcome.biomarkers.confidence == 0
    assert outcome.biomarkers.overall_risk is RiskLevel.LOW


def test_no_usable_samples_fails_assessment():
    session = ScreeningSession(label="empty")
    observer = RecordingObserver()
    session.register_observer(observer)
    session.push_many(GazeSample(float("nan"), 1.0, i * 20.0) for i in range(30))

    with pytest.raises(AssessmentIncompleteError):
        session.finish()
    assert observer.calls == [("start", "empty"), ("error", "AssessmentIncompleteError")]
    assert session.samples_rejected == 30


def test_never_started_session_fails():
    with pytest.raises(AssessmentIncompleteError):
        ScreeningSession().finish()


def test_low_confidence_samples_are_rejected(reading_samples, unsmoothed):
    noisy = [
        dataclasses.replace(s, confidence=0.1, x=s.x + 500) if i % 10 == 5 else s
        for i, s in enumerate(reading_samples)
    ]
    outcome = analyze_samples(
        noisy, smoothing_config=unsmoothed, segmenter_config=SegmenterConfig(min_confidence=0.5)
    )
    assert outcome.samples_rejected == sum(1 for i in range(len(noisy)) if i % 10 == 5)
    assert len(outcome.events.saccades) == 7


def test_observers_are_notified_and_failures_contained(reading_samples, unsmoothed):
    session = ScreeningSession(label="reader", smoothing_config=unsmoothed)
    observer = RecordingObserver()
    session.register_observer(BrokenObserver())
    session.register_observer(observer)
    session.register_observer(observer)

    session.push_many(reading_samples)
    session.finish()
    assert observer.calls == [("start", "reader"), ("complete", "reader")]


def test_finish_is_idempotent_and_closes_session(reading_samples):
    session = ScreeningSession()
    session.push_many(reading_samples)
    assert session.finish() is session.finish()
    assert session.finished
    with pytest.raises(RuntimeError):
        session.push(reading_samples[0])


def test_diagnostic_result(reading_samples, unsmoothed):
    session = ScreeningSession(smoothing_config=unsmoothed)
    session.push_many(reading_samples)
    ts = datetime(2025, 3, 1, 9, 30, tzinfo=timezone.utc)

    result = session.build_diagnostic_result(voice=VoiceMetrics(fluency_score=70), timestamp=ts)

    assert isinstance(result, DiagnosticResult)
    assert result.timestamp == ts
    assert result.session_id.startswith("NRX-")
    assert result.eye_tracking.total_fixations == 8
    assert result.voice.fluency_score == 70
    assert 0 <= result.dyslexia_probability_index <= 1


def test_sessions_do_not_share_state(reading_samples, unsmoothed):
    a = ScreeningSession(smoothing_config=unsmoothed)
    b = ScreeningSession(smoothing_config=unsmoothed)
    for sample in reading_samples[:40]:
        a.push(sample)
    b.push_many(reading_samples)
    assert len(b.finish().events.fixations) == 8
    assert a.events.total_events < b.events.total_events


def test_out_of_order_sample_at_end_is_rejected(reading_samples, unsmoothed):
    glitched = list(reading_samples) + [GazeSample(5000.0, 5000.0, 0.0)]
    outcome = analyze_samples(glitched, smoothing_config=unsmoothed)

    assert outcome.samples_rejected == 1
    assert outcome.samples_accepted == len(reading_samples)
    assert outcome.duration_ms == 2060
    assert outcome.biomarkers.estimated_reading_speed == 280


def test_out_of_order_sample_leaves_smoothing_untouched(reading_samples):
    clean = analyze_samples(reading_samples)
    glitched = list(reading_samples)
    glitched.insert(50, GazeSample(5000.0, 5000.0, reading_samples[49].timestamp_ms))
    glitched.insert(70, GazeSample(5000.0, 5000.0, reading_samples[10].timestamp_ms))

    outcome = analyze_samples(glitched)

    assert outcome.samples_rejected == 2
    assert len(outcome.events.saccades) == len(clean.events.saccades)
    assert outcome.biomarkers.regression_rate == pytest.approx(clean.biomarkers.regression_rate)
    assert outcome.eye_tracking.chaos_index == pytest.approx(clean.eye_tracking.chaos_index)
    assert outcome.duration_ms == clean.duration_ms


def test_failed_session_stays_failed(reading_samples):
    session = ScreeningSession(label="empty")
    observer = RecordingObserver()
    session.register_observer(observer)
    session.push(GazeSample(float("nan"), 1.0, 0.0))

    with pytest.raises(AssessmentIncompleteError) as first:
        session.finish()
    with pytest.raises(RuntimeError):
        session.push(reading_samples[0])
    with pytest.raises(AssessmentIncompleteError) as second:
        session.finish()

    assert second.value is first.value
    assert not session.finished
    assert session.samples_accepted == 0
    assert observer.calls == [("start", "empty"), ("error", "AssessmentIncompleteError")]
