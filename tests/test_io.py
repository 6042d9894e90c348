import pandas as pd
import pytest

from gaze_risk.batch import analyze_files
from gaze_risk.io import (
    ConsoleReporter,
    MetricsLogger,
    ScreeningSession,
    events_to_dataframe,
    fixations_to_dataframe,
    read_gaze_tsv,
    samples_from_dataframe,
    saccades_to_dataframe,
    write_events_tsv,
)
from gaze_risk.io.session import analyze_samples
from gaze_risk.domain import SegmentedEvents
from gaze_risk.errors import AssessmentIncompleteError


def test_read_gaze_tsv_roundtrip(reading_tsv, reading_samples):
    samples = samples_from_dataframe(read_gaze_tsv(reading_tsv))
    assert len(samples) == len(reading_samples)
    assert samples[13].x == 160
    assert samples[0].confidence == pytest.approx(0.9)


def test_missing_column_is_reported(tmp_path):
    path = tmp_path / "bad.tsv"
    pd.DataFrame({"time_ms": [0, 20], "x": [1, 2]}).to_csv(path, sep="\t", index=False)
    with pytest.raises(ValueError, match="Input must contain 'y' column"):
        read_gaze_tsv(path)


def test_unparseable_cells_become_nan():
    df = pd.DataFrame({"time_ms": [0, 20], "x": ["1.5", "oops"], "y": [2, 3]})
    samples = samples_from_dataframe(df)
    assert samples[0].x == 1.5
    assert samples[0].confidence == 1.0
    assert not samples[1].is_finite()


def test_event_tables(reading_samples, unsmoothed):
    events = analyze_samples(reading_samples, smoothing_config=unsmoothed).events

    fixations = fixations_to_dataframe(events)
    saccades = saccades_to_dataframe(events)
    assert len(fixations) == 8
    assert len(saccades) == 7
    assert saccades["is_regression"].sum() == 1
    assert saccades["amplitude_px"].iloc[0] == pytest.approx(60.0)

    combined = events_to_dataframe(events)
    assert len(combined) == 15
    assert combined.columns[0] == "event_type"
    assert combined["start_time_ms"].is_monotonic_increasing
    assert list(combined["event_type"][:3]) == ["fixation", "saccade", "fixation"]


def test_empty_event_table():
    combined = events_to_dataframe(SegmentedEvents())
    assert combined.empty
    assert "event_type" in combined.columns


def test_write_events_tsv(tmp_path, reading_samples, unsmoothed):
    events = analyze_samples(reading_samples, smoothing_config=unsmoothed).events
    path = tmp_path / "events.tsv"
    write_events_tsv(events, path)
    loaded = pd.read_csv(path, sep="\t")
    assert len(loaded) == 15


def test_console_reporter(capsys, reading_samples):
    session = ScreeningSession(label="reader-01")
    session.register_observer(ConsoleReporter())
    session.push_many(reading_samples)
    session.finish()
    out = capsys.readouterr().out
    assert "Starting screening session: reader-01" in out
    assert "Session 'reader-01' completed" in out
    assert "Regression rate" in out


def test_metrics_logger_appends_rows(tmp_path, reading_samples):
    log_file = tmp_path / "logs" / "sessions.csv"
    for label in ("first", "second"):
        session = ScreeningSession(label=label)
        session.register_observer(MetricsLogger(str(log_file)))
        session.push_many(reading_samples)
        session.finish()

    failed = ScreeningSession(label="broken")
    failed.register_observer(MetricsLogger(str(log_file)))
    with pytest.raises(AssessmentIncompleteError):
        failed.finish()

    log = pd.read_csv(log_file)
    assert list(log["session"]) == ["first", "second", "broken"]
    assert list(log["status"]) == ["ok", "ok", "ERROR"]
    assert list(log.columns) == MetricsLogger.COLUMNS


def test_batch_analysis(tmp_path, reading_tsv):
    empty = tmp_path / "empty.tsv"
    pd.DataFrame({"time_ms": [0.0, 20.0], "x": [None, None], "y": [None, None]}).to_csv(empty, sep="\t", index=False)

    results = analyze_files([str(reading_tsv), str(empty)], n_jobs=1)

    assert [r.ok for r in results] == [True, False]
    assert results[0].outcome.label == "reader"
    assert len(results[0].outcome.events.fixations) > 0
    assert "no usable gaze samples" in results[1].error
