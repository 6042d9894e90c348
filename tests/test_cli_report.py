from datetime import datetime, timezone

import pandas as pd
import pytest

from gaze_risk.cli import build_arg_parser, main
from gaze_risk.config_builder import ConfigBuilder
from gaze_risk.domain import CognitiveLoadMetrics, DyslexiaBiomarkers, EyeTrackingMetrics, HandwritingMetrics, VoiceMetrics
from gaze_risk.io.session import analyze_samples
from gaze_risk.normative import comprehensive_comparison
from gaze_risk.report import generate_clinical_report
from gaze_risk.scoring import MultimodalIndexCombiner


def test_report_contents(reading_samples, unsmoothed):
    outcome = analyze_samples(reading_samples, smoothing_config=unsmoothed)
    result = MultimodalIndexCombiner().create_diagnostic_result(
        outcome.eye_tracking,
        VoiceMetrics(),
        HandwritingMetrics(),
        CognitiveLoadMetrics(),
        timestamp=datetime(2025, 5, 4, tzinfo=timezone.utc),
    )
    comparisons = comprehensive_comparison(9, wpm=outcome.biomarkers.estimated_reading_speed)

    report = generate_clinical_report(result, outcome.biomarkers, comparisons)

    assert result.session_id in report
    assert "Date: 2025-05-04" in report
    assert "Regression rate: 14.3% (moderate)" in report
    assert "wpm: 280.00" in report
    assert "Continue current reading program" in report
    assert "screening purposes only" in report
    assert "does not constitute a clinical diagnosis" in report


def test_report_for_insufficient_session():
    result = MultimodalIndexCombiner().create_diagnostic_result(
        EyeTrackingMetrics(), VoiceMetrics(), HandwritingMetrics(), CognitiveLoadMetrics()
    )
    report = generate_clinical_report(result, DyslexiaBiomarkers.insufficient())
    assert "Insufficient gaze data" in report


def test_cli_single_file(tmp_path, reading_tsv, capsys):
    events_out = tmp_path / "events.tsv"
    metrics_log = tmp_path / "metrics.csv"

    code = main([
        "--input", str(reading_tsv),
        "--age", "9",
        "--smoothing", "none",
        "--events-out", str(events_out),
        "--metrics-log", str(metrics_log),
    ])

    assert code == 0
    out = capsys.readouterr().out
    assert "SCREENING REPORT" in out
    assert "NORMATIVE COMPARISON" in out
    assert len(pd.read_csv(events_out, sep="\t")) == 15
    assert len(pd.read_csv(metrics_log)) == 1


def test_cli_without_usable_samples(tmp_path, capsys):
    path = tmp_path / "blank.tsv"
    pd.DataFrame({"time_ms": [0.0], "x": [None], "y": [None]}).to_csv(path, sep="\t", index=False)
    assert main(["--input", str(path), "--quiet"]) == 1
    assert "no usable gaze samples" in capsys.readouterr().err


def test_cli_batch(tmp_path, reading_tsv, capsys):
    second = tmp_path / "second.tsv"
    second.write_text(reading_tsv.read_text())
    code = main(["--input", str(reading_tsv), str(second), "--n-jobs", "1"])
    assert code == 0
    lines = capsys.readouterr().out.strip().splitlines()
    assert len(lines) == 2


def test_cli_rejects_invalid_threshold(reading_tsv):
    with pytest.raises(SystemExit):
        main(["--input", str(reading_tsv), "--saccade-threshold", "0"])


def test_cli_events_out_requires_single_input(tmp_path, reading_tsv):
    with pytest.raises(SystemExit):
        main(["--input", str(reading_tsv), str(reading_tsv), "--events-out", str(tmp_path / "x.tsv")])


def test_cli_accepts_low_saccade_threshold(reading_tsv, capsys):
    code = main(["--input", str(reading_tsv), "--smoothing", "none", "--saccade-threshold", "30"])
    assert code == 0
    assert "SCREENING REPORT" in capsys.readouterr().out


def test_cli_explicit_pso_threshold_is_validated(reading_tsv):
    with pytest.raises(SystemExit):
        main(["--input", str(reading_tsv), "--saccade-threshold", "30", "--pso-velocity-threshold", "35"])


def test_pso_threshold_follows_saccade_threshold():
    args = build_arg_parser().parse_args(["--input", "x.tsv", "--saccade-threshold", "30"])
    assert ConfigBuilder.build_segmenter_config(args).pso_velocity_threshold_px_per_sec == 15.0

    args = build_arg_parser().parse_args(["--input", "x.tsv"])
    assert ConfigBuilder.build_segmenter_config(args).pso_velocity_threshold_px_per_sec == 40.0

    args = build_arg_parser().parse_args(["--input", "x.tsv", "--saccade-threshold", "30", "--pso-velocity-threshold", "20"])
    assert ConfigBuilder.build_segmenter_config(args).pso_velocity_threshold_px_per_sec == 20.0
