# gaze_risk/cli.py
"""Command line screening of recorded gaze TSV files."""
from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from .batch import analyze_files
from .config.constants import ClinicalConstants, SegmentationConstants
from .config_builder import ConfigBuilder
from .errors import AssessmentIncompleteError, InvalidConfigurationError
from .io import ConsoleReporter, MetricsLogger, ScreeningSession, read_gaze_tsv, samples_from_dataframe, write_events_tsv
from .normative import comprehensive_comparison
from .report import generate_clinical_report


logger = logging.getLogger(__name__)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Gaze based reading-risk screening of recorded sessions")
    parser.add_argument("--input", required=True, nargs="+", help="Gaze TSV file(s) with time_ms, x, y [, confidence]")
    parser.add_argument("--age", type=float, default=None, help="Reader age in years for normative comparison")
    parser.add_argument("--events-out", default=None, help="Write fixations and saccades to this TSV (single input only)")
    parser.add_argument("--metrics-log", default=None, help="Append one CSV row per session to this file")
    parser.add_argument("--decimal", default=".", help="Decimal separator of the input files")

    parser.add_argument(
        "--smoothing",
        choices=["moving_average", "exponential", "none"],
        default="moving_average",
        help="Stream smoothing mode",
    )
    parser.add_argument(
        "--smooth-window-samples",
        type=int,
        default=SegmentationConstants.DEFAULT_SMOOTHING_WINDOW,
        help="Moving-average window in samples",
    )
    parser.add_argument(
        "--alpha",
        type=float,
        default=SegmentationConstants.DEFAULT_EXPONENTIAL_ALPHA,
        help="Exponential smoothing weight of the newest sample",
    )
    parser.add_argument(
        "--saccade-threshold",
        type=float,
        default=SegmentationConstants.SACCADE_VELOCITY_THRESHOLD,
        help="Saccade velocity threshold in px/s",
    )
    parser.add_argument(
        "--pso-velocity-threshold",
        type=float,
        default=None,
        help=(
            "Post-saccadic movement velocity in px/s (default: "
            f"{SegmentationConstants.PSO_VELOCITY_THRESHOLD:g}, or half the saccade threshold when that is lower)"
        ),
    )
    parser.add_argument(
        "--dispersion-threshold",
        type=float,
        default=SegmentationConstants.FIXATION_DISPERSION_THRESHOLD,
        help="Fixation dispersion threshold in px",
    )
    parser.add_argument(
        "--min-fixation-ms",
        type=float,
        default=SegmentationConstants.FIXATION_MIN_DURATION,
        help="Shortest emitted fixation in ms",
    )
    parser.add_argument("--min-confidence", type=float, default=0.0, help="Reject samples below this confidence")
    parser.add_argument(
        "--min-samples",
        type=int,
        default=SegmentationConstants.MIN_SESSION_SAMPLES,
        help="Usable samples required for a scored session",
    )
    parser.add_argument(
        "--pixels-per-character",
        type=float,
        default=ClinicalConstants.PIXELS_PER_CHARACTER,
    )
    parser.add_argument(
        "--pixels-per-degree",
        type=float,
        default=ClinicalConstants.PIXELS_PER_DEGREE,
    )
    parser.add_argument(
        "--composite-mode",
        choices=["additive", "normalized"],
        default="additive",
        help="How band and feature weights combine into the risk score",
    )
    parser.add_argument("--n-jobs", type=int, default=-1, help="Parallel jobs for multiple inputs")
    parser.add_argument("--quiet", action="store_true", help="Suppress the console session summary")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def _run_single(args: argparse.Namespace, smoothing, segmenter, biomarkers) -> int:
    path = args.input[0]
    session = ScreeningSession(
        label=path,
        smoothing_config=smoothing,
        segmenter_config=segmenter,
        biomarker_config=biomarkers,
    )
    if not args.quiet:
        session.register_observer(ConsoleReporter())
    if args.metrics_log:
        session.register_observer(MetricsLogger(args.metrics_log))

    session.push_many(samples_from_dataframe(read_gaze_tsv(path, decimal=args.decimal)))
    try:
        outcome = session.finish()
    except AssessmentIncompleteError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    result = session.build_diagnostic_result()
    comparisons = None
    if args.age is not None:
        eye = outcome.eye_tracking
        comparisons = comprehensive_comparison(
            args.age,
            wpm=outcome.biomarkers.estimated_reading_speed,
            fixation_duration=eye.average_fixation_duration,
            regression_count=eye.regression_count,
            chaos_index=eye.chaos_index,
        )

    if args.events_out:
        write_events_tsv(outcome.events, args.events_out)
        logger.info("Events written to %s", args.events_out)

    print(generate_clinical_report(result, outcome.biomarkers, comparisons, session.classifier.trend()))
    return 0


def _run_batch(args: argparse.Namespace, smoothing, segmenter, biomarkers) -> int:
    results = analyze_files(args.input, smoothing, segmenter, biomarkers, n_jobs=args.n_jobs)
    metrics_logger = MetricsLogger(args.metrics_log) if args.metrics_log else None
    failed = 0
    for r in results:
        if r.ok:
            bio = r.outcome.biomarkers
            print(f"{r.path}\t{bio.overall_risk}\t{bio.dyslexia_risk_score:.1f}\t{bio.confidence:.2f}")
            if metrics_logger:
                metrics_logger.on_session_complete(r.outcome.label, r.outcome)
        else:
            failed += 1
            print(f"{r.path}\tERROR\t{r.error}")
            if metrics_logger:
                metrics_logger.on_session_error(r.path, AssessmentIncompleteError(r.error))
    return 1 if failed else 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    if args.events_out and len(args.input) > 1:
        parser.error("--events-out requires a single --input file")

    try:
        smoothing = ConfigBuilder.build_smoothing_config(args)
        segmenter = ConfigBuilder.build_segmenter_config(args)
        biomarkers = ConfigBuilder.build_biomarker_config(args)
    except InvalidConfigurationError as e:
        parser.error(str(e))

    if len(args.input) == 1:
        return _run_single(args, smoothing, segmenter, biomarkers)
    return _run_batch(args, smoothing, segmenter, biomarkers)


if __name__ == "__main__":
    sys.exit(main())
