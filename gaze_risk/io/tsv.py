# gaze_risk/io/tsv.py
"""Recorded gaze streams in, segmented events out.

Input files are tab separated with the columns ``time_ms``, ``x``, ``y`` and an
optional ``confidence``.
"""
from __future__ import annotations

from typing import List

import pandas as pd

from ..config.constants import ValidationMessages
from ..domain.events import SegmentedEvents
from ..domain.samples import GazeSample

REQUIRED_COLUMNS = ("time_ms", "x", "y")

FIXATION_COLUMNS = ["start_time_ms", "duration_ms", "x", "y", "sample_count"]
SACCADE_COLUMNS = [
    "start_time_ms",
    "duration_ms",
    "start_x",
    "start_y",
    "end_x",
    "end_y",
    "amplitude_px",
    "velocity",
    "is_regression",
    "has_pso",
    "has_glissade",
]


def read_gaze_tsv(path: str, decimal: str = ".") -> pd.DataFrame:
    df = pd.read_csv(path, sep="\t", decimal=decimal, low_memory=False)
    for column in REQUIRED_COLUMNS:
        if column not in df.columns:
            raise ValueError(ValidationMessages.MISSING_COLUMN.format(column=column))
    return df


def samples_from_dataframe(df: pd.DataFrame) -> List[GazeSample]:
    """Convert a gaze table to samples, in file order.

    Unparseable cells become NaN; such samples are later skipped by the session.
    """
    for column in REQUIRED_COLUMNS:
        if column not in df.columns:
            raise ValueError(ValidationMessages.MISSING_COLUMN.format(column=column))

    times = pd.to_numeric(df["time_ms"], errors="coerce")
    xs = pd.to_numeric(df["x"], errors="coerce")
    ys = pd.to_numeric(df["y"], errors="coerce")
    if "confidence" in df.columns:
        conf = pd.to_numeric(df["confidence"], errors="coerce").fillna(0.0)
    else:
        conf = pd.Series(1.0, index=df.index)

    return [
        GazeSample(x=float(x), y=float(y), timestamp_ms=float(t), confidence=float(c))
        for t, x, y, c in zip(times, xs, ys, conf)
    ]


def fixations_to_dataframe(events: SegmentedEvents) -> pd.DataFrame:
    rows = [
        {
            "start_time_ms": f.start_time_ms,
            "duration_ms": f.duration_ms,
            "x": f.x,
            "y": f.y,
            "sample_count": f.sample_count,
        }
        for f in events.fixations
    ]
    return pd.DataFrame(rows, columns=FIXATION_COLUMNS)


def saccades_to_dataframe(events: SegmentedEvents) -> pd.DataFrame:
    rows = [
        {
            "start_time_ms": s.start_time_ms,
            "duration_ms": s.duration_ms,
            "start_x": s.start_x,
            "start_y": s.start_y,
            "end_x": s.end_x,
            "end_y": s.end_y,
            "amplitude_px": s.amplitude_px,
            "velocity": s.velocity,
            "is_regression": s.is_regression,
            "has_pso": s.has_pso,
            "has_glissade": s.has_glissade,
        }
        for s in events.saccades
    ]
    return pd.DataFrame(rows, columns=SACCADE_COLUMNS)


def events_to_dataframe(events: SegmentedEvents) -> pd.DataFrame:
    """One chronological table of fixations and saccades with an ``event_type`` column."""
    fixations = fixations_to_dataframe(events).assign(event_type="fixation")
    saccades = saccades_to_dataframe(events).assign(event_type="saccade")
    frames = [frame for frame in (fixations, saccades) if not frame.empty]
    if not frames:
        return pd.DataFrame(columns=["event_type", *FIXATION_COLUMNS, *SACCADE_COLUMNS[2:]])
    combined = pd.concat(frames, ignore_index=True, sort=False)
    combined = combined.sort_values("start_time_ms", kind="stable").reset_index(drop=True)
    return combined[["event_type", *[c for c in combined.columns if c != "event_type"]]]


def write_events_tsv(events: SegmentedEvents, path: str) -> None:
    events_to_dataframe(events).to_csv(path, sep="\t", index=False)
