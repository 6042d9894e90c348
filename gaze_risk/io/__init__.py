"""Host-boundary helpers: session controller, observers and TSV adapters."""

from .observers import SessionObserver, ConsoleReporter, MetricsLogger
from .session import ScreeningSession, SessionOutcome, analyze_samples
from .tsv import (
    read_gaze_tsv,
    samples_from_dataframe,
    fixations_to_dataframe,
    saccades_to_dataframe,
    events_to_dataframe,
    write_events_tsv,
)

__all__ = [
    "SessionObserver",
    "ConsoleReporter",
    "MetricsLogger",
    "ScreeningSession",
    "SessionOutcome",
    "analyze_samples",
    "read_gaze_tsv",
    "samples_from_dataframe",
    "fixations_to_dataframe",
    "saccades_to_dataframe",
    "events_to_dataframe",
    "write_events_tsv",
]
