# gaze_risk/io/observers.py
"""
Observers for screening session progress and results.

Sessions notify registered observers when they start, complete or fail, which
keeps console output and metric logging out of the scoring code.

Example:
    >>> from gaze_risk.io import ScreeningSession, ConsoleReporter, MetricsLogger
    >>>
    >>> session = ScreeningSession(label="reader-01")
    >>> session.register_observer(ConsoleReporter())
    >>> session.register_observer(MetricsLogger("logs/sessions.csv"))
    >>> session.push_many(samples)
    >>> outcome = session.finish()
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING

import pandas as pd

if TYPE_CHECKING:
    from .session import SessionOutcome


class SessionObserver(ABC):
    """Abstract base class for session observers."""

    @abstractmethod
    def on_session_start(self, label: str) -> None:
        """Called when the first sample reaches the session."""

    @abstractmethod
    def on_session_complete(self, label: str, outcome: "SessionOutcome") -> None:
        """Called once the session has been flushed and scored."""

    @abstractmethod
    def on_session_error(self, label: str, error: Exception) -> None:
        """Called when the session could not be completed."""


class ConsoleReporter(SessionObserver):
    """
    Prints session progress and key biomarkers to the console.

    Example:
        >>> session.register_observer(ConsoleReporter(verbose=True))
    """

    def __init__(self, verbose: bool = True):
        self.verbose = verbose

    def on_session_start(self, label: str) -> None:
        print(f"\n{'=' * 70}")
        print(f"Starting screening session: {label}")
        print(f"{'=' * 70}\n")

    def on_session_complete(self, label: str, outcome: "SessionOutcome") -> None:
        bio = outcome.biomarkers
        print(f"\n{'=' * 70}")
        print(f"Session '{label}' completed")
        print(f"   Accepted {outcome.samples_accepted} samples, rejected {outcome.samples_rejected}")
        print(f"   {len(outcome.events.fixations)} fixations, {len(outcome.events.saccades)} saccades")
        if bio.insufficient_data:
            print("   Not enough data for a reliable screening result")
        elif self.verbose:
            print(f"\n   Key Biomarkers:")
            print(f"   - Regression rate: {bio.regression_rate:.1f}% ({bio.regression_rate_risk})")
            print(f"   - Fixation dwell: {bio.fixation_dwell:.0f} ms ({bio.fixation_dwell_risk})")
            print(f"   - Saccadic amplitude: {bio.saccadic_amplitude:.2f} chars ({bio.saccadic_amplitude_risk})")
            print(f"   - Reading speed: {bio.estimated_reading_speed:.0f} WPM")
            print(f"   - Risk score: {bio.dyslexia_risk_score:.1f} ({bio.overall_risk}), confidence {bio.confidence:.2f}")
        print(f"{'=' * 70}\n")

    def on_session_error(self, label: str, error: Exception) -> None:
        print(f"\n{'=' * 70}")
        print(f"Session '{label}' failed")
        print(f"   Error: {error}")
        print(f"{'=' * 70}\n")


class MetricsLogger(SessionObserver):
    """
    Appends one CSV row per finished session.

    Example:
        >>> session.register_observer(MetricsLogger("logs/sessions.csv"))
    """

    COLUMNS = [
        "timestamp",
        "session",
        "status",
        "samples_accepted",
        "samples_rejected",
        "fixations",
        "saccades",
        "regression_rate",
        "fixation_dwell",
        "saccadic_amplitude",
        "pso_rate",
        "glissade_rate",
        "reading_speed_wpm",
        "risk_score",
        "overall_risk",
        "confidence",
        "error",
    ]

    def __init__(self, log_file: str):
        self.log_file = Path(log_file)
        self.log_file.parent.mkdir(parents=True, exist_ok=True)

    def _append(self, row: dict) -> None:
        frame = pd.DataFrame([row], columns=self.COLUMNS)
        write_header = not self.log_file.exists() or self.log_file.stat().st_size == 0
        frame.to_csv(self.log_file, mode="a", header=write_header, index=False)

    def on_session_start(self, label: str) -> None:
        """No action on start."""

    def on_session_complete(self, label: str, outcome: "SessionOutcome") -> None:
        bio = outcome.biomarkers
        self._append({
            "timestamp": datetime.now().isoformat(),
            "session": label,
            "status": "insufficient" if bio.insufficient_data else "ok",
            "samples_accepted": outcome.samples_accepted,
            "samples_rejected": outcome.samples_rejected,
            "fixations": len(outcome.events.fixations),
            "saccades": len(outcome.events.saccades),
            "regression_rate": round(bio.regression_rate, 2),
            "fixation_dwell": round(bio.fixation_dwell, 2),
            "saccadic_amplitude": round(bio.saccadic_amplitude, 3),
            "pso_rate": round(bio.pso_rate, 2),
            "glissade_rate": round(bio.glissade_rate, 2),
            "reading_speed_wpm": bio.estimated_reading_speed,
            "risk_score": round(bio.dyslexia_risk_score, 2),
            "overall_risk": str(bio.overall_risk),
            "confidence": round(bio.confidence, 3),
            "error": "",
        })

    def on_session_error(self, label: str, error: Exception) -> None:
        self._append({
            "timestamp": datetime.now().isoformat(),
            "session": label,
            "status": "ERROR",
            "error": str(error),
        })
