# gaze_risk/io/session.py
"""Session controller: one live gaze stream from first sample to diagnostic result."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, List, Optional

from ..biomarkers import compute_eye_tracking_metrics
from ..config import BiomarkerConfig, DiagnosticWeights, SegmenterConfig, SmoothingConfig
from ..config.constants import ValidationMessages
from ..domain.biomarkers import DyslexiaBiomarkers
from ..domain.events import GazeEvent, SegmentedEvents
from ..domain.metrics import (
    CognitiveLoadMetrics,
    DiagnosticResult,
    EyeTrackingMetrics,
    HandwritingMetrics,
    VoiceMetrics,
)
from ..domain.samples import GazeSample, SmoothedPoint
from ..errors import AssessmentIncompleteError
from ..noise import create_smoother
from ..scoring import DyslexiaClassifier, MultimodalIndexCombiner
from ..segmentation import FixationSaccadeSegmenter, SegmentationStats
from .observers import SessionObserver


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionOutcome:
    """Everything a finished session hands to the host and persistence layer."""

    label: str
    biomarkers: DyslexiaBiomarkers
    eye_tracking: EyeTrackingMetrics
    events: SegmentedEvents
    segmentation: SegmentationStats
    samples_accepted: int
    samples_rejected: int
    duration_ms: float


class ScreeningSession:
    """
    Owns all mutable state of one assessment: the smoothing buffer, the
    segmenter anchor, the event lists and the biomarker history.

    Never share an instance between concurrent sessions or threads.

    Example:
        >>> session = ScreeningSession(label="reader-01")
        >>> for sample in samples:
        ...     session.push(sample)
        >>> outcome = session.finish()
        >>> result = session.build_diagnostic_result(voice=voice_metrics)
    """

    def __init__(
        self,
        label: str = "session",
        smoothing_config: Optional[SmoothingConfig] = None,
        segmenter_config: Optional[SegmenterConfig] = None,
        biomarker_config: Optional[BiomarkerConfig] = None,
        diagnostic_weights: Optional[DiagnosticWeights] = None,
    ):
        self.label = label
        self.smoothing_config = smoothing_config or SmoothingConfig()
        self.segmenter_config = segmenter_config or SegmenterConfig()
        self.smoother = create_smoother(self.smoothing_config)
        self.segmenter = FixationSaccadeSegmenter(self.segmenter_config)
        self.classifier = DyslexiaClassifier(biomarker_config)
        self.combiner = MultimodalIndexCombiner(diagnostic_weights)

        self.events = SegmentedEvents()
        self.path: List[SmoothedPoint] = []
        self.samples_accepted = 0
        self.samples_rejected = 0
        self._first_timestamp: Optional[float] = None
        self._last_timestamp: Optional[float] = None
        self._started = False
        self._outcome: Optional[SessionOutcome] = None
        self._failure: Optional[AssessmentIncompleteError] = None
        self._observers: List[SessionObserver] = []

    def register_observer(self, observer: SessionObserver) -> None:
        if observer not in self._observers:
            self._observers.append(observer)

    def unregister_observer(self, observer: SessionObserver) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    def _notify_start(self) -> None:
        for observer in self._observers:
            try:
                observer.on_session_start(self.label)
            except Exception as e:
                logger.warning("Observer %s failed on start: %s", type(observer).__name__, e)

    def _notify_complete(self, outcome: SessionOutcome) -> None:
        for observer in self._observers:
            try:
                observer.on_session_complete(self.label, outcome)
            except Exception as e:
                logger.warning("Observer %s failed on complete: %s", type(observer).__name__, e)

    def _notify_error(self, error: Exception) -> None:
        for observer in self._observers:
            try:
                observer.on_session_error(self.label, error)
            except Exception as e:
                logger.warning("Observer %s failed on error: %s", type(observer).__name__, e)

    @property
    def finished(self) -> bool:
        return self._outcome is not None

    def push(self, sample: GazeSample) -> List[GazeEvent]:
        """Feed one raw sample; returns the events it finalized.

        Non-finite, low-confidence and out-of-order samples are rejected
        without touching the smoothing buffer, the gaze path or the duration.
        """
        if self._outcome is not None:
            raise RuntimeError(f"Session '{self.label}' is already finished")
        if self._failure is not None:
            raise RuntimeError(f"Session '{self.label}' failed: {self._failure}")
        if not self._started:
            self._started = True
            logger.info("Session %s started", self.label)
            self._notify_start()

        if not sample.is_finite() or sample.confidence < self.segmenter_config.min_confidence:
            self.samples_rejected += 1
            logger.debug("Rejected sample %s", sample)
            return []
        if self._last_timestamp is not None and sample.timestamp_ms <= self._last_timestamp:
            self.samples_rejected += 1
            logger.debug("Rejected out-of-order sample %s (last t=%s)", sample, self._last_timestamp)
            return []

        self.samples_accepted += 1
        if self._first_timestamp is None:
            self._first_timestamp = sample.timestamp_ms
        self._last_timestamp = sample.timestamp_ms

        point = self.smoother.smooth(sample)
        self.path.append(point)
        emitted = self.segmenter.push(point)
        self.events.extend(emitted)
        return emitted

    def push_many(self, samples: Iterable[GazeSample]) -> None:
        for sample in samples:
            self.push(sample)

    @property
    def duration_ms(self) -> float:
        if self._first_timestamp is None or self._last_timestamp is None:
            return 0.0
        return max(0.0, self._last_timestamp - self._first_timestamp)

    def finish(self) -> SessionOutcome:
        """Flush the open fixation and any pending saccade, then score the session.

        Raises:
            AssessmentIncompleteError: no usable sample was ever delivered.
                The session stays failed; later calls raise the same error.
        """
        if self._outcome is not None:
            return self._outcome
        if self._failure is not None:
            raise self._failure

        self.events.extend(self.segmenter.flush())

        if self.samples_accepted == 0:
            error = AssessmentIncompleteError(ValidationMessages.NO_USABLE_SAMPLES)
            self._failure = error
            logger.error("Session %s: %s", self.label, error)
            self._notify_error(error)
            raise error

        if self.samples_accepted < self.segmenter_config.min_samples:
            logger.info(
                "Session %s: only %d usable samples (need %d); insufficient data",
                self.label, self.samples_accepted, self.segmenter_config.min_samples,
            )
            biomarkers = DyslexiaBiomarkers.insufficient()
        else:
            biomarkers = self.classifier.analyze(self.events, self.duration_ms)

        outcome = SessionOutcome(
            label=self.label,
            biomarkers=biomarkers,
            eye_tracking=compute_eye_tracking_metrics(self.events, self.path, self.segmenter_config),
            events=self.events,
            segmentation=self.segmenter.stats,
            samples_accepted=self.samples_accepted,
            samples_rejected=self.samples_rejected,
            duration_ms=self.duration_ms,
        )
        self._outcome = outcome
        logger.info(
            "Session %s finished: %d fixations, %d saccades, risk %s (%.1f)",
            self.label, len(self.events.fixations), len(self.events.saccades),
            biomarkers.overall_risk, biomarkers.dyslexia_risk_score,
        )
        self._notify_complete(outcome)
        return outcome

    def build_diagnostic_result(
        self,
        voice: Optional[VoiceMetrics] = None,
        handwriting: Optional[HandwritingMetrics] = None,
        cognitive_load: Optional[CognitiveLoadMetrics] = None,
        timestamp: Optional[datetime] = None,
    ) -> DiagnosticResult:
        """Combine this session's eye metrics with the collaborator records.

        Missing collaborator records are replaced by neutral defaults.
        """
        outcome = self.finish()
        return self.combiner.create_diagnostic_result(
            outcome.eye_tracking,
            voice or VoiceMetrics(),
            handwriting or HandwritingMetrics(),
            cognitive_load or CognitiveLoadMetrics(),
            timestamp=timestamp,
        )


def analyze_samples(
    samples: Iterable[GazeSample],
    label: str = "session",
    smoothing_config: Optional[SmoothingConfig] = None,
    segmenter_config: Optional[SegmenterConfig] = None,
    biomarker_config: Optional[BiomarkerConfig] = None,
) -> SessionOutcome:
    """Run a complete recorded stream through a fresh session."""
    session = ScreeningSession(label, smoothing_config, segmenter_config, biomarker_config)
    session.push_many(samples)
    return session.finish()
