"""Extraction, classification and history in one per-session object."""
from __future__ import annotations

from typing import Optional

from ..biomarkers import BiomarkerExtractor
from ..config import BiomarkerConfig
from ..domain.biomarkers import DyslexiaBiomarkers
from ..domain.events import SegmentedEvents
from .history import BiomarkerHistory, TrendAnalysis
from .risk import RiskClassifier


class DyslexiaClassifier:
    """Classifies completed reading segments and keeps their history.

    Holds per-session state (the history); create one per session.
    """

    def __init__(self, cfg: Optional[BiomarkerConfig] = None) -> None:
        self.cfg = cfg or BiomarkerConfig()
        self.extractor = BiomarkerExtractor(self.cfg)
        self.classifier = RiskClassifier(self.cfg)
        self.history = BiomarkerHistory(self.cfg.history_capacity)
        self.latest: Optional[DyslexiaBiomarkers] = None

    def analyze(self, events: SegmentedEvents, session_duration_ms: float) -> DyslexiaBiomarkers:
        raw = self.extractor.extract(events, session_duration_ms)
        biomarkers = self.classifier.classify(raw)
        self.latest = biomarkers
        if not biomarkers.insufficient_data:
            self.history.append(biomarkers)
        return biomarkers

    def trend(self) -> Optional[TrendAnalysis]:
        return self.history.trend()

    def reset(self) -> None:
        self.history.clear()
        self.latest = None
