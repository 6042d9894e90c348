"""Bounded per-session biomarker history and trend analysis."""
from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from statistics import mean
from typing import Deque, List, Optional

from ..config.constants import ClinicalConstants
from ..domain.biomarkers import DyslexiaBiomarkers

TREND_WINDOW = 10


@dataclass(frozen=True)
class TrendAnalysis:
    trend: str  # "improving", "worsening" or "stable"
    recent_average: float
    historical_average: float
    delta: float  # historical - recent; positive means improvement


class BiomarkerHistory:
    """Most recent classified snapshots, oldest dropped first."""

    def __init__(self, capacity: int = ClinicalConstants.HISTORY_CAPACITY) -> None:
        self._entries: Deque[DyslexiaBiomarkers] = deque(maxlen=capacity)

    def append(self, biomarkers: DyslexiaBiomarkers) -> None:
        self._entries.append(biomarkers)

    def clear(self) -> None:
        self._entries.clear()

    def entries(self) -> List[DyslexiaBiomarkers]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def trend(self) -> Optional[TrendAnalysis]:
        """Compare the last ten risk scores against the ten before them.

        Returns None until there is at least one entry in the older window.
        """
        entries = list(self._entries)
        if len(entries) < 2:
            return None
        recent = entries[-TREND_WINDOW:]
        older = entries[-2 * TREND_WINDOW:-TREND_WINDOW]
        if not older:
            return None

        avg_recent = mean(b.dyslexia_risk_score for b in recent)
        avg_older = mean(b.dyslexia_risk_score for b in older)
        if avg_recent < avg_older:
            trend = "improving"
        elif avg_recent > avg_older:
            trend = "worsening"
        else:
            trend = "stable"
        return TrendAnalysis(trend, avg_recent, avg_older, avg_older - avg_recent)
