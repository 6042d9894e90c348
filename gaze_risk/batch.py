# gaze_risk/batch.py
"""
Parallel analysis of recorded gaze sessions.

Each job builds its own ScreeningSession, so no smoothing buffer, anchor or
event list is ever shared between sessions.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence

from joblib import Parallel, delayed

from .config import BiomarkerConfig, SegmenterConfig, SmoothingConfig
from .errors import AssessmentIncompleteError
from .io.session import SessionOutcome, analyze_samples
from .io.tsv import read_gaze_tsv, samples_from_dataframe


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BatchResult:
    """Outcome of one file; ``outcome`` is None when the session failed."""

    path: str
    outcome: Optional[SessionOutcome]
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.outcome is not None


def _analyze_file(
    path: str,
    smoothing_config: Optional[SmoothingConfig],
    segmenter_config: Optional[SegmenterConfig],
    biomarker_config: Optional[BiomarkerConfig],
) -> BatchResult:
    samples = samples_from_dataframe(read_gaze_tsv(path))
    try:
        outcome = analyze_samples(
            samples,
            label=Path(path).stem,
            smoothing_config=smoothing_config,
            segmenter_config=segmenter_config,
            biomarker_config=biomarker_config,
        )
    except AssessmentIncompleteError as e:
        return BatchResult(path=path, outcome=None, error=str(e))
    return BatchResult(path=path, outcome=outcome)


def analyze_files(
    paths: Sequence[str],
    smoothing_config: Optional[SmoothingConfig] = None,
    segmenter_config: Optional[SegmenterConfig] = None,
    biomarker_config: Optional[BiomarkerConfig] = None,
    n_jobs: int = -1,
    backend: str = "loky",
) -> List[BatchResult]:
    """Analyze every file in parallel; results keep the order of ``paths``.

    Sessions without a single usable sample are reported as failed results,
    while unreadable files raise.
    """
    logger.info("Analyzing %d recorded sessions with n_jobs=%s", len(paths), n_jobs)
    results = Parallel(n_jobs=n_jobs, backend=backend)(
        delayed(_analyze_file)(str(p), smoothing_config, segmenter_config, biomarker_config)
        for p in paths
    )
    failed = sum(1 for r in results if not r.ok)
    if failed:
        logger.warning("%d of %d sessions could not be completed", failed, len(results))
    return list(results)
