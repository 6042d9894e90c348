"""Exception types raised by the screening core."""
from __future__ import annotations


class GazeRiskError(Exception):
    """Base class for all errors raised by gaze_risk."""


class InvalidConfigurationError(GazeRiskError, ValueError):
    """A threshold or weight table is unusable; raised at construction time."""


class AssessmentIncompleteError(GazeRiskError, RuntimeError):
    """The tracking collaborator never delivered a usable sample."""
