"""Stream smoothing strategy implementations."""

from ..config import SmoothingConfig
from .base import IStreamSmoother
from .no_noise import NoSmoothing
from .moving_average import MovingAverageSmoother
from .exponential import ExponentialSmoother


def create_smoother(cfg: SmoothingConfig) -> IStreamSmoother:
    """Factory for smoothing strategies."""
    if cfg.mode == "moving_average":
        return MovingAverageSmoother(cfg.window_samples)
    if cfg.mode == "exponential":
        return ExponentialSmoother(cfg.alpha)
    return NoSmoothing()


__all__ = [
    "IStreamSmoother",
    "NoSmoothing",
    "MovingAverageSmoother",
    "ExponentialSmoother",
    "create_smoother",
]
