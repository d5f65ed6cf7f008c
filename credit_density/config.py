"""Configuration constants and runtime settings for density estimation."""

import os
from dataclasses import dataclass
from typing import Optional

# Output loss grid
NUM_X = 512  # number of loss points in every density response
X_MAX = 0.0  # losses are non-positive, so the upper truncation bound is zero

# Lower truncation bound: x_min = -num_loans * pd * (1 + VOLATILITY_MULTIPLE * vol) * LOSS_RANGE_MULTIPLE
VOLATILITY_MULTIPLE = 3.0
LOSS_RANGE_MULTIPLE = 3.0

# Work splitting
DEFAULT_CHUNK_SIZE = 64


@dataclass(frozen=True)
class DensityConfig:
    """Settings for a density computation.

    Attributes:
        num_x: Number of points in the output loss grid
        x_max: Upper truncation bound of the loss axis
        num_workers: Threads used for parallel evaluation (None = CPU count)
        chunk_size: Number of grid points handled by one unit of work
    """
    num_x: int = NUM_X
    x_max: float = X_MAX
    num_workers: Optional[int] = None
    chunk_size: int = DEFAULT_CHUNK_SIZE

    def __post_init__(self):
        if self.num_x < 0:
            raise ValueError(f"num_x must be non-negative, got {self.num_x}")
        if self.num_workers is not None and self.num_workers < 1:
            raise ValueError(f"num_workers must be at least 1, got {self.num_workers}")
        if self.chunk_size < 1:
            raise ValueError(f"chunk_size must be at least 1, got {self.chunk_size}")

    @classmethod
    def from_env(cls) -> "DensityConfig":
        """Build a config, overriding worker settings from the environment.

        Reads ``CREDIT_DENSITY_NUM_WORKERS`` and ``CREDIT_DENSITY_CHUNK_SIZE``.
        """
        num_workers = os.environ.get("CREDIT_DENSITY_NUM_WORKERS")
        chunk_size = os.environ.get("CREDIT_DENSITY_CHUNK_SIZE")
        return cls(
            num_workers=int(num_workers) if num_workers else None,
            chunk_size=int(chunk_size) if chunk_size else DEFAULT_CHUNK_SIZE,
        )


def compute_x_min(num_loans: float, pd: float, volatility: float) -> float:
    """Lower truncation bound of the loss axis for a portfolio.

    Covers the expected number of defaults stressed by a multiple of the
    systemic volatility, with a safety multiple on top.
    """
    return -num_loans * (pd * (1.0 + volatility * VOLATILITY_MULTIPLE) * LOSS_RANGE_MULTIPLE)
