"""Pytest fixtures for credit density tests."""

import pytest
import numpy as np
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from credit_density import (
    DensityConfig,
    DensityEngine,
    Loan,
    Portfolio,
    PortfolioParameters,
)


@pytest.fixture
def sample_parameters():
    """Parameters of the reference homogeneous portfolio."""
    return PortfolioParameters(
        lambda_=0.05,
        q=0.05,
        num_u=128,
        pd=0.02,
        num_loans=100000.0,
        volatility=0.5
    )


@pytest.fixture
def sample_body():
    """JSON body of the reference request."""
    return ('{"lambda":0.05,"q":0.05,"numU":128,"pd":0.02,'
            '"numLoans":100000,"volatility":0.5}')


@pytest.fixture
def sample_loan():
    """A block of 1000 unit loans loading on one mixing state."""
    return Loan(balance=1.0, pd=0.02, lgd=1.0, weight=(1.0,), num=1000.0)


@pytest.fixture
def two_block_portfolio():
    """A portfolio of two loan blocks with different risk."""
    return Portfolio([
        Loan(balance=1.0, pd=0.01, lgd=0.5, weight=(1.0,), num=500.0),
        Loan(balance=2.0, pd=0.03, lgd=0.4, weight=(1.0,), lgd_variance=0.2, num=300.0),
    ], name="TwoBlocks")


@pytest.fixture
def serial_config():
    """Single-threaded config."""
    return DensityConfig(num_workers=1)


@pytest.fixture
def density_engine(serial_config):
    """Engine running on one thread."""
    return DensityEngine(serial_config)


@pytest.fixture
def normal_cf():
    """Sampler of the N(-5, 1) characteristic function at complex frequencies."""
    mu, sigma = -5.0, 1.0

    def _cf(u: np.ndarray) -> np.ndarray:
        return np.exp(u * mu + 0.5 * u * u * sigma * sigma)

    return _cf
