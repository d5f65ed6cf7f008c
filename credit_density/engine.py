"""Density estimation engine for credit portfolio loss."""

import logging
import time
from dataclasses import dataclass
from typing import Callable, Iterator, List, Optional, Tuple
import numpy as np
import pandas as pd

from .aggregation import EconomicCapitalAttributes
from .config import DensityConfig, compute_x_min
from .density import compute_density
from .grid import get_u_domain, get_x_domain
from .lgd_distribution import LGDTransform, ConstantLGDTransform
from .liquidity import LiquidityRiskTransform
from .mixing import GammaMGF, gamma_mgf
from .model import get_log_loan_cf
from .portfolio import Loan, Portfolio
from .schemas import DensityElement, PortfolioParameters

logger = logging.getLogger(__name__)


@dataclass
class DensityResult:
    """Loss density of a portfolio on the output grid.

    Attributes:
        density: Density value at each grid point
        at_point: Loss value of each grid point, ascending from x_min to x_max
        x_min: Lower truncation bound of the loss axis
        x_max: Upper truncation bound of the loss axis
        num_u: Number of frequency samples used in the expansion
        cf: Portfolio characteristic function at the frequency samples
        expected_loss: Mean loss implied by the loan moments
        loss_variance: Loss variance implied by the loan moments
    """
    density: np.ndarray
    at_point: np.ndarray
    x_min: float
    x_max: float
    num_u: int
    cf: np.ndarray
    expected_loss: float
    loss_variance: float

    def __len__(self) -> int:
        return len(self.density)

    def __iter__(self) -> Iterator[Tuple[float, float]]:
        """Iterate over (density, at_point) pairs."""
        return zip(self.density.tolist(), self.at_point.tolist())

    @property
    def loss_std(self) -> float:
        """Standard deviation of the portfolio loss."""
        return float(np.sqrt(self.loss_variance))

    def to_elements(self) -> List[DensityElement]:
        """Density points as response elements."""
        return [DensityElement(density=d, at_point=x) for d, x in self]

    def to_records(self) -> List[dict]:
        """Density points as dicts with camelCase keys."""
        return [{'density': d, 'atPoint': x} for d, x in self]

    def to_frame(self) -> pd.DataFrame:
        """Density points as a DataFrame indexed by loss value."""
        return pd.DataFrame({'density': self.density},
                            index=pd.Index(self.at_point, name='at_point'))


class DensityEngine:
    """Characteristic-function engine for portfolio loss densities.

    Folds loan blocks into a log-space accumulator, integrates out the
    systemic factor and inverts the result with a cosine expansion.
    """

    def __init__(self, config: Optional[DensityConfig] = None,
                 lgd_transform: Optional[LGDTransform] = None):
        """Initialize the engine.

        Args:
            config: Grid and worker settings (defaults to DensityConfig())
            lgd_transform: Loss-given-default transform (defaults to a
                deterministic loss)
        """
        self.config = config or DensityConfig()
        self.lgd_transform = lgd_transform or ConstantLGDTransform()

    def estimate(self, portfolio: Portfolio, x_min: float, num_u: int,
                 mixing_mgf: GammaMGF,
                 liquidity_transform: Optional[Callable[[np.ndarray], np.ndarray]] = None
                 ) -> DensityResult:
        """Compute the loss density of a portfolio.

        Args:
            portfolio: The loan blocks
            x_min: Lower truncation bound of the loss axis
            num_u: Number of frequency samples
            mixing_mgf: Transform of the systemic mixing factors
            liquidity_transform: Optional liquidity-risk frequency shift

        Returns:
            DensityResult on a grid of config.num_x points
        """
        config = self.config
        start = time.perf_counter()

        u_domain = get_u_domain(num_u, x_min, config.x_max)
        log_loan_cf = get_log_loan_cf(self.lgd_transform, liquidity_transform)

        attributes = EconomicCapitalAttributes(
            num_u, portfolio.num_mixing_states,
            chunk_size=config.chunk_size, num_workers=config.num_workers
        )
        for loan in portfolio:
            attributes.process_loan(loan, u_domain, log_loan_cf)
        final_cf = attributes.get_full_cf(mixing_mgf)

        x_domain = get_x_domain(config.num_x, x_min, config.x_max)
        density = compute_density(x_min, config.x_max, x_domain, final_cf,
                                  chunk_size=config.chunk_size,
                                  num_workers=config.num_workers)

        num_w = attributes.num_w
        expected_loss = attributes.get_portfolio_expectation(mixing_mgf.expectation(num_w))
        loss_variance = attributes.get_portfolio_variance(
            mixing_mgf.expectation(num_w), mixing_mgf.factor_variance(num_w)
        )

        logger.debug("Density on [%s, %s] with %d frequencies and %d loan blocks in %.3fs",
                     x_min, config.x_max, num_u, len(portfolio),
                     time.perf_counter() - start)

        return DensityResult(
            density=density,
            at_point=x_domain.to_array(),
            x_min=x_min,
            x_max=config.x_max,
            num_u=num_u,
            cf=final_cf,
            expected_loss=expected_loss,
            loss_variance=loss_variance
        )

    def compute(self, parameters: PortfolioParameters) -> DensityResult:
        """Compute the loss density for a homogeneous portfolio.

        The portfolio is a single block of ``num_loans`` unit loans with a
        total loss on default, one Gamma mixing factor with variance
        ``volatility ** 2`` and a liquidity adjustment scaled to the loss axis.

        Args:
            parameters: Portfolio-level request parameters

        Returns:
            DensityResult
        """
        x_min = compute_x_min(parameters.num_loans, parameters.pd, parameters.volatility)
        liquidity_transform = LiquidityRiskTransform.from_loss_bounds(
            parameters.lambda_, parameters.q, x_min
        )
        loan = Loan(
            balance=1.0,
            pd=parameters.pd,
            lgd=1.0,
            weight=(1.0,),
            r=0.0,
            lgd_variance=0.0,
            num=parameters.num_loans
        )
        mixing = gamma_mgf(parameters.volatility ** 2)
        return self.estimate(Portfolio([loan]), x_min, parameters.num_u,
                             mixing, liquidity_transform)


def estimate_density(parameters: PortfolioParameters,
                     config: Optional[DensityConfig] = None) -> DensityResult:
    """Compute the loss density for request parameters with a fresh engine."""
    return DensityEngine(config).compute(parameters)
