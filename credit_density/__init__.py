"""Characteristic-function model for credit portfolio loss densities.

This package estimates the density of aggregate credit loss by combining
per-loan characteristic functions in log space, integrating out a Gamma
systemic factor and inverting with a Fourier-cosine expansion.

Main components:
- grid: Frequency and loss-value grids
- lgd_distribution, liquidity, model: Per-loan loss transforms
- aggregation: Log-space portfolio accumulator
- mixing: Systemic factor moment generating function
- density: Cosine-series inversion
- engine: End-to-end density estimation
- risk_metrics: VaR, expected shortfall and economic capital
- handler: JSON request boundary
"""

from .config import DensityConfig, NUM_X, X_MAX, compute_x_min
from .grid import FrequencyDomain, ValueDomain, get_u_domain, get_x_domain
from .portfolio import Loan, Portfolio
from .lgd_distribution import (
    LGDTransform,
    ConstantLGDTransform,
    GammaLGDTransform,
    create_lgd_transform
)
from .liquidity import LiquidityRiskTransform
from .model import LogLoanCharacteristicFunction, get_log_loan_cf
from .mixing import GammaMGF, gamma_mgf
from .aggregation import EconomicCapitalAttributes
from .density import compute_density, get_cdf, get_density, get_partial_expectation
from .schemas import (
    DensityElement,
    InvalidParametersError,
    PortfolioParameters,
    parse_parameters
)
from .engine import DensityEngine, DensityResult, estimate_density
from .risk_metrics import RiskCalculator, RiskMeasures, create_risk_report
from .handler import Response, handle_request

__version__ = "1.0.0"

__all__ = [
    # Config
    "DensityConfig",
    "NUM_X",
    "X_MAX",
    "compute_x_min",
    # Grids
    "FrequencyDomain",
    "ValueDomain",
    "get_u_domain",
    "get_x_domain",
    # Portfolio
    "Loan",
    "Portfolio",
    # Transforms
    "LGDTransform",
    "ConstantLGDTransform",
    "GammaLGDTransform",
    "create_lgd_transform",
    "LiquidityRiskTransform",
    "LogLoanCharacteristicFunction",
    "get_log_loan_cf",
    "GammaMGF",
    "gamma_mgf",
    # Aggregation and inversion
    "EconomicCapitalAttributes",
    "compute_density",
    "get_cdf",
    "get_density",
    "get_partial_expectation",
    # Engine
    "DensityEngine",
    "DensityResult",
    "estimate_density",
    # Risk metrics
    "RiskCalculator",
    "RiskMeasures",
    "create_risk_report",
    # Boundary
    "DensityElement",
    "InvalidParametersError",
    "PortfolioParameters",
    "parse_parameters",
    "Response",
    "handle_request",
]
