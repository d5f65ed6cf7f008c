"""Portfolio aggregation of per-loan transforms in log space.

The conditional characteristic function of the portfolio loss is the product
of the loans' characteristic functions.  It is accumulated as a sum of log
contributions instead, which turns a block of ``num`` identical loans into a
single multiplication and keeps large portfolios within floating-point
range:

    cf[k, w] = sum_loans log_loan_cf(u_k, loan) * weight_w * num

The systemic mixing transform is applied once, after all loans have been
processed.
"""

import logging
from typing import Callable, Optional, Sequence, Union
import numpy as np

from .config import DEFAULT_CHUNK_SIZE
from .grid import FrequencyDomain
from .parallel import parallel_fill
from .portfolio import Loan

logger = logging.getLogger(__name__)

LogLoanCF = Callable[[np.ndarray, Loan], np.ndarray]
MixingTransform = Callable[[np.ndarray], np.ndarray]


def _as_frequency_array(u_domain: Union[FrequencyDomain, Sequence[complex], np.ndarray]) -> np.ndarray:
    if isinstance(u_domain, FrequencyDomain):
        return u_domain.to_array()
    return np.asarray(u_domain, dtype=complex)


class EconomicCapitalAttributes:
    """Running log characteristic function of a portfolio.

    Holds one complex log value per (frequency sample, mixing state), plus
    the per-mixing-state expected loss and loss variance of the loans
    processed so far.

    Attributes:
        num_u: Number of frequency samples
        num_w: Number of systemic mixing states
        cf: Accumulated log values, shape (num_u, num_w)
        el_vec: Expected loss per unit of each mixing factor
        var_vec: Conditional loss variance per unit of each mixing factor
    """

    def __init__(self, num_u: int, num_w: int = 1,
                 chunk_size: int = DEFAULT_CHUNK_SIZE,
                 num_workers: Optional[int] = None):
        """Initialize an empty accumulator (characteristic function of 1).

        Args:
            num_u: Number of frequency samples
            num_w: Number of systemic mixing states
            chunk_size: Frequency samples per unit of parallel work
            num_workers: Threads used for evaluation (None = CPU count)
        """
        if num_w < 1:
            raise ValueError(f"num_w must be at least 1, got {num_w}")
        self.num_u = num_u
        self.num_w = num_w
        self.chunk_size = chunk_size
        self.num_workers = num_workers
        self.cf = np.zeros((num_u, num_w), dtype=complex)
        self.el_vec = np.zeros(num_w)
        self.var_vec = np.zeros(num_w)
        self.num_processed = 0

    def process_loan(self, loan: Loan, u_domain: Union[FrequencyDomain, Sequence[complex], np.ndarray],
                     log_loan_cf: LogLoanCF) -> None:
        """Add a loan block's log contribution to the accumulator in place.

        Args:
            loan: The loan block
            u_domain: Frequency samples aligned with the accumulator rows
            log_loan_cf: Per-loan log characteristic function
        """
        u = _as_frequency_array(u_domain)
        if u.shape[0] != self.num_u:
            raise ValueError(
                f"Frequency domain has {u.shape[0]} points, accumulator expects {self.num_u}"
            )
        if loan.num_mixing_states != self.num_w:
            raise ValueError(
                f"Loan loads on {loan.num_mixing_states} mixing states, "
                f"accumulator has {self.num_w}"
            )

        per_loan = np.empty(self.num_u, dtype=complex)
        parallel_fill(per_loan, lambda chunk: log_loan_cf(u[chunk], loan),
                      self.chunk_size, self.num_workers)

        scale = np.asarray(loan.weight) * loan.num
        with np.errstate(invalid='ignore', over='ignore'):
            self.cf += per_loan[:, np.newaxis] * scale[np.newaxis, :]

        self.el_vec += loan.pd * loan.exposure * scale
        self.var_vec += loan.pd * loan.exposure ** 2 * (1.0 + loan.lgd_variance) * scale
        self.num_processed += 1

    def get_full_cf(self, mixing_mgf: MixingTransform) -> np.ndarray:
        """Apply the systemic mixing transform to every frequency sample.

        Args:
            mixing_mgf: Maps an array whose last axis holds the per-mixing-state
                log values to characteristic function values

        Returns:
            Complex array of length num_u aligned with the frequency domain
        """
        logger.debug("Mixing %d frequency samples over %d states after %d loans",
                     self.num_u, self.num_w, self.num_processed)
        full_cf = np.empty(self.num_u, dtype=complex)
        return parallel_fill(full_cf, lambda chunk: mixing_mgf(self.cf[chunk]),
                             self.chunk_size, self.num_workers)

    def get_portfolio_expectation(self, systemic_expectation: Sequence[float]) -> float:
        """Expected portfolio loss (positive), before liquidity adjustment.

        Args:
            systemic_expectation: Mean of each mixing factor
        """
        return float(np.dot(self.el_vec, np.asarray(systemic_expectation, dtype=float)))

    def get_portfolio_variance(self, systemic_expectation: Sequence[float],
                               systemic_variance: Sequence[float]) -> float:
        """Portfolio loss variance, before liquidity adjustment.

        Var[L] = E[Var[L | Y]] + Var[E[L | Y]] with independent mixing factors.

        Args:
            systemic_expectation: Mean of each mixing factor
            systemic_variance: Variance of each mixing factor
        """
        expectation = np.asarray(systemic_expectation, dtype=float)
        variance = np.asarray(systemic_variance, dtype=float)
        with np.errstate(invalid='ignore', over='ignore'):
            return float(np.dot(self.var_vec, expectation) + np.dot(self.el_vec ** 2, variance))
