"""Per-loan log characteristic function.

Conditional on the systemic factor, defaults are approximated as Poisson
events with intensity pd, so a single loan contributes

    log E[exp(-u * L_loan)] = pd * (lgd_cf(liquidity(u), lgd * balance, lgd_variance) - 1)

to the portfolio log characteristic function, per unit of systemic loading.
"""

from dataclasses import dataclass
from typing import Callable, Optional
import numpy as np

from .lgd_distribution import LGDTransform, ConstantLGDTransform
from .portfolio import Loan


def _identity(u: np.ndarray) -> np.ndarray:
    return u


@dataclass(frozen=True)
class LogLoanCharacteristicFunction:
    """Log characteristic function of one loan's loss.

    Attributes:
        lgd_transform: Transform of the loss on default
        liquidity_transform: Frequency shift applied before the LGD transform;
            evaluated once per loan per frequency sample
    """
    lgd_transform: LGDTransform
    liquidity_transform: Callable[[np.ndarray], np.ndarray] = _identity

    def __call__(self, u: np.ndarray, loan: Loan) -> np.ndarray:
        """Evaluate the loan's log contribution at frequencies ``u``.

        Args:
            u: Complex frequencies
            loan: The loan block (only one loan's contribution is returned)

        Returns:
            Complex array with the shape of ``u``
        """
        shifted = self.liquidity_transform(np.asarray(u))
        with np.errstate(invalid='ignore', over='ignore'):
            lgd_cf = self.lgd_transform(shifted, loan.exposure, loan.lgd_variance)
            return (lgd_cf - 1.0) * loan.pd


def get_log_loan_cf(lgd_transform: Optional[LGDTransform] = None,
                    liquidity_transform: Optional[Callable[[np.ndarray], np.ndarray]] = None
                    ) -> LogLoanCharacteristicFunction:
    """Build the per-loan log characteristic function.

    Args:
        lgd_transform: LGD transform (defaults to a deterministic loss)
        liquidity_transform: Frequency shift (defaults to none)

    Returns:
        LogLoanCharacteristicFunction
    """
    if lgd_transform is None:
        lgd_transform = ConstantLGDTransform()
    if liquidity_transform is None:
        liquidity_transform = _identity
    return LogLoanCharacteristicFunction(lgd_transform, liquidity_transform)
