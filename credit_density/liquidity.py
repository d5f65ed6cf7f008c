"""Liquidity-risk adjustment of the loss transform.

A portfolio loss L triggers forced sales whose count is Poisson with
intensity q * L, each costing lambda.  Conditioning on L, the transform of
the liquidity-adjusted loss is the loss transform evaluated at the shifted
frequency

    u - (exp(-u * lambda) - 1) * q
"""

from dataclasses import dataclass
import numpy as np


@dataclass(frozen=True)
class LiquidityRiskTransform:
    """Frequency shift modeling the cost of liquidating defaulted positions.

    Attributes:
        lambda_: Cost of one liquidation event, in loss units
        q: Liquidation intensity per unit of loss
    """
    lambda_: float
    q: float

    def __call__(self, u: np.ndarray) -> np.ndarray:
        u = np.asarray(u)
        with np.errstate(invalid='ignore', over='ignore'):
            return u - (np.exp(-u * self.lambda_) - 1.0) * self.q

    @classmethod
    def from_loss_bounds(cls, lambda_: float, q: float, x_min: float) -> "LiquidityRiskTransform":
        """Rescale portfolio-level liquidity parameters to the loss axis.

        ``lambda_`` is expressed as a fraction of the loss range and ``q``
        per unit of loss range; both are converted using ``x_min``.  A zero
        ``x_min`` gives non-finite parameters rather than an error.
        """
        x_min = np.float64(x_min)
        with np.errstate(divide='ignore', invalid='ignore'):
            q_adjusted = float(-q / x_min)
            lambda_adjusted = float(-lambda_ * x_min)
        return cls(lambda_=lambda_adjusted, q=q_adjusted)
