"""Systemic mixing over a Gamma-distributed risk factor.

Conditional on the systemic factor Y_w, the portfolio log characteristic
function is linear in Y_w: log phi(u | Y) = sum_w Y_w * s_w(u).  With Y_w
Gamma distributed with mean 1 and variance v, integrating Y_w out uses its
moment generating function

    E[exp(Y_w * s_w)] = (1 - v * s_w) ** (-1 / v)
                      = exp(-log(1 - v * s_w) / v)

As v -> 0 the factor is fixed at 1 and the limit is exp(s_w).
"""

from dataclasses import dataclass
import numpy as np


@dataclass(frozen=True)
class GammaMGF:
    """Moment generating function of mean-one Gamma mixing factors.

    Attributes:
        variance: Variance of each mixing factor (squared volatility)
    """
    variance: float

    def __call__(self, log_values: np.ndarray) -> np.ndarray:
        """Integrate the mixing factors out of conditional log values.

        Args:
            log_values: Complex array whose last axis holds the conditional
                log characteristic function per mixing state

        Returns:
            Characteristic function values, one per leading index (a scalar
            for a one-dimensional input)
        """
        s = np.asarray(log_values, dtype=complex)
        with np.errstate(divide='ignore', invalid='ignore', over='ignore'):
            if self.variance == 0:
                return np.exp(np.sum(s, axis=-1))
            exponent = -np.log(1.0 - self.variance * s) / self.variance
            return np.exp(np.sum(exponent, axis=-1))

    def expectation(self, num_w: int = 1) -> np.ndarray:
        """Mean of each mixing factor."""
        return np.ones(num_w)

    def factor_variance(self, num_w: int = 1) -> np.ndarray:
        """Variance of each mixing factor."""
        return np.full(num_w, float(self.variance))


def gamma_mgf(variance: float) -> GammaMGF:
    """Gamma mixing transform for the given factor variance."""
    return GammaMGF(variance=variance)
