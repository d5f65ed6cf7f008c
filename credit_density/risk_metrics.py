"""Value at risk, expected shortfall and economic capital from the cosine expansion.

Losses are represented as non-positive values X, so the loss tail is the
left tail of X.  For a confidence level c with tail probability
alpha = 1 - c:

    VaR = -x*          where P(X <= x*) = alpha
    ES  = -E[X; X <= x*] / alpha
    EC  = VaR - E[loss]
"""

from typing import List, Optional, Sequence, TYPE_CHECKING
from dataclasses import dataclass
import numpy as np
import pandas as pd
from scipy.optimize import brentq

from .density import get_cdf, get_partial_expectation

if TYPE_CHECKING:
    from .engine import DensityResult


@dataclass
class RiskMeasures:
    """Tail risk measures of the portfolio loss at one confidence level.

    Attributes:
        confidence: Confidence level (e.g. 0.99)
        expected_loss: Mean portfolio loss
        value_at_risk: Loss quantile at the confidence level
        expected_shortfall: Mean loss beyond the value at risk
        economic_capital: Value at risk in excess of the expected loss
    """
    confidence: float
    expected_loss: float
    value_at_risk: float
    expected_shortfall: float
    economic_capital: float


class RiskCalculator:
    """Calculate tail risk measures from a sampled characteristic function."""

    def __init__(self, x_min: float, x_max: float, cf: Sequence[complex],
                 xtol: float = 1e-10):
        """Initialize risk calculator.

        Args:
            x_min: Lower truncation bound of the loss axis
            x_max: Upper truncation bound of the loss axis
            cf: Characteristic function at the frequency domain points
            xtol: Absolute tolerance of the quantile search
        """
        self.x_min = x_min
        self.x_max = x_max
        self.cf = np.asarray(cf, dtype=complex)
        self.xtol = xtol

    @classmethod
    def from_result(cls, result: "DensityResult") -> "RiskCalculator":
        """Build a calculator from a computed density."""
        return cls(result.x_min, result.x_max, result.cf)

    def _cdf(self, x: float) -> float:
        return float(get_cdf(self.x_min, self.x_max, [x], self.cf, num_workers=1)[0])

    def _quantile(self, confidence: float) -> float:
        if not 0 < confidence < 1:
            raise ValueError(f"Confidence must be between 0 and 1, got {confidence}")
        alpha = 1.0 - confidence
        try:
            return brentq(lambda x: self._cdf(x) - alpha, self.x_min, self.x_max,
                          xtol=self.xtol)
        except ValueError as exc:
            raise ValueError(
                f"Loss quantile at confidence {confidence} is outside "
                f"[{self.x_min}, {self.x_max}]"
            ) from exc

    def expected_loss(self) -> float:
        """Mean portfolio loss (positive)."""
        return -float(get_partial_expectation(self.x_min, self.x_max, [self.x_max],
                                              self.cf, num_workers=1)[0])

    def value_at_risk(self, confidence: float = 0.99) -> float:
        """Value at Risk at specified confidence level."""
        return -self._quantile(confidence)

    def expected_shortfall(self, confidence: float = 0.99) -> float:
        """Expected Shortfall (CVaR) at specified confidence level."""
        x_star = self._quantile(confidence)
        tail_expectation = get_partial_expectation(self.x_min, self.x_max, [x_star],
                                                   self.cf, num_workers=1)[0]
        return -float(tail_expectation) / (1.0 - confidence)

    def calculate_risk_measures(self, confidence: float = 0.99) -> RiskMeasures:
        """Calculate all tail risk measures at one confidence level.

        Args:
            confidence: Confidence level for VaR/ES

        Returns:
            RiskMeasures
        """
        x_star = self._quantile(confidence)
        tail_expectation = get_partial_expectation(self.x_min, self.x_max, [x_star],
                                                   self.cf, num_workers=1)[0]
        expected_loss = self.expected_loss()
        value_at_risk = -x_star
        return RiskMeasures(
            confidence=confidence,
            expected_loss=expected_loss,
            value_at_risk=value_at_risk,
            expected_shortfall=-float(tail_expectation) / (1.0 - confidence),
            economic_capital=value_at_risk - expected_loss
        )

    def calculate_all_risk_measures(self, confidences: Sequence[float] = (0.95, 0.99, 0.999)
                                    ) -> List[RiskMeasures]:
        """Calculate tail risk measures at several confidence levels."""
        return [self.calculate_risk_measures(c) for c in confidences]


def create_risk_report(measures: List[RiskMeasures],
                       num_loans: Optional[float] = None) -> pd.DataFrame:
    """Create a DataFrame report of tail risk measures.

    Args:
        measures: List of RiskMeasures
        num_loans: Optional portfolio size for per-loan rates

    Returns:
        DataFrame with one row per confidence level
    """
    data = []
    for m in measures:
        row = {
            'Confidence': m.confidence,
            'Expected_Loss': m.expected_loss,
            'VaR': m.value_at_risk,
            'ES': m.expected_shortfall,
            'Economic_Capital': m.economic_capital,
        }
        if num_loans:
            row['EC_Rate'] = m.economic_capital / num_loans
        data.append(row)

    df = pd.DataFrame(data)
    if not df.empty:
        df = df.sort_values('Confidence')
    return df
