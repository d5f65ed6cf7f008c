"""Tests for risk_metrics.py - VaR, expected shortfall and economic capital."""

import pytest
import numpy as np
import pandas as pd
from scipy.stats import norm

from credit_density import (
    RiskCalculator,
    RiskMeasures,
    create_risk_report,
    get_u_domain,
)

X_MIN, X_MAX = -15.0, 5.0


@pytest.fixture
def normal_calculator(normal_cf):
    """Calculator for N(-5, 1), i.e. a loss with mean 5 and unit variance."""
    cf = normal_cf(get_u_domain(256, X_MIN, X_MAX).to_array())
    return RiskCalculator(X_MIN, X_MAX, cf)


class TestRiskCalculator:
    """Tests for RiskCalculator class."""

    def test_create_risk_calculator(self):
        """Test creating a risk calculator."""
        calc = RiskCalculator(-10.0, 0.0, [1.0])
        assert calc.x_min == -10.0
        assert calc.cf.dtype == complex

    def test_expected_loss(self, normal_calculator):
        """Test the mean loss of the normal case."""
        assert normal_calculator.expected_loss() == pytest.approx(5.0, abs=1e-7)

    def test_value_at_risk(self, normal_calculator):
        """Test VaR against the normal quantile."""
        expected = 5.0 + norm.ppf(0.99)
        assert normal_calculator.value_at_risk(0.99) == pytest.approx(expected, rel=1e-5)

    def test_expected_shortfall(self, normal_calculator):
        """Test ES = mu + phi(z) / alpha for a normal loss."""
        z = norm.ppf(0.99)
        expected = 5.0 + norm.pdf(z) / 0.01
        assert normal_calculator.expected_shortfall(0.99) == pytest.approx(expected, rel=1e-5)

    def test_calculate_risk_measures(self, normal_calculator):
        """Test the combined measures at one confidence level."""
        measures = normal_calculator.calculate_risk_measures(0.99)
        assert isinstance(measures, RiskMeasures)
        assert measures.confidence == 0.99
        assert measures.economic_capital == pytest.approx(norm.ppf(0.99), rel=1e-5)
        assert measures.value_at_risk == pytest.approx(normal_calculator.value_at_risk(0.99))
        assert measures.expected_shortfall == pytest.approx(
            normal_calculator.expected_shortfall(0.99)
        )

    def test_measures_increase_with_confidence(self, normal_calculator):
        """Test that VaR and ES grow with the confidence level."""
        measures = normal_calculator.calculate_all_risk_measures()
        assert [m.confidence for m in measures] == [0.95, 0.99, 0.999]
        vars_ = [m.value_at_risk for m in measures]
        assert vars_ == sorted(vars_)
        assert all(m.expected_shortfall >= m.value_at_risk for m in measures)

    def test_invalid_confidence(self, normal_calculator):
        """Test that confidence must lie strictly inside (0, 1)."""
        for confidence in (0.0, 1.0, 1.5):
            with pytest.raises(ValueError, match="Confidence"):
                normal_calculator.value_at_risk(confidence)

    def test_quantile_outside_bounds(self):
        """Test the error when the truncation interval misses the quantile."""
        calc = RiskCalculator(-4.0, 0.0, [0j])
        with pytest.raises(ValueError, match="outside"):
            calc.value_at_risk(0.99)

    def test_reference_portfolio(self, density_engine, sample_parameters):
        """Test that measures on the reference portfolio are ordered sensibly."""
        result = density_engine.compute(sample_parameters)
        measures = RiskCalculator.from_result(result).calculate_risk_measures(0.99)

        # Expected loss should be close to the moment
        assert measures.expected_loss == pytest.approx(result.expected_loss, rel=1e-2)
        # VaR should be greater than expected loss
        assert measures.value_at_risk > measures.expected_loss
        # ES should be greater than VaR
        assert measures.expected_shortfall >= measures.value_at_risk
        # VaR stays inside the loss range
        assert measures.value_at_risk < -result.x_min
        assert measures.economic_capital > 0


class TestRiskReport:
    """Tests for create_risk_report."""

    @pytest.fixture
    def sample_measures(self):
        """Measures in unsorted confidence order."""
        return [
            RiskMeasures(confidence=0.999, expected_loss=10.0, value_at_risk=40.0,
                         expected_shortfall=45.0, economic_capital=30.0),
            RiskMeasures(confidence=0.95, expected_loss=10.0, value_at_risk=20.0,
                         expected_shortfall=25.0, economic_capital=10.0),
        ]

    def test_create_risk_report(self, sample_measures):
        """Test report columns."""
        df = create_risk_report(sample_measures)
        assert isinstance(df, pd.DataFrame)
        assert list(df.columns) == ['Confidence', 'Expected_Loss', 'VaR', 'ES',
                                    'Economic_Capital']
        assert len(df) == 2

    def test_create_risk_report_sorted(self, sample_measures):
        """Test that rows are sorted by confidence."""
        df = create_risk_report(sample_measures)
        assert df['Confidence'].is_monotonic_increasing
        assert df.iloc[0]['VaR'] == 20.0

    def test_create_risk_report_rates(self, sample_measures):
        """Test economic capital per loan."""
        df = create_risk_report(sample_measures, num_loans=100.0)
        assert np.allclose(df['EC_Rate'], [0.1, 0.3])

    def test_create_risk_report_empty(self):
        """Test that no measures give an empty report."""
        assert create_risk_report([]).empty
