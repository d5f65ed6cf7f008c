"""Tests for portfolio.py - Loan and Portfolio classes."""

import dataclasses

import pytest

from credit_density import Loan, Portfolio


class TestLoan:
    """Tests for the Loan class."""

    def test_create_loan(self, sample_loan):
        """Test creating a valid loan block."""
        assert sample_loan.balance == 1.0
        assert sample_loan.pd == 0.02
        assert sample_loan.lgd == 1.0
        assert sample_loan.weight == (1.0,)
        assert sample_loan.num == 1000.0

    def test_defaults(self):
        """Test default field values."""
        loan = Loan(balance=1.0, pd=0.01, lgd=0.5)
        assert loan.weight == (1.0,)
        assert loan.r == 0.0
        assert loan.lgd_variance == 0.0
        assert loan.num == 1.0

    def test_weight_converted_to_tuple(self):
        """Test that list loadings are stored as a tuple of floats."""
        loan = Loan(balance=1.0, pd=0.01, lgd=0.5, weight=[1, 0.5])
        assert loan.weight == (1.0, 0.5)
        assert loan.num_mixing_states == 2

    def test_empty_weight(self):
        """Test that a loan without loadings raises error."""
        with pytest.raises(ValueError, match="at least one mixing state"):
            Loan(balance=1.0, pd=0.01, lgd=0.5, weight=())

    def test_immutable(self, sample_loan):
        """Test that loans cannot be modified."""
        with pytest.raises(dataclasses.FrozenInstanceError):
            sample_loan.pd = 0.5

    def test_exposure(self):
        """Test loss amount on default."""
        loan = Loan(balance=2.0, pd=0.01, lgd=0.4)
        assert loan.exposure == pytest.approx(0.8)

    def test_expected_loss(self):
        """Test expected loss of the block."""
        loan = Loan(balance=2.0, pd=0.01, lgd=0.4, num=100.0)
        assert loan.expected_loss == pytest.approx(0.8)

    def test_degenerate_values_accepted(self):
        """Test that numeric ranges are not validated."""
        loan = Loan(balance=1.0, pd=0.0, lgd=1.0, num=0.0)
        assert loan.expected_loss == 0.0


class TestPortfolio:
    """Tests for the Portfolio class."""

    def test_create_empty_portfolio(self):
        """Test creating an empty portfolio."""
        portfolio = Portfolio(name="Empty")
        assert len(portfolio) == 0
        assert portfolio.name == "Empty"
        assert portfolio.num_mixing_states == 1

    def test_add_loan(self, sample_loan):
        """Test adding loan blocks."""
        portfolio = Portfolio()
        portfolio.add_loan(sample_loan)
        assert len(portfolio) == 1
        assert portfolio.loans == [sample_loan]

    def test_order_preserved(self, two_block_portfolio):
        """Test that iteration follows insertion order."""
        pds = [loan.pd for loan in two_block_portfolio]
        assert pds == [0.01, 0.03]

    def test_mismatched_mixing_states(self, sample_loan):
        """Test that blocks must share the number of mixing states."""
        portfolio = Portfolio([sample_loan])
        with pytest.raises(ValueError, match="mixing states"):
            portfolio.add_loan(Loan(balance=1.0, pd=0.01, lgd=0.5, weight=(0.5, 0.5)))

    def test_total_num_loans(self, two_block_portfolio):
        """Test number of individual loans."""
        assert two_block_portfolio.total_num_loans == 800.0

    def test_total_expected_loss(self, two_block_portfolio):
        """Test total expected loss."""
        expected = 0.01 * 0.5 * 1.0 * 500 + 0.03 * 0.4 * 2.0 * 300
        assert two_block_portfolio.total_expected_loss == pytest.approx(expected)

    def test_loans_returns_copy(self, two_block_portfolio):
        """Test that the loans list cannot mutate the portfolio."""
        loans = two_block_portfolio.loans
        loans.clear()
        assert len(two_block_portfolio) == 2
