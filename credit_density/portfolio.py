"""Loan and portfolio data structures for credit loss density estimation."""

from dataclasses import dataclass, field
from typing import Iterator, List, Sequence, Tuple


@dataclass(frozen=True)
class Loan:
    """A homogeneous block of loans in the portfolio.

    Attributes:
        balance: Exposure of one loan in the block
        pd: Probability of default of one loan
        lgd: Mean loss given default (fraction of balance)
        weight: Loadings on the systemic mixing states
        r: Recovery correlation parameter (not used by the transforms)
        lgd_variance: Relative variance of the loss given default
        num: Number of statistically identical loans this record stands for
    """
    balance: float
    pd: float
    lgd: float
    weight: Tuple[float, ...] = field(default=(1.0,))
    r: float = 0.0
    lgd_variance: float = 0.0
    num: float = 1.0

    def __post_init__(self):
        object.__setattr__(self, "weight", tuple(float(w) for w in self.weight))
        if len(self.weight) == 0:
            raise ValueError("Loan must load on at least one mixing state")

    @property
    def num_mixing_states(self) -> int:
        """Number of systemic mixing states the loan loads on."""
        return len(self.weight)

    @property
    def exposure(self) -> float:
        """Loss amount of one loan on default."""
        return self.lgd * self.balance

    @property
    def expected_loss(self) -> float:
        """Expected loss of the whole block."""
        return self.pd * self.exposure * self.num


class Portfolio:
    """Ordered collection of loan blocks sharing the same mixing states."""

    def __init__(self, loans: Sequence[Loan] = (), name: str = "Portfolio"):
        self.name = name
        self._loans: List[Loan] = []
        for loan in loans:
            self.add_loan(loan)

    def add_loan(self, loan: Loan) -> None:
        """Append a loan block to the portfolio."""
        if self._loans and loan.num_mixing_states != self.num_mixing_states:
            raise ValueError(
                f"Loan loads on {loan.num_mixing_states} mixing states, "
                f"portfolio uses {self.num_mixing_states}"
            )
        self._loans.append(loan)

    @property
    def loans(self) -> List[Loan]:
        """Return list of all loan blocks."""
        return list(self._loans)

    @property
    def num_mixing_states(self) -> int:
        """Number of systemic mixing states (1 for an empty portfolio)."""
        if not self._loans:
            return 1
        return self._loans[0].num_mixing_states

    def __len__(self) -> int:
        return len(self._loans)

    def __iter__(self) -> Iterator[Loan]:
        return iter(self._loans)

    @property
    def total_num_loans(self) -> float:
        """Number of individual loans across all blocks."""
        return sum(loan.num for loan in self._loans)

    @property
    def total_expected_loss(self) -> float:
        """Total expected loss across all blocks."""
        return sum(loan.expected_loss for loan in self._loans)
