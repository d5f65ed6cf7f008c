#!/usr/bin/env python3
"""Example usage of the credit loss density model.

This script demonstrates:
1. Handling a JSON density request
2. Computing the density of a homogeneous portfolio directly
3. Tail risk measures from the cosine expansion
4. A heterogeneous portfolio with Gamma-distributed loss given default
"""

import json
import logging
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from credit_density import (
    DensityConfig,
    DensityEngine,
    Loan,
    Portfolio,
    PortfolioParameters,
    RiskCalculator,
    compute_x_min,
    create_lgd_transform,
    create_risk_report,
    gamma_mgf,
    handle_request,
)


def create_sample_portfolio() -> Portfolio:
    """Create a portfolio of three loan blocks on one systemic factor."""
    portfolio = Portfolio(name="Sample Portfolio")

    blocks_data = [
        {"balance": 1.0, "pd": 0.010, "lgd": 0.45, "lgd_variance": 0.10, "num": 5000},
        {"balance": 2.5, "pd": 0.025, "lgd": 0.60, "lgd_variance": 0.25, "num": 1500},
        {"balance": 10.0, "pd": 0.004, "lgd": 0.35, "lgd_variance": 0.05, "num": 200},
    ]

    for data in blocks_data:
        portfolio.add_loan(Loan(weight=(1.0,), **data))

    return portfolio


def main():
    """Run the credit loss density example."""
    logging.basicConfig(level=logging.INFO,
                        format="%(asctime)s %(name)s %(levelname)s %(message)s")

    print("=" * 70)
    print("CREDIT LOSS DENSITY MODEL - EXAMPLE")
    print("=" * 70)

    config = DensityConfig.from_env()

    print("\n1. Handling a JSON request...")
    body = json.dumps({"lambda": 0.05, "q": 0.05, "numU": 128, "pd": 0.02,
                       "numLoans": 100000, "volatility": 0.5})
    response = handle_request(body, config)
    payload = response.json()
    print(f"   Status: {response.status_code}")
    print(f"   Points returned: {len(payload)}")
    print(f"   First point: {payload[0]}")

    bad = handle_request('{"lambda": 0.05}', config)
    print(f"   Invalid request status: {bad.status_code}, body: {bad.body}")

    print("\n2. Computing the density directly...")
    parameters = PortfolioParameters.model_validate_json(body)
    engine = DensityEngine(config)
    result = engine.compute(parameters)
    mode = result.at_point[result.density.argmax()]
    print(f"   Loss range: [{result.x_min:,.0f}, {result.x_max:,.0f}]")
    print(f"   Expected Loss (moments): {result.expected_loss:,.1f}")
    print(f"   Loss Std Dev (moments): {result.loss_std:,.1f}")
    print(f"   Most likely loss: {-mode:,.1f}")

    print("\n3. Tail risk measures...")
    calculator = RiskCalculator.from_result(result)
    measures = calculator.calculate_all_risk_measures()
    report = create_risk_report(measures, num_loans=parameters.num_loans)
    print(report.to_string(index=False))

    print("\n4. Heterogeneous portfolio with stochastic LGD...")
    portfolio = create_sample_portfolio()
    print(f"   Portfolio: {portfolio.name}")
    print(f"   Loan blocks: {len(portfolio)}, loans: {portfolio.total_num_loans:,.0f}")
    print(f"   Total Expected Loss: {portfolio.total_expected_loss:,.1f}")

    x_min = compute_x_min(portfolio.total_expected_loss, 1.0, 0.4)
    stochastic = DensityEngine(config, lgd_transform=create_lgd_transform('gamma'))
    constant = DensityEngine(config, lgd_transform=create_lgd_transform('constant'))
    mixing = gamma_mgf(0.4 ** 2)

    for label, lgd_engine in (("constant", constant), ("gamma", stochastic)):
        lgd_result = lgd_engine.estimate(portfolio, x_min, 256, mixing)
        m = RiskCalculator.from_result(lgd_result).calculate_risk_measures(0.999)
        print(f"   {label:>8} LGD: EL = {m.expected_loss:,.1f}, "
              f"VaR(99.9%) = {m.value_at_risk:,.1f}, ES(99.9%) = {m.expected_shortfall:,.1f}")

    print("\n" + "=" * 70)


if __name__ == "__main__":
    main()
