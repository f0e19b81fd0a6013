"""Shared deal fixtures.

Worked scenario: $250K purchase, $375K ARV, $45K rehab, hard money at 10%
interest-only with 2 points and 10% down, held 6 months.
Expected: $265,500 loan, $2,212.50/mo, $24,665 profit, $58,585 cash needed.
"""

import pytest

from flipcalc.models.assumptions import (
    DealAssumptions,
    ItemizedClosingCosts,
    ItemizedSellingCosts,
    LoanType,
)


@pytest.fixture
def worked_deal() -> DealAssumptions:
    """The default (reset) deal."""
    return DealAssumptions()


@pytest.fixture
def conventional_deal() -> DealAssumptions:
    """Worked deal on a conventional loan with every hard money toggle on."""
    return DealAssumptions(
        loan_type=LoanType.CONVENTIONAL,
        finance_rehab=True,
        roll_closing_costs=True,
        roll_points=True,
        interest_only=True,
        interest_reserve_months=3,
    )


@pytest.fixture
def cash_deal() -> DealAssumptions:
    return DealAssumptions(loan_type=LoanType.CASH)


@pytest.fixture
def itemized_deal() -> DealAssumptions:
    """Worked deal with itemized purchase closing ($8,250) and selling ($3,650) costs."""
    return DealAssumptions(
        purchase_closing_costs=ItemizedClosingCosts(),
        selling_closing_costs=ItemizedSellingCosts(),
    )
