"""Loan product rules: which financing features each loan type honors.

Cash purchases have no loan. Conventional loans are standard 30-year
amortized products: rehab, closing costs and points are paid out of pocket,
and no interest-only period or interest reserve applies. Hard money loans
honor every toggle on the deal; one with no amortization term is treated as
interest-only.
"""

from dataclasses import dataclass

from flipcalc.models.assumptions import DealAssumptions, LoanType

CONVENTIONAL_TERM_MONTHS = 360


@dataclass(frozen=True)
class LoanCapabilities:
    has_loan: bool
    finance_rehab: bool
    roll_closing_costs: bool
    roll_points: bool
    interest_only: bool
    interest_reserve_months: int
    term_months: int
    capped_by_arv: bool  # Whether the loan-to-ARV cap warning applies


def loan_capabilities(assumptions: DealAssumptions) -> LoanCapabilities:
    """Effective financing features after loan-type overrides."""
    if assumptions.loan_type is LoanType.CASH:
        return LoanCapabilities(
            has_loan=False,
            finance_rehab=False,
            roll_closing_costs=False,
            roll_points=False,
            interest_only=False,
            interest_reserve_months=0,
            term_months=0,
            capped_by_arv=False,
        )

    if assumptions.loan_type is LoanType.CONVENTIONAL:
        return LoanCapabilities(
            has_loan=True,
            finance_rehab=False,
            roll_closing_costs=False,
            roll_points=False,
            interest_only=False,
            interest_reserve_months=0,
            term_months=CONVENTIONAL_TERM_MONTHS,
            capped_by_arv=False,
        )

    return LoanCapabilities(
        has_loan=True,
        finance_rehab=assumptions.finance_rehab,
        roll_closing_costs=assumptions.roll_closing_costs,
        roll_points=assumptions.roll_points,
        interest_only=assumptions.interest_only or assumptions.loan_term_months <= 0,
        interest_reserve_months=max(assumptions.interest_reserve_months, 0),
        term_months=assumptions.loan_term_months,
        capped_by_arv=True,
    )
