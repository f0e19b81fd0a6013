"""Lender comparison: the same deal financed at different rates, points and fees.

Each quote re-runs the engine on a copy of the deal. Lender fees are not part
of the deal assumptions, so they are layered on top of the engine's figures.
"""

from dataclasses import replace
from decimal import Decimal

from flipcalc.models.assumptions import DealAssumptions
from flipcalc.models.results import LenderComparison, LenderQuote, LenderScenario
from flipcalc.engine.economics import compute_deal_economics

ONE_POINT = Decimal("1")
ONE_PERCENT = Decimal("1")


def default_lender_scenarios(assumptions: DealAssumptions) -> list[LenderScenario]:
    """Two starting quotes: the deal's own terms, and higher rate for fewer points."""
    return [
        LenderScenario(
            name="Lender A",
            interest_rate_pct=assumptions.interest_rate_pct,
            points_pct=assumptions.origination_points_pct,
            lender_fees=Decimal("500"),
        ),
        LenderScenario(
            name="Lender B",
            interest_rate_pct=assumptions.interest_rate_pct + ONE_PERCENT,
            points_pct=max(Decimal("0"), assumptions.origination_points_pct - ONE_POINT),
            lender_fees=Decimal("750"),
        ),
    ]


def quote_lender(assumptions: DealAssumptions, scenario: LenderScenario) -> LenderQuote:
    results = compute_deal_economics(replace(
        assumptions,
        interest_rate_pct=scenario.interest_rate_pct,
        origination_points_pct=scenario.points_pct,
    ))
    fees = scenario.lender_fees
    return LenderQuote(
        name=scenario.name,
        interest_rate_pct=scenario.interest_rate_pct,
        points_pct=scenario.points_pct,
        lender_fees=fees,
        loan_amount=results.total_loan_amount,
        points_cost=results.total_origination_points,
        monthly_payment=results.monthly_loan_payment,
        total_interest=results.total_loan_interest,
        upfront_costs=results.total_origination_points + fees,
        total_financing_cost=results.total_financing_costs + fees,
        cash_needed=results.total_cash_needed + fees,
        net_profit=results.net_profit - fees,
    )


def compare_lenders(
    assumptions: DealAssumptions,
    scenarios: list[LenderScenario] | None = None,
) -> LenderComparison:
    """Quote every scenario and flag the cheapest and most profitable.

    Ties go to the scenario listed last.
    """
    if scenarios is None:
        scenarios = default_lender_scenarios(assumptions)
    quotes = [quote_lender(assumptions, s) for s in scenarios]
    if not quotes:
        return LenderComparison()

    return LenderComparison(
        quotes=quotes,
        best_profit=max(reversed(quotes), key=lambda q: q.net_profit).name,
        lowest_upfront=min(reversed(quotes), key=lambda q: q.upfront_costs).name,
        lowest_total_cost=min(reversed(quotes), key=lambda q: q.total_financing_cost).name,
    )
