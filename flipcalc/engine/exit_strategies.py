"""Flip vs. BRRRR vs. wholesale, side by side."""

from decimal import Decimal

from flipcalc.models.assumptions import DealAssumptions
from flipcalc.models.exit import (
    ExitStrategy,
    ExitStrategyComparison,
    RefinanceTerms,
    StrategySummary,
    WholesaleTerms,
)
from flipcalc.engine.economics import compute_deal_economics
from flipcalc.engine.refinance import compute_refinance
from flipcalc.engine.wholesale import compute_wholesale

BRRRR_VALUE_YEARS = 5
REFINANCE_SEASONING_MONTHS = 2
WHOLESALE_TIMEFRAME_MONTHS = 1


def compare_exit_strategies(
    assumptions: DealAssumptions,
    refinance_terms: RefinanceTerms | None = None,
    wholesale_terms: WholesaleTerms | None = None,
) -> ExitStrategyComparison:
    """Headline profit, cash and time for each exit on the same deal.

    BRRRR "profit" is a hold value: five years of cash flow plus the equity
    left after the refinance. Ties go to the later strategy: wholesale, then
    BRRRR.
    """
    results = compute_deal_economics(assumptions)
    refinance = compute_refinance(assumptions, refinance_terms, results)
    wholesale = compute_wholesale(assumptions, wholesale_terms, results)

    if refinance.cash_left_in_deal > 0:
        brrrr_coc = refinance.annual_cash_flow / refinance.cash_left_in_deal * Decimal("100")
    else:
        brrrr_coc = None

    strategies = [
        StrategySummary(
            strategy=ExitStrategy.FLIP,
            profit=results.net_profit,
            cash_needed=results.total_cash_needed,
            timeframe_months=assumptions.holding_months,
            cash_on_cash=results.cash_on_cash,
        ),
        StrategySummary(
            strategy=ExitStrategy.BRRRR,
            profit=refinance.annual_cash_flow * BRRRR_VALUE_YEARS + refinance.equity_position,
            cash_needed=results.total_cash_needed,
            timeframe_months=assumptions.holding_months + REFINANCE_SEASONING_MONTHS,
            cash_on_cash=brrrr_coc,
        ),
        StrategySummary(
            strategy=ExitStrategy.WHOLESALE,
            profit=wholesale.net_profit,
            cash_needed=wholesale.cash_invested,
            timeframe_months=WHOLESALE_TIMEFRAME_MONTHS,
            cash_on_cash=wholesale.roi,
        ),
    ]

    return ExitStrategyComparison(
        strategies=strategies,
        refinance=refinance,
        wholesale=wholesale,
        best_profit=max(reversed(strategies), key=lambda s: s.profit).strategy,
        lowest_cash=min(reversed(strategies), key=lambda s: s.cash_needed).strategy,
        fastest=min(reversed(strategies), key=lambda s: s.timeframe_months).strategy,
    )
