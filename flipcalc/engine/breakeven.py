"""Break-even and target-profit solving.

Net profit is linear in ARV once financing and holding are fixed:

    profit = ARV * (1 - selling_rate) - fixed_costs

so the ARV or purchase price for a given profit comes out in closed form.
The linear coefficients are read off the deal's cost modes, so switching
between percentage and itemized selling (or closing) costs changes them.

Pure functions. No I/O.
"""

from decimal import Decimal

from flipcalc.models.assumptions import DealAssumptions
from flipcalc.models.results import BreakEvenAnalysis, DealResults
from flipcalc.engine.economics import compute_deal_economics

ZERO = Decimal("0")
ONE = Decimal("1")
HUNDRED = Decimal("100")

DEFAULT_TARGET_PROFIT = Decimal("25000")


def selling_rate(assumptions: DealAssumptions) -> Decimal:
    """Share of ARV consumed by ARV-proportional selling costs."""
    return assumptions.selling_commission_pct / HUNDRED + assumptions.selling_closing_costs.rate


def fixed_selling_costs(assumptions: DealAssumptions) -> Decimal:
    """Selling costs that do not scale with ARV."""
    return assumptions.selling_closing_costs.fixed + assumptions.seller_concessions


def _solve_arv(fixed_costs: Decimal, target_profit: Decimal, rate: Decimal) -> Decimal | None:
    if rate >= ONE:
        return None
    return (fixed_costs + target_profit) / (ONE - rate)


def solve_break_even(
    assumptions: DealAssumptions,
    target_profit: Decimal = DEFAULT_TARGET_PROFIT,
    results: DealResults | None = None,
) -> BreakEvenAnalysis:
    """Break-even ARV, ARV for a target profit, and max purchase price.

    Args:
        assumptions: Deal under evaluation
        target_profit: Desired net profit for the target-profit figures
        results: Engine output for `assumptions`, computed if omitted
    """
    a = assumptions
    if results is None:
        results = compute_deal_economics(a)
    if a.purchase_price <= 0 or a.arv <= 0:
        return BreakEvenAnalysis(target_profit=target_profit)

    rate = selling_rate(a)
    fixed_selling = fixed_selling_costs(a)

    fixed_costs = (
        a.purchase_price
        + results.purchase_closing_costs
        + results.total_rehab_cost
        + results.total_financing_costs
        + results.total_holding_costs
        + fixed_selling
    )

    break_even_arv = _solve_arv(fixed_costs, ZERO, rate)
    arv_for_target_profit = _solve_arv(fixed_costs, target_profit, rate)

    # Purchase closing scales with price; everything else is held at its
    # current value (financing is a first-order estimate).
    closing = a.purchase_closing_costs
    max_purchase_price = (
        a.arv * (ONE - rate)
        - target_profit
        - results.total_rehab_cost
        - results.total_financing_costs
        - results.total_holding_costs
        - fixed_selling
        - closing.fixed
    ) / (ONE + closing.rate)

    if break_even_arv is not None:
        arv_cushion = a.arv - break_even_arv
        arv_cushion_pct = arv_cushion / a.arv * HUNDRED
    else:
        arv_cushion = ZERO
        arv_cushion_pct = ZERO

    return BreakEvenAnalysis(
        target_profit=target_profit,
        selling_rate=rate,
        fixed_costs=fixed_costs,
        break_even_arv=break_even_arv,
        arv_for_target_profit=arv_for_target_profit,
        max_purchase_price=max_purchase_price,
        target_achievable=max_purchase_price > 0,
        arv_cushion=arv_cushion,
        arv_cushion_pct=arv_cushion_pct,
    )
