"""Side-by-side property comparison and per-square-foot metrics.

Pure functions. No I/O.
"""

from decimal import Decimal

from flipcalc.config import settings
from flipcalc.models.assumptions import DealAssumptions
from flipcalc.models.results import (
    DealResults,
    PerSqFtMetrics,
    PropertyComparison,
    PropertySnapshot,
)
from flipcalc.engine.economics import compute_deal_economics

ZERO = Decimal("0")
HUNDRED = Decimal("100")


def seventy_percent_ratio(assumptions: DealAssumptions, results: DealResults) -> Decimal:
    """(Purchase + rehab) as a percent of ARV."""
    if assumptions.arv <= 0:
        return ZERO
    return (assumptions.purchase_price + results.total_rehab_cost) / assumptions.arv * HUNDRED


def passes_seventy_percent_rule(ratio: Decimal) -> bool:
    return ratio <= settings.seventy_percent_rule_pct


def compare_properties(properties: dict[str, DealAssumptions]) -> PropertyComparison:
    """Evaluate each named deal and pick the leader on each headline metric.

    Ties go to the property listed first.
    """
    snapshots: list[PropertySnapshot] = []
    for name, assumptions in properties.items():
        results = compute_deal_economics(assumptions)
        ratio = seventy_percent_ratio(assumptions, results)
        snapshots.append(PropertySnapshot(
            name=name,
            assumptions=assumptions,
            results=results,
            seventy_percent_ratio=ratio,
            passes_seventy_percent_rule=assumptions.arv > 0 and passes_seventy_percent_rule(ratio),
        ))

    if not snapshots:
        return PropertyComparison()

    def best(key, lowest: bool = False) -> str:
        leader = snapshots[0]
        for snap in snapshots[1:]:
            if (key(snap) < key(leader)) if lowest else (key(snap) > key(leader)):
                leader = snap
        return leader.name

    return PropertyComparison(
        properties=snapshots,
        best_profit=best(lambda s: s.results.net_profit),
        best_roi=best(lambda s: s.results.roi),
        best_cash_on_cash=best(lambda s: s.results.cash_on_cash),
        lowest_cash_needed=best(lambda s: s.results.total_cash_needed, lowest=True),
    )


def cost_per_sqft(
    assumptions: DealAssumptions,
    results: DealResults,
    sqft: int,
) -> PerSqFtMetrics:
    """Deal figures per square foot. All zero when square footage is unknown."""
    if sqft <= 0:
        return PerSqFtMetrics()

    purchase = assumptions.purchase_price / sqft
    arv = assumptions.arv / sqft
    all_in = assumptions.purchase_price + results.total_rehab_cost + results.purchase_closing_costs

    return PerSqFtMetrics(
        sqft=sqft,
        purchase_price=purchase,
        arv=arv,
        rehab=results.total_rehab_cost / sqft,
        total_project_cost=results.total_project_cost / sqft,
        net_profit=results.net_profit / sqft,
        all_in_cost=all_in / sqft,
        value_add=arv - purchase,
    )
