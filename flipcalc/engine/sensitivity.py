"""What-if analysis: perturb a copy of the deal and re-run the engine.

No arithmetic of its own beyond the perturbation; all figures come from
`compute_deal_economics`.
"""

from dataclasses import replace
from decimal import Decimal, ROUND_HALF_UP

from flipcalc.models.assumptions import DealAssumptions
from flipcalc.models.rehab import SimpleRehab
from flipcalc.models.results import (
    SensitivityPoint,
    SensitivityResult,
    SensitivityVariable,
)
from flipcalc.engine.comparison import seventy_percent_ratio
from flipcalc.engine.economics import compute_deal_economics

ZERO = Decimal("0")
ONE = Decimal("1")
HUNDRED = Decimal("100")
WHOLE = Decimal("1")

# Slider ranges (min, max, step) in percent
ARV_RANGE = (-20, 20, 1)
REHAB_RANGE = (-30, 50, 5)
HOLDING_RANGE = (-50, 100, 10)


def _scaled(value: Decimal, delta_pct: Decimal) -> Decimal:
    return (value * (ONE + delta_pct / HUNDRED)).quantize(WHOLE, ROUND_HALF_UP)


def adjust_assumptions(
    assumptions: DealAssumptions,
    arv_pct: Decimal = ZERO,
    rehab_pct: Decimal = ZERO,
    holding_pct: Decimal = ZERO,
) -> DealAssumptions:
    """Copy of the deal with ARV, rehab and holding period scaled by percent.

    Rehab always comes back as a single adjusted figure, so the delta means
    the same thing whether the base budget was itemized or not. The holding
    period never drops below one month.
    """
    holding = int(_scaled(Decimal(assumptions.holding_months), holding_pct))
    return replace(
        assumptions,
        arv=_scaled(assumptions.arv, arv_pct),
        rehab=SimpleRehab(cost=_scaled(assumptions.rehab.total_cost, rehab_pct)),
        holding_months=max(1, holding),
    )


def run_sensitivity(
    assumptions: DealAssumptions,
    arv_pct: Decimal = ZERO,
    rehab_pct: Decimal = ZERO,
    holding_pct: Decimal = ZERO,
) -> SensitivityResult:
    base = compute_deal_economics(assumptions)
    adjusted_assumptions = adjust_assumptions(assumptions, arv_pct, rehab_pct, holding_pct)
    adjusted = compute_deal_economics(adjusted_assumptions)

    profit_change = adjusted.net_profit - base.net_profit
    if base.net_profit != 0:
        profit_change_pct = profit_change / abs(base.net_profit) * HUNDRED
    else:
        profit_change_pct = ZERO

    return SensitivityResult(
        arv_adjustment_pct=arv_pct,
        rehab_adjustment_pct=rehab_pct,
        holding_adjustment_pct=holding_pct,
        adjusted_assumptions=adjusted_assumptions,
        base=base,
        adjusted=adjusted,
        profit_change=profit_change,
        profit_change_pct=profit_change_pct,
        seventy_percent_ratio=seventy_percent_ratio(adjusted_assumptions, adjusted),
    )


def default_deltas(variable: SensitivityVariable) -> list[Decimal]:
    low, high, step = {
        SensitivityVariable.ARV: ARV_RANGE,
        SensitivityVariable.REHAB: REHAB_RANGE,
        SensitivityVariable.HOLDING: HOLDING_RANGE,
    }[variable]
    return [Decimal(d) for d in range(low, high + 1, step)]


def sensitivity_sweep(
    assumptions: DealAssumptions,
    variable: SensitivityVariable,
    deltas: list[Decimal] | None = None,
) -> list[SensitivityPoint]:
    """Profit and returns across a range of adjustments to one variable."""
    points: list[SensitivityPoint] = []
    for delta in deltas if deltas is not None else default_deltas(variable):
        adjusted = adjust_assumptions(
            assumptions,
            arv_pct=delta if variable is SensitivityVariable.ARV else ZERO,
            rehab_pct=delta if variable is SensitivityVariable.REHAB else ZERO,
            holding_pct=delta if variable is SensitivityVariable.HOLDING else ZERO,
        )
        results = compute_deal_economics(adjusted)
        points.append(SensitivityPoint(
            variable=variable,
            delta_pct=delta,
            net_profit=results.net_profit,
            roi=results.roi,
            cash_on_cash=results.cash_on_cash,
        ))
    return points
