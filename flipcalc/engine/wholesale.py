"""Wholesale exit: sell the purchase contract instead of closing on it.

Pure functions. No I/O.
"""

from decimal import Decimal

from flipcalc.config import settings
from flipcalc.models.assumptions import DealAssumptions
from flipcalc.models.exit import (
    EndBuyerAnalysis,
    EndBuyerBrrrr,
    EndBuyerRental,
    EndBuyerStrategy,
    Viability,
    WholesaleDealType,
    WholesaleResult,
    WholesaleTerms,
)
from flipcalc.models.results import DealResults
from flipcalc.engine.debt import interest_only_payment
from flipcalc.engine.economics import compute_deal_economics

ZERO = Decimal("0")
HUNDRED = Decimal("100")
TWELVE = Decimal("12")

# Minimum (net profit, ROI %) for each tier, best first
VIABILITY_TIERS: list[tuple[Decimal, Decimal, Viability]] = [
    (Decimal("15000"), Decimal("200"), Viability.EXCELLENT),
    (Decimal("10000"), Decimal("100"), Viability.GOOD),
    (Decimal("5000"), Decimal("50"), Viability.MARGINAL),
]

# End buyer's flip, rough estimates
END_BUYER_CLOSING_PCT = Decimal("3")  # Of end buyer price
END_BUYER_HOLDING_PCT_PER_MONTH = Decimal("1")  # Of end buyer price
END_BUYER_HOLDING_MONTHS = 6
END_BUYER_SELLING_PCT = Decimal("8")  # Of ARV

# End buyer's BRRRR
END_BUYER_FINANCED_PCT = Decimal("95")  # Of price + closing + rehab
END_BUYER_REFINANCE_RATE_PCT = Decimal("7")  # Interest-only
END_BUYER_ANNUAL_EXPENSE_PCT = Decimal("1")  # Of price

# End buyer's rental
RENTAL_EXPENSE_RATIO_PCT = Decimal("40")  # Of rent
RENTAL_MONTHLY_COST_PCT = Decimal("0.6")  # Of all-in cost


def viability(net_profit: Decimal, roi: Decimal) -> Viability:
    for min_profit, min_roi, tier in VIABILITY_TIERS:
        if net_profit >= min_profit and roi >= min_roi:
            return tier
    return Viability.POOR


def _brrrr_buyer(
    arv: Decimal,
    price: Decimal,
    closing: Decimal,
    rehab: Decimal,
    all_in: Decimal,
    monthly_rent: Decimal,
    ltv_pct: Decimal,
) -> EndBuyerBrrrr:
    loan = arv * ltv_pct / HUNDRED
    payment = interest_only_payment(loan, END_BUYER_REFINANCE_RATE_PCT)
    expenses = price * END_BUYER_ANNUAL_EXPENSE_PCT / HUNDRED / TWELVE
    cash_flow = monthly_rent - payment - expenses
    return EndBuyerBrrrr(
        refinance_loan_amount=loan,
        cash_out=loan - (price + closing + rehab) * END_BUYER_FINANCED_PCT / HUNDRED,
        cash_left_in_deal=max(ZERO, all_in - loan),
        monthly_payment=payment,
        monthly_cash_flow=cash_flow,
        annual_cash_flow=cash_flow * TWELVE,
    )


def _rental_buyer(all_in: Decimal, monthly_rent: Decimal) -> EndBuyerRental:
    annual_rent = monthly_rent * TWELVE
    expenses = annual_rent * RENTAL_EXPENSE_RATIO_PCT / HUNDRED
    noi = annual_rent - expenses
    return EndBuyerRental(
        annual_rent=annual_rent,
        operating_expenses=expenses,
        noi=noi,
        cap_rate=noi / all_in * HUNDRED if all_in > 0 else ZERO,
        monthly_cash_flow=monthly_rent - all_in * RENTAL_MONTHLY_COST_PCT / HUNDRED,
    )


def analyze_end_buyer(
    arv: Decimal,
    end_buyer_price: Decimal,
    rehab: Decimal,
    strategy: EndBuyerStrategy = EndBuyerStrategy.FLIP,
    monthly_rent: Decimal = Decimal("2000"),
    refinance_ltv_pct: Decimal = Decimal("75"),
) -> EndBuyerAnalysis:
    """Whether the end buyer can still make money at the wholesale price.

    The flip view and 70% rule are always filled in; a BRRRR or rental buyer
    also gets a rough hold view on the same all-in cost.
    """
    closing = end_buyer_price * END_BUYER_CLOSING_PCT / HUNDRED
    holding = end_buyer_price * END_BUYER_HOLDING_PCT_PER_MONTH / HUNDRED * END_BUYER_HOLDING_MONTHS
    selling = arv * END_BUYER_SELLING_PCT / HUNDRED
    all_in = end_buyer_price + closing + rehab + holding
    net_profit = arv - selling - all_in
    max_allowable_offer = arv * settings.seventy_percent_rule_pct / HUNDRED - rehab

    brrrr = rental = None
    if strategy is EndBuyerStrategy.BRRRR:
        brrrr = _brrrr_buyer(
            arv, end_buyer_price, closing, rehab, all_in, monthly_rent, refinance_ltv_pct,
        )
    elif strategy is EndBuyerStrategy.RENTAL:
        rental = _rental_buyer(all_in, monthly_rent)

    return EndBuyerAnalysis(
        purchase_price=end_buyer_price,
        closing_costs=closing,
        rehab=rehab,
        holding_costs=holding,
        selling_costs=selling,
        all_in_cost=all_in,
        net_profit=net_profit,
        roi=net_profit / all_in * HUNDRED if all_in > 0 else ZERO,
        max_allowable_offer=max_allowable_offer,
        meets_seventy_percent_rule=end_buyer_price <= max_allowable_offer,
        strategy=strategy,
        brrrr=brrrr,
        rental=rental,
    )


def compute_wholesale(
    assumptions: DealAssumptions,
    terms: WholesaleTerms | None = None,
    results: DealResults | None = None,
) -> WholesaleResult:
    """Wholesaler's profit on the deal's contract price.

    The earnest money is refunded at closing under either deal type: it is
    cash the wholesaler fronts, never a cost. A double close adds the
    wholesaler's own closing fees and transactional funding.
    """
    terms = terms or WholesaleTerms()
    if results is None:
        results = compute_deal_economics(assumptions)

    contract_price = assumptions.purchase_price
    if terms.end_buyer_price is not None:
        end_buyer_price = terms.end_buyer_price
        fee = end_buyer_price - contract_price
    else:
        fee = terms.assignment_fee
        end_buyer_price = contract_price + fee

    funding_pct = terms.transactional_funding_pct
    if funding_pct is None:
        funding_pct = settings.transactional_funding_pct

    if terms.deal_type is WholesaleDealType.DOUBLE_CLOSE:
        funding_cost = contract_price * funding_pct / HUNDRED
        total_costs = terms.marketing_costs + terms.closing_costs.total + funding_cost
        cash_invested = total_costs + terms.earnest_money
    else:
        funding_cost = ZERO
        total_costs = terms.marketing_costs
        cash_invested = terms.earnest_money + terms.marketing_costs

    net_profit = fee - total_costs
    roi = net_profit / cash_invested * HUNDRED if cash_invested > 0 else ZERO

    rehab = terms.end_buyer_rehab
    if rehab is None:
        rehab = results.total_rehab_cost

    return WholesaleResult(
        deal_type=terms.deal_type,
        contract_price=contract_price,
        end_buyer_price=end_buyer_price,
        assignment_fee=fee,
        transactional_funding_cost=funding_cost,
        total_costs=total_costs,
        cash_invested=cash_invested,
        net_profit=net_profit,
        roi=roi,
        viability=viability(net_profit, roi),
        end_buyer=analyze_end_buyer(
            assumptions.arv,
            end_buyer_price,
            rehab,
            strategy=terms.end_buyer_strategy,
            monthly_rent=terms.end_buyer_monthly_rent,
            refinance_ltv_pct=terms.end_buyer_refinance_ltv_pct,
        ),
    )
