"""Deal economics engine: assumptions in, full cost/profit breakdown out.

Pure computation. No I/O. Every derived analysis goes through
`compute_deal_economics`; nothing else computes profit.
"""

import logging
from decimal import Decimal

from flipcalc.models.assumptions import DealAssumptions
from flipcalc.models.results import DealResults
from flipcalc.engine.debt import (
    holding_period_interest,
    interest_only_payment,
    monthly_payment,
)
from flipcalc.engine.loan_products import loan_capabilities

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
HUNDRED = Decimal("100")


def compute_deal_economics(assumptions: DealAssumptions) -> DealResults:
    """Compute every cost, cash and profit figure for a flip.

    Never raises. A deal without a positive purchase price and ARV yields
    `DealResults()` (all zeros) so callers always have something to render.
    """
    a = assumptions
    if a.purchase_price <= 0 or a.arv <= 0:
        logger.debug(
            "Non-positive price or ARV (price=%s, arv=%s); returning zero results",
            a.purchase_price, a.arv,
        )
        return DealResults()

    # 1. Purchase costs
    purchase_closing_costs = a.purchase_closing_costs.resolve(a.purchase_price)

    # 2. Rehab
    total_rehab_cost = a.rehab.total_cost

    # 3. Financing
    caps = loan_capabilities(a)
    max_loan_amount = a.arv * a.max_loan_to_arv_pct / HUNDRED

    base_loan_amount = ZERO
    total_loan_amount = ZERO
    payment = ZERO
    total_loan_interest = ZERO
    total_origination_points = ZERO
    financed_interest_reserve = ZERO
    is_loan_capped = False

    if caps.has_loan:
        amount_to_finance = a.purchase_price
        if caps.finance_rehab:
            amount_to_finance += total_rehab_cost

        down_payment = a.down_payment.resolve(amount_to_finance)
        base_loan_amount = max(ZERO, amount_to_finance - down_payment)

        # Points are charged on the base loan, before anything is rolled in
        total_origination_points = base_loan_amount * a.origination_points_pct / HUNDRED

        total_loan_amount = base_loan_amount
        if caps.roll_closing_costs:
            total_loan_amount += purchase_closing_costs
        if caps.roll_points:
            total_loan_amount += total_origination_points

        if caps.capped_by_arv and total_loan_amount > max_loan_amount:
            is_loan_capped = True
            logger.debug(
                "Loan %s exceeds %s%% of ARV (%s)",
                total_loan_amount, a.max_loan_to_arv_pct, max_loan_amount,
            )

        if caps.interest_only:
            payment = interest_only_payment(total_loan_amount, a.interest_rate_pct)
            total_loan_interest = payment * a.holding_months
        else:
            payment = monthly_payment(total_loan_amount, a.interest_rate_pct, caps.term_months)
            total_loan_interest = holding_period_interest(
                total_loan_amount, a.interest_rate_pct, payment, a.holding_months
            )

        if caps.interest_reserve_months > 0:
            financed_interest_reserve = payment * caps.interest_reserve_months
    else:
        # Cash purchase: purchase and rehab both come out of pocket
        down_payment = a.purchase_price + total_rehab_cost

    total_financing_costs = total_loan_interest + total_origination_points

    # 4. Holding costs
    total_holding_costs = a.holding_costs.monthly_total * a.holding_months

    # 5. Selling costs
    selling_commission = a.arv * a.selling_commission_pct / HUNDRED
    selling_closing_costs = a.selling_closing_costs.resolve(a.arv)
    total_selling_costs = selling_commission + selling_closing_costs + a.seller_concessions

    # 6. Total project cost
    total_project_cost = (
        a.purchase_price
        + purchase_closing_costs
        + total_rehab_cost
        + total_financing_costs
        + total_holding_costs
        + total_selling_costs
    )

    # 7. Cash needed
    cash_needed = down_payment
    if not caps.roll_closing_costs:
        cash_needed += purchase_closing_costs
    # A cash purchase already carries rehab in its down payment
    if caps.has_loan and not caps.finance_rehab:
        cash_needed += total_rehab_cost
    if not caps.roll_points:
        cash_needed += total_origination_points

    if caps.has_loan:
        reserve_months = min(caps.interest_reserve_months, max(a.holding_months, 0))
        interest_covered_by_reserve = reserve_months * payment
        cash_needed += total_holding_costs + (total_loan_interest - interest_covered_by_reserve)
    else:
        cash_needed += total_holding_costs

    # 8. Profitability
    net_profit = a.arv - total_project_cost
    roi = net_profit / total_project_cost * HUNDRED if total_project_cost != 0 else ZERO
    cash_on_cash = net_profit / cash_needed * HUNDRED if cash_needed != 0 else ZERO
    annualized_roi = roi * 12 / a.holding_months if a.holding_months > 0 else ZERO
    profit_margin = net_profit / a.arv * HUNDRED

    return DealResults(
        purchase_closing_costs=purchase_closing_costs,
        total_rehab_cost=total_rehab_cost,
        base_loan_amount=base_loan_amount,
        total_loan_amount=total_loan_amount,
        down_payment=down_payment,
        monthly_loan_payment=payment,
        total_loan_interest=total_loan_interest,
        total_origination_points=total_origination_points,
        total_financing_costs=total_financing_costs,
        financed_interest_reserve=financed_interest_reserve,
        total_holding_costs=total_holding_costs,
        selling_commission=selling_commission,
        selling_closing_costs=selling_closing_costs,
        total_selling_costs=total_selling_costs,
        total_project_cost=total_project_cost,
        total_cash_needed=cash_needed,
        net_profit=net_profit,
        roi=roi,
        annualized_roi=annualized_roi,
        cash_on_cash=cash_on_cash,
        profit_margin=profit_margin,
        is_loan_capped=is_loan_capped,
        max_loan_amount=max_loan_amount,
    )
