"""BRRRR exit: refinance the rehabbed property and hold it as a rental.

Layered on the flip engine's cost totals; the refinance loan, rent and
operating expenses are modeled here.

Pure functions. No I/O.
"""

from decimal import Decimal

from flipcalc.config import settings
from flipcalc.models.assumptions import DealAssumptions
from flipcalc.models.exit import (
    DscrLoanTerms,
    DscrQualification,
    DscrStatus,
    RefinanceProduct,
    RefinanceResult,
    RefinanceTerms,
)
from flipcalc.models.results import DealResults
from flipcalc.engine.debt import interest_only_payment, monthly_payment
from flipcalc.engine.economics import compute_deal_economics

ZERO = Decimal("0")
ONE = Decimal("1")
HUNDRED = Decimal("100")
TWELVE = Decimal("12")

PMI_LTV_THRESHOLD_PCT = Decimal("80")
DSCR_TYPICAL_MAX_LTV_PCT = Decimal("75")
CONVENTIONAL_DOWN_PAYMENT_PCT = Decimal("20")

# Minimum DSCR -> (status, recommended down payment %), best first
DSCR_TIERS: list[tuple[Decimal, DscrStatus, Decimal]] = [
    (Decimal("1.25"), DscrStatus.EXCELLENT, Decimal("20")),
    (Decimal("1.0"), DscrStatus.GOOD, Decimal("25")),
    (Decimal("0.75"), DscrStatus.MARGINAL, Decimal("30")),
]
DSCR_FLOOR = (DscrStatus.DIFFICULT, Decimal("35"))


def dscr_status(dscr: Decimal) -> tuple[DscrStatus, Decimal]:
    """Lender qualification tier and recommended down payment for a DSCR."""
    for minimum, status, down_pct in DSCR_TIERS:
        if dscr >= minimum:
            return status, down_pct
    return DSCR_FLOOR


def compute_dscr_qualification(
    assumptions: DealAssumptions,
    loan: DscrLoanTerms | None = None,
    monthly_rent: Decimal = Decimal("2000"),
) -> DscrQualification:
    """How a DSCR lender would underwrite the property.

    The loan is ARV less the down payment. Debt service is PITIA: the loan
    payment plus the deal's monthly taxes, insurance and HOA. DSCR here is
    gross rent over PITIA, not NOI over debt service.
    """
    loan = loan or DscrLoanTerms()
    arv = assumptions.arv
    rent = loan.gross_monthly_rent if loan.gross_monthly_rent is not None else monthly_rent

    loan_amount = arv * (HUNDRED - loan.down_payment_pct) / HUNDRED
    if loan.interest_only:
        payment = interest_only_payment(loan_amount, loan.interest_rate_pct)
    else:
        payment = monthly_payment(loan_amount, loan.interest_rate_pct, loan.term_years * 12)

    carrying = assumptions.holding_costs
    pitia = payment + carrying.property_taxes + carrying.insurance + carrying.hoa
    dscr = rent / pitia if pitia > 0 else ZERO
    status, down_pct = dscr_status(dscr)

    return DscrQualification(
        loan_amount=loan_amount,
        down_payment_amount=arv * loan.down_payment_pct / HUNDRED,
        monthly_payment=payment,
        total_debt_service=pitia,
        dscr=dscr,
        status=status,
        recommended_down_payment_pct=down_pct,
    )


def compute_refinance(
    assumptions: DealAssumptions,
    terms: RefinanceTerms | None = None,
    results: DealResults | None = None,
) -> RefinanceResult:
    """Refinance-and-hold economics for a rehabbed property.

    Args:
        assumptions: The flip deal (ARV and monthly carrying costs)
        terms: Refinance loan, rent and expense assumptions
        results: Engine output for `assumptions`, computed if omitted
    """
    terms = terms or RefinanceTerms()
    if results is None:
        results = compute_deal_economics(assumptions)
    arv = assumptions.arv

    # Refinance loan
    new_loan = arv * terms.ltv_pct / HUNDRED
    if terms.refinance_costs is not None:
        refinance_costs = terms.refinance_costs.total(new_loan)
    else:
        refinance_costs = arv * settings.refinance_cost_pct / HUNDRED
    cash_out = new_loan - refinance_costs

    # Holding the property: no selling costs in the basis
    cost_basis = results.total_project_cost - results.total_selling_costs
    cash_left = cost_basis - cash_out
    needs_additional_down_payment = cash_left > 0
    if cash_left > 0 and terms.additional_down_payment > 0:
        cash_left = max(ZERO, cash_left - terms.additional_down_payment)
    cash_left = max(ZERO, cash_left)

    # Debt service
    is_dscr = terms.product is RefinanceProduct.DSCR
    rate = terms.dscr_loan.interest_rate_pct if is_dscr else terms.interest_rate_pct
    principal_interest = monthly_payment(new_loan, rate, terms.product.term_months)
    if terms.has_pmi and terms.ltv_pct > PMI_LTV_THRESHOLD_PCT:
        pmi = new_loan * terms.pmi_rate_pct / HUNDRED / TWELVE
    else:
        pmi = ZERO
    debt_service = principal_interest + pmi

    # Operations
    rent = terms.monthly_rent
    maintenance = rent * terms.maintenance_pct / HUNDRED
    management = rent * terms.management_pct / HUNDRED
    capex = rent * terms.capex_pct / HUNDRED
    vacancy_loss = rent * terms.vacancy_pct / HUNDRED
    carrying = assumptions.holding_costs
    operating_expenses = (
        carrying.property_taxes + carrying.insurance + carrying.hoa
        + maintenance + management + capex
    )
    effective_gross_income = rent - vacancy_loss
    noi = effective_gross_income - operating_expenses

    monthly_cash_flow = noi - debt_service
    annual_cash_flow = monthly_cash_flow * TWELVE
    cash_on_cash = annual_cash_flow / max(cash_left, ONE) * HUNDRED

    dscr = noi / debt_service if debt_service > 0 else ZERO
    qualification = None
    recommended_down_pct = CONVENTIONAL_DOWN_PAYMENT_PCT
    if is_dscr:
        qualification = compute_dscr_qualification(assumptions, terms.dscr_loan, rent)
        recommended_down_pct = qualification.recommended_down_payment_pct

    return RefinanceResult(
        new_loan_amount=new_loan,
        refinance_costs=refinance_costs,
        cash_out=cash_out,
        cost_basis=cost_basis,
        cash_left_in_deal=cash_left,
        needs_additional_down_payment=needs_additional_down_payment,
        monthly_principal_interest=principal_interest,
        monthly_pmi=pmi,
        total_debt_service=debt_service,
        vacancy_loss=vacancy_loss,
        maintenance=maintenance,
        management=management,
        capex=capex,
        operating_expenses=operating_expenses,
        effective_gross_income=effective_gross_income,
        noi=noi,
        monthly_cash_flow=monthly_cash_flow,
        annual_cash_flow=annual_cash_flow,
        cash_on_cash=cash_on_cash,
        equity_position=arv - new_loan,
        dscr=dscr,
        recommended_down_payment_pct=recommended_down_pct,
        exceeds_typical_dscr_ltv=is_dscr and terms.ltv_pct > DSCR_TYPICAL_MAX_LTV_PCT,
        dscr_qualification=qualification,
    )
