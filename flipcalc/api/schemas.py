"""Pydantic schemas for API request/response models."""

from dataclasses import fields
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum

from pydantic import BaseModel, Field

from flipcalc.models.assumptions import (
    DealAssumptions,
    DetailedHoldingCosts,
    FixedAmount,
    HoldingCosts,
    ItemizedClosingCosts,
    ItemizedSellingCosts,
    LoanType,
    PercentOf,
)
from flipcalc.models.comps import Comp, CompCondition, Confidence
from flipcalc.models.exit import (
    DscrLoanTerms,
    DscrStatus,
    EndBuyerStrategy,
    ExitStrategy,
    ItemizedRefinanceCosts,
    RefinanceProduct,
    RefinanceTerms,
    Viability,
    WholesaleClosingCosts,
    WholesaleDealType,
    WholesaleTerms,
)
from flipcalc.models.rehab import SimpleRehab
from flipcalc.models.results import LenderScenario, SensitivityVariable
from flipcalc.engine.rehab import itemized_rehab

CENTS = Decimal("0.01")


def cents(value: Decimal) -> Decimal:
    return value.quantize(CENTS, ROUND_HALF_UP)


def rounded_fields(obj) -> dict:
    """Flat dataclass fields with Decimals rounded to cents.

    Nested dataclasses and lists are left out; callers convert those
    explicitly.
    """
    out = {}
    for f in fields(obj):
        value = getattr(obj, f.name)
        if isinstance(value, Decimal):
            out[f.name] = cents(value)
        elif value is None or isinstance(value, (bool, int, str, Enum)):
            out[f.name] = value
    return out


# ---- Request schemas ----

class ItemizedClosingCostsSchema(BaseModel):
    title_insurance: Decimal = Decimal("2000")
    appraisal: Decimal = Decimal("500")
    attorney_fees: Decimal = Decimal("1500")
    recording_fees: Decimal = Decimal("250")
    transfer_taxes: Decimal = Decimal("2500")
    lender_fees: Decimal = Decimal("500")
    escrow_fees: Decimal = Decimal("500")
    inspections: Decimal = Decimal("500")
    other: Decimal = Decimal("0")


class ItemizedSellingCostsSchema(BaseModel):
    title_insurance: Decimal = Decimal("1500")
    escrow_fees: Decimal = Decimal("1000")
    transfer_tax: Decimal = Decimal("0")
    attorney_fees: Decimal = Decimal("500")
    recording_fees: Decimal = Decimal("150")
    home_warranty: Decimal = Decimal("500")
    other: Decimal = Decimal("0")


class DealRequest(BaseModel):
    """Flat, form-style deal input. Rates are in percent (10 = 10%)."""
    address: str = ""
    purchase_price: Decimal = Decimal("250000")
    arv: Decimal = Decimal("375000")
    sqft: int = Field(0, ge=0, description="Square footage, enables per-sqft metrics")

    # Purchase closing costs
    closing_costs_in_dollars: bool = False
    closing_costs_pct: Decimal = Decimal("3")
    closing_costs_amount: Decimal = Decimal("0")
    use_itemized_closing_costs: bool = False
    itemized_closing_costs: ItemizedClosingCostsSchema = Field(default_factory=ItemizedClosingCostsSchema)

    # Rehab
    rehab_cost: Decimal = Decimal("45000")
    use_itemized_rehab: bool = False
    rehab_items: dict[str, dict[str, Decimal]] | None = Field(
        None, description="Category -> line item -> cost; names outside the default template are added",
    )

    # Financing
    loan_type: LoanType = LoanType.HARD_MONEY
    down_payment_in_dollars: bool = False
    down_payment_pct: Decimal = Decimal("10")
    down_payment_amount: Decimal = Decimal("0")
    interest_rate_pct: Decimal = Decimal("10")
    loan_term_months: int = Field(12, ge=1)
    origination_points_pct: Decimal = Decimal("2")
    interest_only: bool = True
    finance_rehab: bool = True
    roll_closing_costs: bool = False
    roll_points: bool = False
    interest_reserve_months: int = Field(0, ge=0)
    max_loan_to_arv_pct: Decimal = Decimal("70")

    # Holding
    holding_months: int = Field(6, ge=0)
    property_taxes: Decimal = Decimal("250")
    insurance: Decimal = Decimal("100")
    utilities: Decimal = Decimal("150")
    use_detailed_holding_costs: bool = False
    monthly_hoa: Decimal = Decimal("0")
    lawn_care: Decimal = Decimal("0")
    pool_maintenance: Decimal = Decimal("0")
    security_alarm: Decimal = Decimal("0")
    vacancy_insurance: Decimal = Decimal("0")
    other_holding: Decimal = Decimal("0")

    # Selling
    selling_commission_pct: Decimal = Decimal("6")
    use_itemized_selling_costs: bool = False
    selling_closing_costs_pct: Decimal = Decimal("1")
    itemized_selling_costs: ItemizedSellingCostsSchema = Field(default_factory=ItemizedSellingCostsSchema)
    seller_concessions: Decimal = Decimal("0")

    def to_assumptions(self) -> DealAssumptions:
        """Resolve the mode toggles into the engine's cost variants."""
        if self.use_itemized_closing_costs:
            closing = ItemizedClosingCosts(**self.itemized_closing_costs.model_dump())
        elif self.closing_costs_in_dollars:
            closing = FixedAmount(self.closing_costs_amount)
        else:
            closing = PercentOf(self.closing_costs_pct)

        if self.use_itemized_rehab:
            rehab = itemized_rehab(self.rehab_items)
        else:
            rehab = SimpleRehab(self.rehab_cost)

        if self.down_payment_in_dollars:
            down_payment = FixedAmount(self.down_payment_amount)
        else:
            down_payment = PercentOf(self.down_payment_pct)

        if self.use_detailed_holding_costs:
            holding = DetailedHoldingCosts(
                property_taxes=self.property_taxes,
                insurance=self.insurance,
                utilities=self.utilities,
                monthly_hoa=self.monthly_hoa,
                lawn_care=self.lawn_care,
                pool_maintenance=self.pool_maintenance,
                security_alarm=self.security_alarm,
                vacancy_insurance=self.vacancy_insurance,
                other=self.other_holding,
            )
        else:
            holding = HoldingCosts(
                property_taxes=self.property_taxes,
                insurance=self.insurance,
                utilities=self.utilities,
            )

        if self.use_itemized_selling_costs:
            selling = ItemizedSellingCosts(**self.itemized_selling_costs.model_dump())
        else:
            selling = PercentOf(self.selling_closing_costs_pct)

        return DealAssumptions(
            address=self.address,
            purchase_price=self.purchase_price,
            arv=self.arv,
            purchase_closing_costs=closing,
            rehab=rehab,
            loan_type=self.loan_type,
            down_payment=down_payment,
            interest_rate_pct=self.interest_rate_pct,
            loan_term_months=self.loan_term_months,
            origination_points_pct=self.origination_points_pct,
            interest_only=self.interest_only,
            finance_rehab=self.finance_rehab,
            roll_closing_costs=self.roll_closing_costs,
            roll_points=self.roll_points,
            interest_reserve_months=self.interest_reserve_months,
            max_loan_to_arv_pct=self.max_loan_to_arv_pct,
            holding_months=self.holding_months,
            holding_costs=holding,
            selling_commission_pct=self.selling_commission_pct,
            selling_closing_costs=selling,
            seller_concessions=self.seller_concessions,
        )


class CompRequest(BaseModel):
    address: str
    sale_price: Decimal
    sqft: int
    sale_date: str = ""
    bedrooms: int = 3
    bathrooms: Decimal = Decimal("2")
    condition: CompCondition = CompCondition.SIMILAR
    location_adjustment_pct: Decimal = Decimal("0")
    condition_adjustment_pct: Decimal = Decimal("0")
    size_adjustment_pct: Decimal = Decimal("0")
    other_adjustment: Decimal = Decimal("0")

    def to_comp(self) -> Comp:
        return Comp(**self.model_dump())


class AnalyzeRequest(DealRequest):
    comps: list[CompRequest] = Field(default_factory=list, description="Comparable sales for an ARV check")


class BreakEvenRequest(BaseModel):
    deal: DealRequest = Field(default_factory=DealRequest)
    target_profit: Decimal = Decimal("25000")


class SensitivityRequest(BaseModel):
    deal: DealRequest = Field(default_factory=DealRequest)
    arv_adjustment_pct: Decimal = Field(Decimal("0"), ge=-100)
    rehab_adjustment_pct: Decimal = Field(Decimal("0"), ge=-100)
    holding_adjustment_pct: Decimal = Field(Decimal("0"), ge=-100)
    sweep: SensitivityVariable | None = Field(None, description="Variable to sweep across its range")
    sweep_deltas: list[Decimal] | None = None


class LenderScenarioRequest(BaseModel):
    name: str
    interest_rate_pct: Decimal
    points_pct: Decimal
    lender_fees: Decimal = Decimal("500")

    def to_scenario(self) -> LenderScenario:
        return LenderScenario(**self.model_dump())


class LenderRequest(BaseModel):
    deal: DealRequest = Field(default_factory=DealRequest)
    scenarios: list[LenderScenarioRequest] | None = Field(
        None, description="Defaults to the deal's own terms and a higher-rate, lower-points quote",
    )


class RefinanceRequest(BaseModel):
    product: RefinanceProduct = RefinanceProduct.THIRTY_YEAR
    ltv_pct: Decimal = Decimal("75")
    interest_rate_pct: Decimal = Decimal("7")
    monthly_rent: Decimal = Decimal("2000")
    dscr_down_payment_pct: Decimal = Field(Decimal("25"), ge=0, le=100)
    dscr_interest_rate_pct: Decimal = Decimal("8")
    dscr_term_years: int = Field(30, ge=1)
    dscr_interest_only: bool = False
    dscr_gross_monthly_rent: Decimal | None = Field(
        None, description="Rent the DSCR lender underwrites; defaults to monthly_rent",
    )
    use_itemized_costs: bool = False
    loan_points_pct: Decimal = Decimal("1")
    appraisal_fee: Decimal = Decimal("500")
    title_insurance: Decimal = Decimal("1500")
    recording_fees: Decimal = Decimal("250")
    attorney_fees: Decimal = Decimal("750")
    other_costs: Decimal = Decimal("500")
    maintenance_pct: Decimal = Decimal("5")
    management_pct: Decimal = Decimal("10")
    capex_pct: Decimal = Decimal("5")
    vacancy_pct: Decimal = Decimal("8")
    additional_down_payment: Decimal = Decimal("0")
    has_pmi: bool = False
    pmi_rate_pct: Decimal = Decimal("0.5")

    def to_terms(self) -> RefinanceTerms:
        costs = None
        if self.use_itemized_costs:
            costs = ItemizedRefinanceCosts(
                loan_points_pct=self.loan_points_pct,
                appraisal_fee=self.appraisal_fee,
                title_insurance=self.title_insurance,
                recording_fees=self.recording_fees,
                attorney_fees=self.attorney_fees,
                other=self.other_costs,
            )
        return RefinanceTerms(
            product=self.product,
            ltv_pct=self.ltv_pct,
            interest_rate_pct=self.interest_rate_pct,
            monthly_rent=self.monthly_rent,
            dscr_loan=DscrLoanTerms(
                down_payment_pct=self.dscr_down_payment_pct,
                interest_rate_pct=self.dscr_interest_rate_pct,
                term_years=self.dscr_term_years,
                interest_only=self.dscr_interest_only,
                gross_monthly_rent=self.dscr_gross_monthly_rent,
            ),
            refinance_costs=costs,
            maintenance_pct=self.maintenance_pct,
            management_pct=self.management_pct,
            capex_pct=self.capex_pct,
            vacancy_pct=self.vacancy_pct,
            additional_down_payment=self.additional_down_payment,
            has_pmi=self.has_pmi,
            pmi_rate_pct=self.pmi_rate_pct,
        )


class WholesaleRequest(BaseModel):
    deal_type: WholesaleDealType = WholesaleDealType.ASSIGNMENT
    assignment_fee: Decimal = Decimal("10000")
    end_buyer_price: Decimal | None = None
    earnest_money: Decimal = Decimal("1000")
    marketing_costs: Decimal = Decimal("500")
    title_escrow_fees: Decimal = Decimal("1500")
    recording_fees: Decimal = Decimal("250")
    attorney_fees: Decimal = Decimal("500")
    other_closing_costs: Decimal = Decimal("250")
    transactional_funding_pct: Decimal | None = None
    end_buyer_rehab: Decimal | None = None
    end_buyer_strategy: EndBuyerStrategy = EndBuyerStrategy.FLIP
    end_buyer_monthly_rent: Decimal = Decimal("2000")
    end_buyer_refinance_ltv_pct: Decimal = Decimal("75")

    def to_terms(self) -> WholesaleTerms:
        return WholesaleTerms(
            deal_type=self.deal_type,
            assignment_fee=self.assignment_fee,
            end_buyer_price=self.end_buyer_price,
            earnest_money=self.earnest_money,
            marketing_costs=self.marketing_costs,
            closing_costs=WholesaleClosingCosts(
                title_escrow_fees=self.title_escrow_fees,
                recording_fees=self.recording_fees,
                attorney_fees=self.attorney_fees,
                other=self.other_closing_costs,
            ),
            transactional_funding_pct=self.transactional_funding_pct,
            end_buyer_rehab=self.end_buyer_rehab,
            end_buyer_strategy=self.end_buyer_strategy,
            end_buyer_monthly_rent=self.end_buyer_monthly_rent,
            end_buyer_refinance_ltv_pct=self.end_buyer_refinance_ltv_pct,
        )


class ExitStrategyRequest(BaseModel):
    deal: DealRequest = Field(default_factory=DealRequest)
    refinance: RefinanceRequest = Field(default_factory=RefinanceRequest)
    wholesale: WholesaleRequest = Field(default_factory=WholesaleRequest)


class NamedDeal(BaseModel):
    name: str
    deal: DealRequest


class CompareRequest(BaseModel):
    properties: list[NamedDeal]


# ---- Response schemas ----

class DealResultsResponse(BaseModel):
    purchase_closing_costs: Decimal
    total_rehab_cost: Decimal
    base_loan_amount: Decimal
    total_loan_amount: Decimal
    down_payment: Decimal
    monthly_loan_payment: Decimal
    total_loan_interest: Decimal
    total_origination_points: Decimal
    total_financing_costs: Decimal
    financed_interest_reserve: Decimal
    total_holding_costs: Decimal
    selling_commission: Decimal
    selling_closing_costs: Decimal
    total_selling_costs: Decimal
    total_project_cost: Decimal
    total_cash_needed: Decimal
    net_profit: Decimal
    roi: Decimal
    annualized_roi: Decimal
    cash_on_cash: Decimal
    cash_on_cash_unbounded: bool = False
    profit_margin: Decimal
    is_loan_capped: bool
    max_loan_amount: Decimal


class PerSqFtResponse(BaseModel):
    sqft: int
    purchase_price: Decimal
    arv: Decimal
    rehab: Decimal
    total_project_cost: Decimal
    net_profit: Decimal
    all_in_cost: Decimal
    value_add: Decimal


class ArvSuggestionResponse(BaseModel):
    value: Decimal
    confidence: Confidence
    comp_count: int
    price_per_sqft: Decimal
    coefficient_of_variation_pct: Decimal
    difference_from_subject_pct: Decimal


class AnalysisResponse(BaseModel):
    address: str
    loan_type: LoanType
    purchase_price: Decimal
    arv: Decimal
    results: DealResultsResponse
    seventy_percent_ratio: Decimal
    passes_seventy_percent_rule: bool
    per_sqft: PerSqFtResponse | None = None
    arv_suggestion: ArvSuggestionResponse | None = None


class BreakEvenResponse(BaseModel):
    target_profit: Decimal
    selling_rate: Decimal
    fixed_costs: Decimal
    break_even_arv: Decimal | None = None
    arv_for_target_profit: Decimal | None = None
    max_purchase_price: Decimal
    target_achievable: bool
    arv_cushion: Decimal
    arv_cushion_pct: Decimal


class SensitivityPointResponse(BaseModel):
    variable: SensitivityVariable
    delta_pct: Decimal
    net_profit: Decimal
    roi: Decimal
    cash_on_cash: Decimal


class SensitivityResponse(BaseModel):
    arv_adjustment_pct: Decimal
    rehab_adjustment_pct: Decimal
    holding_adjustment_pct: Decimal
    adjusted_arv: Decimal
    adjusted_rehab: Decimal
    adjusted_holding_months: int
    base: DealResultsResponse
    adjusted: DealResultsResponse
    profit_change: Decimal
    profit_change_pct: Decimal
    seventy_percent_ratio: Decimal
    sweep: list[SensitivityPointResponse] = []


class LenderQuoteResponse(BaseModel):
    name: str
    interest_rate_pct: Decimal
    points_pct: Decimal
    lender_fees: Decimal
    loan_amount: Decimal
    points_cost: Decimal
    monthly_payment: Decimal
    total_interest: Decimal
    upfront_costs: Decimal
    total_financing_cost: Decimal
    cash_needed: Decimal
    net_profit: Decimal


class LenderComparisonResponse(BaseModel):
    quotes: list[LenderQuoteResponse]
    best_profit: str | None = None
    lowest_upfront: str | None = None
    lowest_total_cost: str | None = None


class DscrQualificationResponse(BaseModel):
    loan_amount: Decimal
    down_payment_amount: Decimal
    monthly_payment: Decimal
    total_debt_service: Decimal
    dscr: Decimal
    status: DscrStatus
    recommended_down_payment_pct: Decimal


class RefinanceResponse(BaseModel):
    new_loan_amount: Decimal
    refinance_costs: Decimal
    cash_out: Decimal
    cost_basis: Decimal
    cash_left_in_deal: Decimal
    needs_additional_down_payment: bool
    monthly_principal_interest: Decimal
    monthly_pmi: Decimal
    total_debt_service: Decimal
    vacancy_loss: Decimal
    maintenance: Decimal
    management: Decimal
    capex: Decimal
    operating_expenses: Decimal
    effective_gross_income: Decimal
    noi: Decimal
    monthly_cash_flow: Decimal
    annual_cash_flow: Decimal
    cash_on_cash: Decimal
    equity_position: Decimal
    dscr: Decimal
    recommended_down_payment_pct: Decimal
    exceeds_typical_dscr_ltv: bool
    dscr_qualification: DscrQualificationResponse | None = None


class EndBuyerBrrrrResponse(BaseModel):
    refinance_loan_amount: Decimal
    cash_out: Decimal
    cash_left_in_deal: Decimal
    monthly_payment: Decimal
    monthly_cash_flow: Decimal
    annual_cash_flow: Decimal


class EndBuyerRentalResponse(BaseModel):
    annual_rent: Decimal
    operating_expenses: Decimal
    noi: Decimal
    cap_rate: Decimal
    monthly_cash_flow: Decimal


class EndBuyerResponse(BaseModel):
    purchase_price: Decimal
    closing_costs: Decimal
    rehab: Decimal
    holding_costs: Decimal
    selling_costs: Decimal
    all_in_cost: Decimal
    net_profit: Decimal
    roi: Decimal
    max_allowable_offer: Decimal
    meets_seventy_percent_rule: bool
    strategy: EndBuyerStrategy
    brrrr: EndBuyerBrrrrResponse | None = None
    rental: EndBuyerRentalResponse | None = None


class WholesaleResponse(BaseModel):
    deal_type: WholesaleDealType
    contract_price: Decimal
    end_buyer_price: Decimal
    assignment_fee: Decimal
    transactional_funding_cost: Decimal
    total_costs: Decimal
    cash_invested: Decimal
    net_profit: Decimal
    roi: Decimal
    viability: Viability
    end_buyer: EndBuyerResponse


class StrategySummaryResponse(BaseModel):
    strategy: ExitStrategy
    profit: Decimal
    cash_needed: Decimal
    timeframe_months: int
    cash_on_cash: Decimal | None = None


class ExitStrategyResponse(BaseModel):
    strategies: list[StrategySummaryResponse]
    refinance: RefinanceResponse
    wholesale: WholesaleResponse
    best_profit: ExitStrategy
    lowest_cash: ExitStrategy
    fastest: ExitStrategy


class PropertySnapshotResponse(BaseModel):
    name: str
    address: str
    results: DealResultsResponse
    seventy_percent_ratio: Decimal
    passes_seventy_percent_rule: bool


class PropertyComparisonResponse(BaseModel):
    properties: list[PropertySnapshotResponse]
    best_profit: str
    best_roi: str
    best_cash_on_cash: str
    lowest_cash_needed: str
