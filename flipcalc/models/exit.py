"""Alternate exit strategies: refinance-and-hold (BRRRR) and wholesale."""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum


class RefinanceProduct(Enum):
    FIFTEEN_YEAR = "15_year"
    THIRTY_YEAR = "30_year"
    DSCR = "dscr"

    @property
    def term_months(self) -> int:
        return 180 if self is RefinanceProduct.FIFTEEN_YEAR else 360


class DscrStatus(Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    MARGINAL = "marginal"
    DIFFICULT = "difficult"


@dataclass(frozen=True)
class DscrLoanTerms:
    """Rental-income (DSCR) loan sized off ARV rather than the refinance LTV."""
    down_payment_pct: Decimal = Decimal("25")
    interest_rate_pct: Decimal = Decimal("8")
    term_years: int = 30
    interest_only: bool = False
    # None: the refinance's monthly rent
    gross_monthly_rent: Decimal | None = None


@dataclass(frozen=True)
class DscrQualification:
    loan_amount: Decimal = Decimal("0")
    down_payment_amount: Decimal = Decimal("0")
    monthly_payment: Decimal = Decimal("0")
    total_debt_service: Decimal = Decimal("0")  # PITIA
    dscr: Decimal = Decimal("0")  # Gross rent / PITIA
    status: DscrStatus = DscrStatus.DIFFICULT
    recommended_down_payment_pct: Decimal = Decimal("35")


@dataclass(frozen=True)
class ItemizedRefinanceCosts:
    loan_points_pct: Decimal = Decimal("1")  # % of the new loan
    appraisal_fee: Decimal = Decimal("500")
    title_insurance: Decimal = Decimal("1500")
    recording_fees: Decimal = Decimal("250")
    attorney_fees: Decimal = Decimal("750")
    other: Decimal = Decimal("500")

    def total(self, loan_amount: Decimal) -> Decimal:
        return (
            loan_amount * self.loan_points_pct / Decimal("100")
            + self.appraisal_fee + self.title_insurance + self.recording_fees
            + self.attorney_fees + self.other
        )


@dataclass(frozen=True)
class RefinanceTerms:
    product: RefinanceProduct = RefinanceProduct.THIRTY_YEAR
    ltv_pct: Decimal = Decimal("75")
    interest_rate_pct: Decimal = Decimal("7")
    monthly_rent: Decimal = Decimal("2000")
    # DSCR product only: its rate also prices the refinance loan
    dscr_loan: DscrLoanTerms = field(default_factory=DscrLoanTerms)

    # None: flat percentage of ARV (settings.refinance_cost_pct)
    refinance_costs: ItemizedRefinanceCosts | None = None

    # Operating expenses as % of rent
    maintenance_pct: Decimal = Decimal("5")
    management_pct: Decimal = Decimal("10")
    capex_pct: Decimal = Decimal("5")
    vacancy_pct: Decimal = Decimal("8")

    additional_down_payment: Decimal = Decimal("0")
    has_pmi: bool = False
    pmi_rate_pct: Decimal = Decimal("0.5")  # Annual, charged only above 80% LTV


@dataclass(frozen=True)
class RefinanceResult:
    new_loan_amount: Decimal = Decimal("0")
    refinance_costs: Decimal = Decimal("0")
    cash_out: Decimal = Decimal("0")
    cost_basis: Decimal = Decimal("0")  # Project cost without selling costs
    cash_left_in_deal: Decimal = Decimal("0")
    needs_additional_down_payment: bool = False

    monthly_principal_interest: Decimal = Decimal("0")
    monthly_pmi: Decimal = Decimal("0")
    total_debt_service: Decimal = Decimal("0")

    vacancy_loss: Decimal = Decimal("0")
    maintenance: Decimal = Decimal("0")
    management: Decimal = Decimal("0")
    capex: Decimal = Decimal("0")
    operating_expenses: Decimal = Decimal("0")
    effective_gross_income: Decimal = Decimal("0")
    noi: Decimal = Decimal("0")

    monthly_cash_flow: Decimal = Decimal("0")
    annual_cash_flow: Decimal = Decimal("0")
    cash_on_cash: Decimal = Decimal("0")
    equity_position: Decimal = Decimal("0")

    dscr: Decimal = Decimal("0")  # NOI / debt service
    recommended_down_payment_pct: Decimal = Decimal("20")
    exceeds_typical_dscr_ltv: bool = False
    # Set for the DSCR product only
    dscr_qualification: DscrQualification | None = None


class WholesaleDealType(Enum):
    ASSIGNMENT = "assignment"
    DOUBLE_CLOSE = "double_close"


class Viability(Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    MARGINAL = "marginal"
    POOR = "poor"


@dataclass(frozen=True)
class WholesaleClosingCosts:
    """Wholesaler's own closing costs on a double close."""
    title_escrow_fees: Decimal = Decimal("1500")
    recording_fees: Decimal = Decimal("250")
    attorney_fees: Decimal = Decimal("500")
    other: Decimal = Decimal("250")

    @property
    def total(self) -> Decimal:
        return self.title_escrow_fees + self.recording_fees + self.attorney_fees + self.other


class EndBuyerStrategy(Enum):
    FLIP = "flip"
    BRRRR = "brrrr"
    RENTAL = "rental"


@dataclass(frozen=True)
class WholesaleTerms:
    deal_type: WholesaleDealType = WholesaleDealType.ASSIGNMENT
    assignment_fee: Decimal = Decimal("10000")
    # When set, the fee is derived: end buyer price - contract price
    end_buyer_price: Decimal | None = None
    earnest_money: Decimal = Decimal("1000")
    marketing_costs: Decimal = Decimal("500")
    closing_costs: WholesaleClosingCosts = field(default_factory=WholesaleClosingCosts)
    # None: settings.transactional_funding_pct
    transactional_funding_pct: Decimal | None = None
    # None: the deal's own rehab total
    end_buyer_rehab: Decimal | None = None
    end_buyer_strategy: EndBuyerStrategy = EndBuyerStrategy.FLIP
    end_buyer_monthly_rent: Decimal = Decimal("2000")
    end_buyer_refinance_ltv_pct: Decimal = Decimal("75")  # BRRRR buyer


@dataclass(frozen=True)
class EndBuyerBrrrr:
    refinance_loan_amount: Decimal = Decimal("0")
    cash_out: Decimal = Decimal("0")
    cash_left_in_deal: Decimal = Decimal("0")
    monthly_payment: Decimal = Decimal("0")
    monthly_cash_flow: Decimal = Decimal("0")
    annual_cash_flow: Decimal = Decimal("0")


@dataclass(frozen=True)
class EndBuyerRental:
    annual_rent: Decimal = Decimal("0")
    operating_expenses: Decimal = Decimal("0")
    noi: Decimal = Decimal("0")
    cap_rate: Decimal = Decimal("0")  # NOI / all-in cost
    monthly_cash_flow: Decimal = Decimal("0")


@dataclass(frozen=True)
class EndBuyerAnalysis:
    purchase_price: Decimal = Decimal("0")
    closing_costs: Decimal = Decimal("0")
    rehab: Decimal = Decimal("0")
    holding_costs: Decimal = Decimal("0")
    selling_costs: Decimal = Decimal("0")
    all_in_cost: Decimal = Decimal("0")
    net_profit: Decimal = Decimal("0")
    roi: Decimal = Decimal("0")  # Profit / all-in cost
    max_allowable_offer: Decimal = Decimal("0")
    meets_seventy_percent_rule: bool = False
    strategy: EndBuyerStrategy = EndBuyerStrategy.FLIP
    brrrr: EndBuyerBrrrr | None = None
    rental: EndBuyerRental | None = None


@dataclass(frozen=True)
class WholesaleResult:
    deal_type: WholesaleDealType
    contract_price: Decimal = Decimal("0")
    end_buyer_price: Decimal = Decimal("0")
    assignment_fee: Decimal = Decimal("0")
    transactional_funding_cost: Decimal = Decimal("0")
    total_costs: Decimal = Decimal("0")
    cash_invested: Decimal = Decimal("0")
    net_profit: Decimal = Decimal("0")
    roi: Decimal = Decimal("0")
    viability: Viability = Viability.POOR
    end_buyer: EndBuyerAnalysis = field(default_factory=EndBuyerAnalysis)


class ExitStrategy(Enum):
    FLIP = "flip"
    BRRRR = "brrrr"
    WHOLESALE = "wholesale"


@dataclass(frozen=True)
class StrategySummary:
    strategy: ExitStrategy
    profit: Decimal  # BRRRR: five-year value (cash flow + equity)
    cash_needed: Decimal
    timeframe_months: int
    # None: no cash left in the deal, return is unbounded
    cash_on_cash: Decimal | None = None


@dataclass(frozen=True)
class ExitStrategyComparison:
    strategies: list[StrategySummary] = field(default_factory=list)
    refinance: RefinanceResult | None = None
    wholesale: WholesaleResult | None = None
    best_profit: ExitStrategy | None = None
    lowest_cash: ExitStrategy | None = None
    fastest: ExitStrategy | None = None
