from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum

from flipcalc.models.assumptions import DealAssumptions


@dataclass(frozen=True)
class DealResults:
    """Full cost/profit breakdown for one set of deal assumptions.

    The default instance (every figure zero) is what the engine returns for
    a deal it cannot evaluate.
    """
    purchase_closing_costs: Decimal = Decimal("0")
    total_rehab_cost: Decimal = Decimal("0")

    # Financing
    base_loan_amount: Decimal = Decimal("0")  # Purchase (+ rehab) - down payment
    total_loan_amount: Decimal = Decimal("0")  # Base + rolled-in costs
    down_payment: Decimal = Decimal("0")
    monthly_loan_payment: Decimal = Decimal("0")
    total_loan_interest: Decimal = Decimal("0")  # Over the holding period only
    total_origination_points: Decimal = Decimal("0")
    total_financing_costs: Decimal = Decimal("0")
    financed_interest_reserve: Decimal = Decimal("0")

    # Holding & selling
    total_holding_costs: Decimal = Decimal("0")
    selling_commission: Decimal = Decimal("0")
    selling_closing_costs: Decimal = Decimal("0")
    total_selling_costs: Decimal = Decimal("0")

    # Totals & metrics
    total_project_cost: Decimal = Decimal("0")
    total_cash_needed: Decimal = Decimal("0")
    net_profit: Decimal = Decimal("0")
    roi: Decimal = Decimal("0")
    annualized_roi: Decimal = Decimal("0")
    cash_on_cash: Decimal = Decimal("0")
    profit_margin: Decimal = Decimal("0")

    # Validation
    is_loan_capped: bool = False
    max_loan_amount: Decimal = Decimal("0")

    @property
    def cash_on_cash_unbounded(self) -> bool:
        """Profitable deal that needs no cash: the return has no finite value."""
        return self.total_cash_needed == 0 and self.net_profit > 0


@dataclass(frozen=True)
class BreakEvenAnalysis:
    target_profit: Decimal = Decimal("0")
    selling_rate: Decimal = Decimal("0")  # Fraction of ARV
    fixed_costs: Decimal = Decimal("0")

    # None when selling costs consume 100%+ of ARV
    break_even_arv: Decimal | None = None
    arv_for_target_profit: Decimal | None = None

    max_purchase_price: Decimal = Decimal("0")
    target_achievable: bool = False

    arv_cushion: Decimal = Decimal("0")
    arv_cushion_pct: Decimal = Decimal("0")


class SensitivityVariable(Enum):
    ARV = "arv"
    REHAB = "rehab"
    HOLDING = "holding"


@dataclass(frozen=True)
class SensitivityResult:
    arv_adjustment_pct: Decimal
    rehab_adjustment_pct: Decimal
    holding_adjustment_pct: Decimal
    adjusted_assumptions: DealAssumptions
    base: DealResults
    adjusted: DealResults
    profit_change: Decimal = Decimal("0")
    profit_change_pct: Decimal = Decimal("0")
    seventy_percent_ratio: Decimal = Decimal("0")


@dataclass(frozen=True)
class SensitivityPoint:
    variable: SensitivityVariable
    delta_pct: Decimal
    net_profit: Decimal
    roi: Decimal
    cash_on_cash: Decimal


@dataclass(frozen=True)
class PerSqFtMetrics:
    sqft: int = 0
    purchase_price: Decimal = Decimal("0")
    arv: Decimal = Decimal("0")
    rehab: Decimal = Decimal("0")
    total_project_cost: Decimal = Decimal("0")
    net_profit: Decimal = Decimal("0")
    all_in_cost: Decimal = Decimal("0")
    value_add: Decimal = Decimal("0")


@dataclass(frozen=True)
class PropertySnapshot:
    name: str
    assumptions: DealAssumptions
    results: DealResults
    seventy_percent_ratio: Decimal = Decimal("0")
    passes_seventy_percent_rule: bool = False


@dataclass(frozen=True)
class PropertyComparison:
    properties: list[PropertySnapshot] = field(default_factory=list)
    best_profit: str | None = None
    best_roi: str | None = None
    best_cash_on_cash: str | None = None
    lowest_cash_needed: str | None = None


@dataclass(frozen=True)
class LenderScenario:
    name: str
    interest_rate_pct: Decimal
    points_pct: Decimal
    lender_fees: Decimal = Decimal("500")


@dataclass(frozen=True)
class LenderQuote:
    name: str
    interest_rate_pct: Decimal
    points_pct: Decimal
    lender_fees: Decimal
    loan_amount: Decimal = Decimal("0")
    points_cost: Decimal = Decimal("0")
    monthly_payment: Decimal = Decimal("0")
    total_interest: Decimal = Decimal("0")
    upfront_costs: Decimal = Decimal("0")  # Points + lender fees
    total_financing_cost: Decimal = Decimal("0")  # Interest + points + fees
    cash_needed: Decimal = Decimal("0")
    net_profit: Decimal = Decimal("0")


@dataclass(frozen=True)
class LenderComparison:
    quotes: list[LenderQuote] = field(default_factory=list)
    best_profit: str | None = None
    lowest_upfront: str | None = None
    lowest_total_cost: str | None = None
