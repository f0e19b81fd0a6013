from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum

from flipcalc.models.rehab import RehabBudget, SimpleRehab

HUNDRED = Decimal("100")


class LoanType(Enum):
    CASH = "cash"
    HARD_MONEY = "hard_money"
    CONVENTIONAL = "conventional"


# ---- Cost modes ----
#
# Every cost that can be entered either as a percentage or as dollars is one
# of the variants below. Each reduces to `base * rate + fixed`, which keeps the
# cost linear in its base for the break-even solver.

@dataclass(frozen=True)
class PercentOf:
    """Cost expressed as a percentage of a base amount (3 = 3%)."""
    pct: Decimal

    @property
    def rate(self) -> Decimal:
        return self.pct / HUNDRED

    @property
    def fixed(self) -> Decimal:
        return Decimal("0")

    def resolve(self, base: Decimal) -> Decimal:
        return base * self.pct / HUNDRED


@dataclass(frozen=True)
class FixedAmount:
    amount: Decimal

    @property
    def rate(self) -> Decimal:
        return Decimal("0")

    @property
    def fixed(self) -> Decimal:
        return self.amount

    def resolve(self, base: Decimal) -> Decimal:
        return self.amount


@dataclass(frozen=True)
class ItemizedClosingCosts:
    """Buyer-side closing costs at purchase, entered line by line."""
    title_insurance: Decimal = Decimal("2000")
    appraisal: Decimal = Decimal("500")
    attorney_fees: Decimal = Decimal("1500")
    recording_fees: Decimal = Decimal("250")
    transfer_taxes: Decimal = Decimal("2500")
    lender_fees: Decimal = Decimal("500")
    escrow_fees: Decimal = Decimal("500")
    inspections: Decimal = Decimal("500")
    other: Decimal = Decimal("0")

    @property
    def rate(self) -> Decimal:
        return Decimal("0")

    @property
    def fixed(self) -> Decimal:
        return (
            self.title_insurance + self.appraisal + self.attorney_fees
            + self.recording_fees + self.transfer_taxes + self.lender_fees
            + self.escrow_fees + self.inspections + self.other
        )

    def resolve(self, base: Decimal) -> Decimal:
        return self.fixed


@dataclass(frozen=True)
class ItemizedSellingCosts:
    """Seller-side closing costs at sale (commission excluded)."""
    title_insurance: Decimal = Decimal("1500")
    escrow_fees: Decimal = Decimal("1000")
    transfer_tax: Decimal = Decimal("0")
    attorney_fees: Decimal = Decimal("500")
    recording_fees: Decimal = Decimal("150")
    home_warranty: Decimal = Decimal("500")
    other: Decimal = Decimal("0")

    @property
    def rate(self) -> Decimal:
        return Decimal("0")

    @property
    def fixed(self) -> Decimal:
        return (
            self.title_insurance + self.escrow_fees + self.transfer_tax
            + self.attorney_fees + self.recording_fees + self.home_warranty
            + self.other
        )

    def resolve(self, base: Decimal) -> Decimal:
        return self.fixed


PurchaseClosingCosts = PercentOf | FixedAmount | ItemizedClosingCosts
DownPayment = PercentOf | FixedAmount
SellingClosingCosts = PercentOf | ItemizedSellingCosts


# ---- Holding costs ----

@dataclass(frozen=True)
class HoldingCosts:
    """Monthly carrying costs while the property is held."""
    property_taxes: Decimal = Decimal("250")
    insurance: Decimal = Decimal("100")
    utilities: Decimal = Decimal("150")

    @property
    def hoa(self) -> Decimal:
        return Decimal("0")

    @property
    def monthly_total(self) -> Decimal:
        return self.property_taxes + self.insurance + self.utilities


@dataclass(frozen=True)
class DetailedHoldingCosts(HoldingCosts):
    monthly_hoa: Decimal = Decimal("0")
    lawn_care: Decimal = Decimal("0")
    pool_maintenance: Decimal = Decimal("0")
    security_alarm: Decimal = Decimal("0")
    vacancy_insurance: Decimal = Decimal("0")
    other: Decimal = Decimal("0")

    @property
    def hoa(self) -> Decimal:
        return self.monthly_hoa

    @property
    def monthly_total(self) -> Decimal:
        return (
            super().monthly_total
            + self.monthly_hoa + self.lawn_care + self.pool_maintenance
            + self.security_alarm + self.vacancy_insurance + self.other
        )


@dataclass(frozen=True)
class DealAssumptions:
    """Every lever of a fix & flip deal. Defaults are the reset state.

    Rates are in percent (10 = 10%).
    """
    address: str = ""

    # Property
    purchase_price: Decimal = Decimal("250000")
    arv: Decimal = Decimal("375000")
    purchase_closing_costs: PurchaseClosingCosts = field(
        default_factory=lambda: PercentOf(Decimal("3"))
    )

    # Rehab
    rehab: RehabBudget = field(default_factory=lambda: SimpleRehab(Decimal("45000")))

    # Financing
    loan_type: LoanType = LoanType.HARD_MONEY
    down_payment: DownPayment = field(default_factory=lambda: PercentOf(Decimal("10")))
    interest_rate_pct: Decimal = Decimal("10")  # Annual, nominal
    loan_term_months: int = 12
    origination_points_pct: Decimal = Decimal("2")
    interest_only: bool = True

    # Hard money options (ignored for cash and conventional)
    finance_rehab: bool = True
    roll_closing_costs: bool = False
    roll_points: bool = False
    interest_reserve_months: int = 0
    max_loan_to_arv_pct: Decimal = Decimal("70")  # Advisory cap, never clamps

    # Holding
    holding_months: int = 6
    holding_costs: HoldingCosts = field(default_factory=HoldingCosts)

    # Selling
    selling_commission_pct: Decimal = Decimal("6")
    selling_closing_costs: SellingClosingCosts = field(
        default_factory=lambda: PercentOf(Decimal("1"))
    )
    seller_concessions: Decimal = Decimal("0")
