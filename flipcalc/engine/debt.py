"""Loan payment and amortization math.

Pure functions: Decimal in, Decimal/dataclass out. No I/O. Values are
carried at full Decimal precision; rounding is left to the caller.
"""

from dataclasses import dataclass
from decimal import Decimal

ZERO = Decimal("0")


@dataclass(frozen=True)
class AmortizationPayment:
    period: int
    payment: Decimal
    principal: Decimal
    interest: Decimal
    balance: Decimal


@dataclass(frozen=True)
class AmortizationSchedule:
    payments: list[AmortizationPayment]
    monthly_payment: Decimal
    total_interest: Decimal
    total_principal: Decimal

    @property
    def ending_balance(self) -> Decimal:
        return self.payments[-1].balance if self.payments else ZERO


def monthly_rate(annual_rate_pct: Decimal) -> Decimal:
    return annual_rate_pct / Decimal("100") / Decimal("12")


def interest_only_payment(principal: Decimal, annual_rate_pct: Decimal) -> Decimal:
    return principal * annual_rate_pct / Decimal("100") / Decimal("12")


def monthly_payment(principal: Decimal, annual_rate_pct: Decimal, term_months: int) -> Decimal:
    """Fixed monthly payment that fully amortizes `principal` over `term_months`."""
    if principal <= 0 or term_months <= 0:
        return ZERO

    r = monthly_rate(annual_rate_pct)
    if r == 0:
        return principal / term_months

    # M = P * [r(1+r)^n] / [(1+r)^n - 1]
    factor = (1 + r) ** term_months
    return principal * r * factor / (factor - 1)


def holding_period_interest(
    principal: Decimal,
    annual_rate_pct: Decimal,
    payment: Decimal,
    months: int,
) -> Decimal:
    """Interest accrued over the first `months` payments of an amortizing loan.

    Runs the balance recurrence month by month; the holding window is usually
    far shorter than the loan term.
    """
    r = monthly_rate(annual_rate_pct)
    balance = principal
    interest_paid = ZERO
    for _ in range(max(months, 0)):
        interest = balance * r
        interest_paid += interest
        balance -= payment - interest
    return interest_paid


def amortization_schedule(
    principal: Decimal,
    annual_rate_pct: Decimal,
    term_months: int,
    periods: int | None = None,
) -> AmortizationSchedule:
    """Generate a full or partial amortization schedule.

    Args:
        principal: Loan amount
        annual_rate_pct: Annual interest rate in percent (e.g. 10 for 10%)
        term_months: Loan term in months
        periods: If provided, only generate this many months
    """
    pmt = monthly_payment(principal, annual_rate_pct, term_months)
    r = monthly_rate(annual_rate_pct)
    n_periods = term_months if periods is None else periods

    payments: list[AmortizationPayment] = []
    balance = principal
    total_interest = ZERO
    total_principal = ZERO

    for period in range(1, n_periods + 1):
        interest = balance * r
        principal_paid = pmt - interest

        # Final payment adjustment
        if principal_paid > balance:
            principal_paid = balance
            actual_payment = interest + principal_paid
        else:
            actual_payment = pmt

        balance -= principal_paid
        total_interest += interest
        total_principal += principal_paid

        payments.append(AmortizationPayment(
            period=period,
            payment=actual_payment,
            principal=principal_paid,
            interest=interest,
            balance=balance,
        ))

    return AmortizationSchedule(
        payments=payments,
        monthly_payment=pmt,
        total_interest=total_interest,
        total_principal=total_principal,
    )
