from decimal import Decimal

from flipcalc.engine.debt import (
    amortization_schedule,
    holding_period_interest,
    interest_only_payment,
    monthly_payment,
)

CENTS = Decimal("0.01")


class TestMonthlyPayment:
    def test_standard_mortgage(self):
        """$400K loan at 7% for 30 years."""
        pmt = monthly_payment(Decimal("400000"), Decimal("7"), 360)
        assert pmt.quantize(CENTS) == Decimal("2661.21")

    def test_zero_rate(self):
        pmt = monthly_payment(Decimal("360000"), Decimal("0"), 360)
        assert pmt == Decimal("1000")

    def test_zero_principal(self):
        assert monthly_payment(Decimal("0"), Decimal("7"), 360) == Decimal("0")

    def test_zero_term(self):
        assert monthly_payment(Decimal("100000"), Decimal("7"), 0) == Decimal("0")


class TestInterestOnlyPayment:
    def test_hard_money_payment(self):
        # 265,500 * 10% / 12
        assert interest_only_payment(Decimal("265500"), Decimal("10")) == Decimal("2212.5")

    def test_zero_rate(self):
        assert interest_only_payment(Decimal("265500"), Decimal("0")) == Decimal("0")


class TestAmortizationSchedule:
    def test_payment_count(self):
        schedule = amortization_schedule(Decimal("400000"), Decimal("7"), 360)
        assert len(schedule.payments) == 360

    def test_partial_schedule(self):
        schedule = amortization_schedule(Decimal("400000"), Decimal("7"), 360, periods=6)
        assert len(schedule.payments) == 6

    def test_first_payment_mostly_interest(self):
        schedule = amortization_schedule(Decimal("400000"), Decimal("7"), 360)
        first = schedule.payments[0]
        # 400,000 * 7% / 12 = $2,333.33
        assert first.interest.quantize(CENTS) == Decimal("2333.33")
        assert first.principal.quantize(CENTS) == Decimal("327.88")

    def test_balance_decreases(self):
        schedule = amortization_schedule(Decimal("265500"), Decimal("10"), 12)
        for i in range(1, len(schedule.payments)):
            assert schedule.payments[i].balance < schedule.payments[i - 1].balance

    def test_full_term_ends_at_zero(self):
        schedule = amortization_schedule(Decimal("400000"), Decimal("7"), 360)
        assert abs(schedule.ending_balance) < CENTS

    def test_short_term_ends_at_zero(self):
        schedule = amortization_schedule(Decimal("265500"), Decimal("10"), 12)
        assert abs(schedule.ending_balance) < CENTS
        assert abs(schedule.total_principal - Decimal("265500")) < CENTS

    def test_zero_rate_straight_line(self):
        schedule = amortization_schedule(Decimal("12000"), Decimal("0"), 12)
        assert all(p.interest == 0 for p in schedule.payments)
        assert schedule.payments[0].balance == Decimal("11000")
        assert schedule.ending_balance == Decimal("0")


class TestHoldingPeriodInterest:
    def test_matches_schedule(self):
        principal, rate = Decimal("225000"), Decimal("10")
        pmt = monthly_payment(principal, rate, 360)
        schedule = amortization_schedule(principal, rate, 360, periods=6)
        assert holding_period_interest(principal, rate, pmt, 6) == schedule.total_interest

    def test_less_than_interest_only(self):
        """Principal paydown shrinks interest below the interest-only total."""
        principal, rate = Decimal("265500"), Decimal("10")
        pmt = monthly_payment(principal, rate, 12)
        amortized = holding_period_interest(principal, rate, pmt, 6)
        assert amortized < interest_only_payment(principal, rate) * 6

    def test_zero_months(self):
        assert holding_period_interest(Decimal("100000"), Decimal("10"), Decimal("1000"), 0) == 0
