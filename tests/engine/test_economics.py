"""Tests for the deal economics engine.

Most assertions are against the worked scenario in conftest.py.
"""

from dataclasses import replace
from decimal import Decimal

import pytest

from flipcalc.models.assumptions import (
    DetailedHoldingCosts,
    FixedAmount,
    LoanType,
    PercentOf,
)
from flipcalc.models.rehab import ItemizedRehab, RehabCategory, RehabLineItem
from flipcalc.models.results import DealResults
from flipcalc.engine.debt import amortization_schedule, holding_period_interest, monthly_payment
from flipcalc.engine.economics import compute_deal_economics

CENTS = Decimal("0.01")


class TestWorkedScenario:
    @pytest.fixture
    def results(self, worked_deal) -> DealResults:
        return compute_deal_economics(worked_deal)

    def test_purchase_and_rehab(self, results):
        assert results.purchase_closing_costs == Decimal("7500")
        assert results.total_rehab_cost == Decimal("45000")

    def test_financing(self, results):
        assert results.down_payment == Decimal("29500")
        assert results.base_loan_amount == Decimal("265500")
        assert results.total_loan_amount == Decimal("265500")
        assert results.total_origination_points == Decimal("5310")
        assert results.monthly_loan_payment == Decimal("2212.5")
        assert results.total_loan_interest == Decimal("13275")
        assert results.total_financing_costs == Decimal("18585")

    def test_holding_and_selling(self, results):
        assert results.total_holding_costs == Decimal("3000")
        assert results.selling_commission == Decimal("22500")
        assert results.selling_closing_costs == Decimal("3750")
        assert results.total_selling_costs == Decimal("26250")

    def test_totals(self, results):
        assert results.total_project_cost == Decimal("350335")
        assert results.net_profit == Decimal("24665")
        # 29,500 down + 7,500 closing + 5,310 points + 3,000 holding + 13,275 interest
        assert results.total_cash_needed == Decimal("58585")

    def test_metrics(self, results):
        assert results.roi.quantize(CENTS) == Decimal("7.04")
        assert results.annualized_roi == results.roi * 12 / 6
        assert results.cash_on_cash.quantize(CENTS) == Decimal("42.10")
        assert results.profit_margin.quantize(CENTS) == Decimal("6.58")

    def test_loan_over_seventy_percent_of_arv_is_flagged(self, results):
        # Cap is 70% of $375K = $262,500; the loan is $265,500
        assert results.max_loan_amount == Decimal("262500")
        assert results.is_loan_capped

    def test_cap_never_clamps_the_loan(self, results):
        assert results.total_loan_amount > results.max_loan_amount


class TestIdempotence:
    def test_same_inputs_same_results(self, worked_deal, itemized_deal, conventional_deal):
        for deal in (worked_deal, itemized_deal, conventional_deal):
            assert compute_deal_economics(deal) == compute_deal_economics(deal)


class TestZeroGuard:
    @pytest.mark.parametrize("price, arv", [
        (Decimal("0"), Decimal("375000")),
        (Decimal("250000"), Decimal("0")),
        (Decimal("-1"), Decimal("375000")),
        (Decimal("250000"), Decimal("-5")),
    ])
    def test_invalid_deal_returns_zero_results(self, worked_deal, price, arv):
        results = compute_deal_economics(replace(worked_deal, purchase_price=price, arv=arv))
        assert results == DealResults()
        assert results.net_profit == 0
        assert not results.is_loan_capped


class TestCashPurchase:
    def test_cash_identity(self, cash_deal):
        results = compute_deal_economics(cash_deal)
        assert results.total_cash_needed == (
            cash_deal.purchase_price
            + results.purchase_closing_costs
            + results.total_rehab_cost
            + results.total_holding_costs
        )
        assert results.total_cash_needed == Decimal("305500")

    def test_no_loan_fields(self, cash_deal):
        results = compute_deal_economics(cash_deal)
        assert results.down_payment == Decimal("295000")
        assert results.total_loan_amount == 0
        assert results.monthly_loan_payment == 0
        assert results.total_financing_costs == 0
        assert not results.is_loan_capped

    def test_roll_toggles_do_not_hide_closing_costs(self, cash_deal):
        plain = compute_deal_economics(cash_deal)
        rolled = compute_deal_economics(replace(cash_deal, roll_closing_costs=True, roll_points=True))
        assert rolled == plain

    def test_profit(self, cash_deal):
        results = compute_deal_economics(cash_deal)
        assert results.total_project_cost == Decimal("331750")
        assert results.net_profit == Decimal("43250")


class TestConventionalOverride:
    def test_toggles_have_no_effect(self, conventional_deal):
        plain = replace(
            conventional_deal,
            finance_rehab=False,
            roll_closing_costs=False,
            roll_points=False,
            interest_only=False,
            interest_reserve_months=0,
        )
        assert compute_deal_economics(conventional_deal) == compute_deal_economics(plain)

    def test_thirty_year_amortized_loan(self, conventional_deal):
        results = compute_deal_economics(conventional_deal)
        # Rehab is not financed: 10% down on the $250K purchase only
        assert results.base_loan_amount == Decimal("225000")
        assert results.total_loan_amount == Decimal("225000")
        assert results.monthly_loan_payment == monthly_payment(Decimal("225000"), Decimal("10"), 360)
        schedule = amortization_schedule(Decimal("225000"), Decimal("10"), 360, periods=6)
        assert results.total_loan_interest == schedule.total_interest
        assert results.financed_interest_reserve == 0

    def test_rehab_and_closing_paid_in_cash(self, conventional_deal):
        results = compute_deal_economics(conventional_deal)
        assert results.total_cash_needed == (
            Decimal("25000") + Decimal("7500") + Decimal("45000") + Decimal("4500")
            + Decimal("3000") + results.total_loan_interest
        )

    def test_never_flagged_over_cap(self, conventional_deal):
        results = compute_deal_economics(replace(conventional_deal, max_loan_to_arv_pct=Decimal("50")))
        assert not results.is_loan_capped


class TestHardMoneyOptions:
    def test_interest_only_payment(self, worked_deal):
        results = compute_deal_economics(worked_deal)
        assert results.monthly_loan_payment == (
            results.total_loan_amount * worked_deal.interest_rate_pct / 100 / 12
        )
        assert results.total_loan_interest == results.monthly_loan_payment * worked_deal.holding_months

    def test_amortized_hard_money(self, worked_deal):
        results = compute_deal_economics(replace(worked_deal, interest_only=False))
        pmt = monthly_payment(Decimal("265500"), Decimal("10"), 12)
        assert results.monthly_loan_payment == pmt
        assert results.total_loan_interest == holding_period_interest(
            Decimal("265500"), Decimal("10"), pmt, 6
        )

    def test_amortized_without_term_charges_interest_only(self, worked_deal):
        results = compute_deal_economics(
            replace(worked_deal, interest_only=False, loan_term_months=0)
        )
        assert results.monthly_loan_payment == Decimal("2212.5")
        assert results.total_loan_interest == Decimal("13275")

    def test_rehab_not_financed(self, worked_deal):
        results = compute_deal_economics(replace(worked_deal, finance_rehab=False))
        assert results.base_loan_amount == Decimal("225000")
        assert results.total_origination_points == Decimal("4500")
        assert results.total_loan_interest == Decimal("11250")
        # 25,000 down + 7,500 closing + 45,000 rehab + 4,500 points + 3,000 holding + 11,250 interest
        assert results.total_cash_needed == Decimal("96250")

    def test_roll_closing_costs(self, worked_deal):
        results = compute_deal_economics(replace(worked_deal, roll_closing_costs=True))
        assert results.total_loan_amount == Decimal("273000")
        # Points stay on the base loan
        assert results.total_origination_points == Decimal("5310")
        assert results.total_loan_interest == Decimal("13650")
        assert results.total_cash_needed == Decimal("51460")

    def test_roll_points(self, worked_deal):
        results = compute_deal_economics(replace(worked_deal, roll_points=True))
        assert results.total_loan_amount == Decimal("270810")
        assert results.total_cash_needed == (
            Decimal("29500") + Decimal("7500") + Decimal("3000") + results.total_loan_interest
        )

    def test_dollar_down_payment(self, worked_deal):
        results = compute_deal_economics(
            replace(worked_deal, down_payment=FixedAmount(Decimal("50000")))
        )
        assert results.down_payment == Decimal("50000")
        assert results.base_loan_amount == Decimal("245000")

    def test_down_payment_larger_than_purchase(self, worked_deal):
        results = compute_deal_economics(
            replace(worked_deal, down_payment=FixedAmount(Decimal("400000")))
        )
        assert results.base_loan_amount == 0
        assert results.total_loan_interest == 0


class TestInterestReserve:
    def test_reserve_covers_interest(self, worked_deal):
        results = compute_deal_economics(replace(worked_deal, interest_reserve_months=3))
        assert results.financed_interest_reserve == Decimal("6637.5")
        assert results.total_cash_needed == Decimal("58585") - Decimal("6637.5")

    def test_reserve_beyond_holding_period(self, worked_deal):
        results = compute_deal_economics(replace(worked_deal, interest_reserve_months=12))
        assert results.financed_interest_reserve == Decimal("26550")
        # Only the 6 held months of interest are covered
        assert results.total_cash_needed == Decimal("58585") - Decimal("13275")

    def test_reserve_does_not_change_profit(self, worked_deal):
        base = compute_deal_economics(worked_deal)
        reserved = compute_deal_economics(replace(worked_deal, interest_reserve_months=3))
        assert reserved.net_profit == base.net_profit


class TestCostModes:
    def test_itemized_closing_and_selling(self, itemized_deal):
        results = compute_deal_economics(itemized_deal)
        assert results.purchase_closing_costs == Decimal("8250")
        assert results.selling_closing_costs == Decimal("3650")
        assert results.total_selling_costs == Decimal("22500") + Decimal("3650")

    def test_fixed_closing_costs(self, worked_deal):
        results = compute_deal_economics(
            replace(worked_deal, purchase_closing_costs=FixedAmount(Decimal("6000")))
        )
        assert results.purchase_closing_costs == Decimal("6000")

    def test_itemized_rehab(self, worked_deal):
        rehab = ItemizedRehab(categories=(
            RehabCategory("Kitchen", (RehabLineItem("Cabinets", Decimal("8000")),)),
            RehabCategory("Bathrooms", (
                RehabLineItem("Vanity/Sink", Decimal("1200")),
                RehabLineItem("Toilet"),
            )),
        ))
        results = compute_deal_economics(replace(worked_deal, rehab=rehab))
        assert results.total_rehab_cost == Decimal("9200")

    def test_detailed_holding_costs(self, worked_deal):
        holding = DetailedHoldingCosts(monthly_hoa=Decimal("75"), lawn_care=Decimal("25"))
        results = compute_deal_economics(replace(worked_deal, holding_costs=holding))
        assert results.total_holding_costs == Decimal("600") * 6

    def test_seller_concessions(self, worked_deal):
        results = compute_deal_economics(
            replace(worked_deal, seller_concessions=Decimal("5000"))
        )
        assert results.total_selling_costs == Decimal("31250")
        assert results.net_profit == Decimal("19665")

    def test_percent_selling_closing(self, worked_deal):
        results = compute_deal_economics(
            replace(worked_deal, selling_closing_costs=PercentOf(Decimal("2")))
        )
        assert results.selling_closing_costs == Decimal("7500")


class TestEdgeCases:
    def test_zero_holding_months(self, worked_deal):
        results = compute_deal_economics(replace(worked_deal, holding_months=0))
        assert results.total_loan_interest == 0
        assert results.total_holding_costs == 0
        assert results.annualized_roi == 0

    def test_unbounded_cash_on_cash(self, worked_deal):
        deal = replace(
            worked_deal,
            loan_type=LoanType.HARD_MONEY,
            down_payment=PercentOf(Decimal("0")),
            roll_closing_costs=True,
            roll_points=True,
            holding_months=0,
        )
        results = compute_deal_economics(deal)
        assert results.total_cash_needed == 0
        assert results.net_profit > 0
        assert results.cash_on_cash == 0
        assert results.cash_on_cash_unbounded

    def test_losing_deal(self, worked_deal):
        results = compute_deal_economics(replace(worked_deal, arv=Decimal("300000")))
        assert results.net_profit < 0
        assert results.roi < 0
        assert not results.cash_on_cash_unbounded
