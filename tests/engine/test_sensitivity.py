from dataclasses import replace
from decimal import Decimal

from flipcalc.models.rehab import SimpleRehab
from flipcalc.models.results import SensitivityVariable
from flipcalc.engine.economics import compute_deal_economics
from flipcalc.engine.rehab import itemized_rehab
from flipcalc.engine.sensitivity import (
    adjust_assumptions,
    default_deltas,
    run_sensitivity,
    sensitivity_sweep,
)


class TestAdjustAssumptions:
    def test_no_change(self, worked_deal):
        adjusted = adjust_assumptions(worked_deal)
        assert adjusted.arv == worked_deal.arv
        assert adjusted.rehab.total_cost == worked_deal.rehab.total_cost
        assert adjusted.holding_months == worked_deal.holding_months

    def test_arv_up(self, worked_deal):
        adjusted = adjust_assumptions(worked_deal, arv_pct=Decimal("10"))
        assert adjusted.arv == Decimal("412500")

    def test_rehab_down(self, worked_deal):
        adjusted = adjust_assumptions(worked_deal, rehab_pct=Decimal("-30"))
        assert adjusted.rehab == SimpleRehab(Decimal("31500"))

    def test_rounds_half_up_to_whole_dollars(self, worked_deal):
        deal = replace(worked_deal, arv=Decimal("100001"))
        adjusted = adjust_assumptions(deal, arv_pct=Decimal("-50"))
        # 50,000.5 rounds up
        assert adjusted.arv == Decimal("50001")

    def test_holding_doubles(self, worked_deal):
        assert adjust_assumptions(worked_deal, holding_pct=Decimal("100")).holding_months == 12

    def test_holding_never_below_one_month(self, worked_deal):
        assert adjust_assumptions(worked_deal, holding_pct=Decimal("-100")).holding_months == 1

    def test_itemized_rehab_collapses_to_single_figure(self, worked_deal):
        deal = replace(worked_deal, rehab=itemized_rehab({"Kitchen": {"Cabinets": Decimal("10000")}}))
        adjusted = adjust_assumptions(deal, rehab_pct=Decimal("20"))
        assert adjusted.rehab == SimpleRehab(Decimal("12000"))

    def test_original_untouched(self, worked_deal):
        adjust_assumptions(worked_deal, arv_pct=Decimal("10"), rehab_pct=Decimal("10"))
        assert worked_deal.arv == Decimal("375000")
        assert worked_deal.rehab == SimpleRehab(Decimal("45000"))


class TestRunSensitivity:
    def test_zero_adjustment_matches_base(self, worked_deal):
        result = run_sensitivity(worked_deal)
        assert result.adjusted == result.base
        assert result.profit_change == 0
        assert result.profit_change_pct == 0

    def test_arv_change_flows_through_selling_costs(self, worked_deal):
        result = run_sensitivity(worked_deal, arv_pct=Decimal("10"))
        # +37,500 ARV less 7% selling costs on it
        assert result.profit_change == Decimal("34875")
        assert result.profit_change_pct == Decimal("34875") / Decimal("24665") * 100

    def test_matches_engine_on_adjusted_deal(self, worked_deal):
        result = run_sensitivity(
            worked_deal,
            arv_pct=Decimal("-5"),
            rehab_pct=Decimal("15"),
            holding_pct=Decimal("50"),
        )
        assert result.adjusted == compute_deal_economics(result.adjusted_assumptions)
        assert result.adjusted_assumptions.holding_months == 9

    def test_seventy_percent_ratio_uses_adjusted_figures(self, worked_deal):
        result = run_sensitivity(worked_deal, rehab_pct=Decimal("-30"))
        # (250,000 + 31,500) / 375,000
        assert result.seventy_percent_ratio == Decimal("281500") / Decimal("375000") * 100

    def test_zero_base_profit(self, worked_deal):
        deal = replace(worked_deal, arv=Decimal("0"))
        result = run_sensitivity(deal, arv_pct=Decimal("10"))
        assert result.profit_change_pct == 0


class TestSweep:
    def test_default_ranges(self):
        assert len(default_deltas(SensitivityVariable.ARV)) == 41
        assert default_deltas(SensitivityVariable.REHAB)[0] == Decimal("-30")
        assert default_deltas(SensitivityVariable.REHAB)[-1] == Decimal("50")
        assert len(default_deltas(SensitivityVariable.HOLDING)) == 16

    def test_profit_rises_with_arv(self, worked_deal):
        points = sensitivity_sweep(worked_deal, SensitivityVariable.ARV)
        profits = [p.net_profit for p in points]
        assert profits == sorted(profits)

    def test_profit_falls_with_holding(self, worked_deal):
        points = sensitivity_sweep(worked_deal, SensitivityVariable.HOLDING)
        profits = [p.net_profit for p in points]
        assert profits == sorted(profits, reverse=True)

    def test_custom_deltas(self, worked_deal):
        points = sensitivity_sweep(
            worked_deal, SensitivityVariable.REHAB, [Decimal("0"), Decimal("10")]
        )
        assert [p.delta_pct for p in points] == [Decimal("0"), Decimal("10")]
        assert points[0].net_profit == Decimal("24665")
        # $4,500 more rehab, financed: also adds points and interest
        assert points[1].net_profit < Decimal("24665") - Decimal("4500")
