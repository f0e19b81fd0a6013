"""API tests for the deal routes."""

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from flipcalc.api.app import app

BASE = "/api/v1/deals"


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


class TestHealth:
    def test_health(self, client):
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok"}


class TestAnalyze:
    def test_default_deal(self, client):
        resp = client.post(f"{BASE}/analyze", json={})
        assert resp.status_code == 200
        data = resp.json()
        results = data["results"]
        assert Decimal(results["net_profit"]) == Decimal("24665")
        assert Decimal(results["total_cash_needed"]) == Decimal("58585")
        assert Decimal(results["monthly_loan_payment"]) == Decimal("2212.50")
        assert results["is_loan_capped"] is True
        assert results["cash_on_cash_unbounded"] is False
        assert data["loan_type"] == "hard_money"
        assert data["passes_seventy_percent_rule"] is False
        assert data["per_sqft"] is None
        assert data["arv_suggestion"] is None

    def test_money_rounded_to_cents(self, client):
        resp = client.post(f"{BASE}/analyze", json={})
        roi = Decimal(resp.json()["results"]["roi"])
        assert roi == Decimal("7.04")

    def test_mode_toggles(self, client):
        payload = {
            "use_itemized_closing_costs": True,
            "use_itemized_selling_costs": True,
            "use_detailed_holding_costs": True,
            "monthly_hoa": "100",
        }
        results = client.post(f"{BASE}/analyze", json=payload).json()["results"]
        assert Decimal(results["purchase_closing_costs"]) == Decimal("8250")
        assert Decimal(results["selling_closing_costs"]) == Decimal("3650")
        assert Decimal(results["total_holding_costs"]) == Decimal("3600")

    def test_dollar_closing_and_down_payment(self, client):
        payload = {
            "closing_costs_in_dollars": True,
            "closing_costs_amount": 6000,
            "down_payment_in_dollars": True,
            "down_payment_amount": 50000,
        }
        results = client.post(f"{BASE}/analyze", json=payload).json()["results"]
        assert Decimal(results["purchase_closing_costs"]) == Decimal("6000")
        assert Decimal(results["base_loan_amount"]) == Decimal("245000")

    def test_itemized_rehab(self, client):
        payload = {
            "use_itemized_rehab": True,
            "rehab_items": {"Kitchen": {"Cabinets": 8000}, "Garage": {"Door": 1200}},
        }
        results = client.post(f"{BASE}/analyze", json=payload).json()["results"]
        assert Decimal(results["total_rehab_cost"]) == Decimal("9200")

    def test_cash_purchase(self, client):
        results = client.post(f"{BASE}/analyze", json={"loan_type": "cash"}).json()["results"]
        assert Decimal(results["total_cash_needed"]) == Decimal("305500")
        assert Decimal(results["total_loan_amount"]) == 0

    def test_per_sqft_and_comps(self, client):
        payload = {
            "sqft": 1500,
            "comps": [
                {"address": "1 Elm", "sale_price": 370000, "sqft": 1500},
                {"address": "2 Elm", "sale_price": 380000, "sqft": 1500},
                {"address": "3 Elm", "sale_price": 375000, "sqft": 1500},
            ],
        }
        data = client.post(f"{BASE}/analyze", json=payload).json()
        assert Decimal(data["per_sqft"]["arv"]) == Decimal("250")
        assert data["arv_suggestion"]["comp_count"] == 3
        assert data["arv_suggestion"]["confidence"] == "high"
        assert Decimal(data["arv_suggestion"]["value"]) == Decimal("375000")

    def test_invalid_deal_returns_zeros(self, client):
        results = client.post(f"{BASE}/analyze", json={"arv": 0}).json()["results"]
        assert Decimal(results["net_profit"]) == 0

    @pytest.mark.parametrize("payload", [
        {"loan_type": "boat"},
        {"holding_months": -1},
        {"loan_term_months": 0},
        {"purchase_price": "lots"},
    ])
    def test_bad_payload(self, client, payload):
        resp = client.post(f"{BASE}/analyze", json=payload)
        assert resp.status_code == 422


class TestBreakEven:
    def test_default(self, client):
        resp = client.post(f"{BASE}/break-even", json={})
        assert resp.status_code == 200
        data = resp.json()
        expected = (Decimal("324085") / Decimal("0.93")).quantize(Decimal("0.01"))
        assert Decimal(data["break_even_arv"]) == expected
        assert Decimal(data["target_profit"]) == Decimal("25000")
        assert data["target_achievable"] is True

    def test_unreachable(self, client):
        payload = {"deal": {"selling_commission_pct": 99}}
        data = client.post(f"{BASE}/break-even", json=payload).json()
        assert data["break_even_arv"] is None


class TestSensitivity:
    def test_adjustment(self, client):
        payload = {"arv_adjustment_pct": 10}
        data = client.post(f"{BASE}/sensitivity", json=payload).json()
        assert Decimal(data["adjusted_arv"]) == Decimal("412500")
        assert Decimal(data["profit_change"]) == Decimal("34875")
        assert data["sweep"] == []

    def test_sweep(self, client):
        payload = {"sweep": "holding"}
        data = client.post(f"{BASE}/sensitivity", json=payload).json()
        assert len(data["sweep"]) == 16
        assert data["sweep"][0]["variable"] == "holding"

    def test_unknown_sweep_variable(self, client):
        resp = client.post(f"{BASE}/sensitivity", json={"sweep": "interest"})
        assert resp.status_code == 422


class TestLenders:
    def test_default_scenarios(self, client):
        data = client.post(f"{BASE}/lenders", json={}).json()
        assert [q["name"] for q in data["quotes"]] == ["Lender A", "Lender B"]
        assert data["best_profit"] == "Lender B"

    def test_custom_scenarios(self, client):
        payload = {"scenarios": [
            {"name": "Local", "interest_rate_pct": 9, "points_pct": 3, "lender_fees": 1000},
        ]}
        data = client.post(f"{BASE}/lenders", json=payload).json()
        assert len(data["quotes"]) == 1
        assert Decimal(data["quotes"][0]["upfront_costs"]) == Decimal("8965")


class TestExitStrategies:
    def test_default(self, client):
        data = client.post(f"{BASE}/exit-strategies", json={}).json()
        assert [s["strategy"] for s in data["strategies"]] == ["flip", "brrrr", "wholesale"]
        assert data["best_profit"] == "brrrr"
        assert data["fastest"] == "wholesale"
        assert data["wholesale"]["viability"] == "marginal"
        assert Decimal(data["refinance"]["new_loan_amount"]) == Decimal("281250")

    def test_double_close(self, client):
        payload = {"wholesale": {"deal_type": "double_close"}}
        data = client.post(f"{BASE}/exit-strategies", json=payload).json()
        assert Decimal(data["wholesale"]["transactional_funding_cost"]) == Decimal("5000")
        assert Decimal(data["wholesale"]["net_profit"]) == Decimal("2000")

    def test_dscr_qualification(self, client):
        default = client.post(f"{BASE}/exit-strategies", json={}).json()
        assert default["refinance"]["dscr_qualification"] is None

        payload = {"refinance": {"product": "dscr", "dscr_interest_only": True}}
        refinance = client.post(f"{BASE}/exit-strategies", json=payload).json()["refinance"]
        qualification = refinance["dscr_qualification"]
        assert Decimal(qualification["loan_amount"]) == Decimal("281250")
        assert Decimal(qualification["total_debt_service"]) == Decimal("2225")
        assert qualification["status"] == "marginal"
        assert Decimal(refinance["recommended_down_payment_pct"]) == Decimal("30")

    def test_end_buyer_rental_view(self, client):
        payload = {"wholesale": {"end_buyer_strategy": "rental"}}
        end_buyer = client.post(f"{BASE}/exit-strategies", json=payload).json()["wholesale"]["end_buyer"]
        assert Decimal(end_buyer["roi"]) == Decimal("5.05")
        assert end_buyer["brrrr"] is None
        assert Decimal(end_buyer["rental"]["monthly_cash_flow"]) == Decimal("29.60")


class TestCompare:
    def test_two_properties(self, client):
        payload = {"properties": [
            {"name": "Main St", "deal": {}},
            {"name": "Oak Ave", "deal": {"purchase_price": 200000}},
        ]}
        resp = client.post(f"{BASE}/compare", json=payload)
        assert resp.status_code == 200
        data = resp.json()
        assert data["best_profit"] == "Oak Ave"
        assert len(data["properties"]) == 2

    def test_empty(self, client):
        resp = client.post(f"{BASE}/compare", json={"properties": []})
        assert resp.status_code == 400

    def test_duplicate_names(self, client):
        payload = {"properties": [{"name": "A", "deal": {}}, {"name": "A", "deal": {}}]}
        resp = client.post(f"{BASE}/compare", json=payload)
        assert resp.status_code == 400
