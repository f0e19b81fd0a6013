"""CLI client for the Flip Analyzer API: posts a deal and prints a terminal report.

Usage:
    python deal-analyzer/analyze_deal.py "107 Midland Ave, Columbus, OH 43223" --price 120000 --arv 210000 --rehab 35000
    python deal-analyzer/analyze_deal.py "123 Main St" --loan-type conventional --holding-months 4 --break-even
"""

import argparse
import asyncio
import sys
from decimal import Decimal

import httpx

from flipcalc.config import settings


# ── Helpers ──────────────────────────────────────────────────────────────────

def _pct(v) -> str:
    """Format a percent value (12.5 = 12.5%)."""
    return f"{float(v):.2f}%"


def _dollar(v) -> str:
    return f"${float(v):,.0f}"


def _header(title: str) -> None:
    print(f"\n{'=' * 64}")
    print(f"  {title}")
    print(f"{'=' * 64}")


# ── Report sections ──────────────────────────────────────────────────────────

def print_deal_summary(data: dict) -> None:
    _header("Deal Summary")
    print(f"  Address:          {data['address'] or '(none)'}")
    print(f"  Loan Type:        {data['loan_type']}")
    print(f"  Purchase Price:   {_dollar(data['purchase_price'])}")
    print(f"  ARV:              {_dollar(data['arv'])}")
    rule = "pass" if data["passes_seventy_percent_rule"] else "FAIL"
    print(f"  70% Rule:         {_pct(data['seventy_percent_ratio'])} of ARV ({rule})")


def print_costs(data: dict) -> None:
    r = data["results"]
    _header("Project Costs")
    print(f"  Closing Costs:        {_dollar(r['purchase_closing_costs'])}")
    print(f"  Rehab:                {_dollar(r['total_rehab_cost'])}")
    print(f"  Loan Interest:        {_dollar(r['total_loan_interest'])}")
    print(f"  Origination Points:   {_dollar(r['total_origination_points'])}")
    print(f"  Holding Costs:        {_dollar(r['total_holding_costs'])}")
    print(f"  Selling Costs:        {_dollar(r['total_selling_costs'])}")
    print(f"  {'-' * 34}")
    print(f"  Total Project Cost:   {_dollar(r['total_project_cost'])}")


def print_financing(data: dict) -> None:
    r = data["results"]
    if float(r["total_loan_amount"]) == 0:
        return
    _header("Financing")
    print(f"  Loan Amount:          {_dollar(r['total_loan_amount'])}")
    print(f"  Down Payment:         {_dollar(r['down_payment'])}")
    print(f"  Monthly Payment:      {_dollar(r['monthly_loan_payment'])}")
    print(f"  Max Loan (LTV/ARV):   {_dollar(r['max_loan_amount'])}")
    if float(r["financed_interest_reserve"]) > 0:
        print(f"  Interest Reserve:     {_dollar(r['financed_interest_reserve'])}")
    if r["is_loan_capped"]:
        print("  Warning: loan exceeds the lender's max loan-to-ARV")


def print_returns(data: dict) -> None:
    r = data["results"]
    _header("Returns")
    print(f"  Cash Needed:          {_dollar(r['total_cash_needed'])}")
    print(f"  Net Profit:           {_dollar(r['net_profit'])}")
    print(f"  ROI:                  {_pct(r['roi'])}")
    print(f"  Annualized ROI:       {_pct(r['annualized_roi'])}")
    coc = "unbounded" if r["cash_on_cash_unbounded"] else _pct(r["cash_on_cash"])
    print(f"  Cash-on-Cash:         {coc}")
    print(f"  Profit Margin:        {_pct(r['profit_margin'])}")


def print_per_sqft(data: dict) -> None:
    s = data.get("per_sqft")
    if not s:
        return
    _header(f"Per Square Foot ({int(s['sqft']):,} sqft)")
    print(f"  Purchase:         ${float(s['purchase_price']):,.2f}")
    print(f"  ARV:              ${float(s['arv']):,.2f}")
    print(f"  Rehab:            ${float(s['rehab']):,.2f}")
    print(f"  All-in:           ${float(s['all_in_cost']):,.2f}")
    print(f"  Value Add:        ${float(s['value_add']):,.2f}")


def print_break_even(data: dict) -> None:
    _header("Break-Even")

    def _arv(v) -> str:
        return _dollar(v) if v is not None else "unreachable"

    print(f"  Break-even ARV:       {_arv(data['break_even_arv'])}")
    print(f"  ARV for {_dollar(data['target_profit'])}:   {_arv(data['arv_for_target_profit'])}")
    print(f"  Max Purchase Price:   {_dollar(data['max_purchase_price'])}")
    print(f"  ARV Cushion:          {_dollar(data['arv_cushion'])} ({_pct(data['arv_cushion_pct'])})")


# ── Main ─────────────────────────────────────────────────────────────────────

async def _post(client: httpx.AsyncClient, url: str, payload: dict) -> dict:
    try:
        resp = await client.post(url, json=payload)
    except httpx.ConnectError:
        print(f"Error: Could not connect to API at {url}", file=sys.stderr)
        print("Is the server running? Start with: uvicorn flipcalc.api.app:app --reload", file=sys.stderr)
        sys.exit(1)
    except httpx.TimeoutException:
        print("Error: Request timed out", file=sys.stderr)
        sys.exit(1)

    if resp.status_code != 200:
        print(f"Error: API returned {resp.status_code}", file=sys.stderr)
        try:
            detail = resp.json().get("detail", resp.text)
        except ValueError:
            detail = resp.text
        print(f"  {detail}", file=sys.stderr)
        sys.exit(1)

    return resp.json()


async def main() -> None:
    parser = argparse.ArgumentParser(
        description="Analyze a fix & flip deal via the Flip Analyzer API"
    )
    parser.add_argument("address", nargs="?", default="", help="Property address (label only)")
    parser.add_argument("--price", type=Decimal, help="Purchase price")
    parser.add_argument("--arv", type=Decimal, help="After-repair value")
    parser.add_argument("--rehab", type=Decimal, help="Total rehab budget")
    parser.add_argument("--sqft", type=int, help="Square footage")
    parser.add_argument(
        "--loan-type",
        choices=["cash", "hard_money", "conventional"],
        default=None,
        help="Financing (default: hard_money)",
    )
    parser.add_argument("--rate", type=Decimal, help="Annual interest rate, percent")
    parser.add_argument("--points", type=Decimal, help="Origination points, percent")
    parser.add_argument("--down-pct", type=Decimal, help="Down payment, percent")
    parser.add_argument("--holding-months", type=int, help="Months held before sale")
    parser.add_argument("--commission", type=Decimal, help="Selling commission, percent")
    parser.add_argument("--break-even", action="store_true", help="Also print break-even figures")
    parser.add_argument("--target-profit", type=Decimal, help="Target profit for break-even")
    parser.add_argument(
        "--api-url",
        default=settings.api_base_url,
        help=f"API base URL (default: {settings.api_base_url})",
    )

    args = parser.parse_args()

    # Only flags that were given
    payload: dict = {"address": args.address}

    field_map = {
        "price": "purchase_price",
        "arv": "arv",
        "rehab": "rehab_cost",
        "sqft": "sqft",
        "loan_type": "loan_type",
        "rate": "interest_rate_pct",
        "points": "origination_points_pct",
        "down_pct": "down_payment_pct",
        "holding_months": "holding_months",
        "commission": "selling_commission_pct",
    }
    for cli_name, api_name in field_map.items():
        val = getattr(args, cli_name)
        if val is not None:
            payload[api_name] = val if not isinstance(val, Decimal) else str(val)

    base = f"{args.api_url}/api/v1/deals"

    async with httpx.AsyncClient(timeout=30) as client:
        data = await _post(client, f"{base}/analyze", payload)
        break_even = None
        if args.break_even:
            be_payload: dict = {"deal": payload}
            if args.target_profit is not None:
                be_payload["target_profit"] = str(args.target_profit)
            break_even = await _post(client, f"{base}/break-even", be_payload)

    # Print report
    print_deal_summary(data)
    print_costs(data)
    print_financing(data)
    print_returns(data)
    print_per_sqft(data)
    if break_even is not None:
        print_break_even(break_even)
    print()


if __name__ == "__main__":
    asyncio.run(main())
