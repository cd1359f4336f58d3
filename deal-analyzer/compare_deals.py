"""CLI client for the Car Deal Analyzer API: compares saved deals and prints a terminal report.

Usage:
    python deal-analyzer/compare_deals.py
    python deal-analyzer/compare_deals.py --down-payment 5000 --term 72
    python deal-analyzer/compare_deals.py --apr 4.9 --deal abc123 --deal def456
"""

import argparse
import asyncio
import sys

import httpx


# ── Helpers ──────────────────────────────────────────────────────────────────

def _dollar(v) -> str:
    return f"${float(v):,.2f}"


def _pct(v) -> str:
    """Format a decimal APR as a percentage string."""
    return f"{float(v) * 100:.2f}%"


def _header(title: str) -> None:
    print(f"\n{'=' * 72}")
    print(f"  {title}")
    print(f"{'=' * 72}")


# ── Report sections ──────────────────────────────────────────────────────────

def print_overrides(args: argparse.Namespace) -> None:
    parts = []
    if args.down_payment is not None:
        parts.append(f"down payment {_dollar(args.down_payment)}")
    if args.apr is not None:
        parts.append(f"APR {args.apr:.2f}%")
    if args.term is not None:
        parts.append(f"term {args.term} months")
    if parts:
        print(f"\n  Preview overrides: {', '.join(parts)}")


def print_ranking(data: dict) -> None:
    _header("Deals by Total Cost")
    print(f"  {'#':>2}  {'Vehicle':<30} {'Monthly':>11} {'Interest':>11} {'Total':>12}")
    print(f"  {'-' * 2}  {'-' * 30} {'-' * 11} {'-' * 11} {'-' * 12}")
    for row in data["rows"]:
        deal, m = row["deal"], row["metrics"]
        print(
            f"  {row['rank']:>2}  {deal['display_name'][:30]:<30}"
            f" {_dollar(m['monthly_payment_with_tax']):>11}"
            f" {_dollar(m['total_interest']):>11}"
            f" {_dollar(m['total_cost']):>12}"
        )


def print_deal_details(data: dict) -> None:
    for row in data["rows"]:
        deal, m = row["deal"], row["metrics"]
        _header(f"{row['rank']}. {deal['display_name']}")
        print(f"  Dealership:           {deal['dealership'] or '-'}")
        print(f"  Listed / Negotiated:  {_dollar(deal['listed_price'])} / {_dollar(deal['negotiated_price'])}")
        print(f"  Discount:             {_dollar(m['discount'])} ({m['discount_percent']:.1f}%)")
        print(f"  APR / Term:           {_pct(deal['apr'])} / {deal['term_length']} months")
        print(f"  Down Payment:         {_dollar(deal['down_payment'])}")
        print(f"  Financed Amount:      {_dollar(m['financed_amount'])}")
        print(f"  Monthly Payment:      {_dollar(m['monthly_payment'])}")
        print(f"  Monthly (w/ tax):     {_dollar(m['monthly_payment_with_tax'])}")
        print(f"  Total Tax:            {_dollar(m['total_tax'])}")
        print(f"  Total Fees:           {_dollar(m['total_all_fees'])}")
        print(f"  Total Interest:       {_dollar(m['total_interest'])}")
        print(f"  Total Cost:           {_dollar(m['total_cost'])}")
        print(f"  Payoff Date:          {m['payoff_date']}")
        if m["dealer_financing_markup"] > 0:
            print(
                f"  Dealer Rate Markup:   {_pct(m['dealer_financing_markup'])}"
                f" costs {_dollar(m['dealer_financing_markup_cost'])} over the loan"
            )


async def main() -> None:
    parser = argparse.ArgumentParser(
        description="Compare saved car deals via the Car Deal Analyzer API"
    )
    parser.add_argument("--deal", action="append", dest="deal_ids", help="Deal id to include (repeatable)")
    parser.add_argument("--down-payment", type=float, help="Preview down payment for every deal")
    parser.add_argument("--apr", type=float, help="Preview APR in percent, e.g. 4.9")
    parser.add_argument("--term", type=int, help="Preview term length in months")
    parser.add_argument(
        "--api-url",
        default="http://localhost:8000",
        help="API base URL (default: http://localhost:8000)",
    )

    args = parser.parse_args()

    payload: dict = {}
    if args.deal_ids:
        payload["deal_ids"] = args.deal_ids
    if args.down_payment is not None:
        payload["down_payment_override"] = args.down_payment
    if args.apr is not None:
        payload["apr_override"] = args.apr / 100
    if args.term is not None:
        payload["term_override"] = args.term

    url = f"{args.api_url}/api/v1/comparison/run"

    async with httpx.AsyncClient(timeout=30) as client:
        try:
            resp = await client.post(url, json=payload)
        except httpx.ConnectError:
            print(f"Error: Could not connect to API at {args.api_url}", file=sys.stderr)
            print("Is the server running? Start with: uvicorn src.api.app:app --reload", file=sys.stderr)
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

        data = resp.json()

    if not data["rows"]:
        print("No saved deals to compare.")
        return

    print_overrides(args)
    print_ranking(data)
    print_deal_details(data)
    print()


if __name__ == "__main__":
    asyncio.run(main())
