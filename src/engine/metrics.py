"""Derived deal metrics: payments, totals, discount, payoff date, dealer markup.

Everything is recomputed from the VehicleDeal on each call. The only input
outside the deal is the ``as_of`` date used for the payoff date.
"""

import calendar
from datetime import date

from src.engine.amortization import (
    effective_tax,
    monthly_payment,
    payment_schedule,
)
from src.models.deal import VehicleDeal
from src.models.results import CarCalculations


def add_months(dt: date, months: int) -> date:
    """Return ``dt`` shifted by ``months``, clamping the day to the month's end."""
    year = dt.year + (dt.month - 1 + months) // 12
    month = (dt.month - 1 + months) % 12 + 1
    day = min(dt.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def first_payment_date(as_of: date) -> date:
    """First day of the calendar month after ``as_of``."""
    return add_months(as_of.replace(day=1), 1)


def payoff_date(as_of: date, term_length: int) -> date:
    return add_months(first_payment_date(as_of), term_length)


def fee_totals(deal: VehicleDeal) -> dict[str, float]:
    """Fee subtotals by bucket.

    Government covers registration, DMV/license and title; absent buckets
    are already 0 on the deal.
    """
    dealer = deal.dealer_fees or 0.0
    government = (deal.registration_fees or 0.0) + (deal.government_fees or 0.0) + (deal.title_fees or 0.0)
    other = deal.other_fees or 0.0
    return {
        "dealer": dealer,
        "government": government,
        "other": other,
        "total": dealer + government + other,
    }


def dealer_markup(
    principal: float,
    apr: float,
    buy_rate_apr: float | None,
    term_length: int,
    total_interest: float,
) -> tuple[float, float]:
    """Rate markup and its lifetime cost when the dealer sells above the buy rate.

    Returns (markup, cost). Both are 0 unless 0 < buy_rate_apr < apr.
    """
    if buy_rate_apr is None or buy_rate_apr <= 0 or buy_rate_apr >= apr:
        return 0.0, 0.0

    markup = apr - buy_rate_apr
    pmt_at_buy_rate = monthly_payment(principal, buy_rate_apr, term_length)
    interest_at_buy_rate = pmt_at_buy_rate * term_length - principal
    return markup, total_interest - interest_at_buy_rate


def car_metrics(deal: VehicleDeal, as_of: date) -> CarCalculations:
    """Compute every derived metric for one deal as of a given date."""
    tax = effective_tax(deal)
    n = deal.term_length

    principal = deal.negotiated_price + tax - deal.down_payment
    pmt = monthly_payment(principal, deal.apr, n)

    principal_no_tax = deal.negotiated_price - deal.down_payment
    pmt_no_tax = monthly_payment(principal_no_tax, deal.apr, n)

    # Display estimate: tax is already inside the financed principal, and is
    # spread over the term again here on purpose.
    pmt_with_tax = pmt + tax / n if tax > 0 else pmt

    schedule = payment_schedule(deal)
    total_interest = sum(entry.interest_paid for entry in schedule)

    adjusted_cost = deal.negotiated_price - deal.down_payment
    financed_amount = principal

    fees = fee_totals(deal)
    total_cost = deal.down_payment + financed_amount + total_interest + fees["total"]

    discount = deal.listed_price - deal.negotiated_price
    discount_percent = discount / deal.listed_price * 100 if deal.listed_price > 0 else 0.0

    markup, markup_cost = dealer_markup(principal, deal.apr, deal.buy_rate_apr, n, total_interest)

    return CarCalculations(
        monthly_payment=pmt,
        monthly_payment_no_tax=pmt_no_tax,
        monthly_payment_with_tax=pmt_with_tax,
        total_interest=total_interest,
        total_tax=tax,
        total_cost=total_cost,
        average_annual_interest=total_interest / n * 12,
        adjusted_cost=adjusted_cost,
        financed_amount=financed_amount,
        discount=discount,
        discount_percent=discount_percent,
        payoff_date=payoff_date(as_of, n),
        payment_schedule=schedule,
        dealer_financing_markup=markup,
        dealer_financing_markup_cost=markup_cost,
        total_dealer_fees=fees["dealer"],
        total_government_fees=fees["government"],
        total_other_fees=fees["other"],
        total_all_fees=fees["total"],
    )


def compute_metrics(deal: VehicleDeal, as_of: date | None = None) -> CarCalculations:
    """Public entry point. ``as_of`` defaults to today when not supplied."""
    return car_metrics(deal, as_of or date.today())
