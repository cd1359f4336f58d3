"""Amortization schedule computation for vehicle loans.

Pure functions: VehicleDeal in, dataclass out. No I/O. Values are full
precision floats; rounding is left to the presentation layer.
"""

from datetime import date

from src.models.deal import VehicleDeal
from src.models.results import PaymentScheduleEntry


class InvalidDealError(ValueError):
    """Deal terms the amortization math cannot be evaluated for."""


def monthly_payment(principal: float, apr: float, term_months: int) -> float:
    """Calculate the fixed monthly loan payment.

    Zero APR is straight-line (principal / n); the amortization formula is
    undefined there. A negative principal (down payment above price) still
    yields a number.
    """
    if term_months <= 0:
        raise InvalidDealError(f"Term length must be a positive number of months, got {term_months}")
    if apr < 0:
        raise InvalidDealError(f"APR cannot be negative, got {apr}")
    if apr == 0:
        return principal / term_months

    r = apr / 12
    # M = P * [r(1+r)^n] / [(1+r)^n - 1]
    try:
        factor = (1 + r) ** term_months
    except OverflowError:
        raise InvalidDealError(f"APR {apr} over {term_months} months is out of range") from None
    if factor == 1.0:
        # Rate too small to register in float arithmetic
        return principal / term_months
    return principal * r * factor / (factor - 1)


def effective_tax(deal: VehicleDeal) -> float:
    """Tax amount for a deal.

    A positive tax rate on a positive price always wins over the stored
    amount; otherwise the stored amount is a flat tax fee.
    """
    if deal.tax_rate and deal.tax_rate > 0 and deal.negotiated_price > 0:
        return deal.negotiated_price * deal.tax_rate / 100
    return deal.tax


def financed_principal(deal: VehicleDeal) -> float:
    """Negotiated price + tax - down payment."""
    return deal.negotiated_price + effective_tax(deal) - deal.down_payment


def payment_schedule(deal: VehicleDeal) -> list[PaymentScheduleEntry]:
    """Month-by-month split of the level payment into interest and principal."""
    principal = financed_principal(deal)
    pmt = monthly_payment(principal, deal.apr, deal.term_length)
    r = deal.apr / 12

    schedule: list[PaymentScheduleEntry] = []
    balance = principal
    cumulative_principal = 0.0
    cumulative_interest = 0.0

    for month in range(1, deal.term_length + 1):
        interest = balance * r
        principal_paid = pmt - interest

        # Working balance keeps any float drift; only the reported value is floored
        balance -= principal_paid
        cumulative_principal += principal_paid
        cumulative_interest += interest

        schedule.append(PaymentScheduleEntry(
            month=month,
            principal_paid=principal_paid,
            interest_paid=interest,
            cumulative_principal=cumulative_principal,
            cumulative_interest=cumulative_interest,
            remaining_balance=max(0.0, balance),
        ))

    return schedule


def compute_schedule(deal: VehicleDeal, as_of: date | None = None) -> list[PaymentScheduleEntry]:
    """Public entry point for the schedule.

    ``as_of`` is accepted for symmetry with ``compute_metrics``; the schedule
    is indexed by month number and does not depend on the calendar.
    """
    return payment_schedule(deal)


def yearly_summary(schedule: list[PaymentScheduleEntry]) -> list[dict[str, float]]:
    """Aggregate a schedule by loan year.

    Returns list of dicts with keys: year, principal, interest, ending_balance
    """
    yearly: list[dict[str, float]] = []
    year_principal = 0.0
    year_interest = 0.0

    for entry in schedule:
        year_principal += entry.principal_paid
        year_interest += entry.interest_paid

        if entry.month % 12 == 0 or entry.month == len(schedule):
            yearly.append({
                "year": (entry.month - 1) // 12 + 1,
                "principal": year_principal,
                "interest": year_interest,
                "ending_balance": entry.remaining_balance,
            })
            year_principal = 0.0
            year_interest = 0.0

    return yearly
