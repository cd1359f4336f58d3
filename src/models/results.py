from dataclasses import dataclass, field
from datetime import date

from src.models.deal import VehicleDeal


@dataclass(frozen=True)
class PaymentScheduleEntry:
    month: int
    principal_paid: float
    interest_paid: float
    cumulative_principal: float
    cumulative_interest: float
    remaining_balance: float  # Floored at 0 for display


@dataclass
class CarCalculations:
    # Payments
    monthly_payment: float = 0.0  # Tax rolled into principal
    monthly_payment_no_tax: float = 0.0
    monthly_payment_with_tax: float = 0.0  # Display estimate: payment + tax spread over term

    # Totals
    total_interest: float = 0.0
    total_tax: float = 0.0
    total_cost: float = 0.0
    average_annual_interest: float = 0.0

    # Cost breakdown
    adjusted_cost: float = 0.0  # Negotiated price - down payment
    financed_amount: float = 0.0  # Adjusted cost + tax

    # Discount (negative = paying above listing)
    discount: float = 0.0
    discount_percent: float = 0.0

    payoff_date: date | None = None
    payment_schedule: list[PaymentScheduleEntry] = field(default_factory=list)

    # Dealer financing markup (sell rate vs buy rate)
    dealer_financing_markup: float = 0.0
    dealer_financing_markup_cost: float = 0.0

    # Fees
    total_dealer_fees: float = 0.0
    total_government_fees: float = 0.0  # Registration + government + title
    total_other_fees: float = 0.0
    total_all_fees: float = 0.0


@dataclass(frozen=True)
class DealComparison:
    """One row of a side-by-side comparison: the deal as computed plus its metrics."""
    deal: VehicleDeal
    metrics: CarCalculations
