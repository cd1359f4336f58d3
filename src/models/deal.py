from dataclasses import dataclass


@dataclass(frozen=True)
class VehicleDeal:
    """One financing scenario under consideration.

    Only the pricing, financing, tax and fee fields feed the engine; the
    descriptive fields ride along for the presentation layer.
    """

    # Identity / descriptive
    id: str | None = None
    make: str = ""
    model: str = ""
    trim: str = ""
    year: int | None = None
    vin: str = ""
    mileage: int | None = None
    dealership: str = ""
    notes: str = ""
    credit_score: int | None = None  # FICO Auto Score 8
    seats: int | None = None
    warranty_type: str | None = None  # "Manufacturer", "Extended", "CPO", "None"
    warranty_remaining_months: int | None = None
    warranty_remaining_miles: int | None = None
    warranty_transferrable: bool | None = None
    rep_name: str | None = None
    rep_phone: str | None = None
    carfax_url: str | None = None
    vdp_url: str | None = None

    # Pricing
    listed_price: float = 0.0  # MSRP for new, market value for used
    negotiated_price: float = 0.0  # What is actually paid before tax/down

    # Financing
    apr: float = 0.0  # Sell rate, decimal (0.05 = 5%)
    buy_rate_apr: float | None = None  # Lender's rate to the dealer
    term_length: int = 60  # Months
    down_payment: float = 0.0

    # Tax
    tax_rate: float = 0.0  # Percentage points (7.5 = 7.5%)
    tax: float = 0.0  # Flat amount, used only when tax_rate is unset

    # Fees
    dealer_fees: float = 0.0  # Doc fee, pre-delivery, e-filing
    registration_fees: float = 0.0
    government_fees: float = 0.0  # DMV, license
    title_fees: float = 0.0
    other_fees: float = 0.0  # VIN etch, battery, tire

    @property
    def display_name(self) -> str:
        parts = [str(self.year) if self.year else "", self.make, self.model, self.trim]
        return " ".join(p for p in parts if p) or (self.id or "Unnamed deal")


@dataclass(frozen=True)
class DealOverrides:
    """Transient what-if values applied to a deal for comparison only."""
    down_payment: float | None = None
    apr: float | None = None
    term_length: int | None = None

    @property
    def is_empty(self) -> bool:
        return self.down_payment is None and self.apr is None and self.term_length is None


@dataclass(frozen=True)
class MakeAprRate:
    """Manufacturer promotional APR for a make at a given term."""
    make: str
    term_length: int
    apr: float

    @property
    def key(self) -> tuple[str, int]:
        return normalize_make(self.make), self.term_length


def normalize_make(make: str) -> str:
    return make.strip().lower()
