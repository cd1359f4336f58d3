"""Pydantic schemas for API request/response models."""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field

MAX_TERM_MONTHS = 120


# ---- Request schemas ----

class DealCreate(BaseModel):
    id: str | None = None

    # Vehicle
    make: str = ""
    model: str = ""
    trim: str = ""
    year: int | None = None
    vin: str = ""
    mileage: int | None = Field(None, ge=0)
    dealership: str = ""
    notes: str = ""
    credit_score: int | None = None
    seats: int | None = None
    warranty_type: str | None = None
    warranty_remaining_months: int | None = None
    warranty_remaining_miles: int | None = None
    warranty_transferrable: bool | None = None
    rep_name: str | None = None
    rep_phone: str | None = None
    carfax_url: str | None = None
    vdp_url: str | None = None

    # Pricing & financing
    listed_price: float = Field(0.0, ge=0)
    negotiated_price: float = Field(0.0, ge=0)
    apr: float = Field(0.0, description="Sell rate as a decimal, e.g. 0.05 for 5%")
    buy_rate_apr: float | None = Field(None, description="Lender buy rate as a decimal")
    term_length: int = Field(60, gt=0, le=MAX_TERM_MONTHS, description="Loan term in months")
    down_payment: float = Field(0.0, ge=0)

    # Tax & fees
    tax_rate: float = Field(0.0, ge=0, description="Percentage points, e.g. 7.5 for 7.5%")
    tax: float = Field(0.0, ge=0, description="Flat tax amount when no tax rate is set")
    dealer_fees: float = Field(0.0, ge=0)
    registration_fees: float = Field(0.0, ge=0)
    government_fees: float = Field(0.0, ge=0)
    title_fees: float = Field(0.0, ge=0)
    other_fees: float = Field(0.0, ge=0)


class CalculateRequest(BaseModel):
    deal: DealCreate
    as_of: date | None = Field(None, description="Reference date for the payoff date; defaults to today")


class ComparisonRequest(BaseModel):
    deal_ids: list[str] | None = Field(None, description="Saved deals to compare; all when omitted")
    down_payment_override: float | None = Field(None, ge=0)
    apr_override: float | None = None
    term_override: int | None = Field(None, gt=0, le=MAX_TERM_MONTHS)
    as_of: date | None = None


class MakeAprRateRequest(BaseModel):
    make: str = Field(..., min_length=1)
    term_length: int = Field(..., gt=0, le=MAX_TERM_MONTHS)
    apr: float = Field(..., ge=0)


# ---- Response schemas ----

class DealResponse(DealCreate):
    model_config = ConfigDict(from_attributes=True)

    id: str
    display_name: str


class PaymentScheduleEntryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    month: int
    principal_paid: float
    interest_paid: float
    cumulative_principal: float
    cumulative_interest: float
    remaining_balance: float


class YearlySummaryResponse(BaseModel):
    year: int
    principal: float
    interest: float
    ending_balance: float


class ScheduleResponse(BaseModel):
    schedule: list[PaymentScheduleEntryResponse]
    yearly: list[YearlySummaryResponse]


class MetricsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    monthly_payment: float
    monthly_payment_no_tax: float
    monthly_payment_with_tax: float
    total_interest: float
    total_tax: float
    total_cost: float
    average_annual_interest: float
    adjusted_cost: float
    financed_amount: float
    discount: float
    discount_percent: float
    payoff_date: date
    payment_schedule: list[PaymentScheduleEntryResponse] = []
    dealer_financing_markup: float
    dealer_financing_markup_cost: float
    total_dealer_fees: float
    total_government_fees: float
    total_other_fees: float
    total_all_fees: float


class ComparisonRowResponse(BaseModel):
    rank: int
    deal: DealResponse
    metrics: MetricsResponse


class ComparisonResponse(BaseModel):
    rows: list[ComparisonRowResponse]
    best_deal_id: str | None = None


class TermScenarioResponse(BaseModel):
    term_length: int
    monthly_payment: float
    monthly_payment_with_tax: float
    total_interest: float
    total_cost: float
    payoff_date: date


class MakeAprRateResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    make: str
    term_length: int
    apr: float
