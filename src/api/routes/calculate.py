"""Stateless calculation routes: deal in, schedule or metrics out."""

from fastapi import APIRouter, HTTPException

from src.api.schemas import (
    CalculateRequest,
    DealCreate,
    MetricsResponse,
    PaymentScheduleEntryResponse,
    ScheduleResponse,
    YearlySummaryResponse,
)
from src.engine.amortization import InvalidDealError, compute_schedule, yearly_summary
from src.engine.metrics import compute_metrics
from src.models.deal import VehicleDeal
from src.models.results import CarCalculations

router = APIRouter(prefix="/api/v1/calculate", tags=["calculate"])


def deal_from_request(req: DealCreate) -> VehicleDeal:
    return VehicleDeal(**req.model_dump())


def metrics_to_response(metrics: CarCalculations, include_schedule: bool = True) -> MetricsResponse:
    """Convert engine CarCalculations to API response."""
    resp = MetricsResponse.model_validate(metrics)
    if not include_schedule:
        resp.payment_schedule = []
    return resp


@router.post("/metrics", response_model=MetricsResponse)
async def calculate_metrics(req: CalculateRequest, include_schedule: bool = True):
    """Full metrics for an unsaved deal."""
    try:
        metrics = compute_metrics(deal_from_request(req.deal), req.as_of)
    except InvalidDealError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return metrics_to_response(metrics, include_schedule=include_schedule)


@router.post("/schedule", response_model=ScheduleResponse)
async def calculate_schedule(req: CalculateRequest):
    """Month-by-month amortization plus yearly totals for an unsaved deal."""
    try:
        schedule = compute_schedule(deal_from_request(req.deal), req.as_of)
    except InvalidDealError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return ScheduleResponse(
        schedule=[PaymentScheduleEntryResponse.model_validate(entry) for entry in schedule],
        yearly=[YearlySummaryResponse(**row) for row in yearly_summary(schedule)],
    )
