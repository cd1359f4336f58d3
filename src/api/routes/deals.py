"""Saved deal routes."""

from datetime import date

from fastapi import APIRouter, Depends, HTTPException

from src.api.deps import get_deal_repository
from src.api.routes.calculate import deal_from_request, metrics_to_response
from src.api.schemas import (
    DealCreate,
    DealResponse,
    MetricsResponse,
    TermScenarioResponse,
)
from src.data.deal_repository import DealNotFoundError, DealRepository
from src.engine.amortization import InvalidDealError
from src.engine.comparison import term_scenarios
from src.engine.metrics import compute_metrics
from src.models.deal import VehicleDeal

router = APIRouter(prefix="/api/v1/deals", tags=["deals"])


def _load(repo: DealRepository, deal_id: str) -> VehicleDeal:
    try:
        return repo.get(deal_id)
    except DealNotFoundError:
        raise HTTPException(status_code=404, detail=f"Deal {deal_id} not found")


@router.get("", response_model=list[DealResponse])
def list_deals(repo: DealRepository = Depends(get_deal_repository)):
    return [DealResponse.model_validate(d) for d in repo.list()]


@router.post("", response_model=DealResponse, status_code=201)
def save_deal(req: DealCreate, repo: DealRepository = Depends(get_deal_repository)):
    """Create a deal, or replace it when the id already exists."""
    return DealResponse.model_validate(repo.save(deal_from_request(req)))


@router.get("/{deal_id}", response_model=DealResponse)
def get_deal(deal_id: str, repo: DealRepository = Depends(get_deal_repository)):
    return DealResponse.model_validate(_load(repo, deal_id))


@router.delete("/{deal_id}", status_code=204)
def delete_deal(deal_id: str, repo: DealRepository = Depends(get_deal_repository)):
    try:
        repo.delete(deal_id)
    except DealNotFoundError:
        raise HTTPException(status_code=404, detail=f"Deal {deal_id} not found")


@router.get("/{deal_id}/metrics", response_model=MetricsResponse)
def get_deal_metrics(
    deal_id: str,
    as_of: date | None = None,
    include_schedule: bool = True,
    repo: DealRepository = Depends(get_deal_repository),
):
    deal = _load(repo, deal_id)
    try:
        metrics = compute_metrics(deal, as_of)
    except InvalidDealError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return metrics_to_response(metrics, include_schedule=include_schedule)


@router.get("/{deal_id}/terms", response_model=list[TermScenarioResponse])
def get_term_scenarios(
    deal_id: str,
    as_of: date | None = None,
    repo: DealRepository = Depends(get_deal_repository),
):
    """The deal at its own term alongside the standard 36/48/60/72 month terms."""
    deal = _load(repo, deal_id)
    try:
        rows = term_scenarios(deal, as_of=as_of)
    except InvalidDealError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return [
        TermScenarioResponse(
            term_length=row.deal.term_length,
            monthly_payment=row.metrics.monthly_payment,
            monthly_payment_with_tax=row.metrics.monthly_payment_with_tax,
            total_interest=row.metrics.total_interest,
            total_cost=row.metrics.total_cost,
            payoff_date=row.metrics.payoff_date,
        )
        for row in rows
    ]
