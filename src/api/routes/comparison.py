"""Side-by-side deal comparison routes."""

from fastapi import APIRouter, Depends, HTTPException

from src.api.deps import get_deal_repository
from src.api.routes.calculate import metrics_to_response
from src.api.schemas import ComparisonRequest, ComparisonResponse, ComparisonRowResponse, DealResponse
from src.data.deal_repository import DealNotFoundError, DealRepository
from src.engine.amortization import InvalidDealError
from src.engine.comparison import best_deal, compare_deals
from src.models.deal import DealOverrides

router = APIRouter(prefix="/api/v1/comparison", tags=["comparison"])


@router.post("/run", response_model=ComparisonResponse)
def run_comparison(req: ComparisonRequest, repo: DealRepository = Depends(get_deal_repository)):
    """Compare saved deals, cheapest total cost first.

    Overrides are preview-only: stored deals are not modified.
    """
    try:
        deals = [repo.get(i) for i in req.deal_ids] if req.deal_ids is not None else repo.list()
    except DealNotFoundError as e:
        raise HTTPException(status_code=404, detail=f"Deal {e.args[0]} not found")

    overrides = DealOverrides(
        down_payment=req.down_payment_override,
        apr=req.apr_override,
        term_length=req.term_override,
    )
    try:
        rows = compare_deals(deals, overrides, req.as_of)
    except InvalidDealError as e:
        raise HTTPException(status_code=400, detail=str(e))

    best = best_deal(rows)
    return ComparisonResponse(
        rows=[
            ComparisonRowResponse(
                rank=rank,
                deal=DealResponse.model_validate(row.deal),
                metrics=metrics_to_response(row.metrics, include_schedule=False),
            )
            for rank, row in enumerate(rows, start=1)
        ],
        best_deal_id=best.deal.id if best else None,
    )
