"""Manufacturer promotional APR routes."""

from fastapi import APIRouter, Depends, HTTPException

from src.api.deps import get_make_apr_store
from src.api.schemas import MakeAprRateRequest, MakeAprRateResponse
from src.data.make_apr import MakeAprStore
from src.models.deal import MakeAprRate

router = APIRouter(prefix="/api/v1/make-apr", tags=["make-apr"])


@router.get("", response_model=list[MakeAprRateResponse])
def list_rates(make: str | None = None, store: MakeAprStore = Depends(get_make_apr_store)):
    rates = store.rates_for_make(make) if make else store.all_rates()
    return [MakeAprRateResponse.model_validate(r) for r in rates]


@router.put("", response_model=MakeAprRateResponse)
def save_rate(req: MakeAprRateRequest, store: MakeAprStore = Depends(get_make_apr_store)):
    """Create or replace the rate for a make/term pair."""
    rate = store.save_rate(MakeAprRate(make=req.make, term_length=req.term_length, apr=req.apr))
    return MakeAprRateResponse.model_validate(rate)


@router.get("/{make}/{term_length}", response_model=MakeAprRateResponse)
def get_rate(make: str, term_length: int, store: MakeAprStore = Depends(get_make_apr_store)):
    apr = store.get_rate(make, term_length)
    if apr is None:
        raise HTTPException(status_code=404, detail=f"No APR for {make} at {term_length} months")
    return MakeAprRateResponse(make=make.strip(), term_length=term_length, apr=apr)


@router.delete("/{make}/{term_length}", status_code=204)
def delete_rate(make: str, term_length: int, store: MakeAprStore = Depends(get_make_apr_store)):
    if not store.delete_rate(make, term_length):
        raise HTTPException(status_code=404, detail=f"No APR for {make} at {term_length} months")
