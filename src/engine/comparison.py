"""Side-by-side deal comparison.

Applies the same transient overrides to every deal, runs the metrics engine
once per deal and orders the rows by total cost of ownership.
"""

import logging
from datetime import date
from typing import Iterable

from src.engine.metrics import compute_metrics
from src.engine.overrides import apply_overrides
from src.models.deal import DealOverrides, VehicleDeal
from src.models.results import DealComparison

logger = logging.getLogger(__name__)

STANDARD_TERMS = (36, 48, 60, 72)


def compare_deals(
    deals: Iterable[VehicleDeal],
    overrides: DealOverrides | None = None,
    as_of: date | None = None,
) -> list[DealComparison]:
    """Compute metrics for each deal and sort ascending by total cost.

    Ties keep their input order.
    """
    as_of = as_of or date.today()
    rows = []
    for deal in deals:
        adjusted = apply_overrides(deal, overrides)
        rows.append(DealComparison(deal=adjusted, metrics=compute_metrics(adjusted, as_of)))

    rows.sort(key=lambda row: row.metrics.total_cost)
    logger.debug("Compared %d deals (overrides=%s)", len(rows), overrides)
    return rows


def best_deal(rows: list[DealComparison]) -> DealComparison | None:
    """Cheapest row of a sorted comparison, or None when empty."""
    return rows[0] if rows else None


def term_scenarios(
    deal: VehicleDeal,
    terms: Iterable[int] = STANDARD_TERMS,
    as_of: date | None = None,
) -> list[DealComparison]:
    """Evaluate one deal at its own term plus up to three alternative terms.

    Rows are ordered by term length, shortest first.
    """
    alternatives = [t for t in terms if t != deal.term_length][:3]
    all_terms = sorted([deal.term_length, *alternatives])
    as_of = as_of or date.today()
    rows = []
    for term in all_terms:
        adjusted = apply_overrides(deal, DealOverrides(term_length=term))
        rows.append(DealComparison(deal=adjusted, metrics=compute_metrics(adjusted, as_of)))
    return rows
