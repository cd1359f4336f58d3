"""Transient what-if overrides for comparison previews."""

from dataclasses import replace

from src.models.deal import DealOverrides, VehicleDeal


def apply_overrides(deal: VehicleDeal, overrides: DealOverrides | None) -> VehicleDeal:
    """Return a copy of ``deal`` with any set override values.

    The input deal is never modified; with no overrides the same object comes back.
    """
    if overrides is None or overrides.is_empty:
        return deal

    changes = {}
    if overrides.down_payment is not None:
        changes["down_payment"] = overrides.down_payment
    if overrides.apr is not None:
        changes["apr"] = overrides.apr
    if overrides.term_length is not None:
        changes["term_length"] = overrides.term_length
    return replace(deal, **changes)
