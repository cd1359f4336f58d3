"""Canonical test fixtures used across all tests.

Fixture: $30K negotiated ($32K listed), 5% APR, 60 months, $3K down, 6% tax,
$1,128.75 in fees.
"""

from datetime import date

import pytest

from src.models.deal import VehicleDeal


@pytest.fixture
def as_of() -> date:
    return date(2026, 10, 19)


@pytest.fixture
def canonical_deal() -> VehicleDeal:
    """Golden-value regression deal."""
    return VehicleDeal(
        id="canonical",
        make="Honda",
        model="Accord",
        trim="EX-L",
        year=2024,
        listed_price=32000.0,
        negotiated_price=30000.0,
        apr=0.05,
        term_length=60,
        down_payment=3000.0,
        tax_rate=6.0,
        dealer_fees=800.0,
        registration_fees=225.0,
        title_fees=75.75,
        other_fees=28.0,
    )


@pytest.fixture
def zero_apr_deal() -> VehicleDeal:
    """Manufacturer 0% promo financing, flat tax fee instead of a rate."""
    return VehicleDeal(
        id="zero-apr",
        make="Toyota",
        model="Camry",
        year=2025,
        listed_price=28000.0,
        negotiated_price=27000.0,
        apr=0.0,
        term_length=36,
        down_payment=2000.0,
        tax=100.0,
    )


@pytest.fixture
def marked_up_deal() -> VehicleDeal:
    """Dealer sells at 6% on a 4% buy rate."""
    return VehicleDeal(
        id="marked-up",
        make="Ford",
        model="F-150",
        year=2023,
        listed_price=45000.0,
        negotiated_price=43000.0,
        apr=0.06,
        buy_rate_apr=0.04,
        term_length=72,
        down_payment=5000.0,
        tax_rate=7.5,
        dealer_fees=999.0,
        government_fees=350.0,
    )
