import pytest

from src.engine.amortization import (
    InvalidDealError,
    compute_schedule,
    effective_tax,
    financed_principal,
    monthly_payment,
    payment_schedule,
    yearly_summary,
)
from src.models.deal import VehicleDeal


class TestMonthlyPayment:
    def test_standard_auto_loan(self):
        """$10K at 6% for 36 months: ~$304.22."""
        pmt = monthly_payment(10000.0, 0.06, 36)
        assert pmt == pytest.approx(304.22, abs=0.01)

    def test_canonical_loan(self):
        """$28,800 at 5% for 60 months."""
        pmt = monthly_payment(28800.0, 0.05, 60)
        assert pmt == pytest.approx(543.49, abs=0.01)

    def test_zero_rate_is_straight_line(self):
        assert monthly_payment(1200.0, 0.0, 12) == 100.0
        assert monthly_payment(25100.0, 0.0, 36) == 25100.0 / 36

    def test_negative_principal_still_computes(self):
        """Down payment above price is degenerate but must not raise."""
        pmt = monthly_payment(-1000.0, 0.05, 12)
        assert pmt < 0

    def test_zero_term_rejected(self):
        with pytest.raises(InvalidDealError):
            monthly_payment(10000.0, 0.05, 0)

    def test_negative_term_rejected(self):
        with pytest.raises(InvalidDealError):
            monthly_payment(10000.0, 0.0, -12)

    def test_negative_apr_rejected(self):
        with pytest.raises(InvalidDealError):
            monthly_payment(10000.0, -0.01, 36)

    def test_rate_too_small_for_float_is_straight_line(self):
        """1e-17 / 12 vanishes against 1.0, so (1 + r)^n is exactly 1."""
        assert monthly_payment(20000.0, 1e-17, 60) == 20000.0 / 60

    def test_overflowing_term_rejected(self):
        with pytest.raises(InvalidDealError):
            monthly_payment(28800.0, 0.05, 200000)

    def test_invalid_deal_error_is_value_error(self):
        assert issubclass(InvalidDealError, ValueError)


class TestEffectiveTax:
    def test_rate_overrides_stored_amount(self):
        deal = VehicleDeal(negotiated_price=30000.0, tax_rate=7.5, tax=999.0)
        assert effective_tax(deal) == 2250.0

    def test_flat_tax_fee_when_no_rate(self):
        deal = VehicleDeal(negotiated_price=30000.0, tax_rate=0.0, tax=100.0)
        assert effective_tax(deal) == 100.0

    def test_stored_tax_when_price_is_zero(self):
        deal = VehicleDeal(negotiated_price=0.0, tax_rate=6.0, tax=50.0)
        assert effective_tax(deal) == 50.0

    def test_financed_principal(self, canonical_deal):
        # 30000 + 1800 - 3000
        assert financed_principal(canonical_deal) == 28800.0


class TestPaymentSchedule:
    def test_entry_count(self, canonical_deal):
        schedule = payment_schedule(canonical_deal)
        assert len(schedule) == 60
        assert [e.month for e in schedule] == list(range(1, 61))

    def test_first_payment_split(self, canonical_deal):
        first = payment_schedule(canonical_deal)[0]
        # 28800 * 0.05 / 12
        assert first.interest_paid == pytest.approx(120.0)
        assert first.principal_paid == pytest.approx(543.49 - 120.0, abs=0.01)

    def test_principal_closes_to_financed_amount(self, canonical_deal):
        schedule = payment_schedule(canonical_deal)
        total_principal = sum(e.principal_paid for e in schedule)
        assert total_principal == pytest.approx(28800.0, rel=1e-9)
        assert schedule[-1].cumulative_principal == pytest.approx(28800.0, rel=1e-9)

    def test_final_balance_near_zero(self, canonical_deal):
        schedule = payment_schedule(canonical_deal)
        assert schedule[-1].remaining_balance == pytest.approx(0.0, abs=1e-6)
        assert all(e.remaining_balance >= 0 for e in schedule)

    def test_balance_decreases(self, canonical_deal):
        schedule = payment_schedule(canonical_deal)
        for i in range(1, len(schedule) - 1):
            assert schedule[i].remaining_balance < schedule[i - 1].remaining_balance

    def test_interest_declines_principal_grows(self, canonical_deal):
        schedule = payment_schedule(canonical_deal)
        assert schedule[-1].interest_paid < schedule[0].interest_paid
        assert schedule[-1].principal_paid > schedule[0].principal_paid

    def test_cumulative_interest_matches_sum(self, canonical_deal):
        schedule = payment_schedule(canonical_deal)
        assert schedule[-1].cumulative_interest == pytest.approx(sum(e.interest_paid for e in schedule))

    def test_zero_apr_has_no_interest(self, zero_apr_deal):
        schedule = payment_schedule(zero_apr_deal)
        assert all(e.interest_paid == 0 for e in schedule)
        # 27000 + 100 flat tax - 2000 down
        assert schedule[-1].cumulative_principal == pytest.approx(25100.0)
        assert schedule[0].principal_paid == 25100.0 / 36

    def test_pure(self, canonical_deal):
        assert payment_schedule(canonical_deal) == payment_schedule(canonical_deal)

    def test_compute_schedule_matches(self, canonical_deal, as_of):
        assert compute_schedule(canonical_deal, as_of) == payment_schedule(canonical_deal)

    def test_zero_term_rejected(self, canonical_deal):
        with pytest.raises(InvalidDealError):
            payment_schedule(VehicleDeal(negotiated_price=10000.0, apr=0.05, term_length=0))


class TestYearlySummary:
    def test_five_years(self, canonical_deal):
        yearly = yearly_summary(payment_schedule(canonical_deal))
        assert len(yearly) == 5
        assert [y["year"] for y in yearly] == [1, 2, 3, 4, 5]

    def test_partial_final_year(self):
        deal = VehicleDeal(negotiated_price=20000.0, apr=0.04, term_length=30)
        yearly = yearly_summary(payment_schedule(deal))
        assert len(yearly) == 3

    def test_totals_match(self, canonical_deal):
        schedule = payment_schedule(canonical_deal)
        yearly = yearly_summary(schedule)
        assert sum(y["interest"] for y in yearly) == pytest.approx(sum(e.interest_paid for e in schedule))
        assert sum(y["principal"] for y in yearly) == pytest.approx(28800.0)
        assert yearly[-1]["ending_balance"] == schedule[-1].remaining_balance
