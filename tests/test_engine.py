import logging
from dataclasses import replace
from datetime import date
from decimal import Decimal

import pytest

from mortgage_calc.engine import build_schedule, compute_monthly_payment, validate_inputs
from mortgage_calc.errors import LoanInputError

CENT = Decimal("0.01")


class TestMonthlyPayment:
    def test_standard_mortgage(self):
        """$280K loan at 7% for 30 years."""
        pmt = compute_monthly_payment(Decimal("280000"), Decimal("7.0"), 30)
        # Expected: ~$1,862.85
        assert abs(pmt - Decimal("1862.85")) < CENT

    def test_accepts_plain_numbers(self):
        assert compute_monthly_payment(280000, 7, 30) == compute_monthly_payment(
            Decimal("280000"), Decimal("7"), 30
        )

    def test_zero_rate_is_straight_line(self):
        pmt = compute_monthly_payment(Decimal("100000"), Decimal("0"), 10)
        assert pmt == Decimal("100000") / Decimal(120)
        assert pmt.quantize(CENT) == Decimal("833.33")

    def test_zero_principal(self):
        assert compute_monthly_payment(Decimal("0"), Decimal("7"), 30) == 0

    def test_non_positive_term_rejected(self):
        with pytest.raises(LoanInputError) as exc:
            compute_monthly_payment(Decimal("1000"), Decimal("5"), 0)
        assert exc.value.field == "term_years"


class TestBuildSchedule:
    def test_payment_count(self, standard_result):
        assert len(standard_result.schedule) == 360
        assert standard_result.summary.number_of_payments == 360

    def test_payment_numbers_are_sequential(self, standard_result):
        numbers = [r.payment_number for r in standard_result.schedule]
        assert numbers == list(range(1, 361))

    def test_first_payment_mostly_interest(self, standard_result):
        first = standard_result.schedule[0]
        # 280000 * 0.07 / 12 = $1,633.33
        assert first.interest_portion.quantize(CENT) == Decimal("1633.33")
        assert abs(first.principal_portion - Decimal("229.51")) < CENT

    def test_portions_add_up_to_payment(self, standard_result):
        for record in standard_result.schedule:
            assert abs(record.principal_portion + record.interest_portion - record.payment_amount) < Decimal("1e-18")

    def test_payment_is_constant(self, standard_result):
        payment = standard_result.summary.monthly_payment
        assert all(r.payment_amount == payment for r in standard_result.schedule)

    def test_balance_never_increases(self, standard_result):
        balances = [r.remaining_balance for r in standard_result.schedule]
        for previous, current in zip(balances, balances[1:]):
            assert current <= previous
        assert min(balances) >= 0

    def test_final_balance_is_zero(self, standard_result):
        assert standard_result.schedule[-1].remaining_balance == 0

    def test_total_principal_matches_loan(self, standard_loan, standard_result):
        total = sum(r.principal_portion for r in standard_result.schedule)
        assert abs(total - standard_loan.principal) < CENT
        assert abs(standard_result.summary.total_principal - standard_loan.principal) < CENT

    def test_total_payment_is_payment_times_count(self, standard_result):
        summary = standard_result.summary
        assert summary.total_payment == summary.monthly_payment * 360

    def test_total_payment_splits_into_principal_and_interest(self, standard_result):
        summary = standard_result.summary
        assert abs(summary.total_payment - (summary.total_principal + summary.total_interest)) < CENT

    def test_dates_advance_one_month_per_payment(self, standard_result):
        schedule = standard_result.schedule
        assert schedule[0].date == date(2025, 2, 15)
        assert schedule[11].date == date(2026, 1, 15)
        assert schedule[-1].date == date(2055, 1, 15)

    def test_month_end_start_date_is_clamped(self, standard_loan):
        result = build_schedule(replace(standard_loan, start_date=date(2025, 1, 31)))
        assert result.schedule[0].date == date(2025, 2, 28)
        assert result.schedule[1].date == date(2025, 3, 31)

    def test_calls_are_independent(self, standard_loan, standard_result):
        again = build_schedule(standard_loan)
        assert again == standard_result
        assert again.schedule is not standard_result.schedule

    def test_debug_log_reports_payment_and_interest(self, standard_loan, caplog):
        caplog.set_level(logging.DEBUG, logger="mortgage_calc.engine")
        build_schedule(standard_loan)
        assert "Built 360-payment schedule: payment=1862.8" in caplog.text


class TestZeroRate:
    def test_no_interest_is_charged(self, zero_rate_loan):
        result = build_schedule(zero_rate_loan)
        assert len(result.schedule) == 120
        for record in result.schedule:
            assert record.interest_portion == 0
            assert record.principal_portion == result.summary.monthly_payment
        assert result.summary.total_interest == 0

    def test_balance_reaches_zero(self, zero_rate_loan):
        result = build_schedule(zero_rate_loan)
        assert result.schedule[-1].remaining_balance == 0
        assert abs(result.summary.total_principal - Decimal("100000")) < CENT


class TestZeroPrincipal:
    def test_every_field_is_zero(self, zero_principal_loan):
        result = build_schedule(zero_principal_loan)
        assert len(result.schedule) == 180
        for record in result.schedule:
            assert record.payment_amount == 0
            assert record.principal_portion == 0
            assert record.interest_portion == 0
            assert record.remaining_balance == 0
        assert result.summary.total_payment == 0


class TestSettleFinalPayment:
    def test_total_principal_matches_exactly(self, standard_loan):
        result = build_schedule(standard_loan, settle_final_payment=True)
        assert abs(result.summary.total_principal - standard_loan.principal) < Decimal("1e-15")
        assert result.schedule[-1].remaining_balance == 0

    def test_only_last_payment_moves(self, standard_loan, standard_result):
        settled = build_schedule(standard_loan, settle_final_payment=True)
        assert settled.schedule[:-1] == standard_result.schedule[:-1]
        last = settled.schedule[-1]
        assert abs(last.payment_amount - standard_result.summary.monthly_payment) < CENT
        assert last.principal_portion + last.interest_portion == last.payment_amount

    def test_total_payment_is_sum_of_actual_payments(self, standard_loan):
        result = build_schedule(standard_loan, settle_final_payment=True)
        assert result.summary.total_payment == sum(r.payment_amount for r in result.schedule)


class TestValidation:
    def test_negative_principal(self, standard_loan):
        with pytest.raises(LoanInputError) as exc:
            build_schedule(replace(standard_loan, principal=Decimal("-1")))
        assert exc.value.field == "principal"

    def test_negative_rate(self, standard_loan):
        with pytest.raises(LoanInputError):
            validate_inputs(replace(standard_loan, annual_rate_percent=Decimal("-0.5")))

    def test_non_finite_rate(self, standard_loan):
        with pytest.raises(LoanInputError):
            validate_inputs(replace(standard_loan, annual_rate_percent=Decimal("NaN")))

    def test_non_finite_principal(self, standard_loan):
        with pytest.raises(LoanInputError):
            validate_inputs(replace(standard_loan, principal=float("inf")))

    @pytest.mark.parametrize("term", [0, -5, 30.0, True])
    def test_bad_term(self, standard_loan, term):
        with pytest.raises(LoanInputError) as exc:
            validate_inputs(replace(standard_loan, term_years=term))
        assert exc.value.field == "term_years"

    def test_missing_start_date(self, standard_loan):
        with pytest.raises(LoanInputError):
            validate_inputs(replace(standard_loan, start_date=None))

    def test_error_is_a_value_error(self, standard_loan):
        with pytest.raises(ValueError):
            build_schedule(replace(standard_loan, principal="abc"))
