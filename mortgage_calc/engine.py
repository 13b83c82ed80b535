"""Core calculation engine for the mortgage calculator.

This module implements the financial logic required to build the amortization
schedule of a fixed-rate, fully amortizing loan: the fixed monthly payment and
a payment-by-payment split of each installment into interest and principal.
Results are returned as an ``AmortizationResult`` holding the list of
``PaymentRecord`` objects and a ``ScheduleSummary``.

The engine is pure: no I/O, no shared state between calls.
"""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal, getcontext
from typing import List, Union

from .data_models import AmortizationResult, LoanInputs, PaymentRecord, ScheduleSummary
from .errors import LoanInputError
from .utils import add_months

getcontext().prec = 28  # increase precision for financial calculations

logger = logging.getLogger(__name__)

Number = Union[Decimal, int, float, str]

HALF_CENT = Decimal("0.005")


def as_decimal(name: str, value: Number) -> Decimal:
    """Coerce ``value`` to a finite Decimal or raise ``LoanInputError``."""
    if isinstance(value, bool):
        raise LoanInputError(name, "must be a number")
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, (int, float, str)):
        try:
            result = Decimal(str(value))
        except ArithmeticError as exc:
            raise LoanInputError(name, f"not a number: {value!r}") from exc
    else:
        raise LoanInputError(name, f"must be a number, got {type(value).__name__}")
    if not result.is_finite():
        raise LoanInputError(name, "must be finite")
    return result


def _check_term(term_years: int) -> int:
    if isinstance(term_years, bool) or not isinstance(term_years, int):
        raise LoanInputError("term_years", "must be a whole number of years")
    if term_years <= 0:
        raise LoanInputError("term_years", "must be positive")
    return term_years


def validate_inputs(inputs: LoanInputs) -> None:
    """Reject loan parameters outside the engine's domain.

    Raises
    ------
    LoanInputError
        If the principal or rate is negative or non-finite, the term is not a
        positive integer, or the start date is missing.
    """
    if as_decimal("principal", inputs.principal) < 0:
        raise LoanInputError("principal", "must not be negative")
    if as_decimal("annual_rate_percent", inputs.annual_rate_percent) < 0:
        raise LoanInputError("annual_rate_percent", "must not be negative")
    _check_term(inputs.term_years)
    if not isinstance(inputs.start_date, date):
        raise LoanInputError("start_date", "must be a calendar date")


def monthly_rate(annual_rate_percent: Decimal) -> Decimal:
    """Convert an annual rate in percent into a monthly decimal rate."""
    return annual_rate_percent / Decimal(100) / Decimal(12)


def compute_monthly_payment(principal: Number, annual_rate_percent: Number, term_years: int) -> Decimal:
    """Return the fixed monthly payment of a fully amortizing loan.

    The formula is:

        payment = P * i * (1 + i)^n / ((1 + i)^n - 1)

    where ``P`` is the principal, ``i`` the monthly rate and ``n`` the number
    of payments. When the rate is zero the formula is ``0/0``, so the payment
    becomes the straight-line ``P / n``.
    """
    principal = as_decimal("principal", principal)
    rate = monthly_rate(as_decimal("annual_rate_percent", annual_rate_percent))
    n = _check_term(term_years) * 12
    if rate == 0:
        return principal / Decimal(n)
    factor = (1 + rate) ** n
    return principal * rate * factor / (factor - 1)


def build_schedule(inputs: LoanInputs, *, settle_final_payment: bool = False) -> AmortizationResult:
    """Compute the amortization schedule and summary for a loan.

    Parameters
    ----------
    inputs: LoanInputs
        The loan parameters; checked with :func:`validate_inputs`.
    settle_final_payment: bool
        When false (the default) every record carries the same payment and
        the last balance is clamped to zero, leaving any sub-cent residue out
        of ``total_principal``. When true the final record's principal
        portion absorbs that residue, so ``total_principal`` equals the
        principal exactly and the last payment differs slightly.

    Returns
    -------
    AmortizationResult
        ``schedule`` holds exactly ``term_years * 12`` records.
    """
    validate_inputs(inputs)
    principal = as_decimal("principal", inputs.principal)
    rate = monthly_rate(as_decimal("annual_rate_percent", inputs.annual_rate_percent))
    n = inputs.number_of_payments
    payment = compute_monthly_payment(principal, inputs.annual_rate_percent, inputs.term_years)

    schedule: List[PaymentRecord] = []
    balance = principal
    total_interest = Decimal("0")
    total_principal = Decimal("0")
    total_paid = Decimal("0")

    for number in range(1, n + 1):
        interest_portion = balance * rate
        principal_portion = payment - interest_portion
        payment_amount = payment
        balance -= principal_portion

        if number == n:
            if settle_final_payment:
                principal_portion += balance
                payment_amount = principal_portion + interest_portion
                balance = Decimal("0")
            elif balance.copy_abs() < HALF_CENT:
                balance = Decimal("0")
        # Final-period drift can leave a tiny negative balance.
        if balance < 0:
            balance = Decimal("0")

        total_interest += interest_portion
        total_principal += principal_portion
        total_paid += payment_amount

        schedule.append(
            PaymentRecord(
                payment_number=number,
                date=add_months(inputs.start_date, number),
                payment_amount=payment_amount,
                principal_portion=principal_portion,
                interest_portion=interest_portion,
                remaining_balance=balance,
            )
        )

    total_payment = total_paid if settle_final_payment else payment * n
    summary = ScheduleSummary(
        monthly_payment=payment,
        total_payment=total_payment,
        total_principal=total_principal,
        total_interest=total_interest,
        number_of_payments=n,
    )
    logger.debug(
        "Built %d-payment schedule: payment=%s total_interest=%s",
        n,
        f"{payment:.2f}",
        f"{total_interest:.2f}",
    )
    return AmortizationResult(schedule=schedule, summary=summary)
