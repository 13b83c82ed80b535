"""Shared loan fixtures.

The standard loan is the calculator page's placeholder: $280K at 7% over
30 years, first payment one month after 15 Jan 2025.
"""

from datetime import date
from decimal import Decimal

import pytest

from mortgage_calc.data_models import LoanInputs
from mortgage_calc.engine import build_schedule


@pytest.fixture
def standard_loan() -> LoanInputs:
    return LoanInputs(
        principal=Decimal("280000"),
        annual_rate_percent=Decimal("7.0"),
        term_years=30,
        start_date=date(2025, 1, 15),
    )


@pytest.fixture
def zero_rate_loan() -> LoanInputs:
    return LoanInputs(
        principal=Decimal("100000"),
        annual_rate_percent=Decimal("0"),
        term_years=10,
        start_date=date(2025, 1, 1),
    )


@pytest.fixture
def zero_principal_loan() -> LoanInputs:
    return LoanInputs(
        principal=Decimal("0"),
        annual_rate_percent=Decimal("6.5"),
        term_years=15,
        start_date=date(2025, 1, 1),
    )


@pytest.fixture
def standard_result(standard_loan):
    return build_schedule(standard_loan)
