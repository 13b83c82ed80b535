"""Data models for the mortgage calculator.

This module defines dataclasses for the entities used by the calculators:
the loan inputs, one record per scheduled payment, the schedule summary and
the yearly groups used for display. The mortgage cost and affordability
calculators have their own input/result pairs at the bottom of the module.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import List


@dataclass(frozen=True)
class LoanInputs:
    """Parameters of a fixed-rate, fully amortizing loan.

    Attributes
    ----------
    principal: Decimal
        The loan amount.
    annual_rate_percent: Decimal
        Nominal annual rate in percent (``Decimal("7")`` means 7 %/year).
    term_years: int
        Loan term in years.
    start_date: date
        Reference date; payment ``k`` falls ``k`` months after it.
    """

    principal: Decimal
    annual_rate_percent: Decimal
    term_years: int
    start_date: date

    @property
    def number_of_payments(self) -> int:
        return self.term_years * 12


@dataclass(frozen=True)
class PaymentRecord:
    """One month of the amortization schedule."""

    payment_number: int
    date: date
    payment_amount: Decimal
    principal_portion: Decimal
    interest_portion: Decimal
    remaining_balance: Decimal


@dataclass(frozen=True)
class ScheduleSummary:
    monthly_payment: Decimal
    total_payment: Decimal
    total_principal: Decimal
    total_interest: Decimal
    number_of_payments: int


@dataclass(frozen=True)
class AmortizationResult:
    schedule: List[PaymentRecord]
    summary: ScheduleSummary


@dataclass(frozen=True)
class YearGroup:
    """Aggregate of the payments falling in one loan year (1-indexed)."""

    year: int
    payments: List[PaymentRecord] = field(repr=False)
    total_payment: Decimal
    total_principal: Decimal
    total_interest: Decimal
    ending_balance: Decimal


@dataclass(frozen=True)
class MortgageInputs:
    """Inputs of the monthly mortgage cost calculator.

    ``down_payment`` is read as a percentage of ``home_price`` when
    ``down_payment_type`` is ``"percent"`` and as an amount when it is
    ``"dollar"``. Tax and insurance are annual figures; HOA and PMI are
    monthly.
    """

    home_price: Decimal
    down_payment: Decimal
    annual_rate_percent: Decimal
    term_years: int
    down_payment_type: str = "percent"  # "percent" or "dollar"
    property_tax_annual: Decimal = Decimal("0")
    home_insurance_annual: Decimal = Decimal("0")
    hoa_monthly: Decimal = Decimal("0")
    pmi_monthly: Decimal = Decimal("0")


@dataclass(frozen=True)
class MonthlyCostBreakdown:
    principal_and_interest: Decimal
    property_tax: Decimal
    insurance: Decimal
    hoa_fees: Decimal
    pmi: Decimal
    total: Decimal


@dataclass(frozen=True)
class MortgageTotals:
    loan_amount: Decimal
    down_payment_amount: Decimal
    total_interest: Decimal
    total_paid: Decimal


@dataclass(frozen=True)
class AffordabilityInputs:
    annual_income: Decimal
    monthly_debts: Decimal
    down_payment: Decimal
    annual_rate_percent: Decimal
    term_years: int
    property_tax_rate_percent: Decimal = Decimal("1.2")


@dataclass(frozen=True)
class AffordabilityResult:
    """Outcome of the affordability estimate.

    ``dti_ratio`` is the back-end debt-to-income ratio in percent and
    ``dti_status`` its label (``"Excellent"``, ``"Good"`` or ``"High"``).
    """

    max_home_price: Decimal
    max_loan_amount: Decimal
    estimated_monthly_payment: Decimal
    required_down_payment: Decimal
    recommended_down_payment: Decimal
    dti_ratio: Decimal
    dti_status: str
