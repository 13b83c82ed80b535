"""Monthly mortgage cost and home affordability calculators.

Both calculators reuse :func:`mortgage_calc.engine.compute_monthly_payment`
for the principal-and-interest part and add the recurring housing costs
(property tax, homeowner's insurance, HOA dues and PMI) around it.
"""

from __future__ import annotations

from decimal import ROUND_FLOOR, Decimal
from typing import Tuple

from .data_models import (
    AffordabilityInputs,
    AffordabilityResult,
    MonthlyCostBreakdown,
    MortgageInputs,
    MortgageTotals,
)
from .engine import as_decimal, compute_monthly_payment, monthly_rate
from .errors import LoanInputError

MAX_DTI_RATIO = Decimal("0.43")
INSURANCE_RATE_ANNUAL = Decimal("0.005")
RECOMMENDED_DOWN_RATIO = Decimal("0.20")
PRICE_ROUNDING = Decimal(1000)
BISECTION_STEPS = 50
MAX_BRACKET_DOUBLINGS = 64
DOWN_PAYMENT_TYPES = ("percent", "dollar")


def _non_negative(name: str, value: Decimal) -> Decimal:
    amount = as_decimal(name, value)
    if amount < 0:
        raise LoanInputError(name, "must not be negative")
    return amount


def dti_status(dti_ratio: Decimal) -> str:
    """Label a debt-to-income ratio given in percent."""
    if dti_ratio <= 36:
        return "Excellent"
    if dti_ratio <= 43:
        return "Good"
    return "High"


def compute_monthly_cost(inputs: MortgageInputs) -> Tuple[MonthlyCostBreakdown, MortgageTotals]:
    """Return the monthly cost breakdown and lifetime totals of a mortgage."""
    if inputs.down_payment_type not in DOWN_PAYMENT_TYPES:
        raise LoanInputError("down_payment_type", f"must be one of {', '.join(DOWN_PAYMENT_TYPES)}")
    for name in (
        "home_price",
        "down_payment",
        "annual_rate_percent",
        "property_tax_annual",
        "home_insurance_annual",
        "hoa_monthly",
        "pmi_monthly",
    ):
        _non_negative(name, getattr(inputs, name))

    if inputs.down_payment_type == "percent":
        down_amount = inputs.home_price * inputs.down_payment / Decimal(100)
    else:
        down_amount = inputs.down_payment
    loan_amount = inputs.home_price - down_amount
    if loan_amount < 0:
        raise LoanInputError("down_payment", "exceeds the home price")

    n = inputs.term_years * 12
    principal_and_interest = compute_monthly_payment(
        loan_amount, inputs.annual_rate_percent, inputs.term_years
    )
    tax = inputs.property_tax_annual / Decimal(12)
    insurance = inputs.home_insurance_annual / Decimal(12)
    total = principal_and_interest + tax + insurance + inputs.hoa_monthly + inputs.pmi_monthly

    breakdown = MonthlyCostBreakdown(
        principal_and_interest=principal_and_interest,
        property_tax=tax,
        insurance=insurance,
        hoa_fees=inputs.hoa_monthly,
        pmi=inputs.pmi_monthly,
        total=total,
    )
    totals = MortgageTotals(
        loan_amount=loan_amount,
        down_payment_amount=down_amount,
        total_interest=principal_and_interest * n - loan_amount,
        total_paid=total * n + down_amount,
    )
    return breakdown, totals


def _housing_payment(price: Decimal, inputs: AffordabilityInputs, taxes_and_insurance_rate: Decimal) -> Decimal:
    loan = max(price - inputs.down_payment, Decimal("0"))
    principal_and_interest = compute_monthly_payment(loan, inputs.annual_rate_percent, inputs.term_years)
    return principal_and_interest + price * taxes_and_insurance_rate


def estimate_affordability(inputs: AffordabilityInputs) -> AffordabilityResult:
    """Estimate the most expensive home the buyer can carry.

    The housing budget is 43 % of gross monthly income less existing debt
    payments. The price whose principal, interest, property tax and
    insurance fit that budget is found by bisection and floored to the
    nearest thousand.
    """
    for name in (
        "annual_income",
        "monthly_debts",
        "down_payment",
        "annual_rate_percent",
        "property_tax_rate_percent",
    ):
        _non_negative(name, getattr(inputs, name))
    if inputs.annual_income == 0:
        raise LoanInputError("annual_income", "must be positive")

    monthly_income = inputs.annual_income / Decimal(12)
    budget = monthly_income * MAX_DTI_RATIO - inputs.monthly_debts
    ti_rate = monthly_rate(inputs.property_tax_rate_percent) + INSURANCE_RATE_ANNUAL / Decimal(12)

    max_price = Decimal("0")
    if budget > 0:
        low = Decimal("0")
        high = Decimal("100000")
        # Grow the bracket until the payment at ``high`` exceeds the budget.
        for _ in range(MAX_BRACKET_DOUBLINGS):
            if _housing_payment(high, inputs, ti_rate) >= budget:
                break
            low = high
            high *= 2
        else:
            raise LoanInputError("annual_income", "housing budget is too large to estimate")
        for _ in range(BISECTION_STEPS):
            mid = (low + high) / 2
            if _housing_payment(mid, inputs, ti_rate) < budget:
                low = mid
            else:
                high = mid
        max_price = (low / PRICE_ROUNDING).to_integral_value(rounding=ROUND_FLOOR) * PRICE_ROUNDING

    max_loan = max(max_price - inputs.down_payment, Decimal("0"))
    estimated = compute_monthly_payment(
        max_loan, inputs.annual_rate_percent, inputs.term_years
    ) + max_price * ti_rate
    dti = (estimated + inputs.monthly_debts) / monthly_income * 100

    return AffordabilityResult(
        max_home_price=max_price,
        max_loan_amount=max_loan,
        estimated_monthly_payment=estimated,
        required_down_payment=inputs.down_payment,
        recommended_down_payment=max_price * RECOMMENDED_DOWN_RATIO,
        dti_ratio=dti,
        dti_status=dti_status(dti),
    )
