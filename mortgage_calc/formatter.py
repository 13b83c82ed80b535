"""Output helpers for the mortgage calculator.

This module provides simple functions to render amortization schedules,
summaries and calculator results in a tabular text format. We rely only on
built-in printing and string formatting.
"""

from __future__ import annotations

from typing import Iterable

from .data_models import (
    AffordabilityResult,
    MonthlyCostBreakdown,
    MortgageTotals,
    PaymentRecord,
    ScheduleSummary,
    YearGroup,
)
from .export import CSV_HEADER, record_row


def print_summary(summary: ScheduleSummary) -> None:
    """Print a summary of loan metrics in a human-readable format."""
    print("Summary")
    print("-" * 72)
    print(f"Monthly payment    : {summary.monthly_payment:.2f}")
    print(f"Number of payments : {summary.number_of_payments}")
    print(f"Total principal    : {summary.total_principal:.2f}")
    print(f"Total interest     : {summary.total_interest:.2f}")
    print(f"Total paid         : {summary.total_payment:.2f}")
    print("-" * 72)


def print_schedule(schedule: Iterable[PaymentRecord]) -> None:
    """Print the monthly amortization schedule as a simple table."""
    print("\t".join(CSV_HEADER))
    for record in schedule:
        print("\t".join(record_row(record)))


def print_yearly(groups: Iterable[YearGroup]) -> None:
    """Print one row per loan year."""
    print("\t".join(["Year", "Payment", "Principal", "Interest", "EndBal"]))
    for group in groups:
        print(
            f"{group.year}\t{group.total_payment:.2f}\t{group.total_principal:.2f}"
            f"\t{group.total_interest:.2f}\t{group.ending_balance:.2f}"
        )


def print_mortgage(breakdown: MonthlyCostBreakdown, totals: MortgageTotals) -> None:
    print("Monthly payment")
    print("-" * 72)
    print(f"Principal & interest : {breakdown.principal_and_interest:.2f}")
    print(f"Property tax         : {breakdown.property_tax:.2f}")
    print(f"Home insurance       : {breakdown.insurance:.2f}")
    if breakdown.hoa_fees:
        print(f"HOA fees             : {breakdown.hoa_fees:.2f}")
    if breakdown.pmi:
        print(f"PMI                  : {breakdown.pmi:.2f}")
    print(f"Total monthly        : {breakdown.total:.2f}")
    print("-" * 72)
    print(f"Loan amount          : {totals.loan_amount:.2f}")
    print(f"Down payment         : {totals.down_payment_amount:.2f}")
    print(f"Total interest       : {totals.total_interest:.2f}")
    print(f"Total paid           : {totals.total_paid:.2f}")


def print_affordability(result: AffordabilityResult) -> None:
    print("Affordability")
    print("-" * 72)
    print(f"Max home price       : {result.max_home_price:.0f}")
    print(f"Max loan amount      : {result.max_loan_amount:.0f}")
    print(f"Est. monthly payment : {result.estimated_monthly_payment:.2f}")
    print(f"Down payment         : {result.required_down_payment:.0f}")
    print(f"Recommended (20%)    : {result.recommended_down_payment:.0f}")
    print(f"Debt-to-income       : {result.dti_ratio:.1f}% ({result.dti_status})")
    print("-" * 72)
