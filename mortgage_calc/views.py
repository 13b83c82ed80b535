"""Read-only projections over an amortization schedule."""

from __future__ import annotations

from decimal import Decimal
from typing import Dict, Iterable, List

from .data_models import PaymentRecord, YearGroup


def loan_year(payment_number: int) -> int:
    """Return the 1-indexed loan year of a payment (``ceil(number / 12)``)."""
    return (payment_number - 1) // 12 + 1


def group_by_year(schedule: Iterable[PaymentRecord]) -> List[YearGroup]:
    """Bucket a schedule into loan years.

    Each group sums the payment, principal and interest of its members and
    carries the remaining balance of its last member. The records themselves
    are shared, not copied; they are immutable.
    """
    buckets: Dict[int, List[PaymentRecord]] = {}
    for record in schedule:
        buckets.setdefault(loan_year(record.payment_number), []).append(record)

    groups: List[YearGroup] = []
    for year in sorted(buckets):
        payments = buckets[year]
        groups.append(
            YearGroup(
                year=year,
                payments=list(payments),
                total_payment=sum((p.payment_amount for p in payments), Decimal("0")),
                total_principal=sum((p.principal_portion for p in payments), Decimal("0")),
                total_interest=sum((p.interest_portion for p in payments), Decimal("0")),
                ending_balance=payments[-1].remaining_balance,
            )
        )
    return groups
