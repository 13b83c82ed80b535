"""Export helpers for amortization schedules.

Schedules are written as CSV (one row per payment, money as fixed-point with
two decimals, dates as ``Mon YYYY``) or as JSON together with the summary and
the yearly groups. ``parse_csv`` reads the CSV form back.
"""

from __future__ import annotations

import csv
import io
import json
from pathlib import Path
from typing import Any, Dict, Iterable, List

from .data_models import AmortizationResult, PaymentRecord, ScheduleSummary, YearGroup
from .utils import decimal_from_str, format_month, parse_month
from .views import group_by_year

CSV_HEADER = ["Payment #", "Date", "Payment", "Principal", "Interest", "Balance"]
CSV_FILENAME = "amortization-schedule.csv"


def record_row(record: PaymentRecord) -> List[str]:
    return [
        str(record.payment_number),
        format_month(record.date),
        f"{record.payment_amount:.2f}",
        f"{record.principal_portion:.2f}",
        f"{record.interest_portion:.2f}",
        f"{record.remaining_balance:.2f}",
    ]


def schedule_to_csv(schedule: Iterable[PaymentRecord]) -> str:
    """Render the schedule as CSV text with a header row."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for record in schedule:
        writer.writerow(record_row(record))
    return buffer.getvalue()


def write_csv(path: Path, schedule: Iterable[PaymentRecord]) -> None:
    """Export schedule to a CSV file."""
    with path.open("w", newline="", encoding="utf-8") as f:
        f.write(schedule_to_csv(schedule))


def parse_csv(text: str) -> List[PaymentRecord]:
    """Read back a schedule written by :func:`schedule_to_csv`.

    Raises
    ------
    ValueError
        If the header does not match or a row is malformed.
    """
    reader = csv.reader(io.StringIO(text))
    header = next(reader, None)
    if header is None or [h.strip() for h in header] != CSV_HEADER:
        raise ValueError(f"Unexpected CSV header: {header}")
    records: List[PaymentRecord] = []
    for line_no, row in enumerate(reader, start=2):
        if not row:
            continue
        if len(row) != len(CSV_HEADER):
            raise ValueError(f"Line {line_no}: expected {len(CSV_HEADER)} fields, got {len(row)}")
        try:
            number = int(row[0])
        except ValueError as exc:
            raise ValueError(f"Line {line_no}: invalid payment number {row[0]!r}") from exc
        records.append(
            PaymentRecord(
                payment_number=number,
                date=parse_month(row[1]),
                payment_amount=decimal_from_str(row[2]),
                principal_portion=decimal_from_str(row[3]),
                interest_portion=decimal_from_str(row[4]),
                remaining_balance=decimal_from_str(row[5]),
            )
        )
    return records


def summary_to_dict(summary: ScheduleSummary) -> Dict[str, Any]:
    return {
        "monthly_payment": float(summary.monthly_payment),
        "total_payment": float(summary.total_payment),
        "total_principal": float(summary.total_principal),
        "total_interest": float(summary.total_interest),
        "number_of_payments": summary.number_of_payments,
    }


def serialize_schedule(schedule: Iterable[PaymentRecord]) -> List[Dict[str, Any]]:
    """Convert schedule records into JSON-serialisable dictionaries."""
    return [
        {
            "payment_number": r.payment_number,
            "date": r.date.strftime("%Y-%m"),
            "payment": float(r.payment_amount),
            "principal": float(r.principal_portion),
            "interest": float(r.interest_portion),
            "balance": float(r.remaining_balance),
        }
        for r in schedule
    ]


def serialize_years(groups: Iterable[YearGroup]) -> List[Dict[str, Any]]:
    return [
        {
            "year": g.year,
            "payment": float(g.total_payment),
            "principal": float(g.total_principal),
            "interest": float(g.total_interest),
            "ending_balance": float(g.ending_balance),
        }
        for g in groups
    ]


def result_to_dict(result: AmortizationResult) -> Dict[str, Any]:
    return {
        "summary": summary_to_dict(result.summary),
        "schedule": serialize_schedule(result.schedule),
        "yearly": serialize_years(group_by_year(result.schedule)),
    }


def write_json(path: Path, result: AmortizationResult) -> None:
    """Export summary, schedule and yearly groups to a JSON file."""
    with path.open("w", encoding="utf-8") as f:
        json.dump(result_to_dict(result), f, indent=2)
