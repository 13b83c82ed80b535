"""Command-line interface for the mortgage calculator.

This module uses the ``click`` library to implement a multi-command
interface. Users can compute full amortization schedules, view summaries,
break down the monthly cost of a mortgage or estimate how much house they
can afford. Schedules can be printed to the terminal or exported to JSON/CSV
files.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from pathlib import Path
from typing import Optional

import click

from .calculators import compute_monthly_cost, estimate_affordability
from .config import configure_logging
from .data_models import AffordabilityInputs, LoanInputs, MortgageInputs
from .engine import build_schedule
from .errors import LoanInputError
from .export import write_csv, write_json
from .formatter import (
    print_affordability,
    print_mortgage,
    print_schedule,
    print_summary,
    print_yearly,
)
from .utils import decimal_from_str, parse_amount, parse_start_date
from .views import group_by_year

logger = logging.getLogger(__name__)

MAX_PRINTED_ROWS = 120


def _amount(value: Optional[str], name: str) -> Decimal:
    if value is None:
        return Decimal("0")
    try:
        return parse_amount(value)
    except ValueError:
        raise click.BadParameter(f"Invalid amount: {value}", param_hint=name)


def _percent(value: str, name: str) -> Decimal:
    text = value.strip()
    if text.endswith("%"):
        text = text[:-1]
    try:
        return decimal_from_str(text)
    except ValueError:
        raise click.BadParameter(f"Invalid percentage: {value}", param_hint=name)


def build_inputs_from_options(principal: str, rate: str, term: int, start_date: str) -> LoanInputs:
    try:
        start = parse_start_date(start_date)
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="--start-date")
    return LoanInputs(
        principal=_amount(principal, "--principal"),
        annual_rate_percent=_percent(rate, "--rate"),
        term_years=term,
        start_date=start,
    )


def _loan_options(func):
    func = click.option("--start-date", "-s", "start_date", required=True, help="Start date (YYYY-MM or YYYY-MM-DD); payment k falls k months later")(func)
    func = click.option("--term", "-t", "term", required=True, type=int, help="Loan term in years")(func)
    func = click.option("--rate", "-r", "rate", required=True, help="Annual interest rate (percent)")(func)
    func = click.option("--principal", "-p", "principal", required=True, help="Loan amount (accepts 280k, 1.2m)")(func)
    return func


@click.group()
def cli() -> None:
    """A command-line mortgage and amortization calculator."""
    configure_logging()


@cli.command()
@_loan_options
@click.option("--view", "view", type=click.Choice(["monthly", "yearly"]), default="monthly", help="Table granularity")
@click.option("--settle-final", "settle_final", is_flag=True, help="Adjust the last payment so total principal matches the loan exactly")
@click.option("--output", "output", type=str, help="Output file path (.json or .csv)")
def schedule(
    principal: str,
    rate: str,
    term: int,
    start_date: str,
    view: str,
    settle_final: bool,
    output: Optional[str],
) -> None:
    """Compute and print the full amortization schedule."""
    inputs = build_inputs_from_options(principal, rate, term, start_date)
    try:
        result = build_schedule(inputs, settle_final_payment=settle_final)
    except LoanInputError as exc:
        raise click.BadParameter(str(exc))
    if output:
        path = Path(output)
        if path.suffix.lower() == ".json":
            write_json(path, result)
        elif path.suffix.lower() == ".csv":
            write_csv(path, result.schedule)
        else:
            raise click.BadParameter("Unsupported output format; use .json or .csv")
        logger.info("Wrote %d payments to %s", len(result.schedule), path)
        click.echo(f"Schedule exported to {path}")
        return

    print_summary(result.summary)
    if view == "yearly":
        print_yearly(group_by_year(result.schedule))
    elif len(result.schedule) > MAX_PRINTED_ROWS:
        click.echo(
            f"Schedule has {len(result.schedule)} rows; showing first {MAX_PRINTED_ROWS} rows."
        )
        print_schedule(result.schedule[:MAX_PRINTED_ROWS])
    else:
        print_schedule(result.schedule)


@cli.command()
@_loan_options
@click.option("--output", "output", type=str, help="Output file path (.json)")
def summary(principal: str, rate: str, term: int, start_date: str, output: Optional[str]) -> None:
    """Compute and print only the summary metrics for a loan."""
    inputs = build_inputs_from_options(principal, rate, term, start_date)
    try:
        result = build_schedule(inputs)
    except LoanInputError as exc:
        raise click.BadParameter(str(exc))
    if output:
        path = Path(output)
        if path.suffix.lower() != ".json":
            raise click.BadParameter("Summary export must use .json extension")
        write_json(path, result)
        click.echo(f"Summary exported to {path}")
    else:
        print_summary(result.summary)


@cli.command()
@click.option("--price", "price", required=True, help="Home price")
@click.option("--down", "down", default="20", show_default=True, help="Down payment (percent or dollars, see --down-type)")
@click.option("--down-type", "down_type", type=click.Choice(["percent", "dollar"]), default="percent", show_default=True)
@click.option("--rate", "-r", "rate", required=True, help="Annual interest rate (percent)")
@click.option("--term", "-t", "term", default=30, show_default=True, type=int, help="Loan term in years")
@click.option("--tax", "tax", help="Annual property tax")
@click.option("--insurance", "insurance", help="Annual home insurance")
@click.option("--hoa", "hoa", help="Monthly HOA fees")
@click.option("--pmi", "pmi", help="Monthly PMI")
def mortgage(
    price: str,
    down: str,
    down_type: str,
    rate: str,
    term: int,
    tax: Optional[str],
    insurance: Optional[str],
    hoa: Optional[str],
    pmi: Optional[str],
) -> None:
    """Break down the monthly cost of a mortgage."""
    inputs = MortgageInputs(
        home_price=_amount(price, "--price"),
        down_payment=_amount(down, "--down"),
        down_payment_type=down_type,
        annual_rate_percent=_percent(rate, "--rate"),
        term_years=term,
        property_tax_annual=_amount(tax, "--tax"),
        home_insurance_annual=_amount(insurance, "--insurance"),
        hoa_monthly=_amount(hoa, "--hoa"),
        pmi_monthly=_amount(pmi, "--pmi"),
    )
    try:
        breakdown, totals = compute_monthly_cost(inputs)
    except LoanInputError as exc:
        raise click.BadParameter(str(exc))
    print_mortgage(breakdown, totals)


@cli.command()
@click.option("--income", "income", required=True, help="Gross annual income")
@click.option("--debts", "debts", default="0", show_default=True, help="Existing monthly debt payments")
@click.option("--down", "down", required=True, help="Available down payment")
@click.option("--rate", "-r", "rate", required=True, help="Annual interest rate (percent)")
@click.option("--term", "-t", "term", default=30, show_default=True, type=int, help="Loan term in years")
@click.option("--tax-rate", "tax_rate", default="1.2", show_default=True, help="Annual property tax rate (percent of price)")
def afford(income: str, debts: str, down: str, rate: str, term: int, tax_rate: str) -> None:
    """Estimate the maximum affordable home price."""
    inputs = AffordabilityInputs(
        annual_income=_amount(income, "--income"),
        monthly_debts=_amount(debts, "--debts"),
        down_payment=_amount(down, "--down"),
        annual_rate_percent=_percent(rate, "--rate"),
        term_years=term,
        property_tax_rate_percent=_percent(tax_rate, "--tax-rate"),
    )
    try:
        result = estimate_affordability(inputs)
    except LoanInputError as exc:
        raise click.BadParameter(str(exc))
    print_affordability(result)


if __name__ == "__main__":
    cli()
