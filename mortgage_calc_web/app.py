import logging
import os

from flask import Flask, Response, jsonify, request

from mortgage_calc.calculators import compute_monthly_cost, estimate_affordability
from mortgage_calc.config import configure_logging, max_term_years, server_address
from mortgage_calc.data_models import AffordabilityInputs, LoanInputs, MortgageInputs
from mortgage_calc.engine import build_schedule
from mortgage_calc.errors import LoanInputError
from mortgage_calc.export import CSV_FILENAME, result_to_dict, schedule_to_csv
from mortgage_calc.utils import decimal_from_str, parse_amount, parse_start_date

logger = logging.getLogger(__name__)

app = Flask(__name__)
app.config["MAX_TERM_YEARS"] = max_term_years()


def _payload() -> dict:
    data = request.get_json(silent=True)
    if data is None:
        data = request.form.to_dict()
    if not isinstance(data, dict):
        raise ValueError("Request body must be a JSON object")
    return data


def _field(data: dict, name: str, default=None) -> str:
    value = data.get(name, default)
    if value is None or str(value).strip() == "":
        raise LoanInputError(name, "is required")
    return str(value)


def _term(data: dict, name: str = "term", default=None) -> int:
    raw = _field(data, name, default)
    try:
        value = decimal_from_str(raw)
    except ValueError:
        raise LoanInputError(name, f"must be a whole number of years, got {raw!r}")
    # JSON clients may send 30.0 for 30.
    if value != value.to_integral_value():
        raise LoanInputError(name, f"must be a whole number of years, got {raw!r}")
    term = int(value)
    if term > app.config["MAX_TERM_YEARS"]:
        raise LoanInputError(name, f"must not exceed {app.config['MAX_TERM_YEARS']} years")
    return term


def _payload_to_inputs(data: dict) -> LoanInputs:
    return LoanInputs(
        principal=parse_amount(_field(data, "principal")),
        annual_rate_percent=decimal_from_str(_field(data, "rate")),
        term_years=_term(data),
        start_date=parse_start_date(_field(data, "start_date")),
    )


def _bad_request(exc: ValueError):
    logger.warning("Rejected calculator input: %s", exc)
    return jsonify({"error": str(exc)}), 400


@app.get("/healthz")
def healthz():
    return jsonify({"status": "ok"})


@app.post("/api/amortization")
def amortization():
    try:
        result = build_schedule(_payload_to_inputs(_payload()))
    except ValueError as exc:
        return _bad_request(exc)
    return jsonify(result_to_dict(result))


@app.post("/api/amortization.csv")
def amortization_csv():
    try:
        result = build_schedule(_payload_to_inputs(_payload()))
    except ValueError as exc:
        return _bad_request(exc)
    return Response(
        schedule_to_csv(result.schedule),
        mimetype="text/csv",
        headers={"Content-Disposition": f"attachment; filename={CSV_FILENAME}"},
    )


@app.post("/api/mortgage")
def mortgage():
    try:
        data = _payload()
        inputs = MortgageInputs(
            home_price=parse_amount(_field(data, "home_price")),
            down_payment=parse_amount(data.get("down_payment", "0")),
            down_payment_type=str(data.get("down_payment_type", "percent")),
            annual_rate_percent=decimal_from_str(_field(data, "rate")),
            term_years=_term(data, default=30),
            property_tax_annual=parse_amount(data.get("property_tax", "0")),
            home_insurance_annual=parse_amount(data.get("home_insurance", "0")),
            hoa_monthly=parse_amount(data.get("hoa_fees", "0")),
            pmi_monthly=parse_amount(data.get("pmi", "0")),
        )
        breakdown, totals = compute_monthly_cost(inputs)
    except ValueError as exc:
        return _bad_request(exc)
    return jsonify(
        {
            "monthly": {
                "principal_and_interest": float(breakdown.principal_and_interest),
                "property_tax": float(breakdown.property_tax),
                "insurance": float(breakdown.insurance),
                "hoa_fees": float(breakdown.hoa_fees),
                "pmi": float(breakdown.pmi),
                "total": float(breakdown.total),
            },
            "totals": {
                "loan_amount": float(totals.loan_amount),
                "down_payment_amount": float(totals.down_payment_amount),
                "total_interest": float(totals.total_interest),
                "total_paid": float(totals.total_paid),
            },
        }
    )


@app.post("/api/affordability")
def affordability():
    try:
        data = _payload()
        inputs = AffordabilityInputs(
            annual_income=parse_amount(_field(data, "annual_income")),
            monthly_debts=parse_amount(data.get("monthly_debts", "0")),
            down_payment=parse_amount(data.get("down_payment", "0")),
            annual_rate_percent=decimal_from_str(_field(data, "rate")),
            term_years=_term(data, default=30),
            property_tax_rate_percent=decimal_from_str(data.get("property_tax_rate", "1.2")),
        )
        result = estimate_affordability(inputs)
    except ValueError as exc:
        return _bad_request(exc)
    return jsonify(
        {
            "max_home_price": float(result.max_home_price),
            "max_loan_amount": float(result.max_loan_amount),
            "estimated_monthly_payment": float(result.estimated_monthly_payment),
            "required_down_payment": float(result.required_down_payment),
            "recommended_down_payment": float(result.recommended_down_payment),
            "dti_ratio": float(result.dti_ratio),
            "dti_status": result.dti_status,
        }
    )


if __name__ == "__main__":
    configure_logging()
    host, port = server_address()
    logger.info("Starting mortgage calculator API on %s:%d", host, port)
    app.run(host=host, port=port, debug=bool(os.environ.get("FLASK_DEBUG")))
