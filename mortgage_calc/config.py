"""Runtime settings read from the environment."""

from __future__ import annotations

import logging
import os

LOG_LEVEL_ENV = "MORTGAGE_CALC_LOG_LEVEL"
MAX_TERM_ENV = "MORTGAGE_CALC_MAX_TERM_YEARS"
HOST_ENV = "MORTGAGE_CALC_HOST"
PORT_ENV = "MORTGAGE_CALC_PORT"

DEFAULT_MAX_TERM_YEARS = 50


def log_level() -> str:
    return os.environ.get(LOG_LEVEL_ENV, "INFO").upper()


def max_term_years() -> int:
    raw = os.environ.get(MAX_TERM_ENV)
    if not raw:
        return DEFAULT_MAX_TERM_YEARS
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{MAX_TERM_ENV} must be an integer, got {raw!r}") from exc


def server_address() -> tuple[str, int]:
    return os.environ.get(HOST_ENV, "0.0.0.0"), int(os.environ.get(PORT_ENV, "8710"))


def configure_logging() -> None:
    """Configure root logging once for the CLI and the dev server."""
    logging.basicConfig(
        level=log_level(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
