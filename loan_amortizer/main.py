"""Command-line interface for the loan amortizer.

This module uses the ``click`` library to implement a multi-command
interface. Users can compute a yearly amortization schedule, view its summary
or display a previously exported schedule. Results can be printed to the
terminal or exported to JSON/CSV files.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Callable, Optional

import click

from .calculator import LoanTerms
from .config import LOG_LEVELS, Settings
from .data_models import MAX_YEARS_DURATION
from .errors import ConfigurationError, InvalidInput, LoanAmortizerError
from .formatter import print_schedule, print_summary, print_terms
from .log import get_logger, setup_logging
from .serialization import export_to_csv, export_to_json, import_from_json
from .utils import parse_amount

logger = get_logger(__name__)


def build_terms_from_options(
    asking_price: str,
    rate: float,
    years: int,
    down_payment: Optional[str],
) -> LoanTerms:
    """Parse raw option values and compute the loan.

    Unparsable amounts raise ``click.BadParameter``; domain and calculation
    errors propagate as ``LoanAmortizerError``.
    """
    try:
        price_value = parse_amount(asking_price)
    except InvalidInput as exc:
        raise click.BadParameter(str(exc), param_hint="--price")
    try:
        down_value = parse_amount(down_payment) if down_payment else parse_amount("0")
    except InvalidInput as exc:
        raise click.BadParameter(str(exc), param_hint="--down-payment")
    return LoanTerms.create(price_value, down_value, rate, years)


def _loan_options(func: Callable) -> Callable:
    options = [
        click.option("--price", "-p", "asking_price", required=True, help="Asking price (e.g. 165000 or 165k)"),
        click.option("--down-payment", "-d", "down_payment", help="Down payment amount"),
        click.option("--rate", "-r", "rate", required=True, type=float, help="Annual interest rate (percent)"),
        click.option(
            "--years",
            "-y",
            "years",
            required=True,
            type=click.IntRange(0, MAX_YEARS_DURATION),
            help="Loan term in years",
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _compute(asking_price: str, rate: float, years: int, down_payment: Optional[str]) -> LoanTerms:
    try:
        return build_terms_from_options(asking_price, rate, years, down_payment)
    except LoanAmortizerError as exc:
        logger.warning("Calculation rejected: %s", exc)
        raise click.ClickException(str(exc))


def _print_loan(settings: Settings, terms: LoanTerms) -> None:
    print_terms(terms)
    print_summary(terms.summary())
    rows = terms.schedule
    # Limit schedule length printed to avoid flooding the terminal
    if len(rows) > settings.max_rows:
        click.echo(f"Schedule has {len(rows)} rows; showing first {settings.max_rows} rows.")
        rows = rows[: settings.max_rows]
    print_schedule(rows)


@click.group()
@click.option(
    "--log-level",
    "log_level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    help="Override LOAN_AMORTIZER_LOG_LEVEL",
)
@click.pass_context
def cli(ctx: click.Context, log_level: Optional[str]) -> None:
    """A command-line calculator for fixed-rate yearly amortization schedules."""
    try:
        settings = Settings.from_env()
        if log_level:
            settings.log_level = log_level.upper()
    except ConfigurationError as exc:
        raise click.ClickException(str(exc))
    setup_logging(settings.log_level, settings.log_format)
    ctx.obj = settings


@cli.command()
@_loan_options
@click.option("--output", "output", type=str, help="Output file path (.json or .csv)")
@click.pass_obj
def schedule(
    settings: Settings,
    asking_price: str,
    down_payment: Optional[str],
    rate: float,
    years: int,
    output: Optional[str],
) -> None:
    """Compute and print the full amortization schedule."""
    terms = _compute(asking_price, rate, years, down_payment)
    if output:
        path = Path(output)
        if path.suffix.lower() == ".json":
            export_to_json(path, terms, indent=settings.json_indent)
        elif path.suffix.lower() == ".csv":
            export_to_csv(path, terms.schedule)
        else:
            raise click.BadParameter("Unsupported output format; use .json or .csv", param_hint="--output")
        click.echo(f"Schedule exported to {path}")
        return
    _print_loan(settings, terms)


@cli.command()
@_loan_options
@click.option("--output", "output", type=str, help="Output file path (.json)")
@click.pass_obj
def summary(
    settings: Settings,
    asking_price: str,
    down_payment: Optional[str],
    rate: float,
    years: int,
    output: Optional[str],
) -> None:
    """Compute and print only the summary metrics for a loan."""
    terms = _compute(asking_price, rate, years, down_payment)
    summary_data = terms.summary()
    if output:
        path = Path(output)
        if path.suffix.lower() != ".json":
            raise click.BadParameter("Summary export must use .json extension", param_hint="--output")
        with path.open("w", encoding="utf-8") as f:
            json.dump({"summary": summary_data}, f, indent=settings.json_indent or None)
        click.echo(f"Summary exported to {path}")
    else:
        print_summary(summary_data)


@cli.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_obj
def show(settings: Settings, path: Path) -> None:
    """Display a schedule previously exported to JSON."""
    try:
        terms = import_from_json(path)
    except LoanAmortizerError as exc:
        logger.warning("Rejected record %s: %s", path, exc)
        raise click.ClickException(str(exc))
    _print_loan(settings, terms)


if __name__ == "__main__":
    cli()
