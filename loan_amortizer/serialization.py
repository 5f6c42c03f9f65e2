"""JSON and CSV import/export for loan schedules.

A loan is exchanged as a single JSON record::

    {
      "asking_price": 165000.0, "down_payment": 20000.0, "years_duration": 30,
      "installment": 717.56..., "rate": 4.3, "principal": 145000.0,
      "payments": [{"year": 0, "start_balance": ..., "installment_total": ...,
                    "interest": ..., "principal": ..., "end_balance": ...}, ...]
    }

The format is strict: a record or payment row with missing or unknown fields
is rejected with ``InvalidRecord``. Note that ``principal`` means the
financed amount at the top level but the principal portion of a payment
inside ``payments``.
"""

from __future__ import annotations

import csv
import json
from decimal import Decimal, Overflow
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Sequence

from .calculator import LoanTerms
from .data_models import PeriodBalance
from .errors import InvalidRecord
from .log import get_logger
from .utils import to_stored

logger = get_logger(__name__)

TERMS_FIELDS = (
    "asking_price",
    "down_payment",
    "years_duration",
    "installment",
    "rate",
    "principal",
    "payments",
)
PAYMENT_FIELDS = (
    "year",
    "start_balance",
    "installment_total",
    "interest",
    "principal",
    "end_balance",
)
CSV_HEADER = [
    "Year",
    "Start_Balance",
    "Installment_Total",
    "Interest",
    "Principal",
    "End_Balance",
]


def period_to_dict(row: PeriodBalance) -> Dict[str, Any]:
    return {
        "year": row.period,
        "start_balance": float(row.start_balance),
        "installment_total": float(row.installment_total),
        "interest": float(row.interest),
        "principal": float(row.principal_paid),
        "end_balance": float(row.end_balance),
    }


def terms_to_dict(terms: LoanTerms) -> Dict[str, Any]:
    """Convert ``terms`` into a JSON-serializable record."""
    return {
        "asking_price": float(terms.asking_price),
        "down_payment": float(terms.down_payment),
        "years_duration": terms.years_duration,
        "installment": float(terms.installment),
        "rate": float(terms.rate),
        "principal": float(terms.principal),
        "payments": [period_to_dict(row) for row in terms.schedule],
    }


def _check_fields(data: Any, expected: Sequence[str], what: str) -> None:
    if not isinstance(data, Mapping):
        raise InvalidRecord(f"{what} must be an object, got {type(data).__name__}")
    unknown = sorted(set(data) - set(expected))
    if unknown:
        raise InvalidRecord(f"Unknown field(s) in {what}: {', '.join(unknown)}")
    missing = [key for key in expected if key not in data]
    if missing:
        raise InvalidRecord(f"Missing field(s) in {what}: {', '.join(missing)}")


def _number(data: Mapping[str, Any], key: str, what: str) -> Decimal:
    value = data[key]
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        raise InvalidRecord(f"{what}.{key} must be a number, got {value!r}")
    result = Decimal(str(value)) if isinstance(value, float) else Decimal(value)
    if not result.is_finite():
        raise InvalidRecord(f"{what}.{key} must be finite, got {value!r}")
    try:
        return to_stored(result)
    except Overflow as exc:
        raise InvalidRecord(f"{what}.{key} is too large, got {value!r}") from exc


def _integer(data: Mapping[str, Any], key: str, what: str) -> int:
    value = data[key]
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidRecord(f"{what}.{key} must be an integer, got {value!r}")
    return value


def period_from_dict(data: Any) -> PeriodBalance:
    _check_fields(data, PAYMENT_FIELDS, "payment")
    return PeriodBalance(
        period=_integer(data, "year", "payment"),
        start_balance=_number(data, "start_balance", "payment"),
        installment_total=_number(data, "installment_total", "payment"),
        interest=_number(data, "interest", "payment"),
        principal_paid=_number(data, "principal", "payment"),
        end_balance=_number(data, "end_balance", "payment"),
    )


def terms_from_dict(data: Any) -> LoanTerms:
    """Rebuild a ``LoanTerms`` from an exported record.

    The stored derived values are taken as they are; only the shape of the
    record and the domains of its inputs are checked.
    """
    _check_fields(data, TERMS_FIELDS, "record")
    years_duration = _integer(data, "years_duration", "record")
    payments = data["payments"]
    if not isinstance(payments, list):
        raise InvalidRecord("record.payments must be a list")
    schedule = [period_from_dict(item) for item in payments]
    if len(schedule) != years_duration + 1:
        raise InvalidRecord(
            f"record.payments must hold {years_duration + 1} rows, got {len(schedule)}"
        )
    for expected, row in enumerate(schedule):
        if row.period != expected:
            raise InvalidRecord(f"payments are out of order: year {row.period} at position {expected}")
    try:
        return LoanTerms.restore(
            asking_price=_number(data, "asking_price", "record"),
            down_payment=_number(data, "down_payment", "record"),
            rate=_number(data, "rate", "record"),
            years_duration=years_duration,
            principal=_number(data, "principal", "record"),
            installment=_number(data, "installment", "record"),
            schedule=schedule,
        )
    except InvalidRecord:
        raise
    except ValueError as exc:
        raise InvalidRecord(str(exc)) from exc


def dumps(terms: LoanTerms, indent: int = 2) -> str:
    """Serialize ``terms`` to JSON text."""
    return json.dumps(terms_to_dict(terms), indent=indent or None, allow_nan=False)


def loads(text: str) -> LoanTerms:
    """Parse JSON text produced by :func:`dumps`."""
    try:
        data = json.loads(text, parse_float=Decimal)
    except json.JSONDecodeError as exc:
        raise InvalidRecord(f"Invalid JSON: {exc}") from exc
    return terms_from_dict(data)


def export_to_json(path: Path, terms: LoanTerms, indent: int = 2) -> None:
    """Export the loan record to a JSON file."""
    with path.open("w", encoding="utf-8") as f:
        f.write(dumps(terms, indent=indent))
    logger.info("Exported %d schedule rows to %s", len(terms.schedule), path)


def import_from_json(path: Path) -> LoanTerms:
    """Load a loan record from a JSON file."""
    with path.open("r", encoding="utf-8") as f:
        terms = loads(f.read())
    logger.info("Imported %d schedule rows from %s", len(terms.schedule), path)
    return terms


def export_to_csv(path: Path, schedule: Iterable[PeriodBalance]) -> None:
    """Export the schedule rows to a CSV file."""
    rows: List[PeriodBalance] = list(schedule)
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(CSV_HEADER)
        for row in rows:
            writer.writerow(
                [
                    row.period,
                    float(row.start_balance),
                    float(row.installment_total),
                    float(row.interest),
                    float(row.principal_paid),
                    float(row.end_balance),
                ]
            )
    logger.info("Exported %d schedule rows to %s", len(rows), path)
