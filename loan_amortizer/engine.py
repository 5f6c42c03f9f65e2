"""Core calculation engine for the loan amortizer.

This module holds the pure financial logic: the financed principal, the level
installment of a fixed-rate annuity and the year-by-year amortization
schedule. The schedule is a left fold: each row is computed from the previous
row's closing balance, the installment and the rate only.

Arithmetic runs in ``CALCULATION_CONTEXT``; every value that ends up on a
``PeriodBalance`` or as a derived aggregate is rounded with ``to_stored``.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation, Overflow, localcontext
from typing import Dict, Iterable, List

from .data_models import PERIODS_PER_YEAR, ZERO, PeriodBalance
from .errors import InvalidCalculation
from .utils import CALCULATION_CONTEXT, to_stored

HUNDRED = Decimal(100)


def compute_principal(asking_price: Decimal, down_payment: Decimal) -> Decimal:
    """Return the financed amount, ``asking_price - down_payment``."""
    if down_payment > asking_price:
        raise InvalidCalculation("down payment exceeds price")
    with localcontext(CALCULATION_CONTEXT):
        return to_stored(asking_price - down_payment)


def compute_installment(principal: Decimal, rate: Decimal, years_duration: int) -> Decimal:
    """Return the level monthly installment amortizing ``principal``.

    The formula is:

        installment = P / (((1 + i)^n - 1) / (i * (1 + i)^n))

    where ``P`` is the principal, ``i`` the monthly rate (``rate / 12 / 100``)
    and ``n`` the number of monthly payments (``years_duration * 12``). A
    zero-length term has nothing to amortize and yields ``0``.
    """
    if rate <= 0:
        raise InvalidCalculation("non-positive rate")
    if years_duration == 0:
        return ZERO
    try:
        with localcontext(CALCULATION_CONTEXT):
            monthly_rate = (rate / Decimal(12)) / HUNDRED
            growth = (1 + monthly_rate) ** (years_duration * 12)
            if growth == 1:
                # (1 + i) rounded to 1 at the context precision
                raise InvalidCalculation("rate too small to amortize over the term")
            return to_stored(principal / ((growth - 1) / (monthly_rate * growth)))
    except (Overflow, InvalidOperation) as exc:
        raise InvalidCalculation("rate too large to amortize over the term") from exc


def next_period(previous: PeriodBalance, installment: Decimal, rate: Decimal) -> PeriodBalance:
    """Compute the row following ``previous``."""
    start_balance = previous.end_balance
    with localcontext(CALCULATION_CONTEXT):
        installment_total = to_stored(installment * PERIODS_PER_YEAR)
        interest = to_stored(start_balance * rate / HUNDRED)
        principal_paid = to_stored(installment_total - interest)
        end_balance = to_stored(start_balance - principal_paid)
    return PeriodBalance(
        period=previous.period + 1,
        start_balance=start_balance,
        installment_total=installment_total,
        interest=interest,
        principal_paid=principal_paid,
        end_balance=end_balance,
    )


def generate_schedule(
    principal: Decimal, installment: Decimal, rate: Decimal, years_duration: int
) -> List[PeriodBalance]:
    """Build the full schedule: the opening row plus one row per year."""
    schedule = [PeriodBalance.opening(principal)]
    try:
        for _ in range(years_duration):
            schedule.append(next_period(schedule[-1], installment, rate))
    except (Overflow, InvalidOperation) as exc:
        raise InvalidCalculation(
            f"balance out of range in year {len(schedule)}"
        ) from exc
    return schedule


def summarize(principal: Decimal, installment: Decimal, schedule: Iterable[PeriodBalance]) -> Dict[str, object]:
    """Aggregate metrics for a schedule.

    The opening row carries no payment, so it only contributes the closing
    balance when the schedule has no yearly rows.
    """
    total_paid = ZERO
    total_interest = ZERO
    total_principal_paid = ZERO
    remaining_balance = principal
    years = 0
    with localcontext(CALCULATION_CONTEXT):
        for row in schedule:
            total_paid += row.installment_total
            total_interest += row.interest
            total_principal_paid += row.principal_paid
            remaining_balance = row.end_balance
            if row.period > 0:
                years += 1
        annual_payment = installment * PERIODS_PER_YEAR
    return {
        "principal_financed": float(principal),
        "installment": float(installment),
        "annual_payment": float(annual_payment),
        "total_paid": float(total_paid),
        "total_interest": float(total_interest),
        "total_principal_paid": float(total_principal_paid),
        "remaining_balance": float(remaining_balance),
        "years": years,
    }
