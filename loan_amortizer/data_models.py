"""Data models for the loan amortizer.

The schedule is a list of :class:`PeriodBalance` rows, one per year, preceded
by a synthetic opening row. Rows are frozen dataclasses: a schedule is only
ever rebuilt from scratch, never patched in place.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

# Longest supported term, in years.
MAX_YEARS_DURATION = 255

# The installment is a monthly figure; each yearly row pays twelve of them.
PERIODS_PER_YEAR = 12

ZERO = Decimal("0")


@dataclass(frozen=True)
class PeriodBalance:
    """One year of the amortization schedule.

    Attributes
    ----------
    period: int
        1-based year index. ``0`` is reserved for the opening row that holds
        the financed principal before any payment is made.
    start_balance: Decimal
        Outstanding principal at the start of the year.
    installment_total: Decimal
        Cash paid during the year (``installment * PERIODS_PER_YEAR``).
    interest: Decimal
        Part of ``installment_total`` that pays interest.
    principal_paid: Decimal
        Part of ``installment_total`` that reduces the balance.
    end_balance: Decimal
        Outstanding principal at the end of the year.
    """

    period: int
    start_balance: Decimal
    installment_total: Decimal
    interest: Decimal
    principal_paid: Decimal
    end_balance: Decimal

    @classmethod
    def opening(cls, principal: Decimal) -> "PeriodBalance":
        """Return the period-zero row for ``principal``."""
        return cls(
            period=0,
            start_balance=principal,
            installment_total=ZERO,
            interest=ZERO,
            principal_paid=ZERO,
            end_balance=principal,
        )
