"""The loan calculator.

:class:`LoanTerms` holds the four inputs of a fixed-rate loan together with
the values derived from them: the financed principal, the level installment
and the amortization schedule. Derived values are always recomputed in full
by :meth:`LoanTerms.update`, which either succeeds completely or leaves the
instance untouched.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional

from . import engine
from .data_models import ZERO, PeriodBalance
from .log import get_logger
from .utils import to_decimal, validate_amount, validate_years

logger = get_logger(__name__)


class LoanTerms:
    """A fixed-rate loan and its yearly amortization schedule.

    Parameters
    ----------
    asking_price: number
        Price of the financed asset; must not be negative.
    down_payment: number
        Upfront payment; must not be negative.
    rate: number
        Nominal annual interest rate in percent (``4.3`` means 4.3 %).
    years_duration: int
        Loan term in whole years, between 0 and ``MAX_YEARS_DURATION``.

    Raises
    ------
    InvalidInput
        If an input lies outside its domain.
    InvalidCalculation
        If the down payment exceeds the price or the rate is not positive.
    """

    def __init__(self, asking_price: Any, down_payment: Any, rate: Any, years_duration: int) -> None:
        self.asking_price = validate_amount(asking_price, "asking_price")
        self.down_payment = validate_amount(down_payment, "down_payment")
        self.rate = to_decimal(rate, "rate")
        self.years_duration = validate_years(years_duration)
        self.principal = ZERO
        self.installment = ZERO
        self.schedule: List[PeriodBalance] = []
        self.update()

    @classmethod
    def create(cls, asking_price: Any, down_payment: Any, rate: Any, years_duration: int) -> "LoanTerms":
        return cls(asking_price, down_payment, rate, years_duration)

    @classmethod
    def restore(
        cls,
        asking_price: Any,
        down_payment: Any,
        rate: Any,
        years_duration: int,
        principal: Any,
        installment: Any,
        schedule: Iterable[PeriodBalance],
    ) -> "LoanTerms":
        """Rebuild an instance from exported state without recomputing it."""
        terms = cls.__new__(cls)
        terms.asking_price = validate_amount(asking_price, "asking_price")
        terms.down_payment = validate_amount(down_payment, "down_payment")
        terms.rate = to_decimal(rate, "rate")
        terms.years_duration = validate_years(years_duration)
        terms.principal = to_decimal(principal, "principal")
        terms.installment = to_decimal(installment, "installment")
        terms.schedule = list(schedule)
        return terms

    def compute_principal(self) -> Decimal:
        """Return ``asking_price - down_payment``."""
        return engine.compute_principal(self.asking_price, self.down_payment)

    def compute_installment(self) -> Decimal:
        """Return the installment for the currently stored ``principal``.

        Call :meth:`compute_principal` and assign its result first; this
        method does not re-derive the principal.
        """
        return engine.compute_installment(self.principal, self.rate, self.years_duration)

    def generate_schedule(self) -> List[PeriodBalance]:
        """Rebuild ``schedule`` from the stored principal and installment."""
        self.schedule = engine.generate_schedule(
            self.principal, self.installment, self.rate, self.years_duration
        )
        return self.schedule

    def update(
        self,
        *,
        asking_price: Optional[Any] = None,
        down_payment: Optional[Any] = None,
        rate: Optional[Any] = None,
        years_duration: Optional[int] = None,
    ) -> None:
        """Apply optional new inputs and recompute every derived field.

        Nothing is assigned until principal, installment and schedule have
        all been computed, so a failing update leaves the instance as it was.
        """
        new_price = self.asking_price if asking_price is None else validate_amount(asking_price, "asking_price")
        new_down = self.down_payment if down_payment is None else validate_amount(down_payment, "down_payment")
        new_rate = self.rate if rate is None else to_decimal(rate, "rate")
        new_years = self.years_duration if years_duration is None else validate_years(years_duration)

        principal = engine.compute_principal(new_price, new_down)
        installment = engine.compute_installment(principal, new_rate, new_years)
        schedule = engine.generate_schedule(principal, installment, new_rate, new_years)

        self.asking_price = new_price
        self.down_payment = new_down
        self.rate = new_rate
        self.years_duration = new_years
        self.principal = principal
        self.installment = installment
        self.schedule = schedule
        logger.debug(
            "Updated loan: principal=%s installment=%s years=%d",
            principal,
            installment,
            new_years,
        )

    def summary(self) -> Dict[str, object]:
        """Aggregate metrics of the current schedule."""
        return engine.summarize(self.principal, self.installment, self.schedule)

    def _state(self) -> tuple:
        return (
            self.asking_price,
            self.down_payment,
            self.rate,
            self.years_duration,
            self.principal,
            self.installment,
            tuple(self.schedule),
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LoanTerms):
            return NotImplemented
        return self._state() == other._state()

    def __repr__(self) -> str:
        return (
            f"LoanTerms(asking_price={self.asking_price}, down_payment={self.down_payment}, "
            f"rate={self.rate}, years_duration={self.years_duration}, "
            f"principal={self.principal}, installment={self.installment}, "
            f"periods={len(self.schedule)})"
        )
