"""Pytest configuration and fixtures."""

from decimal import Decimal

import pytest

from loan_amortizer.calculator import LoanTerms


@pytest.fixture
def reference_terms() -> LoanTerms:
    """A 30 year loan of 145000 at 4.3 %."""
    return LoanTerms.create(165000.0, 20000.0, 4.3, 30)


@pytest.fixture
def short_terms() -> LoanTerms:
    """A small five year loan."""
    return LoanTerms.create(Decimal("12000"), Decimal("2000"), Decimal("6"), 5)


@pytest.fixture
def reference_args() -> list:
    """CLI options for the reference loan."""
    return ["-p", "165k", "-d", "20,000", "-r", "4.3", "-y", "30"]
