"""Exception hierarchy for the loan amortizer.

Every error derives from ``ValueError`` so callers that only know about the
built-in type keep working.
"""


class LoanAmortizerError(ValueError):
    """Base exception for all loan amortizer errors."""


class InvalidInput(LoanAmortizerError):
    """Raised when an input lies outside its declared domain."""


class InvalidRecord(InvalidInput):
    """Raised when an imported record is malformed or carries unknown fields."""


class InvalidCalculation(LoanAmortizerError):
    """Raised when the inputs cannot produce a principal or an installment.

    The condition is recoverable: fix the inputs and call ``update`` again.
    """


class ConfigurationError(LoanAmortizerError):
    """Raised when configuration read from the environment is invalid."""
