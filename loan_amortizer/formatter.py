"""Output helpers for the loan amortizer.

This module renders loan terms, summaries and amortization schedules in a
plain tabular text format using built-in printing and string formatting.
"""

from __future__ import annotations

from typing import Dict, Iterable

from .calculator import LoanTerms
from .data_models import PeriodBalance


def print_terms(terms: LoanTerms) -> None:
    """Print the inputs and derived values of a loan."""
    print("Loan")
    print("-" * 72)
    print(f"Asking price       : {terms.asking_price:.2f}")
    print(f"Down payment       : {terms.down_payment:.2f}")
    print(f"Rate               : {terms.rate}%")
    print(f"Duration           : {terms.years_duration} years")
    print(f"Principal          : {terms.principal:.2f}")
    print(f"Installment        : {terms.installment:.4f}")
    print("-" * 72)


def print_summary(summary: Dict[str, object]) -> None:
    """Print a summary of loan metrics in a human-readable format."""
    print("Summary")
    print("-" * 72)
    print(f"Principal financed : {summary['principal_financed']:.2f}")
    print(f"Installment        : {summary['installment']:.4f}")
    print(f"Annual payment     : {summary['annual_payment']:.2f}")
    print(f"Total paid         : {summary['total_paid']:.2f}")
    print(f"Total interest     : {summary['total_interest']:.2f}")
    print(f"Principal repaid   : {summary['total_principal_paid']:.2f}")
    print(f"Remaining balance  : {summary['remaining_balance']:.2f}")
    print(f"Years              : {summary['years']}")
    print("-" * 72)


def print_schedule(schedule: Iterable[PeriodBalance]) -> None:
    """Print the amortization schedule as a simple table, one row per year."""
    headers = ["Year", "StartBal", "Paid", "Interest", "Principal", "EndBal"]
    print("\t".join(headers))
    for row in schedule:
        print(
            "\t".join(
                [
                    str(row.period),
                    f"{row.start_balance:.2f}",
                    f"{row.installment_total:.2f}",
                    f"{row.interest:.2f}",
                    f"{row.principal_paid:.2f}",
                    f"{row.end_balance:.2f}",
                ]
            )
        )
