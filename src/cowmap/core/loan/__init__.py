"""Loan identity functionality."""

from cowmap.core.loan.models import LoanId

__all__ = [
    "LoanId",
]
