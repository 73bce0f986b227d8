"""Loan identity models.

Usage:
    loan = LoanId(lender=3, serial=17)
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class LoanId:
    """Lightweight identifier for one outstanding borrow of a map entry.

    The lender field names the ledger that issued the loan, so a loan can only
    be returned to the map it was taken from.
    """

    lender: int = 0
    serial: int = 0

    def __hash__(self) -> int:
        return hash((self.lender, self.serial))

    def is_from(self, lender: int) -> bool:
        """Check if this loan was issued by the given lender.

        Returns:
            True if lender matches, False otherwise.
        """
        return self.lender == lender
