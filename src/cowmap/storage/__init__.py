"""Storage services."""

from cowmap.storage.ledger import LoanLedger

__all__ = [
    "LoanLedger",
]
