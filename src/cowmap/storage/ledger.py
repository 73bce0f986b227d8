"""Loan ledger service.

LoanLedger is a stateful service that tracks which entries of a map are
currently lent to derivative maps.
"""

from __future__ import annotations

import itertools
from collections import Counter
from collections.abc import Hashable

from cowmap.core.loan import LoanId

_lender_ids = itertools.count(1)


class LoanLedger:
    """Issues and tracks loans against the keys of one lending map.

    Each borrowed entry in a derivative map holds exactly one loan. While a key
    has outstanding loans the lending map must not mutate, replace or remove
    that key's entry.

    Args:
        lender: Lender id stamped on issued loans (default: next process-wide id).
    """

    def __init__(self, lender: int | None = None):
        """Initialize an empty ledger.

        Args:
            lender: Lender id stamped on issued loans (default: next process-wide id).
        """
        self._lender = next(_lender_ids) if lender is None else lender
        self._next_serial = 0
        self._active: dict[LoanId, Hashable] = {}
        self._counts: Counter[Hashable] = Counter()

    @property
    def lender(self) -> int:
        """Id of this ledger, stamped on every loan it issues."""
        return self._lender

    def lend(self, key: Hashable) -> LoanId:
        """Issue a new loan against key.

        Returns:
            Newly issued LoanId.
        """
        loan = LoanId(lender=self._lender, serial=self._next_serial)
        self._next_serial += 1
        self._active[loan] = key
        self._counts[key] += 1
        return loan

    def release(self, loan: LoanId) -> None:
        """Return a loan. Releasing an inactive loan is a no-op.

        Args:
            loan: Loan to release.

        Raises:
            ValueError: If loan was issued by a different ledger.
        """
        if not loan.is_from(self._lender):
            raise ValueError(
                f"Cannot release loan from lender {loan.lender} on lender {self._lender}"
            )

        if loan not in self._active:
            return
        key = self._active.pop(loan)
        self._counts[key] -= 1
        if self._counts[key] <= 0:
            del self._counts[key]

    def is_active(self, loan: LoanId) -> bool:
        """Check if loan is still outstanding.

        Returns:
            True if loan was issued here and not yet released.
        """
        return loan in self._active

    def outstanding(self, key: Hashable | None = None) -> int:
        """Count outstanding loans, for one key or in total.

        Args:
            key: Key to count loans for. None counts every loan.

        Returns:
            Number of outstanding loans.
        """
        if key is None:
            return len(self._active)
        return self._counts.get(key, 0)

    def lent_keys(self) -> frozenset[Hashable]:
        """Get every key with at least one outstanding loan."""
        return frozenset(self._counts)
