"""Borrow-checking errors raised by CowMap.

Absent keys are not errors: accessors return None. These exceptions signal
programming errors that Python cannot reject before the program runs.
"""

from __future__ import annotations

from collections.abc import Hashable


class BorrowError(Exception):
    """Raised when a map is used in a way that breaks the borrowing rules."""

    pass


class BorrowConflictError(BorrowError):
    """Raised when a lending map mutates or drops an entry that is still lent out."""

    def __init__(self, key: Hashable, outstanding: int, action: str):
        self.key = key
        self.outstanding = outstanding
        self.action = action
        super().__init__(
            f"Cannot {action} {key!r}: {outstanding} outstanding borrow(s) "
            f"held by derivative maps"
        )


class MapClosedError(BorrowError):
    """Raised when a map is used after close()."""

    pass


class PromotionWarning(UserWarning):
    """Issued when a borrowed entry is cloned into an owned one."""

    pass
