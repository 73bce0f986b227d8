"""Copy-on-write map and its borrow-checking errors.

Architecture Note:
    map/ is the stateful layer. A CowMap owns its entries, lends them to
    derivative maps through its LoanLedger and promotes borrowed entries to
    owned ones on first mutable access.
"""

from cowmap.map.cowmap import CowMap
from cowmap.map.errors import (
    BorrowConflictError,
    BorrowError,
    MapClosedError,
    PromotionWarning,
)

__all__ = [
    "CowMap",
    "BorrowError",
    "BorrowConflictError",
    "MapClosedError",
    "PromotionWarning",
]
