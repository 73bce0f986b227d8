"""cowmap: copy-on-write map with owned and borrowed entries.

Usage:
    from cowmap import CowMap, Form

    base = CowMap()
    base.insert_owned("key", [1, 2, 3])

    derived = base.borrow_fields()
    assert derived.entry_form("key") is Form.BORROWED

    derived.get_mut("key")[:] = [4, 5, 6]
    assert derived.entry_form("key") is Form.OWNED
    assert base.get("key") == [1, 2, 3]
"""

__version__ = "0.1.0"

# Core primitives
from cowmap.core import (
    Borrowed,
    Cloneable,
    CloneDepth,
    Form,
    LoanId,
    MaybeOwned,
    Owned,
    Ref,
)

# Configuration
from cowmap.config import CowMapSettings

# Map and errors
from cowmap.map import (
    BorrowConflictError,
    BorrowError,
    CowMap,
    MapClosedError,
    PromotionWarning,
)

# Storage
from cowmap.storage import LoanLedger

__all__ = [
    # Version
    "__version__",
    # Core
    "Form",
    "CloneDepth",
    "Cloneable",
    "MaybeOwned",
    "Owned",
    "Borrowed",
    "LoanId",
    "Ref",
    # Map
    "CowMap",
    "BorrowError",
    "BorrowConflictError",
    "MapClosedError",
    "PromotionWarning",
    # Storage
    "LoanLedger",
    # Config
    "CowMapSettings",
]
