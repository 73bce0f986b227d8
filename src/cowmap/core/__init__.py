"""Core functionalities: stateless protocols and primitives.

Architecture Note:
    core/ contains pure, stateless building blocks: the form tag, the
    dual-form wrapper, clone strategies and loan identifiers.
    For stateful services, see storage/ and map/.
"""

from cowmap.core.entry import (
    Borrowed,
    Cloneable,
    CloneDepth,
    Form,
    MaybeOwned,
    Owned,
    clone_deep,
    clone_shallow,
    clone_using_protocol,
    get_form,
    unwrap,
)
from cowmap.core.loan import LoanId
from cowmap.core.types import Ref

__all__ = [
    # Types
    "Ref",
    # Entry
    "Form",
    "CloneDepth",
    "Cloneable",
    "MaybeOwned",
    "Owned",
    "Borrowed",
    "get_form",
    "unwrap",
    "clone_using_protocol",
    "clone_deep",
    "clone_shallow",
    # Loan
    "LoanId",
]
