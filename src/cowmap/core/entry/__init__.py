"""Entry functionality: form tag, dual-form wrapper and clone operations."""

from cowmap.core.entry.models import Cloneable, CloneDepth, Form
from cowmap.core.entry.operations import clone_deep, clone_shallow, clone_using_protocol
from cowmap.core.entry.wrapper import Borrowed, MaybeOwned, Owned, get_form, unwrap

__all__ = [
    # Models
    "Form",
    "CloneDepth",
    "Cloneable",
    # Wrapper
    "MaybeOwned",
    "Owned",
    "Borrowed",
    "get_form",
    "unwrap",
    # Operations
    "clone_using_protocol",
    "clone_deep",
    "clone_shallow",
]
