"""Pure functions for cloning values on promotion.

These are stateless functions used when a borrowed entry has to become owned.
Values implementing the Cloneable protocol always clone themselves; the
others fall back to the copy module at the configured depth.
"""

from __future__ import annotations

import copy
from typing import TypeVar, cast

from cowmap.core.entry.models import Cloneable

T = TypeVar("T")


def clone_using_protocol(value: T) -> T:
    """Clone a value using the Cloneable protocol.

    Args:
        value: Value to clone (must implement Cloneable).

    Returns:
        Independent copy via __clone__ method.

    Raises:
        TypeError: If value doesn't implement Cloneable.
    """
    if not isinstance(value, Cloneable):
        raise TypeError(f"{type(value).__name__} does not implement Cloneable protocol")
    return cast(T, value.__clone__())


def clone_deep(value: T) -> T:
    """Recursively copy a value, protocol first.

    Args:
        value: Value to clone.

    Returns:
        Independent copy sharing no mutable state with value.
    """
    if isinstance(value, Cloneable):
        return clone_using_protocol(value)
    return copy.deepcopy(value)


def clone_shallow(value: T) -> T:
    """Copy only the top-level container of a value, protocol first.

    Args:
        value: Value to clone.

    Returns:
        New top-level object whose members are shared with value.
    """
    if isinstance(value, Cloneable):
        return clone_using_protocol(value)
    return copy.copy(value)
