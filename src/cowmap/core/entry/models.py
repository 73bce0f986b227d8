"""Entry models: form tag, clone protocol and clone depth.

The clone protocol is an optional interface that values can implement to
control how a borrowed entry is copied when it is promoted to owned.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum, auto
from typing import Any, Protocol, Self, runtime_checkable


class Form(Enum):
    """Whether an entry holds its data or a reference into another owner's data."""

    OWNED = auto()  # Map holds the data itself
    BORROWED = auto()  # Map holds a reference, never mutated through this map


class CloneDepth(Enum):
    """Fallback strategy for cloning values that are not Cloneable."""

    DEEP = auto()  # copy.deepcopy
    SHALLOW = auto()  # copy.copy

    def get_strategy(self) -> Callable[[Any], Any]:
        """Get the clone function for this depth.

        Returns:
            Pure function producing an independent copy of a value.
        """
        # Late import to avoid circular dependency
        from cowmap.core.entry import operations

        strategies = {
            CloneDepth.DEEP: operations.clone_deep,
            CloneDepth.SHALLOW: operations.clone_shallow,
        }
        return strategies[self]


@runtime_checkable
class Cloneable(Protocol):
    """One instance → an independent owned copy (used on promotion)."""

    def __clone__(self) -> Self: ...
