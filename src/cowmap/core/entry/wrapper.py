from __future__ import annotations

from collections.abc import Callable
from typing import Any, ClassVar

from cowmap.core.entry.models import Form
from cowmap.core.types import Ref


class MaybeOwned[T]:
    """Base class for the two forms a stored key or value can take."""

    __slots__ = ("_value",)

    form: ClassVar[Form]

    def __init__(self, value: T) -> None:
        self._value = value

    def get(self) -> Ref[T]:
        """Return the wrapped object without copying it."""
        return self._value

    def into_owned(self, clone: Callable[[T], T]) -> Owned[T]:
        """Return an owned form of this object, cloning only if needed."""
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._value!r})"


class Owned[T](MaybeOwned[T]):
    """Wrapper for data held exclusively by the containing map."""

    __slots__ = ()

    form = Form.OWNED

    def get_mut(self) -> T:
        """Return the wrapped object for in-place mutation."""
        return self._value

    def into_owned(self, clone: Callable[[T], T]) -> Owned[T]:
        return self


class Borrowed[T](MaybeOwned[T]):
    """Wrapper for data owned elsewhere. Never mutated through this wrapper."""

    __slots__ = ()

    form = Form.BORROWED

    def into_owned(self, clone: Callable[[T], T]) -> Owned[T]:
        return Owned(clone(self._value))


def get_form(item: MaybeOwned[Any]) -> Form:
    """Get the form tag of a wrapped key or value."""
    return item.form


def unwrap(item: Any | MaybeOwned[Any]) -> Any:
    """Get the underlying object, unwrapping if necessary."""
    if isinstance(item, MaybeOwned):
        return item.get()
    return item
