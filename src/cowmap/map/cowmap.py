"""Copy-on-write map whose entries are either owned or borrowed.

A derivative map made with borrow_fields() shares every key and value of its
source. The first mutable access to a shared entry clones it, so each map
stays independent once it starts writing.

Usage:
    base = CowMap()
    base.insert_owned("key", [1, 2, 3])

    view = base.borrow_fields()
    view.entry_form("key")  # Form.BORROWED
    view.get_mut("key")[:] = [4, 5, 6]
    view.entry_form("key")  # Form.OWNED
    base.get("key")  # [1, 2, 3]
"""

from __future__ import annotations

import warnings
import weakref
from collections.abc import Hashable, ItemsView, Iterator, MutableMapping
from dataclasses import dataclass
from typing import Any, Self, cast

from cowmap.config import CowMapSettings
from cowmap.core.entry import Borrowed, Form, MaybeOwned, Owned, unwrap
from cowmap.core.loan import LoanId
from cowmap.core.types import Ref
from cowmap.map.errors import BorrowConflictError, MapClosedError, PromotionWarning
from cowmap.storage.ledger import LoanLedger

_MISSING = object()


@dataclass(slots=True)
class _Slot:
    """One stored entry: the key and value each carry their own form."""

    key: MaybeOwned[Any]
    value: MaybeOwned[Any]


def _release_loans(loans: dict[Any, tuple[CowMap[Any, Any], LoanId]]) -> None:
    """Return every loan a map still holds. Runs on close() or collection."""
    for lender, loan in loans.values():
        lender._ledger.release(loan)
    loans.clear()


class _ItemsView(ItemsView):  # type: ignore[type-arg]
    """Items view that snapshots entries when each iteration starts."""

    def __iter__(self) -> Iterator[tuple[Any, Any]]:
        snapshot = tuple(self._mapping._entries())
        return ((key, slot.value.get()) for key, slot in snapshot)


class CowMap[K: Hashable, V](MutableMapping[K, V]):
    """Mapping whose entries are owned data or borrowed references.

    Structure:
        _slots[key] = _Slot(key=Owned|Borrowed, value=Owned|Borrowed)
        _ledger: loans this map has handed out to its derivatives
        _loans[key] = (lender map, loan) for every borrowed entry. Holding the
            lender keeps it alive, so its own loans stay outstanding

    A key with outstanding loans is frozen in this map: mutating, replacing or
    removing it raises BorrowConflictError until the derivatives let go.

    Args:
        capacity: Capacity hint (default from settings).
        settings: Map configuration (default: CowMapSettings() from environment).
    """

    def __init__(
        self,
        *,
        capacity: int | None = None,
        settings: CowMapSettings | None = None,
    ):
        """Initialize an empty map with no borrowed dependencies.

        Args:
            capacity: Capacity hint (default from settings).
            settings: Map configuration (default: CowMapSettings() from environment).

        Raises:
            ValueError: If capacity is negative.
        """
        self._settings = settings if settings is not None else CowMapSettings()
        self._clone = self._settings.clone_depth.get_strategy()
        self._capacity = self._settings.default_capacity if capacity is None else capacity
        if self._capacity < 0:
            raise ValueError(f"capacity must be >= 0, got {self._capacity}")

        self._slots: dict[K, _Slot] = {}
        self._ledger = LoanLedger()
        self._loans: dict[K, tuple[CowMap[Any, Any], LoanId]] = {}
        self._finalizer = weakref.finalize(self, _release_loans, self._loans)
        self._closed = False

    @classmethod
    def with_capacity(cls, capacity: int, *, settings: CowMapSettings | None = None) -> Self:
        """Create an empty map able to hold at least capacity entries."""
        return cls(capacity=capacity, settings=settings)

    @property
    def settings(self) -> CowMapSettings:
        """Configuration this map was created with."""
        return self._settings

    @property
    def closed(self) -> bool:
        """Whether close() has been called."""
        return self._closed

    # Internal helpers

    def _check_open(self) -> None:
        if self._closed:
            raise MapClosedError("Cannot use a CowMap after close()")

    def _check_not_lent(self, key: K, action: str) -> None:
        outstanding = self._ledger.outstanding(key)
        if outstanding:
            raise BorrowConflictError(key, outstanding, action)

    def _return_loan(self, key: K) -> None:
        held = self._loans.pop(key, None)
        if held is not None:
            lender, loan = held
            lender._ledger.release(loan)

    def _store(self, key: K, value: MaybeOwned[V]) -> V | None:
        previous = self._slots.get(key)
        self._return_loan(key)
        self._slots[key] = _Slot(Owned(key), value)
        return None if previous is None else previous.value.get()

    def _promote(self, key: K, slot: _Slot) -> None:
        """Clone a borrowed entry into this map's ownership and return its loan."""
        slot.key = slot.key.into_owned(self._clone)
        slot.value = slot.value.into_owned(self._clone)
        self._return_loan(key)
        if self._settings.warn_on_promotion:
            warnings.warn(
                f"Cloned borrowed entry {key!r} into an owned copy.",
                PromotionWarning,
                stacklevel=3,
            )

    def _entries(self) -> Iterator[tuple[K, _Slot]]:
        self._check_open()
        return iter(self._slots.items())

    # Insertion

    def insert_owned(self, key: K, value: V) -> V | None:
        """Store value in owned form under key. Never clones.

        Args:
            key: Key to store under.
            value: Value the map takes ownership of.

        Returns:
            Previous value for key, or None if key was absent.

        Raises:
            BorrowConflictError: If key is lent to a derivative map.
        """
        self._check_open()
        self._check_not_lent(key, "overwrite")
        return self._store(key, Owned(value))

    def insert_borrowed(self, key: K, value: V) -> V | None:
        """Store a reference to an externally owned value under key.

        The map never mutates value; get_mut() clones it first.

        Args:
            key: Key to store under.
            value: Value owned elsewhere.

        Returns:
            Previous value for key, or None if key was absent.

        Raises:
            BorrowConflictError: If key is lent to a derivative map.
        """
        self._check_open()
        borrowed = unwrap(value)
        if borrowed is not value:
            warnings.warn(
                f"insert_borrowed() received a {type(value).__name__} wrapper for {key!r}. "
                f"The wrapped object will be borrowed instead.",
                stacklevel=2,
            )
        self._check_not_lent(key, "overwrite")
        return self._store(key, Borrowed(borrowed))

    def borrow_fields(self) -> CowMap[K, V]:
        """Create a derivative map borrowing every entry of this one.

        Shallow, one loan per entry. This map's entries are not touched, but
        each lent key stays frozen here until the derivative promotes, removes
        or drops it.

        Returns:
            New map with every key and value in borrowed form.
        """
        self._check_open()
        derived: CowMap[K, V] = CowMap(capacity=len(self._slots), settings=self._settings)
        for key, slot in self._slots.items():
            derived._slots[key] = _Slot(Borrowed(slot.key.get()), Borrowed(slot.value.get()))
            derived._loans[key] = (self, self._ledger.lend(key))
        return derived

    # Lookup

    def get(self, key: K, default: Any = None) -> Ref[V] | Any:
        """Get the value for key in whichever form it is stored. Never clones.

        Args:
            key: Key to look up.
            default: Returned when key is absent.

        Returns:
            Read-only value, or default if key is absent.
        """
        self._check_open()
        slot = self._slots.get(key)
        if slot is None:
            return default
        return slot.value.get()

    def get_mut(self, key: K) -> V | None:
        """Get the value for key for in-place mutation.

        A borrowed entry is first cloned into an owned one. An owned entry is
        returned as-is, without cloning.

        Args:
            key: Key to look up.

        Returns:
            Mutable value owned by this map, or None if key is absent.

        Raises:
            BorrowConflictError: If key is lent to a derivative map.
        """
        self._check_open()
        slot = self._slots.get(key)
        if slot is None:
            return None
        self._check_not_lent(key, "mutably borrow")
        if slot.value.form is Form.BORROWED:
            self._promote(key, slot)
        return cast(Owned[V], slot.value).get_mut()

    def entry_form(self, key: K) -> Form | None:
        """Get the form of the value stored under key, or None if absent."""
        self._check_open()
        slot = self._slots.get(key)
        return None if slot is None else slot.value.form

    def key_form(self, key: K) -> Form | None:
        """Get the form of the stored key itself, or None if absent."""
        self._check_open()
        slot = self._slots.get(key)
        return None if slot is None else slot.key.form

    def contains_key(self, key: K) -> bool:
        """Check if key is present."""
        self._check_open()
        return key in self._slots

    def lent_keys(self) -> frozenset[K]:
        """Get the keys currently lent to live derivative maps."""
        self._check_open()
        return cast(frozenset[K], self._ledger.lent_keys())

    # Removal

    def remove(self, key: K) -> V | None:
        """Remove key and return its value as an owned object.

        A borrowed value is cloned so the caller never receives shared data.

        Args:
            key: Key to remove.

        Returns:
            Owned value, or None if key was absent.

        Raises:
            BorrowConflictError: If key is lent to a derivative map.
        """
        self._check_open()
        if key not in self._slots:
            return None
        self._check_not_lent(key, "remove")
        slot = self._slots.pop(key)
        value = slot.value.into_owned(self._clone).get()
        self._return_loan(key)
        return value

    def pop(self, key: K, default: Any = _MISSING) -> V | Any:
        """Remove key and return its owned value, like dict.pop()."""
        if not self.contains_key(key):
            if default is _MISSING:
                raise KeyError(key)
            return default
        return cast(V, self.remove(key))

    def popitem(self) -> tuple[K, V]:
        """Remove and return some (key, owned value) pair."""
        self._check_open()
        if not self._slots:
            raise KeyError("popitem(): CowMap is empty")
        key = next(reversed(self._slots))
        return key, cast(V, self.remove(key))

    def clear(self) -> None:
        """Remove every entry.

        Raises:
            BorrowConflictError: If any key is lent to a derivative map.
        """
        self._check_open()
        for key in self._ledger.lent_keys():
            self._check_not_lent(cast(K, key), "clear")
        self._slots.clear()
        _release_loans(self._loans)

    # Capacity

    def capacity(self) -> int:
        """Number of entries the map is sized for. A lower bound, never below len()."""
        self._check_open()
        return max(self._capacity, len(self._slots))

    def reserve(self, additional: int) -> None:
        """Reserve room for at least additional more entries.

        Raises:
            ValueError: If additional is negative.
        """
        self._check_open()
        if additional < 0:
            raise ValueError(f"additional must be >= 0, got {additional}")
        self._capacity = max(self._capacity, len(self._slots) + additional)

    # Lifecycle

    def close(self) -> None:
        """Drop every entry and return every loan this map holds.

        Calling close() again is a no-op.

        Raises:
            BorrowConflictError: If derivative maps still borrow from this map.
        """
        if self._closed:
            return
        for key in self._ledger.lent_keys():
            self._check_not_lent(cast(K, key), "close the map holding")
        self._finalizer()
        self._slots.clear()
        self._closed = True

    def __enter__(self) -> Self:
        self._check_open()
        return self

    def __exit__(self, exc_type: type[BaseException] | None, *exc_info: object) -> None:
        # Let an exception from the body propagate instead of a close() conflict
        if exc_type is not None and self._ledger.outstanding():
            return
        self.close()

    # Mapping protocol

    def __getitem__(self, key: K) -> Ref[V]:
        """Get value: m[key] -> value. Raises KeyError if absent."""
        self._check_open()
        slot = self._slots.get(key)
        if slot is None:
            raise KeyError(key)
        return slot.value.get()

    def __setitem__(self, key: K, value: V) -> None:
        """Store owned value: m[key] = value."""
        self.insert_owned(key, value)

    def __delitem__(self, key: K) -> None:
        """Remove entry: del m[key]. Raises KeyError if absent."""
        if not self.contains_key(key):
            raise KeyError(key)
        self.remove(key)

    def __contains__(self, key: object) -> bool:
        self._check_open()
        return key in self._slots

    def __iter__(self) -> Iterator[K]:
        """Iterate over the keys present when iteration starts."""
        self._check_open()
        return iter(tuple(self._slots))

    def __len__(self) -> int:
        self._check_open()
        return len(self._slots)

    def items(self) -> _ItemsView:
        """Lazy (key, value) view. Values are read-only and never cloned."""
        return _ItemsView(self)

    def __repr__(self) -> str:
        if self._closed:
            return f"{type(self).__name__}(<closed>)"
        body = ", ".join(f"{slot.key!r}: {slot.value!r}" for slot in self._slots.values())
        return f"{type(self).__name__}({{{body}}})"
