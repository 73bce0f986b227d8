"""Core type definitions for cowmap."""

type Ref[T] = T
"""Type alias indicating a value is a read-only view into map storage.

When you see `Ref[T]` in a return type, the returned object may be shared with
other maps. Mutating it in place bypasses copy-on-write. To change a value,
request it through `CowMap.get_mut()`, which promotes borrowed entries first.
"""
