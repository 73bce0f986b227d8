"""Shared test fixtures."""

import sys

import pytest

# Ensure src is in path
sys.path.insert(0, "src")

from cowmap import CloneDepth, CowMap, CowMapSettings


@pytest.fixture
def settings():
    """Explicit default settings, independent of COWMAP_* environment."""
    return CowMapSettings(
        clone_depth=CloneDepth.DEEP, default_capacity=0, warn_on_promotion=False
    )


@pytest.fixture
def cow_map(settings):
    """Fresh empty CowMap."""
    return CowMap(settings=settings)


@pytest.fixture
def source(cow_map):
    """Map holding {"key": [1, 2, 3]} in owned form."""
    cow_map.insert_owned("key", [1, 2, 3])
    return cow_map


class CountingValue:
    """Cloneable value that counts how many times it has been cloned."""

    clones = 0

    def __init__(self, payload):
        self.payload = payload

    def __clone__(self):
        type(self).clones += 1
        return CountingValue(list(self.payload))

    def __eq__(self, other):
        return isinstance(other, CountingValue) and self.payload == other.payload


@pytest.fixture
def counting_cls():
    CountingValue.clones = 0
    return CountingValue
