"""
Pytest configuration and shared fixtures for geocluster tests.

This file provides:
- Feature factories
- Sample stores (example scenarios, chains, grids)
- Stub stores that break the store contract
- Common test utilities
"""

from typing import List, Sequence, Tuple

import pytest

from geocluster.spatial import Feature, LineString, Point, VectorStore


# ==============================================================================
# Feature Factories
# ==============================================================================

def make_point(x: float, y: float, **properties) -> Feature:
    """Point feature with ``name`` defaulting to its coordinates."""
    properties.setdefault("name", f"({x}, {y})")
    return Feature(geometry=Point(x, y), properties=properties)


def make_points(coords: Sequence[Tuple[float, float]]) -> List[Feature]:
    return [make_point(x, y) for x, y in coords]


def make_line(*coords) -> Feature:
    return Feature(geometry=LineString(tuple(coords)), properties={"kind": "line"})


# ==============================================================================
# Sample Stores
# ==============================================================================

@pytest.fixture
def three_point_store() -> VectorStore:
    """Two nearby points and one far away: (0,0), (1,0), (100,100)."""
    return VectorStore(make_points([(0, 0), (1, 0), (100, 100)]))


@pytest.fixture
def empty_store() -> VectorStore:
    return VectorStore()


@pytest.fixture
def chain_store() -> VectorStore:
    """Points every 15 units along the x axis."""
    return VectorStore(make_points([(0, 0), (15, 0), (30, 0), (45, 0)]))


@pytest.fixture
def grid_store() -> VectorStore:
    """10x10 grid of points spaced 7 units apart."""
    return VectorStore(
        make_points([(i * 7.0, j * 7.0) for i in range(10) for j in range(10)])
    )


# ==============================================================================
# Contract-breaking Stores
# ==============================================================================

class BlindStore(VectorStore):
    """Store whose extent queries never find anything."""

    def get_features_in_extent(self, extent):
        return []


class SeedlessStore(VectorStore):
    """Store whose extent queries return only features without a point."""

    def get_features_in_extent(self, extent):
        return [f for f in super().get_features_in_extent(extent)
                if not isinstance(f.geometry, Point)]


@pytest.fixture
def blind_store() -> BlindStore:
    return BlindStore(make_points([(0, 0), (1, 1)]))


# ==============================================================================
# Utilities
# ==============================================================================

def member_ids(clusters) -> List[List[int]]:
    """Membership of each cluster as lists of object ids, in order."""
    return [[id(m) for m in c.members] for c in clusters]


def assert_strict_partition(clusters, features):
    """Every feature appears in exactly one cluster."""
    seen = [id(m) for c in clusters for m in c.members]
    assert len(seen) == len(set(seen)), "a feature is in more than one cluster"
    assert set(seen) == {id(f) for f in features}
