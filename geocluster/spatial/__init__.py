"""
geocluster/spatial: Geometry primitives and the in-memory feature store.
"""

from .geometry import (
    Coordinate,
    Extent,
    Point,
    LineString,
    create_extent_from_coordinate,
    buffer_extent,
    intersects,
    extent_of,
)
from .store import Feature, VectorStore

__all__ = [
    # Geometry
    "Coordinate",
    "Extent",
    "Point",
    "LineString",
    "create_extent_from_coordinate",
    "buffer_extent",
    "intersects",
    "extent_of",

    # Store
    "Feature",
    "VectorStore",
]
