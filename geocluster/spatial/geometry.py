"""Minimal planar geometry and extent helpers used by the clustering engine."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

Coordinate = Tuple[float, float]
Extent = Tuple[float, float, float, float]
"""Bounding box as ``(min_x, min_y, max_x, max_y)``."""


@dataclass(frozen=True)
class Point:
    """A single 2D coordinate."""

    x: float
    y: float

    @property
    def coordinates(self) -> Coordinate:
        return (self.x, self.y)

    @property
    def extent(self) -> Extent:
        return (self.x, self.y, self.x, self.y)


@dataclass(frozen=True)
class LineString:
    """An ordered run of two or more coordinates."""

    coordinates: Tuple[Coordinate, ...]

    def __post_init__(self):
        coords = tuple((float(x), float(y)) for x, y in self.coordinates)
        if len(coords) < 2:
            raise ValueError(
                f"LineString needs at least 2 coordinates, got {len(coords)}"
            )
        object.__setattr__(self, "coordinates", coords)

    @property
    def extent(self) -> Extent:
        xs = [x for x, _ in self.coordinates]
        ys = [y for _, y in self.coordinates]
        return (min(xs), min(ys), max(xs), max(ys))


def create_extent_from_coordinate(coordinate: Sequence[float]) -> Extent:
    """Return the zero-area extent covering a single coordinate."""
    x, y = coordinate
    return (x, y, x, y)


def buffer_extent(extent: Extent, margin: float) -> Extent:
    """Grow ``extent`` by ``margin`` on every side."""
    min_x, min_y, max_x, max_y = extent
    return (min_x - margin, min_y - margin, max_x + margin, max_y + margin)


def intersects(a: Extent, b: Extent) -> bool:
    """Whether two extents overlap; touching edges count as overlap."""
    return a[0] <= b[2] and a[2] >= b[0] and a[1] <= b[3] and a[3] >= b[1]


def extent_of(geometry) -> Optional[Extent]:
    """Extent of ``geometry`` or ``None`` when there is nothing to bound."""
    if geometry is None:
        return None
    extent = getattr(geometry, "extent", None)
    if extent is None or any(math.isnan(v) for v in extent):
        return None
    return extent
