"""
Geometry resolvers.

A resolver maps a feature to the single point used for distance and
centroid computation, or ``None`` to leave the feature out of clustering.
Resolvers are called several times per feature per pass and must be pure.
"""

from __future__ import annotations

from typing import Callable, Optional

from geocluster.spatial.geometry import LineString, Point
from geocluster.spatial.store import Feature

from .errors import UnsupportedGeometry

GeometryResolver = Callable[[Feature], Optional[Point]]


def default_geometry_resolver(feature: Feature) -> Point:
    """Return the feature's point geometry; anything else is an error."""
    geometry = feature.geometry
    if not isinstance(geometry, Point):
        raise UnsupportedGeometry(feature)
    return geometry


def point_or_none(feature: Feature) -> Optional[Point]:
    """Like the default resolver, but opts non-point features out."""
    geometry = feature.geometry
    return geometry if isinstance(geometry, Point) else None


def first_vertex_resolver(feature: Feature) -> Optional[Point]:
    """Cluster line strings by their first vertex."""
    geometry = feature.geometry
    if isinstance(geometry, Point):
        return geometry
    if isinstance(geometry, LineString):
        x, y = geometry.coordinates[0]
        return Point(x, y)
    return None
