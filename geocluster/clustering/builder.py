"""Construction of aggregate cluster features."""

from __future__ import annotations

from typing import List, Optional, Sequence

import numpy as np

from geocluster.spatial.geometry import Point
from geocluster.spatial.store import Feature

from .errors import EmptyClusterError
from .resolvers import GeometryResolver, default_geometry_resolver

MEMBERS_KEY = "members"


class Cluster(Feature):
    """
    Synthetic feature standing in for a group of member features.

    The geometry is the centroid of the members' resolved points; the
    ``members`` property holds the member features in grouping order.
    """

    def __init__(self, centroid: Point, members: List[Feature]):
        super().__init__(geometry=centroid, properties={MEMBERS_KEY: members})

    @property
    def members(self) -> List[Feature]:
        return self.properties[MEMBERS_KEY]

    def __len__(self) -> int:
        return len(self.members)

    def __repr__(self) -> str:
        return f"Cluster(centroid={self.geometry.coordinates}, size={len(self)})"


class ClusterBuilder:
    """Builds a :class:`Cluster` at the centroid of its members."""

    def __init__(self, resolver: Optional[GeometryResolver] = None):
        self.resolver = resolver or default_geometry_resolver

    def build(self, members: Sequence[Feature]) -> Cluster:
        """
        Build a cluster from ``members``.

        Members whose point cannot be resolved are dropped from the cluster
        (the caller's sequence is left untouched) before the centroid is
        computed.

        Raises:
            EmptyClusterError: No member resolved to a point
        """
        total = np.zeros(2, dtype=float)
        kept: List[Feature] = []
        for feature in members:
            point = self.resolver(feature)
            if point is None:
                continue
            total += point.coordinates
            kept.append(feature)

        if not kept:
            raise EmptyClusterError(
                f"None of {len(members)} candidate member(s) has a resolvable point"
            )

        x, y = total / len(kept)
        return Cluster(Point(float(x), float(y)), kept)
