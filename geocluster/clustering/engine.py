"""
Greedy, seed-anchored partition of a feature store into clusters.

One forward pass over the store:
1. Take the next unclaimed feature as a seed
2. Query the store for everything within ``distance * resolution`` of it
3. Claim every unclaimed neighbour and build a cluster at their centroid

The search window is centred on the seed, not on the growing cluster's
centroid, so a cluster may span more than the nominal distance. Claims are
final: a feature is never reconsidered once it belongs to a cluster.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Set

from geocluster.spatial.geometry import buffer_extent, create_extent_from_coordinate
from geocluster.spatial.store import Feature, VectorStore

from .builder import Cluster, ClusterBuilder
from .errors import StoreConsistencyError
from .hooks import HookKind, HookRegistry
from .resolvers import GeometryResolver, default_geometry_resolver

logger = logging.getLogger(__name__)


@dataclass
class ClusteringDiagnostics:
    """Summary of one completed pass."""

    resolution: float
    """Resolution (map units per screen unit) the pass ran at."""

    distance: float
    """Distance threshold in screen units."""

    num_features: int
    """Features in the store when the pass started."""

    num_clustered: int
    """Features claimed by some cluster."""

    num_unresolved: int
    """Seeds skipped because the resolver returned no point."""

    cluster_sizes: List[int] = field(default_factory=list)
    """Member count of each cluster, in output order."""

    @property
    def search_radius(self) -> float:
        return self.distance * self.resolution

    @property
    def num_clusters(self) -> int:
        return len(self.cluster_sizes)

    @property
    def num_members(self) -> int:
        """Features that ended up in a cluster's member list."""
        return sum(self.cluster_sizes)

    @property
    def partition_complete(self) -> bool:
        """Whether every feature in the store landed in exactly one cluster."""
        return self.num_members == self.num_features


class ClusteringEngine:
    """
    Runs clustering passes and keeps the result of the last good one.

    Attributes:
        resolver: Feature-to-point function used for seeds and centroids
        hooks: Registry whose callbacks run during each pass
        clusters: Result of the last successful pass
        last_diagnostics: Diagnostics of the last successful pass
    """

    def __init__(
        self,
        resolver: Optional[GeometryResolver] = None,
        hooks: Optional[HookRegistry] = None,
    ):
        self.resolver = resolver or default_geometry_resolver
        self.hooks = hooks if hooks is not None else HookRegistry()
        self.builder = ClusterBuilder(self.resolver)
        self.clusters: List[Cluster] = []
        self.last_diagnostics: Optional[ClusteringDiagnostics] = None

    def run(
        self,
        store: VectorStore,
        distance: float,
        resolution: Optional[float],
    ) -> List[Cluster]:
        """
        Partition ``store`` into clusters.

        Args:
            store: Feature store to read and query
            distance: Threshold in screen units (> 0)
            resolution: Map units per screen unit (> 0). ``None`` makes
                the call a no-op returning the previous result.

        Returns:
            Clusters in the order their seeds appear in the store

        Raises:
            UnsupportedGeometry: Propagated from the resolver
            EmptyClusterError: A neighbourhood had no resolvable member
            StoreConsistencyError: The store lost a seed feature
        """
        if resolution is None:
            return self.clusters
        if distance <= 0:
            raise ValueError(f"distance must be positive, got {distance}")
        if resolution <= 0:
            raise ValueError(f"resolution must be positive, got {resolution}")

        map_distance = distance * resolution
        features = store.get_features()
        clustered: Set[Feature] = set()
        clusters: List[Cluster] = []
        unresolved = 0

        for feature in features:
            if feature in clustered:
                continue

            point = self.resolver(feature)
            if point is None:
                unresolved += 1
                continue

            extent = buffer_extent(
                create_extent_from_coordinate(point.coordinates), map_distance
            )
            neighbors = store.get_features_in_extent(extent)
            if not neighbors:
                raise StoreConsistencyError(feature, extent)

            claimed = [n for n in neighbors if n not in clustered]
            clustered.update(claimed)

            cluster = self.builder.build(claimed)
            self.hooks.fire(HookKind.CLUSTER_CREATED, cluster)
            clusters.append(cluster)

        # Hooks get a copy so they cannot alter the published result
        self.hooks.fire(HookKind.CLUSTERS_READY, list(clusters))

        diagnostics = ClusteringDiagnostics(
            resolution=resolution,
            distance=distance,
            num_features=len(features),
            num_clustered=len(clustered),
            num_unresolved=unresolved,
            cluster_sizes=[len(c) for c in clusters],
        )
        if not diagnostics.partition_complete:
            logger.warning(
                f"Clustered {diagnostics.num_members} of "
                f"{diagnostics.num_features} features; "
                f"{diagnostics.num_features - diagnostics.num_members} "
                "had no resolvable point"
            )
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                f"Clustering pass at resolution={resolution} "
                f"(radius={map_distance}): {len(features)} features -> "
                f"{len(clusters)} clusters"
            )

        self.clusters = clusters
        self.last_diagnostics = diagnostics
        return clusters
