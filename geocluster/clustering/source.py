"""
Cluster layer source.

Wraps a feature store and publishes its clustered view as a store of its
own. The clustered view is recomputed when:
- a different resolution is requested
- the wrapped store reports a change

Only the clusters for the current resolution are kept.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from geocluster.spatial.geometry import Extent
from geocluster.spatial.store import VectorStore

from .builder import Cluster
from .engine import ClusteringDiagnostics, ClusteringEngine
from .hooks import Hook, HookKind, HookRegistry
from .resolvers import GeometryResolver

logger = logging.getLogger(__name__)

DEFAULT_DISTANCE = 20.0


class ClusterSource(VectorStore):
    """
    Store of cluster features computed from another store.

    Example:
        >>> points = VectorStore([Feature(Point(0, 0)), Feature(Point(1, 0))])
        >>> clusters = ClusterSource(points, distance=20)
        >>> clusters.request_features((0, 0, 100, 100), resolution=1.0)
        >>> len(clusters)
        1
    """

    def __init__(
        self,
        source: VectorStore,
        distance: float = DEFAULT_DISTANCE,
        geometry_function: Optional[GeometryResolver] = None,
        extent: Optional[Extent] = None,
        projection: Optional[str] = None,
    ):
        """
        Args:
            source: Store holding the features to cluster
            distance: Threshold in screen units; the search radius is
                ``distance * resolution``
            geometry_function: Resolver for non-point or partially
                clusterable data (default: point geometries only)
            extent: Optional spatial bounds metadata
            projection: Optional projection identifier
        """
        if distance is None or distance <= 0:
            raise ValueError(f"distance must be positive, got {distance}")
        super().__init__(extent=extent, projection=projection)

        self._source = source
        self._distance = float(distance)
        self._resolution: Optional[float] = None
        self.hooks = HookRegistry()
        self.engine = ClusteringEngine(resolver=geometry_function, hooks=self.hooks)

        self._source.on_change(self._on_source_change)

    @classmethod
    def from_config(cls, source: VectorStore, config) -> "ClusterSource":
        """Build from a :class:`~geocluster.tools.ClusterConfig`."""
        return cls(
            source,
            distance=config.distance,
            geometry_function=config.geometry_function,
            extent=config.extent,
            projection=config.projection,
        )

    @property
    def distance(self) -> float:
        return self._distance

    @property
    def resolution(self) -> Optional[float]:
        """Resolution of the published clusters (None before the first pass)."""
        return self._resolution

    @property
    def diagnostics(self) -> Optional[ClusteringDiagnostics]:
        return self.engine.last_diagnostics

    def get_source(self) -> VectorStore:
        """Return the wrapped store."""
        return self._source

    # ------------------------------------------------------------------
    # Triggers
    # ------------------------------------------------------------------

    def request_features(self, extent: Extent, resolution: Optional[float]) -> None:
        """
        Make clusters for ``resolution`` available.

        The wrapped store is asked to load ``extent`` first. Clusters are
        recomputed only when ``resolution`` differs from the published one.
        """
        self._source.load_features(extent, resolution)
        if resolution is None:
            logger.debug("No resolution requested; clusters left as they are")
            return
        if resolution == self._resolution:
            logger.debug(f"Reusing {len(self)} clusters at resolution={resolution}")
            return
        self._recluster(resolution)

    def load_features(self, extent: Extent, resolution: Optional[float]) -> None:
        # Lets a ClusterSource be wrapped by another ClusterSource
        self.request_features(extent, resolution)

    def on_store_changed(self) -> None:
        """Recompute at the current resolution and notify listeners."""
        self._recluster(self._resolution)

    def _on_source_change(self, store: VectorStore) -> None:
        self.on_store_changed()

    def _recluster(self, resolution: Optional[float]) -> None:
        # Any failure leaves the published clusters and resolution untouched
        clusters: List[Cluster] = self.engine.run(
            self._source, self._distance, resolution
        )
        self._resolution = resolution
        self._replace_features(clusters)
        self.changed()

    def detach(self) -> None:
        """Stop listening to the wrapped store."""
        self._source.off_change(self._on_source_change)

    # ------------------------------------------------------------------
    # Hooks
    # ------------------------------------------------------------------

    def add_cluster_created_hook(self, callback: Hook) -> None:
        self.hooks.add(HookKind.CLUSTER_CREATED, callback)

    def remove_cluster_created_hook(self, callback: Hook) -> None:
        self.hooks.remove(HookKind.CLUSTER_CREATED, callback)

    def add_clusters_ready_hook(self, callback: Hook) -> None:
        self.hooks.add(HookKind.CLUSTERS_READY, callback)

    def remove_clusters_ready_hook(self, callback: Hook) -> None:
        self.hooks.remove(HookKind.CLUSTERS_READY, callback)
