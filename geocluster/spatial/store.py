"""
In-memory feature store.

Provides the collaborator the clustering engine reads from:
- ordered enumeration of features
- bounding-box queries
- batch insertion and clearing
- change notification for downstream consumers

Bounding-box queries are a linear, numpy-vectorised scan over a bounds
table rebuilt from the current geometries on each query, so features
may be moved in place. There is no spatial index.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional

import numpy as np

from .geometry import Extent, extent_of


@dataclass(eq=False)
class Feature:
    """
    A geometry-bearing record with arbitrary properties.

    Equality and hashing are by identity, so two features with the same
    geometry and properties are still distinct set members.

    Attributes:
        geometry: Point, LineString or None
        properties: Free-form key/value data
        feature_id: Optional caller-supplied identifier
    """
    geometry: Any = None
    properties: Dict[str, Any] = field(default_factory=dict)
    feature_id: Optional[str] = None

    def get(self, key: str, default: Any = None) -> Any:
        return self.properties.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self.properties[key] = value


ChangeListener = Callable[["VectorStore"], None]
Loader = Callable[["VectorStore", Extent, float], None]


class VectorStore:
    """
    Ordered collection of features with extent queries.

    Mutations fire a single change notification per call. Listener
    exceptions propagate to the caller that mutated the store.
    """

    def __init__(
        self,
        features: Optional[Iterable[Feature]] = None,
        extent: Optional[Extent] = None,
        projection: Optional[str] = None,
        loader: Optional[Loader] = None,
    ):
        """
        Args:
            features: Initial features, stored in the given order
            extent: Optional spatial bounds metadata (not enforced)
            projection: Optional projection identifier (not interpreted)
            loader: Called as ``loader(store, extent, resolution)`` by
                :meth:`load_features`
        """
        self.extent = extent
        self.projection = projection
        self._loader = loader
        self._features: List[Feature] = list(features or [])
        self._listeners: List[ChangeListener] = []

    def __len__(self) -> int:
        return len(self._features)

    def __iter__(self) -> Iterator[Feature]:
        return iter(list(self._features))

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get_features(self) -> List[Feature]:
        """Return all features in insertion order."""
        return list(self._features)

    def get_features_in_extent(self, extent: Extent) -> List[Feature]:
        """
        Return features whose geometry extent intersects ``extent``.

        Edges are inclusive. Features without geometry never match.
        Result order follows insertion order.
        """
        if not self._features:
            return []

        bounds = self._bounds_table()
        min_x, min_y, max_x, max_y = extent
        # NaN rows (no geometry) compare False everywhere
        mask = (
            (bounds[:, 0] <= max_x)
            & (bounds[:, 2] >= min_x)
            & (bounds[:, 1] <= max_y)
            & (bounds[:, 3] >= min_y)
        )
        return [self._features[i] for i in np.flatnonzero(mask)]

    def _bounds_table(self) -> np.ndarray:
        rows = []
        for feature in self._features:
            bbox = extent_of(feature.geometry)
            rows.append(bbox if bbox is not None else (np.nan,) * 4)
        return np.array(rows, dtype=float).reshape(-1, 4)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add_feature(self, feature: Feature) -> None:
        self.add_features([feature])

    def add_features(self, features: Iterable[Feature]) -> None:
        """Append a batch of features and notify listeners once."""
        batch = list(features)
        if not batch:
            return
        self._features.extend(batch)
        self.changed()

    def remove_feature(self, feature: Feature) -> bool:
        """Remove ``feature`` by identity. Returns whether it was present."""
        for index, existing in enumerate(self._features):
            if existing is feature:
                del self._features[index]
                self.changed()
                return True
        return False

    def clear(self) -> None:
        """Remove every feature and notify listeners."""
        self._features = []
        self.changed()

    def _replace_features(self, features: Iterable[Feature]) -> None:
        # Swaps the whole list without notifying; callers fire changed()
        self._features = list(features)

    def load_features(self, extent: Extent, resolution: float) -> None:
        """Ask the configured loader to provide data for an area."""
        if self._loader is not None:
            self._loader(self, extent, resolution)

    # ------------------------------------------------------------------
    # Change notification
    # ------------------------------------------------------------------

    def on_change(self, listener: ChangeListener) -> None:
        self._listeners.append(listener)

    def off_change(self, listener: ChangeListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def changed(self) -> None:
        """Notify every listener, in subscription order."""
        for listener in list(self._listeners):
            listener(self)
