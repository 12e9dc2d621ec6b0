"""Exceptions raised by the clustering engine."""

from __future__ import annotations

from typing import Any, Optional


class ClusteringError(Exception):
    """Base class for clustering failures."""


class UnsupportedGeometry(ClusteringError, TypeError):
    """The default resolver was given a feature without a point geometry."""

    def __init__(self, feature: Any, message: Optional[str] = None):
        self.feature = feature
        geometry = getattr(feature, "geometry", None)
        super().__init__(
            message
            or f"Expected a Point geometry, got {type(geometry).__name__}. "
            "Pass a custom geometry_function to cluster other geometry types."
        )


class EmptyClusterError(ClusteringError, ValueError):
    """None of a prospective cluster's members resolved to a point."""


class StoreConsistencyError(ClusteringError, RuntimeError):
    """An extent query around a seed feature did not return the seed."""

    def __init__(self, seed: Any, extent: Any):
        self.seed = seed
        self.extent = extent
        super().__init__(
            f"Store returned no features for extent {extent} around a "
            "resolvable seed; the store must include the seed itself"
        )


class HookError(ClusteringError):
    """
    A lifecycle callback raised.

    Only built for logging. It is never raised out of the hook registry.
    """

    def __init__(self, kind: Any, callback: Any, original: BaseException):
        self.kind = kind
        self.callback = callback
        self.original = original
        name = getattr(callback, "__qualname__", repr(callback))
        super().__init__(
            f"{kind.value} hook {name} failed: {type(original).__name__}: {original}"
        )
