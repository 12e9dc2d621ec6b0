"""
geocluster/clustering: Greedy, resolution-scaled clustering of map features.

This module provides the partition engine, the cluster layer source that
drives it, and the pluggable resolver and hook mechanisms.
"""

from .errors import (
    ClusteringError,
    UnsupportedGeometry,
    EmptyClusterError,
    StoreConsistencyError,
    HookError,
)
from .resolvers import (
    GeometryResolver,
    default_geometry_resolver,
    point_or_none,
    first_vertex_resolver,
)
from .hooks import HookKind, HookRegistry
from .builder import Cluster, ClusterBuilder, MEMBERS_KEY
from .engine import ClusteringDiagnostics, ClusteringEngine
from .source import ClusterSource, DEFAULT_DISTANCE

__all__ = [
    # Errors
    "ClusteringError",
    "UnsupportedGeometry",
    "EmptyClusterError",
    "StoreConsistencyError",
    "HookError",

    # Resolvers
    "GeometryResolver",
    "default_geometry_resolver",
    "point_or_none",
    "first_vertex_resolver",

    # Hooks
    "HookKind",
    "HookRegistry",

    # Engine
    "Cluster",
    "ClusterBuilder",
    "MEMBERS_KEY",
    "ClusteringDiagnostics",
    "ClusteringEngine",

    # Layer source
    "ClusterSource",
    "DEFAULT_DISTANCE",
]
