"""geocluster: resolution-scaled clustering of point features for map layers."""

__version__ = "0.1.0"
