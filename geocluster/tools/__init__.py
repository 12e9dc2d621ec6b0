"""Configuration utilities."""

from .config_loader import ClusterConfig, ConfigLoader, get_config

__all__ = [
    "ClusterConfig",
    "ConfigLoader",
    "get_config",
]
