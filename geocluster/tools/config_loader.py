"""
Configuration loader for clustering profiles and environment variables.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Tuple
import yaml


@dataclass
class ClusterConfig:
    """
    Construction-time settings for a cluster source.

    Attributes:
        distance: Clustering threshold in screen units (pixels)
        geometry_function: Custom feature-to-point resolver (None = points only)
        extent: Optional spatial bounds metadata for the cluster layer
        projection: Optional projection identifier (not interpreted)
    """
    distance: float = 20.0
    geometry_function: Optional[Callable] = None
    extent: Optional[Tuple[float, float, float, float]] = None
    projection: Optional[str] = None

    def __post_init__(self):
        if self.distance is None or self.distance <= 0:
            raise ValueError(f"distance must be positive, got {self.distance}")
        if self.extent is not None:
            self.extent = tuple(float(v) for v in self.extent)
            if len(self.extent) != 4:
                raise ValueError("extent must be (min_x, min_y, max_x, max_y)")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ClusterConfig":
        """Build from a profile mapping; unknown keys are ignored."""
        return cls(
            distance=float(data.get("distance", 20.0)),
            extent=data.get("extent"),
            projection=data.get("projection"),
        )


class ConfigLoader:
    """Load and manage configuration from YAML files and environment."""

    CONFIG_DIR = Path(__file__).parent.parent.parent / "configs"

    @classmethod
    def load_profile(cls, profile_name: str = "default") -> Dict[str, Any]:
        """
        Load a clustering profile.

        Args:
            profile_name: Name of the profile (default, dense, sparse)

        Returns:
            Dictionary with configuration values

        Raises:
            FileNotFoundError: If profile doesn't exist
        """
        profile_path = cls.CONFIG_DIR / f"{profile_name}.yaml"

        if not profile_path.exists():
            available = sorted(f.stem for f in cls.CONFIG_DIR.glob("*.yaml"))
            raise FileNotFoundError(
                f"Profile '{profile_name}' not found. Available profiles: {', '.join(available)}"
            )

        with open(profile_path, "r") as f:
            return yaml.safe_load(f) or {}

    @classmethod
    def get_profile_from_env(cls) -> Optional[str]:
        """Get profile name from CLUSTER_PROFILE environment variable."""
        return os.getenv("CLUSTER_PROFILE")

    @classmethod
    def load_default_or_env_profile(cls) -> Dict[str, Any]:
        """
        Load profile from environment variable or use the default one.

        Returns:
            Configuration dictionary
        """
        profile = cls.get_profile_from_env() or "default"
        return cls.load_profile(profile)


def get_config() -> ClusterConfig:
    """Convenience function to get the current clustering configuration."""
    return ClusterConfig.from_dict(ConfigLoader.load_default_or_env_profile())
