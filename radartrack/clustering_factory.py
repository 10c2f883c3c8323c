"""Construction of clustering algorithms by configuration or name."""

from __future__ import annotations

from radartrack.cluster import Clustering
from radartrack.config import TrackerConfig
from radartrack.continuous_range import ContinuousRangeClustering
from radartrack.dbscan import DBSCANClustering
from radartrack.enums import ClusteringAlgorithm

_DBSCAN_NAMES = frozenset({"DBSCAN"})
_RANGE_NAMES = frozenset({"CONTINUOUS_RANGE", "RANGE_BINS", "CONTINUOUS"})


def create_clustering(config: TrackerConfig) -> Clustering:
    """Clustering algorithm selected and parameterised by the configuration."""
    if config.clustering_enum() is ClusteringAlgorithm.CONTINUOUS_RANGE:
        return ContinuousRangeClustering.from_config(config)
    return DBSCANClustering.from_config(config)


def clustering_by_name(name: str) -> Clustering:
    """Clustering algorithm with default parameters; the name is case-insensitive.

    Raises ValueError for an unknown name.
    """
    key = name.upper()
    if key in _DBSCAN_NAMES:
        return DBSCANClustering()
    if key in _RANGE_NAMES:
        return ContinuousRangeClustering()
    raise ValueError(f"Unknown clustering algorithm: {name}")


def is_valid_clustering_algorithm(name: str) -> bool:
    key = name.upper()
    return key in _DBSCAN_NAMES or key in _RANGE_NAMES


def available_clustering_algorithms() -> list[str]:
    return ["DBSCAN", "CONTINUOUS_RANGE"]