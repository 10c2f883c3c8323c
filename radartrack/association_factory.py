"""Construction of data association algorithms by configuration or name."""

from __future__ import annotations

from radartrack.config import TrackerConfig
from radartrack.enums import AssociationAlgorithm
from radartrack.gnn import DataAssociation, GNNAssociation
from radartrack.jpda import JPDAAssociation
from radartrack.mht import MHTAssociation

_GNN_NAMES = frozenset({"GNN", "GLOBAL_NEAREST_NEIGHBOR"})
_JPDA_NAMES = frozenset({"JPDA", "JOINT_PROBABILISTIC"})
_MHT_NAMES = frozenset({"MHT", "MULTIPLE_HYPOTHESIS"})


def create_association(config: TrackerConfig) -> DataAssociation:
    """Association algorithm selected and parameterised by the configuration."""
    algorithm = config.association_enum()
    if algorithm is AssociationAlgorithm.JPDA:
        return JPDAAssociation.from_config(config)
    if algorithm is AssociationAlgorithm.MHT:
        return MHTAssociation.from_config(config)
    return GNNAssociation.from_config(config)


def association_by_name(name: str) -> DataAssociation:
    """Association algorithm with default parameters; the name is case-insensitive.

    Raises ValueError for an unknown name.
    """
    key = name.upper()
    if key in _GNN_NAMES:
        return GNNAssociation()
    if key in _JPDA_NAMES:
        return JPDAAssociation()
    if key in _MHT_NAMES:
        return MHTAssociation()
    raise ValueError(f"Unknown association algorithm: {name}")


def is_valid_association_algorithm(name: str) -> bool:
    key = name.upper()
    return key in _GNN_NAMES or key in _JPDA_NAMES or key in _MHT_NAMES


def available_association_algorithms() -> list[str]:
    return ["GNN", "JPDA", "MHT"]