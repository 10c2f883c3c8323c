"""Enumerations, constants and small helpers shared across the tracker."""

from __future__ import annotations

import math
from enum import Enum

PI = math.pi
DEG_TO_RAD = PI / 180.0
RAD_TO_DEG = 180.0 / PI
INVALID_VALUE = float("nan")


class _NamedEnum(Enum):
    """Enum whose string form is its member name."""

    def __str__(self) -> str:
        return self.name


class TargetType(_NamedEnum):
    UNKNOWN = 0
    DRONE = 1
    BIRD = 2
    VEHICLE = 3
    AIRCRAFT = 4
    MISSILE = 5
    CLUTTER = 6


class MotionModel(_NamedEnum):
    CV = 0
    CA = 1
    CT = 2
    IMM = 3


class ClusteringAlgorithm(_NamedEnum):
    CONTINUOUS_RANGE = 0
    DBSCAN = 1


class AssociationAlgorithm(_NamedEnum):
    GNN = 0
    JPDA = 1
    MHT = 2


class TrackingAlgorithm(_NamedEnum):
    CV = 0
    CA = 1
    CT = 2
    IMM = 3
    EKF = 4
    UKF = 5
    PARTICLE_FILTER = 6


class ProfileType(_NamedEnum):
    SHORT_RANGE = 0
    MEDIUM_RANGE = 1
    LONG_RANGE = 2
    CLUTTER_HEAVY = 3


class TrackStatus(_NamedEnum):
    TENTATIVE = 0
    CONFIRMED = 1
    COASTING = 2
    DELETED = 3


def target_type_from_string(text: str) -> TargetType:
    """Return the target type with exactly this name, UNKNOWN otherwise."""
    try:
        return TargetType[text]
    except KeyError:
        return TargetType.UNKNOWN


def motion_model_from_string(text: str) -> MotionModel:
    """Return the motion model with exactly this name, CV otherwise."""
    try:
        return MotionModel[text]
    except KeyError:
        return MotionModel.CV


def profile_type_from_string(text: str) -> ProfileType:
    """Return the profile type with exactly this name, SHORT_RANGE otherwise."""
    try:
        return ProfileType[text]
    except KeyError:
        return ProfileType.SHORT_RANGE


def is_valid(value: float) -> bool:
    """True when the value is neither NaN nor infinite."""
    return math.isfinite(value)