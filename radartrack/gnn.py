"""Data association interface and the Global Nearest Neighbor associator."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass, replace

import numpy as np
from scipy.optimize import linear_sum_assignment

from radartrack.config import TrackerConfig
from radartrack.detection import Detection
from radartrack.enums import is_valid
from radartrack.track import AssociationResult, Track
from radartrack.track_state import TrackState

INF_COST = 1e9


def _offsets(state: TrackState, detection: Detection) -> tuple[float, float, float]:
    """Track-minus-detection offsets; z is zero when either lacks it."""
    dx = state.x - detection.x
    dy = state.y - detection.y
    dz = state.z - detection.z if is_valid(state.z) and is_valid(detection.z) else 0.0
    return dx, dy, dz


class DataAssociation(ABC):
    """Algorithm that pairs existing tracks with new detections."""

    gate_threshold: float = 9.21

    def gating_distance(self, track: Track, detection: Detection) -> float:
        """Euclidean distance between the track estimate and the detection."""
        dx, dy, dz = _offsets(track.state(), detection)
        return math.sqrt(dx * dx + dy * dy + dz * dz)

    def passes_gate(self, track: Track, detection: Detection) -> tuple[bool, float]:
        """Whether the detection lies within the gate, and its gating distance."""
        distance = self.gating_distance(track, detection)
        return distance <= self.gate_threshold, distance

    @abstractmethod
    def associate(
        self, tracks: Sequence[Track], detections: Sequence[Detection]
    ) -> AssociationResult:
        """Pair tracks with detections."""


@dataclass
class GNNAssociation(DataAssociation):
    """Optimal one-to-one assignment minimising total track-detection cost.

    With statistical distance the cost is a normalised squared distance gated by
    ``gate_threshold``; otherwise it is the Euclidean distance. Either way pairs
    further apart than ``max_distance`` are never assigned.
    """

    gate_threshold: float = 9.21
    max_distance: float = 100.0
    use_statistical_distance: bool = False

    @classmethod
    def from_config(cls, config: TrackerConfig) -> GNNAssociation:
        return cls(
            gate_threshold=config.tracker_profile.gate_chi_sq,
            max_distance=config.association_params.max_association_distance,
            use_statistical_distance=True,
        )

    def clone(self) -> GNNAssociation:
        return replace(self)

    def name(self) -> str:
        return "GNN"

    def _cost(self, state: TrackState, detection: Detection) -> float:
        dx, dy, dz = _offsets(state, detection)
        euclid = math.sqrt(dx * dx + dy * dy + dz * dz)
        if euclid > self.max_distance:
            return INF_COST
        if not self.use_statistical_distance:
            return euclid
        sigma_x = state.sigma_x if state.sigma_x > 0 else 10.0
        sigma_y = state.sigma_y if state.sigma_y > 0 else 10.0
        sigma_z = state.sigma_z if state.sigma_z > 0 else 20.0
        stat = (dx / sigma_x) ** 2 + (dy / sigma_y) ** 2 + (dz / sigma_z) ** 2
        return stat if stat <= self.gate_threshold else INF_COST

    def build_cost_matrix(
        self, tracks: Sequence[Track], detections: Sequence[Detection]
    ) -> list[list[float]]:
        """Cost per track and detection; INF_COST marks a forbidden pairing."""
        matrix = []
        for track in tracks:
            if not track.is_active():
                matrix.append([INF_COST] * len(detections))
                continue
            state = track.state()
            matrix.append([self._cost(state, det) for det in detections])
        return matrix

    def associate(
        self, tracks: Sequence[Track], detections: Sequence[Detection]
    ) -> AssociationResult:
        result = AssociationResult(
            track_to_detection=[-1] * len(tracks),
            detection_to_track=[-1] * len(detections),
        )

        if tracks and detections:
            costs = self.build_cost_matrix(tracks, detections)
            rows, cols = linear_sum_assignment(np.array(costs, dtype=float))
            assignment = dict(zip(rows.tolist(), cols.tolist()))
        else:
            costs = []
            assignment = {}

        for t, track in enumerate(tracks):
            d = assignment.get(t, -1)
            if d >= 0 and costs[t][d] < INF_COST - 1:
                result.track_to_detection[t] = d
                result.detection_to_track[d] = t
                result.association_costs.append(costs[t][d])
            elif track.is_active():
                result.unassociated_tracks.append(t)

        result.unassociated_detections = [
            d for d, t in enumerate(result.detection_to_track) if t < 0
        ]
        return result