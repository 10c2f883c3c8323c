"""Range-ordered clustering with angular and Doppler gating."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass, replace

from radartrack.cluster import Cluster, Clustering
from radartrack.config import TrackerConfig
from radartrack.detection import Detection
from radartrack.enums import is_valid


def _angle_difference(a: float, b: float) -> float:
    """Difference a - b wrapped into [-pi, pi]."""
    return math.remainder(a - b, 2.0 * math.pi)


class _DisjointSet:
    """Union-find with path compression and union by rank."""

    def __init__(self, size: int) -> None:
        self._parent = list(range(size))
        self._rank = [0] * size

    def find(self, item: int) -> int:
        root = item
        while self._parent[root] != root:
            root = self._parent[root]
        while self._parent[item] != root:
            self._parent[item], item = root, self._parent[item]
        return root

    def union(self, a: int, b: int) -> None:
        root_a, root_b = self.find(a), self.find(b)
        if root_a == root_b:
            return
        if self._rank[root_a] < self._rank[root_b]:
            self._parent[root_a] = root_b
        elif self._rank[root_a] > self._rank[root_b]:
            self._parent[root_b] = root_a
        else:
            self._parent[root_b] = root_a
            self._rank[root_a] += 1


@dataclass
class ContinuousRangeClustering(Clustering):
    """Groups detections that fall within range, azimuth, elevation and Doppler gates.

    Gates are in metres, radians, radians and m/s. Detections linked by a chain
    of gate-sharing pairs end up in the same cluster.
    """

    range_gate: float = 5.0
    azimuth_gate: float = 0.02
    elevation_gate: float = 0.05
    doppler_gate: float = 2.0
    use_3d: bool = True
    use_doppler: bool = False

    @classmethod
    def from_config(cls, config: TrackerConfig) -> ContinuousRangeClustering:
        params = config.clustering_params
        return cls(
            range_gate=params.range_gate,
            azimuth_gate=params.azimuth_gate,
            elevation_gate=params.elevation_gate,
            doppler_gate=params.doppler_gate,
            use_3d=params.use_3d and config.radar.is_3d,
            use_doppler=params.use_doppler and config.radar.has_doppler,
        )

    def name(self) -> str:
        return "CONTINUOUS_RANGE"

    def clone(self) -> ContinuousRangeClustering:
        return replace(self)

    def _in_same_gate(self, a: Detection, b: Detection) -> bool:
        if not a.has_valid_polar() or not b.has_valid_polar():
            dist = a.distance_to(b)
            return is_valid(dist) and dist <= self.range_gate * 2

        if abs(a.range - b.range) > self.range_gate:
            return False
        if abs(_angle_difference(a.azimuth, b.azimuth)) > self.azimuth_gate:
            return False
        if (
            self.use_3d
            and is_valid(a.elevation)
            and is_valid(b.elevation)
            and abs(a.elevation - b.elevation) > self.elevation_gate
        ):
            return False
        if (
            self.use_doppler
            and a.has_doppler()
            and b.has_doppler()
            and abs(a.doppler - b.doppler) > self.doppler_gate
        ):
            return False
        return True

    def cluster(self, detections: Sequence[Detection]) -> list[Cluster]:
        detections = list(detections)
        if not detections:
            return []

        order = sorted(range(len(detections)), key=lambda i: detections[i].range)
        groups = _DisjointSet(len(detections))

        for pos, idx_i in enumerate(order):
            det_i = detections[idx_i]
            for idx_j in order[pos + 1 :]:
                det_j = detections[idx_j]
                if det_j.range - det_i.range > self.range_gate:
                    break
                if self._in_same_gate(det_i, det_j):
                    groups.union(idx_i, idx_j)

        by_root: dict[int, Cluster] = {}
        for index in range(len(detections)):
            root = groups.find(index)
            if root not in by_root:
                by_root[root] = Cluster(id=len(by_root))
            by_root[root].detection_indices.append(index)

        clusters = list(by_root.values())
        for cluster in clusters:
            cluster.compute_centroid(detections)
            cluster.compute_extent(detections)
        return clusters