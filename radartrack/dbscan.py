"""Density-based clustering of radar detections."""

from __future__ import annotations

import math
from collections.abc import Callable, Sequence
from dataclasses import dataclass, replace

from radartrack.cluster import Cluster, Clustering
from radartrack.config import TrackerConfig
from radartrack.detection import Detection
from radartrack.enums import is_valid

_MATRIX_LIMIT = 500
_NOISE = -1
_UNVISITED = 0


@dataclass
class DBSCANClustering(Clustering):
    """DBSCAN over detection positions, optionally weighted by Doppler.

    A point is a core point when at least ``min_points`` other detections lie
    within ``epsilon`` of it. Detections reached by no core point are noise and
    belong to no cluster.
    """

    epsilon: float = 10.0
    min_points: int = 2
    use_3d: bool = True
    use_doppler: bool = False
    doppler_weight: float = 1.0

    @classmethod
    def from_config(cls, config: TrackerConfig) -> DBSCANClustering:
        params = config.clustering_params
        return cls(
            epsilon=params.epsilon,
            min_points=params.min_points,
            use_3d=params.use_3d and config.radar.is_3d,
            use_doppler=params.use_doppler and config.radar.has_doppler,
        )

    def name(self) -> str:
        return "DBSCAN"

    def clone(self) -> DBSCANClustering:
        return replace(self)

    def _distance(self, a: Detection, b: Detection) -> float:
        dx = a.x - b.x
        dy = a.y - b.y
        dist_sq = dx * dx + dy * dy
        if self.use_3d and is_valid(a.z) and is_valid(b.z):
            dz = a.z - b.z
            dist_sq += dz * dz
        dist = math.sqrt(dist_sq)
        if self.use_doppler and a.has_doppler() and b.has_doppler():
            dist += self.doppler_weight * abs(a.doppler - b.doppler)
        return dist

    def _distance_lookup(
        self, detections: Sequence[Detection]
    ) -> Callable[[int, int], float]:
        """Pairwise distance by index; precomputed for small inputs."""
        if len(detections) > _MATRIX_LIMIT:
            return lambda i, j: self._distance(detections[i], detections[j])

        matrix = [[0.0] * len(detections) for _ in detections]
        for i, a in enumerate(detections):
            for j in range(i + 1, len(detections)):
                dist = self._distance(a, detections[j])
                matrix[i][j] = dist
                matrix[j][i] = dist
        return lambda i, j: matrix[i][j]

    def cluster(self, detections: Sequence[Detection]) -> list[Cluster]:
        detections = list(detections)
        if not detections:
            return []

        n = len(detections)
        distance = self._distance_lookup(detections)

        def neighbors(index: int) -> list[int]:
            return [
                j for j in range(n) if j != index and distance(index, j) <= self.epsilon
            ]

        labels = [_UNVISITED] * n
        cluster_count = 0

        for index in range(n):
            if labels[index] != _UNVISITED:
                continue
            seeds = neighbors(index)
            if len(seeds) < self.min_points:
                labels[index] = _NOISE
                continue

            cluster_count += 1
            labels[index] = cluster_count
            queued = set(seeds)
            queued.add(index)
            # The seed list grows while it is walked.
            for member in seeds:
                if labels[member] == _NOISE:
                    labels[member] = cluster_count
                elif labels[member] == _UNVISITED:
                    labels[member] = cluster_count
                    reach = neighbors(member)
                    if len(reach) >= self.min_points:
                        for candidate in reach:
                            if candidate not in queued:
                                queued.add(candidate)
                                seeds.append(candidate)

        members: dict[int, list[int]] = {c: [] for c in range(1, cluster_count + 1)}
        for index, label in enumerate(labels):
            if label > 0:
                members[label].append(index)

        clusters = []
        for label, indices in members.items():
            if not indices:
                continue
            cluster = Cluster(id=label - 1, detection_indices=indices)
            cluster.compute_centroid(detections)
            cluster.compute_extent(detections)
            clusters.append(cluster)
        return clusters