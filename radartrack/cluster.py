"""Groups of related detections and the clustering algorithm interface."""

from __future__ import annotations

import math
import sys
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Sequence

from radartrack.detection import Detection
from radartrack.enums import INVALID_VALUE, is_valid


@dataclass
class Cluster:
    """Detections that likely originate from the same physical target."""

    id: int = -1
    detection_indices: list[int] = field(default_factory=list)

    centroid_x: float = INVALID_VALUE
    centroid_y: float = INVALID_VALUE
    centroid_z: float = INVALID_VALUE

    centroid_range: float = INVALID_VALUE
    centroid_azimuth: float = INVALID_VALUE
    centroid_elevation: float = INVALID_VALUE

    mean_doppler: float = INVALID_VALUE

    extent_x: float = 0.0
    extent_y: float = 0.0
    extent_z: float = 0.0

    mean_snr: float = INVALID_VALUE
    max_snr: float = INVALID_VALUE

    timestamp: int = 0

    def __len__(self) -> int:
        return len(self.detection_indices)

    def _members(self, detections: Sequence[Detection]) -> list[Detection]:
        return [detections[i] for i in self.detection_indices if 0 <= i < len(detections)]

    def compute_centroid(self, detections: Sequence[Detection]) -> None:
        """Average position, Doppler and SNR over the member detections."""
        if not self.detection_indices:
            return

        sum_x = sum_y = sum_z = 0.0
        sum_r = sum_az = sum_el = 0.0
        sum_dop = 0.0
        sum_snr = 0.0
        count_z = count_dop = count_snr = 0
        max_snr = -math.inf

        for det in self._members(detections):
            if det.has_valid_cartesian():
                sum_x += det.x
                sum_y += det.y
                if is_valid(det.z):
                    sum_z += det.z
                    count_z += 1
            if det.has_valid_polar():
                sum_r += det.range
                sum_az += det.azimuth
                if is_valid(det.elevation):
                    sum_el += det.elevation
            if det.has_doppler():
                sum_dop += det.doppler
                count_dop += 1
            if is_valid(det.snr):
                sum_snr += det.snr
                max_snr = max(max_snr, det.snr)
                count_snr += 1
            self.timestamp = max(self.timestamp, det.timestamp)

        n = len(self.detection_indices)
        self.centroid_x = sum_x / n
        self.centroid_y = sum_y / n
        self.centroid_z = sum_z / count_z if count_z else INVALID_VALUE

        self.centroid_range = sum_r / n
        self.centroid_azimuth = sum_az / n
        # The elevation average shares the z count, as the position average does.
        self.centroid_elevation = sum_el / count_z if count_z else INVALID_VALUE

        self.mean_doppler = sum_dop / count_dop if count_dop else INVALID_VALUE
        self.mean_snr = sum_snr / count_snr if count_snr else INVALID_VALUE
        self.max_snr = max_snr if count_snr else INVALID_VALUE

    def compute_extent(self, detections: Sequence[Detection]) -> None:
        """Bounding-box size of the member detections."""
        if not self.detection_indices:
            return

        big = sys.float_info.max
        min_x, max_x = big, -big
        min_y, max_y = big, -big
        min_z, max_z = big, -big

        for det in self._members(detections):
            if not det.has_valid_cartesian():
                continue
            min_x, max_x = min(min_x, det.x), max(max_x, det.x)
            min_y, max_y = min(min_y, det.y), max(max_y, det.y)
            if is_valid(det.z):
                min_z, max_z = min(min_z, det.z), max(max_z, det.z)

        self.extent_x = max_x - min_x
        self.extent_y = max_y - min_y
        self.extent_z = max_z - min_z if min_z < max_z else 0.0

    def centroid_detection(self) -> Detection:
        """The centroid expressed as a detection tagged with this cluster's id."""
        return Detection(
            x=self.centroid_x,
            y=self.centroid_y,
            z=self.centroid_z,
            range=self.centroid_range,
            azimuth=self.centroid_azimuth,
            elevation=self.centroid_elevation,
            doppler=self.mean_doppler,
            timestamp=self.timestamp,
            snr=self.mean_snr,
            cluster_id=self.id,
        )

    def distance_to(self, other: Cluster) -> float:
        """Euclidean distance between centroids; z is ignored if either lacks it."""
        dx = self.centroid_x - other.centroid_x
        dy = self.centroid_y - other.centroid_y
        if is_valid(self.centroid_z) and is_valid(other.centroid_z):
            dz = self.centroid_z - other.centroid_z
        else:
            dz = 0.0
        return math.sqrt(dx * dx + dy * dy + dz * dz)


class Clustering(ABC):
    """Algorithm that groups detections into clusters."""

    @abstractmethod
    def cluster(self, detections: Sequence[Detection]) -> list[Cluster]:
        """Group detections; each cluster holds indices into the input."""

    @abstractmethod
    def name(self) -> str:
        """Algorithm name."""

    @abstractmethod
    def clone(self) -> Clustering:
        """Independent copy with the same settings."""