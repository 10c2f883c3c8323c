"""A single radar detection in Cartesian and/or polar form."""

from __future__ import annotations

import math
from dataclasses import dataclass

from radartrack.enums import INVALID_VALUE, is_valid


@dataclass
class Detection:
    """Radar measurement; missing values are NaN."""

    x: float = INVALID_VALUE
    y: float = INVALID_VALUE
    z: float = INVALID_VALUE
    range: float = INVALID_VALUE
    azimuth: float = INVALID_VALUE
    elevation: float = INVALID_VALUE
    doppler: float = INVALID_VALUE
    timestamp: int = 0
    snr: float = INVALID_VALUE
    rcs: float = INVALID_VALUE
    cluster_id: int = -1
    quality: float = 1.0

    @classmethod
    def from_cartesian(cls, x: float, y: float, z: float, timestamp: int) -> Detection:
        det = cls(x=x, y=y, z=z, timestamp=timestamp)
        det.compute_polar_from_cartesian()
        return det

    @classmethod
    def from_polar(
        cls, range_: float, azimuth: float, elevation: float, timestamp: int
    ) -> Detection:
        det = cls(range=range_, azimuth=azimuth, elevation=elevation, timestamp=timestamp)
        det.compute_cartesian_from_polar()
        return det

    def has_valid_cartesian(self) -> bool:
        return is_valid(self.x) and is_valid(self.y)

    def has_valid_polar(self) -> bool:
        return is_valid(self.range) and is_valid(self.azimuth)

    def is_3d(self) -> bool:
        return is_valid(self.z) or is_valid(self.elevation)

    def has_doppler(self) -> bool:
        return is_valid(self.doppler)

    def compute_polar_from_cartesian(self) -> None:
        if not self.has_valid_cartesian():
            return
        z_sq = self.z * self.z if is_valid(self.z) else 0.0
        self.range = math.sqrt(self.x * self.x + self.y * self.y + z_sq)
        self.azimuth = math.atan2(self.y, self.x)
        if is_valid(self.z) and self.range > 0:
            self.elevation = math.asin(self.z / self.range)

    def compute_cartesian_from_polar(self) -> None:
        if not self.has_valid_polar():
            return
        cos_el = math.cos(self.elevation) if is_valid(self.elevation) else 1.0
        self.x = self.range * math.cos(self.azimuth) * cos_el
        self.y = self.range * math.sin(self.azimuth) * cos_el
        if is_valid(self.elevation):
            self.z = self.range * math.sin(self.elevation)

    def distance_to(self, other: Detection) -> float:
        """Euclidean distance; NaN when either lacks Cartesian coordinates."""
        if not self.has_valid_cartesian() or not other.has_valid_cartesian():
            return INVALID_VALUE
        dx = self.x - other.x
        dy = self.y - other.y
        dz = self.z - other.z if is_valid(self.z) and is_valid(other.z) else 0.0
        return math.sqrt(dx * dx + dy * dy + dz * dz)

    def position(self) -> list[float]:
        if self.is_3d():
            return [self.x, self.y, self.z if is_valid(self.z) else 0.0]
        return [self.x, self.y]