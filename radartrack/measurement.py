"""Measurements prepared for filter updates."""

from __future__ import annotations

from dataclasses import dataclass, field

from radartrack.detection import Detection
from radartrack.enums import INVALID_VALUE, is_valid


@dataclass
class Measurement:
    """Measurement vector with its diagonal noise variances."""

    values: list[float] = field(default_factory=list)
    variances: list[float] = field(default_factory=list)
    covariance: list[float] = field(default_factory=list)
    timestamp: int = 0
    dimension: int = 0
    is_polar: bool = False
    doppler: float = INVALID_VALUE
    source_detection_id: int = -1

    @classmethod
    def _build(
        cls,
        first: float,
        second: float,
        third: float,
        sigmas: tuple[float, float, float],
        timestamp: int,
        polar: bool,
    ) -> Measurement:
        values = [first, second]
        used = list(sigmas[:2])
        if is_valid(third):
            values.append(third)
            used.append(sigmas[2])
        return cls(
            values=values,
            variances=[s * s for s in used],
            timestamp=timestamp,
            dimension=len(values),
            is_polar=polar,
        )

    @classmethod
    def from_cartesian(
        cls,
        x: float,
        y: float,
        z: float,
        sigma_x: float,
        sigma_y: float,
        sigma_z: float,
        timestamp: int,
    ) -> Measurement:
        return cls._build(x, y, z, (sigma_x, sigma_y, sigma_z), timestamp, polar=False)

    @classmethod
    def from_polar(
        cls,
        range_: float,
        azimuth: float,
        elevation: float,
        sigma_range: float,
        sigma_azimuth: float,
        sigma_elevation: float,
        timestamp: int,
    ) -> Measurement:
        return cls._build(
            range_,
            azimuth,
            elevation,
            (sigma_range, sigma_azimuth, sigma_elevation),
            timestamp,
            polar=True,
        )

    @classmethod
    def from_detection(
        cls,
        detection: Detection,
        sigma_x: float,
        sigma_y: float,
        sigma_z: float,
        use_polar: bool = False,
    ) -> Measurement:
        """Build from a detection; an empty, invalid measurement if it has no position."""
        if use_polar and detection.has_valid_polar():
            return cls.from_polar(
                detection.range,
                detection.azimuth,
                detection.elevation,
                sigma_x,
                sigma_y,
                sigma_z,
                detection.timestamp,
            )
        if detection.has_valid_cartesian():
            return cls.from_cartesian(
                detection.x,
                detection.y,
                detection.z,
                sigma_x,
                sigma_y,
                sigma_z,
                detection.timestamp,
            )
        return cls()

    def set_doppler(self, doppler: float, sigma_doppler: float) -> None:
        """Record the Doppler velocity; the measurement vector is unchanged."""
        self.doppler = doppler

    def is_valid(self) -> bool:
        return self.dimension > 0 and len(self.values) == self.dimension

    def __getitem__(self, index: int) -> float:
        if 0 <= index < len(self.values):
            return self.values[index]
        return INVALID_VALUE