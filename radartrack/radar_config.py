"""Radar sensor parameters and presets for common radar classes."""

from __future__ import annotations

import math
from dataclasses import dataclass

from radartrack.enums import PI


@dataclass
class RadarConfig:
    """Dimensionality, accuracy, coverage and detection characteristics of a radar."""

    is_3d: bool = True
    has_doppler: bool = True

    update_time: float = 0.1
    max_age: float = 10.0

    range_std: float = 1.0
    azimuth_std: float = 0.01
    elevation_std: float = 0.02
    doppler_std: float = 0.5

    x_std: float = 1.0
    y_std: float = 1.0
    z_std: float = 2.0

    max_range: float = 50000.0
    min_range: float = 50.0
    max_azimuth: float = PI
    min_azimuth: float = -PI
    max_elevation: float = PI / 4
    min_elevation: float = -PI / 12

    p_d: float = 0.9
    p_fa: float = 1e-6
    clutter_density: float = 1e-8

    radar_type: str = "GENERIC"

    @classmethod
    def short_range_fmcw(cls) -> RadarConfig:
        """Short-range FMCW radar, 20 Hz update."""
        cfg = cls(
            radar_type="SHORT_RANGE_FMCW",
            is_3d=True,
            has_doppler=True,
            update_time=0.05,
            range_std=0.5,
            azimuth_std=0.005,
            elevation_std=0.008,
            dopplerStd_placeholder=None,
        ) if False else cls(
            radar_type="SHORT_RANGE_FMCW",
            is_3d=True,
            has_doppler=True,
            update_time=0.05,
            range_std=0.5,
            azimuth_std=0.005,
            elevation_std=0.008,
            doppler_std=0.2,
            max_range=5000.0,
            min_range=10.0,
            p_d=0.95,
        )
        cfg.compute_cartesian_std(500.0)
        return cfg

    @classmethod
    def medium_range_surveillance(cls) -> RadarConfig:
        """Rotating medium-range surveillance radar, 1 Hz update."""
        cfg = cls(
            radar_type="MEDIUM_RANGE_SURVEILLANCE",
            is_3d=True,
            has_doppler=True,
            update_time=1.0,
            range_std=15.0,
            azimuth_std=0.003,
            elevation_std=0.015,
            doppler_std=1.0,
            max_range=100000.0,
            min_range=500.0,
            p_d=0.85,
        )
        cfg.compute_cartesian_std(30000.0)
        return cfg

    @classmethod
    def long_range(cls) -> RadarConfig:
        """Large rotating long-range radar, 0.25 Hz update."""
        cfg = cls(
            radar_type="LONG_RANGE",
            is_3d=True,
            has_doppler=True,
            update_time=4.0,
            range_std=50.0,
            azimuth_std=0.002,
            elevation_std=0.02,
            doppler_std=2.0,
            max_range=400000.0,
            min_range=2000.0,
            p_d=0.8,
        )
        cfg.compute_cartesian_std(100000.0)
        return cfg

    @classmethod
    def radar_2d(cls) -> RadarConfig:
        """2D surveillance radar without elevation or Doppler."""
        cfg = cls(
            radar_type="2D_SURVEILLANCE",
            is_3d=False,
            has_doppler=False,
            update_time=2.0,
            range_std=20.0,
            azimuth_std=0.005,
            elevation_std=0.0,
            doppler_std=0.0,
            max_range=200000.0,
            p_d=0.9,
        )
        cfg.compute_cartesian_std(50000.0)
        return cfg

    def compute_cartesian_std(self, typical_range: float) -> None:
        """Derive Cartesian accuracies from polar accuracies at a typical range."""
        cross_range = typical_range * self.azimuth_std
        self.x_std = math.sqrt(self.range_std**2 + cross_range**2)
        self.y_std = self.x_std
        if self.is_3d:
            vertical = typical_range * self.elevation_std
            self.z_std = math.sqrt(self.range_std**2 + vertical**2)
        else:
            self.z_std = 0.0

    def measurement_dimension(self) -> int:
        """Range and azimuth, plus elevation and Doppler when available."""
        return 2 + int(self.is_3d) + int(self.has_doppler)

    def is_valid(self) -> bool:
        return (
            self.update_time > 0
            and self.range_std > 0
            and self.azimuth_std > 0
            and self.max_range > self.min_range
            and 0 < self.p_d <= 1
        )