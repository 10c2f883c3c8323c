"""Tuned tracker parameter sets for operational scenarios."""

from __future__ import annotations

from dataclasses import dataclass

from radartrack.enums import ProfileType, profile_type_from_string


@dataclass
class TrackerProfile:
    """Process noise, gating, track management and confidence parameters."""

    profile_type: ProfileType = ProfileType.SHORT_RANGE
    name: str = "SHORT_RANGE"

    q_pos: float = 1.0
    q_vel: float = 10.0
    q_acc: float = 50.0
    q_omega: float = 0.1

    gate_chi_sq: float = 9.21
    gate_chi_sq_3d: float = 11.34
    max_gate_distance: float = 100.0

    confirm_hits: int = 3
    confirm_window: int = 5
    max_misses: int = 5
    tentative_max_misses: int = 2
    min_confidence: float = 0.1

    init_vel_std: float = 50.0
    init_acc_std: float = 10.0
    min_init_snr: float = 10.0

    confidence_gain: float = 0.2
    confidence_loss: float = 0.1
    initial_confidence: float = 0.3

    max_extrapolation_time: float = 10.0
    prediction_coast_factor: float = 1.5

    @classmethod
    def short_range(cls) -> TrackerProfile:
        """Aggressive profile for FMCW / counter-UAS with manoeuvring targets."""
        return cls(
            profile_type=ProfileType.SHORT_RANGE,
            name="SHORT_RANGE",
            q_pos=2.0,
            q_vel=50.0,
            q_acc=100.0,
            q_omega=0.5,
            gate_chi_sq=12.0,
            gate_chi_sq_3d=14.0,
            max_gate_distance=50.0,
            confirm_hits=2,
            confirm_window=3,
            max_misses=3,
            tentative_max_misses=1,
            init_vel_std=100.0,
            init_acc_std=50.0,
            min_init_snr=5.0,
            confidence_gain=0.3,
            confidence_loss=0.15,
            initial_confidence=0.4,
            max_extrapolation_time=3.0,
            prediction_coast_factor=2.0,
        )

    @classmethod
    def medium_range(cls) -> TrackerProfile:
        """Balanced profile for general surveillance."""
        return cls(
            profile_type=ProfileType.MEDIUM_RANGE,
            name="MEDIUM_RANGE",
            q_pos=1.0,
            q_vel=20.0,
            q_acc=50.0,
            q_omega=0.2,
            gate_chi_sq=9.21,
            gate_chi_sq_3d=11.34,
            max_gate_distance=200.0,
            confirm_hits=3,
            confirm_window=5,
            max_misses=5,
            tentative_max_misses=2,
            init_vel_std=50.0,
            init_acc_std=20.0,
            min_init_snr=8.0,
            confidence_gain=0.2,
            confidence_loss=0.1,
            initial_confidence=0.3,
            max_extrapolation_time=10.0,
            prediction_coast_factor=1.5,
        )

    @classmethod
    def long_range(cls) -> TrackerProfile:
        """Conservative profile for large surveillance radars and stable tracks."""
        return cls(
            profile_type=ProfileType.LONG_RANGE,
            name="LONG_RANGE",
            q_pos=0.5,
            q_vel=5.0,
            q_acc=10.0,
            q_omega=0.05,
            gate_chi_sq=7.38,
            gate_chi_sq_3d=9.35,
            max_gate_distance=500.0,
            confirm_hits=4,
            confirm_window=6,
            max_misses=8,
            tentative_max_misses=3,
            init_vel_std=30.0,
            init_acc_std=5.0,
            min_init_snr=12.0,
            confidence_gain=0.15,
            confidence_loss=0.05,
            initial_confidence=0.25,
            max_extrapolation_time=30.0,
            prediction_coast_factor=1.2,
        )

    @classmethod
    def clutter_heavy(cls) -> TrackerProfile:
        """Tight-gated profile for birds and high-clutter environments."""
        return cls(
            profile_type=ProfileType.CLUTTER_HEAVY,
            name="CLUTTER_HEAVY",
            q_pos=1.5,
            q_vel=15.0,
            q_acc=30.0,
            q_omega=0.3,
            gate_chi_sq=6.63,
            gate_chi_sq_3d=7.81,
            max_gate_distance=100.0,
            confirm_hits=4,
            confirm_window=6,
            max_misses=4,
            tentative_max_misses=1,
            init_vel_std=40.0,
            init_acc_std=15.0,
            min_init_snr=15.0,
            confidence_gain=0.15,
            confidence_loss=0.2,
            initial_confidence=0.2,
            max_extrapolation_time=5.0,
            prediction_coast_factor=1.8,
        )

    @classmethod
    def from_type(cls, profile_type: ProfileType) -> TrackerProfile:
        factories = {
            ProfileType.SHORT_RANGE: cls.short_range,
            ProfileType.MEDIUM_RANGE: cls.medium_range,
            ProfileType.LONG_RANGE: cls.long_range,
            ProfileType.CLUTTER_HEAVY: cls.clutter_heavy,
        }
        return factories.get(profile_type, cls.short_range)()

    @classmethod
    def from_string(cls, name: str) -> TrackerProfile:
        """Profile for the given name; unknown names give SHORT_RANGE."""
        return cls.from_type(profile_type_from_string(name))