"""Complete tracker configuration and operational presets."""

from __future__ import annotations

from dataclasses import dataclass, field

from radartrack.enums import (
    AssociationAlgorithm,
    ClusteringAlgorithm,
    MotionModel,
    TargetType,
    TrackingAlgorithm,
    motion_model_from_string,
    target_type_from_string,
)
from radartrack.profile import TrackerProfile
from radartrack.radar_config import RadarConfig


@dataclass
class ClusteringParams:
    """Parameters for DBSCAN and continuous-range clustering."""

    epsilon: float = 10.0
    min_points: int = 2
    range_gate: float = 5.0
    azimuth_gate: float = 0.02
    elevation_gate: float = 0.05
    doppler_gate: float = 2.0
    max_clusters: int = 100
    use_3d: bool = True
    use_doppler: bool = True


@dataclass
class AssociationParams:
    """Parameters for GNN, JPDA and MHT association."""

    max_association_distance: float = 50.0
    jpda_pd: float = 0.9
    jpda_clutter_rate: float = 1e-6
    jpda_max_hypotheses: int = 100
    mht_n_scan: int = 3
    mht_max_hypotheses: int = 1000
    mht_max_tracks_per_hypothesis: int = 50
    mht_prune_threshold: float = 0.01


@dataclass
class TrackingParams:
    """Parameters for the filtering stage."""

    state_dimension: int = 6
    measurement_dimension: int = 3
    ukf_alpha: float = 0.001
    ukf_beta: float = 2.0
    ukf_kappa: float = 0.0
    imm_models: list[str] = field(default_factory=lambda: ["CV", "CA"])
    imm_initial_probs: list[float] = field(default_factory=lambda: [0.5, 0.5])
    imm_transition_matrix: list[float] = field(
        default_factory=lambda: [0.98, 0.02, 0.02, 0.98]
    )
    pf_num_particles: int = 500
    pf_resample_threshold: float = 0.5
    use_polar_measurement: bool = False


@dataclass
class TrackManagementParams:
    """Track confirmation, deletion and capacity limits."""

    min_hits_to_confirm: int = 3
    confirm_window: int = 5
    max_consecutive_misses: int = 5
    min_confidence: float = 0.1
    max_extrapolation_time: float = 10.0
    max_tracks: int = 500
    delete_out_of_range: bool = True


_TRACKING_ALGORITHMS = {
    "CV": TrackingAlgorithm.CV,
    "CA": TrackingAlgorithm.CA,
    "CT": TrackingAlgorithm.CT,
    "IMM": TrackingAlgorithm.IMM,
    "UKF": TrackingAlgorithm.UKF,
    "PARTICLE_FILTER": TrackingAlgorithm.PARTICLE_FILTER,
    "PF": TrackingAlgorithm.PARTICLE_FILTER,
}


@dataclass
class TrackerConfig:
    """Algorithm selections and parameters for the whole tracking pipeline."""

    clustering_algo: str = "DBSCAN"
    association_algo: str = "GNN"
    tracking_algo: str = "EKF"
    motion_model: str = "CV"
    target_type: str = "DRONE"
    profile: str = "SHORT_RANGE"
    radar: RadarConfig = field(default_factory=RadarConfig)
    tracker_profile: TrackerProfile = field(default_factory=TrackerProfile)
    clustering_params: ClusteringParams = field(default_factory=ClusteringParams)
    association_params: AssociationParams = field(default_factory=AssociationParams)
    tracking_params: TrackingParams = field(default_factory=TrackingParams)
    track_management: TrackManagementParams = field(
        default_factory=TrackManagementParams
    )

    def __post_init__(self) -> None:
        self.resolve_profile()

    def resolve_profile(self) -> None:
        """Load the named profile and copy its track-management settings."""
        self.tracker_profile = TrackerProfile.from_string(self.profile)
        tm = self.track_management
        tm.min_hits_to_confirm = self.tracker_profile.confirm_hits
        tm.confirm_window = self.tracker_profile.confirm_window
        tm.max_consecutive_misses = self.tracker_profile.max_misses
        tm.max_extrapolation_time = self.tracker_profile.max_extrapolation_time

    def clustering_enum(self) -> ClusteringAlgorithm:
        if self.clustering_algo in ("CONTINUOUS_RANGE", "RANGE_BINS"):
            return ClusteringAlgorithm.CONTINUOUS_RANGE
        return ClusteringAlgorithm.DBSCAN

    def association_enum(self) -> AssociationAlgorithm:
        if self.association_algo == "JPDA":
            return AssociationAlgorithm.JPDA
        if self.association_algo == "MHT":
            return AssociationAlgorithm.MHT
        return AssociationAlgorithm.GNN

    def tracking_enum(self) -> TrackingAlgorithm:
        return _TRACKING_ALGORITHMS.get(self.tracking_algo, TrackingAlgorithm.EKF)

    def motion_model_enum(self) -> MotionModel:
        return motion_model_from_string(self.motion_model)

    def target_type_enum(self) -> TargetType:
        return target_type_from_string(self.target_type)

    def is_valid(self) -> bool:
        return (
            self.radar.is_valid()
            and self.track_management.max_tracks > 0
            and self.track_management.min_hits_to_confirm > 0
        )

    @classmethod
    def short_range_cuas(cls) -> TrackerConfig:
        """Short-range FMCW / counter-UAS preset."""
        return cls(
            clustering_algo="DBSCAN",
            association_algo="GNN",
            tracking_algo="EKF",
            motion_model="CA",
            target_type="DRONE",
            profile="SHORT_RANGE",
            radar=RadarConfig.short_range_fmcw(),
        )

    @classmethod
    def medium_range_surveillance(cls) -> TrackerConfig:
        """Medium-range surveillance preset."""
        cfg = cls(
            clustering_algo="CONTINUOUS_RANGE",
            association_algo="JPDA",
            tracking_algo="IMM",
            motion_model="IMM",
            target_type="AIRCRAFT",
            profile="MEDIUM_RANGE",
            radar=RadarConfig.medium_range_surveillance(),
        )
        cfg.tracking_params.imm_models = ["CV", "CA"]
        return cfg

    @classmethod
    def long_range_crossing(cls) -> TrackerConfig:
        """Long-range preset for crossing targets."""
        cfg = cls(
            clustering_algo="CONTINUOUS_RANGE",
            association_algo="MHT",
            tracking_algo="IMM",
            motion_model="IMM",
            target_type="AIRCRAFT",
            profile="LONG_RANGE",
            radar=RadarConfig.long_range(),
        )
        cfg.tracking_params.imm_models = ["CV", "CA", "CT"]
        cfg.tracking_params.imm_initial_probs = [0.4, 0.3, 0.3]
        return cfg

    @classmethod
    def clutter_heavy_birds(cls) -> TrackerConfig:
        """Clutter-heavy preset for bird detection."""
        radar = RadarConfig.medium_range_surveillance()
        radar.p_d = 0.7
        cfg = cls(
            clustering_algo="DBSCAN",
            association_algo="JPDA",
            tracking_algo="PARTICLE_FILTER",
            motion_model="CV",
            target_type="BIRD",
            profile="CLUTTER_HEAVY",
            radar=radar,
        )
        cfg.tracking_params.pf_num_particles = 200
        return cfg