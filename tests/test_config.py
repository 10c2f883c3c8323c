import pytest

from radartrack.config import TrackerConfig
from radartrack.enums import (
    AssociationAlgorithm,
    ClusteringAlgorithm,
    MotionModel,
    ProfileType,
    TargetType,
    TrackingAlgorithm,
)
from radartrack.profile import TrackerProfile


def _assert_management_follows_profile(cfg):
    tm, prof = cfg.track_management, cfg.tracker_profile
    assert tm.min_hits_to_confirm == prof.confirm_hits
    assert tm.confirm_window == prof.confirm_window
    assert tm.max_consecutive_misses == prof.max_misses
    assert tm.max_extrapolation_time == prof.max_extrapolation_time


def test_default_config_resolves_short_range_profile():
    cfg = TrackerConfig()
    assert cfg.tracker_profile == TrackerProfile.short_range()
    _assert_management_follows_profile(cfg)
    assert cfg.is_valid()


def test_resolve_profile_after_changing_name():
    cfg = TrackerConfig()
    cfg.profile = "LONG_RANGE"
    cfg.resolve_profile()
    assert cfg.tracker_profile.profile_type is ProfileType.LONG_RANGE
    _assert_management_follows_profile(cfg)


@pytest.mark.parametrize(
    "name, expected",
    [
        ("DBSCAN", ClusteringAlgorithm.DBSCAN),
        ("CONTINUOUS_RANGE", ClusteringAlgorithm.CONTINUOUS_RANGE),
        ("RANGE_BINS", ClusteringAlgorithm.CONTINUOUS_RANGE),
        ("something", ClusteringAlgorithm.DBSCAN),
    ],
)
def test_clustering_enum(name, expected):
    assert TrackerConfig(clustering_algo=name).clustering_enum() is expected


@pytest.mark.parametrize(
    "name, expected",
    [
        ("GNN", AssociationAlgorithm.GNN),
        ("JPDA", AssociationAlgorithm.JPDA),
        ("MHT", AssociationAlgorithm.MHT),
        ("jpda", AssociationAlgorithm.GNN),
    ],
)
def test_association_enum(name, expected):
    assert TrackerConfig(association_algo=name).association_enum() is expected


@pytest.mark.parametrize(
    "name, expected",
    [
        ("CV", TrackingAlgorithm.CV),
        ("CA", TrackingAlgorithm.CA),
        ("CT", TrackingAlgorithm.CT),
        ("IMM", TrackingAlgorithm.IMM),
        ("UKF", TrackingAlgorithm.UKF),
        ("EKF", TrackingAlgorithm.EKF),
        ("PARTICLE_FILTER", TrackingAlgorithm.PARTICLE_FILTER),
        ("PF", TrackingAlgorithm.PARTICLE_FILTER),
        ("unknown", TrackingAlgorithm.EKF),
    ],
)
def test_tracking_enum(name, expected):
    assert TrackerConfig(tracking_algo=name).tracking_enum() is expected


def test_motion_model_and_target_type_enums():
    cfg = TrackerConfig(motion_model="CT", target_type="BIRD")
    assert cfg.motion_model_enum() is MotionModel.CT
    assert cfg.target_type_enum() is TargetType.BIRD
    other = TrackerConfig(motion_model="??", target_type="??")
    assert other.motion_model_enum() is MotionModel.CV
    assert other.target_type_enum() is TargetType.UNKNOWN


def test_short_range_cuas_preset():
    cfg = TrackerConfig.short_range_cuas()
    assert cfg.motion_model_enum() is MotionModel.CA
    assert cfg.radar.radar_type == "SHORT_RANGE_FMCW"
    assert cfg.tracker_profile.profile_type is ProfileType.SHORT_RANGE
    assert cfg.is_valid()


def test_medium_range_surveillance_preset():
    cfg = TrackerConfig.medium_range_surveillance()
    assert cfg.clustering_enum() is ClusteringAlgorithm.CONTINUOUS_RANGE
    assert cfg.association_enum() is AssociationAlgorithm.JPDA
    assert cfg.tracking_enum() is TrackingAlgorithm.IMM
    assert cfg.tracking_params.imm_models == ["CV", "CA"]
    assert cfg.target_type_enum() is TargetType.AIRCRAFT
    _assert_management_follows_profile(cfg)


def test_long_range_crossing_preset():
    cfg = TrackerConfig.long_range_crossing()
    assert cfg.association_enum() is AssociationAlgorithm.MHT
    assert cfg.tracking_params.imm_models == ["CV", "CA", "CT"]
    assert cfg.tracking_params.imm_initial_probs == [0.4, 0.3, 0.3]
    assert cfg.radar.radar_type == "LONG_RANGE"
    assert cfg.tracker_profile.profile_type is ProfileType.LONG_RANGE


def test_clutter_heavy_birds_preset():
    cfg = TrackerConfig.clutter_heavy_birds()
    assert cfg.tracking_enum() is TrackingAlgorithm.PARTICLE_FILTER
    assert cfg.tracking_params.pf_num_particles == 200
    assert cfg.radar.p_d == 0.7
    assert cfg.radar.radar_type == "MEDIUM_RANGE_SURVEILLANCE"
    assert cfg.target_type_enum() is TargetType.BIRD
    assert cfg.tracker_profile.profile_type is ProfileType.CLUTTER_HEAVY


@pytest.mark.parametrize(
    "factory",
    [
        TrackerConfig.short_range_cuas,
        TrackerConfig.medium_range_surveillance,
        TrackerConfig.long_range_crossing,
        TrackerConfig.clutter_heavy_birds,
    ],
)
def test_presets_are_valid(factory):
    cfg = factory()
    assert cfg.is_valid()
    _assert_management_follows_profile(cfg)


def test_invalid_when_max_tracks_zero():
    cfg = TrackerConfig()
    cfg.track_management.max_tracks = 0
    assert cfg.is_valid() is False


def test_invalid_when_radar_invalid():
    cfg = TrackerConfig()
    cfg.radar.update_time = 0.0
    assert cfg.is_valid() is False


def test_nested_parameters_are_not_shared():
    a = TrackerConfig()
    b = TrackerConfig()
    a.tracking_params.imm_models.append("CT")
    a.clustering_params.epsilon = 1.0
    assert b.tracking_params.imm_models == ["CV", "CA"]
    assert b.clustering_params.epsilon == 10.0