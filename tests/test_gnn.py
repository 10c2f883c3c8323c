import math

import pytest

from radartrack.config import TrackerConfig
from radartrack.detection import Detection
from radartrack.gnn import INF_COST, GNNAssociation
from radartrack.track import Track
from radartrack.track_state import TrackState


def make_track(x, y, z=0.0, **kwargs):
    track = Track()
    track.add_to_history(TrackState(x=x, y=y, z=z, **kwargs))
    return track


def det(x, y, z=0.0):
    return Detection.from_cartesian(x, y, z, 0)


def check_consistent(result, n_tracks, n_dets):
    assert len(result.track_to_detection) == n_tracks
    assert len(result.detection_to_track) == n_dets
    for t, d in enumerate(result.track_to_detection):
        if d >= 0:
            assert result.detection_to_track[d] == t
    for d in result.unassociated_detections:
        assert result.detection_to_track[d] == -1


def test_gating_distance_euclidean():
    gnn = GNNAssociation(gate_threshold=6.0)
    assert gnn.gating_distance(make_track(0, 0), det(3, 4)) == pytest.approx(5.0)


def test_passes_gate_returns_distance():
    gnn = GNNAssociation(gate_threshold=4.0)
    passed, distance = gnn.passes_gate(make_track(0, 0), det(3, 4))
    assert passed is False
    assert distance == pytest.approx(gnn.gating_distance(make_track(0, 0), det(3, 4)))


def test_gating_distance_ignores_missing_z():
    gnn = GNNAssociation()
    with_z = gnn.gating_distance(make_track(0, 0, 100.0), det(3, 4, 0.0))
    no_z = gnn.gating_distance(make_track(0, 0, 100.0), det(3, 4, float("nan")))
    assert no_z < with_z


def test_no_tracks_all_detections_unassociated():
    result = GNNAssociation().associate([], [det(0, 0), det(1, 1)])
    assert result.unassociated_detections == [0, 1]
    assert result.detection_to_track == [-1, -1]


def test_no_detections_active_tracks_unassociated():
    inactive = make_track(5, 5)
    inactive.mark_deleted()
    result = GNNAssociation().associate([make_track(0, 0), inactive], [])
    assert result.unassociated_tracks == [0]
    assert result.track_to_detection == [-1, -1]


def test_crossing_assignment_picks_nearest():
    tracks = [make_track(0, 0), make_track(50, 0)]
    dets = [det(51, 1), det(1, 1)]
    result = GNNAssociation().associate(tracks, dets)
    assert result.track_to_detection == [1, 0]
    assert result.detection_to_track == [1, 0]
    assert result.unassociated_detections == []
    assert len(result.association_costs) == 2
    check_consistent(result, 2, 2)


def test_euclidean_cost_is_distance():
    result = GNNAssociation().associate([make_track(0, 0)], [det(3, 4)])
    assert result.association_costs == [pytest.approx(5.0)]


def test_max_distance_prevents_assignment():
    gnn = GNNAssociation(max_distance=10.0)
    result = gnn.associate([make_track(0, 0)], [det(30, 0)])
    assert result.track_to_detection == [-1]
    assert result.unassociated_tracks == [0]
    assert result.unassociated_detections == [0]


def test_inactive_track_not_assigned_nor_reported():
    track = make_track(0, 0)
    track.mark_deleted()
    result = GNNAssociation().associate([track], [det(1, 0)])
    assert result.track_to_detection == [-1]
    assert result.unassociated_tracks == []
    assert result.unassociated_detections == [0]


def test_more_detections_than_tracks():
    tracks = [make_track(0, 0)]
    dets = [det(40, 0), det(2, 0), det(80, 0)]
    result = GNNAssociation().associate(tracks, dets)
    assert result.track_to_detection == [1]
    assert sorted(result.unassociated_detections) == [0, 2]
    check_consistent(result, 1, 3)


def test_from_config_uses_profile_and_params():
    config = TrackerConfig.short_range_cuas()
    gnn = GNNAssociation.from_config(config)
    assert gnn.gate_threshold == config.tracker_profile.gate_chi_sq
    assert gnn.max_distance == config.association_params.max_association_distance
    assert gnn.use_statistical_distance is True


def test_statistical_gate():
    gnn = GNNAssociation.from_config(TrackerConfig())
    near = gnn.associate([make_track(0, 0)], [det(10, 0)])
    far = gnn.associate([make_track(0, 0)], [det(45, 0)])
    assert near.track_to_detection == [0]
    assert near.association_costs[0] <= gnn.gate_threshold
    assert far.track_to_detection == [-1]


def test_statistical_cost_uses_track_sigma():
    gnn = GNNAssociation(gate_threshold=100.0, use_statistical_distance=True)
    loose = gnn.build_cost_matrix([make_track(0, 0, sigma_x=40.0)], [det(10, 0)])
    tight = gnn.build_cost_matrix([make_track(0, 0, sigma_x=2.0)], [det(10, 0)])
    assert loose[0][0] < tight[0][0]


def test_cost_matrix_marks_inactive_rows():
    track = make_track(0, 0)
    track.mark_deleted()
    matrix = GNNAssociation().build_cost_matrix([track, make_track(0, 0)], [det(1, 0)])
    assert matrix[0] == [INF_COST]
    assert matrix[1][0] == pytest.approx(1.0)


def test_clone_is_independent():
    gnn = GNNAssociation(gate_threshold=3.0, max_distance=7.0, use_statistical_distance=True)
    copy = gnn.clone()
    assert copy == gnn
    copy.max_distance = 1.0
    assert gnn.max_distance == 7.0
    assert gnn.name() == "GNN"


def test_costs_are_finite_for_assignments():
    tracks = [make_track(i * 20.0, 0) for i in range(4)]
    dets = [det(i * 20.0 + 1, 1) for i in range(4)]
    result = GNNAssociation().associate(tracks, dets)
    assert all(math.isfinite(c) and c < INF_COST for c in result.association_costs)
    assert result.track_to_detection == [0, 1, 2, 3]