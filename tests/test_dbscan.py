import statistics

from radartrack.cluster import Cluster
from radartrack.config import TrackerConfig
from radartrack.dbscan import DBSCANClustering
from radartrack.detection import Detection
from radartrack.radar_config import RadarConfig


def _det(x, y, z=0.0, doppler=float("nan")):
    det = Detection.from_cartesian(x, y, z, 0)
    det.doppler = doppler
    return det


def _index_sets(clusters):
    return [set(c.detection_indices) for c in clusters]


def test_empty_input_gives_no_clusters():
    assert DBSCANClustering().cluster([]) == []


def test_two_groups_and_noise():
    dets = [
        _det(0, 0), _det(1, 0), _det(0, 1),
        _det(100, 100), _det(101, 100), _det(100, 101),
        _det(500, 500),
    ]
    clusters = DBSCANClustering(epsilon=10.0, min_points=2).cluster(dets)
    assert _index_sets(clusters) == [{0, 1, 2}, {3, 4, 5}]
    assert [c.id for c in clusters] == list(range(len(clusters)))
    assert all(6 not in c.detection_indices for c in clusters)


def test_centroid_and_extent_are_computed():
    dets = [_det(0, 0), _det(2, 0), _det(0, 4)]
    (cluster,) = DBSCANClustering(epsilon=10.0, min_points=2).cluster(dets)
    assert isinstance(cluster, Cluster)
    assert cluster.centroid_x == statistics.mean(d.x for d in dets)
    assert cluster.centroid_y == statistics.mean(d.y for d in dets)
    assert cluster.extent_x == max(d.x for d in dets) - min(d.x for d in dets)
    assert cluster.extent_y == max(d.y for d in dets) - min(d.y for d in dets)


def test_neighbour_count_excludes_the_point_itself():
    dets = [_det(0, 0), _det(1, 0)]
    assert DBSCANClustering(epsilon=10.0, min_points=2).cluster(dets) == []
    clusters = DBSCANClustering(epsilon=10.0, min_points=1).cluster(dets)
    assert _index_sets(clusters) == [{0, 1}]


def test_noise_point_is_claimed_as_border_point():
    dets = [_det(3, 0), _det(8, 0), _det(9, 0), _det(10, 0)]
    clusters = DBSCANClustering(epsilon=5.0, min_points=2).cluster(dets)
    assert _index_sets(clusters) == [set(range(len(dets)))]


def test_use_3d_controls_height_separation():
    dets = [_det(0, 0, 0), _det(0, 0, 50), _det(0, 0, 100)]
    flat = DBSCANClustering(epsilon=10.0, min_points=2, use_3d=False)
    assert _index_sets(flat.cluster(dets)) == [{0, 1, 2}]
    spatial = DBSCANClustering(epsilon=10.0, min_points=2, use_3d=True)
    assert spatial.cluster(dets) == []


def test_missing_height_falls_back_to_plane_distance():
    dets = [
        Detection(x=0.0, y=0.0, z=0.0),
        Detection(x=1.0, y=0.0),
        Detection(x=0.0, y=1.0, z=500.0),
    ]
    clusters = DBSCANClustering(epsilon=10.0, min_points=1).cluster(dets)
    assert {0, 1} <= set().union(*_index_sets(clusters))
    assert any({0, 1} <= s for s in _index_sets(clusters))
    assert all(not {0, 2} <= s for s in _index_sets(clusters))


def test_doppler_weighting_separates_points():
    dets = [_det(0, 0, doppler=0.0), _det(0, 0, doppler=20.0), _det(0, 0, doppler=40.0)]
    weighted = DBSCANClustering(epsilon=10.0, min_points=2, use_doppler=True)
    assert weighted.cluster(dets) == []
    unweighted = DBSCANClustering(
        epsilon=10.0, min_points=2, use_doppler=True, doppler_weight=0.0
    )
    assert _index_sets(unweighted.cluster(dets)) == [{0, 1, 2}]
    ignored = DBSCANClustering(epsilon=10.0, min_points=2, use_doppler=False)
    assert _index_sets(ignored.cluster(dets)) == [{0, 1, 2}]


def test_large_input_uses_on_demand_distances():
    dets = [_det(float(i), 0.0) for i in range(501)]
    clusters = DBSCANClustering(epsilon=1.5, min_points=2).cluster(dets)
    assert len(clusters) == 1
    assert sorted(clusters[0].detection_indices) == list(range(len(dets)))


def test_repeated_calls_are_independent():
    algo = DBSCANClustering(epsilon=10.0, min_points=2)
    first = [_det(0, 0), _det(1, 0), _det(2, 0)]
    second = [_det(0, 0), _det(50, 0), _det(100, 0)]
    assert _index_sets(algo.cluster(first)) == [{0, 1, 2}]
    assert algo.cluster(second) == []
    assert _index_sets(algo.cluster(first)) == [{0, 1, 2}]


def test_clone_is_independent_copy():
    original = DBSCANClustering(epsilon=7.0, min_points=3, use_3d=False, doppler_weight=0.5)
    copy = original.clone()
    assert copy == original
    assert copy is not original
    copy.epsilon = 1.0
    assert original.epsilon == 7.0


def test_from_config_reads_parameters():
    config = TrackerConfig()
    config.clustering_params.epsilon = 3.5
    config.clustering_params.min_points = 4
    algo = DBSCANClustering.from_config(config)
    assert algo.epsilon == config.clustering_params.epsilon
    assert algo.min_points == config.clustering_params.min_points
    assert algo.use_3d is True
    assert algo.use_doppler is True


def test_from_config_respects_radar_capabilities():
    config = TrackerConfig(radar=RadarConfig.radar_2d())
    algo = DBSCANClustering.from_config(config)
    assert algo.use_3d is False
    assert algo.use_doppler is False


def test_name():
    assert DBSCANClustering().name() == "DBSCAN"