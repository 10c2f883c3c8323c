import math

import pytest

from radartrack.detection import Detection


def test_defaults():
    det = Detection()
    assert det.cluster_id == -1
    assert det.quality == 1.0
    assert not det.has_doppler()
    assert not det.has_valid_cartesian()
    assert not det.has_valid_polar()
    assert not det.is_3d()


def test_cartesian_polar_round_trip():
    det = Detection.from_cartesian(120.0, -45.0, 30.0, 1000)
    assert det.has_valid_polar()
    back = Detection.from_polar(det.range, det.azimuth, det.elevation, det.timestamp)
    assert back.x == pytest.approx(det.x)
    assert back.y == pytest.approx(det.y)
    assert back.z == pytest.approx(det.z)
    assert back.timestamp == 1000


def test_polar_without_elevation_stays_2d():
    det = Detection.from_polar(200.0, 0.7, float("nan"), 5)
    assert math.isnan(det.z)
    assert math.hypot(det.x, det.y) == pytest.approx(200.0)
    assert not det.is_3d()
    assert len(det.position()) == 2


def test_cartesian_without_z_has_no_elevation():
    det = Detection.from_cartesian(3.0, 4.0, float("nan"), 0)
    assert det.range == pytest.approx(5.0)
    assert math.isnan(det.elevation)


def test_origin_has_no_elevation():
    det = Detection.from_cartesian(0.0, 0.0, 0.0, 0)
    assert det.range == 0.0
    assert math.isnan(det.elevation)


def test_compute_polar_noop_without_cartesian():
    det = Detection(range=50.0, azimuth=0.1)
    det.compute_polar_from_cartesian()
    assert det.range == 50.0 and det.azimuth == 0.1


def test_distance_symmetric_and_zero_to_self():
    a = Detection.from_cartesian(1.0, 2.0, 3.0, 0)
    b = Detection.from_cartesian(-4.0, 7.0, 0.5, 0)
    assert a.distance_to(b) == pytest.approx(b.distance_to(a))
    assert a.distance_to(a) == 0.0
    assert a.distance_to(b) > 0.0


def test_distance_ignores_z_when_one_missing():
    a = Detection(x=0.0, y=0.0, z=100.0)
    b = Detection(x=0.0, y=2.0)
    assert a.distance_to(b) == pytest.approx(2.0)


def test_distance_invalid_is_nan():
    result = Detection(x=1.0, y=1.0).distance_to(Detection())
    assert str(result) == "nan"
    assert math.isnan(result)


def test_position_3d_from_elevation_only():
    det = Detection(x=1.0, y=2.0, elevation=0.1)
    assert det.position() == [1.0, 2.0, 0.0]