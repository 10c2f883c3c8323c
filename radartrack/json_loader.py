"""Loading a tracker configuration from JSON text or a JSON file."""

from __future__ import annotations

import json
import os
from typing import Any

from radartrack.config import TrackerConfig


class ConfigError(ValueError):
    """Raised when a configuration document cannot be read or understood."""


def _reject_constant(name: str) -> Any:
    raise ConfigError(f"JSON parse error: unexpected token {name}")


def _parse(text: str) -> Any:
    """Decode the first JSON value in the text; trailing content is ignored."""
    decoder = json.JSONDecoder(parse_constant=_reject_constant)
    try:
        value, _ = decoder.raw_decode(text.lstrip())
    except json.JSONDecodeError as exc:
        raise ConfigError(f"JSON parse error: {exc.msg}") from exc
    return value


def _get(obj: Any, key: str) -> Any:
    return obj.get(key) if isinstance(obj, dict) else None


def _number(obj: Any, key: str, default: float) -> float:
    value = _get(obj, key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    return float(value)


def _integer(obj: Any, key: str, default: int) -> int:
    return int(_number(obj, key, float(default)))


def _boolean(obj: Any, key: str, default: bool) -> bool:
    value = _get(obj, key)
    return value if isinstance(value, bool) else default


def _string(obj: Any, key: str, default: str) -> str:
    value = _get(obj, key)
    return value if isinstance(value, str) else default


def _object_section(root: dict[str, Any], key: str) -> dict[str, Any] | None:
    section = root.get(key)
    return section if isinstance(section, dict) else None


def _to_config(root: Any) -> TrackerConfig:
    if not isinstance(root, dict):
        raise ConfigError("JSON root must be an object")

    config = TrackerConfig()

    radar = _object_section(root, "radar")
    if radar is not None:
        rc = config.radar
        rc.is_3d = _boolean(radar, "is3D", True)
        rc.has_doppler = _boolean(radar, "hasDoppler", True)
        rc.update_time = _number(radar, "updateTime", 0.1)
        if "accuracy" in radar:
            acc = radar["accuracy"]
            rc.range_std = _number(acc, "range", 1.0)
            rc.azimuth_std = _number(acc, "azimuth", 0.01)
            rc.elevation_std = _number(acc, "elevation", 0.02)
            rc.doppler_std = _number(acc, "doppler", 0.5)
        if "coverage" in radar:
            cov = radar["coverage"]
            rc.max_range = _number(cov, "maxRange", 50000.0)
            rc.min_range = _number(cov, "minRange", 50.0)
        rc.p_d = _number(radar, "pD", 0.9)

    if "targetType" in root:
        config.target_type = _string(root, "targetType", "DRONE")

    clustering = _object_section(root, "clustering")
    if clustering is not None:
        config.clustering_algo = _string(clustering, "algorithm", "DBSCAN")
        if "epsilon" in clustering:
            config.clustering_params.epsilon = _number(clustering, "epsilon", 10.0)
        if "minPoints" in clustering:
            config.clustering_params.min_points = _integer(clustering, "minPoints", 2)

    association = _object_section(root, "association")
    if association is not None:
        config.association_algo = _string(association, "algorithm", "GNN")
        params = config.association_params
        if "maxDistance" in association:
            params.max_association_distance = _number(association, "maxDistance", 100.0)
        if "pD" in association:
            params.jpda_pd = _number(association, "pD", 0.9)

    tracking = _object_section(root, "tracking")
    if tracking is not None:
        config.tracking_algo = _string(tracking, "algorithm", "EKF")
        config.motion_model = _string(tracking, "motionModel", "CV")
        config.profile = _string(tracking, "profile", "SHORT_RANGE")
        params = config.tracking_params
        if "ukfAlpha" in tracking:
            params.ukf_alpha = _number(tracking, "ukfAlpha", 0.001)
        if "numParticles" in tracking:
            params.pf_num_particles = _integer(tracking, "numParticles", 500)
        models = tracking.get("immModels")
        if isinstance(models, list):
            params.imm_models = [m for m in models if isinstance(m, str)]

    management = _object_section(root, "trackManagement")
    if management is not None:
        tm = config.track_management
        tm.min_hits_to_confirm = _integer(management, "minHits", 3)
        tm.confirm_window = _integer(management, "confirmWindow", 5)
        tm.max_consecutive_misses = _integer(management, "maxMisses", 5)
        tm.max_tracks = _integer(management, "maxTracks", 500)

    config.resolve_profile()
    return config


def load_from_string(text: str) -> TrackerConfig:
    """Build a configuration from JSON text; raises ConfigError on bad input."""
    return _to_config(_parse(text))


def load_from_file(path: str | os.PathLike[str]) -> TrackerConfig:
    """Build a configuration from a JSON file; raises ConfigError on failure."""
    try:
        with open(path, encoding="utf-8") as handle:
            text = handle.read()
    except OSError as exc:
        raise ConfigError(f"Could not open file: {os.fspath(path)}") from exc
    return load_from_string(text)