"""Serialisation of a tracker configuration to JSON text."""

from __future__ import annotations

import json
import os

from radartrack.config import TrackerConfig

_ESCAPES = {'"': '\\"', "\\": "\\\\", "\n": "\\n", "\r": "\\r", "\t": "\\t"}


def _escape(text: str) -> str:
    return "".join(_ESCAPES.get(ch, ch) for ch in text)


def _num(value: float) -> str:
    return f"{value:.6f}"


def _quoted(value: str) -> str:
    return f'"{_escape(value)}"'


def save_to_string(config: TrackerConfig, pretty: bool = True) -> str:
    """Render the configuration as JSON, indented by two spaces when pretty."""
    radar = config.radar
    tracking = config.tracking_params
    tm = config.track_management
    prof = config.tracker_profile

    lines: list[tuple[int, str]] = [
        (0, "{"),
        (1, '"radar": {'),
        (2, f'"is3D": {json.dumps(bool(radar.is_3d))},'),
        (2, f'"hasDoppler": {json.dumps(bool(radar.has_doppler))},'),
        (2, f'"updateTime": {_num(radar.update_time)},'),
        (2, '"accuracy": {'),
        (3, f'"range": {_num(radar.range_std)},'),
        (3, f'"azimuth": {_num(radar.azimuth_std)},'),
        (3, f'"elevation": {_num(radar.elevation_std)},'),
        (3, f'"doppler": {_num(radar.doppler_std)}'),
        (2, "},"),
        (2, '"coverage": {'),
        (3, f'"maxRange": {_num(radar.max_range)},'),
        (3, f'"minRange": {_num(radar.min_range)}'),
        (2, "},"),
        (2, f'"pD": {_num(radar.p_d)},'),
        (2, f'"radarType": {_quoted(radar.radar_type)}'),
        (1, "},"),
        (1, f'"targetType": {_quoted(config.target_type)},'),
        (1, '"clustering": {'),
        (2, f'"algorithm": {_quoted(config.clustering_algo)},'),
        (2, f'"epsilon": {_num(config.clustering_params.epsilon)},'),
        (2, f'"minPoints": {config.clustering_params.min_points}'),
        (1, "},"),
        (1, '"association": {'),
        (2, f'"algorithm": {_quoted(config.association_algo)},'),
        (2, f'"maxDistance": {_num(config.association_params.max_association_distance)}'),
        (1, "},"),
        (1, '"tracking": {'),
        (2, f'"algorithm": {_quoted(config.tracking_algo)},'),
        (2, f'"motionModel": {_quoted(config.motion_model)},'),
        (2, f'"profile": {_quoted(config.profile)},'),
    ]
    if tracking.imm_models:
        models = ", ".join(_quoted(m) for m in tracking.imm_models)
        lines.append((2, f'"immModels": [{models}],'))
    lines += [
        (2, f'"ukfAlpha": {_num(tracking.ukf_alpha)},'),
        (2, f'"ukfBeta": {_num(tracking.ukf_beta)},'),
        (2, f'"numParticles": {tracking.pf_num_particles}'),
        (1, "},"),
        (1, '"trackManagement": {'),
        (2, f'"minHits": {tm.min_hits_to_confirm},'),
        (2, f'"confirmWindow": {tm.confirm_window},'),
        (2, f'"maxMisses": {tm.max_consecutive_misses},'),
        (2, f'"maxTracks": {tm.max_tracks}'),
        (1, "},"),
        (1, '"profileParams": {'),
        (2, f'"qPos": {_num(prof.q_pos)},'),
        (2, f'"qVel": {_num(prof.q_vel)},'),
        (2, f'"qAcc": {_num(prof.q_acc)},'),
        (2, f'"gateChiSq": {_num(prof.gate_chi_sq)},'),
        (2, f'"confirmHits": {prof.confirm_hits},'),
        (2, f'"maxMisses": {prof.max_misses}'),
        (1, "}"),
        (0, "}"),
    ]

    newline = "\n" if pretty else ""
    return newline.join(("  " * level if pretty else "") + text for level, text in lines)


def save_to_file(config: TrackerConfig, path: str | os.PathLike[str]) -> None:
    """Write the pretty-printed configuration to a file."""
    with open(path, "w", encoding="utf-8") as handle:
        handle.write(save_to_string(config, True))