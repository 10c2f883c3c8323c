"""Radar multi-target tracking pieces: detections, tracks, clustering, data association and JSON configuration."""

__version__ = "0.1.0"