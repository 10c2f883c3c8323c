"""Tracked targets and the outcome of data association."""

from __future__ import annotations

import copy
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Protocol

from radartrack.enums import TargetType, TrackStatus
from radartrack.track_state import TrackState

_STATUS_LABELS = {
    TrackStatus.TENTATIVE: "TENT",
    TrackStatus.CONFIRMED: "CONF",
    TrackStatus.COASTING: "COAST",
    TrackStatus.DELETED: "DEL",
}


class TrackerModel(Protocol):
    """Filter that owns a track's state estimate."""

    def state(self) -> TrackState: ...


@dataclass
class Track:
    """A tracked target with its filter and management counters."""

    id: int = -1
    model: Any = None

    age: int = 0
    hits: int = 0
    misses: int = 0
    total_misses: int = 0

    status: TrackStatus = TrackStatus.TENTATIVE

    confidence: float = 0.3
    quality: float = 0.5

    target_type: TargetType = TargetType.UNKNOWN
    classification_confidence: float = 0.0

    creation_time: int = 0
    last_update_time: int = 0
    last_prediction_time: int = 0

    last_detection_id: int = -1
    last_cluster_id: int = -1

    history: deque[TrackState] = field(default_factory=deque)
    max_history_size: int = 100

    update_history: deque[bool] = field(default_factory=deque)
    confirm_window_size: int = 5
    confirm_threshold: int = 3

    def _push_update(self, hit: bool) -> None:
        self.update_history.append(hit)
        while len(self.update_history) > self.confirm_window_size:
            self.update_history.popleft()

    def record_hit(self, confidence_gain: float = 0.1) -> None:
        """Count a successful update and raise confidence."""
        self.age += 1
        self.hits += 1
        self.misses = 0
        self._push_update(True)
        self.confidence = min(1.0, self.confidence + confidence_gain)
        self.update_confirmation_status()

    def record_miss(self, confidence_loss: float = 0.1) -> None:
        """Count a scan without update; a confirmed track starts coasting."""
        self.age += 1
        self.misses += 1
        self.total_misses += 1
        self._push_update(False)
        self.confidence = max(0.0, self.confidence - confidence_loss)
        if self.status is TrackStatus.CONFIRMED:
            self.status = TrackStatus.COASTING
        self.update_confirmation_status()

    def update_confirmation_status(self) -> None:
        """Apply M-of-N confirmation logic to the recent update history."""
        if self.status is TrackStatus.DELETED:
            return
        recent_hits = sum(self.update_history)
        if (
            recent_hits >= self.confirm_threshold
            and len(self.update_history) >= self.confirm_threshold
        ):
            if self.status is TrackStatus.TENTATIVE:
                self.status = TrackStatus.CONFIRMED
            elif self.status is TrackStatus.COASTING and self.misses == 0:
                self.status = TrackStatus.CONFIRMED

    def should_delete(self, max_misses: int, min_confidence: float) -> bool:
        return (
            self.status is TrackStatus.DELETED
            or self.misses > max_misses
            or self.confidence < min_confidence
            or (self.status is TrackStatus.TENTATIVE and self.misses > 1)
        )

    def mark_deleted(self) -> None:
        self.status = TrackStatus.DELETED

    def is_confirmed(self) -> bool:
        return self.status in (TrackStatus.CONFIRMED, TrackStatus.COASTING)

    def is_active(self) -> bool:
        return self.status is not TrackStatus.DELETED

    def time_since_update(self, current_time: int) -> float:
        """Seconds between the last update and a microsecond timestamp."""
        return (current_time - self.last_update_time) / 1e6

    def add_to_history(self, state: TrackState) -> None:
        self.history.append(state)
        while len(self.history) > self.max_history_size:
            self.history.popleft()

    def state(self) -> TrackState:
        """Current estimate from the model, else the latest history entry, else a zero state."""
        if self.model is not None:
            return self.model.state()
        if self.history:
            return copy.deepcopy(self.history[-1])
        return TrackState()

    def summary(self) -> str:
        label = _STATUS_LABELS[self.status]
        return (
            f"Track {self.id} [{label}] age={self.age} hits={self.hits} "
            f"miss={self.misses} conf={int(self.confidence * 100)}%"
        )


@dataclass
class AssociationResult:
    """Mapping between tracks and detections produced by an associator."""

    track_to_detection: list[int] = field(default_factory=list)
    detection_to_track: list[int] = field(default_factory=list)
    unassociated_detections: list[int] = field(default_factory=list)
    unassociated_tracks: list[int] = field(default_factory=list)
    association_probabilities: list[list[float]] = field(default_factory=list)
    association_costs: list[float] = field(default_factory=list)

    def has_association(self, track_index: int) -> bool:
        return self.detection_for_track(track_index) >= 0

    def detection_for_track(self, track_index: int) -> int:
        if 0 <= track_index < len(self.track_to_detection):
            return self.track_to_detection[track_index]
        return -1

    def track_for_detection(self, detection_index: int) -> int:
        if 0 <= detection_index < len(self.detection_to_track):
            return self.detection_to_track[detection_index]
        return -1