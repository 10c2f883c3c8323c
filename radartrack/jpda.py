"""Joint Probabilistic Data Association."""

from __future__ import annotations

import math
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field, replace
from itertools import islice

from radartrack.config import TrackerConfig
from radartrack.detection import Detection
from radartrack.enums import is_valid
from radartrack.gnn import DataAssociation
from radartrack.track import AssociationResult, Track

_MEASUREMENT_NOISE_STD = 5.0


@dataclass
class JPDAAssociation(DataAssociation):
    """Weighs every feasible joint assignment of detections to tracks.

    Marginal probabilities are kept in ``association_probabilities``: for each
    track, column 0 is the probability of a missed detection and column j + 1
    the probability of detection j. A hard assignment is also produced by
    picking, track by track, the most probable still-unused detection.
    """

    p_d: float = 0.9
    clutter_rate: float = 1e-6
    gate_threshold: float = 9.21
    max_hypotheses: int = 100
    association_probabilities: list[list[float]] = field(
        default_factory=list, init=False, repr=False, compare=False
    )

    @classmethod
    def from_config(cls, config: TrackerConfig) -> JPDAAssociation:
        params = config.association_params
        return cls(
            p_d=params.jpda_pd,
            clutter_rate=params.jpda_clutter_rate,
            gate_threshold=config.tracker_profile.gate_chi_sq,
            max_hypotheses=params.jpda_max_hypotheses,
        )

    def clone(self) -> JPDAAssociation:
        return replace(self)

    def name(self) -> str:
        return "JPDA"

    def likelihood(self, track: Track, detection: Detection) -> float:
        """Gaussian likelihood of the detection given the track; 0 outside the gate."""
        state = track.state()
        dx = detection.x - state.x
        dy = detection.y - state.y
        dz = (
            detection.z - state.z
            if is_valid(detection.z) and is_valid(state.z)
            else 0.0
        )

        noise_sq = _MEASUREMENT_NOISE_STD**2
        var_x = (state.sigma_x if state.sigma_x > 0 else 10.0) ** 2 + noise_sq
        var_y = (state.sigma_y if state.sigma_y > 0 else 10.0) ** 2 + noise_sq
        var_z = (state.sigma_z if state.sigma_z > 0 else 20.0) ** 2 + noise_sq

        mahal = dx * dx / var_x + dy * dy / var_y + dz * dz / var_z
        if mahal > self.gate_threshold:
            return 0.0

        dim = 3 if is_valid(detection.z) else 2
        determinant = var_x * var_y * (var_z if dim == 3 else 1.0)
        norm = (2.0 * math.pi) ** (-dim / 2.0) * determinant**-0.5
        return norm * math.exp(-0.5 * mahal)

    def enumerate_joint_events(
        self, valid_assignments: Sequence[Sequence[bool]]
    ) -> list[list[int]]:
        """Feasible joint events, at most ``max_hypotheses`` of them.

        Each event gives, per track, a detection index or -1 for a miss; no
        detection is used twice within an event.
        """
        rows = [list(row) for row in valid_assignments]
        if not rows or self.max_hypotheses <= 0:
            return []
        n_dets = len(rows[0])
        event = [-1] * len(rows)
        used = [False] * n_dets

        def walk(track_index: int) -> Iterator[list[int]]:
            if track_index == len(rows):
                yield list(event)
                return
            event[track_index] = -1
            yield from walk(track_index + 1)
            for det_index, allowed in enumerate(rows[track_index][:n_dets]):
                if allowed and not used[det_index]:
                    event[track_index] = det_index
                    used[det_index] = True
                    yield from walk(track_index + 1)
                    used[det_index] = False

        return list(islice(walk(0), self.max_hypotheses))

    def joint_event_probability(
        self,
        tracks: Sequence[Track],
        detections: Sequence[Detection],
        event: Sequence[int],
        likelihoods: Sequence[Sequence[float]],
    ) -> float:
        """Unnormalised probability of one joint event."""
        prob = 1.0
        false_alarms = len(detections)
        for track_index, det_index in enumerate(event):
            if det_index >= 0:
                prob *= self.p_d * likelihoods[track_index][det_index]
                false_alarms -= 1
            else:
                prob *= 1.0 - self.p_d
        return prob * self.clutter_rate**false_alarms

    def associate(
        self, tracks: Sequence[Track], detections: Sequence[Detection]
    ) -> AssociationResult:
        n_tracks, n_dets = len(tracks), len(detections)
        result = AssociationResult(
            track_to_detection=[-1] * n_tracks,
            detection_to_track=[-1] * n_dets,
        )

        if not tracks:
            result.unassociated_detections = list(range(n_dets))
            return result

        active = [t for t, track in enumerate(tracks) if track.is_active()]
        if not detections:
            result.unassociated_tracks = active
            return result

        likelihoods = [
            [self.likelihood(track, det) for det in detections]
            if track.is_active()
            else [0.0] * n_dets
            for track in tracks
        ]
        valid = [[value > 0 for value in row] for row in likelihoods]

        events = self.enumerate_joint_events(valid)
        if not events:
            result.unassociated_tracks = active
            result.unassociated_detections = list(range(n_dets))
            return result

        probs = [
            self.joint_event_probability(tracks, detections, event, likelihoods)
            for event in events
        ]
        total = sum(probs)
        if total > 0:
            probs = [p / total for p in probs]

        marginals = [[0.0] * (n_dets + 1) for _ in tracks]
        for event, prob in zip(events, probs):
            for track_index, det_index in enumerate(event):
                # A miss (-1) lands in column 0.
                marginals[track_index][det_index + 1] += prob

        self.association_probabilities = marginals
        result.association_probabilities = [list(row) for row in marginals]

        used: set[int] = set()
        for t in active:
            best_det, best_prob = -1, marginals[t][0]
            for d, prob in enumerate(marginals[t][1:]):
                if d not in used and prob > best_prob:
                    best_det, best_prob = d, prob
            if best_det >= 0:
                result.track_to_detection[t] = best_det
                result.detection_to_track[best_det] = t
                used.add(best_det)
            else:
                result.unassociated_tracks.append(t)

        result.unassociated_detections = [d for d in range(n_dets) if d not in used]
        return result