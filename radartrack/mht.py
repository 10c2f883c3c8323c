"""Multiple Hypothesis Tracking association."""

from __future__ import annotations

import math
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field, replace

from radartrack.config import TrackerConfig
from radartrack.detection import Detection
from radartrack.enums import is_valid
from radartrack.gnn import DataAssociation
from radartrack.track import AssociationResult, Track
from radartrack.track_state import TrackState

_INVALID_LOG_LIKELIHOOD = -1e10


def _log(value: float) -> float:
    if value > 0:
        return math.log(value)
    return -math.inf if value == 0 else math.nan


def _exp(value: float) -> float:
    try:
        return math.exp(value)
    except OverflowError:
        return math.inf


def _normalised_distance(
    state: TrackState, detection: Detection
) -> tuple[float, float, float, float]:
    """Normalised squared distance and the three sigmas it used."""
    dx = detection.x - state.x
    dy = detection.y - state.y
    dz = detection.z - state.z if is_valid(detection.z) and is_valid(state.z) else 0.0
    sigma_x = state.sigma_x if state.sigma_x > 0 else 10.0
    sigma_y = state.sigma_y if state.sigma_y > 0 else 10.0
    sigma_z = state.sigma_z if state.sigma_z > 0 else 20.0
    mahal = (dx / sigma_x) ** 2 + (dy / sigma_y) ** 2 + (dz / sigma_z) ** 2
    return mahal, sigma_x, sigma_y, sigma_z


@dataclass
class MHTHypothesis:
    """One global assignment of detections to tracks."""

    id: int = 0
    probability: float = 0.0
    track_to_detection: list[int] = field(default_factory=list)
    new_track_detections: list[int] = field(default_factory=list)


@dataclass
class MHTAssociation(DataAssociation):
    """Keeps a set of competing assignment hypotheses across scans.

    Each scan every surviving hypothesis is expanded with all gated
    assignments, low-probability children are pruned, the rest normalised, and
    the most probable one decides the reported association.
    """

    n_scan: int = 3
    max_hypotheses: int = 1000
    prune_threshold: float = 0.01
    p_d: float = 0.9
    clutter_rate: float = 1e-6
    new_track_prob: float = 0.1
    gate_threshold: float = 11.34
    _hypotheses: list[MHTHypothesis] = field(
        default_factory=list, init=False, repr=False, compare=False
    )
    _history: list[list[MHTHypothesis]] = field(
        default_factory=list, init=False, repr=False, compare=False
    )
    _next_id: int = field(default=0, init=False, repr=False, compare=False)
    _scan_count: int = field(default=0, init=False, repr=False, compare=False)

    @classmethod
    def from_config(cls, config: TrackerConfig) -> MHTAssociation:
        params = config.association_params
        return cls(
            n_scan=params.mht_n_scan,
            max_hypotheses=params.mht_max_hypotheses,
            prune_threshold=params.mht_prune_threshold,
            p_d=config.radar.p_d,
            clutter_rate=config.radar.clutter_density,
            gate_threshold=config.tracker_profile.gate_chi_sq_3d,
        )

    def clone(self) -> MHTAssociation:
        """Copy of the settings with an empty hypothesis set."""
        return replace(self)

    def name(self) -> str:
        return "MHT"

    def reset(self) -> None:
        """Forget all hypotheses and history."""
        self._hypotheses = []
        self._history = []
        self._next_id = 0
        self._scan_count = 0

    def _take_id(self) -> int:
        ident = self._next_id
        self._next_id += 1
        return ident

    def hypothesis_likelihood(
        self,
        tracks: Sequence[Track],
        detections: Sequence[Detection],
        hypothesis: MHTHypothesis,
    ) -> float:
        """Log-likelihood of a hypothesis; -1e10 if it pairs outside the gate."""
        log_l = 0.0
        for t, d in enumerate(hypothesis.track_to_detection):
            if t >= len(tracks):
                continue
            if d >= 0:
                mahal, sx, sy, sz = _normalised_distance(tracks[t].state(), detections[d])
                if mahal > self.gate_threshold:
                    return _INVALID_LOG_LIKELIHOOD
                log_l += _log(self.p_d) - 0.5 * mahal - _log(sx * sy * sz)
            elif tracks[t].is_active():
                log_l += _log(1.0 - self.p_d)

        n_dets = len(detections)
        used = {
            d
            for d in (*hypothesis.track_to_detection, *hypothesis.new_track_detections)
            if 0 <= d < n_dets
        }
        false_alarms = n_dets - len(used)
        log_l += false_alarms * _log(self.clutter_rate)
        log_l += len(hypothesis.new_track_detections) * _log(self.new_track_prob)
        return log_l

    def _gated_options(
        self, track: Track, detections: Sequence[Detection]
    ) -> list[int]:
        state = track.state()
        gated = [
            d
            for d, det in enumerate(detections)
            if _normalised_distance(state, det)[0] <= self.gate_threshold
        ]
        return [-1, *gated]

    @staticmethod
    def _assignments(options: list[list[int] | None]) -> Iterator[list[int]]:
        """All assignments using each detection at most once; None marks an inactive track."""
        assignment = [-1] * len(options)
        used: set[int] = set()

        def walk(t: int) -> Iterator[list[int]]:
            if t == len(options):
                yield list(assignment)
                return
            choices = options[t]
            if choices is None:
                assignment[t] = -1
                yield from walk(t + 1)
                return
            for d in choices:
                if d >= 0 and d in used:
                    continue
                assignment[t] = d
                if d >= 0:
                    used.add(d)
                yield from walk(t + 1)
                if d >= 0:
                    used.discard(d)

        return walk(0)

    def _generate(self, tracks: Sequence[Track], detections: Sequence[Detection]) -> None:
        if not self._hypotheses:
            self._hypotheses.append(
                MHTHypothesis(
                    id=self._take_id(),
                    probability=1.0,
                    track_to_detection=[-1] * len(tracks),
                )
            )

        options = [
            self._gated_options(track, detections) if track.is_active() else None
            for track in tracks
        ]
        children: list[MHTHypothesis] = []
        for parent in self._hypotheses:
            for assignment in self._assignments(options):
                if len(children) >= self.max_hypotheses:
                    break
                taken = set(assignment)
                child = MHTHypothesis(
                    track_to_detection=assignment,
                    new_track_detections=[
                        d for d in range(len(detections)) if d not in taken
                    ],
                )
                log_l = self.hypothesis_likelihood(tracks, detections, child)
                child.probability = parent.probability * _exp(log_l)
                child.id = self._take_id()
                children.append(child)
        self._hypotheses = children

    def _normalise(self) -> None:
        total = sum(h.probability for h in self._hypotheses)
        if total > 0:
            for hyp in self._hypotheses:
                hyp.probability /= total

    def _prune(self) -> None:
        kept = [h for h in self._hypotheses if not h.probability < self.prune_threshold]
        if len(kept) > self.max_hypotheses:
            kept.sort(key=lambda h: h.probability, reverse=True)
            kept = kept[: max(self.max_hypotheses, 0)]
        if not kept:
            kept = [MHTHypothesis(id=self._take_id(), probability=1.0)]
        self._hypotheses = kept
        self._normalise()

    def _n_scan_prune(self) -> None:
        self._history.append(list(self._hypotheses))
        excess = len(self._history) - max(self.n_scan, 0)
        if excess > 0:
            del self._history[:excess]
        self._scan_count += 1

    def best_hypothesis(self) -> MHTHypothesis:
        """Most probable current hypothesis, or an empty one if there is none."""
        if not self._hypotheses:
            return MHTHypothesis()
        return max(self._hypotheses, key=lambda h: h.probability)

    def associate(
        self, tracks: Sequence[Track], detections: Sequence[Detection]
    ) -> AssociationResult:
        n_tracks, n_dets = len(tracks), len(detections)
        result = AssociationResult(
            track_to_detection=[-1] * n_tracks,
            detection_to_track=[-1] * n_dets,
        )
        if not tracks and not detections:
            return result

        self._generate(tracks, detections)
        self._prune()
        self._n_scan_prune()

        best = self.best_hypothesis()
        for t, track in enumerate(tracks):
            d = best.track_to_detection[t] if t < len(best.track_to_detection) else -1
            if 0 <= d < n_dets:
                result.track_to_detection[t] = d
                result.detection_to_track[d] = t
            elif track.is_active():
                result.unassociated_tracks.append(t)

        result.unassociated_detections = [
            d for d, t in enumerate(result.detection_to_track) if t < 0
        ]
        return result