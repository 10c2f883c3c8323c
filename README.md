# radartrack

Building blocks for multi-target radar tracking. Timestamps are integer
microseconds, angles are radians and distances are metres. A missing value
is NaN (`radartrack.enums.INVALID_VALUE`); `radartrack.enums.is_valid` tells
finite values from NaN and infinity.

## What is in the package

- **Detections and measurements**: `radartrack.detection.Detection` holds a
  Cartesian and/or polar position, Doppler, SNR and RCS. Build one with
  `Detection.from_cartesian(x, y, z, timestamp)` or
  `Detection.from_polar(range_, azimuth, elevation, timestamp)`; the other
  coordinate form is filled in. `radartrack.measurement.Measurement` turns a
  detection into a measurement vector with diagonal variances
  (`Measurement.from_detection`).
- **Track state and tracks**: `radartrack.track_state.TrackState` carries
  position, velocity, acceleration, turn rate and sigmas, and
  `extrapolate(dt)` propagates it under the CV, CA or CT motion model.
  `radartrack.track.Track` keeps hit/miss counters, confidence, an M-of-N
  confirmation window (`record_hit`, `record_miss`, `should_delete`) and a
  bounded state history. `radartrack.track.AssociationResult` is what every
  associator returns.
- **Clustering**: `radartrack.dbscan.DBSCANClustering` and
  `radartrack.continuous_range.ContinuousRangeClustering`, both subclasses of
  `radartrack.cluster.Clustering`. Each returns a list of
  `radartrack.cluster.Cluster` objects holding detection indices, centroid,
  extent, mean Doppler and SNR. `radartrack.clustering_factory` picks one from
  a configuration (`create_clustering`) or by name (`clustering_by_name`,
  case-insensitive; `ValueError` for an unknown name).
- **Data association**: `radartrack.gnn.GNNAssociation` (optimal assignment
  via `scipy.optimize.linear_sum_assignment`), `radartrack.jpda.JPDAAssociation`
  (joint events, marginal probabilities and a hard assignment) and
  `radartrack.mht.MHTAssociation` (hypotheses kept across scans; `reset()`
  clears them). All derive from `radartrack.gnn.DataAssociation`.
  `radartrack.association_factory` picks one from a configuration
  (`create_association`) or by name (`association_by_name`).
- **Configuration**: `radartrack.config.TrackerConfig` gathers algorithm names,
  a `radartrack.radar_config.RadarConfig`, a resolved
  `radartrack.profile.TrackerProfile` and parameter groups for clustering,
  association, tracking and track management.

## Installation

```
pip install .
```

## Example

```python
from radartrack.association_factory import create_association
from radartrack.clustering_factory import create_clustering
from radartrack.config import TrackerConfig
from radartrack.detection import Detection
from radartrack.json_loader import load_from_string
from radartrack.json_saver import save_to_string

config = TrackerConfig.short_range_cuas()

detections = [
    Detection.from_cartesian(100.0, 100.0, 50.0, 1_000_000),
    Detection.from_cartesian(102.0, 101.0, 50.5, 1_000_000),
    Detection.from_cartesian(400.0, -20.0, 80.0, 1_000_000),
]

clustering = create_clustering(config)          # DBSCAN for this preset
for cluster in clustering.cluster(detections):
    print(cluster.id, len(cluster), cluster.centroid_x, cluster.centroid_y)

association = create_association(config)        # GNN for this preset
result = association.associate([], detections)
print(result.unassociated_detections)           # [0, 1, 2]

text = save_to_string(config, True)
restored = load_from_string(text)
print(restored.clustering_algo, restored.association_algo, restored.tracking_algo)
```

## Presets

| Preset | Clustering | Association | Tracking |
| --- | --- | --- | --- |
| `TrackerConfig.short_range_cuas()` | DBSCAN | GNN | EKF (CA) |
| `TrackerConfig.medium_range_surveillance()` | CONTINUOUS_RANGE | JPDA | IMM |
| `TrackerConfig.long_range_crossing()` | CONTINUOUS_RANGE | MHT | IMM |
| `TrackerConfig.clutter_heavy_birds()` | DBSCAN | JPDA | PARTICLE_FILTER |

The profile name (`SHORT_RANGE`, `MEDIUM_RANGE`, `LONG_RANGE`,
`CLUTTER_HEAVY`; anything else means `SHORT_RANGE`) selects gating, process
noise, confidence and track management values. Call
`TrackerConfig.resolve_profile()` after changing `profile`; it also copies the
profile's confirmation and miss limits into `track_management`.

## JSON configuration

`radartrack.json_saver.save_to_string(config, pretty)` and `save_to_file`
write the radar, clustering, association, tracking, track management and
profile sections. `radartrack.json_loader.load_from_string` and
`load_from_file` read them back into a `TrackerConfig` and raise
`radartrack.json_loader.ConfigError` for text that is not JSON, a root that
is not an object, or a file that cannot be opened. Keys that are absent or of
the wrong type take their defaults.

Not every saved value is read back: the radar type, `ukfBeta` and the
`profileParams` section are ignored on load, and the profile values are
derived again from the profile name. Track management limits read from the
file are then replaced by those of the profile.

## What the package does not do

- It has no filters. `tracking_algo`, `motion_model` and the IMM, UKF and
  particle filter parameters are configuration only. `Track.state()` asks the
  track's `model` for its state if one is attached (any object with a
  `state()` method); otherwise it returns the latest history entry or a zero
  state.
- It has no engine that runs clustering, association, track initiation and
  deletion scan by scan; those steps are separate pieces for the caller to
  combine.
- It has no command-line program.

## Tests

```
pip install .[test]
pytest
```