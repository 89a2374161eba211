# tetherplan

Tools for the joint motion of a ground vehicle (UGV) and an aerial vehicle
(UAV) linked by a tether paid out from a reel on the ground vehicle.

## Modules

- `tetherplan.geometry`: the frozen dataclasses `Vector3` (with
  `distance_to` and `horizontal_distance_to`) and `Quaternion` (with
  `to_rpy` and `Quaternion.from_rpy`), and `reel_point`, which places the
  reel ahead of a ground vehicle pose along its heading.
- `tetherplan.catenary`: `CatenarySolver` fits a hanging cable of a given
  length between two points and samples it, with every coordinate snapped to
  the solver's resolution. `evaluate_catenary` gives the height of a
  catenary at a point; `initial_tether_length` is the straight distance plus
  0.5 %.
- `tetherplan.markers`: plain marker descriptions (`Marker`, `MarkerType`,
  `MarkerAction`, `Color`, `Palette`) built by `catenary_markers`,
  `tf_catenary_markers`, `clear_markers`, `path_point_markers`,
  `path_line_markers` and `endpoint_markers`.
- `tetherplan.path_io`: `load_mission_path` reads a YAML mission file into a
  `MissionPath`; `interpolate_path` splits long legs of a `PathSamples`;
  `mission_document` builds the mission-file structure;
  `export_optimized_path` interpolates samples and appends them to a
  time-stamped YAML file; `build_trajectory` adds velocities and
  accelerations from per-leg times.
- `tetherplan.tether`: `TetherParameters`, `correct_tether_lengths`
  (lengthens tethers that cannot reach the UAV to the distance plus 0.1 %),
  `parabola_tether_length`, `catenary_tether_length` and
  `straight_tether_points`.
- `tetherplan.timing`: `vertex_distances` returns a `VertexDistances` with
  leg lengths and target mean leg lengths; `temporal_state` returns a
  `TemporalState` with the initial time of every leg.
- `tetherplan.planning`: `PlannerConfig` (defaults, and
  `PlannerConfig.from_mapping` which rejects unknown keys and wrongly typed
  values), `initial_states` to build a `PlannerStates` of `StateBlock`s,
  `PlannerStates.fixed_ugv_indices`, and `collect_optimized_path` to read
  states back as an `OptimizedPath`.

## Installation

```
pip install .
```

For the tests:

```
pip install ".[test]"
pytest
```

## Solving a catenary

```python
from tetherplan.catenary import CatenarySolver, initial_tether_length
from tetherplan.geometry import Vector3

start = Vector3(0.2, 2.4, 0.3)
end = Vector3(-5.4, 0.0, 6.0)

length = initial_tether_length(start, end)
solver = CatenarySolver(200, 10, 0.05)
points = solver.solve(start, end, length)
```

When both ends lie on the same vertical line, `solve` returns a straight
vertical run of points. A non-positive length, or a length for which no
catenary parameter is found, raises `ValueError`.

## Command line

```
tetherplan-catenary
```

solves one tether shape and prints its points, one `x y z` per line.
Options: `--start X Y Z` (default `0.2 2.4 0.3`), `--end X Y Z` (default
`-5.4 0.0 6.0`), `--length` (default: the straight distance plus 0.5 %) and
`--max-iterations` (default 200).

## Mission files

Mission files are YAML documents with `marsupial_ugv`, `marsupial_uav` and
`tether` sections holding numbered `posesN` and `lengthN` entries.
`load_mission_path` skips waypoints whose poses are missing or malformed and
gives a waypoint without a tether length the default of 2.0.
`export_optimized_path` writes the same layout into the directory given,
naming the file after the local time (or the `now` passed in).

## What the package does not do

The package prepares and reads back the optimizer's state blocks and
configuration, but it holds no cost functions and runs no trajectory
optimization. It has no obstacle maps, distance grids or collision checks,
and it does not publish or display markers: the markers are plain data for a
viewer of your choice.