"""Leg distances between path vertices and the initial timing of each leg."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

from tetherplan.geometry import Vector3

_MIN_DENOMINATOR = 0.000001
_UAV_EXTRA_FRACTION = 0.1
_NO_LEG_TIME = 1000.0


@dataclass(frozen=True)
class VertexDistances:
    """Lengths of the legs of both vehicles' paths and the target leg lengths.

    ``mean_ugv`` spreads the ground path over the vertices that are not held
    fixed at its start. ``mean_uav`` spreads the aerial path over its vertices
    plus ten percent more.
    """

    ugv: tuple[float, ...]
    uav: tuple[float, ...]
    mean_ugv: float
    mean_uav: float


@dataclass(frozen=True)
class TemporalState:
    """Time spent on each leg, the shortest leg time and the mean leg time.

    ``times[i]`` is the time from vertex ``i - 1`` to vertex ``i``; the first
    entry is always zero.
    """

    times: tuple[float, ...]
    min_time: float
    mean_time: float


def _round_half_away(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def _leg_lengths(positions: Sequence[Vector3]) -> tuple[float, ...]:
    return tuple(a.distance_to(b) for a, b in zip(positions, positions[1:]))


def vertex_distances(
    ugv_positions: Sequence[Vector3],
    uav_positions: Sequence[Vector3],
    fixed_initial_ugv: int = 1,
) -> VertexDistances:
    """Leg lengths of both paths and the mean leg length each should aim for."""
    if len(ugv_positions) < 2 or len(uav_positions) < 2:
        raise ValueError("a path needs at least two vertices")

    ugv = _leg_lengths(ugv_positions)
    uav = _leg_lengths(uav_positions)

    denominator = len(ugv_positions) - float(fixed_initial_ugv)
    mean_ugv = 0.0 if denominator <= _MIN_DENOMINATOR else sum(ugv) / denominator

    extra = _round_half_away(len(uav_positions) * _UAV_EXTRA_FRACTION)
    mean_uav = sum(uav) / (len(uav_positions) + extra)
    return VertexDistances(ugv, uav, mean_ugv, mean_uav)


def temporal_state(
    ugv_distances: Sequence[float],
    uav_distances: Sequence[float],
    velocity_ugv: float,
    velocity_uav: float,
) -> TemporalState:
    """Initial time of every leg, set by the vehicle that travels further.

    When the aerial vehicle's leg is the longer one it sets the time at its
    velocity; otherwise the ground vehicle does at its own.
    """
    if len(ugv_distances) != len(uav_distances):
        raise ValueError("both vehicles need the same number of legs")
    if not uav_distances:
        raise ValueError("at least one leg is needed to compute timing")
    if velocity_ugv == 0 or velocity_uav == 0:
        raise ValueError("velocities must not be zero")

    times = [0.0]
    min_time = _NO_LEG_TIME
    for ugv, uav in zip(ugv_distances, uav_distances):
        leg_time = uav / velocity_uav if uav > ugv else ugv / velocity_ugv
        times.append(leg_time)
        min_time = min(min_time, leg_time)

    mean_time = sum(times) / (len(times) - 1.0)
    return TemporalState(tuple(times), min_time, mean_time)