"""Tether parameters, lengths and straight tether sampling."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

from tetherplan.geometry import Quaternion, Vector3, reel_point

LENGTH_CORRECTION_FACTOR = 1.001
DEFAULT_POINTS_PER_UNIT_LENGTH = 10


@dataclass(frozen=True)
class TetherParameters:
    """Three shape parameters of a tether curve.

    For a catenary ``a`` is the horizontal position of the vertex, ``b`` its
    height and ``c`` the catenary constant. For a parabola ``a`` and ``b`` are
    the quadratic and linear coefficients.
    """

    a: float = 0.0
    b: float = 0.0
    c: float = 0.0


def _round_half_away(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def correct_tether_lengths(
    ugv_positions: Sequence[Vector3],
    uav_positions: Sequence[Vector3],
    ugv_rotations: Sequence[Quaternion],
    lengths: Sequence[float],
    reel_offset: Vector3,
) -> list[float]:
    """Lengthen every tether shorter than the straight reel-to-UAV distance.

    A tether that cannot reach gets that distance plus a tenth of a percent;
    the others are kept as they are.
    """
    count = len(lengths)
    if min(len(ugv_positions), len(uav_positions), len(ugv_rotations)) < count:
        raise ValueError("a vehicle pose is needed for every tether length")
    corrected = []
    for ugv, uav, rotation, length in zip(ugv_positions, uav_positions, ugv_rotations, lengths):
        reel = reel_point(ugv, rotation, reel_offset)
        distance = uav.distance_to(reel)
        corrected.append(distance * LENGTH_CORRECTION_FACTOR if distance > length else float(length))
    return corrected


def _parabola_primitive(a: float, b: float, x: float) -> float:
    slope = b + 2.0 * a * x
    root = math.sqrt(slope * slope + 1.0)
    return math.log(slope + root) / (4.0 * a) + (slope * root) / (4.0 * a)


def parabola_tether_length(params: TetherParameters, first: Vector3, second: Vector3) -> float:
    """Arc length of the parabola ``a x^2 + b x`` from 0 to the horizontal distance
    between ``first`` and ``second``."""
    if params.a == 0:
        raise ValueError("parabola coefficient a must not be zero")
    end = first.horizontal_distance_to(second)
    return _parabola_primitive(params.a, params.b, end) - _parabola_primitive(
        params.a, params.b, 0.0
    )


def catenary_tether_length(params: TetherParameters, horizontal_distance: float) -> float:
    """Arc length of the catenary from 0 to ``horizontal_distance``."""
    if params.c == 0:
        raise ValueError("catenary constant c must not be zero")
    c = params.c
    return c * math.sinh((horizontal_distance - params.a) / c) - c * math.sinh(
        (0.0 - params.a) / c
    )


def straight_tether_points(
    reel: Vector3,
    uav: Vector3,
    length: float,
    points_per_unit_length: int = DEFAULT_POINTS_PER_UNIT_LENGTH,
) -> list[Vector3]:
    """Evenly spaced points on the straight line from the reel towards the UAV.

    The number of points is the tether length times ``points_per_unit_length``,
    rounded; the first point is the reel and the UAV itself is not included.
    """
    count = _round_half_away(points_per_unit_length * length)
    if count <= 0:
        return []
    step = Vector3(
        (uav.x - reel.x) / count,
        (uav.y - reel.y) / count,
        (uav.z - reel.z) / count,
    )
    return [
        Vector3(reel.x + step.x * j, reel.y + step.y * j, reel.z + step.z * j)
        for j in range(count)
    ]