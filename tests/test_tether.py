import math

import pytest

from tetherplan.geometry import Quaternion, Vector3
from tetherplan.tether import (
    TetherParameters,
    catenary_tether_length,
    correct_tether_lengths,
    parabola_tether_length,
    straight_tether_points,
)

ORIGIN = Vector3(0.0, 0.0, 0.0)
IDENTITY = Quaternion()


def test_short_tether_is_lengthened():
    result = correct_tether_lengths(
        [ORIGIN], [Vector3(3.0, 4.0, 0.0)], [IDENTITY], [3.0], Vector3()
    )
    assert result[0] == pytest.approx(5.0 * 1.001)


def test_long_enough_tether_is_kept():
    result = correct_tether_lengths(
        [ORIGIN, ORIGIN],
        [Vector3(3.0, 4.0, 0.0), Vector3(0.0, 0.0, 2.0)],
        [IDENTITY, IDENTITY],
        [6.0, 2.5],
        Vector3(),
    )
    assert result == [6.0, 2.5]


def test_reel_offset_counts_in_correction():
    # Reel lifted by 1 above the vehicle; the UAV sits right at the reel.
    result = correct_tether_lengths(
        [ORIGIN], [Vector3(0.0, 0.0, 1.0)], [IDENTITY], [0.5], Vector3(0.0, 0.0, 1.0)
    )
    assert result == [0.5]


def test_correction_needs_poses_for_every_length():
    with pytest.raises(ValueError):
        correct_tether_lengths([ORIGIN], [ORIGIN], [IDENTITY], [1.0, 2.0], Vector3())


def test_parabola_length_zero_for_same_horizontal_point():
    params = TetherParameters(a=0.3, b=-0.4, c=1.0)
    assert parabola_tether_length(params, ORIGIN, Vector3(0.0, 0.0, 7.0)) == pytest.approx(0.0)


def test_parabola_length_at_least_chord_and_grows():
    params = TetherParameters(a=0.2, b=0.1, c=0.0)
    near = parabola_tether_length(params, ORIGIN, Vector3(2.0, 0.0, 0.0))
    far = parabola_tether_length(params, ORIGIN, Vector3(4.0, 0.0, 0.0))
    assert near >= 2.0
    assert far > near


def test_flat_parabola_is_nearly_straight():
    params = TetherParameters(a=1e-6, b=0.0, c=0.0)
    assert parabola_tether_length(params, ORIGIN, Vector3(0.0, 3.0, 0.0)) == pytest.approx(
        3.0, rel=1e-4
    )


def test_parabola_rejects_zero_coefficient():
    with pytest.raises(ValueError):
        parabola_tether_length(TetherParameters(a=0.0, b=1.0), ORIGIN, Vector3(1.0, 0.0, 0.0))


def test_catenary_length_zero_at_origin():
    assert catenary_tether_length(TetherParameters(1.0, 0.5, 2.0), 0.0) == pytest.approx(0.0)


def test_catenary_length_exceeds_span_and_grows():
    params = TetherParameters(a=2.0, b=0.0, c=1.5)
    short = catenary_tether_length(params, 2.0)
    long = catenary_tether_length(params, 4.0)
    assert short >= 2.0
    assert long > short


def test_symmetric_catenary_halves_are_equal():
    params = TetherParameters(a=2.0, b=0.0, c=1.5)
    assert catenary_tether_length(params, 4.0) == pytest.approx(
        2.0 * catenary_tether_length(params, 2.0)
    )


def test_taut_catenary_approaches_span():
    params = TetherParameters(a=2.5, b=0.0, c=1000.0)
    assert catenary_tether_length(params, 5.0) == pytest.approx(5.0, rel=1e-4)


def test_catenary_rejects_zero_constant():
    with pytest.raises(ValueError):
        catenary_tether_length(TetherParameters(1.0, 1.0, 0.0), 1.0)


def test_straight_points_start_at_reel_and_stop_before_uav():
    reel = Vector3(1.0, 1.0, 0.0)
    uav = Vector3(1.0, 1.0, 1.0)
    points = straight_tether_points(reel, uav, 1.0)
    assert len(points) == 10
    assert points[0] == reel
    assert points[-1].z == pytest.approx(0.9)
    assert all(p.z < uav.z for p in points)


def test_straight_points_evenly_spaced_on_line():
    reel = Vector3(0.0, 0.0, 0.0)
    uav = Vector3(3.0, -3.0, 6.0)
    points = straight_tether_points(reel, uav, 8.0, points_per_unit_length=2)
    assert len(points) == 16
    gaps = [a.distance_to(b) for a, b in zip(points, points[1:])]
    assert all(g == pytest.approx(gaps[0]) for g in gaps)
    for p in points:
        assert p.y == pytest.approx(-p.x)
        assert p.z == pytest.approx(2.0 * p.x)


def test_straight_points_count_rounds_half_up():
    assert len(straight_tether_points(ORIGIN, Vector3(0, 0, 1), 0.05)) == 1
    assert straight_tether_points(ORIGIN, Vector3(0, 0, 1), 0.04) == []


def test_straight_points_empty_for_nonpositive_length():
    assert straight_tether_points(ORIGIN, Vector3(1, 0, 0), 0.0) == []
    assert straight_tether_points(ORIGIN, Vector3(1, 0, 0), -2.0) == []


def test_tether_parameters_default_to_zero():
    params = TetherParameters()
    assert (params.a, params.b, params.c) == (0.0, 0.0, 0.0)
    assert math.isclose(TetherParameters(1.0, 2.0, 3.0).c, 3.0)