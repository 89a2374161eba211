import math

import pytest

from tetherplan.geometry import Quaternion, Vector3, reel_point


def test_distance_is_symmetric_and_zero_to_self():
    a = Vector3(1.0, -2.0, 0.5)
    b = Vector3(-3.0, 4.0, 2.0)
    assert a.distance_to(b) == pytest.approx(b.distance_to(a))
    assert a.distance_to(a) == 0.0


def test_distance_along_one_axis():
    a = Vector3(0.0, 0.0, 0.3)
    b = Vector3(0.0, 0.0, 6.0)
    assert a.distance_to(b) == pytest.approx(6.0 - 0.3)


def test_horizontal_distance_ignores_height():
    a = Vector3(0.2, 2.4, 0.3)
    b = Vector3(-5.4, 0.0, 6.0)
    lifted = Vector3(-5.4, 0.0, -100.0)
    assert a.horizontal_distance_to(b) == pytest.approx(a.horizontal_distance_to(lifted))
    assert a.horizontal_distance_to(b) <= a.distance_to(b)


def test_vector_arithmetic_round_trip():
    a = Vector3(1.0, 2.0, 3.0)
    b = Vector3(-0.5, 4.0, 0.25)
    assert (a + b) - b == a
    assert tuple(a) == (1.0, 2.0, 3.0)


def test_identity_quaternion_has_no_rotation():
    roll, pitch, yaw = Quaternion().to_rpy()
    assert (roll, pitch, yaw) == pytest.approx((0.0, 0.0, 0.0))


@pytest.mark.parametrize(
    "roll,pitch,yaw",
    [(0.0, 0.0, 0.0001), (0.1, -0.2, 0.3), (-1.0, 0.5, 2.5), (0.0, 0.0, -3.0)],
)
def test_rpy_round_trip(roll, pitch, yaw):
    q = Quaternion.from_rpy(roll, pitch, yaw)
    assert q.to_rpy() == pytest.approx((roll, pitch, yaw), abs=1e-9)


def test_from_rpy_is_unit_quaternion():
    q = Quaternion.from_rpy(0.4, -0.3, 1.2)
    assert q.x**2 + q.y**2 + q.z**2 + q.w**2 == pytest.approx(1.0)


def test_unnormalised_quaternion_gives_same_angles():
    q = Quaternion.from_rpy(0.2, 0.1, -0.7)
    scaled = Quaternion(q.x * 3.0, q.y * 3.0, q.z * 3.0, q.w * 3.0)
    assert scaled.to_rpy() == pytest.approx(q.to_rpy())


def test_zero_quaternion_is_rejected():
    with pytest.raises(ValueError):
        Quaternion(0.0, 0.0, 0.0, 0.0).to_rpy()


def test_reel_point_only_vertical_offset():
    position = Vector3(1.0, 2.0, 0.0)
    rotation = Quaternion.from_rpy(0.0, 0.0, 1.0)
    reel = reel_point(position, rotation, Vector3(0.0, 0.0, 0.3))
    assert reel == Vector3(1.0, 2.0, 0.3)


def test_reel_point_follows_heading():
    position = Vector3(1.0, 2.0, 0.0)
    rotation = Quaternion.from_rpy(0.0, 0.0, math.pi / 2.0)
    reel = reel_point(position, rotation, Vector3(0.5, 0.0, 0.3))
    assert reel.x == pytest.approx(1.0, abs=1e-12)
    assert reel.y == pytest.approx(2.0 + 0.5)
    assert reel.z == pytest.approx(0.3)


def test_reel_point_horizontal_reach_matches_offset():
    position = Vector3(-1.0, 0.5, 0.2)
    rotation = Quaternion.from_rpy(0.0, 0.0, -2.0)
    offset = Vector3(0.3, -0.4, 0.1)
    reel = reel_point(position, rotation, offset)
    assert position.horizontal_distance_to(reel) == pytest.approx(
        Vector3().horizontal_distance_to(offset)
    )