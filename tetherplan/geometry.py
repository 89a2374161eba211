"""Points, orientations and the reel attachment point of the ground vehicle."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator


@dataclass(frozen=True)
class Vector3:
    """A point or displacement in three dimensions."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def __add__(self, other: Vector3) -> Vector3:
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vector3) -> Vector3:
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def distance_to(self, other: Vector3) -> float:
        """Euclidean distance between two points."""
        return math.dist(tuple(self), tuple(other))

    def horizontal_distance_to(self, other: Vector3) -> float:
        """Distance between two points projected on the XY plane."""
        return math.hypot(self.x - other.x, self.y - other.y)


@dataclass(frozen=True)
class Quaternion:
    """An orientation as a quaternion (x, y, z, w)."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    w: float = 1.0

    def to_rpy(self) -> tuple[float, float, float]:
        """Return (roll, pitch, yaw) of the rotation this quaternion describes."""
        norm2 = self.x**2 + self.y**2 + self.z**2 + self.w**2
        if norm2 == 0.0:
            raise ValueError("a zero quaternion describes no rotation")
        s = 2.0 / norm2
        xs, ys, zs = self.x * s, self.y * s, self.z * s
        wx, wy, wz = self.w * xs, self.w * ys, self.w * zs
        xx, xy, xz = self.x * xs, self.x * ys, self.x * zs
        yy, yz, zz = self.y * ys, self.y * zs, self.z * zs

        m00 = 1.0 - (yy + zz)
        m01 = xy - wz
        m02 = xz + wy
        m10 = xy + wz
        m20 = xz - wy
        m21 = yz + wx
        m22 = 1.0 - (xx + yy)

        if abs(m20) >= 1.0:
            yaw = 0.0
            if m20 < 0.0:
                pitch = math.pi / 2.0
                roll = math.atan2(m01, m02)
            else:
                pitch = -math.pi / 2.0
                roll = math.atan2(-m01, -m02)
            return roll, pitch, yaw

        pitch = -math.asin(m20)
        cos_pitch = math.cos(pitch)
        roll = math.atan2(m21 / cos_pitch, m22 / cos_pitch)
        yaw = math.atan2(m10 / cos_pitch, m00 / cos_pitch)
        return roll, pitch, yaw

    @classmethod
    def from_rpy(cls, roll: float, pitch: float, yaw: float) -> Quaternion:
        """Build the quaternion for the given roll, pitch and yaw angles."""
        cr, sr = math.cos(roll * 0.5), math.sin(roll * 0.5)
        cp, sp = math.cos(pitch * 0.5), math.sin(pitch * 0.5)
        cy, sy = math.cos(yaw * 0.5), math.sin(yaw * 0.5)
        return cls(
            x=sr * cp * cy - cr * sp * sy,
            y=cr * sp * cy + sr * cp * sy,
            z=cr * cp * sy - sr * sp * cy,
            w=cr * cp * cy + sr * sp * sy,
        )


def reel_point(position: Vector3, rotation: Quaternion, reel_offset: Vector3) -> Vector3:
    """Return where the tether leaves the reel for a ground vehicle pose.

    The reel sits at the horizontal distance of ``reel_offset`` ahead of the
    vehicle along its heading, and ``reel_offset.z`` above it.
    """
    _, _, yaw = rotation.to_rpy()
    reach = math.hypot(reel_offset.x, reel_offset.y)
    return Vector3(
        position.x + reach * math.cos(yaw),
        position.y + reach * math.sin(yaw),
        position.z + reel_offset.z,
    )