"""Reading, interpolating, exporting and timing paths of the vehicle pair."""

from __future__ import annotations

import logging
import math
import os
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Mapping, Sequence

import yaml

from tetherplan.geometry import Quaternion, Vector3

_log = logging.getLogger(__name__)

DEFAULT_TETHER_LENGTH = 2.0
DEFAULT_TIME_FROM_START = 0.5
DEFAULT_INTERPOLATION_STEP = 0.2

_ZERO = Vector3()


@dataclass(frozen=True)
class Pose:
    """A position with an orientation."""

    position: Vector3 = Vector3()
    orientation: Quaternion = Quaternion()


@dataclass(frozen=True)
class TrajectoryPoint:
    """The state of the ground vehicle and the aerial vehicle at one waypoint."""

    ugv: Pose = Pose()
    uav: Pose = Pose()
    ugv_velocity: Vector3 = Vector3()
    uav_velocity: Vector3 = Vector3()
    ugv_acceleration: Vector3 = Vector3()
    uav_acceleration: Vector3 = Vector3()
    time_from_start: float = 0.0


@dataclass(frozen=True)
class MissionPath:
    """A trajectory of waypoints together with the tether length at each one."""

    points: tuple[TrajectoryPoint, ...] = ()
    tether_lengths: tuple[float, ...] = ()
    initial_ugv: Pose = Pose()
    initial_uav: Pose = Pose()

    def __len__(self) -> int:
        return len(self.points)


@dataclass(frozen=True)
class PathSamples:
    """Parallel sequences describing the vehicles and tether along a path."""

    ugv_positions: Sequence[Vector3] = field(default_factory=tuple)
    uav_positions: Sequence[Vector3] = field(default_factory=tuple)
    ugv_rotations: Sequence[Quaternion] = field(default_factory=tuple)
    uav_rotations: Sequence[Quaternion] = field(default_factory=tuple)
    lengths: Sequence[float] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        for name in ("ugv_positions", "uav_positions", "ugv_rotations", "uav_rotations"):
            object.__setattr__(self, name, tuple(getattr(self, name)))
        object.__setattr__(self, "lengths", tuple(float(v) for v in self.lengths))
        sizes = {
            len(self.ugv_positions),
            len(self.uav_positions),
            len(self.ugv_rotations),
            len(self.uav_rotations),
            len(self.lengths),
        }
        if len(sizes) != 1:
            raise ValueError("all path sample sequences must have the same length")

    def __len__(self) -> int:
        return len(self.ugv_positions)


def _number(node: Any, *keys: str) -> float:
    for key in keys:
        if not isinstance(node, Mapping) or key not in node:
            raise KeyError(key)
        node = node[key]
    if isinstance(node, bool) or node is None:
        raise TypeError("expected a number")
    return float(node)


def _pose(section: Any, key: str) -> Pose:
    position = Vector3(*(_number(section, key, "pose", "position", c) for c in "xyz"))
    orientation = Quaternion(
        *(_number(section, key, "pose", "orientation", c) for c in "xyzw")
    )
    return Pose(position, orientation)


def load_mission_path(path: str | os.PathLike[str]) -> MissionPath:
    """Read a mission file; waypoints with missing or malformed poses are skipped.

    A waypoint without a tether length gets the default length of 2.
    """
    with open(path, encoding="utf-8") as stream:
        document = yaml.safe_load(stream)
    if not isinstance(document, Mapping):
        raise ValueError(f"{path}: mission file is not a mapping")
    try:
        size = int(_number(document, "marsupial_ugv", "size"))
    except (KeyError, TypeError, ValueError) as error:
        raise ValueError(f"{path}: mission file has no usable marsupial_ugv size") from error

    ugv = document.get("marsupial_ugv")
    uav = document.get("marsupial_uav")
    tether = document.get("tether")

    points: list[TrajectoryPoint] = []
    lengths: list[float] = []
    initial_ugv = Pose()
    initial_uav_position = Vector3()
    initial_uav_xy = (0.0, 0.0)
    initial_uav_zw = (0.0, 1.0)

    for index in range(size):
        key = f"poses{index}"
        try:
            # The initial UAV orientation's z and w follow every waypoint read.
            initial_uav_zw = (
                _number(uav, key, "pose", "orientation", "z"),
                _number(uav, key, "pose", "orientation", "w"),
            )
            ugv_pose = _pose(ugv, key)
            uav_pose = _pose(uav, key)
        except (KeyError, TypeError, ValueError):
            _log.info("Skipping waypoint %d", index)
            continue

        if index == 0:
            initial_ugv = ugv_pose
            initial_uav_position = uav_pose.position
            initial_uav_xy = (uav_pose.orientation.x, uav_pose.orientation.y)

        points.append(
            TrajectoryPoint(ugv=ugv_pose, uav=uav_pose, time_from_start=DEFAULT_TIME_FROM_START)
        )
        try:
            length = _number(tether, f"length{index}", "length")
        except (KeyError, TypeError, ValueError):
            length = DEFAULT_TETHER_LENGTH
        lengths.append(length)

    _log.info("Read mission file %s with %d points", path, len(points))
    initial_uav = Pose(initial_uav_position, Quaternion(*initial_uav_xy, *initial_uav_zw))
    return MissionPath(tuple(points), tuple(lengths), initial_ugv, initial_uav)


def _lerp(first: Vector3, second: Vector3, fraction: float) -> Vector3:
    return Vector3(
        first.x + fraction * (second.x - first.x),
        first.y + fraction * (second.y - first.y),
        first.z + fraction * (second.z - first.z),
    )


def interpolate_path(
    samples: PathSamples, max_step: float = DEFAULT_INTERPOLATION_STEP
) -> PathSamples:
    """Split each leg longer than ``max_step`` into evenly spaced samples.

    A leg whose longer vehicle displacement exceeds ``max_step`` is replaced
    by the points strictly between its ends; a shorter leg keeps its start.
    The final sample is not carried over.
    """
    if len(samples) == 0:
        raise ValueError("cannot interpolate an empty path")
    if max_step <= 0:
        raise ValueError("max_step must be positive")

    ugv_out: list[Vector3] = []
    uav_out: list[Vector3] = []
    ugv_rot: list[Quaternion] = []
    uav_rot: list[Quaternion] = []
    lengths: list[float] = []

    legs = zip(
        zip(samples.ugv_positions, samples.ugv_positions[1:]),
        zip(samples.uav_positions, samples.uav_positions[1:]),
        zip(samples.lengths, samples.lengths[1:]),
        samples.ugv_rotations,
        samples.uav_rotations,
    )
    for (ugv_a, ugv_b), (uav_a, uav_b), (len_a, len_b), rot_ugv, rot_uav in legs:
        longest = max(ugv_a.distance_to(ugv_b), uav_a.distance_to(uav_b))
        if longest > max_step:
            parts = math.floor(longest / max_step)
            for step in range(1, parts + 1):
                fraction = step / (parts + 1)
                ugv_out.append(_lerp(ugv_a, ugv_b, fraction))
                uav_out.append(_lerp(uav_a, uav_b, fraction))
                ugv_rot.append(rot_ugv)
                uav_rot.append(rot_uav)
                lengths.append(len_a + fraction * (len_b - len_a))
        else:
            ugv_out.append(ugv_a)
            uav_out.append(uav_a)
            ugv_rot.append(rot_ugv)
            uav_rot.append(rot_uav)
            lengths.append(len_a)

    return PathSamples(ugv_out, uav_out, ugv_rot, uav_rot, lengths)


def _vehicle_section(
    header: str,
    frame_id: str,
    pose_prefix: str,
    pose_frame: str,
    stamp: str,
    positions: Sequence[Vector3],
    rotations: Sequence[Quaternion],
) -> dict[str, Any]:
    section: dict[str, Any] = {
        "header": header,
        "seq": 1,
        "stamp": stamp,
        "frame_id": frame_id,
        "size": len(positions),
    }
    for index, (position, rotation) in enumerate(zip(positions, rotations)):
        section[f"poses{index}"] = {
            "header": f"{pose_prefix}{index}",
            "seq": index,
            "frame_id": pose_frame,
            "pose": {
                "position": {"x": float(position.x), "y": float(position.y), "z": float(position.z)},
                "orientation": {
                    "x": float(rotation.x),
                    "y": float(rotation.y),
                    "z": float(rotation.z),
                    "w": float(rotation.w),
                },
            },
        }
    return section


def mission_document(samples: PathSamples, stamp: str) -> dict[str, Any]:
    """The mission-file structure for ``samples``, as nested dictionaries."""
    tether: dict[str, Any] = {
        "header": "tether",
        "seq": 1,
        "stamp": stamp,
        "frame_id": "frame_tether",
        "size": len(samples.lengths),
    }
    for index, length in enumerate(samples.lengths):
        tether[f"length{index}"] = {
            "header": f"tether{index}",
            "seq": index,
            "frame_id": "tether_length",
            "length": float(length),
        }
    return {
        "marsupial_ugv": _vehicle_section(
            "marsupial_ugv", "ugv", "ugv", "ugv", stamp,
            samples.ugv_positions, samples.ugv_rotations,
        ),
        "marsupial_uav": _vehicle_section(
            "marsupial_uav", "base_link_uav", "uav", "uav", stamp,
            samples.uav_positions, samples.uav_rotations,
        ),
        "tether": tether,
    }


def export_optimized_path(
    samples: PathSamples,
    directory: str | os.PathLike[str],
    now: datetime | None = None,
) -> tuple[Path, PathSamples]:
    """Interpolate ``samples`` and append them as a mission file in ``directory``.

    Returns the file written and the interpolated samples.
    """
    moment = now if now is not None else datetime.now()
    stamp = f"{moment.hour}{moment.minute}{moment.second + 1}"
    interpolated = interpolate_path(samples)
    document = mission_document(interpolated, stamp)

    name = f"optimized_path_{moment.year}_{moment.month}_{moment.day}_{stamp}.yaml"
    target = Path(directory) / name
    with open(target, "a", encoding="utf-8") as stream:
        yaml.safe_dump(document, stream, sort_keys=False, default_flow_style=False)
    _log.info("Saved optimized path to %s", target)
    return target, interpolated


def _rate(first: Vector3, second: Vector3, duration: float) -> Vector3:
    if duration == 0:
        raise ValueError("time between consecutive waypoints must not be zero")
    return Vector3(
        (second.x - first.x) / duration,
        (second.y - first.y) / duration,
        (second.z - first.z) / duration,
    )


def _motion(
    positions: Sequence[Vector3], times: Sequence[float], index: int
) -> tuple[Vector3, Vector3]:
    if index == 0:
        velocity = _ZERO
    else:
        velocity = _rate(positions[index - 1], positions[index], times[index])
    if index == 0 or index == len(positions) - 1:
        acceleration = _ZERO
    else:
        ahead = _rate(positions[index], positions[index + 1], times[index + 1])
        acceleration = ahead - velocity
    return velocity, acceleration


def build_trajectory(samples: PathSamples, times: Sequence[float]) -> MissionPath:
    """Trajectory with velocities and accelerations from positions and leg times.

    ``times[i]`` is the time spent travelling from waypoint ``i - 1`` to ``i``.
    """
    if len(times) < len(samples):
        raise ValueError("a time is needed for every waypoint")
    points = []
    for index in range(len(samples)):
        ugv_velocity, ugv_acceleration = _motion(samples.ugv_positions, times, index)
        uav_velocity, uav_acceleration = _motion(samples.uav_positions, times, index)
        points.append(
            TrajectoryPoint(
                ugv=Pose(samples.ugv_positions[index], samples.ugv_rotations[index]),
                uav=Pose(samples.uav_positions[index], samples.uav_rotations[index]),
                ugv_velocity=ugv_velocity,
                uav_velocity=uav_velocity,
                ugv_acceleration=ugv_acceleration,
                uav_acceleration=uav_acceleration,
            )
        )
    initial_ugv = points[0].ugv if points else Pose()
    initial_uav = points[0].uav if points else Pose()
    return MissionPath(tuple(points), tuple(samples.lengths), initial_ugv, initial_uav)