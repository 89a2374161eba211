"""Visualisation markers for tether shapes, paths and end points."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Sequence

from tetherplan.geometry import Quaternion, Vector3

MAP_FRAME = "map"
WORLD_FRAME = "world"

STYLE_DEFAULT = 0
STYLE_CYAN = 1
STYLE_BLACK = 2

_CATENARY_SCALE = 0.03
_TF_SCALE = 0.05
_TF_STYLED_SCALE = 0.045
_PATH_POINT_SCALE = 0.2
_PATH_LINE_WIDTH = 0.1
_ENDPOINT_SCALE = 0.1


class MarkerType(Enum):
    """Shape drawn for a marker."""

    CUBE = "cube"
    SPHERE = "sphere"
    LINE_STRIP = "line_strip"


class MarkerAction(Enum):
    """What a viewer does with a marker."""

    ADD = "add"
    DELETEALL = "deleteall"


@dataclass(frozen=True)
class Color:
    """An RGBA colour with components in [0, 1]."""

    r: float = 0.0
    g: float = 0.0
    b: float = 0.0
    a: float = 1.0


class Palette(IntEnum):
    """Named colours used for path markers."""

    RED = 0
    GREEN = 1
    BLUE = 2
    YELLOW = 3
    PURPLE = 4
    BLACK = 5
    WHITE = 6

    @property
    def color(self) -> Color:
        return _PALETTE_COLORS[self]


_PALETTE_COLORS = {
    Palette.RED: Color(0.9, 0.0, 0.0),
    Palette.GREEN: Color(0.0, 0.9, 0.0),
    Palette.BLUE: Color(0.0, 0.0, 0.9),
    Palette.YELLOW: Color(0.9, 0.9, 0.0),
    Palette.PURPLE: Color(0.9, 0.0, 0.9),
    Palette.BLACK: Color(0.0, 0.0, 0.0),
    Palette.WHITE: Color(1.0, 1.0, 1.0),
}

# Line strips draw "red" in purple and leave black and white uncoloured.
_LINE_COLORS = {
    Palette.RED: Color(0.9, 0.0, 0.9),
    Palette.GREEN: Color(0.0, 0.9, 0.0),
    Palette.BLUE: Color(0.0, 0.0, 0.9),
    Palette.YELLOW: Color(0.9, 0.9, 0.0),
    Palette.PURPLE: Color(0.9, 0.0, 0.9),
}


@dataclass(frozen=True)
class Marker:
    """One visualisation marker."""

    frame_id: str = ""
    namespace: str = ""
    id: int = 0
    type: MarkerType = MarkerType.SPHERE
    action: MarkerAction = MarkerAction.ADD
    position: Vector3 = Vector3()
    orientation: Quaternion = Quaternion()
    scale: Vector3 = Vector3()
    color: Color = Color(a=0.0)
    points: tuple[Vector3, ...] = ()
    lifetime: float = 0.0


def _catenary_colour(suffix: int, count: int, style: int) -> Color:
    if style == STYLE_CYAN:
        return Color(1.0, 1.0, 1.0)
    if style == STYLE_BLACK:
        return Color(1.0, 0.0, 0.0)
    if count <= 0:
        raise ValueError("count must be positive to shade catenary markers")
    shade = (suffix / count) * 0.5
    blue = 0.5 if suffix % 2 == 0 else 0.0
    return Color(1.0 - shade, shade, blue)


def catenary_markers(
    points: Sequence[Vector3], suffix: int, count: int, style: int = STYLE_DEFAULT
) -> list[Marker]:
    """Markers for the points of tether number ``suffix`` out of ``count``.

    The first point is a sphere and the rest are cubes, in the map frame.
    """
    if not points:
        return []
    colour = _catenary_colour(suffix, count, style)
    scale = Vector3(_CATENARY_SCALE, _CATENARY_SCALE, _CATENARY_SCALE)
    namespace = f"catenary_{suffix}"
    return [
        Marker(
            frame_id=MAP_FRAME,
            namespace=namespace,
            id=index + 1,
            type=MarkerType.SPHERE if index == 0 else MarkerType.CUBE,
            action=MarkerAction.ADD,
            position=point,
            scale=scale,
            color=colour,
        )
        for index, point in enumerate(points)
    ]


def tf_catenary_markers(
    points: Sequence[Vector3], suffix: int, count: int, style: int = STYLE_DEFAULT
) -> list[Marker]:
    """Markers for a tether replayed in the world frame.

    Every fifth point is a cube and the rest spheres; any style other than
    the default draws all cubes at a slightly smaller size.
    """
    if not points:
        return []
    colour = _catenary_colour(suffix, count, style)
    size = _TF_STYLED_SCALE if style in (STYLE_CYAN, STYLE_BLACK) else _TF_SCALE
    scale = Vector3(size, size, size)
    namespace = f"catenary_{suffix}"
    return [
        Marker(
            frame_id=WORLD_FRAME,
            namespace=namespace,
            id=index + 1,
            type=(
                MarkerType.CUBE
                if index % 5 == 0 or style != STYLE_DEFAULT
                else MarkerType.SPHERE
            ),
            action=MarkerAction.ADD,
            position=point,
            scale=scale,
            color=colour,
        )
        for index, point in enumerate(points)
    ]


def clear_markers(count: int) -> list[Marker]:
    """``count`` markers that each tell a viewer to delete everything."""
    if count < 0:
        raise ValueError("count must not be negative")
    return [Marker(action=MarkerAction.DELETEALL) for _ in range(count)]


def path_point_markers(
    points: Sequence[Vector3], namespace: str, colour: int | Palette
) -> list[Marker]:
    """Markers for the vertices of a path: a cube every fifth vertex, spheres between."""
    tint = Palette(colour).color
    scale = Vector3(_PATH_POINT_SCALE, _PATH_POINT_SCALE, _PATH_POINT_SCALE)
    return [
        Marker(
            frame_id=MAP_FRAME,
            namespace=namespace,
            id=index + 1,
            type=MarkerType.CUBE if index % 5 == 0 else MarkerType.SPHERE,
            action=MarkerAction.ADD,
            position=point,
            scale=scale,
            color=tint,
        )
        for index, point in enumerate(points)
    ]


def path_line_markers(
    points: Sequence[Vector3], namespace: str, colour: int | Palette
) -> list[Marker]:
    """One line-strip marker for each segment between consecutive path vertices."""
    tint = _LINE_COLORS.get(Palette(colour), Color())
    scale = Vector3(_PATH_LINE_WIDTH, 0.0, 0.0)
    offset = len(points) + 2
    return [
        Marker(
            frame_id=MAP_FRAME,
            namespace=namespace,
            id=index + offset,
            type=MarkerType.LINE_STRIP,
            action=MarkerAction.ADD,
            scale=scale,
            color=tint,
            points=(first, second),
        )
        for index, (first, second) in enumerate(zip(points, points[1:]))
    ]


def endpoint_markers(initial: Vector3, final: Vector3) -> list[Marker]:
    """A green sphere at the initial point and a blue one at the final point."""
    scale = Vector3(_ENDPOINT_SCALE, _ENDPOINT_SCALE, _ENDPOINT_SCALE)
    return [
        Marker(
            frame_id=MAP_FRAME,
            namespace="initial_point",
            id=0,
            type=MarkerType.SPHERE,
            action=MarkerAction.ADD,
            position=initial,
            scale=scale,
            color=Color(0.1, 1.0, 0.1),
        ),
        Marker(
            frame_id=MAP_FRAME,
            namespace="final_point",
            id=1,
            type=MarkerType.SPHERE,
            action=MarkerAction.ADD,
            position=final,
            scale=scale,
            color=Color(0.1, 0.1, 1.0),
        ),
    ]