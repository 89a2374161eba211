"""Catenary shape of a hanging tether between two points."""

from __future__ import annotations

import argparse
import math
from typing import Callable, Sequence

import numpy as np
from scipy.optimize import least_squares

from tetherplan.geometry import Vector3

_SAME_AXIS_TOLERANCE = 0.000001
_INITIAL_PHI = 8.0
_INITIAL_LENGTH_FACTOR = 1.005


def evaluate_catenary(x: float, xc: float, yc: float, a: float) -> float:
    """Height of the catenary with vertex at (xc, yc) and parameter ``a`` at ``x``."""
    return a * math.cosh((x - xc) / a) + (yc - a)


def initial_tether_length(start: Vector3, end: Vector3) -> float:
    """Starting tether length: the straight distance plus half a percent of slack."""
    return start.distance_to(end) * _INITIAL_LENGTH_FACTOR


def _round_half_away(value: float) -> float:
    return math.copysign(math.floor(abs(value) + 0.5), value)


def _sign(value: float) -> int:
    return (value > 0) - (value < 0)


def _least_squares(
    residuals: Callable[[np.ndarray], np.ndarray],
    initial: Sequence[float],
    max_iterations: int,
) -> np.ndarray:
    x0 = np.asarray(initial, dtype=float)
    with np.errstate(over="ignore", invalid="ignore"):
        if not np.all(np.isfinite(residuals(x0))):
            return x0
        result = least_squares(
            residuals,
            x0,
            method="trf",
            max_nfev=max_iterations * (x0.size + 1),
            ftol=1e-12,
            xtol=1e-12,
            gtol=1e-12,
        )
    return result.x


class CatenarySolver:
    """Computes sampled points of a tether hanging between two points."""

    def __init__(
        self,
        max_num_iterations: int = 50,
        num_points_per_unit_length: int = 10,
        resolution: float = 0.05,
    ) -> None:
        if max_num_iterations <= 0:
            raise ValueError("max_num_iterations must be positive")
        if num_points_per_unit_length <= 0:
            raise ValueError("num_points_per_unit_length must be positive")
        if resolution <= 0:
            raise ValueError("resolution must be positive")
        self.max_num_iterations = max_num_iterations
        self.num_points_per_unit_length = num_points_per_unit_length
        self.resolution = resolution

    def number_of_points(self, length: float) -> int:
        """Number of segments the tether of ``length`` is split into."""
        return math.ceil(self.num_points_per_unit_length * length)

    def _snap(self, value: float) -> float:
        return self.resolution * _round_half_away(value * (1.0 / self.resolution))

    def solve(self, start: Vector3, end: Vector3, length: float) -> list[Vector3]:
        """Return points along the tether of ``length`` from ``start`` to ``end``.

        Coordinates are snapped to the solver's resolution.
        """
        if length <= 0:
            raise ValueError("tether length must be positive")
        count = self.number_of_points(length)

        vertical = (
            abs(start.x - end.x) < _SAME_AXIS_TOLERANCE
            and abs(start.y - end.y) < _SAME_AXIS_TOLERANCE
        )
        if vertical:
            return self._vertical_points(start, start.distance_to(end), count)

        xb = start.horizontal_distance_to(end)
        yb = end.z - start.z

        phi = self._solve_phi(xb, yb, length)
        if phi == 0.0:
            raise ValueError("no catenary parameter found for this tether length")
        a = xb / (2.0 * phi)

        x0, y0 = self._solve_vertex(start, end, xb, yb, a)
        h = abs(y0) - a
        profile = self._profile(xb, x0, start.z - h, a, count)
        return self._lift(start, end, profile)

    def _solve_phi(self, xb: float, yb: float, length: float) -> float:
        k = math.sqrt(abs(length * length - yb * yb)) / xb

        def residuals(p: np.ndarray) -> np.ndarray:
            return np.array([np.sinh(p[0]) - k * p[0]])

        return float(_least_squares(residuals, [_INITIAL_PHI], self.max_num_iterations)[0])

    def _solve_vertex(
        self, start: Vector3, end: Vector3, xb: float, yb: float, a: float
    ) -> tuple[float, float]:
        def residuals(p: np.ndarray) -> np.ndarray:
            x0, y0 = p
            far = a * np.cosh((xb - x0) / a)
            return np.array([far - a * np.cosh(x0 / a) - yb, far - yb + y0])

        initial = [end.x - start.x, min(start.y, end.y)]
        x0, y0 = _least_squares(residuals, initial, self.max_num_iterations)
        return float(x0), float(y0)

    @staticmethod
    def _profile(
        xb: float, xc: float, yc: float, a: float, count: int
    ) -> list[tuple[float, float]]:
        step = xb / count
        profile = []
        x = 0.0
        for _ in range(count + 1):
            profile.append((x, evaluate_catenary(x, xc, yc, a)))
            x += step
        return profile

    def _lift(
        self, start: Vector3, end: Vector3, profile: list[tuple[float, float]]
    ) -> list[Vector3]:
        dx = end.x - start.x
        dy = end.y - start.y
        theta = math.atan2(abs(dy), abs(dx))
        along_x = _sign(dx) * math.cos(theta)
        along_y = _sign(dy) * math.sin(theta)
        return [
            Vector3(
                self._snap(start.x + along_x * s),
                self._snap(start.y + along_y * s),
                self._snap(height),
            )
            for s, height in profile
        ]

    def _vertical_points(self, start: Vector3, distance: float, count: int) -> list[Vector3]:
        step = distance / count
        x = self._snap(start.x)
        y = self._snap(start.y)
        return [Vector3(x, y, self._snap(start.z + step * i)) for i in range(count + 1)]


def main(argv: Sequence[str] | None = None) -> int:
    """Solve one tether shape and print its points, one "x y z" per line."""
    parser = argparse.ArgumentParser(description="Sample the catenary of a hanging tether.")
    parser.add_argument("--start", nargs=3, type=float, default=[0.2, 2.4, 0.3],
                        metavar=("X", "Y", "Z"))
    parser.add_argument("--end", nargs=3, type=float, default=[-5.4, 0.0, 6.0],
                        metavar=("X", "Y", "Z"))
    parser.add_argument("--length", type=float, default=None,
                        help="tether length (default: distance plus 0.5%%)")
    parser.add_argument("--max-iterations", type=int, default=200)
    args = parser.parse_args(argv)

    start = Vector3(*args.start)
    end = Vector3(*args.end)
    length = args.length if args.length is not None else initial_tether_length(start, end)

    solver = CatenarySolver(max_num_iterations=args.max_iterations)
    for point in solver.solve(start, end, length):
        print(f"{point.x:.6f} {point.y:.6f} {point.z:.6f}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())