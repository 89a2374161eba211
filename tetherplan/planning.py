"""Planner configuration and the state blocks an optimizer works on."""

from __future__ import annotations

import math
from dataclasses import dataclass, field, fields
from typing import Any, Mapping, Sequence

from tetherplan.geometry import Quaternion, Vector3
from tetherplan.tether import TetherParameters, catenary_tether_length

# Keys accepted by ``PlannerConfig.from_mapping`` under another spelling.
_KEY_ALIASES = {"just_line_of_sigth": "just_line_of_sight"}


@dataclass(frozen=True)
class PlannerConfig:
    """Settings of the trajectory optimizer, with the planner's defaults."""

    map_resolution: float = 0.05
    ws_x_max: float = 10.0
    ws_y_max: float = 10.0
    ws_z_max: float = 20.0
    ws_x_min: float = -10.0
    ws_y_min: float = -10.0
    ws_z_min: float = 0.0

    world_frame: str = "/map"
    ugv_base_frame: str = "ugv_base_link"
    uav_base_frame: str = "uav_base_link"
    reel_base_frame: str = "reel_base_link"

    optimize_ugv: bool = True
    optimize_uav: bool = True
    optimize_tether: bool = True
    fix_last_position_ugv: bool = False
    use_loss_function: bool = False
    just_line_of_sight: bool = False

    equidistance_ugv_constraint: bool = True
    obstacles_ugv_constraint: bool = True
    traversability_ugv_constraint: bool = True
    smoothness_ugv_constraint: bool = True
    velocity_ugv_constraint: bool = True
    acceleration_ugv_constraint: bool = True

    time_constraint: bool = True
    traj_in_rviz: bool = False
    pause_end_optimization: bool = False

    equidistance_uav_constraint: bool = True
    obstacles_uav_constraint: bool = True
    smoothness_uav_constraint: bool = True
    velocity_uav_constraint: bool = True
    acceleration_uav_constraint: bool = True

    tether_obstacle_constraint: bool = False
    tether_length_constraint: bool = False
    tether_parameters_constraint: bool = False

    w_alpha_ugv: float = 0.1
    w_alpha_uav: float = 0.1
    w_beta_uav: float = 0.1
    w_beta_ugv: float = 0.1
    w_gamma_uav: float = 0.1
    w_gamma_ugv: float = 0.1
    w_epsilon_ugv: float = 0.1
    w_epsilon_uav: float = 0.1
    w_zeta_uav: float = 0.1
    w_zeta_ugv: float = 0.1
    w_delta: float = 0.1
    w_theta_ugv: float = 0.1
    w_kappa_ugv: float = 0.1
    w_kappa_uav: float = 0.1
    w_mu_uav: float = 0.1
    w_nu_ugv: float = 0.1
    w_eta_1: float = 0.1
    w_eta_2: float = 0.1
    w_eta_3: float = 0.1

    count_fix_points_initial_ugv: int = 1
    n_iter_opt: int = 200
    distance_obstacle_ugv: float = 0.5
    distance_obstacle_uav: float = 1.0
    initial_velocity_ugv: float = 1.0
    initial_velocity_uav: float = 1.0
    initial_acceleration_ugv: float = 0.0
    initial_acceleration_uav: float = 0.0
    angle_min_traj: float = math.pi / 15.0
    distance_tether_obstacle: float = 0.1
    dynamic_catenary: float = 0.5
    length_tether_max: float = 20.0

    write_data_residual: bool = False
    verbose_optimizer: bool = True
    write_data_for_analysis: bool = False
    path: str = "~/"
    path_mission_file: str = "~/missions/cfg/"
    files_residuals: str = "residuals/"
    name_output_file: str = "optimization_test"
    scenario_name: str = "scenario_name"
    num_pos_initial: int = 1

    debug: bool = False
    show_config: bool = False
    use_distance_function: bool = True
    use_tether: bool = True
    export_path: bool = True

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> PlannerConfig:
        """Build a configuration, overriding defaults with ``values``.

        Unknown keys raise ``ValueError``; values of the wrong kind raise
        ``TypeError``.
        """
        defaults = {f.name: f.default for f in fields(cls)}
        chosen: dict[str, Any] = {}
        for key, value in values.items():
            name = _KEY_ALIASES.get(key, key)
            if name not in defaults:
                raise ValueError(f"unknown planner setting: {key}")
            chosen[name] = _coerce(name, defaults[name], value)
        return cls(**chosen)


def _coerce(name: str, default: Any, value: Any) -> Any:
    if isinstance(default, bool):
        if not isinstance(value, bool):
            raise TypeError(f"{name} must be a boolean")
        return value
    if isinstance(default, int):
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"{name} must be an integer")
        return value
    if isinstance(default, float):
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise TypeError(f"{name} must be a number")
        return float(value)
    if not isinstance(value, str):
        raise TypeError(f"{name} must be a string")
    return value


@dataclass
class StateBlock:
    """One block of values the optimizer may change, tagged with its waypoint index."""

    index: int
    values: list[float]

    def __len__(self) -> int:
        return len(self.values)


@dataclass
class PlannerStates:
    """All state blocks of a path: poses, leg times and tether description.

    Tether parameter blocks exist when the tether is modelled as a curve;
    length blocks exist when it is taken as a straight line of sight.
    """

    ugv_positions: list[StateBlock] = field(default_factory=list)
    uav_positions: list[StateBlock] = field(default_factory=list)
    ugv_rotations: list[StateBlock] = field(default_factory=list)
    uav_rotations: list[StateBlock] = field(default_factory=list)
    times: list[StateBlock] = field(default_factory=list)
    tether_params: list[StateBlock] = field(default_factory=list)
    lengths: list[StateBlock] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.uav_positions)

    def fixed_ugv_indices(self, fixed_initial: int, fixed_final: int) -> tuple[int, ...]:
        """Indices of the ground vehicle positions held fixed during optimization.

        The first ``fixed_initial`` and the last ``fixed_final`` positions are
        fixed, and so is the very last one of any path with two or more.
        """
        if fixed_initial < 0 or fixed_final < 0:
            raise ValueError("fixed point counts must not be negative")
        count = len(self.ugv_positions)
        return tuple(
            index
            for index in range(count)
            if index < fixed_initial
            or (count > fixed_final and index >= count - fixed_final)
            or (count >= 2 and index == count - 1)
        )


@dataclass(frozen=True)
class OptimizedPath:
    """Poses, leg times and tether description read back from state blocks."""

    ugv_positions: tuple[Vector3, ...]
    uav_positions: tuple[Vector3, ...]
    ugv_rotations: tuple[Quaternion, ...]
    uav_rotations: tuple[Quaternion, ...]
    times: tuple[float, ...]
    tether_params: tuple[TetherParameters, ...]
    lengths: tuple[float, ...]

    def __len__(self) -> int:
        return len(self.uav_positions)


def initial_states(
    ugv_positions: Sequence[Vector3],
    uav_positions: Sequence[Vector3],
    ugv_rotations: Sequence[Quaternion],
    uav_rotations: Sequence[Quaternion],
    times: Sequence[float],
    tether_params: Sequence[TetherParameters],
    lengths: Sequence[float],
    line_of_sight: bool = False,
) -> PlannerStates:
    """Create the state blocks for every waypoint of the initial path.

    With ``line_of_sight`` the tether is described by its length alone and
    ``tether_params`` may be empty; otherwise by its curve parameters.
    """
    count = len(uav_positions)
    needed = [ugv_positions, ugv_rotations, uav_rotations, times, lengths]
    if not line_of_sight:
        needed.append(tether_params)
    if any(len(sequence) < count for sequence in needed):
        raise ValueError("every waypoint needs a pose, a time, a length and tether data")

    states = PlannerStates()
    for index in range(count):
        ugv = ugv_positions[index]
        uav = uav_positions[index]
        ugv_rot = ugv_rotations[index]
        uav_rot = uav_rotations[index]
        states.ugv_positions.append(StateBlock(index, [ugv.x, ugv.y, ugv.z]))
        states.uav_positions.append(StateBlock(index, [uav.x, uav.y, uav.z]))
        states.ugv_rotations.append(
            StateBlock(index, [ugv_rot.x, ugv_rot.y, ugv_rot.z, ugv_rot.w])
        )
        states.uav_rotations.append(
            StateBlock(index, [uav_rot.x, uav_rot.y, uav_rot.z, uav_rot.w])
        )
        states.times.append(StateBlock(index, [float(times[index])]))
        if line_of_sight:
            states.lengths.append(StateBlock(index, [float(lengths[index])]))
        else:
            params = tether_params[index]
            states.tether_params.append(StateBlock(index, [params.a, params.b, params.c]))
    return states


def collect_optimized_path(states: PlannerStates, line_of_sight: bool = False) -> OptimizedPath:
    """Read poses, times and tethers back out of the state blocks.

    For a curved tether the length is the catenary arc over the horizontal
    distance between the two vehicles.
    """
    count = len(states)
    blocks = [states.ugv_positions, states.ugv_rotations, states.uav_rotations, states.times]
    blocks.append(states.lengths if line_of_sight else states.tether_params)
    if any(len(sequence) < count for sequence in blocks):
        raise ValueError("state blocks are missing for some waypoints")

    ugv_positions = tuple(Vector3(*block.values) for block in states.ugv_positions[:count])
    uav_positions = tuple(Vector3(*block.values) for block in states.uav_positions)
    ugv_rotations = tuple(Quaternion(*block.values) for block in states.ugv_rotations[:count])
    uav_rotations = tuple(Quaternion(*block.values) for block in states.uav_rotations[:count])
    times = tuple(block.values[0] for block in states.times[:count])

    if line_of_sight:
        params: tuple[TetherParameters, ...] = ()
        lengths = tuple(block.values[0] for block in states.lengths[:count])
    else:
        params = tuple(TetherParameters(*block.values) for block in states.tether_params[:count])
        lengths = tuple(
            catenary_tether_length(p, ugv.horizontal_distance_to(uav))
            for p, ugv, uav in zip(params, ugv_positions, uav_positions)
        )

    return OptimizedPath(
        ugv_positions, uav_positions, ugv_rotations, uav_rotations, times, params, lengths
    )