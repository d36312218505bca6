"""Simulation parameters grouped by topic."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any


class BoundaryType(enum.Enum):
    """How a global boundary treats the velocity."""

    DIRICHLET = enum.auto()
    NEUMANN = enum.auto()
    PERIODIC = enum.auto()


class MeshsizeType(enum.IntEnum):
    """Kind of grid spacing."""

    UNIFORM = 0
    TANH_STRETCHING = 1


def _triple(value: float | int = 0) -> list:
    return [value, value, value]


@dataclass
class TimestepParameters:
    dt: float = 0.0
    tau: float = 0.0


@dataclass
class SimulationParameters:
    final_time: float = 0.0
    type: str = ""
    scenario: str = ""


@dataclass
class EnvironmentalParameters:
    gx: float = 0.0
    gy: float = 0.0
    gz: float = 0.0


@dataclass
class FlowParameters:
    re: float = 0.0


@dataclass
class SolverParameters:
    gamma: float = 0.0
    max_iterations: int = -1


@dataclass
class GeometricParameters:
    dim: int = -1
    size_x: int = -1
    size_y: int = -1
    size_z: int = -1
    length_x: float = 0.0
    length_y: float = 0.0
    length_z: float = 0.0
    meshsize_type: MeshsizeType | None = None
    stretch_x: bool | None = None
    stretch_y: bool | None = None
    stretch_z: bool | None = None


@dataclass
class WallParameters:
    scalar_left: float = 0.0
    scalar_right: float = 0.0
    scalar_bottom: float = 0.0
    scalar_top: float = 0.0
    scalar_front: float = 0.0
    scalar_back: float = 0.0

    vector_left: list[float] = field(default_factory=lambda: _triple(0.0))
    vector_right: list[float] = field(default_factory=lambda: _triple(0.0))
    vector_bottom: list[float] = field(default_factory=lambda: _triple(0.0))
    vector_top: list[float] = field(default_factory=lambda: _triple(0.0))
    vector_front: list[float] = field(default_factory=lambda: _triple(0.0))
    vector_back: list[float] = field(default_factory=lambda: _triple(0.0))

    type_left: BoundaryType | None = None
    type_right: BoundaryType | None = None
    type_top: BoundaryType | None = None
    type_bottom: BoundaryType | None = None
    type_front: BoundaryType | None = None
    type_back: BoundaryType | None = None


@dataclass
class VTKParameters:
    interval: float = 0.0
    prefix: str = ""


@dataclass
class StdOutParameters:
    interval: float = 0.0


@dataclass
class ParallelParameters:
    """Domain decomposition; a neighbour of None means there is none."""

    rank: int = -1
    num_processors: list[int] = field(default_factory=lambda: _triple(0))

    left_nb: int | None = None
    right_nb: int | None = None
    bottom_nb: int | None = None
    top_nb: int | None = None
    front_nb: int | None = None
    back_nb: int | None = None

    indices: list[int] = field(default_factory=lambda: _triple(0))
    local_size: list[int] = field(default_factory=lambda: _triple(0))
    first_corner: list[int] = field(default_factory=lambda: _triple(0))
    sizes: list[list[int]] = field(default_factory=lambda: [[], [], []])


@dataclass
class BFStepParameters:
    x_ratio: float = 0.0
    y_ratio: float = 0.0


@dataclass
class Parameters:
    """All parameters of a simulation run."""

    simulation: SimulationParameters = field(default_factory=SimulationParameters)
    timestep: TimestepParameters = field(default_factory=TimestepParameters)
    environment: EnvironmentalParameters = field(default_factory=EnvironmentalParameters)
    flow: FlowParameters = field(default_factory=FlowParameters)
    solver: SolverParameters = field(default_factory=SolverParameters)
    geometry: GeometricParameters = field(default_factory=GeometricParameters)
    walls: WallParameters = field(default_factory=WallParameters)
    vtk: VTKParameters = field(default_factory=VTKParameters)
    parallel: ParallelParameters = field(default_factory=ParallelParameters)
    std_out: StdOutParameters = field(default_factory=StdOutParameters)
    bf_step: BFStepParameters = field(default_factory=BFStepParameters)
    meshsize: Any = None