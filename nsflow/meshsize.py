"""Grid spacing: uniform meshes and tanh-stretched meshes."""

from __future__ import annotations

import abc
import math

from nsflow.parameters import MeshsizeType, Parameters

_DELTA_S = 2.7
_MIN_SPACING = 1.0e-12


class Meshsize(abc.ABC):
    """Cell sizes and corner positions of a structured grid.

    Indices are local and include two ghost layers below the first inner cell.
    ``dx_min``, ``dy_min`` and ``dz_min`` hold the smallest spacing per axis.
    """

    dx_min: float
    dy_min: float
    dz_min: float

    @abc.abstractmethod
    def dx(self, i: int, j: int, k: int = 0) -> float:
        """Size of cell (i, j, k) along x."""

    @abc.abstractmethod
    def dy(self, i: int, j: int, k: int = 0) -> float:
        """Size of cell (i, j, k) along y."""

    @abc.abstractmethod
    def dz(self, i: int, j: int, k: int = 0) -> float:
        """Size of cell (i, j, k) along z."""

    @abc.abstractmethod
    def pos_x(self, i: int, j: int, k: int = 0) -> float:
        """Global x position of the lower-left-front corner of cell (i, j, k)."""

    @abc.abstractmethod
    def pos_y(self, i: int, j: int, k: int = 0) -> float:
        """Global y position of the lower-left-front corner of cell (i, j, k)."""

    @abc.abstractmethod
    def pos_z(self, i: int, j: int, k: int = 0) -> float:
        """Global z position of the lower-left-front corner of cell (i, j, k)."""


def _spacing(length: float, size: int, axis: str) -> float:
    if size == 0:
        raise ValueError(f"d{axis}: number of cells must not be zero")
    value = length / size
    if value <= 0.0:
        raise ValueError(f"d{axis} <= 0.0!")
    return value


class UniformMeshsize(Meshsize):
    """Equidistant grid spacing."""

    def __init__(self, parameters: Parameters) -> None:
        geometry = parameters.geometry
        corner = parameters.parallel.first_corner
        three_d = geometry.dim == 3
        self._dx = _spacing(geometry.length_x, geometry.size_x, "x")
        self._dy = _spacing(geometry.length_y, geometry.size_y, "y")
        self._dz = _spacing(geometry.length_z, geometry.size_z, "z") if three_d else 0.0
        self._corner_x = corner[0]
        self._corner_y = corner[1]
        self._corner_z = corner[2] if three_d else 0
        self.dx_min = self._dx
        self.dy_min = self._dy
        self.dz_min = self._dz

    def dx(self, i: int, j: int, k: int = 0) -> float:
        return self._dx

    def dy(self, i: int, j: int, k: int = 0) -> float:
        return self._dy

    def dz(self, i: int, j: int, k: int = 0) -> float:
        return self._dz

    def pos_x(self, i: int, j: int, k: int = 0) -> float:
        return self._dx * (self._corner_x - 2 + i)

    def pos_y(self, i: int, j: int, k: int = 0) -> float:
        return self._dy * (self._corner_y - 2 + j)

    def pos_z(self, i: int, j: int, k: int = 0) -> float:
        return self._dz * (self._corner_z - 2 + k)


class TanhMeshStretching(Meshsize):
    """Mesh refined towards both boundaries of each stretched axis.

    Inside the domain the vertices follow a tanh profile mirrored about the
    centre; outside it the spacing of the outermost inner cell is kept.
    Unstretched axes use a uniform spacing.
    """

    def __init__(
        self, parameters: Parameters, stretch_x: bool, stretch_y: bool, stretch_z: bool
    ) -> None:
        geometry = parameters.geometry
        corner = parameters.parallel.first_corner
        three_d = geometry.dim == 3
        self._uniform = UniformMeshsize(parameters)
        self._length_x = geometry.length_x
        self._length_y = geometry.length_y
        self._length_z = geometry.length_z if three_d else 0.0
        self._size_x = geometry.size_x
        self._size_y = geometry.size_y
        self._size_z = geometry.size_z if three_d else 1
        self._corner_x = corner[0]
        self._corner_y = corner[1]
        self._corner_z = corner[2] if three_d else 0
        self.stretch_x = bool(stretch_x)
        self.stretch_y = bool(stretch_y)
        self.stretch_z = bool(stretch_z)
        self._delta_s = _DELTA_S
        self._tanh_delta_s = math.tanh(_DELTA_S)

        self.dx_min = (
            self._first_spacing(geometry.length_x, self._size_x)
            if self.stretch_x
            else self._uniform.dx(0, 0)
        )
        self.dy_min = (
            self._first_spacing(geometry.length_y, self._size_y)
            if self.stretch_y
            else self._uniform.dy(0, 0)
        )
        self.dz_min = (
            self._first_spacing(geometry.length_z, self._size_z)
            if self.stretch_z
            else self._uniform.dz(0, 0, 0)
        )

    def _first_spacing(self, length: float, size: int) -> float:
        return 0.5 * length * (1.0 + math.tanh(self._delta_s * (2.0 / size - 1.0)) / self._tanh_delta_s)

    def _coordinate(self, i: int, first_corner: int, size: int, length: float, d_min: float) -> float:
        index = i - 2 + first_corner
        if index < 0:
            return d_min * index
        if index > size - 1:
            return length + d_min * (index - size)
        p = index / size
        if p < 0.5:
            return 0.5 * length * (1.0 + math.tanh(self._delta_s * (2.0 * p - 1.0)) / self._tanh_delta_s)
        p = (size - index) / size
        return length - 0.5 * length * (
            1.0 + math.tanh(self._delta_s * (2.0 * p - 1.0)) / self._tanh_delta_s
        )

    def _meshsize(self, i: int, first_corner: int, size: int, length: float, d_min: float) -> float:
        pos0 = self._coordinate(i, first_corner, size, length, d_min)
        pos1 = self._coordinate(i + 1, first_corner, size, length, d_min)
        if pos1 - pos0 < _MIN_SPACING:
            raise ValueError("TanhMeshStretching: meshsize < 1.0e-12!")
        return pos1 - pos0

    def dx(self, i: int, j: int, k: int = 0) -> float:
        if self.stretch_x:
            return self._meshsize(i, self._corner_x, self._size_x, self._length_x, self.dx_min)
        return self._uniform.dx(i, j)

    def dy(self, i: int, j: int, k: int = 0) -> float:
        if self.stretch_y:
            return self._meshsize(j, self._corner_y, self._size_y, self._length_y, self.dy_min)
        return self._uniform.dy(i, j)

    def dz(self, i: int, j: int, k: int = 0) -> float:
        if self.stretch_z:
            return self._meshsize(k, self._corner_z, self._size_z, self._length_z, self.dz_min)
        return self._uniform.dz(i, j, k)

    def pos_x(self, i: int, j: int, k: int = 0) -> float:
        if self.stretch_x:
            return self._coordinate(i, self._corner_x, self._size_x, self._length_x, self.dx_min)
        return self._uniform.pos_x(i, j, k)

    def pos_y(self, i: int, j: int, k: int = 0) -> float:
        if self.stretch_y:
            return self._coordinate(j, self._corner_y, self._size_y, self._length_y, self.dy_min)
        return self._uniform.pos_y(i, j, k)

    def pos_z(self, i: int, j: int, k: int = 0) -> float:
        if self.stretch_z:
            return self._coordinate(k, self._corner_z, self._size_z, self._length_z, self.dz_min)
        return self._uniform.pos_z(i, j, k)


def init_meshsize(parameters: Parameters) -> Meshsize:
    """Create the meshsize named by the geometry and store it in ``parameters``.

    Must run after the configuration and the parallel decomposition are set up.
    """
    geometry = parameters.geometry
    if geometry.meshsize_type == MeshsizeType.UNIFORM:
        meshsize: Meshsize = UniformMeshsize(parameters)
    elif geometry.meshsize_type == MeshsizeType.TANH_STRETCHING:
        meshsize = TanhMeshStretching(
            parameters,
            bool(geometry.stretch_x),
            bool(geometry.stretch_y),
            bool(geometry.stretch_z),
        )
    else:
        raise ValueError("Unknown meshsize type!")
    parameters.meshsize = meshsize
    return meshsize