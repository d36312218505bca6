"""State of the fluid domain: pressure, velocity, flags and solver work fields."""

from __future__ import annotations

import numpy as np

from nsflow.assertion import check
from nsflow.fields import IntScalarField, ScalarField, VectorField
from nsflow.parameters import Parameters

_GHOST = 3


class FlowField:
    """All fields of one (sub)domain, each padded with ghost layers.

    The pressure carries the same padding as the velocity so that one index
    addresses the same cell in both.
    """

    def __init__(self, nx: int, ny: int, nz: int | None = None) -> None:
        check(nx > 0, "nx > 0", nx)
        check(ny > 0, "ny > 0", ny)
        if nz is not None:
            check(nz > 0, "nz > 0", nz)
        self._setup(nx, ny, 1 if nz is None else nz, three_d=nz is not None)

    @classmethod
    def from_parameters(cls, parameters: Parameters) -> FlowField:
        """Build a field whose size and dimension come from ``parameters``."""
        nx, ny, nz = parameters.parallel.local_size
        flow_field = cls.__new__(cls)
        flow_field._setup(nx, ny, nz, three_d=parameters.geometry.dim != 2)
        return flow_field

    def _setup(self, nx: int, ny: int, nz: int, *, three_d: bool) -> None:
        self.nx = nx
        self.ny = ny
        self.nz = nz
        self.cells_x = nx + _GHOST
        self.cells_y = ny + _GHOST
        self.cells_z = nz + _GHOST if three_d else 1

        if three_d:
            shape = (self.cells_x, self.cells_y, self.cells_z)
            self.pressure = ScalarField(*shape)
            self.velocity = VectorField(*shape)
            self.flags = IntScalarField(*shape)
            self.fgh = VectorField(*shape)
            self.rhs = ScalarField(*shape)
        else:
            shape2 = (self.cells_x, self.cells_y)
            self.pressure = ScalarField(*shape2)
            self.velocity = VectorField(*shape2)
            self.flags = IntScalarField(*shape2)
            self.fgh = VectorField(*shape2)
            self.rhs = ScalarField(*shape2)

    def pressure_and_velocity(self, i: int, j: int, k: int | None = None) -> tuple[float, np.ndarray]:
        """Pressure and cell-centred velocity at cell (i, j) or (i, j, k)."""
        velocity = self.velocity
        if k is None:
            here = velocity.vector(i, j)
            left = velocity.vector(i - 1, j)
            down = velocity.vector(i, j - 1)
            centred = np.array([(here[0] + left[0]) / 2, (here[1] + down[1]) / 2])
            return self.pressure[i, j], centred

        here = velocity.vector(i, j, k)
        left = velocity.vector(i - 1, j, k)
        down = velocity.vector(i, j - 1, k)
        back = velocity.vector(i, j, k - 1)
        centred = np.array(
            [(here[0] + left[0]) / 2, (here[1] + down[1]) / 2, (here[2] + back[2]) / 2]
        )
        return self.pressure[i, j, k], centred