"""Linear solvers for the pressure Poisson equation."""

from __future__ import annotations

import abc
import logging
import math

import numpy as np

from nsflow.flowfield import FlowField
from nsflow.parameters import Parameters

_log = logging.getLogger(__name__)


class LinearSolver(abc.ABC):
    """Solves for the pressure of a flow field given its right-hand side."""

    def __init__(self, flow_field: FlowField, parameters: Parameters) -> None:
        self.flow_field = flow_field
        self.parameters = parameters

    @abc.abstractmethod
    def solve(self):
        """Update the pressure in the flow field."""

    def reinit_matrix(self) -> None:
        """Rebuild the system after the flag field changed; nothing to do by default."""


def _as_grid(field) -> np.ndarray:
    return field.data.reshape(field.nz, field.ny, field.nx)


def _weights(d_0: float, d_minus: float, d_plus: float) -> tuple[float, float, float]:
    """Lower and upper neighbour weights and the centre contribution along one axis."""
    lower = 0.5 * (d_0 + d_minus)
    upper = 0.5 * (d_0 + d_plus)
    return (
        2.0 / (lower * (lower + upper)),
        2.0 / (upper * (lower + upper)),
        -2.0 / (upper * lower),
    )


class SORSolver(LinearSolver):
    """Successive over-relaxation with Neumann pressure boundaries.

    Sweeps until the RMS residual drops to ``tolerance``; ``solve`` returns
    the number of sweeps taken.
    """

    omega = 1.7
    tolerance = 1e-4

    def solve(self) -> int:
        dim = self.parameters.geometry.dim
        if dim == 3:
            iterations = self._solve_3d()
        elif dim == 2:
            iterations = self._solve_2d()
        else:
            iterations = 0
        _log.debug("SORSolver needed %d iterations", iterations)
        return iterations

    def _cells_2d(self, nx: int, ny: int) -> list[tuple]:
        mesh = self.parameters.meshsize
        cells = []
        for j in range(2, ny + 2):
            for i in range(2, nx + 2):
                a_w, a_e, c_x = _weights(mesh.dx(i, j), mesh.dx(i - 1, j), mesh.dx(i + 1, j))
                a_s, a_n, c_y = _weights(mesh.dy(i, j), mesh.dy(i, j - 1), mesh.dy(i, j + 1))
                cells.append((i, j, a_w, a_e, a_s, a_n, c_x + c_y))
        return cells

    def _cells_3d(self, nx: int, ny: int, nz: int) -> list[tuple]:
        mesh = self.parameters.meshsize
        cells = []
        for k in range(2, nz + 2):
            for j in range(2, ny + 2):
                for i in range(2, nx + 2):
                    a_w, a_e, c_x = _weights(
                        mesh.dx(i, j, k), mesh.dx(i - 1, j, k), mesh.dx(i + 1, j, k)
                    )
                    a_s, a_n, c_y = _weights(
                        mesh.dy(i, j, k), mesh.dy(i, j - 1, k), mesh.dy(i, j + 1, k)
                    )
                    a_b, a_t, c_z = _weights(
                        mesh.dz(i, j, k), mesh.dz(i, j, k - 1), mesh.dz(i, j, k + 1)
                    )
                    cells.append((i, j, k, a_w, a_e, a_s, a_n, a_b, a_t, c_x + c_y + c_z))
        return cells

    def _solve_2d(self) -> int:
        flow_field = self.flow_field
        nx, ny = flow_field.nx, flow_field.ny
        p = _as_grid(flow_field.pressure)[0]
        rhs = _as_grid(flow_field.rhs)[0]
        omg = self.omega
        cells = self._cells_2d(nx, ny)
        iterations = 0

        while True:
            for i, j, a_w, a_e, a_s, a_n, a_c in cells:
                gauss_seidel = 1.0 / a_c * (
                    rhs[j, i] - a_w * p[j, i - 1] - a_e * p[j, i + 1]
                    - a_s * p[j - 1, i] - a_n * p[j + 1, i]
                )
                p[j, i] = omg * gauss_seidel + (1.0 - omg) * p[j, i]

            total = 0.0
            for i, j, a_w, a_e, a_s, a_n, a_c in cells:
                residual = (
                    rhs[j, i] - a_w * p[j, i - 1] - a_e * p[j, i + 1]
                    - a_s * p[j - 1, i] - a_n * p[j + 1, i] - a_c * p[j, i]
                )
                total += residual * residual
            resnorm = math.sqrt(total / (nx * ny))

            p[2 : ny + 2, 1] = p[2 : ny + 2, 2]
            p[2 : ny + 2, nx + 2] = p[2 : ny + 2, nx + 1]
            p[1, 2 : nx + 2] = p[2, 2 : nx + 2]
            p[ny + 2, 2 : nx + 2] = p[ny + 1, 2 : nx + 2]

            _log.debug("Residual norm : %s", resnorm)
            iterations += 1
            if not resnorm > self.tolerance:
                return iterations

    def _solve_3d(self) -> int:
        flow_field = self.flow_field
        nx, ny, nz = flow_field.nx, flow_field.ny, flow_field.nz
        p = _as_grid(flow_field.pressure)
        rhs = _as_grid(flow_field.rhs)
        omg = self.omega
        cells = self._cells_3d(nx, ny, nz)
        iterations = 0

        while True:
            for i, j, k, a_w, a_e, a_s, a_n, a_b, a_t, a_c in cells:
                p[k, j, i] = omg / a_c * (
                    rhs[k, j, i] - a_w * p[k, j, i - 1] - a_e * p[k, j, i + 1]
                    - a_s * p[k, j - 1, i] - a_n * p[k, j + 1, i]
                    - a_b * p[k - 1, j, i] - a_t * p[k + 1, j, i]
                ) + (1.0 - omg) * p[k, j, i]

            p[2 : nz + 2, 2 : ny + 2, 1] = p[2 : nz + 2, 2 : ny + 2, 2]
            p[2 : nz + 2, 2 : ny + 2, nx + 2] = p[2 : nz + 2, 2 : ny + 2, nx + 1]
            p[2 : nz + 2, 1, 2 : nx + 2] = p[2 : nz + 2, 2, 2 : nx + 2]
            p[2 : nz + 2, ny + 2, 2 : nx + 2] = p[2 : nz + 2, ny + 1, 2 : nx + 2]
            p[1, 2 : ny + 2, 2 : nx + 2] = p[2, 2 : ny + 2, 2 : nx + 2]
            p[nz + 2, 2 : ny + 2, 2 : nx + 2] = p[nz + 1, 2 : ny + 2, 2 : nx + 2]

            total = 0.0
            for i, j, k, a_w, a_e, a_s, a_n, a_b, a_t, a_c in cells:
                residual = (
                    rhs[k, j, i] - a_w * p[k, j, i - 1] - a_e * p[k, j, i + 1]
                    - a_s * p[k, j - 1, i] - a_n * p[k, j + 1, i]
                    - a_b * p[k - 1, j, i] - a_t * p[k + 1, j, i] - a_c * p[k, j, i]
                )
                total += residual * residual
            resnorm = math.sqrt(total / (nx * ny * nz))

            _log.debug("Residual norm : %s", resnorm)
            iterations += 1
            if not resnorm > self.tolerance:
                return iterations