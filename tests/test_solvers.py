import numpy as np
import pytest

from nsflow.flowfield import FlowField
from nsflow.meshsize import init_meshsize
from nsflow.parameters import MeshsizeType, Parameters
from nsflow.solvers import LinearSolver, SORSolver


def _setup(nx, ny, nz=None):
    parameters = Parameters()
    geometry = parameters.geometry
    geometry.dim = 2 if nz is None else 3
    geometry.size_x = nx
    geometry.size_y = ny
    geometry.size_z = 1 if nz is None else nz
    geometry.length_x = float(nx)
    geometry.length_y = float(ny)
    geometry.length_z = 1.0 if nz is None else float(nz)
    geometry.meshsize_type = MeshsizeType.UNIFORM
    init_meshsize(parameters)
    flow_field = FlowField(nx, ny) if nz is None else FlowField(nx, ny, nz)
    return parameters, flow_field


def test_linear_solver_is_abstract():
    parameters, flow_field = _setup(4, 4)
    with pytest.raises(TypeError):
        LinearSolver(flow_field, parameters)


def test_zero_problem_converges_at_once():
    parameters, flow_field = _setup(4, 4)
    solver = SORSolver(flow_field, parameters)
    assert solver.solve() == 1
    assert np.all(flow_field.pressure.data == 0.0)


def test_constant_pressure_is_a_solution():
    parameters, flow_field = _setup(5, 4)
    flow_field.pressure.data[:] = 3.0
    solver = SORSolver(flow_field, parameters)
    assert solver.solve() == 1
    for j in range(2, 6):
        for i in range(2, 7):
            assert flow_field.pressure[i, j] == pytest.approx(3.0)


def test_reinit_matrix_leaves_pressure_alone():
    parameters, flow_field = _setup(4, 4)
    flow_field.pressure[3, 3] = 2.5
    solver = SORSolver(flow_field, parameters)
    solver.reinit_matrix()
    assert flow_field.pressure[3, 3] == 2.5


def test_2d_source_and_sink():
    parameters, flow_field = _setup(4, 4)
    flow_field.rhs[2, 2] = 1.0
    flow_field.rhs[5, 5] = -1.0
    solver = SORSolver(flow_field, parameters)
    iterations = solver.solve()
    p = flow_field.pressure
    assert iterations > 1
    # A positive source gives a minimum of the pressure.
    assert p[2, 2] < p[5, 5]
    # Interior cell (3, 3) has no source, so the five-point Laplacian vanishes there.
    laplacian = p[4, 3] + p[2, 3] + p[3, 4] + p[3, 2] - 4 * p[3, 3]
    assert laplacian == pytest.approx(0.0, abs=1e-3)


def test_2d_ghost_layer_copies_neighbours():
    parameters, flow_field = _setup(4, 3)
    flow_field.rhs[2, 3] = 0.5
    flow_field.rhs[5, 2] = -0.5
    SORSolver(flow_field, parameters).solve()
    p = flow_field.pressure
    for j in range(2, 5):
        assert p[1, j] == p[2, j]
        assert p[6, j] == p[5, j]
    for i in range(2, 6):
        assert p[i, 1] == p[i, 2]
        assert p[i, 5] == p[i, 4]


def test_3d_source_and_sink():
    parameters, flow_field = _setup(3, 3, 3)
    flow_field.rhs[2, 2, 2] = 1.0
    flow_field.rhs[4, 4, 4] = -1.0
    iterations = SORSolver(flow_field, parameters).solve()
    p = flow_field.pressure
    assert iterations > 1
    assert p[2, 2, 2] < p[4, 4, 4]
    for j in range(2, 5):
        for k in range(2, 5):
            assert p[1, j, k] == p[2, j, k]
            assert p[5, j, k] == p[4, j, k]
    for i in range(2, 5):
        for j in range(2, 5):
            assert p[i, j, 1] == p[i, j, 2]
            assert p[i, j, 5] == p[i, j, 4]


def test_unknown_dimension_does_nothing():
    parameters, flow_field = _setup(4, 4)
    parameters.geometry.dim = -1
    flow_field.rhs[2, 2] = 1.0
    assert SORSolver(flow_field, parameters).solve() == 0
    assert np.all(flow_field.pressure.data == 0.0)