import math

import pytest

from nsflow.meshsize import Meshsize, TanhMeshStretching, UniformMeshsize, init_meshsize
from nsflow.parameters import MeshsizeType, Parameters


def make_parameters(dim=2, sizes=(10, 8, 6), lengths=(2.0, 1.0, 3.0), corner=(0, 0, 0)):
    parameters = Parameters()
    geometry = parameters.geometry
    geometry.dim = dim
    geometry.size_x, geometry.size_y, geometry.size_z = sizes
    geometry.length_x, geometry.length_y, geometry.length_z = lengths
    parameters.parallel.first_corner = list(corner)
    return parameters


def test_uniform_spacing_covers_domain():
    parameters = make_parameters()
    mesh = UniformMeshsize(parameters)
    assert mesh.dx(3, 4) * 10 == pytest.approx(2.0)
    assert mesh.dy(3, 4) * 8 == pytest.approx(1.0)
    assert mesh.dz(3, 4) == 0.0
    assert mesh.dx_min == mesh.dx(0, 0)
    assert mesh.dy_min == mesh.dy(0, 0)


def test_uniform_positions():
    parameters = make_parameters()
    mesh = UniformMeshsize(parameters)
    assert mesh.pos_x(2, 0) == 0.0
    assert mesh.pos_x(12, 0) == pytest.approx(2.0)
    assert mesh.pos_y(0, 10) == pytest.approx(1.0)
    assert mesh.pos_x(0, 0) == pytest.approx(-2 * mesh.dx_min)


def test_uniform_positions_respect_first_corner():
    parameters = make_parameters(corner=(5, 3, 0))
    mesh = UniformMeshsize(parameters)
    assert mesh.pos_x(2, 0) == pytest.approx(5 * mesh.dx_min)
    assert mesh.pos_y(0, 2) == pytest.approx(3 * mesh.dy_min)


def test_uniform_three_dimensional():
    parameters = make_parameters(dim=3)
    mesh = UniformMeshsize(parameters)
    assert mesh.dz(1, 1, 1) * 6 == pytest.approx(3.0)
    assert mesh.pos_z(0, 0, 8) == pytest.approx(3.0)


def test_uniform_rejects_non_positive_length():
    with pytest.raises(ValueError, match="dx"):
        UniformMeshsize(make_parameters(lengths=(-1.0, 1.0, 1.0)))
    with pytest.raises(ValueError, match="dy"):
        UniformMeshsize(make_parameters(lengths=(1.0, 0.0, 1.0)))
    with pytest.raises(ValueError, match="dz"):
        UniformMeshsize(make_parameters(dim=3, lengths=(1.0, 1.0, 0.0)))


def test_tanh_endpoints_match_domain():
    parameters = make_parameters()
    mesh = TanhMeshStretching(parameters, True, True, False)
    assert mesh.pos_x(2, 0) == pytest.approx(0.0, abs=1e-12)
    assert mesh.pos_x(12, 0) == pytest.approx(2.0)
    assert mesh.pos_y(0, 2) == pytest.approx(0.0, abs=1e-12)
    assert mesh.pos_y(0, 10) == pytest.approx(1.0)


def test_tanh_spacings_sum_to_length():
    parameters = make_parameters()
    mesh = TanhMeshStretching(parameters, True, False, False)
    total = math.fsum(mesh.dx(i, 0) for i in range(2, 12))
    assert total == pytest.approx(2.0)


def test_tanh_finest_at_walls_and_symmetric():
    parameters = make_parameters()
    mesh = TanhMeshStretching(parameters, True, False, False)
    spacings = [mesh.dx(i, 0) for i in range(2, 12)]
    assert spacings[0] == pytest.approx(mesh.dx_min)
    assert spacings[-1] == pytest.approx(mesh.dx_min)
    assert spacings == pytest.approx(spacings[::-1])
    assert all(a < b for a, b in zip(spacings[:4], spacings[1:5]))
    assert min(spacings) == pytest.approx(mesh.dx_min)


def test_tanh_ghost_cells_keep_outer_spacing():
    parameters = make_parameters()
    mesh = TanhMeshStretching(parameters, True, False, False)
    assert mesh.dx(0, 0) == pytest.approx(mesh.dx_min)
    assert mesh.dx(1, 0) == pytest.approx(mesh.dx_min)
    assert mesh.dx(12, 0) == pytest.approx(mesh.dx_min)


def test_tanh_unstretched_axis_is_uniform():
    parameters = make_parameters()
    mesh = TanhMeshStretching(parameters, True, False, False)
    uniform = UniformMeshsize(parameters)
    assert mesh.dy(3, 5) == uniform.dy(3, 5)
    assert mesh.pos_y(3, 5) == uniform.pos_y(3, 5)
    assert mesh.dy_min == uniform.dy_min
    assert mesh.dz_min == 0.0


def test_tanh_three_dimensional_z_stretching():
    parameters = make_parameters(dim=3)
    mesh = TanhMeshStretching(parameters, False, False, True)
    total = math.fsum(mesh.dz(0, 0, k) for k in range(2, 8))
    assert total == pytest.approx(3.0)
    assert mesh.dz(0, 0, 2) == pytest.approx(mesh.dz_min)
    assert mesh.dz_min < 3.0 / 6


def test_init_meshsize_uniform():
    parameters = make_parameters()
    parameters.geometry.meshsize_type = MeshsizeType.UNIFORM
    mesh = init_meshsize(parameters)
    assert isinstance(mesh, UniformMeshsize)
    assert parameters.meshsize is mesh


def test_init_meshsize_stretched():
    parameters = make_parameters()
    parameters.geometry.meshsize_type = MeshsizeType.TANH_STRETCHING
    parameters.geometry.stretch_x = True
    parameters.geometry.stretch_y = False
    parameters.geometry.stretch_z = False
    mesh = init_meshsize(parameters)
    assert isinstance(mesh, TanhMeshStretching)
    assert mesh.stretch_x and not mesh.stretch_y
    assert parameters.meshsize is mesh


def test_init_meshsize_unknown_type():
    parameters = make_parameters()
    parameters.geometry.meshsize_type = None
    with pytest.raises(ValueError, match="Unknown meshsize type"):
        init_meshsize(parameters)
    assert parameters.meshsize is None


def test_meshsize_is_abstract():
    with pytest.raises(TypeError):
        Meshsize()