# nsflow

Building blocks for simulating incompressible flow with the Navier-Stokes
equations on a staggered grid in two or three dimensions. The package reads an
XML scenario file and splits the domain into blocks for a grid of processes. It
computes uniform or tanh-stretched mesh spacing, holds the flow state in
ghost-layered numpy-backed fields, and solves the pressure Poisson equation by
successive over-relaxation.

## Installing

```
pip install .
pip install ".[test]"
```

The second command also installs pytest, which the test suite needs.

## Modules

- `nsflow.parameters`: the `Parameters` dataclass and its sections.
  - The sections are `simulation`, `timestep`, `environment`, `flow`, `solver`,
    `geometry`, `walls`, `vtk`, `parallel`, `std_out` and `bf_step`.
  - There is also a `meshsize` slot.
  - The module defines the `BoundaryType` (`DIRICHLET`, `NEUMANN`, `PERIODIC`)
    and `MeshsizeType` (`UNIFORM`, `TANH_STRETCHING`) enums.
- `nsflow.configuration`: `Configuration(filename).load_parameters(parameters)`
  fills a `Parameters` object from an XML file and returns it. A missing,
  unparsable or inconsistent entry raises `ConfigurationError`.
- `nsflow.parallel`: `ParallelConfiguration(parameters, rank=0, nproc=1)` works
  out the decomposition for one rank:
  - the block indices and the neighbouring ranks, where `None` means there is
    no neighbour;
  - the local size and first corner of the rank's block;
  - the block sizes per axis.

  It raises `ValueError` when `nproc` does not match the process grid given in
  the file. `compute_rank_from_indices(i, j, k)` maps block indices to a rank.
- `nsflow.meshsize`: `UniformMeshsize` and `TanhMeshStretching` give
  `dx`/`dy`/`dz`, the corner positions `pos_x`/`pos_y`/`pos_z`, and the
  smallest spacing `dx_min`/`dy_min`/`dz_min`. `init_meshsize(parameters)`
  builds the one named by the geometry, stores it in `parameters.meshsize` and
  returns it.
- `nsflow.fields`: `ScalarField`, `VectorField` (two components in 2D, three
  in 3D) and `IntScalarField`.
  - Index them as `field[i, j]` or `field[i, j, k]`.
  - `VectorField.vector(i, j, k)` returns a writable view of a cell's
    components.
  - `show(title)` prints a field.
- `nsflow.flowfield`: `FlowField(nx, ny)` or `FlowField(nx, ny, nz)` holds
  `pressure`, `velocity`, `flags`, `fgh` and `rhs`. Each field has two ghost
  layers on the low side and one on the high side of every axis.
  - `FlowField.from_parameters(parameters)` sizes the field from the local block.
  - `pressure_and_velocity(i, j[, k])` returns the pressure and the
    cell-centred velocity of a cell.
- `nsflow.solvers`: `SORSolver(flow_field, parameters).solve()` updates the
  pressure in place and returns the number of sweeps taken.
  - It uses relaxation factor 1.7 and RMS residual tolerance 1e-4, with Neumann
    conditions on the pressure ghost layers.
  - `LinearSolver` is the abstract base.
- `nsflow.clock`: `Clock` has `elapsed()` (nanoseconds since creation),
  `date()`, `Clock.sleep(msec)` and `Clock.format_hms(ns)` (`HH:MM:SS`).
- `nsflow.assertion`: `check(condition, message, *args)` and
  `fire(message, *args)` raise `AssertionException` with the location and a
  stack trace.
  - Exceptions can be switched off through the module flag
    `throw_assertion_exception`; the process then gets a trap signal instead.
  - `exceptions_enabled()` is a context manager that switches them on for a
    block.
- `nsflow.patterns`: `Singleton` gives one lazily created instance per
  subclass through `instance()`. `Singularity` allows one live instance at a
  time and has `current()`, `current_or_none()` and `release()`. It can also be
  used as a context manager.

## Configuration file

The root element may have any name. Its children are read as follows:

```xml
<configuration>
  <geometry dim="2" sizeX="10" sizeY="10" lengthX="1.0" lengthY="1.0" lengthZ="1.0">
    <mesh>uniform</mesh>
  </geometry>
  <timestep dt="1" tau="0.5" />
  <flow Re="100" />
  <solver gamma="0.5" />
  <environment gx="0" gy="0" gz="0" />
  <simulation finalTime="10.0">
    <type>dns</type>
    <scenario>cavity</scenario>
  </simulation>
  <vtk interval="0.1">Cavity2D</vtk>
  <stdOut interval="0.1" />
  <parallel numProcessorsX="1" numProcessorsY="1" numProcessorsZ="1" />
  <walls>
    <top><vector x="1.0" y="0" z="0" /></top>
  </walls>
</configuration>
```

Notes on the geometry element:

- `sizeZ` defaults to 0.
- If `dim` is absent or 0, a `sizeZ` of 0 gives a 2D run; any other `sizeZ`
  gives a 3D run.
- `lengthZ` is required even in 2D.
- A `stretched` mesh also needs `stretchX` and `stretchY`, plus `stretchZ` in
  3D.

Each wall (`left`, `right`, `bottom`, `top`, `front`, `back`) may have a
`vector` element and a `scalar value` element. After loading, every wall
scalar is reset to zero. The one exception is the left one in the
`pressure-channel` scenario.

An optional `backwardFacingStep` element takes `xRatio` and `yRatio`. Without
it, both are -1.

## Example

```python
from nsflow.configuration import Configuration
from nsflow.flowfield import FlowField
from nsflow.meshsize import init_meshsize
from nsflow.parallel import ParallelConfiguration
from nsflow.parameters import Parameters
from nsflow.solvers import SORSolver

parameters = Configuration("Cavity2D.xml").load_parameters(Parameters())
ParallelConfiguration(parameters, rank=0, nproc=1)
init_meshsize(parameters)

flow_field = FlowField.from_parameters(parameters)
flow_field.rhs[5, 5] = 1.0
sweeps = SORSolver(flow_field, parameters).solve()
```

## What it does not do

nsflow is a library of parts, not a complete simulation program. It does not
provide the following:

- a command-line program or time-stepping loop;
- computation of the FGH terms, the right-hand side or the velocity update;
- boundary conditions for the velocity or FGH fields, or obstacle flagging;
- initial conditions for particular scenarios;
- VTK output;
- any communication between processes. `ParallelConfiguration` only computes
  the decomposition, and `SORSolver` works on a single block.

## Running the tests

```
pytest
```