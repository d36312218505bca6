"""Reading simulation parameters from an XML configuration file."""

from __future__ import annotations

import logging
import os
import re
import xml.etree.ElementTree as ET
from collections.abc import Callable
from typing import TypeVar

from nsflow.parameters import MeshsizeType, Parameters

_log = logging.getLogger(__name__)

_T = TypeVar("_T")

_HEX_PREFIX = re.compile(r"\s*0[xX]([0-9a-fA-F]+)")
_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")
_FLOAT_PREFIX = re.compile(
    r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|[+-]?(?:infinity|inf|nan))",
    re.IGNORECASE,
)
_TRUE_WORDS = ("true", "True", "TRUE")
_FALSE_WORDS = ("false", "False", "FALSE")


class ConfigurationError(RuntimeError):
    """Raised when a configuration file is missing, malformed or inconsistent."""


class _WrongAttributeType(Exception):
    pass


def _parse_int(text: str) -> int | None:
    match = _HEX_PREFIX.match(text)
    if match:
        return int(match.group(1), 16)
    match = _INT_PREFIX.match(text)
    return int(match.group(1)) if match else None


def _parse_float(text: str) -> float | None:
    match = _FLOAT_PREFIX.match(text)
    return float(match.group(1)) if match else None


def _parse_bool(text: str) -> bool | None:
    number = _parse_int(text)
    if number is not None:
        return number != 0
    if text in _TRUE_WORDS:
        return True
    if text in _FALSE_WORDS:
        return False
    return None


def _query(node: ET.Element, tag: str, parse: Callable[[str], _T | None]) -> _T | None:
    """Return the parsed attribute, None when absent; raise when it does not parse."""
    text = node.get(tag)
    if text is None:
        return None
    value = parse(text)
    if value is None:
        raise _WrongAttributeType(tag)
    return value


def _mandatory(node: ET.Element, tag: str, parse: Callable[[str], _T | None]) -> _T:
    try:
        value = _query(node, tag, parse)
    except _WrongAttributeType:
        value = None
    if value is None:
        raise ConfigurationError("Error while reading mandatory argument")
    return value


def _optional(node: ET.Element, tag: str, parse: Callable[[str], _T | None], default: _T) -> _T:
    try:
        value = _query(node, tag, parse)
    except _WrongAttributeType:
        raise ConfigurationError("Error while reading optional argument") from None
    return default if value is None else value


def _float_mandatory(node: ET.Element, tag: str) -> float:
    return _mandatory(node, tag, _parse_float)


def _float_optional(node: ET.Element, tag: str, default: float = 0.0) -> float:
    return _optional(node, tag, _parse_float, float(default))


def _int_mandatory(node: ET.Element, tag: str) -> int:
    return _mandatory(node, tag, _parse_int)


def _int_optional(node: ET.Element, tag: str, default: int = 0) -> int:
    return _optional(node, tag, _parse_int, default)


def _bool_mandatory(node: ET.Element, tag: str) -> bool:
    return _mandatory(node, tag, _parse_bool)


def _string_mandatory(node: ET.Element | None, name: str) -> str:
    if node is None:
        raise ConfigurationError(f"Missing '{name}' element")
    text = (node.text or "").strip()
    if not text:
        _log.error("No string specified for this node: %s", node.tag)
        raise ConfigurationError("Error while reading mandatory string")
    return text


def _section(root: ET.Element, tag: str, what: str) -> ET.Element:
    node = root.find(tag)
    if node is None:
        raise ConfigurationError(f"Error loading {what}")
    return node


def _read_wall(wall: ET.Element, vector: list[float], scalar: float) -> float:
    """Fill ``vector`` in place from the wall element and return the scalar value."""
    quantity = wall.find("vector")
    if quantity is not None:
        vector[0] = _float_optional(quantity, "x")
        vector[1] = _float_optional(quantity, "y")
        vector[2] = _float_optional(quantity, "z")
    quantity = wall.find("scalar")
    if quantity is not None:
        scalar = _float_optional(quantity, "value")
    return scalar


class Configuration:
    """Loads a configuration file into a :class:`Parameters` object."""

    def __init__(self, filename: str | os.PathLike[str] = "") -> None:
        self.filename = filename
        self.dim: int | None = None

    def _root(self) -> ET.Element:
        try:
            return ET.parse(self.filename).getroot()
        except (OSError, ET.ParseError) as error:
            raise ConfigurationError("Error parsing the configuration file") from error

    def load_parameters(self, parameters: Parameters) -> Parameters:
        """Read every section of the file into ``parameters`` and return it."""
        root = self._root()
        self._load_geometry(root, parameters)
        self.dim = parameters.geometry.dim

        node = _section(root, "timestep", "timestep parameters")
        parameters.timestep.dt = _float_optional(node, "dt", 1.0)
        parameters.timestep.tau = _float_optional(node, "tau", 0.5)

        node = _section(root, "flow", "flow parameters")
        parameters.flow.re = _float_mandatory(node, "Re")

        node = _section(root, "solver", "solver parameters")
        parameters.solver.gamma = _float_mandatory(node, "gamma")
        parameters.solver.max_iterations = _int_optional(node, "maxIterations")

        node = _section(root, "environment", "environmental parameters")
        parameters.environment.gx = _float_optional(node, "gx")
        parameters.environment.gy = _float_optional(node, "gy")
        parameters.environment.gz = _float_optional(node, "gz")

        node = _section(root, "simulation", "simulation parameters")
        parameters.simulation.final_time = _float_mandatory(node, "finalTime")
        sub = node.find("type")
        if sub is None:
            raise ConfigurationError("Missing type in simulation parameters")
        parameters.simulation.type = _string_mandatory(sub, "type")
        sub = node.find("scenario")
        if sub is None:
            raise ConfigurationError("Missing scenario in simulation parameters")
        parameters.simulation.scenario = _string_mandatory(sub, "scenario")

        node = _section(root, "vtk", "VTK parameters")
        parameters.vtk.interval = _float_optional(node, "interval")
        parameters.vtk.prefix = _string_mandatory(node, "vtk")

        node = _section(root, "stdOut", "StdOut parameters")
        parameters.std_out.interval = _float_optional(node, "interval", 1.0)

        self._load_parallel(root, parameters)
        self._load_walls(root, parameters)

        parameters.bf_step.x_ratio = -1.0
        parameters.bf_step.y_ratio = -1.0
        node = root.find("backwardFacingStep")
        if node is not None:
            parameters.bf_step.x_ratio = _float_mandatory(node, "xRatio")
            parameters.bf_step.y_ratio = _float_mandatory(node, "yRatio")

        return parameters

    @staticmethod
    def _load_geometry(root: ET.Element, parameters: Parameters) -> None:
        geometry = parameters.geometry
        node = _section(root, "geometry", "geometry properties")

        geometry.size_x = _int_mandatory(node, "sizeX")
        geometry.size_y = _int_mandatory(node, "sizeY")
        geometry.size_z = _int_optional(node, "sizeZ")
        if geometry.size_x < 2 or geometry.size_y < 2 or geometry.size_z < 0:
            raise ConfigurationError("Invalid size specified in configuration file")

        geometry.dim = 0
        try:
            dim = _query(node, "dim", _parse_int)
        except _WrongAttributeType:
            pass
        else:
            if dim is not None:
                geometry.dim = dim
            if geometry.dim == 0:
                if geometry.size_z == 0:
                    geometry.size_z = 1
                    geometry.dim = 2
                else:
                    geometry.dim = 3

        if geometry.dim == 3 and geometry.size_z == 1:
            raise ConfigurationError("Inconsistent data: 3D geometry specified with Z size zero")
        if geometry.dim == 2 and geometry.size_z != 1:
            geometry.size_z = 1

        geometry.length_x = _float_mandatory(node, "lengthX")
        geometry.length_y = _float_mandatory(node, "lengthY")
        geometry.length_z = _float_mandatory(node, "lengthZ")

        mesh = _string_mandatory(node.find("mesh"), "mesh")
        if mesh == "uniform":
            geometry.meshsize_type = MeshsizeType.UNIFORM
        elif mesh == "stretched":
            geometry.meshsize_type = MeshsizeType.TANH_STRETCHING
            geometry.stretch_x = _bool_mandatory(node, "stretchX")
            geometry.stretch_y = _bool_mandatory(node, "stretchY")
            geometry.stretch_z = _bool_mandatory(node, "stretchZ") if geometry.dim == 3 else False
        else:
            raise ConfigurationError("Unknown 'mesh'!")

    @staticmethod
    def _load_parallel(root: ET.Element, parameters: Parameters) -> None:
        parallel = parameters.parallel
        geometry = parameters.geometry
        node = _section(root, "parallel", "parallel parameters")
        parallel.num_processors = [
            _int_optional(node, "numProcessorsX", 1),
            _int_optional(node, "numProcessorsY", 1),
            _int_optional(node, "numProcessorsZ", 1),
        ]
        # Defaults for a run without domain decomposition.
        parallel.left_nb = None
        parallel.right_nb = None
        parallel.bottom_nb = None
        parallel.top_nb = None
        parallel.front_nb = None
        parallel.back_nb = None
        parallel.local_size = [geometry.size_x, geometry.size_y, geometry.size_z]
        parallel.first_corner = [0, 0, 0]
        parallel.rank = 0

    @staticmethod
    def _load_walls(root: ET.Element, parameters: Parameters) -> None:
        walls = parameters.walls
        node = _section(root, "walls", "wall parameters")

        for side in ("left", "right", "bottom", "top", "front", "back"):
            wall = node.find(side)
            if wall is not None:
                scalar = _read_wall(wall, getattr(walls, f"vector_{side}"), getattr(walls, f"scalar_{side}"))
                setattr(walls, f"scalar_{side}", scalar)

        # Only the pressure channel keeps a fixed pressure on the left wall.
        if parameters.simulation.scenario != "pressure-channel":
            walls.scalar_left = 0.0
        walls.scalar_right = 0.0
        walls.scalar_bottom = 0.0
        walls.scalar_top = 0.0
        walls.scalar_front = 0.0
        walls.scalar_back = 0.0