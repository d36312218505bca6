"""Parameters, XML configuration, domain decomposition, mesh spacing, flow fields and an SOR pressure solver for incompressible flow."""

__version__ = "0.1.0"

__all__ = [
    "assertion",
    "clock",
    "configuration",
    "fields",
    "flowfield",
    "meshsize",
    "parallel",
    "parameters",
    "patterns",
    "solvers",
]