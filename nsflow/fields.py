"""Structured-grid storage for scalar, vector and integer flag fields."""

from __future__ import annotations

from typing import Any

import numpy as np

from nsflow.assertion import check


class Field:
    """Flat array of ``components`` values per cell of an ``nx`` x ``ny`` x ``nz`` grid."""

    dtype: Any = np.float64

    def __init__(self, nx: int, ny: int, nz: int, components: int) -> None:
        self.nx = nx
        self.ny = ny
        self.nz = nz
        self.components = components
        self.size = components * nx * ny * nz
        self.data = np.zeros(self.size, dtype=self.dtype)

    def index(self, i: int, j: int, k: int = 0) -> int:
        """Position of cell (i, j, k) in the flat data array."""
        check(i < self.nx and j < self.ny and k < self.nz, "(i < nx) and (j < ny) and (k < nz)", i, j, k)
        check(i >= 0 and j >= 0 and k >= 0, "(i >= 0) and (j >= 0) and (k >= 0)", i, j, k)
        return self.components * (i + j * self.nx + k * self.nx * self.ny)

    @staticmethod
    def _unpack(key: Any) -> tuple[int, int, int]:
        if not isinstance(key, tuple) or len(key) not in (2, 3):
            raise TypeError("field index must be (i, j) or (i, j, k)")
        if len(key) == 2:
            return key[0], key[1], 0
        return key

    def __getitem__(self, key: Any) -> Any:
        position = self.index(*self._unpack(key))
        if self.components == 1:
            return self.data[position].item()
        return self.data[position : position + self.components]

    def __setitem__(self, key: Any, value: Any) -> None:
        position = self.index(*self._unpack(key))
        if self.components == 1:
            self.data[position] = value
        else:
            self.data[position : position + self.components] = value

    def _format(self, value: Any) -> str:
        if np.issubdtype(self.data.dtype, np.integer):
            return str(int(value))
        return format(float(value), "g")

    def show(self, title: str = "") -> None:
        """Print the field to stdout, top row first; vectors show their first two components."""
        lines = ["", f"--- {title} ---"]
        shown = 1 if self.components == 1 else min(2, self.components)
        for component in range(shown):
            if self.components > 1:
                lines.append(f"Component {component + 1}")
            for k in range(self.nz):
                for j in reversed(range(self.ny)):
                    lines.append(
                        "".join(
                            f"{self._format(self.data[self.index(i, j, k) + component])}\t"
                            for i in range(self.nx)
                        )
                    )
                lines.append("")
        print("\n".join(lines))


class ScalarField(Field):
    """One float per cell."""

    def __init__(self, nx: int, ny: int, nz: int = 1) -> None:
        super().__init__(nx, ny, nz, 1)


class VectorField(Field):
    """Two floats per cell in 2D, three in 3D."""

    def __init__(self, nx: int, ny: int, nz: int | None = None) -> None:
        if nz is None:
            super().__init__(nx, ny, 1, 2)
        else:
            super().__init__(nx, ny, nz, 3)

    def vector(self, i: int, j: int, k: int = 0) -> np.ndarray:
        """Writable view of the components at cell (i, j, k)."""
        position = self.index(i, j, k)
        return self.data[position : position + self.components]


class IntScalarField(Field):
    """One integer per cell, used for flags."""

    dtype = np.int64

    def __init__(self, nx: int, ny: int, nz: int = 1) -> None:
        super().__init__(nx, ny, nz, 1)