"""Traction fields applied on patch boundaries.

A traction field is evaluated at a boundary point with the outward unit
normal of the face: t = field(X, normal, t).
"""

from __future__ import annotations

from typing import Sequence, Union

import numpy as np

from simelastic.core.functions import RealFunc, STensorFunc


class TractionFunc:
    """Traction depending on position, outward normal and time."""

    def __call__(self, X: Sequence[float], normal: Sequence[float], t: float = 0.0) -> np.ndarray:
        raise NotImplementedError


class PressureField(TractionFunc):
    """Pressure load, constant or given by a scalar function.

    Attributes:
        pressure: Constant magnitude or scalar function of (X, t)
        direction: 0 for a load along the outward normal,
            1..3 for a load along the corresponding global axis

    """

    def __init__(self, pressure: Union[float, RealFunc], direction: int = 0):
        if direction < 0 or direction > 3:
            raise ValueError(f"Pressure direction must be in [0, 3]: direction={direction}")
        self.pressure = pressure
        self.direction = direction

    def magnitude(self, X: Sequence[float], t: float = 0.0) -> float:
        if isinstance(self.pressure, RealFunc):
            return self.pressure(X, t)
        return float(self.pressure)

    def __call__(self, X: Sequence[float], normal: Sequence[float], t: float = 0.0) -> np.ndarray:
        n = np.asarray(normal, dtype=float)
        p = self.magnitude(X, t)

        if self.direction == 0:
            return p * n

        traction = np.zeros_like(n)
        if self.direction <= len(n):
            traction[self.direction - 1] = p
        return traction

    def __repr__(self) -> str:
        return f"PressureField(pressure={self.pressure!r}, direction={self.direction})"


class TractionField(TractionFunc):
    """Traction derived from a stress field, t = sigma(X, t) . n"""

    def __init__(self, stress: STensorFunc):
        self.stress = stress

    def __call__(self, X: Sequence[float], normal: Sequence[float], t: float = 0.0) -> np.ndarray:
        n = np.asarray(normal, dtype=float)
        sigma = self.stress(X, t)
        return sigma[: len(n), : len(n)] @ n
