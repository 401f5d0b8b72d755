"""Linear isotropic material and the material catalog.

The catalog owns every material parsed from the input. Property records of
kind MATERIAL refer to materials by catalog index.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional

import numpy as np


@dataclass
class LinearIsotropicMaterial:
    """Linear elastic isotropic material.

    Attributes:
        E: Young's modulus
        nu: Poisson's ratio
        rho: Mass density
        plane_strain: Plane strain (True) / plane stress (False) for 2D
            models, None for 3D models

    """

    E: float
    nu: float
    rho: float = 0.0
    plane_strain: Optional[bool] = None

    def __post_init__(self):
        """Validate material constants."""
        if self.E <= 0:
            raise ValueError(f"Young's modulus must be positive: E={self.E}")

        if not (-1.0 < self.nu < 0.5):
            raise ValueError(f"Poisson's ratio must be in (-1, 0.5): nu={self.nu}")

        if self.rho < 0:
            raise ValueError(f"Mass density must be non-negative: rho={self.rho}")

    @property
    def lame_parameters(self) -> tuple[float, float]:
        """(lambda, mu) of the material."""
        mu = 0.5 * self.E / (1.0 + self.nu)
        lam = self.E * self.nu / ((1.0 + self.nu) * (1.0 - 2.0 * self.nu))
        return lam, mu

    def constitutive_matrix(self, nsd: int) -> np.ndarray:
        """Elasticity matrix in Voigt notation.

        Args:
            nsd: Number of spatial dimensions (2 or 3)

        Returns:
            (3, 3) matrix for 2D, (6, 6) matrix for 3D

        """
        lam, mu = self.lame_parameters

        if nsd == 2:
            if not self.plane_strain:
                # Plane stress reduced lambda
                lam = 2.0 * lam * mu / (lam + 2.0 * mu)
            C = np.zeros((3, 3))
            C[:2, :2] = lam
            C[0, 0] = C[1, 1] = lam + 2.0 * mu
            C[2, 2] = mu
            return C

        if nsd != 3:
            raise ValueError(f"Unsupported number of spatial dimensions: {nsd}")

        C = np.zeros((6, 6))
        C[:3, :3] = lam
        C[np.arange(3), np.arange(3)] = lam + 2.0 * mu
        C[np.arange(3, 6), np.arange(3, 6)] = mu
        return C


class MaterialCatalog:
    """Ordered, exclusively owned sequence of materials.

    Lookups past the end are clamped to the last entry: the last parsed
    material acts as the default for every index without its own entry.
    """

    def __init__(self):
        self._materials: list[LinearIsotropicMaterial] = []

    def append(self, material: LinearIsotropicMaterial) -> int:
        """Add a material and return its catalog index."""
        self._materials.append(material)
        return len(self._materials) - 1

    def at(self, index: int) -> LinearIsotropicMaterial:
        """Material at index, clamped to the last entry.

        Raises:
            IndexError: If the catalog is empty or the index is negative

        """
        if not self._materials:
            raise IndexError("Material catalog is empty")
        if index < 0:
            raise IndexError(f"Negative material index: {index}")

        if index >= len(self._materials):
            index = len(self._materials) - 1
        return self._materials[index]

    def clear(self) -> None:
        self._materials.clear()

    def __len__(self) -> int:
        return len(self._materials)

    def __iter__(self) -> Iterator[LinearIsotropicMaterial]:
        return iter(self._materials)
