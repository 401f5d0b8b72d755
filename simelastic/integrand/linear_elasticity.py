"""Linear elasticity integrand.

Holds the material and loads currently bound by the driver, and evaluates the
body force and boundary traction at integration points.
"""

from __future__ import annotations

import logging
from typing import Iterator, Optional, Sequence
from xml.etree.ElementTree import Element

import numpy as np

from simelastic.core.errors import InputError
from simelastic.core.fields import TractionFunc
from simelastic.core.functions import VecFunc
from simelastic.core.materials import LinearIsotropicMaterial
from simelastic.integrand.capabilities import LoadBindable, MaterialBindable

logger = logging.getLogger(__name__)

# Names of the material constants, in the order they appear on an input line
MATERIAL_CONSTANTS = ("E", "nu", "rho")


def _to_float(token: str, what: str) -> float:
    try:
        return float(token)
    except (TypeError, ValueError) as e:
        raise InputError(f"Invalid {what}: '{token}'") from e


class LinearElasticity(MaterialBindable, LoadBindable):
    """Integrand for small-strain linear elasticity.

    Attributes:
        nsd: Number of spatial dimensions
        axisymmetric: Axisymmetric formulation (2D only)
        gauss_points_vtf: Gauss point output to VTF (2D only)
        material: Currently bound material
        body_force: Currently bound body force field
        traction: Currently bound traction (vector or traction field)
        gravity: Gravitation vector, length nsd
        local_system: Local coordinate system specification, if any

    """

    def __init__(self, nsd: int, axisymmetric: bool = False, gauss_points_vtf: bool = False):
        if nsd not in (2, 3):
            raise ValueError(f"Number of spatial dimensions must be 2 or 3: nsd={nsd}")

        self.nsd = nsd
        self.axisymmetric = axisymmetric and nsd == 2
        self.gauss_points_vtf = gauss_points_vtf and nsd == 2

        self.material: Optional[LinearIsotropicMaterial] = None
        self.body_force: Optional[VecFunc] = None
        self.traction: Optional[VecFunc | TractionFunc] = None
        self.gravity = np.zeros(nsd)
        self.local_system: Optional[str] = None

        self.time = 0.0
        self.dt = 0.0
        self.dt_prev = 0.0

    # ------------------------------------------------------------------
    # Material input
    # ------------------------------------------------------------------

    def _make_material(self, values: dict, plane_strain: Optional[bool]) -> LinearIsotropicMaterial:
        try:
            material = LinearIsotropicMaterial(plane_strain=plane_strain, **values)
        except ValueError as e:
            raise InputError(str(e)) from e

        logger.debug(f"E = {material.E}, nu = {material.nu}, rho = {material.rho}")
        return material

    def parse_material_tokens(
        self, tokens: Iterator[str], plane_strain: Optional[bool] = None
    ) -> LinearIsotropicMaterial:
        values = {}
        for name in MATERIAL_CONSTANTS:
            token = next(tokens, None)
            if token is None:
                raise InputError(f"Missing material constant '{name}'")
            values[name] = _to_float(token, f"material constant '{name}'")

        return self._make_material(values, plane_strain)

    def parse_material_element(
        self, elem: Element, plane_strain: Optional[bool] = None
    ) -> LinearIsotropicMaterial:
        values = {}
        for name in MATERIAL_CONSTANTS:
            token = elem.get(name)
            if token is not None:
                values[name] = _to_float(token, f"attribute '{name}'")

        for required in ("E", "nu"):
            if required not in values:
                raise InputError(f"<{elem.tag}> is missing attribute '{required}'")

        return self._make_material(values, plane_strain)

    def set_material(self, material: Optional[LinearIsotropicMaterial]) -> None:
        self.material = material

    # ------------------------------------------------------------------
    # Loads
    # ------------------------------------------------------------------

    def set_body_force(self, field: Optional[VecFunc]) -> None:
        self.body_force = field

    def set_traction(self, field: Optional[VecFunc | TractionFunc]) -> None:
        self.traction = field

    def set_gravity(self, gx: float, gy: float, gz: float = 0.0) -> None:
        self.gravity = np.array([gx, gy, gz][: self.nsd], dtype=float)

    def parse_local_system(self, text: str) -> None:
        self.local_system = text.strip() or None
        logger.info(f"Local coordinate system: {self.local_system}")

    def parse_element(self, elem: Element) -> bool:
        """Parse the integrand-specific tags <gravity> and <localsystem>."""
        tag = elem.tag.lower()

        if tag == "gravity":
            g = [_to_float(elem.get(c, "0"), f"gravity component '{c}'") for c in ("x", "y", "z")]
            self.set_gravity(*g)
            logger.info(f"Gravitation vector: {' '.join(str(v) for v in self.gravity)}")
            return True

        if tag == "localsystem":
            self.parse_local_system(elem.text or "")
            return True

        return False

    def advance_step(self, dt: float, dt_prev: float) -> None:
        self.dt_prev = dt_prev
        self.dt = dt
        self.time += dt

    # ------------------------------------------------------------------
    # Evaluation at integration points
    # ------------------------------------------------------------------

    def body_force_at(self, X: Sequence[float], t: Optional[float] = None) -> np.ndarray:
        """Body force per unit volume: rho*g plus the bound body force field."""
        t = self.time if t is None else t
        f = np.zeros(self.nsd)

        if self.material is not None:
            f += self.material.rho * self.gravity
        if self.body_force is not None:
            f += np.asarray(self.body_force(X, t), dtype=float)[: self.nsd]

        return f

    def traction_at(
        self, X: Sequence[float], normal: Sequence[float], t: Optional[float] = None
    ) -> np.ndarray:
        """Boundary traction from the bound traction or vector field."""
        t = self.time if t is None else t
        if self.traction is None:
            return np.zeros(self.nsd)

        if isinstance(self.traction, TractionFunc):
            value = self.traction(X, normal, t)
        else:
            value = self.traction(X, t)
        return np.asarray(value, dtype=float)[: self.nsd]

    def stiffness_matrix(self) -> np.ndarray:
        """Constitutive matrix of the bound material."""
        if self.material is None:
            raise RuntimeError("No material bound to the integrand")
        return self.material.constitutive_matrix(self.nsd)
