"""Elasticity driver: property resolution and boundary condition binding.

The driver owns the material catalog and the analytical override slot on top
of the generic model data. Both input parsers populate it through the same
small command API (declare_material, assign_material, add_pressure,
set_pressure, bind_body_load, set_gravity, set_local_system). During assembly
the integration engine calls init_material, init_body_load and init_neumann
to bind the objects of a patch or boundary into the integrand.

Example usage:
    >>> from simelastic import ElasticityDriver
    >>> driver = ElasticityDriver(num_patches=2)
    >>> driver.read_legacy("ISOTROPIC 1\\n1 210e9 0.3 7850\\n")
    True
    >>> driver.preprocess()
    >>> driver.init_material(0)
    True
"""

from __future__ import annotations

import logging
import warnings
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, TextIO, Union
from xml.etree.ElementTree import Element

from simelastic.config.driver_config import ElasticityConfig, create_default_config
from simelastic.config.enums import PropertyKind
from simelastic.config.validation import validate_config
from simelastic.core.anasol import AnalyticalOverrideResolver
from simelastic.core.errors import InputError
from simelastic.core.fields import TractionFunc
from simelastic.core.functions import VecFunc
from simelastic.core.materials import LinearIsotropicMaterial, MaterialCatalog
from simelastic.core.properties import PropertyRecord
from simelastic.integrand.linear_elasticity import LinearElasticity
from simelastic.model.base import BaseModel
from simelastic.parsers.legacy import LegacyTextParser
from simelastic.parsers.tag_tree import TagTreeParser

logger = logging.getLogger(__name__)

# File suffixes read with the tag tree parser; everything else is legacy input
XML_SUFFIXES = (".xinp", ".xml")


class ElasticityDriver(BaseModel):
    """Driver for linear elastic analysis of patch-based models.

    Args:
        config: Driver configuration (defaults.yaml if None)
        num_patches: Number of patches in the global model
        owned_patches: Global numbers of the locally owned patches
        integrand: Integrand to bind into; created on demand if None

    """

    def __init__(
        self,
        config: Optional[ElasticityConfig] = None,
        num_patches: int = 1,
        owned_patches: Optional[Iterable[int]] = None,
        integrand: Optional[LinearElasticity] = None,
    ):
        self.config = config if config is not None else create_default_config()
        validate_config(self.config)

        super().__init__(self.config.dimension, num_patches, owned_patches)

        self.materials = MaterialCatalog()
        self.override = AnalyticalOverrideResolver()
        self.integrand = integrand

    @property
    def name(self) -> str:
        return "Elasticity"

    @property
    def a_code(self) -> int:
        """Property code bound to the analytical displacement field (0 if none)."""
        return self.override.a_code

    def get_integrand(self) -> LinearElasticity:
        """The integrand, created on first use."""
        if self.integrand is None:
            if self.dimension == 2:
                self.integrand = LinearElasticity(
                    2,
                    axisymmetric=self.config.axisymmetric,
                    gauss_points_vtf=self.config.gauss_points_vtf,
                )
            else:
                self.integrand = LinearElasticity(self.dimension)
        return self.integrand

    @property
    def plane_strain(self) -> Optional[bool]:
        """Plane strain flag handed to material parsing (None for 3D)."""
        return self.config.plane_strain if self.dimension == 2 else None

    # ------------------------------------------------------------------
    # Binding commands (used by both input parsers)
    # ------------------------------------------------------------------

    def declare_material(self, code: int, material: LinearIsotropicMaterial) -> int:
        """Add a material to the catalog and bind it to a property code.

        UNDEFINED records carrying the code become MATERIAL records pointing
        at the new catalog entry. If there are none, a MATERIAL record covering
        every patch is added. Records bound to something else are untouched.
        Codes <= 0 only add the material.

        Returns:
            Catalog index of the material

        """
        index = self.materials.append(material)
        if code > 0:
            self.assign_property(code, PropertyKind.MATERIAL, index)
        return index

    def assign_material(self, patch: int, index: int) -> bool:
        """Bind a catalog entry to a global patch number.

        Returns:
            False if the patch is not owned by this partition (nothing done)

        Raises:
            InputError: If the patch number is invalid

        """
        pid = self.local_patch_index(patch)
        if pid < 0:
            raise InputError(f"Invalid patch number {patch}")
        if pid < 1:
            return False

        self.properties.add(PropertyRecord(index, PropertyKind.MATERIAL, pid, 0, self.dimension))
        return True

    def add_pressure(self, code: int, patch: int, lindx: int, field: TractionFunc) -> PropertyRecord:
        """Bind a traction under a code and add a NEUMANN record for a local face.

        An existing traction under the same code is replaced.
        """
        self.loads.bind_traction(code, field)
        return self.properties.add(
            PropertyRecord(code, PropertyKind.NEUMANN, patch, lindx, self.dimension - 1)
        )

    def set_pressure(self, code: int, field: TractionFunc) -> None:
        """Bind a traction under a code whose records are declared elsewhere."""
        if self.properties.set_property_type(code, PropertyKind.NEUMANN) == 0:
            logger.debug(f"Pressure code {code} has no property records yet")
        if self.loads.has_traction(code):
            warnings.warn(
                f"Pressure code {code} already bound. Overwriting.",
                UserWarning,
                stacklevel=2,
            )
        self.loads.bind_traction(code, field)

    def bind_body_load(self, code: int, field: VecFunc) -> None:
        self.set_vec_property(code, PropertyKind.BODYLOAD, field)

    def set_gravity(self, gx: float, gy: float, gz: float = 0.0) -> None:
        self.get_integrand().set_gravity(gx, gy, gz)

    def set_local_system(self, text: str) -> None:
        self.get_integrand().parse_local_system(text)

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def read_legacy(self, source: Union[str, TextIO, Iterable[str]]) -> bool:
        """Parse line-oriented keyword input."""
        return LegacyTextParser(self).parse(source)

    def read_xml(self, source: Union[str, Path, Element]) -> bool:
        """Parse tag tree input (XML text, file path or element).

        A string that does not start with '<' is taken as a file name.
        """
        return TagTreeParser(self).parse(source)

    def read(self, path: Union[str, Path]) -> bool:
        """Parse an input file, choosing the syntax from its suffix."""
        path = Path(path)
        if path.suffix.lower() in XML_SUFFIXES:
            return self.read_xml(path)
        with open(path, encoding="utf-8") as f:
            return self.read_legacy(f)

    # ------------------------------------------------------------------
    # Pre-processing and assembly-time queries
    # ------------------------------------------------------------------

    def preprocess(self) -> None:
        """Resolve boundary conditions derived from the analytical solution.

        Makes sure the integrand exists, then rewrites every DIRICHLET_ANASOL
        and NEUMANN_ANASOL record. Does nothing more if no analytical solution
        is attached. Running it again has no further effect.
        """
        self.get_integrand()
        self.print_problem()

        if self.analytical_solution is None:
            return

        self.override.resolve(self.properties, self.analytical_solution, self.loads)

    def init_material(self, index: int) -> bool:
        """Bind the catalog material for a property index (clamped to the last)."""
        if self.integrand is None:
            return False
        if len(self.materials) == 0:
            logger.warning("No materials defined")
            return False

        self.integrand.set_material(self.materials.at(index))
        return True

    def init_body_load(self, patch: int) -> bool:
        """Bind the body load of a local patch (or none if it has no body load)."""
        if self.integrand is None:
            return False

        self.integrand.set_body_force(self.get_vec_func(patch, PropertyKind.BODYLOAD))
        return True

    def init_neumann(self, code: int) -> bool:
        """Bind the field of a Neumann property code.

        A vector field bound under the code is preferred over a traction.

        Returns:
            False if no integrand is attached or nothing is bound under the code

        """
        if self.integrand is None:
            return False

        field = self.loads.resolve_neumann(code)
        if field is None:
            return False

        self.integrand.set_traction(field)
        return True

    def advance_step(self, dt: float, dt_prev: float) -> bool:
        if self.integrand is not None:
            self.integrand.advance_step(dt, dt_prev)
        return True

    # ------------------------------------------------------------------
    # Lifecycle and reporting
    # ------------------------------------------------------------------

    def clear_properties(self) -> None:
        """Release materials, loads and records; unbind the analytical override.

        The analytical displacement field is borrowed from the analytical
        solution, so it is evicted from the loads before they are released.
        """
        self.override.release(self.loads)

        if self.integrand is not None:
            self.integrand.set_material(None)
            self.integrand.set_body_force(None)
            self.integrand.set_traction(None)

        self.materials.clear()
        super().clear_properties()

    def summary(self) -> Dict[str, Any]:
        kinds = {kind.value: self.properties.count(kind) for kind in PropertyKind}
        return {
            "name": self.name,
            "dimension": self.dimension,
            "num_patches": self.num_patches,
            "num_local_patches": self.num_local_patches,
            "num_materials": len(self.materials),
            "num_properties": len(self.properties),
            "properties": {k: n for k, n in kinds.items() if n > 0},
            "vector_field_codes": self.loads.vector_codes(),
            "traction_codes": self.loads.traction_codes(),
            "analytical_code": self.a_code,
        }

    def print_problem(self) -> None:
        info = self.summary()
        logger.info(
            f"{info['name']} problem: {info['dimension']}D, "
            f"{info['num_local_patches']}/{info['num_patches']} local patches, "
            f"{info['num_materials']} material(s), {info['num_properties']} property record(s)"
        )
        if self.dimension == 2:
            logger.info(
                f"Plane {'strain' if self.config.plane_strain else 'stress'}"
                f"{', axisymmetric' if self.config.axisymmetric else ''}"
            )
