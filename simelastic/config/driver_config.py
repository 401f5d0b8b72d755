"""Driver Configuration

Explicit configuration for one elasticity driver instance. The plane strain,
axisymmetry and Gauss point export options are carried here and handed to the
driver at construction; there is no shared mutable state between drivers.

Import Policy:
    from simelastic.config.driver_config import ElasticityConfig, create_default_config

DO NOT use: from simelastic.config.driver_config import *
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from pathlib import Path

import yaml

from simelastic.config.defaults import (
    BODYFORCE_COMP_2D,
    BODYFORCE_COMP_3D,
    DEFAULT_AXISYMMETRIC,
    DEFAULT_CONTEXT,
    DEFAULT_DIMENSION,
    DEFAULT_GAUSS_POINTS_VTF,
    DEFAULT_PLANE_STRAIN,
)
from simelastic.config.yaml_loader import get_default


@dataclass
class ElasticityConfig:
    """Configuration of an elasticity driver.

    Attributes:
        dimension: Spatial dimension of the model (2 or 3)
        plane_strain: Plane strain (True) or plane stress (False), 2D only
        axisymmetric: Axisymmetric formulation, 2D only
        gauss_points_vtf: Gauss point output to VTF, 2D only
        context: XML tag of the elasticity input section

    """

    dimension: int = DEFAULT_DIMENSION
    plane_strain: bool = DEFAULT_PLANE_STRAIN
    axisymmetric: bool = DEFAULT_AXISYMMETRIC
    gauss_points_vtf: bool = DEFAULT_GAUSS_POINTS_VTF
    context: str = DEFAULT_CONTEXT

    @property
    def bodyforce_comp(self) -> int:
        """Component code used for body forces assigned through a named set."""
        if self.dimension == 2:
            return get_default("property_codes.bodyforce_comp_2d", BODYFORCE_COMP_2D)
        return get_default("property_codes.bodyforce_comp_3d", BODYFORCE_COMP_3D)

    def validate(self) -> list[str]:
        """Validate the configuration.

        Returns:
            List of error messages (empty if valid)

        """
        errors = []

        if self.dimension not in (2, 3):
            errors.append(f"dimension must be 2 or 3, got {self.dimension}")

        if not self.context:
            errors.append("context tag must be a non-empty string")

        if self.dimension != 2:
            if self.plane_strain:
                errors.append("plane_strain is only meaningful for 2D models")
            if self.axisymmetric:
                errors.append("axisymmetric is only meaningful for 2D models")
            if self.gauss_points_vtf:
                errors.append("gauss_points_vtf is only meaningful for 2D models")
        elif self.plane_strain and self.axisymmetric:
            errors.append("plane_strain and axisymmetric are mutually exclusive")

        return errors

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "ElasticityConfig":
        """Create configuration from a dictionary laid out like defaults.yaml.

        Flat dictionaries (as produced by to_dict) are accepted as well.
        """
        driver = data.get("driver", data)
        two_d = data.get("two_dimensional", data)

        return cls(
            dimension=int(driver.get("dimension", DEFAULT_DIMENSION)),
            plane_strain=bool(two_d.get("plane_strain", DEFAULT_PLANE_STRAIN)),
            axisymmetric=bool(two_d.get("axisymmetric", DEFAULT_AXISYMMETRIC)),
            gauss_points_vtf=bool(two_d.get("gauss_points_vtf", DEFAULT_GAUSS_POINTS_VTF)),
            context=str(driver.get("context", DEFAULT_CONTEXT)),
        )

    @classmethod
    def from_yaml(cls, yaml_path: str | Path) -> "ElasticityConfig":
        """Load configuration from a YAML file.

        Raises:
            FileNotFoundError: If the file doesn't exist

        """
        path = Path(yaml_path)
        if not path.exists():
            raise FileNotFoundError(f"Driver config not found: {yaml_path}")

        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        return cls.from_dict(data)


def create_default_config(dimension: int | None = None) -> ElasticityConfig:
    """Create a configuration from defaults.yaml.

    Args:
        dimension: Optional override of the spatial dimension. The 2D-only
            options from defaults.yaml are dropped for 3D models.

    Returns:
        Valid ElasticityConfig instance

    """
    dim = dimension if dimension is not None else get_default("driver.dimension", DEFAULT_DIMENSION)
    two_d = dim == 2

    config = ElasticityConfig(
        dimension=dim,
        plane_strain=two_d and get_default("two_dimensional.plane_strain", DEFAULT_PLANE_STRAIN),
        axisymmetric=two_d and get_default("two_dimensional.axisymmetric", DEFAULT_AXISYMMETRIC),
        gauss_points_vtf=two_d and get_default("two_dimensional.gauss_points_vtf", DEFAULT_GAUSS_POINTS_VTF),
        context=get_default("driver.context", DEFAULT_CONTEXT),
    )

    errors = config.validate()
    if errors:
        raise ValueError("Default configuration is invalid:\n" + "\n".join(errors))

    return config
