"""Capability interfaces the driver needs from an integrand.

The driver only talks to its integrand through these two interfaces, so any
integrand implementing both can be attached without type inspection.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterator, Optional
from xml.etree.ElementTree import Element

from simelastic.core.fields import TractionFunc
from simelastic.core.functions import VecFunc
from simelastic.core.materials import LinearIsotropicMaterial


class MaterialBindable(ABC):
    """Integrand that parses and binds materials."""

    @abstractmethod
    def parse_material_tokens(
        self, tokens: Iterator[str], plane_strain: Optional[bool] = None
    ) -> LinearIsotropicMaterial:
        """Create a material from the next tokens of an input line."""

    @abstractmethod
    def parse_material_element(
        self, elem: Element, plane_strain: Optional[bool] = None
    ) -> LinearIsotropicMaterial:
        """Create a material from the attributes of a tag."""

    @abstractmethod
    def set_material(self, material: Optional[LinearIsotropicMaterial]) -> None:
        """Bind the material used for the next patch."""


class LoadBindable(ABC):
    """Integrand that accepts loads and load-related input."""

    @abstractmethod
    def set_body_force(self, field: Optional[VecFunc]) -> None:
        """Bind the body force used for the next patch."""

    @abstractmethod
    def set_traction(self, field: Optional[VecFunc | TractionFunc]) -> None:
        """Bind the traction used for the next Neumann boundary."""

    @abstractmethod
    def set_gravity(self, gx: float, gy: float, gz: float = 0.0) -> None:
        """Set the gravitation vector."""

    @abstractmethod
    def parse_local_system(self, text: str) -> None:
        """Select the local coordinate system for result output."""

    @abstractmethod
    def advance_step(self, dt: float, dt_prev: float) -> None:
        """Move to the next time step."""

    @abstractmethod
    def parse_element(self, elem: Element) -> bool:
        """Parse an integrand-specific tag. Returns False if not recognised."""
