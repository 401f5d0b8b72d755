"""Tag tree (XML) input for the elasticity driver.

The elasticity section is the element named by the configured context
(<elasticity> by default):

    <simulation>
      <topologysets>
        <set name="Body" type="volume"><item patch="1"/></set>
      </topologysets>
      <elasticity>
        <isotropic set="Body" E="210e9" nu="0.3" rho="7850"/>
        <bodyforce set="Body" type="constant">0 0 -9.81</bodyforce>
        <gravity x="0" y="0" z="-9.81"/>
      </elasticity>
    </simulation>

All other top-level sections, and tags inside the elasticity section that
neither this parser nor the integrand recognises, go to the model's common
tag parser.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Union
from xml.etree import ElementTree
from xml.etree.ElementTree import Element

from simelastic.core.errors import InputError
from simelastic.core.functions import parse_vec_func

if TYPE_CHECKING:
    from simelastic.model.driver import ElasticityDriver

logger = logging.getLogger(__name__)


class TagTreeParser:
    """Tag dispatcher for the tag tree input format."""

    def __init__(self, driver: "ElasticityDriver"):
        self.driver = driver

    @staticmethod
    def load(source: Union[str, Path, Element]) -> Element:
        """Root element of XML text, an XML file, or an element.

        A string is read as XML text when its first non-blank character is
        '<', and as a file name otherwise.

        Raises:
            InputError: If the XML is not well formed
            FileNotFoundError: If a path is given that does not exist

        """
        if isinstance(source, Element):
            return source
        if isinstance(source, str) and not source.lstrip().startswith("<"):
            source = Path(source)
        try:
            if isinstance(source, Path):
                return ElementTree.parse(source).getroot()
            return ElementTree.fromstring(source)
        except ElementTree.ParseError as e:
            raise InputError(f"Malformed XML input: {e}") from e

    def parse(self, source: Union[str, Path, Element]) -> bool:
        """Parse a document.

        Returns:
            True on success, False (with the diagnostic logged) on failure

        """
        try:
            root = self.load(source)
            if self._is_context(root):
                self.parse_element(root)
            else:
                for elem in root:
                    self.parse_element(elem)
        except InputError as e:
            logger.error(f"XML input: {e}")
            return False
        return True

    def _is_context(self, elem: Element) -> bool:
        return elem.tag.lower() == self.driver.config.context.lower()

    def parse_element(self, elem: Element) -> None:
        """Parse one top-level section."""
        if not self._is_context(elem):
            self.driver.parse_element(elem)
            return

        logger.info(f"Parsing <{elem.tag}>")
        for child in elem:
            tag = child.tag.lower()
            if tag == "isotropic":
                self._parse_isotropic(child)
            elif tag == "bodyforce":
                self._parse_bodyforce(child)
            elif not self.driver.get_integrand().parse_element(child):
                self.driver.parse_element(child)

    def _parse_isotropic(self, elem: Element) -> None:
        code = self.driver.element_property_code(elem, 0)
        material = self.driver.get_integrand().parse_material_element(elem, self.driver.plane_strain)
        self.driver.declare_material(code, material)
        logger.info(f"\tMaterial code {code}: E = {material.E}, nu = {material.nu}, rho = {material.rho}")

    def _parse_bodyforce(self, elem: Element) -> None:
        code = self.driver.element_property_code(elem, self.driver.config.bodyforce_comp)
        text = (elem.text or "").strip()
        if not text or code <= 0:
            return

        func_type = elem.get("type", "").lower()
        logger.info(f"\tBodyforce code {code}" + (f" ({func_type})" if func_type else ""))
        self.driver.bind_body_load(code, parse_vec_func(text, func_type))
