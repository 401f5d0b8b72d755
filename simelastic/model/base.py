"""Generic model: patch partition, property records, load bindings.

This is the part of a simulation model that does not depend on the physics.
It translates global patch numbers to the local partition, keeps named
topology sets, owns the property registry and the load binding maps, and
parses the input sections that are common to all problem types.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional
from xml.etree.ElementTree import Element

from simelastic.config.defaults import PROPERTY_CODE_STRIDE
from simelastic.config.enums import PropertyKind
from simelastic.config.yaml_loader import get_default
from simelastic.core.anasol import AnalyticalSolution
from simelastic.core.errors import InputError
from simelastic.core.fields import PressureField
from simelastic.core.functions import VecFunc, parse_real_func, parse_stensor_func, parse_vec_func
from simelastic.core.loads import LoadBindingResolver
from simelastic.core.properties import PropertyRecord, PropertyRegistry
from simelastic.parsers.reader import (
    LineReader,
    float_token,
    int_token,
    next_int,
    parse_count,
)

logger = logging.getLogger(__name__)

# Dimensionality of the entities in a topology set, by set type
_SET_TYPE_LDIM = {"vertex": 0, "edge": 1, "face": 2}


@dataclass
class TopologyItem:
    """One entity of a named topology set.

    Attributes:
        patch: Local 1-based patch index
        lindx: Face/edge/vertex ordinal, 0 for the whole patch
        ldim: Dimensionality of the entity

    """

    patch: int
    lindx: int
    ldim: int


class BaseModel:
    """Physics-independent model data.

    Args:
        dimension: Spatial dimension (2 or 3)
        num_patches: Number of patches in the global model
        owned_patches: Global (1-based) numbers of the patches owned by this
            partition, in local order. None means all patches.

    """

    def __init__(self, dimension: int, num_patches: int = 1, owned_patches: Optional[Iterable[int]] = None):
        if num_patches < 1:
            raise ValueError(f"Model must have at least one patch: num_patches={num_patches}")

        self.dimension = dimension
        self.num_patches = num_patches
        if owned_patches is None:
            self._owned = list(range(1, num_patches + 1))
        else:
            self._owned = list(owned_patches)

        self.properties = PropertyRegistry()
        self.loads = LoadBindingResolver()
        self.dirichlet_values: Dict[int, float] = {}
        self.topology_sets: Dict[str, List[TopologyItem]] = {}
        self._set_codes: Dict[tuple[str, int], int] = {}
        self.analytical_solution: Optional[AnalyticalSolution] = None

    # ------------------------------------------------------------------
    # Partition
    # ------------------------------------------------------------------

    def local_patch_index(self, patch: int) -> int:
        """Translate a global patch number to this partition.

        Returns:
            -1 if the patch number is out of range, 0 if the patch is not
            owned by this partition, otherwise the 1-based local index

        """
        if patch < 1 or patch > self.num_patches:
            logger.error(f"Patch index {patch} out of range [1, {self.num_patches}]")
            return -1

        try:
            return self._owned.index(patch) + 1
        except ValueError:
            return 0

    @property
    def num_local_patches(self) -> int:
        return len(self._owned)

    @property
    def max_face_index(self) -> int:
        """Largest valid local face (3D) or edge (2D) index of a patch."""
        return 2 * self.dimension

    def check_face_index(self, lindx: int) -> None:
        if lindx < 1 or lindx > self.max_face_index:
            raise InputError(f"Invalid face index {lindx}")

    # ------------------------------------------------------------------
    # Property codes
    # ------------------------------------------------------------------

    def add_topology_set(self, name: str, items: Iterable[TopologyItem]) -> None:
        self.topology_sets.setdefault(name, []).extend(items)

    def unique_property_code(self, set_name: str, comp: int = 0) -> int:
        """Property code for a named topology set.

        A new code is generated the first time a (set, comp) pair is seen and
        an UNDEFINED record is created for every entity of the set. Later
        calls with the same pair return the same code.

        Returns:
            The property code, or 0 if the set name is empty or unknown

        """
        if not set_name or set_name not in self.topology_sets:
            return 0

        key = (set_name, comp)
        if key in self._set_codes:
            return self._set_codes[key]

        used = self.properties.codes() | set(self._set_codes.values())
        stride = get_default("property_codes.stride", PROPERTY_CODE_STRIDE)
        code = comp if comp > 0 else 1
        while code in used:
            code += stride

        for item in self.topology_sets[set_name]:
            self.properties.add(PropertyRecord(code, PropertyKind.UNDEFINED, item.patch, item.lindx, item.ldim))

        self._set_codes[key] = code
        return code

    def assign_property(self, code: int, kind: PropertyKind, index: Optional[int] = None) -> int:
        """Bind the unbound records of a code, or add one covering every patch.

        Records of the code that are already bound (not UNDEFINED) are left
        alone; if no unbound record exists a new global record is appended.

        Returns:
            Number of existing records changed (0 if a new record was added)

        """
        changed = self.properties.set_property_type(code, kind, index)
        if changed == 0:
            self.properties.add(
                PropertyRecord(code if index is None else index, kind, 0, 0, self.dimension)
            )
        return changed

    def set_vec_property(self, code: int, kind: PropertyKind, field: VecFunc) -> None:
        """Assign a kind to a code and bind an owned vector field under it."""
        self.assign_property(code, kind)
        self.loads.bind_vector_field(code, field)

    def get_vec_func(self, patch: int, kind: PropertyKind) -> Optional[VecFunc]:
        """Vector field bound to the first record of a kind covering a patch."""
        rec = self.properties.for_patch(patch, kind)
        if rec is None:
            return None
        return self.loads.vector_field(rec.code)

    def set_analytical_solution(self, solution: Optional[AnalyticalSolution]) -> None:
        self.analytical_solution = solution

    # ------------------------------------------------------------------
    # Legacy input
    # ------------------------------------------------------------------

    def parse_keyword(self, keyword: str, args: str, reader: LineReader) -> bool:
        """Parse a common keyword block of the line-oriented input.

        Unknown keywords are reported and skipped.

        Raises:
            InputError: On malformed input

        """
        if keyword.upper() == "DIRICHLET":
            self._parse_dirichlet_block(parse_count(args, keyword), reader)
        else:
            logger.warning(f"Ignoring unknown keyword '{keyword}' (line {reader.lineno})")
        return True

    def _parse_dirichlet_block(self, count: int, reader: LineReader) -> None:
        logger.info(f"Number of Dirichlet conditions: {count}")
        for _ in range(count):
            line = reader.read_line()
            if line is None:
                logger.warning("Unexpected end of input in DIRICHLET block")
                return

            tokens = iter(line.split())
            patch = next_int(tokens, "patch number")
            pid = self.local_patch_index(patch)
            if pid < 0:
                raise InputError(f"Invalid patch number {patch}")
            if pid < 1:
                continue

            lindx = next_int(tokens, "face index")
            self.check_face_index(lindx)
            comp = next_int(tokens, "component code")

            value = next(tokens, None)
            if value is None:
                kind = PropertyKind.DIRICHLET
            elif value.upper() == "ANASOL":
                kind = PropertyKind.DIRICHLET_ANASOL
            else:
                kind = PropertyKind.DIRICHLET_INHOM
                self.dirichlet_values[comp] = float_token(value, "Dirichlet value")

            logger.debug(f"Dirichlet code {comp} on P{patch} F{lindx} ({kind.value})")
            self.properties.add(PropertyRecord(comp, kind, pid, lindx, self.dimension - 1))

    # ------------------------------------------------------------------
    # Tag tree input
    # ------------------------------------------------------------------

    def parse_element(self, elem: Element) -> bool:
        """Parse a common section of the tag tree input.

        Unknown tags are reported and skipped.

        Raises:
            InputError: On malformed input

        """
        tag = elem.tag.lower()
        if tag == "topologysets":
            for child in elem:
                if child.tag.lower() == "set":
                    self._parse_topology_set(child)
        elif tag == "boundaryconditions":
            for child in elem:
                self._parse_boundary_condition(child)
        elif tag == "anasol":
            self._parse_anasol(elem)
        else:
            logger.warning(f"Ignoring unknown tag <{elem.tag}>")
        return True

    def _parse_topology_set(self, elem: Element) -> None:
        name = elem.get("name")
        if not name:
            raise InputError("<set> without a name")

        set_type = elem.get("type", "face").lower()
        ldim = _SET_TYPE_LDIM.get(set_type, self.dimension)

        items = []
        for item in elem:
            patch = int_token(item.get("patch"), f"patch of set '{name}'")
            pid = self.local_patch_index(patch)
            if pid < 0:
                raise InputError(f"Invalid patch number {patch} in set '{name}'")
            if pid < 1:
                continue

            entities = (item.text or "").split()
            if ldim >= self.dimension or not entities:
                items.append(TopologyItem(pid, 0, self.dimension))
            else:
                items.extend(
                    TopologyItem(pid, int_token(token, f"entity of set '{name}'"), ldim)
                    for token in entities
                )

        logger.debug(f"Topology set '{name}': {len(items)} local item(s)")
        self.add_topology_set(name, items)

    def element_property_code(self, elem: Element, comp: int = 0) -> int:
        """Property code of the set named by an element, or its code attribute."""
        code = self.unique_property_code(elem.get("set", ""), comp)
        if code == 0:
            code = int_token(elem.get("code", "0"), f"code of <{elem.tag}>")
        return code

    def _parse_boundary_condition(self, elem: Element) -> None:
        tag = elem.tag.lower()
        bc_type = elem.get("type", "").lower()
        text = (elem.text or "").strip()

        if tag == "dirichlet":
            comp = int_token(elem.get("comp", "0"), "component code")
            code = self.element_property_code(elem, comp)
            if code == 0:
                raise InputError("<dirichlet> needs a set or a code")

            if bc_type == "anasol":
                kind = PropertyKind.DIRICHLET_ANASOL
            elif text:
                kind = PropertyKind.DIRICHLET_INHOM
                self.dirichlet_values[code] = float_token(text, "Dirichlet value")
            else:
                kind = PropertyKind.DIRICHLET
            logger.info(f"Dirichlet code {code} ({kind.value})")
            self.assign_property(code, kind)

        elif tag == "neumann":
            code = self.element_property_code(elem, 0)
            if code == 0:
                raise InputError("<neumann> needs a set or a code")

            if bc_type == "anasol":
                logger.info(f"Neumann code {code} (anasol)")
                self.assign_property(code, PropertyKind.NEUMANN_ANASOL)
                return

            direction = int_token(elem.get("direction", "0"), "pressure direction")
            if not text:
                raise InputError(f"<neumann> code {code} has no value")
            try:
                pressure = float(text)
            except ValueError:
                pressure = parse_real_func(text)
            try:
                field = PressureField(pressure, direction)
            except ValueError as e:
                raise InputError(str(e)) from e

            logger.info(f"Neumann code {code} direction {direction}: {text}")
            self.assign_property(code, PropertyKind.NEUMANN)
            self.loads.bind_traction(code, field)

        else:
            logger.warning(f"Ignoring unknown boundary condition <{elem.tag}>")

    def _parse_anasol(self, elem: Element) -> None:
        vector = None
        stress = None
        for child in elem:
            tag = child.tag.lower()
            text = (child.text or "").strip()
            if tag == "primary" and text:
                vector = parse_vec_func(text, child.get("type", ""))
            elif tag == "stress" and text:
                stress = parse_stensor_func(text)

        logger.info(
            "Analytical solution: "
            f"displacement {'yes' if vector else 'no'}, stress {'yes' if stress else 'no'}"
        )
        self.set_analytical_solution(AnalyticalSolution(vector=vector, stress=stress))

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def clear_properties(self) -> None:
        """Release all property records, load bindings and topology sets."""
        self.properties.clear()
        self.loads.clear()
        self.dirichlet_values.clear()
        self.topology_sets.clear()
        self._set_codes.clear()

    def reset(self) -> None:
        """Discard everything parsed so far. Safe to call repeatedly."""
        self.clear_properties()
