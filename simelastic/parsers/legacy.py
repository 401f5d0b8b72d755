"""Line-oriented keyword input for the elasticity driver.

Each block starts with a keyword line, usually followed by an entry count and
that many data lines:

    ISOTROPIC 2
    1 210e9 0.3 7850
    2  70e9 0.33 2700

    MATERIAL 1
    210e9 0.3 7850 1 3

    GRAVITY 0 0 -9.81

    PRESSURE 1
    2 6 3 -1.0e6

    CONSTANT_PRESSURE 1
    5 0 1.0e5

    LOCAL_SYSTEM cylindric z

Keywords not handled here are passed to the model's common keyword parser.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, Dict, Iterable, TextIO, Union

from simelastic.core.errors import InputError
from simelastic.core.fields import PressureField, TractionField, TractionFunc
from simelastic.core.functions import LinearTimeFunc, parse_real_func
from simelastic.parsers.reader import (
    LineReader,
    float_token,
    int_token,
    next_float,
    next_int,
    parse_count,
)

if TYPE_CHECKING:
    from simelastic.model.driver import ElasticityDriver

logger = logging.getLogger(__name__)


def _pressure_field(pressure, direction: int) -> PressureField:
    try:
        return PressureField(pressure, direction)
    except ValueError as e:
        raise InputError(str(e)) from e


class LegacyTextParser:
    """Keyword dispatcher for the line-oriented input format.

    The whole parse fails on the first malformed entry; bindings made before
    that point are kept. Entries on patches owned by other partitions are
    skipped silently.
    """

    def __init__(self, driver: "ElasticityDriver"):
        self.driver = driver
        self._handlers: Dict[str, Callable[[str, LineReader], None]] = {
            "ISOTROPIC": self._parse_isotropic,
            "MATERIAL": self._parse_material,
            "GRAVITY": self._parse_gravity,
            "PRESSURE": self._parse_pressure,
            "CONSTANT_PRESSURE": self._parse_constant_pressure,
            "LINEAR_PRESSURE": self._parse_linear_pressure,
            "LOCAL_SYSTEM": self._parse_local_system,
        }

    def parse(self, source: Union[str, TextIO, Iterable[str]]) -> bool:
        """Parse all keyword blocks of the input.

        Returns:
            True on success, False (with the diagnostic logged) on failure

        """
        reader = LineReader(source)
        try:
            for line in reader:
                self.parse_block(line, reader)
        except InputError as e:
            logger.error(f"Input line {reader.lineno}: {e}")
            return False
        return True

    def parse_block(self, line: str, reader: LineReader) -> None:
        """Parse the block introduced by a keyword line."""
        parts = line.split(None, 1)
        keyword = parts[0]
        args = parts[1] if len(parts) > 1 else ""

        handler = self._handlers.get(keyword.upper())
        if handler is not None:
            handler(args, reader)
        else:
            self.driver.parse_keyword(keyword, args, reader)

    @staticmethod
    def _data_lines(count: int, reader: LineReader, keyword: str):
        for _ in range(count):
            line = reader.read_line()
            if line is None:
                logger.warning(f"Unexpected end of input in {keyword} block")
                return
            yield line

    # ------------------------------------------------------------------
    # Materials
    # ------------------------------------------------------------------

    def _parse_isotropic(self, args: str, reader: LineReader) -> None:
        count = parse_count(args, "ISOTROPIC")
        logger.info(f"Number of isotropic materials: {count}")

        integrand = self.driver.get_integrand()
        for line in self._data_lines(count, reader, "ISOTROPIC"):
            tokens = iter(line.split())
            code = next_int(tokens, "material code")
            material = integrand.parse_material_tokens(tokens, self.driver.plane_strain)
            self.driver.declare_material(code, material)
            logger.info(f"\tMaterial code {code}: E = {material.E}, nu = {material.nu}, rho = {material.rho}")

    def _parse_material(self, args: str, reader: LineReader) -> None:
        count = parse_count(args, "MATERIAL")
        logger.info(f"Number of materials: {count}")

        integrand = self.driver.get_integrand()
        for line in self._data_lines(count, reader, "MATERIAL"):
            tokens = iter(line.split())
            material = integrand.parse_material_tokens(tokens, self.driver.plane_strain)
            index = self.driver.materials.append(material)
            logger.info(f"\tMaterial data: E = {material.E}, nu = {material.nu}, rho = {material.rho}")

            for token in tokens:
                if token.upper().startswith("ALL"):
                    logger.info("\t  (for all patches)")
                elif self.driver.assign_material(int_token(token, "patch number"), index):
                    logger.info(f"\t  (for P{token})")

    # ------------------------------------------------------------------
    # Loads
    # ------------------------------------------------------------------

    def _parse_gravity(self, args: str, reader: LineReader) -> None:
        tokens = iter(args.split())
        g = [next_float(tokens, f"gravity component {i + 1}") for i in range(self.driver.dimension)]
        logger.info(f"Gravitation vector: {' '.join(str(v) for v in g)}")
        self.driver.set_gravity(*g)

    def _parse_pressure(self, args: str, reader: LineReader) -> None:
        count = parse_count(args, "PRESSURE")
        logger.info(f"Number of pressures: {count}")

        dim = self.driver.dimension
        entity = "F" if dim == 3 else "E"
        solution = self.driver.analytical_solution
        stress = solution.stress_solution() if solution is not None else None

        for i, line in enumerate(self._data_lines(count, reader, "PRESSURE")):
            tokens = iter(line.split())
            patch = next_int(tokens, "patch number")
            pid = self.driver.local_patch_index(patch)
            if pid < 0:
                raise InputError(f"Invalid patch number {patch}")
            if pid < 1:
                continue

            lindx = next_int(tokens, "face index")
            self.driver.check_face_index(lindx)

            field: TractionFunc
            if stress is not None:
                logger.info(f"\tTraction on P{patch} {entity}{lindx}")
                field = TractionField(stress)
            else:
                direction = next_int(tokens, "pressure direction")
                p = next_float(tokens, "pressure value")
                spec = " ".join(tokens)
                if spec:
                    field = _pressure_field(parse_real_func(spec, p), direction)
                else:
                    field = _pressure_field(p, direction)
                logger.info(f"\tPressure on P{patch} {entity}{lindx} direction {direction}: {p} {spec}".rstrip())

            self.driver.add_pressure(1 + i, pid, lindx, field)

    def _parse_constant_pressure(self, args: str, reader: LineReader) -> None:
        self._parse_code_pressures(parse_count(args, "CONSTANT_PRESSURE"), reader, linear=False)

    def _parse_linear_pressure(self, args: str, reader: LineReader) -> None:
        self._parse_code_pressures(parse_count(args, "LINEAR_PRESSURE"), reader, linear=True)

    def _parse_code_pressures(self, count: int, reader: LineReader, linear: bool) -> None:
        """Pressures assigned to property codes declared elsewhere."""
        logger.info(f"Number of pressures: {count}")

        for line in self._data_lines(count, reader, "PRESSURE"):
            tokens = iter(line.split())
            code = next_int(tokens, "pressure code")
            direction = next_int(tokens, "pressure direction")
            p = float_token(next(tokens, None), "pressure value")
            logger.info(f"\tPressure code {code} direction {direction}: {p}")

            if linear:
                field = _pressure_field(LinearTimeFunc(p), direction)
            else:
                field = _pressure_field(p, direction)
            self.driver.set_pressure(code, field)

    # ------------------------------------------------------------------
    # Misc
    # ------------------------------------------------------------------

    def _parse_local_system(self, args: str, reader: LineReader) -> None:
        self.driver.set_local_system(args)
