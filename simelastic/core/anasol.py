"""Analytical reference solution and the analytical boundary condition override.

Boundary conditions of kind DIRICHLET_ANASOL and NEUMANN_ANASOL are resolved
once, during pre-processing, against the analytical solution attached to the
model. Only one Dirichlet condition per model can be bound to the analytical
displacement field; it is tracked by the override slot `a_code`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from simelastic.config.enums import PropertyKind
from simelastic.core.fields import TractionField
from simelastic.core.functions import STensorFunc, VecFunc
from simelastic.core.loads import LoadBindingResolver
from simelastic.core.properties import PropertyRecord

logger = logging.getLogger(__name__)


@dataclass
class AnalyticalSolution:
    """Analytical solution provider.

    The fields are owned by this object (and whoever created it), never by
    the driver it is attached to.

    Attributes:
        vector: Displacement solution, if known
        stress: Stress solution, if known

    """

    vector: Optional[VecFunc] = None
    stress: Optional[STensorFunc] = None

    def vector_solution(self) -> Optional[VecFunc]:
        return self.vector

    def stress_solution(self) -> Optional[STensorFunc]:
        return self.stress


class AnalyticalOverrideResolver:
    """Single-slot resolution of analytical boundary conditions.

    Attributes:
        a_code: Property code bound to the analytical displacement field,
            0 while unbound

    """

    def __init__(self):
        self.a_code = 0

    @property
    def is_bound(self) -> bool:
        return self.a_code > 0

    def resolve(
        self,
        records: Iterable[PropertyRecord],
        solution: AnalyticalSolution,
        loads: LoadBindingResolver,
    ) -> None:
        """Rewrite the analytical records in place.

        DIRICHLET_ANASOL becomes DIRICHLET_INHOM for the first code seen (and
        any later record with the same code) and UNDEFINED for every other
        code. NEUMANN_ANASOL becomes NEUMANN with a traction derived from the
        stress solution, or UNDEFINED if there is none.
        """
        for rec in records:
            if rec.kind is PropertyKind.DIRICHLET_ANASOL:
                self._resolve_dirichlet(rec, solution, loads)
            elif rec.kind is PropertyKind.NEUMANN_ANASOL:
                self._resolve_neumann(rec, solution, loads)

    def _resolve_dirichlet(
        self,
        rec: PropertyRecord,
        solution: AnalyticalSolution,
        loads: LoadBindingResolver,
    ) -> None:
        vec_field = solution.vector_solution()
        code = abs(rec.code)

        if vec_field is None:
            logger.debug(f"No analytical displacement field, dropping Dirichlet code {rec.code}")
            rec.kind = PropertyKind.UNDEFINED
        elif self.a_code == code:
            rec.kind = PropertyKind.DIRICHLET_INHOM
        elif self.a_code == 0:
            self.a_code = code
            loads.bind_vector_field(code, vec_field, borrowed=True)
            rec.kind = PropertyKind.DIRICHLET_INHOM
            logger.debug(f"Analytical Dirichlet condition bound to code {code}")
        else:
            logger.debug(
                f"Analytical Dirichlet slot already bound to code {self.a_code}, "
                f"disabling code {rec.code}"
            )
            rec.kind = PropertyKind.UNDEFINED

    @staticmethod
    def _resolve_neumann(
        rec: PropertyRecord,
        solution: AnalyticalSolution,
        loads: LoadBindingResolver,
    ) -> None:
        stress_field = solution.stress_solution()
        if stress_field is None:
            logger.debug(f"No analytical stress field, dropping Neumann code {rec.code}")
            rec.kind = PropertyKind.UNDEFINED
            return

        loads.bind_traction(rec.code, TractionField(stress_field))
        rec.kind = PropertyKind.NEUMANN

    def release(self, loads: LoadBindingResolver) -> None:
        """Evict the borrowed analytical field from the loads and unbind the slot."""
        if self.a_code > 0:
            loads.evict(self.a_code)
        self.a_code = 0
