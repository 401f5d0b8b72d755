"""Load bindings keyed by property code.

Two maps are kept: vector fields (body loads, prescribed displacement fields)
and tractions (pressures, traction fields). Every traction is owned. A vector
field entry is either owned or borrowed; a borrowed entry refers to data owned
elsewhere (the analytical solution) and must be evicted, not released.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Optional, Union

from simelastic.core.fields import TractionFunc
from simelastic.core.functions import VecFunc

logger = logging.getLogger(__name__)

NeumannField = Union[VecFunc, TractionFunc]


@dataclass
class FieldBinding:
    """Vector field bound under a property code.

    Attributes:
        field: The bound vector function
        borrowed: True if the field is owned by someone else

    """

    field: VecFunc
    borrowed: bool = False


class LoadBindingResolver:
    """Owner of the vector-field and traction maps."""

    def __init__(self):
        self._vectors: Dict[int, FieldBinding] = {}
        self._tractions: Dict[int, TractionFunc] = {}

    def bind_vector_field(self, code: int, field: VecFunc, borrowed: bool = False) -> None:
        """Insert or overwrite the vector field of a code."""
        self._vectors[code] = FieldBinding(field, borrowed)

    def bind_traction(self, code: int, field: TractionFunc) -> None:
        """Insert or overwrite the traction of a code."""
        self._tractions[code] = field

    def vector_field(self, code: int) -> Optional[VecFunc]:
        binding = self._vectors.get(code)
        return binding.field if binding else None

    def traction(self, code: int) -> Optional[TractionFunc]:
        return self._tractions.get(code)

    def has_traction(self, code: int) -> bool:
        return code in self._tractions

    def resolve_neumann(self, code: int) -> Optional[NeumannField]:
        """Field to use for a Neumann condition, or None if nothing is bound.

        A vector field bound under the code wins over a traction bound under
        the same code.
        """
        binding = self._vectors.get(code)
        if binding is not None:
            return binding.field
        return self._tractions.get(code)

    def evict(self, code: int) -> Optional[FieldBinding]:
        """Remove a vector entry without releasing the field it refers to."""
        return self._vectors.pop(code, None)

    def clear(self) -> None:
        """Release every bound field.

        Raises:
            RuntimeError: If a borrowed entry is still present; it has to be
                evicted first.

        """
        borrowed = [code for code, b in self._vectors.items() if b.borrowed]
        if borrowed:
            raise RuntimeError(
                f"Borrowed vector fields must be evicted before clearing: codes {borrowed}"
            )

        logger.debug(
            f"Releasing {len(self._vectors)} vector field(s) and {len(self._tractions)} traction(s)"
        )
        self._vectors.clear()
        self._tractions.clear()

    @property
    def num_vector_fields(self) -> int:
        return len(self._vectors)

    @property
    def num_tractions(self) -> int:
        return len(self._tractions)

    def vector_codes(self) -> list[int]:
        return list(self._vectors)

    def traction_codes(self) -> list[int]:
        return list(self._tractions)
