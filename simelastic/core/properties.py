"""Property records and the ordered registry holding them.

A property record ties a property code to a patch (and optionally one of its
faces or edges). Records are the single source of truth for what is bound to
what: material assignments, body loads, Dirichlet and Neumann conditions.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional

from simelastic.config.enums import PropertyKind


@dataclass
class PropertyRecord:
    """One property assignment.

    Attributes:
        code: Property code (catalog index for MATERIAL records). Not unique.
        kind: What the record binds
        patch: Local 1-based patch index, 0 meaning every patch
        lindx: Local face/edge ordinal (1..2*dimension), 0 for the interior
        ldim: Dimensionality of the entity the property lives on

    """

    code: int
    kind: PropertyKind = PropertyKind.UNDEFINED
    patch: int = 0
    lindx: int = 0
    ldim: int = 0

    def applies_to(self, patch: int) -> bool:
        """True if this record covers the given local patch."""
        return self.patch == 0 or self.patch == patch


class PropertyRegistry:
    """Ordered collection of property records.

    Duplicate codes are allowed and insertion order is kept. No uniqueness is
    enforced here; that is a discipline of the callers.
    """

    def __init__(self):
        self._records: list[PropertyRecord] = []

    def add(self, record: PropertyRecord) -> PropertyRecord:
        self._records.append(record)
        return record

    def find(self, code: int) -> Iterator[PropertyRecord]:
        """Iterate over all records carrying the given code, in insertion order."""
        return (rec for rec in self._records if rec.code == code)

    def find_kind(self, kind: PropertyKind) -> Iterator[PropertyRecord]:
        return (rec for rec in self._records if rec.kind is kind)

    def for_patch(self, patch: int, kind: PropertyKind) -> Optional[PropertyRecord]:
        """First record of the given kind that covers a patch, or None."""
        for rec in self._records:
            if rec.kind is kind and rec.applies_to(patch):
                return rec
        return None

    @staticmethod
    def set_kind(record: PropertyRecord, kind: PropertyKind) -> None:
        record.kind = kind

    def set_property_type(self, code: int, kind: PropertyKind, index: int | None = None) -> int:
        """Bind the UNDEFINED records carrying a code.

        Only records that are declared but still unbound are claimed; records
        already bound to something else keep their kind and code.

        Args:
            code: Property code to look for
            kind: New kind of the matching records
            index: If given, the new code of the matching records
                (a material catalog index for MATERIAL)

        Returns:
            Number of records changed. No record is ever appended.

        """
        matches = [rec for rec in self.find(code) if rec.kind is PropertyKind.UNDEFINED]
        for rec in matches:
            rec.kind = kind
            if index is not None:
                rec.code = index
        return len(matches)

    def codes(self) -> set[int]:
        return {rec.code for rec in self._records}

    def count(self, kind: PropertyKind) -> int:
        return sum(1 for rec in self._records if rec.kind is kind)

    def clear(self) -> None:
        self._records.clear()

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[PropertyRecord]:
        return iter(self._records)

    def __getitem__(self, i: int) -> PropertyRecord:
        return self._records[i]
