# src/models/breakdown_record.py

from __future__ import annotations
from typing import Dict, Any, Iterator, Mapping, Optional

from exceptions import FieldKindError
from models.field_value import FieldKind, FieldValue

# Reserved prefix for rows the parser does not know, so they never clash with API names.
UNKNOWN_FIELD_PREFIX = "!"


class BreakdownRecord:
    """
    Flat field name -> FieldValue map for one alliance.

    field_kinds pins the kind of known fields up front; any other field takes the
    kind of its first write. Fields are only ever added or overwritten.
    """

    def __init__(self, field_kinds: Optional[Mapping[str, FieldKind]] = None):
        self._fields:       Dict[str, FieldValue] = {}
        self._field_kinds   = field_kinds or {}
        self._frozen        = False

    def __contains__(self, field: str) -> bool:
        return field in self._fields

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def get(self, field: str) -> Optional[FieldValue]:
        return self._fields.get(field)

    def kind_of(self, field: str) -> Optional[FieldKind]:
        existing = self._fields.get(field)
        if existing is not None:
            return existing.kind
        return self._field_kinds.get(field)

    def set(self, field: str, value: FieldValue, side: Optional[str] = None) -> None:
        if self._frozen:
            raise RuntimeError(f"Breakdown is frozen, cannot set {field}")
        expected = self.kind_of(field)
        if expected is not None and expected is not value.kind:
            raise FieldKindError(field, expected.value, value.kind.value, side=side)
        self._fields[field] = value

    def set_default(self, field: str, value: FieldValue) -> bool:
        """Set field only if missing. Returns True if the default was applied."""
        if field in self._fields:
            return False
        self.set(field, value)
        return True

    def freeze(self) -> None:
        self._frozen = True

    def to_dict(self) -> Dict[str, Any]:
        return {name: value.to_json() for name, value in self._fields.items()}

    @staticmethod
    def unknown_field_name(row_name: str) -> str:
        return UNKNOWN_FIELD_PREFIX + row_name
