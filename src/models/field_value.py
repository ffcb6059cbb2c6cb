# src/models/field_value.py

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Tuple, Union


class FieldKind(Enum):
    INTEGER     = "int"
    BOOLEAN     = "bool"
    STRING      = "str"
    STRING_LIST = "list"


@dataclass(frozen=True)
class FieldValue:
    """One breakdown value. The kind is fixed per canonical field, never mixed."""
    kind:   FieldKind
    value:  Union[int, bool, str, Tuple[str, ...]]

    @classmethod
    def integer(cls, value: int) -> "FieldValue":
        return cls(FieldKind.INTEGER, int(value))

    @classmethod
    def boolean(cls, value: bool) -> "FieldValue":
        return cls(FieldKind.BOOLEAN, bool(value))

    @classmethod
    def string(cls, value: str) -> "FieldValue":
        return cls(FieldKind.STRING, str(value))

    @classmethod
    def string_list(cls, values: List[str]) -> "FieldValue":
        return cls(FieldKind.STRING_LIST, tuple(values))

    @classmethod
    def from_default(cls, value: Any) -> "FieldValue":
        """Build from a plain default-table value (bool before int, bool is an int subclass)."""
        if isinstance(value, bool):
            return cls.boolean(value)
        if isinstance(value, int):
            return cls.integer(value)
        if isinstance(value, str):
            return cls.string(value)
        if isinstance(value, (list, tuple)):
            return cls.string_list(list(value))
        raise TypeError(f"Unsupported default value: {value!r}")

    def to_json(self) -> Any:
        if self.kind is FieldKind.STRING_LIST:
            return list(self.value)
        return self.value
