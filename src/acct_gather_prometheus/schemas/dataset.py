"""Dataset (table) schema definitions and tagged sample values."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Tuple, Union


class FieldType(IntEnum):
    """Type tag of a dataset field. NOT_SET terminates a definition list."""
    NOT_SET = 0
    UINT64 = 1
    DOUBLE = 2


@dataclass(frozen=True)
class FieldDefinition:
    """One named, typed column of a dataset."""
    name: str
    type: FieldType


@dataclass(frozen=True)
class Table:
    """Named schema for one category of periodic sample."""
    name: str
    fields: Tuple[FieldDefinition, ...] = ()

    @property
    def size(self) -> int:
        return len(self.fields)

    @property
    def field_names(self) -> Tuple[str, ...]:
        return tuple(f.name for f in self.fields)

    @property
    def field_types(self) -> Tuple[FieldType, ...]:
        return tuple(f.type for f in self.fields)


@dataclass(frozen=True)
class UInt64:
    """Unsigned 64-bit sample value."""
    value: int

    field_type = FieldType.UINT64


@dataclass(frozen=True)
class Double:
    """Double precision sample value."""
    value: float

    field_type = FieldType.DOUBLE


SampleValue = Union[UInt64, Double]

UINT64_MAX = 2**64 - 1
