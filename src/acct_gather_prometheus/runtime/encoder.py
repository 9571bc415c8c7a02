"""Sample encoder: typed sample values to Pushgateway text lines."""

from __future__ import annotations

import math
from typing import Optional, Sequence

from acct_gather_prometheus.exceptions import SampleContractError
from acct_gather_prometheus.schemas import UINT64_MAX, Double, FieldType, SampleValue, Table, UInt64


def encode(table: Table, values: Sequence[SampleValue]) -> str:
    """Serialize one sample as ``"<field> <value>\\n"`` lines in schema order.

    Unsigned integers are written in decimal, doubles with two decimals.

    Raises:
        SampleContractError: On count, tag or range mismatch
    """
    if values is None or len(values) != table.size:
        count = 0 if values is None else len(values)
        raise _reject(table, f"expected {table.size} values, got {count}")

    lines = []
    for field, value in zip(table.fields, values):
        lines.append(f"{field.name} {_format_value(table, field.name, field.type, value)}\n")
    return "".join(lines)


def _format_value(table: Table, field_name: str, field_type: FieldType, value: SampleValue) -> str:
    if field_type == FieldType.UINT64:
        if not isinstance(value, UInt64):
            raise _reject(table, f"expected UInt64, got {type(value).__name__}", field_name)
        raw = value.value
        if isinstance(raw, bool) or not isinstance(raw, int) or not 0 <= raw <= UINT64_MAX:
            raise _reject(table, f"{raw!r} is not an unsigned 64-bit integer", field_name)
        return str(raw)

    if not isinstance(value, Double):
        raise _reject(table, f"expected Double, got {type(value).__name__}", field_name)
    raw = value.value
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise _reject(table, f"{raw!r} is not a number", field_name)
    try:
        raw = float(raw)
    except OverflowError:
        raise _reject(table, "integer too large for a double", field_name) from None
    # Exposition format spellings
    if math.isnan(raw):
        return "NaN"
    if math.isinf(raw):
        return "+Inf" if raw > 0 else "-Inf"
    return f"{raw:.2f}"


def _reject(table: Table, message: str, field_name: Optional[str] = None) -> SampleContractError:
    return SampleContractError(table.name, message, field_name)
