"""Schema registry for profiling datasets."""

from __future__ import annotations

import logging
from typing import Any, Iterable, List, Optional

from acct_gather_prometheus.exceptions import DatasetDefinitionError, UnknownTableError
from acct_gather_prometheus.runtime.profile_state import ProfilingState
from acct_gather_prometheus.schemas import ERROR, FieldDefinition, FieldType, Table

logger = logging.getLogger(__name__)


class SchemaRegistry:
    """Stores dataset schemas and hands out their creation index as a handle.

    Handles are 0-based and stay valid until ``clear()``. Names are not
    required to be unique; lookup is by handle only.
    """

    def __init__(self, state: Optional[ProfilingState] = None):
        self.state = state or ProfilingState()
        self._tables: List[Table] = []

    def create_table(self, name: str, field_definitions: Optional[Iterable[Any]]) -> int:
        """Register a dataset schema.

        Args:
            name: Display name of the dataset
            field_definitions: Ordered ``(name, type)`` pairs or FieldDefinition
                objects. An entry typed NOT_SET ends the list.

        Returns:
            The new table handle, or ERROR when profiling is not active

        Raises:
            DatasetDefinitionError: If an entry is malformed or has an unknown type
        """
        if not self.state.profiling:
            logger.debug("Profiling inactive, refusing dataset %s", name)
            return ERROR

        fields = tuple(_parse_fields(name, field_definitions))
        self._tables.append(Table(name=name, fields=fields))
        handle = len(self._tables) - 1
        logger.debug("Created table %s (handle %d, %d fields)", name, handle, len(fields))
        return handle

    def get_table(self, handle: int) -> Table:
        """Look up a table by handle.

        Raises:
            UnknownTableError: If the handle was never issued
        """
        if isinstance(handle, bool) or not isinstance(handle, int) or not 0 <= handle < len(self._tables):
            raise UnknownTableError(handle, len(self._tables))
        return self._tables[handle]

    def clear(self) -> None:
        """Drop every table; only used at plugin teardown."""
        logger.debug("Freeing %d tables", len(self._tables))
        self._tables.clear()

    def __len__(self) -> int:
        return len(self._tables)

    def __iter__(self):
        return iter(self._tables)


def _parse_fields(dataset: str, field_definitions: Optional[Iterable[Any]]):
    for entry in field_definitions or ():
        if isinstance(entry, FieldDefinition):
            field_name, raw_type = entry.name, entry.type
        else:
            try:
                field_name, raw_type = entry
            except (TypeError, ValueError):
                raise DatasetDefinitionError(dataset, f"expected (name, type) pair, got {entry!r}")

        try:
            field_type = FieldType(raw_type)
        except ValueError:
            raise DatasetDefinitionError(dataset, f"unknown field type {raw_type!r} for {field_name!r}")

        if field_type == FieldType.NOT_SET:
            return
        if not field_name or not isinstance(field_name, str):
            raise DatasetDefinitionError(dataset, f"field name must be a non-empty string, got {field_name!r}")
        yield FieldDefinition(name=field_name, type=field_type)
