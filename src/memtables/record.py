"""Records: one row of column values."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Mapping

from memtables.errors import ColumnNotFoundError, TypeMismatchError
from memtables.types import Schema, Value


@dataclass(frozen=True)
class Record:
    """A read-only mapping from column name to value.

    A record has no identity of its own; a table identifies it by the value
    stored under the primary-key column. Stored records are never changed
    in place.
    """

    fields: Mapping[str, Value] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[str, Value]]) -> Record:
        """Build a record from (column, value) pairs, keeping their order."""
        return cls(fields=dict(pairs))

    def get(self, column: str) -> Value:
        """Return the value of a column.

        Raises:
            ColumnNotFoundError: If the record has no such column.
        """
        try:
            return self.fields[column]
        except KeyError:
            raise ColumnNotFoundError(column) from None

    def validate(self, schema: Schema) -> None:
        """Check that every schema column is present with exactly its declared type.

        Columns present in the record but absent from the schema are not
        inspected.

        Raises:
            ColumnNotFoundError: If a schema column is missing.
            TypeMismatchError: If a value has a different type than declared.
        """
        for column, data_type in schema.items():
            value = self.get(column)
            if value.data_type is not data_type:
                raise TypeMismatchError(
                    f"column '{column}' expects {data_type.value}, got {value.data_type.value}"
                )

    def __contains__(self, column: object) -> bool:
        return column in self.fields
