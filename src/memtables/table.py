"""In-memory table storage keyed by primary key."""

from __future__ import annotations

import bisect
from typing import Generic, Iterator

from memtables.errors import ColumnNotFoundError, DuplicateKeyError, KeyMismatchError
from memtables.record import Record
from memtables.types import K, KeyType, Schema


class Table(Generic[K]):
    """Stores records of one schema, ordered by primary key."""

    def __init__(self, name: str, schema: Schema, pk_name: str, key_type: KeyType[K]) -> None:
        """Initialize an empty table.

        Args:
            name: Table name, unique within a database.
            schema: Column name to declared type. Never changes afterwards.
            pk_name: Primary key column; must be a schema column.
            key_type: Key type shared by every table of the owning database.

        Raises:
            ColumnNotFoundError: If pk_name is not declared in the schema.
        """
        if pk_name not in schema:
            raise ColumnNotFoundError(pk_name)
        self.name = name
        self.schema: Schema = dict(schema)
        self.pk_name = pk_name
        self.key_type = key_type
        self._store: dict[K, Record] = {}
        self._keys: list[K] = []  # Sorted ascending

    def __len__(self) -> int:
        return len(self._store)

    def __contains__(self, key: object) -> bool:
        return key in self._store

    def key_of(self, record: Record) -> K:
        """Return the record's primary key narrowed to the table's key type.

        Raises:
            ColumnNotFoundError: If the record has no primary key column.
            KeyMismatchError: If the primary key value has the wrong type.
        """
        pk_value = record.get(self.pk_name)
        key = self.key_type.from_value(pk_value)
        if key is None:
            raise KeyMismatchError(
                f"Key mismatch: primary key '{self.pk_name}' must be {self.key_type.data_type.value},"
                f" got {pk_value.data_type.value}"
            )
        return key

    def insert(self, record: Record) -> None:
        """Validate and store a record.

        Raises:
            ColumnNotFoundError: If a schema column is missing.
            TypeMismatchError: If a value does not match its declared type.
            KeyMismatchError: If the primary key value has the wrong type.
            DuplicateKeyError: If a record with the same key already exists.
        """
        record.validate(self.schema)
        key = self.key_of(record)
        if key in self._store:
            raise DuplicateKeyError(key)

        self._store[key] = record
        bisect.insort(self._keys, key)

    def get(self, key: K) -> Record | None:
        return self._store.get(key)

    def delete(self, key: K) -> Record | None:
        """Remove and return the record stored under key, or None if absent."""
        record = self._store.pop(key, None)
        if record is not None:
            index = bisect.bisect_left(self._keys, key)
            del self._keys[index]
        return record

    def scan(self) -> Iterator[Record]:
        """Yield every record in ascending primary key order.

        Each call starts a fresh traversal over a snapshot of the keys, so
        records deleted meanwhile are skipped and new ones are not visited.
        """
        for key in list(self._keys):
            record = self._store.get(key)
            if record is not None:
                yield record

    def __repr__(self) -> str:
        return f"Table(name={self.name!r}, pk={self.pk_name!r}, records={len(self)})"
