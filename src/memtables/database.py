"""Table registries and query dispatch."""

from __future__ import annotations

import logging
from typing import Any, Generic

from memtables.commands import (
    Command,
    CreateTableCommand,
    DeleteCommand,
    InsertCommand,
    SelectCommand,
)
from memtables.errors import KeyMismatchError, TableAlreadyExistsError, TableNotFoundError
from memtables.parsing.query_parser import (
    CreateQuery,
    DeleteQuery,
    InsertQuery,
    Query,
    ReadFromQuery,
    SaveAsQuery,
    SelectQuery,
)
from memtables.record import Record
from memtables.table import Table
from memtables.types import KEY_TYPES, K, KeyType

logger = logging.getLogger(__name__)


class Database(Generic[K]):
    """A set of uniquely named tables sharing one primary key type."""

    def __init__(self, key_type: KeyType[K]) -> None:
        self.key_type = key_type
        self._tables: dict[str, Table[K]] = {}

    def create_table(self, table: Table[K]) -> None:
        """Register a table.

        Raises:
            TableAlreadyExistsError: If a table with that name exists.
        """
        if table.name in self._tables:
            raise TableAlreadyExistsError(table.name)
        self._tables[table.name] = table
        logger.debug("created table %s (key %s)", table.name, table.pk_name)

    def get_table(self, name: str) -> Table[K]:
        """Return the named table.

        Raises:
            TableNotFoundError: If no such table exists.
        """
        table = self._tables.get(name)
        if table is None:
            raise TableNotFoundError(name)
        return table

    def table_names(self) -> list[str]:
        return sorted(self._tables)

    def __contains__(self, name: object) -> bool:
        return name in self._tables


class AnyDatabase:
    """A database of whichever key type was chosen at startup.

    All statement kinds go through :meth:`execute`, independent of the
    concrete key type.
    """

    def __init__(self, database: Database[Any]) -> None:
        self.database = database

    @classmethod
    def for_key_type(cls, name: str) -> AnyDatabase:
        """Create an empty database for a key type name ("int" or "string")."""
        try:
            key_type = KEY_TYPES[name]
        except KeyError:
            raise ValueError(
                f"Unknown key type '{name}' (expected one of: {', '.join(KEY_TYPES)})"
            ) from None
        return cls(Database(key_type))

    @property
    def key_type(self) -> KeyType[Any]:
        return self.database.key_type

    def execute(self, query: Query) -> str | None:
        """Execute a parsed query and return its result message.

        SAVE_AS and READ_FROM are left to the caller and return None.
        """
        command = self.build_command(query)
        if command is None:
            return None
        logger.debug("executing %s", type(command).__name__)
        return command.execute()

    def build_command(self, query: Query) -> Command | None:
        """Bind a query to the command that carries it out.

        Raises:
            TableNotFoundError: If the query names an unknown table.
            KeyMismatchError: If a DELETE key has the wrong type.
        """
        database = self.database
        if isinstance(query, CreateQuery):
            schema = dict(query.columns)
            return CreateTableCommand(database, query.table, query.pk, schema)
        elif isinstance(query, InsertQuery):
            table = database.get_table(query.table)
            return InsertCommand(table, Record.from_pairs(query.values))
        elif isinstance(query, SelectQuery):
            table = database.get_table(query.table)
            return SelectCommand(table, list(query.fields), query.condition)
        elif isinstance(query, DeleteQuery):
            key = database.key_type.from_value(query.key_value)
            if key is None:
                raise KeyMismatchError(
                    f"Key mismatch: expected a {database.key_type.data_type.value} key,"
                    f" got {query.key_value.data_type.value}"
                )
            table = database.get_table(query.table)
            return DeleteCommand(table, key)
        elif isinstance(query, (SaveAsQuery, ReadFromQuery)):
            return None
        raise TypeError(f"Unsupported query: {type(query).__name__}")
