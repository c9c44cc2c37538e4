"""Executable commands, one per statement kind."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from memtables.errors import KeyMismatchError
from memtables.record import Record
from memtables.table import Table
from memtables.types import Operator, Schema, Value, compare_values

if TYPE_CHECKING:
    from memtables.database import Database

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Condition:
    """A WHERE condition: column, operator and the value to compare against."""

    column: str
    operator: Operator
    value: Value

    def matches(self, record: Record) -> bool:
        """Evaluate the condition against a record.

        Raises:
            ColumnNotFoundError: If the record has no such column.
        """
        return compare_values(record.get(self.column), self.value, self.operator)


class Command(ABC):
    """A statement bound to the table or database it acts on."""

    @abstractmethod
    def execute(self) -> str | None:
        """Run the command and return a result message, if any."""


class SelectCommand(Command):
    """Project columns of the records matching an optional condition."""

    def __init__(
        self, table: Table[Any], fields: list[str], condition: Condition | None = None
    ) -> None:
        self.table = table
        self.fields = fields
        self.condition = condition

    def execute(self) -> str:
        rows = []
        for record in self.table.scan():
            if self.condition is not None and not self.condition.matches(record):
                continue
            rows.append(", ".join(str(record.get(name)) for name in self.fields))
        logger.debug("select from %s matched %d row(s)", self.table.name, len(rows))
        return "\n".join(rows)


class CreateTableCommand(Command):
    """Create a table and register it in a database."""

    def __init__(self, database: Database[Any], name: str, pk_name: str, schema: Schema) -> None:
        self.database = database
        self.name = name
        self.pk_name = pk_name
        self.schema = schema

    def execute(self) -> str:
        table = Table(self.name, self.schema, self.pk_name, self.database.key_type)
        self.database.create_table(table)
        return f"Table {self.name} created."


class InsertCommand(Command):
    """Insert one record into a table."""

    def __init__(self, table: Table[Any], record: Record) -> None:
        self.table = table
        self.record = record

    def execute(self) -> str:
        self.table.insert(self.record)
        logger.debug("inserted into %s, %d record(s) stored", self.table.name, len(self.table))
        return "Record inserted"


class DeleteCommand(Command):
    """Delete the record stored under a primary key."""

    def __init__(self, table: Table[Any], key: Any) -> None:
        self.table = table
        self.key = key

    def execute(self) -> str:
        if self.table.delete(self.key) is None:
            raise KeyMismatchError(f"Key mismatch: no record with key {self.key!r} in {self.table.name}")
        return "Deleted record"
