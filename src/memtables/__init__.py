"""memtables - An in-memory relational store driven by a small query language."""

from memtables.commands import (
    Command,
    Condition,
    CreateTableCommand,
    DeleteCommand,
    InsertCommand,
    SelectCommand,
)
from memtables.database import AnyDatabase, Database
from memtables.dump import format_query, format_value
from memtables.errors import (
    ColumnNotFoundError,
    DatabaseError,
    DuplicateKeyError,
    InvalidPathError,
    KeyMismatchError,
    QuerySyntaxError,
    ScriptIOError,
    TableAlreadyExistsError,
    TableNotFoundError,
    TypeMismatchError,
)
from memtables.parsing import QueryParser, parse
from memtables.record import Record
from memtables.table import Table
from memtables.types import (
    INT_KEY,
    STRING_KEY,
    DataType,
    KeyType,
    Operator,
    Value,
    compare_values,
)

__all__ = [
    # Main API
    "AnyDatabase",
    "Database",
    "Table",
    "Record",
    "QueryParser",
    "parse",
    "format_query",
    "format_value",
    # Commands
    "Command",
    "Condition",
    "CreateTableCommand",
    "DeleteCommand",
    "InsertCommand",
    "SelectCommand",
    # Values and types
    "DataType",
    "Value",
    "Operator",
    "compare_values",
    "KeyType",
    "INT_KEY",
    "STRING_KEY",
    # Errors
    "DatabaseError",
    "TableNotFoundError",
    "TableAlreadyExistsError",
    "ColumnNotFoundError",
    "TypeMismatchError",
    "KeyMismatchError",
    "DuplicateKeyError",
    "QuerySyntaxError",
    "InvalidPathError",
    "ScriptIOError",
]

__version__ = "0.1.0"
