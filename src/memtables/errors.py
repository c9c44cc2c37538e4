"""Error types raised by the memtables engine."""

from __future__ import annotations


class DatabaseError(Exception):
    """Base class for every failure a statement can produce."""


class TableNotFoundError(DatabaseError):
    """The named table does not exist."""

    def __init__(self, table: str) -> None:
        super().__init__(f"Table '{table}' not found.")
        self.table = table


class TableAlreadyExistsError(DatabaseError):
    """A table with the same name is already registered."""

    def __init__(self, table: str) -> None:
        super().__init__(f"Table '{table}' already exists.")
        self.table = table


class ColumnNotFoundError(DatabaseError):
    """A column is missing from a record or schema."""

    def __init__(self, column: str) -> None:
        super().__init__(f"Column '{column}' not found.")
        self.column = column


class TypeMismatchError(DatabaseError):
    """A value does not have the declared type of its column."""

    def __init__(self, message: str) -> None:
        super().__init__(f"Type mismatch: {message}")


class KeyMismatchError(DatabaseError):
    """A primary key value has the wrong type, or the key is absent."""

    def __init__(self, message: str = "Key mismatch") -> None:
        super().__init__(message)


class DuplicateKeyError(DatabaseError):
    """A record with the same primary key is already stored."""

    def __init__(self, key: object = None) -> None:
        if key is None:
            super().__init__("Duplicate key")
        else:
            super().__init__(f"Duplicate key: {key!r}")
        self.key = key


class QuerySyntaxError(DatabaseError):
    """The query text does not match the grammar.

    Not a SyntaxError subclass: PLY turns a SyntaxError raised inside a
    grammar action into error recovery.
    """


class InvalidPathError(DatabaseError):
    """A SAVE_AS/READ_FROM path is unusable."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Invalid path: {path}")
        self.path = path


class ScriptIOError(DatabaseError):
    """Reading or writing a script file failed."""

    def __init__(self, path: str, cause: OSError) -> None:
        super().__init__(f"I/O error on {path}: {cause.strerror or cause}")
        self.path = path
        self.cause = cause
