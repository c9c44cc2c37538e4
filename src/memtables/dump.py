"""Render values and queries back to query-language text."""

from __future__ import annotations

from memtables.parsing.query_parser import (
    CreateQuery,
    DeleteQuery,
    InsertQuery,
    Query,
    ReadFromQuery,
    SaveAsQuery,
    SelectQuery,
)
from memtables.types import DataType, Value


def format_value(value: Value) -> str:
    """Format a value as a literal the parser reads back to the same value."""
    if value.data_type is DataType.STRING:
        if '"' in value.data:
            raise ValueError(f"String {value.data!r} cannot be written as a literal")
        return f'"{value.data}"'
    elif value.data_type is DataType.FLOAT:
        text = repr(value.data)
        mantissa, sep, exponent = text.partition("e")
        if "." not in mantissa:
            # 1e+20 -> 1.0e+20; float literals always carry a fractional part
            mantissa += ".0"
        return mantissa + sep + exponent
    return str(value)


def _format_path(path: str) -> str:
    if not path or any(ch.isspace() for ch in path):
        return f'"{path}"'
    return path


def format_query(query: Query) -> str:
    """Return the canonical text of a query."""
    if isinstance(query, SelectQuery):
        text = f"SELECT {', '.join(query.fields)} FROM {query.table}"
        if query.condition is not None:
            cond = query.condition
            text += f" WHERE {cond.column} {cond.operator.value} {format_value(cond.value)}"
        return text
    elif isinstance(query, CreateQuery):
        columns = ", ".join(f"{name}:{data_type.value}" for name, data_type in query.columns)
        return f"CREATE {query.table} KEY {query.pk} FIELDS {columns}"
    elif isinstance(query, InsertQuery):
        values = ", ".join(f"{name}={format_value(value)}" for name, value in query.values)
        return f"INSERT {values} INTO {query.table}"
    elif isinstance(query, DeleteQuery):
        return f"DELETE {format_value(query.key_value)} FROM {query.table}"
    elif isinstance(query, SaveAsQuery):
        return f"SAVE_AS {_format_path(query.path)}"
    elif isinstance(query, ReadFromQuery):
        return f"READ_FROM {_format_path(query.path)}"
    raise TypeError(f"Cannot format query: {type(query).__name__}")
