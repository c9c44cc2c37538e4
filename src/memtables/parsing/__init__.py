"""Parsing module for the query language."""

from memtables.parsing.query_lexer import QueryLexer
from memtables.parsing.query_parser import (
    CreateQuery,
    DeleteQuery,
    InsertQuery,
    Query,
    QueryParser,
    ReadFromQuery,
    SaveAsQuery,
    SelectQuery,
    parse,
)

__all__ = [
    "CreateQuery",
    "DeleteQuery",
    "InsertQuery",
    "Query",
    "QueryLexer",
    "QueryParser",
    "ReadFromQuery",
    "SaveAsQuery",
    "SelectQuery",
    "parse",
]
