"""Parser for the memtables query language."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import ply.yacc as yacc

from memtables.commands import Condition
from memtables.errors import QuerySyntaxError
from memtables.parsing.query_lexer import QueryLexer
from memtables.types import DataType, Operator, Value


@dataclass(frozen=True)
class SelectQuery:
    """SELECT <col>, ... FROM <table> [WHERE <col> <op> <value>]"""

    table: str
    fields: tuple[str, ...] = ()
    condition: Condition | None = None


@dataclass(frozen=True)
class CreateQuery:
    """CREATE <table> KEY <pk> FIELDS <col>:<Type>, ..."""

    table: str
    pk: str
    columns: tuple[tuple[str, DataType], ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class InsertQuery:
    """INSERT <col>=<value>, ... INTO <table>"""

    table: str
    values: tuple[tuple[str, Value], ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class DeleteQuery:
    """DELETE <key value> FROM <table>"""

    table: str
    key_value: Value


@dataclass(frozen=True)
class SaveAsQuery:
    """SAVE_AS <path>"""

    path: str


@dataclass(frozen=True)
class ReadFromQuery:
    """READ_FROM <path>"""

    path: str


Query = SelectQuery | CreateQuery | InsertQuery | DeleteQuery | SaveAsQuery | ReadFromQuery


def _check_unique(names: list[str], clause: str) -> None:
    seen: set[str] = set()
    for name in names:
        if name in seen:
            raise QuerySyntaxError(f"Column '{name}' appears twice in {clause}")
        seen.add(name)


class QueryParser:
    """Parser for queries, one statement per line."""

    tokens = QueryLexer.tokens

    def __init__(self) -> None:
        self.lexer = QueryLexer()
        self.lexer.build()
        self.parser: yacc.LRParser = None  # type: ignore

    def p_statement(self, p: yacc.YaccProduction) -> None:
        """statement : select_query
                     | create_query
                     | insert_query
                     | delete_query
                     | save_as_query
                     | read_from_query"""
        p[0] = p[1]

    # --- SELECT ---

    def p_select_query(self, p: yacc.YaccProduction) -> None:
        """select_query : SELECT identifier_list FROM IDENTIFIER where_clause"""
        p[0] = SelectQuery(table=p[4], fields=tuple(p[2]), condition=p[5])

    def p_identifier_list_single(self, p: yacc.YaccProduction) -> None:
        """identifier_list : IDENTIFIER"""
        p[0] = [p[1]]

    def p_identifier_list_multiple(self, p: yacc.YaccProduction) -> None:
        """identifier_list : identifier_list COMMA IDENTIFIER"""
        p[0] = p[1] + [p[3]]

    def p_where_clause_empty(self, p: yacc.YaccProduction) -> None:
        """where_clause : """
        p[0] = None

    def p_where_clause(self, p: yacc.YaccProduction) -> None:
        """where_clause : WHERE IDENTIFIER comparison_op value"""
        p[0] = Condition(column=p[2], operator=p[3], value=p[4])

    def p_comparison_op(self, p: yacc.YaccProduction) -> None:
        """comparison_op : EQ
                         | NEQ
                         | LT
                         | LTE
                         | GT
                         | GTE"""
        p[0] = Operator.from_symbol(p[1])

    # --- CREATE ---

    def p_create_query(self, p: yacc.YaccProduction) -> None:
        """create_query : CREATE IDENTIFIER KEY IDENTIFIER FIELDS column_def_list"""
        columns = p[6]
        _check_unique([name for name, _ in columns], "CREATE")
        p[0] = CreateQuery(table=p[2], pk=p[4], columns=tuple(columns))

    def p_column_def_list_single(self, p: yacc.YaccProduction) -> None:
        """column_def_list : column_def"""
        p[0] = [p[1]]

    def p_column_def_list_multiple(self, p: yacc.YaccProduction) -> None:
        """column_def_list : column_def_list COMMA column_def"""
        p[0] = p[1] + [p[3]]

    def p_column_def(self, p: yacc.YaccProduction) -> None:
        """column_def : IDENTIFIER COLON IDENTIFIER"""
        p[0] = (p[1], DataType.from_name(p[3]))

    # --- INSERT ---

    def p_insert_query(self, p: yacc.YaccProduction) -> None:
        """insert_query : INSERT assignment_list INTO IDENTIFIER"""
        values = p[2]
        _check_unique([name for name, _ in values], "INSERT")
        p[0] = InsertQuery(table=p[4], values=tuple(values))

    def p_assignment_list_single(self, p: yacc.YaccProduction) -> None:
        """assignment_list : assignment"""
        p[0] = [p[1]]

    def p_assignment_list_multiple(self, p: yacc.YaccProduction) -> None:
        """assignment_list : assignment_list COMMA assignment"""
        p[0] = p[1] + [p[3]]

    def p_assignment(self, p: yacc.YaccProduction) -> None:
        """assignment : IDENTIFIER EQ value"""
        p[0] = (p[1], p[3])

    # --- DELETE / SAVE_AS / READ_FROM ---

    def p_delete_query(self, p: yacc.YaccProduction) -> None:
        """delete_query : DELETE value FROM IDENTIFIER"""
        p[0] = DeleteQuery(table=p[4], key_value=p[2])

    def p_save_as_query(self, p: yacc.YaccProduction) -> None:
        """save_as_query : SAVE_AS PATH"""
        p[0] = SaveAsQuery(path=p[2])

    def p_read_from_query(self, p: yacc.YaccProduction) -> None:
        """read_from_query : READ_FROM PATH"""
        p[0] = ReadFromQuery(path=p[2])

    # --- Values ---

    def p_value_integer(self, p: yacc.YaccProduction) -> None:
        """value : INTEGER"""
        p[0] = Value.of_int(p[1])

    def p_value_float(self, p: yacc.YaccProduction) -> None:
        """value : FLOAT"""
        p[0] = Value.of_float(p[1])

    def p_value_string(self, p: yacc.YaccProduction) -> None:
        """value : STRING"""
        p[0] = Value.of_string(p[1])

    def p_value_true(self, p: yacc.YaccProduction) -> None:
        """value : TRUE"""
        p[0] = Value.of_bool(True)

    def p_value_false(self, p: yacc.YaccProduction) -> None:
        """value : FALSE"""
        p[0] = Value.of_bool(False)

    def p_error(self, p: yacc.YaccProduction) -> None:
        if p:
            raise QuerySyntaxError(f"Syntax error at '{p.value}' (position {p.lexpos})")
        else:
            raise QuerySyntaxError("Syntax error at end of input")

    def build(self, **kwargs: Any) -> None:
        """Build the parser."""
        self.parser = yacc.yacc(module=self, start="statement", **kwargs)

    def parse(self, data: str) -> Query:
        """Parse one statement.

        Raises:
            QuerySyntaxError: If the text is not a complete, valid statement.
        """
        if self.parser is None:
            self.build(debug=False, write_tables=False)

        self.lexer.input(data)
        return self.parser.parse(data, lexer=self.lexer.lexer)


_default_parser: QueryParser | None = None


def parse(text: str) -> Query:
    """Parse one statement with a shared parser instance."""
    global _default_parser
    if _default_parser is None:
        _default_parser = QueryParser()
    return _default_parser.parse(text)
