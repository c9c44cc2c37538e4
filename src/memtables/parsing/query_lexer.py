"""Lexer for the memtables query language."""

from __future__ import annotations

import math

import ply.lex as lex

from memtables.errors import QuerySyntaxError
from memtables.types import INT64_MAX, INT64_MIN


class QueryLexer:
    """Lexer for tokenizing queries."""

    # Reserved keywords (case-sensitive)
    reserved = {
        "SELECT": "SELECT",
        "FROM": "FROM",
        "WHERE": "WHERE",
        "CREATE": "CREATE",
        "KEY": "KEY",
        "FIELDS": "FIELDS",
        "INSERT": "INSERT",
        "INTO": "INTO",
        "DELETE": "DELETE",
        "SAVE_AS": "SAVE_AS",
        "READ_FROM": "READ_FROM",
        "true": "TRUE",
        "false": "FALSE",
    }

    # Token list
    tokens = [
        "IDENTIFIER",
        "INTEGER",
        "FLOAT",
        "STRING",
        "PATH",
        "COMMA",
        "COLON",
        "EQ",
        "NEQ",
        "LT",
        "LTE",
        "GT",
        "GTE",
    ] + list(reserved.values())

    # Path state: the argument of SAVE_AS / READ_FROM
    states = (("path", "exclusive"),)

    # Simple tokens (INITIAL state)
    t_COMMA = r","
    t_COLON = r":"
    t_NEQ = r"!="
    t_LTE = r"<="
    t_LT = r"<"
    t_GTE = r">="
    t_GT = r">"
    t_EQ = r"="

    t_ignore = " \t\r\n"

    def __init__(self) -> None:
        self.lexer: lex.Lexer = None  # type: ignore

    def t_FLOAT(self, t: lex.LexToken) -> lex.LexToken:
        r"-?\d+\.\d+(?:[eE][-+]?\d+)?(?![\w.])"
        value = float(t.value)
        if math.isinf(value):
            raise QuerySyntaxError(f"Float literal {t.value} out of range at position {t.lexpos}")
        t.value = value
        return t

    def t_INTEGER(self, t: lex.LexToken) -> lex.LexToken:
        r"-?\d+(?![\w.])"
        value = int(t.value)
        if not INT64_MIN <= value <= INT64_MAX:
            raise QuerySyntaxError(f"Integer literal {t.value} out of range at position {t.lexpos}")
        t.value = value
        return t

    def t_STRING(self, t: lex.LexToken) -> lex.LexToken:
        r'"[^"]*"'
        # Quotes are stripped, the contents kept verbatim
        t.value = t.value[1:-1]
        return t

    def t_IDENTIFIER(self, t: lex.LexToken) -> lex.LexToken:
        r"[a-zA-Z_][a-zA-Z0-9_]*"
        t.type = self.reserved.get(t.value, "IDENTIFIER")
        if t.type in ("SAVE_AS", "READ_FROM"):
            t.lexer.begin("path")
        return t

    def t_error(self, t: lex.LexToken) -> None:
        raise QuerySyntaxError(f"Illegal character '{t.value[0]}' at position {t.lexpos}")

    # --- Exclusive path state tokens ---

    t_path_ignore = " \t"

    def t_path_PATH(self, t: lex.LexToken) -> lex.LexToken:
        r'"[^"]*"|[^\s"]+'
        if t.value.startswith('"'):
            t.value = t.value[1:-1]
        t.lexer.begin("INITIAL")
        return t

    def t_path_error(self, t: lex.LexToken) -> None:
        t.lexer.begin("INITIAL")
        raise QuerySyntaxError(f"Expected a path, got '{t.value[0]}' at position {t.lexpos}")

    # --- Lexer methods ---

    def build(self, **kwargs) -> None:  # type: ignore
        """Build the lexer."""
        self.lexer = lex.lex(module=self, **kwargs)

    def input(self, data: str) -> None:
        """Set the input string to tokenize."""
        self.lexer.begin("INITIAL")
        self.lexer.input(data)

    def token(self) -> lex.LexToken | None:
        """Return the next token."""
        return self.lexer.token()

    def tokenize(self, data: str) -> list[lex.LexToken]:
        """Tokenize the input and return all tokens."""
        self.input(data)
        tokens = []
        while True:
            tok = self.token()
            if tok is None:
                break
            tokens.append(tok)
        return tokens


# Module-level set of reserved keywords for use by other modules
RESERVED_KEYWORDS: frozenset[str] = frozenset(QueryLexer.reserved)
