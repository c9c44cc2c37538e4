"""Value and type definitions for the memtables engine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar

from memtables.errors import QuerySyntaxError, TypeMismatchError

INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1


class DataType(Enum):
    """Declared column types, spelled the way the query language spells them."""

    INT = "Int"
    FLOAT = "Float"
    BOOL = "Bool"
    STRING = "String"

    @classmethod
    def from_name(cls, name: str) -> DataType:
        """Return the type for a query-language type name.

        Raises:
            QuerySyntaxError: If the name is not one of Int, Float, Bool, String.
        """
        type_def = DATA_TYPE_NAMES.get(name)
        if type_def is None:
            raise QuerySyntaxError(f"Unknown type '{name}' (expected Int, Float, Bool or String)")
        return type_def


# Mapping from query-language type names to DataType members
DATA_TYPE_NAMES: dict[str, DataType] = {dt.value: dt for dt in DataType}

# Schema of a table: column name -> declared type
Schema = dict[str, DataType]


@dataclass(frozen=True)
class Value:
    """A typed scalar: the variant tag plus its Python payload.

    Two values are equal only when both the variant and the payload match,
    so ``Value.of_int(1) != Value.of_float(1.0)``.
    """

    data_type: DataType
    data: Any

    @classmethod
    def of_int(cls, value: int) -> Value:
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeMismatchError(f"expected an integer, got {value!r}")
        if not INT64_MIN <= value <= INT64_MAX:
            raise TypeMismatchError(f"integer {value} does not fit in 64 bits")
        return cls(DataType.INT, value)

    @classmethod
    def of_float(cls, value: float) -> Value:
        return cls(DataType.FLOAT, float(value))

    @classmethod
    def of_bool(cls, value: bool) -> Value:
        return cls(DataType.BOOL, bool(value))

    @classmethod
    def of_string(cls, value: str) -> Value:
        return cls(DataType.STRING, str(value))

    @classmethod
    def of(cls, value: Any) -> Value:
        """Wrap a plain Python scalar, inferring the variant from its type."""
        if isinstance(value, Value):
            return value
        if isinstance(value, bool):
            return cls.of_bool(value)
        if isinstance(value, int):
            return cls.of_int(value)
        if isinstance(value, float):
            return cls.of_float(value)
        if isinstance(value, str):
            return cls.of_string(value)
        raise TypeMismatchError(f"unsupported value {value!r}")

    def __str__(self) -> str:
        if self.data_type is DataType.BOOL:
            return "true" if self.data else "false"
        if self.data_type is DataType.FLOAT:
            return repr(self.data)
        return str(self.data)


class Operator(Enum):
    """Comparison operators usable in a WHERE clause."""

    EQ = "="
    NE = "!="
    LT = "<"
    LE = "<="
    GT = ">"
    GE = ">="

    @classmethod
    def from_symbol(cls, symbol: str) -> Operator:
        try:
            return cls(symbol)
        except ValueError:
            raise QuerySyntaxError(f"Invalid operator '{symbol}'") from None


def compare_values(lhs: Value, rhs: Value, operator: Operator) -> bool:
    """Apply a comparison operator to two values.

    Values of different variants are never equal and never ordered: only
    ``!=`` is true for them. Nothing is coerced to a common type.
    """
    if lhs.data_type is not rhs.data_type:
        return operator is Operator.NE

    left, right = lhs.data, rhs.data
    if operator is Operator.EQ:
        return left == right
    elif operator is Operator.NE:
        return left != right
    elif operator is Operator.LT:
        return left < right
    elif operator is Operator.LE:
        return left <= right
    elif operator is Operator.GT:
        return left > right
    elif operator is Operator.GE:
        return left >= right
    raise ValueError(f"Unknown operator: {operator}")


K = TypeVar("K", int, str)


@dataclass(frozen=True)
class KeyType(Generic[K]):
    """A primary key type: the key's Python type plus a narrowing conversion."""

    name: str
    data_type: DataType

    def from_value(self, value: Value) -> K | None:
        """Narrow a value to a key, or return None if the variant differs."""
        if value.data_type is not self.data_type:
            return None
        return value.data

    def __str__(self) -> str:
        return self.name


INT_KEY: KeyType[int] = KeyType(name="int", data_type=DataType.INT)
STRING_KEY: KeyType[str] = KeyType(name="string", data_type=DataType.STRING)

# Key types selectable from the command line
KEY_TYPES: dict[str, KeyType[Any]] = {kt.name: kt for kt in (INT_KEY, STRING_KEY)}
