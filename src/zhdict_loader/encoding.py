"""Storage encoding of scalar and list-valued fields.

Database writes bind values as parameters (:func:`row_params`). The
literal encoder (:func:`encode_literal`) is only for paths that need
plain SQL text, such as the script export.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import fields

from zhdict_loader.models import Row

LIST_DELIMITER = "|||"
NULL = "NULL"
QUOTE = "'"

Value = str | int | Sequence[str] | None


def join_list(values: Sequence[str] | None) -> str:
    """Join list elements with :data:`LIST_DELIMITER`.

    Lossy if an element itself contains the delimiter.
    """
    if not values:
        return ""
    return LIST_DELIMITER.join(values)


def split_list(text: str | None) -> list[str]:
    """Inverse of :func:`join_list` for delimiter-free elements."""
    if not text:
        return []
    return text.split(LIST_DELIMITER)


def to_param(value: Value) -> str | int | None:
    """Convert a field value to a bound-parameter value.

    Absent and empty strings become ``None`` (SQL NULL); lists are joined
    first.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if not isinstance(value, str):
        value = join_list(value)
    return value or None


def encode_literal(value: Value) -> str:
    """Convert a field value to a SQL literal.

    >>> encode_literal("it's")
    "'it''s'"
    >>> encode_literal("")
    'NULL'
    """
    param = to_param(value)
    if param is None:
        return NULL
    if isinstance(param, int):
        return str(param)
    return QUOTE + param.replace(QUOTE, QUOTE * 2) + QUOTE


def _values(row: Row) -> tuple[Value, ...]:
    return tuple(getattr(row, f.name) for f in fields(row))


def row_params(row: Row) -> tuple[str | int | None, ...]:
    """Bound-parameter tuple for a row, in ``row.COLUMNS`` order."""
    return tuple(to_param(v) for v in _values(row))


def insert_sql(row_type: type[Row]) -> str:
    """Parameterized INSERT statement for a row type."""
    columns = ", ".join(row_type.COLUMNS)
    placeholders = ", ".join("?" for _ in row_type.COLUMNS)
    return f"INSERT INTO {row_type.TABLE} ({columns}) VALUES ({placeholders})"


def render_insert(row: Row) -> str:
    """Literal INSERT statement for one row."""
    columns = ", ".join(row.COLUMNS)
    values = ", ".join(encode_literal(v) for v in _values(row))
    return f"INSERT INTO {row.TABLE} ({columns}) VALUES ({values});"
