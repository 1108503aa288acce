"""SQL text fragments built from column lists.

Parameters use SQLAlchemy text() named-parameter syntax (``:name``), and
each parameter is named after the column it binds.
"""

from __future__ import annotations

from collections.abc import Sequence


def column_list(columns: Sequence[str]) -> str:
    """Comma-joined projection, or ``*`` for the full row."""
    if not columns:
        return "*"
    return ", ".join(columns)


def equality_predicate(keys: Sequence[str], prefix: str = "") -> str:
    """``k1 = :k1 AND k2 = :k2`` for the given key columns."""
    return " AND ".join(f"{key} = :{prefix}{key}" for key in keys)


def key_set_predicate(keys: Sequence[str], count: int) -> str:
    """OR of one parenthesised equality group per key, parameters ``k<i>_<col>``."""
    return " OR ".join(
        f"({equality_predicate(keys, prefix=f'k{i}_')})" for i in range(count)
    )


def select_statement(
    table: str,
    columns: Sequence[str] = (),
    where: str | None = None,
    order_by: Sequence[str] = (),
    limit: str | None = None,
) -> str:
    sql = f"SELECT {column_list(columns)} FROM {table}"
    if where:
        sql += f" WHERE {where}"
    if order_by:
        sql += f" ORDER BY {', '.join(order_by)}"
    if limit:
        sql += f" LIMIT {limit}"
    return sql
