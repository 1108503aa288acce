"""Write instructions targeting a single row.

A Mutation is produced by an entity's mutation builder (or by the repository
for deletes) and is either applied immediately or buffered on a transaction
until commit.  It carries no SQL; rendering belongs to the infrastructure
layer.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any

from .errors import MutationError


class MutationOp(str, Enum):
    INSERT = "insert"
    UPDATE = "update"
    INSERT_OR_UPDATE = "insert_or_update"
    DELETE = "delete"


@dataclass(frozen=True)
class Mutation:
    """One row-level write.

    For DELETE, ``columns``/``values`` hold the key columns and key values.
    ``key_columns`` is the conflict/match target for UPDATE and
    INSERT_OR_UPDATE; repositories fill it from their primary keys when left
    empty.
    """

    op: MutationOp
    table: str
    columns: tuple[str, ...]
    values: tuple[Any, ...]
    key_columns: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if len(self.columns) != len(self.values):
            raise MutationError(
                f"{self.op.value} on {self.table}: {len(self.columns)} column(s) "
                f"but {len(self.values)} value(s)"
            )

    @classmethod
    def insert(cls, table: str, columns: Sequence[str], values: Sequence[Any]) -> Mutation:
        return cls(MutationOp.INSERT, table, tuple(columns), tuple(values))

    @classmethod
    def update(
        cls,
        table: str,
        columns: Sequence[str],
        values: Sequence[Any],
        key_columns: Sequence[str] = (),
    ) -> Mutation:
        return cls(MutationOp.UPDATE, table, tuple(columns), tuple(values), tuple(key_columns))

    @classmethod
    def insert_or_update(
        cls,
        table: str,
        columns: Sequence[str],
        values: Sequence[Any],
        key_columns: Sequence[str] = (),
    ) -> Mutation:
        """Upsert: insert the row, or overwrite the listed columns if it exists."""
        return cls(
            MutationOp.INSERT_OR_UPDATE, table, tuple(columns), tuple(values), tuple(key_columns)
        )

    @classmethod
    def delete(cls, table: str, key_columns: Sequence[str], key: Sequence[Any]) -> Mutation:
        return cls(MutationOp.DELETE, table, tuple(key_columns), tuple(key), tuple(key_columns))

    def as_dict(self) -> dict[str, Any]:
        return dict(zip(self.columns, self.values))

    def with_key_columns(self, key_columns: Sequence[str]) -> Mutation:
        """Return this mutation with ``key_columns`` set, unless it already has some."""
        if self.key_columns:
            return self
        return replace(self, key_columns=tuple(key_columns))
