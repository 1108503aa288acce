"""Rendering of domain Mutations into SQLAlchemy Core statements."""

from __future__ import annotations

from sqlalchemy import column, delete, insert, table, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.sql.base import Executable
from sqlalchemy.sql.expression import TableClause

from repokit.domain.errors import MutationError, UnsupportedDialectError
from repokit.domain.mutations import Mutation, MutationOp

# Dialects whose INSERT supports ON CONFLICT (...) DO UPDATE.
_UPSERT_INSERTS = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
}


def _table_clause(mutation: Mutation) -> TableClause:
    names = dict.fromkeys((*mutation.columns, *mutation.key_columns))
    return table(mutation.table, *(column(name) for name in names))


def _key_values(mutation: Mutation) -> dict[str, object]:
    if not mutation.key_columns:
        raise MutationError(f"{mutation.op.value} on {mutation.table} has no key columns")
    values = mutation.as_dict()
    missing = [name for name in mutation.key_columns if name not in values]
    if missing:
        raise MutationError(
            f"{mutation.op.value} on {mutation.table} is missing key column(s): "
            f"{', '.join(missing)}"
        )
    return {name: values[name] for name in mutation.key_columns}


def render_mutation(mutation: Mutation, dialect_name: str) -> Executable:
    """Build the statement that applies ``mutation`` on the given dialect."""
    tbl = _table_clause(mutation)
    values = mutation.as_dict()

    if mutation.op is MutationOp.INSERT:
        return insert(tbl).values(values)

    keys = _key_values(mutation)
    match = [tbl.c[name] == value for name, value in keys.items()]

    if mutation.op is MutationOp.DELETE:
        return delete(tbl).where(*match)

    changes = {name: value for name, value in values.items() if name not in keys}

    if mutation.op is MutationOp.UPDATE:
        if not changes:
            raise MutationError(f"update on {mutation.table} sets no non-key columns")
        return update(tbl).where(*match).values(changes)

    make_insert = _UPSERT_INSERTS.get(dialect_name)
    if make_insert is None:
        raise UnsupportedDialectError(f"no upsert rendering for dialect {dialect_name!r}")
    stmt = make_insert(tbl).values(values)
    if not changes:
        return stmt.on_conflict_do_nothing(index_elements=list(keys))
    return stmt.on_conflict_do_update(
        index_elements=list(keys),
        set_={name: stmt.excluded[name] for name in changes},
    )
