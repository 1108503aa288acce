"""Primary-key codec.

A key value describes itself as a mapping of column name to value through the
KeyDescriptor protocol.  Key is the usual way to declare one:

    class UserKey(Key):
        id: str = Field(alias="user_id")   # explicit column name
        region: str                         # column "region"

Fields without an explicit alias are named by default_column_name (the
lower-cased field name).  Subclasses can swap the policy through their own
model_config alias_generator.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict

from .errors import InvalidKeyShapeError


def default_column_name(field_name: str) -> str:
    """Column name used for key fields that carry no explicit alias."""
    return field_name.lower()


@runtime_checkable
class KeyDescriptor(Protocol):
    def key_columns(self) -> Mapping[str, Any]: ...


class Key(BaseModel):
    """Immutable key value whose fields map 1:1 onto primary-key columns."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=default_column_name,
        populate_by_name=True,
    )

    def key_columns(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


def extract_columns(key: object) -> dict[str, Any]:
    """Return the column-name -> value mapping described by ``key``.

    Mappings are taken as already-extracted columns.  Anything that is
    neither a mapping nor a KeyDescriptor raises InvalidKeyShapeError.
    """
    if isinstance(key, Mapping):
        return dict(key)
    if not isinstance(key, KeyDescriptor):
        raise InvalidKeyShapeError(
            f"key must be a Key, a KeyDescriptor or a mapping, got {type(key).__name__}"
        )
    columns = key.key_columns()
    if not isinstance(columns, Mapping):
        raise InvalidKeyShapeError(
            f"{type(key).__name__}.key_columns() returned {type(columns).__name__}, "
            "expected a mapping"
        )
    return dict(columns)


def key_params(key: object, primary_keys: Sequence[str]) -> dict[str, Any]:
    """Bind parameters for an equality predicate on ``primary_keys``."""
    columns = extract_columns(key)
    missing = [name for name in primary_keys if name not in columns]
    if missing:
        raise InvalidKeyShapeError(
            f"key {key!r} has no value for primary-key column(s): {', '.join(missing)}"
        )
    return {name: columns[name] for name in primary_keys}


def key_tuple(key: object, primary_keys: Sequence[str]) -> tuple[Any, ...]:
    """Positional key values in ``primary_keys`` order."""
    return tuple(key_params(key, primary_keys).values())
