"""Tests for repokit/domain/repositories/base.py."""

import pytest

from repokit.domain.repositories.base import Page, Repository


def test_repository_cannot_be_instantiated_directly():
    with pytest.raises(TypeError):
        Repository()  # type: ignore[abstract]


def test_repository_concrete_subclass_must_implement_all_methods():
    class _Partial(Repository):
        async def find_by_id(self, key, columns=()): return None
        # everything else missing

    with pytest.raises(TypeError):
        _Partial()  # type: ignore[abstract]


def test_repository_full_concrete_subclass_instantiates():
    class _Full(Repository):
        async def find_by_id(self, key, columns=()): return None
        async def find_all(self, columns=()): return []
        async def find_by_ids(self, keys, columns=()): return []
        async def exists(self, key): return False
        async def save(self, entity): return None
        async def update(self, entity): return None
        async def delete(self, key): return None
        async def save_tx(self, tx, entity): return None
        async def update_tx(self, tx, entity): return None
        async def delete_tx(self, tx, key): return None
        async def save_returning_key(self, statement, params=None, key_type=None): return 1
        async def save_returning_key_tx(self, tx, statement, params=None, key_type=None): return 1
        async def find_page(self, page_size, page_token=None, columns=()): return Page([], None)

    assert _Full() is not None


def test_page_unpacks_into_items_and_token():
    items, token = Page(["a", "b"], "b")
    assert items == ["a", "b"]
    assert token == "b"
