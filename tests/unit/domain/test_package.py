"""Tests for repokit/__init__.py — package exports."""

import repokit
from repokit import __all__ as package_all
from repokit.domain import __all__ as domain_all


def test_every_domain_name_is_reexported_by_package():
    assert set(domain_all) <= set(package_all)


def test_package_exports_resolve():
    for name in package_all:
        assert getattr(repokit, name) is not None


def test_errors_share_a_common_base():
    for name in (
        "DecodeError",
        "InvalidKeyShapeError",
        "InvalidTransactionError",
        "MutationError",
        "NoRowsReturnedError",
        "RepositoryConfigurationError",
        "UnsupportedDialectError",
    ):
        assert issubclass(getattr(repokit, name), repokit.RepositoryError)
