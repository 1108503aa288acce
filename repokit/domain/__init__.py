"""Domain layer: key codec, mutations, errors and abstract interfaces.

Nothing here talks to a database.
"""

from .errors import (
    DecodeError,
    InvalidKeyShapeError,
    InvalidTransactionError,
    MutationError,
    NoRowsReturnedError,
    RepositoryConfigurationError,
    RepositoryError,
    UnsupportedDialectError,
)
from .keys import Key, KeyDescriptor, default_column_name, extract_columns
from .mutations import Mutation, MutationOp
from .repositories import Page, Repository
from .transaction import Transaction, TransactionManager

__all__ = [
    "DecodeError",
    "InvalidKeyShapeError",
    "InvalidTransactionError",
    "Key",
    "KeyDescriptor",
    "Mutation",
    "MutationError",
    "MutationOp",
    "NoRowsReturnedError",
    "Page",
    "Repository",
    "RepositoryConfigurationError",
    "RepositoryError",
    "Transaction",
    "TransactionManager",
    "UnsupportedDialectError",
    "default_column_name",
    "extract_columns",
]
