"""Generic async repositories over SQLAlchemy.

Describe a table once (name, primary-key columns, row mapper, mutation
builder) and get point and multi-key reads, scans, upserts, deletes,
transactional writes, key-returning inserts and cursor pagination.
"""

from repokit.domain import (
    DecodeError,
    InvalidKeyShapeError,
    InvalidTransactionError,
    Key,
    KeyDescriptor,
    Mutation,
    MutationError,
    MutationOp,
    NoRowsReturnedError,
    Page,
    Repository,
    RepositoryConfigurationError,
    RepositoryError,
    Transaction,
    TransactionManager,
    UnsupportedDialectError,
    default_column_name,
    extract_columns,
)
from repokit.infrastructure import (
    Settings,
    SqlClient,
    SqlRepository,
    SqlRepositoryBuilder,
    SqlTransaction,
    SqlTransactionManager,
    create_client,
    create_engine,
)

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
    "Settings",
    "SqlClient",
    "SqlRepository",
    "SqlRepositoryBuilder",
    "SqlTransaction",
    "SqlTransactionManager",
    "Transaction",
    "TransactionManager",
    "UnsupportedDialectError",
    "create_client",
    "create_engine",
    "default_column_name",
    "extract_columns",
]
