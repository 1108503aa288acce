"""SQLAlchemy implementations of the repository and transaction interfaces."""

from .builder import SqlRepositoryBuilder
from .client import SqlClient
from .database import Settings, create_client, create_engine
from .repository import SqlRepository
from .transaction import SqlTransaction, SqlTransactionManager

__all__ = [
    "Settings",
    "SqlClient",
    "SqlRepository",
    "SqlRepositoryBuilder",
    "SqlTransaction",
    "SqlTransactionManager",
    "create_client",
    "create_engine",
]
