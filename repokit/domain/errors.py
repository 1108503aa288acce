"""Exception hierarchy for repository operations.

Every error raised by repokit itself derives from RepositoryError.  Failures
reported by the database (connectivity, constraint violations, aborted
transactions) are SQLAlchemy exceptions and propagate untouched.
"""


class RepositoryError(RuntimeError):
    """Base class for errors raised by repokit."""


class InvalidKeyShapeError(RepositoryError):
    """The key value cannot be turned into primary-key columns."""


class DecodeError(RepositoryError):
    """A result row or column could not be decoded."""


class InvalidTransactionError(RepositoryError):
    """A transactional operation received an unusable transaction handle."""


class NoRowsReturnedError(RepositoryError):
    """A key-returning insert produced no result row."""


class MutationError(RepositoryError):
    """A mutation is malformed and cannot be rendered into a statement."""


class UnsupportedDialectError(RepositoryError):
    """The database dialect has no rendering for the requested mutation."""


class RepositoryConfigurationError(RepositoryError, ValueError):
    """A repository was built with missing or invalid configuration."""
