"""
Error taxonomy for the data-access core.

InvalidInput     -> malformed descriptor (missing fields, non-identifier names, bad values)
UnknownDatabase  -> logical database name not present in the registry
EngineError      -> SQLite rejected the statement (constraint, type, syntax, lock)
ResourceError    -> cursor materialization failed mid-stream

The HTTP layer maps each class to a status code (see app exception handlers).
"""


class DataAccessError(Exception):
    """Base class for every error raised by the data-access core."""

    status_code: int = 500


class InvalidInput(DataAccessError, ValueError):
    """Raised when a request descriptor is malformed."""

    status_code = 400


class InvalidIdentifier(InvalidInput):
    """Raised when a table/column/trigger name fails the identifier grammar."""

    def __init__(self, identifier: object) -> None:
        self.identifier = identifier
        super().__init__(f"Invalid SQL identifier: {identifier!r}")


class UnknownDatabase(DataAccessError, LookupError):
    """Raised when a logical database name is not registered."""

    status_code = 404

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown database: {name!r}")

    def __str__(self) -> str:
        # LookupError.__str__ would repr() the message
        return self.args[0]


class EngineError(DataAccessError):
    """Raised when the relational engine rejects a statement.

    ``message`` is the driver's own message, e.g. ``UNIQUE constraint failed: t.id``.
    """

    def __init__(self, message: str, *, sql: str | None = None) -> None:
        self.message = message
        self.sql = sql
        super().__init__(message)


class ResourceError(DataAccessError):
    """Raised when reading rows from a cursor fails part way through."""
