from typing import Optional


class PgDatabaseError(Exception):
    """Base exception for the PostgreSQL database wrapper."""
    pass

class UsageError(PgDatabaseError):
    """Raised when the wrapper is used in a way its state does not allow."""
    pass

class DriverError(PgDatabaseError):
    """Raised when the driver reports an SQL or connection failure."""

    def __init__(self, message: str, sqlstate: Optional[str] = None):
        self.message = message
        self.sqlstate = sqlstate
        super().__init__(message)

class ConnectionLost(DriverError):
    """Passed to ``close`` listeners when the socket can no longer be read."""
    pass

class TransactionError(PgDatabaseError):
    """Raised when transaction operations fail."""
    pass
