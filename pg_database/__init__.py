from .database import Database, Results, Transaction
from .driver import Driver, PsycopgDriver
from .statement_cache import StatementCache, CachedStatement
from .notification import Notification
from .exceptions import (
    PgDatabaseError,
    UsageError,
    DriverError,
    ConnectionLost,
    TransactionError,
)

__all__ = (
    "Database",
    "Results",
    "Transaction",
    "Driver",
    "PsycopgDriver",
    "StatementCache",
    "CachedStatement",
    "Notification",
    "PgDatabaseError",
    "UsageError",
    "DriverError",
    "ConnectionLost",
    "TransactionError",
)
