"""
PostgreSQL connection wrapper with statement reuse, non-blocking queries
and LISTEN/NOTIFY.

Public API:

    import asyncio, psycopg
    from pg_database.database import Database
    from pg_database.driver import PsycopgDriver

    loop = asyncio.get_event_loop()
    conn = psycopg.connect("dbname=test", autocommit=True)
    db = Database(PsycopgDriver(conn), loop)

    with db.query("SELECT 1") as results:
        print(results.fetchall())

    db.on("notification", lambda db, n: print(n.channel, n.payload))
    db.listen("news")

    db.query("SELECT pg_sleep(1)", callback=lambda err, results: results.release())

The lower-level pieces (ListenRegistry, NotificationDrain, ReadinessWatch)
are also exported for custom integrations, but the recommended entry point
is `Database`.
"""

from .database import Database, dispatch_readable    # Query executor

from .results import Results                         # Statement-bound results
from .transaction import Transaction                 # Transaction handle
from .events import EventEmitter

from .listen import ListenRegistry, WILDCARD
from .notifications import NotificationDrain
from .watch import ReadinessWatch

from .types import (
    QueryParams,
    QueryCallback,
    Reactor,
    PendingRequest,
)

__all__ = [
    # Main entry points
    "Database",
    "Results",
    "Transaction",

    # Advanced / extension points
    "dispatch_readable",
    "EventEmitter",
    "ListenRegistry",
    "NotificationDrain",
    "ReadinessWatch",
    "WILDCARD",

    # Typing helpers
    "QueryParams",
    "QueryCallback",
    "Reactor",
    "PendingRequest",
]
