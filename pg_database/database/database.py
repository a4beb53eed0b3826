from __future__ import annotations
from typing import Optional, Any, List, Type
from logging import Logger, getLogger as logging_getLogger

from ..exceptions import UsageError
from ..statement_cache import StatementCache, CachedStatement
from ..driver.params import prepare_values
from .events import EventEmitter
from .listen import ListenRegistry
from .notifications import NotificationDrain
from .results import Results
from .transaction import Transaction
from .types import PendingRequest, QueryCallback, Reactor
from .watch import ReadinessWatch


class Database(EventEmitter):
    """
    A wrapper around one live PostgreSQL driver handle.

    Queries run blocking, returning `Results`, or non-blocking when a
    callback is given, in which case the result is delivered once the
    injected reactor reports the socket readable. LISTEN/NOTIFY channel
    events arrive on the same socket and are emitted as ``notification``
    events before any query completion.

    Events:
        notification(database, Notification): A channel event was received.
        close(database, ConnectionLost): The connection failed while listening.
    """

    def __init__(
        self,
        driver: Any,
        reactor: Reactor,
        *,
        max_statements: int = 10,
        omni_log: bool = False,
        logger: Optional[Logger] = None,
    ) -> None:
        super().__init__()
        self.driver = driver
        self.reactor = reactor
        self.omni_log = omni_log
        self.logger = logger or logging_getLogger(__name__)

        self._cache = StatementCache(driver, max_statements, logger=self.logger)
        self._waiting: Optional[PendingRequest] = None
        self._closed = False

        self._watch = ReadinessWatch(
            reactor, driver.fileno, dispatch_readable, self, logger=self.logger
        )
        self._drain = NotificationDrain(
            driver, self._watch, self._emit, self.is_listening, logger=self.logger
        )
        self._listen = ListenRegistry(
            driver, self._watch, self._drain, lambda: self.is_waiting, logger=self.logger
        )

    def __enter__(self) -> Database:
        return self

    def __exit__(self, exc_type: Optional[Type[BaseException]],
                 exc_val: Optional[BaseException], exc_tb) -> None:
        if not self._closed:
            self.disconnect()

    # Properties
    @property
    def max_statements(self) -> int:
        return self._cache.max_statements

    @max_statements.setter
    def max_statements(self, value: int) -> None:
        self._discard(self._cache.resize(value))

    @property
    def statements(self) -> List[CachedStatement]:
        return list(self._cache)

    @property
    def channels(self) -> List[str]:
        return self._listen.channels

    @property
    def is_waiting(self) -> bool:
        return self._waiting is not None

    @property
    def is_watching(self) -> bool:
        return self._watch.active

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def pid(self) -> int:
        return self.driver.pid

    # Utility Methods
    def _should_log(self, log: bool, override_omnilog: bool = False) -> bool:
        return log or (self.omni_log and not override_omnilog)

    def _emit(self, name: str, *args: Any) -> None:
        self.emit(name, self, *args)

    def _discard(self, statements: tuple) -> None:
        for statement in statements:
            try:
                self.driver.discard(statement.handle)
            except Exception as e:
                self.logger.debug(f"Failed to discard statement {statement.query!r}: {e}")

    def release_statement(self, statement: CachedStatement) -> None:
        """Return a statement to the cache once its results are consumed."""
        if self._closed:
            return
        self._discard(self._cache.release(statement))

    # Queries
    def query(
        self,
        query: str,
        *params: Any,
        callback: Optional[QueryCallback] = None,
        dollar_only: bool = False,
        log: bool = False,
        override_omnilog: bool = False,
    ) -> Optional[Results]:
        """
        Execute a SQL query.

        Args:
            query (str): SQL query to execute.
            *params: Values bound to the placeholders. A ``{"json": value}``
                dict or a psycopg ``Json`` wrapper is sent as JSON text.
            callback (callable, optional): Run the query without blocking and
                call ``callback(error, results)`` once it completes.
            dollar_only (bool): Only recognize ``$n`` placeholders in `query`.
                Applies to this call only.
            log (bool): Whether to log this query.
            override_omnilog (bool): Force override of omni_log behavior.

        Returns:
            Optional[Results]: Results of a blocking query; None for a
            non-blocking one.

        Raises:
            UsageError: If a callback is given while another non-blocking
                query is still in progress.
            DriverError: If a blocking query fails, or the query cannot be
                sent or watched.
        """
        if callback is not None and self._waiting is not None:
            raise UsageError("Non-blocking query already in progress")

        values = prepare_values(params)
        statement = self._cache.acquire(query, callback is not None, dollar_only=dollar_only)

        if self._should_log(log, override_omnilog):
            self.logger.info(f"{query} | {values}")

        try:
            self.driver.execute(statement.handle, values)
        except Exception:
            self.release_statement(statement)
            raise

        # Blocking
        if callback is None:
            self._drain.drain()
            return Results(self, statement)

        # Non-blocking
        self._waiting = PendingRequest(statement, callback)
        try:
            self._watch.activate()
        except Exception:
            self._waiting = None
            self.release_statement(statement)
            raise
        return None

    # LISTEN/NOTIFY
    def listen(self, channel: str) -> Database:
        """Subscribe to a channel."""
        self._listen.subscribe(channel)
        return self

    def notify(self, channel: str, payload: Optional[str] = None) -> Database:
        """Send a notification to a channel."""
        self._listen.publish(channel, payload)
        return self

    def unlisten(self, channel: str) -> Database:
        """Unsubscribe from a channel, or from all channels with ``"*"``."""
        self._listen.unsubscribe(channel)
        return self

    def is_listening(self) -> bool:
        return self._listen.is_subscribed()

    # Commands
    def begin(self, autocommit: bool = False) -> Transaction:
        """Start a transaction."""
        self.driver.do("BEGIN")
        self.logger.info("BEGIN transaction")
        return Transaction(self, autocommit=autocommit, logger=self.logger)

    def ping(self) -> bool:
        return self.driver.ping()

    def disconnect(self) -> None:
        """
        Tear the connection down.

        A pending non-blocking query is dropped and its callback never runs.
        """
        self._watch.reset()
        self._cache.flush()
        self._waiting = None
        self._listen.clear()
        self._closed = True
        self.driver.close()
        self.logger.info("Database disconnected")

    close = disconnect

    def __repr__(self):
        return (f"Database(driver={self.driver!r}, waiting={self.is_waiting}, "
                f"channels={self.channels})")


def dispatch_readable(database: Database) -> None:
    """
    Handle one readiness signal of a connection's socket.

    Buffered channel events are emitted first. Then, if a non-blocking query
    is pending and its result is complete, the result is fetched without
    raising and handed to the query callback. Channel events that arrived
    while the result was read are emitted after the callback.
    """
    if not database._drain.drain() and database.is_listening():
        return

    waiting = database._waiting
    if waiting is None or not database.driver.is_ready(waiting.statement.handle):
        return
    database._waiting = None

    outcome = database.driver.fetch_result(waiting.statement.handle, suppress_errors=True)
    error = outcome if isinstance(outcome, BaseException) else None
    if error is not None:
        database.logger.error(f"Non-blocking query failed: {error}")

    try:
        waiting.callback(error, Results(database, waiting.statement))
    finally:
        if database.is_listening():
            # Events read while polling for the result
            database._drain.drain()
        elif database._waiting is None:
            database._watch.deactivate()
