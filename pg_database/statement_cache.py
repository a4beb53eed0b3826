from __future__ import annotations
from typing import Any, Optional
from logging import Logger, getLogger as logging_getLogger
from .utils import validate_non_neg_int


class CachedStatement:
    """A prepared statement handle together with the key it is cached under."""

    __slots__ = ("query", "is_async", "handle")

    def __init__(self, query: str, is_async: bool, handle: Any):
        self.query = query
        self.is_async = is_async
        self.handle = handle

    def __repr__(self):
        mode = "async" if self.is_async else "sync"
        return f"CachedStatement({self.query!r}, {mode}, {self.handle!r})"


class StatementCache(list):
    """
    A list subclass holding prepared statements that are not currently in use.

    Entries are kept in release order: the front of the list holds the
    statement released longest ago and is the first one to be evicted once
    the list grows past `max_statements`.

    A statement is keyed by its exact query text and its mode. A statement
    prepared for blocking execution is never handed out for a non-blocking
    query and vice versa, since the driver fixes the execution mode when the
    statement is prepared.

    Attributes:
        driver: Object providing ``prepare(query, is_async=..., dollar_only=...)``.
        max_statements (int): Maximum number of cached statements.

    Methods:
        acquire(query, is_async, dollar_only=False) -> CachedStatement:
            Removes and returns a matching cached statement, or prepares a new one.

        release(statement) -> tuple:
            Puts a statement back and returns the statements evicted to make room.

        resize(max_statements) -> tuple:
            Changes the limit and returns the statements evicted by it.

        flush() -> tuple:
            Removes all statements and returns them.

    Example:
        >>> cache = StatementCache(driver, max_statements=2)
        >>> st = cache.acquire("select 1", is_async=False)
        >>> cache.release(st)
        ()
        >>> cache.acquire("select 1", is_async=False) is st
        True
    """

    def __init__(self, driver: Any, max_statements: int = 10, logger: Optional[Logger] = None):
        super().__init__()
        self.driver = driver
        self.max_statements = max_statements
        self.logger = logger or logging_getLogger(__name__)

    @property
    def max_statements(self) -> int:
        return self._max_statements

    @max_statements.setter
    def max_statements(self, value: int) -> None:
        self._max_statements = validate_non_neg_int(value, "max_statements")

    def acquire(self, query: str, is_async: bool, dollar_only: bool = False) -> CachedStatement:
        """
        Take a statement for `query` out of the cache or prepare a new one.

        Args:
            query (str): Exact SQL text.
            is_async (bool): Whether the statement will be executed without blocking.
            dollar_only (bool): Only recognize ``$n`` placeholders when a new
                statement has to be prepared.

        Returns:
            CachedStatement: A statement owned by the caller until it is released.
        """
        for index, statement in enumerate(self):
            if statement.is_async != is_async:
                continue
            if statement.query == query:
                return self.pop(index)

        handle = self.driver.prepare(query, is_async=is_async, dollar_only=dollar_only)
        return CachedStatement(query, is_async, handle)

    def release(self, statement: CachedStatement) -> tuple:
        """
        Return a statement to the cache, evicting the oldest ones past the limit.
        """
        super().append(statement)
        return self._evict()

    def resize(self, max_statements: int) -> tuple:
        self.max_statements = max_statements
        return self._evict()

    def _evict(self) -> tuple:
        evicted = []
        while len(self) > self.max_statements:
            evicted.append(self.pop(0))
        if evicted:
            self.logger.debug(f"Evicted {len(evicted)} cached statement(s)")
        return tuple(evicted)

    def flush(self) -> tuple:
        """
        Flush the cache, removing all statements.
        """
        output = tuple(self)
        self.clear()
        return output
