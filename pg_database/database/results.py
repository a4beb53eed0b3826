from __future__ import annotations
from typing import Any, Dict, List, Optional, Tuple, Type, TYPE_CHECKING
from ..exceptions import UsageError
from ..statement_cache import CachedStatement

if TYPE_CHECKING:
    from .database import Database


class Results:
    """
    The outcome of a query, bound to the statement that produced it.

    The statement goes back to the connection's statement cache only when
    `release` is called, either directly or by leaving a ``with`` block.
    A results object that is never released keeps its statement out of the
    cache for good, so the same query has to be prepared again next time.
    """

    def __init__(self, database: Database, statement: CachedStatement):
        self.database = database
        self.statement = statement
        self._released = False

    def __enter__(self) -> Results:
        return self

    def __exit__(self, exc_type: Optional[Type[BaseException]],
                 exc_val: Optional[BaseException], exc_tb) -> None:
        self.release()

    @property
    def released(self) -> bool:
        return self._released

    def release(self) -> None:
        """Return the statement to the statement cache. Safe to call twice."""
        if self._released:
            return
        self._released = True
        self.database.release_statement(self.statement)

    def _handle(self) -> Any:
        if self._released:
            raise UsageError("Results have already been released")
        return self.statement.handle

    @property
    def columns(self) -> List[str]:
        return self.database.driver.columns(self._handle())

    @property
    def rowcount(self) -> int:
        return self.database.driver.rowcount(self._handle())

    def fetchall(self) -> List[Tuple[Any, ...]]:
        return list(self.database.driver.rows(self._handle()))

    def fetchone(self) -> Optional[Tuple[Any, ...]]:
        rows = self.fetchall()
        return rows[0] if rows else None

    def dicts(self) -> List[Dict[str, Any]]:
        columns = self.columns
        return [dict(zip(columns, row)) for row in self.fetchall()]

    def __repr__(self):
        return f"Results({self.statement!r}, released={self._released})"
