from __future__ import annotations
from typing import Any, List, Optional, Protocol, Sequence, Tuple
from ..notification import Notification


class Driver(Protocol):
    """
    The operations `Database` needs from a live, authenticated driver handle.

    Statement handles are opaque to the wrapper. Failures are reported as
    `pg_database.exceptions.DriverError`.
    """

    @property
    def pid(self) -> int: ...

    def prepare(self, query: str, is_async: bool = False, dollar_only: bool = False) -> Any:
        """Prepare `query`; `is_async` statements are executed without blocking."""
        ...

    def execute(self, statement: Any, params: Sequence[Any]) -> None:
        """Run a statement. Async statements return as soon as the query is sent."""
        ...

    def is_ready(self, statement: Any) -> bool:
        """True once the async result of `statement` can be fetched without blocking.

        Also true when the connection failed, so that `fetch_result` reports it.
        """
        ...

    def fetch_result(self, statement: Any, suppress_errors: bool = False) -> Any:
        """Collect an async result. With `suppress_errors` the error is returned, not raised."""
        ...

    def next_notification(self) -> Optional[Notification]: ...

    def do(self, command: str) -> None: ...

    def quote_identifier(self, name: str) -> str: ...

    def quote_literal(self, value: Any) -> str: ...

    def fileno(self) -> int: ...

    def columns(self, statement: Any) -> List[str]: ...

    def rows(self, statement: Any) -> List[Tuple[Any, ...]]: ...

    def rowcount(self, statement: Any) -> int: ...

    def discard(self, statement: Any) -> None:
        """Forget a statement that was evicted from the cache."""
        ...

    def ping(self) -> bool: ...

    def close(self) -> None: ...
