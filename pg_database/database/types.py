from __future__ import annotations
from typing import Optional, Any, Callable, Protocol, Sequence, TYPE_CHECKING

if TYPE_CHECKING:
    from ..statement_cache import CachedStatement
    from .results import Results

# Type aliases
QueryParams = Sequence[Any]
QueryCallback = Callable[[Optional[BaseException], "Results"], Any]


class Reactor(Protocol):
    """
    Level-triggered readiness notifications for file descriptors.

    Any `asyncio` event loop satisfies this protocol.
    """

    def add_reader(self, fd: int, callback: Callable[..., Any], *args: Any) -> None: ...

    def remove_reader(self, fd: int) -> bool: ...


class PendingRequest:
    """The non-blocking query a connection is waiting on."""

    __slots__ = ("statement", "callback")

    def __init__(self, statement: CachedStatement, callback: QueryCallback):
        self.statement = statement
        self.callback = callback

    def __repr__(self):
        return f"PendingRequest({self.statement!r}, {self.callback!r})"
