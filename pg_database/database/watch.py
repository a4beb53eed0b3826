from __future__ import annotations
from typing import Any, Callable, Optional
from logging import Logger, getLogger as logging_getLogger
from .types import Reactor


class ReadinessWatch:
    """
    A single on/off read-readiness registration of a socket with a reactor.

    The socket is resolved lazily through `fileno` on first activation and
    reused afterwards. `callback` is invoked by the reactor as
    ``callback(*args)`` whenever the socket has data to read.
    """

    def __init__(
        self,
        reactor: Reactor,
        fileno: Callable[[], int],
        callback: Callable[..., Any],
        *args: Any,
        logger: Optional[Logger] = None,
    ) -> None:
        self.reactor = reactor
        self._fileno = fileno
        self._callback = callback
        self._args = args
        self.logger = logger or logging_getLogger(__name__)
        self._fd: Optional[int] = None
        self._active = False

    @property
    def active(self) -> bool:
        return self._active

    @property
    def fd(self) -> Optional[int]:
        return self._fd

    def activate(self) -> None:
        """Register with the reactor. Does nothing if already registered."""
        if self._active:
            return
        if self._fd is None:
            self._fd = self._fileno()
        self.reactor.add_reader(self._fd, self._callback, *self._args)
        self._active = True
        self.logger.debug(f"Watching socket {self._fd}")

    def deactivate(self) -> None:
        """Unregister from the reactor. Does nothing if not registered."""
        if not self._active:
            return
        self._active = False
        self.reactor.remove_reader(self._fd)
        self.logger.debug(f"Stopped watching socket {self._fd}")

    def reset(self) -> None:
        """Unregister and forget the socket."""
        self.deactivate()
        self._fd = None
