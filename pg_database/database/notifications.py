from __future__ import annotations
from typing import Any, Callable, Optional
from logging import Logger, getLogger as logging_getLogger
from ..exceptions import ConnectionLost, DriverError
from .watch import ReadinessWatch


class NotificationDrain:
    """
    Emits every channel event the driver has buffered, in arrival order.

    Channel events and non-blocking query results share one socket, so the
    drain runs after every blocking query, after every NOTIFY and first thing
    on every readiness signal.
    """

    def __init__(
        self,
        driver: Any,
        watch: ReadinessWatch,
        emit: Callable[..., Any],
        is_listening: Callable[[], bool],
        logger: Optional[Logger] = None,
    ) -> None:
        self.driver = driver
        self.watch = watch
        self._emit = emit
        self._is_listening = is_listening
        self.logger = logger or logging_getLogger(__name__)

    def drain(self) -> bool:
        """
        Poll the driver until no notification is left.

        A driver failure while channels are subscribed means the connection
        is gone: a ``close`` event is emitted and the watch is deactivated.
        Without subscriptions nobody is waiting for events and the failure is
        only logged.

        Returns:
            bool: False if the driver failed while polling.
        """
        try:
            while True:
                notification = self.driver.next_notification()
                if notification is None:
                    return True
                self._emit("notification", notification)
        except DriverError as e:
            if self._is_listening():
                self.logger.error(f"Connection lost while listening: {e}")
                self._emit("close", ConnectionLost(str(e), sqlstate=e.sqlstate))
                self.watch.deactivate()
            else:
                self.logger.debug(f"Ignoring notification poll failure: {e}")
            return False
