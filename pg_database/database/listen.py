from __future__ import annotations
from typing import Any, Callable, List, Optional, Set
from logging import Logger, getLogger as logging_getLogger
from .notifications import NotificationDrain
from .watch import ReadinessWatch

WILDCARD = "*"


class ListenRegistry:
    """
    Tracks the channels a connection is subscribed to and issues
    LISTEN, UNLISTEN and NOTIFY commands through the driver.
    """

    def __init__(
        self,
        driver: Any,
        watch: ReadinessWatch,
        drain: NotificationDrain,
        is_waiting: Callable[[], bool],
        logger: Optional[Logger] = None,
    ) -> None:
        self.driver = driver
        self.watch = watch
        self.drain = drain
        self._is_waiting = is_waiting
        self.logger = logger or logging_getLogger(__name__)
        self._channels: Set[str] = set()

    @property
    def channels(self) -> List[str]:
        return sorted(self._channels)

    def subscribe(self, channel: str) -> None:
        if channel not in self._channels:
            self.driver.do(f"LISTEN {self.driver.quote_identifier(channel)}")
            self._channels.add(channel)
            self.logger.info(f"LISTEN {channel}")
        self.watch.activate()

    def publish(self, channel: str, payload: Optional[str] = None) -> None:
        command = f"NOTIFY {self.driver.quote_identifier(channel)}"
        if payload is not None:
            command += f", {self.driver.quote_literal(payload)}"
        self.driver.do(command)
        self.logger.info(f"NOTIFY {channel}")
        # Self-notifications may already be buffered
        self.drain.drain()

    def unsubscribe(self, channel: str) -> None:
        if channel == WILDCARD:
            self.driver.do("UNLISTEN *")
            self._channels.clear()
        else:
            self.driver.do(f"UNLISTEN {self.driver.quote_identifier(channel)}")
            self._channels.discard(channel)
        self.logger.info(f"UNLISTEN {channel}")
        if not self._is_waiting() and not self._channels:
            self.watch.deactivate()

    def is_subscribed(self) -> bool:
        return bool(self._channels)

    def clear(self) -> None:
        self._channels.clear()
