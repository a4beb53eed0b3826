from __future__ import annotations
from typing import Any, Callable, Dict, List, Optional


class EventEmitter:
    """
    Minimal synchronous event emitter.

    Listeners are called in subscription order with the arguments passed to
    `emit`. Exceptions raised by a listener propagate to the emitter.
    """

    def __init__(self) -> None:
        self._events: Dict[str, List[Callable[..., Any]]] = {}

    def on(self, name: str, callback: Callable[..., Any]) -> Callable[..., Any]:
        """Subscribe to an event. Returns the callback so it can be unsubscribed."""
        self._events.setdefault(name, []).append(callback)
        return callback

    def once(self, name: str, callback: Callable[..., Any]) -> Callable[..., Any]:
        """Subscribe to the next occurrence of an event only."""
        def wrapper(*args: Any) -> Any:
            self.unsubscribe(name, wrapper)
            return callback(*args)
        return self.on(name, wrapper)

    def emit(self, name: str, *args: Any) -> EventEmitter:
        for callback in list(self._events.get(name, ())):
            callback(*args)
        return self

    def has_subscribers(self, name: str) -> bool:
        return bool(self._events.get(name))

    def subscribers(self, name: str) -> List[Callable[..., Any]]:
        return list(self._events.get(name, ()))

    def unsubscribe(self, name: str, callback: Optional[Callable[..., Any]] = None) -> EventEmitter:
        """Remove one listener, or every listener of `name` when `callback` is None."""
        if callback is None:
            self._events.pop(name, None)
            return self
        listeners = self._events.get(name, [])
        if callback in listeners:
            listeners.remove(callback)
        if not listeners:
            self._events.pop(name, None)
        return self
