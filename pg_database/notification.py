from typing import Any, Iterator, Optional


class Notification:
    """A channel event received through LISTEN/NOTIFY."""

    __slots__ = ("channel", "pid", "payload")

    def __init__(self, channel: str, pid: int, payload: Optional[str] = None):
        self.channel = channel
        self.pid = pid
        self.payload = payload

    def __repr__(self):
        return f"Notification({self.channel!r}, {self.pid!r}, {self.payload!r})"

    def __str__(self):
        return f"Notification(channel={self.channel!r}, pid={self.pid}, payload={self.payload!r})"

    def __iter__(self) -> Iterator[Any]:
        return iter((self.channel, self.pid, self.payload))

    def to_dict(self) -> dict:
        return {
            "channel": self.channel,
            "pid": self.pid,
            "payload": self.payload,
        }

    def __eq__(self, other):
        if not isinstance(other, Notification):
            return False
        return (
            self.channel == other.channel and
            self.pid == other.pid and
            self.payload == other.payload
        )

    def __hash__(self):
        return hash((self.channel, self.pid, self.payload))
