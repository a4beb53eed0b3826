# tests/database/test_notifications.py
from unittest.mock import MagicMock
from ..fakes import FakeDriver
from ...database.notifications import NotificationDrain
from ...exceptions import ConnectionLost, DriverError


def make_drain(driver, listening=False):
    watch = MagicMock()
    emit = MagicMock()
    drain = NotificationDrain(driver, watch, emit, lambda: listening)
    return drain, watch, emit


class TestNotificationDrain:
    """Tests for NotificationDrain class."""

    def test_drain_empty(self):
        drain, watch, emit = make_drain(FakeDriver())
        assert drain.drain() is True
        emit.assert_not_called()

    def test_drain_emits_in_arrival_order(self):
        """Test every buffered event is emitted, oldest first."""
        driver = FakeDriver()
        first = driver.push_notification("a", "1")
        second = driver.push_notification("b", "2")
        drain, watch, emit = make_drain(driver)

        assert drain.drain() is True
        assert [c.args for c in emit.call_args_list] == [
            ("notification", first),
            ("notification", second),
        ]
        assert not driver.notifications

    def test_failure_while_listening_emits_close(self):
        """Test a poll failure with subscriptions signals connection loss."""
        driver = FakeDriver()
        driver.poll_error = DriverError("server closed the connection", sqlstate="08006")
        drain, watch, emit = make_drain(driver, listening=True)

        assert drain.drain() is False
        name, error = emit.call_args.args
        assert name == "close"
        assert isinstance(error, ConnectionLost)
        assert error.sqlstate == "08006"
        watch.deactivate.assert_called_once()

    def test_failure_without_listeners_is_swallowed(self):
        """Test a poll failure without subscriptions emits nothing."""
        driver = FakeDriver()
        driver.poll_error = DriverError("boom")
        drain, watch, emit = make_drain(driver, listening=False)

        assert drain.drain() is False
        emit.assert_not_called()
        watch.deactivate.assert_not_called()
