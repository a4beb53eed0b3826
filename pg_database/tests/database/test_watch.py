# tests/database/test_watch.py
from unittest.mock import MagicMock
from ...database.watch import ReadinessWatch


def make_watch(fd=7):
    reactor = MagicMock(spec=["add_reader", "remove_reader"])
    fileno = MagicMock(return_value=fd)
    callback = MagicMock()
    return ReadinessWatch(reactor, fileno, callback, "arg"), reactor, fileno, callback


class TestReadinessWatch:
    """Tests for ReadinessWatch class."""

    def test_initially_inactive(self):
        watch, reactor, fileno, _ = make_watch()
        assert watch.active is False
        assert watch.fd is None
        fileno.assert_not_called()

    def test_activate_registers_with_reactor(self):
        watch, reactor, fileno, callback = make_watch(fd=7)
        watch.activate()
        assert watch.active is True
        reactor.add_reader.assert_called_once_with(7, callback, "arg")

    def test_activate_is_idempotent(self):
        """Test activating twice registers only once."""
        watch, reactor, fileno, _ = make_watch()
        watch.activate()
        watch.activate()
        reactor.add_reader.assert_called_once()
        fileno.assert_called_once()

    def test_deactivate_is_idempotent(self):
        """Test deactivating twice unregisters only once."""
        watch, reactor, _, _ = make_watch(fd=7)
        watch.activate()
        watch.deactivate()
        watch.deactivate()
        reactor.remove_reader.assert_called_once_with(7)
        assert watch.active is False

    def test_deactivate_without_activate(self):
        watch, reactor, _, _ = make_watch()
        watch.deactivate()
        reactor.remove_reader.assert_not_called()

    def test_socket_resolved_once(self):
        """Test the socket is reused across activations."""
        watch, reactor, fileno, _ = make_watch()
        watch.activate()
        watch.deactivate()
        watch.activate()
        fileno.assert_called_once()
        assert reactor.add_reader.call_count == 2

    def test_reset_forgets_socket(self):
        watch, reactor, fileno, _ = make_watch()
        watch.activate()
        watch.reset()
        assert watch.active is False
        assert watch.fd is None
        watch.activate()
        assert fileno.call_count == 2
