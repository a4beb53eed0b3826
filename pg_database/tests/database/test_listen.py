# tests/database/test_listen.py
from unittest.mock import MagicMock
from ..fakes import FakeDriver
from ...database.listen import ListenRegistry


def make_registry(waiting=False):
    driver = FakeDriver()
    watch = MagicMock()
    drain = MagicMock()
    registry = ListenRegistry(driver, watch, drain, lambda: waiting)
    return registry, driver, watch, drain


class TestListenRegistry:
    """Tests for ListenRegistry class."""

    def test_initially_not_subscribed(self):
        registry, _, _, _ = make_registry()
        assert registry.is_subscribed() is False
        assert registry.channels == []

    def test_subscribe(self):
        registry, driver, watch, _ = make_registry()
        registry.subscribe("news")
        assert driver.commands == ['LISTEN "news"']
        assert registry.is_subscribed() is True
        watch.activate.assert_called_once()

    def test_subscribe_twice_sends_one_command(self):
        """Test a repeated subscribe is a no-op apart from re-activating the watch."""
        registry, driver, watch, _ = make_registry()
        registry.subscribe("news")
        registry.subscribe("news")
        assert driver.commands == ['LISTEN "news"']
        assert watch.activate.call_count == 2

    def test_subscribe_quotes_identifier(self):
        registry, driver, _, _ = make_registry()
        registry.subscribe('we"ird')
        assert driver.commands == ['LISTEN "we""ird"']

    def test_unsubscribe(self):
        registry, driver, watch, _ = make_registry()
        registry.subscribe("news")
        registry.unsubscribe("news")
        assert driver.commands[-1] == 'UNLISTEN "news"'
        assert registry.is_subscribed() is False
        watch.deactivate.assert_called_once()

    def test_unsubscribe_keeps_watch_while_others_remain(self):
        registry, _, watch, _ = make_registry()
        registry.subscribe("a")
        registry.subscribe("b")
        registry.unsubscribe("a")
        assert registry.channels == ["b"]
        watch.deactivate.assert_not_called()

    def test_unsubscribe_keeps_watch_while_query_pending(self):
        """Test the watch stays active while a non-blocking query is pending."""
        registry, _, watch, _ = make_registry(waiting=True)
        registry.subscribe("a")
        registry.unsubscribe("a")
        watch.deactivate.assert_not_called()

    def test_unsubscribe_wildcard_clears_all(self):
        """Test the wildcard removes every channel in one call."""
        registry, driver, watch, _ = make_registry()
        for channel in ("a", "b", "c"):
            registry.subscribe(channel)
        registry.unsubscribe("*")
        assert driver.commands[-1] == "UNLISTEN *"
        assert registry.channels == []
        watch.deactivate.assert_called_once()

    def test_publish_without_payload(self):
        registry, driver, _, drain = make_registry()
        registry.publish("news")
        assert driver.commands == ['NOTIFY "news"']
        drain.drain.assert_called_once()

    def test_publish_with_payload(self):
        registry, driver, _, drain = make_registry()
        registry.publish("news", "it's here")
        assert driver.commands == ['NOTIFY "news", \'it\'\'s here\'']
        drain.drain.assert_called_once()

    def test_clear(self):
        registry, driver, _, _ = make_registry()
        registry.subscribe("a")
        registry.clear()
        assert registry.is_subscribed() is False
        assert driver.commands == ['LISTEN "a"']
