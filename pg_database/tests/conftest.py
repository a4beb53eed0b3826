# tests/conftest.py
import pytest
from unittest.mock import MagicMock

from .fakes import FakeDriver
from ..database.database import Database


@pytest.fixture
def driver():
    """An in-memory driver."""
    return FakeDriver()


@pytest.fixture
def reactor():
    """A reactor that records registrations without running anything."""
    return MagicMock(spec=["add_reader", "remove_reader"])


@pytest.fixture
def database(driver, reactor):
    return Database(driver, reactor, max_statements=3)
