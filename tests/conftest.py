"""Shared pytest fixtures for tradejournal tests."""

import tempfile
import os
import pytest

from tradejournal.database.factories import create_sqlite_database
from tradejournal.domain.account import AccountService
from tradejournal.domain.events import EventBus
from tradejournal.domain.folder_watcher import FolderWatcherService
from tradejournal.domain.trade import TradeService
from tradejournal.domain.trade_import import TradeImportService
from tradejournal.filesystem import MemoryFileSystem


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def account_service(temp_db):
    """Create an AccountService with a temporary database."""
    return AccountService(temp_db)


@pytest.fixture
def trade_service(temp_db):
    """Create a TradeService with a temporary database."""
    return TradeService(temp_db)


@pytest.fixture
def event_bus():
    """Create an EventBus."""
    return EventBus()


@pytest.fixture
def recorded_events(event_bus):
    """Subscribe to every event type and collect published events in order."""
    from tradejournal.domain import events

    received = []
    for event_type in (
        events.TradesImportedEvent,
        events.FileDetectedEvent,
        events.FileProcessedEvent,
        events.FileErrorEvent,
    ):
        event_bus.subscribe(event_type, received.append)
    return received


@pytest.fixture
def memory_fs():
    """Create an empty in-memory filesystem."""
    return MemoryFileSystem()


@pytest.fixture
def import_service(temp_db, event_bus):
    """Create a TradeImportService reading from the local disk."""
    return TradeImportService(temp_db, event_bus=event_bus)


@pytest.fixture
def memory_import_service(temp_db, event_bus, memory_fs):
    """Create a TradeImportService reading from the in-memory filesystem."""
    return TradeImportService(temp_db, event_bus=event_bus, fs=memory_fs)


@pytest.fixture
def watcher(memory_import_service):
    """Create a FolderWatcherService on the in-memory filesystem, stopped afterwards."""
    service = FolderWatcherService(memory_import_service)
    yield service
    service.stop()


@pytest.fixture
def sample_account(account_service):
    """Create a sample account for testing."""
    account_id = account_service.create_account(name="Test Account", broker="Test Broker")
    return account_service.get_account(account_id)


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
