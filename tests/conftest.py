import pytest
from PySide6.QtCore import QCoreApplication

from dicetotals.model.io import MemoryStorage
from dicetotals.model.store import ProfileStore


@pytest.fixture(scope="session")
def qapp():
    """One QCoreApplication for all tests touching QObject/QTimer/QSettings."""
    app = QCoreApplication.instance()
    if app is None:
        app = QCoreApplication([])
    return app


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def store(storage):
    s = ProfileStore(storage)
    s.load()
    return s
