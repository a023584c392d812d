"""
Input/Output Manager (Key-Value Storage)
Provides the storages the ProfileStore writes its record through.

All storages expose the same two operations, read(key) and write(key, value),
with string values. The desktop application uses QSettings; the in-memory
storage serves headless use and tests.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Dict, Optional

from PySide6.QtCore import QSettings

from dicetotals.config import ORG_ID, APP_ID

logger = logging.getLogger(__name__)


class StorageError(RuntimeError):
    """Raised when the storage cannot be written."""


class KeyValueStorage(ABC):

    @abstractmethod
    def read(self, key: str) -> Optional[str]:
        """Return the stored value, or None if the key is absent."""
        pass

    @abstractmethod
    def write(self, key: str, value: str) -> None:
        """Store the value synchronously. Raises StorageError on failure."""
        pass


class SettingsStorage(KeyValueStorage):
    """
    Storage backed by QSettings (INI format).
    Without an explicit QSettings object, the user-scope settings file of the
    application is used.
    """
    def __init__(self, settings: Optional[QSettings] = None) -> None:
        if settings is None:
            settings = QSettings(QSettings.Format.IniFormat, QSettings.Scope.UserScope, ORG_ID, APP_ID)
        self.settings = settings
        logger.debug(f"Settings storage at: {self.settings.fileName()}")

    @classmethod
    def from_file(cls, path: str) -> SettingsStorage:
        return cls(QSettings(path, QSettings.Format.IniFormat))

    def read(self, key: str) -> Optional[str]:
        value = self.settings.value(key)
        if value is None:
            return None
        return str(value)

    def write(self, key: str, value: str) -> None:
        if not self.settings.isWritable():
            raise StorageError(f"Settings file '{self.settings.fileName()}' is not writable.")
        self.settings.setValue(key, value)
        self.settings.sync()
        if self.settings.status() != QSettings.Status.NoError:
            raise StorageError(
                f"Failed to write '{key}' to '{self.settings.fileName()}': {self.settings.status().name}"
            )


class MemoryStorage(KeyValueStorage):
    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self.data: Dict[str, str] = dict(initial or {})

    def read(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def write(self, key: str, value: str) -> None:
        self.data[key] = value
