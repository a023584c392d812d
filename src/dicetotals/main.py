"""
Application Initialization
==========================
This module wires the model, the session and the main window together and
starts the Qt Event Loop.

Why is this file needed?
------------------------
It acts as the "Dependency Injection" root. It:
1. Instantiates the storage and the ProfileStore, and loads the profiles.
2. Instantiates the Session that owns the store and the dice state.
3. Passes the Session into the Main Window.
"""
import logging
import sys

from dicetotals.app.application import create_app
from dicetotals.app.state import Session
from dicetotals.app.ui.main_window import MainWindow
from dicetotals.logging_config import setup_logging
from dicetotals.model.io import SettingsStorage
from dicetotals.model.store import ProfileStore


def main() -> None:
    # Use logging.DEBUG to see every store write
    setup_logging(level=logging.INFO)

    app = create_app()

    store = ProfileStore(SettingsStorage())
    store.load()

    session = Session(store)

    window = MainWindow(session)
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
