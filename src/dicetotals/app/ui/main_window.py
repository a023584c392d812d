"""
Main Application Window
=======================
Profile bar on top; dice and modifiers on the left, totals on the right.
"""
from __future__ import annotations

import logging

from PySide6.QtCore import Qt
from PySide6.QtGui import QCloseEvent
from PySide6.QtWidgets import QMainWindow, QWidget, QVBoxLayout, QSplitter, QMessageBox

from dicetotals.app.state import Session
from dicetotals.app.ui.panels.dice import DicePanel
from dicetotals.app.ui.panels.modifiers import ModifierTable
from dicetotals.app.ui.panels.profiles import ProfileBar
from dicetotals.app.ui.panels.totals import TotalsPanel
from dicetotals.config import VISIBLE_APP_NAME
from dicetotals.model.io import StorageError

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    def __init__(self, session: Session) -> None:
        super().__init__()
        self.session = session
        self.setWindowTitle(VISIBLE_APP_NAME)
        self.resize(900, 560)

        central = QWidget(self)
        v = QVBoxLayout(central)

        self.profile_bar = ProfileBar(self.session, parent=central)
        v.addWidget(self.profile_bar, 0)

        splitter = QSplitter(Qt.Orientation.Horizontal, central)

        left = QWidget(splitter)
        left_layout = QVBoxLayout(left)
        left_layout.setContentsMargins(0, 0, 0, 0)
        self.dice_panel = DicePanel(self.session, parent=left)
        self.modifier_table = ModifierTable(self.session, parent=left)
        left_layout.addWidget(self.dice_panel, 0)
        left_layout.addWidget(self.modifier_table, 1)
        splitter.addWidget(left)

        self.totals_panel = TotalsPanel(self.session, parent=splitter)
        splitter.addWidget(self.totals_panel)
        splitter.setSizes([620, 280])

        v.addWidget(splitter, 1)
        self.setCentralWidget(central)

    def closeEvent(self, event: QCloseEvent) -> None:
        # Pending modifier edits must reach the settings before exit
        try:
            self.session.flush()
        except StorageError as e:
            logger.error(f"Could not save modifiers on exit: {e}")
            QMessageBox.critical(self, VISIBLE_APP_NAME, self.tr("Could not save modifiers:\n{0}").format(e))
        super().closeEvent(event)
