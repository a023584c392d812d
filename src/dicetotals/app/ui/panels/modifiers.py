"""
Modifiers Table
One row per modifier of the active profile:
Enabled | + Dice Total | x Multiplier | Favorite | Remove
"""
from __future__ import annotations

import logging
import math
from typing import List

from PySide6.QtCore import Qt, QTimer
from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QTableWidget, QHeaderView, QCheckBox, QSpinBox,
    QDoubleSpinBox, QPushButton, QLabel, QAbstractItemView
)

from dicetotals.app.state import Session
from dicetotals.app.ui.panels.base import BasePanel
from dicetotals.model.modifiers import Modifier

logger = logging.getLogger(__name__)

COLUMNS = ["Enabled", "+ Dice Total", "× Multiplier", "Favorite", ""]


def _centered(widget: QWidget) -> QWidget:
    holder = QWidget()
    lay = QVBoxLayout(holder)
    lay.setContentsMargins(0, 0, 0, 0)
    lay.setAlignment(Qt.AlignmentFlag.AlignCenter)
    lay.addWidget(widget)
    return holder


class ModifierTable(BasePanel):
    def __init__(self, session: Session, parent: QWidget | None = None) -> None:
        super().__init__(session, parent)

        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)

        self.table = QTableWidget(0, len(COLUMNS), self)
        self.table.setHorizontalHeaderLabels([self.tr(c) for c in COLUMNS])
        self.table.horizontalHeader().setSectionResizeMode(QHeaderView.ResizeMode.Stretch)
        self.table.verticalHeader().setVisible(False)
        self.table.setSelectionMode(QAbstractItemView.SelectionMode.NoSelection)
        root.addWidget(self.table)

        self.lbl_empty = QLabel(self.tr("No modifiers added."), self)
        self.lbl_empty.setAlignment(Qt.AlignmentFlag.AlignCenter)
        root.addWidget(self.lbl_empty)

        self.btn_add = QPushButton(self.tr("+ Add Modifier"), self)
        self.btn_add.clicked.connect(self.session.add_modifier)
        root.addWidget(self.btn_add, 0, Qt.AlignmentFlag.AlignLeft)

        self.session.modifiers_changed.connect(self.refresh)
        self.refresh(self.session.modifiers())

    def refresh(self, modifiers: List[Modifier]) -> None:
        """Rebuild all rows. Called on structural changes only (not while typing)."""
        self.table.setRowCount(0)
        for row, modifier in enumerate(modifiers):
            self.table.insertRow(row)
            self._fill_row(row, modifier)
        self.lbl_empty.setVisible(not modifiers)
        logger.debug(f"Modifier table shows {len(modifiers)} row(s).")

    def _fill_row(self, row: int, modifier: Modifier) -> None:
        mid = modifier.id

        cb_enabled = QCheckBox()
        cb_enabled.setChecked(modifier.enabled)
        cb_enabled.toggled.connect(lambda _checked: self._deferred(self.session.toggle_enabled, mid))
        self.table.setCellWidget(row, 0, _centered(cb_enabled))

        sp_dice = QSpinBox()
        sp_dice.setRange(-999, 999)
        sp_dice.setValue(0 if math.isnan(modifier.dice_total) else int(modifier.dice_total))
        sp_dice.setEnabled(modifier.enabled)
        sp_dice.valueChanged.connect(lambda v: self.session.edit_modifier(mid, dice_total=v))
        self.table.setCellWidget(row, 1, sp_dice)

        sp_mult = QDoubleSpinBox()
        sp_mult.setRange(0.0, 999.0)
        sp_mult.setDecimals(3)
        sp_mult.setSingleStep(0.2)
        sp_mult.setValue(0.0 if math.isnan(modifier.multiplier) else float(modifier.multiplier))
        sp_mult.setEnabled(modifier.enabled)
        sp_mult.valueChanged.connect(lambda v: self.session.edit_modifier(mid, multiplier=v))
        self.table.setCellWidget(row, 2, sp_mult)

        cb_favorite = QCheckBox()
        cb_favorite.setChecked(modifier.favorite)
        cb_favorite.toggled.connect(lambda _checked: self._deferred(self.session.toggle_favorite, mid))
        self.table.setCellWidget(row, 3, _centered(cb_favorite))

        btn_remove = QPushButton(self.tr("Remove"))
        btn_remove.setEnabled(not modifier.favorite)
        btn_remove.setToolTip(self.tr("Favorites cannot be removed") if modifier.favorite else "")
        btn_remove.clicked.connect(lambda: self._deferred(self.session.remove_modifier, mid))
        self.table.setCellWidget(row, 4, btn_remove)

    @staticmethod
    def _deferred(action, modifier_id: str) -> None:
        # The table is rebuilt by the action; the emitting widget must not be deleted inside its own signal
        QTimer.singleShot(0, lambda: action(modifier_id))
