"""
Totals Panel
Read-only display of a TotalsResult. All number formatting happens here.
"""
from __future__ import annotations

import math
from typing import Dict

from PySide6.QtCore import QT_TRANSLATE_NOOP, Qt
from PySide6.QtWidgets import QWidget, QVBoxLayout, QGroupBox, QFormLayout, QLabel

from dicetotals.app.state import Session
from dicetotals.app.ui.panels.base import BasePanel
from dicetotals.model.engine import TotalsResult

# (field, label, decimals)
ROWS = [
    ("base_total", QT_TRANSLATE_NOOP("TotalsPanel", "Base Dice Total:"), 0),
    ("variable_dice_total", QT_TRANSLATE_NOOP("TotalsPanel", "Variable Dice Total:"), 0),
    ("final_multiplier", QT_TRANSLATE_NOOP("TotalsPanel", "Final Multiplier:"), 2),
    ("before_flooring", QT_TRANSLATE_NOOP("TotalsPanel", "Before Flooring:"), 2),
    ("final_total", QT_TRANSLATE_NOOP("TotalsPanel", "Final Value:"), 0),
    ("min_possible_roll", QT_TRANSLATE_NOOP("TotalsPanel", "Min Possible Roll:"), 0),
    ("max_possible_roll", QT_TRANSLATE_NOOP("TotalsPanel", "Max Possible Roll:"), 0),
]


def format_number(value: float, decimals: int) -> str:
    if isinstance(value, float) and math.isnan(value):
        return "-"
    if decimals == 0 and float(value).is_integer():
        return str(int(value))
    return f"{value:.{max(decimals, 2)}f}"


class TotalsPanel(BasePanel):
    def __init__(self, session: Session, parent: QWidget | None = None) -> None:
        super().__init__(session, parent)

        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)

        group = QGroupBox(self.tr("Totals"), self)
        form = QFormLayout(group)

        self.value_labels: Dict[str, QLabel] = {}
        for field_name, label, _decimals in ROWS:
            value_label = QLabel("-", group)
            value_label.setAlignment(Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter)
            form.addRow(self.tr(label), value_label)
            self.value_labels[field_name] = value_label

        final_font = self.value_labels["final_total"].font()
        final_font.setBold(True)
        final_font.setPointSizeF(final_font.pointSizeF() * 1.5)
        self.value_labels["final_total"].setFont(final_font)

        root.addWidget(group)
        root.addStretch()

        self.session.totals_changed.connect(self.refresh)
        self.refresh(self.session.totals())

    def refresh(self, totals: TotalsResult) -> None:
        for field_name, _label, decimals in ROWS:
            value = getattr(totals, field_name)
            self.value_labels[field_name].setText(format_number(value, decimals))
