"""
Dice Panel
Three die selectors plus a directly entered total. The radio buttons show
(and switch) which of the two is used as the base value.
"""
from __future__ import annotations

from typing import List

from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QGroupBox, QComboBox, QSpinBox, QRadioButton,
    QButtonGroup, QFormLayout
)

from dicetotals.app.state import Session
from dicetotals.app.ui.panels.base import BasePanel
from dicetotals.config import DIE_MIN, DIE_MAX, DICE_COUNT
from dicetotals.model.dice_state import DiceState
from dicetotals.model.engine import DiceSource


class DicePanel(BasePanel):
    def __init__(self, session: Session, parent: QWidget | None = None) -> None:
        super().__init__(session, parent)

        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)

        group = QGroupBox(self.tr("Dice"), self)
        form = QFormLayout(group)

        # 1. Source selection
        self.rb_dice = QRadioButton(self.tr("Use dice"), group)
        self.rb_total = QRadioButton(self.tr("Enter total"), group)
        self.source_group = QButtonGroup(self)
        self.source_group.addButton(self.rb_dice)
        self.source_group.addButton(self.rb_total)
        self.rb_dice.toggled.connect(self._on_source_toggled)

        h_source = QHBoxLayout()
        h_source.addWidget(self.rb_dice)
        h_source.addWidget(self.rb_total)
        h_source.addStretch()
        form.addRow(h_source)

        # 2. Die selectors
        self.die_boxes: List[QComboBox] = []
        for i in range(DICE_COUNT):
            box = QComboBox(group)
            for face in range(DIE_MIN, DIE_MAX + 1):
                box.addItem(str(face), face)
            box.currentIndexChanged.connect(lambda _idx, i=i: self._on_die_changed(i))
            form.addRow(self.tr("Die {0}").format(i + 1), box)
            self.die_boxes.append(box)

        # 3. Direct total
        self.sp_total = QSpinBox(group)
        self.sp_total.setRange(-9999, 9999)
        self.sp_total.valueChanged.connect(self._on_total_changed)
        form.addRow(self.tr("Total"), self.sp_total)

        root.addWidget(group)

        self.session.dice_changed.connect(self.refresh)
        self.refresh(self.session.dice_state)

    def refresh(self, state: DiceState) -> None:
        widgets = [self.rb_dice, self.rb_total, self.sp_total, *self.die_boxes]
        for w in widgets:
            w.blockSignals(True)
        try:
            self.rb_dice.setChecked(state.source == DiceSource.DICE)
            self.rb_total.setChecked(state.source == DiceSource.TOTAL)
            for box, face in zip(self.die_boxes, state.dice):
                box.setCurrentIndex(box.findData(face))
            self.sp_total.setValue(state.total)
        finally:
            for w in widgets:
                w.blockSignals(False)

    def _on_source_toggled(self, checked: bool) -> None:
        self.session.set_source(DiceSource.DICE if checked else DiceSource.TOTAL)

    def _on_die_changed(self, index: int) -> None:
        face = self.die_boxes[index].currentData()
        if face is not None:
            self.session.set_die(index, int(face))

    def _on_total_changed(self, value: int) -> None:
        self.session.set_total(value)
