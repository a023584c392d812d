"""
Profile Bar
Selects the active profile and creates, renames or deletes profiles.
"""
from __future__ import annotations

from typing import Optional

from PySide6.QtWidgets import (
    QWidget, QHBoxLayout, QComboBox, QPushButton, QInputDialog, QMessageBox, QLabel
)

from dicetotals.app.state import Session
from dicetotals.app.ui.panels.base import BasePanel
from dicetotals.model.modifiers import Profile


class ProfileBar(BasePanel):
    def __init__(self, session: Session, parent: QWidget | None = None) -> None:
        super().__init__(session, parent)

        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        layout.addWidget(QLabel(self.tr("Profile:")))

        self.combo = QComboBox(self)
        self.combo.setMinimumWidth(200)
        self.combo.currentIndexChanged.connect(self._on_index_changed)
        layout.addWidget(self.combo, 1)

        self.btn_new = QPushButton(self.tr("New..."), self)
        self.btn_new.clicked.connect(self._create)
        layout.addWidget(self.btn_new)

        self.btn_rename = QPushButton(self.tr("Rename..."), self)
        self.btn_rename.clicked.connect(self._rename)
        layout.addWidget(self.btn_rename)

        self.btn_delete = QPushButton(self.tr("Delete"), self)
        self.btn_delete.clicked.connect(self._delete)
        layout.addWidget(self.btn_delete)

        self.session.profiles_changed.connect(lambda *_: self.refresh())
        self.session.active_profile_changed.connect(lambda *_: self.refresh())
        self.refresh()

    def refresh(self) -> None:
        """Rebuild the combo box from the session."""
        active = self.session.active_profile()

        self.combo.blockSignals(True)
        try:
            self.combo.clear()
            for profile in self.session.profiles():
                self.combo.addItem(profile.name, profile.id)
            if active is not None:
                self.combo.setCurrentIndex(self.combo.findData(active.id))
        finally:
            self.combo.blockSignals(False)

        self.btn_rename.setEnabled(active is not None)
        # Keep at least one profile around
        self.btn_delete.setEnabled(active is not None and self.combo.count() > 1)

    def _current(self) -> Optional[Profile]:
        return self.session.active_profile()

    def _on_index_changed(self, index: int) -> None:
        profile_id = self.combo.itemData(index)
        if profile_id is not None:
            self.session.select_profile(profile_id)

    def _create(self) -> None:
        name, ok = QInputDialog.getText(self, self.tr("New Profile"), self.tr("Profile name:"))
        if ok and name.strip():
            self.session.create_profile(name)

    def _rename(self) -> None:
        profile = self._current()
        if profile is None:
            return
        name, ok = QInputDialog.getText(
            self, self.tr("Rename Profile"), self.tr("Profile name:"), text=profile.name
        )
        if ok and name.strip():
            self.session.rename_profile(profile.id, name)

    def _delete(self) -> None:
        profile = self._current()
        if profile is None:
            return
        answer = QMessageBox.question(
            self,
            self.tr("Delete Profile"),
            self.tr("Delete profile '{0}' and all its modifiers?").format(profile.name),
        )
        if answer == QMessageBox.StandardButton.Yes:
            self.session.delete_profile(profile.id)
