"""
Panel Base
Every panel of the main window (profile bar, dice, modifier table, totals)
talks only to the shared Session: it calls Session actions on user input and
redraws from the Session signals. None of them touch the ProfileStore or the
storage directly.
"""
from __future__ import annotations

from PySide6.QtWidgets import QWidget

from dicetotals.app.state import Session


class BasePanel(QWidget):
    """A widget bound to the Session that owns the profiles and the dice state."""
    def __init__(self, session: Session, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.session = session
