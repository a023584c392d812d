from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Union

from PySide6.QtCore import QObject, QTimer, Signal

from dicetotals.config import MODIFIER_DEBOUNCE_MS
from dicetotals.model import modifiers as mods
from dicetotals.model.dice_state import DiceState
from dicetotals.model.engine import DiceSource, TotalsResult
from dicetotals.model.modifiers import Modifier, Profile
from dicetotals.model.store import ModifierUpdater, ProfileStore

logger = logging.getLogger(__name__)


class Session(QObject):
    """
    Central state of one UI session with signals for panel sync.

    Owns the ProfileStore and the DiceState, and recomputes the totals after
    every transition. Rapid modifier edits (spin box typing) are collected and
    written to the store once the debounce timer fires; until then they are
    overlaid on the stored modifiers so the totals are always current.
    """
    profiles_changed = Signal(object)        # list[Profile]
    active_profile_changed = Signal(object)  # Optional[Profile]
    modifiers_changed = Signal(object)       # list[Modifier]
    dice_changed = Signal(object)            # DiceState
    totals_changed = Signal(object)          # TotalsResult

    def __init__(self, store: ProfileStore, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self.store = store
        self.dice_state = DiceState()
        self._pending: Dict[str, Dict[str, Any]] = {}

        self._commit_timer = QTimer(self)
        self._commit_timer.setSingleShot(True)
        self._commit_timer.setInterval(MODIFIER_DEBOUNCE_MS)
        self._commit_timer.timeout.connect(self.flush)

    # --------------------------------------------------------------------------
    # Queries
    # --------------------------------------------------------------------------

    def profiles(self) -> List[Profile]:
        return list(self.store.profiles)

    def active_profile(self) -> Optional[Profile]:
        return self.store.active_profile

    def modifiers(self) -> List[Modifier]:
        """Active modifiers including edits not yet committed to the store."""
        result = self.store.active_modifiers
        for modifier_id, changes in self._pending.items():
            result = mods.patch_modifier(result, modifier_id, **changes)
        return result

    def totals(self) -> TotalsResult:
        return self.dice_state.calculate(self.modifiers())

    # --------------------------------------------------------------------------
    # Dice
    # --------------------------------------------------------------------------

    def set_die(self, index: int, value: int) -> None:
        self._set_dice_state(self.dice_state.with_die(index, value))

    def set_total(self, total: int) -> None:
        self._set_dice_state(self.dice_state.with_total(total))

    def set_source(self, source: Union[DiceSource, str]) -> None:
        self._set_dice_state(self.dice_state.with_source(source))

    def _set_dice_state(self, state: DiceState) -> None:
        if state == self.dice_state:
            return
        self.dice_state = state
        self.dice_changed.emit(state)
        self._emit_totals()

    # --------------------------------------------------------------------------
    # Profiles
    # --------------------------------------------------------------------------

    def create_profile(self, name: str) -> Optional[Profile]:
        self.flush()
        profile = self.store.create(name)
        if profile is not None:
            self._emit_profiles()
        return profile

    def rename_profile(self, profile_id: str, name: str) -> bool:
        self.flush()
        ok = self.store.rename(profile_id, name)
        if ok:
            self.profiles_changed.emit(self.profiles())
        return ok

    def delete_profile(self, profile_id: str) -> bool:
        """Delete a profile; the last remaining profile cannot be deleted."""
        self.flush()
        if len(self.store.profiles) <= 1:
            logger.info("Refusing to delete the last remaining profile.")
            return False
        ok = self.store.delete(profile_id)
        if ok:
            self._emit_profiles()
        return ok

    def select_profile(self, profile_id: str) -> None:
        self.flush()
        if profile_id == self.store.active_profile_id:
            return
        self.store.set_active(profile_id)
        self.active_profile_changed.emit(self.store.active_profile)
        self._emit_modifiers()

    # --------------------------------------------------------------------------
    # Modifiers
    # --------------------------------------------------------------------------

    def add_modifier(self) -> None:
        self._update_modifiers(mods.add_modifier)

    def remove_modifier(self, modifier_id: str) -> None:
        self._update_modifiers(lambda m: mods.remove_modifier(m, modifier_id))

    def toggle_enabled(self, modifier_id: str) -> None:
        self._update_modifiers(lambda m: mods.toggle_enabled(m, modifier_id))

    def toggle_favorite(self, modifier_id: str) -> None:
        self._update_modifiers(lambda m: mods.toggle_favorite(m, modifier_id))

    def edit_modifier(self, modifier_id: str, **changes: Any) -> None:
        """Debounced edit of numeric fields (multiplier, dice_total)."""
        # Validate field names now rather than when the timer fires
        mods.patch_modifier([], modifier_id, **changes)
        self._pending.setdefault(modifier_id, {}).update(changes)
        self._commit_timer.start()
        self._emit_totals()

    def flush(self) -> None:
        """Commit pending modifier edits to the store."""
        self._commit_timer.stop()
        if not self._pending:
            return
        pending, self._pending = self._pending, {}

        def apply(current: List[Modifier]) -> List[Modifier]:
            for modifier_id, changes in pending.items():
                current = mods.patch_modifier(current, modifier_id, **changes)
            return current

        self.store.update_active_modifiers(apply)
        logger.debug(f"Committed edits of {len(pending)} modifier(s).")

    def _update_modifiers(self, updater: ModifierUpdater) -> None:
        self.flush()
        if self.store.update_active_modifiers(updater):
            self._emit_modifiers()

    # --------------------------------------------------------------------------
    # Signals
    # --------------------------------------------------------------------------

    def _emit_profiles(self) -> None:
        self.profiles_changed.emit(self.profiles())
        self.active_profile_changed.emit(self.store.active_profile)
        self._emit_modifiers()

    def _emit_modifiers(self) -> None:
        self.modifiers_changed.emit(self.modifiers())
        self._emit_totals()

    def _emit_totals(self) -> None:
        self.totals_changed.emit(self.totals())
