import json

import pytest
from PySide6.QtTest import QTest

from dicetotals.app.state import Session
from dicetotals.config import MODIFIER_DEBOUNCE_MS, STORAGE_KEY
from dicetotals.model.engine import DiceSource


@pytest.fixture
def session(qapp, store):
    return Session(store)


class Recorder:
    def __init__(self, signal):
        self.calls = []
        signal.connect(self.calls.append)

    @property
    def last(self):
        return self.calls[-1]


def stored_modifiers(storage):
    record = json.loads(storage.data[STORAGE_KEY])
    active = record["activeProfileId"]
    return next(p for p in record["profiles"] if p["id"] == active)["modifiers"]


# ------------------------------------------------------------------------------
# Dice
# ------------------------------------------------------------------------------

def test_initial_totals(session):
    totals = session.totals()
    assert totals.final_total == 3
    assert totals.max_possible_roll == 18


def test_set_die_emits_totals(session):
    totals = Recorder(session.totals_changed)
    dice = Recorder(session.dice_changed)
    session.set_die(0, 6)
    assert dice.last.dice == (6, 1, 1)
    assert totals.last.final_total == 8


def test_set_total_switches_source(session):
    totals = Recorder(session.totals_changed)
    session.set_total(11)
    assert session.dice_state.source == DiceSource.TOTAL
    assert session.dice_state.dice == (1, 1, 1)
    assert totals.last.base_total == 11


def test_unchanged_dice_do_not_emit(session):
    totals = Recorder(session.totals_changed)
    session.set_die(0, 1)
    assert totals.calls == []


# ------------------------------------------------------------------------------
# Profiles
# ------------------------------------------------------------------------------

def test_create_and_select_profile(session):
    profiles = Recorder(session.profiles_changed)
    hero = session.create_profile("Hero")
    assert [p.name for p in profiles.last] == ["Default", "Hero"]
    assert session.active_profile().id == hero.id

    default_id = session.profiles()[0].id
    active = Recorder(session.active_profile_changed)
    session.select_profile(default_id)
    assert active.last.id == default_id


def test_create_blank_profile_emits_nothing(session):
    profiles = Recorder(session.profiles_changed)
    assert session.create_profile("  ") is None
    assert profiles.calls == []


def test_cannot_delete_last_profile(session):
    assert not session.delete_profile(session.active_profile().id)
    assert len(session.profiles()) == 1


def test_delete_profile_switches_active(session):
    hero = session.create_profile("Hero")
    assert session.delete_profile(hero.id)
    assert session.active_profile().name == "Default"


def test_rename_profile(session):
    profiles = Recorder(session.profiles_changed)
    assert session.rename_profile(session.active_profile().id, "Wizard")
    assert profiles.last[0].name == "Wizard"


# ------------------------------------------------------------------------------
# Modifiers
# ------------------------------------------------------------------------------

def test_add_and_toggle_modifier(session, storage):
    changed = Recorder(session.modifiers_changed)
    session.add_modifier()
    mid = changed.last[0].id
    session.toggle_enabled(mid)
    assert session.modifiers()[0].enabled is False
    assert stored_modifiers(storage)[0]["enabled"] is False


def test_favorite_blocks_removal(session):
    session.add_modifier()
    mid = session.modifiers()[0].id
    session.toggle_favorite(mid)
    session.remove_modifier(mid)
    assert [m.id for m in session.modifiers()] == [mid]

    session.toggle_favorite(mid)
    session.remove_modifier(mid)
    assert session.modifiers() == []


def test_edit_is_visible_before_commit(session, storage):
    session.add_modifier()
    mid = session.modifiers()[0].id
    totals = Recorder(session.totals_changed)

    session.edit_modifier(mid, dice_total=5)
    session.edit_modifier(mid, multiplier=2)

    # Totals reflect the edit, storage does not yet
    assert totals.last.final_total == 16
    assert stored_modifiers(storage)[0]["diceTotal"] == 0


def test_flush_matches_immediate_commit(session, storage):
    session.add_modifier()
    mid = session.modifiers()[0].id
    session.edit_modifier(mid, dice_total=1)
    session.edit_modifier(mid, dice_total=4)
    session.edit_modifier(mid, multiplier=1.5)
    expected = session.totals()

    session.flush()

    saved = stored_modifiers(storage)[0]
    assert saved["diceTotal"] == 4
    assert saved["multiplier"] == 1.5
    assert session.totals() == expected


def test_edits_commit_when_debounce_timer_fires(session, storage):
    session.add_modifier()
    mid = session.modifiers()[0].id
    session.edit_modifier(mid, dice_total=4)
    session.edit_modifier(mid, multiplier=2)
    expected = session.totals()

    assert stored_modifiers(storage)[0]["diceTotal"] == 0

    # No flush(): the event loop runs until the commit timer has fired
    QTest.qWait(MODIFIER_DEBOUNCE_MS + 200)

    saved = stored_modifiers(storage)[0]
    assert saved["diceTotal"] == 4
    assert saved["multiplier"] == 2
    assert session.modifiers()[0].dice_total == 4
    assert session.totals() == expected


def test_pending_edits_flushed_before_profile_switch(session, storage):
    session.add_modifier()
    default_id = session.active_profile().id
    mid = session.modifiers()[0].id
    session.edit_modifier(mid, dice_total=3)

    session.create_profile("Hero")
    session.select_profile(default_id)
    assert session.modifiers()[0].dice_total == 3
    assert stored_modifiers(storage)[0]["diceTotal"] == 3


def test_edit_rejects_unknown_field(session):
    session.add_modifier()
    with pytest.raises(TypeError):
        session.edit_modifier(session.modifiers()[0].id, bogus=1)
