import math

import pytest

from dicetotals.model.modifiers import (
    Modifier, Profile, add_modifier, patch_modifier, remove_modifier, toggle_enabled,
    toggle_favorite, find_modifier
)


# ------------------------------------------------------------------------------
# Serialization
# ------------------------------------------------------------------------------

def test_modifier_defaults():
    m = Modifier()
    assert m.multiplier == 0
    assert m.dice_total == 0
    assert m.enabled is True
    assert m.favorite is False
    assert m.id


def test_modifier_ids_are_unique():
    assert Modifier().id != Modifier().id


def test_modifier_to_dict():
    m = Modifier(id="m1", multiplier=1.5, dice_total=-2, enabled=False, favorite=True)
    assert m.to_dict() == {
        "id": "m1", "multiplier": 1.5, "diceTotal": -2, "enabled": False, "favorite": True
    }


def test_modifier_from_dict_fills_missing_fields():
    m = Modifier.from_dict({"multiplier": 2})
    assert m.multiplier == 2
    assert m.dice_total == 0
    assert m.enabled is True
    assert m.favorite is False
    assert m.id


def test_modifier_from_dict_coerces_numbers():
    m = Modifier.from_dict({"id": "x", "multiplier": "1.5", "diceTotal": "3"})
    assert m.multiplier == 1.5
    assert m.dice_total == 3


def test_modifier_from_dict_garbage_becomes_nan():
    m = Modifier.from_dict({"id": "x", "multiplier": "abc"})
    assert math.isnan(m.multiplier)


@pytest.mark.parametrize("raw", ["false", "true", 0, 1, None, []])
def test_modifier_from_dict_non_bool_flags_use_defaults(raw):
    m = Modifier.from_dict({"id": "x", "enabled": raw, "favorite": raw})
    assert m.enabled is True
    assert m.favorite is False


def test_modifier_from_dict_keeps_real_bools():
    m = Modifier.from_dict({"id": "x", "enabled": False, "favorite": True})
    assert m.enabled is False
    assert m.favorite is True


def test_profile_from_dict_defaults():
    p = Profile.from_dict({"modifiers": [{"diceTotal": 1}, "junk"]})
    assert p.name == "Default"
    assert p.id
    assert len(p.modifiers) == 1
    assert p.modifiers[0].dice_total == 1


def test_profile_from_dict_drops_invalid_modifier_list():
    p = Profile.from_dict({"id": "p", "name": "Hero", "modifiers": "nope"})
    assert p.modifiers == []


def test_profile_round_trip():
    p = Profile(name="Hero", modifiers=[Modifier(multiplier=2, dice_total=1, favorite=True)])
    assert Profile.from_dict(p.to_dict()) == p


# ------------------------------------------------------------------------------
# Updaters
# ------------------------------------------------------------------------------

@pytest.fixture
def mods():
    return [Modifier(id="a", dice_total=1), Modifier(id="b", multiplier=2, favorite=True)]


def test_add_modifier_appends_default(mods):
    result = add_modifier(mods)
    assert len(result) == 3
    assert result[:2] == mods
    assert result[2].multiplier == 0 and result[2].dice_total == 0 and result[2].enabled
    assert len(mods) == 2


def test_patch_modifier(mods):
    result = patch_modifier(mods, "a", dice_total=4, multiplier=0.5)
    assert find_modifier(result, "a").dice_total == 4
    assert find_modifier(result, "a").multiplier == 0.5
    assert find_modifier(mods, "a").dice_total == 1


def test_patch_modifier_unknown_field(mods):
    with pytest.raises(TypeError):
        patch_modifier(mods, "a", colour="red")


def test_patch_modifier_cannot_change_id(mods):
    with pytest.raises(TypeError):
        patch_modifier(mods, "a", id="z")


def test_toggle_enabled(mods):
    result = toggle_enabled(mods, "a")
    assert find_modifier(result, "a").enabled is False
    assert find_modifier(toggle_enabled(result, "a"), "a").enabled is True


def test_toggle_favorite(mods):
    result = toggle_favorite(mods, "a")
    assert find_modifier(result, "a").favorite is True


def test_remove_modifier(mods):
    result = remove_modifier(mods, "a")
    assert [m.id for m in result] == ["b"]


def test_remove_favorite_is_refused(mods):
    assert remove_modifier(mods, "b") == mods


def test_remove_after_unfavorite(mods):
    result = remove_modifier(toggle_favorite(mods, "b"), "b")
    assert [m.id for m in result] == ["a"]


def test_remove_unknown_id(mods):
    assert remove_modifier(mods, "zzz") == mods
