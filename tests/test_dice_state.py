import pytest

from dicetotals.model.dice_state import DiceState
from dicetotals.model.engine import DiceSource
from dicetotals.model.modifiers import Modifier


def test_default_state_is_reconciled():
    state = DiceState()
    assert state.dice == (1, 1, 1)
    assert state.total == 3
    assert state.source == DiceSource.DICE


def test_construction_recomputes_total_from_dice():
    state = DiceState(dice=[6, 6, 6], total=0)
    assert state.dice == (6, 6, 6)
    assert state.total == 18


def test_with_die_switches_to_dice_and_recomputes():
    state = DiceState().with_total(12).with_die(2, 5)
    assert state.source == DiceSource.DICE
    assert state.dice == (1, 1, 5)
    assert state.total == 7


def test_with_total_keeps_dice():
    state = DiceState(dice=(2, 3, 4)).with_total(15)
    assert state.source == DiceSource.TOTAL
    assert state.total == 15
    assert state.dice == (2, 3, 4)


def test_switching_back_to_dice_recomputes_total():
    state = DiceState(dice=(2, 3, 4)).with_total(15).with_source("dice")
    assert state.total == 9


def test_switching_to_total_keeps_current_sum():
    state = DiceState(dice=(2, 3, 4)).with_source(DiceSource.TOTAL)
    assert state.total == 9
    assert state.source == DiceSource.TOTAL


@pytest.mark.parametrize("face", [0, 7, -1])
def test_rejects_faces_out_of_range(face):
    with pytest.raises(ValueError):
        DiceState().with_die(0, face)


def test_rejects_wrong_dice_count():
    with pytest.raises(ValueError):
        DiceState(dice=(1, 2))


def test_rejects_unknown_source():
    with pytest.raises(ValueError):
        DiceState().with_source("coin")


def test_calculate_uses_authoritative_input():
    modifiers = [Modifier(dice_total=1, multiplier=2)]
    by_dice = DiceState(dice=(6, 6, 6)).calculate(modifiers)
    by_total = DiceState(dice=(6, 6, 6)).with_total(4).calculate(modifiers)
    assert by_dice.final_total == 38
    assert by_total.final_total == 10
