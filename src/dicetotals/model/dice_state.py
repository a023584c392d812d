"""
Dice State
==========
Holds the three die faces and the directly entered total. Exactly one of them
is authoritative, as indicated by `source`.

States are immutable; every transition builds a new state, and construction
reconciles it:
- source "dice":  total is recomputed as sum(dice).
- source "total": dice are kept as they are (no redistribution of the total).
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Tuple, Union

from dicetotals.config import DIE_MIN, DIE_MAX, DICE_COUNT
from dicetotals.model.engine import DiceSource, TotalsResult, calculate_totals


@dataclass(frozen=True)
class DiceState:
    dice: Tuple[int, ...] = (DIE_MIN,) * DICE_COUNT
    total: int = DIE_MIN * DICE_COUNT
    source: DiceSource = DiceSource.DICE

    def __post_init__(self) -> None:
        dice = tuple(self.dice)
        if len(dice) != DICE_COUNT:
            raise ValueError(f"Expected {DICE_COUNT} dice, got {len(dice)}.")
        for value in dice:
            _check_face(value)

        object.__setattr__(self, "dice", dice)
        object.__setattr__(self, "source", DiceSource(self.source))
        self._reconcile()

    def _reconcile(self) -> None:
        if self.source == DiceSource.DICE:
            object.__setattr__(self, "total", sum(self.dice))

    def with_die(self, index: int, value: int) -> DiceState:
        """Set one die face; the dice become authoritative."""
        dice = list(self.dice)
        dice[index] = value
        return replace(self, dice=tuple(dice), source=DiceSource.DICE)

    def with_total(self, total: int) -> DiceState:
        """Enter the total directly; the total becomes authoritative."""
        return replace(self, total=total, source=DiceSource.TOTAL)

    def with_source(self, source: Union[DiceSource, str]) -> DiceState:
        return replace(self, source=DiceSource(source))

    def calculate(self, modifiers) -> TotalsResult:
        return calculate_totals(self.dice, modifiers, total=self.total, source=self.source)


def _check_face(value: int) -> None:
    if not DIE_MIN <= value <= DIE_MAX:
        raise ValueError(f"Die face must be between {DIE_MIN} and {DIE_MAX}, got {value}.")
