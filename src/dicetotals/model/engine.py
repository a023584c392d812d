"""
Totals Engine
=============
Pure calculation of the final roll value from dice (or a directly entered
total) and the enabled modifiers.

Why is this file needed?
------------------------
1. Single Source: Every displayed number (base total, multiplier, final value,
   min/max bounds) comes from one deterministic function.
2. Decoupling: It knows nothing about profiles, storage or widgets. Callers
   pass plain data and receive a plain result.

Functions:
    smart_floor: Floor with a small tolerance for floating point error.
    calculate_totals: Computes a TotalsResult.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Dict, Iterable, Mapping, Sequence, Tuple, Union, TYPE_CHECKING

from dicetotals.config import DIE_MIN, DIE_MAX, DICE_COUNT, FLOOR_EPSILON

if TYPE_CHECKING:
    from dicetotals.model.modifiers import Modifier

Number = Union[int, float]


class DiceSource(StrEnum):
    """Which input is authoritative for the base total."""
    DICE = "dice"
    TOTAL = "total"


@dataclass(frozen=True)
class TotalsResult:
    base_total: Number
    variable_dice_total: Number
    final_multiplier: Number
    before_flooring: Number
    final_total: Number
    min_possible_roll: Number
    max_possible_roll: Number

    def to_dict(self) -> Dict[str, Number]:
        return {
            "baseTotal": self.base_total,
            "variableDiceTotal": self.variable_dice_total,
            "finalMultiplier": self.final_multiplier,
            "beforeFlooring": self.before_flooring,
            "finalTotal": self.final_total,
            "minPossibleRoll": self.min_possible_roll,
            "maxPossibleRoll": self.max_possible_roll,
        }


def smart_floor(value: Number) -> Number:
    """
    Floor the value, but round up when it sits within FLOOR_EPSILON below the
    next integer (e.g. 6.999999997 -> 7).

    Non-finite values (NaN, +-inf) are returned unchanged.
    """
    if not math.isfinite(value):
        return value
    floored = math.floor(value)
    if value - floored > 1 - FLOOR_EPSILON:
        return floored + 1
    return floored


def _modifier_fields(modifier: Union[Modifier, Mapping[str, Any]]) -> Tuple[Number, Number, bool]:
    """Returns (multiplier, dice_total, enabled) of a Modifier or a plain mapping."""
    if isinstance(modifier, Mapping):
        return (
            modifier.get("multiplier", 0),
            modifier.get("diceTotal", modifier.get("dice_total", 0)),
            bool(modifier.get("enabled", True)),
        )
    return modifier.multiplier, modifier.dice_total, modifier.enabled


def calculate_totals(
    dice: Sequence[Number],
    modifiers: Iterable[Union[Modifier, Mapping[str, Any]]],
    total: Number = 0,
    source: Union[DiceSource, str] = DiceSource.DICE,
) -> TotalsResult:
    """
    Compute all derived totals.

    Args:
        dice: Die faces. Only summed when source is "dice".
        modifiers: Modifiers (objects or mappings); disabled ones are ignored.
        total: Directly entered total, used when source is "total".
        source: Which of dice/total is authoritative. Any value other than
            "dice" selects the entered total.

    Returns:
        TotalsResult with the base total, aggregated modifiers, the final
        (rounded) value and the min/max possible roll.
    """

    # --- 1. Base ---
    if source == DiceSource.DICE:
        dice_count = len(dice)
        base_total = sum(dice)
    else:
        dice_count = DICE_COUNT
        base_total = total

    min_base = dice_count * DIE_MIN
    max_base = dice_count * DIE_MAX

    # --- 2. Modifiers ---
    variable_dice_total: Number = 0
    multiplier_sum: Number = 0
    min_variable: Number = 0
    max_variable: Number = 0
    for modifier in modifiers:
        multiplier, dice_total, enabled = _modifier_fields(modifier)
        if not enabled:
            continue
        variable_dice_total += dice_total
        multiplier_sum += multiplier
        # NaN offsets must propagate into the bounds (min()/max() would drop them)
        min_variable += 0 if dice_total >= 0 else dice_total
        max_variable += 0 if dice_total <= 0 else dice_total

    # A zero sum means "no multiplier", not "multiply by zero"
    final_multiplier = 1 if multiplier_sum == 0 else multiplier_sum

    # --- 3. Final value ---
    before_flooring = (base_total + variable_dice_total) * final_multiplier
    final_total = smart_floor(before_flooring)

    # --- 4. Bounds ---
    min_possible_roll = smart_floor((min_base + min_variable) * final_multiplier)
    max_possible_roll = smart_floor((max_base + max_variable) * final_multiplier)

    return TotalsResult(
        base_total=base_total,
        variable_dice_total=variable_dice_total,
        final_multiplier=final_multiplier,
        before_flooring=before_flooring,
        final_total=final_total,
        min_possible_roll=min_possible_roll,
        max_possible_roll=max_possible_roll,
    )
