"""
Modifier & Profile Data Model
=============================
Defines the persisted data structures and the pure updaters that edit a
profile's modifier list.

Every edit of the modifier list goes through ProfileStore.update_active_modifiers
with one of the updater functions below, e.g.::

    store.update_active_modifiers(lambda mods: toggle_enabled(mods, modifier_id))

Classes:
    Modifier: Additive offset + multiplicative factor, switchable on/off.
    Profile: Named, ordered collection of modifiers.
"""
from __future__ import annotations

import logging
import math
import uuid
from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, List, Optional, Union

from dicetotals.config import DEFAULT_PROFILE_NAME

logger = logging.getLogger(__name__)

Number = Union[int, float]


def new_id() -> str:
    return uuid.uuid4().hex


def _as_number(value: Any, default: Number) -> Number:
    """
    Coerce a stored value to a number.
    Missing values use the default; anything non-numeric becomes NaN.
    """
    if value is None:
        return default
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        return value
    try:
        number = float(value)
    except (TypeError, ValueError):
        return math.nan
    return int(number) if number.is_integer() else number


def _as_bool(value: Any, default: bool) -> bool:
    """Only real booleans are taken from a stored record; anything else uses the default."""
    if isinstance(value, bool):
        return value
    return default


@dataclass
class Modifier:
    id: str = field(default_factory=new_id)
    multiplier: Number = 0
    dice_total: Number = 0
    enabled: bool = True
    favorite: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "multiplier": self.multiplier,
            "diceTotal": self.dice_total,
            "enabled": self.enabled,
            "favorite": self.favorite,
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> Modifier:
        """Build a modifier, filling fields missing from older records."""
        return Modifier(
            id=str(data.get("id") or new_id()),
            multiplier=_as_number(data.get("multiplier"), 0),
            dice_total=_as_number(data.get("diceTotal"), 0),
            enabled=_as_bool(data.get("enabled"), True),
            favorite=_as_bool(data.get("favorite"), False),
        )


@dataclass
class Profile:
    name: str
    id: str = field(default_factory=new_id)
    modifiers: List[Modifier] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "modifiers": [m.to_dict() for m in self.modifiers],
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> Profile:
        name = data.get("name")
        if not isinstance(name, str) or not name.strip():
            name = DEFAULT_PROFILE_NAME

        raw_modifiers = data.get("modifiers") or []
        if not isinstance(raw_modifiers, list):
            logger.warning(f"Profile '{name}' has invalid modifiers ({type(raw_modifiers).__name__}), dropping them.")
            raw_modifiers = []

        return Profile(
            name=name,
            id=str(data.get("id") or new_id()),
            modifiers=[Modifier.from_dict(m) for m in raw_modifiers if isinstance(m, dict)],
        )


# ==============================================================================
# UPDATERS
# ==============================================================================

_EDITABLE_FIELDS = {f.name for f in fields(Modifier)} - {"id"}


def find_modifier(modifiers: List[Modifier], modifier_id: str) -> Optional[Modifier]:
    for m in modifiers:
        if m.id == modifier_id:
            return m
    return None


def add_modifier(modifiers: List[Modifier], **values: Any) -> List[Modifier]:
    """Append a new modifier (multiplier=0, dice_total=0, enabled) to the list."""
    return [*modifiers, Modifier(**values)]


def patch_modifier(modifiers: List[Modifier], modifier_id: str, **changes: Any) -> List[Modifier]:
    """Replace the given fields of one modifier. Unknown ids leave the list as is."""
    unknown = set(changes) - _EDITABLE_FIELDS
    if unknown:
        raise TypeError(f"Unknown modifier field(s): {', '.join(sorted(unknown))}")
    return [replace(m, **changes) if m.id == modifier_id else m for m in modifiers]


def toggle_enabled(modifiers: List[Modifier], modifier_id: str) -> List[Modifier]:
    return [replace(m, enabled=not m.enabled) if m.id == modifier_id else m for m in modifiers]


def toggle_favorite(modifiers: List[Modifier], modifier_id: str) -> List[Modifier]:
    return [replace(m, favorite=not m.favorite) if m.id == modifier_id else m for m in modifiers]


def remove_modifier(modifiers: List[Modifier], modifier_id: str) -> List[Modifier]:
    """Remove a modifier unless it is marked as favorite."""
    target = find_modifier(modifiers, modifier_id)
    if target is None:
        return list(modifiers)
    if target.favorite:
        logger.info(f"Modifier '{modifier_id}' is a favorite and was not removed.")
        return list(modifiers)
    return [m for m in modifiers if m.id != modifier_id]
