"""
Profile Store
=============
Owns the list of named modifier profiles and the id of the active one.

Why is this file needed?
------------------------
1. State Management: The profiles and the active selection live in one place.
2. Persistence: Every mutation writes the whole record
   {"profiles": [...], "activeProfileId": ...} to the storage before returning.
   load() and save() are the only I/O boundary.
3. Decoupling: The UI mutates modifiers only through update_active_modifiers,
   passing one of the updaters from dicetotals.model.modifiers.

Classes:
    ProfileStore: CRUD over profiles plus active-profile tracking.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Callable, Dict, List, Optional

from dicetotals.config import STORAGE_KEY, DEFAULT_PROFILE_NAME
from dicetotals.model.io import KeyValueStorage
from dicetotals.model.modifiers import Modifier, Profile

logger = logging.getLogger(__name__)

ModifierUpdater = Callable[[List[Modifier]], List[Modifier]]


class ProfileStore:
    def __init__(self, storage: KeyValueStorage, key: str = STORAGE_KEY) -> None:
        self.storage = storage
        self.key = key
        self.profiles: List[Profile] = []
        self.active_profile_id: Optional[str] = None

    # --------------------------------------------------------------------------
    # I/O
    # --------------------------------------------------------------------------

    def load(self) -> None:
        """
        Read the persisted record. An absent, unparseable or malformed record
        (or one without profiles) is replaced by a single default profile,
        which is saved immediately.
        """
        raw = self.storage.read(self.key)
        record = self._parse(raw) if raw is not None else None

        if record is None or not record["profiles"]:
            default = Profile(name=DEFAULT_PROFILE_NAME)
            self.profiles = [default]
            self.active_profile_id = default.id
            logger.info("Created default profile.")
            self.save()
            return

        self.profiles = record["profiles"]
        self.active_profile_id = record["activeProfileId"]
        logger.info(f"Loaded {len(self.profiles)} profile(s), active: {self.active_profile_id}")

    def _parse(self, raw: str) -> Optional[Dict[str, Any]]:
        try:
            data = json.loads(raw)
        except (json.JSONDecodeError, TypeError) as e:
            logger.warning(f"Stored profiles are not valid JSON, starting over: {e}")
            return None

        if not isinstance(data, dict) or not isinstance(data.get("profiles"), list):
            logger.warning("Stored profiles have an unexpected structure, starting over.")
            return None

        profiles = [Profile.from_dict(p) for p in data["profiles"] if isinstance(p, dict)]

        active_id = data.get("activeProfileId")
        if active_id is None and profiles:
            active_id = profiles[0].id

        return {"profiles": profiles, "activeProfileId": active_id}

    def to_record(self) -> Dict[str, Any]:
        return {
            "profiles": [p.to_dict() for p in self.profiles],
            "activeProfileId": self.active_profile_id,
        }

    def save(self) -> None:
        """Write the full record. StorageError propagates to the caller."""
        self.storage.write(self.key, json.dumps(self.to_record()))
        logger.debug(f"Saved {len(self.profiles)} profile(s).")

    # --------------------------------------------------------------------------
    # Queries
    # --------------------------------------------------------------------------

    def get(self, profile_id: Optional[str]) -> Optional[Profile]:
        for p in self.profiles:
            if p.id == profile_id:
                return p
        return None

    @property
    def active_profile(self) -> Optional[Profile]:
        return self.get(self.active_profile_id)

    @property
    def active_modifiers(self) -> List[Modifier]:
        profile = self.active_profile
        return list(profile.modifiers) if profile else []

    # --------------------------------------------------------------------------
    # Mutations
    # --------------------------------------------------------------------------

    def create(self, name: str) -> Optional[Profile]:
        """Add a profile and make it active. Blank names are ignored."""
        name = name.strip()
        if not name:
            return None
        profile = Profile(name=name)
        self.profiles.append(profile)
        self.active_profile_id = profile.id
        logger.info(f"Created profile '{name}' ({profile.id}).")
        self.save()
        return profile

    def rename(self, profile_id: str, name: str) -> bool:
        name = name.strip()
        profile = self.get(profile_id)
        if not name or profile is None:
            return False
        profile.name = name
        logger.info(f"Renamed profile {profile_id} to '{name}'.")
        self.save()
        return True

    def delete(self, profile_id: str) -> bool:
        """
        Remove a profile. If it was active, the first remaining profile becomes
        active (None if none remain).
        """
        profile = self.get(profile_id)
        if profile is None:
            return False
        self.profiles.remove(profile)
        if self.active_profile_id == profile_id:
            self.active_profile_id = self.profiles[0].id if self.profiles else None
        logger.info(f"Deleted profile '{profile.name}', active: {self.active_profile_id}")
        self.save()
        return True

    def set_active(self, profile_id: Optional[str]) -> None:
        # No existence check at this layer
        self.active_profile_id = profile_id
        self.save()

    def update_active_modifiers(self, updater: ModifierUpdater) -> bool:
        profile = self.active_profile
        if profile is None:
            return False
        profile.modifiers = list(updater(list(profile.modifiers)))
        self.save()
        return True
