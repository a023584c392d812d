"""
Configuration & Constants
=========================
This module serves as the central registry for global constants.

Why is this file needed?
------------------------
1. Abstraction: It prevents magic numbers (die faces, rounding tolerance)
   from being scattered throughout the engine and the UI.
2. Persistence: It names the single settings key under which the profile
   record lives, and the organisation/application identifiers QSettings uses
   to locate the settings file.

Exports:
    DIE_MIN, DIE_MAX (int): Face range of a single die.
    DICE_COUNT (int): Number of dice rolled.
    FLOOR_EPSILON (float): Tolerance of the rounding used for final values.
    STORAGE_KEY (str): Settings key holding the persisted profile record.
"""

# Dice
DIE_MIN: int = 1
DIE_MAX: int = 6
DICE_COUNT: int = 3

# Values within this distance below the next integer are rounded up
FLOOR_EPSILON: float = 1e-6

# Persistence
STORAGE_KEY: str = "profiles/record"
DEFAULT_PROFILE_NAME: str = "Default"

# Delay before a burst of modifier edits is written to the settings
MODIFIER_DEBOUNCE_MS: int = 300

# Application identity (QSettings location)
ORG_ID: str = "dicetotals"
APP_ID: str = "dice-totals"
VISIBLE_APP_NAME: str = "Dice Totals"
