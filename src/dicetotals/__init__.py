"""Dice Totals: dice + modifier calculator with persisted modifier profiles."""
