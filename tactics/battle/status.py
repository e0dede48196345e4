"""
Battle status calculation.
"""

from __future__ import annotations

from enum import Enum
from typing import Iterable

from tactics.components.character import Character, Faction


class BattleStatus(Enum):
    ACTIVE = "active"
    VICTORY = "victory"
    DEFEAT = "defeat"
    DRAW = "draw"


def calculate_battle_status(characters: Iterable[Character]) -> BattleStatus:
    """
    Outcome of a roster.

    Both factions present: active. Only friendlies: victory. Only
    enemies: defeat. Nobody: draw.
    """
    factions = {character.faction for character in characters}
    has_friendly = Faction.FRIENDLY in factions
    has_enemy = Faction.ENEMY in factions

    if not has_friendly and not has_enemy:
        return BattleStatus.DRAW
    if not has_friendly:
        return BattleStatus.DEFEAT
    if not has_enemy:
        return BattleStatus.VICTORY
    return BattleStatus.ACTIVE


def calculate_pre_battle_status(characters: Iterable[Character]) -> BattleStatus:
    """Status while setting up: active once both factions are placed, else draw."""
    factions = {character.faction for character in characters}
    if Faction.FRIENDLY in factions and Faction.ENEMY in factions:
        return BattleStatus.ACTIVE
    return BattleStatus.DRAW
