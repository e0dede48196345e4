"""
Tactics

Hex-board tactical battle simulator built on hexengine. Characters use
their skills automatically, in priority order, based on triggers, target
criteria and filters.

Quick Start:
    from tactics import BattleSystem, Faction

    battle = BattleSystem()
    battle.add_character(Faction.FRIENDLY)
    battle.add_character(Faction.ENEMY)
    while battle.battle_status.value == "active":
        battle.process_tick()
"""

__version__ = "0.1.0"

from tactics.components import (
    Faction,
    Character,
    Skill,
    SkillUpdate,
    Trigger,
    Filter,
    Action,
    ActionType,
    TargetScope,
    Criterion,
    ConditionType,
)
from tactics.skills import SKILL_CATALOG, get_definition, create_skill, create_innate_skills
from tactics.battle import BattleSystem, BattleEvent, BattleStatus, GameState, process_tick

__all__ = [
    # Components
    "Faction",
    "Character",
    "Skill",
    "SkillUpdate",
    "Trigger",
    "Filter",
    "Action",
    "ActionType",
    "TargetScope",
    "Criterion",
    "ConditionType",
    # Skills
    "SKILL_CATALOG",
    "get_definition",
    "create_skill",
    "create_innate_skills",
    # Battle
    "BattleSystem",
    "BattleEvent",
    "BattleStatus",
    "GameState",
    "process_tick",
]
