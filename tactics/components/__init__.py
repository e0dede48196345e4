"""
Battle data components.
"""

from tactics.components.skill import (
    ActionType,
    TargetScope,
    Criterion,
    ConditionType,
    MoveBehavior,
    QualifierKind,
    Qualifier,
    Trigger,
    Filter,
    Skill,
    SkillUpdate,
)
from tactics.components.action import Action
from tactics.components.character import Faction, Character

__all__ = [
    "ActionType",
    "TargetScope",
    "Criterion",
    "ConditionType",
    "MoveBehavior",
    "QualifierKind",
    "Qualifier",
    "Trigger",
    "Filter",
    "Skill",
    "SkillUpdate",
    "Action",
    "Faction",
    "Character",
]
