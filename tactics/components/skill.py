"""
Skill components - configurable skill instances, triggers, filters.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional

from pydantic import Field, model_validator

from hexengine.core.component import Component


class ActionType(Enum):
    """What a skill does when it resolves."""
    ATTACK = "attack"
    MOVE = "move"
    HEAL = "heal"
    INTERRUPT = "interrupt"
    CHARGE = "charge"
    # Synthetic: no skill passed evaluation
    IDLE = "idle"


class TargetScope(Enum):
    """Which group a skill picks its target from."""
    ENEMY = "enemy"
    ALLY = "ally"
    SELF = "self"


class Criterion(Enum):
    """Ranking rule among candidate targets."""
    NEAREST = "nearest"
    FURTHEST = "furthest"
    LOWEST_HP = "lowest_hp"
    HIGHEST_HP = "highest_hp"
    MOST_ENEMIES_NEARBY = "most_enemies_nearby"


class ConditionType(Enum):
    """Conditions shared by triggers and filters."""
    ALWAYS = "always"
    IN_RANGE = "in_range"
    HP_BELOW = "hp_below"
    HP_ABOVE = "hp_above"
    TARGETING_ME = "targeting_me"
    TARGETING_ALLY = "targeting_ally"
    CHANNELING = "channeling"
    IDLE = "idle"


class MoveBehavior(Enum):
    """Direction of a move relative to its target."""
    TOWARDS = "towards"
    AWAY = "away"


class QualifierKind(Enum):
    ACTION = "action"
    SKILL = "skill"


# Flat trigger names that fix the scope of an in_range check
_SCOPED_CONDITIONS = {
    "enemy_in_range": ("in_range", "enemy"),
    "ally_in_range": ("in_range", "ally"),
}

# Scope used when a trigger doesn't name one
_DEFAULT_SCOPES = {
    "hp_below": "self",
    "hp_above": "self",
}


def _condition_name(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


class Qualifier(Component):
    """
    Narrows a channeling condition.

    Attributes:
        kind: Match on action type or on skill definition id
        id: The action type value or skill id to match
    """
    kind: QualifierKind
    id: str


class Trigger(Component):
    """
    A precondition that gates whether a skill is considered.

    The condition is checked against every unit in the scope's pool and
    passes if any unit satisfies it; negated flips the outcome.

    Attributes:
        condition: What to check
        scope: Pool of units to check it against
        value: Threshold (hexes for in_range, percent for hp_*)
        qualifier: Optional narrowing for channeling
        negated: Invert the result
    """
    condition: ConditionType = ConditionType.ALWAYS
    scope: TargetScope = TargetScope.ENEMY
    value: Optional[float] = None
    qualifier: Optional[Qualifier] = None
    negated: bool = False

    @model_validator(mode="before")
    @classmethod
    def _expand_scoped_names(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        name = _condition_name(data.get("condition", "always"))
        if name in _SCOPED_CONDITIONS:
            data["condition"], data["scope"] = _SCOPED_CONDITIONS[name]
        elif "scope" not in data and name in _DEFAULT_SCOPES:
            data["scope"] = _DEFAULT_SCOPES[name]
        return data

    @classmethod
    def hp_below(cls, percent: float, scope: TargetScope = TargetScope.SELF) -> Trigger:
        return cls(condition=ConditionType.HP_BELOW, value=percent, scope=scope)

    @classmethod
    def hp_above(cls, percent: float, scope: TargetScope = TargetScope.SELF) -> Trigger:
        return cls(condition=ConditionType.HP_ABOVE, value=percent, scope=scope)

    @classmethod
    def enemy_in_range(cls, hexes: int) -> Trigger:
        return cls(condition=ConditionType.IN_RANGE, value=hexes, scope=TargetScope.ENEMY)

    @classmethod
    def ally_in_range(cls, hexes: int) -> Trigger:
        return cls(condition=ConditionType.IN_RANGE, value=hexes, scope=TargetScope.ALLY)


class Filter(Component):
    """
    A precondition checked against the resolved target only.

    Attributes:
        condition: What to check on the target
        value: Threshold (hexes for in_range, percent for hp_*)
        qualifier: Optional narrowing for channeling
        negated: Invert the result (NOT)
    """
    condition: ConditionType
    value: Optional[float] = None
    qualifier: Optional[Qualifier] = None
    negated: bool = False


class Skill(Component):
    """
    A skill instance assigned to one character.

    Stats are copied from the catalog definition; the remaining fields are
    the character's behavioural configuration for this instance.
    """
    # Definition stats
    id: str
    instance_id: str
    name: str
    action_type: ActionType
    tick_cost: int = Field(default=1, ge=0)
    range: int = Field(default=1, ge=0)
    damage: Optional[int] = None
    healing: Optional[int] = None
    distance: Optional[int] = None
    cooldown: Optional[int] = None

    # Behaviour
    enabled: bool = True
    triggers: list[Trigger] = Field(default_factory=lambda: [Trigger()], max_length=2)
    target: TargetScope = TargetScope.ENEMY
    criterion: Criterion = Criterion.NEAREST
    filter: Optional[Filter] = None
    behavior: Optional[MoveBehavior] = None

    # Runtime
    cooldown_remaining: int = Field(default=0, ge=0)

    @property
    def is_on_cooldown(self) -> bool:
        return self.cooldown_remaining > 0


class SkillUpdate(Component):
    """
    A partial change to a skill's behavioural fields.

    Only fields that were explicitly passed are applied, so
    SkillUpdate(filter=None) clears a filter while SkillUpdate() changes
    nothing.
    """
    enabled: Optional[bool] = None
    triggers: Optional[list[Trigger]] = Field(default=None, max_length=2)
    target: Optional[TargetScope] = None
    criterion: Optional[Criterion] = None
    filter: Optional[Filter] = None
    behavior: Optional[MoveBehavior] = None

    def apply_to(self, skill: Skill) -> None:
        """Assign every explicitly set field onto the skill."""
        for name in self.model_fields_set:
            value = getattr(self, name)
            if value is None and name != "filter":
                continue
            setattr(skill, name, value)
