"""
Skill catalog - static skill definitions and instance factories.

The catalog is the single source of truth for skill stats. Characters
never own definitions; they own Skill instances created from them.

Usage:
    ids = IdGenerator()
    skills = create_innate_skills(ids)           # [Move]
    punch = create_skill(get_definition("light-punch"), ids)
    punch.instance_id                            # "light-punch-1"
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from hexengine.core.ids import IdGenerator
from tactics.components.skill import (
    ActionType,
    ConditionType,
    Criterion,
    Filter,
    MoveBehavior,
    Skill,
    TargetScope,
    Trigger,
)


class TargetingMode(Enum):
    """How a committed action finds its target at resolution."""
    # Whoever stands on the locked cell
    CELL = "cell"
    # The unit locked at commit time, wherever it is
    CHARACTER = "character"


@dataclass(frozen=True)
class SkillDefinition:
    """Static data for a skill."""
    id: str
    name: str
    action_type: ActionType
    tick_cost: int
    range: int

    # Effects
    damage: Optional[int] = None
    healing: Optional[int] = None
    distance: Optional[int] = None
    cooldown: Optional[int] = None

    # Movement
    behaviors: tuple[MoveBehavior, ...] = ()
    default_behavior: Optional[MoveBehavior] = None

    # Loadout rules
    innate: bool = False
    max_instances: int = 2

    # Defaults copied onto new instances
    default_target: TargetScope = TargetScope.ENEMY
    default_criterion: Criterion = Criterion.NEAREST
    targeting_mode: TargetingMode = TargetingMode.CELL
    default_trigger: Optional[Trigger] = None
    default_filter: Optional[Filter] = None


_BOTH_WAYS = (MoveBehavior.TOWARDS, MoveBehavior.AWAY)


SKILL_CATALOG: tuple[SkillDefinition, ...] = (
    SkillDefinition(
        id="light-punch",
        name="Light Punch",
        action_type=ActionType.ATTACK,
        tick_cost=0,
        range=1,
        damage=10,
    ),
    SkillDefinition(
        id="heavy-punch",
        name="Heavy Punch",
        action_type=ActionType.ATTACK,
        tick_cost=2,
        range=2,
        damage=25,
        cooldown=3,
    ),
    SkillDefinition(
        id="move-towards",
        name="Move",
        action_type=ActionType.MOVE,
        tick_cost=1,
        range=1,
        distance=1,
        cooldown=1,
        behaviors=_BOTH_WAYS,
        default_behavior=MoveBehavior.TOWARDS,
        innate=True,
        max_instances=3,
    ),
    SkillDefinition(
        id="heal",
        name="Heal",
        action_type=ActionType.HEAL,
        tick_cost=2,
        range=5,
        healing=25,
        default_target=TargetScope.ALLY,
        default_criterion=Criterion.LOWEST_HP,
        targeting_mode=TargetingMode.CHARACTER,
    ),
    SkillDefinition(
        id="ranged-attack",
        name="Ranged Attack",
        action_type=ActionType.ATTACK,
        tick_cost=1,
        range=4,
        damage=15,
        cooldown=2,
    ),
    SkillDefinition(
        id="dash",
        name="Dash",
        action_type=ActionType.MOVE,
        tick_cost=0,
        range=1,
        distance=2,
        cooldown=3,
        behaviors=_BOTH_WAYS,
        default_behavior=MoveBehavior.AWAY,
    ),
    SkillDefinition(
        id="kick",
        name="Kick",
        action_type=ActionType.INTERRUPT,
        tick_cost=0,
        range=1,
        damage=0,
        cooldown=4,
        default_trigger=Trigger(condition=ConditionType.CHANNELING, scope=TargetScope.ENEMY),
        default_filter=Filter(condition=ConditionType.CHANNELING),
    ),
    SkillDefinition(
        id="charge",
        name="Charge",
        action_type=ActionType.CHARGE,
        tick_cost=1,
        range=3,
        damage=20,
        distance=3,
        cooldown=3,
        default_trigger=Trigger(condition=ConditionType.IN_RANGE, scope=TargetScope.ENEMY, value=3),
    ),
)

_BY_ID: dict[str, SkillDefinition] = {definition.id: definition for definition in SKILL_CATALOG}


def get_definition(definition_id: str) -> Optional[SkillDefinition]:
    """Get a skill definition by id, or None if unknown."""
    return _BY_ID.get(definition_id)


def get_all_definitions() -> list[SkillDefinition]:
    """All definitions in catalog order."""
    return list(SKILL_CATALOG)


def create_skill(definition: SkillDefinition, ids: IdGenerator) -> Skill:
    """
    Create a fresh instance of a definition with default behaviour.

    Args:
        definition: Catalog entry to instantiate
        ids: Generator supplying the '<definition-id>-<n>' instance id

    Returns:
        A new enabled Skill
    """
    trigger = definition.default_trigger.clone() if definition.default_trigger else Trigger()
    skill_filter = definition.default_filter.clone() if definition.default_filter else None

    return Skill(
        id=definition.id,
        instance_id=ids.next(definition.id),
        name=definition.name,
        action_type=definition.action_type,
        tick_cost=definition.tick_cost,
        range=definition.range,
        damage=definition.damage,
        healing=definition.healing,
        distance=definition.distance,
        cooldown=definition.cooldown,
        enabled=True,
        triggers=[trigger],
        target=definition.default_target,
        criterion=definition.default_criterion,
        filter=skill_filter,
        behavior=definition.default_behavior,
    )


def create_innate_skills(ids: IdGenerator) -> list[Skill]:
    """One instance of every innate definition, in catalog order."""
    return [create_skill(definition, ids) for definition in SKILL_CATALOG if definition.innate]
