"""
Trigger and filter evaluation.

Triggers and filters share one condition vocabulary. A trigger checks
its condition against every unit in a scope pool and passes if any of
them satisfies it. A filter checks the same condition against a single,
already-chosen target.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from hexengine.grid.hex import hex_distance
from tactics.components.character import Character
from tactics.components.skill import (
    ConditionType,
    Filter,
    Qualifier,
    QualifierKind,
    TargetScope,
    Trigger,
)

logger = logging.getLogger(__name__)


def scope_pool(
    scope: TargetScope,
    evaluator: Character,
    characters: Sequence[Character],
) -> list[Character]:
    """
    Units a scope refers to, from the evaluator's point of view.

    enemy: living units of the other faction.
    ally: living units of the same faction, evaluator excluded.
    self: just the evaluator.
    """
    if scope == TargetScope.SELF:
        return [evaluator]
    if scope == TargetScope.ENEMY:
        return [c for c in characters if evaluator.is_hostile_to(c) and c.hp > 0]
    return [
        c for c in characters
        if c.faction == evaluator.faction and c.id != evaluator.id and c.hp > 0
    ]


def _matches_qualifier(candidate: Character, qualifier: Optional[Qualifier]) -> bool:
    action = candidate.current_action
    if qualifier is None:
        return True
    if qualifier.kind == QualifierKind.SKILL:
        return action.skill_id == qualifier.id
    return action.type.value == qualifier.id


def evaluate_condition(
    condition: ConditionType,
    candidate: Character,
    evaluator: Character,
    characters: Sequence[Character],
    value: Optional[float] = None,
    qualifier: Optional[Qualifier] = None,
) -> bool:
    """Whether one candidate satisfies a condition (negation not applied)."""
    if condition == ConditionType.ALWAYS:
        return True

    if condition == ConditionType.HP_BELOW:
        if candidate.max_hp <= 0 or value is None:
            return False
        return candidate.hp_percent < value

    if condition == ConditionType.HP_ABOVE:
        if candidate.max_hp <= 0 or value is None:
            return False
        return candidate.hp_percent > value

    if condition == ConditionType.IN_RANGE:
        if value is None:
            return False
        return hex_distance(candidate.position, evaluator.position) <= value

    if condition == ConditionType.CHANNELING:
        if not candidate.is_channeling:
            return False
        return _matches_qualifier(candidate, qualifier)

    if condition == ConditionType.IDLE:
        return not candidate.is_channeling

    if condition == ConditionType.TARGETING_ME:
        if not candidate.is_channeling:
            return False
        return candidate.current_action.target_cell == evaluator.position

    if condition == ConditionType.TARGETING_ALLY:
        if not candidate.is_channeling:
            return False
        target_cell = candidate.current_action.target_cell
        return any(
            ally.position == target_cell
            for ally in scope_pool(TargetScope.ALLY, evaluator, characters)
        )

    logger.warning(f"Unknown condition: {condition}")
    return False


def evaluate_trigger(
    trigger: Trigger,
    evaluator: Character,
    characters: Sequence[Character],
) -> bool:
    """Evaluate one trigger: any unit in its pool passes, then negate."""
    if trigger.condition == ConditionType.ALWAYS:
        result = True
    else:
        pool = scope_pool(trigger.scope, evaluator, characters)
        result = any(
            evaluate_condition(
                trigger.condition,
                candidate,
                evaluator,
                characters,
                value=trigger.value,
                qualifier=trigger.qualifier,
            )
            for candidate in pool
        )
    return not result if trigger.negated else result


def failed_triggers(
    triggers: Sequence[Trigger],
    evaluator: Character,
    characters: Sequence[Character],
) -> list[Trigger]:
    """Triggers that did not pass, in order. An empty list means 'always'."""
    return [
        trigger for trigger in triggers
        if not evaluate_trigger(trigger, evaluator, characters)
    ]


def evaluate_triggers(
    triggers: Sequence[Trigger],
    evaluator: Character,
    characters: Sequence[Character],
) -> bool:
    """AND over all triggers; no triggers always passes."""
    return all(evaluate_trigger(trigger, evaluator, characters) for trigger in triggers)


def evaluate_filter(
    skill_filter: Optional[Filter],
    candidate: Character,
    evaluator: Character,
    characters: Sequence[Character],
) -> bool:
    """Check a filter against the chosen target. No filter passes."""
    if skill_filter is None:
        return True
    result = evaluate_condition(
        skill_filter.condition,
        candidate,
        evaluator,
        characters,
        value=skill_filter.value,
        qualifier=skill_filter.qualifier,
    )
    return not result if skill_filter.negated else result
