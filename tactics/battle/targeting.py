"""
Target selection.

Candidates are ranked with a stable sort, so equal keys keep roster
order and the choice never depends on anything but the inputs.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from hexengine.grid.hex import hex_distance
from tactics.battle.conditions import evaluate_filter, scope_pool
from tactics.components.character import Character
from tactics.components.skill import Criterion, Skill, TargetScope


@dataclass
class TargetResolution:
    """Result of picking a target for a skill."""
    candidate: Optional[Character] = None
    filter_passed: bool = True

    @property
    def found(self) -> bool:
        return self.candidate is not None and self.filter_passed


def count_enemies_near(
    candidate: Character,
    evaluator: Character,
    characters: Sequence[Character],
    radius: int,
) -> int:
    """Living units hostile to the evaluator within radius of the candidate."""
    return sum(
        1 for c in characters
        if c.id != candidate.id
        and c.hp > 0
        and c.faction != evaluator.faction
        and hex_distance(c.position, candidate.position) <= radius
    )


def _ranking_key(
    criterion: Criterion,
    evaluator: Character,
    characters: Sequence[Character],
    skill: Skill,
) -> Callable[[Character], tuple]:
    def distance(c: Character) -> int:
        return hex_distance(evaluator.position, c.position)

    if criterion == Criterion.NEAREST:
        return lambda c: (distance(c),)
    if criterion == Criterion.FURTHEST:
        return lambda c: (-distance(c),)
    if criterion == Criterion.LOWEST_HP:
        return lambda c: (c.hp, distance(c))
    if criterion == Criterion.HIGHEST_HP:
        return lambda c: (-c.hp, distance(c))
    # MOST_ENEMIES_NEARBY
    return lambda c: (-count_enemies_near(c, evaluator, characters, skill.range), distance(c))


def rank_candidates(
    candidates: Sequence[Character],
    criterion: Criterion,
    evaluator: Character,
    characters: Sequence[Character],
    skill: Skill,
) -> list[Character]:
    """Candidates best-first."""
    return sorted(candidates, key=_ranking_key(criterion, evaluator, characters, skill))


def select_target(
    skill: Skill,
    evaluator: Character,
    characters: Sequence[Character],
) -> TargetResolution:
    """
    Pick the target a skill would act on.

    Self-targeting skills skip criterion and filter. Otherwise the best living
    candidate of the target scope is chosen, then checked against the
    skill's filter.

    Args:
        skill: Skill being evaluated
        evaluator: Character using it
        characters: Whole roster

    Returns:
        TargetResolution with no candidate when the pool is empty, or
        filter_passed False when the chosen target fails the filter.
    """
    if skill.target == TargetScope.SELF:
        return TargetResolution(candidate=evaluator)

    candidates = scope_pool(skill.target, evaluator, characters)
    if not candidates:
        return TargetResolution()

    best = rank_candidates(candidates, skill.criterion, evaluator, characters, skill)[0]
    passed = evaluate_filter(skill.filter, best, evaluator, characters)
    return TargetResolution(candidate=best, filter_passed=passed)
