"""
Decision engine - which skill each character uses this tick.

Skills are walked in priority order and the first one that passes every
check is used. The per-skill results are kept so a UI can show why a
skill was or wasn't picked.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Sequence

from hexengine.grid.hex import HEX_RADIUS, hex_distance
from tactics.battle.conditions import failed_triggers
from tactics.battle.movement import compute_multi_step_destination
from tactics.battle.state import GameState
from tactics.battle.targeting import select_target
from tactics.components.action import Action
from tactics.components.character import Character
from tactics.components.skill import ActionType, MoveBehavior, Skill, Trigger

logger = logging.getLogger(__name__)


# Action types whose target must be within the skill's range
RANGED_ACTION_TYPES = frozenset({
    ActionType.ATTACK,
    ActionType.HEAL,
    ActionType.INTERRUPT,
    ActionType.CHARGE,
})


class EvaluationStatus(Enum):
    SELECTED = "selected"
    REJECTED = "rejected"
    SKIPPED = "skipped"


class RejectionReason(Enum):
    DISABLED = "disabled"
    ON_COOLDOWN = "on_cooldown"
    TRIGGER_FAILED = "trigger_failed"
    NO_TARGET = "no_target"
    FILTER_FAILED = "filter_failed"
    OUT_OF_RANGE = "out_of_range"


@dataclass
class SkillEvaluation:
    """Outcome of checking one skill."""
    skill: Skill
    status: EvaluationStatus
    reason: Optional[RejectionReason] = None
    failed_triggers: list[Trigger] = field(default_factory=list)
    target: Optional[Character] = None
    distance: Optional[int] = None

    @property
    def label(self) -> str:
        """'selected', 'skipped' or 'rejected:<reason>'."""
        if self.reason is None:
            return self.status.value
        return f"{self.status.value}:{self.reason.value}"


@dataclass
class CharacterEvaluation:
    """Everything the decision engine concluded about one character."""
    character_id: str
    is_mid_action: bool
    current_action: Optional[Action] = None
    skill_evaluations: list[SkillEvaluation] = field(default_factory=list)
    selected_index: Optional[int] = None
    action: Optional[Action] = None

    @property
    def selected(self) -> Optional[SkillEvaluation]:
        if self.selected_index is None:
            return None
        return self.skill_evaluations[self.selected_index]


@dataclass
class Decision:
    character_id: str
    action: Action


def _check_skill(
    skill: Skill,
    character: Character,
    characters: Sequence[Character],
) -> SkillEvaluation:
    """Run every check on one skill, stopping at the first failure."""
    if not skill.enabled:
        return SkillEvaluation(skill, EvaluationStatus.REJECTED, RejectionReason.DISABLED)

    if skill.is_on_cooldown:
        return SkillEvaluation(skill, EvaluationStatus.REJECTED, RejectionReason.ON_COOLDOWN)

    failed = failed_triggers(skill.triggers, character, characters)
    if failed:
        return SkillEvaluation(
            skill,
            EvaluationStatus.REJECTED,
            RejectionReason.TRIGGER_FAILED,
            failed_triggers=failed,
        )

    resolution = select_target(skill, character, characters)
    if resolution.candidate is None:
        return SkillEvaluation(skill, EvaluationStatus.REJECTED, RejectionReason.NO_TARGET)
    target = resolution.candidate
    if not resolution.filter_passed:
        return SkillEvaluation(
            skill, EvaluationStatus.REJECTED, RejectionReason.FILTER_FAILED, target=target
        )

    distance = hex_distance(character.position, target.position)
    if skill.action_type in RANGED_ACTION_TYPES and distance > skill.range:
        return SkillEvaluation(
            skill,
            EvaluationStatus.REJECTED,
            RejectionReason.OUT_OF_RANGE,
            target=target,
            distance=distance,
        )

    if skill.action_type == ActionType.HEAL and target.hp >= target.max_hp:
        return SkillEvaluation(
            skill, EvaluationStatus.REJECTED, RejectionReason.NO_TARGET, target=target
        )

    return SkillEvaluation(skill, EvaluationStatus.SELECTED, target=target, distance=distance)


def build_action(
    skill: Skill,
    character: Character,
    target: Character,
    tick: int,
    characters: Sequence[Character],
    radius: int = HEX_RADIUS,
) -> Action:
    """
    Commit a skill against a target.

    Moves resolve to a destination cell; every other action locks the
    target's current cell and id.
    """
    if skill.action_type == ActionType.MOVE:
        behavior = skill.behavior or MoveBehavior.TOWARDS
        destination = compute_multi_step_destination(
            character, target, behavior, characters, skill.distance or 1, radius
        )
        return Action.commit(skill, destination, tick, target_character_id=target.id)

    return Action.commit(skill, target.position, tick, target_character_id=target.id)


def evaluate_character(
    character: Character,
    state: GameState,
    radius: int = HEX_RADIUS,
) -> CharacterEvaluation:
    """
    Decide what a character does this tick.

    A character with a pending action is locked and not re-evaluated.
    Otherwise the first passing skill is selected, every skill after it
    is marked skipped, and a character with no passing skill idles.

    Args:
        character: Character to evaluate
        state: Current battle state
        radius: Board radius used for movement planning

    Returns:
        CharacterEvaluation with the chosen action
    """
    if character.current_action is not None:
        return CharacterEvaluation(
            character_id=character.id,
            is_mid_action=True,
            current_action=character.current_action,
        )

    evaluations: list[SkillEvaluation] = []
    selected_index = None
    action = None

    for index, skill in enumerate(character.skills):
        if selected_index is not None:
            evaluations.append(SkillEvaluation(skill, EvaluationStatus.SKIPPED))
            continue

        evaluation = _check_skill(skill, character, state.characters)
        evaluations.append(evaluation)
        if evaluation.status == EvaluationStatus.SELECTED:
            selected_index = index
            action = build_action(
                skill, character, evaluation.target, state.tick, state.characters, radius
            )

    if action is None:
        action = Action.idle(character.position, state.tick)

    return CharacterEvaluation(
        character_id=character.id,
        is_mid_action=False,
        skill_evaluations=evaluations,
        selected_index=selected_index,
        action=action,
    )


def evaluate_all(state: GameState, radius: int = HEX_RADIUS) -> list[CharacterEvaluation]:
    """Evaluations for the whole roster, in roster order."""
    return [evaluate_character(character, state, radius) for character in state.characters]


def compute_decisions(state: GameState, radius: int = HEX_RADIUS) -> list[Decision]:
    """Actions for every character without a pending action, in roster order."""
    decisions = []
    for evaluation in evaluate_all(state, radius):
        if evaluation.is_mid_action:
            continue
        decisions.append(Decision(evaluation.character_id, evaluation.action))
        logger.debug(
            f"Tick {state.tick}: {evaluation.character_id} -> {evaluation.action.type.value}"
        )
    return decisions
