import pytest

from hexengine.grid.hex import HexCoord
from tactics.battle.decisions import (
    EvaluationStatus,
    RejectionReason,
    compute_decisions,
    evaluate_character,
)
from tactics.battle.state import GameState
from tactics.components import (
    Action,
    ActionType,
    ConditionType,
    Faction,
    Filter,
    Trigger,
)

def _state(*characters, tick=0):
    return GameState(characters=list(characters), tick=tick)

def test_out_of_range_skills_idle(make_character, make_skill):
    me = make_character(Faction.FRIENDLY, 0, 0, skills=[make_skill("light-punch"), make_skill("heavy-punch")])
    enemy = make_character(Faction.ENEMY, 5, 0)

    result = evaluate_character(me, _state(me, enemy))

    assert [e.reason for e in result.skill_evaluations] == [
        RejectionReason.OUT_OF_RANGE,
        RejectionReason.OUT_OF_RANGE,
    ]
    assert result.skill_evaluations[0].distance == 5
    assert result.selected_index is None
    assert result.action.type == ActionType.IDLE
    assert result.action.resolves_at_tick == 0

def test_and_triggers_select_skill(make_character, make_skill):
    skill = make_skill("ranged-attack", triggers=[Trigger.hp_below(50), Trigger.enemy_in_range(3)])
    me = make_character(Faction.FRIENDLY, 0, 0, hp=40, skills=[skill])
    enemy = make_character(Faction.ENEMY, 2, 0)

    result = evaluate_character(me, _state(me, enemy))

    assert result.skill_evaluations[0].status == EvaluationStatus.SELECTED
    assert result.selected_index == 0
    assert result.action.type == ActionType.ATTACK
    assert result.action.target_cell == HexCoord(2, 0)
    assert result.action.target_character_id == enemy.id

def test_failed_trigger_is_reported(make_character, make_skill):
    low_hp = Trigger.hp_below(50)
    skill = make_skill("ranged-attack", triggers=[low_hp, Trigger.enemy_in_range(3)])
    me = make_character(Faction.FRIENDLY, 0, 0, hp=90, skills=[skill])
    enemy = make_character(Faction.ENEMY, 2, 0)

    evaluation = evaluate_character(me, _state(me, enemy)).skill_evaluations[0]

    assert evaluation.reason == RejectionReason.TRIGGER_FAILED
    assert evaluation.failed_triggers == [low_hp]
    assert evaluation.label == "rejected:trigger_failed"

def test_first_passing_skill_wins_and_rest_are_skipped(make_character, make_skill):
    skills = [
        make_skill("heavy-punch", enabled=False),
        make_skill("light-punch"),
        make_skill("ranged-attack"),
        make_skill("dash"),
    ]
    me = make_character(Faction.FRIENDLY, 0, 0, skills=skills)
    enemy = make_character(Faction.ENEMY, 1, 0)

    result = evaluate_character(me, _state(me, enemy))
    labels = [e.label for e in result.skill_evaluations]

    assert labels == ["rejected:disabled", "selected", "skipped", "skipped"]
    assert result.selected.skill.id == "light-punch"

def test_cooldown_checked_before_triggers(make_character, make_skill):
    skill = make_skill("heavy-punch", cooldown_remaining=2, triggers=[Trigger.hp_below(1)])
    me = make_character(Faction.FRIENDLY, 0, 0, skills=[skill])
    enemy = make_character(Faction.ENEMY, 1, 0)

    evaluation = evaluate_character(me, _state(me, enemy)).skill_evaluations[0]
    assert evaluation.reason == RejectionReason.ON_COOLDOWN

def test_no_target(make_character, make_skill):
    me = make_character(Faction.FRIENDLY, 0, 0, skills=[make_skill("light-punch")])
    ally = make_character(Faction.FRIENDLY, 1, 0)

    evaluation = evaluate_character(me, _state(me, ally)).skill_evaluations[0]
    assert evaluation.reason == RejectionReason.NO_TARGET

def test_filter_failed(make_character, make_skill):
    skill = make_skill("light-punch", filter=Filter(condition=ConditionType.HP_BELOW, value=50))
    me = make_character(Faction.FRIENDLY, 0, 0, skills=[skill])
    enemy = make_character(Faction.ENEMY, 1, 0)

    evaluation = evaluate_character(me, _state(me, enemy)).skill_evaluations[0]
    assert evaluation.reason == RejectionReason.FILTER_FAILED

def test_heal_skips_full_hp_ally(make_character, make_skill):
    me = make_character(Faction.FRIENDLY, 0, 0, skills=[make_skill("heal")])
    ally = make_character(Faction.FRIENDLY, 2, 0, hp=100)
    enemy = make_character(Faction.ENEMY, 4, 0)

    evaluation = evaluate_character(me, _state(me, ally, enemy)).skill_evaluations[0]
    assert evaluation.reason == RejectionReason.NO_TARGET

    ally.hp = 60
    result = evaluate_character(me, _state(me, ally, enemy))
    assert result.action.type == ActionType.HEAL
    assert result.action.target_character_id == ally.id

def test_move_ignores_range(make_character, make_skill):
    me = make_character(Faction.FRIENDLY, 0, 0, skills=[make_skill("move-towards")])
    enemy = make_character(Faction.ENEMY, 4, 0)

    result = evaluate_character(me, _state(me, enemy, tick=3))

    assert result.action.type == ActionType.MOVE
    assert result.action.target_cell == HexCoord(1, 0)
    assert result.action.started_at_tick == 3
    assert result.action.resolves_at_tick == 4

def test_mid_action_is_not_reevaluated(make_character, make_skill):
    punch = make_skill("heavy-punch")
    me = make_character(Faction.FRIENDLY, 0, 0, skills=[punch])
    me.current_action = Action.commit(punch, HexCoord(1, 0), tick=0)
    enemy = make_character(Faction.ENEMY, 1, 0)

    result = evaluate_character(me, _state(me, enemy, tick=1))

    assert result.is_mid_action
    assert result.skill_evaluations == []
    assert result.current_action == me.current_action
    assert result.action is None

def test_compute_decisions_skips_busy_characters(make_character, make_skill):
    punch = make_skill("heavy-punch")
    busy = make_character(Faction.FRIENDLY, 0, 0, skills=[punch])
    busy.current_action = Action.commit(punch, HexCoord(1, 0), tick=0)
    free = make_character(Faction.FRIENDLY, -1, 0, skills=[make_skill("light-punch")])
    enemy = make_character(Faction.ENEMY, 1, 0)

    decisions = compute_decisions(_state(busy, free, enemy, tick=1))

    assert [d.character_id for d in decisions] == [free.id, enemy.id]
    assert decisions[1].action.type == ActionType.IDLE

def test_evaluation_does_not_mutate_state(make_character, make_skill):
    me = make_character(Faction.FRIENDLY, 0, 0, skills=[make_skill("light-punch")])
    enemy = make_character(Faction.ENEMY, 1, 0)
    state = _state(me, enemy)
    before = state.clone()

    evaluate_character(me, state)
    assert state == before
