import pytest

from hexengine.grid.hex import HexCoord
from tactics.battle.conditions import (
    evaluate_filter,
    evaluate_trigger,
    evaluate_triggers,
    failed_triggers,
    scope_pool,
)
from tactics.components import (
    Action,
    ActionType,
    ConditionType,
    Faction,
    Filter,
    TargetScope,
    Trigger,
)
from tactics.components.skill import Qualifier, QualifierKind

@pytest.fixture
def roster(make_character):
    me = make_character(Faction.FRIENDLY, 0, 0, hp=40)
    ally = make_character(Faction.FRIENDLY, -1, 0, hp=100)
    near_enemy = make_character(Faction.ENEMY, 2, 0)
    far_enemy = make_character(Faction.ENEMY, 5, 0)
    return me, ally, near_enemy, far_enemy

def test_scope_pools(roster):
    me, ally, near_enemy, far_enemy = roster
    characters = list(roster)

    assert scope_pool(TargetScope.SELF, me, characters) == [me]
    assert scope_pool(TargetScope.ALLY, me, characters) == [ally]
    assert scope_pool(TargetScope.ENEMY, me, characters) == [near_enemy, far_enemy]

def test_dead_units_leave_pools(roster):
    me, ally, near_enemy, far_enemy = roster
    near_enemy.hp = 0
    assert scope_pool(TargetScope.ENEMY, me, list(roster)) == [far_enemy]

def test_always(roster):
    me = roster[0]
    assert evaluate_trigger(Trigger(), me, list(roster))
    assert not evaluate_trigger(Trigger(negated=True), me, list(roster))

def test_empty_trigger_list_passes(roster):
    assert evaluate_triggers([], roster[0], list(roster))

def test_hp_below_is_strict(roster):
    me = roster[0]
    characters = list(roster)
    assert evaluate_trigger(Trigger.hp_below(50), me, characters)
    assert not evaluate_trigger(Trigger.hp_below(40), me, characters)
    assert evaluate_trigger(Trigger.hp_above(39), me, characters)
    assert not evaluate_trigger(Trigger.hp_above(40), me, characters)

def test_hp_below_on_allies(roster):
    me, ally = roster[0], roster[1]
    characters = list(roster)
    assert not evaluate_trigger(Trigger.hp_below(50, scope=TargetScope.ALLY), me, characters)
    ally.hp = 10
    assert evaluate_trigger(Trigger.hp_below(50, scope=TargetScope.ALLY), me, characters)

def test_enemy_in_range(roster):
    me = roster[0]
    characters = list(roster)
    assert evaluate_trigger(Trigger.enemy_in_range(2), me, characters)
    assert not evaluate_trigger(Trigger.enemy_in_range(1), me, characters)

def test_negation_applies_after_pool(roster):
    me = roster[0]
    characters = list(roster)
    # One enemy is in range 3, so "no enemy in range 3" is false
    trigger = Trigger(condition="enemy_in_range", value=3, negated=True)
    assert not evaluate_trigger(trigger, me, characters)

    trigger = Trigger(condition="enemy_in_range", value=1, negated=True)
    assert evaluate_trigger(trigger, me, characters)

def test_and_of_two_triggers(roster):
    me = roster[0]
    characters = list(roster)
    passing = [Trigger.hp_below(50), Trigger.enemy_in_range(3)]
    failing = [Trigger.hp_below(50), Trigger.enemy_in_range(1)]

    assert evaluate_triggers(passing, me, characters)
    assert not evaluate_triggers(failing, me, characters)
    assert failed_triggers(failing, me, characters) == [failing[1]]

def _channel(character, skill, cell, tick=0):
    character.current_action = Action.commit(skill, cell, tick)

def test_channeling_and_idle(roster, make_skill):
    me, ally, near_enemy, far_enemy = roster
    characters = list(roster)
    channeling = Trigger(condition=ConditionType.CHANNELING, scope=TargetScope.ENEMY)
    idle = Trigger(condition=ConditionType.IDLE, scope=TargetScope.ENEMY)

    assert not evaluate_trigger(channeling, me, characters)
    assert evaluate_trigger(idle, me, characters)

    _channel(near_enemy, make_skill("heavy-punch"), me.position)
    assert evaluate_trigger(channeling, me, characters)

def test_idle_action_is_not_channeling(roster):
    me, ally, near_enemy, far_enemy = roster
    near_enemy.current_action = Action.idle(near_enemy.position, 0)
    channeling = Trigger(condition=ConditionType.CHANNELING, scope=TargetScope.ENEMY)
    assert not evaluate_trigger(channeling, me, list(roster))

def test_channeling_qualifiers(roster, make_skill):
    me, ally, near_enemy, far_enemy = roster
    characters = list(roster)
    _channel(near_enemy, make_skill("heal"), near_enemy.position)

    by_type = Trigger(
        condition=ConditionType.CHANNELING,
        scope=TargetScope.ENEMY,
        qualifier=Qualifier(kind=QualifierKind.ACTION, id="heal"),
    )
    by_skill = Trigger(
        condition=ConditionType.CHANNELING,
        scope=TargetScope.ENEMY,
        qualifier=Qualifier(kind=QualifierKind.SKILL, id="heavy-punch"),
    )
    assert evaluate_trigger(by_type, me, characters)
    assert not evaluate_trigger(by_skill, me, characters)

def test_targeting_me(roster, make_skill):
    me, ally, near_enemy, far_enemy = roster
    characters = list(roster)
    trigger = Trigger(condition=ConditionType.TARGETING_ME, scope=TargetScope.ENEMY)

    _channel(near_enemy, make_skill("heavy-punch"), ally.position)
    assert not evaluate_trigger(trigger, me, characters)

    _channel(far_enemy, make_skill("ranged-attack"), me.position)
    assert evaluate_trigger(trigger, me, characters)

def test_targeting_ally(roster, make_skill):
    me, ally, near_enemy, far_enemy = roster
    characters = list(roster)
    trigger = Trigger(condition=ConditionType.TARGETING_ALLY, scope=TargetScope.ENEMY)

    _channel(near_enemy, make_skill("heavy-punch"), me.position)
    assert not evaluate_trigger(trigger, me, characters)

    _channel(near_enemy, make_skill("heavy-punch"), ally.position)
    assert evaluate_trigger(trigger, me, characters)

def test_filter_checks_single_candidate(roster, make_skill):
    me, ally, near_enemy, far_enemy = roster
    characters = list(roster)

    assert evaluate_filter(None, near_enemy, me, characters)

    hurt = Filter(condition=ConditionType.HP_BELOW, value=50)
    assert not evaluate_filter(hurt, near_enemy, me, characters)
    near_enemy.hp = 20
    assert evaluate_filter(hurt, near_enemy, me, characters)
    assert not evaluate_filter(hurt.model_copy(update={"negated": True}), near_enemy, me, characters)

def test_filter_channeling(roster, make_skill):
    me, ally, near_enemy, far_enemy = roster
    characters = list(roster)
    channeling = Filter(condition=ConditionType.CHANNELING)

    assert not evaluate_filter(channeling, near_enemy, me, characters)
    _channel(near_enemy, make_skill("heal"), near_enemy.position)
    assert evaluate_filter(channeling, near_enemy, me, characters)
