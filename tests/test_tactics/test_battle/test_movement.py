from hexengine.grid.hex import HexCoord, hex_distance
from tactics.battle.movement import (
    compute_charge_destination,
    compute_move_destination,
    compute_multi_step_destination,
    count_escape_routes,
)
from tactics.components import Faction, MoveBehavior

def test_towards_takes_one_step(make_character):
    mover = make_character(Faction.FRIENDLY, 0, 0)
    target = make_character(Faction.ENEMY, 3, 0)

    step = compute_move_destination(mover, target, MoveBehavior.TOWARDS, [mover, target])
    assert step == HexCoord(1, 0)

def test_towards_routes_around_units(make_character):
    mover = make_character(Faction.FRIENDLY, 0, 0)
    blocker = make_character(Faction.FRIENDLY, 1, 0)
    target = make_character(Faction.ENEMY, 2, 0)

    step = compute_move_destination(mover, target, MoveBehavior.TOWARDS, [mover, blocker, target])
    assert step != HexCoord(1, 0)
    assert hex_distance(step, mover.position) == 1
    assert hex_distance(step, target.position) == 2

def test_towards_adjacent_target_heads_for_its_cell(make_character):
    mover = make_character(Faction.FRIENDLY, 0, 0)
    target = make_character(Faction.ENEMY, 1, 0)

    # The path ends on the target's own cell
    step = compute_move_destination(mover, target, MoveBehavior.TOWARDS, [mover, target])
    assert step == HexCoord(1, 0)

def test_away_increases_distance(make_character):
    mover = make_character(Faction.FRIENDLY, 0, 0)
    threat = make_character(Faction.ENEMY, 1, 0)

    step = compute_move_destination(mover, threat, MoveBehavior.AWAY, [mover, threat])
    assert hex_distance(step, threat.position) == 2
    assert hex_distance(step, mover.position) == 1

def test_away_prefers_open_cells_over_corners(make_character):
    # Stepping into the (-5, 0) corner leaves only 3 escape routes
    mover = make_character(Faction.FRIENDLY, -4, 0)
    threat = make_character(Faction.ENEMY, -2, 0)

    step = compute_move_destination(mover, threat, MoveBehavior.AWAY, [mover, threat])
    assert step != HexCoord(-5, 0)

def test_away_is_deterministic(make_character):
    mover = make_character(Faction.FRIENDLY, 0, 0)
    threat = make_character(Faction.ENEMY, 0, 1)
    characters = [mover, threat]

    first = compute_move_destination(mover, threat, MoveBehavior.AWAY, characters)
    second = compute_move_destination(mover, threat, MoveBehavior.AWAY, characters)
    assert first == second

def test_escape_routes():
    assert count_escape_routes(HexCoord(0, 0), set()) == 6
    assert count_escape_routes(HexCoord(5, 0), set()) == 3
    assert count_escape_routes(HexCoord(0, 0), {HexCoord(1, 0), HexCoord(-1, 0)}) == 4

def test_multi_step_towards(make_character):
    mover = make_character(Faction.FRIENDLY, 0, 0)
    target = make_character(Faction.ENEMY, 4, 0)

    dest = compute_multi_step_destination(mover, target, MoveBehavior.TOWARDS, [mover, target], distance=2)
    assert dest == HexCoord(2, 0)

def test_multi_step_stops_when_stuck(make_character):
    mover = make_character(Faction.FRIENDLY, 0, 0)
    target = make_character(Faction.ENEMY, 2, 0)

    # Reaches the target cell after two steps and stops there
    dest = compute_multi_step_destination(mover, target, MoveBehavior.TOWARDS, [mover, target], distance=5)
    assert dest == target.position

def test_charge_stops_adjacent_to_occupied_cell(make_character):
    charger = make_character(Faction.FRIENDLY, 0, 0)
    target = make_character(Faction.ENEMY, 3, 0)

    dest = compute_charge_destination(charger, target.position, [charger, target], distance=3)
    assert dest == HexCoord(2, 0)

def test_charge_limited_by_distance(make_character):
    charger = make_character(Faction.FRIENDLY, -4, 0)
    target = make_character(Faction.ENEMY, 4, 0)

    dest = compute_charge_destination(charger, target.position, [charger, target], distance=3)
    assert hex_distance(dest, charger.position) == 3
    assert hex_distance(dest, target.position) == 5

def test_charge_tie_break_lower_r(make_character):
    charger = make_character(Faction.FRIENDLY, 0, 0)
    target = make_character(Faction.ENEMY, 2, -1)
    # Both (1, 0) and (1, -1) are one step closer; lower r wins
    dest = compute_charge_destination(charger, target.position, [charger, target], distance=1)
    assert dest == HexCoord(1, -1)
