"""
Tick processing - one atomic step of a battle.

A tick runs the decision phase for every character without a pending
action, then resolves whatever lands this tick in a fixed order:

    heals -> interrupts -> charges -> movement -> attacks -> deaths

Within each step characters act in slot order. Each step sees the
changes made by the steps before it, so a heal can save a unit from an
attack landing the same tick and a move can dodge one.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional, Sequence

from hexengine.grid.hex import HEX_RADIUS, HexCoord, hex_distance
from tactics.battle.decisions import Decision, compute_decisions
from tactics.battle.events import (
    BattlePhase,
    ChargeEvent,
    DamageEvent,
    DeathEvent,
    GameEvent,
    HealEvent,
    InterruptEvent,
    InterruptMissEvent,
    InterruptMissReason,
    MovementEvent,
    TickEvent,
    WhiffEvent,
)
from tactics.battle.movement import compute_charge_destination
from tactics.battle.state import GameState
from tactics.battle.status import calculate_battle_status
from tactics.components.character import Character
from tactics.components.skill import ActionType
from tactics.skills.catalog import TargetingMode, get_definition

logger = logging.getLogger(__name__)


@dataclass
class TickResult:
    """New state plus the events emitted getting there."""
    state: GameState
    events: list[GameEvent] = field(default_factory=list)


def _slot_order(characters: Sequence[Character]) -> list[Character]:
    return sorted(characters, key=lambda c: c.slot_position)


def _resolving(
    characters: Sequence[Character],
    action_type: ActionType,
    tick: int,
) -> list[Character]:
    """Characters whose action of the given type lands this tick, in slot order."""
    return [
        c for c in _slot_order(characters)
        if c.current_action is not None
        and c.current_action.type == action_type
        and c.current_action.resolves_at_tick == tick
    ]


def _living_at(characters: Sequence[Character], cell: HexCoord) -> Optional[Character]:
    for c in characters:
        if c.position == cell and c.hp > 0:
            return c
    return None


# ============================================================================
# Decision phase
# ============================================================================

def apply_decisions(characters: Sequence[Character], decisions: Sequence[Decision]) -> None:
    """Set each decided action and start the used skill's cooldown."""
    by_id = {decision.character_id: decision.action for decision in decisions}
    for character in characters:
        action = by_id.get(character.id)
        if action is None:
            continue
        character.current_action = action
        if action.skill is None:
            continue

        definition = get_definition(action.skill.id)
        cooldown = definition.cooldown if definition else action.skill.cooldown
        if not cooldown:
            continue
        skill = character.find_skill(action.skill.instance_id)
        if skill is not None:
            skill.cooldown_remaining = cooldown


# ============================================================================
# Resolution steps
# ============================================================================

def resolve_heals(characters: Sequence[Character], tick: int) -> list[GameEvent]:
    """Apply heals landing this tick, capped at max hp."""
    events: list[GameEvent] = []
    for healer in _resolving(characters, ActionType.HEAL, tick):
        action = healer.current_action
        definition = get_definition(action.skill_id)
        mode = definition.targeting_mode if definition else TargetingMode.CELL

        target = None
        if mode == TargetingMode.CHARACTER and action.target_character_id:
            target = next(
                (c for c in characters if c.id == action.target_character_id and c.hp > 0),
                None,
            )
        else:
            target = _living_at(characters, action.target_cell)

        if target is None:
            events.append(WhiffEvent(
                tick=tick,
                source_id=healer.id,
                action_type=ActionType.HEAL,
                target_cell=action.target_cell,
            ))
            continue

        healing = action.skill.healing or 0
        target.hp = min(target.hp + healing, target.max_hp)
        events.append(HealEvent(
            tick=tick,
            source_id=healer.id,
            target_id=target.id,
            healing=healing,
            resulting_hp=target.hp,
        ))
    return events


def resolve_interrupts(characters: Sequence[Character], tick: int) -> list[GameEvent]:
    """Cancel the pending action of whoever stands on each interrupt's cell."""
    events: list[GameEvent] = []
    for interrupter in _resolving(characters, ActionType.INTERRUPT, tick):
        action = interrupter.current_action
        target = next((c for c in characters if c.position == action.target_cell), None)

        if target is None:
            events.append(InterruptMissEvent(
                tick=tick,
                source_id=interrupter.id,
                target_cell=action.target_cell,
                reason=InterruptMissReason.EMPTY_CELL,
            ))
            continue

        if not target.is_channeling:
            events.append(InterruptMissEvent(
                tick=tick,
                source_id=interrupter.id,
                target_cell=action.target_cell,
                reason=InterruptMissReason.TARGET_IDLE,
            ))
            continue

        cancelled = target.current_action.skill_id
        target.current_action = None
        events.append(InterruptEvent(
            tick=tick,
            source_id=interrupter.id,
            target_id=target.id,
            cancelled_skill_id=cancelled,
        ))
    return events


def resolve_charges(
    characters: Sequence[Character],
    tick: int,
    radius: int = HEX_RADIUS,
) -> list[GameEvent]:
    """Move each charger towards its cell, then hit the unit there if adjacent."""
    events: list[GameEvent] = []
    for charger in _resolving(characters, ActionType.CHARGE, tick):
        action = charger.current_action
        start = charger.position
        charger.position = compute_charge_destination(
            charger, action.target_cell, characters, action.skill.distance or 1, radius
        )

        target = next(
            (c for c in characters
             if c.id != charger.id and c.position == action.target_cell and c.hp > 0),
            None,
        )
        damage = action.skill.damage or 0
        hit = target is not None and hex_distance(charger.position, target.position) <= 1

        if hit:
            target.hp -= damage
            events.append(DamageEvent(
                tick=tick,
                source_id=charger.id,
                target_id=target.id,
                damage=damage,
                resulting_hp=target.hp,
            ))

        events.append(ChargeEvent(
            tick=tick,
            source_id=charger.id,
            from_position=start,
            to_position=charger.position,
            target_id=target.id if hit else None,
            damage=damage if hit else None,
            resulting_hp=target.hp if hit else None,
        ))
    return events


def resolve_movement(characters: Sequence[Character], tick: int) -> list[GameEvent]:
    """
    Move every character whose move lands this tick.

    Movers are grouped by destination and groups are handled in (r, q)
    order. A destination occupied before any move is blocked for the whole
    group. Otherwise the first mover in slot order takes it and the rest
    of its group stays put. Moves to the mover's own cell are holds and
    emit nothing.
    """
    movers = [
        c for c in _resolving(characters, ActionType.MOVE, tick)
        if c.current_action.target_cell != c.position
    ]
    if not movers:
        return []

    occupied = {c.position for c in characters}
    groups: dict[HexCoord, list[Character]] = {}
    for mover in movers:
        groups.setdefault(mover.current_action.target_cell, []).append(mover)

    events: list[GameEvent] = []
    moves: list[tuple[Character, HexCoord]] = []
    for destination in sorted(groups, key=lambda cell: (cell.r, cell.q)):
        group = groups[destination]
        blocked = destination in occupied
        winner = None if blocked else group[0]

        for mover in group:
            moved = mover is winner
            events.append(MovementEvent(
                tick=tick,
                character_id=mover.id,
                from_position=mover.position,
                to_position=destination if moved else mover.position,
                collided=not moved,
            ))
            if moved:
                moves.append((mover, destination))

    for mover, destination in moves:
        mover.position = destination
    return events


def resolve_attacks(characters: Sequence[Character], tick: int) -> list[GameEvent]:
    """Damage whoever stands on each attack's locked cell."""
    events: list[GameEvent] = []
    for attacker in _resolving(characters, ActionType.ATTACK, tick):
        action = attacker.current_action
        target = _living_at(characters, action.target_cell)

        if target is None:
            events.append(WhiffEvent(
                tick=tick,
                source_id=attacker.id,
                action_type=ActionType.ATTACK,
                target_cell=action.target_cell,
            ))
            continue

        damage = action.skill.damage or 0
        target.hp -= damage
        events.append(DamageEvent(
            tick=tick,
            source_id=attacker.id,
            target_id=target.id,
            damage=damage,
            resulting_hp=target.hp,
        ))
    return events


def collect_deaths(characters: Sequence[Character], tick: int) -> list[GameEvent]:
    """One death event per unit at or below 0 hp, in slot order."""
    return [
        DeathEvent(tick=tick, character_id=c.id)
        for c in _slot_order(characters)
        if c.hp <= 0
    ]


def clear_resolved_actions(characters: Sequence[Character], tick: int) -> None:
    """Drop actions that landed this tick (idle included)."""
    for character in characters:
        action = character.current_action
        if action is not None and action.resolves_at_tick == tick:
            character.current_action = None


def decrement_cooldowns(characters: Sequence[Character]) -> None:
    """Tick down cooldowns of characters that aren't waiting on an action."""
    for character in characters:
        if character.is_channeling:
            continue
        for skill in character.skills:
            if skill.cooldown_remaining > 0:
                skill.cooldown_remaining -= 1


# ============================================================================
# Tick
# ============================================================================

def process_tick(state: GameState, radius: int = HEX_RADIUS) -> TickResult:
    """
    Advance a battle by one tick.

    The input state is left untouched. A battle that is not active comes
    back unchanged with no events.

    Args:
        state: Current battle state
        radius: Board radius used for movement planning

    Returns:
        TickResult with the next state and this tick's events
    """
    if not state.is_active:
        return TickResult(state=state.clone())

    new_state = state.clone()
    tick = new_state.tick
    characters = new_state.characters

    apply_decisions(characters, compute_decisions(new_state, radius))

    events: list[GameEvent] = [TickEvent(tick=tick, phase=BattlePhase.RESOLUTION)]
    events += resolve_heals(characters, tick)
    events += resolve_interrupts(characters, tick)
    events += resolve_charges(characters, tick, radius)
    events += resolve_movement(characters, tick)
    events += resolve_attacks(characters, tick)
    events += collect_deaths(characters, tick)

    clear_resolved_actions(characters, tick)
    decrement_cooldowns(characters)

    survivors = [c for c in characters if c.hp > 0]
    new_state.characters = survivors
    new_state.tick = tick + 1
    new_state.phase = BattlePhase.DECISION
    new_state.history = new_state.history + events
    new_state.battle_status = calculate_battle_status(survivors)

    logger.debug(
        f"Tick {tick} resolved: {len(events)} events, "
        f"{len(characters) - len(survivors)} died, status {new_state.battle_status.value}"
    )
    return TickResult(state=new_state, events=events)


def next_tick(state: GameState) -> GameState:
    """Advance only the tick counter, recording a tick event for the new tick."""
    new_state = state.clone()
    new_state.tick = state.tick + 1
    new_state.history = new_state.history + [TickEvent(tick=new_state.tick, phase=state.phase)]
    return new_state
