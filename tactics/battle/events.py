"""
Battle events.

Two kinds of event live here:

- GameEvent: immutable records of what happened during a tick, kept in
  GameState.history. A pydantic union discriminated on 'type'.
- BattleEvent: notifications the BattleSystem publishes on its EventBus
  after every state change, for whatever is driving the battle.
"""

from __future__ import annotations

from enum import Enum, auto
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from hexengine.grid.hex import HexCoord
from tactics.components.skill import ActionType


class BattleEvent(Enum):
    """Controller notifications published on the EventBus."""
    BATTLE_STARTED = auto()
    BATTLE_RESET = auto()
    CHARACTER_ADDED = auto()
    CHARACTER_REMOVED = auto()
    CHARACTER_MOVED = auto()
    CHARACTER_SELECTED = auto()
    LOADOUT_CHANGED = auto()
    TICK_PROCESSED = auto()
    BATTLE_ENDED = auto()


class BattlePhase(Enum):
    DECISION = "decision"
    RESOLUTION = "resolution"


class InterruptMissReason(Enum):
    EMPTY_CELL = "empty_cell"
    TARGET_IDLE = "target_idle"


class _EventBase(BaseModel):
    model_config = ConfigDict(frozen=True, extra='forbid')

    tick: int


class TickEvent(_EventBase):
    type: Literal["tick"] = "tick"
    phase: BattlePhase = BattlePhase.RESOLUTION


class DamageEvent(_EventBase):
    type: Literal["damage"] = "damage"
    source_id: str
    target_id: str
    damage: int
    resulting_hp: int


class HealEvent(_EventBase):
    type: Literal["heal"] = "heal"
    source_id: str
    target_id: str
    healing: int
    resulting_hp: int


class WhiffEvent(_EventBase):
    """An attack or heal that found nobody on its cell."""
    type: Literal["whiff"] = "whiff"
    source_id: str
    action_type: ActionType
    target_cell: HexCoord


class MovementEvent(_EventBase):
    type: Literal["movement"] = "movement"
    character_id: str
    from_position: HexCoord
    to_position: HexCoord
    collided: bool = False


class DeathEvent(_EventBase):
    type: Literal["death"] = "death"
    character_id: str


class InterruptEvent(_EventBase):
    type: Literal["interrupt"] = "interrupt"
    source_id: str
    target_id: str
    cancelled_skill_id: Optional[str] = None


class InterruptMissEvent(_EventBase):
    type: Literal["interrupt_miss"] = "interrupt_miss"
    source_id: str
    target_cell: HexCoord
    reason: InterruptMissReason


class ChargeEvent(_EventBase):
    """A charge movement, with the hit details when it connected."""
    type: Literal["charge"] = "charge"
    source_id: str
    from_position: HexCoord
    to_position: HexCoord
    target_id: Optional[str] = None
    damage: Optional[int] = None
    resulting_hp: Optional[int] = None


GameEvent = Annotated[
    Union[
        TickEvent,
        DamageEvent,
        HealEvent,
        WhiffEvent,
        MovementEvent,
        DeathEvent,
        InterruptEvent,
        InterruptMissEvent,
        ChargeEvent,
    ],
    Field(discriminator="type"),
]
