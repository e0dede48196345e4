"""
Battle state - the value every battle operation reads and returns.
"""

from __future__ import annotations

from typing import Optional

from pydantic import Field

from hexengine.core.component import Component
from hexengine.grid.hex import HexCoord
from tactics.battle.events import BattlePhase, GameEvent
from tactics.battle.status import BattleStatus
from tactics.components.character import Character


class GameState(Component):
    """
    Snapshot of a battle.

    Attributes:
        characters: Roster in slot order
        tick: Current tick
        phase: Phase the last tick ended in
        battle_status: Outcome so far
        history: Every event emitted, oldest first
        seed: Battle seed
        rng_state: RNG state carried alongside the seed
    """
    characters: list[Character] = Field(default_factory=list)
    tick: int = Field(default=0, ge=0)
    phase: BattlePhase = BattlePhase.DECISION
    battle_status: BattleStatus = BattleStatus.DRAW
    history: list[GameEvent] = Field(default_factory=list)
    seed: int = 0
    rng_state: int = 0

    @classmethod
    def from_characters(cls, characters: list[Character], seed: int = 0) -> GameState:
        """
        Fresh tick-0 state for a roster.

        Any non-empty roster starts active; the first tick settles a
        one-sided roster into victory or defeat.
        """
        return cls(
            characters=[character.clone() for character in characters],
            battle_status=BattleStatus.ACTIVE if characters else BattleStatus.DRAW,
            seed=seed,
            rng_state=seed,
        )

    @property
    def is_active(self) -> bool:
        return self.battle_status == BattleStatus.ACTIVE

    def get_character(self, character_id: str) -> Optional[Character]:
        for character in self.characters:
            if character.id == character_id:
                return character
        return None

    def character_at(self, cell: HexCoord) -> Optional[Character]:
        for character in self.characters:
            if character.position == cell:
                return character
        return None

    def occupied_cells(self) -> set[HexCoord]:
        return {character.position for character in self.characters}
