"""
Battle system - controller for setting up and running a battle.

Owns the current GameState and replaces it wholesale on every change.
Setup operations (placement, loadouts) report failure by returning
False; nothing here raises for an ordinary rejected request.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from hexengine.core.config import EngineConfig
from hexengine.core.events import EventBus
from hexengine.core.ids import IdGenerator
from hexengine.grid.hex import HexCoord, HexGrid
from tactics.battle.decisions import CharacterEvaluation, evaluate_all
from tactics.battle.events import BattleEvent, GameEvent
from tactics.battle.resolution import next_tick, process_tick
from tactics.battle.state import GameState
from tactics.battle.status import (
    BattleStatus,
    calculate_battle_status,
    calculate_pre_battle_status,
)
from tactics.components.character import Character, Faction
from tactics.components.skill import SkillUpdate
from tactics.skills.catalog import create_innate_skills, create_skill, get_definition

# Event kinds shown as floating numbers/markers after a tick
DEFAULT_RECENT_KINDS = ("damage", "whiff")


def faction_assigned_skill_ids(characters: Iterable[Character], faction: Faction) -> set[str]:
    """Non-innate skill ids carried by any character of a faction."""
    assigned = set()
    for character in characters:
        if character.faction != faction:
            continue
        for skill in character.skills:
            definition = get_definition(skill.id)
            if definition is not None and definition.innate:
                continue
            assigned.add(skill.id)
    return assigned


class BattleSystem:
    """
    Battle controller.

    Manages:
    - Roster setup and placement
    - Skill loadouts
    - Tick processing
    - Reset to the starting roster

    Every successful change is announced on the event bus with a
    BattleEvent.
    """

    def __init__(
        self,
        events: Optional[EventBus] = None,
        config: Optional[EngineConfig] = None,
        ids: Optional[IdGenerator] = None,
        seed: int = 0,
    ):
        self.events = events or EventBus()
        self.config = config or EngineConfig()
        self.ids = ids or IdGenerator()
        self.grid = HexGrid(self.config.board_radius)
        self.seed = seed
        self.logger = logging.getLogger(__name__)

        # State
        self._state = GameState(seed=seed, rng_state=seed)
        self._initial_characters: list[Character] = []
        self._selected_id: Optional[str] = None
        self._last_events: list[GameEvent] = []

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def init_battle(self, characters: Iterable[Character]) -> None:
        """
        Start a battle with a roster.

        Characters are copied and numbered 1..n in the given order.
        """
        roster = []
        for index, character in enumerate(characters):
            copy = character.clone()
            copy.slot_position = index + 1
            roster.append(copy)

            # Ids minted later must not collide with the imported ones
            self.ids.reserve(copy.id)
            for skill in copy.skills:
                self.ids.reserve(skill.instance_id)

        self._initial_characters = [c.clone() for c in roster]
        self._state = GameState.from_characters(roster, seed=self.seed)
        self._selected_id = None
        self._last_events = []

        self.logger.info(
            f"Battle started with {len(roster)} characters "
            f"({self._state.battle_status.value})"
        )
        self.events.publish(
            BattleEvent.BATTLE_STARTED,
            character_count=len(roster),
            status=self._state.battle_status,
        )

    def reset(self) -> None:
        """Restore the starting roster at tick 0."""
        self._state = GameState.from_characters(self._initial_characters, seed=self.seed)
        self._last_events = []
        self.logger.info("Battle reset")
        self.events.publish(BattleEvent.BATTLE_RESET, status=self._state.battle_status)

    # ------------------------------------------------------------------
    # Roster
    # ------------------------------------------------------------------

    def create_character(self, faction: Faction, position: HexCoord) -> Character:
        """Build a new full-hp character with the innate skills."""
        slot = len(self._state.characters) + 1
        return Character(
            id=self.ids.next(faction.value),
            name=f"{faction.label} {slot}",
            faction=faction,
            slot_position=slot,
            hp=self.config.default_hp,
            max_hp=self.config.default_hp,
            position=position,
            skills=create_innate_skills(self.ids),
        )

    def add_character(self, faction: Faction) -> bool:
        """Add a character on the first free cell. False when the board is full."""
        position = self.grid.first_free(self._state.occupied_cells())
        if position is None:
            self.logger.info(f"Cannot add {faction.value} character: board is full")
            return False
        return self._place(faction, position)

    def add_character_at_position(self, faction: Faction, position: HexCoord) -> bool:
        """Add a character on a given cell. False when off-board or occupied."""
        if not self.grid.is_valid(position):
            self.logger.debug(f"Rejected placement at {position}: off the board")
            return False
        if self._state.character_at(position) is not None:
            self.logger.debug(f"Rejected placement at {position}: occupied")
            return False
        return self._place(faction, position)

    def _place(self, faction: Faction, position: HexCoord) -> bool:
        character = self.create_character(faction, position)

        state = self._state.clone()
        state.characters = state.characters + [character]
        state.battle_status = calculate_pre_battle_status(state.characters)
        self._state = state
        self._initial_characters.append(character.clone())

        self.logger.debug(f"Added {character.id} at {position}")
        self.events.publish(
            BattleEvent.CHARACTER_ADDED,
            character_id=character.id,
            position=position,
        )
        return True

    def move_character(self, character_id: str, position: HexCoord) -> bool:
        """Reposition a character during setup. False when off-board or occupied."""
        if self._state.get_character(character_id) is None:
            return False
        if not self.grid.is_valid(position):
            self.logger.debug(f"Rejected move of {character_id} to {position}: off the board")
            return False
        if self._state.character_at(position) is not None:
            self.logger.debug(f"Rejected move of {character_id} to {position}: occupied")
            return False

        state = self._state.clone()
        state.get_character(character_id).position = position
        self._state = state
        for initial in self._initial_characters:
            if initial.id == character_id:
                initial.position = position

        self.events.publish(
            BattleEvent.CHARACTER_MOVED,
            character_id=character_id,
            position=position,
        )
        return True

    def remove_character(self, character_id: str) -> bool:
        """Remove a character from the battle and the starting roster."""
        if self._state.get_character(character_id) is None:
            return False

        state = self._state.clone()
        state.characters = [c for c in state.characters if c.id != character_id]
        state.battle_status = calculate_battle_status(state.characters)
        self._state = state
        self._initial_characters = [c for c in self._initial_characters if c.id != character_id]

        if self._selected_id == character_id:
            self._selected_id = None

        self.logger.debug(f"Removed {character_id}")
        self.events.publish(BattleEvent.CHARACTER_REMOVED, character_id=character_id)
        return True

    def select_character(self, character_id: Optional[str]) -> bool:
        """Select a character (None clears). False for an unknown id."""
        if character_id is not None and self._state.get_character(character_id) is None:
            return False
        self._selected_id = character_id
        self.events.publish(BattleEvent.CHARACTER_SELECTED, character_id=character_id)
        return True

    # ------------------------------------------------------------------
    # Loadouts
    # ------------------------------------------------------------------

    def _edit_character(self, character_id: str) -> tuple[Optional[GameState], Optional[Character]]:
        """Working copy of the state and the character to change in it."""
        if self._state.get_character(character_id) is None:
            return None, None
        state = self._state.clone()
        return state, state.get_character(character_id)

    def _commit_loadout(self, state: GameState, character_id: str, change: str) -> bool:
        self._state = state
        self.events.publish(
            BattleEvent.LOADOUT_CHANGED,
            character_id=character_id,
            change=change,
        )
        return True

    def assign_skill(self, character_id: str, definition_id: str) -> bool:
        """
        Give a character a new skill at the highest priority.

        Rejected when the character is unknown, already has the skill,
        has no free slot, the definition doesn't exist, or another
        character of the same faction already carries it.
        """
        state, character = self._edit_character(character_id)
        if character is None:
            return False
        if character.has_skill(definition_id):
            self.logger.info(f"{character_id} already has {definition_id}")
            return False
        if len(character.skills) >= self.config.max_skill_slots:
            self.logger.info(f"{character_id} has no free skill slot")
            return False
        definition = get_definition(definition_id)
        if definition is None:
            self.logger.info(f"Unknown skill: {definition_id}")
            return False
        if definition_id in faction_assigned_skill_ids(state.characters, character.faction):
            self.logger.info(
                f"{definition_id} is already assigned to another {character.faction.value} character"
            )
            return False

        character.skills = [create_skill(definition, self.ids)] + character.skills
        return self._commit_loadout(state, character_id, "assign")

    def remove_skill(self, character_id: str, instance_id: str) -> bool:
        """Remove a skill instance. The last instance of an innate skill stays."""
        state, character = self._edit_character(character_id)
        if character is None:
            return False
        skill = character.find_skill(instance_id)
        if skill is None:
            return False

        definition = get_definition(skill.id)
        if definition is not None and definition.innate and character.count_instances(skill.id) <= 1:
            self.logger.info(f"Cannot remove the last {skill.name} from {character_id}")
            return False

        skills = list(character.skills)
        skills.pop(character.skill_index(instance_id))
        character.skills = skills
        return self._commit_loadout(state, character_id, "remove")

    def update_skill(self, character_id: str, instance_id: str, update: SkillUpdate) -> bool:
        """Apply a partial change to one skill instance's behaviour."""
        state, character = self._edit_character(character_id)
        if character is None:
            return False
        skill = character.find_skill(instance_id)
        if skill is None:
            return False

        update.apply_to(skill)
        return self._commit_loadout(state, character_id, "update")

    def duplicate_skill(self, character_id: str, instance_id: str) -> bool:
        """
        Insert a fresh default instance right after the source skill.

        Rejected at the definition's instance cap or the slot cap.
        """
        state, character = self._edit_character(character_id)
        if character is None:
            return False
        index = character.skill_index(instance_id)
        if index < 0:
            return False

        source = character.skills[index]
        definition = get_definition(source.id)
        if definition is None:
            return False
        if character.count_instances(source.id) >= definition.max_instances:
            self.logger.info(f"{character_id} is at the {source.name} instance cap")
            return False
        if len(character.skills) >= self.config.max_skill_slots:
            self.logger.info(f"{character_id} has no free skill slot")
            return False

        skills = list(character.skills)
        skills.insert(index + 1, create_skill(definition, self.ids))
        character.skills = skills
        return self._commit_loadout(state, character_id, "duplicate")

    def move_skill_up(self, character_id: str, index: int) -> bool:
        """Swap a skill with the one above it."""
        return self._swap_skills(character_id, index, index - 1)

    def move_skill_down(self, character_id: str, index: int) -> bool:
        """Swap a skill with the one below it."""
        return self._swap_skills(character_id, index, index + 1)

    def _swap_skills(self, character_id: str, index: int, other: int) -> bool:
        state, character = self._edit_character(character_id)
        if character is None:
            return False
        count = len(character.skills)
        if not (0 <= index < count and 0 <= other < count):
            return False

        skills = list(character.skills)
        skills[index], skills[other] = skills[other], skills[index]
        character.skills = skills
        return self._commit_loadout(state, character_id, "reorder")

    # ------------------------------------------------------------------
    # Ticks
    # ------------------------------------------------------------------

    def process_tick(self) -> list[GameEvent]:
        """
        Run one tick. Does nothing unless the battle is active.

        Returns:
            Events emitted this tick
        """
        if not self._state.is_active:
            self.logger.debug(f"Tick skipped: battle is {self._state.battle_status.value}")
            return []

        result = process_tick(self._state, self.config.board_radius)
        self._state = result.state
        self._last_events = result.events

        if self._selected_id is not None and self._state.get_character(self._selected_id) is None:
            self._selected_id = None

        self.events.publish(
            BattleEvent.TICK_PROCESSED,
            tick=self._state.tick,
            events=list(result.events),
        )
        if self._state.battle_status != BattleStatus.ACTIVE:
            self.logger.info(
                f"Battle ended at tick {self._state.tick}: {self._state.battle_status.value}"
            )
            self.events.publish(BattleEvent.BATTLE_ENDED, status=self._state.battle_status)
        return result.events

    def next_tick(self) -> None:
        """Advance the tick counter without resolving anything."""
        self._state = next_tick(self._state)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def tick(self) -> int:
        return self._state.tick

    @property
    def battle_status(self) -> BattleStatus:
        return self._state.battle_status

    @property
    def characters(self) -> list[Character]:
        return self._state.characters

    @property
    def selected_character(self) -> Optional[Character]:
        if self._selected_id is None:
            return None
        return self._state.get_character(self._selected_id)

    def get_character(self, character_id: str) -> Optional[Character]:
        return self._state.get_character(character_id)

    def evaluations(self) -> list[CharacterEvaluation]:
        """What every character would do if the tick ran now."""
        return evaluate_all(self._state, self.config.board_radius)

    def recent_events(self, kinds: Iterable[str] = DEFAULT_RECENT_KINDS) -> list[GameEvent]:
        """Events of the given kinds from the last processed tick."""
        wanted = set(kinds)
        return [event for event in self._last_events if event.type in wanted]

    def is_grid_full(self) -> bool:
        return len(self._state.characters) >= self.grid.cell_count
