"""
Character component - a unit on the board.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import Field, model_validator

from hexengine.core.component import Component
from hexengine.grid.hex import HexCoord
from tactics.components.action import Action
from tactics.components.skill import Skill


class Faction(Enum):
    FRIENDLY = "friendly"
    ENEMY = "enemy"

    @property
    def opponent(self) -> Faction:
        return Faction.ENEMY if self is Faction.FRIENDLY else Faction.FRIENDLY

    @property
    def label(self) -> str:
        return self.value.capitalize()


class Character(Component):
    """
    A unit in battle.

    Skills are kept in priority order: the first skill that passes
    evaluation is the one used.

    Attributes:
        id: Unique id, '<faction>-<n>'
        name: Display name
        faction: Side the unit fights for
        slot_position: 1-based roster position
        hp: Current hit points (may drop to 0 or below before removal)
        max_hp: Maximum hit points
        position: Cell occupied
        skills: Priority-ordered skill instances
        current_action: Action in flight, if any
    """
    id: str
    name: str
    faction: Faction
    slot_position: int = 0
    hp: int = 100
    max_hp: int = Field(default=100, gt=0)
    position: HexCoord
    skills: list[Skill] = Field(default_factory=list)
    current_action: Optional[Action] = None

    @model_validator(mode="after")
    def _check_hp(self) -> Character:
        if self.hp > self.max_hp:
            raise ValueError(f"hp {self.hp} exceeds max_hp {self.max_hp}")
        return self

    @property
    def is_alive(self) -> bool:
        return self.hp > 0

    @property
    def is_channeling(self) -> bool:
        """Whether a real (non-idle) action is pending."""
        return self.current_action is not None and not self.current_action.is_idle

    @property
    def hp_percent(self) -> float:
        if self.max_hp <= 0:
            return 0.0
        return self.hp / self.max_hp * 100

    def is_hostile_to(self, other: Character) -> bool:
        return self.faction != other.faction

    def find_skill(self, instance_id: str) -> Optional[Skill]:
        for skill in self.skills:
            if skill.instance_id == instance_id:
                return skill
        return None

    def skill_index(self, instance_id: str) -> int:
        """Priority index of a skill instance, or -1."""
        for i, skill in enumerate(self.skills):
            if skill.instance_id == instance_id:
                return i
        return -1

    def has_skill(self, skill_id: str) -> bool:
        return any(skill.id == skill_id for skill in self.skills)

    def count_instances(self, skill_id: str) -> int:
        return sum(1 for skill in self.skills if skill.id == skill_id)
