"""
Action component - a committed, in-flight use of a skill.
"""

from __future__ import annotations

from typing import Optional

from pydantic import model_validator

from hexengine.core.component import Component
from hexengine.grid.hex import HexCoord
from tactics.components.skill import ActionType, Skill


class Action(Component):
    """
    A skill locked in on a target.

    The target cell is fixed at commit time; an attack resolves against
    whoever stands there when it lands. target_character_id is kept for
    heals that follow their target and for interrupts/charges.

    Attributes:
        type: Kind of action
        skill: Copy of the skill as it was when committed (None for idle)
        target_cell: Locked destination or target cell
        target_character_id: Target unit at commit time
        started_at_tick: Tick the action was committed
        resolves_at_tick: started_at_tick + tick_cost
    """
    type: ActionType
    skill: Optional[Skill] = None
    target_cell: HexCoord
    target_character_id: Optional[str] = None
    started_at_tick: int = 0
    resolves_at_tick: int = 0

    @model_validator(mode="after")
    def _check_timing(self) -> Action:
        cost = self.skill.tick_cost if self.skill is not None else 0
        if self.resolves_at_tick != self.started_at_tick + cost:
            raise ValueError(
                f"resolves_at_tick {self.resolves_at_tick} must equal "
                f"started_at_tick {self.started_at_tick} + tick_cost {cost}"
            )
        return self

    @property
    def is_idle(self) -> bool:
        return self.type == ActionType.IDLE

    @property
    def skill_id(self) -> Optional[str]:
        return self.skill.id if self.skill is not None else None

    @classmethod
    def idle(cls, cell: HexCoord, tick: int) -> Action:
        """The synthetic action of a character that chose nothing."""
        return cls(
            type=ActionType.IDLE,
            target_cell=cell,
            started_at_tick=tick,
            resolves_at_tick=tick,
        )

    @classmethod
    def commit(
        cls,
        skill: Skill,
        target_cell: HexCoord,
        tick: int,
        target_character_id: Optional[str] = None,
    ) -> Action:
        """Lock a skill onto a cell at the given tick."""
        return cls(
            type=skill.action_type,
            skill=skill.clone(),
            target_cell=target_cell,
            target_character_id=target_character_id,
            started_at_tick=tick,
            resolves_at_tick=tick + skill.tick_cost,
        )
