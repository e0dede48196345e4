"""
Pydantic base model for battle data.

Every piece of battle state (characters, skills, actions, the game
state itself) is a Component: plain validated data with no behaviour
beyond small derived properties. The tick processor works on a deep
copy and hands back a new state, so copying must always be total.

Usage:
    class Banner(Component):
        text: str = ""

    banner = Banner(text="Round 1")
    copy = banner.clone()
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class Component(BaseModel):
    """Validated, copyable battle data."""

    model_config = ConfigDict(
        # HexCoord is a frozen dataclass, not a model
        arbitrary_types_allowed=True,
        validate_assignment=True,
        extra='forbid',
    )

    def clone(self) -> Component:
        """Independent deep copy; nothing is shared with the original."""
        return self.model_copy(deep=True)
