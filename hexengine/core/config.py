"""
Engine configuration.

Constants that form the contract between the battle engine and
whatever drives it (board size, loadout limits, default stats).
"""

from __future__ import annotations


class EngineConfig:
    """Configuration for a battle."""

    def __init__(
        self,
        board_radius: int = 5,
        max_skill_slots: int = 10,
        default_hp: int = 100,
        hex_size: float = 30.0,
    ):
        self.board_radius = board_radius
        self.max_skill_slots = max_skill_slots
        self.default_hp = default_hp
        self.hex_size = hex_size

    @property
    def cell_count(self) -> int:
        """Number of usable cells on the board (91 at radius 5)."""
        r = self.board_radius
        return 3 * r * (r + 1) + 1

    def __repr__(self) -> str:
        return (
            f"EngineConfig(board_radius={self.board_radius}, "
            f"max_skill_slots={self.max_skill_slots}, "
            f"default_hp={self.default_hp}, hex_size={self.hex_size})"
        )

