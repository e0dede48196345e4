"""
Hex Engine

Game-agnostic building blocks for turn-based hex-board simulations:
data components, an event bus, id generation, configuration, and hex
grid math.

Quick Start:
    from hexengine import HexGrid, HexCoord, EventBus

    grid = HexGrid(radius=5)
    for cell in grid.enumerate_all():
        ...
"""

__version__ = "0.1.0"

from hexengine.core import (
    Component,
    EventBus,
    Event,
    IdGenerator,
    EngineConfig,
)
from hexengine.grid import HexCoord, HexGrid, hex_distance, find_path

__all__ = [
    # Core
    "Component",
    "EventBus",
    "Event",
    "IdGenerator",
    "EngineConfig",
    # Grid
    "HexCoord",
    "HexGrid",
    "hex_distance",
    "find_path",
]
