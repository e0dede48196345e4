"""
Hex grid module.

Provides:
- HexCoord: Axial coordinate
- HexGrid: Bounded hexagonal board
- Distance, neighbours, rings, enumeration, pixel conversion
- A* pathfinding
"""

from hexengine.grid.hex import (
    HEX_RADIUS,
    HEX_DIRECTIONS,
    ORIGIN,
    HexCoord,
    HexGrid,
    hex_distance,
    hex_neighbors,
    hex_ring,
    is_valid_hex,
    enumerate_hexes,
    hex_to_pixel,
    pixel_to_hex,
    hex_vertices,
)
from hexengine.grid.pathfinding import find_path

__all__ = [
    "HEX_RADIUS",
    "HEX_DIRECTIONS",
    "ORIGIN",
    "HexCoord",
    "HexGrid",
    "hex_distance",
    "hex_neighbors",
    "hex_ring",
    "is_valid_hex",
    "enumerate_hexes",
    "hex_to_pixel",
    "pixel_to_hex",
    "hex_vertices",
    "find_path",
]
