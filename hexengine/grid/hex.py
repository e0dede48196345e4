"""
Hexagonal grid math for flat-top hexagons in axial coordinates.

The board is a hexagon of a fixed radius around (0, 0). A cell (q, r)
is on the board when max(|q|, |r|, |q + r|) <= radius, which gives
3 * radius * (radius + 1) + 1 cells (91 at radius 5).

Usage:
    grid = HexGrid(radius=5)
    grid.distance(HexCoord(0, 0), HexCoord(3, 0))     # 3
    grid.neighbors(HexCoord(5, 0))                    # 3 cells on a corner
    x, y = hex_to_pixel(HexCoord(1, 2), size=30.0)
    pixel_to_hex(x, y, size=30.0)                     # HexCoord(1, 2)
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Iterator

HEX_RADIUS = 5

SQRT3 = math.sqrt(3)


@dataclass(frozen=True, order=True)
class HexCoord:
    """Axial hex coordinate."""
    q: int
    r: int

    @property
    def s(self) -> int:
        """Third cube coordinate (q + r + s == 0)."""
        return -self.q - self.r

    def __add__(self, other: HexCoord) -> HexCoord:
        return HexCoord(self.q + other.q, self.r + other.r)

    def __sub__(self, other: HexCoord) -> HexCoord:
        return HexCoord(self.q - other.q, self.r - other.r)

    def scale(self, k: int) -> HexCoord:
        return HexCoord(self.q * k, self.r * k)

    def key(self) -> str:
        """String key in 'q,r' form."""
        return f"{self.q},{self.r}"


ORIGIN = HexCoord(0, 0)

# Flat-top neighbour directions: E, W, SE, NW, NE, SW
HEX_DIRECTIONS: tuple[HexCoord, ...] = (
    HexCoord(1, 0),
    HexCoord(-1, 0),
    HexCoord(0, 1),
    HexCoord(0, -1),
    HexCoord(1, -1),
    HexCoord(-1, 1),
)

# Ring walk order: each leg turns 60 degrees from the previous one
_RING_DIRECTIONS: tuple[HexCoord, ...] = (
    HexCoord(1, 0),
    HexCoord(1, -1),
    HexCoord(0, -1),
    HexCoord(-1, 0),
    HexCoord(-1, 1),
    HexCoord(0, 1),
)


# ============================================================================
# Core hex math
# ============================================================================

def hex_distance(a: HexCoord, b: HexCoord) -> int:
    """
    Distance between two hexes in steps.

    Cube distance: (|dq| + |dr| + |dq + dr|) / 2.
    """
    dq = a.q - b.q
    dr = a.r - b.r
    return (abs(dq) + abs(dr) + abs(dq + dr)) // 2


def is_valid_hex(hex: HexCoord, radius: int = HEX_RADIUS) -> bool:
    """Whether a coordinate lies on a board of the given radius."""
    return max(abs(hex.q), abs(hex.r), abs(hex.q + hex.r)) <= radius


def hex_neighbors(hex: HexCoord, radius: int = HEX_RADIUS) -> list[HexCoord]:
    """
    Valid neighbours of a hex, in HEX_DIRECTIONS order.

    Returns 6 cells in the interior, 4 on an edge, 3 on a corner.
    """
    return [
        hex + direction
        for direction in HEX_DIRECTIONS
        if is_valid_hex(hex + direction, radius)
    ]


def hex_ring(center: HexCoord, k: int) -> list[HexCoord]:
    """All hexes exactly k steps from center, starting at the south-west corner."""
    if k == 0:
        return [center]

    ring = []
    current = center + _RING_DIRECTIONS[4].scale(k)
    for direction in _RING_DIRECTIONS:
        for _ in range(k):
            ring.append(current)
            current = current + direction
    return ring


def enumerate_hexes(radius: int = HEX_RADIUS) -> list[HexCoord]:
    """
    Every cell of the board in a fixed order.

    The centre comes first, then each ring outwards. The order never
    changes between calls, so it is safe to use for placement.
    """
    cells: list[HexCoord] = []
    for k in range(radius + 1):
        cells.extend(hex_ring(ORIGIN, k))
    return cells


# ============================================================================
# Pixel conversion (flat-top orientation)
# ============================================================================

def hex_to_pixel(hex: HexCoord, size: float) -> tuple[float, float]:
    """
    Centre of a hex in pixels.

    x = size * 3/2 * q
    y = size * (sqrt(3)/2 * q + sqrt(3) * r)
    """
    x = size * 1.5 * hex.q
    y = size * (SQRT3 / 2 * hex.q + SQRT3 * hex.r)
    return x, y


def pixel_to_hex(x: float, y: float, size: float) -> HexCoord:
    """Hex containing a pixel, found by cube rounding."""
    q = (2 / 3 * x) / size
    r = (-1 / 3 * x + SQRT3 / 3 * y) / size
    return cube_round(q, r, -q - r)


def cube_round(q: float, r: float, s: float) -> HexCoord:
    """Round fractional cube coordinates to the nearest hex."""
    rq = round(q)
    rr = round(r)
    rs = round(s)

    q_diff = abs(rq - q)
    r_diff = abs(rr - r)
    s_diff = abs(rs - s)

    # Fix the component with the largest rounding error
    if q_diff > r_diff and q_diff > s_diff:
        rq = -rr - rs
    elif r_diff > s_diff:
        rr = -rq - rs

    return HexCoord(int(rq), int(rr))


def hex_vertices(center: tuple[float, float], size: float) -> list[tuple[float, float]]:
    """Six corners of a flat-top hexagon, at 0, 60, ... 300 degrees."""
    cx, cy = center
    return [
        (
            cx + size * math.cos(math.radians(60 * i)),
            cy + size * math.sin(math.radians(60 * i)),
        )
        for i in range(6)
    ]


# ============================================================================
# Bounded board
# ============================================================================

class HexGrid:
    """
    A hexagonal board of fixed radius.

    Thin wrapper that binds the radius so callers don't have to pass it
    to every query.
    """

    def __init__(self, radius: int = HEX_RADIUS):
        if radius < 0:
            raise ValueError(f"Board radius must be >= 0, got {radius}")
        self.radius = radius
        self._cells = tuple(enumerate_hexes(radius))

    @property
    def cell_count(self) -> int:
        return len(self._cells)

    def distance(self, a: HexCoord, b: HexCoord) -> int:
        return hex_distance(a, b)

    def is_valid(self, hex: HexCoord) -> bool:
        return is_valid_hex(hex, self.radius)

    def neighbors(self, hex: HexCoord) -> list[HexCoord]:
        return hex_neighbors(hex, self.radius)

    def enumerate_all(self) -> list[HexCoord]:
        return list(self._cells)

    def first_free(self, occupied: Iterable[HexCoord]) -> HexCoord | None:
        """First cell in enumeration order not in occupied, or None if full."""
        taken = set(occupied)
        for cell in self._cells:
            if cell not in taken:
                return cell
        return None

    def __iter__(self) -> Iterator[HexCoord]:
        return iter(self._cells)

    def __contains__(self, hex: object) -> bool:
        return isinstance(hex, HexCoord) and self.is_valid(hex)

    def __repr__(self) -> str:
        return f"HexGrid(radius={self.radius}, cells={self.cell_count})"
