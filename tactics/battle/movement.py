"""
Movement planning - where a move or charge will end up.

Planning always works on a snapshot: other units are treated as fixed
obstacles at their current cells, even across multi-step moves.
"""

from __future__ import annotations

from typing import AbstractSet, Sequence

from hexengine.grid.hex import HEX_RADIUS, HexCoord, hex_distance, hex_neighbors
from hexengine.grid.pathfinding import find_path
from tactics.components.character import Character
from tactics.components.skill import MoveBehavior


def obstacle_cells(characters: Sequence[Character], *exclude_ids: str) -> set[HexCoord]:
    """Cells held by every unit except the excluded ones."""
    excluded = set(exclude_ids)
    return {c.position for c in characters if c.id not in excluded}


def count_escape_routes(
    cell: HexCoord,
    obstacles: AbstractSet[HexCoord],
    radius: int = HEX_RADIUS,
) -> int:
    """Unblocked neighbours of a cell (0-6)."""
    return sum(1 for neighbor in hex_neighbors(cell, radius) if neighbor not in obstacles)


def _away_score(
    cell: HexCoord,
    threat: HexCoord,
    obstacles: AbstractSet[HexCoord],
    radius: int,
) -> tuple[int, int, int, int, int, int]:
    distance = hex_distance(cell, threat)
    escape = count_escape_routes(cell, obstacles, radius)
    return (
        distance * escape,
        distance,
        abs(threat.q - cell.q),
        abs(threat.r - cell.r),
        -cell.r,
        -cell.q,
    )


def compute_move_destination(
    mover: Character,
    target: Character,
    behavior: MoveBehavior,
    characters: Sequence[Character],
    radius: int = HEX_RADIUS,
) -> HexCoord:
    """
    One step towards or away from a target.

    towards: first step of the shortest path, routing around other units
    (the target's own cell counts as reachable).

    away: best of the free neighbours plus staying put, scored by
    distance * escape routes, then distance, |dq|, |dr| (higher wins),
    then lower r, then lower q.

    Returns the mover's own cell when no step is possible.
    """
    if mover.position == target.position:
        return mover.position

    if behavior == MoveBehavior.TOWARDS:
        obstacles = obstacle_cells(characters, mover.id, target.id)
        path = find_path(mover.position, target.position, obstacles, radius)
        if len(path) > 1:
            return path[1]
        return mover.position

    obstacles = obstacle_cells(characters, mover.id)
    candidates = [cell for cell in hex_neighbors(mover.position, radius) if cell not in obstacles]
    candidates.append(mover.position)
    return max(candidates, key=lambda cell: _away_score(cell, target.position, obstacles, radius))


def compute_multi_step_destination(
    mover: Character,
    target: Character,
    behavior: MoveBehavior,
    characters: Sequence[Character],
    distance: int = 1,
    radius: int = HEX_RADIUS,
) -> HexCoord:
    """Repeat single steps up to distance times, stopping once stuck."""
    current = mover.position
    for _ in range(distance):
        virtual = mover.model_copy(update={"position": current})
        step = compute_move_destination(virtual, target, behavior, characters, radius)
        if step == current:
            break
        current = step
    return current


def compute_charge_destination(
    charger: Character,
    target_cell: HexCoord,
    characters: Sequence[Character],
    distance: int,
    radius: int = HEX_RADIUS,
) -> HexCoord:
    """
    Greedy charge path towards a cell.

    Each step takes the free neighbour closest to the target cell (lower
    r, then lower q on ties) and only if it gets strictly closer. Stops
    on arrival, when surrounded, or when no neighbour makes progress.
    """
    obstacles = obstacle_cells(characters, charger.id)
    current = charger.position

    for _ in range(distance):
        if current == target_cell:
            break

        best = None
        best_key = None
        current_distance = hex_distance(current, target_cell)
        for neighbor in hex_neighbors(current, radius):
            if neighbor in obstacles:
                continue
            d = hex_distance(neighbor, target_cell)
            if d >= current_distance:
                continue
            key = (d, neighbor.r, neighbor.q)
            if best_key is None or key < best_key:
                best, best_key = neighbor, key

        if best is None:
            break
        current = best

    return current
