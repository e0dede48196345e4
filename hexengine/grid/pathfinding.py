"""
A* pathfinding over a hex board.

Every step costs 1; hex distance is the (admissible) heuristic.
"""

from __future__ import annotations

from heapq import heappop, heappush
from typing import AbstractSet

from hexengine.grid.hex import HEX_RADIUS, HexCoord, hex_distance, hex_neighbors, is_valid_hex


def find_path(
    start: HexCoord,
    goal: HexCoord,
    obstacles: AbstractSet[HexCoord],
    radius: int = HEX_RADIUS,
) -> list[HexCoord]:
    """
    Shortest path from start to goal, both ends included.

    Args:
        start: Starting cell
        goal: Target cell
        obstacles: Cells that cannot be entered
        radius: Board radius

    Returns:
        The path, [start] when start == goal, or [] when the goal is
        off the board, blocked, or unreachable.
    """
    if not is_valid_hex(start, radius) or not is_valid_hex(goal, radius):
        return []
    if goal in obstacles:
        return []
    if start == goal:
        return [start]

    # Counter keeps heap ordering stable among equal f-costs
    counter = 0
    frontier: list[tuple[int, int, HexCoord]] = [(hex_distance(start, goal), counter, start)]
    came_from: dict[HexCoord, HexCoord | None] = {start: None}
    g_scores: dict[HexCoord, int] = {start: 0}
    closed: set[HexCoord] = set()

    while frontier:
        _, _, current = heappop(frontier)

        if current == goal:
            return _reconstruct(came_from, goal)

        if current in closed:
            continue
        closed.add(current)

        for neighbor in hex_neighbors(current, radius):
            if neighbor in obstacles or neighbor in closed:
                continue

            tentative = g_scores[current] + 1
            if tentative >= g_scores.get(neighbor, tentative + 1):
                continue

            g_scores[neighbor] = tentative
            came_from[neighbor] = current
            counter += 1
            heappush(frontier, (tentative + hex_distance(neighbor, goal), counter, neighbor))

    return []


def _reconstruct(came_from: dict[HexCoord, HexCoord | None], goal: HexCoord) -> list[HexCoord]:
    path = []
    node: HexCoord | None = goal
    while node is not None:
        path.append(node)
        node = came_from[node]
    path.reverse()
    return path
