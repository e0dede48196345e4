from hexengine.grid.hex import HexCoord, hex_distance
from hexengine.grid.pathfinding import find_path

def test_straight_path():
    path = find_path(HexCoord(0, 0), HexCoord(3, 0), set())
    assert path[0] == HexCoord(0, 0)
    assert path[-1] == HexCoord(3, 0)
    assert len(path) == 4

def test_path_steps_are_adjacent():
    path = find_path(HexCoord(-4, 2), HexCoord(3, -1), set())
    for a, b in zip(path, path[1:]):
        assert hex_distance(a, b) == 1
    assert len(path) - 1 == hex_distance(HexCoord(-4, 2), HexCoord(3, -1))

def test_same_start_and_goal():
    assert find_path(HexCoord(1, 1), HexCoord(1, 1), set()) == [HexCoord(1, 1)]

def test_routes_around_obstacle():
    obstacles = {HexCoord(1, 0)}
    path = find_path(HexCoord(0, 0), HexCoord(2, 0), obstacles)
    assert HexCoord(1, 0) not in path
    # (1, 0) is the only shared neighbour, so the detour costs one step
    assert len(path) == 4
    assert path[0] == HexCoord(0, 0) and path[-1] == HexCoord(2, 0)
    for a, b in zip(path, path[1:]):
        assert hex_distance(a, b) == 1

def test_blocked_goal():
    assert find_path(HexCoord(0, 0), HexCoord(2, 0), {HexCoord(2, 0)}) == []

def test_unreachable_goal():
    # Wall off every neighbour of the goal
    goal = HexCoord(0, 0)
    wall = {
        HexCoord(1, 0), HexCoord(-1, 0), HexCoord(0, 1),
        HexCoord(0, -1), HexCoord(1, -1), HexCoord(-1, 1),
    }
    assert find_path(HexCoord(3, 0), goal, wall) == []

def test_off_board_endpoints():
    assert find_path(HexCoord(0, 0), HexCoord(6, 0), set()) == []
    assert find_path(HexCoord(6, 0), HexCoord(0, 0), set()) == []

def test_smaller_board():
    path = find_path(HexCoord(-2, 0), HexCoord(2, 0), set(), radius=2)
    assert len(path) == 5
