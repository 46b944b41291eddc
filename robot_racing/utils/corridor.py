import random
from collections import deque
from typing import Dict, List, Sequence, Set

from robot_racing.board import TerrainGrid, check_grid
from robot_racing.components import Location
from robot_racing.types import Direction, TerrainKind


DEFAULT_MAX_STEP = 3
DEFAULT_FLAG_BIAS = 0.75


def _paint(grid: TerrainGrid, location: Location, path: List[Location]) -> None:
    grid[location.row][location.column] = TerrainKind.GRASS
    path.append(location)


def _sideways(
    column: int, flag_column: int, rng: random.Random, bias: float
) -> int:
    """Return -1 (left) or +1 (right), favouring the flag's side."""
    if column == flag_column:
        return rng.choice([-1, 1])
    toward = 1 if flag_column > column else -1
    return toward if rng.random() < bias else -toward


def carve_corridor(
    grid: TerrainGrid,
    start: Location,
    flag: Location,
    rng: random.Random,
    max_step: int = DEFAULT_MAX_STEP,
    bias: float = DEFAULT_FLAG_BIAS,
) -> List[Location]:
    """Paint a contiguous grass corridor from ``start`` up to ``flag``.

    Alternates an upward run of ``1..max_step`` cells with a sideways run of
    ``1..max_step`` cells (biased toward the flag's column) until the top row
    is reached, then walks along the top row to the flag. Every visited cell
    becomes grass. Runs are clipped at the board edge. This is a random walk,
    not a shortest path.

    Mutates ``grid`` in place.

    Returns:
        List[Location]: Visited cells in walk order, starting with ``start``
        and ending with ``flag``.
    """
    _, columns = check_grid(grid)
    path: List[Location] = []
    _paint(grid, start, path)
    row, column = start.row, start.column

    while row > 0:
        for _ in range(rng.randint(1, max_step)):
            if row == 0:
                break
            row -= 1
            _paint(grid, Location(row, column), path)
        if row == 0:
            break
        step = _sideways(column, flag.column, rng, bias)
        for _ in range(rng.randint(1, max_step)):
            if not 0 <= column + step < columns:
                break
            column += step
            _paint(grid, Location(row, column), path)

    step = 1 if flag.column > column else -1
    while column != flag.column:
        column += step
        _paint(grid, Location(row, column), path)

    return path


def grass_path(
    grid: Sequence[Sequence[TerrainKind]], start: Location, goal: Location
) -> List[Location]:
    """Shortest orthogonal all-grass path from ``start`` to ``goal`` (BFS).

    Returns the path including both ends, or ``[]`` if unreachable.
    """
    rows, columns = check_grid(grid)

    def is_grass(location: Location) -> bool:
        return (
            0 <= location.row < rows
            and 0 <= location.column < columns
            and grid[location.row][location.column] == TerrainKind.GRASS
        )

    if not is_grass(start) or not is_grass(goal):
        return []
    if start == goal:
        return [start]

    queue: deque[Location] = deque([start])
    prev: Dict[Location, Location] = {}
    visited: Set[Location] = {start}

    while queue:
        location = queue.popleft()
        if location == goal:
            break
        for direction in Direction:
            neighbor = location.neighbor(direction)
            if is_grass(neighbor) and neighbor not in visited:
                prev[neighbor] = location
                visited.add(neighbor)
                queue.append(neighbor)

    path: List[Location] = []
    if goal in visited:
        node = goal
        while node != start:
            path.append(node)
            node = prev[node]
        path.append(start)
        path.reverse()
    return path


def is_solvable(grid: Sequence[Sequence[TerrainKind]], start: Location, goal: Location) -> bool:
    return len(grass_path(grid, start, goal)) > 0
