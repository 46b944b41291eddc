"""Board model.

A :class:`Board` is a frozen rows x columns grid of :class:`Cell` values held
in persistent vectors, plus the two anchor locations every map needs:

* ``starting_location``: first grass cell scanning the bottom row from right
  to left.
* ``flag_location``: first grass cell scanning the top row from left to right.

When a row has no grass the anchor is forced: the bottom-right corner
(start) or top-left corner (flag) is repainted as grass before the anchors
are derived. The correction happens silently inside :func:`init_board`;
callers always receive a board whose anchors stand on grass.

Boards are built from a mutable authoring grid (a list of rows of
``TerrainKind``). Random boards patch that grid further (see
:mod:`robot_racing.utils.corridor`) before :func:`build_board` freezes it.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from pyrsistent import pvector
from pyrsistent.typing import PVector

from robot_racing.components import Cell, Location
from robot_racing.terrain import terrain_effect
from robot_racing.types import TerrainKind

TerrainGrid = List[List[TerrainKind]]


@dataclass(frozen=True)
class Board:
    """Immutable terrain grid with start and flag anchors.

    Attributes:
        rows (int): Grid height in cells.
        columns (int): Grid width in cells.
        cells (PVector[PVector[Cell]]): Row-major cells, ``cells[row][column]``.
        starting_location (Location): Spawn cell (bottom row, grass).
        flag_location (Location): Goal cell (top row, grass).
    """

    rows: int
    columns: int
    cells: PVector[PVector[Cell]]
    starting_location: Location
    flag_location: Location

    def in_bounds(self, location: Location) -> bool:
        return 0 <= location.row < self.rows and 0 <= location.column < self.columns

    def cell_at(self, location: Location) -> Cell:
        if not self.in_bounds(location):
            raise IndexError(
                f"Out of bounds: {location} for board {self.rows}x{self.columns}"
            )
        return self.cells[location.row][location.column]

    def terrain_at(self, location: Location) -> TerrainKind:
        return self.cell_at(location).terrain

    def terrain_grid(self) -> TerrainGrid:
        """Mutable copy of the terrain kinds, row-major."""
        return [[cell.terrain for cell in row] for row in self.cells]


def check_grid(grid: Sequence[Sequence[TerrainKind]]) -> Tuple[int, int]:
    """Validate a rectangular, non-empty grid and return ``(rows, columns)``."""
    rows = len(grid)
    if rows == 0 or len(grid[0]) == 0:
        raise ValueError("Board needs at least one row and one column")
    columns = len(grid[0])
    for index, row in enumerate(grid):
        if len(row) != columns:
            raise ValueError(
                f"Row {index} has {len(row)} cells, expected {columns}"
            )
    return rows, columns


def resolve_anchor_locations(grid: TerrainGrid) -> Tuple[Location, Location]:
    """Derive start and flag, forcing grass corners into ``grid`` if needed.

    Mutates ``grid`` in place only when the bottom or top row has no grass.

    Returns:
        Tuple[Location, Location]: ``(starting_location, flag_location)``.
    """
    rows, columns = check_grid(grid)
    bottom, top = rows - 1, 0

    if TerrainKind.GRASS not in grid[bottom]:
        grid[bottom][columns - 1] = TerrainKind.GRASS
    start_column = next(
        c for c in reversed(range(columns)) if grid[bottom][c] == TerrainKind.GRASS
    )

    if TerrainKind.GRASS not in grid[top]:
        grid[top][0] = TerrainKind.GRASS
    flag_column = next(c for c in range(columns) if grid[top][c] == TerrainKind.GRASS)

    return Location(bottom, start_column), Location(top, flag_column)


def _pick_variant(
    terrain: TerrainKind, location: Location, rng: Optional[random.Random]
) -> str:
    variants = terrain_effect(terrain).variants
    if rng is None:
        return variants[(location.row + location.column) % len(variants)]
    return rng.choice(variants)


def build_board(
    grid: Sequence[Sequence[TerrainKind]],
    starting_location: Location,
    flag_location: Location,
    rng: Optional[random.Random] = None,
) -> Board:
    """Freeze an authoring grid into a :class:`Board`.

    Args:
        grid: Row-major terrain kinds.
        starting_location: Spawn anchor (must be grass).
        flag_location: Goal anchor (must be grass).
        rng: Source for sprite variants; ``None`` alternates them in a
            checkerboard so fixed maps render identically every time.
    """
    rows, columns = check_grid(grid)
    cells = pvector(
        pvector(
            Cell(
                location=Location(r, c),
                terrain=TerrainKind(grid[r][c]),
                variant=_pick_variant(TerrainKind(grid[r][c]), Location(r, c), rng),
            )
            for c in range(columns)
        )
        for r in range(rows)
    )
    board = Board(
        rows=rows,
        columns=columns,
        cells=cells,
        starting_location=starting_location,
        flag_location=flag_location,
    )
    for anchor in (starting_location, flag_location):
        if board.terrain_at(anchor) != TerrainKind.GRASS:
            raise ValueError(f"Anchor {anchor} is not on grass")
    return board


def init_board(
    grid: Sequence[Sequence[TerrainKind]], rng: Optional[random.Random] = None
) -> Board:
    """Build a board from terrain, deriving (and if needed forcing) anchors."""
    working: TerrainGrid = [[TerrainKind(t) for t in row] for row in grid]
    start, flag = resolve_anchor_locations(working)
    return build_board(working, start, flag, rng)


def board_to_terrain_names(board: Board) -> List[List[str]]:
    """Debug export: row-major grid of terrain names (e.g. ``"grass"``)."""
    return [[str(cell.terrain) for cell in row] for row in board.cells]


def board_from_terrain_names(
    names: Sequence[Sequence[str]], rng: Optional[random.Random] = None
) -> Board:
    """Inverse of :func:`board_to_terrain_names`.

    Raises:
        ValueError: If a name is not a known terrain kind.
    """
    return init_board([[TerrainKind(name) for name in row] for row in names], rng)
