"""Random board generation.

Every cell draws a uniform ``[0, 1)`` value which
:class:`~robot_racing.config.TerrainThresholds` maps onto a terrain kind
(grass by far the most common, lava the rarest). The anchors are then
derived as for any board, and a grass corridor is carved from the start to
the flag so that at least one all-grass route exists.
"""

import logging
import random
from dataclasses import dataclass
from typing import List, Optional

from robot_racing.board import Board, TerrainGrid, build_board, resolve_anchor_locations
from robot_racing.components import Location
from robot_racing.config import TerrainThresholds
from robot_racing.utils.corridor import carve_corridor

logger = logging.getLogger(__name__)


@dataclass
class RandomLayout:
    """Authoring-time result of random generation, before freezing."""

    grid: TerrainGrid
    starting_location: Location
    flag_location: Location
    corridor: List[Location]


def generate_terrain(
    rows: int, columns: int, thresholds: TerrainThresholds, rng: random.Random
) -> TerrainGrid:
    return [
        [thresholds.classify(rng.random()) for _ in range(columns)]
        for _ in range(rows)
    ]


def generate_layout(
    rows: int,
    columns: int,
    thresholds: Optional[TerrainThresholds] = None,
    rng: Optional[random.Random] = None,
) -> RandomLayout:
    """Draw terrain, resolve anchors and carve the corridor."""
    if thresholds is None:
        thresholds = TerrainThresholds()
    if rng is None:
        rng = random.Random()
    grid = generate_terrain(rows, columns, thresholds, rng)
    start, flag = resolve_anchor_locations(grid)
    corridor = carve_corridor(grid, start, flag, rng)
    return RandomLayout(
        grid=grid, starting_location=start, flag_location=flag, corridor=corridor
    )


def generate_random_board(
    rows: int,
    columns: int,
    thresholds: Optional[TerrainThresholds] = None,
    rng: Optional[random.Random] = None,
) -> Board:
    """Random solvable board.

    Args:
        rows (int): Board height.
        columns (int): Board width.
        thresholds (TerrainThresholds | None): Terrain rarity; defaults apply when ``None``.
        rng (random.Random | None): Source of randomness (terrain, corridor and
            sprite variants). Pass a seeded instance for reproducible boards.

    Returns:
        Board: Board whose start and flag are joined by grass.
    """
    if rng is None:
        rng = random.Random()
    layout = generate_layout(rows, columns, thresholds, rng)
    logger.debug(
        "Generated %dx%d board, start %s, flag %s, corridor of %d cells",
        rows,
        columns,
        layout.starting_location,
        layout.flag_location,
        len(layout.corridor),
    )
    return build_board(layout.grid, layout.starting_location, layout.flag_location, rng)
