"""Hand-authored maps, easiest first.

Maps are drawn with one letter per cell (``g`` grass, ``w`` water, ``r``
rock, ``l`` lava) and expanded into terrain-name grids, the same row-major
format produced by :func:`robot_racing.board.board_to_terrain_names`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple

from robot_racing.board import Board, board_from_terrain_names
from robot_racing.types import TerrainKind

TerrainNames = Tuple[Tuple[str, ...], ...]

LEGEND = {
    "g": TerrainKind.GRASS,
    "w": TerrainKind.WATER,
    "r": TerrainKind.ROCK,
    "l": TerrainKind.LAVA,
}


@dataclass(frozen=True)
class FixedMap:
    """Authored map.

    Attributes:
        name: Label shown between maps.
        terrain: Row-major terrain names.
    """

    name: str
    terrain: TerrainNames


def parse_map(name: str, drawing: Sequence[str]) -> FixedMap:
    return FixedMap(
        name=name,
        terrain=tuple(tuple(str(LEGEND[ch]) for ch in line) for line in drawing),
    )


MEADOW = parse_map(
    "Meadow",
    [
        "gggggggggg",
        "ggggwggggg",
        "ggrgggggwg",
        "gggggggggg",
        "gwgggrgggg",
        "gggggggggg",
        "ggggggwggg",
        "grgggggggg",
        "gggggggrgg",
        "gggggggggg",
    ],
)

CREEK = parse_map(
    "Creek",
    [
        "gggrgggggg",
        "gwwwggwwwg",
        "ggggggggrg",
        "rggwwwgggg",
        "ggggggggwg",
        "wwwgwwwggg",
        "gggggggrgg",
        "grggwwgggg",
        "gggggggwwg",
        "ggggrggggg",
    ],
)

CALDERA = parse_map(
    "Caldera",
    [
        "ggglllgggg",
        "gwgggggrgg",
        "ggrglgggwg",
        "lgggggllgg",
        "ggwwgggggr",
        "grggllgwgg",
        "gglggggggg",
        "wgggrggllg",
        "gglgggwggg",
        "rgggggglgg",
    ],
)

DEFAULT_FIXED_MAPS: Tuple[FixedMap, ...] = (MEADOW, CREEK, CALDERA)


def build_fixed_board(
    tier: int, maps: Sequence[FixedMap] = DEFAULT_FIXED_MAPS
) -> Board:
    """Board for difficulty ``tier``; tiers past the last map reuse the hardest."""
    if not maps:
        raise ValueError("No fixed maps configured")
    tier = max(0, min(tier, len(maps) - 1))
    return board_from_terrain_names(maps[tier].terrain)
