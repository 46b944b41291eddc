"""Flat-colour board renderer.

A debugging / authoring aid that draws a :class:`~robot_racing.board.Board`
into a Pillow image: one solid tile per cell, a flag marker on the goal and a
heading triangle for the player. The tile layout is fixed when the renderer
is created; drawing a board of a different size onto it raises
:class:`~robot_racing.errors.RenderDesyncError` instead of producing a
misaligned picture.
"""

from typing import Dict, List, Optional, Tuple

import numpy as np
import numpy.typing as npt
from PIL import Image, ImageDraw

from robot_racing.board import Board
from robot_racing.components import Location, Player
from robot_racing.errors import RenderDesyncError
from robot_racing.types import Direction, TerrainKind

DEFAULT_TILE_SIZE = 30

RGBA = Tuple[int, int, int, int]
UInt8Array = npt.NDArray[np.uint8]

TERRAIN_COLORS: Dict[TerrainKind, RGBA] = {
    TerrainKind.GRASS: (106, 170, 68, 255),
    TerrainKind.WATER: (64, 128, 214, 255),
    TerrainKind.ROCK: (128, 120, 112, 255),
    TerrainKind.LAVA: (226, 84, 28, 255),
}
FLAG_COLOR: RGBA = (250, 250, 250, 255)
PLAYER_COLOR: RGBA = (30, 30, 30, 255)
ALT_VARIANT_SHADE = 0.85

_TIP: Dict[Direction, Tuple[int, int]] = {
    Direction.UP: (0, -1),
    Direction.RIGHT: (1, 0),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
}

# (row, column, (left, top, right, bottom))
Tile = Tuple[int, int, Tuple[int, int, int, int]]


class BoardRenderer:
    """Renders boards of one fixed size.

    Args:
        rows: Tile rows in the layout.
        columns: Tile columns in the layout.
        tile_size: Edge length of a tile in pixels.
    """

    def __init__(self, rows: int, columns: int, tile_size: int = DEFAULT_TILE_SIZE):
        self.rows = rows
        self.columns = columns
        self.tile_size = tile_size
        self.tiles: List[Tile] = [
            (
                row,
                column,
                (
                    column * tile_size,
                    row * tile_size,
                    (column + 1) * tile_size,
                    (row + 1) * tile_size,
                ),
            )
            for row in range(rows)
            for column in range(columns)
        ]

    def _check_layout(self, board: Board) -> None:
        if len(self.tiles) != board.rows * board.columns or self.columns != board.columns:
            raise RenderDesyncError(len(self.tiles), board.rows, board.columns)

    def _canvas(self, board: Board) -> UInt8Array:
        size = self.tile_size
        canvas: UInt8Array = np.zeros(
            (self.rows * size, self.columns * size, 4), dtype=np.uint8
        )
        for row, column, (left, top, right, bottom) in self.tiles:
            cell = board.cells[row][column]
            color = np.array(TERRAIN_COLORS[cell.terrain], dtype=np.float32)
            if cell.variant.endswith("2"):
                color[:3] *= ALT_VARIANT_SHADE
            canvas[top:bottom, left:right] = color.astype(np.uint8)
        return canvas

    def _box(self, location: Location) -> Tuple[int, int, int, int]:
        return self.tiles[location.row * self.columns + location.column][2]

    def _draw_flag(self, draw: ImageDraw.ImageDraw, location: Location) -> None:
        left, top, _, _ = self._box(location)
        size = self.tile_size
        pole_x = left + size // 4
        draw.line(
            [(pole_x, top + size // 6), (pole_x, top + size - size // 6)],
            fill=FLAG_COLOR,
            width=max(1, size // 15),
        )
        draw.polygon(
            [
                (pole_x, top + size // 6),
                (left + size - size // 5, top + size // 3),
                (pole_x, top + size // 2),
            ],
            fill=FLAG_COLOR,
        )

    def _draw_player(self, draw: ImageDraw.ImageDraw, player: Player) -> None:
        left, top, _, _ = self._box(player.location)
        size = self.tile_size
        cx, cy = left + size // 2, top + size // 2
        ux, uy = _TIP[player.facing]
        px, py = -uy, ux
        tip_len = size * 0.35
        half_base = size * 0.25
        tip = (cx + ux * tip_len, cy + uy * tip_len)
        base = (cx - ux * tip_len * 0.6, cy - uy * tip_len * 0.6)
        draw.polygon(
            [
                tip,
                (base[0] + px * half_base, base[1] + py * half_base),
                (base[0] - px * half_base, base[1] - py * half_base),
            ],
            fill=PLAYER_COLOR,
        )

    def render(self, board: Board, player: Optional[Player] = None) -> Image.Image:
        """Draw ``board`` (and ``player`` if given) as an RGBA image.

        Raises:
            RenderDesyncError: If the board does not fit the tile layout.
        """
        self._check_layout(board)
        image = Image.fromarray(self._canvas(board))
        draw = ImageDraw.Draw(image)
        self._draw_flag(draw, board.flag_location)
        if player is not None:
            self._draw_player(draw, player)
        return image
