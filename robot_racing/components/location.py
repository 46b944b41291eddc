"""Location component.

Immutable integer grid coordinates. Row 0 is the top of the board (where the
flag sits) and the player spawns on the bottom row.
"""

from dataclasses import dataclass

from robot_racing.types import Direction


_OFFSETS = {
    Direction.UP: (-1, 0),
    Direction.RIGHT: (0, 1),
    Direction.DOWN: (1, 0),
    Direction.LEFT: (0, -1),
}


@dataclass(frozen=True)
class Location:
    """Grid coordinate.

    Attributes:
        row: Row index (0 at top).
        column: Column index (0 at left).
    """

    row: int
    column: int

    def manhattan_distance(self, other: "Location") -> int:
        return abs(self.row - other.row) + abs(self.column - other.column)

    def neighbor(self, direction: Direction) -> "Location":
        """Adjacent location in ``direction``; may lie outside the board."""
        d_row, d_column = _OFFSETS[Direction(direction)]
        return Location(self.row + d_row, self.column + d_column)
