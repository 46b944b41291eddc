"""Exception hierarchy.

Every failure in the engine is a logic or invariant bug (there is no I/O),
so nothing here is retried; errors propagate to the ``GameManager`` caller.
"""


class RobotRacingError(Exception):
    """Base class for all engine errors."""


class ConfigError(RobotRacingError, ValueError):
    """A ``GameConfig`` value is out of range or unknown."""


class PhaseError(RobotRacingError):
    """An inbound call arrived while the game was in the wrong phase."""

    def __init__(self, expected: str, actual: str):
        self.expected = expected
        self.actual = actual
        super().__init__(f"Expected phase {expected}, game is in {actual}")


class SelectionError(RobotRacingError, ValueError):
    """A dice option could not be chosen."""


class RenderDesyncError(RobotRacingError):
    """Renderer tile layout does not match the board being drawn."""

    def __init__(self, tiles: int, rows: int, columns: int):
        self.tiles = tiles
        self.rows = rows
        self.columns = columns
        super().__init__(
            f"Unable to draw a {rows}x{columns} board on {tiles} tiles"
        )
