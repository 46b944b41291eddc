"""Common type aliases and enumerations.

``CommandFn`` is the extension point used by :mod:`robot_racing.commands` to
map each :class:`CommandKind` onto its resolution function.
"""

from enum import IntEnum, StrEnum, auto
from typing import TYPE_CHECKING, Callable, Literal, Tuple, Union


if TYPE_CHECKING:
    from robot_racing.board import Board
    from robot_racing.commands import CommandResult
    from robot_racing.components import Player


class TerrainKind(StrEnum):
    """Terrain a board cell can hold."""

    GRASS = auto()
    WATER = auto()
    ROCK = auto()
    LAVA = auto()


class Direction(IntEnum):
    """Facing direction; values match the clockwise turn order."""

    UP = 0
    RIGHT = 1
    DOWN = 2
    LEFT = 3


class CommandKind(StrEnum):
    """Commands a player can queue (``RETURN_TO_ORIGIN`` is engine-only)."""

    MOVE_ONE = auto()
    MOVE_TWO = auto()
    MOVE_THREE = auto()
    MOVE_BACK = auto()
    TURN_LEFT = auto()
    TURN_RIGHT = auto()
    RETURN_TO_ORIGIN = auto()


class PhaseKind(StrEnum):
    """Tags of the turn state machine variants."""

    TITLE_SCENE = auto()
    SETUP = auto()
    INPUT = auto()
    EXECUTE_QUEUE = auto()
    GAME_OVER = auto()
    MAP_COMPLETED = auto()


RESET: Literal["reset"] = "reset"

LandedOn = Union[TerrainKind, Literal["reset"]]

CommandFn = Callable[["Player", "Board"], Tuple["Player", "CommandResult"]]
