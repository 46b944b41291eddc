"""Convenience factories for players and dice pools."""

from typing import Optional, Tuple

from robot_racing.components import Die, Location, Player
from robot_racing.config import GameConfig
from robot_racing.types import CommandKind, Direction


DEFAULT_FACES: Tuple[CommandKind, ...] = (
    CommandKind.MOVE_ONE,
    CommandKind.MOVE_TWO,
    CommandKind.MOVE_THREE,
    CommandKind.MOVE_BACK,
    CommandKind.TURN_LEFT,
    CommandKind.TURN_RIGHT,
)


def create_dice_pool(
    size: int, faces: Tuple[CommandKind, ...] = DEFAULT_FACES
) -> Tuple[Die, ...]:
    """``size`` identical six-sided command dice."""
    return tuple(Die(faces=faces) for _ in range(size))


def create_player(
    config: GameConfig, location: Optional[Location] = None
) -> Player:
    """Fresh player for a new session, parked at ``(0, 0)`` until Setup places it."""
    return Player(
        name=config.player_name,
        location=location if location is not None else Location(0, 0),
        facing=Direction.UP,
        life=config.starting_life,
        max_life=config.max_life,
        dice=create_dice_pool(config.dice_pool_size),
    )
