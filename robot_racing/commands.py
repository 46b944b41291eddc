"""Command resolution.

Each command maps ``(player, board) -> (player, CommandResult)``. Functions
here are pure: they return a new :class:`Player` and never touch the board
or the player's life (damage is reported, the reducer applies it).

Contract (``CommandFn``):

* Runs exactly once per queued command.
* Never moves the player off the board; a step past the edge leaves the
  player where it is and reports the landing rule of its own cell.
* ``CommandResult.landed_on`` is the terrain the player ended on, or
  ``"reset"`` for the return-to-origin teleport.

Every :class:`CommandKind` has an entry in :data:`COMMAND_FN_REGISTRY`;
:func:`execute_command` treats a missing entry as a programming error.
"""

from dataclasses import dataclass, replace
from typing import Dict, Optional, Tuple

from pyrsistent import pmap
from pyrsistent.typing import PMap

from robot_racing.board import Board
from robot_racing.components import Location, Player
from robot_racing.terrain import terrain_effect
from robot_racing.types import RESET, CommandFn, CommandKind, LandedOn
from robot_racing.utils.facing import reverse, turn_left, turn_right


@dataclass(frozen=True)
class CommandResult:
    """Outcome of one command.

    Attributes:
        damage: Life the player should lose (``>= 0``).
        landed_on: Terrain under the player afterwards, or ``"reset"``.
        continue_move: For moves, whether the final step allowed another
            step (``True`` only on grass); ``None`` for non-move commands.
    """

    damage: int = 0
    landed_on: Optional[LandedOn] = None
    continue_move: Optional[bool] = None


CommandOutcome = Tuple[Player, CommandResult]


def _land(player: Player, board: Board, previous: Location) -> CommandOutcome:
    """Apply the landing rule of the cell under ``player``."""
    terrain = board.terrain_at(player.location)
    effect = terrain_effect(terrain)
    if effect.bounces:
        player = replace(player, location=previous)
    return player, CommandResult(
        damage=effect.damage, landed_on=terrain, continue_move=effect.continues
    )


def step_forward(player: Player, board: Board) -> CommandOutcome:
    """Single step in the facing direction; the board edge is inert."""
    previous = player.location
    candidate = previous.neighbor(player.facing)
    if board.in_bounds(candidate):
        player = replace(player, location=candidate)
    return _land(player, board, previous)


def _move(steps: int) -> CommandFn:
    def move(player: Player, board: Board) -> CommandOutcome:
        result = CommandResult()
        for _ in range(steps):
            player, result = step_forward(player, board)
            if not result.continue_move:
                break
        return player, result

    move.__name__ = f"move_{steps}"
    move.__doc__ = f"Up to {steps} forward steps, stopping on any non-grass landing."
    return move


move_one = _move(1)
move_two = _move(2)
move_three = _move(3)


def move_back(player: Player, board: Board) -> CommandOutcome:
    """Step once against the facing direction, keeping the original heading."""
    facing = player.facing
    player, result = step_forward(replace(player, facing=reverse(facing)), board)
    return replace(player, facing=facing), result


def _rotated(player: Player, board: Board) -> CommandOutcome:
    return player, CommandResult(
        damage=0, landed_on=board.terrain_at(player.location)
    )


def rotate_left(player: Player, board: Board) -> CommandOutcome:
    return _rotated(replace(player, facing=turn_left(player.facing)), board)


def rotate_right(player: Player, board: Board) -> CommandOutcome:
    return _rotated(replace(player, facing=turn_right(player.facing)), board)


def return_to_origin(player: Player, board: Board) -> CommandOutcome:
    """Teleport back to where the current execute phase started."""
    if player.turn_start_location is not None:
        player = replace(player, location=player.turn_start_location)
    return player, CommandResult(damage=0, landed_on=RESET)


_REGISTRY: Dict[CommandKind, CommandFn] = {
    CommandKind.MOVE_ONE: move_one,
    CommandKind.MOVE_TWO: move_two,
    CommandKind.MOVE_THREE: move_three,
    CommandKind.MOVE_BACK: move_back,
    CommandKind.TURN_LEFT: rotate_left,
    CommandKind.TURN_RIGHT: rotate_right,
    CommandKind.RETURN_TO_ORIGIN: return_to_origin,
}

COMMAND_FN_REGISTRY: PMap[CommandKind, CommandFn] = pmap(_REGISTRY)
"""Resolver for every command kind."""


def execute_command(kind: CommandKind, player: Player, board: Board) -> CommandOutcome:
    """Resolve ``kind`` for ``player`` on ``board``.

    Raises:
        NotImplementedError: If ``kind`` has no registered resolver.
    """
    command_fn = COMMAND_FN_REGISTRY.get(kind)
    if command_fn is None:
        raise NotImplementedError(f"No resolver registered for command {kind!r}")
    return command_fn(player, board)
