import pytest

from robot_racing.board import Board
from robot_racing.commands import (
    COMMAND_FN_REGISTRY,
    CommandResult,
    execute_command,
    move_back,
    move_one,
    move_three,
    move_two,
    return_to_origin,
    rotate_left,
    rotate_right,
    step_forward,
)
from robot_racing.components import Location
from robot_racing.types import RESET, CommandKind, Direction, TerrainKind
from tests.test_utils import make_board, make_player


def test_registry_covers_every_command_kind() -> None:
    assert set(COMMAND_FN_REGISTRY) == set(CommandKind)


def test_unknown_command_is_a_programming_error() -> None:
    board = make_board(["g"])
    with pytest.raises(NotImplementedError):
        execute_command("fly", make_player(), board)  # type: ignore[arg-type]


def test_move_three_across_grass_with_lava_corner() -> None:
    board = make_board(["lgg", "ggg", "ggg"])
    player = make_player((2, 2), Direction.UP)
    player, result = move_three(player, board)
    assert player.location == Location(0, 2)
    assert result == CommandResult(damage=0, landed_on=TerrainKind.GRASS, continue_move=True)


def test_board_edge_is_inert() -> None:
    board = make_board(["ggg", "ggg", "ggg"])
    player = make_player((0, 2), Direction.RIGHT)
    player, result = move_one(player, board)
    assert player.location == Location(0, 2)
    assert result.landed_on == TerrainKind.GRASS
    assert result.damage == 0


@pytest.mark.parametrize("command", [move_one, move_two, move_three])
def test_rock_bounces_back_with_one_damage(command) -> None:
    board = make_board(["ggg", "grg", "ggg"])
    player, result = command(make_player((2, 1), Direction.UP), board)
    assert player.location == Location(2, 1)
    assert result.damage == 1
    assert result.landed_on == TerrainKind.ROCK
    assert result.continue_move is False


def test_rock_after_grass_bounces_to_previous_step() -> None:
    board = make_board(["grg", "ggg", "ggg"])
    player, result = move_three(make_player((2, 1), Direction.UP), board)
    assert player.location == Location(1, 1)
    assert result.damage == 1


@pytest.mark.parametrize("command", [move_one, move_two, move_three])
def test_water_stops_move_and_keeps_player_on_it(command) -> None:
    board = make_board(["ggg", "gwg", "ggg"])
    player, result = command(make_player((2, 1), Direction.UP), board)
    assert player.location == Location(1, 1)
    assert result.damage == 1
    assert result.landed_on == TerrainKind.WATER
    assert result.continue_move is False


def test_lava_deals_fatal_damage_and_stops() -> None:
    board = make_board(["ggg", "glg", "ggg"])
    player, result = move_three(make_player((2, 1), Direction.UP, life=1), board)
    assert player.location == Location(1, 1)
    assert result.damage == 99
    assert result.landed_on == TerrainKind.LAVA
    # commands never touch life; the reducer applies damage
    assert player.life == 1


def test_move_two_stops_after_two_steps() -> None:
    board = make_board(["g", "g", "g", "g"])
    player, result = move_two(make_player((3, 0), Direction.UP), board)
    assert player.location == Location(1, 0)
    assert result.continue_move is True


@pytest.mark.parametrize("facing", list(Direction))
def test_move_back_keeps_heading(facing: Direction) -> None:
    board = make_board(["ggg", "ggg", "ggg"])
    player, result = move_back(make_player((1, 1), facing), board)
    assert player.facing == facing
    assert player.location == Location(1, 1).neighbor(Direction((facing + 2) % 4))
    assert result.landed_on == TerrainKind.GRASS


def test_move_back_into_rock_bounces() -> None:
    board = make_board(["ggg", "ggg", "grg"])
    player, result = move_back(make_player((1, 1), Direction.UP), board)
    assert player.location == Location(1, 1)
    assert player.facing == Direction.UP
    assert result.damage == 1


@pytest.mark.parametrize("facing", list(Direction))
@pytest.mark.parametrize(
    "first, second", [(rotate_left, rotate_right), (rotate_right, rotate_left)]
)
def test_opposite_turns_cancel(facing: Direction, first, second) -> None:
    board = make_board(["gw", "gg"])
    start = make_player((0, 1), facing)
    player, r1 = first(start, board)
    player, r2 = second(player, board)
    assert player.facing == facing
    assert player.location == start.location
    assert r1.damage == r2.damage == 0
    assert r1.landed_on == r2.landed_on == TerrainKind.WATER


@pytest.mark.parametrize(
    "facing, left, right",
    [
        (Direction.UP, Direction.LEFT, Direction.RIGHT),
        (Direction.RIGHT, Direction.UP, Direction.DOWN),
        (Direction.DOWN, Direction.RIGHT, Direction.LEFT),
        (Direction.LEFT, Direction.DOWN, Direction.UP),
    ],
)
def test_turns_wrap(facing: Direction, left: Direction, right: Direction) -> None:
    board = make_board(["g"])
    assert rotate_left(make_player(facing=facing), board)[0].facing == left
    assert rotate_right(make_player(facing=facing), board)[0].facing == right


def test_return_to_origin() -> None:
    board = make_board(["ggg", "gwg", "ggg"])
    player, result = return_to_origin(make_player((1, 1), turn_start=(2, 2)), board)
    assert player.location == Location(2, 2)
    assert result == CommandResult(damage=0, landed_on=RESET)


def test_return_to_origin_without_snapshot_stays() -> None:
    board = make_board(["gg"])
    player, result = return_to_origin(make_player((0, 1)), board)
    assert player.location == Location(0, 1)
    assert result.landed_on == RESET


def _all_locations(board: Board):
    for row in range(board.rows):
        for column in range(board.columns):
            yield row, column


@pytest.mark.parametrize(
    "drawing",
    [["g"], ["ggg"], ["g", "g", "g"], ["gggg", "gwgr", "rggg", "gggg"]],
)
@pytest.mark.parametrize("kind", list(CommandKind))
def test_commands_never_leave_the_board(drawing, kind: CommandKind) -> None:
    board = make_board(drawing)
    for location in _all_locations(board):
        for facing in Direction:
            player = make_player(location, facing, turn_start=location)
            player, _ = execute_command(kind, player, board)
            assert board.in_bounds(player.location)


def test_step_forward_single_step() -> None:
    board = make_board(["gg", "gg"])
    player, result = step_forward(make_player((1, 0), Direction.RIGHT), board)
    assert player.location == Location(1, 1)
    assert result.continue_move is True
