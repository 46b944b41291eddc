import random
from dataclasses import replace
from typing import Sequence, Tuple

import pytest

from robot_racing.actions import choose_command, press_start
from robot_racing.components import Location
from robot_racing.errors import PhaseError, SelectionError
from robot_racing.events import (
    BOARD_READY,
    COMMAND_RESOLVED,
    DICE_OFFERED,
    GAME_OVER,
    LIFE_CHANGED,
    MAP_COMPLETED,
    PHASE_CHANGED,
)
from robot_racing.levels.fixed_maps import build_fixed_board
from robot_racing.phases import (
    ExecuteQueue,
    GameOver,
    Input,
    MapCompleted,
    Setup,
    TitleScene,
)
from robot_racing.state import Game, create_game
from robot_racing.step import step
from robot_racing.types import RESET, CommandKind, Direction, PhaseKind, TerrainKind
from tests.test_utils import fast_config, make_board, make_player

M1 = CommandKind.MOVE_ONE


def executing(
    drawing: Sequence[str],
    location: Tuple[int, int],
    facing: Direction,
    queue: Sequence[CommandKind],
    life: int = 3,
    max_life: int = 5,
    **config: object,
) -> Game:
    """Game already inside the execute phase on a hand-drawn board."""
    return Game(
        config=fast_config(**config),
        player=make_player(location, facing, life, max_life, turn_start=location),
        board=make_board(drawing),
        phase=ExecuteQueue(queue=tuple(queue)),
    )


def types_of(events) -> list:
    return [event.type for event in events]


@pytest.fixture
def rng() -> random.Random:
    return random.Random(0)


def test_title_scene_waits_for_start(rng: random.Random) -> None:
    game = create_game(fast_config())
    game, result = step(game, rng)
    assert isinstance(game.phase, TitleScene)
    assert not result.state_finished

    game, result = step(press_start(game), rng)
    assert result.state_finished
    assert isinstance(game.phase, Setup)


def test_press_start_outside_title_scene(rng: random.Random) -> None:
    game = replace(create_game(fast_config()), phase=Setup())
    with pytest.raises(PhaseError):
        press_start(game)


def test_setup_loads_first_fixed_map_and_rolls_dice(rng: random.Random) -> None:
    game = replace(create_game(fast_config()), phase=Setup())
    game, result = step(game, rng)
    assert game.board == build_fixed_board(0)
    assert game.player.location == game.board.starting_location
    assert game.player.facing == Direction.UP
    assert isinstance(game.phase, Input)
    assert len(game.phase.offered) == game.config.dice_pool_size
    assert game.turn == 1
    assert types_of(result.events) == [BOARD_READY, PHASE_CHANGED, DICE_OFFERED]


def test_setup_switches_to_random_boards(rng: random.Random) -> None:
    config = fast_config(rows=6, columns=7, random_after=2)
    game = replace(create_game(config), phase=Setup(), completed_maps=2)
    game, _ = step(game, rng)
    assert game.board is not None
    assert (game.board.rows, game.board.columns) == (6, 7)
    assert game.board.terrain_at(game.player.location) == TerrainKind.GRASS


def test_input_waits_for_three_choices(rng: random.Random) -> None:
    game = replace(create_game(fast_config()), phase=Setup())
    game, _ = step(game, rng)
    assert isinstance(game.phase, Input)
    offered = game.phase.offered

    for index in (4, 0):
        game, _ = choose_command(game, index)
        game, result = step(game, rng)
        assert isinstance(game.phase, Input)
        assert not result.state_finished

    game, event = choose_command(game, 2)
    assert event.payload["queue_length"] == 3
    start = game.player.location
    game, result = step(game, rng)
    assert result.state_finished
    assert isinstance(game.phase, ExecuteQueue)
    assert game.phase.queue == (offered[4], offered[0], offered[2])
    assert game.player.turn_start_location == start


def test_choose_command_validation(rng: random.Random) -> None:
    game = replace(create_game(fast_config()), phase=Setup())
    game, _ = step(game, rng)
    with pytest.raises(SelectionError):
        choose_command(game, 5)
    with pytest.raises(SelectionError):
        choose_command(game, -1)
    game, _ = choose_command(game, 1)
    with pytest.raises(SelectionError):
        choose_command(game, 1)
    game, _ = choose_command(game, 2)
    game, _ = choose_command(game, 3)
    with pytest.raises(SelectionError):
        choose_command(game, 4)
    with pytest.raises(PhaseError):
        choose_command(replace(game, phase=Setup()), 0)


def test_settle_delay_before_first_command(rng: random.Random) -> None:
    game = executing(["ggg", "ggg", "ggg"], (2, 0), Direction.UP, [M1], settle_ticks=2)
    for _ in range(2):
        game, result = step(game, rng)
        assert result.command is None
        assert game.player.location == Location(2, 0)
    game, result = step(game, rng)
    assert result.command == M1
    assert game.player.location == Location(1, 0)


def test_one_command_per_tick(rng: random.Random) -> None:
    game = executing(["gggg"] * 5, (4, 3), Direction.UP, [M1, M1, M1])
    rows = []
    for _ in range(3):
        game, result = step(game, rng)
        assert result.command == M1
        rows.append(game.player.location.row)
    assert rows == [3, 2, 1]

    game, result = step(game, rng)
    assert result.command is None
    assert result.state_finished
    assert isinstance(game.phase, Input)


def test_water_swaps_queue_for_return_to_origin(rng: random.Random) -> None:
    game = executing(
        ["ggg", "gwg", "ggg"],
        (2, 1),
        Direction.UP,
        [M1, CommandKind.TURN_LEFT, M1],
    )
    game, result = step(game, rng)
    assert result.landed_on == TerrainKind.WATER
    assert result.damage == 1
    assert game.player.location == Location(1, 1)
    assert game.player.life == 2
    assert game.phase == ExecuteQueue(queue=(CommandKind.RETURN_TO_ORIGIN,), ticks=1)
    assert LIFE_CHANGED in types_of(result.events)

    game, result = step(game, rng)
    assert result.command == CommandKind.RETURN_TO_ORIGIN
    assert result.landed_on == RESET
    assert game.player.location == Location(2, 1)
    assert game.player.facing == Direction.UP

    game, result = step(game, rng)
    assert isinstance(game.phase, Input)


def test_water_on_last_command_still_returns(rng: random.Random) -> None:
    game = executing(["ggg", "gwg", "ggg"], (2, 1), Direction.UP, [M1])
    game, _ = step(game, rng)
    assert isinstance(game.phase, ExecuteQueue)
    assert game.phase.queue == (CommandKind.RETURN_TO_ORIGIN,)


def test_lava_discards_queue(rng: random.Random) -> None:
    game = executing(
        ["ggg", "glg", "ggg"], (2, 1), Direction.UP, [M1, M1, M1], life=100, max_life=100
    )
    game, result = step(game, rng)
    assert result.damage == 99
    assert game.player.life == 1
    assert game.phase == ExecuteQueue(queue=(), ticks=1)


def test_lava_at_one_life_ends_game(rng: random.Random) -> None:
    game = executing(["ggg", "glg", "ggg"], (2, 1), Direction.UP, [M1, M1], life=1)
    game, result = step(game, rng)
    assert game.player.life == 0
    assert isinstance(game.phase, GameOver)
    assert GAME_OVER in types_of(result.events)
    assert result.phase == PhaseKind.GAME_OVER


def test_game_over_beats_reaching_the_flag(rng: random.Random) -> None:
    # Player stands on the flag and bounces off a rock back onto it.
    game = executing(["grg", "ggg", "ggg"], (0, 0), Direction.RIGHT, [M1], life=1)
    assert game.board is not None and game.board.flag_location == Location(0, 0)
    game, result = step(game, rng)
    assert game.player.location == Location(0, 0)
    assert game.player.life == 0
    assert isinstance(game.phase, GameOver)
    assert MAP_COMPLETED not in types_of(result.events)


def test_reaching_flag_completes_map(rng: random.Random) -> None:
    game = executing(["ggg", "ggg", "ggg"], (1, 0), Direction.UP, [M1, M1, M1], life=3)
    game, result = step(game, rng)
    assert isinstance(game.phase, MapCompleted)
    assert game.player.life == 4
    assert game.completed_maps == 1
    assert types_of(result.events)[-1] == MAP_COMPLETED

    game, result = step(game, rng)
    assert result.state_finished
    assert isinstance(game.phase, Setup)

    game, _ = step(game, rng)
    assert game.board == build_fixed_board(1)
    assert game.player.location == game.board.starting_location
    assert isinstance(game.phase, Input)


def test_map_completion_life_is_capped(rng: random.Random) -> None:
    game = executing(["ggg", "ggg", "ggg"], (1, 0), Direction.UP, [M1], life=5, max_life=5)
    game, result = step(game, rng)
    assert game.player.life == 5
    assert LIFE_CHANGED not in types_of(result.events)


def test_timed_phases_wait_their_ticks(rng: random.Random) -> None:
    config = fast_config(map_completed_ticks=3)
    game = replace(create_game(config), phase=MapCompleted())
    for _ in range(2):
        game, result = step(game, rng)
        assert not result.state_finished
    game, result = step(game, rng)
    assert result.state_finished
    assert isinstance(game.phase, Setup)


def test_game_over_resets_session_on_title(rng: random.Random) -> None:
    config = fast_config()
    game = replace(
        create_game(config),
        phase=GameOver(),
        player=make_player((3, 3), life=0),
        board=make_board(["g"]),
        completed_maps=4,
    )
    game, result = step(game, rng)
    assert isinstance(game.phase, TitleScene)
    assert not game.phase.started
    assert game.board is None
    assert game.completed_maps == 0
    assert game.player.life == config.starting_life
    assert game.player.location == Location(0, 0)


def test_tick_counter_advances(rng: random.Random) -> None:
    game = create_game(fast_config())
    for expected in (1, 2, 3):
        game, _ = step(game, rng)
        assert game.tick == expected


def test_command_resolved_event_payload(rng: random.Random) -> None:
    game = executing(["ggg", "ggg", "ggg"], (2, 2), Direction.LEFT, [CommandKind.MOVE_TWO])
    game, result = step(game, rng)
    (event,) = [e for e in result.events if e.type == COMMAND_RESOLVED]
    assert event.payload["command"] == "move_two"
    assert event.payload["landed_on"] == "grass"
    assert event.payload["player"]["column"] == 0
    assert event.payload["player"]["sprite"] == "robot_left"
