import random
from dataclasses import replace

import pytest

from robot_racing.components import Die
from robot_racing.config import GameConfig
from robot_racing.factories import DEFAULT_FACES, create_dice_pool, create_player
from robot_racing.types import CommandKind, Direction
from robot_racing.utils.dice import roll_dice, roll_die
from robot_racing.utils.facing import reverse, turn_left, turn_right
from robot_racing.utils.health import apply_damage, heal
from tests.test_utils import make_player


def test_create_player_from_config() -> None:
    player = create_player(GameConfig(starting_life=2, max_life=4, dice_pool_size=6))
    assert player.life == 2
    assert player.max_life == 4
    assert len(player.dice) == 6
    assert player.facing == Direction.UP
    assert player.turn_start_location is None


def test_roll_dice_one_option_per_die() -> None:
    player = make_player()
    offered = roll_dice(player, random.Random(5))
    assert len(offered) == len(player.dice)
    assert all(kind in DEFAULT_FACES for kind in offered)


def test_roll_dice_follows_die_order() -> None:
    player = make_player()
    dice = (
        Die(faces=(CommandKind.TURN_LEFT,)),
        Die(faces=(CommandKind.MOVE_THREE,)),
        Die(faces=(CommandKind.MOVE_BACK,)),
    )
    offered = roll_dice(replace(player, dice=dice), random.Random(0))
    assert offered == (CommandKind.TURN_LEFT, CommandKind.MOVE_THREE, CommandKind.MOVE_BACK)


def test_dice_faces_are_reachable() -> None:
    rng = random.Random(11)
    (die,) = create_dice_pool(1)
    seen = {roll_die(die, rng) for _ in range(300)}
    assert seen == set(DEFAULT_FACES)


@pytest.mark.parametrize("faces", [(), (CommandKind.RETURN_TO_ORIGIN,)])
def test_invalid_die(faces: tuple) -> None:
    with pytest.raises(ValueError):
        Die(faces=faces)


def test_damage_clamps_at_zero() -> None:
    player = apply_damage(make_player(life=1), 99)
    assert player.life == 0
    assert not player.alive
    assert player.sprite == "robot_wrecked"


def test_zero_damage_returns_same_player() -> None:
    player = make_player(life=2)
    assert apply_damage(player, 0) is player


def test_negative_damage_rejected() -> None:
    with pytest.raises(ValueError):
        apply_damage(make_player(), -1)


def test_heal_is_capped() -> None:
    assert heal(make_player(life=4, max_life=5)).life == 5
    assert heal(make_player(life=5, max_life=5)).life == 5


@pytest.mark.parametrize("facing", list(Direction))
def test_facing_arithmetic(facing: Direction) -> None:
    assert turn_right(turn_left(facing)) == facing
    assert turn_left(turn_left(facing)) == reverse(facing)
    assert reverse(reverse(facing)) == facing


def test_sprite_token_tracks_heading() -> None:
    assert make_player(facing=Direction.LEFT).sprite == "robot_left"
