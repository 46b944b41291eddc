"""Dice rolling.

Rolls take an explicit ``random.Random`` so sessions can be replayed from a
seed.
"""

import random
from typing import Tuple

from robot_racing.components import Die, Player
from robot_racing.types import CommandKind


def roll_die(die: Die, rng: random.Random) -> CommandKind:
    return rng.choice(die.faces)


def roll_dice(player: Player, rng: random.Random) -> Tuple[CommandKind, ...]:
    """Roll every die in the player's pool.

    The result is ordered by die, not shuffled; it lists the options on
    offer, not the order they will run in.
    """
    return tuple(roll_die(die, rng) for die in player.dice)
