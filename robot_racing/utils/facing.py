"""Heading arithmetic (clockwise, mod 4)."""

from robot_racing.types import Direction


def turn_left(facing: Direction) -> Direction:
    return Direction((facing - 1) % 4)


def turn_right(facing: Direction) -> Direction:
    return Direction((facing + 1) % 4)


def reverse(facing: Direction) -> Direction:
    return Direction((facing + 2) % 4)
