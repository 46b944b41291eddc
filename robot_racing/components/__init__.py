"""Component value types.

Every component is a frozen dataclass; changing one means building a new
instance with :func:`dataclasses.replace`.
"""

from .cell import Cell
from .die import Die
from .location import Location
from .player import Player

__all__ = [
    "Cell",
    "Die",
    "Location",
    "Player",
]
