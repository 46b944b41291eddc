from dataclasses import dataclass

from robot_racing.components.location import Location
from robot_racing.types import TerrainKind


@dataclass(frozen=True)
class Cell:
    """One board square.

    Attributes:
        location: Where the cell sits on its board.
        terrain: Terrain kind deciding the landing rule.
        variant: Presentation-only sprite token (e.g. ``"grass2"``).
    """

    location: Location
    terrain: TerrainKind
    variant: str = ""
