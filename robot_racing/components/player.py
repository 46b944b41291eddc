"""Player component.

The player is rebuilt (never mutated) on every move; the current snapshot is
held by :class:`robot_racing.state.Game`.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from robot_racing.components.die import Die
from robot_racing.components.location import Location
from robot_racing.types import Direction


@dataclass(frozen=True)
class Player:
    """Racing robot controlled through queued commands.

    Attributes:
        name: Display name.
        location: Current cell.
        facing: Heading used by forward steps.
        life: Current life total, kept within ``[0, max_life]``.
        max_life: Upper bound for ``life``.
        dice: Fixed dice pool rolled at the start of every input phase.
        turn_start_location: Snapshot taken when the execute phase begins;
            target of the return-to-origin command.
    """

    name: str
    location: Location
    facing: Direction
    life: int
    max_life: int
    dice: Tuple[Die, ...]
    turn_start_location: Optional[Location] = None

    @property
    def alive(self) -> bool:
        return self.life > 0

    @property
    def sprite(self) -> str:
        """Sprite token for the presentation layer (e.g. ``"robot_up"``)."""
        if not self.alive:
            return "robot_wrecked"
        return f"robot_{self.facing.name.lower()}"
