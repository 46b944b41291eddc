"""Terrain catalog.

Maps every :class:`TerrainKind` to the rule applied when a robot lands on
it. The catalog is an immutable persistent map built once at import time and
passed by reference to whatever needs it; nothing mutates it.

Landing rules:

* ``grass``: no damage, a multi-step move keeps going.
* ``water``: 1 damage, the robot stays on the water and the move stops. The
  execute phase then swaps the rest of the queue for a return-to-origin.
* ``rock``: 1 damage, the robot bounces back to the cell it came from.
* ``lava``: 99 damage (fatal in practice) and the rest of the queue is dropped.
"""

from dataclasses import dataclass
from enum import StrEnum, auto
from typing import Tuple

from pyrsistent import pmap
from pyrsistent.typing import PMap

from robot_racing.types import TerrainKind


class QueuePolicy(StrEnum):
    """What the execute phase does with the remaining queue after a landing."""

    KEEP = auto()
    RETURN_TO_ORIGIN = auto()
    DISCARD = auto()


@dataclass(frozen=True)
class TerrainEffect:
    """Landing rule for one terrain kind.

    Attributes:
        damage: Life lost when landing.
        continues: Whether a multi-step move may take its next step.
        bounces: Whether the robot is pushed back to its previous cell.
        queue_policy: Effect on the commands still queued this turn.
        variants: Sprite tokens the presentation layer may pick from.
    """

    damage: int
    continues: bool
    bounces: bool
    queue_policy: QueuePolicy
    variants: Tuple[str, ...]


LAVA_DAMAGE = 99
HAZARD_DAMAGE = 1

TERRAIN_CATALOG: PMap[TerrainKind, TerrainEffect] = pmap(
    {
        TerrainKind.GRASS: TerrainEffect(
            damage=0,
            continues=True,
            bounces=False,
            queue_policy=QueuePolicy.KEEP,
            variants=("grass", "grass2"),
        ),
        TerrainKind.WATER: TerrainEffect(
            damage=HAZARD_DAMAGE,
            continues=False,
            bounces=False,
            queue_policy=QueuePolicy.RETURN_TO_ORIGIN,
            variants=("water", "water2"),
        ),
        TerrainKind.ROCK: TerrainEffect(
            damage=HAZARD_DAMAGE,
            continues=False,
            bounces=True,
            queue_policy=QueuePolicy.KEEP,
            variants=("rock", "rock2"),
        ),
        TerrainKind.LAVA: TerrainEffect(
            damage=LAVA_DAMAGE,
            continues=False,
            bounces=False,
            queue_policy=QueuePolicy.DISCARD,
            variants=("lava",),
        ),
    }
)


def terrain_effect(terrain: TerrainKind) -> TerrainEffect:
    return TERRAIN_CATALOG[TerrainKind(terrain)]
