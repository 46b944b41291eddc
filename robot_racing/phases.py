"""Turn state machine variants.

The turn cycle is a closed set of frozen dataclasses joined in the
:data:`Phase` union; each variant carries only its own progress (tick
counter, offered dice, queue). The player and board live on
:class:`robot_racing.state.Game`, which every phase handler receives.

Cycle::

    TitleScene -> Setup -> Input -> ExecuteQueue -> Input -> ...
                                         |
                   GameOver  <-----------+ (life reaches 0)
                   MapCompleted <--------+ (flag reached) -> Setup
    GameOver -> TitleScene
"""

from dataclasses import dataclass, replace
from typing import ClassVar, Tuple, TypeVar, Union

from robot_racing.types import CommandKind, PhaseKind


@dataclass(frozen=True)
class TitleScene:
    """Waiting for the start signal."""

    kind: ClassVar[PhaseKind] = PhaseKind.TITLE_SCENE
    started: bool = False


@dataclass(frozen=True)
class Setup:
    """Loads the next map on its single tick."""

    kind: ClassVar[PhaseKind] = PhaseKind.SETUP


@dataclass(frozen=True)
class Input:
    """Dice are rolled; waiting for the player's picks.

    Attributes:
        offered: Rolled options, in dice order.
        chosen: Indices into ``offered`` in the order they were picked.
    """

    kind: ClassVar[PhaseKind] = PhaseKind.INPUT
    offered: Tuple[CommandKind, ...] = ()
    chosen: Tuple[int, ...] = ()

    @property
    def queue(self) -> Tuple[CommandKind, ...]:
        return tuple(self.offered[i] for i in self.chosen)


@dataclass(frozen=True)
class ExecuteQueue:
    """Runs one queued command per tick after a short settle delay."""

    kind: ClassVar[PhaseKind] = PhaseKind.EXECUTE_QUEUE
    queue: Tuple[CommandKind, ...] = ()
    ticks: int = 0


@dataclass(frozen=True)
class GameOver:
    kind: ClassVar[PhaseKind] = PhaseKind.GAME_OVER
    ticks: int = 0


@dataclass(frozen=True)
class MapCompleted:
    kind: ClassVar[PhaseKind] = PhaseKind.MAP_COMPLETED
    ticks: int = 0


Phase = Union[TitleScene, Setup, Input, ExecuteQueue, GameOver, MapCompleted]

TimedPhase = TypeVar("TimedPhase", ExecuteQueue, GameOver, MapCompleted)


def advance_ticks(phase: TimedPhase) -> TimedPhase:
    """Count one more tick spent in a timed phase."""
    return replace(phase, ticks=phase.ticks + 1)
