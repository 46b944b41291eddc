"""Inbound actions from the presentation layer.

The core accepts exactly two kinds of input: the title-screen start signal
and dice picks during the input phase. Both only record intent on the
:class:`~robot_racing.state.Game`; the next tick observes it.
"""

from dataclasses import replace
from typing import Tuple

from robot_racing.errors import PhaseError, SelectionError
from robot_racing.events import GameEvent, command_chosen
from robot_racing.phases import Input, TitleScene
from robot_racing.state import Game
from robot_racing.types import PhaseKind


def press_start(game: Game) -> Game:
    """Dismiss the title scene.

    Raises:
        PhaseError: If the game is not on the title scene.
    """
    if not isinstance(game.phase, TitleScene):
        raise PhaseError(str(PhaseKind.TITLE_SCENE), str(game.phase.kind))
    return replace(game, phase=replace(game.phase, started=True))


def choose_command(game: Game, index: int) -> Tuple[Game, GameEvent]:
    """Queue the offered option at ``index``.

    Picks run in the order they are made. Each die can be picked once.

    Raises:
        PhaseError: If the game is not in the input phase.
        SelectionError: If ``index`` is out of range, already picked, or the
            queue is already full.
    """
    phase = game.phase
    if not isinstance(phase, Input):
        raise PhaseError(str(PhaseKind.INPUT), str(game.phase.kind))
    if not 0 <= index < len(phase.offered):
        raise SelectionError(
            f"Option {index} out of range (0..{len(phase.offered) - 1})"
        )
    if index in phase.chosen:
        raise SelectionError(f"Option {index} already chosen")
    if len(phase.chosen) >= game.config.commands_per_turn:
        raise SelectionError(
            f"Queue already holds {game.config.commands_per_turn} commands"
        )
    phase = replace(phase, chosen=(*phase.chosen, index))
    event = command_chosen(index, phase.offered[index], len(phase.chosen))
    return replace(game, phase=phase), event
