"""Game snapshot.

:class:`Game` is the single value the :class:`~robot_racing.manager.GameManager`
owns. Every tick replaces it wholesale through :func:`robot_racing.step.step`;
nothing mutates it in place, so exactly one board and one player are live at
any moment and ownership moves with the phase that is current.
"""

from dataclasses import dataclass, field
from typing import Optional

from robot_racing.board import Board
from robot_racing.components import Player
from robot_racing.config import GameConfig
from robot_racing.factories import create_player
from robot_racing.phases import Phase, TitleScene


@dataclass(frozen=True)
class Game:
    """Immutable session state.

    Attributes:
        config (GameConfig): Settings for the session.
        player (Player): Current player snapshot.
        phase (Phase): Active turn state machine variant.
        board (Board | None): Current map; ``None`` until the first Setup.
        completed_maps (int): Maps finished this session; picks the next map.
        turn (int): Input phases entered on the current map.
        tick (int): Ticks processed since the session began.
    """

    config: GameConfig
    player: Player
    phase: Phase = field(default_factory=TitleScene)
    board: Optional[Board] = None
    completed_maps: int = 0
    turn: int = 0
    tick: int = 0


def create_game(config: Optional[GameConfig] = None) -> Game:
    """New session sitting on the title scene."""
    if config is None:
        config = GameConfig()
    return Game(config=config, player=create_player(config))
