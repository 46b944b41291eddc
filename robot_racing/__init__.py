"""Robot Racing: turn-based rules engine for a grid racing board game.

Typical use::

    from robot_racing import GameManager, GameConfig

    manager = GameManager(GameConfig(seed=1))
    manager.subscribe(print)
    manager.press_start()
    manager.tick()  # title -> setup
    manager.tick()  # setup -> input (dice rolled)
    for index in range(3):
        manager.choose_command(index)
"""

from robot_racing.config import GameConfig, TerrainThresholds
from robot_racing.manager import GameManager
from robot_racing.state import Game, create_game
from robot_racing.step import TickResult, step

__all__ = [
    "Game",
    "GameConfig",
    "GameManager",
    "TerrainThresholds",
    "TickResult",
    "create_game",
    "step",
]
