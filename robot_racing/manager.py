"""Game manager: owns the session snapshot and the tick loop.

The manager is the boundary between the pure reducer in
:mod:`robot_racing.step` and a presentation layer. It keeps the one live
:class:`~robot_racing.state.Game`, forwards inbound actions, and pushes every
:class:`~robot_racing.events.GameEvent` to subscribed listeners.

Scheduling is single-threaded: :meth:`GameManager.run` calls
:meth:`GameManager.tick` every ``tick_period`` seconds. Inbound calls made
between ticks (from the same thread, e.g. an event loop callback) just record
intent; the next tick acts on it. Errors raised by the reducer or by a
listener propagate out of ``tick``/``run`` and stop the loop.
"""

import logging
import random
import time
from typing import Callable, List, Optional, Tuple

from robot_racing import actions
from robot_racing.board import Board
from robot_racing.components import Player
from robot_racing.config import GameConfig
from robot_racing.events import GameEvent
from robot_racing.phases import Input, Phase
from robot_racing.state import Game, create_game
from robot_racing.step import TickResult, step
from robot_racing.types import CommandKind

logger = logging.getLogger(__name__)

Listener = Callable[[GameEvent], None]


class GameManager:
    """Drives one game session.

    Args:
        config: Session settings; defaults apply when ``None``.
        rng: Randomness source; when ``None`` one is seeded from ``config.seed``.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.config = config if config is not None else GameConfig()
        self.rng = rng if rng is not None else random.Random(self.config.seed)
        self._game: Game = create_game(self.config)
        self._listeners: List[Listener] = []
        self.running = False
        logger.info(
            "Game manager ready (%dx%d random boards after %d fixed maps)",
            self.config.rows,
            self.config.columns,
            self.config.random_after,
        )

    # -------- Read-only views --------

    @property
    def game(self) -> Game:
        return self._game

    @property
    def phase(self) -> Phase:
        return self._game.phase

    @property
    def board(self) -> Optional[Board]:
        return self._game.board

    @property
    def player(self) -> Player:
        return self._game.player

    @property
    def completed_maps(self) -> int:
        return self._game.completed_maps

    @property
    def offered(self) -> Tuple[CommandKind, ...]:
        """Dice options on offer, or ``()`` outside the input phase."""
        phase = self._game.phase
        return phase.offered if isinstance(phase, Input) else ()

    # -------- Listeners --------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener`` for every event; returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _publish(self, events: Tuple[GameEvent, ...]) -> None:
        for event in events:
            for listener in list(self._listeners):
                listener(event)

    # -------- Inbound actions --------

    def press_start(self) -> None:
        self._game = actions.press_start(self._game)
        logger.info("Start signal received")

    def choose_command(self, index: int) -> None:
        self._game, event = actions.choose_command(self._game, index)
        self._publish((event,))

    # -------- Loop --------

    def tick(self) -> TickResult:
        """Process one tick and publish its events."""
        self._game, result = step(self._game, self.rng)
        self._publish(result.events)
        return result

    def run(
        self,
        max_ticks: Optional[int] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> int:
        """Tick every ``tick_period`` seconds until :meth:`stop` or ``max_ticks``.

        Returns:
            int: Number of ticks processed.
        """
        self.running = True
        ticks = 0
        logger.info("Tick loop started (period %.3fs)", self.config.tick_period)
        try:
            while self.running and (max_ticks is None or ticks < max_ticks):
                self.tick()
                ticks += 1
                if self.running:
                    sleep(self.config.tick_period)
        finally:
            self.running = False
            logger.info("Tick loop stopped after %d ticks", ticks)
        return ticks

    def stop(self) -> None:
        self.running = False
