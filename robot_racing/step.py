"""Tick reducer and phase transitions.

:func:`step` is the only progression entry point. It is pure apart from the
``random.Random`` it draws from: given a :class:`Game` it returns the next
``Game`` plus a :class:`TickResult` for the presentation layer.

Ordering within one tick:

1. The active phase's update handler runs (``_update_*``). At most one
   command is resolved per tick.
2. If a command was resolved, its damage is applied (life clamps at 0).
3. Zero life moves the game to ``GameOver``. This check runs *before* the
   flag check, so a fatal landing on the flag cell still ends the game.
4. Otherwise, standing on the flag moves the game to ``MapCompleted``.
5. Otherwise, a finished phase hands over to its successor.

Every transition goes through :func:`enter_phase`, which builds the new
variant and performs its entry work (rolling dice, snapshotting the turn
start, awarding a life, resetting the session).
"""

import logging
import random
from dataclasses import dataclass, field, replace
from typing import Callable, Dict, List, Optional, Tuple

from robot_racing.commands import CommandResult, execute_command
from robot_racing.events import (
    GameEvent,
    board_ready,
    command_resolved,
    dice_offered,
    game_over,
    life_changed,
    map_completed,
    phase_changed,
)
from robot_racing.factories import create_player
from robot_racing.levels.fixed_maps import build_fixed_board
from robot_racing.levels.generator import generate_random_board
from robot_racing.phases import (
    ExecuteQueue,
    GameOver,
    Input,
    MapCompleted,
    Phase,
    Setup,
    TitleScene,
    advance_ticks,
)
from robot_racing.state import Game
from robot_racing.terrain import QueuePolicy, terrain_effect
from robot_racing.types import CommandKind, Direction, LandedOn, PhaseKind, TerrainKind
from robot_racing.utils.dice import roll_dice
from robot_racing.utils.health import apply_damage, heal

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PhaseOutcome:
    """What a phase handler reports back to the reducer."""

    finished: bool = False
    command: Optional[CommandKind] = None
    result: Optional[CommandResult] = None
    events: Tuple[GameEvent, ...] = ()


@dataclass(frozen=True)
class TickResult:
    """Per-tick record exposed to the presentation layer.

    Attributes:
        damage: Damage applied this tick.
        landed_on: Terrain (or ``"reset"``) reported by the resolved command.
        state_finished: Whether the phase that was active finished this tick.
        command: Command resolved this tick, if any.
        phase: Phase kind active after the tick.
        events: Events emitted during the tick, in order.
    """

    damage: int = 0
    landed_on: Optional[LandedOn] = None
    state_finished: bool = False
    command: Optional[CommandKind] = None
    phase: PhaseKind = PhaseKind.TITLE_SCENE
    events: Tuple[GameEvent, ...] = field(default=())


UpdateFn = Callable[[Game, random.Random], Tuple[Game, PhaseOutcome]]
EnterFn = Callable[[Game, Phase, random.Random], Tuple[Game, List[GameEvent]]]


# -------------------------
# Phase update handlers
# -------------------------


def _update_title_scene(game: Game, rng: random.Random) -> Tuple[Game, PhaseOutcome]:
    phase = game.phase
    assert isinstance(phase, TitleScene)
    return game, PhaseOutcome(finished=phase.started)


def load_next_map(game: Game, rng: random.Random) -> Game:
    """Build the board for the next map and park the player on its start.

    Fixed maps are played in tier order until ``random_after`` maps have
    been completed; random boards follow.
    """
    config = game.config
    if game.completed_maps < config.random_after:
        board = build_fixed_board(game.completed_maps, config.fixed_maps)
        source = config.fixed_maps[min(game.completed_maps, len(config.fixed_maps) - 1)].name
    else:
        board = generate_random_board(config.rows, config.columns, config.thresholds, rng)
        source = "random"
    logger.info(
        "Map %d (%s): %dx%d, start %s, flag %s",
        game.completed_maps + 1,
        source,
        board.rows,
        board.columns,
        board.starting_location,
        board.flag_location,
    )
    player = replace(
        game.player,
        location=board.starting_location,
        facing=Direction.UP,
        turn_start_location=None,
    )
    return replace(game, board=board, player=player, turn=0)


def _update_setup(game: Game, rng: random.Random) -> Tuple[Game, PhaseOutcome]:
    game = load_next_map(game, rng)
    assert game.board is not None
    return game, PhaseOutcome(
        finished=True, events=(board_ready(game.board, game.completed_maps + 1),)
    )


def _update_input(game: Game, rng: random.Random) -> Tuple[Game, PhaseOutcome]:
    phase = game.phase
    assert isinstance(phase, Input)
    return game, PhaseOutcome(
        finished=len(phase.chosen) == game.config.commands_per_turn
    )


def _update_execute_queue(game: Game, rng: random.Random) -> Tuple[Game, PhaseOutcome]:
    phase = game.phase
    assert isinstance(phase, ExecuteQueue)
    assert game.board is not None
    phase = advance_ticks(phase)
    if phase.ticks <= game.config.settle_ticks:
        return replace(game, phase=phase), PhaseOutcome()
    if not phase.queue:
        return replace(game, phase=phase), PhaseOutcome(finished=True)

    command, remaining = phase.queue[0], phase.queue[1:]
    player, result = execute_command(command, game.player, game.board)

    if isinstance(result.landed_on, TerrainKind):
        policy = terrain_effect(result.landed_on).queue_policy
        if policy == QueuePolicy.RETURN_TO_ORIGIN:
            remaining = (CommandKind.RETURN_TO_ORIGIN,)
        elif policy == QueuePolicy.DISCARD:
            remaining = ()

    logger.debug(
        "%s -> %s at %s facing %s, damage %d",
        command,
        result.landed_on,
        player.location,
        player.facing.name,
        result.damage,
    )
    return (
        replace(game, player=player, phase=replace(phase, queue=remaining)),
        PhaseOutcome(command=command, result=result),
    )


def _update_game_over(game: Game, rng: random.Random) -> Tuple[Game, PhaseOutcome]:
    phase = game.phase
    assert isinstance(phase, GameOver)
    phase = advance_ticks(phase)
    return replace(game, phase=phase), PhaseOutcome(
        finished=phase.ticks >= game.config.game_over_ticks
    )


def _update_map_completed(game: Game, rng: random.Random) -> Tuple[Game, PhaseOutcome]:
    phase = game.phase
    assert isinstance(phase, MapCompleted)
    phase = advance_ticks(phase)
    return replace(game, phase=phase), PhaseOutcome(
        finished=phase.ticks >= game.config.map_completed_ticks
    )


UPDATE_FN_REGISTRY: Dict[PhaseKind, UpdateFn] = {
    PhaseKind.TITLE_SCENE: _update_title_scene,
    PhaseKind.SETUP: _update_setup,
    PhaseKind.INPUT: _update_input,
    PhaseKind.EXECUTE_QUEUE: _update_execute_queue,
    PhaseKind.GAME_OVER: _update_game_over,
    PhaseKind.MAP_COMPLETED: _update_map_completed,
}


def update_phase(game: Game, rng: random.Random) -> Tuple[Game, PhaseOutcome]:
    """Run the active phase's handler.

    Raises:
        NotImplementedError: If the phase kind has no registered handler.
    """
    update_fn = UPDATE_FN_REGISTRY.get(game.phase.kind)
    if update_fn is None:
        raise NotImplementedError(f"No update handler for phase {game.phase.kind!r}")
    return update_fn(game, rng)


# -------------------------
# Phase entry
# -------------------------


def _enter_title_scene(
    game: Game, previous: Phase, rng: random.Random
) -> Tuple[Game, List[GameEvent]]:
    # Back to the title means a fresh session: new player, no progress.
    return (
        replace(
            game,
            phase=TitleScene(),
            player=create_player(game.config),
            board=None,
            completed_maps=0,
            turn=0,
        ),
        [],
    )


def _enter_setup(
    game: Game, previous: Phase, rng: random.Random
) -> Tuple[Game, List[GameEvent]]:
    return replace(game, phase=Setup()), []


def _enter_input(
    game: Game, previous: Phase, rng: random.Random
) -> Tuple[Game, List[GameEvent]]:
    offered = roll_dice(game.player, rng)
    return (
        replace(game, phase=Input(offered=offered), turn=game.turn + 1),
        [dice_offered(offered)],
    )


def _enter_execute_queue(
    game: Game, previous: Phase, rng: random.Random
) -> Tuple[Game, List[GameEvent]]:
    if not isinstance(previous, Input):
        raise ValueError(f"Execute phase must follow input, not {previous.kind}")
    player = replace(game.player, turn_start_location=game.player.location)
    return replace(game, player=player, phase=ExecuteQueue(queue=previous.queue)), []


def _enter_game_over(
    game: Game, previous: Phase, rng: random.Random
) -> Tuple[Game, List[GameEvent]]:
    logger.info("Game over after %d completed maps", game.completed_maps)
    return replace(game, phase=GameOver()), [game_over(game.completed_maps)]


def _enter_map_completed(
    game: Game, previous: Phase, rng: random.Random
) -> Tuple[Game, List[GameEvent]]:
    old_life = game.player.life
    player = heal(game.player, 1)
    completed = game.completed_maps + 1
    logger.info("Map completed (%d so far), life %d", completed, player.life)
    events = [map_completed(completed, player.life)]
    if player.life != old_life:
        events.insert(0, life_changed(old_life, player.life, player.max_life))
    return (
        replace(game, player=player, completed_maps=completed, phase=MapCompleted()),
        events,
    )


ENTER_FN_REGISTRY: Dict[PhaseKind, EnterFn] = {
    PhaseKind.TITLE_SCENE: _enter_title_scene,
    PhaseKind.SETUP: _enter_setup,
    PhaseKind.INPUT: _enter_input,
    PhaseKind.EXECUTE_QUEUE: _enter_execute_queue,
    PhaseKind.GAME_OVER: _enter_game_over,
    PhaseKind.MAP_COMPLETED: _enter_map_completed,
}

NEXT_PHASE: Dict[PhaseKind, PhaseKind] = {
    PhaseKind.TITLE_SCENE: PhaseKind.SETUP,
    PhaseKind.SETUP: PhaseKind.INPUT,
    PhaseKind.INPUT: PhaseKind.EXECUTE_QUEUE,
    PhaseKind.EXECUTE_QUEUE: PhaseKind.INPUT,
    PhaseKind.GAME_OVER: PhaseKind.TITLE_SCENE,
    PhaseKind.MAP_COMPLETED: PhaseKind.SETUP,
}
"""Successor of each phase when it finishes on its own."""


def enter_phase(
    game: Game, kind: PhaseKind, rng: random.Random
) -> Tuple[Game, List[GameEvent]]:
    """Leave the active phase and enter ``kind``.

    Raises:
        NotImplementedError: If ``kind`` has no registered entry handler.
    """
    enter_fn = ENTER_FN_REGISTRY.get(kind)
    if enter_fn is None:
        raise NotImplementedError(f"No entry handler for phase {kind!r}")
    previous = game.phase
    game, events = enter_fn(game, previous, rng)
    logger.debug("Phase %s -> %s", previous.kind, kind)
    return game, [phase_changed(str(previous.kind), str(kind)), *events]


# -------------------------
# Reducer
# -------------------------


def step(game: Game, rng: random.Random) -> Tuple[Game, TickResult]:
    """Advance the session by one tick.

    Args:
        game (Game): Current snapshot.
        rng (random.Random): Source for dice rolls and random boards.

    Returns:
        Tuple[Game, TickResult]: Next snapshot and the tick's report.
    """
    game = replace(game, tick=game.tick + 1)
    game, outcome = update_phase(game, rng)
    events: List[GameEvent] = list(outcome.events)
    damage = 0
    landed_on: Optional[LandedOn] = None
    next_kind: Optional[PhaseKind] = None

    if outcome.result is not None and outcome.command is not None:
        result = outcome.result
        landed_on = result.landed_on
        damage = result.damage
        old_life = game.player.life
        game = replace(game, player=apply_damage(game.player, damage))
        events.append(command_resolved(outcome.command, result, game.player))
        if game.player.life != old_life:
            events.append(
                life_changed(old_life, game.player.life, game.player.max_life)
            )

        if not game.player.alive:
            next_kind = PhaseKind.GAME_OVER
        elif game.board is not None and game.player.location == game.board.flag_location:
            next_kind = PhaseKind.MAP_COMPLETED

    if next_kind is None and outcome.finished:
        next_kind = NEXT_PHASE[game.phase.kind]

    if next_kind is not None:
        game, entered = enter_phase(game, next_kind, rng)
        events.extend(entered)

    return game, TickResult(
        damage=damage,
        landed_on=landed_on,
        state_finished=outcome.finished,
        command=outcome.command,
        phase=game.phase.kind,
        events=tuple(events),
    )
