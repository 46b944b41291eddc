"""Command line tools for authoring and debugging.

Usage::

    python -m robot_racing export-board --rows 12 --columns 12 --seed 7
    python -m robot_racing render-board --tier 1 --output creek.png
    python -m robot_racing simulate --seed 3 --ticks 500 -v
"""

import argparse
import json
import logging
import random
import sys
from typing import List, Optional

from robot_racing.board import Board, board_to_terrain_names
from robot_racing.config import GameConfig
from robot_racing.events import GameEvent
from robot_racing.levels.fixed_maps import build_fixed_board
from robot_racing.levels.generator import generate_random_board
from robot_racing.manager import GameManager
from robot_racing.phases import Input, TitleScene
from robot_racing.renderer import DEFAULT_TILE_SIZE, BoardRenderer

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False) -> None:
    """Configure logging based on verbosity level."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


def _make_board(args: argparse.Namespace) -> Board:
    if args.tier is not None:
        return build_fixed_board(args.tier)
    return generate_random_board(args.rows, args.columns, rng=random.Random(args.seed))


def cmd_export_board(args: argparse.Namespace) -> int:
    board = _make_board(args)
    payload = {
        "rows": board.rows,
        "columns": board.columns,
        "start": [board.starting_location.row, board.starting_location.column],
        "flag": [board.flag_location.row, board.flag_location.column],
        "terrain": board_to_terrain_names(board),
    }
    json.dump(payload, sys.stdout, indent=args.indent)
    sys.stdout.write("\n")
    return 0


def cmd_render_board(args: argparse.Namespace) -> int:
    board = _make_board(args)
    renderer = BoardRenderer(board.rows, board.columns, args.tile_size)
    renderer.render(board).save(args.output)
    logger.info("Wrote %dx%d board to %s", board.rows, board.columns, args.output)
    return 0


def cmd_simulate(args: argparse.Namespace) -> int:
    """Play one session with random picks until game over or the tick limit."""
    config = GameConfig(seed=args.seed, rows=args.rows, columns=args.columns)
    manager = GameManager(config)
    picker = random.Random(args.seed)

    def log_event(event: GameEvent) -> None:
        logger.debug("%s %s", event.type, event.payload)

    manager.subscribe(log_event)
    manager.press_start()
    ticks = 0
    while ticks < args.ticks:
        phase = manager.phase
        if isinstance(phase, Input) and len(phase.chosen) < config.commands_per_turn:
            free = [i for i in range(len(phase.offered)) if i not in phase.chosen]
            manager.choose_command(picker.choice(free))
            continue
        manager.tick()
        ticks += 1
        if isinstance(manager.phase, TitleScene):
            break

    print(
        json.dumps(
            {
                "ticks": ticks,
                "completed_maps": manager.completed_maps,
                "life": manager.player.life,
                "phase": str(manager.phase.kind),
            }
        )
    )
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="robot_racing", description="Robot Racing rules engine tools"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    board_args = argparse.ArgumentParser(add_help=False)
    board_args.add_argument("--rows", type=int, default=GameConfig.rows)
    board_args.add_argument("--columns", type=int, default=GameConfig.columns)
    board_args.add_argument("--seed", type=int, default=None)
    board_args.add_argument(
        "--tier", type=int, default=None, help="Use a fixed map instead of a random one"
    )

    export = subparsers.add_parser(
        "export-board", parents=[board_args], help="Print a board as terrain names"
    )
    export.add_argument("--indent", type=int, default=None)
    export.set_defaults(func=cmd_export_board)

    render = subparsers.add_parser(
        "render-board", parents=[board_args], help="Save a board as a PNG"
    )
    render.add_argument("--output", required=True)
    render.add_argument("--tile-size", type=int, default=DEFAULT_TILE_SIZE)
    render.set_defaults(func=cmd_render_board)

    simulate = subparsers.add_parser("simulate", help="Run a headless session")
    simulate.add_argument("--rows", type=int, default=GameConfig.rows)
    simulate.add_argument("--columns", type=int, default=GameConfig.columns)
    simulate.add_argument("--seed", type=int, default=None)
    simulate.add_argument("--ticks", type=int, default=1000)
    simulate.set_defaults(func=cmd_simulate)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)
    return args.func(args)
