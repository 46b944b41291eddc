"""
Game events for presentation hooks and logging.
Events describe what happened during a tick; the core never draws, plays
sounds or opens dialogs itself.
"""

from dataclasses import dataclass
from typing import Any, Optional, Sequence

from robot_racing.board import Board, board_to_terrain_names
from robot_racing.commands import CommandResult
from robot_racing.components import Player
from robot_racing.types import CommandKind


@dataclass
class GameEvent:
    """Base event class. All events have a type and payload."""
    type: str
    payload: dict[str, Any]

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "payload": self.payload}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GameEvent":
        return cls(type=data["type"], payload=data["payload"])


# ===== Event Type Constants =====

PHASE_CHANGED = "phase_changed"
BOARD_READY = "board_ready"
DICE_OFFERED = "dice_offered"
COMMAND_CHOSEN = "command_chosen"
COMMAND_RESOLVED = "command_resolved"
LIFE_CHANGED = "life_changed"
MAP_COMPLETED = "map_completed"
GAME_OVER = "game_over"


# ===== Event Factory Functions =====

def _player_payload(player: Player) -> dict[str, Any]:
    return {
        "row": player.location.row,
        "column": player.location.column,
        "facing": int(player.facing),
        "life": player.life,
        "sprite": player.sprite,
    }


def phase_changed(old_phase: str, new_phase: str) -> GameEvent:
    return GameEvent(PHASE_CHANGED, {
        "old_phase": old_phase,
        "new_phase": new_phase,
    })


def board_ready(board: Board, map_number: int) -> GameEvent:
    return GameEvent(BOARD_READY, {
        "map_number": map_number,
        "rows": board.rows,
        "columns": board.columns,
        "terrain": board_to_terrain_names(board),
        "variants": [[cell.variant for cell in row] for row in board.cells],
        "start": (board.starting_location.row, board.starting_location.column),
        "flag": (board.flag_location.row, board.flag_location.column),
    })


def dice_offered(offered: Sequence[CommandKind]) -> GameEvent:
    return GameEvent(DICE_OFFERED, {
        "options": [str(kind) for kind in offered],
    })


def command_chosen(index: int, command: CommandKind, queue_length: int) -> GameEvent:
    return GameEvent(COMMAND_CHOSEN, {
        "index": index,
        "command": str(command),
        "queue_length": queue_length,
    })


def command_resolved(
    command: CommandKind, result: CommandResult, player: Player
) -> GameEvent:
    landed_on: Optional[str] = None if result.landed_on is None else str(result.landed_on)
    return GameEvent(COMMAND_RESOLVED, {
        "command": str(command),
        "damage": result.damage,
        "landed_on": landed_on,
        "continue_move": result.continue_move,
        "player": _player_payload(player),
    })


def life_changed(old_life: int, new_life: int, max_life: int) -> GameEvent:
    return GameEvent(LIFE_CHANGED, {
        "old_life": old_life,
        "new_life": new_life,
        "max_life": max_life,
    })


def map_completed(completed_maps: int, life: int) -> GameEvent:
    return GameEvent(MAP_COMPLETED, {
        "completed_maps": completed_maps,
        "life": life,
    })


def game_over(completed_maps: int) -> GameEvent:
    return GameEvent(GAME_OVER, {
        "completed_maps": completed_maps,
    })
