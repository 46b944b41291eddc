"""Game configuration.

``GameConfig`` is an immutable value built once at startup and handed to the
``GameManager``; every component reads the settings it needs from it rather
than from module globals.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from typing import Any, Dict, Mapping, Optional, Tuple

from robot_racing.errors import ConfigError
from robot_racing.levels.fixed_maps import DEFAULT_FIXED_MAPS, FixedMap
from robot_racing.types import TerrainKind


@dataclass(frozen=True)
class TerrainThresholds:
    """Cut points on a uniform ``[0, 1)`` draw, lowest to highest.

    A draw below ``water`` is grass; ``[water, rock)`` water; ``[rock, lava)``
    rock; ``>= lava`` lava.
    """

    water: float = 0.70
    rock: float = 0.85
    lava: float = 0.95

    def __post_init__(self) -> None:
        if not 0.5 <= self.water <= self.rock <= self.lava <= 1.0:
            raise ConfigError(
                "Terrain thresholds must satisfy 0.5 <= water <= rock <= lava <= 1.0, "
                f"got {self.water}, {self.rock}, {self.lava}"
            )

    def classify(self, draw: float) -> TerrainKind:
        if draw >= self.lava:
            return TerrainKind.LAVA
        if draw >= self.rock:
            return TerrainKind.ROCK
        if draw >= self.water:
            return TerrainKind.WATER
        return TerrainKind.GRASS


def _load_fixed_map(data: Any) -> FixedMap:
    if isinstance(data, FixedMap):
        return data
    return FixedMap(
        name=data["name"],
        terrain=tuple(
            tuple(str(TerrainKind(name)) for name in row) for row in data["terrain"]
        ),
    )


@dataclass(frozen=True)
class GameConfig:
    """Session settings.

    Attributes:
        rows: Height of random boards.
        columns: Width of random boards.
        starting_life: Life at the start of a session.
        max_life: Life cap (map completion never heals past it).
        dice_pool_size: Dice rolled at every input phase.
        commands_per_turn: Options the player must choose before executing.
        tick_period: Seconds between ticks of the manager loop.
        settle_ticks: Idle ticks at the start of the execute phase.
        game_over_ticks: Ticks the game-over screen stays up.
        map_completed_ticks: Ticks the map-completed screen stays up.
        thresholds: Terrain rarity for random boards.
        fixed_maps: Authored maps played before random boards, easiest first.
        random_after: Completed maps after which boards are random.
        player_name: Display name for the player.
        seed: Seed for the session RNG; ``None`` draws from system entropy.
    """

    rows: int = 20
    columns: int = 20
    starting_life: int = 3
    max_life: int = 5
    dice_pool_size: int = 5
    commands_per_turn: int = 3
    tick_period: float = 0.25
    settle_ticks: int = 2
    game_over_ticks: int = 8
    map_completed_ticks: int = 8
    thresholds: TerrainThresholds = field(default_factory=TerrainThresholds)
    fixed_maps: Tuple[FixedMap, ...] = DEFAULT_FIXED_MAPS
    random_after: int = len(DEFAULT_FIXED_MAPS)
    player_name: str = "Robot"
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        if self.rows < 1 or self.columns < 1:
            raise ConfigError(f"Board must be at least 1x1, got {self.rows}x{self.columns}")
        if not 1 <= self.starting_life <= self.max_life:
            raise ConfigError("starting_life must be between 1 and max_life")
        if self.commands_per_turn < 1:
            raise ConfigError("commands_per_turn must be positive")
        if self.dice_pool_size < self.commands_per_turn:
            raise ConfigError("dice_pool_size must be at least commands_per_turn")
        if self.tick_period <= 0:
            raise ConfigError("tick_period must be positive")
        for name in ("settle_ticks", "game_over_ticks", "map_completed_ticks", "random_after"):
            if getattr(self, name) < 0:
                raise ConfigError(f"{name} must not be negative")
        if self.random_after > 0 and not self.fixed_maps:
            raise ConfigError("fixed_maps is empty but random_after > 0")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "GameConfig":
        """Build a config from plain data (e.g. parsed JSON).

        ``thresholds`` may be a mapping; ``fixed_maps`` a list of
        ``{"name": ..., "terrain": [[...], ...]}`` mappings.

        Raises:
            ConfigError: On unknown keys or invalid values.
        """
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ConfigError(f"Unknown config keys: {sorted(unknown)}")
        values: Dict[str, Any] = dict(data)
        try:
            if isinstance(values.get("thresholds"), Mapping):
                values["thresholds"] = TerrainThresholds(**values["thresholds"])
            if "fixed_maps" in values:
                values["fixed_maps"] = tuple(
                    _load_fixed_map(m) for m in values["fixed_maps"]
                )
            return cls(**values)
        except ConfigError:
            raise
        except (KeyError, TypeError, ValueError) as exc:
            raise ConfigError(f"Invalid config: {exc}") from exc

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["fixed_maps"] = [
            {"name": m.name, "terrain": [list(row) for row in m.terrain]}
            for m in self.fixed_maps
        ]
        return data
