"""Life total helpers."""

from dataclasses import replace

from robot_racing.components import Player


def apply_damage(player: Player, damage: int) -> Player:
    """Subtract ``damage`` from the player's life, clamping at zero."""
    if damage < 0:
        raise ValueError(f"Damage must not be negative: {damage}")
    if damage == 0:
        return player
    return replace(player, life=max(0, player.life - damage))


def heal(player: Player, amount: int = 1) -> Player:
    """Add life, never past ``max_life``."""
    if amount < 0:
        raise ValueError(f"Heal amount must not be negative: {amount}")
    return replace(player, life=min(player.max_life, player.life + amount))
