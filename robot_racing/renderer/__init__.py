from .board import DEFAULT_TILE_SIZE, TERRAIN_COLORS, BoardRenderer

__all__ = ["BoardRenderer", "DEFAULT_TILE_SIZE", "TERRAIN_COLORS"]
