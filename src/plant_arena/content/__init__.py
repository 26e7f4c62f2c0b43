"""Static game content: the category -> move catalog."""

from plant_arena.content.catalog import base_moves, default_catalog, load_catalog

__all__ = ["base_moves", "default_catalog", "load_catalog"]
