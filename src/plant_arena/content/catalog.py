"""Move catalog -- maps each plant category to its base move list.

The catalog is loaded once from ``data/move_catalog.json`` and exposed as
an immutable mapping of :class:`Category` to a tuple of template
:class:`Move` objects.  Templates are never scaled in place; per-combatant
copies are produced by :func:`plant_arena.mechanics.moves.generate_moves`.
"""

from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

from plant_arena.core.entities import Category, Move, MoveType

_DEFAULT_CATALOG_PATH = Path(__file__).resolve().parent / "data" / "move_catalog.json"

FALLBACK_CATEGORY = Category.HERBS


def _parse_catalog(raw: dict[str, Any]) -> dict[Category, tuple[Move, ...]]:
    """Validate raw JSON and convert it into category -> move tuples."""
    catalog: dict[Category, tuple[Move, ...]] = {}
    for key, moves_raw in raw.items():
        category = Category(key)
        moves = tuple(Move(**m) for m in moves_raw)
        _check_move_layout(category, moves)
        catalog[category] = moves

    missing = [c.value for c in Category if c not in catalog]
    if missing:
        raise ValueError(f"Move catalog is missing categories: {missing}")
    return catalog


def _check_move_layout(category: Category, moves: tuple[Move, ...]) -> None:
    types = [m.type for m in moves]
    expected = [MoveType.ATTACK, MoveType.ATTACK, MoveType.DEFENSE, MoveType.HEAL]
    if sorted(types) != sorted(expected):
        raise ValueError(
            f"Category {category.value!r} must define two attacks, one defense "
            f"and one heal, got {[t.value for t in types]}"
        )


def load_catalog(path: Path = _DEFAULT_CATALOG_PATH) -> Mapping[Category, tuple[Move, ...]]:
    """Load a move catalog from *path* into a read-only mapping."""
    raw = json.loads(path.read_text(encoding="utf-8"))
    return MappingProxyType(_parse_catalog(raw))


@lru_cache(maxsize=1)
def default_catalog() -> Mapping[Category, tuple[Move, ...]]:
    """Return the packaged catalog, loading it on first use."""
    return load_catalog()


def base_moves(
    category: Category | str | None,
    catalog: Mapping[Category, tuple[Move, ...]] | None = None,
) -> tuple[Move, ...]:
    """Return the template moves for *category*.

    Unknown or missing categories fall back to the herbs table.
    """
    table = catalog if catalog is not None else default_catalog()
    resolved = Category.parse(category) if category is not None else FALLBACK_CATEGORY
    return table.get(resolved, table[FALLBACK_CATEGORY])
