"""Tests for the category -> move catalog."""

import json

import pytest

from plant_arena.content.catalog import (
    _DEFAULT_CATALOG_PATH,
    base_moves,
    default_catalog,
    load_catalog,
)
from plant_arena.core.entities import Category, MoveType


class TestDefaultCatalog:
    def test_every_category_present(self):
        catalog = default_catalog()
        assert set(catalog) == set(Category)

    @pytest.mark.parametrize("category", list(Category))
    def test_category_layout(self, category):
        moves = default_catalog()[category]
        types = [m.type for m in moves]

        assert len(moves) == 4
        assert types.count(MoveType.ATTACK) == 2
        assert types.count(MoveType.DEFENSE) == 1
        assert types.count(MoveType.HEAL) == 1

    @pytest.mark.parametrize("category", list(Category))
    def test_template_ranges(self, category):
        moves = default_catalog()[category]
        attacks = [m for m in moves if m.type == MoveType.ATTACK]
        defense = next(m for m in moves if m.type == MoveType.DEFENSE)
        heal = next(m for m in moves if m.type == MoveType.HEAL)

        assert (attacks[0].power, attacks[0].cost) != (attacks[1].power, attacks[1].cost)
        assert all(a.cost > 0 for a in attacks)
        assert 0.45 <= defense.power <= 0.6
        assert 18 <= heal.power <= 23
        assert defense.cost == 0 and heal.cost == 0

    def test_catalog_is_read_only(self):
        with pytest.raises(TypeError):
            default_catalog()[Category.HERBS] = ()

    def test_loaded_once(self):
        assert default_catalog() is default_catalog()


class TestBaseMoves:
    def test_known_category(self):
        assert base_moves(Category.SUCCULENTS) == default_catalog()[Category.SUCCULENTS]

    def test_string_category(self):
        assert base_moves("flowers") == default_catalog()[Category.FLOWERS]

    def test_unknown_or_missing_falls_back_to_herbs(self):
        herbs = default_catalog()[Category.HERBS]
        assert base_moves("cactus-ish") == herbs
        assert base_moves(None) == herbs


class TestLoadCatalog:
    def test_rejects_missing_categories(self, tmp_path):
        path = tmp_path / "catalog.json"
        path.write_text(json.dumps({"herbs": []}))
        with pytest.raises(ValueError):
            load_catalog(path)

    def test_rejects_bad_layout(self, tmp_path):
        raw = json.loads(_DEFAULT_CATALOG_PATH.read_text(encoding="utf-8"))
        # Swap the heal for a third attack
        raw["herbs"] = [m for m in raw["herbs"] if m["type"] != "heal"] + [
            {"name": "Extra", "type": "attack", "power": 5, "cost": 5}
        ]
        path = tmp_path / "catalog.json"
        path.write_text(json.dumps(raw))
        with pytest.raises(ValueError):
            load_catalog(path)
