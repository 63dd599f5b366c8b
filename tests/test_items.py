"""Tests for the item catalog and inventory helpers."""

import pytest

from arenamind.items import (
    ItemCatalog,
    best_weapon_damage,
    carries_weapon,
    highest_index,
    item_value,
    stamina_restore_value,
    strongest_weapon,
    weapon_damage,
)
from arenamind.schemas import Inventory, ItemStack


def test_catalog_normalizes_sparse_definitions():
    catalog = ItemCatalog.from_dict(
        {
            "bow": {"type": " Weapon ", "damage": "18"},
            "pebble": {},
            "jerky": {"type": "consumable", "effects": {"restoreFp": 15}},
            "tonic": {"type": "consumable", "effects": None},
        }
    )

    bow = catalog.get("bow")
    assert bow.id == "bow"
    assert bow.is_weapon
    assert bow.damage == 18.0
    assert catalog.get("pebble").type == ""
    assert catalog.get("jerky").stamina_restore == 15
    assert catalog.get("tonic").effects == {}
    assert "bow" in catalog and "sword" not in catalog
    assert len(catalog) == 4


def test_catalog_rejects_non_object_entries():
    with pytest.raises(ValueError):
        ItemCatalog.from_dict({"sword": "sharp"})


def test_stackable_weapons_scale_with_quantity(catalog):
    assert weapon_damage(catalog.get("throwing_knife"), 3) == 18
    assert weapon_damage(catalog.get("sword"), 3) == 30
    assert weapon_damage(catalog.get("rope")) == 0
    assert weapon_damage(None) == 0


def test_strongest_weapon_prefers_first_on_ties(catalog):
    inventory = Inventory(
        items=[
            ItemStack(def_id="rope"),
            ItemStack(def_id="bow"),
            ItemStack(def_id="throwing_knife", qty=3),
            ItemStack(def_id="knife"),
        ]
    )

    definition, damage = strongest_weapon(inventory, catalog)
    assert definition.id == "bow"
    assert damage == 18
    assert best_weapon_damage(inventory, catalog) == 18
    assert carries_weapon(inventory, catalog)


def test_unarmed_inventory(catalog):
    inventory = Inventory(items=[ItemStack(def_id="rope"), ItemStack(def_id="mystery")])
    assert strongest_weapon(inventory, catalog) is None
    assert best_weapon_damage(inventory, catalog) == 0
    assert not carries_weapon(inventory, catalog)


@pytest.mark.parametrize(
    "def_id,qty,expected",
    [
        ("sword", 1, 30),
        ("throwing_knife", 2, 12),
        ("shield", 1, 18),
        ("bread", 1, 30),
        ("bandage", 1, 10),
        ("snare", 1, 8),
        ("rope", 1, 6),
        ("medallion", 1, 40),
        ("mystery", 1, 1),
    ],
)
def test_item_value(catalog, def_id, qty, expected):
    assert item_value(ItemStack(def_id=def_id, qty=qty), catalog) == expected


def test_stamina_restore_value(catalog):
    assert stamina_restore_value(ItemStack(def_id="bread"), catalog) == 20
    assert stamina_restore_value(ItemStack(def_id="water_flask"), catalog) == 10
    assert stamina_restore_value(ItemStack(def_id="sword"), catalog) == 0
    assert stamina_restore_value(ItemStack(def_id="mystery"), catalog) == 0


def test_highest_index():
    assert highest_index([]) is None
    assert highest_index([1.0, 3.0, 3.0, 2.0]) == 1
