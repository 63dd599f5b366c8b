"""
Item catalog boundary and inventory helpers.

The catalog is an external collaborator: the engine only needs
``get(def_id) -> ItemDefinition | None``. ``ItemCatalog`` is the in-process
implementation used by scenarios and tests; any object with the same ``get``
method works (see ``ItemLookup``).

Raw definitions are normalized the same way the game's item file is read:
type names are lower-cased, numeric fields coerced, and missing fields
defaulted, so a sparse JSON entry still yields a usable definition.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Protocol, Tuple

from pydantic import BaseModel, Field, field_validator

from .schemas import Inventory, ItemStack


class ItemType:
    WEAPON = "weapon"
    PROTECTION = "protection"
    CONSUMABLE = "consumable"
    TRAP = "trap"
    UTILITY = "utility"


UNARMED_DAMAGE = 5.0

# Base values for definitions without an explicit ``value``
_TYPE_BASE_VALUES: Dict[str, float] = {
    ItemType.PROTECTION: 18.0,
    ItemType.CONSUMABLE: 10.0,
    ItemType.TRAP: 8.0,
    ItemType.UTILITY: 6.0,
}
_UNKNOWN_ITEM_VALUE = 1.0

_RESTORE_KEYS = ("restore_stamina", "restoreStamina", "restore_fp", "restoreFp")


class ItemDefinition(BaseModel):
    """Catalog entry describing one kind of item."""

    id: str = Field(..., min_length=1)
    type: str = Field("", description="weapon | protection | consumable | trap | utility")
    name: str = ""
    description: str = ""
    damage: Optional[float] = Field(None, description="Weapon damage per unit")
    uses: Optional[int] = Field(None, description="Uses per instance; None is unlimited")
    stackable: bool = False
    effects: Dict[str, Any] = Field(default_factory=dict)
    value: Optional[float] = Field(None, description="Explicit loot value override")

    @field_validator("type", mode="before")
    @classmethod
    def _normalize_type(cls, raw: Any) -> str:
        return str(raw or "").strip().lower()

    @field_validator("effects", mode="before")
    @classmethod
    def _default_effects(cls, raw: Any) -> Dict[str, Any]:
        return raw or {}

    @property
    def is_weapon(self) -> bool:
        return self.type == ItemType.WEAPON

    @property
    def stamina_restore(self) -> float:
        """Stamina restored by consuming one unit (0 for non-restoring items)."""
        for key in _RESTORE_KEYS:
            if key in self.effects:
                try:
                    return max(0.0, float(self.effects[key]))
                except (TypeError, ValueError):
                    return 0.0
        return 0.0


class ItemLookup(Protocol):
    """Anything that resolves a definition id to an ``ItemDefinition``."""

    def get(self, def_id: str) -> Optional[ItemDefinition]:
        ...


class ItemCatalog:
    """In-memory catalog keyed by definition id."""

    def __init__(self, definitions: Iterable[ItemDefinition] = ()):
        self._defs: Dict[str, ItemDefinition] = {d.id: d for d in definitions}

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "ItemCatalog":
        """Build a catalog from ``{key: definition}``; a missing ``id`` falls back to the key."""
        definitions: List[ItemDefinition] = []
        for key, entry in (raw or {}).items():
            if not isinstance(entry, dict):
                raise ValueError(f"Item definition '{key}' must be an object")
            definitions.append(ItemDefinition.model_validate({**entry, "id": entry.get("id") or key}))
        return cls(definitions)

    @classmethod
    def from_json(cls, path: Path) -> "ItemCatalog":
        return cls.from_dict(json.loads(Path(path).read_text()))

    def get(self, def_id: str) -> Optional[ItemDefinition]:
        return self._defs.get(def_id)

    def __contains__(self, def_id: object) -> bool:
        return def_id in self._defs

    def __len__(self) -> int:
        return len(self._defs)


# ----------------------------------------------------------------------------
# Weapon helpers
# ----------------------------------------------------------------------------


def weapon_damage(definition: Optional[ItemDefinition], qty: int = 1) -> float:
    """Damage of a weapon stack; stackable weapons scale with quantity."""
    if definition is None or not definition.is_weapon:
        return 0.0
    base = float(definition.damage or 0.0)
    if definition.stackable:
        return base * max(1, qty)
    return base


def strongest_weapon(
    inventory: Inventory, catalog: ItemLookup
) -> Optional[Tuple[ItemDefinition, float]]:
    """Return ``(definition, damage)`` of the hardest-hitting weapon carried, or None.

    Ties keep the first stack in inventory order.
    """
    best: Optional[Tuple[ItemDefinition, float]] = None
    for stack in inventory.items:
        definition = catalog.get(stack.def_id)
        if definition is None or not definition.is_weapon:
            continue
        dmg = weapon_damage(definition, stack.qty)
        if best is None or dmg > best[1]:
            best = (definition, dmg)
    return best


def best_weapon_damage(inventory: Inventory, catalog: ItemLookup) -> float:
    """Damage of the strongest carried weapon (0 when unarmed)."""
    best = strongest_weapon(inventory, catalog)
    return best[1] if best else 0.0


def is_damage_capable(definition: Optional[ItemDefinition], qty: int = 1) -> bool:
    return weapon_damage(definition, qty) > 0


def carries_weapon(inventory: Inventory, catalog: ItemLookup) -> bool:
    """True if any carried stack can deal damage."""
    return any(
        is_damage_capable(catalog.get(stack.def_id), stack.qty) for stack in inventory.items
    )


# ----------------------------------------------------------------------------
# Loot scoring
# ----------------------------------------------------------------------------


def item_value(stack: ItemStack, catalog: ItemLookup) -> float:
    """Base loot value of a stack.

    Explicit ``value`` wins; otherwise weapons are worth their damage and the
    other types use fixed bases (consumables add their stamina restore).
    """
    definition = catalog.get(stack.def_id)
    if definition is None:
        return _UNKNOWN_ITEM_VALUE
    if definition.value is not None:
        return float(definition.value)
    if definition.is_weapon:
        return weapon_damage(definition, stack.qty)
    base = _TYPE_BASE_VALUES.get(definition.type)
    if base is None:
        return _UNKNOWN_ITEM_VALUE
    if definition.type == ItemType.CONSUMABLE:
        return base + definition.stamina_restore
    return base


def stamina_restore_value(stack: ItemStack, catalog: ItemLookup) -> float:
    definition = catalog.get(stack.def_id)
    return definition.stamina_restore if definition else 0.0


def highest_index(values: List[float]) -> Optional[int]:
    """Index of the maximum value, first occurrence on ties; None for an empty list."""
    best_index: Optional[int] = None
    for index, value in enumerate(values):
        if best_index is None or value > values[best_index]:
            best_index = index
    return best_index
