"""Decision context shared by the posture and movement phases."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .items import ItemLookup, best_weapon_damage, carries_weapon
from .oracle import hash_unit
from .schemas import Actor, ObservedWorld, Traits, WorldSnapshot


@dataclass
class DecisionContext:
    """Everything one actor-day decision reads.

    ``world`` is the frozen day-start snapshot; ``actor`` is that snapshot's
    actor record (its ``memory`` is the only thing decisions write);
    ``observed`` is the perception built for this actor-day.
    """

    world: WorldSnapshot
    actor: Actor
    observed: ObservedWorld
    catalog: ItemLookup
    traits: Traits

    @property
    def seed(self) -> Union[int, str]:
        return self.world.seed

    @property
    def day(self) -> int:
        return self.world.day

    @property
    def hp_pct(self) -> float:
        return self.actor.hp_pct

    @property
    def at_staging_area(self) -> bool:
        return self.actor.area_id == self.world.map.staging_area_id

    @property
    def armed(self) -> bool:
        return carries_weapon(self.actor.inventory, self.catalog)

    @property
    def best_weapon_damage(self) -> float:
        return best_weapon_damage(self.actor.inventory, self.catalog)

    def draw(self, salt: str) -> float:
        """Oracle draw for this world seed and day."""
        return hash_unit(self.seed, self.day, salt)
