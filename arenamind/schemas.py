"""
Pydantic schemas for the Arenamind decision engine.

All data structures read or produced by a day pass are defined here.

Design Philosophy:
- The world snapshot is read-only during a pass; only an actor's own ``memory``
  is written, and only while that actor is being processed
- Actor memory is an explicit record (no free-form bag), with ``begin_day()``
  clearing the per-day flags
- Intents are a tagged union keyed by ``type``; required payload fields are
  validated at construction
- Missing optional substructures default to empty values so reads never fail
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Dict, Iterator, List, Literal, Optional, Set, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, TypeAdapter

from .config import Config


FULL_HP = 100.0
FULL_STAMINA = 70.0


# ============================================================================
# Items and inventory
# ============================================================================


class ItemStack(BaseModel):
    """One occupied inventory slot or one pile on the ground."""

    def_id: str = Field(..., description="Item definition id (catalog key)")
    # Stackable items (e.g. throwing knives) keep their count here; others stay at 1
    qty: int = Field(1, ge=1, description="Stack size")
    uses_left: Optional[int] = Field(None, description="Remaining uses; None means unlimited")
    meta: Dict[str, Any] = Field(default_factory=dict, description="Instance metadata")


class EquippedRefs(BaseModel):
    """References to the equipped weapon/defense definitions."""

    weapon_def_id: Optional[str] = None
    defense_def_id: Optional[str] = None


class Inventory(BaseModel):
    """Bounded list of item stacks plus equipped references."""

    items: List[ItemStack] = Field(default_factory=list, description="Carried stacks")
    equipped: EquippedRefs = Field(default_factory=EquippedRefs)

    @property
    def occupancy(self) -> int:
        """Slots in use; each stack occupies one slot regardless of quantity."""
        return len(self.items)

    @property
    def is_empty(self) -> bool:
        return not self.items

    @property
    def is_full(self) -> bool:
        return self.occupancy >= Config.INVENTORY_LIMIT


# ============================================================================
# Actors
# ============================================================================


class Attributes(BaseModel):
    """Combat attributes. Absent values read as 0."""

    model_config = ConfigDict(populate_by_name=True)

    force: float = Field(0, validation_alias=AliasChoices("force", "F"))
    dexterity: float = Field(0, validation_alias=AliasChoices("dexterity", "D"))
    perception: float = Field(0, validation_alias=AliasChoices("perception", "P"))


class Traits(BaseModel):
    """Fixed personality scalars; computed once and never changed."""

    model_config = ConfigDict(frozen=True)

    aggression: float = Field(..., ge=0.0, le=1.0)
    greed: float = Field(..., ge=0.0, le=1.0)
    caution: float = Field(..., ge=0.0, le=1.0)


class ActorMemory(BaseModel):
    """Persistent per-actor memory owned by the actor.

    Persistent fields survive across days (traits, visited, recent_areas,
    empty_handed_attempts). Transient fields (committed_today, wants_to_flee)
    are reset by ``begin_day()`` before any decision of the day runs.
    """

    traits: Optional[Traits] = Field(None, description="Cached traits (set on first use)")
    # Grows monotonically: knowledge of an area is never forgotten
    visited: Set[int] = Field(default_factory=set, description="Area ids seen in person")
    recent_areas: List[int] = Field(
        default_factory=list, description="Ring buffer of the last occupied area ids"
    )
    committed_today: bool = Field(False, description="A collection was chosen today")
    wants_to_flee: bool = Field(False, description="Low-health flee flag for today")
    empty_handed_attempts: int = Field(
        0, ge=0, description="Days spent empty-handed at the looted staging area"
    )

    def begin_day(self) -> None:
        """Clear per-day transient flags."""
        self.committed_today = False
        self.wants_to_flee = False

    def record_visit(self, area_id: int) -> None:
        """Remember ``area_id`` as visited and push it onto the recent-areas ring."""
        self.visited.add(area_id)
        if self.recent_areas and self.recent_areas[-1] == area_id:
            return
        self.recent_areas.append(area_id)
        overflow = len(self.recent_areas) - Config.RECENT_AREAS_LIMIT
        if overflow > 0:
            del self.recent_areas[:overflow]


class Actor(BaseModel):
    """A combatant (NPC or the human-controlled player)."""

    id: str = Field(..., description="Unique actor identifier")
    name: Optional[str] = Field(None, description="Display name")
    hp: float = Field(FULL_HP, description="Health points (0-100)")
    # Stamina ("fp") refills to 70 at the staging area
    stamina: float = Field(
        FULL_STAMINA, validation_alias=AliasChoices("stamina", "fp"), description="Stamina"
    )
    district: Optional[int] = Field(None, description="Home district")
    area_id: int = Field(..., description="Current area id")
    inventory: Inventory = Field(default_factory=Inventory)
    attributes: Attributes = Field(
        default_factory=Attributes, validation_alias=AliasChoices("attributes", "attrs")
    )
    memory: ActorMemory = Field(default_factory=ActorMemory)
    trapped_days: int = Field(0, ge=0, description="Days left caught in a trap")
    # Transient per-day flags set by the executor
    stealth_active: bool = Field(False, description="Invisible to everyone today")
    shield_active: bool = Field(False, description="Shield-defense active today")

    model_config = ConfigDict(populate_by_name=True)

    @property
    def is_alive(self) -> bool:
        return self.hp > 0

    @property
    def hp_pct(self) -> float:
        """Health as a percentage of full health, clamped to [0, 100]."""
        return max(0.0, min(100.0, self.hp / FULL_HP * 100.0))


# ============================================================================
# Map
# ============================================================================


class ThreatClass(str, Enum):
    SAFE = "safe"
    NEUTRAL = "neutral"
    THREATENING = "threatening"


class NoiseLevel(str, Enum):
    QUIET = "quiet"
    NOISY = "noisy"
    HIGHLY_NOISY = "highly_noisy"


class ActiveElement(BaseModel):
    """Something present in an area: a creature, a resource, or a structure."""

    kind: Literal["creature", "resource", "structure"] = Field(..., description="Element kind")
    name: str = Field("", description="Element name")


class Area(BaseModel):
    """One node of the arena graph."""

    id: int = Field(..., description="Area id")
    biome: str = Field("plains", description="Biome label")
    threat_class: ThreatClass = Field(ThreatClass.NEUTRAL, description="Danger rating")
    has_water: bool = False
    has_bridge: bool = False
    has_food: bool = False
    ground_items: List[ItemStack] = Field(default_factory=list, description="Items on the ground")
    active_elements: List[ActiveElement] = Field(default_factory=list)
    noise_level: NoiseLevel = Field(NoiseLevel.QUIET, description="Ambient noise")
    will_close_on_day: Optional[int] = Field(None, description="Day the area closes")
    is_active: bool = Field(True, description="False once the area has closed")

    @property
    def creature_count(self) -> int:
        return sum(1 for element in self.active_elements if element.kind == "creature")

    @property
    def is_enterable(self) -> bool:
        """Water areas can only be entered across a bridge."""
        return self.is_active and (not self.has_water or self.has_bridge)


class GameMap(BaseModel):
    """Areas and their adjacency lists, keyed by area id."""

    areas_by_id: Dict[int, Area] = Field(default_factory=dict)
    adj_by_id: Dict[int, List[int]] = Field(default_factory=dict)
    staging_area_id: int = Field(default_factory=lambda: Config.STAGING_AREA_ID)

    def area(self, area_id: int) -> Optional[Area]:
        return self.areas_by_id.get(area_id)

    def neighbors(self, area_id: int) -> List[int]:
        return self.adj_by_id.get(area_id, [])


# ============================================================================
# World snapshot
# ============================================================================


class WorldMeta(BaseModel):
    seed: Union[int, str] = Field(..., description="World seed")
    day: int = Field(1, ge=0, description="Current day (1-based)")


class Entities(BaseModel):
    player: Optional[Actor] = Field(None, description="Human-controlled actor")
    # Insertion order is the registry order used by the day pass
    npcs: Dict[str, Actor] = Field(default_factory=dict)


class WorldSnapshot(BaseModel):
    """Frozen-for-reads world state at the start of a day."""

    meta: WorldMeta
    map: GameMap = Field(default_factory=GameMap)
    entities: Entities = Field(default_factory=Entities)

    @property
    def seed(self) -> Union[int, str]:
        return self.meta.seed

    @property
    def day(self) -> int:
        return self.meta.day

    def all_actors(self) -> Iterator[Actor]:
        """Player first (if any), then NPCs in registry order."""
        if self.entities.player is not None:
            yield self.entities.player
        yield from self.entities.npcs.values()

    def get_actor(self, actor_id: str) -> Optional[Actor]:
        player = self.entities.player
        if player is not None and player.id == actor_id:
            return player
        return self.entities.npcs.get(actor_id)

    def is_player(self, actor_id: str) -> bool:
        return self.entities.player is not None and self.entities.player.id == actor_id

    def occupants(self, area_id: int, *, exclude: Optional[str] = None) -> List[Actor]:
        """Living, non-stealthed actors in ``area_id`` (optionally excluding one id)."""
        return [
            actor
            for actor in self.all_actors()
            if actor.is_alive
            and actor.area_id == area_id
            and not actor.stealth_active
            and actor.id != exclude
        ]


# ============================================================================
# Perception
# ============================================================================


class NeighborSummary(BaseModel):
    """What an actor knows about an adjacent area.

    Unknown (never visited) neighbors expose only ``id`` and ``is_active``;
    every other field stays None.
    """

    id: int
    is_active: bool
    known: bool = False
    biome: Optional[str] = None
    threat_class: Optional[ThreatClass] = None
    will_close_on_day: Optional[int] = None
    has_food: Optional[bool] = None
    has_water: Optional[bool] = None
    ground_item_count: Optional[int] = None
    creature_count: Optional[int] = None


class ObservedWorld(BaseModel):
    """Ephemeral, bounded view of the world for one actor-day."""

    day: int = Field(..., ge=0)
    actor_id: str
    current_area: Area = Field(..., description="Full detail copy of the current area")
    colocated: List[Actor] = Field(
        default_factory=list, description="Visible living actors sharing the area"
    )
    neighbors: List[NeighborSummary] = Field(default_factory=list)


# ============================================================================
# Intents
# ============================================================================


class IntentType(str, Enum):
    ATTACK = "ATTACK"
    DEFEND = "DEFEND"
    NOTHING = "NOTHING"
    DRINK = "DRINK"
    COLLECT = "COLLECT"
    MOVE = "MOVE"
    STAY = "STAY"
    # Reserved: no rule produces it yet
    SET_TRAP = "SET_TRAP"


class _IntentBase(BaseModel):
    model_config = ConfigDict(frozen=True)

    source: str = Field(..., min_length=1, description="Acting actor id")


class AttackIntent(_IntentBase):
    type: Literal["ATTACK"] = "ATTACK"
    target_id: str = Field(..., min_length=1)


class DefendIntent(_IntentBase):
    type: Literal["DEFEND"] = "DEFEND"


class NothingIntent(_IntentBase):
    type: Literal["NOTHING"] = "NOTHING"
    reason: Optional[str] = None


class DrinkIntent(_IntentBase):
    type: Literal["DRINK"] = "DRINK"


class CollectIntent(_IntentBase):
    type: Literal["COLLECT"] = "COLLECT"
    item_index: int = Field(..., ge=0, description="Index into the area's ground items")


class MoveIntent(_IntentBase):
    type: Literal["MOVE"] = "MOVE"
    route: List[int] = Field(..., min_length=1, description="Ordered area ids, start excluded")


class StayIntent(_IntentBase):
    type: Literal["STAY"] = "STAY"
    reason: Optional[str] = None


class SetTrapIntent(_IntentBase):
    type: Literal["SET_TRAP"] = "SET_TRAP"
    item_index: Optional[int] = Field(None, ge=0)


Intent = Annotated[
    Union[
        AttackIntent,
        DefendIntent,
        NothingIntent,
        DrinkIntent,
        CollectIntent,
        MoveIntent,
        StayIntent,
        SetTrapIntent,
    ],
    Field(discriminator="type"),
]

PostureIntent = Union[AttackIntent, DefendIntent, NothingIntent, DrinkIntent, CollectIntent]
MovementIntent = Union[MoveIntent, StayIntent]

_INTENT_ADAPTER: TypeAdapter = TypeAdapter(Intent)


def parse_intent(data: Dict[str, Any]) -> Intent:
    """Validate a raw ``{"source", "type", ...}`` dict into its intent variant."""
    return _INTENT_ADAPTER.validate_python(data)
