"""
Arenamind - deterministic NPC decision engine for battle-royale day simulations.

Once per in-game day, every living non-player combatant perceives a bounded
view of the arena, picks one posture action and one movement action, and the
engine returns the resulting intents for an external turn executor.

Fully reproducible: every random choice is a pure function of (seed, day, salt).
No global random state. No I/O in the decision path.
"""

__version__ = "0.1.0"

# Main entry points
from .engine import DecisionEngine, ConcurrentPassError, generate_npc_intents

# Decision phases
from .context import DecisionContext
from .perception import build_observed_world
from .posture import decide_posture, evaluate_combat
from .movement import decide_movement
from .scoring import score_area
from .traits import compute_traits, ensure_traits
from .oracle import hash_unit

# Items
from .items import ItemCatalog, ItemDefinition, ItemLookup

# Environment helpers
from .environment import max_steps, reachable_areas, validate_route

# Core schemas
from .schemas import (
    Actor,
    ActorMemory,
    Area,
    Attributes,
    Entities,
    GameMap,
    Inventory,
    ItemStack,
    ObservedWorld,
    Traits,
    WorldMeta,
    WorldSnapshot,
    Intent,
    IntentType,
    AttackIntent,
    DefendIntent,
    NothingIntent,
    DrinkIntent,
    CollectIntent,
    MoveIntent,
    StayIntent,
    SetTrapIntent,
    parse_intent,
)

# Scenario loader helpers
from .scenario import ScenarioLoader, load_item_catalog, load_scenario

__all__ = [
    # Main entry points
    "DecisionEngine",
    "ConcurrentPassError",
    "generate_npc_intents",
    # Decision phases
    "DecisionContext",
    "build_observed_world",
    "decide_posture",
    "evaluate_combat",
    "decide_movement",
    "score_area",
    "compute_traits",
    "ensure_traits",
    "hash_unit",
    # Items
    "ItemCatalog",
    "ItemDefinition",
    "ItemLookup",
    # Environment helpers
    "max_steps",
    "reachable_areas",
    "validate_route",
    # World schemas
    "Actor",
    "ActorMemory",
    "Area",
    "Attributes",
    "Entities",
    "GameMap",
    "Inventory",
    "ItemStack",
    "ObservedWorld",
    "Traits",
    "WorldMeta",
    "WorldSnapshot",
    # Intent schemas
    "Intent",
    "IntentType",
    "AttackIntent",
    "DefendIntent",
    "NothingIntent",
    "DrinkIntent",
    "CollectIntent",
    "MoveIntent",
    "StayIntent",
    "SetTrapIntent",
    "parse_intent",
    # Scenario helpers
    "ScenarioLoader",
    "load_item_catalog",
    "load_scenario",
]
