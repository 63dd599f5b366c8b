"""
Day-pass engine: turns a frozen world snapshot into the day's intents.

Coordinates one synchronous pass per simulated day:
1. Clear every living actor's transient memory flags (``begin_day``)
2. For each actor in registry order:
   a. Build perception from the day-start snapshot
   b. Run the posture decision (may set committed/flee flags)
   c. Run the movement decision (reads those flags)
   d. Record the actor's current area in its memory
   e. Append both intents
3. Return the flat, ordered intent list for the turn executor

Processing order: the human-controlled actor is not decided by the engine
unless ``include_player=True``, in which case it is processed first, followed
by the NPCs in registry (insertion) order. Order only affects intent/log
order, never decisions: every actor reads the same day-start snapshot and
only its own memory is written.
"""

from __future__ import annotations

from typing import Callable, Iterator, List, Optional

from .config import Config
from .context import DecisionContext
from .items import ItemLookup
from .logging_utils import log_deterministic, log_error, log_info, log_success
from .movement import decide_movement
from .perception import build_observed_world
from .posture import decide_posture
from .schemas import Actor, Intent, MovementIntent, PostureIntent, WorldSnapshot
from .traits import ensure_traits

IntentListener = Callable[[Actor, PostureIntent, MovementIntent], None]


class ConcurrentPassError(RuntimeError):
    """Raised when a day pass starts while another pass on the same engine runs."""

    def __init__(self, *, day: int) -> None:
        self.day = day
        super().__init__(
            f"A day pass is already running on this engine (requested day {day}). "
            "Passes over overlapping actor sets must run one at a time."
        )


def _describe(intent: Intent) -> str:
    payload = intent.model_dump(exclude={"source", "type"}, exclude_none=True)
    if not payload:
        return intent.type
    details = ", ".join(f"{key}={value}" for key, value in payload.items())
    return f"{intent.type}({details})"


class DecisionEngine:
    """
    NPC decision engine.

    Holds only configuration (catalog, player handling, listeners); all
    per-actor state lives in each actor's memory on the snapshot.
    """

    def __init__(
        self,
        catalog: ItemLookup,
        *,
        include_player: bool = False,
        verbose: Optional[bool] = None,
        intent_listeners: Optional[List[IntentListener]] = None,
    ):
        """Initialize the engine.

        Args:
            catalog: Item catalog lookup (``get(def_id)``)
            include_player: Also decide for the human-controlled actor
                (processed first)
            verbose: Print one line per actor decision; defaults to
                ``Config.VERBOSE``
            intent_listeners: Optional callables invoked after each actor is
                decided, receiving (actor, posture_intent, movement_intent).
                A failing listener is reported and the pass continues.
        """
        self.catalog = catalog
        self.include_player = include_player
        self.verbose = Config.VERBOSE if verbose is None else verbose
        self.intent_listeners = intent_listeners or []
        self._running = False

    def iter_actors(self, world: WorldSnapshot) -> Iterator[Actor]:
        """Living actors this engine decides for, in processing order."""
        player = world.entities.player
        if self.include_player and player is not None and player.is_alive:
            yield player
        for npc in world.entities.npcs.values():
            if npc.is_alive:
                yield npc

    def decide_actor(self, world: WorldSnapshot, actor: Actor) -> List[Intent]:
        """Run perception, posture and movement for one actor; return its two intents."""
        traits = ensure_traits(actor, world.seed)
        observed = build_observed_world(world, actor)
        ctx = DecisionContext(
            world=world,
            actor=actor,
            observed=observed,
            catalog=self.catalog,
            traits=traits,
        )

        posture = decide_posture(ctx)
        movement = decide_movement(ctx)
        actor.memory.record_visit(actor.area_id)

        if self.verbose:
            log_deterministic(
                f"[{actor.name or actor.id}] area {actor.area_id}: "
                f"{_describe(posture)} / {_describe(movement)}"
            )

        for listener in self.intent_listeners:
            try:
                listener(actor, posture, movement)
            except Exception as exc:
                log_error(f"[Listener] failed for {actor.id}: {exc}")

        return [posture, movement]

    def run_day(self, world: WorldSnapshot) -> List[Intent]:
        """Decide every living actor's intents for ``world.day``.

        Args:
            world: Day-start snapshot; only actors' memories are modified

        Returns:
            Flat list of intents, two per decided actor, in processing order

        Raises:
            ConcurrentPassError: If called while a pass is already running
        """
        if self._running:
            raise ConcurrentPassError(day=world.day)
        self._running = True
        try:
            actors = list(self.iter_actors(world))
            log_info(f"=== Day {world.day} (seed {world.seed}): {len(actors)} actors ===")

            # Transient flags are cleared for everyone before anyone decides
            for actor in actors:
                actor.memory.begin_day()

            intents: List[Intent] = []
            for actor in actors:
                intents.extend(self.decide_actor(world, actor))

            log_success(f"Day {world.day}: {len(intents)} intents emitted")
            return intents
        finally:
            self._running = False


def generate_npc_intents(world: WorldSnapshot, catalog: ItemLookup) -> List[Intent]:
    """Convenience wrapper: one NPC-only day pass with default settings."""
    return DecisionEngine(catalog).run_day(world)
