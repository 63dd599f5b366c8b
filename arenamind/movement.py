"""
Movement decision: stay put, or pick a route for the day.

Pipeline:
1. Trapped actors stay.
2. Step budget from hp/stamina (3 or 1).
3. Bounded BFS over enterable, open areas not closing tomorrow.
4. Score "stay" and every reached area (``scoring.score_area``).
5. Dispersal bias on the stay score, pushing actors off the loot pile once
   they have something (or once the pile is worth fighting over).
6. Staging-area scramble gate: empty-handed actors keep trying to grab loot
   for at least two days before they may leave.
7. Forced exits (empty area, staging exit, flight) skip the threshold test.
8. Otherwise move only if the best candidate beats staying by a
   caution-dependent threshold.
9. Softmax-weighted pick over the six best candidates.

Reads the posture phase's flags (committed/flee) from the actor's memory and
writes only the empty-handed counter.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .context import DecisionContext
from .environment import max_steps, reachable_areas
from .oracle import SALT_LEAVE_EMPTY, SALT_ROUTE_PICK, salt
from .schemas import MoveIntent, MovementIntent, StayIntent
from .scoring import REJECTED_SCORE, clamp, score_area

POOL_SIZE = 6
STAGING_ATTEMPTS_BEFORE_EXIT = 2
EMPTY_HANDED_EXIT_CHANCE = 0.20

FORCE_EMPTY_AREA = "empty_area"
FORCE_STAGING_EXIT = "staging_exit"
FORCE_FLEE = "flee"


@dataclass(frozen=True)
class MoveCandidate:
    area_id: int
    steps: int
    route: Tuple[int, ...]
    score: float


def dispersal_bias(ctx: DecisionContext) -> float:
    """Adjustment to the stay score based on what the actor already holds."""
    held = ctx.actor.inventory.occupancy
    if ctx.at_staging_area:
        if held == 0:
            return -0.75 if ctx.actor.memory.committed_today else 0.10
        if held == 1:
            return -0.85
        return -1.05
    return -0.12 if held >= 2 else 0.0


def staging_gate_blocks(ctx: DecisionContext) -> bool:
    """Advance the empty-handed counter and report whether movement is blocked.

    Holding anything or committing to a collection resets the counter.
    While loot remains at the staging area and the actor is empty-handed,
    each day adds an attempt; movement is blocked until two attempts are
    recorded, then a 20% roll (or fleeing) lets the actor leave.
    """
    actor = ctx.actor
    memory = actor.memory
    if not actor.inventory.is_empty or memory.committed_today:
        memory.empty_handed_attempts = 0
        return False
    if not ctx.at_staging_area or not ctx.observed.current_area.ground_items:
        return False

    memory.empty_handed_attempts += 1
    if memory.empty_handed_attempts < STAGING_ATTEMPTS_BEFORE_EXIT:
        return True
    if ctx.draw(salt(SALT_LEAVE_EMPTY, actor.id)) < EMPTY_HANDED_EXIT_CHANCE:
        return False
    return not memory.wants_to_flee


def force_reason(ctx: DecisionContext) -> Optional[str]:
    actor = ctx.actor
    memory = actor.memory
    if not ctx.observed.current_area.ground_items:
        return FORCE_EMPTY_AREA
    # Holding >= 1 item also covers the thinning-pile exit (>= 2 held, <= 6 left)
    if ctx.at_staging_area and (memory.committed_today or actor.inventory.occupancy >= 1):
        return FORCE_STAGING_EXIT
    if memory.wants_to_flee:
        return FORCE_FLEE
    return None


def movement_threshold(ctx: DecisionContext) -> float:
    actor = ctx.actor
    threshold = 0.14 + ctx.traits.caution * 0.10
    # Fresh arrival: the staging area is not yet in the actor's recent history
    fresh_at_staging = ctx.at_staging_area and actor.area_id not in actor.memory.recent_areas
    if actor.inventory.is_empty and fresh_at_staging:
        threshold += 0.06
    if actor.inventory.occupancy >= 2:
        threshold -= 0.06
    return threshold


def route_temperature(caution: float) -> float:
    return clamp(0.55 - caution * 0.30, 0.25, 0.55)


def softmax_pick(scores: Sequence[float], temperature: float, r: float) -> int:
    """Index chosen by walking the softmax CDF of ``scores`` with draw ``r``."""
    top = max(scores)
    weights = [math.exp((score - top) / temperature) for score in scores]
    total = sum(weights)
    cumulative = 0.0
    for index, weight in enumerate(weights):
        cumulative += weight
        if r < cumulative / total:
            return index
    return len(scores) - 1


def score_candidates(ctx: DecisionContext, budget: int) -> List[MoveCandidate]:
    game_map = ctx.world.map
    candidates: List[MoveCandidate] = []
    for reach in reachable_areas(game_map, ctx.actor.area_id, budget, ctx.day):
        area = game_map.area(reach.area_id)
        if area is None:
            continue
        score = score_area(ctx, area, reach.steps)
        if score <= REJECTED_SCORE:
            continue
        candidates.append(MoveCandidate(reach.area_id, reach.steps, reach.route, score))
    return candidates


def decide_movement(ctx: DecisionContext) -> MovementIntent:
    """Choose MOVE(route) or STAY for the actor's day."""
    actor = ctx.actor

    if actor.trapped_days > 0:
        return StayIntent(source=actor.id, reason="trapped")

    budget = max_steps(actor)
    if budget <= 0:
        return StayIntent(source=actor.id, reason="no_steps")

    candidates = score_candidates(ctx, budget)
    stay_score = score_area(ctx, ctx.observed.current_area, 0) + dispersal_bias(ctx)

    if staging_gate_blocks(ctx):
        return StayIntent(source=actor.id, reason="staging_scramble")

    if not candidates:
        return StayIntent(source=actor.id, reason="no_route")

    reason = force_reason(ctx)
    if reason is None:
        best = max(candidate.score for candidate in candidates)
        if best - stay_score < movement_threshold(ctx):
            return StayIntent(source=actor.id, reason="content")

    pool = candidates
    if reason == FORCE_STAGING_EXIT:
        pool = [candidate for candidate in candidates if candidate.steps == 1] or candidates
    pool = sorted(pool, key=lambda candidate: -candidate.score)[:POOL_SIZE]

    r = ctx.draw(salt(SALT_ROUTE_PICK, actor.id))
    chosen = pool[softmax_pick([c.score for c in pool], route_temperature(ctx.traits.caution), r)]
    return MoveIntent(source=actor.id, route=list(chosen.route))
