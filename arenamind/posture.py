"""
Posture decision: the one non-movement action an actor takes each day.

Rules are evaluated as an ordered cascade and the first match wins:

1. Trapped actors do nothing.
2. Staging-area rush: a probabilistic forced collect at the loot pile.
3-4. Thirst/exhaustion: drink when water is at hand, otherwise defend.
   An actor below 10 stamina never attacks.
5. Low stamina: pick up the best stamina-restoring item in sight.
6. Greed roll: pick up the most valuable item in sight.
7. Badly hurt (< 30% hp): flag a flight and defend.
8. Combat evaluation: score every visible target against defending and
   doing nothing.

The only writes are to the actor's own memory (committed/flee flags and the
staging-area empty-handed counter).
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List, Optional

from .context import DecisionContext
from .items import (
    UNARMED_DAMAGE,
    best_weapon_damage,
    highest_index,
    is_damage_capable,
    item_value,
    stamina_restore_value,
)
from .oracle import SALT_GREED, SALT_RUSH, SALT_RUSH_PICK, salt
from .schemas import (
    Actor,
    AttackIntent,
    CollectIntent,
    DefendIntent,
    DrinkIntent,
    NothingIntent,
    PostureIntent,
)
from .scoring import clamp01

RUSH_TOP_N = 4
NOTHING_SCORE = 0.15


@dataclass
class TargetAssessment:
    """Attack evaluation of one candidate target."""

    target_id: str
    kill_chance: float
    risk: float
    score: float


@dataclass
class CombatAssessment:
    """Scores behind a combat-phase posture choice."""

    targets: List[TargetAssessment] = field(default_factory=list)
    defend_score: float = 0.0
    nothing_score: float = NOTHING_SCORE

    @property
    def best(self) -> Optional[TargetAssessment]:
        best: Optional[TargetAssessment] = None
        for target in self.targets:
            if best is None or target.score > best.score:
                best = target
        return best

    def choose(self, source: str) -> PostureIntent:
        best = self.best
        if best is not None and best.score > self.defend_score and best.score > self.nothing_score:
            return AttackIntent(source=source, target_id=best.target_id)
        if self.defend_score >= self.nothing_score:
            return DefendIntent(source=source)
        return NothingIntent(source=source, reason="idle")


# ----------------------------------------------------------------------------
# Collect helpers
# ----------------------------------------------------------------------------


def _commit_collect(ctx: DecisionContext, item_index: int) -> CollectIntent:
    memory = ctx.actor.memory
    memory.committed_today = True
    memory.empty_handed_attempts = 0
    return CollectIntent(source=ctx.actor.id, item_index=item_index)


def rank_rush_items(ctx: DecisionContext) -> List[int]:
    """Ground-item indices ordered by rush value, best first (stable on ties).

    Rush value is the item's base value, +25 for damage-dealing items when
    the actor's inventory is empty.
    """
    empty_handed = ctx.actor.inventory.is_empty
    scores = []
    for stack in ctx.observed.current_area.ground_items:
        score = item_value(stack, ctx.catalog)
        if empty_handed and is_damage_capable(ctx.catalog.get(stack.def_id), stack.qty):
            score += 25.0
        scores.append(score)
    return sorted(range(len(scores)), key=lambda index: -scores[index])


def rush_probability(day: int, held: int) -> float:
    base = 0.92 if day <= 3 else 0.55
    if held == 0:
        boost = 0.55
    elif held == 1:
        boost = 0.25
    else:
        boost = 0.0
    return min(0.98, base + boost)


def _staging_rush(ctx: DecisionContext) -> Optional[CollectIntent]:
    actor = ctx.actor
    ground = ctx.observed.current_area.ground_items
    if not ctx.at_staging_area or not ground or actor.inventory.is_full:
        return None

    probability = rush_probability(ctx.day, actor.inventory.occupancy)
    if ctx.draw(salt(SALT_RUSH, actor.id)) >= probability:
        return None

    ranked = rank_rush_items(ctx)[:RUSH_TOP_N]
    pick = math.floor(ctx.draw(salt(SALT_RUSH_PICK, actor.id)) * min(RUSH_TOP_N, len(ranked)))
    return _commit_collect(ctx, ranked[pick])


# ----------------------------------------------------------------------------
# Combat scoring
# ----------------------------------------------------------------------------


def kill_chance(ctx: DecisionContext, target: Actor) -> float:
    attacker = ctx.actor
    best = best_weapon_damage(attacker.inventory, ctx.catalog)
    if best > 0:
        dmg = best * 0.5 if target.shield_active else best
    else:
        dmg = UNARMED_DAMAGE

    hp_factor = clamp01((100.0 - target.hp) / 100.0)
    str_edge = clamp01((attacker.attributes.force - target.attributes.force + 7.0) / 14.0)
    dex_edge = clamp01((attacker.attributes.dexterity - target.attributes.dexterity + 7.0) / 14.0)

    return clamp01(
        ((dmg / 105.0) * 0.65 + hp_factor * 0.35)
        * (0.75 + 0.25 * str_edge)
        * (0.85 + 0.15 * dex_edge)
    )


def combat_risk(ctx: DecisionContext, bystanders: int) -> float:
    """Risk of starting a fight with ``bystanders`` other actors around."""
    crowd = clamp01(bystanders / 5.0)
    hp_risk = clamp01((40.0 - ctx.actor.hp) / 40.0)
    fp_risk = clamp01((20.0 - ctx.actor.stamina) / 20.0)
    return clamp01(crowd * 0.55 + hp_risk * 0.35 + fp_risk * 0.25)


def assess_target(ctx: DecisionContext, target: Actor, bystanders: int) -> TargetAssessment:
    """Score attacking ``target``; higher is more attractive.

    Targets from the player's district pay -0.20, the player included. The
    player as a target additionally gets +0.15 when the attacker is healthy
    and -0.55 when the attacker is badly hurt and the player carries a weapon
    of 30+ damage.
    """
    attacker = ctx.actor
    traits = ctx.traits
    hp_pct = ctx.hp_pct
    healthy = hp_pct >= 70
    hurt = hp_pct < 30

    chance = kill_chance(ctx, target)
    risk = combat_risk(ctx, bystanders)
    score = chance * (0.9 + traits.aggression) - risk * (0.6 + traits.caution)

    score += 0.28 if healthy else 0.16
    if ctx.armed:
        score += 0.10
    if healthy:
        score += 0.20
    elif hurt:
        score -= 0.65
    if ctx.best_weapon_damage >= 30:
        score += 0.55

    if attacker.district is not None and target.district == attacker.district:
        score -= 0.55

    player = ctx.world.entities.player
    if player is not None and player.district is not None and target.district == player.district:
        score -= 0.20
    if player is not None and target.id == player.id:
        if healthy:
            score += 0.15
        if hurt and best_weapon_damage(target.inventory, ctx.catalog) >= 30:
            score -= 0.55

    score += clamp01((100.0 - target.hp) / 100.0) * (0.55 if healthy else 0.35)

    return TargetAssessment(target_id=target.id, kill_chance=chance, risk=risk, score=score)


def defend_score(ctx: DecisionContext, has_candidates: bool) -> float:
    actor = ctx.actor
    low_hp = clamp01((35.0 - actor.hp) / 35.0)
    low_fp = clamp01((15.0 - actor.stamina) / 15.0)
    fear = clamp01(low_hp * 0.9 + low_fp * 0.6)
    score = 0.35 + ctx.traits.caution * 0.45 + fear * 0.6
    if has_candidates and ctx.hp_pct >= 70:
        score -= 0.14
    else:
        score -= 0.06
    return score


def evaluate_combat(ctx: DecisionContext) -> CombatAssessment:
    candidates = [other for other in ctx.observed.colocated if other.is_alive]
    # Bystanders for each target: everyone visible except attacker and target
    bystanders = max(0, len(candidates) - 1)
    return CombatAssessment(
        targets=[assess_target(ctx, target, bystanders) for target in candidates],
        defend_score=defend_score(ctx, bool(candidates)),
    )


# ----------------------------------------------------------------------------
# Cascade
# ----------------------------------------------------------------------------


def decide_posture(ctx: DecisionContext) -> PostureIntent:
    """Choose the actor's posture intent for the day."""
    actor = ctx.actor
    area = ctx.observed.current_area
    ground = area.ground_items
    stamina = actor.stamina

    if actor.trapped_days > 0:
        return NothingIntent(source=actor.id, reason="trapped")

    rush = _staging_rush(ctx)
    if rush is not None:
        return rush

    if stamina <= 15 and area.has_water:
        return DrinkIntent(source=actor.id)

    if stamina < 10:
        if area.has_water and stamina <= 25:
            return DrinkIntent(source=actor.id)
        return DefendIntent(source=actor.id)

    can_collect = bool(ground) and not actor.inventory.is_full

    if stamina <= 20 and can_collect:
        restores = [stamina_restore_value(stack, ctx.catalog) for stack in ground]
        index = highest_index(restores)
        if index is not None and restores[index] > 0:
            return _commit_collect(ctx, index)

    if can_collect and ctx.draw(salt(SALT_GREED, actor.id)) < 0.10 + ctx.traits.greed * 0.35:
        index = highest_index([item_value(stack, ctx.catalog) for stack in ground])
        if index is not None:
            return _commit_collect(ctx, index)

    if ctx.hp_pct < 30:
        actor.memory.wants_to_flee = True
        return DefendIntent(source=actor.id)

    return evaluate_combat(ctx).choose(actor.id)
