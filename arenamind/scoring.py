"""Shared scoring helpers and the area-desirability score used by movement."""

from __future__ import annotations

from .context import DecisionContext
from .oracle import SALT_AREA_JITTER, salt
from .schemas import Area, NoiseLevel, ThreatClass

# Score given to areas that can never be chosen
REJECTED_SCORE = -1e9


def clamp01(value: float) -> float:
    return max(0.0, min(1.0, value))


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def need_food(stamina: float) -> float:
    """Hunger pressure in [0, 1]; jumps by 0.35 once stamina is at or below 20."""
    need = clamp01((40.0 - stamina) / 40.0)
    if stamina <= 20:
        need = min(1.0, need + 0.35)
    return need


def noise_bonus(noise: NoiseLevel, hp_pct: float, armed: bool) -> float:
    """How an area's noise attracts or repels the actor given its condition."""
    if hp_pct < 30:
        return {NoiseLevel.NOISY: -0.18, NoiseLevel.HIGHLY_NOISY: -0.35}.get(noise, 0.05)
    if not armed:
        return {NoiseLevel.NOISY: -0.06, NoiseLevel.HIGHLY_NOISY: -0.14}.get(noise, 0.0)
    if hp_pct >= 70:
        return {NoiseLevel.NOISY: 0.18, NoiseLevel.HIGHLY_NOISY: 0.32}.get(noise, 0.0)
    return {NoiseLevel.NOISY: 0.10, NoiseLevel.HIGHLY_NOISY: 0.20}.get(noise, 0.0)


def score_area(ctx: DecisionContext, area: Area, steps: int) -> float:
    """Desirability of ending the day in ``area`` after ``steps`` moves.

    ``steps == 0`` with the actor's own area scores "stay". Only areas the
    actor stands in or has visited are scored from their real contents; an
    unknown area is scored as its perception summary shows it: a flat loot
    guess, no food or water, no creatures, quiet, and a threat class that is
    neither safe nor threatening. Hard rejects still use the map itself, since
    the executor refuses those routes whether or not the actor knows why.
    Occupant counts exclude the actor and stealthed actors.
    """
    day = ctx.day
    if not area.is_enterable:
        return REJECTED_SCORE
    if area.will_close_on_day is not None and area.will_close_on_day == day + 1:
        return REJECTED_SCORE

    actor = ctx.actor
    traits = ctx.traits
    memory = actor.memory
    is_current = area.id == actor.area_id
    known = is_current or area.id in memory.visited
    hp_pct = ctx.hp_pct
    armed = ctx.armed

    if known:
        loot_value = len(area.ground_items) * 0.35
        food_value = 0.45 * float(area.has_food) + 0.18 * float(area.has_water)
        threat_class = area.threat_class
        creatures = area.creature_count
        noise = area.noise_level
    else:
        loot_value = 0.10
        food_value = 0.0
        threat_class = None
        creatures = 0
        noise = NoiseLevel.QUIET
    hunger = need_food(actor.stamina)

    if threat_class == ThreatClass.SAFE:
        safety = 0.45
    elif threat_class == ThreatClass.NEUTRAL:
        safety = 0.2
    elif threat_class == ThreatClass.THREATENING:
        safety = -0.25
    else:
        safety = 0.0
    threat = (0.35 if threat_class == ThreatClass.THREATENING else 0.05) + 0.25 * creatures

    distance_cost = steps * 0.12
    if is_current:
        revisit_penalty = 0.0
    else:
        revisit_penalty = 0.02 if known else 0.06
    recent_penalty = 0.12 if area.id in memory.recent_areas else 0.0
    explore = 0.0
    if not known and not is_current:
        explore = 0.18 + traits.greed * 0.18 - traits.caution * 0.12

    occupants = len(ctx.world.occupants(area.id, exclude=actor.id))
    crowd_penalty = max(0, occupants - 1) * (0.04 + traits.caution * 0.03)
    if area.id == ctx.world.map.staging_area_id:
        if day >= 2:
            crowd_penalty += 0.10
        elif day == 1:
            crowd_penalty *= 0.2

    population_hunt = min(0.45, occupants * 0.14) if armed and hp_pct >= 70 else 0.0
    jitter = ctx.draw(salt(SALT_AREA_JITTER, actor.id, area.id)) * 0.01

    return (
        loot_value * (0.4 + traits.greed)
        + food_value * (0.35 + hunger)
        + safety * (0.25 + traits.caution)
        - threat * (0.25 + traits.caution)
        - distance_cost
        - revisit_penalty
        - crowd_penalty
        + explore
        - recent_penalty
        + noise_bonus(noise, hp_pct, armed)
        + population_hunt
        + jitter
    )
