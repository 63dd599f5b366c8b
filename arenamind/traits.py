"""Personality traits derived once per actor from the hash oracle."""

from __future__ import annotations

from .oracle import (
    SALT_TRAIT_AGGRESSION,
    SALT_TRAIT_CAUTION,
    SALT_TRAIT_GREED,
    SeedValue,
    hash_unit,
    salt,
)
from .schemas import Actor, Traits


def compute_traits(seed: SeedValue, actor_id: str, district: object) -> Traits:
    """Derive the three trait scalars for an actor id + district pair.

    Each trait is an affine map of its own oracle draw (day 0), so every trait
    has a floor: aggression >= 0.25, greed >= 0.15, caution >= 0.20.
    """
    a = hash_unit(seed, 0, salt(SALT_TRAIT_AGGRESSION, actor_id, district))
    g = hash_unit(seed, 0, salt(SALT_TRAIT_GREED, actor_id, district))
    c = hash_unit(seed, 0, salt(SALT_TRAIT_CAUTION, actor_id, district))
    return Traits(
        aggression=0.25 + 0.75 * a,
        greed=0.15 + 0.85 * g,
        caution=0.20 + 0.80 * c,
    )


def ensure_traits(actor: Actor, seed: SeedValue) -> Traits:
    """Return the actor's cached traits, computing and caching them on first use."""
    if actor.memory.traits is None:
        actor.memory.traits = compute_traits(seed, actor.id, actor.district)
    return actor.memory.traits
