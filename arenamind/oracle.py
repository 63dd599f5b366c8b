"""
Deterministic hash oracle for every random decision in the engine.

There is no ambient random generator anywhere in Arenamind. Each draw is a pure
function of (seed, day, salt): the UTF-8 bytes of ``"{seed}|{day}|{salt}"`` are
mixed through a 32-bit FNV-1a accumulator, finalized with three xorshifts and
scaled into [0, 1). Integer operations only, so results are identical on every
platform and interpreter.

Every call site uses its own salt so that two draws never share a stream.
The full catalogue lives below; a salt is always built with ``salt()`` so the
format stays consistent (parts joined with ``|``).

Salt catalogue (draw order within one actor-day is posture first, then movement):

- ``trait_aggr|<actor>|<district>``  aggression trait (day fixed at 0)
- ``trait_greed|<actor>|<district>`` greed trait (day fixed at 0)
- ``trait_caut|<actor>|<district>``  caution trait (day fixed at 0)
- ``rush|<actor>``                   staging-area forced-collect roll
- ``rush_pick|<actor>``              staging-area item pick among the top 4
- ``greed|<actor>``                  greed collect roll
- ``leave_empty|<actor>``            staging-area empty-handed exit roll
- ``route_pick|<actor>``             softmax route selection
- ``area_jitter|<actor>|<area>``     per-area score jitter
"""

from __future__ import annotations

from typing import Union

FNV_OFFSET_BASIS = 2166136261
FNV_PRIME = 16777619
MASK_32 = 0xFFFFFFFF
TWO_POW_32 = 4294967296.0

SeedValue = Union[int, str]

SALT_TRAIT_AGGRESSION = "trait_aggr"
SALT_TRAIT_GREED = "trait_greed"
SALT_TRAIT_CAUTION = "trait_caut"
SALT_RUSH = "rush"
SALT_RUSH_PICK = "rush_pick"
SALT_GREED = "greed"
SALT_LEAVE_EMPTY = "leave_empty"
SALT_ROUTE_PICK = "route_pick"
SALT_AREA_JITTER = "area_jitter"


def _format_seed(seed: SeedValue) -> str:
    # Seeds may round-trip through JSON as floats; 42.0 must hash like 42.
    if isinstance(seed, float) and seed.is_integer():
        return str(int(seed))
    return str(seed)


def hash_unit(seed: SeedValue, day: int, salt: str) -> float:
    """Return a deterministic pseudorandom value in [0, 1).

    Args:
        seed: World seed (int or string)
        day: Simulation day (0 for creation-time draws such as traits)
        salt: Unique string identifying the decision being drawn

    Returns:
        Float in [0, 1); identical for identical arguments
    """
    h = FNV_OFFSET_BASIS
    for byte in f"{_format_seed(seed)}|{day}|{salt}".encode("utf-8"):
        h ^= byte
        h = (h * FNV_PRIME) & MASK_32

    h ^= (h << 13) & MASK_32
    h ^= h >> 17
    h ^= (h << 5) & MASK_32
    h &= MASK_32

    return h / TWO_POW_32


def salt(*parts: object) -> str:
    """Join salt components with ``|`` (e.g. ``salt("rush", "npc_1")``)."""
    return "|".join(str(part) for part in parts)
