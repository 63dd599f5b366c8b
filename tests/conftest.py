"""Shared fixtures for arenamind tests."""

from pathlib import Path

import pytest

from arenamind.context import DecisionContext
from arenamind.perception import build_observed_world
from arenamind.scenario import load_item_catalog
from arenamind.schemas import Traits, WorldSnapshot
from arenamind.traits import ensure_traits

EXAMPLES_DIR = Path(__file__).resolve().parent.parent / "examples"


@pytest.fixture
def catalog():
    return load_item_catalog(EXAMPLES_DIR / "items.json")


@pytest.fixture
def make_ctx(catalog):
    """Build a DecisionContext for one actor of a world, optionally pinning its traits."""

    def _make(world: WorldSnapshot, actor_id: str, traits: Traits = None) -> DecisionContext:
        actor = world.get_actor(actor_id)
        if traits is not None:
            actor.memory.traits = traits
        resolved = ensure_traits(actor, world.seed)
        return DecisionContext(
            world=world,
            actor=actor,
            observed=build_observed_world(world, actor),
            catalog=catalog,
            traits=resolved,
        )

    return _make
