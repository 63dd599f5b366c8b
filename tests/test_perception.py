"""Tests for partial perception construction."""

from arenamind.perception import build_observed_world
from arenamind.schemas import (
    ActiveElement,
    Actor,
    Area,
    Entities,
    GameMap,
    ItemStack,
    ThreatClass,
    WorldMeta,
    WorldSnapshot,
)


def make_world() -> WorldSnapshot:
    areas = {
        1: Area(id=1, ground_items=[ItemStack(def_id="sword"), ItemStack(def_id="bread")]),
        2: Area(
            id=2,
            biome="forest",
            threat_class=ThreatClass.SAFE,
            has_food=True,
            ground_items=[ItemStack(def_id="knife")],
        ),
        3: Area(
            id=3,
            biome="mountain",
            threat_class=ThreatClass.THREATENING,
            active_elements=[ActiveElement(kind="creature", name="wolf")],
            will_close_on_day=4,
        ),
    }
    npcs = {
        "alpha": Actor(id="alpha", area_id=1, district=1),
        "beta": Actor(id="beta", area_id=1, district=2),
        "ghost": Actor(id="ghost", area_id=1, district=3, stealth_active=True),
        "fallen": Actor(id="fallen", area_id=1, district=4, hp=0),
        "far": Actor(id="far", area_id=2, district=5),
    }
    return WorldSnapshot(
        meta=WorldMeta(seed=42, day=3),
        map=GameMap(areas_by_id=areas, adj_by_id={1: [2, 3, 99], 2: [1], 3: [1]}),
        entities=Entities(player=Actor(id="player", area_id=1, district=12), npcs=npcs),
    )


def test_colocated_excludes_self_stealth_and_dead():
    world = make_world()
    observed = build_observed_world(world, world.get_actor("alpha"))

    assert observed.day == 3
    assert observed.actor_id == "alpha"
    assert [actor.id for actor in observed.colocated] == ["player", "beta"]


def test_current_area_is_fully_detailed_copy():
    world = make_world()
    observed = build_observed_world(world, world.get_actor("alpha"))

    assert [stack.def_id for stack in observed.current_area.ground_items] == ["sword", "bread"]

    observed.current_area.ground_items.clear()
    observed.colocated[0].hp = 1
    assert len(world.map.area(1).ground_items) == 2
    assert world.entities.player.hp == 100


def test_unvisited_neighbors_expose_only_id_and_activity():
    world = make_world()
    observed = build_observed_world(world, world.get_actor("alpha"))

    # Area 99 is listed in adjacency but missing from the map
    assert [neighbor.id for neighbor in observed.neighbors] == [2, 3]
    for neighbor in observed.neighbors:
        assert neighbor.is_active
        assert not neighbor.known
        assert neighbor.biome is None
        assert neighbor.ground_item_count is None
        assert neighbor.creature_count is None


def test_visited_neighbors_are_summarized():
    world = make_world()
    alpha = world.get_actor("alpha")
    alpha.memory.visited.update({2, 3})

    observed = build_observed_world(world, alpha)
    forest, mountain = observed.neighbors

    assert forest.known and forest.biome == "forest"
    assert forest.has_food is True
    assert forest.ground_item_count == 1
    assert forest.threat_class == ThreatClass.SAFE
    assert mountain.creature_count == 1
    assert mountain.will_close_on_day == 4


def test_missing_current_area_yields_placeholder():
    world = make_world()
    lost = Actor(id="lost", area_id=42)
    world.entities.npcs["lost"] = lost

    observed = build_observed_world(world, lost)

    assert observed.current_area.id == 42
    assert observed.current_area.ground_items == []
    assert observed.colocated == []
    assert observed.neighbors == []


def test_stealthed_actor_still_sees_others():
    world = make_world()
    observed = build_observed_world(world, world.get_actor("ghost"))
    assert [actor.id for actor in observed.colocated] == ["player", "alpha", "beta"]
