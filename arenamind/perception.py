"""
Perception construction for one actor-day.

Builds an ObservedWorld that filters the complete WorldSnapshot down to what a
single actor can know this day.

Perception rules (what an actor CAN perceive):
- Its current area in full detail (ground items, elements, noise, closure)
- Every living actor sharing the area, the human-controlled one included
- Adjacent areas it has visited before: biome, threat class, closure schedule,
  food/water, ground-item count, creature count

Perception rules (what an actor CANNOT perceive):
- Stealthed actors (invisible to everyone for the day)
- Details of adjacent areas it has never visited (only id + active flag)
- Anything beyond its neighbors

The ObservedWorld holds deep copies, so decision code cannot reach back into
the snapshot through it. It is discarded after the actor's decisions.

Usage:
    observed = build_observed_world(world, actor)
    # observed.colocated contains only visible, living co-located actors
"""

from typing import List

from .schemas import Actor, Area, NeighborSummary, ObservedWorld, WorldSnapshot


def _summarize_neighbor(area: Area, known: bool) -> NeighborSummary:
    if not known:
        return NeighborSummary(id=area.id, is_active=area.is_active)
    return NeighborSummary(
        id=area.id,
        is_active=area.is_active,
        known=True,
        biome=area.biome,
        threat_class=area.threat_class,
        will_close_on_day=area.will_close_on_day,
        has_food=area.has_food,
        has_water=area.has_water,
        ground_item_count=len(area.ground_items),
        creature_count=area.creature_count,
    )


def build_observed_world(world: WorldSnapshot, actor: Actor) -> ObservedWorld:
    """Build the bounded, partially-known view of the world for ``actor``.

    Args:
        world: Day-start world snapshot (read only)
        actor: Actor whose view is being built

    Returns:
        ObservedWorld for this actor-day. A missing current area yields an
        empty placeholder area; missing neighbor entries are skipped.
    """
    current = world.map.area(actor.area_id)
    if current is None:
        current_copy = Area(id=actor.area_id)
    else:
        current_copy = current.model_copy(deep=True)

    # Co-located actors: living, same area, not stealthed, not self
    colocated = [
        other.model_copy(deep=True)
        for other in world.occupants(actor.area_id, exclude=actor.id)
    ]

    # Neighbor knowledge is gated by the actor's own visited set
    neighbors: List[NeighborSummary] = []
    for neighbor_id in world.map.neighbors(actor.area_id):
        area = world.map.area(neighbor_id)
        if area is None:
            continue
        neighbors.append(_summarize_neighbor(area, neighbor_id in actor.memory.visited))

    return ObservedWorld(
        day=world.day,
        actor_id=actor.id,
        current_area=current_copy,
        colocated=colocated,
        neighbors=neighbors,
    )
