"""Utilities for walking the arena graph."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Deque, List, Optional, Set, Tuple

from ..schemas import Actor, Area, GameMap


@dataclass(frozen=True)
class Reach:
    """An area reachable this day, with the route that reaches it first."""

    area_id: int
    steps: int
    # Route excludes the start area: [first hop, ..., area_id]
    route: Tuple[int, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class RouteCheck:
    """Outcome of ``validate_route``."""

    ok: bool
    reason: Optional[str] = None
    final_area_id: Optional[int] = None


def max_steps(actor: Actor) -> int:
    """Areas an actor may cross in one day: 3 when healthy and rested, else 1."""
    return 3 if actor.hp > 30 and actor.stamina > 20 else 1


def closes_tomorrow(area: Area, day: int) -> bool:
    return area.will_close_on_day is not None and area.will_close_on_day == day + 1


def can_route_through(area: Optional[Area], day: int) -> bool:
    """True if an area may appear on a route planned on ``day``.

    Rejects missing/closed areas, water without a bridge, and areas
    scheduled to close tomorrow.
    """
    if area is None:
        return False
    return area.is_enterable and not closes_tomorrow(area, day)


def reachable_areas(game_map: GameMap, start: int, budget: int, day: int) -> List[Reach]:
    """Breadth-first search from ``start`` up to ``budget`` steps.

    Returns every area reachable within the budget (start excluded) in BFS
    discovery order, each with its step count and first-found route. Pruned
    areas are neither returned nor expanded.
    """
    if budget <= 0:
        return []

    # Start counts as seen so routes never loop back through it
    seen: Set[int] = {start}
    queue: Deque[Tuple[int, Tuple[int, ...]]] = deque([(start, ())])
    reached: List[Reach] = []

    while queue:
        node, route = queue.popleft()
        if len(route) >= budget:
            continue
        for neighbor in game_map.neighbors(node):
            if neighbor in seen:
                continue
            seen.add(neighbor)
            if not can_route_through(game_map.area(neighbor), day):
                continue
            new_route = route + (neighbor,)
            reached.append(Reach(area_id=neighbor, steps=len(new_route), route=new_route))
            queue.append((neighbor, new_route))

    return reached


def validate_route(
    game_map: GameMap,
    from_area_id: int,
    route: List[int],
    actor: Actor,
    day: int,
) -> RouteCheck:
    """Check a MOVE route the way the turn executor does.

    Checks, in order:
    1. Route is non-empty
    2. Route length fits the actor's step budget
    3. Each hop is adjacent to the previous area
    4. Each hop is active, enterable (bridge over water), and not closing tomorrow
    """
    if not route:
        return RouteCheck(ok=False, reason="empty_route")

    if len(route) > max_steps(actor):
        return RouteCheck(ok=False, reason="too_many_steps")

    current = from_area_id
    for hop in route:
        if hop not in game_map.neighbors(current):
            return RouteCheck(ok=False, reason="not_adjacent")
        area = game_map.area(hop)
        if area is None or not area.is_active:
            return RouteCheck(ok=False, reason="area_closed")
        if area.has_water and not area.has_bridge:
            return RouteCheck(ok=False, reason="water_no_bridge")
        if closes_tomorrow(area, day):
            return RouteCheck(ok=False, reason="closing")
        current = hop

    return RouteCheck(ok=True, final_area_id=current)
