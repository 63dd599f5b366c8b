"""Arena graph traversal helpers."""

from .helpers import (
    Reach,
    RouteCheck,
    can_route_through,
    closes_tomorrow,
    max_steps,
    reachable_areas,
    validate_route,
)

__all__ = [
    "Reach",
    "RouteCheck",
    "can_route_through",
    "closes_tomorrow",
    "max_steps",
    "reachable_areas",
    "validate_route",
]
