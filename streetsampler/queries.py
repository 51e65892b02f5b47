"""Nearest-road-point and buildings-in-radius lookups.

Both are linear scans in snapshot order.  No spatial index is kept; the
nearest-point cutoff only bounds the worst case on very large maps.
"""

import logging
from typing import List, Optional, Sequence, Tuple

from .constants import DEFAULT_MAX_SEARCH_DISTANCE
from .geometry import bounds_midpoint, distance_squared_2d
from .models import GeometrySnapshot

logger = logging.getLogger(__name__)


def find_nearest_road_point(snapshot: Optional[GeometrySnapshot],
                            location: Sequence[float],
                            max_search_distance: float = 0.0
                            ) -> Optional[Tuple[int, int]]:
    """Return ``(road_index, point_index)`` of the closest road vertex.

    ``max_search_distance <= 0`` falls back to ``DEFAULT_MAX_SEARCH_DISTANCE``.
    Only strictly closer vertices replace the current best, so on ties the
    first vertex in (road, point) order wins.  ``None`` when nothing lies
    within the cutoff or there is no snapshot.
    """
    if snapshot is None:
        return None

    if max_search_distance > 0.0:
        best_dist_sq = max_search_distance * max_search_distance
    else:
        best_dist_sq = DEFAULT_MAX_SEARCH_DISTANCE * DEFAULT_MAX_SEARCH_DISTANCE

    best = None
    for road_index, road in enumerate(snapshot.roads):
        for point_index, point in enumerate(road.points):
            d = distance_squared_2d(location, point)
            if d < best_dist_sq:
                best_dist_sq = d
                best = (road_index, point_index)

    return best


def find_buildings_in_radius(snapshot: Optional[GeometrySnapshot],
                             location: Sequence[float],
                             radius: float) -> List[int]:
    """Indices of buildings whose AABB midpoint is within ``radius``.

    Uses the bounds midpoint, not the vertex centroid the sampler uses.
    The boundary is inclusive.  Results follow snapshot order.
    """
    if snapshot is None:
        return []

    radius_sq = radius * radius
    result = []
    for building_index, building in enumerate(snapshot.buildings):
        center = bounds_midpoint(building.bounds_min, building.bounds_max)
        if distance_squared_2d(location, center) <= radius_sq:
            result.append(building_index)
    return result
