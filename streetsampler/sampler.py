"""Point sampling of road vertices and building centroids.

Two entry points per kind:

* ``create_*_point_dataset`` is the pipeline variant.  It always returns a
  dataset (empty when there is no snapshot) and floors building footprints
  at ``MIN_BUILDING_HALF_EXTENT`` so point-like buildings still show up.
* ``*_to_point_data`` is the lower-level conversion.  It returns ``None``
  without a snapshot and keeps building footprints unfloored.

Both walk the snapshot in order and never modify it.
"""

import logging
from typing import Collection, Optional, Sequence

from .constants import (BUILDING_SAMPLE_HALF_EXTENT, MIN_BUILDING_HALF_EXTENT,
                        ROAD_POINT_HALF_EXTENT, SAMPLE_DENSITY,
                        SEED_ROAD_STRIDE)
from .geometry import (derive_seed, effective_height, is_inside_or_on,
                       meets_min_height, polygon_centroid, road_type_allowed)
from .models import (Box, GeometrySnapshot, PointDataset, PointSample,
                     RoadType)

logger = logging.getLogger(__name__)

ROADS = "roads"
BUILDINGS = "buildings"

ROAD_SCHEMA = {
    'road_name': str,
    'road_type': int,
    'road_index': int,
    'point_index': int,
    'is_one_way': bool,
}

BUILDING_SCHEMA = {
    'building_name': str,
    'height': float,
    'building_levels': int,
    'building_index': int,
    'vertex_count': int,
}


def _empty(kind: str) -> PointDataset:
    schema = ROAD_SCHEMA if kind == ROADS else BUILDING_SCHEMA
    return PointDataset(kind=kind, schema=dict(schema))


# ── Roads ───────────────────────────────────────────────────────────────

def _sample_roads(snapshot: GeometrySnapshot, bounds: Optional[Box],
                  allowed_road_types: Optional[Collection[RoadType]]) -> PointDataset:
    dataset = _empty(ROADS)
    skipped_roads = 0

    for road_index, road in enumerate(snapshot.roads):
        if not road_type_allowed(road, allowed_road_types):
            skipped_roads += 1
            continue

        for point_index, (x, y) in enumerate(road.points):
            position = (x, y, 0.0)
            if not is_inside_or_on(bounds, position):
                continue

            dataset.samples.append(PointSample(
                position=position,
                half_extent=ROAD_POINT_HALF_EXTENT,
                density=SAMPLE_DENSITY,
                seed=derive_seed(x, y, road_index * SEED_ROAD_STRIDE + point_index),
                attributes={
                    'road_name': road.name,
                    'road_type': int(road.road_type),
                    'road_index': road_index,
                    'point_index': point_index,
                    'is_one_way': bool(road.is_one_way),
                },
            ))

    logger.debug(f"Sampled {len(dataset)} road points from "
                 f"{len(snapshot.roads) - skipped_roads}/{len(snapshot.roads)} roads")
    return dataset


def create_road_point_dataset(snapshot: Optional[GeometrySnapshot],
                              bounds: Optional[Box] = None,
                              allowed_road_types: Optional[Collection[RoadType]] = None
                              ) -> PointDataset:
    """One sample per road vertex, optionally filtered by box and road type."""
    if snapshot is None:
        logger.warning("No source geometry supplied; returning empty road dataset")
        return _empty(ROADS)
    return _sample_roads(snapshot, bounds, allowed_road_types)


def roads_to_point_data(snapshot: Optional[GeometrySnapshot],
                        bounds: Optional[Box] = None) -> Optional[PointDataset]:
    if snapshot is None:
        return None
    return _sample_roads(snapshot, bounds, None)


# ── Buildings ───────────────────────────────────────────────────────────

def _sample_buildings(snapshot: GeometrySnapshot, bounds: Optional[Box],
                      min_height: float,
                      min_half_extent: Optional[float]) -> PointDataset:
    dataset = _empty(BUILDINGS)

    for building_index, building in enumerate(snapshot.buildings):
        if not meets_min_height(building, min_height):
            continue

        cx, cy = polygon_centroid(building.points)
        if not is_inside_or_on(bounds, (cx, cy, 0.0)):
            continue

        height = effective_height(building)
        ex = (building.bounds_max[0] - building.bounds_min[0]) * 0.5
        ey = (building.bounds_max[1] - building.bounds_min[1]) * 0.5
        if min_half_extent is not None:
            ex = max(ex, min_half_extent)
            ey = max(ey, min_half_extent)

        dataset.samples.append(PointSample(
            position=(cx, cy, height * 0.5),
            half_extent=(ex, ey, height * 0.5),
            density=SAMPLE_DENSITY,
            seed=derive_seed(cx, cy, building_index),
            attributes={
                'building_name': building.name,
                'height': float(building.height),
                'building_levels': int(building.levels),
                'building_index': building_index,
                'vertex_count': len(building.points),
            },
        ))

    logger.debug(f"Sampled {len(dataset)}/{len(snapshot.buildings)} building centroids")
    return dataset


def create_building_point_dataset(snapshot: Optional[GeometrySnapshot],
                                  bounds: Optional[Box] = None,
                                  min_height: float = 0.0) -> PointDataset:
    """One sample per building centroid, footprint floored for visibility."""
    if snapshot is None:
        logger.warning("No source geometry supplied; returning empty building dataset")
        return _empty(BUILDINGS)
    return _sample_buildings(snapshot, bounds, min_height,
                             MIN_BUILDING_HALF_EXTENT)


def buildings_to_point_data(snapshot: Optional[GeometrySnapshot],
                            bounds: Optional[Box] = None) -> Optional[PointDataset]:
    if snapshot is None:
        return None
    return _sample_buildings(snapshot, bounds, 0.0, None)


# ── Spatial data wrappers ───────────────────────────────────────────────

class _StreetMapSpatialData:
    """Snapshot view with cached bounds, handed to the host pipeline."""

    dimension = 2
    sample_half_extent = ROAD_POINT_HALF_EXTENT

    def __init__(self, snapshot: Optional[GeometrySnapshot] = None):
        self.snapshot = None
        self._cached_bounds = None
        self.initialize(snapshot)

    def initialize(self, snapshot: Optional[GeometrySnapshot]) -> None:
        """Point at a snapshot; bounds are recomputed when the reference changes."""
        if snapshot is self.snapshot and self._cached_bounds is not None:
            return
        self.snapshot = snapshot
        if snapshot is None:
            self._cached_bounds = None
        else:
            self._cached_bounds = Box.from_2d(snapshot.bounds_min, snapshot.bounds_max)

    @property
    def bounds(self) -> Optional[Box]:
        return self._cached_bounds

    @property
    def strict_bounds(self) -> Optional[Box]:
        return self.bounds

    def sample_point(self, location: Sequence[float],
                     query_bounds: Box) -> Optional[PointSample]:
        """Sample at an arbitrary location if the query box touches the map."""
        if self._cached_bounds is None or not query_bounds.intersects(self._cached_bounds):
            return None
        z = location[2] if len(location) > 2 else 0.0
        return PointSample(
            position=(float(location[0]), float(location[1]), float(z)),
            half_extent=self.sample_half_extent,
            density=SAMPLE_DENSITY,
            seed=0,
        )


class RoadsSpatialData(_StreetMapSpatialData):
    sample_half_extent = ROAD_POINT_HALF_EXTENT

    def to_point_data(self, bounds: Optional[Box] = None) -> Optional[PointDataset]:
        return roads_to_point_data(self.snapshot, bounds)


class BuildingsSpatialData(_StreetMapSpatialData):
    sample_half_extent = BUILDING_SAMPLE_HALF_EXTENT

    def to_point_data(self, bounds: Optional[Box] = None) -> Optional[PointDataset]:
        return buildings_to_point_data(self.snapshot, bounds)

