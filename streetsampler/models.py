"""Data classes for map geometry, bounding boxes, and point samples."""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple

import numpy as np

Point2 = Tuple[float, float]
Point3 = Tuple[float, float, float]


def _as_points(points) -> Tuple[Point2, ...]:
    return tuple((float(x), float(y)) for x, y in points)


class RoadType(IntEnum):
    HIGHWAY = 0
    MAJOR_ROAD = 1
    STREET = 2
    BRIDGE = 3
    OTHER = 4


@dataclass(frozen=True)
class Road:
    name: str
    road_type: RoadType
    points: Tuple[Point2, ...]
    is_one_way: bool = False

    def __post_init__(self):
        object.__setattr__(self, 'points', _as_points(self.points))
        object.__setattr__(self, 'road_type', RoadType(self.road_type))


@dataclass(frozen=True)
class Building:
    name: str
    points: Tuple[Point2, ...]
    bounds_min: Point2
    bounds_max: Point2
    height: float = 0.0
    levels: int = 0

    def __post_init__(self):
        object.__setattr__(self, 'points', _as_points(self.points))
        object.__setattr__(self, 'bounds_min', (float(self.bounds_min[0]), float(self.bounds_min[1])))
        object.__setattr__(self, 'bounds_max', (float(self.bounds_max[0]), float(self.bounds_max[1])))

    @classmethod
    def from_points(cls, name: str, points: Sequence[Point2],
                    height: float = 0.0, levels: int = 0) -> 'Building':
        """Build a building and precompute its polygon AABB."""
        from .geometry import polygon_bounds
        bmin, bmax = polygon_bounds(points)
        return cls(name=name, points=points, bounds_min=bmin,
                   bounds_max=bmax, height=height, levels=levels)


@dataclass(frozen=True)
class GeometrySnapshot:
    """Immutable roads + buildings of one source map."""
    roads: Tuple[Road, ...]
    buildings: Tuple[Building, ...]
    bounds_min: Point2
    bounds_max: Point2

    def __post_init__(self):
        object.__setattr__(self, 'roads', tuple(self.roads))
        object.__setattr__(self, 'buildings', tuple(self.buildings))

    @classmethod
    def from_geometry(cls, roads: Sequence[Road],
                      buildings: Sequence[Building]) -> 'GeometrySnapshot':
        """Create a snapshot whose extent covers every road and building vertex."""
        from .geometry import polygon_bounds
        coords = [p for r in roads for p in r.points]
        coords.extend(p for b in buildings for p in b.points)
        bmin, bmax = polygon_bounds(coords)
        return cls(roads=roads, buildings=buildings,
                   bounds_min=bmin, bounds_max=bmax)


@dataclass(frozen=True)
class Box:
    """Axis-aligned bounding box in 3D."""
    min_x: float
    min_y: float
    min_z: float
    max_x: float
    max_y: float
    max_z: float

    @classmethod
    def from_2d(cls, bounds_min: Point2, bounds_max: Point2,
                z_min: float = 0.0, z_max: float = 0.0) -> 'Box':
        return cls(bounds_min[0], bounds_min[1], z_min,
                   bounds_max[0], bounds_max[1], z_max)

    def is_inside_or_on(self, point: Sequence[float]) -> bool:
        """True if the point lies inside the box or on its boundary."""
        z = point[2] if len(point) > 2 else 0.0
        return (self.min_x <= point[0] <= self.max_x and
                self.min_y <= point[1] <= self.max_y and
                self.min_z <= z <= self.max_z)

    def intersects(self, other: 'Box') -> bool:
        return not (other.min_x > self.max_x or other.max_x < self.min_x or
                    other.min_y > self.max_y or other.max_y < self.min_y or
                    other.min_z > self.max_z or other.max_z < self.min_z)

    @property
    def center(self) -> Point3:
        return ((self.min_x + self.max_x) * 0.5,
                (self.min_y + self.max_y) * 0.5,
                (self.min_z + self.max_z) * 0.5)

    @property
    def extent(self) -> Point3:
        return ((self.max_x - self.min_x) * 0.5,
                (self.max_y - self.min_y) * 0.5,
                (self.max_z - self.min_z) * 0.5)


@dataclass(frozen=True)
class PointSample:
    position: Point3
    half_extent: Point3
    density: float
    seed: int
    attributes: Dict[str, Any] = field(default_factory=dict)


@dataclass
class PointDataset:
    """Ordered point samples sharing one attribute schema."""
    kind: str
    schema: Dict[str, type]
    samples: List[PointSample] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.samples)

    def __iter__(self) -> Iterator[PointSample]:
        return iter(self.samples)

    def positions(self) -> np.ndarray:
        """Sample positions as an (N, 3) float64 array."""
        if not self.samples:
            return np.zeros((0, 3), dtype=np.float64)
        return np.array([s.position for s in self.samples], dtype=np.float64)

    def seeds(self) -> np.ndarray:
        return np.array([s.seed for s in self.samples], dtype=np.uint32)

    def to_records(self) -> List[Dict[str, Any]]:
        """Flatten samples to JSON-friendly dicts."""
        return [
            {
                'position': list(s.position),
                'half_extent': list(s.half_extent),
                'density': s.density,
                'seed': s.seed,
                **s.attributes,
            }
            for s in self.samples
        ]


@dataclass(frozen=True)
class TaggedData:
    """A dataset routed to a named output pin."""
    pin: str
    data: Optional[PointDataset]
