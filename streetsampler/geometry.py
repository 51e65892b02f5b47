"""Bounds tests, filter predicates, and deterministic seed derivation."""

import logging
import zlib
from typing import Collection, Optional, Sequence, Tuple

import numpy as np

from .constants import (DEFAULT_BUILDING_HEIGHT, HEIGHT_EPSILON,
                        SEED_MASK)
from .models import Box, Building, Road, RoadType

logger = logging.getLogger(__name__)


# ── Containment ─────────────────────────────────────────────────────────

def is_inside_or_on(bounds: Optional[Box], point: Sequence[float]) -> bool:
    """Inclusive containment; a missing box contains everything."""
    if bounds is None:
        return True
    return bounds.is_inside_or_on(point)


# ── Seeds ───────────────────────────────────────────────────────────────

def position_hash(x: float, y: float) -> int:
    """Stable 32-bit hash of a 2D position.

    CRC-32 of the little-endian single-precision pair, so the value is the
    same on every platform and run.  -0.0 hashes like 0.0.
    """
    pair = (np.array([x, y], dtype=np.float32) + np.float32(0.0)).astype('<f4')
    return zlib.crc32(pair.tobytes()) & SEED_MASK


def derive_seed(x: float, y: float, salt: int) -> int:
    return (position_hash(x, y) ^ (salt & SEED_MASK)) & SEED_MASK


# ── Polygon helpers ─────────────────────────────────────────────────────

def polygon_centroid(points: Sequence[Tuple[float, float]]) -> Tuple[float, float]:
    """Vertex mean of a polygon; (0, 0) for an empty polygon."""
    if len(points) == 0:
        return 0.0, 0.0
    c = np.asarray(points, dtype=np.float64).mean(axis=0)
    return float(c[0]), float(c[1])


def bounds_midpoint(bounds_min, bounds_max) -> Tuple[float, float]:
    return ((bounds_min[0] + bounds_max[0]) * 0.5,
            (bounds_min[1] + bounds_max[1]) * 0.5)


def polygon_bounds(points) -> Tuple[Tuple[float, float], Tuple[float, float]]:
    """AABB of a point sequence as ((min_x, min_y), (max_x, max_y))."""
    if len(points) == 0:
        return (0.0, 0.0), (0.0, 0.0)
    arr = np.asarray(points, dtype=np.float64)
    lo = arr.min(axis=0)
    hi = arr.max(axis=0)
    return (float(lo[0]), float(lo[1])), (float(hi[0]), float(hi[1]))


def distance_squared_2d(a, b) -> float:
    dx = a[0] - b[0]
    dy = a[1] - b[1]
    return dx * dx + dy * dy


# ── Filters ─────────────────────────────────────────────────────────────

def road_type_allowed(road: Road,
                      allowed: Optional[Collection[RoadType]]) -> bool:
    """True when no allow-set is active or it contains the road's type."""
    if allowed is None:
        return True
    return road.road_type in allowed


def meets_min_height(building: Building, min_height: float) -> bool:
    """A min height of 0 (or less) disables the filter."""
    if min_height > 0.0 and building.height < min_height:
        return False
    return True


def effective_height(building: Building) -> float:
    if building.height > HEIGHT_EPSILON:
        return building.height
    return DEFAULT_BUILDING_HEIGHT
