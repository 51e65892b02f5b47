"""Build geometry snapshots from GeoJSON road and building features."""

import json
import logging
import math
import pathlib
from typing import Any, Dict, List, Optional, Union

import numpy as np
from pyproj import Transformer
from shapely.geometry import (
    shape, Polygon, MultiPolygon, LineString, MultiLineString,
)

from .constants import LEVEL_HEIGHT, ONE_WAY_VALUES, ROAD_TYPE_TAGS
from .models import Building, GeometrySnapshot, Road, RoadType

logger = logging.getLogger(__name__)

_ROAD_TYPE_BY_TAG = {
    tag: RoadType[category.upper()]
    for category, tags in ROAD_TYPE_TAGS.items()
    for tag in tags
}


# ── Coordinate transforms ───────────────────────────────────────────────

def utm_transformer_for(lon: float, lat: float) -> Transformer:
    """WGS84 → UTM transformer for the zone containing (lon, lat)."""
    utm_zone = int((lon + 180) / 6) + 1
    utm_epsg = 32600 + utm_zone if lat >= 0 else 32700 + utm_zone
    logger.info(f"Using UTM zone {utm_zone} (EPSG:{utm_epsg}) "
                f"for coordinate transform")
    return Transformer.from_crs("EPSG:4326", f"EPSG:{utm_epsg}", always_xy=True)


def _transform_coords(coords, transformer: Optional[Transformer],
                      scale: float) -> List[tuple]:
    out = []
    for x, y, *_ in coords:
        if transformer is not None:
            x, y = transformer.transform(x, y)
        if np.isnan(x) or np.isnan(y):
            continue
        out.append((x * scale, y * scale))
    return out


# ── Tag parsing ─────────────────────────────────────────────────────────

def classify_road(props: Dict[str, Any]) -> RoadType:
    highway = str(props.get('highway') or '').strip().lower()
    road_type = _ROAD_TYPE_BY_TAG.get(highway, RoadType.OTHER)
    bridge = str(props.get('bridge') or '').strip().lower()
    if bridge and bridge != 'no' and road_type != RoadType.HIGHWAY:
        return RoadType.BRIDGE
    return road_type


def is_one_way(props: Dict[str, Any]) -> bool:
    return str(props.get('oneway') or '').strip().lower() in ONE_WAY_VALUES


def parse_levels(props: Dict[str, Any]) -> int:
    raw = props.get('building:levels')
    if raw is None:
        return 0
    try:
        lvl = float(raw)
    except (ValueError, TypeError):
        return 0
    if math.isnan(lvl) or lvl <= 0:
        return 0
    return int(lvl)


def parse_height(props: Dict[str, Any]) -> float:
    """Height in metres from OSM tags; 0.0 when unknown."""
    for tag in ['height', 'building:height']:
        raw = props.get(tag)
        if raw is None:
            continue
        raw_str = str(raw).strip().lower()
        try:
            # Handle "XX ft" / "XX m" suffixes
            if raw_str.endswith(' ft') or raw_str.endswith("'"):
                h = float(raw_str.replace(' ft', '').replace("'", '')) * 0.3048
            elif raw_str.endswith(' m'):
                h = float(raw_str.replace(' m', ''))
            else:
                h = float(raw_str)
        except (ValueError, TypeError):
            continue
        if not math.isnan(h) and h > 0:
            return h

    levels = parse_levels(props)
    if levels:
        return levels * LEVEL_HEIGHT
    return 0.0


# ── Features → snapshot ─────────────────────────────────────────────────

def _road_parts(geom):
    if isinstance(geom, LineString):
        return [geom]
    if isinstance(geom, MultiLineString):
        return list(geom.geoms)
    return []


def _building_parts(geom):
    if isinstance(geom, Polygon):
        return [geom]
    if isinstance(geom, MultiPolygon):
        return list(geom.geoms)
    return []


def _feature_geometry(feature: Dict[str, Any]):
    geometry = feature.get('geometry')
    if not geometry:
        raise ValueError("missing geometry")
    return shape(geometry)


def _convert_feature(feature: Dict[str, Any], transformer: Optional[Transformer],
                     scale: float, roads: List[Road], buildings: List[Building]) -> None:
    props = feature.get('properties') or {}
    geom = _feature_geometry(feature)

    name = str(props.get('name') or '')
    if props.get('highway'):
        road_type = classify_road(props)
        one_way = is_one_way(props)
        for part in _road_parts(geom):
            coords = _transform_coords(part.coords, transformer, scale)
            if not coords:
                continue
            roads.append(Road(name=name, road_type=road_type,
                              points=coords, is_one_way=one_way))
    elif props.get('building') and str(props['building']) != 'no':
        height = parse_height(props) * scale
        levels = parse_levels(props)
        for part in _building_parts(geom):
            # Drop the repeated closing vertex; the loop is implied
            ring = list(part.exterior.coords)[:-1]
            coords = _transform_coords(ring, transformer, scale)
            if not coords:
                continue
            buildings.append(Building.from_points(
                name, coords, height=height, levels=levels))


def snapshot_from_features(features: List[Dict[str, Any]],
                           transformer: Optional[Transformer] = None,
                           scale: float = 1.0) -> GeometrySnapshot:
    """Convert GeoJSON features into a snapshot.

    Features tagged ``highway`` become roads, features tagged ``building``
    become buildings; anything else is ignored.  Multi-part geometries
    yield one road/building per part.  A feature that fails to convert is
    logged and skipped.
    """
    roads: List[Road] = []
    buildings: List[Building] = []
    skipped = 0

    for idx, feature in enumerate(features):
        # Stage into per-feature lists so a failure leaves no partial parts
        feature_roads: List[Road] = []
        feature_buildings: List[Building] = []
        try:
            _convert_feature(feature, transformer, scale,
                             feature_roads, feature_buildings)
        except Exception as e:
            logger.warning(f"Skipping feature {idx}: {e}")
            skipped += 1
            continue
        roads.extend(feature_roads)
        buildings.extend(feature_buildings)

    logger.info(f"Loaded {len(roads)} roads and {len(buildings)} buildings "
                f"({skipped} features skipped)")
    return GeometrySnapshot.from_geometry(roads, buildings)


def _projection_origin(features: List[Dict[str, Any]]) -> Optional[tuple]:
    """First usable (lon, lat) in the collection, or None."""
    for feature in features:
        try:
            geom = _feature_geometry(feature)
        except Exception:
            continue
        if geom.is_empty:
            continue
        point = geom.representative_point()
        return point.x, point.y
    return None


def snapshot_from_geojson(source: Union[str, pathlib.Path, Dict[str, Any]],
                          project: bool = False,
                          scale: float = 1.0,
                          transformer: Optional[Transformer] = None) -> GeometrySnapshot:
    """Load a FeatureCollection from a path or an already-parsed mapping.

    With ``project=True`` lon/lat input is moved to the UTM zone of the
    first feature with usable geometry before scaling.  An explicit
    ``transformer`` takes precedence over ``project``.
    """
    if isinstance(source, (str, pathlib.Path)):
        with open(source, 'r', encoding='utf-8') as f:
            data = json.load(f)
    else:
        data = source

    features = data.get('features', [])
    if transformer is None and project:
        origin = _projection_origin(features)
        if origin is None:
            logger.warning("No usable geometry to pick a UTM zone from; "
                           "loading without projection")
        else:
            transformer = utm_transformer_for(*origin)
    return snapshot_from_features(features, transformer=transformer, scale=scale)
