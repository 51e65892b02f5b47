import logging
from typing import Any, Dict, List

from fastapi import APIRouter, HTTPException

from backend import config
from backend.maps import map_registry
from backend.models import MapInfo
from streetsampler.loader import snapshot_from_geojson

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/maps", tags=["maps"])


def _info(map_id, snapshot) -> MapInfo:
    return MapInfo(
        map_id=map_id,
        roads=len(snapshot.roads),
        buildings=len(snapshot.buildings),
        bounds_min=list(snapshot.bounds_min),
        bounds_max=list(snapshot.bounds_max),
    )


@router.get("", response_model=List[MapInfo])
async def list_maps():
    """Registered maps in registration order; the first is the primary map."""
    return [_info(map_id, snapshot) for map_id, snapshot in map_registry.maps()]


@router.put("/{map_id}", response_model=MapInfo)
async def put_map(map_id: str, feature_collection: Dict[str, Any]):
    """Register a GeoJSON FeatureCollection, replacing any map with this id."""
    if feature_collection.get("type") != "FeatureCollection":
        raise HTTPException(status_code=422, detail="Expected a GeoJSON FeatureCollection")
    snapshot = snapshot_from_geojson(feature_collection,
                                     project=config.PROJECT_LONLAT,
                                     scale=config.MAP_SCALE)
    map_registry.replace_map(map_id, snapshot)
    return _info(map_id, snapshot)


@router.delete("/{map_id}")
async def delete_map(map_id: str):
    if not map_registry.unregister_map(map_id):
        raise HTTPException(status_code=404, detail=f"Map '{map_id}' not found")
    return {"status": "ok", "map_id": map_id}
