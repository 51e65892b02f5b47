import logging
from typing import Optional

from fastapi import HTTPException

from backend import config
from streetsampler.loader import snapshot_from_geojson
from streetsampler.models import GeometrySnapshot
from streetsampler.registry import StreetMapRegistry

logger = logging.getLogger(__name__)


def load_default_map(registry: StreetMapRegistry) -> bool:
    """Register the map named by STREETSAMPLER_DEFAULT_MAP, if any."""
    if not config.DEFAULT_MAP_PATH:
        return False
    try:
        snapshot = snapshot_from_geojson(config.DEFAULT_MAP_PATH,
                                         project=config.PROJECT_LONLAT,
                                         scale=config.MAP_SCALE)
    except Exception as e:
        logger.error(f"Failed to load default map {config.DEFAULT_MAP_PATH}: {e}")
        return False
    return registry.register_map(config.DEFAULT_MAP_ID, snapshot)


def resolve_snapshot(map_id: Optional[str]) -> Optional[GeometrySnapshot]:
    """Explicit ids must exist (404); no id means the primary map, possibly None."""
    if map_id is None:
        return map_registry.primary_map()
    snapshot = map_registry.get_map(map_id)
    if snapshot is None:
        raise HTTPException(status_code=404, detail=f"Map '{map_id}' not found")
    return snapshot


# Singleton instance used across the application
map_registry = StreetMapRegistry()
