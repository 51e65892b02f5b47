from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional, Set

from streetsampler.models import RoadType


class BoundsModel(BaseModel):
    min_x: float
    min_y: float
    max_x: float
    max_y: float
    min_z: float = 0.0
    max_z: float = 0.0


class RoadDatasetRequest(BaseModel):
    map_id: Optional[str] = None      # None = primary map
    bounds: Optional[BoundsModel] = None
    allowed_road_types: Optional[Set[RoadType]] = None


class BuildingDatasetRequest(BaseModel):
    map_id: Optional[str] = None
    bounds: Optional[BoundsModel] = None
    min_height: float = Field(default=0.0, ge=0.0)


class DatasetResponse(BaseModel):
    kind: str
    count: int
    attribute_schema: Dict[str, str]
    points: List[Dict[str, Any]]


class NearestRoadPointRequest(BaseModel):
    map_id: Optional[str] = None
    x: float
    y: float
    max_search_distance: float = 0.0


class NearestRoadPointResponse(BaseModel):
    found: bool
    road_index: Optional[int] = None
    point_index: Optional[int] = None


class BuildingsInRadiusRequest(BaseModel):
    map_id: Optional[str] = None
    x: float
    y: float
    radius: float = Field(ge=0.0)


class BuildingsInRadiusResponse(BaseModel):
    buildings: List[int]


class MapInfo(BaseModel):
    map_id: str
    roads: int
    buildings: int
    bounds_min: List[float]
    bounds_max: List[float]
