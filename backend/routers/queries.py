from fastapi import APIRouter

from backend.maps import resolve_snapshot
from backend.models import (BuildingsInRadiusRequest, BuildingsInRadiusResponse,
                            NearestRoadPointRequest, NearestRoadPointResponse)
from streetsampler.queries import find_buildings_in_radius, find_nearest_road_point

router = APIRouter(prefix="/api/queries", tags=["queries"])


@router.post("/nearest-road-point", response_model=NearestRoadPointResponse)
async def nearest_road_point(request: NearestRoadPointRequest):
    snapshot = resolve_snapshot(request.map_id)
    found = find_nearest_road_point(snapshot, (request.x, request.y),
                                    request.max_search_distance)
    if found is None:
        return NearestRoadPointResponse(found=False)
    road_index, point_index = found
    return NearestRoadPointResponse(found=True, road_index=road_index,
                                    point_index=point_index)


@router.post("/buildings-in-radius", response_model=BuildingsInRadiusResponse)
async def buildings_in_radius(request: BuildingsInRadiusRequest):
    snapshot = resolve_snapshot(request.map_id)
    return BuildingsInRadiusResponse(
        buildings=find_buildings_in_radius(snapshot, (request.x, request.y),
                                           request.radius))
