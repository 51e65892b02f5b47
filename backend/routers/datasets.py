import logging
from typing import Optional

from fastapi import APIRouter

from backend.maps import resolve_snapshot
from backend.models import (BoundsModel, BuildingDatasetRequest,
                            DatasetResponse, RoadDatasetRequest)
from streetsampler.models import Box, PointDataset
from streetsampler.sampler import (create_building_point_dataset,
                                   create_road_point_dataset)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/datasets", tags=["datasets"])


def _box(bounds: Optional[BoundsModel]) -> Optional[Box]:
    if bounds is None:
        return None
    return Box(bounds.min_x, bounds.min_y, bounds.min_z,
               bounds.max_x, bounds.max_y, bounds.max_z)


def _response(dataset: PointDataset) -> DatasetResponse:
    return DatasetResponse(
        kind=dataset.kind,
        count=len(dataset),
        attribute_schema={k: t.__name__ for k, t in dataset.schema.items()},
        points=dataset.to_records(),
    )


@router.post("/roads", response_model=DatasetResponse)
async def road_dataset(request: RoadDatasetRequest):
    """Road-vertex samples of the requested (or primary) map."""
    snapshot = resolve_snapshot(request.map_id)
    dataset = create_road_point_dataset(snapshot, _box(request.bounds),
                                        request.allowed_road_types)
    return _response(dataset)


@router.post("/buildings", response_model=DatasetResponse)
async def building_dataset(request: BuildingDatasetRequest):
    """Building-centroid samples of the requested (or primary) map."""
    snapshot = resolve_snapshot(request.map_id)
    dataset = create_building_point_dataset(snapshot, _box(request.bounds),
                                            request.min_height)
    return _response(dataset)
