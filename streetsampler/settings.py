"""Pipeline node settings and the element that turns them into outputs."""

import logging
from typing import List, Optional, Set

from pydantic import BaseModel, Field

from .models import GeometrySnapshot, RoadType, TaggedData
from .sampler import create_building_point_dataset, create_road_point_dataset

logger = logging.getLogger(__name__)

ROADS_PIN = "Roads"
BUILDINGS_PIN = "Buildings"


class PinProperties(BaseModel):
    label: str
    tooltip: str = ""


class StreetMapSettings(BaseModel):
    """Settings for the street-map data node."""
    output_roads: bool = True
    output_buildings: bool = True
    filter_roads_by_type: bool = False
    allowed_road_types: Set[RoadType] = Field(
        default_factory=lambda: {RoadType.HIGHWAY, RoadType.MAJOR_ROAD,
                                 RoadType.STREET})
    # 0 = include all
    min_building_height: float = Field(default=0.0, ge=0.0)

    def output_pins(self) -> List[PinProperties]:
        pins = []
        if self.output_roads:
            pins.append(PinProperties(
                label=ROADS_PIN,
                tooltip="Road points with metadata (road_name, road_type, "
                        "road_index, point_index, is_one_way)"))
        if self.output_buildings:
            pins.append(PinProperties(
                label=BUILDINGS_PIN,
                tooltip="Building centroids with metadata (building_name, height, "
                        "building_levels, building_index, vertex_count)"))
        return pins

    def road_type_filter(self) -> Optional[Set[RoadType]]:
        return self.allowed_road_types if self.filter_roads_by_type else None


def execute(settings: StreetMapSettings,
            snapshot: Optional[GeometrySnapshot]) -> List[TaggedData]:
    """Run the node: one tagged dataset per enabled output pin."""
    if snapshot is None:
        logger.error("No source geometry supplied to street map node")
        return []

    outputs = []
    if settings.output_roads:
        roads = create_road_point_dataset(
            snapshot, allowed_road_types=settings.road_type_filter())
        outputs.append(TaggedData(pin=ROADS_PIN, data=roads))

    if settings.output_buildings:
        buildings = create_building_point_dataset(
            snapshot, min_height=settings.min_building_height)
        outputs.append(TaggedData(pin=BUILDINGS_PIN, data=buildings))

    logger.info(f"Street map node produced {len(outputs)} output(s): "
                + ", ".join(f"{o.pin}={len(o.data)}" for o in outputs))
    return outputs
