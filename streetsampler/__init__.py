"""StreetSampler package — point datasets and spatial queries over street maps.

Import constants FIRST so logging and environment settings are applied
before any other module logs.
"""

from streetsampler import constants as _constants  # noqa: F401

from streetsampler.models import (Box, Building, GeometrySnapshot, PointDataset,
                                  PointSample, Road, RoadType)
from streetsampler.sampler import (create_building_point_dataset,
                                   create_road_point_dataset)
from streetsampler.queries import find_buildings_in_radius, find_nearest_road_point
from streetsampler.registry import StreetMapRegistry
