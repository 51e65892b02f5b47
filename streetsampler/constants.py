"""Sampling constants, road classification, and logging configuration."""

import os
import logging

from dotenv import load_dotenv

# ── Sampling constants ──────────────────────────────────────────────────
# Lengths are in the map's native unit (centimetres for imported maps).
ROAD_POINT_HALF_EXTENT = (50.0, 50.0, 50.0)
BUILDING_SAMPLE_HALF_EXTENT = (100.0, 100.0, 100.0)
MIN_BUILDING_HALF_EXTENT = 50.0     # floor for pipeline building footprints
DEFAULT_BUILDING_HEIGHT = 300.0     # used when a building has no height
HEIGHT_EPSILON = 1e-4               # heights at or below this are "unspecified"
SAMPLE_DENSITY = 1.0

# Seeds: hash(position) ^ (road_index * SEED_ROAD_STRIDE + point_index).
# Assumes < 1000 points per road.  Do not change without versioning seeds.
SEED_ROAD_STRIDE = 1000
SEED_MASK = 0xFFFFFFFF

# 1 km in centimetres
DEFAULT_MAX_SEARCH_DISTANCE = 100000.0

# ── Road classification for imported OSM highways ───────────────────────
ROAD_TYPE_TAGS = {
    'highway': ['motorway', 'trunk', 'motorway_link', 'trunk_link'],
    'major_road': ['primary', 'secondary', 'primary_link',
                   'secondary_link'],
    'street': ['tertiary', 'tertiary_link', 'residential', 'service',
               'unclassified', 'living_street', 'road', 'pedestrian'],
}
ONE_WAY_VALUES = frozenset({'yes', 'true', '1', '-1'})
LEVEL_HEIGHT = 3.0  # metres per building level when no height tag

# Load environment variables
load_dotenv()

LOG_LEVEL = os.environ.get("STREETSAMPLER_LOG_LEVEL", "INFO").upper()

# Configure logging
logging.basicConfig(level=LOG_LEVEL, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)
