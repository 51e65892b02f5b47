import zlib
import struct

from streetsampler.constants import DEFAULT_BUILDING_HEIGHT
from streetsampler.geometry import (bounds_midpoint, derive_seed, effective_height,
                                    is_inside_or_on, meets_min_height,
                                    polygon_bounds, polygon_centroid,
                                    position_hash, road_type_allowed)
from streetsampler.models import Box, Building, Road, RoadType


def test_position_hash_is_crc32_of_float32_pair():
    expected = zlib.crc32(struct.pack('<ff', 10.0, 0.0))
    assert position_hash(10.0, 0.0) == expected
    assert position_hash(10, 0) == expected


def test_position_hash_negative_zero():
    assert position_hash(-0.0, 0.0) == position_hash(0.0, 0.0)


def test_derive_seed_xor_and_mask():
    h = position_hash(3.5, -2.0)
    assert derive_seed(3.5, -2.0, 0) == h
    assert derive_seed(3.5, -2.0, 1001) == h ^ 1001
    assert 0 <= derive_seed(3.5, -2.0, -1) <= 0xFFFFFFFF


def test_box_boundary_is_inside():
    box = Box.from_2d((0, 0), (10, 10))
    assert is_inside_or_on(box, (10, 10, 0))
    assert is_inside_or_on(box, (0, 5))
    assert not is_inside_or_on(box, (10.0001, 5, 0))
    assert not is_inside_or_on(box, (5, 5, 1))
    assert is_inside_or_on(None, (1e9, 1e9, 1e9))


def test_box_intersects():
    a = Box(0, 0, 0, 10, 10, 0)
    assert a.intersects(Box(10, 10, 0, 20, 20, 0))
    assert not a.intersects(Box(11, 0, 0, 20, 10, 0))


def test_centroid_and_bounds():
    square = [(0, 0), (10, 0), (10, 10), (0, 10)]
    assert polygon_centroid(square) == (5.0, 5.0)
    assert polygon_centroid([]) == (0.0, 0.0)
    assert polygon_bounds(square) == ((0.0, 0.0), (10.0, 10.0))
    assert bounds_midpoint((0, 0), (10, 20)) == (5.0, 10.0)


def test_filters():
    road = Road(name="x", road_type=RoadType.BRIDGE, points=[(0, 0)])
    assert road_type_allowed(road, None)
    assert not road_type_allowed(road, {RoadType.STREET})
    assert road_type_allowed(road, {RoadType.BRIDGE})

    b = Building.from_points("b", [(0, 0)], height=99.999)
    assert meets_min_height(b, 0.0)
    assert not meets_min_height(b, 100.0)
    assert meets_min_height(b, 99.999)


def test_effective_height_default():
    assert effective_height(Building.from_points("b", [], height=0.0)) == DEFAULT_BUILDING_HEIGHT
    assert effective_height(Building.from_points("b", [], height=0.00001)) == DEFAULT_BUILDING_HEIGHT
    assert effective_height(Building.from_points("b", [], height=12.0)) == 12.0
