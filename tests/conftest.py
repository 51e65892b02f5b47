import pytest

from streetsampler.models import Building, GeometrySnapshot, Road, RoadType


@pytest.fixture
def snapshot():
    roads = [
        Road(name="Main St", road_type=RoadType.STREET,
             points=[(0, 0), (10, 0), (20, 0)]),
        Road(name="Ring Rd", road_type=RoadType.HIGHWAY,
             points=[(0, 100), (50, 100)], is_one_way=True),
        Road(name="", road_type=RoadType.OTHER, points=[(200, 200)]),
    ]
    buildings = [
        Building.from_points("Tower", [(0, 0), (10, 0), (10, 10), (0, 10)],
                             height=300.0, levels=80),
        Building.from_points("Shed", [(100, 100), (104, 100), (104, 104), (100, 104)],
                             height=0.0, levels=1),
        Building.from_points("Hall", [(40, 0), (60, 0), (60, 30), (40, 30)],
                             height=99.999, levels=25),
    ]
    return GeometrySnapshot.from_geometry(roads, buildings)


@pytest.fixture
def feature_collection():
    return {
        "type": "FeatureCollection",
        "features": [
            {
                "type": "Feature",
                "properties": {"highway": "primary", "name": "High St", "oneway": "yes"},
                "geometry": {"type": "LineString", "coordinates": [[0, 0], [10, 0], [20, 0]]},
            },
            {
                "type": "Feature",
                "properties": {"highway": "footway", "bridge": "yes"},
                "geometry": {"type": "MultiLineString",
                             "coordinates": [[[0, 5], [0, 6]], [[1, 5], [1, 6]]]},
            },
            {
                "type": "Feature",
                "properties": {"building": "yes", "name": "Block", "height": "12 m",
                               "building:levels": "4"},
                "geometry": {"type": "Polygon",
                             "coordinates": [[[0, 0], [10, 0], [10, 10], [0, 10], [0, 0]]]},
            },
            {
                "type": "Feature",
                "properties": {"building": "house", "building:levels": "2"},
                "geometry": {"type": "Polygon",
                             "coordinates": [[[20, 20], [24, 20], [24, 24], [20, 20]]]},
            },
            {
                "type": "Feature",
                "properties": {"amenity": "bench"},
                "geometry": {"type": "Point", "coordinates": [3, 3]},
            },
        ],
    }
