import logging

import pytest
from pydantic import ValidationError

from streetsampler.models import RoadType
from streetsampler.settings import (BUILDINGS_PIN, ROADS_PIN, StreetMapSettings,
                                    execute)


def test_default_settings():
    settings = StreetMapSettings()
    assert settings.output_roads and settings.output_buildings
    assert settings.allowed_road_types == {RoadType.HIGHWAY, RoadType.MAJOR_ROAD,
                                           RoadType.STREET}
    assert settings.road_type_filter() is None
    assert [p.label for p in settings.output_pins()] == [ROADS_PIN, BUILDINGS_PIN]


def test_negative_min_height_rejected():
    with pytest.raises(ValidationError):
        StreetMapSettings(min_building_height=-1.0)


def test_execute_outputs(snapshot):
    outputs = execute(StreetMapSettings(), snapshot)
    assert [o.pin for o in outputs] == [ROADS_PIN, BUILDINGS_PIN]
    assert len(outputs[0].data) == 6
    assert len(outputs[1].data) == 3
    # Pipeline output floors building footprints
    assert outputs[1].data.samples[0].half_extent == (50.0, 50.0, 150.0)


def test_execute_filters(snapshot):
    settings = StreetMapSettings(output_buildings=False, filter_roads_by_type=True,
                                 min_building_height=100.0)
    outputs = execute(settings, snapshot)
    assert [o.pin for o in outputs] == [ROADS_PIN]
    # Road 2 is OTHER and not in the default allow-set
    assert {s.attributes['road_index'] for s in outputs[0].data} == {0, 1}

    settings = StreetMapSettings(output_roads=False, min_building_height=100.0)
    (buildings,) = execute(settings, snapshot)
    assert [s.attributes['building_index'] for s in buildings.data] == [0]


def test_execute_without_snapshot_logs_once(caplog):
    with caplog.at_level(logging.ERROR):
        assert execute(StreetMapSettings(), None) == []
    errors = [r for r in caplog.records if r.levelno == logging.ERROR]
    assert len(errors) == 1
