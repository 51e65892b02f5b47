import json

import pytest
from click.testing import CliRunner

from streetsampler.cli import cli


@pytest.fixture
def map_file(tmp_path, feature_collection):
    path = tmp_path / "map.geojson"
    path.write_text(json.dumps(feature_collection))
    return str(path)


def test_roads_command(map_file):
    result = CliRunner().invoke(cli, ['roads', map_file, '--road-type', 'highway'])
    assert result.exit_code == 0, result.output
    records = json.loads(result.stdout)
    assert [r['point_index'] for r in records] == [0, 1, 2]
    assert records[1]['position'] == [10.0, 0.0, 0.0]
    assert records[0]['is_one_way'] is True


def test_roads_command_bounds(map_file):
    result = CliRunner().invoke(cli, ['roads', map_file, '--bounds', '0', '0', '10', '0'])
    assert result.exit_code == 0, result.output
    assert [r['point_index'] for r in json.loads(result.stdout)] == [0, 1]


def test_buildings_command_to_file(map_file, tmp_path):
    out = tmp_path / "buildings.json"
    result = CliRunner().invoke(cli, ['buildings', map_file, '--min-height', '10',
                                      '-o', str(out)])
    assert result.exit_code == 0, result.output
    records = json.loads(out.read_text())
    assert len(records) == 1
    assert records[0]['building_name'] == "Block"
    assert records[0]['position'] == [5.0, 5.0, 6.0]


def test_query_commands(map_file):
    runner = CliRunner()
    result = runner.invoke(cli, ['nearest', map_file, '9', '1'])
    assert json.loads(result.stdout) == {'found': True, 'road_index': 0, 'point_index': 1}

    result = runner.invoke(cli, ['nearest', map_file, '500', '500', '--max-distance', '10'])
    assert json.loads(result.stdout) == {'found': False}

    result = runner.invoke(cli, ['radius', map_file, '5', '5', '1'])
    assert json.loads(result.stdout) == {'buildings': [0]}


def test_missing_file():
    result = CliRunner().invoke(cli, ['roads', '/nonexistent/map.geojson'])
    assert result.exit_code != 0
