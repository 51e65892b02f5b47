"""Click CLI commands for StreetSampler."""

import json
import logging
from typing import Optional, Tuple

import click

from .loader import snapshot_from_geojson
from .models import Box, RoadType
from .queries import find_buildings_in_radius, find_nearest_road_point
from .sampler import create_building_point_dataset, create_road_point_dataset

logger = logging.getLogger(__name__)

_ROAD_TYPE_NAMES = [t.name.lower() for t in RoadType]


def _load(geojson: str, project: bool, scale: float):
    try:
        return snapshot_from_geojson(geojson, project=project, scale=scale)
    except Exception as e:
        logger.error(f"Error loading street map: {e}")
        raise click.ClickException(str(e))


def _bounds(values: Optional[Tuple[float, float, float, float]]) -> Optional[Box]:
    if not values:
        return None
    min_x, min_y, max_x, max_y = values
    return Box.from_2d((min_x, min_y), (max_x, max_y))


def _emit(payload, output: Optional[str]):
    text = json.dumps(payload, indent=2)
    if output:
        with open(output, 'w', encoding='utf-8') as f:
            f.write(text)
        click.echo(f"Wrote {output}")
    else:
        click.echo(text)


def _map_options(fn):
    fn = click.option('--scale', '-s', default=1.0,
                      help='Scale factor (e.g. 100 for m→cm)')(fn)
    fn = click.option('--project/--no-project', default=False,
                      help='Project lon/lat input to UTM metres')(fn)
    fn = click.argument('geojson', type=click.Path(exists=True, dir_okay=False))(fn)
    return fn


@click.group()
def cli():
    """StreetSampler CLI: point datasets and spatial queries over street maps."""
    pass


@cli.command()
@_map_options
@click.option('--bounds', nargs=4, type=float, default=None,
              help='Containment box: MIN_X MIN_Y MAX_X MAX_Y')
@click.option('--road-type', 'road_types', multiple=True,
              type=click.Choice(_ROAD_TYPE_NAMES), help='Allowed road type (repeatable)')
@click.option('--output', '-o', default=None, help='Output JSON file path')
def roads(geojson, project, scale, bounds, road_types, output):
    """Sample every road vertex as a point."""
    snapshot = _load(geojson, project, scale)
    allowed = {RoadType[t.upper()] for t in road_types} or None
    dataset = create_road_point_dataset(snapshot, _bounds(bounds), allowed)
    _emit(dataset.to_records(), output)


@cli.command()
@_map_options
@click.option('--bounds', nargs=4, type=float, default=None,
              help='Containment box: MIN_X MIN_Y MAX_X MAX_Y')
@click.option('--min-height', default=0.0, type=click.FloatRange(min=0.0),
              help='Skip buildings lower than this (0 = include all)')
@click.option('--output', '-o', default=None, help='Output JSON file path')
def buildings(geojson, project, scale, bounds, min_height, output):
    """Sample every building centroid as a point."""
    snapshot = _load(geojson, project, scale)
    dataset = create_building_point_dataset(snapshot, _bounds(bounds), min_height)
    _emit(dataset.to_records(), output)


@cli.command()
@_map_options
@click.argument('x', type=float)
@click.argument('y', type=float)
@click.option('--max-distance', default=0.0, help='Search cutoff (0 = default 1 km)')
def nearest(geojson, project, scale, x, y, max_distance):
    """Find the road vertex closest to X Y."""
    snapshot = _load(geojson, project, scale)
    found = find_nearest_road_point(snapshot, (x, y), max_distance)
    if found is None:
        _emit({'found': False}, None)
        return
    road_index, point_index = found
    _emit({'found': True, 'road_index': road_index,
           'point_index': point_index}, None)


@cli.command()
@_map_options
@click.argument('x', type=float)
@click.argument('y', type=float)
@click.argument('radius', type=float)
def radius(geojson, project, scale, x, y, radius):
    """List buildings whose bounds centre lies within RADIUS of X Y."""
    snapshot = _load(geojson, project, scale)
    _emit({'buildings': find_buildings_in_radius(snapshot, (x, y), radius)}, None)


if __name__ == '__main__':
    cli()
