"""Command line entry point for geocoord."""

from __future__ import annotations

import argparse
import logging
import sys

from pydantic import ValidationError
from tomlkit.exceptions import TOMLKitError

from domain.models import OutputSettings
from domain.settings import load_settings
from geo.bounding_box import BoundingBox
from geo.coordinate import Coordinate
from geo.parsers import parse
from services.coordinate_transformer import projection_deviation_m
from shared.constants import (
    COORDINATE_FORMAT_LABELS,
    EXIT_OK,
    EXIT_REJECTED_INPUT,
    CoordinateFormat,
    PolygonFormat,
)
from shared.diagnostics import setup_logging
from shared.exceptions import GeoError
from shared.result import Result
from shared.units import LengthUnit

logger = logging.getLogger(__name__)

DISTANCE_PRECISION = 3
DEVIATION_PRECISION = 6


def format_coordinate(
    coordinate: Coordinate,
    fmt: CoordinateFormat,
    settings: OutputSettings,
) -> str:
    """Render a point in ``fmt`` using the precisions from ``settings``."""
    if fmt is CoordinateFormat.DECIMAL:
        return coordinate.to_string(settings.decimal_separator, settings.decimal_precision)
    if fmt is CoordinateFormat.DMS:
        return coordinate.to_dms(settings.angle_separator, settings.dms_seconds_precision)
    if fmt is CoordinateFormat.DM:
        return coordinate.to_dm(settings.angle_separator, settings.dm_minutes_precision)
    if fmt is CoordinateFormat.UTM:
        return coordinate.to_utm_string(settings.utm_precision)
    if fmt is CoordinateFormat.WKT:
        return coordinate.to_wkt()
    if fmt is CoordinateFormat.GEOJSON:
        return coordinate.to_geojson()
    return coordinate.to_postgis()


def parse_polygon(text: str) -> Result[BoundingBox]:
    """Read a WKT, GeoJSON or PostGIS polygon, guessing the format."""
    stripped = text.strip()
    if stripped.upper().startswith('SRID'):
        return BoundingBox.from_postgis(stripped)
    if stripped.startswith('{'):
        return BoundingBox.from_geojson(stripped)
    return BoundingBox.from_wkt(stripped)


def format_polygon(box: BoundingBox, fmt: PolygonFormat) -> str:
    if fmt is PolygonFormat.GEOJSON:
        return box.to_geojson()
    if fmt is PolygonFormat.POSTGIS:
        return box.to_postgis()
    return box.to_wkt()


def _cmd_convert(args: argparse.Namespace, settings: OutputSettings) -> int:
    source = None if args.source_format == 'auto' else CoordinateFormat(args.source_format)
    coordinate = parse(args.text, source).unwrap()
    target = CoordinateFormat(args.target_format)
    logger.info('Converting to %s', COORDINATE_FORMAT_LABELS[target])
    print(format_coordinate(coordinate, target, settings))
    return EXIT_OK


def _cmd_distance(args: argparse.Namespace, settings: OutputSettings) -> int:
    first = parse(args.first).unwrap()
    second = parse(args.second).unwrap()
    unit = LengthUnit.from_symbol(args.unit) if args.unit else settings.distance_unit
    distance = first.distance_to(second, unit)
    print(f'{distance.magnitude:.{DISTANCE_PRECISION}f} {distance.unit.symbol}')
    return EXIT_OK


def _cmd_bbox(args: argparse.Namespace, settings: OutputSettings) -> int:
    box = parse_polygon(args.text).unwrap()
    print(format_polygon(box, PolygonFormat(args.target_format)))
    print(f'width: {box.width:.{settings.decimal_precision}f}')
    print(f'height: {box.height:.{settings.decimal_precision}f}')
    centroid = box.centroid.to_string(
        settings.decimal_separator, settings.decimal_precision
    )
    print(f'centroid: {centroid}')
    if args.contains is not None:
        point = parse(args.contains).unwrap()
        print(f'contains: {str(point in box).lower()}')
    return EXIT_OK


def _cmd_utm_check(args: argparse.Namespace, settings: OutputSettings) -> int:
    coordinate = parse(args.point).unwrap()
    print(coordinate.to_utm_string(settings.utm_precision))
    deviation = projection_deviation_m(coordinate)
    print(f'deviation: {deviation:.{DEVIATION_PRECISION}f} m')
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='geocoord',
        description='geocoord - convert and measure WGS84 coordinates',
    )
    parser.add_argument(
        '--settings',
        default=None,
        help='Path to the TOML settings file',
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable debug logging',
    )
    commands = parser.add_subparsers(dest='command', required=True)

    formats = [f.value for f in CoordinateFormat]

    convert = commands.add_parser('convert', help='Convert a point between formats')
    convert.add_argument('text', help='Point text')
    convert.add_argument(
        '--from',
        dest='source_format',
        choices=['auto', *formats],
        default='auto',
        help='Input format (detected by default)',
    )
    convert.add_argument(
        '--to',
        dest='target_format',
        choices=formats,
        default=CoordinateFormat.DECIMAL.value,
        help='Output format',
    )
    convert.set_defaults(handler=_cmd_convert)

    distance = commands.add_parser('distance', help='Great-circle distance A to B')
    distance.add_argument('first', help='Point A')
    distance.add_argument('second', help='Point B')
    distance.add_argument('--unit', default=None, help='Length unit symbol (km, mi, ...)')
    distance.set_defaults(handler=_cmd_distance)

    bbox = commands.add_parser('bbox', help='Bounding box of a polygon')
    bbox.add_argument('text', help='WKT, GeoJSON or PostGIS polygon')
    bbox.add_argument(
        '--to',
        dest='target_format',
        choices=[f.value for f in PolygonFormat],
        default=PolygonFormat.WKT.value,
        help='Output format',
    )
    bbox.add_argument('--contains', default=None, help='Point to test for containment')
    bbox.set_defaults(handler=_cmd_bbox)

    utm_check = commands.add_parser(
        'utm-check', help='Compare the UTM series with PROJ for a point'
    )
    utm_check.add_argument('point', help='Point text')
    utm_check.set_defaults(handler=_cmd_utm_check)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main application entry point."""
    args = build_parser().parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.WARNING)

    try:
        settings = load_settings(args.settings)
    except (ValidationError, TOMLKitError) as e:
        print(f'Invalid settings: {e}', file=sys.stderr)
        return EXIT_REJECTED_INPUT

    try:
        return args.handler(args, settings)
    except GeoError as e:
        logger.debug('Command %s rejected input', args.command, exc_info=True)
        print(f'Error: {e}', file=sys.stderr)
        return EXIT_REJECTED_INPUT


if __name__ == '__main__':
    sys.exit(main())
