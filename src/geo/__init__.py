"""Geo module - WGS84 points, UTM projection, text codecs and bounding boxes."""

from .coordinate import Coordinate
from .parsers import (
    PARSERS,
    detect_format,
    parse,
    parse_decimal,
    parse_dm,
    parse_dms,
    parse_geojson,
    parse_postgis,
    parse_utm,
    parse_wkt,
)
from .bounding_box import BoundingBox
from .utm import UtmPosition

__all__ = [
    'PARSERS',
    'BoundingBox',
    'Coordinate',
    'UtmPosition',
    'detect_format',
    'parse',
    'parse_decimal',
    'parse_dm',
    'parse_dms',
    'parse_geojson',
    'parse_postgis',
    'parse_utm',
    'parse_wkt',
]
