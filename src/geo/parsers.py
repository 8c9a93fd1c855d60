"""
Text readers for single points.

Every public ``parse_*`` function returns a ``Result[Coordinate]``: grammar
violations become ``MalformedInputError``, unsupported values
``ExpectationMismatchError`` and out-of-range numbers ``LocationError``.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Callable

from geo.coordinate import Coordinate
from shared.constants import WGS84_CODE, CoordinateFormat
from shared.exceptions import (
    ExpectationMismatchError,
    MalformedInputError,
)
from shared.result import Result, catching

logger = logging.getLogger(__name__)

_NUMBER = r'[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?'
_UNSIGNED = r'(?:\d+(?:\.\d*)?|\.\d+)'

_NUMBER_RE = re.compile(rf'^{_NUMBER}$')
_DMS_RE = re.compile(
    rf'^({_UNSIGNED})\s*°\s*({_UNSIGNED})\s*\'\s*({_UNSIGNED})\s*"\s*([NSEW])$',
    re.IGNORECASE,
)
_DM_RE = re.compile(
    rf'^({_UNSIGNED})\s*°\s*({_UNSIGNED})\s*\'\s*([NSEW])$',
    re.IGNORECASE,
)
_WKT_POINT_RE = re.compile(
    rf'^POINT\s*\(\s*({_NUMBER})\s+({_NUMBER})\s*\)$',
    re.IGNORECASE,
)
_SRID_RE = re.compile(r'^SRID\s*=\s*([^;]*);(.*)$', re.IGNORECASE | re.DOTALL)
_UTM_ZONE_TOKEN_RE = re.compile(r'^\d{1,2}[A-Za-z]$')

_GEOJSON_POINT_PREFIX = '{"type":"Point"'
_PAIR_SIZE = 2
_UTM_TOKEN_COUNT = 3
_MINUTES_PER_DEGREE = 60.0
_SECONDS_PER_DEGREE = 3600.0


def parse_number(token: str, what: str = 'number') -> float:
    """Strict decimal literal; ``nan``, ``inf`` and underscores are rejected."""
    text = token.strip()
    if not _NUMBER_RE.match(text):
        msg = f'Invalid {what}'
        raise MalformedInputError(msg, token)
    return float(text)


def parse_srid(text: str) -> tuple[int, str]:
    """
    Split ``SRID=<n>;<body>``, insisting on WGS84.

    Raises:
        MalformedInputError: no SRID prefix or a non-integer SRID.
        ExpectationMismatchError: SRID other than 4326.

    """
    match = _SRID_RE.match(text.strip())
    if match is None:
        msg = 'Invalid PostGIS string format'
        raise MalformedInputError(msg, text)
    raw_srid = match.group(1).strip()
    if not raw_srid.isdigit():
        msg = 'Invalid SRID'
        raise MalformedInputError(msg, raw_srid)
    srid = int(raw_srid)
    if srid != WGS84_CODE:
        msg = f'SRID must be {WGS84_CODE}'
        raise ExpectationMismatchError(msg, expected=WGS84_CODE, actual=srid)
    return srid, match.group(2).strip()


def _split_pair(text: str) -> list[str]:
    separator = ';' if ';' in text else ','
    return text.split(separator)


def _split_angle_pair(text: str, what: str) -> tuple[str, str]:
    """Split a DMS/DM pair on ``;``/``,`` or right after the N/S letter."""
    if ';' in text or ',' in text:
        parts = _split_pair(text)
    else:
        upper = text.upper()
        positions = [p for p in (upper.find('N'), upper.find('S')) if p >= 0]
        if not positions:
            msg = f'Invalid {what} format: missing N|S direction'
            raise MalformedInputError(msg, text)
        index = min(positions) + 1
        parts = [text[:index], text[index:]]
    if len(parts) != _PAIR_SIZE:
        msg = f'Invalid {what} format: expected latitude and longitude'
        raise MalformedInputError(msg, text)
    return parts[0].strip(), parts[1].strip()


def _signed(value: float, direction: str, negative: str) -> float:
    return -value if direction.upper() == negative else value


def _check_direction(direction: str, allowed: str, half: str, text: str) -> None:
    if direction.upper() not in allowed:
        msg = f'Invalid {half} direction, expected one of {"|".join(allowed)}'
        raise MalformedInputError(msg, text)


def _check_sexagesimal(value: float, what: str, text: str) -> None:
    if value >= _MINUTES_PER_DEGREE:
        msg = f'{what} must be below 60'
        raise MalformedInputError(msg, text)


def _dms_angle(text: str, allowed: str, negative: str, half: str) -> float:
    match = _DMS_RE.match(text)
    if match is None:
        example = '#°#\'#" ' + '|'.join(allowed)
        msg = f'Invalid {half} format ({example})'
        raise MalformedInputError(msg, text)
    degrees, minutes, seconds, direction = match.groups()
    _check_direction(direction, allowed, half, text)
    m = float(minutes)
    s = float(seconds)
    _check_sexagesimal(m, 'Minutes', text)
    _check_sexagesimal(s, 'Seconds', text)
    value = float(degrees) + m / _MINUTES_PER_DEGREE + s / _SECONDS_PER_DEGREE
    return _signed(value, direction, negative)


def _dm_angle(text: str, allowed: str, negative: str, half: str) -> float:
    match = _DM_RE.match(text)
    if match is None:
        example = "#°#.#' " + '|'.join(allowed)
        msg = f'Invalid {half} format ({example})'
        raise MalformedInputError(msg, text)
    degrees, minutes, direction = match.groups()
    _check_direction(direction, allowed, half, text)
    m = float(minutes)
    _check_sexagesimal(m, 'Minutes', text)
    value = float(degrees) + m / _MINUTES_PER_DEGREE
    return _signed(value, direction, negative)


def wkt_point_lon_lat(text: str) -> tuple[float, float]:
    match = _WKT_POINT_RE.match(text.strip())
    if match is None:
        msg = 'Invalid WKT format'
        raise MalformedInputError(msg, text)
    return float(match.group(1)), float(match.group(2))


@catching
def parse_decimal(text: str) -> Coordinate:
    """``lat;lon`` or ``lat,lon``."""
    parts = _split_pair(text)
    if len(parts) != _PAIR_SIZE:
        msg = 'Invalid decimal coordinate format'
        raise MalformedInputError(msg, text)
    return Coordinate(
        parse_number(parts[0], 'latitude'),
        parse_number(parts[1], 'longitude'),
    )


@catching
def parse_dms(text: str) -> Coordinate:
    """``41° 54' 10.08" N 12° 29' 47.04" E`` with an optional ``;``/``,`` separator."""
    lat_text, lon_text = _split_angle_pair(text.strip(), 'DMS')
    latitude = _dms_angle(lat_text, 'NS', 'S', 'latitude')
    longitude = _dms_angle(lon_text, 'EW', 'W', 'longitude')
    return Coordinate(latitude, longitude)


@catching
def parse_dm(text: str) -> Coordinate:
    """``41° 54.168' N 12° 29.784' E`` with an optional ``;``/``,`` separator."""
    lat_text, lon_text = _split_angle_pair(text.strip(), 'DM')
    latitude = _dm_angle(lat_text, 'NS', 'S', 'latitude')
    longitude = _dm_angle(lon_text, 'EW', 'W', 'longitude')
    return Coordinate(latitude, longitude)


@catching
def parse_utm(text: str) -> Coordinate:
    """``<zone><band> <easting> <northing>``."""
    parts = text.split()
    if len(parts) != _UTM_TOKEN_COUNT:
        msg = 'Invalid UTM format'
        raise MalformedInputError(msg, text)
    zone, easting, northing = parts
    return Coordinate.from_utm(
        zone,
        parse_number(easting, 'easting'),
        parse_number(northing, 'northing'),
    )


@catching
def parse_wkt(text: str) -> Coordinate:
    """``POINT(lon lat)``."""
    longitude, latitude = wkt_point_lon_lat(text)
    return Coordinate(latitude, longitude)


@catching
def parse_geojson(text: str) -> Coordinate:
    """``{"type":"Point","coordinates":[lon,lat]}``; the literal prefix is required."""
    stripped = text.strip()
    if not stripped.startswith(_GEOJSON_POINT_PREFIX):
        msg = 'Invalid GeoJSON format'
        raise MalformedInputError(msg, text)
    try:
        data = json.loads(stripped)
    except json.JSONDecodeError as e:
        msg = f'Invalid GeoJSON document: {e.msg}'
        raise MalformedInputError(msg, text) from e
    return Coordinate.from_geometry(data).unwrap()


@catching
def parse_postgis(text: str) -> Coordinate:
    """``SRID=4326;POINT(lon lat)``; any other SRID is rejected."""
    _, body = parse_srid(text)
    longitude, latitude = wkt_point_lon_lat(body)
    return Coordinate(latitude, longitude)


def _looks_like_utm(text: str) -> bool:
    parts = text.split()
    return len(parts) == _UTM_TOKEN_COUNT and bool(_UTM_ZONE_TOKEN_RE.match(parts[0]))


def detect_format(text: str) -> CoordinateFormat:
    """Guess the point format of ``text`` from its leading token and symbols."""
    stripped = text.strip()
    upper = stripped.upper()
    if upper.startswith('SRID'):
        return CoordinateFormat.POSTGIS
    if stripped.startswith('{'):
        return CoordinateFormat.GEOJSON
    if upper.startswith('POINT'):
        return CoordinateFormat.WKT
    if '°' in stripped:
        return CoordinateFormat.DMS if '"' in stripped else CoordinateFormat.DM
    if _looks_like_utm(stripped):
        return CoordinateFormat.UTM
    return CoordinateFormat.DECIMAL


PARSERS: dict[CoordinateFormat, Callable[[str], Result[Coordinate]]] = {
    CoordinateFormat.DECIMAL: parse_decimal,
    CoordinateFormat.DMS: parse_dms,
    CoordinateFormat.DM: parse_dm,
    CoordinateFormat.UTM: parse_utm,
    CoordinateFormat.WKT: parse_wkt,
    CoordinateFormat.GEOJSON: parse_geojson,
    CoordinateFormat.POSTGIS: parse_postgis,
}


def parse(text: str, fmt: CoordinateFormat | str | None = None) -> Result[Coordinate]:
    """Parse ``text`` as ``fmt``, detecting the format when none is given."""
    if fmt is None:
        fmt = detect_format(text)
        logger.debug('Detected %s input: %r', fmt.value, text)
    return PARSERS[CoordinateFormat(fmt)](text)
