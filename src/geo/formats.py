"""Text writers for points and rectangles.

All functions work on plain floats so that ``geo.coordinate`` and
``geo.bounding_box`` can use them without import cycles. Geometry formats
always put longitude first.
"""

from __future__ import annotations

import json
from collections.abc import Sequence

from shared.constants import (
    ANGLE_SEPARATOR,
    DECIMAL_PRECISION,
    DECIMAL_SEPARATOR,
    DM_MINUTES_PRECISION,
    DMS_SECONDS_PRECISION,
    UTM_PRECISION,
    WGS84_CODE,
)

_MINUTES_PER_DEGREE = 60


def _direction(value: float, *, is_latitude: bool) -> str:
    if is_latitude:
        return 'N' if value >= 0 else 'S'
    return 'E' if value >= 0 else 'W'


def dms_parts(decimal_degrees: float) -> tuple[float, float, float]:
    """Unsigned (degrees, minutes, seconds); degrees and minutes are whole."""
    value = abs(decimal_degrees)
    degrees = int(value)
    fractional = (value - degrees) * _MINUTES_PER_DEGREE
    minutes = int(fractional)
    seconds = (fractional - minutes) * _MINUTES_PER_DEGREE
    return float(degrees), float(minutes), seconds


def dm_parts(decimal_degrees: float) -> tuple[float, float]:
    """Unsigned (degrees, decimal minutes); degrees are whole."""
    value = abs(decimal_degrees)
    degrees = int(value)
    return float(degrees), (value - degrees) * _MINUTES_PER_DEGREE


def format_dms_angle(
    decimal_degrees: float,
    *,
    is_latitude: bool,
    precision: int = DMS_SECONDS_PRECISION,
) -> str:
    """``41° 54' 10.0800" N`` style; rounding overflow carries into minutes."""
    degrees, minutes, seconds = dms_parts(decimal_degrees)
    seconds = round(seconds, precision)
    if seconds >= _MINUTES_PER_DEGREE:
        seconds -= _MINUTES_PER_DEGREE
        minutes += 1
    if minutes >= _MINUTES_PER_DEGREE:
        minutes -= _MINUTES_PER_DEGREE
        degrees += 1
    direction = _direction(decimal_degrees, is_latitude=is_latitude)
    return f'{int(degrees)}° {int(minutes)}\' {seconds:.{precision}f}" {direction}'


def format_dm_angle(
    decimal_degrees: float,
    *,
    is_latitude: bool,
    precision: int = DM_MINUTES_PRECISION,
) -> str:
    """``41° 54.1680' N`` style; rounding overflow carries into degrees."""
    degrees, minutes = dm_parts(decimal_degrees)
    minutes = round(minutes, precision)
    if minutes >= _MINUTES_PER_DEGREE:
        minutes -= _MINUTES_PER_DEGREE
        degrees += 1
    direction = _direction(decimal_degrees, is_latitude=is_latitude)
    return f"{int(degrees)}° {minutes:.{precision}f}' {direction}"


def format_decimal(
    latitude: float,
    longitude: float,
    separator: str = DECIMAL_SEPARATOR,
    precision: int = DECIMAL_PRECISION,
) -> str:
    return f'{latitude:.{precision}f}{separator}{longitude:.{precision}f}'


def format_dms(
    latitude: float,
    longitude: float,
    separator: str = ANGLE_SEPARATOR,
    precision: int = DMS_SECONDS_PRECISION,
) -> str:
    lat = format_dms_angle(latitude, is_latitude=True, precision=precision)
    lon = format_dms_angle(longitude, is_latitude=False, precision=precision)
    return f'{lat}{separator}{lon}'


def format_dm(
    latitude: float,
    longitude: float,
    separator: str = ANGLE_SEPARATOR,
    precision: int = DM_MINUTES_PRECISION,
) -> str:
    lat = format_dm_angle(latitude, is_latitude=True, precision=precision)
    lon = format_dm_angle(longitude, is_latitude=False, precision=precision)
    return f'{lat}{separator}{lon}'


def format_utm(
    zone: str,
    easting: float,
    northing: float,
    precision: int = UTM_PRECISION,
) -> str:
    return f'{zone} {easting:.{precision}f} {northing:.{precision}f}'


def format_wkt_point(latitude: float, longitude: float) -> str:
    return f'POINT({longitude!r} {latitude!r})'


def format_postgis_point(latitude: float, longitude: float) -> str:
    return f'SRID={WGS84_CODE};{format_wkt_point(latitude, longitude)}'


def format_geojson_point(latitude: float, longitude: float) -> str:
    return json.dumps(
        {'type': 'Point', 'coordinates': [longitude, latitude]},
        separators=(',', ':'),
    )


def format_wkt_polygon(ring: Sequence[tuple[float, float]]) -> str:
    """``POLYGON((lon lat, ...))`` from a ring of (longitude, latitude) pairs."""
    body = ', '.join(f'{lon!r} {lat!r}' for lon, lat in ring)
    return f'POLYGON(({body}))'


def format_postgis_polygon(ring: Sequence[tuple[float, float]]) -> str:
    return f'SRID={WGS84_CODE};{format_wkt_polygon(ring)}'


def format_geojson_polygon(ring: Sequence[tuple[float, float]]) -> str:
    return json.dumps(
        {'type': 'Polygon', 'coordinates': [[[lon, lat] for lon, lat in ring]]},
        separators=(',', ':'),
    )
