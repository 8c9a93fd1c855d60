"""Validated WGS84 point."""

from __future__ import annotations

import math
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import Any

from geo import formats, utm
from geo.utm import UtmPosition
from shared.constants import (
    ANGLE_SEPARATOR,
    DECIMAL_PRECISION,
    DECIMAL_SEPARATOR,
    DM_MINUTES_PRECISION,
    DMS_SECONDS_PRECISION,
    EARTH_RADIUS_KM,
    LATITUDE_MAX,
    LATITUDE_MIN,
    LONGITUDE_MAX,
    LONGITUDE_MIN,
    UTM_PRECISION,
    WGS84_CODE,
)
from shared.exceptions import (
    ExpectationMismatchError,
    LocationError,
    MalformedInputError,
)
from shared.result import catching
from shared.units import LengthUnit, Measurement, convert_length

_POSITION_SIZE = 2


@dataclass(frozen=True, order=True)
class Coordinate:
    """
    Immutable (latitude, longitude) pair in decimal degrees.

    Ordering is lexicographic, latitude first. Out-of-range values raise
    ``LocationError``; nothing is clamped.
    """

    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        latitude = float(self.latitude)
        longitude = float(self.longitude)
        if not self.is_valid_latitude(latitude):
            msg = f'Latitude must be between {LATITUDE_MIN} and {LATITUDE_MAX}, got {latitude}'
            raise LocationError(msg, latitude=latitude, longitude=longitude)
        if not self.is_valid_longitude(longitude):
            msg = f'Longitude must be between {LONGITUDE_MIN} and {LONGITUDE_MAX}, got {longitude}'
            raise LocationError(msg, latitude=latitude, longitude=longitude)
        object.__setattr__(self, 'latitude', latitude)
        object.__setattr__(self, 'longitude', longitude)

    @staticmethod
    def is_valid_latitude(latitude: float) -> bool:
        return LATITUDE_MIN <= latitude <= LATITUDE_MAX

    @staticmethod
    def is_valid_longitude(longitude: float) -> bool:
        return LONGITUDE_MIN <= longitude <= LONGITUDE_MAX

    @classmethod
    def is_valid(cls, latitude: float, longitude: float) -> bool:
        return cls.is_valid_latitude(latitude) and cls.is_valid_longitude(longitude)

    # Alternative constructors

    @classmethod
    def from_tuple(cls, pair: tuple[float, float]) -> Coordinate:
        """Build from ``(latitude, longitude)``."""
        latitude, longitude = pair
        return cls(latitude, longitude)

    @classmethod
    @catching
    def from_point(cls, point: Any) -> Coordinate:
        """Build from any planar point exposing ``x`` (longitude) and ``y`` (latitude)."""
        try:
            x = point.x
            y = point.y
        except AttributeError as e:
            msg = 'Point object must expose x and y'
            raise MalformedInputError(msg, type(point).__name__) from e
        return cls(y, x)

    @classmethod
    @catching
    def from_geometry(cls, geometry: Any, srid: int = WGS84_CODE) -> Coordinate:
        """
        Build from a GeoJSON-like mapping or an object with ``__geo_interface__``.

        Only ``Point`` geometries in EPSG:4326 are accepted.
        """
        if srid != WGS84_CODE:
            msg = f'SRID must be {WGS84_CODE}'
            raise ExpectationMismatchError(msg, expected=WGS84_CODE, actual=srid)
        data = getattr(geometry, '__geo_interface__', geometry)
        if not isinstance(data, Mapping):
            msg = 'Geometry must be a mapping or expose __geo_interface__'
            raise MalformedInputError(msg, type(geometry).__name__)
        kind = data.get('type')
        if kind != 'Point':
            msg = 'Only Point geometries are supported'
            raise ExpectationMismatchError(msg, expected='Point', actual=kind)
        position = data.get('coordinates')
        if (
            not isinstance(position, (list, tuple))
            or len(position) < _POSITION_SIZE
            or not all(
                isinstance(v, (int, float)) and not isinstance(v, bool)
                for v in position[:2]
            )
        ):
            msg = 'Point coordinates must be [longitude, latitude]'
            raise MalformedInputError(msg, repr(position))
        return cls(position[1], position[0])

    @classmethod
    def from_utm(cls, zone: str, easting: float, northing: float) -> Coordinate:
        latitude, longitude = utm.inverse(zone, easting, northing)
        return cls(latitude, longitude)

    # Copies

    def with_latitude(self, latitude: float) -> Coordinate:
        return Coordinate(latitude, self.longitude)

    def with_longitude(self, longitude: float) -> Coordinate:
        return Coordinate(self.latitude, longitude)

    def antipode(self) -> Coordinate:
        """Point on the opposite side of the globe."""
        longitude = self.longitude - 180 if self.longitude >= 0 else self.longitude + 180
        return Coordinate(-self.latitude, longitude)

    def __neg__(self) -> Coordinate:
        return self.antipode()

    def __iter__(self) -> Iterator[float]:
        yield self.latitude
        yield self.longitude

    def to_tuple(self) -> tuple[float, float]:
        return (self.latitude, self.longitude)

    @property
    def __geo_interface__(self) -> dict[str, Any]:
        return {'type': 'Point', 'coordinates': (self.longitude, self.latitude)}

    # Measurements

    def distance_to(
        self,
        other: Coordinate,
        unit: LengthUnit = LengthUnit.KILOMETER,
    ) -> Measurement:
        """Great-circle distance by the Haversine formula on a 6371 km sphere."""
        phi1 = math.radians(self.latitude)
        phi2 = math.radians(other.latitude)
        d_phi = math.radians(other.latitude - self.latitude)
        d_lambda = math.radians(other.longitude - self.longitude)

        a = (
            math.sin(d_phi / 2) ** 2
            + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
        )
        c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

        km = EARTH_RADIUS_KM * c
        return Measurement(convert_length(km, LengthUnit.KILOMETER, unit), unit)

    def bearing_to(self, other: Coordinate) -> float:
        """Initial great-circle bearing towards ``other``, degrees in [0, 360)."""
        phi1 = math.radians(self.latitude)
        phi2 = math.radians(other.latitude)
        d_lambda = math.radians(other.longitude - self.longitude)
        y = math.sin(d_lambda) * math.cos(phi2)
        x = math.cos(phi1) * math.sin(phi2) - math.sin(phi1) * math.cos(phi2) * math.cos(
            d_lambda
        )
        return math.degrees(math.atan2(y, x)) % 360

    # Text

    def to_string(
        self,
        separator: str = DECIMAL_SEPARATOR,
        precision: int = DECIMAL_PRECISION,
    ) -> str:
        return formats.format_decimal(self.latitude, self.longitude, separator, precision)

    def __str__(self) -> str:
        return self.to_string()

    def to_dms(
        self,
        separator: str = ANGLE_SEPARATOR,
        precision: int = DMS_SECONDS_PRECISION,
    ) -> str:
        return formats.format_dms(self.latitude, self.longitude, separator, precision)

    def to_dms_pair(self, precision: int = DMS_SECONDS_PRECISION) -> tuple[str, str]:
        return (
            formats.format_dms_angle(self.latitude, is_latitude=True, precision=precision),
            formats.format_dms_angle(self.longitude, is_latitude=False, precision=precision),
        )

    def to_numeric_dms(
        self,
    ) -> tuple[tuple[float, float, float], tuple[float, float, float]]:
        return formats.dms_parts(self.latitude), formats.dms_parts(self.longitude)

    def to_dm(
        self,
        separator: str = ANGLE_SEPARATOR,
        precision: int = DM_MINUTES_PRECISION,
    ) -> str:
        return formats.format_dm(self.latitude, self.longitude, separator, precision)

    def to_dm_pair(self, precision: int = DM_MINUTES_PRECISION) -> tuple[str, str]:
        return (
            formats.format_dm_angle(self.latitude, is_latitude=True, precision=precision),
            formats.format_dm_angle(self.longitude, is_latitude=False, precision=precision),
        )

    def to_numeric_dm(self) -> tuple[tuple[float, float], tuple[float, float]]:
        return formats.dm_parts(self.latitude), formats.dm_parts(self.longitude)

    def to_utm(self) -> UtmPosition:
        """
        Project to UTM.

        Raises:
            LocationError: latitude outside ``[-80, 84)``.

        """
        return utm.forward(self.latitude, self.longitude)

    def to_utm_string(self, precision: int = UTM_PRECISION) -> str:
        zone, easting, northing = self.to_utm()
        return formats.format_utm(zone, easting, northing, precision)

    def to_wkt(self) -> str:
        return formats.format_wkt_point(self.latitude, self.longitude)

    def to_geojson(self) -> str:
        return formats.format_geojson_point(self.latitude, self.longitude)

    def to_postgis(self) -> str:
        return formats.format_postgis_point(self.latitude, self.longitude)
