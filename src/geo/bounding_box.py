"""Axis-aligned WGS84 rectangle built from two corner coordinates."""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from geo import formats
from geo.coordinate import Coordinate
from geo.parsers import parse_number, parse_srid
from shared.exceptions import (
    ExpectationMismatchError,
    LocationError,
    MalformedInputError,
)
from shared.result import catching

logger = logging.getLogger(__name__)

_WKT_POLYGON_RE = re.compile(r'^POLYGON\s*\((.*)\)$', re.IGNORECASE | re.DOTALL)
_WKT_RING_RE = re.compile(r'\(([^()]*)\)')
_POSITION_SIZE = 2


def _wkt_vertices(text: str) -> list[tuple[float, float]]:
    """All (longitude, latitude) vertices of every ring of a WKT polygon."""
    match = _WKT_POLYGON_RE.match(text.strip())
    if match is None:
        msg = 'Invalid WKT polygon format'
        raise MalformedInputError(msg, text)
    body = match.group(1).strip()
    rings = _WKT_RING_RE.findall(body)
    if not rings or _WKT_RING_RE.sub('', body).replace(',', '').strip():
        msg = 'Invalid WKT polygon rings'
        raise MalformedInputError(msg, body)

    vertices: list[tuple[float, float]] = []
    for ring in rings:
        for pair in ring.split(','):
            tokens = pair.split()
            if len(tokens) != _POSITION_SIZE:
                msg = 'Invalid WKT polygon vertex'
                raise MalformedInputError(msg, pair.strip())
            vertices.append(
                (parse_number(tokens[0], 'longitude'), parse_number(tokens[1], 'latitude'))
            )
    return vertices


def _geojson_vertices(text: str) -> list[tuple[float, float]]:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        msg = f'Invalid GeoJSON document: {e.msg}'
        raise MalformedInputError(msg, text) from e
    if not isinstance(data, dict):
        msg = 'GeoJSON geometry must be an object'
        raise MalformedInputError(msg, text)
    kind = data.get('type')
    if kind != 'Polygon':
        msg = 'Only Polygon geometries are supported'
        raise ExpectationMismatchError(msg, expected='Polygon', actual=kind)
    rings = data.get('coordinates')
    if not isinstance(rings, list) or not rings:
        msg = 'Polygon coordinates must be a list of rings'
        raise MalformedInputError(msg, repr(rings))

    vertices: list[tuple[float, float]] = []
    for ring in rings:
        if not isinstance(ring, list) or not ring:
            msg = 'Polygon ring must be a non-empty list of positions'
            raise MalformedInputError(msg, repr(ring))
        for position in ring:
            if (
                not isinstance(position, list)
                or len(position) < _POSITION_SIZE
                or not all(
                    isinstance(v, (int, float)) and not isinstance(v, bool)
                    for v in position[:2]
                )
            ):
                msg = 'Polygon position must be [longitude, latitude]'
                raise MalformedInputError(msg, repr(position))
            vertices.append((float(position[0]), float(position[1])))
    return vertices


@dataclass(frozen=True, order=True)
class BoundingBox:
    """
    Rectangle between a south-west ``min`` and a north-east ``max`` corner.

    Boundaries are inclusive. ``min`` must not exceed ``max`` on either axis, so
    boxes crossing the antimeridian cannot be represented.
    """

    min: Coordinate
    max: Coordinate

    def __post_init__(self) -> None:
        if (
            self.min.latitude > self.max.latitude
            or self.min.longitude > self.max.longitude
        ):
            msg = f'Bounding box min ({self.min}) must not exceed max ({self.max})'
            raise LocationError(msg)

    @classmethod
    def from_points(cls, first: Coordinate, second: Coordinate) -> BoundingBox:
        """Box spanned by any two opposite corners."""
        return cls.envelope((first, second))

    @classmethod
    def envelope(cls, points: Iterable[Coordinate]) -> BoundingBox:
        """Smallest box holding every point."""
        pts = list(points)
        if not pts:
            msg = 'Cannot build a bounding box from no points'
            raise MalformedInputError(msg)
        return cls(
            Coordinate(
                min(p.latitude for p in pts),
                min(p.longitude for p in pts),
            ),
            Coordinate(
                max(p.latitude for p in pts),
                max(p.longitude for p in pts),
            ),
        )

    @classmethod
    def _from_vertices(cls, vertices: list[tuple[float, float]]) -> BoundingBox:
        return cls.envelope(Coordinate(lat, lon) for lon, lat in vertices)

    @classmethod
    @catching
    def from_wkt(cls, wkt: str) -> BoundingBox:
        """Envelope of ``POLYGON((lon lat, ...), ...)``."""
        return cls._from_vertices(_wkt_vertices(wkt))

    @classmethod
    @catching
    def from_postgis(cls, postgis: str) -> BoundingBox:
        """Envelope of ``SRID=4326;POLYGON(...)``."""
        _, body = parse_srid(postgis)
        return cls._from_vertices(_wkt_vertices(body))

    @classmethod
    @catching
    def from_geojson(cls, geojson: str) -> BoundingBox:
        """Envelope of a GeoJSON ``Polygon``."""
        return cls._from_vertices(_geojson_vertices(geojson))

    # Derived values

    @property
    def width(self) -> float:
        return self.max.longitude - self.min.longitude

    @property
    def height(self) -> float:
        return self.max.latitude - self.min.latitude

    @property
    def centroid(self) -> Coordinate:
        return Coordinate(
            (self.min.latitude + self.max.latitude) / 2.0,
            (self.min.longitude + self.max.longitude) / 2.0,
        )

    def with_width(self, width: float) -> BoundingBox:
        """Same centre, new longitude span."""
        center = (self.min.longitude + self.max.longitude) / 2.0
        return BoundingBox(
            self.min.with_longitude(center - width / 2.0),
            self.max.with_longitude(center + width / 2.0),
        )

    def with_height(self, height: float) -> BoundingBox:
        """Same centre, new latitude span."""
        center = (self.min.latitude + self.max.latitude) / 2.0
        return BoundingBox(
            self.min.with_latitude(center - height / 2.0),
            self.max.with_latitude(center + height / 2.0),
        )

    def corners(self) -> list[tuple[float, float]]:
        """Closed ring of (longitude, latitude), counter-clockwise from ``min``."""
        return [
            (self.min.longitude, self.min.latitude),
            (self.max.longitude, self.min.latitude),
            (self.max.longitude, self.max.latitude),
            (self.min.longitude, self.max.latitude),
            (self.min.longitude, self.min.latitude),
        ]

    # Set algebra

    def contains(self, item: Coordinate | BoundingBox) -> bool:
        if isinstance(item, BoundingBox):
            return self.contains(item.min) and self.contains(item.max)
        return (
            self.min.latitude <= item.latitude <= self.max.latitude
            and self.min.longitude <= item.longitude <= self.max.longitude
        )

    def __contains__(self, item: object) -> bool:
        if not isinstance(item, (Coordinate, BoundingBox)):
            return False
        return self.contains(item)

    def intersects(self, other: BoundingBox) -> bool:
        if self.max.longitude < other.min.longitude:
            return False
        if self.min.longitude > other.max.longitude:
            return False
        if self.max.latitude < other.min.latitude:
            return False
        return not self.min.latitude > other.max.latitude

    def intersection(self, other: BoundingBox) -> BoundingBox | None:
        if not self.intersects(other):
            return None
        return BoundingBox(
            Coordinate(
                max(self.min.latitude, other.min.latitude),
                max(self.min.longitude, other.min.longitude),
            ),
            Coordinate(
                min(self.max.latitude, other.max.latitude),
                min(self.max.longitude, other.max.longitude),
            ),
        )

    def union(self, other: BoundingBox) -> BoundingBox:
        return BoundingBox(
            Coordinate(
                min(self.min.latitude, other.min.latitude),
                min(self.min.longitude, other.min.longitude),
            ),
            Coordinate(
                max(self.max.latitude, other.max.latitude),
                max(self.max.longitude, other.max.longitude),
            ),
        )

    # Text

    def to_wkt(self) -> str:
        return formats.format_wkt_polygon(self.corners())

    def to_postgis(self) -> str:
        return formats.format_postgis_polygon(self.corners())

    def to_geojson(self) -> str:
        return formats.format_geojson_polygon(self.corners())

    @property
    def __geo_interface__(self) -> dict[str, Any]:
        return {'type': 'Polygon', 'coordinates': (tuple(self.corners()),)}

    def __str__(self) -> str:
        return f'(({self.min}), ({self.max}))'
