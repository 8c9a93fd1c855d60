"""PROJ-backed UTM transformations used to cross-check the series projection."""

from __future__ import annotations

import logging
import math

from pyproj import CRS, Transformer
from pyproj.exceptions import CRSError

from geo.coordinate import Coordinate
from geo.utm import UtmPosition, zone_letter, zone_number
from shared.constants import (
    EPSG_UTM_NORTH_BASE,
    EPSG_UTM_SOUTH_BASE,
    MAX_UTM_ZONE,
    MIN_UTM_ZONE,
    WGS84_CODE,
)
from shared.exceptions import LocationError

logger = logging.getLogger(__name__)

crs_wgs84 = CRS.from_epsg(WGS84_CODE)


def build_utm_crs(zone: int, *, south: bool = False) -> CRS:
    """
    Build pyproj CRS for a WGS84 UTM zone.

    Tries EPSG codes first; falls back to a proj4 definition.
    """
    if not (MIN_UTM_ZONE <= zone <= MAX_UTM_ZONE):
        msg = f'UTM zone must be between {MIN_UTM_ZONE} and {MAX_UTM_ZONE}, got {zone}'
        raise LocationError(msg)
    base = EPSG_UTM_SOUTH_BASE if south else EPSG_UTM_NORTH_BASE
    try:
        return CRS.from_epsg(base + zone)
    except CRSError:
        logger.warning('EPSG:%d unavailable, using proj4 definition', base + zone)
        proj4 = f'+proj=utm +zone={zone} +datum=WGS84 +units=m +no_defs +type=crs'
        if south:
            proj4 += ' +south'
        return CRS.from_proj4(proj4)


class UtmTransformer:
    """Handles transformations between WGS84 degrees and one UTM zone."""

    def __init__(self, zone: int, *, south: bool = False):
        """
        Initialize transformer for a zone.

        Args:
            zone: UTM zone number 1..60
            south: Use the southern-hemisphere false northing

        """
        self.zone = zone
        self.south = south
        self.crs_utm = build_utm_crs(zone, south=south)

        # WGS84 <-> UTM, always lon/lat ordered
        self.t_utm_from_wgs = Transformer.from_crs(
            crs_wgs84, self.crs_utm, always_xy=True
        )
        self.t_wgs_from_utm = Transformer.from_crs(
            self.crs_utm, crs_wgs84, always_xy=True
        )

    @classmethod
    def for_coordinate(cls, coordinate: Coordinate) -> UtmTransformer:
        """Transformer for the zone and hemisphere the point falls in."""
        return cls(zone_number(coordinate.longitude), south=coordinate.latitude < 0)

    def to_utm(self, coordinate: Coordinate) -> UtmPosition:
        """
        Project a point into this transformer's zone.

        Returns:
            UtmPosition labelled with this zone and the point's band letter

        """
        easting, northing = self.t_utm_from_wgs.transform(
            coordinate.longitude, coordinate.latitude
        )
        letter = zone_letter(coordinate.latitude)
        return UtmPosition(f'{self.zone}{letter}', easting, northing)

    def to_coordinate(self, easting: float, northing: float) -> Coordinate:
        lng, lat = self.t_wgs_from_utm.transform(easting, northing)
        return Coordinate(lat, lng)


def projection_deviation_m(coordinate: Coordinate) -> float:
    """
    Planar distance between the series projection and PROJ for one point.

    Returns:
        Deviation in metres

    """
    own = coordinate.to_utm()
    reference = UtmTransformer.for_coordinate(coordinate).to_utm(coordinate)
    deviation = math.hypot(
        own.easting - reference.easting, own.northing - reference.northing
    )
    logger.debug('UTM deviation for %s: %.6f m', coordinate, deviation)
    return deviation
