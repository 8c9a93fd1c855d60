"""
Universal Transverse Mercator projection on the WGS84 ellipsoid.

Forward and inverse transforms use the Krüger series to sixth order in the
third flattening ``n`` (Karney, 2011), accurate to well below a millimetre
inside a zone. Zone and band rules follow the plain UTM grid: no Norway or
Svalbard exceptions.
"""

from __future__ import annotations

import logging
import math
import re
from typing import NamedTuple

from shared.constants import (
    MAX_UTM_ZONE,
    MIN_UTM_ZONE,
    UTM_BAND_HEIGHT_DEG,
    UTM_BAND_LETTERS,
    UTM_FALSE_EASTING_M,
    UTM_FALSE_NORTHING_SOUTH_M,
    UTM_FIRST_NORTHERN_BAND,
    UTM_INVERSE_MAX_ITERATIONS,
    UTM_INVERSE_TOLERANCE,
    UTM_LATITUDE_MAX,
    UTM_LATITUDE_MIN,
    UTM_MAX_EASTING_OFFSET_M,
    UTM_MAX_NORTHING_OFFSET_M,
    UTM_SCALE_FACTOR,
    UTM_ZONE_WIDTH_DEG,
    WGS84_FLATTENING,
    WGS84_SEMI_MAJOR_AXIS_M,
)
from shared.exceptions import LocationError, MalformedInputError

logger = logging.getLogger(__name__)

_ZONE_RE = re.compile(r'^\s*(\d{1,2})\s*([A-Za-z])\s*$')

# Eccentricity
_E2 = WGS84_FLATTENING * (2 - WGS84_FLATTENING)
_E = math.sqrt(_E2)

# Third flattening
_N = WGS84_FLATTENING / (2 - WGS84_FLATTENING)

# Rectifying radius
_A = (
    WGS84_SEMI_MAJOR_AXIS_M
    / (1 + _N)
    * (1 + _N**2 / 4 + _N**4 / 64 + _N**6 / 256)
)

# Krüger coefficients, geodetic -> projected
_ALPHA = (
    _N / 2
    - 2 * _N**2 / 3
    + 5 * _N**3 / 16
    + 41 * _N**4 / 180
    - 127 * _N**5 / 288
    + 7891 * _N**6 / 37800,
    13 * _N**2 / 48
    - 3 * _N**3 / 5
    + 557 * _N**4 / 1440
    + 281 * _N**5 / 630
    - 1983433 * _N**6 / 1935360,
    61 * _N**3 / 240
    - 103 * _N**4 / 140
    + 15061 * _N**5 / 26880
    + 167603 * _N**6 / 181440,
    49561 * _N**4 / 161280 - 179 * _N**5 / 168 + 6601661 * _N**6 / 7257600,
    34729 * _N**5 / 80640 - 3418889 * _N**6 / 1995840,
    212378941 * _N**6 / 319334400,
)

# Krüger coefficients, projected -> geodetic
_BETA = (
    _N / 2
    - 2 * _N**2 / 3
    + 37 * _N**3 / 96
    - _N**4 / 360
    - 81 * _N**5 / 512
    + 96199 * _N**6 / 604800,
    _N**2 / 48
    + _N**3 / 15
    - 437 * _N**4 / 1440
    + 46 * _N**5 / 105
    - 1118711 * _N**6 / 3870720,
    17 * _N**3 / 480
    - 37 * _N**4 / 840
    - 209 * _N**5 / 4480
    + 5569 * _N**6 / 90720,
    4397 * _N**4 / 161280 - 11 * _N**5 / 504 - 830251 * _N**6 / 7257600,
    4583 * _N**5 / 161280 - 108847 * _N**6 / 3991680,
    20648693 * _N**6 / 638668800,
)


class UtmPosition(NamedTuple):
    """Projected position: zone label such as ``'31N'`` plus metres."""

    zone: str
    easting: float
    northing: float

    @property
    def zone_number(self) -> int:
        return int(self.zone[:-1])

    @property
    def band(self) -> str:
        return self.zone[-1]

    @property
    def is_southern(self) -> bool:
        return self.band < UTM_FIRST_NORTHERN_BAND


def zone_number(longitude: float) -> int:
    """Zone 1..60 for a longitude; the 180th meridian belongs to zone 60."""
    zone = int((longitude + 180) // UTM_ZONE_WIDTH_DEG) + 1
    return max(MIN_UTM_ZONE, min(MAX_UTM_ZONE, zone))


def zone_letter(latitude: float) -> str:
    """Latitude band letter; only ``-80 <= latitude < 84`` is covered by UTM."""
    if not (UTM_LATITUDE_MIN <= latitude < UTM_LATITUDE_MAX):
        msg = (
            f'UTM range exceeded: latitude {latitude} is outside '
            f'[{UTM_LATITUDE_MIN}, {UTM_LATITUDE_MAX})'
        )
        raise LocationError(msg, latitude=latitude)
    index = int((latitude - UTM_LATITUDE_MIN) // UTM_BAND_HEIGHT_DEG)
    return UTM_BAND_LETTERS[index]


def central_meridian(zone: int) -> float:
    return float((zone - 1) * UTM_ZONE_WIDTH_DEG - 180 + UTM_ZONE_WIDTH_DEG // 2)


def parse_zone(zone: str) -> tuple[int, str]:
    """
    Split a zone label like ``'33T'`` into its number and band letter.

    Raises:
        MalformedInputError: label is not ``<digits><letter>`` or the letter is
            not a UTM band.
        LocationError: zone number outside 1..60.

    """
    match = _ZONE_RE.match(zone)
    if match is None:
        msg = 'Invalid UTM zone'
        raise MalformedInputError(msg, zone)
    number = int(match.group(1))
    letter = match.group(2).upper()
    if letter not in UTM_BAND_LETTERS:
        msg = 'Invalid UTM latitude band'
        raise MalformedInputError(msg, zone)
    if not (MIN_UTM_ZONE <= number <= MAX_UTM_ZONE):
        msg = f'UTM zone must be between {MIN_UTM_ZONE} and {MAX_UTM_ZONE}, got {number}'
        raise LocationError(msg)
    return number, letter


def _conformal_tau(tau: float) -> float:
    sigma = math.sinh(_E * math.atanh(_E * tau / math.sqrt(1 + tau * tau)))
    return tau * math.sqrt(1 + sigma * sigma) - sigma * math.sqrt(1 + tau * tau)


def forward(latitude: float, longitude: float) -> UtmPosition:
    """
    Project WGS84 degrees to UTM.

    Raises:
        LocationError: latitude outside the UTM bands.

    """
    letter = zone_letter(latitude)
    zone = zone_number(longitude)

    phi = math.radians(latitude)
    lam = math.radians(longitude - central_meridian(zone))
    cos_lam = math.cos(lam)

    tau_p = _conformal_tau(math.tan(phi))
    xi_p = math.atan2(tau_p, cos_lam)
    eta_p = math.asinh(math.sin(lam) / math.sqrt(tau_p * tau_p + cos_lam * cos_lam))

    xi = xi_p
    eta = eta_p
    for j, alpha in enumerate(_ALPHA, start=1):
        xi += alpha * math.sin(2 * j * xi_p) * math.cosh(2 * j * eta_p)
        eta += alpha * math.cos(2 * j * xi_p) * math.sinh(2 * j * eta_p)

    easting = UTM_SCALE_FACTOR * _A * eta + UTM_FALSE_EASTING_M
    northing = UTM_SCALE_FACTOR * _A * xi
    if latitude < 0:
        northing += UTM_FALSE_NORTHING_SOUTH_M

    return UtmPosition(f'{zone}{letter}', easting, northing)


def inverse(zone: str, easting: float, northing: float) -> tuple[float, float]:
    """
    Unproject UTM to WGS84 degrees.

    Southern bands (``C``..``M``) have the false northing removed first.

    Raises:
        LocationError: If the position lies too far from the central meridian
            or the equator for the series to apply


    Returns:
        Tuple of (latitude, longitude) in degrees

    """
    number, letter = parse_zone(zone)

    x = easting - UTM_FALSE_EASTING_M
    y = northing
    if letter < UTM_FIRST_NORTHERN_BAND:
        y -= UTM_FALSE_NORTHING_SOUTH_M
    if abs(x) > UTM_MAX_EASTING_OFFSET_M or abs(y) > UTM_MAX_NORTHING_OFFSET_M:
        msg = f'UTM range exceeded: {zone} {easting} {northing} lies outside the zone'
        raise LocationError(msg)

    xi = y / (UTM_SCALE_FACTOR * _A)
    eta = x / (UTM_SCALE_FACTOR * _A)

    xi_p = xi
    eta_p = eta
    for j, beta in enumerate(_BETA, start=1):
        xi_p -= beta * math.sin(2 * j * xi) * math.cosh(2 * j * eta)
        eta_p -= beta * math.cos(2 * j * xi) * math.sinh(2 * j * eta)

    sinh_eta_p = math.sinh(eta_p)
    sin_xi_p = math.sin(xi_p)
    cos_xi_p = math.cos(xi_p)

    tau_p = sin_xi_p / math.sqrt(sinh_eta_p * sinh_eta_p + cos_xi_p * cos_xi_p)

    # Newton-Raphson on tau = tan(phi)
    tau = tau_p
    for _ in range(UTM_INVERSE_MAX_ITERATIONS):
        tau_i_p = _conformal_tau(tau)
        delta = (
            (tau_p - tau_i_p)
            / math.sqrt(1 + tau_i_p * tau_i_p)
            * (1 + (1 - _E2) * tau * tau)
            / ((1 - _E2) * math.sqrt(1 + tau * tau))
        )
        tau += delta
        if abs(delta) < UTM_INVERSE_TOLERANCE:
            break
    else:
        logger.warning(
            'Inverse UTM did not converge for %s %.3f %.3f', zone, easting, northing
        )

    latitude = math.degrees(math.atan(tau))
    longitude = math.degrees(math.atan2(sinh_eta_p, cos_xi_p)) + central_meridian(number)
    if longitude > 180:
        longitude -= 360
    elif longitude < -180:
        longitude += 360
    return latitude, longitude
