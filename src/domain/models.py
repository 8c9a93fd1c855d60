from __future__ import annotations

from pydantic import BaseModel, field_validator

from geo.bounding_box import BoundingBox
from geo.coordinate import Coordinate
from shared.constants import (
    ANGLE_SEPARATOR,
    DECIMAL_PRECISION,
    DECIMAL_SEPARATOR,
    DM_MINUTES_PRECISION,
    DMS_SECONDS_PRECISION,
    LATITUDE_MAX,
    LATITUDE_MIN,
    LONGITUDE_MAX,
    LONGITUDE_MIN,
    UTM_PRECISION,
)
from shared.units import LengthUnit

MAX_DECIMAL_PRECISION = 15
MAX_ANGLE_PRECISION = 10
MAX_UTM_PRECISION = 6


class GeoPointModel(BaseModel):
    """JSON-friendly point, validated the same way as ``Coordinate``."""

    latitude: float
    longitude: float

    @field_validator('latitude')
    @classmethod
    def validate_latitude(cls, v: float | str) -> float:
        v = float(v)
        if not (LATITUDE_MIN <= v <= LATITUDE_MAX):
            msg = f'Latitude must be between {LATITUDE_MIN} and {LATITUDE_MAX}'
            raise ValueError(msg)
        return v

    @field_validator('longitude')
    @classmethod
    def validate_longitude(cls, v: float | str) -> float:
        v = float(v)
        if not (LONGITUDE_MIN <= v <= LONGITUDE_MAX):
            msg = f'Longitude must be between {LONGITUDE_MIN} and {LONGITUDE_MAX}'
            raise ValueError(msg)
        return v

    @classmethod
    def from_coordinate(cls, coordinate: Coordinate) -> GeoPointModel:
        return cls(latitude=coordinate.latitude, longitude=coordinate.longitude)

    def to_coordinate(self) -> Coordinate:
        return Coordinate(self.latitude, self.longitude)


class BoundingBoxModel(BaseModel):
    """JSON-friendly bounding box: south-west ``min`` and north-east ``max``."""

    min: GeoPointModel
    max: GeoPointModel

    @classmethod
    def from_bounding_box(cls, box: BoundingBox) -> BoundingBoxModel:
        return cls(
            min=GeoPointModel.from_coordinate(box.min),
            max=GeoPointModel.from_coordinate(box.max),
        )

    def to_bounding_box(self) -> BoundingBox:
        """Raises ``LocationError`` when ``min`` exceeds ``max``."""
        return BoundingBox(self.min.to_coordinate(), self.max.to_coordinate())


class OutputSettings(BaseModel):
    """
    Text output preferences used by the command line.

    Stored as sectioned TOML, see ``domain.toml_sections``.
    """

    model_config = {
        'extra': 'ignore',  # unknown keys from older settings files
    }

    # Decimal degrees
    decimal_precision: int = DECIMAL_PRECISION
    decimal_separator: str = DECIMAL_SEPARATOR

    # Sexagesimal
    dms_seconds_precision: int = DMS_SECONDS_PRECISION
    dm_minutes_precision: int = DM_MINUTES_PRECISION
    angle_separator: str = ANGLE_SEPARATOR

    # Metres after the decimal point for easting/northing
    utm_precision: int = UTM_PRECISION

    distance_unit: LengthUnit = LengthUnit.KILOMETER

    @field_validator('decimal_precision')
    @classmethod
    def validate_decimal_precision(cls, v: int) -> int:
        if not (0 <= v <= MAX_DECIMAL_PRECISION):
            msg = f'Precision must be in range [0, {MAX_DECIMAL_PRECISION}]'
            raise ValueError(msg)
        return v

    @field_validator('dms_seconds_precision', 'dm_minutes_precision')
    @classmethod
    def validate_angle_precision(cls, v: int) -> int:
        if not (0 <= v <= MAX_ANGLE_PRECISION):
            msg = f'Precision must be in range [0, {MAX_ANGLE_PRECISION}]'
            raise ValueError(msg)
        return v

    @field_validator('utm_precision')
    @classmethod
    def validate_utm_precision(cls, v: int) -> int:
        if not (0 <= v <= MAX_UTM_PRECISION):
            msg = f'Precision must be in range [0, {MAX_UTM_PRECISION}]'
            raise ValueError(msg)
        return v

    @field_validator('decimal_separator')
    @classmethod
    def validate_separator(cls, v: str) -> str:
        if not v:
            msg = 'Separator must not be empty'
            raise ValueError(msg)
        return v

    @field_validator('distance_unit', mode='before')
    @classmethod
    def validate_distance_unit(cls, v: LengthUnit | str) -> LengthUnit:
        if isinstance(v, LengthUnit):
            return v
        # MalformedInputError is a ValueError, pydantic reports it as such
        return LengthUnit.from_symbol(str(v))
