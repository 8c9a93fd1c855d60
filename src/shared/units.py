"""Length units and measurement values.

Every unit is a linear scale of the metre; conversion goes through metres.

Example:
    >>> d = Measurement(5, LengthUnit.KILOMETER)
    >>> str(d.to(LengthUnit.METER))
    '5000.0 m'
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from shared.exceptions import MalformedInputError


class LengthUnit(str, Enum):
    METER = 'm'
    KILOMETER = 'km'
    MILE = 'mi'
    NAUTICAL_MILE = 'nmi'
    FOOT = 'ft'
    INCH = 'in'
    YARD = 'yd'

    @property
    def symbol(self) -> str:
        return self.value

    @property
    def meters_per_unit(self) -> float:
        return METERS_PER_UNIT[self]

    @classmethod
    def from_symbol(cls, text: str) -> LengthUnit:
        """Resolve a unit by symbol (``km``) or member name (``kilometer``)."""
        key = text.strip()
        for unit in cls:
            if key == unit.value or key.upper() == unit.name:
                return unit
        lowered = key.lower()
        for unit in cls:
            if lowered == unit.value:
                return unit
        msg = 'Unknown length unit'
        raise MalformedInputError(msg, text)


# Scale of each unit, metres
METERS_PER_UNIT: dict[LengthUnit, float] = {
    LengthUnit.METER: 1.0,
    LengthUnit.KILOMETER: 1000.0,
    LengthUnit.MILE: 1609.344,
    LengthUnit.NAUTICAL_MILE: 1852.0,
    LengthUnit.FOOT: 0.3048,
    LengthUnit.INCH: 0.0254,
    LengthUnit.YARD: 0.9144,
}


def convert_length(value: float, from_unit: LengthUnit, to_unit: LengthUnit) -> float:
    if from_unit is to_unit:
        return float(value)
    return value * METERS_PER_UNIT[from_unit] / METERS_PER_UNIT[to_unit]


@dataclass(frozen=True)
class Measurement:
    """A length magnitude tagged with its unit."""

    magnitude: float
    unit: LengthUnit = LengthUnit.METER

    @property
    def meters(self) -> float:
        return convert_length(self.magnitude, self.unit, LengthUnit.METER)

    def to(self, unit: LengthUnit) -> Measurement:
        return Measurement(convert_length(self.magnitude, self.unit, unit), unit)

    def __float__(self) -> float:
        return float(self.magnitude)

    def __str__(self) -> str:
        return f'{self.magnitude} {self.unit.symbol}'
