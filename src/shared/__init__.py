"""Shared utilities: constants, errors, results, units and logging."""
from shared.diagnostics import setup_logging
from shared.exceptions import (
    ExpectationMismatchError,
    GeoError,
    LocationError,
    MalformedInputError,
)
from shared.result import Result, catching
from shared.units import LengthUnit, Measurement, convert_length

__all__ = [
    'ExpectationMismatchError',
    'GeoError',
    'LengthUnit',
    'LocationError',
    'MalformedInputError',
    'Measurement',
    'Result',
    'catching',
    'convert_length',
    'setup_logging',
]
