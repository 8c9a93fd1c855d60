"""Error taxonomy for coordinate validation and text parsing."""

from __future__ import annotations


class GeoError(ValueError):
    """Base class for every rejected coordinate, region or text input."""


class LocationError(GeoError):
    """A latitude, longitude, UTM band or zone lies outside its valid range."""

    def __init__(
        self,
        message: str = 'Invalid location',
        *,
        latitude: float | None = None,
        longitude: float | None = None,
    ):
        super().__init__(message)
        self.latitude = latitude
        self.longitude = longitude


class MalformedInputError(GeoError):
    """Text does not match the grammar of the expected format.

    ``fragment`` holds the offending token or segment, if known.
    """

    def __init__(self, message: str, fragment: str | None = None):
        super().__init__(message)
        self.fragment = fragment

    def __str__(self) -> str:
        base = super().__str__()
        if self.fragment is None:
            return base
        return f'{base}: {self.fragment!r}'


class ExpectationMismatchError(GeoError):
    """Well-formed input carrying a value this library does not support."""

    def __init__(self, message: str, expected: object = None, actual: object = None):
        super().__init__(message)
        self.expected = expected
        self.actual = actual
