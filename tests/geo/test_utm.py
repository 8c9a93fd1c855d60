"""Tests for geo.utm module."""

import pytest

from geo.utm import (
    UtmPosition,
    central_meridian,
    forward,
    inverse,
    parse_zone,
    zone_letter,
    zone_number,
)
from shared.exceptions import LocationError, MalformedInputError


class TestZoneNumber:
    """Tests for zone_number function."""

    @pytest.mark.parametrize(
        ('longitude', 'expected'),
        [
            (-180.0, 1),
            (-177.0, 1),
            (-174.0, 2),
            (0.0, 31),
            (2.3522, 31),
            (12.4964, 33),
            (179.9, 60),
        ],
    )
    def test_zone_number(self, longitude, expected):
        assert zone_number(longitude) == expected

    def test_antimeridian_belongs_to_zone_60(self):
        """Longitude 180 would be zone 61 by the formula; it is clamped."""
        assert zone_number(180.0) == 60


class TestZoneLetter:
    """Tests for zone_letter function."""

    @pytest.mark.parametrize(
        ('latitude', 'expected'),
        [
            (-80.0, 'C'),
            (-33.8688, 'H'),
            (-0.5, 'M'),
            (0.0, 'N'),
            (41.9028, 'T'),
            (51.5074, 'U'),
            (72.0, 'X'),
            (83.99, 'X'),
        ],
    )
    def test_zone_letter(self, latitude, expected):
        assert zone_letter(latitude) == expected

    @pytest.mark.parametrize('latitude', [-80.01, 84.0, 90.0, -90.0])
    def test_outside_utm_range(self, latitude):
        with pytest.raises(LocationError, match='UTM range exceeded'):
            zone_letter(latitude)


class TestCentralMeridian:
    def test_first_zone(self):
        assert central_meridian(1) == -177.0

    def test_zone_31(self):
        assert central_meridian(31) == 3.0

    def test_last_zone(self):
        assert central_meridian(60) == 177.0


class TestParseZone:
    """Tests for parse_zone function."""

    def test_valid(self):
        assert parse_zone('33T') == (33, 'T')

    def test_lowercase_letter(self):
        assert parse_zone('7n') == (7, 'N')

    @pytest.mark.parametrize('zone', ['33I', '33O', '33A', 'T33', '', '333T'])
    def test_malformed(self, zone):
        with pytest.raises(MalformedInputError):
            parse_zone(zone)

    @pytest.mark.parametrize('zone', ['0N', '61N', '99C'])
    def test_zone_number_out_of_range(self, zone):
        with pytest.raises(LocationError):
            parse_zone(zone)


class TestForward:
    """Tests for forward projection."""

    def test_null_island(self):
        position = forward(0.0, 0.0)
        assert position.zone == '31N'
        assert position.easting == pytest.approx(166021.443, abs=0.01)
        assert position.northing == pytest.approx(0.0, abs=1e-6)

    def test_central_meridian_on_equator(self):
        position = forward(0.0, 3.0)
        assert position.easting == pytest.approx(500000.0, abs=1e-6)
        assert position.northing == pytest.approx(0.0, abs=1e-6)

    def test_central_meridian_at_45_degrees(self):
        """Northing on the central meridian is the scaled meridian arc."""
        position = forward(45.0, 3.0)
        assert position.easting == pytest.approx(500000.0, abs=1e-6)
        assert position.northing == pytest.approx(4982950.40, abs=0.5)

    def test_easting_symmetric_about_central_meridian(self):
        east = forward(48.0, 5.5)
        west = forward(48.0, 0.5)
        assert east.easting - 500000.0 == pytest.approx(500000.0 - west.easting, abs=1e-6)
        assert east.northing == pytest.approx(west.northing, abs=1e-6)

    def test_southern_hemisphere_adds_false_northing(self):
        north = forward(33.8688, 151.2093)
        south = forward(-33.8688, 151.2093)
        assert south.zone == '56H'
        assert south.northing == pytest.approx(10_000_000.0 - north.northing, abs=1e-6)
        assert south.easting == pytest.approx(north.easting, abs=1e-6)

    def test_polar_latitude_rejected(self):
        with pytest.raises(LocationError):
            forward(85.0, 0.0)


class TestInverse:
    """Tests for inverse projection."""

    @pytest.mark.parametrize(
        ('latitude', 'longitude'),
        [
            (0.0, 0.0),
            (41.9028, 12.4964),
            (51.5074, -0.1278),
            (-33.8688, 151.2093),
            (-54.8019, -68.3030),
            (-79.9, 100.0),
            (83.9, -40.0),
            (-0.0001, -179.9999),
        ],
    )
    def test_round_trip(self, latitude, longitude):
        position = forward(latitude, longitude)
        lat, lon = inverse(position.zone, position.easting, position.northing)
        assert lat == pytest.approx(latitude, abs=1e-9)
        assert lon == pytest.approx(longitude, abs=1e-9)

    def test_null_island_from_text_values(self):
        lat, lon = inverse('31N', 166021.443, 0.0)
        assert lat == pytest.approx(0.0, abs=1e-6)
        assert lon == pytest.approx(0.0, abs=1e-6)

    def test_invalid_zone(self):
        with pytest.raises(MalformedInputError):
            inverse('31I', 500000.0, 0.0)

    def test_easting_far_outside_zone(self):
        with pytest.raises(LocationError, match='UTM range exceeded'):
            inverse('31N', 1e10, 0.0)

    def test_northing_beyond_pole(self):
        with pytest.raises(LocationError, match='UTM range exceeded'):
            inverse('31N', 500000.0, 25_000_000.0)


class TestUtmPosition:
    def test_accessors(self):
        position = UtmPosition('56H', 334000.0, 6250000.0)
        assert position.zone_number == 56
        assert position.band == 'H'
        assert position.is_southern

    def test_northern(self):
        assert not UtmPosition('31N', 0.0, 0.0).is_southern

    def test_unpacks_like_tuple(self):
        zone, easting, northing = UtmPosition('31N', 1.0, 2.0)
        assert (zone, easting, northing) == ('31N', 1.0, 2.0)
