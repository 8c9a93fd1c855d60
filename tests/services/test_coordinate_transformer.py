"""Tests for services.coordinate_transformer module."""

import pytest

from geo.coordinate import Coordinate
from services.coordinate_transformer import (
    UtmTransformer,
    build_utm_crs,
    projection_deviation_m,
)
from shared.exceptions import LocationError

ROME = Coordinate(41.9028, 12.4964)
SYDNEY = Coordinate(-33.8688, 151.2093)


@pytest.fixture()
def transformer_zone33():
    """UtmTransformer for northern zone 33 (central Italy)."""
    return UtmTransformer(33)


class TestBuildUtmCrs:
    """Tests for build_utm_crs function."""

    def test_north_epsg(self):
        crs = build_utm_crs(33)
        assert crs.is_projected
        assert crs.to_epsg() == 32633

    def test_south_epsg(self):
        assert build_utm_crs(56, south=True).to_epsg() == 32756

    @pytest.mark.parametrize('zone', [0, 61])
    def test_zone_out_of_range(self, zone):
        with pytest.raises(LocationError):
            build_utm_crs(zone)


class TestUtmTransformer:
    """Tests for UtmTransformer conversions."""

    def test_for_coordinate_picks_zone_and_hemisphere(self):
        transformer = UtmTransformer.for_coordinate(SYDNEY)
        assert transformer.zone == 56
        assert transformer.south

    def test_to_utm_labels_zone(self, transformer_zone33):
        position = transformer_zone33.to_utm(ROME)
        assert position.zone == '33T'

    def test_null_island(self):
        position = UtmTransformer(31).to_utm(Coordinate(0, 0))
        assert position.easting == pytest.approx(166021.443, abs=0.01)
        assert position.northing == pytest.approx(0.0, abs=1e-6)

    def test_round_trip(self, transformer_zone33):
        position = transformer_zone33.to_utm(ROME)
        back = transformer_zone33.to_coordinate(position.easting, position.northing)
        assert back.latitude == pytest.approx(ROME.latitude, abs=1e-9)
        assert back.longitude == pytest.approx(ROME.longitude, abs=1e-9)


class TestSeriesAgreesWithProj:
    """The built-in series projection must match PROJ to well below a millimetre."""

    @pytest.mark.parametrize(
        'coord',
        [
            ROME,
            SYDNEY,
            Coordinate(0, 0),
            Coordinate(51.5074, -0.1278),
            Coordinate(-79.9, 100.0),
            Coordinate(83.9, -40.0),
            Coordinate(10.0, 179.99),
        ],
    )
    def test_forward(self, coord):
        assert projection_deviation_m(coord) < 1e-3

    @pytest.mark.parametrize('coord', [ROME, SYDNEY, Coordinate(-45.0, -70.0)])
    def test_inverse(self, coord):
        transformer = UtmTransformer.for_coordinate(coord)
        position = transformer.to_utm(coord)
        ours = Coordinate.from_utm(position.zone, position.easting, position.northing)
        reference = transformer.to_coordinate(position.easting, position.northing)
        assert ours.latitude == pytest.approx(reference.latitude, abs=1e-8)
        assert ours.longitude == pytest.approx(reference.longitude, abs=1e-8)
