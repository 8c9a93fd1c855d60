"""Tests for geo.bounding_box module."""

import json

import pytest

from geo.bounding_box import BoundingBox
from geo.coordinate import Coordinate
from shared.exceptions import (
    ExpectationMismatchError,
    LocationError,
    MalformedInputError,
)


@pytest.fixture()
def box():
    """Box from (0, 0) to (10, 20): 10 degrees tall, 20 degrees wide."""
    return BoundingBox(Coordinate(0, 0), Coordinate(10, 20))


@pytest.fixture()
def other():
    """Box overlapping ``box`` in its north-east corner."""
    return BoundingBox(Coordinate(5, 15), Coordinate(15, 30))


class TestConstruction:
    def test_inverted_latitude_rejected(self):
        with pytest.raises(LocationError):
            BoundingBox(Coordinate(10, 0), Coordinate(0, 20))

    def test_inverted_longitude_rejected(self):
        with pytest.raises(LocationError):
            BoundingBox(Coordinate(0, 20), Coordinate(10, 0))

    def test_degenerate_box_allowed(self):
        point = Coordinate(1, 1)
        degenerate = BoundingBox(point, point)
        assert degenerate.width == 0.0
        assert degenerate.height == 0.0

    def test_from_points_normalizes(self, box):
        assert BoundingBox.from_points(Coordinate(10, 0), Coordinate(0, 20)) == box
        assert BoundingBox.from_points(Coordinate(0, 20), Coordinate(10, 0)) == box

    def test_envelope(self):
        points = [Coordinate(3, -4), Coordinate(-1, 7), Coordinate(2, 2)]
        assert BoundingBox.envelope(points) == BoundingBox(
            Coordinate(-1, -4), Coordinate(3, 7)
        )

    def test_envelope_empty(self):
        with pytest.raises(MalformedInputError):
            BoundingBox.envelope([])


class TestDerived:
    def test_width_height(self, box):
        assert box.width == 20.0
        assert box.height == 10.0

    def test_centroid(self, box):
        assert box.centroid == Coordinate(5, 10)

    def test_with_width_keeps_centre(self, box):
        wider = box.with_width(30)
        assert wider.width == 30.0
        assert wider.centroid == box.centroid
        assert wider.height == box.height

    def test_with_height_keeps_centre(self, box):
        shorter = box.with_height(4)
        assert shorter.height == 4.0
        assert shorter.centroid == box.centroid

    def test_with_width_out_of_range(self, box):
        with pytest.raises(LocationError):
            box.with_width(400)

    def test_corners_closed_ring(self, box):
        corners = box.corners()
        assert len(corners) == 5
        assert corners[0] == corners[-1] == (0.0, 0.0)
        assert corners[1:4] == [(20.0, 0.0), (20.0, 10.0), (0.0, 10.0)]

    def test_str(self, box):
        assert str(box) == '((0.000000, 0.000000), (10.000000, 20.000000))'

    def test_ordering(self, box, other):
        assert box < other
        assert sorted([other, box]) == [box, other]


class TestContains:
    """Scenario: containment is closed on both ends."""

    def test_square_contains_inner_point(self):
        square = BoundingBox(Coordinate(0, 0), Coordinate(10, 10))
        assert square.contains(Coordinate(5, 5))
        assert not square.contains(Coordinate(11, 5))

    def test_min_max_and_centroid(self, box):
        assert box.contains(box.min)
        assert box.contains(box.max)
        assert box.contains(box.centroid)

    def test_in_operator(self, box):
        assert Coordinate(1, 1) in box
        assert Coordinate(-1, 1) not in box
        assert 'POINT(1 1)' not in box

    def test_contains_box(self, box):
        inner = BoundingBox(Coordinate(1, 1), Coordinate(9, 19))
        assert box.contains(inner)
        assert inner in box
        assert not inner.contains(box)

    def test_contains_itself(self, box):
        assert box.contains(box)


class TestSetAlgebra:
    """Intersection and union laws."""

    def test_intersects(self, box, other):
        assert box.intersects(other)
        assert other.intersects(box)

    def test_intersection(self, box, other):
        assert box.intersection(other) == BoundingBox(Coordinate(5, 15), Coordinate(10, 20))

    def test_intersection_inside_both(self, box, other):
        overlap = box.intersection(other)
        assert box.contains(overlap)
        assert other.contains(overlap)

    def test_touching_edges_intersect(self, box):
        neighbour = BoundingBox(Coordinate(10, 20), Coordinate(12, 25))
        assert box.intersects(neighbour)
        overlap = box.intersection(neighbour)
        assert overlap.width == 0.0
        assert overlap.height == 0.0

    @pytest.mark.parametrize(
        'far',
        [
            BoundingBox(Coordinate(0, 21), Coordinate(10, 30)),
            BoundingBox(Coordinate(0, -30), Coordinate(10, -1)),
            BoundingBox(Coordinate(11, 0), Coordinate(20, 20)),
            BoundingBox(Coordinate(-20, 0), Coordinate(-1, 20)),
        ],
    )
    def test_disjoint(self, box, far):
        assert not box.intersects(far)
        assert box.intersection(far) is None

    def test_union(self, box, other):
        merged = box.union(other)
        assert merged == BoundingBox(Coordinate(0, 0), Coordinate(15, 30))
        assert merged.contains(box)
        assert merged.contains(other)

    def test_union_of_disjoint(self, box):
        far = BoundingBox(Coordinate(-20, -40), Coordinate(-10, -30))
        assert box.union(far) == BoundingBox(Coordinate(-20, -40), Coordinate(10, 20))


class TestWriters:
    def test_to_wkt(self, box):
        assert box.to_wkt() == 'POLYGON((0.0 0.0, 20.0 0.0, 20.0 10.0, 0.0 10.0, 0.0 0.0))'

    def test_to_postgis(self, box):
        assert box.to_postgis() == (
            'SRID=4326;POLYGON((0.0 0.0, 20.0 0.0, 20.0 10.0, 0.0 10.0, 0.0 0.0))'
        )

    def test_to_geojson(self, box):
        data = json.loads(box.to_geojson())
        assert data == {
            'type': 'Polygon',
            'coordinates': [[[0.0, 0.0], [20.0, 0.0], [20.0, 10.0], [0.0, 10.0], [0.0, 0.0]]],
        }

    def test_geo_interface(self, box):
        geometry = box.__geo_interface__
        assert geometry['type'] == 'Polygon'
        assert geometry['coordinates'][0][2] == (20.0, 10.0)


class TestReaders:
    """Tests for from_wkt, from_postgis and from_geojson."""

    def test_wkt_round_trip(self, box):
        assert BoundingBox.from_wkt(box.to_wkt()).unwrap() == box

    def test_postgis_round_trip(self, box):
        assert BoundingBox.from_postgis(box.to_postgis()).unwrap() == box

    def test_geojson_round_trip(self, box):
        assert BoundingBox.from_geojson(box.to_geojson()).unwrap() == box

    def test_wkt_envelope_of_irregular_polygon(self):
        text = 'POLYGON((1 2, 5 -3, 7 4, 1 2))'
        assert BoundingBox.from_wkt(text).unwrap() == BoundingBox(
            Coordinate(-3, 1), Coordinate(4, 7)
        )

    def test_wkt_with_hole_and_spacing(self):
        text = 'polygon ((0 0, 10 0, 10 10, 0 10, 0 0), (2 2, 3 2, 3 3, 2 2))'
        assert BoundingBox.from_wkt(text).unwrap() == BoundingBox(
            Coordinate(0, 0), Coordinate(10, 10)
        )

    @pytest.mark.parametrize(
        'text',
        [
            'POINT(0 0)',
            'POLYGON(0 0, 1 1)',
            'POLYGON((0 0, 1))',
            'POLYGON((0 0, a b))',
            'POLYGON((0 0, 1 1)) junk',
            'POLYGON((0 0, 1 1) x (2 2, 3 3))',
        ],
    )
    def test_wkt_malformed(self, text):
        assert isinstance(BoundingBox.from_wkt(text).error, MalformedInputError)

    def test_wkt_out_of_range(self):
        result = BoundingBox.from_wkt('POLYGON((0 0, 200 0, 0 1, 0 0))')
        assert isinstance(result.error, LocationError)

    def test_postgis_other_srid(self, box):
        text = box.to_postgis().replace('4326', '3857')
        assert isinstance(BoundingBox.from_postgis(text).error, ExpectationMismatchError)

    def test_geojson_point_rejected(self):
        result = BoundingBox.from_geojson('{"type":"Point","coordinates":[0,0]}')
        assert isinstance(result.error, ExpectationMismatchError)

    @pytest.mark.parametrize(
        'text',
        [
            'not json',
            '[1, 2]',
            '{"type":"Polygon"}',
            '{"type":"Polygon","coordinates":[]}',
            '{"type":"Polygon","coordinates":[[]]}',
            '{"type":"Polygon","coordinates":[[[0]]]}',
            '{"type":"Polygon","coordinates":[[["0","0"]]]}',
            '{"type":"Polygon","coordinates":[[[0,0],[true,false],[1,1],[0,0]]]}',
        ],
    )
    def test_geojson_malformed(self, text):
        assert isinstance(BoundingBox.from_geojson(text).error, MalformedInputError)
