"""Tests for the great-circle helpers."""

from __future__ import annotations

import math

import pytest

from sail_tactics.errors import InvalidInputError
from sail_tactics.geodesy import (
    destination_point,
    distance_km,
    distance_m,
    initial_bearing,
    pairwise_distances_m,
    project,
    track_distance_m,
    validate_coordinates,
)

POINTS = [
    (50.0, -1.0),
    (50.01, -1.02),
    (-33.86, 151.21),
    (51.5, -0.12),
    (0.0, 179.9),
    (0.0, -179.9),
]


def test_one_degree_of_latitude() -> None:
    assert distance_m(0.0, 0.0, 1.0, 0.0) == pytest.approx(111_194.9266, rel=1e-9)


def test_distance_is_symmetric() -> None:
    for a in POINTS:
        for b in POINTS:
            assert distance_m(*a, *b) == pytest.approx(distance_m(*b, *a), abs=1e-6)


def test_triangle_inequality() -> None:
    for a in POINTS:
        for b in POINTS:
            for c in POINTS:
                direct = distance_m(*a, *c)
                via = distance_m(*a, *b) + distance_m(*b, *c)
                assert direct <= via + 1e-6


def test_km_and_m_variants_agree() -> None:
    a, b = POINTS[0], POINTS[3]
    assert distance_km(*a, *b) * 1000.0 == pytest.approx(distance_m(*a, *b), rel=1e-12)


def test_distance_across_antimeridian_is_short() -> None:
    assert distance_m(0.0, 179.9, 0.0, -179.9) == pytest.approx(22_238.985, rel=1e-6)


@pytest.mark.parametrize(
    "target, expected",
    [((1.0, 0.0), 0.0), ((0.0, 1.0), 90.0), ((-1.0, 0.0), 180.0), ((0.0, -1.0), 270.0)],
)
def test_initial_bearing_cardinal_directions(target, expected) -> None:
    bearing = initial_bearing(0.0, 0.0, *target)
    assert bearing == pytest.approx(expected, abs=1e-9)
    assert 0.0 <= bearing < 360.0


def test_destination_point_matches_distance_and_bearing() -> None:
    lat, lon = destination_point(50.0, -1.0, 42.0, 500.0)
    assert distance_m(50.0, -1.0, lat, lon) == pytest.approx(500.0, rel=1e-9)
    assert initial_bearing(50.0, -1.0, lat, lon) == pytest.approx(42.0, abs=1e-6)


def test_project_returns_evenly_spaced_polyline() -> None:
    points = project(50.0, -1.0, 318.0, 500.0, steps=50)
    assert len(points) == 51
    assert points[0] == pytest.approx((50.0, -1.0), abs=1e-12)
    assert distance_m(50.0, -1.0, *points[-1]) == pytest.approx(500.0, rel=1e-9)
    gaps = pairwise_distances_m(points)
    assert len(gaps) == 50
    assert gaps == pytest.approx([10.0] * 50, rel=1e-6)


def test_project_single_step() -> None:
    points = project(0.0, 0.0, 90.0, 1000.0, steps=1)
    assert len(points) == 2
    assert points[1][0] == pytest.approx(0.0, abs=1e-12)
    assert points[1][1] > 0.0


def test_project_rejects_invalid_input() -> None:
    with pytest.raises(InvalidInputError):
        project(91.0, 0.0, 0.0, 100.0)
    with pytest.raises(InvalidInputError):
        project(0.0, 0.0, 0.0, 100.0, steps=0)


@pytest.mark.parametrize(
    "lat, lon",
    [(90.0, 180.0), (-90.0, -180.0), (0.0, 0.0)],
)
def test_validate_coordinates_accepts_boundaries(lat, lon) -> None:
    validate_coordinates(lat, lon)


@pytest.mark.parametrize(
    "lat, lon",
    [(90.0001, 0.0), (-90.5, 0.0), (0.0, 180.01), (0.0, -181.0), (math.nan, 0.0), (0.0, math.inf)],
)
def test_validate_coordinates_rejects_out_of_range(lat, lon) -> None:
    with pytest.raises(InvalidInputError):
        validate_coordinates(lat, lon)


def test_invalid_input_error_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        validate_coordinates(100.0, 0.0)


def test_track_distance_sums_legs() -> None:
    track = [POINTS[0], POINTS[1], POINTS[3]]
    expected = distance_m(*POINTS[0], *POINTS[1]) + distance_m(*POINTS[1], *POINTS[3])
    assert track_distance_m(track) == pytest.approx(expected, rel=1e-9)


def test_track_distance_degenerate_inputs() -> None:
    assert track_distance_m([]) == 0.0
    assert track_distance_m([(50.0, -1.0)]) == 0.0
