"""Tests for projecting a shape onto a new center."""

import pytest

from app.core.geometry.mirror import mirror, offsets, project
from app.core.geometry.rotation import rotate
from app.core.geometry.spherical import (
    DegenerateInputError,
    bearing,
    centroid,
    distance,
)

SQUARE = [(-0.01, -0.01), (0.01, -0.01), (0.01, 0.01), (-0.01, 0.01), (-0.01, -0.01)]

MISSION = [
    (-122.4200, 37.7600),
    (-122.4050, 37.7620),
    (-122.4080, 37.7710),
    (-122.4150, 37.7750),
    (-122.4230, 37.7690),
    (-122.4200, 37.7600),
]

TARGETS = {
    "new_york": (-74.006, 40.7128),
    "sydney": (151.2093, -33.8688),
    "antimeridian_equator": (179.999, 0.0),
    "antimeridian_west": (-179.995, 52.0),
    "southern_high": (20.0, -70.0),
}


def _angle_diff(a: float, b: float) -> float:
    return abs((a - b + 180.0) % 360.0 - 180.0)


class TestProject:
    @pytest.mark.parametrize("name", sorted(TARGETS))
    def test_preserves_distance(self, name):
        target = TARGETS[name]
        pivot = centroid(MISSION)
        mirrored = project(MISSION, target)
        for v, m in zip(MISSION, mirrored):
            assert distance(target, m) == pytest.approx(distance(pivot, v), abs=0.5)

    @pytest.mark.parametrize("name", sorted(TARGETS))
    def test_preserves_bearing(self, name):
        target = TARGETS[name]
        pivot = centroid(MISSION)
        mirrored = project(MISSION, target)
        for v, m in zip(MISSION, mirrored):
            assert _angle_diff(bearing(target, m), bearing(pivot, v)) < 1e-6

    @pytest.mark.parametrize("name", sorted(TARGETS))
    def test_longitudes_stay_normalized(self, name):
        for lon, lat in project(MISSION, TARGETS[name]):
            assert -180.0 <= lon < 180.0
            assert -90.0 <= lat <= 90.0

    def test_vertex_count_and_closure(self):
        mirrored = project(MISSION, TARGETS["sydney"])
        assert len(mirrored) == len(MISSION)
        assert mirrored[0] == mirrored[-1]

    def test_shape_is_congruent(self):
        mirrored = project(MISSION, TARGETS["sydney"])
        for i in range(len(MISSION) - 1):
            original_edge = distance(MISSION[i], MISSION[i + 1])
            mirrored_edge = distance(mirrored[i], mirrored[i + 1])
            assert mirrored_edge == pytest.approx(original_edge, rel=1e-6)

    def test_same_center_reproduces_ring(self):
        mirrored = project(MISSION, centroid(MISSION))
        for got, want in zip(mirrored, MISSION):
            assert distance(got, want) < 1e-6

    def test_input_not_mutated(self):
        ring = list(MISSION)
        project(ring, TARGETS["new_york"])
        assert ring == MISSION

    def test_empty_ring(self):
        assert project([], (0, 0)) == []

    def test_degenerate_ring_is_best_effort(self):
        ring = [(1.0, 1.0), (1.001, 1.001), (1.0, 1.0), (1.0, 1.0)]
        mirrored = project(ring, (10.0, 10.0))
        assert len(mirrored) == 4

    def test_vertex_on_centroid_maps_to_target(self):
        star = [(0.0, 0.0), (0.01, 0.0), (0.0, 0.01), (-0.01, 0.0), (0.0, -0.01), (0.0, 0.0)]
        target = (10.0, 10.0)
        mirrored = project(star, target)
        assert distance(mirrored[0], target) < 1e-6
        assert distance(mirrored[-1], target) < 1e-6


class TestOffsets:
    def test_square_corners(self):
        result = offsets(SQUARE)
        assert len(result) == 5
        for off in result:
            assert off.distance_m == pytest.approx(1572.5, rel=1e-3)
        bearings = [off.bearing_deg for off in result]
        for got, want in zip(bearings, [225, 135, 45, 315, 225]):
            assert _angle_diff(got, want) < 1e-3

    def test_explicit_center(self):
        result = offsets(SQUARE, center=(-0.01, -0.01))
        assert result[0].distance_m == 0.0
        assert result[0].bearing_deg == 0.0


class TestMirror:
    def test_no_source_means_no_shape(self):
        assert mirror(None, 45, (10.0, 10.0)) is None

    def test_degenerate_source_raises(self):
        with pytest.raises(DegenerateInputError):
            mirror([(0, 0), (1, 1), (0, 0), (0, 0)], 0, (10.0, 10.0))

    def test_matches_rotate_then_project(self):
        target = TARGETS["new_york"]
        expected = project(rotate(MISSION, 30), target)
        assert mirror(MISSION, 30, target) == expected

    def test_zero_angle_is_plain_projection(self):
        target = TARGETS["sydney"]
        assert mirror(MISSION, 0, target) == project(MISSION, target)

    def test_square_scenario(self):
        target = (10.0, 10.0)
        mirrored = mirror(SQUARE, 90, target)
        assert len(mirrored) == 5

        mirrored_center = centroid(mirrored)
        assert distance(mirrored_center, target) < 1.0

        source_center = centroid(SQUARE)
        for corner, image in zip(SQUARE[:4], mirrored[:4]):
            original = distance(source_center, corner)
            copied = distance(mirrored_center, image)
            assert copied == pytest.approx(original, rel=0.01)

    def test_quarter_turn_moves_corners(self):
        # After a counter-clockwise quarter turn the south-west corner sits
        # south-east of the center.
        mirrored = mirror(SQUARE, 90, (10.0, 10.0))
        assert _angle_diff(bearing((10.0, 10.0), mirrored[0]), 135) < 0.01

    def test_translation_consistency(self):
        first = (10.0, 10.0)
        shifted = (12.5, 7.0)
        a = mirror(SQUARE, 30, first)
        b = mirror(SQUARE, 30, shifted)

        assert distance(centroid(a), first) < 1.0
        assert distance(centroid(b), shifted) < 1.0

        for i in range(4):
            for j in range(i + 1, 4):
                assert distance(b[i], b[j]) == pytest.approx(distance(a[i], a[j]), rel=1e-6)

    def test_unwrapped_rotation_is_renormalized(self):
        ring = [(179.99, 0.0), (179.999, 0.0), (179.999, 0.02), (179.99, 0.02), (179.99, 0.0)]
        mirrored = mirror(ring, 90, (179.995, 0.01))
        for lon, _ in mirrored:
            assert -180.0 <= lon < 180.0

    def test_across_the_antimeridian(self):
        target = (179.999, -15.0)
        mirrored = mirror(MISSION, -45, target)
        lons = [lon for lon, _ in mirrored]
        assert any(lon < 0 for lon in lons)
        assert any(lon > 0 for lon in lons)
        rotated = rotate(MISSION, -45)
        pivot = centroid(rotated)
        for v, m in zip(rotated, mirrored):
            assert distance(target, m) == pytest.approx(distance(pivot, v), abs=0.5)
