"""Tests for Transformation and TransformationSet."""

import math

import pytest

from ifscaster.errors import EmptySetError, InvalidSelectionError
from ifscaster.state.transforms import (
    ACTIVE_MARKER_COLOR,
    MARKER_COLOR,
    Transformation,
    TransformationSet,
    default_fixed_points,
    wrap_angle,
)


def _set_with(*points):
    ts = TransformationSet()
    for p in points:
        ts.add(p)
    return ts


class TestApply:
    def test_fixed_point_is_invariant(self):
        t = Transformation((10.0, 20.0), scale_factor=0.3, rotate_factor=1.2)
        assert t.apply((10.0, 20.0)) == pytest.approx((10.0, 20.0))

    def test_scale_only_halves_distance(self):
        t = Transformation((0.0, 0.0))
        assert t.apply((100.0, 40.0)) == pytest.approx((50.0, 20.0))

    def test_quarter_turn_about_fixed_point(self):
        t = Transformation((1.0, 1.0), scale_factor=1.0, rotate_factor=math.pi / 2)
        assert t.apply((2.0, 1.0)) == pytest.approx((1.0, 2.0))

    def test_double_application_matches_composition(self):
        """Applying twice equals one map with squared scale and doubled angle."""
        fp = (30.0, -5.0)
        t = Transformation(fp, scale_factor=0.6, rotate_factor=0.7)
        twice = Transformation(fp, scale_factor=0.36, rotate_factor=1.4)
        for p in [(0.0, 0.0), (100.0, 50.0), (-12.5, 7.25)]:
            assert t.apply(t.apply(p)) == pytest.approx(twice.apply(p))

    def test_apply_does_not_mutate(self):
        t = Transformation((5.0, 5.0), scale_factor=0.4, rotate_factor=0.3)
        p = (9.0, 1.0)
        t.apply(p)
        assert p == (9.0, 1.0)
        assert t.scale_factor == 0.4
        assert t.rotate_factor == 0.3


class TestScale:
    def test_increase_multiplies_by_rate(self):
        t = Transformation((0.0, 0.0))
        assert t.increase_scale() is True
        assert t.scale_factor == pytest.approx(0.55)

    def test_increase_never_reaches_one(self):
        t = Transformation((0.0, 0.0))
        for _ in range(200):
            t.increase_scale()
            assert t.scale_factor < 1.0
        assert t.scale_factor > 0.9

    def test_increase_is_noop_at_or_above_one(self):
        t = Transformation((0.0, 0.0), scale_factor=1.2)
        assert t.increase_scale() is False
        assert t.scale_factor == 1.2

    def test_decrease_has_no_floor(self):
        t = Transformation((0.0, 0.0))
        for _ in range(100):
            t.decrease_scale()
        assert 0.0 < t.scale_factor < 1e-4

    def test_decrease_can_leave_contraction_bound(self):
        t = Transformation((0.0, 0.0), scale_factor=1.5)
        t.decrease_scale()
        assert t.scale_factor == pytest.approx(1.5 / 1.1)


class TestRotation:
    def test_wrap_angle_half_open(self):
        assert wrap_angle(math.pi) == pytest.approx(-math.pi)
        assert wrap_angle(-math.pi) == pytest.approx(-math.pi)
        assert wrap_angle(0.5) == 0.5

    def test_increase_wraps_past_pi(self):
        t = Transformation((0.0, 0.0), rotate_factor=0.95 * math.pi)
        t.increase_rotation()
        assert t.rotate_factor == pytest.approx(-0.95 * math.pi)

    def test_decrease_wraps_below_minus_pi(self):
        t = Transformation((0.0, 0.0), rotate_factor=-0.95 * math.pi)
        t.decrease_rotation()
        assert t.rotate_factor == pytest.approx(0.95 * math.pi)

    def test_any_sequence_stays_in_range(self):
        t = Transformation((0.0, 0.0))
        steps = [1] * 37 + [-1] * 81 + [1, -1, 1] * 13
        for s in steps:
            if s > 0:
                t.increase_rotation()
            else:
                t.decrease_rotation()
            assert -math.pi <= t.rotate_factor < math.pi


class TestRender:
    def test_marker_encodes_scale_and_rotation(self, recorder):
        t = Transformation((100.0, 200.0))
        t.render(recorder)
        (center, diameter, color), = recorder.named("circle")
        assert center == (100.0, 200.0)
        assert diameter == pytest.approx(15.0)
        assert color == MARKER_COLOR
        (a, b, _), = recorder.named("line")
        assert a == (100.0, 200.0)
        assert b == pytest.approx((130.0, 200.0))

    def test_active_marker_is_highlighted(self, recorder):
        t = Transformation((0.0, 0.0), scale_factor=1.0, rotate_factor=math.pi / 2)
        t.render(recorder, active=True)
        (_, diameter, color), = recorder.named("circle")
        assert diameter == pytest.approx(30.0)
        assert color == ACTIVE_MARKER_COLOR
        (_, tip, _), = recorder.named("line")
        assert tip == pytest.approx((0.0, 60.0))


class TestTransformationSet:
    def test_add_appends_defaults_without_changing_selection(self):
        ts = _set_with((0, 0), (10, 10))
        ts.active_index = 1
        t = ts.add((5, 7))
        assert len(ts) == 3
        assert ts[2] is t
        assert t.fixed_point == (5.0, 7.0)
        assert t.scale_factor == 0.5
        assert t.rotate_factor == 0.0
        assert ts.active_index == 1

    def test_remove_active_with_two_left(self):
        ts = _set_with((0, 0), (50, 50))
        ts.active_index = 1
        removed = ts.remove_active()
        assert removed.fixed_point == (50.0, 50.0)
        assert len(ts) == 1
        assert ts.active_index == 0
        assert ts.active().fixed_point == (0.0, 0.0)

    def test_remove_last_is_refused(self):
        ts = _set_with((1, 2))
        with pytest.raises(EmptySetError):
            ts.remove_active()
        assert len(ts) == 1
        assert ts.active().fixed_point == (1.0, 2.0)

    def test_active_out_of_range(self):
        ts = _set_with((0, 0))
        ts.active_index = 4
        with pytest.raises(InvalidSelectionError):
            ts.active()

    def test_proximity_selects_within_threshold(self):
        ts = _set_with((0, 0), (100, 100), (200, 200))
        assert ts.set_active_by_proximity((105, 110), 20.0) is True
        assert ts.active_index == 1

    def test_proximity_miss_keeps_selection(self):
        ts = _set_with((0, 0), (100, 100))
        ts.active_index = 1
        assert ts.set_active_by_proximity((300, 300), 20.0) is False
        assert ts.active_index == 1

    def test_proximity_last_match_wins(self):
        ts = _set_with((0, 0), (10, 0), (5, 0))
        ts.set_active_by_proximity((4, 0), 20.0)
        assert ts.active_index == 2

    def test_base_polygon_uses_first_three(self):
        ts = _set_with((1, 1), (2, 2), (3, 3), (4, 4))
        assert ts.base_polygon() == ((1.0, 1.0), (2.0, 2.0), (3.0, 3.0))

    def test_base_polygon_repeats_when_short(self):
        assert _set_with((1, 1)).base_polygon() == ((1.0, 1.0),) * 3
        assert _set_with((1, 1), (2, 2)).base_polygon() == ((1.0, 1.0), (2.0, 2.0), (1.0, 1.0))

    def test_default_fixed_points(self):
        assert default_fixed_points(700, 700) == [(350.0, 175.0), (175.0, 525.0), (525.0, 525.0)]
