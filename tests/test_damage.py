"""Tests for depth-damage curves."""

import pytest

from flood_risk.core.damage import (
    COMMERCIAL_CURVE,
    INDUSTRY_CURVE,
    DamageCurve,
    damage_ratio,
    get_curve,
)

SIMPLE = DamageCurve("simple", ((0.0, 0.0), (1.0, 0.5), (2.0, 1.0)))


def test_interpolates_within_segment():
    assert damage_ratio(0.5, SIMPLE) == pytest.approx(0.25)
    assert damage_ratio(1.5, SIMPLE) == pytest.approx(0.75)


def test_control_points_are_exact():
    for depth, ratio in INDUSTRY_CURVE.points:
        assert damage_ratio(depth, INDUSTRY_CURVE) == pytest.approx(ratio)


@pytest.mark.parametrize("depth", [0, -0.01, -5, float("-inf"), float("nan")])
def test_dry_depths_have_no_damage(depth):
    assert damage_ratio(depth, INDUSTRY_CURVE) == 0.0


@pytest.mark.parametrize("depth", [6.0, 6.5, 100.0, float("inf")])
def test_saturates_at_last_point(depth):
    assert damage_ratio(depth, INDUSTRY_CURVE) == INDUSTRY_CURVE.max_ratio


def test_industry_scenario_depth():
    # between (0.5, 0.28) and (1.0, 0.48)
    assert damage_ratio(0.9, INDUSTRY_CURVE) == pytest.approx(0.44)


@pytest.mark.parametrize("curve", [INDUSTRY_CURVE, COMMERCIAL_CURVE, SIMPLE])
def test_monotonic_and_bounded(curve):
    depths = [i * 0.05 for i in range(-20, 200)]
    ratios = [damage_ratio(d, curve) for d in depths]
    assert all(b >= a for a, b in zip(ratios, ratios[1:]))
    assert all(0.0 <= r <= curve.max_ratio for r in ratios)


def test_commercial_damages_more_than_industry_at_shallow_depth():
    assert COMMERCIAL_CURVE.ratio(0.5) > INDUSTRY_CURVE.ratio(0.5)


def test_get_curve_falls_back_to_industry():
    assert get_curve("commercial") is COMMERCIAL_CURVE
    assert get_curve("industry") is INDUSTRY_CURVE
    assert get_curve("warehouse") is INDUSTRY_CURVE


@pytest.mark.parametrize("points", [
    ((0.0, 0.0),),
    ((0.0, 0.0), (1.0, 0.5), (1.0, 0.6)),
    ((0.0, 0.0), (1.0, 0.5), (2.0, 0.4)),
    ((0.5, 0.0), (1.0, 0.5)),
    ((0.0, 0.1), (1.0, 0.5)),
])
def test_invalid_curves_rejected(points):
    with pytest.raises(ValueError):
        DamageCurve("bad", points)
