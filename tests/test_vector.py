from __future__ import annotations

import math

import pytest

from finger_rom import (
    DegenerateVectorError,
    angle_between,
    centroid,
    cross,
    difference,
    dot,
    is_degenerate,
    magnitude,
    negate,
)


def test_difference_points_from_first_to_second() -> None:
    assert difference((1.0, 2.0, 3.0), (4.0, 6.0, 8.0)) == (3.0, 4.0, 5.0)


@pytest.mark.parametrize(
    ("a", "b"),
    [
        ((0.0, 0.0, 0.0), (1.0, 2.0, 3.0)),
        ((-1.5, 4.25, 0.5), (2.0, -3.0, 7.75)),
    ],
)
def test_negated_difference_is_reverse_difference(
    a: tuple[float, float, float], b: tuple[float, float, float]
) -> None:
    assert negate(difference(a, b)) == difference(b, a)


def test_dot_and_cross_follow_right_hand_rule() -> None:
    x_axis = (1.0, 0.0, 0.0)
    y_axis = (0.0, 1.0, 0.0)

    assert dot(x_axis, y_axis) == 0.0
    assert cross(x_axis, y_axis) == (0.0, 0.0, 1.0)
    assert cross(y_axis, x_axis) == (0.0, 0.0, -1.0)


def test_magnitude_and_degenerate_detection() -> None:
    assert magnitude((3.0, 4.0, 0.0)) == 5.0
    assert magnitude((0.0, 0.0, 0.0)) == 0.0
    assert is_degenerate((0.0, 0.0, 0.0))
    assert not is_degenerate((0.0, 1e-3, 0.0))


def test_centroid_averages_points() -> None:
    assert centroid([(0.0, 0.0, 0.0), (2.0, 4.0, 6.0)]) == (1.0, 2.0, 3.0)

    with pytest.raises(ValueError):
        centroid([])


@pytest.mark.parametrize(
    "u",
    [(1.0, 0.0, 0.0), (0.1, 0.2, 0.3), (-3.0, 7.0, 1e-3), (1e6, -2e6, 3e6)],
)
def test_angle_with_self_and_opposite(u: tuple[float, float, float]) -> None:
    assert angle_between(u, u) == pytest.approx(0.0, abs=1e-5)
    assert angle_between(u, negate(u)) == pytest.approx(180.0, abs=1e-5)


def test_angle_clamps_rounding_noise() -> None:
    u = (0.1, 0.2, 0.3)
    v = (0.1 * 3.0, 0.2 * 3.0, 0.3 * 3.0)

    angle = angle_between(u, v)

    assert not math.isnan(angle)
    assert angle == pytest.approx(0.0, abs=1e-5)


def test_right_angle() -> None:
    assert angle_between((1.0, 0.0, 0.0), (0.0, 0.0, 2.0)) == pytest.approx(90.0)


def test_angle_with_zero_vector_raises() -> None:
    with pytest.raises(DegenerateVectorError):
        angle_between((0.0, 0.0, 0.0), (1.0, 0.0, 0.0))


@pytest.mark.parametrize(
    ("u", "v"),
    [
        ((math.nan, 0.0, 0.0), (1.0, 0.0, 0.0)),
        ((1.0, 0.0, 0.0), (0.0, math.inf, 0.0)),
    ],
)
def test_angle_with_non_finite_vector_raises(
    u: tuple[float, float, float], v: tuple[float, float, float]
) -> None:
    with pytest.raises(DegenerateVectorError, match="non-finite"):
        angle_between(u, v)
