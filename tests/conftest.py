from __future__ import annotations

from collections.abc import Callable

import pytest

from finger_rom import LandmarkFrame, Point3D

# Flat right hand in the z=0 plane, fingers pointing along +y.
HAND_POINTS: tuple[Point3D, ...] = (
    (0.0, 0.0, 0.0),
    (2.0, 1.0, 0.0),
    (3.0, 2.0, 0.0),
    (3.5, 3.0, 0.0),
    (4.0, 4.0, 0.0),
    (1.5, 4.0, 0.0),
    (1.5, 5.0, 0.0),
    (1.5, 6.0, 0.0),
    (1.5, 7.0, 0.0),
    (0.5, 4.0, 0.0),
    (0.5, 5.2, 0.0),
    (0.5, 6.4, 0.0),
    (0.5, 7.6, 0.0),
    (-0.5, 4.0, 0.0),
    (-0.5, 5.0, 0.0),
    (-0.5, 6.0, 0.0),
    (-0.5, 7.0, 0.0),
    (-1.5, 4.0, 0.0),
    (-1.5, 4.8, 0.0),
    (-1.5, 5.6, 0.0),
    (-1.5, 6.4, 0.0),
)


def build_hand(overrides: dict[int, Point3D] | None = None) -> LandmarkFrame:
    points = list(HAND_POINTS)
    for index, point in (overrides or {}).items():
        points[index] = point
    return LandmarkFrame(points=tuple(points))


@pytest.fixture
def hand_frame() -> LandmarkFrame:
    return build_hand()


@pytest.fixture
def make_hand() -> Callable[[dict[int, Point3D] | None], LandmarkFrame]:
    return build_hand
