"""Primitive 3D vector operations on ``(x, y, z)`` tuples."""

from __future__ import annotations

import math
from collections.abc import Iterable

from finger_rom.constants import DEGENERATE_EPSILON
from finger_rom.exceptions import DegenerateVectorError

Vector3 = tuple[float, float, float]


def difference(a: Vector3, b: Vector3) -> Vector3:
    """Return the vector pointing from ``a`` to ``b`` (``b - a``).

    :param a:
        Start point.
    :param b:
        End point.
    :returns:
        Componentwise difference ``b - a``.
    """
    return (b[0] - a[0], b[1] - a[1], b[2] - a[2])


def dot(u: Vector3, v: Vector3) -> float:
    """Return the Euclidean dot product of two vectors."""
    return u[0] * v[0] + u[1] * v[1] + u[2] * v[2]


def cross(u: Vector3, v: Vector3) -> Vector3:
    """Return the right-handed cross product ``u x v``."""
    return (
        u[1] * v[2] - u[2] * v[1],
        u[2] * v[0] - u[0] * v[2],
        u[0] * v[1] - u[1] * v[0],
    )


def negate(u: Vector3) -> Vector3:
    return (-u[0], -u[1], -u[2])


def magnitude(u: Vector3) -> float:
    """Return the Euclidean norm of ``u``.

    A zero result is legal here; use :func:`is_degenerate` before dividing by it.
    """
    return math.sqrt(dot(u, u))


def is_degenerate(u: Vector3) -> bool:
    """Return whether ``u`` is too short to define a direction."""
    return magnitude(u) <= DEGENERATE_EPSILON


def centroid(points: Iterable[Vector3]) -> Vector3:
    """Return the unweighted mean of a non-empty point collection.

    :param points:
        Points to average.
    :returns:
        Mean point.
    :raises ValueError:
        If ``points`` is empty.
    """
    sx = sy = sz = 0.0
    count = 0
    for x, y, z in points:
        sx += x
        sy += y
        sz += z
        count += 1
    if count == 0:
        raise ValueError("centroid requires at least one point.")
    return (sx / count, sy / count, sz / count)


def angle_between(u: Vector3, v: Vector3) -> float:
    """Return the unsigned angle between two vectors in degrees.

    The cosine is clamped to ``[-1, 1]`` before ``acos`` so that rounding noise
    on (anti)parallel vectors cannot produce ``nan``.

    :param u:
        First vector.
    :param v:
        Second vector.
    :returns:
        Angle in the closed range ``[0, 180]``.
    :raises DegenerateVectorError:
        If either vector has zero length or a non-finite norm.
    """
    norm_u = magnitude(u)
    norm_v = magnitude(v)
    if not (math.isfinite(norm_u) and math.isfinite(norm_v)):
        raise DegenerateVectorError("Cannot measure an angle against a non-finite vector.")
    if norm_u <= DEGENERATE_EPSILON or norm_v <= DEGENERATE_EPSILON:
        raise DegenerateVectorError("Cannot measure an angle against a zero-length vector.")

    cosine = dot(u, v) / (norm_u * norm_v)
    cosine = max(-1.0, min(1.0, cosine))
    return math.degrees(math.acos(cosine))
