"""Signed joint angles and the joint-oriented aggregate (JOA)."""

from __future__ import annotations

from collections.abc import Iterable

from finger_rom.vector import Vector3, angle_between, cross, difference, dot


def signed_angle(p0: Vector3, p1: Vector3, p2: Vector3, palm_normal: Vector3) -> float:
    """Return the signed angle at ``p1`` between ``p1 -> p0`` and ``p1 -> p2``.

    The magnitude is :func:`~finger_rom.vector.angle_between` of the two arms.
    The sign is negative when the arms' cross product points against
    ``palm_normal``; a zero dot product counts as positive.

    :param p0:
        Proximal landmark.
    :param p1:
        Joint vertex.
    :param p2:
        Distal landmark.
    :param palm_normal:
        Reference normal that fixes the flexion/extension sign.
    :returns:
        Angle in degrees within ``[-180, 180]``.
    :raises DegenerateVectorError:
        If either arm has zero length.
    """
    proximal = difference(p1, p0)
    distal = difference(p1, p2)
    angle = angle_between(proximal, distal)
    if dot(cross(proximal, distal), palm_normal) < 0:
        return -angle
    return angle


def joint_oriented_aggregate(angles: Iterable[float]) -> float:
    """Return the sum of absolute joint angles (JOA)."""
    return sum(abs(angle) for angle in angles)
