"""Palm-plane geometry derived from wrist and MCP landmarks."""

from __future__ import annotations

from finger_rom.constants import INDEX_MCP, PALM_CENTER_INDICES, PINKY_MCP, WRIST
from finger_rom.models import LandmarkFrame
from finger_rom.vector import Vector3, centroid, cross, difference


def palm_normal(frame: LandmarkFrame) -> Vector3:
    """Return a vector perpendicular to the palm plane.

    The normal is ``(wrist -> index MCP) x (wrist -> pinky MCP)``. It is left
    unnormalized because joint angles only use the sign of a dot product with it.

    :param frame:
        Landmark frame to read.
    :returns:
        Unnormalized palm normal.
    """
    to_index = difference(frame[WRIST], frame[INDEX_MCP])
    to_pinky = difference(frame[WRIST], frame[PINKY_MCP])
    return cross(to_index, to_pinky)


def palm_center(frame: LandmarkFrame) -> Vector3:
    """Return the mean of the wrist and the four finger MCP landmarks."""
    return centroid(frame[index] for index in PALM_CENTER_INDICES)
