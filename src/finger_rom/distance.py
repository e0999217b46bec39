"""Fingertip-to-palm distance normalized by hand size."""

from __future__ import annotations

from finger_rom.constants import DEGENERATE_EPSILON, LANDMARK_COUNT, MIDDLE_MCP, WRIST
from finger_rom.exceptions import LandmarkFrameError, ReferenceLengthError
from finger_rom.models import LandmarkFrame
from finger_rom.palm import palm_center
from finger_rom.vector import difference, magnitude


def reference_length(frame: LandmarkFrame) -> float:
    """Return the wrist to middle-MCP distance used as hand-size reference."""
    return magnitude(difference(frame[WRIST], frame[MIDDLE_MCP]))


def normalized_tip_distance(frame: LandmarkFrame, tip_index: int) -> float:
    """Return palm-center to fingertip distance divided by the reference length.

    :param frame:
        Landmark frame to read.
    :param tip_index:
        Landmark index of the fingertip.
    :returns:
        Hand-size-invariant distance ratio.
    :raises LandmarkFrameError:
        If ``tip_index`` is outside the 21-point frame.
    :raises ReferenceLengthError:
        If wrist and middle MCP coincide.
    """
    if not 0 <= tip_index < LANDMARK_COUNT:
        raise LandmarkFrameError(f"Landmark index out of range: {tip_index}")

    ref = reference_length(frame)
    if ref <= DEGENERATE_EPSILON:
        raise ReferenceLengthError("Wrist and middle MCP coincide; tip distance is undefined.")

    return magnitude(difference(palm_center(frame), frame[tip_index])) / ref
