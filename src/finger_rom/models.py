"""Typed data records for landmark input and analysis output."""

from __future__ import annotations

import json
import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from finger_rom._compat import StrEnum
from finger_rom.constants import LANDMARK_COUNT
from finger_rom.exceptions import LandmarkFrameError

Point3D = tuple[float, float, float]


class FingerName(StrEnum):
    """Fingers covered by the ROM analysis."""

    RING = "ring"
    PINKY = "pinky"


class DipChain(StrEnum):
    """Landmark chain used to place the three joint angles of a finger.

    ``legacy`` reproduces the historical outputs: MCP and PIP are measured at
    the second and third landmarks of the finger and DIP repeats the tip, so DIP
    is always zero. ``anatomical`` measures MCP, PIP and DIP at the first three
    landmarks of the finger, using the wrist as the proximal point for MCP.
    """

    LEGACY = "legacy"
    ANATOMICAL = "anatomical"


@dataclass(frozen=True, slots=True)
class LandmarkFrame:
    """Ordered set of exactly 21 hand landmarks as ``(x, y, z)`` points."""

    points: tuple[Point3D, ...]

    def __post_init__(self) -> None:
        """Validate the landmark count and coordinates.

        :raises LandmarkFrameError:
            If the frame does not contain exactly 21 points or a coordinate
            is ``nan`` or infinite.
        """
        if len(self.points) != LANDMARK_COUNT:
            raise LandmarkFrameError(
                f"Landmark frame must contain {LANDMARK_COUNT} points, got {len(self.points)}"
            )
        for index, point in enumerate(self.points):
            if not all(math.isfinite(value) for value in point):
                raise LandmarkFrameError(
                    f"Landmark {index} has non-finite coordinates: {point!r}"
                )

    def __getitem__(self, index: int) -> Point3D:
        return self.points[index]

    def __len__(self) -> int:
        return len(self.points)

    def to_dict(self) -> dict[str, list[list[float]]]:
        """Serialize landmarks into a mapping-friendly dictionary.

        :returns:
            Dictionary with ordered ``points`` list.
        """
        return {"points": [[x, y, z] for x, y, z in self.points]}

    @classmethod
    def from_dict(cls, values: Mapping[str, Any] | Sequence[Any]) -> LandmarkFrame:
        """Build :class:`LandmarkFrame` from serialized landmark data.

        Accepted shapes are ``{"points": [...]}`` or a bare list of points,
        where each point is either an ``{"x", "y", "z"}`` mapping (as emitted by
        MediaPipe's JavaScript runtime) or an ``[x, y, z]`` sequence.

        :param values:
            Serialized landmarks.
        :returns:
            Parsed frame preserving point order.
        :raises LandmarkFrameError:
            If a point is malformed or non-finite, or the point count is not 21.
        """
        raw_points = values["points"] if isinstance(values, Mapping) else values
        return cls(points=tuple(_parse_point(point) for point in raw_points))


def _parse_point(point: Any) -> Point3D:
    try:
        if isinstance(point, Mapping):
            return (float(point["x"]), float(point["y"]), float(point["z"]))
        return (float(point[0]), float(point[1]), float(point[2]))
    except (KeyError, IndexError, TypeError, ValueError) as exc:
        raise LandmarkFrameError(f"Invalid landmark point: {point!r}") from exc


@dataclass(frozen=True, slots=True)
class JointMetrics:
    """Per-finger joint angles in signed degrees plus normalized tip distance."""

    mcp: float
    pip: float
    dip: float
    tip_dist: float

    @property
    def joa(self) -> float:
        """Sum of absolute joint angles for this finger."""
        return abs(self.mcp) + abs(self.pip) + abs(self.dip)

    def to_dict(self) -> dict[str, float]:
        return {
            "MCP": self.mcp,
            "PIP": self.pip,
            "DIP": self.dip,
            "tipDist": self.tip_dist,
        }

    @classmethod
    def from_dict(cls, values: Mapping[str, Any]) -> JointMetrics:
        return cls(
            mcp=float(values["MCP"]),
            pip=float(values["PIP"]),
            dip=float(values["DIP"]),
            tip_dist=float(values["tipDist"]),
        )


@dataclass(frozen=True, slots=True)
class AnalysisResult:
    """ROM metrics computed from one landmark frame.

    :param timestamp:
        ISO-8601 UTC time the frame was analyzed.
    :param rom_id:
        ROM identifier from configuration.
    :param version:
        Analysis version from configuration.
    :param ring:
        Ring finger metrics.
    :param pinky:
        Pinky finger metrics.
    :param joa_ring:
        Joint-oriented aggregate for the ring finger.
    :param joa_pinky:
        Joint-oriented aggregate for the pinky finger.
    """

    timestamp: str
    rom_id: str
    version: str
    ring: JointMetrics
    pinky: JointMetrics
    joa_ring: float
    joa_pinky: float

    def finger(self, name: FingerName | str) -> JointMetrics:
        """Return metrics for one finger by name.

        :raises ValueError:
            If the finger name is unknown.
        """
        finger_name = FingerName(name.lower())
        return self.ring if finger_name is FingerName.RING else self.pinky

    def to_dict(self) -> dict[str, Any]:
        """Serialize into the result line shape used by log consumers.

        :returns:
            Dictionary keyed ``timestamp, ROM, VERSION, ring, pinky, JOA_ring,
            JOA_pinky``.
        """
        return {
            "timestamp": self.timestamp,
            "ROM": self.rom_id,
            "VERSION": self.version,
            "ring": self.ring.to_dict(),
            "pinky": self.pinky.to_dict(),
            "JOA_ring": self.joa_ring,
            "JOA_pinky": self.joa_pinky,
        }

    @classmethod
    def from_dict(cls, values: Mapping[str, Any]) -> AnalysisResult:
        """Build :class:`AnalysisResult` from serialized mapping data."""
        return cls(
            timestamp=str(values["timestamp"]),
            rom_id=str(values["ROM"]),
            version=str(values["VERSION"]),
            ring=JointMetrics.from_dict(values["ring"]),
            pinky=JointMetrics.from_dict(values["pinky"]),
            joa_ring=float(values["JOA_ring"]),
            joa_pinky=float(values["JOA_pinky"]),
        )

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), separators=(",", ":"))

    @classmethod
    def from_json(cls, text: str) -> AnalysisResult:
        return cls.from_dict(json.loads(text))


def results_to_json(results: Sequence[AnalysisResult]) -> str:
    """Serialize a result series as one compact JSON array."""
    return json.dumps([result.to_dict() for result in results], separators=(",", ":"))
