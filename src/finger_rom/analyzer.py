"""Single-frame ROM analysis for the ring and pinky fingers."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Protocol

from finger_rom._compat import StrEnum
from finger_rom.constants import (
    DEFAULT_BUILD,
    DEFAULT_REPEAT_COUNT,
    DEFAULT_REPEAT_INTERVAL_MS,
    DEFAULT_ROM_ID,
    DEFAULT_VERSION,
    PINKY_DIP,
    PINKY_MCP,
    PINKY_PIP,
    PINKY_TIP,
    RING_DIP,
    RING_MCP,
    RING_PIP,
    RING_TIP,
    WRIST,
)
from finger_rom.distance import normalized_tip_distance
from finger_rom.events import AnalysisLogEvent, LogEventKind, LogHook
from finger_rom.exceptions import (
    AnalyzerConfigurationError,
    DegenerateGeometryError,
    DegenerateVectorError,
)
from finger_rom.joints import joint_oriented_aggregate, signed_angle
from finger_rom.models import AnalysisResult, DipChain, FingerName, JointMetrics, LandmarkFrame
from finger_rom.palm import palm_normal
from finger_rom.vector import Vector3


class ErrorPolicy(StrEnum):
    """Handling of frames whose tip-distance reference length is zero."""

    STRICT = "strict"
    TOLERANT = "tolerant"


@dataclass(frozen=True, slots=True)
class AnalyzerConfig:
    """Configuration shared by :class:`FrameAnalyzer` and the sample scheduler.

    :param rom_id:
        ROM identifier stamped on every result.
    :param version:
        Analysis version stamped on every result.
    :param build:
        Build tag reported when the analyzer is created.
    :param repeat_count:
        Default number of ticks in a repeat run.
    :param repeat_interval_ms:
        Default tick interval of a repeat run in milliseconds.
    :param error_policy:
        ``tolerant`` skips frames with degenerate reference length and logs a
        ``degenerate_frame`` event; ``strict`` raises
        :class:`~finger_rom.exceptions.ReferenceLengthError`.
    :param dip_chain:
        Landmark chain used for joint angles.
    :param log_hook:
        Optional structured log callback.
    """

    rom_id: str = DEFAULT_ROM_ID
    version: str = DEFAULT_VERSION
    build: str = DEFAULT_BUILD
    repeat_count: int = DEFAULT_REPEAT_COUNT
    repeat_interval_ms: int = DEFAULT_REPEAT_INTERVAL_MS
    error_policy: ErrorPolicy = ErrorPolicy.TOLERANT
    dip_chain: DipChain = DipChain.LEGACY
    log_hook: LogHook | None = None

    def __post_init__(self) -> None:
        """Validate configuration constraints.

        :raises AnalyzerConfigurationError:
            If one or more fields are invalid.
        """
        if not self.rom_id:
            raise AnalyzerConfigurationError("rom_id must not be empty.")
        if self.repeat_count <= 0:
            raise AnalyzerConfigurationError("repeat_count must be greater than 0.")
        if self.repeat_interval_ms <= 0:
            raise AnalyzerConfigurationError("repeat_interval_ms must be greater than 0.")


class LandmarkSource(Protocol):
    """Read side of the current-frame slot filled by an external tracker."""

    def get(self) -> LandmarkFrame | None: ...


class LandmarkSlot:
    """Holder for the most recent landmark frame, or ``None`` when unset."""

    def __init__(self, frame: LandmarkFrame | None = None) -> None:
        self._frame = frame

    def get(self) -> LandmarkFrame | None:
        return self._frame

    def set(self, frame: LandmarkFrame | None) -> None:
        self._frame = frame

    def clear(self) -> None:
        self._frame = None


Triplet = tuple[int, int, int]

# (MCP, PIP, DIP) vertex triplets and the tip index per finger.
_CHAINS: dict[DipChain, dict[FingerName, tuple[Triplet, Triplet, Triplet, int]]] = {
    DipChain.LEGACY: {
        FingerName.RING: (
            (RING_MCP, RING_PIP, RING_DIP),
            (RING_PIP, RING_DIP, RING_TIP),
            (RING_DIP, RING_TIP, RING_TIP),
            RING_TIP,
        ),
        FingerName.PINKY: (
            (PINKY_MCP, PINKY_PIP, PINKY_DIP),
            (PINKY_PIP, PINKY_DIP, PINKY_TIP),
            (PINKY_DIP, PINKY_TIP, PINKY_TIP),
            PINKY_TIP,
        ),
    },
    DipChain.ANATOMICAL: {
        FingerName.RING: (
            (WRIST, RING_MCP, RING_PIP),
            (RING_MCP, RING_PIP, RING_DIP),
            (RING_PIP, RING_DIP, RING_TIP),
            RING_TIP,
        ),
        FingerName.PINKY: (
            (WRIST, PINKY_MCP, PINKY_PIP),
            (PINKY_MCP, PINKY_PIP, PINKY_DIP),
            (PINKY_PIP, PINKY_DIP, PINKY_TIP),
            PINKY_TIP,
        ),
    },
}


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(moment: datetime) -> str:
    """Format a datetime as ISO-8601 UTC with milliseconds and ``Z`` suffix."""
    utc = moment.astimezone(timezone.utc)
    return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class FrameAnalyzer:
    """Compute ring and pinky ROM metrics from the current landmark frame."""

    def __init__(
        self,
        config: AnalyzerConfig | None = None,
        *,
        source: LandmarkSource | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """Create a frame analyzer.

        :param config:
            Analyzer configuration. Defaults to :class:`AnalyzerConfig`.
        :param source:
            Current-frame source. Defaults to an empty :class:`LandmarkSlot`.
        :param clock:
            Optional wall-clock provider used for result timestamps.
        """
        self._config = config or AnalyzerConfig()
        self._source: LandmarkSource = source if source is not None else LandmarkSlot()
        self._clock = clock or _utc_now
        self._emit_log(
            AnalysisLogEvent(
                kind=LogEventKind.LOADED,
                message=f"Analyze core loaded ({self._config.rom_id} {self._config.version})",
            )
        )
        self._emit_log(
            AnalysisLogEvent(kind=LogEventKind.LOADED, message=f"BUILD {self._config.build}")
        )

    @property
    def config(self) -> AnalyzerConfig:
        return self._config

    @property
    def source(self) -> LandmarkSource:
        return self._source

    def analyze(self) -> AnalysisResult | None:
        """Analyze the current frame and log the outcome.

        :returns:
            Result for the current frame, or ``None`` when no usable frame exists.
        :raises ReferenceLengthError:
            When ``error_policy=strict`` and the frame is degenerate.
        """
        self._emit_log(AnalysisLogEvent(kind=LogEventKind.ANALYZE_START, message="analyze() start"))
        self._emit_log(
            AnalysisLogEvent(
                kind=LogEventKind.ANALYZE_START,
                message=f"ROM={self._config.rom_id} VER={self._config.version}",
            )
        )
        result = self.analyze_once()
        if result is None:
            return None

        self._emit_log(
            AnalysisLogEvent(
                kind=LogEventKind.RESULT,
                message="RESULT " + result.to_json(),
                result=result,
            )
        )
        return result

    def analyze_once(self) -> AnalysisResult | None:
        """Analyze the current frame without start/result logging.

        A missing frame is reported through a ``no_landmarks`` event and never
        raised.
        """
        frame = self._source.get()
        if frame is None:
            self._emit_log(AnalysisLogEvent(kind=LogEventKind.NO_LANDMARKS, message="No landmarks"))
            return None

        try:
            return self.analyze_frame(frame)
        except DegenerateGeometryError as exc:
            self._emit_log(
                AnalysisLogEvent(
                    kind=LogEventKind.DEGENERATE_FRAME,
                    message=f"Degenerate frame skipped: {exc}",
                    exception=exc,
                )
            )
            if self._config.error_policy == ErrorPolicy.STRICT:
                raise
            return None

    def analyze_frame(self, frame: LandmarkFrame) -> AnalysisResult:
        """Compute metrics for one explicit frame.

        :param frame:
            Landmark frame to analyze.
        :returns:
            Result stamped with the current time and configured identifiers.
        :raises ReferenceLengthError:
            If wrist and middle MCP coincide.
        """
        normal = palm_normal(frame)
        ring = self._finger_metrics(frame, FingerName.RING, normal)
        pinky = self._finger_metrics(frame, FingerName.PINKY, normal)
        return AnalysisResult(
            timestamp=format_timestamp(self._clock()),
            rom_id=self._config.rom_id,
            version=self._config.version,
            ring=ring,
            pinky=pinky,
            joa_ring=joint_oriented_aggregate((ring.mcp, ring.pip, ring.dip)),
            joa_pinky=joint_oriented_aggregate((pinky.mcp, pinky.pip, pinky.dip)),
        )

    def _finger_metrics(
        self,
        frame: LandmarkFrame,
        finger: FingerName,
        normal: Vector3,
    ) -> JointMetrics:
        mcp, pip, dip, tip = _CHAINS[self._config.dip_chain][finger]
        return JointMetrics(
            mcp=self._joint_angle(frame, mcp, normal),
            pip=self._joint_angle(frame, pip, normal),
            dip=self._joint_angle(frame, dip, normal),
            tip_dist=normalized_tip_distance(frame, tip),
        )

    def _joint_angle(self, frame: LandmarkFrame, triplet: Triplet, normal: Vector3) -> float:
        """Return the signed angle for one joint, or ``0.0`` if an arm has no length."""
        p0, p1, p2 = triplet
        try:
            return signed_angle(frame[p0], frame[p1], frame[p2], normal)
        except DegenerateVectorError:
            return 0.0

    def _emit_log(self, event: AnalysisLogEvent) -> None:
        """Emit one structured log event if a hook is configured."""
        if self._config.log_hook is not None:
            self._config.log_hook(event)
