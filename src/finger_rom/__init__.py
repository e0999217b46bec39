"""Public API surface for finger range-of-motion analysis."""

from finger_rom.__about__ import __version__
from finger_rom.analyzer import (
    AnalyzerConfig,
    ErrorPolicy,
    FrameAnalyzer,
    LandmarkSlot,
    LandmarkSource,
    format_timestamp,
)
from finger_rom.distance import normalized_tip_distance, reference_length
from finger_rom.events import AnalysisLogEvent, LogEventKind, LogHook, text_log_hook
from finger_rom.exceptions import (
    AnalyzerConfigurationError,
    ConfigurationError,
    DegenerateGeometryError,
    DegenerateVectorError,
    LandmarkFrameError,
    ReferenceLengthError,
    ROMError,
    SchedulerConfigurationError,
)
from finger_rom.joints import joint_oriented_aggregate, signed_angle
from finger_rom.models import (
    AnalysisResult,
    DipChain,
    FingerName,
    JointMetrics,
    LandmarkFrame,
    Point3D,
    results_to_json,
)
from finger_rom.palm import palm_center, palm_normal
from finger_rom.scheduler import (
    IntervalTimer,
    PeriodicTimer,
    SampleScheduler,
    SchedulerState,
    SchedulerStats,
    TimerFactory,
)
from finger_rom.vector import (
    Vector3,
    angle_between,
    centroid,
    cross,
    difference,
    dot,
    is_degenerate,
    magnitude,
    negate,
)

__all__ = [
    "AnalysisLogEvent",
    "AnalysisResult",
    "AnalyzerConfig",
    "AnalyzerConfigurationError",
    "ConfigurationError",
    "DegenerateGeometryError",
    "DegenerateVectorError",
    "DipChain",
    "ErrorPolicy",
    "FingerName",
    "FrameAnalyzer",
    "IntervalTimer",
    "JointMetrics",
    "LandmarkFrame",
    "LandmarkFrameError",
    "LandmarkSlot",
    "LandmarkSource",
    "LogEventKind",
    "LogHook",
    "PeriodicTimer",
    "Point3D",
    "ROMError",
    "ReferenceLengthError",
    "SampleScheduler",
    "SchedulerConfigurationError",
    "SchedulerState",
    "SchedulerStats",
    "TimerFactory",
    "Vector3",
    "__version__",
    "angle_between",
    "centroid",
    "cross",
    "difference",
    "dot",
    "format_timestamp",
    "is_degenerate",
    "joint_oriented_aggregate",
    "magnitude",
    "negate",
    "normalized_tip_distance",
    "palm_center",
    "palm_normal",
    "reference_length",
    "results_to_json",
    "signed_angle",
    "text_log_hook",
]
