"""Structured log events emitted by the analyzer and scheduler."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from finger_rom._compat import StrEnum
from finger_rom.models import AnalysisResult


class LogEventKind(StrEnum):
    """Structured log event kinds."""

    LOADED = "loaded"
    ANALYZE_START = "analyze_start"
    NO_LANDMARKS = "no_landmarks"
    DEGENERATE_FRAME = "degenerate_frame"
    RESULT = "result"
    REPEAT_START = "repeat_start"
    REPEAT_FINISHED = "repeat_finished"
    SUMMARY = "summary"


@dataclass(frozen=True, slots=True)
class AnalysisLogEvent:
    """Structured log event for observability hooks.

    :param kind:
        Event kind discriminator.
    :param message:
        Human-readable line. ``RESULT`` and ``SUMMARY`` messages embed compact
        JSON after the prefix.
    :param result:
        Result associated with a ``RESULT`` event.
    :param results:
        Series associated with a ``SUMMARY`` event.
    :param exception:
        Exception associated with a ``DEGENERATE_FRAME`` event.
    """

    kind: LogEventKind
    message: str
    result: AnalysisResult | None = None
    results: tuple[AnalysisResult, ...] | None = None
    exception: Exception | None = None


LogHook = Callable[[AnalysisLogEvent], None]


def text_log_hook(sink: Callable[[str], None]) -> LogHook:
    """Adapt a single-argument text sink into a structured log hook.

    :param sink:
        Function receiving one text line per event, such as ``print``.
    :returns:
        Hook forwarding each event's message to ``sink``.
    """

    def _hook(event: AnalysisLogEvent) -> None:
        sink(event.message)

    return _hook
