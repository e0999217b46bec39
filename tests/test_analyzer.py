from __future__ import annotations

import math
from collections.abc import Callable
from datetime import datetime, timedelta, timezone

import pytest

from finger_rom import (
    AnalysisLogEvent,
    AnalyzerConfig,
    AnalyzerConfigurationError,
    DipChain,
    ErrorPolicy,
    FrameAnalyzer,
    LandmarkFrame,
    LandmarkSlot,
    LogEventKind,
    Point3D,
    ReferenceLengthError,
    format_timestamp,
    normalized_tip_distance,
    text_log_hook,
)

MakeHand = Callable[[dict[int, Point3D] | None], LandmarkFrame]

FIXED_TIME = datetime(2026, 1, 2, 7, 30, tzinfo=timezone.utc)


def _make_analyzer(
    frame: LandmarkFrame | None,
    **config_values: object,
) -> tuple[FrameAnalyzer, list[AnalysisLogEvent]]:
    events: list[AnalysisLogEvent] = []
    config = AnalyzerConfig(log_hook=events.append, **config_values)  # type: ignore[arg-type]
    analyzer = FrameAnalyzer(config, source=LandmarkSlot(frame), clock=lambda: FIXED_TIME)
    return analyzer, events


def test_straight_fingers_measure_open_chain(hand_frame: LandmarkFrame) -> None:
    analyzer, _ = _make_analyzer(hand_frame)

    result = analyzer.analyze_frame(hand_frame)

    # Arms of a straight joint point in opposite directions.
    assert result.ring.mcp == pytest.approx(180.0)
    assert result.ring.pip == pytest.approx(180.0)
    assert result.pinky.mcp == pytest.approx(180.0)
    assert result.pinky.pip == pytest.approx(180.0)


def test_legacy_dip_is_always_zero(make_hand: MakeHand) -> None:
    frame = make_hand({16: (0.3, 6.8, -0.4), 20: (-2.0, 6.0, 0.5)})
    analyzer, _ = _make_analyzer(frame)

    result = analyzer.analyze_frame(frame)

    assert result.ring.dip == 0.0
    assert result.pinky.dip == 0.0


@pytest.mark.parametrize(("tip", "expected"), [((0.5, 6.0, 0.0), 90.0), ((-1.5, 6.0, 0.0), -90.0)])
def test_bent_ring_pip_is_signed_by_palm_normal(
    make_hand: MakeHand, tip: Point3D, expected: float
) -> None:
    frame = make_hand({16: tip})
    analyzer, _ = _make_analyzer(frame)

    result = analyzer.analyze_frame(frame)

    assert result.ring.pip == pytest.approx(expected)
    assert result.joa_ring == pytest.approx(180.0 + 90.0)


def test_result_fields_and_joa(hand_frame: LandmarkFrame) -> None:
    analyzer, _ = _make_analyzer(hand_frame, rom_id="13ROM", version="v2.0.0")

    result = analyzer.analyze_frame(hand_frame)

    assert result.timestamp == "2026-01-02T07:30:00.000Z"
    assert result.rom_id == "13ROM"
    assert result.version == "v2.0.0"
    assert result.joa_ring == pytest.approx(abs(result.ring.mcp) + abs(result.ring.pip))
    assert result.joa_pinky == pytest.approx(result.pinky.joa)
    assert result.ring.tip_dist == pytest.approx(normalized_tip_distance(hand_frame, 16))
    assert result.pinky.tip_dist == pytest.approx(normalized_tip_distance(hand_frame, 20))


def test_anatomical_chain_uses_wrist_for_mcp(hand_frame: LandmarkFrame) -> None:
    analyzer, _ = _make_analyzer(hand_frame, dip_chain=DipChain.ANATOMICAL)

    result = analyzer.analyze_frame(hand_frame)

    assert result.ring.mcp == pytest.approx(math.degrees(math.acos(-4.0 / math.sqrt(16.25))))
    assert result.ring.pip == pytest.approx(180.0)
    assert result.ring.dip == pytest.approx(180.0)
    assert result.pinky.dip == pytest.approx(180.0)


def test_missing_frame_returns_none_and_logs() -> None:
    analyzer, events = _make_analyzer(None)

    assert analyzer.analyze() is None
    kinds = [event.kind for event in events]
    assert kinds == [
        LogEventKind.LOADED,
        LogEventKind.LOADED,
        LogEventKind.ANALYZE_START,
        LogEventKind.ANALYZE_START,
        LogEventKind.NO_LANDMARKS,
    ]


def test_analyze_reads_current_slot_value(hand_frame: LandmarkFrame) -> None:
    slot = LandmarkSlot()
    analyzer = FrameAnalyzer(source=slot, clock=lambda: FIXED_TIME)

    assert analyzer.analyze_once() is None
    slot.set(hand_frame)
    assert analyzer.analyze_once() is not None
    slot.clear()
    assert analyzer.analyze_once() is None


def test_result_event_carries_json_line(hand_frame: LandmarkFrame) -> None:
    analyzer, events = _make_analyzer(hand_frame)

    result = analyzer.analyze()

    assert result is not None
    result_events = [event for event in events if event.kind == LogEventKind.RESULT]
    assert len(result_events) == 1
    assert result_events[0].result == result
    assert result_events[0].message == "RESULT " + result.to_json()


def test_degenerate_reference_is_skipped_when_tolerant(make_hand: MakeHand) -> None:
    analyzer, events = _make_analyzer(make_hand({9: (0.0, 0.0, 0.0)}))

    assert analyzer.analyze() is None
    degenerate = [event for event in events if event.kind == LogEventKind.DEGENERATE_FRAME]
    assert len(degenerate) == 1
    assert isinstance(degenerate[0].exception, ReferenceLengthError)


def test_degenerate_reference_raises_when_strict(make_hand: MakeHand) -> None:
    analyzer, _ = _make_analyzer(make_hand({9: (0.0, 0.0, 0.0)}), error_policy=ErrorPolicy.STRICT)

    with pytest.raises(ReferenceLengthError):
        analyzer.analyze()


def test_text_log_hook_receives_load_lines() -> None:
    lines: list[str] = []

    FrameAnalyzer(AnalyzerConfig(build="2026-01-02T07:30", log_hook=text_log_hook(lines.append)))

    assert lines == ["Analyze core loaded (12ROM v1.0.0)", "BUILD 2026-01-02T07:30"]


def test_format_timestamp_converts_to_utc() -> None:
    moment = datetime(2026, 1, 2, 16, 30, 0, 250_000, tzinfo=timezone(timedelta(hours=9)))

    assert format_timestamp(moment) == "2026-01-02T07:30:00.250Z"


@pytest.mark.parametrize(
    "values",
    [{"rom_id": ""}, {"repeat_count": 0}, {"repeat_interval_ms": -5}],
)
def test_invalid_analyzer_config_raises(values: dict[str, object]) -> None:
    with pytest.raises(AnalyzerConfigurationError):
        AnalyzerConfig(**values)  # type: ignore[arg-type]


def test_analyze_logs_start_and_identifier_lines() -> None:
    lines: list[str] = []
    analyzer = FrameAnalyzer(
        AnalyzerConfig(log_hook=text_log_hook(lines.append)), source=LandmarkSlot()
    )

    analyzer.analyze()

    assert lines[2:] == ["analyze() start", "ROM=12ROM VER=v1.0.0", "No landmarks"]
